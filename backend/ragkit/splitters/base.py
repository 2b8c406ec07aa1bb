"""Splitter base interface."""

from abc import abstractmethod
from typing import ClassVar, List

from pydantic import BaseModel, Field

from ragkit.core.components import Component, ComponentKind, OptionsT
from ragkit.extraction.models import ExtractedContent


class TextChunk(BaseModel):
    """A chunk of one extracted segment."""

    index: int = Field(..., description="Chunk index across the document")
    segment_index: int = Field(..., description="Index of the source segment")
    selector: str = Field(..., description="Selector that produced the segment")
    content: str = Field(..., description="Chunk text content")
    start_char: int = Field(..., description="Start offset within the segment")
    end_char: int = Field(..., description="End offset within the segment")


class Splitter(Component[OptionsT]):
    """Base interface for splitters."""

    kind: ClassVar[ComponentKind] = ComponentKind.SPLITTER

    @abstractmethod
    def split(self, content: ExtractedContent) -> List[TextChunk]:
        """
        Split extracted content into chunks.

        Args:
            content: Loader output

        Returns:
            Chunks in segment order
        """
        pass
