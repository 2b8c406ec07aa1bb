"""Loader base interface for document extraction."""

from abc import abstractmethod
from typing import ClassVar

from ragkit.core.components import Component, ComponentKind, OptionsT
from ragkit.extraction.models import ExtractedContent


class Loader(Component[OptionsT]):
    """Base interface for loaders."""

    kind: ClassVar[ComponentKind] = ComponentKind.LOADER

    @abstractmethod
    def supports(self, mime_type: str) -> bool:
        """
        Check if this loader supports the given MIME type.

        Several loaders may claim the same type; choosing between them is
        up to the caller.

        Args:
            mime_type: MIME type of the document

        Returns:
            True if the type is supported
        """
        pass

    @abstractmethod
    def load(self, data: bytes, url: str) -> ExtractedContent:
        """
        Extract content from raw document bytes.

        Args:
            data: Raw document bytes
            url: Source URL of the document

        Returns:
            ExtractedContent with segments, digest and provenance

        Raises:
            ParseError: If the bytes cannot be parsed at all
        """
        pass
