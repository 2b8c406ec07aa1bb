"""Character-based text splitter."""

import re
from typing import List, Tuple

from pydantic import BaseModel, Field, model_validator

from ragkit.config import get_settings
from ragkit.extraction.models import ExtractedContent
from ragkit.splitters.base import Splitter, TextChunk

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


class TextSplitterOptions(BaseModel):
    """Options for the text splitter."""

    chunk_size: int = Field(
        default_factory=lambda: get_settings().default_chunk_size,
        ge=1,
        description="Maximum chunk size in characters",
    )
    chunk_overlap: int = Field(
        default_factory=lambda: get_settings().default_chunk_overlap,
        ge=0,
        description="Overlap between consecutive fixed-size chunks",
    )
    respect_boundaries: bool = Field(
        default=True,
        description="Pack whole paragraphs into chunks where they fit",
    )

    @model_validator(mode="after")
    def check_overlap(self) -> "TextSplitterOptions":
        """Overlap must leave room for progress."""
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self


class TextSplitter(Splitter[TextSplitterOptions]):
    """Splits each segment by paragraphs, then by size at word boundaries."""

    identifier = "rag.splitter.text"
    display_name = "Text splitter"
    options_schema = TextSplitterOptions

    def split(self, content: ExtractedContent) -> List[TextChunk]:
        chunks: List[TextChunk] = []
        partitions = content.metadata.partitions

        for segment_index, segment in enumerate(content.segments):
            if not segment.strip():
                continue

            if self.options.respect_boundaries:
                windows = self._paragraph_windows(segment)
            else:
                windows = self._fixed_windows(segment, 0, len(segment))

            for start, end in windows:
                chunks.append(
                    TextChunk(
                        index=len(chunks),
                        segment_index=segment_index,
                        selector=partitions[segment_index].selector,
                        content=segment[start:end],
                        start_char=start,
                        end_char=end,
                    )
                )

        return chunks

    def _paragraph_windows(self, text: str) -> List[Tuple[int, int]]:
        """Pack paragraphs into windows no larger than chunk_size."""
        size = self.options.chunk_size

        spans = []
        pos = 0
        for match in _PARAGRAPH_BREAK.finditer(text):
            spans.append((pos, match.start()))
            pos = match.end()
        spans.append((pos, len(text)))

        windows: List[Tuple[int, int]] = []
        current = None
        for start, end in spans:
            if not text[start:end].strip():
                continue

            if end - start > size:
                # Oversized paragraph
                if current:
                    windows.append(current)
                    current = None
                windows.extend(self._fixed_windows(text, start, end))
            elif current is None:
                current = (start, end)
            elif end - current[0] <= size:
                current = (current[0], end)
            else:
                windows.append(current)
                current = (start, end)

        if current:
            windows.append(current)
        return windows

    def _fixed_windows(self, text: str, start: int, stop: int) -> List[Tuple[int, int]]:
        """Fixed-size windows over text[start:stop], broken at whitespace."""
        size = self.options.chunk_size
        overlap = self.options.chunk_overlap

        windows: List[Tuple[int, int]] = []
        while start < stop:
            end = min(start + size, stop)

            # Try to break at word boundary
            if end < stop:
                boundary = end
                while boundary > start and not text[boundary - 1].isspace():
                    boundary -= 1
                if boundary > start:
                    end = boundary

            windows.append((start, end))
            if end >= stop:
                break
            start = max(end - overlap, start + 1)

        return windows
