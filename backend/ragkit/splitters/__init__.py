"""Text splitters package."""

from ragkit.splitters.base import Splitter, TextChunk
from ragkit.splitters.text import TextSplitter, TextSplitterOptions

__all__ = [
    "Splitter",
    "TextChunk",
    "TextSplitter",
    "TextSplitterOptions",
]
