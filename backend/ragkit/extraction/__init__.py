"""Rule-driven content extraction: models, URL matching, selectors, digest."""

from ragkit.extraction.digest import SEGMENT_SEPARATOR, digest
from ragkit.extraction.models import (
    ContentMetadata,
    ExtractedContent,
    ExtractedFragment,
    ExtractionKind,
    Partition,
    SelectionRule,
    SelectorItem,
    SelectorType,
    SourcePosition,
)
from ragkit.extraction.selectors import SelectorResolver, visible_text
from ragkit.extraction.url_matcher import UrlMatcher, compile_pattern

__all__ = [
    # Models
    "ContentMetadata",
    "ExtractedContent",
    "ExtractedFragment",
    "ExtractionKind",
    "Partition",
    "SelectionRule",
    "SelectorItem",
    "SelectorType",
    "SourcePosition",
    # Algorithms
    "SelectorResolver",
    "UrlMatcher",
    "compile_pattern",
    "digest",
    "visible_text",
    "SEGMENT_SEPARATOR",
]
