"""Data models for rule-driven content extraction."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ragkit.extraction.digest import digest


class SelectorType(str, Enum):
    """Selector item types as authored in rule configuration."""

    DOM_TEXT = "dom-text"
    DOM_CONTENT_ATTR = "dom-content-attr"
    DOM_ATTR = "dom-attr"


class ExtractionKind(str, Enum):
    """What is extracted from a matched node."""

    TEXT = "text"
    ATTRIBUTE = "attribute"


class SelectorItem(BaseModel):
    """A CSS selector plus how to extract content from its matches."""

    model_config = ConfigDict(frozen=True)

    selector: str = Field(..., min_length=1, description="CSS selector")
    all: bool = Field(default=False, description="Apply to every match instead of the first")
    type: SelectorType = Field(default=SelectorType.DOM_TEXT, description="Extraction type")
    attribute: Optional[str] = Field(
        default=None, description="Attribute name for the dom-attr type"
    )

    @field_validator("type", mode="before")
    @classmethod
    def default_type(cls, v: Any) -> Any:
        """Treat an explicit null type as dom-text."""
        return SelectorType.DOM_TEXT if v is None else v

    @model_validator(mode="after")
    def check_attribute(self) -> SelectorItem:
        """Require an attribute name for the dom-attr type."""
        if self.type == SelectorType.DOM_ATTR and not self.attribute:
            raise ValueError("dom-attr selectors require an attribute name")
        return self

    @property
    def extraction_kind(self) -> ExtractionKind:
        if self.type == SelectorType.DOM_TEXT:
            return ExtractionKind.TEXT
        return ExtractionKind.ATTRIBUTE

    @property
    def attribute_name(self) -> Optional[str]:
        if self.type == SelectorType.DOM_CONTENT_ATTR:
            return "content"
        if self.type == SelectorType.DOM_ATTR:
            return self.attribute
        return None


class SelectionRule(BaseModel):
    """Selectors that apply to documents whose URL matches ``url``."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="URL pattern (exact, prefix* or wildcard)")
    selectors: Tuple[SelectorItem, ...] = Field(default_factory=tuple)


class SourcePosition(BaseModel):
    """Location of a node in the source document."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(..., ge=1, description="1-based line")
    column: int = Field(..., ge=0, description="0-based column")


@dataclass(frozen=True)
class ExtractedFragment:
    """One unit of extracted text with its origin."""

    text: str
    selector: str
    position: Optional[SourcePosition] = None


class Partition(BaseModel):
    """Provenance of one segment."""

    model_config = ConfigDict(frozen=True)

    selector: str
    position: Optional[SourcePosition] = None


class ContentMetadata(BaseModel):
    """Provenance and diagnostics for extracted content."""

    model_config = ConfigDict(frozen=True)

    partitions: Tuple[Partition, ...] = Field(default_factory=tuple)
    warnings: Optional[Tuple[str, ...]] = None


class ExtractedContent(BaseModel):
    """Immutable result of a loader run."""

    model_config = ConfigDict(frozen=True)

    segments: Tuple[str, ...] = Field(default_factory=tuple)
    digest: str = Field(..., description="Content digest over the segments")
    metadata: ContentMetadata = Field(default_factory=ContentMetadata)

    @model_validator(mode="after")
    def check_partitions(self) -> ExtractedContent:
        """Every segment must have exactly one partition."""
        if len(self.segments) != len(self.metadata.partitions):
            raise ValueError(
                f"{len(self.segments)} segments but "
                f"{len(self.metadata.partitions)} partitions"
            )
        return self

    @classmethod
    def from_fragments(
        cls,
        fragments: Sequence[ExtractedFragment],
        warnings: Sequence[str] = (),
    ) -> ExtractedContent:
        """
        Assemble content from fragments in emission order.

        Args:
            fragments: Extracted fragments
            warnings: Accumulated warnings (omitted from the result if empty)

        Returns:
            ExtractedContent with digest computed over the fragment texts
        """
        segments = tuple(fragment.text for fragment in fragments)
        return cls(
            segments=segments,
            digest=digest(segments),
            metadata=ContentMetadata(
                partitions=tuple(
                    Partition(selector=fragment.selector, position=fragment.position)
                    for fragment in fragments
                ),
                warnings=tuple(warnings) if warnings else None,
            ),
        )

    @property
    def warnings(self) -> Tuple[str, ...]:
        return self.metadata.warnings or ()

    def to_payload(self) -> Dict[str, Any]:
        """Render the shape consumed by downstream indexing stages."""
        payload = self.model_dump(mode="json")
        if payload["metadata"]["warnings"] is None:
            del payload["metadata"]["warnings"]
        return payload
