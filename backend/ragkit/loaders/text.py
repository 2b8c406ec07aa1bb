"""Plain text and Markdown loader."""

from typing import List

import structlog
from pydantic import BaseModel, Field, field_validator

from ragkit.config import get_settings
from ragkit.core.exceptions import ConstructionError, ParseError
from ragkit.extraction.models import ExtractedContent, ExtractedFragment, SourcePosition
from ragkit.loaders.base import Loader

logger = structlog.get_logger()


class TextLoaderOptions(BaseModel):
    """Options for the text loader."""

    encodings: List[str] = Field(
        default_factory=lambda: list(get_settings().text_encodings),
        min_length=1,
        description="Encodings tried in order",
    )

    @field_validator("encodings")
    @classmethod
    def validate_encodings(cls, v: List[str]) -> List[str]:
        """Normalize encoding names."""
        return [name.strip().lower() for name in v]


class TextLoader(Loader[TextLoaderOptions]):
    """Loader for plain text and Markdown documents."""

    identifier = "rag.loader.text"
    display_name = "Text loader"
    options_schema = TextLoaderOptions

    SUPPORTED_TYPES = {"text/plain", "text/markdown", "text/x-markdown"}
    SELECTOR = "document"

    def __init__(self, options: TextLoaderOptions) -> None:
        super().__init__(options)
        self.encodings = tuple(options.encodings)

        for name in self.encodings:
            try:
                "".encode(name)
            except LookupError as e:
                raise ConstructionError(f"Unknown encoding: {name}") from e

    def supports(self, mime_type: str) -> bool:
        return mime_type.split(";", 1)[0].strip().lower() in self.SUPPORTED_TYPES

    def load(self, data: bytes, url: str) -> ExtractedContent:
        text = self._decode(bytes(data))
        text = text.replace("\r\n", "\n").replace("\r", "\n")

        logger.debug("text_document_loaded", url=url, chars=len(text))
        return ExtractedContent.from_fragments([
            ExtractedFragment(
                text=text,
                selector=self.SELECTOR,
                position=SourcePosition(line=1, column=0),
            )
        ])

    def _decode(self, data: bytes) -> str:
        """Decode trying each configured encoding in order."""
        if b"\x00" in data:
            raise ParseError("Failed to parse text: input looks like binary data")

        for encoding in self.encodings:
            try:
                return data.decode(encoding)
            except UnicodeDecodeError:
                continue

        raise ParseError(
            f"Failed to parse text: none of {', '.join(self.encodings)} could decode the input"
        )
