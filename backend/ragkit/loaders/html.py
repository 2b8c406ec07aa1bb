"""HTML loader with URL-scoped selector rules."""

import codecs
from typing import Any, Dict, Optional, Tuple

import structlog
from bs4 import BeautifulSoup, FeatureNotFound
from pydantic import BaseModel, ConfigDict, Field

from ragkit.config import get_settings
from ragkit.core.exceptions import ConstructionError, ParseError
from ragkit.extraction.models import ExtractedContent, SelectionRule
from ragkit.extraction.selectors import SelectorResolver
from ragkit.loaders.base import Loader

logger = structlog.get_logger()

_UNICODE_BOMS = (
    codecs.BOM_UTF32_LE,
    codecs.BOM_UTF32_BE,
    codecs.BOM_UTF16_LE,
    codecs.BOM_UTF16_BE,
)


class HtmlParserOptions(BaseModel):
    """BeautifulSoup options. Unknown keys are passed through to the constructor."""

    model_config = ConfigDict(extra="allow")

    features: str = Field(
        default_factory=lambda: get_settings().html_parser,
        description="Tree builder: html.parser, lxml or html5lib",
    )


class HtmlLoaderOptions(BaseModel):
    """Options for the HTML loader."""

    model_config = ConfigDict(populate_by_name=True)

    parser: HtmlParserOptions = Field(default_factory=HtmlParserOptions)
    content_extraction: Optional[Tuple[SelectionRule, ...]] = Field(
        default=None,
        alias="contentExtraction",
        description="URL-scoped selection rules, applied in order",
    )


class HtmlLoader(Loader[HtmlLoaderOptions]):
    """Loader for HTML documents driven by selection rules."""

    identifier = "rag.loader.html2"
    display_name = "HTML loader"
    options_schema = HtmlLoaderOptions

    def __init__(self, options: HtmlLoaderOptions) -> None:
        """
        Compile the parser configuration and selection rules.

        Args:
            options: Validated loader options

        Raises:
            InvalidPatternError: If a rule URL pattern is malformed
            ConstructionError: If a selector or the parser configuration is invalid
        """
        super().__init__(options)

        self.features = options.parser.features
        self.parser_kwargs: Dict[str, Any] = dict(options.parser.model_extra or {})
        self._check_parser()

        self.resolver = SelectorResolver(
            options.content_extraction or (),
            fallback_selector=get_settings().html_fallback_selector,
        )

        logger.debug(
            "html_loader_initialized",
            features=self.features,
            rules=len(self.resolver.rules),
        )

    def supports(self, mime_type: str) -> bool:
        return "html" in mime_type.lower()

    def load(self, data: bytes, url: str) -> ExtractedContent:
        soup = self._parse(data)
        result = self.resolver.resolve(soup, url)
        content = ExtractedContent.from_fragments(result.fragments, result.warnings)

        logger.debug(
            "html_document_loaded",
            url=url,
            segments=len(content.segments),
            warnings=len(content.warnings),
            digest=content.digest,
        )
        return content

    def _check_parser(self) -> None:
        try:
            BeautifulSoup(b"", features=self.features, **self.parser_kwargs)
        except FeatureNotFound as e:
            raise ConstructionError(
                f"HTML tree builder not available: {self.features}"
            ) from e
        except TypeError as e:
            raise ConstructionError(f"Invalid parser options: {e}") from e

    def _parse(self, data: bytes) -> BeautifulSoup:
        data = bytes(data)
        if b"\x00" in data and not data.startswith(_UNICODE_BOMS):
            raise ParseError("Failed to parse HTML: input looks like binary data")

        try:
            return BeautifulSoup(data, features=self.features, **self.parser_kwargs)
        except Exception as e:
            raise ParseError(f"Failed to parse HTML: {e}") from e
