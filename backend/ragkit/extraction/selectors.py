"""Selector resolution over parsed HTML documents."""

import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

import soupsieve
import structlog
from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from ragkit.core.exceptions import ConstructionError
from ragkit.extraction.models import (
    ExtractedFragment,
    ExtractionKind,
    SelectionRule,
    SelectorItem,
    SourcePosition,
)
from ragkit.extraction.url_matcher import UrlMatcher, compile_pattern

logger = structlog.get_logger()

FALLBACK_WARNING = (
    "No content selector provided for this URL. "
    "The default selector `{selector}` usually contains redundant content."
)

# Elements never rendered as text
HIDDEN_TAGS = frozenset({
    "head", "title", "script", "style", "template", "noscript",
    "datalist", "noembed", "noframes", "rp",
})

BLOCK_TAGS = frozenset({
    "address", "article", "aside", "blockquote", "body", "caption", "dd",
    "details", "dialog", "div", "dl", "dt", "fieldset", "figcaption",
    "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6",
    "header", "hgroup", "hr", "html", "legend", "li", "main", "nav", "ol",
    "p", "pre", "section", "summary", "table", "tbody", "td", "tfoot", "th",
    "thead", "tr", "ul",
})

PRE_TAGS = frozenset({"pre", "textarea", "listing", "plaintext", "xmp"})

# Block boundary marker, replaced by a newline once text is assembled
_BREAK = object()

# ASCII only, so U+00A0 survives
_SPACE_CHARS = " \t\n\r\f"
_WHITESPACE = re.compile(r"[ \t\n\r\f]+")


@dataclass(frozen=True)
class CompiledSelector:
    """A selector item with its pre-compiled CSS query."""

    item: SelectorItem
    query: Any
    fallback: bool = False

    @classmethod
    def compile(cls, item: SelectorItem, fallback: bool = False) -> "CompiledSelector":
        try:
            query = soupsieve.compile(item.selector)
        except soupsieve.SelectorSyntaxError as e:
            raise ConstructionError(
                f"Invalid CSS selector {item.selector!r}: {e}"
            ) from e
        return cls(item=item, query=query, fallback=fallback)


@dataclass(frozen=True)
class CompiledRule:
    """A selection rule with its URL matcher and compiled selectors."""

    matcher: UrlMatcher
    selectors: Tuple[CompiledSelector, ...]


@dataclass
class ResolveResult:
    """Fragments and diagnostics produced by one resolution."""

    fragments: List[ExtractedFragment] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class SelectorResolver:
    """Applies URL-scoped selection rules to parsed documents.

    Rules, URL patterns and CSS selectors are compiled once here; the
    resolver holds no per-call state and may be shared between threads.
    """

    def __init__(
        self,
        rules: Sequence[SelectionRule] = (),
        fallback_selector: str = "body",
    ) -> None:
        """
        Compile selection rules.

        Args:
            rules: Selection rules in priority order
            fallback_selector: Text selector injected when no rule supplies one

        Raises:
            InvalidPatternError: If a rule's URL pattern is malformed
            ConstructionError: If a CSS selector is malformed
        """
        self.rules: Tuple[CompiledRule, ...] = tuple(
            CompiledRule(
                matcher=compile_pattern(rule.url),
                selectors=tuple(CompiledSelector.compile(item) for item in rule.selectors),
            )
            for rule in rules
        )
        self.fallback = CompiledSelector.compile(
            SelectorItem(selector=fallback_selector), fallback=True
        )

    def gather(self, url: str) -> Tuple[List[CompiledSelector], List[str]]:
        """
        Collect the selectors that apply to ``url``.

        Selectors keep rule order, then within-rule order. If none of them
        extracts text, the fallback selector is appended with a warning.

        Args:
            url: Document URL

        Returns:
            Tuple of (selectors, warnings)
        """
        selectors: List[CompiledSelector] = []
        for rule in self.rules:
            if rule.matcher.matches(url):
                selectors.extend(rule.selectors)

        warnings: List[str] = []
        if not any(s.item.extraction_kind == ExtractionKind.TEXT for s in selectors):
            selectors.append(self.fallback)
            warnings.append(FALLBACK_WARNING.format(selector=self.fallback.item.selector))
            logger.info(
                "html_fallback_selector_used",
                url=url,
                selector=self.fallback.item.selector,
            )
        return selectors, warnings

    def resolve(self, root: BeautifulSoup, url: str) -> ResolveResult:
        """
        Extract fragments from a parsed document.

        Args:
            root: Parsed document
            url: Document URL used to pick rules

        Returns:
            ResolveResult with fragments in processing order
        """
        selectors, warnings = self.gather(url)
        result = ResolveResult(warnings=warnings)

        for compiled in selectors:
            item = compiled.item
            if item.all:
                elements = compiled.query.select(root)
            else:
                element = compiled.query.select_one(root)
                elements = [element] if element is not None else []

            if not elements and compiled.fallback:
                elements = [root]

            if not elements:
                result.failed.append(item.selector)
                continue

            for element in elements:
                result.fragments.append(
                    ExtractedFragment(
                        text=extract_content(element, item),
                        selector=item.selector,
                        position=source_position(element),
                    )
                )

        if result.failed:
            result.warnings.append(failed_selector_warning(result.failed))
            logger.warning("html_selectors_failed", url=url, selectors=result.failed)

        return result


def failed_selector_warning(failed: Sequence[str]) -> str:
    """Summarize failed selectors in processing order."""
    joined = ", ".join(f"`{selector}`" for selector in failed)
    return f"Select element failed for selector(s): {joined}"


def extract_content(element: Tag, item: SelectorItem) -> str:
    """Extract text or an attribute value from a matched element."""
    if item.extraction_kind == ExtractionKind.ATTRIBUTE:
        value = element.get(item.attribute_name)
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return " ".join(value)
        return str(value)
    return visible_text(element)


def source_position(element: Tag) -> Optional[SourcePosition]:
    """Source location recorded by the tree builder, if any."""
    line = getattr(element, "sourceline", None)
    if line is None:
        return None
    return SourcePosition(line=line, column=getattr(element, "sourcepos", None) or 0)


def visible_text(element: Tag) -> str:
    """
    Flatten an element to its visible text.

    Hidden elements and comments are skipped, block elements and ``<br>``
    become line breaks, and whitespace collapses outside preformatted
    elements.
    """
    parts: List[Any] = []
    stack: List[Tuple[Any, bool]] = [
        (child, element.name in PRE_TAGS) for child in reversed(element.contents)
    ]

    while stack:
        node, preformatted = stack.pop()
        if node is None:
            parts.append(_BREAK)
        elif isinstance(node, Tag):
            if node.name in HIDDEN_TAGS:
                continue
            if node.name == "br":
                parts.append("\n" if preformatted else _BREAK)
                continue
            if node.name in BLOCK_TAGS:
                parts.append(_BREAK)
                stack.append((None, False))
            child_pre = preformatted or node.name in PRE_TAGS
            stack.extend((child, child_pre) for child in reversed(node.contents))
        elif isinstance(node, PreformattedString):
            # comments, doctypes, processing instructions
            continue
        elif isinstance(node, NavigableString):
            if preformatted:
                parts.append(str(node))
                continue
            text = _WHITESPACE.sub(" ", str(node))
            if text.startswith(" ") and (
                not parts or parts[-1] is _BREAK or parts[-1].endswith(" ")
            ):
                text = text[1:]
            if text:
                parts.append(text)

    return _join_lines(parts).strip(_SPACE_CHARS)


def _join_lines(parts: Sequence[Any]) -> str:
    """Turn break markers into single newlines, trimming spaces around them."""
    lines: List[str] = []
    current: List[str] = []
    for part in parts:
        if part is _BREAK:
            lines.append("".join(current))
            current = []
        else:
            current.append(part)
    lines.append("".join(current))

    kept = []
    last = len(lines) - 1
    for i, line in enumerate(lines):
        if i > 0:
            line = line.lstrip(" ")
        if i < last and line.endswith(" "):
            line = line[:-1]
        if line:
            kept.append(line)
    return "\n".join(kept)
