"""Extraction building block tests: digest, URL patterns, models, text flattening."""

import hashlib

import pytest
from bs4 import BeautifulSoup
from pydantic import ValidationError

from ragkit.core.exceptions import InvalidPatternError
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
from ragkit.extraction.url_matcher import compile_pattern


class TestDigest:
    """Test content digests."""

    def test_known_values(self):
        """Test digests against independently computed MD5 values."""
        assert digest([]) == "d41d8cd98f00b204e9800998ecf8427e"
        assert digest(["Hello World"]) == hashlib.md5(b"Hello World").hexdigest()
        assert digest(["a", "b"]) == hashlib.md5(b"a\n\n\n\nb").hexdigest()

    def test_separator_is_four_newlines(self):
        """Test the fixed separator."""
        assert SEGMENT_SEPARATOR == "\n\n\n\n"

    def test_segment_boundaries_matter(self):
        """Test different segmentations of the same text differ."""
        assert digest(["ab"]) != digest(["a", "b"])

    def test_unicode(self):
        """Test digests are computed over UTF-8 bytes."""
        assert digest(["café"]) == hashlib.md5("café".encode("utf-8")).hexdigest()


class TestUrlMatcher:
    """Test URL pattern forms."""

    def test_match_all(self):
        """Test the bare wildcard."""
        matcher = compile_pattern("*")

        assert matcher.matches("https://example.com/")
        assert matcher.matches("")

    def test_exact(self):
        """Test patterns without wildcard are exact."""
        matcher = compile_pattern("https://example.com/page")

        assert matcher.matches("https://example.com/page")
        assert not matcher.matches("https://example.com/page/2")
        assert not matcher.matches("https://example.com/pag")

    def test_prefix(self):
        """Test a trailing wildcard is a prefix match."""
        matcher = compile_pattern("https://example.com/docs/*")

        assert matcher.matches("https://example.com/docs/")
        assert matcher.matches("https://example.com/docs/a/b?c=1")
        assert not matcher.matches("https://example.com/blog/")

    def test_inner_wildcards(self):
        """Test wildcards inside the pattern."""
        matcher = compile_pattern("https://*.example.com/*/edit")

        assert matcher.matches("https://www.example.com/page/edit")
        assert matcher.matches("https://a.b.example.com/x/y/edit")
        assert not matcher.matches("https://example.com/page/edit")
        assert not matcher.matches("https://www.example.com/page/edit/more")

    def test_special_characters_are_literal(self):
        """Test regex metacharacters need no escaping."""
        matcher = compile_pattern("https://example.com/search?q=[a]*")

        assert matcher.matches("https://example.com/search?q=[a]bc")
        assert not matcher.matches("https://example.com/searchXq=[a]bc")

    def test_callable(self):
        """Test matchers can be used as predicates."""
        matcher = compile_pattern("https://example.com/*")

        urls = ["https://example.com/a", "https://other.org/a"]
        assert list(filter(matcher, urls)) == ["https://example.com/a"]

    @pytest.mark.parametrize("pattern", ["", "https://example.com/ a", "\t", None, 42])
    def test_invalid_patterns(self, pattern):
        """Test malformed patterns are rejected."""
        with pytest.raises(InvalidPatternError):
            compile_pattern(pattern)


class TestModels:
    """Test extraction models."""

    def test_selector_item_defaults(self):
        """Test selector items default to first-match text extraction."""
        item = SelectorItem.model_validate({"selector": "article"})

        assert item.all is False
        assert item.type == SelectorType.DOM_TEXT
        assert item.extraction_kind == ExtractionKind.TEXT
        assert item.attribute_name is None

    def test_null_type_is_text(self):
        """Test an explicit null type is treated as dom-text."""
        item = SelectorItem.model_validate({"selector": "p", "type": None})

        assert item.extraction_kind == ExtractionKind.TEXT

    def test_attribute_kinds(self):
        """Test attribute extraction kinds and names."""
        content_attr = SelectorItem(selector="meta", type="dom-content-attr")
        href = SelectorItem(selector="a", type="dom-attr", attribute="href")

        assert content_attr.extraction_kind == ExtractionKind.ATTRIBUTE
        assert content_attr.attribute_name == "content"
        assert href.attribute_name == "href"

    def test_empty_selector_rejected(self):
        """Test empty selectors fail validation."""
        with pytest.raises(ValidationError):
            SelectorItem(selector="")

    def test_content_requires_parallel_partitions(self):
        """Test segments and partitions must have equal length."""
        with pytest.raises(ValidationError):
            ExtractedContent(
                segments=("a", "b"),
                digest=digest(["a", "b"]),
                metadata=ContentMetadata(partitions=(Partition(selector="p"),)),
            )

    def test_from_fragments(self):
        """Test assembling content from fragments."""
        position = SourcePosition(line=3, column=4)
        content = ExtractedContent.from_fragments(
            [
                ExtractedFragment(text="one", selector="p", position=position),
                ExtractedFragment(text="two", selector="p"),
            ],
            warnings=["careful"],
        )

        assert content.segments == ("one", "two")
        assert content.digest == digest(["one", "two"])
        assert content.metadata.partitions[0].position == position
        assert content.metadata.partitions[1].position is None
        assert content.warnings == ("careful",)

    def test_content_is_immutable(self):
        """Test results cannot be modified."""
        content = ExtractedContent.from_fragments([ExtractedFragment(text="x", selector="p")])

        with pytest.raises(ValidationError):
            content.digest = "changed"


class TestVisibleText:
    """Test text flattening."""

    def _element(self, html, selector="div"):
        return BeautifulSoup(html, "html.parser").select_one(selector)

    def test_inline_elements_join(self):
        """Test inline markup does not split words."""
        element = self._element("<div>Hello <b>World</b>!</div>")

        assert visible_text(element) == "Hello World!"

    def test_whitespace_collapses(self):
        """Test runs of whitespace collapse to single spaces."""
        element = self._element("<div>  a \n\t b   <span> c </span></div>")

        assert visible_text(element) == "a b c"

    def test_blocks_become_lines(self):
        """Test block elements and br produce line breaks."""
        element = self._element("<div><p>One</p><p>Two<br>Three</p><ul><li>x</li><li>y</li></ul></div>")

        assert visible_text(element) == "One\nTwo\nThree\nx\ny"

    def test_hidden_elements_and_comments_skipped(self):
        """Test scripts, styles, templates and comments are dropped."""
        element = self._element(
            "<div>a<script>s()</script><style>p{}</style>"
            "<template>t</template><!-- note -->b</div>"
        )

        assert visible_text(element) == "ab"

    def test_preformatted_text_kept(self):
        """Test whitespace inside pre is preserved."""
        element = self._element("<div><pre>x  = 1\ny  = 2</pre></div>")

        assert visible_text(element) == "x  = 1\ny  = 2"

    def test_selected_hidden_element_itself(self):
        """Test a directly selected title still yields its text."""
        element = self._element("<html><head><title>Page</title></head></html>", "title")

        assert visible_text(element) == "Page"

    def test_non_breaking_space_kept(self):
        """Test only ASCII whitespace collapses."""
        element = self._element("<div>a&nbsp;b <p>&nbsp;c</p></div>")

        assert visible_text(element) == "a\u00a0b\n\u00a0c"

    def test_paragraph_separator_in_text_kept(self):
        """Test U+2029 in document text is not treated as a block break."""
        element = self._element("<div>a\u2029b<pre>c\u2029d</pre></div>")

        assert visible_text(element) == "a\u2029b\nc\u2029d"


class TestSelectorResolver:
    """Test rule gathering independent of parsing."""

    def test_gather_without_rules(self):
        """Test the fallback is injected with a warning."""
        resolver = SelectorResolver()

        selectors, warnings = resolver.gather("https://example.com/")

        assert [s.item.selector for s in selectors] == ["body"]
        assert len(warnings) == 1

    def test_gather_keeps_rule_order(self):
        """Test matching rules contribute in order."""
        resolver = SelectorResolver([
            SelectionRule.model_validate(rule)
            for rule in [
                {"url": "*", "selectors": [{"selector": "h1"}]},
                {"url": "https://other.org/*", "selectors": [{"selector": "nav"}]},
                {"url": "https://example.com/*", "selectors": [{"selector": "main"}]},
            ]
        ])

        selectors, warnings = resolver.gather("https://example.com/")

        assert [s.item.selector for s in selectors] == ["h1", "main"]
        assert warnings == []

    def test_custom_fallback_selector(self):
        """Test the fallback selector can be changed."""
        resolver = SelectorResolver(fallback_selector="main")
        root = BeautifulSoup("<body><nav>n</nav><main>m</main></body>", "html.parser")

        result = resolver.resolve(root, "https://example.com/")

        assert [f.text for f in result.fragments] == ["m"]
        assert result.failed == []
