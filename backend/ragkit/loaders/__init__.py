"""Document loaders package."""

from ragkit.loaders.base import Loader
from ragkit.loaders.html import HtmlLoader, HtmlLoaderOptions, HtmlParserOptions
from ragkit.loaders.text import TextLoader, TextLoaderOptions

__all__ = [
    "Loader",
    "HtmlLoader",
    "HtmlLoaderOptions",
    "HtmlParserOptions",
    "TextLoader",
    "TextLoaderOptions",
]
