"""ragkit: document extraction core for retrieval indexing.

Provides a typed component registry for document-processing strategies
and a rule-driven HTML loader that turns raw documents into ordered text
segments with provenance and a deterministic digest.
"""

from ragkit.core import (
    Component,
    ComponentDefinition,
    ComponentKind,
    ComponentRegistry,
    ConstructionError,
    InvalidConfigurationError,
    InvalidPatternError,
    ParseError,
    RagkitError,
    UnknownComponentError,
    create_component,
    get_registry,
    reset_registry,
)
from ragkit.extraction import (
    ExtractedContent,
    SelectionRule,
    SelectorItem,
    compile_pattern,
    digest,
)
from ragkit.loaders import HtmlLoader, Loader, TextLoader
from ragkit.splitters import Splitter, TextChunk, TextSplitter

__version__ = "0.1.0"

__all__ = [
    # Registry
    "Component",
    "ComponentDefinition",
    "ComponentKind",
    "ComponentRegistry",
    "create_component",
    "get_registry",
    "reset_registry",
    # Extraction
    "ExtractedContent",
    "SelectionRule",
    "SelectorItem",
    "compile_pattern",
    "digest",
    # Components
    "Loader",
    "HtmlLoader",
    "TextLoader",
    "Splitter",
    "TextChunk",
    "TextSplitter",
    # Errors
    "RagkitError",
    "UnknownComponentError",
    "InvalidConfigurationError",
    "ConstructionError",
    "InvalidPatternError",
    "ParseError",
]
