"""Core registry, component base and error taxonomy."""

from ragkit.core.components import Component, ComponentKind
from ragkit.core.exceptions import (
    ConstructionError,
    InvalidConfigurationError,
    InvalidPatternError,
    ParseError,
    RagkitError,
    UnknownComponentError,
)
from ragkit.core.registry import (
    ComponentDefinition,
    ComponentRegistry,
    create_component,
    get_registry,
    reset_registry,
)

__all__ = [
    "Component",
    "ComponentKind",
    "ComponentDefinition",
    "ComponentRegistry",
    "create_component",
    "get_registry",
    "reset_registry",
    "RagkitError",
    "UnknownComponentError",
    "InvalidConfigurationError",
    "ConstructionError",
    "InvalidPatternError",
    "ParseError",
]
