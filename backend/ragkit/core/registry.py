"""Component registry mapping stable identifiers to constructors."""

import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

import structlog
from pydantic import BaseModel, ValidationError

from ragkit.core.components import Component, ComponentKind
from ragkit.core.exceptions import (
    ConstructionError,
    InvalidConfigurationError,
    RagkitError,
    UnknownComponentError,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class ComponentDefinition:
    """Registry entry describing how to validate options and build a component."""

    identifier: str
    display_name: str
    kind: ComponentKind
    options_schema: Type[BaseModel]
    factory: Callable[[Any], Component]

    @classmethod
    def for_component(cls, component: Type[Component]) -> "ComponentDefinition":
        """Build a definition from a component class's declared attributes."""
        return cls(
            identifier=component.identifier,
            display_name=component.display_name,
            kind=component.kind,
            options_schema=component.options_schema,
            factory=component,
        )

    def json_schema(self) -> Dict[str, Any]:
        """JSON schema of the options, for configuration forms."""
        return self.options_schema.model_json_schema()

    @property
    def configurable(self) -> bool:
        return bool(self.options_schema.model_fields)


class ComponentRegistry:
    """Registry for document-processing components."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._definitions: Dict[str, ComponentDefinition] = {}

    def register(self, definition: ComponentDefinition) -> None:
        """
        Register a definition, replacing any entry with the same identifier.

        Args:
            definition: Definition to register
        """
        replaced = definition.identifier in self._definitions
        self._definitions[definition.identifier] = definition
        logger.debug(
            "component_registered",
            identifier=definition.identifier,
            kind=definition.kind.value,
            replaced=replaced,
        )

    def register_component(self, component: Type[Component]) -> None:
        """Register a component class by its declared identifier."""
        self.register(ComponentDefinition.for_component(component))

    def get_definition(self, identifier: str) -> Optional[ComponentDefinition]:
        """Get a definition by identifier."""
        return self._definitions.get(identifier)

    def list_definitions(
        self, kind: Optional[ComponentKind] = None
    ) -> List[ComponentDefinition]:
        """
        List definitions in registration order.

        Args:
            kind: Optional component kind to filter by

        Returns:
            List of definitions
        """
        return [
            definition
            for definition in self._definitions.values()
            if kind is None or definition.kind == kind
        ]

    def describe(self, identifier: str) -> Dict[str, Any]:
        """
        Describe a component for configuration UIs.

        Args:
            identifier: Component identifier

        Returns:
            Dictionary with identifier, display name, kind and options schema

        Raises:
            UnknownComponentError: If the identifier is not registered
        """
        definition = self._require(identifier)
        return {
            "identifier": definition.identifier,
            "display_name": definition.display_name,
            "kind": definition.kind.value,
            "configurable": definition.configurable,
            "options_schema": definition.json_schema(),
        }

    def create(self, identifier: str, options: Any = None) -> Component:
        """
        Validate options and construct a component.

        Args:
            identifier: Component identifier
            options: Raw, untrusted options (mapping or None)

        Returns:
            Fully initialized component instance

        Raises:
            UnknownComponentError: If the identifier is not registered
            InvalidConfigurationError: If options fail schema validation
            ConstructionError: If the component's setup fails
        """
        definition = self._require(identifier)

        try:
            validated = definition.options_schema.model_validate(
                {} if options is None else options
            )
        except ValidationError as e:
            details = [
                {"loc": tuple(err["loc"]), "msg": err["msg"], "type": err["type"]}
                for err in e.errors(include_url=False)
            ]
            logger.warning(
                "component_options_invalid",
                identifier=identifier,
                errors=len(details),
            )
            raise InvalidConfigurationError(identifier, details) from e

        try:
            component = definition.factory(validated)
        except ConstructionError as e:
            if e.identifier is None:
                e.identifier = identifier
            raise
        except RagkitError:
            raise
        except Exception as e:
            raise ConstructionError(
                f"Failed to construct component: {e}", identifier=identifier
            ) from e

        logger.debug("component_created", identifier=identifier)
        return component

    def create_all(self) -> List[Component]:
        """
        Construct one instance of every registered component with default options.

        Intended for enumeration, not for production use.

        Raises:
            ConstructionError: Naming the first identifier that fails
        """
        components = []
        for identifier in list(self._definitions):
            try:
                components.append(self.create(identifier, {}))
            except ConstructionError:
                raise
            except RagkitError as e:
                raise ConstructionError(
                    f"Default construction failed: {e}", identifier=identifier
                ) from e
        return components

    def _require(self, identifier: str) -> ComponentDefinition:
        definition = self._definitions.get(identifier)
        if definition is None:
            raise UnknownComponentError(identifier)
        return definition

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)


# Global registry instance
_registry: Optional[ComponentRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> ComponentRegistry:
    """Get the global registry, with built-in components registered."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                from ragkit.builtins import register_builtin_components

                registry = ComponentRegistry()
                register_builtin_components(registry)
                _registry = registry
    return _registry


def reset_registry() -> None:
    """Drop the global registry so the next access rebuilds it."""
    global _registry
    with _registry_lock:
        _registry = None


def create_component(identifier: str, options: Any = None) -> Component:
    """Create a component from the global registry."""
    return get_registry().create(identifier, options)
