"""Registration of the built-in components."""

from ragkit.core.registry import ComponentRegistry
from ragkit.loaders.html import HtmlLoader
from ragkit.loaders.text import TextLoader
from ragkit.splitters.text import TextSplitter

BUILTIN_COMPONENTS = (
    HtmlLoader,
    TextLoader,
    TextSplitter,
)


def register_builtin_components(registry: ComponentRegistry) -> None:
    """Register every built-in component with ``registry``."""
    for component in BUILTIN_COMPONENTS:
        registry.register_component(component)
