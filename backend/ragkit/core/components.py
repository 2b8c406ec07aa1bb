"""Component base class shared by every registrable strategy."""

from abc import ABC
from enum import Enum
from typing import ClassVar, Generic, Type, TypeVar

from pydantic import BaseModel

OptionsT = TypeVar("OptionsT", bound=BaseModel)


class ComponentKind(str, Enum):
    """Categories of document-processing components."""

    LOADER = "loader"
    SPLITTER = "splitter"
    PROMPTING = "prompting"


class Component(ABC, Generic[OptionsT]):
    """Base class for schema-configured components.

    Subclasses declare the class attributes below and receive an already
    validated options model. Instances are read-only after ``__init__``
    so one instance may serve concurrent callers.
    """

    identifier: ClassVar[str]
    display_name: ClassVar[str]
    kind: ClassVar[ComponentKind]
    options_schema: ClassVar[Type[BaseModel]]

    def __init__(self, options: OptionsT) -> None:
        self.options = options

    def __repr__(self) -> str:
        return f"{type(self).__name__}(identifier={self.identifier!r})"
