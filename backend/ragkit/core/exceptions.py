"""Custom exceptions for ragkit."""

from typing import Any, Dict, List, Optional


class RagkitError(Exception):
    """Base exception for ragkit errors."""
    pass


class UnknownComponentError(RagkitError):
    """Raised when a component identifier is not registered."""

    def __init__(self, identifier: str):
        super().__init__(f"Unknown component: {identifier}")
        self.identifier = identifier


class InvalidConfigurationError(RagkitError):
    """Raised when component options fail schema validation."""

    def __init__(
        self,
        identifier: str,
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        self.identifier = identifier
        self.details = details or []
        fields = ", ".join(
            ".".join(str(part) for part in item.get("loc", ())) or "<root>"
            for item in self.details
        )
        message = f"Invalid configuration for {identifier}"
        if fields:
            message = f"{message}: {fields}"
        super().__init__(message)


class ConstructionError(RagkitError):
    """Raised when a component's own setup fails after its options validate."""

    def __init__(self, message: str, identifier: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.identifier = identifier

    def __str__(self) -> str:
        if self.identifier:
            return f"{self.identifier}: {self.message}"
        return self.message


class InvalidPatternError(ConstructionError):
    """Raised when a URL pattern cannot be compiled."""

    def __init__(self, pattern: Any, reason: str):
        super().__init__(f"Invalid URL pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class ParseError(RagkitError):
    """Error during document parsing."""
    pass
