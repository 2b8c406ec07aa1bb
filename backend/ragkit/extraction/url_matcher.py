"""URL pattern matching for selection rules.

Supported pattern forms:

- ``*`` matches every URL
- ``https://example.com/page`` (no ``*``) is an exact match
- ``https://example.com/docs/*`` (single trailing ``*``) is a prefix match
- any other ``*`` matches any run of characters, ``/`` included, and the
  whole URL must match (``https://*.example.com/*``)

All other characters are literal, so ``?``, ``.`` and ``[`` need no escaping.
"""

import re
from typing import Any, Optional, Pattern

from ragkit.core.exceptions import InvalidPatternError

WILDCARD = "*"


class UrlMatcher:
    """Compiled URL pattern. Immutable and safe to share across threads."""

    __slots__ = ("pattern", "_prefix", "_regex", "_match_all")

    def __init__(self, pattern: str) -> None:
        _check_pattern(pattern)
        self.pattern = pattern
        self._match_all = pattern == WILDCARD
        self._prefix: Optional[str] = None
        self._regex: Optional[Pattern[str]] = None

        stars = pattern.count(WILDCARD)
        if stars and not self._match_all:
            if stars == 1 and pattern.endswith(WILDCARD):
                self._prefix = pattern[:-1]
            else:
                self._regex = re.compile(
                    ".*".join(re.escape(part) for part in pattern.split(WILDCARD)),
                    re.DOTALL,
                )

    def matches(self, url: str) -> bool:
        """Check whether ``url`` matches this pattern."""
        if self._match_all:
            return True
        if self._prefix is not None:
            return url.startswith(self._prefix)
        if self._regex is not None:
            return self._regex.fullmatch(url) is not None
        return url == self.pattern

    __call__ = matches

    def __repr__(self) -> str:
        return f"UrlMatcher({self.pattern!r})"


def _check_pattern(pattern: Any) -> None:
    if not isinstance(pattern, str):
        raise InvalidPatternError(pattern, "pattern must be a string")
    if not pattern:
        raise InvalidPatternError(pattern, "pattern is empty")
    if any(ch.isspace() for ch in pattern):
        raise InvalidPatternError(pattern, "pattern contains whitespace")


def compile_pattern(pattern: str) -> UrlMatcher:
    """
    Compile a URL pattern.

    Args:
        pattern: Pattern in one of the supported forms

    Returns:
        UrlMatcher for the pattern

    Raises:
        InvalidPatternError: If the pattern is empty, not a string or contains whitespace
    """
    return UrlMatcher(pattern)
