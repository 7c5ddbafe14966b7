"""Exceptions shared across the fretviz package.

Parsing and pattern lookup are the only validation boundaries in the engine.
Everything else degrades to an empty or absent result instead of raising.
"""

from __future__ import annotations

from typing import Any


class FretvizError(Exception):
    """Base class for all errors raised by fretviz."""


class ParseError(FretvizError, ValueError):
    """Raised when a note name or tuning token is malformed or unsupported."""

    def __init__(self, token: str, reason: str) -> None:
        """Initialize a ParseError for the offending token.

        Args:
            token: The input text that failed to parse.
            reason: A short description of what was wrong with it.
        """
        super().__init__(f"Invalid note {token!r}: {reason}")
        self.token = token
        self.reason = reason


class UnknownPatternError(FretvizError, KeyError):
    """Raised when a scale or chord name is not in the pattern table."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown scale or chord type: {self.name}"


class ConfigError(FretvizError, ValueError):
    """Raised when an imported configuration payload is malformed."""


class MatchException(Exception):
    """Exception raised when pattern matching fails."""

    def __init__(self, value: Any) -> None:
        """Initialize a MatchException with the unmatched value.

        Args:
            value: The value that failed to match any pattern.
        """
        super().__init__(f"Failed to match value: {value}")
