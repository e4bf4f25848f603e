"""
Failure Types

StructuralMismatch is the single verdict a failed match produces.
PatternError is raised for malformed patterns; it signals a programming
error in the caller, never a property of the value being checked.
"""

from __future__ import annotations


MESSAGE_PREFIX = "Match error: "


class StructuralMismatch(ValueError):
    """
    A value does not conform to a pattern.

    Attributes:
        reason: The pattern-specific explanation, e.g. "Expected string, got number".
        path:   Accessor chain from the root to the divergence ("" at the root).
        message: Full rendered message, "Match error: <reason>[ in field <path>]".
    """

    def __init__(self, reason: str, path: str = ""):
        self.reason = reason
        self.path = path
        self.message = MESSAGE_PREFIX + reason
        if path:
            self.message += f" in field {path}"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"StructuralMismatch(reason={self.reason!r}, path={self.path!r})"


class PatternError(TypeError):
    """A pattern is malformed and cannot be matched against anything."""

    def __init__(self, detail: str):
        super().__init__(f"Bad pattern: {detail}")
