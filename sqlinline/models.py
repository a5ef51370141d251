"""Data models for sqlinline.

This module defines the core data structures shared by the sanitizer
pipeline: parameter types, danger patterns and the outcome of sanitizing a
single string value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ParameterType(Enum):
    """Heuristic classification used to pick sanitization strictness.

    The set is closed: every member has exactly one validator.
    """

    GENERIC = "generic"
    ID = "id"
    NAME = "name"
    DESCRIPTION = "description"


@dataclass(frozen=True)
class DangerPattern:
    """A dangerous substring and its neutralized replacement.

    Attributes:
        pattern: Lower-case text to match (case-insensitively)
        replacement: Text emitted in place of every match
    """

    pattern: str
    replacement: str


@dataclass(frozen=True)
class SanitizedText:
    """Result of running a string value through the sanitizer pipeline.

    Attributes:
        original: Raw input value
        parameter_type: Type inferred for the value
        cleaned: Validator output (not yet quoted)
    """

    original: str
    parameter_type: ParameterType
    cleaned: str

    @property
    def changed(self) -> bool:
        """Whether the validator altered the value."""
        return self.original != self.cleaned

    def to_dict(self) -> dict[str, Any]:
        """Convert sanitized text to dictionary (raw text excluded)."""
        return {
            "parameter_type": self.parameter_type.value,
            "changed": self.changed,
            "original_length": len(self.original),
            "cleaned_length": len(self.cleaned),
        }
