"""Shared validator pipeline.

Every validator runs the same four steps:

1. NFKC Unicode normalization (folds full-width letters and other
   compatibility forms so they cannot smuggle keywords past the blocklist)
2. A per-type whitespace policy
3. Danger-pattern neutralization
4. Truncation to the type's length cap

Validators are total: they never raise for string input.
"""

import re
import unicodedata

from ..models import DangerPattern, ParameterType
from ..patterns.loader import PatternTable
from .neutralizer import neutralize

# ASCII whitespace only; other Unicode spaces are left to NFKC
WHITESPACE_RUN = re.compile(r"[\t\n\f\r ]+")


def normalize_unicode(value: str) -> str:
    """Apply NFKC compatibility normalization.

    Args:
        value: Raw string

    Returns:
        Normalized string (idempotent)

    Examples:
        >>> normalize_unicode("ｐｒｏｊｅｃｔ１２３")
        'project123'
    """
    return unicodedata.normalize("NFKC", value)


def collapse_whitespace(value: str) -> str:
    """Turn tabs and line breaks into spaces, squeeze runs and trim."""
    value = value.replace("\t", " ").replace("\n", " ").replace("\r", " ")
    return WHITESPACE_RUN.sub(" ", value).strip()


class ParameterValidator:
    """Base class for the four parameter validators.

    Subclasses set ``kind`` and override ``prepare`` to apply their
    whitespace or character policy.

    Attributes:
        kind: Parameter type handled by this validator
        max_length: Output cap in characters
        patterns: Danger patterns applied after ``prepare``
    """

    kind: ParameterType = ParameterType.GENERIC

    def __init__(self, table: PatternTable) -> None:
        """Initialize validator from its pattern table.

        Args:
            table: Length cap and danger patterns for this type
        """
        self.max_length = table.max_length
        self.patterns: tuple[DangerPattern, ...] = table.patterns

    def validate(self, value: str) -> str:
        """Clean a raw string for embedding as a literal.

        Args:
            value: Raw string

        Returns:
            Cleaned string, at most ``max_length`` characters
        """
        cleaned = self.prepare(normalize_unicode(value))
        if self.patterns:
            cleaned = neutralize(cleaned, self.patterns)
        return cleaned[: self.max_length]

    def prepare(self, value: str) -> str:
        """Apply the type's whitespace/character policy to normalized text."""
        return value

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(max_length={self.max_length}, "
            f"patterns={len(self.patterns)})"
        )
