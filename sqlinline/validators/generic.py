"""Generic validator: the default and fallback policy.

Used whenever a value's type is unrecognized. Balances compatibility with
safety: whitespace is collapsed and common injection sequences are
neutralized.
"""

from ..models import ParameterType
from .base import ParameterValidator, collapse_whitespace


class GenericValidator(ParameterValidator):
    """Validator for values that match no more specific type."""

    kind = ParameterType.GENERIC

    def prepare(self, value: str) -> str:
        return collapse_whitespace(value)
