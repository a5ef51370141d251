"""Name validator: single-line names, CJK text allowed.

Whitespace is collapsed to single spaces and a broad blocklist neutralizes
union queries, boolean injection spacers, statement starters, comment
markers and functions used in blind or time-based injection.
"""

from ..models import ParameterType
from .base import ParameterValidator, collapse_whitespace


class NameValidator(ParameterValidator):
    """Validator for project names, user names and similar labels."""

    kind = ParameterType.NAME

    def prepare(self, value: str) -> str:
        return collapse_whitespace(value)
