"""ID validator: strict allow-list for identifiers.

Only ``[A-Za-z0-9_-]`` survives; anything else (after normalization) is
replaced with an underscore, so SQL metacharacters cannot appear in the
output and no blocklist is needed.
"""

from ..models import ParameterType
from .base import ParameterValidator

ID_CHARACTERS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-"
)


def is_id_character(char: str) -> bool:
    """Check if a character is allowed in an ID (ASCII letters, digits, _ and -)."""
    return char in ID_CHARACTERS


class IDValidator(ParameterValidator):
    """Validator for project IDs, user IDs and similar keys."""

    kind = ParameterType.ID

    def prepare(self, value: str) -> str:
        return "".join(char if char in ID_CHARACTERS else "_" for char in value)
