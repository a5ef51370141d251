"""Parameter type inference.

Classifies a raw string into a ParameterType with cheap structural checks,
first match wins:

1. Empty string: GENERIC
2. Short and made only of ``[A-Za-z0-9_-]``: ID
3. Long, or containing a line break: DESCRIPTION
4. Containing CJK ideographs or a locale naming marker: NAME
5. Anything else: GENERIC

The ID check runs before the length check, so strings between the ID and
description thresholds are classified by content only.
"""

from .models import ParameterType
from .patterns.loader import InferenceSettings
from .validators.identifier import is_id_character

# CJK unified ideographs: basic block, extension A, compatibility block
CJK_RANGES: tuple[tuple[int, int], ...] = (
    (0x4E00, 0x9FFF),
    (0x3400, 0x4DBF),
    (0xF900, 0xFAFF),
)


def contains_cjk(value: str) -> bool:
    """Check if a string contains a CJK unified ideograph.

    Args:
        value: String to scan

    Returns:
        True if any code point falls in a CJK range

    Examples:
        >>> contains_cjk("北京")
        True
        >>> contains_cjk("Beijing")
        False
    """
    for char in value:
        code_point = ord(char)
        for low, high in CJK_RANGES:
            if low <= code_point <= high:
                return True
    return False


class TypeInferrer:
    """Infers the ParameterType of a raw string."""

    def __init__(self, settings: InferenceSettings | None = None) -> None:
        """Initialize type inferrer.

        Args:
            settings: Thresholds and naming markers (defaults if None)
        """
        self.settings = settings or InferenceSettings()

    def infer(self, value: str) -> ParameterType:
        """Classify a string.

        Args:
            value: Raw string

        Returns:
            Inferred ParameterType (never raises)
        """
        if not value:
            return ParameterType.GENERIC

        length = len(value)

        if length <= self.settings.id_max_length and all(is_id_character(c) for c in value):
            return ParameterType.ID

        if length > self.settings.description_min_length or "\n" in value or "\r" in value:
            return ParameterType.DESCRIPTION

        if contains_cjk(value) or any(marker in value for marker in self.settings.name_markers):
            return ParameterType.NAME

        return ParameterType.GENERIC

    def __repr__(self) -> str:
        return f"TypeInferrer({self.settings!r})"
