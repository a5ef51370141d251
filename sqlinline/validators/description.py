"""Description validator: free text with preserved layout.

Line endings are unified to ``\\n`` but multi-line and multi-space content is
kept. Only the most dangerous statement starters are neutralized; comment
markers are broken up individually so the text stays readable.
"""

from ..models import ParameterType
from .base import ParameterValidator


class DescriptionValidator(ParameterValidator):
    """Validator for descriptions, remarks and other rich text."""

    kind = ParameterType.DESCRIPTION

    def prepare(self, value: str) -> str:
        return value.replace("\r\n", "\n").replace("\r", "\n")
