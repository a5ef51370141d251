"""Parameter validators for the type-aware sanitizer.

This package contains one validator per parameter type plus the shared
pieces they are built from:
- ID: strict allow-list
- Name: collapsed whitespace, broad blocklist
- Description: preserved layout, narrow blocklist
- Generic: default and fallback policy
- Legacy: standalone sanitizer without type inference
"""

from .base import ParameterValidator, collapse_whitespace, normalize_unicode
from .description import DescriptionValidator
from .generic import GenericValidator
from .identifier import IDValidator, is_id_character
from .legacy import sanitize_string_input
from .name import NameValidator
from .neutralizer import neutralize, replace_case_insensitive

__all__ = [
    "DescriptionValidator",
    "GenericValidator",
    "IDValidator",
    "NameValidator",
    "ParameterValidator",
    "collapse_whitespace",
    "is_id_character",
    "neutralize",
    "normalize_unicode",
    "replace_case_insensitive",
    "sanitize_string_input",
]
