"""sqlinline - Hardened inlining of values into SQL templates.

This package expands ``?``-placeholder SQL templates into directly
executable text for contexts where parameter binding is unavailable. Every
value becomes a literal; strings pass through a type-aware sanitizer
(type inference, per-type validator, escaping) first.

The sanitizer is heuristic and blocklist-based: it hardens interpolation,
it does not make it equivalent to parameter binding.

Version: 1.0.0
"""

from .encoder import LiteralEncoder, SupportsSQLValue, literal
from .errors import (
    ArityMismatchError,
    ConfigurationError,
    EncodingError,
    ExpansionError,
    SQLInlineError,
    TooFewValuesError,
    TooManyValuesError,
    UnsupportedTypeError,
)
from .escaper import quote_string
from .expander import PlaceholderExpander, count_placeholders, expand
from .inference import TypeInferrer
from .models import ParameterType, SanitizedText
from .registry import Sanitizer, ValidatorRegistry, default_sanitizer, infer_type, validate
from .validators.legacy import sanitize_string_input

__version__ = "1.0.0"

__all__ = [
    "ArityMismatchError",
    "ConfigurationError",
    "EncodingError",
    "ExpansionError",
    "LiteralEncoder",
    "ParameterType",
    "PlaceholderExpander",
    "SQLInlineError",
    "SanitizedText",
    "Sanitizer",
    "SupportsSQLValue",
    "TooFewValuesError",
    "TooManyValuesError",
    "TypeInferrer",
    "UnsupportedTypeError",
    "ValidatorRegistry",
    "count_placeholders",
    "default_sanitizer",
    "expand",
    "infer_type",
    "literal",
    "quote_string",
    "sanitize_string_input",
    "validate",
]
