"""Remediation guidance for sqlinline errors.

This module maps each error code to an explanation of why expansion failed
and an example of the correct call, so applications can surface actionable
messages instead of bare exception text.
"""

from typing import Any, Dict, Optional, Tuple

from .errors import SQLInlineError


def get_educational_guidance(error_code: str) -> Tuple[str, Optional[str]]:
    """Get guidance and a correct usage example for an error code.

    Args:
        error_code: Error code (e.g., 'E101', 'E201')

    Returns:
        Tuple of (guidance, correct_pattern)
    """
    guidance_map: Dict[str, Tuple[str, Optional[str]]] = {
        # Expansion (E101-E199)
        "E101": (
            "The template contains more '?' placeholders than values were supplied. "
            "Every placeholder is filled positionally, left to right, so each one needs "
            "exactly one value. Note that a '?' inside a quoted string in the template "
            "also counts as a placeholder.",
            'expand("SELECT * FROM users WHERE id = ? AND name = ?", [123, "john"])',
        ),
        "E102": (
            "More values were supplied than the template has '?' placeholders. Remove "
            "the extra values or add the missing placeholders; values are never dropped "
            "silently.",
            'expand("SELECT * FROM users WHERE id = ?", [123])',
        ),
        # Encoding (E201-E299)
        "E201": (
            "A value has a type with no SQL literal form. Supported types are None, "
            "bool, int, float, Decimal, str, bytes, date and datetime. Convert the "
            "value first, or give its class a sql_value() method that returns one of "
            "the supported types.",
            "class Money:\n"
            "    def sql_value(self):\n"
            "        return self.amount  # Decimal",
        ),
        # System (E801-E899)
        "E801": (
            "The danger-pattern configuration file could not be loaded. Check that the "
            "file named by SQLINLINE_PATTERNS_FILE exists, is valid YAML, declares "
            "version \"1.0\" and defines a table for every parameter type plus 'legacy'.",
            None,
        ),
    }

    return guidance_map.get(error_code, ("Unknown error code", None))


def format_error_response(error: SQLInlineError) -> Dict[str, Any]:
    """Format a complete guidance response for an error.

    Args:
        error: Error raised by sqlinline

    Returns:
        Dictionary with code, message, guidance and (when known) the
        correct pattern and error details
    """
    guidance, pattern = get_educational_guidance(error.code)

    response: Dict[str, Any] = {
        "error_code": error.code,
        "layer": error.layer,
        "message": error.message,
        "educational_guidance": guidance,
    }

    if pattern:
        response["correct_pattern"] = pattern

    if error.details:
        response["details"] = dict(error.details)

    return response
