"""SQL string literal escaping.

This module turns an already-sanitized string into a single-quoted SQL
string literal. Escapes are applied in a fixed order: backslash first, so
the backslashes introduced by later steps are never escaped twice.
"""

# (character, escaped form), applied in order
ESCAPE_SEQUENCE: tuple[tuple[str, str], ...] = (
    ("\\", "\\\\"),
    ("'", "''"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
    ("\x00", "\\0"),
    ("\x1a", "\\Z"),  # Control-Z
)


def quote_string(text: str) -> str:
    """Escape special characters and wrap text in single quotes.

    A single application is sufficient; the output never needs re-escaping
    to be embedded in SQL.

    Args:
        text: Sanitized string to quote

    Returns:
        Quoted SQL string literal

    Examples:
        >>> quote_string("hello's world")
        "'hello''s world'"
    """
    for char, escaped in ESCAPE_SEQUENCE:
        text = text.replace(char, escaped)
    return f"'{text}'"
