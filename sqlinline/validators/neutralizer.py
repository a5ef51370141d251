"""Case-insensitive scan-and-replace for danger patterns.

Matching runs against a lower-cased shadow of the text while output is
assembled from the original, so casing outside matches is preserved. The
shadow is rebuilt after each pattern: a replacement emitted for one pattern
is visible to (and may be matched by) every later pattern, which makes the
order of a pattern table significant when two patterns overlap.
"""

from collections.abc import Iterable

from ..models import DangerPattern


def replace_case_insensitive(text: str, pattern: str, replacement: str) -> str:
    """Replace every non-overlapping occurrence of pattern, ignoring case.

    Args:
        text: Text to scan
        pattern: Substring to match (any casing)
        replacement: Text emitted in place of each match

    Returns:
        Text with matches replaced and all other characters untouched

    Examples:
        >>> replace_case_insensitive("a UNION Select b", "union select", "union_select")
        'a union_select b'
    """
    if not pattern:
        return text

    return _replace_with_shadow(text, text.lower(), pattern.lower(), replacement)


def neutralize(text: str, patterns: Iterable[DangerPattern]) -> str:
    """Apply danger patterns to text in order.

    Args:
        text: Text to neutralize
        patterns: Ordered danger patterns

    Returns:
        Text with every dangerous substring replaced
    """
    shadow = text.lower()
    for danger in patterns:
        needle = danger.pattern.lower()
        if not needle or needle not in shadow:
            continue
        text = _replace_with_shadow(text, shadow, needle, danger.replacement)
        shadow = text.lower()
    return text


def _replace_with_shadow(text: str, shadow: str, needle: str, replacement: str) -> str:
    """Replace matches of needle found in shadow, copying segments from text.

    Lower-casing can change string length for a handful of code points
    (e.g. U+0130), so when the shadow and the text disagree in length the
    original is segmented per character instead of by shadow offsets.
    """
    if len(shadow) != len(text):
        return _replace_per_character(text, needle, replacement)

    parts: list[str] = []
    last_end = 0
    index = shadow.find(needle)
    while index != -1:
        parts.append(text[last_end:index])
        parts.append(replacement)
        last_end = index + len(needle)
        index = shadow.find(needle, last_end)

    if not parts:
        return text

    parts.append(text[last_end:])
    return "".join(parts)


def _replace_per_character(text: str, needle: str, replacement: str) -> str:
    """Slow path for text whose lower-cased form changes length."""
    # Map each shadow offset back to the original character it came from
    shadow_chars: list[str] = []
    origin: list[int] = []
    for position, char in enumerate(text):
        lowered = char.lower()
        shadow_chars.append(lowered)
        origin.extend([position] * len(lowered))
    origin.append(len(text))
    shadow = "".join(shadow_chars)

    parts: list[str] = []
    last_end = 0
    index = shadow.find(needle)
    while index != -1:
        start = origin[index]
        end_offset = index + len(needle)
        end = origin[end_offset]
        # A match ending inside an expanded character consumes that character
        if origin[end_offset - 1] == end:
            end += 1
        if start >= last_end:
            parts.append(text[last_end:start])
            parts.append(replacement)
            last_end = end
        index = shadow.find(needle, end_offset)

    parts.append(text[last_end:])
    return "".join(parts)
