"""Unit tests for case-insensitive danger-pattern neutralization."""

from sqlinline.models import DangerPattern
from sqlinline.validators.neutralizer import neutralize, replace_case_insensitive


class TestReplaceCaseInsensitive:
    """Tests for single-pattern replacement."""

    def test_replaces_all_casings(self):
        """Matches regardless of case."""
        assert replace_case_insensitive("Hello WORLD world", "world", "X") == "Hello X X"

    def test_preserves_casing_outside_matches(self):
        """Unmatched text keeps its original casing."""
        result = replace_case_insensitive("SELECT UnIoN sElEcT FROM", "union select", "union_select")
        assert result == "SELECT union_select FROM"

    def test_uppercase_pattern(self):
        """Pattern casing does not matter."""
        assert replace_case_insensitive("a DROP b", "DROP", "x") == "a x b"

    def test_non_overlapping(self):
        """Scanning resumes after each match."""
        assert replace_case_insensitive("aaaa", "aa", "b") == "bb"
        assert replace_case_insensitive("aaa", "aa", "b") == "ba"

    def test_no_match_returns_text(self):
        """Text without the pattern is returned unchanged."""
        assert replace_case_insensitive("nothing here", "drop", "x") == "nothing here"

    def test_empty_pattern_ignored(self):
        """An empty pattern never matches."""
        assert replace_case_insensitive("abc", "", "x") == "abc"

    def test_replacement_containing_pattern(self):
        """A replacement that contains the pattern is not rescanned."""
        assert replace_case_insensitive("ascii", "ascii", "_ascii_") == "_ascii_"

    def test_length_changing_lowercase(self):
        """Text whose lower-case form is longer is still segmented correctly."""
        # U+0130 lower-cases to two code points
        result = replace_case_insensitive("İ UNION SELECT x", "union select", "union_select")
        assert result == "İ union_select x"

    def test_match_after_length_changing_character(self):
        """Offsets after an expanding character map back to the original."""
        result = replace_case_insensitive("aİb--cİ", "--", "__")
        assert result == "aİb__cİ"


class TestNeutralize:
    """Tests for applying ordered pattern tables."""

    def test_applies_patterns_in_order(self):
        """Each pattern runs over the previous pattern's output."""
        patterns = (DangerPattern("ab", "cd"), DangerPattern("cd", "X"))
        assert neutralize("AB", patterns) == "X"

    def test_order_changes_cascade(self):
        """Reversed order does not cascade."""
        patterns = (DangerPattern("cd", "X"), DangerPattern("ab", "cd"))
        assert neutralize("AB", patterns) == "cd"

    def test_empty_table(self):
        """No patterns means no change."""
        assert neutralize("'; DROP TABLE x", ()) == "'; DROP TABLE x"

    def test_multiple_patterns(self):
        """Several independent patterns are all applied."""
        patterns = (
            DangerPattern("union select", "union_select"),
            DangerPattern("--", "__"),
        )
        assert neutralize("x UNION SELECT y--", patterns) == "x union_select y__"
