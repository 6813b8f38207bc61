"""Tests for prefix dispatch (src/textmatch/patterns.py)."""

import pytest

from textmatch import InvalidPatternSyntax, Pattern, PatternKind, match_text, parse_pattern


class TestParsePattern:
    """Tests for parse_pattern()."""

    @pytest.mark.parametrize(
        "raw,kind,text",
        [
            ("exact:a*b", PatternKind.EXACT, "a*b"),
            ("regexp:a.c", PatternKind.REGEX, "a.c"),
            ("regexpi:A.C", PatternKind.REGEX_IGNORECASE, "A.C"),
            ("glob:*.log", PatternKind.GLOB, "*.log"),
            ("*.log", PatternKind.GLOB, "*.log"),
            ("exact:", PatternKind.EXACT, ""),
            ("EXACT:abc", PatternKind.GLOB, "EXACT:abc"),
            ("regex:abc", PatternKind.GLOB, "regex:abc"),
        ],
    )
    def test_prefixes(self, raw, kind, text):
        assert parse_pattern(raw) == Pattern(kind, text)

    def test_empty_is_glob(self):
        assert parse_pattern("") == Pattern(PatternKind.GLOB, "")
        assert parse_pattern(None) == Pattern(PatternKind.GLOB, "")

    def test_only_first_prefix_is_stripped(self):
        assert parse_pattern("glob:exact:x") == Pattern(PatternKind.GLOB, "exact:x")

    def test_str_restores_prefix(self):
        assert str(parse_pattern("*.log")) == "glob:*.log"
        assert str(parse_pattern("regexpi:abc")) == "regexpi:abc"


class TestPatternKind:
    """Tests for PatternKind enum."""

    def test_values(self):
        assert PatternKind.EXACT == "exact"
        assert PatternKind.REGEX == "regexp"
        assert PatternKind.REGEX_IGNORECASE == "regexpi"
        assert PatternKind.GLOB == "glob"

    def test_is_regex(self):
        assert PatternKind.REGEX.is_regex
        assert PatternKind.REGEX_IGNORECASE.is_regex
        assert not PatternKind.EXACT.is_regex
        assert not PatternKind.GLOB.is_regex


class TestMatchText:
    """Tests for match_text()."""

    def test_empty_pattern_matches_only_empty_text(self):
        assert match_text("", "")
        assert match_text(None, None)
        assert not match_text("x", "")

    def test_exact(self):
        assert match_text("a*b", "exact:a*b")
        assert not match_text("axb", "exact:a*b")
        assert not match_text("abc", "exact:a*")

    def test_regex_is_case_sensitive_search(self):
        assert match_text("error: disk full", "regexp:disk")
        assert match_text("abc", "regexp:^a.c$")
        assert not match_text("ABC", "regexp:^abc$")

    def test_regex_ignorecase(self):
        assert match_text("ABC", "regexpi:^abc$")
        assert match_text("Error: x", "regexpi:error")

    def test_glob(self):
        assert match_text("app.log", "glob:*.log")
        assert match_text("app.log", "*.log")
        assert match_text("report_2024.pdf", "report_####.pdf")
        assert not match_text("app.log.1", "*.log")

    def test_none_text(self):
        assert match_text(None, "*")
        assert match_text(None, "regexp:^$")
        assert not match_text(None, "exact:x")

    def test_invalid_regex_raises(self):
        with pytest.raises(InvalidPatternSyntax) as exc_info:
            match_text("abc", "regexp:(")
        assert exc_info.value.pattern == "("
        assert exc_info.value.reason


class TestPattern:
    """Tests for Pattern objects."""

    def test_validate_rejects_bad_regex(self):
        with pytest.raises(InvalidPatternSyntax):
            Pattern(PatternKind.REGEX, "(").validate()
        with pytest.raises(InvalidPatternSyntax):
            Pattern(PatternKind.REGEX_IGNORECASE, "[a-").validate()

    def test_validate_accepts_non_regex(self):
        Pattern(PatternKind.GLOB, "(").validate()
        Pattern(PatternKind.EXACT, "(").validate()

    def test_compile_non_regex_is_error(self):
        with pytest.raises(ValueError):
            Pattern(PatternKind.GLOB, "*").compile()

    def test_compile_is_cached(self):
        pattern = Pattern(PatternKind.REGEX, "a+b")
        assert pattern.compile() is pattern.compile()

    def test_patterns_are_hashable_values(self):
        assert {parse_pattern("a"), parse_pattern("glob:a")} == {Pattern(PatternKind.GLOB, "a")}
