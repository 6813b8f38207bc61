"""
Tests for pattern list files (src/textmatch/lists.py).
"""
from pathlib import Path

import pytest

from textmatch import PatternListError, PatternSet, load_pattern_list, parse_pattern_list, write_pattern_list
from textmatch.lists import is_comment


@pytest.fixture
def temp_pattern_list(tmp_path):
    """Create temporary pattern list file."""
    def _create_list(name: str, patterns: list[str], headers: dict[str, str] | None = None) -> Path:
        list_path = tmp_path / f"{name}.txt"
        with open(list_path, "w", encoding="utf-8") as f:
            for key, value in (headers or {}).items():
                f.write(f"# {key}: {value}\n")
            f.write("#\n")
            f.write("# Test list\n")
            f.write("\n")
            for pattern in patterns:
                f.write(f"{pattern}\n")
        return list_path

    return _create_list


# ============================================================================
# Comment detection
# ============================================================================

@pytest.mark.parametrize(
    "line,expected",
    [
        ("#", True),
        ("# comment", True),
        ("#\tcomment", True),
        ("##.log", False),
        ("#1", False),
        ("*.log", False),
    ],
)
def test_is_comment(line, expected):
    assert is_comment(line) is expected


# ============================================================================
# Loading
# ============================================================================

def test_load_list_skips_comments_and_blank_lines(temp_pattern_list):
    list_path = temp_pattern_list("logs", [
        "*.log",
        "",
        "# another comment",
        "   ",
        "*.txt",
    ])

    pattern_list = load_pattern_list(list_path)

    assert pattern_list.pattern_set.positive == ("*.log", "*.txt")
    assert pattern_list.pattern_set.negative == ()


def test_load_list_strips_whitespace(temp_pattern_list):
    list_path = temp_pattern_list("ws", ["  a.log  ", "\tb.log\t", " !c.log"])
    ps = load_pattern_list(list_path).pattern_set
    assert ps.positive == ("a.log", "b.log")
    assert ps.negative == ("c.log",)


def test_load_list_negative_patterns(temp_pattern_list):
    list_path = temp_pattern_list("neg", ["*.log", "!debug*", "!tmp*"])
    ps = load_pattern_list(list_path).pattern_set
    assert ps.positive == ("*.log",)
    assert ps.negative == ("debug*", "tmp*")


def test_load_list_keeps_hash_patterns(temp_pattern_list):
    list_path = temp_pattern_list("digits", ["##.log"], {"WILDCARDS": "true"})
    ps = load_pattern_list(list_path).pattern_set
    assert ps.positive == ("##.log",)
    assert ps.matches("42.log")


def test_load_list_headers_set_flags(temp_pattern_list):
    list_path = temp_pattern_list(
        "flags", ["*.log", "*.txt"],
        {"NAME": "Text files", "MATCH": "any", "WILDCARDS": "yes"},
    )
    pattern_list = load_pattern_list(list_path)

    assert pattern_list.name == "Text files"
    assert pattern_list.metadata["MATCH"] == "any"
    assert pattern_list.pattern_set.match_all is False
    assert pattern_list.pattern_set.use_wildcards is True
    assert pattern_list.pattern_set.matches("notes.txt")


def test_load_list_defaults_without_headers(temp_pattern_list):
    list_path = temp_pattern_list("plain", ["abc"])
    pattern_list = load_pattern_list(list_path)
    assert pattern_list.name == "plain"
    assert pattern_list.pattern_set.match_all is True
    assert pattern_list.pattern_set.use_wildcards is False


def test_headers_after_first_pattern_are_comments():
    pattern_list = parse_pattern_list(["a", "# MATCH: nonsense", "b"])
    assert pattern_list.metadata == {}
    assert pattern_list.pattern_set.positive == ("a", "b")


def test_invalid_match_header_raises(temp_pattern_list):
    list_path = temp_pattern_list("bad", ["a"], {"MATCH": "some"})
    with pytest.raises(PatternListError) as exc_info:
        load_pattern_list(list_path)
    assert exc_info.value.line_number == 1
    assert exc_info.value.path == list_path
    assert "MATCH" in str(exc_info.value)


def test_invalid_wildcards_header_raises():
    with pytest.raises(PatternListError):
        parse_pattern_list(["# WILDCARDS: maybe", "a"])


def test_missing_list_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_pattern_list(tmp_path / "missing.txt")


# ============================================================================
# Writing
# ============================================================================

def test_write_then_load_preserves_set(tmp_path):
    ps = PatternSet(["*.log", "##.txt"], ["debug*"], match_all=False, use_wildcards=True)
    list_path = tmp_path / "out.txt"

    write_pattern_list(list_path, ps, {"NAME": "Output"})
    loaded = load_pattern_list(list_path)

    assert loaded.name == "Output"
    assert loaded.pattern_set.positive == ps.positive
    assert loaded.pattern_set.negative == ps.negative
    assert loaded.pattern_set.match_all is False
    assert loaded.pattern_set.use_wildcards is True


def test_write_rejects_unrepresentable_positive(tmp_path):
    ps = PatternSet(["!literal"])
    with pytest.raises(PatternListError):
        write_pattern_list(tmp_path / "out.txt", ps)
    assert not (tmp_path / "out.txt").exists()


@pytest.mark.parametrize(
    "positive,negative",
    [
        ([" spaced"], []),
        (["trailing\t"], []),
        (["a"], ["tmp "]),
    ],
)
def test_write_rejects_patterns_with_surrounding_whitespace(tmp_path, positive, negative):
    """Whitespace would be stripped on load, so it is refused on write."""
    ps = PatternSet(positive, negative)
    with pytest.raises(PatternListError):
        write_pattern_list(tmp_path / "out.txt", ps)
    assert not (tmp_path / "out.txt").exists()
