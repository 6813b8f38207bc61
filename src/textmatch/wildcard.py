"""
Wildcard matcher - full-string matching for the three-symbol glob dialect.

Pattern symbols:
- ``*``: zero or more of any character
- ``?``: exactly one character of any kind
- ``#``: exactly one decimal digit
- anything else matches itself (case-sensitive)

There is no escaping and no character classes. Matching runs in one pass
with backtracking over the most recent ``*``.
"""
from __future__ import annotations

from typing import Optional

__all__ = ["wildcard_match", "has_wildcards", "WILDCARD_CHARS"]

WILDCARD_CHARS = frozenset("*?#")


def _symbol_matches(symbol: str, char: str) -> bool:
    if symbol == "#":
        return char.isdecimal()
    return symbol == "?" or symbol == char


def has_wildcards(pattern: Optional[str]) -> bool:
    """Return True if the pattern contains any wildcard metacharacter."""
    return bool(pattern) and any(c in WILDCARD_CHARS for c in pattern)


def wildcard_match(text: Optional[str], pattern: Optional[str]) -> bool:
    """
    Decide whether ``text`` fully matches a wildcard ``pattern``.

    Args:
        text: Text to test (None is treated as an empty string)
        pattern: Wildcard pattern (None or empty matches only empty text)

    Returns:
        True if the whole text matches the pattern

    Examples:
        wildcard_match("abcde", "a*e") → True
        wildcard_match("file7.log", "file#.*") → True
        wildcard_match("x", "") → False
    """
    if not pattern:
        return not text

    if text is None:
        text = ""

    text_len = len(text)
    pattern_len = len(pattern)
    ti = 0
    pi = 0

    # Literal phase: lock-step until the first '*'
    while ti < text_len and pi < pattern_len:
        symbol = pattern[pi]
        if symbol == "*":
            break
        if not _symbol_matches(symbol, text[ti]):
            return False
        ti += 1
        pi += 1

    # No '*' reached: lengths must agree
    if pi == pattern_len:
        return text_len == pattern_len

    mark = pi
    resume = ti + 1

    while ti < text_len:
        if pi < pattern_len:
            symbol = pattern[pi]

            if symbol == "*":
                pi += 1
                if pi >= pattern_len:
                    # Trailing '*' absorbs the rest of the text
                    return True
                mark = pi
                resume = ti + 1
                continue

            if _symbol_matches(symbol, text[ti]):
                pi += 1
                ti += 1
                continue

        # Backtrack: let the last '*' consume one more character
        pi = mark
        ti = resume
        resume += 1

    while pi < pattern_len and pattern[pi] == "*":
        pi += 1

    return pi >= pattern_len
