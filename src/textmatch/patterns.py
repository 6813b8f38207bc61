"""
Pattern dispatch - choose a matching strategy from a pattern prefix.

Supported prefixes:
- ``exact:``   raw string equality
- ``regexp:``  regular expression (search semantics)
- ``regexpi:`` case-insensitive regular expression
- ``glob:``    wildcard pattern (also the default without a prefix)

Usage:
    from textmatch.patterns import parse_pattern, match_text

    parse_pattern("regexp:^err").matches("error: disk full")  → True
    match_text("report_2024.pdf", "report_####.pdf")          → True
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache
from typing import Optional

from .exceptions import InvalidPatternSyntax
from .wildcard import wildcard_match

__all__ = [
    "PatternKind",
    "Pattern",
    "parse_pattern",
    "match_text",
    "PREFIXES",
]

logger = logging.getLogger(__name__)


class PatternKind(StrEnum):
    """Matching strategy selected by a pattern prefix."""

    EXACT = "exact"
    REGEX = "regexp"
    REGEX_IGNORECASE = "regexpi"
    GLOB = "glob"

    @property
    def prefix(self) -> str:
        return f"{self.value}:"

    @property
    def is_regex(self) -> bool:
        return self in (PatternKind.REGEX, PatternKind.REGEX_IGNORECASE)


# Checked in this order; "regexp:" never shadows "regexpi:" since the
# character after "regexp" differs.
PREFIXES = (
    PatternKind.REGEX,
    PatternKind.REGEX_IGNORECASE,
    PatternKind.EXACT,
    PatternKind.GLOB,
)


@lru_cache(maxsize=256)
def _compile(expression: str, flags: int) -> re.Pattern:
    try:
        return re.compile(expression, flags)
    except re.error as e:
        raise InvalidPatternSyntax(expression, str(e)) from e


@dataclass(frozen=True, slots=True)
class Pattern:
    """A parsed pattern: the strategy plus the text without its prefix."""

    kind: PatternKind
    text: str

    def compile(self) -> re.Pattern:
        """
        Compile a regex pattern (cached).

        Raises:
            InvalidPatternSyntax: If the expression is malformed
            ValueError: If the pattern is not a regex pattern
        """
        if not self.kind.is_regex:
            raise ValueError(f"{self.kind.value} pattern has no regular expression")
        flags = re.IGNORECASE if self.kind is PatternKind.REGEX_IGNORECASE else 0
        return _compile(self.text, flags)

    def validate(self) -> None:
        """Raise InvalidPatternSyntax if this pattern can never be evaluated."""
        if self.kind.is_regex:
            self.compile()

    def matches(self, text: Optional[str]) -> bool:
        """
        Check if text matches this pattern.

        Regex kinds match anywhere in the text; exact and glob kinds
        match the whole text.

        Raises:
            InvalidPatternSyntax: If a regex pattern is malformed
        """
        if text is None:
            text = ""

        if self.kind is PatternKind.EXACT:
            return text == self.text
        if self.kind.is_regex:
            return self.compile().search(text) is not None
        return wildcard_match(text, self.text)

    def __str__(self) -> str:
        return f"{self.kind.prefix}{self.text}"


def parse_pattern(raw: Optional[str]) -> Pattern:
    """
    Split a raw pattern string into its strategy and text.

    Args:
        raw: Pattern string, optionally prefixed ("exact:", "regexp:", ...)

    Returns:
        Parsed Pattern; unprefixed text becomes a GLOB pattern
    """
    if not raw:
        return Pattern(PatternKind.GLOB, "")

    for kind in PREFIXES:
        if raw.startswith(kind.prefix):
            return Pattern(kind, raw[len(kind.prefix):])

    return Pattern(PatternKind.GLOB, raw)


def match_text(text: Optional[str], pattern: Optional[str]) -> bool:
    """
    Match text against a prefixed pattern string.

    An empty pattern matches only empty text.

    Raises:
        InvalidPatternSyntax: If a regex pattern is malformed
    """
    if not pattern:
        return not text

    parsed = parse_pattern(pattern)
    logger.debug("Matching %r against %s pattern %r", text, parsed.kind.value, parsed.text)
    return parsed.matches(text)
