"""
Pattern Set - combine positive and negative patterns into one verdict.

A candidate passes when the positive patterns accept it (all of them, or any
of them, depending on ``match_all``) and no negative pattern matches it.
Patterns are compared either as wildcard patterns or as plain substrings.

Usage:
    ps = PatternSet(use_wildcards=True)
    ps.add_positive("*.log")
    ps.add_negative("debug*")
    ps.matches("app.log")    → True
    ps.matches("debug.log")  → False
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from .wildcard import wildcard_match

__all__ = ["PatternSet", "PatternResolver", "NEGATION_PREFIX"]

logger = logging.getLogger(__name__)

PatternResolver = Callable[[str], str]

# Marks a negative pattern in add_pattern() and pattern list files
NEGATION_PREFIX = "!"


def _contains(candidate: str, pattern: str) -> bool:
    return pattern in candidate


class PatternSet:
    """Ordered positive and negative patterns plus the policy to combine them."""

    def __init__(
        self,
        positive: Optional[Iterable[str]] = None,
        negative: Optional[Iterable[str]] = None,
        *,
        match_all: bool = True,
        use_wildcards: bool = False,
    ):
        """
        Initialize pattern set.

        Args:
            positive: Initial positive patterns
            negative: Initial negative patterns
            match_all: If True, every positive pattern must match;
                otherwise one is enough
            use_wildcards: If True, patterns are wildcard patterns;
                otherwise they are substrings
        """
        self.match_all = match_all
        self.use_wildcards = use_wildcards
        self._positive: List[str] = []
        self._negative: List[str] = []

        for pattern in positive or ():
            self.add_positive(pattern)
        for pattern in negative or ():
            self.add_negative(pattern)

    # -------------------------------------------------------------------------
    # Pattern lists
    # -------------------------------------------------------------------------

    @property
    def positive(self) -> Tuple[str, ...]:
        return tuple(self._positive)

    @property
    def negative(self) -> Tuple[str, ...]:
        return tuple(self._negative)

    @property
    def is_empty(self) -> bool:
        return not self._positive and not self._negative

    def __len__(self) -> int:
        return len(self._positive) + len(self._negative)

    def __repr__(self) -> str:
        return (
            f"PatternSet(positive={self._positive!r}, negative={self._negative!r}, "
            f"match_all={self.match_all}, use_wildcards={self.use_wildcards})"
        )

    def add_positive(self, pattern: Optional[str]) -> None:
        """Add a positive pattern. Empty and duplicate patterns are ignored."""
        if not pattern or pattern in self._positive:
            return
        self._positive.append(pattern)

    def add_negative(self, pattern: Optional[str]) -> None:
        """Add a negative pattern. Empty and duplicate patterns are ignored."""
        if not pattern or pattern in self._negative:
            return
        self._negative.append(pattern)

    def add_pattern(self, pattern: Optional[str]) -> None:
        """
        Add a pattern, routing ``!pattern`` to the negative list.

        Args:
            pattern: Pattern text; a leading "!" marks a negative pattern
        """
        if not pattern:
            return
        if pattern.startswith(NEGATION_PREFIX):
            self.add_negative(pattern[len(NEGATION_PREFIX):])
        else:
            self.add_positive(pattern)

    def extend(self, patterns: Iterable[Optional[str]]) -> None:
        """Add several patterns with add_pattern()."""
        for pattern in patterns:
            self.add_pattern(pattern)

    def merge(self, other: PatternSet) -> None:
        """Append another set's patterns; this set's flags are kept."""
        for pattern in other.positive:
            self.add_positive(pattern)
        for pattern in other.negative:
            self.add_negative(pattern)

    def clear(self) -> None:
        """Remove all patterns from this set."""
        self._positive.clear()
        self._negative.clear()

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def matches(self, candidate: Optional[str], resolver: Optional[PatternResolver] = None) -> bool:
        """
        Check if a candidate passes this pattern set.

        No positive patterns means the positive phase passes, so a set with
        only negative patterns acts as an exclusion filter.

        Args:
            candidate: String to test (None is treated as an empty string)
            resolver: Optional callable rewriting each pattern before it is
                compared; called once per consulted pattern

        Returns:
            True if the candidate is included
        """
        if candidate is None:
            candidate = ""

        compare = wildcard_match if self.use_wildcards else _contains

        def effective(pattern: str) -> str:
            if resolver is None:
                return pattern
            return resolver(pattern) or ""

        if self._positive:
            if self.match_all:
                matched = True
                for pattern in self._positive:
                    if not compare(candidate, effective(pattern)):
                        logger.debug("%r rejected: positive pattern %r did not match", candidate, pattern)
                        matched = False
                        break
            else:
                matched = False
                for pattern in self._positive:
                    if compare(candidate, effective(pattern)):
                        matched = True
                        break
                else:
                    logger.debug("%r rejected: no positive pattern matched", candidate)
        else:
            matched = True

        if not matched:
            return False

        for pattern in self._negative:
            if compare(candidate, effective(pattern)):
                logger.debug("%r excluded by negative pattern %r", candidate, pattern)
                return False

        return True

    def filter(
        self,
        candidates: Iterable[Optional[str]],
        resolver: Optional[PatternResolver] = None,
    ) -> Iterator[Optional[str]]:
        """Yield the candidates that pass this pattern set, in order."""
        for candidate in candidates:
            if self.matches(candidate, resolver):
                yield candidate
