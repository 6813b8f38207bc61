"""
textmatch - match strings against exact, wildcard and regex patterns.

This package provides:
- wildcard_match: full-string matching with *, ? and # wildcards
- PatternSet: positive/negative pattern aggregation with match-all/match-any policy
- Pattern, parse_pattern, match_text: prefix dispatch (exact:, regexp:, regexpi:, glob:)
- Pattern list files and YAML configuration for populating PatternSets

Usage:
    from textmatch import PatternSet, wildcard_match, match_text
"""
from __future__ import annotations

# Matching core
from .wildcard import wildcard_match, has_wildcards
from .pattern_set import PatternSet, PatternResolver, NEGATION_PREFIX

# Prefix dispatch
from .patterns import Pattern, PatternKind, parse_pattern, match_text

# Resolvers
from .resolvers import template_resolver, chain_resolvers

# Loading
from .lists import PatternList, parse_pattern_list, load_pattern_list, write_pattern_list
from .config import MatcherConfig, PatternSetConfig, LoggingConfig, load_config, parse_config

from .exceptions import (
    TextMatchError,
    InvalidPatternSyntax,
    PatternListError,
    ConfigValidationError,
)

__all__ = [
    # Core
    "wildcard_match",
    "has_wildcards",
    "PatternSet",
    "PatternResolver",
    "NEGATION_PREFIX",
    # Dispatch
    "Pattern",
    "PatternKind",
    "parse_pattern",
    "match_text",
    # Resolvers
    "template_resolver",
    "chain_resolvers",
    # Loading
    "PatternList",
    "parse_pattern_list",
    "load_pattern_list",
    "write_pattern_list",
    "MatcherConfig",
    "PatternSetConfig",
    "LoggingConfig",
    "load_config",
    "parse_config",
    # Errors
    "TextMatchError",
    "InvalidPatternSyntax",
    "PatternListError",
    "ConfigValidationError",
]
