"""
Pattern list files - load and save PatternSets as plain text.

File format (UTF-8, one pattern per line):

    # NAME: Log files
    # MATCH: any
    # WILDCARDS: true

    *.log
    *.log.#
    !debug*

- Lines starting with "!" are negative patterns.
- "#" followed by whitespace (or alone) starts a comment. Comments of the
  form "# KEY: value" in the leading comment block are metadata.
- A "#" followed directly by other text is a pattern ("##.txt").
- Blank lines are skipped and surrounding whitespace is stripped.

Recognised metadata: MATCH (all|any), WILDCARDS (true|false). Other keys
(NAME, DESCRIPTION, ...) are kept as free-form metadata.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from .exceptions import PatternListError
from .pattern_set import NEGATION_PREFIX, PatternSet

__all__ = [
    "PatternList",
    "parse_pattern_list",
    "load_pattern_list",
    "write_pattern_list",
    "is_comment",
]

logger = logging.getLogger(__name__)

_METADATA_RE = re.compile(r"^#\s+([A-Za-z_][A-Za-z0-9_]*)\s*:\s*(.*)$")

_TRUE_VALUES = ("true", "yes", "1", "on")
_FALSE_VALUES = ("false", "no", "0", "off")


@dataclass
class PatternList:
    """Patterns loaded from a list file, plus its header metadata."""

    pattern_set: PatternSet
    metadata: Dict[str, str] = field(default_factory=dict)
    path: Optional[Path] = None

    @property
    def name(self) -> str:
        if "NAME" in self.metadata:
            return self.metadata["NAME"]
        return self.path.stem if self.path else ""


def is_comment(line: str) -> bool:
    """Return True for "#" alone or "#" followed by whitespace."""
    return line == "#" or (line.startswith("#") and line[1].isspace())


def _parse_bool(value: str, key: str, path: Optional[Path], line_number: int) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise PatternListError(f"Invalid {key} value '{value}' (expected true or false)", path, line_number)


def _parse_match(value: str, path: Optional[Path], line_number: int) -> bool:
    lowered = value.lower()
    if lowered == "all":
        return True
    if lowered == "any":
        return False
    raise PatternListError(f"Invalid MATCH value '{value}' (expected all or any)", path, line_number)


def parse_pattern_list(lines: Iterable[str], path: Optional[Path] = None) -> PatternList:
    """
    Parse pattern list lines.

    Args:
        lines: Lines of a pattern list file
        path: Source file, used in error messages

    Returns:
        PatternList with a populated PatternSet

    Raises:
        PatternListError: If a MATCH or WILDCARDS header is invalid
    """
    pattern_set = PatternSet()
    metadata: Dict[str, str] = {}
    in_header = True

    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue

        if is_comment(line):
            if not in_header:
                continue
            m = _METADATA_RE.match(line)
            if not m:
                continue
            key, value = m.group(1).upper(), m.group(2).strip()
            if key == "MATCH":
                pattern_set.match_all = _parse_match(value, path, line_number)
            elif key == "WILDCARDS":
                pattern_set.use_wildcards = _parse_bool(value, key, path, line_number)
            metadata[key] = value
            continue

        in_header = False
        pattern_set.add_pattern(line)

    return PatternList(pattern_set=pattern_set, metadata=metadata, path=path)


def load_pattern_list(path: Union[str, Path]) -> PatternList:
    """
    Load a pattern list file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        PatternListError: If a header is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Pattern list not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        pattern_list = parse_pattern_list(f, path=path)

    ps = pattern_list.pattern_set
    logger.info(
        f"Loaded {len(ps.positive)} positive and {len(ps.negative)} negative patterns "
        f"from {path.name} (wildcards={ps.use_wildcards}, match_all={ps.match_all})"
    )
    return pattern_list


def write_pattern_list(
    path: Union[str, Path],
    pattern_set: PatternSet,
    metadata: Optional[Dict[str, str]] = None,
) -> None:
    """
    Write a PatternSet to a list file, policy flags included.

    Patterns the loader would read back differently raise PatternListError:
    positives starting with "!" or looking like a comment, and any pattern
    with surrounding whitespace.
    """
    path = Path(path)
    header = dict(metadata or {})
    header["MATCH"] = "all" if pattern_set.match_all else "any"
    header["WILDCARDS"] = "true" if pattern_set.use_wildcards else "false"

    for pattern in pattern_set.positive:
        if pattern.startswith(NEGATION_PREFIX) or is_comment(pattern):
            raise PatternListError(f"Positive pattern '{pattern}' cannot be stored in a list file", path)
    for pattern in pattern_set.positive + pattern_set.negative:
        if pattern != pattern.strip():
            raise PatternListError(f"Pattern '{pattern}' has surrounding whitespace", path)

    with open(path, "w", encoding="utf-8") as f:
        for key, value in header.items():
            f.write(f"# {key}: {value}\n")
        f.write("\n")

        for pattern in pattern_set.positive:
            f.write(f"{pattern}\n")
        for pattern in pattern_set.negative:
            f.write(f"{NEGATION_PREFIX}{pattern}\n")

    logger.info(f"Wrote {len(pattern_set)} patterns to {path.name}")
