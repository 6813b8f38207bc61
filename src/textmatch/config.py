from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml
from jsonschema import Draft202012Validator

from .exceptions import ConfigValidationError
from .lists import load_pattern_list
from .pattern_set import PatternSet

__all__ = [
    "LoggingConfig",
    "PatternSetConfig",
    "MatcherConfig",
    "CONFIG_SCHEMA",
    "load_config",
    "parse_config",
]

logger = logging.getLogger(__name__)

_PATTERN_LIST = {"type": "array", "items": {"type": "string"}}

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "logging": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "level": {"enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]},
                "log_dir": {"type": ["string", "null"]},
                "max_mb": {"type": "integer", "minimum": 1},
                "backup_count": {"type": "integer", "minimum": 0},
            },
        },
        "pattern_sets": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "additionalProperties": False,
                "properties": {
                    "use_wildcards": {"type": "boolean"},
                    "match": {"enum": ["all", "any"]},
                    "include": _PATTERN_LIST,
                    "exclude": _PATTERN_LIST,
                    "lists": _PATTERN_LIST,
                },
            },
        },
    },
}


@dataclass(slots=True)
class LoggingConfig:
    """Logging configuration from the config file."""

    level: str = "WARNING"
    log_dir: Optional[Path] = None
    max_mb: int = 10
    backup_count: int = 3


@dataclass(slots=True)
class PatternSetConfig:
    """One named pattern set from the config file."""

    name: str
    use_wildcards: bool = False
    match_all: bool = True
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    lists: List[Path] = field(default_factory=list)

    def build(self) -> PatternSet:
        """
        Build the PatternSet, merging in referenced pattern list files.

        Patterns from list files are appended after the inline patterns;
        the flags of this entry win over list file headers.

        Raises:
            FileNotFoundError: If a referenced list file doesn't exist
        """
        pattern_set = PatternSet(
            self.include,
            self.exclude,
            match_all=self.match_all,
            use_wildcards=self.use_wildcards,
        )
        for list_path in self.lists:
            pattern_set.merge(load_pattern_list(list_path).pattern_set)
        return pattern_set


@dataclass(slots=True)
class MatcherConfig:
    """Top-level configuration resolved from disk."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    pattern_sets: Dict[str, PatternSetConfig] = field(default_factory=dict)

    def pattern_set(self, name: str) -> PatternSet:
        """
        Build one named pattern set.

        Raises:
            KeyError: If no pattern set has that name
        """
        if name not in self.pattern_sets:
            raise KeyError(f"Unknown pattern set: {name}")
        return self.pattern_sets[name].build()

    def build_pattern_sets(self) -> Dict[str, PatternSet]:
        return {name: entry.build() for name, entry in self.pattern_sets.items()}


def _iter_validation_errors(document: Dict[str, Any]) -> Iterable[str]:
    """Yield human-readable error strings for a config document."""
    validator = Draft202012Validator(CONFIG_SCHEMA)
    for error in sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.path]):
        path = "/".join(str(p) for p in error.path)
        pointer = f"{path}: " if path else ""
        yield f"{pointer}{error.message}"


def _resolve_path(value: str, base_dir: Optional[Path]) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path
    return path


def parse_config(document: Optional[Dict[str, Any]], base_dir: Optional[Path] = None) -> MatcherConfig:
    """
    Build a MatcherConfig from an already-loaded document.

    Args:
        document: Parsed YAML mapping (None means defaults)
        base_dir: Directory that relative paths are resolved against

    Raises:
        ConfigValidationError: If the document violates the schema
    """
    document = document or {}
    errors = list(_iter_validation_errors(document))
    if errors:
        raise ConfigValidationError(errors)

    logging_cfg = document.get("logging", {})
    log_dir = logging_cfg.get("log_dir")
    logging_config = LoggingConfig(
        level=logging_cfg.get("level", "WARNING"),
        log_dir=_resolve_path(log_dir, base_dir) if log_dir else None,
        max_mb=logging_cfg.get("max_mb", 10),
        backup_count=logging_cfg.get("backup_count", 3),
    )

    pattern_sets: Dict[str, PatternSetConfig] = {}
    for name, entry in document.get("pattern_sets", {}).items():
        pattern_sets[name] = PatternSetConfig(
            name=name,
            use_wildcards=entry.get("use_wildcards", False),
            match_all=entry.get("match", "all") == "all",
            include=list(entry.get("include", [])),
            exclude=list(entry.get("exclude", [])),
            lists=[_resolve_path(p, base_dir) for p in entry.get("lists", [])],
        )

    return MatcherConfig(logging=logging_config, pattern_sets=pattern_sets)


def load_config(path: Union[str, Path]) -> MatcherConfig:
    """
    Load configuration from a YAML file, providing defaults when it is absent.

    Raises:
        ConfigValidationError: If the file is not valid YAML or does not hold
            a valid mapping
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"Config file {path} not found, using defaults")
        return MatcherConfig()

    try:
        with path.open("r", encoding="utf-8") as handle:
            content = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigValidationError([f"Config file {path} is not valid YAML: {exc}"]) from exc

    if content is not None and not isinstance(content, dict):
        raise ConfigValidationError([f"Config file {path} must contain a mapping at the top level."])

    config = parse_config(content, base_dir=path.parent)
    logger.info(f"Loaded {len(config.pattern_sets)} pattern sets from {path}")
    return config
