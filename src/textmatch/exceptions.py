"""
Exceptions raised by textmatch.

The matching core never raises for malformed input; these errors belong to
the boundaries (pattern dispatch, list files, configuration).
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional


class TextMatchError(Exception):
    """Base exception for textmatch errors."""
    pass


class InvalidPatternSyntax(TextMatchError):
    """Raised when a regular-expression pattern cannot be compiled."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern '{pattern}': {reason}")


class PatternListError(TextMatchError):
    """Raised when a pattern list file has a malformed header."""

    def __init__(self, message: str, path: Optional[Path] = None, line_number: Optional[int] = None):
        self.path = path
        self.line_number = line_number
        location = ""
        if path is not None:
            location = f"{path}"
            if line_number is not None:
                location += f":{line_number}"
            location += ": "
        super().__init__(f"{location}{message}")


class ConfigValidationError(TextMatchError):
    """Raised when a configuration document fails schema validation."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(str(self))

    def __str__(self) -> str:
        return " | ".join(self.errors)
