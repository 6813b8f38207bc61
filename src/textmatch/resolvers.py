"""Ready-made pattern resolvers for PatternSet.matches()."""
from __future__ import annotations

from string import Template
from typing import Mapping

from .pattern_set import PatternResolver

__all__ = ["template_resolver", "chain_resolvers"]


def template_resolver(variables: Mapping[str, object]) -> PatternResolver:
    """
    Build a resolver substituting ``$name`` and ``${name}`` placeholders.

    Unknown placeholders are left as they are.

    Example:
        resolve = template_resolver({"user": "alice"})
        resolve("/home/${user}/*")  → "/home/alice/*"
    """
    values = {key: str(value) for key, value in variables.items()}

    def resolve(pattern: str) -> str:
        return Template(pattern).safe_substitute(values)

    return resolve


def chain_resolvers(*resolvers: PatternResolver) -> PatternResolver:
    """Compose resolvers, applying them left to right."""

    def resolve(pattern: str) -> str:
        for resolver in resolvers:
            pattern = resolver(pattern)
        return pattern

    return resolve
