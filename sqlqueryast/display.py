"""Helpers that render sequences of SQL nodes as text."""

from __future__ import annotations

from collections.abc import Iterable


def separated(items: Iterable[object], sep: str) -> str:
    """Render every item with ``str`` and join the results with ``sep``."""
    return sep.join(map(str, items))


def comma_separated(items: Iterable[object]) -> str:
    """Render items as a comma separated list: ``a, b, c``."""
    return separated(items, ", ")


def compound_identifier(parts: Iterable[object]) -> str:
    """Render identifier parts as a dotted name: ``schema.table``."""
    return separated(parts, ".")