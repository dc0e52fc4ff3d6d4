"""Immutable SQL query syntax-tree nodes that render to SQL text."""

__version__ = "0.1.0"
__all__ = ["clauses", "display", "query", "select", "tables"]