from __future__ import annotations


def quote_identifier(identifier: str) -> str:
    """DuckDB identifier escape (double quote wrapping)."""
    return '"' + identifier.replace('"', '""') + '"'


def quote_literal(value: str) -> str:
    """DuckDB string literal escape (single quote wrapping)."""
    return "'" + value.replace("'", "''") + "'"


def render_bool(value: bool) -> str:
    return "true" if value else "false"
