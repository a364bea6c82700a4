from __future__ import annotations

import logging
from pathlib import Path

import duckdb

from parquetconv.core.config import EngineSettings
from parquetconv.core.errors import EngineError
from parquetconv.core.files import ensure_directory, ensure_parent_directory
from parquetconv.core.sql import quote_literal

logger = logging.getLogger(__name__)


def _configure_connection(conn: duckdb.DuckDBPyConnection, settings: EngineSettings) -> None:
    conn.execute(f"SET memory_limit = {quote_literal(settings.memory_limit)}")
    if settings.threads is not None:
        conn.execute(f"SET threads = {int(settings.threads)}")
    if settings.temp_directory is not None:
        ensure_directory(settings.temp_directory)
        conn.execute(f"SET temp_directory = {quote_literal(str(settings.temp_directory))}")
    conn.execute("SET enable_progress_bar = false")


def get_connection(settings: EngineSettings) -> duckdb.DuckDBPyConnection:
    if not settings.is_in_memory:
        ensure_parent_directory(Path(settings.database))
    try:
        conn = duckdb.connect(settings.database)
    except duckdb.Error as exc:
        raise EngineError(f"Failed opening DuckDB database {settings.database}: {exc}") from exc

    try:
        _configure_connection(conn, settings)
    except duckdb.Error as exc:
        conn.close()
        raise EngineError(f"Failed applying DuckDB settings: {exc}") from exc

    logger.debug(
        "DuckDB connection ready (database=%s, memory_limit=%s, threads=%s)",
        settings.database,
        settings.memory_limit,
        settings.threads or "default",
    )
    return conn
