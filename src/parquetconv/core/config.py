from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_MEMORY_LIMIT = "1GB"
IN_MEMORY_DATABASE = ":memory:"


@dataclass(frozen=True)
class EngineSettings:
    database: str
    memory_limit: str
    threads: int | None
    temp_directory: Path | None

    @property
    def is_in_memory(self) -> bool:
        return self.database == IN_MEMORY_DATABASE


def _read_int_env(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def normalize_memory_setting(value: str | None, default: str) -> str:
    """Return a DuckDB-friendly memory setting (plain numbers are read as MB)."""
    if not value:
        return default

    value = value.strip()
    lowered = value.lower()
    if lowered.endswith(("kb", "mb", "gb", "tb")) and lowered[:-2].strip().isdigit():
        return value.upper()
    if lowered.isdigit():
        return f"{value}MB"
    return default


def load_settings(database: Path | str | None = None) -> EngineSettings:
    raw_database = str(database) if database else os.getenv("PQCONV_DATABASE")
    if raw_database and raw_database != IN_MEMORY_DATABASE:
        resolved_database = str(Path(raw_database).expanduser().resolve())
    else:
        resolved_database = IN_MEMORY_DATABASE

    temp_raw = os.getenv("PQCONV_TEMP_DIRECTORY")
    return EngineSettings(
        database=resolved_database,
        memory_limit=normalize_memory_setting(os.getenv("PQCONV_MEMORY_LIMIT"), DEFAULT_MEMORY_LIMIT),
        threads=_read_int_env("PQCONV_THREADS"),
        temp_directory=Path(temp_raw).expanduser() if temp_raw else None,
    )
