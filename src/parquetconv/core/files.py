from __future__ import annotations

from pathlib import Path


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def ensure_parent_directory(path: Path) -> None:
    ensure_directory(path.expanduser().resolve().parent)
