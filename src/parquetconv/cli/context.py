from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console

from parquetconv.core.config import EngineSettings


@dataclass(slots=True)
class CLIContext:
    settings: EngineSettings
    console: Console
