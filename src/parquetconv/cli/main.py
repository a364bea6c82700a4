from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from parquetconv.cli.commands import describe_cmd, json2parquet_cmd
from parquetconv.cli.context import CLIContext
from parquetconv.core.config import load_settings
from parquetconv.core.errors import ConverterError
from parquetconv.core.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pqconv",
        description="Convert json files to apache parquet files with DuckDB",
    )
    parser.add_argument(
        "--database",
        type=Path,
        default=None,
        help="DuckDB database file to run in (default: $PQCONV_DATABASE or in-memory)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)

    subparsers = parser.add_subparsers(dest="command", required=True)
    json2parquet_cmd.register(subparsers)
    describe_cmd.register(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    settings = load_settings(args.database)
    ctx = CLIContext(settings=settings, console=console)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 2

    try:
        return handler(args, ctx)
    except ConverterError as exc:
        logger.error(str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
