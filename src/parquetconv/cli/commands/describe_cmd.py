from __future__ import annotations

import argparse

from rich.table import Table

from parquetconv.application.services.conversion_service import ConversionService
from parquetconv.cli.context import CLIContext
from parquetconv.cli.options import add_json_read_args, add_source_arg, get_json_read_params
from parquetconv.infrastructure.engine.connection import get_connection


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("describe", help="Show the columns detected in json files")
    add_source_arg(parser)
    parser.add_argument(
        "--flatten",
        action="store_true",
        help="Show the columns produced by flattening nested structs.",
    )
    add_json_read_args(parser)
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    read_params = get_json_read_params(args)

    with get_connection(ctx.settings) as conn:
        columns = ConversionService(conn).describe_source(args.source, read_params, flatten=bool(args.flatten))

    title = "Flattened Columns" if args.flatten else "Columns"
    table = Table(title=f"{title} ({len(columns)})")
    table.add_column("#", justify="right")
    table.add_column("Name", overflow="fold")
    table.add_column("Type", overflow="fold")
    for index, column in enumerate(columns, start=1):
        table.add_row(str(index), column.name, column.type)
    ctx.console.print(table)
    return 0
