from __future__ import annotations

import argparse

from rich.panel import Panel

from parquetconv.application.services.conversion_service import ConversionService
from parquetconv.cli.context import CLIContext
from parquetconv.cli.options import (
    add_json_read_args,
    add_parquet_write_args,
    add_source_arg,
    get_json_read_params,
    get_parquet_write_params,
)
from parquetconv.infrastructure.engine.connection import get_connection


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("json2parquet", help="Convert json files to apache parquet files")
    add_source_arg(parser)
    parser.add_argument(
        "--dest",
        required=True,
        help="Output parquet file, or the directory receiving hive partitioned parquet files.",
    )
    parser.add_argument(
        "--flatten",
        action="store_true",
        help="Promote every nested struct field to a top-level column named parent_child.",
    )
    add_json_read_args(parser)
    add_parquet_write_args(parser)
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    read_params = get_json_read_params(args)
    write_params = get_parquet_write_params(args)

    with get_connection(ctx.settings) as conn:
        result = ConversionService(conn).json_to_parquet(
            args.source,
            args.dest,
            read_params=read_params,
            write_params=write_params,
            flatten=bool(args.flatten),
        )

    lines = [
        f"Source: {result.source}",
        f"Destination: {result.dest}",
        f"Rows written: {result.rows_written}",
        f"Columns: {len(result.columns)}",
        f"Flattened: {result.flattened}",
        f"Compression: {write_params.compression}",
    ]
    if write_params.hive_partitioning.enabled:
        lines.append(f"Partitioned by: {', '.join(write_params.hive_partitioning.partition_by)}")
    ctx.console.print(Panel.fit("\n".join(lines), title="JSON to Parquet"))
    return 0
