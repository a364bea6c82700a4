from __future__ import annotations

import argparse

from parquetconv.core.errors import ColumnsFormatError
from parquetconv.domain.models.read_params import (
    DEFAULT_MAXIMUM_OBJECT_SIZE,
    DEFAULT_SAMPLE_SIZE,
    JSON_COMPRESSIONS,
    JSON_FORMATS,
    JSON_RECORDS,
    JsonReadParams,
)
from parquetconv.domain.models.write_params import (
    DEFAULT_PARQUET_COMPRESSION,
    PARQUET_COMPRESSIONS,
    HivePartitionConfig,
    ParquetWriteParams,
)


def add_source_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--source",
        required=True,
        help="Full path of a json file or a glob matching multiple json files.",
    )


def add_json_read_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("json read options")
    group.add_argument(
        "--disable-autodetect",
        action="store_true",
        help="Disable automatically detecting the names of the keys and data types of the values.",
    )
    group.add_argument(
        "--compression",
        default="auto",
        choices=JSON_COMPRESSIONS,
        help="The compression type of the input files (default: auto).",
    )
    group.add_argument(
        "--columns",
        action="append",
        default=[],
        help='Key names and value types within the json, e.g. "key1:INTEGER,key2:VARCHAR". '
        "May be passed multiple times. Inferred when auto detect is enabled.",
    )
    group.add_argument(
        "--format",
        default="array",
        choices=JSON_FORMATS,
        help="Layout of the json input (default: array).",
    )
    group.add_argument("--dateformat", default="iso", help="Date format used when parsing dates.")
    group.add_argument("--timestampformat", default="iso", help="Date format used when parsing timestamps.")
    group.add_argument(
        "--max-depth",
        type=int,
        default=-1,
        help="Maximum nesting depth to which automatic schema detection detects types (-1: unlimited).",
    )
    group.add_argument(
        "--max-obj-size",
        type=int,
        default=DEFAULT_MAXIMUM_OBJECT_SIZE,
        help="The maximum size of a json object in bytes.",
    )
    group.add_argument(
        "--records",
        default="auto",
        choices=JSON_RECORDS,
        help="Whether the json contains records to unpack into columns (default: auto).",
    )
    group.add_argument(
        "--sample-size",
        type=int,
        default=DEFAULT_SAMPLE_SIZE,
        help="Number of sample objects used for type detection. -1 scans the entire input.",
    )
    group.add_argument(
        "--convert-str-to-int",
        action="store_true",
        help="Convert strings representing integer values to a numerical type.",
    )
    group.add_argument("--filename", action="store_true", help="Add a column with the source filename.")
    group.add_argument(
        "--hive-partitioning",
        action="store_true",
        help="Interpret the source path as a hive partitioned path.",
    )
    group.add_argument(
        "--ignore-errors",
        action="store_true",
        help="Ignore parse errors (only possible when format is newline_delimited).",
    )
    group.add_argument(
        "--union-by-name",
        action="store_true",
        help="Unify the schemas of multiple json files by column name.",
    )


def add_parquet_write_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("parquet write options")
    group.add_argument(
        "--parquet-compression",
        default=DEFAULT_PARQUET_COMPRESSION,
        choices=PARQUET_COMPRESSIONS,
        help=f"Compression codec of the parquet output (default: {DEFAULT_PARQUET_COMPRESSION}).",
    )
    group.add_argument(
        "--per-thread-output",
        action="store_true",
        help="Write one file per thread into the --dest directory.",
    )
    group.add_argument("--row-group-size", type=int, default=None, help="Rows per parquet row group.")
    group.add_argument(
        "--partition-by",
        action="append",
        default=[],
        help="Column(s) to hive partition the output by; comma separated or repeated.",
    )
    group.add_argument(
        "--filename-pattern",
        default=None,
        help="File name pattern of partitioned output, e.g. data_{i}.",
    )
    group.add_argument(
        "--overwrite-or-ignore",
        action="store_true",
        help="Allow writing partitions into a non-empty --dest directory.",
    )


def parse_column_specs(values: list[str]) -> dict[str, str]:
    tokens = [token for value in values for token in value.split(",") if token]
    columns: dict[str, str] = {}
    for token in tokens:
        parts = token.split(":")
        if len(parts) < 2:
            raise ColumnsFormatError(f"incorrect columns format: {','.join(tokens)}")
        columns[":".join(parts[:-1])] = parts[-1]
    return columns


def _split_csv(values: list[str]) -> tuple[str, ...]:
    return tuple(item.strip() for value in values for item in value.split(",") if item.strip())


def get_json_read_params(args: argparse.Namespace) -> JsonReadParams:
    return JsonReadParams(
        auto_detect=not args.disable_autodetect,
        columns=parse_column_specs(args.columns or []),
        compression=args.compression,
        convert_strings_to_integers=args.convert_str_to_int,
        dateformat=args.dateformat,
        filename=args.filename,
        format=args.format,
        hive_partitioning=args.hive_partitioning,
        ignore_errors=args.ignore_errors,
        maximum_depth=args.max_depth,
        maximum_object_size=args.max_obj_size,
        records=args.records,
        sample_size=args.sample_size,
        timestampformat=args.timestampformat,
        union_by_name=args.union_by_name,
    )


def get_parquet_write_params(args: argparse.Namespace) -> ParquetWriteParams:
    return ParquetWriteParams(
        compression=args.parquet_compression,
        per_thread_output=args.per_thread_output,
        row_group_size=args.row_group_size,
        hive_partitioning=HivePartitionConfig(
            partition_by=_split_csv(args.partition_by or []),
            filename_pattern=args.filename_pattern,
            overwrite_or_ignore=args.overwrite_or_ignore,
        ),
    )
