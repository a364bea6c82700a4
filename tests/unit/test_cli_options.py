from __future__ import annotations

import argparse

import pytest

from parquetconv.cli.options import (
    add_json_read_args,
    add_parquet_write_args,
    get_json_read_params,
    get_parquet_write_params,
    parse_column_specs,
)
from parquetconv.core.errors import ColumnsFormatError


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser()
    add_json_read_args(parser)
    add_parquet_write_args(parser)
    return parser


def test_parse_column_specs_pairs() -> None:
    assert parse_column_specs(["k1:INTEGER,k2:VARCHAR"]) == {"k1": "INTEGER", "k2": "VARCHAR"}


def test_parse_column_specs_keeps_colons_in_names() -> None:
    assert parse_column_specs(["ns:key:BIGINT"]) == {"ns:key": "BIGINT"}


def test_parse_column_specs_repeated_flags_are_merged() -> None:
    assert parse_column_specs(["a:INTEGER", "b:DOUBLE"]) == {"a": "INTEGER", "b": "DOUBLE"}


def test_parse_column_specs_rejects_token_without_type() -> None:
    with pytest.raises(ColumnsFormatError, match="incorrect columns format: badtoken"):
        parse_column_specs(["badtoken"])


def test_defaults_map_to_default_params() -> None:
    args = _parser().parse_args([])
    read = get_json_read_params(args)
    write = get_parquet_write_params(args)

    assert read.auto_detect is True
    assert read.columns == {}
    assert read.format == "array"
    assert read.sample_size == 20480
    assert read.maximum_object_size == 16777216
    assert write.compression == "snappy"
    assert write.hive_partitioning.enabled is False


def test_flags_map_to_params() -> None:
    args = _parser().parse_args(
        [
            "--disable-autodetect",
            "--columns",
            "k1:INTEGER",
            "--format",
            "newline_delimited",
            "--max-depth",
            "3",
            "--ignore-errors",
            "--union-by-name",
            "--parquet-compression",
            "gzip",
            "--partition-by",
            "year, month",
            "--partition-by",
            "day",
            "--filename-pattern",
            "part_{i}",
            "--overwrite-or-ignore",
        ]
    )
    read = get_json_read_params(args)
    write = get_parquet_write_params(args)

    assert read.auto_detect is False
    assert read.columns == {"k1": "INTEGER"}
    assert read.format == "newline_delimited"
    assert read.maximum_depth == 3
    assert read.ignore_errors is True
    assert read.union_by_name is True
    assert write.compression == "gzip"
    assert write.hive_partitioning.partition_by == ("year", "month", "day")
    assert write.hive_partitioning.filename_pattern == "part_{i}"
    assert write.hive_partitioning.overwrite_or_ignore is True
