from __future__ import annotations

import gzip
import json
from pathlib import Path

import duckdb
import pytest

from parquetconv.application.services.conversion_service import ConversionService
from parquetconv.core.errors import EngineError
from parquetconv.domain.models.read_params import JSON_COMPRESSIONS, JsonReadParams

ROWS = [{"id": 1, "name": "ada"}, {"id": 2, "name": "bob"}]


@pytest.fixture()
def conn() -> duckdb.DuckDBPyConnection:
    connection = duckdb.connect()
    yield connection
    connection.close()


def test_default_read_params_render_every_option_except_columns() -> None:
    sql = JsonReadParams().to_sql("/data/in.json")
    assert sql == (
        "read_json('/data/in.json', auto_detect = true, compression = 'auto_detect', "
        "convert_strings_to_integers = false, dateformat = 'iso', filename = false, "
        "format = 'array', hive_partitioning = false, ignore_errors = false, "
        "maximum_depth = -1, maximum_object_size = 16777216, records = 'auto', "
        "sample_size = 20480, timestampformat = 'iso', union_by_name = false)"
    )


def test_cli_compression_names_map_to_engine_names() -> None:
    assert JsonReadParams(compression="auto").engine_compression == "auto_detect"
    assert JsonReadParams(compression="none").engine_compression == "uncompressed"
    assert JsonReadParams(compression="gzip").engine_compression == "gzip"
    assert JsonReadParams(compression="zstd").engine_compression == "zstd"


def test_default_read_params_are_accepted_by_engine(tmp_path: Path, conn: duckdb.DuckDBPyConnection) -> None:
    source = tmp_path / "rows.json"
    source.write_text(json.dumps(ROWS), encoding="utf-8")

    rows = conn.execute(f"DESCRIBE SELECT * FROM {JsonReadParams().to_sql(str(source))}").fetchall()

    assert [(row[0], row[1]) for row in rows] == [("id", "BIGINT"), ("name", "VARCHAR")]


@pytest.mark.parametrize("compression", ["auto", "none"])
def test_plain_compressions_read_uncompressed_file(
    compression: str, tmp_path: Path, conn: duckdb.DuckDBPyConnection
) -> None:
    source = tmp_path / "rows.json"
    source.write_text(json.dumps(ROWS), encoding="utf-8")

    columns = ConversionService(conn).describe_source(str(source), JsonReadParams(compression=compression))

    assert [c.name for c in columns] == ["id", "name"]


def test_gzip_compression_reads_gzip_file(tmp_path: Path, conn: duckdb.DuckDBPyConnection) -> None:
    source = tmp_path / "rows.json.gz"
    with gzip.open(source, "wt", encoding="utf-8") as handle:
        handle.write(json.dumps(ROWS))

    columns = ConversionService(conn).describe_source(str(source), JsonReadParams(compression="gzip"))

    assert [c.name for c in columns] == ["id", "name"]


@pytest.mark.parametrize("compression", JSON_COMPRESSIONS)
def test_every_compression_choice_is_a_known_engine_value(
    compression: str, tmp_path: Path, conn: duckdb.DuckDBPyConnection
) -> None:
    source = tmp_path / "rows.json"
    source.write_text(json.dumps(ROWS), encoding="utf-8")

    # A codec that does not match the file may fail while decoding, never while parsing the option.
    try:
        ConversionService(conn).describe_source(str(source), JsonReadParams(compression=compression))
    except EngineError as exc:
        message = str(exc)
        assert "unrecognized value" not in message
        assert "FileCompressionType" not in message
        assert compression in {"gzip", "zstd"}


def test_columns_render_as_struct_literal_in_insertion_order() -> None:
    params = JsonReadParams(auto_detect=False, columns={"k1": "INTEGER", "k2": "VARCHAR"})
    sql = params.to_sql("in.json")
    assert "auto_detect = false, columns = {'k1': 'INTEGER', 'k2': 'VARCHAR'}, compression" in sql


def test_source_and_formats_are_quoted_as_literals() -> None:
    params = JsonReadParams(dateformat="%d/%m/%Y", format="newline_delimited")
    sql = params.to_sql("/tmp/o'brien/*.json")
    assert sql.startswith("read_json('/tmp/o''brien/*.json', ")
    assert "dateformat = '%d/%m/%Y'" in sql
    assert "format = 'newline_delimited'" in sql
