from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

import duckdb

from parquetconv.application.services.schema_service import EngineConnection, SchemaService
from parquetconv.core.errors import EngineError
from parquetconv.core.files import ensure_parent_directory
from parquetconv.core.ids import short_token
from parquetconv.core.sql import quote_identifier, quote_literal
from parquetconv.domain.models.read_params import JsonReadParams
from parquetconv.domain.models.schema import ColumnDesc
from parquetconv.domain.models.write_params import ParquetWriteParams

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ConversionResult:
    source: str
    dest: str
    flattened: bool
    rows_written: int
    columns: list[ColumnDesc] = field(default_factory=list)


class ConversionService:
    def __init__(self, conn: EngineConnection, schema_service: SchemaService | None = None) -> None:
        self.conn = conn
        self.schema_service = schema_service or SchemaService(conn)

    def json_to_parquet(
        self,
        source: str,
        dest: str | Path,
        *,
        read_params: JsonReadParams | None = None,
        write_params: ParquetWriteParams | None = None,
        flatten: bool = False,
    ) -> ConversionResult:
        read_params = read_params or JsonReadParams()
        write_params = write_params or ParquetWriteParams()
        dest_path = Path(dest).expanduser()
        if not write_params.hive_partitioning.enabled:
            ensure_parent_directory(dest_path)

        read_sql = f"SELECT * FROM {read_params.to_sql(source)}"
        if not flatten:
            columns = self.schema_service.get_table_desc(read_sql).columns
            rows = self._copy_to_parquet(read_sql, dest_path, write_params)
        else:
            with self._imported_json_table(read_sql) as table_name:
                select_sql = self.schema_service.flattened_table_select(table_name)
                columns = self.schema_service.get_table_desc(select_sql).columns
                rows = self._copy_to_parquet(select_sql, dest_path, write_params)

        logger.info("Converted %s to %s (%d rows, %d columns)", source, dest_path, rows, len(columns))
        return ConversionResult(
            source=source,
            dest=str(dest_path),
            flattened=flatten,
            rows_written=rows,
            columns=columns,
        )

    def describe_source(
        self,
        source: str,
        read_params: JsonReadParams | None = None,
        *,
        flatten: bool = False,
    ) -> list[ColumnDesc]:
        read_params = read_params or JsonReadParams()
        table_desc = self.schema_service.get_table_desc(f"SELECT * FROM {read_params.to_sql(source)}")
        if not flatten:
            return table_desc.columns
        return self.schema_service.flatten_table_desc(table_desc)

    def _copy_to_parquet(self, select_sql: str, dest: Path, write_params: ParquetWriteParams) -> int:
        sql = f"COPY ({select_sql}) TO {quote_literal(str(dest))} {write_params.to_sql()}"
        logger.debug("Writing parquet: %s", sql)
        try:
            row = self.conn.execute(sql).fetchone()
        except duckdb.Error as exc:
            raise EngineError(f"Failed writing parquet to {dest}: {exc}") from exc
        return int(row[0]) if row else 0

    @contextmanager
    def _imported_json_table(self, read_sql: str) -> Iterator[str]:
        table_name = f"json_import_{short_token()}"
        identifier = quote_identifier(table_name)
        logger.debug("Importing json into %s", table_name)
        try:
            self.conn.execute(f"CREATE TEMPORARY TABLE {identifier} AS {read_sql}")
        except duckdb.Error as exc:
            raise EngineError(f"Failed importing json source: {exc}") from exc
        try:
            yield table_name
        finally:
            try:
                self.conn.execute(f"DROP TABLE IF EXISTS {identifier}")
            except duckdb.Error as exc:
                raise EngineError(f"Failed dropping table {table_name}: {exc}") from exc
