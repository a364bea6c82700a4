from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol

import duckdb

from parquetconv.core.errors import EngineError, NotStructTypeError, SchemaMismatchError, ValidationError
from parquetconv.core.ids import short_token
from parquetconv.core.sql import quote_identifier
from parquetconv.domain.models.schema import ColumnDesc, TableDesc

logger = logging.getLogger(__name__)

STRUCT_PROBE_COLUMN = "C1"
UNNESTED_ALIAS = "u"


class EngineConnection(Protocol):
    def execute(self, query: str, parameters: object = ...) -> Any: ...


class SchemaService:
    """Schema introspection and struct flattening on top of an engine connection.

    Struct types are re-described by the engine itself: each struct is
    materialized as the single column of a scratch temporary table, and the
    fields reported for ``SELECT C1.*`` are its immediate children.
    """

    def __init__(self, conn: EngineConnection) -> None:
        self.conn = conn

    def get_table_desc(self, relation: str) -> TableDesc:
        """Describe a table name or a SELECT query."""
        sql = f"SELECT column_name, column_type FROM (DESCRIBE {relation})"
        logger.debug("Describing relation: %s", sql)
        try:
            rows = self.conn.execute(sql).fetchall()
        except duckdb.Error as exc:
            raise EngineError(f"Failed describing {relation}: {exc}") from exc
        return TableDesc(columns=[ColumnDesc(name=str(name), type=str(type_)) for name, type_ in rows])

    def flatten_struct_column(self, column: ColumnDesc) -> list[ColumnDesc]:
        if not column.is_struct:
            raise NotStructTypeError(f"Column {column.name} is not a STRUCT: {column.type}")

        with self._struct_probe_table(column) as table_name:
            children = self.get_table_desc(
                f"SELECT {quote_identifier(STRUCT_PROBE_COLUMN)}.* FROM {quote_identifier(table_name)}"
            )

        columns: list[ColumnDesc] = []
        for child in children.columns:
            if child.is_struct:
                for nested in self.flatten_struct_column(child):
                    columns.append(ColumnDesc(name=f"{column.name}_{nested.name}", type=nested.type))
                continue
            columns.append(ColumnDesc(name=f"{column.name}_{child.name}", type=child.type))
        return columns

    def flatten_table_desc(self, table_desc: TableDesc) -> list[ColumnDesc]:
        flattened: list[ColumnDesc] = []
        for column in table_desc.columns:
            if not column.is_struct:
                flattened.append(column)
                continue
            try:
                flattened.extend(self.flatten_struct_column(column))
            except EngineError as exc:
                raise EngineError(f"Failed flattening column {column.name}: {exc}") from exc

        # Engine identifiers are case-insensitive.
        seen: set[str] = set()
        for column in flattened:
            key = column.name.lower()
            if key in seen:
                raise ValidationError(f"Flattened column name {column.name} is not unique")
            seen.add(key)
        return flattened

    def flattened_table_select(self, table: str) -> str:
        """Build a SELECT that exposes every leaf field of ``table`` as a top-level column."""
        table_identifier = quote_identifier(table)
        table_desc = self.get_table_desc(table_identifier)
        flattened = self.flatten_table_desc(table_desc)

        unnested_select = f"SELECT {table_desc.unnested_columns()} FROM {table_identifier}"
        unnested_desc = self.get_table_desc(unnested_select)

        if len(unnested_desc) != len(flattened):
            raise SchemaMismatchError(
                "Unnested table columns and flattened columns not matching. "
                f"unnested: {unnested_desc.column_names}, flattened: {[c.name for c in flattened]}"
            )

        # Unnested names can repeat across structs, so columns are addressed by position.
        positional = [f"col_{index}" for index in range(1, len(flattened) + 1)]
        projection = ", ".join(
            f"{UNNESTED_ALIAS}.{quote_identifier(position)} AS {quote_identifier(column.name)}"
            for position, column in zip(positional, flattened)
        )
        aliases = ", ".join(quote_identifier(position) for position in positional)
        return f"SELECT {projection} FROM ({unnested_select}) AS {UNNESTED_ALIAS}({aliases})"

    @contextmanager
    def _struct_probe_table(self, column: ColumnDesc) -> Iterator[str]:
        table_name = self._create_struct_table(column)
        try:
            yield table_name
        finally:
            self._drop_table(table_name)

    def _create_struct_table(self, column: ColumnDesc) -> str:
        # Unique per process and microsecond; the random token covers same-name columns.
        table_name = f"{column.name}_tmp_{time.time_ns() // 1000}_{short_token()}"
        sql = (
            f"CREATE TEMPORARY TABLE {quote_identifier(table_name)} "
            f"({quote_identifier(STRUCT_PROBE_COLUMN)} {column.type})"
        )
        logger.debug("Creating struct probe table: %s", sql)
        try:
            self.conn.execute(sql)
        except duckdb.Error as exc:
            raise EngineError(f"Failed creating probe table for column {column.name}: {exc}") from exc
        return table_name

    def _drop_table(self, table_name: str) -> None:
        try:
            self.conn.execute(f"DROP TABLE IF EXISTS {quote_identifier(table_name)}")
        except duckdb.Error as exc:
            raise EngineError(f"Failed dropping table {table_name}: {exc}") from exc
