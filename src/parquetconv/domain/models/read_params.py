from __future__ import annotations

from dataclasses import dataclass, field

from parquetconv.core.sql import quote_literal, render_bool

JSON_COMPRESSIONS = ("auto", "none", "gzip", "zstd")
# CLI spellings that differ from the engine's FileCompressionType names.
ENGINE_COMPRESSIONS = {"auto": "auto_detect", "none": "uncompressed"}
JSON_FORMATS = ("auto", "unstructured", "newline_delimited", "array")
JSON_RECORDS = ("auto", "true", "false")

DEFAULT_MAXIMUM_OBJECT_SIZE = 16_777_216
DEFAULT_SAMPLE_SIZE = 20_480


@dataclass(frozen=True, slots=True)
class JsonReadParams:
    """Named parameters of the engine's ``read_json`` table function."""

    auto_detect: bool = True
    columns: dict[str, str] = field(default_factory=dict)
    compression: str = "auto"
    convert_strings_to_integers: bool = False
    dateformat: str = "iso"
    filename: bool = False
    format: str = "array"
    hive_partitioning: bool = False
    ignore_errors: bool = False
    maximum_depth: int = -1
    maximum_object_size: int = DEFAULT_MAXIMUM_OBJECT_SIZE
    records: str = "auto"
    sample_size: int = DEFAULT_SAMPLE_SIZE
    timestampformat: str = "iso"
    union_by_name: bool = False

    @property
    def engine_compression(self) -> str:
        return ENGINE_COMPRESSIONS.get(self.compression, self.compression)

    def options(self) -> list[str]:
        out = [f"auto_detect = {render_bool(self.auto_detect)}"]
        if self.columns:
            out.append(f"columns = {_struct_literal(self.columns)}")
        out.extend(
            [
                f"compression = {quote_literal(self.engine_compression)}",
                f"convert_strings_to_integers = {render_bool(self.convert_strings_to_integers)}",
                f"dateformat = {quote_literal(self.dateformat)}",
                f"filename = {render_bool(self.filename)}",
                f"format = {quote_literal(self.format)}",
                f"hive_partitioning = {render_bool(self.hive_partitioning)}",
                f"ignore_errors = {render_bool(self.ignore_errors)}",
                f"maximum_depth = {int(self.maximum_depth)}",
                f"maximum_object_size = {int(self.maximum_object_size)}",
                f"records = {quote_literal(self.records)}",
                f"sample_size = {int(self.sample_size)}",
                f"timestampformat = {quote_literal(self.timestampformat)}",
                f"union_by_name = {render_bool(self.union_by_name)}",
            ]
        )
        return out

    def to_sql(self, source: str) -> str:
        return f"read_json({', '.join([quote_literal(source), *self.options()])})"


def _struct_literal(columns: dict[str, str]) -> str:
    pairs = ", ".join(f"{quote_literal(name)}: {quote_literal(type_)}" for name, type_ in columns.items())
    return "{" + pairs + "}"
