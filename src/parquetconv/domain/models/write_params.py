from __future__ import annotations

from dataclasses import dataclass, field

from parquetconv.core.sql import quote_identifier, quote_literal, render_bool

PARQUET_COMPRESSIONS = ("uncompressed", "snappy", "gzip", "zstd", "lz4", "brotli")
DEFAULT_PARQUET_COMPRESSION = "snappy"


@dataclass(frozen=True, slots=True)
class HivePartitionConfig:
    partition_by: tuple[str, ...] = ()
    filename_pattern: str | None = None
    overwrite_or_ignore: bool = False

    @property
    def enabled(self) -> bool:
        return bool(self.partition_by)

    def options(self) -> list[str]:
        if not self.enabled:
            return []
        columns = ", ".join(quote_identifier(name) for name in self.partition_by)
        out = [f"PARTITION_BY ({columns})"]
        if self.filename_pattern:
            out.append(f"FILENAME_PATTERN {quote_literal(self.filename_pattern)}")
        out.append(f"OVERWRITE_OR_IGNORE {render_bool(self.overwrite_or_ignore)}")
        return out


@dataclass(frozen=True, slots=True)
class ParquetWriteParams:
    """Options of the ``COPY ... TO`` statement that writes Parquet output."""

    compression: str = DEFAULT_PARQUET_COMPRESSION
    per_thread_output: bool = False
    row_group_size: int | None = None
    hive_partitioning: HivePartitionConfig = field(default_factory=HivePartitionConfig)

    def to_sql(self) -> str:
        options = [
            "FORMAT PARQUET",
            f"COMPRESSION {quote_literal(str(self.compression))}",
            f"PER_THREAD_OUTPUT {render_bool(self.per_thread_output)}",
        ]
        if self.row_group_size is not None:
            options.append(f"ROW_GROUP_SIZE {int(self.row_group_size)}")
        options.extend(self.hive_partitioning.options())
        return "(" + ", ".join(options) + ")"
