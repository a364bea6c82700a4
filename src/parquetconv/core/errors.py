class ConverterError(Exception):
    """Base error for all user-facing parquetconv exceptions."""


class ConfigurationError(ConverterError):
    """Raised when configuration is invalid or incomplete."""


class ValidationError(ConverterError):
    """Raised when user input or model invariants fail."""


class ColumnsFormatError(ValidationError):
    """Raised when a --columns value is not a list of name:type pairs."""


class NotStructTypeError(ValidationError):
    """Raised when flattening is requested for a column that is not a STRUCT."""


class EngineError(ConverterError):
    """Raised when the embedded engine rejects or fails a statement."""


class SchemaMismatchError(EngineError):
    """Raised when the unnested and flattened schemas of a table disagree."""
