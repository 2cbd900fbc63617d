from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Standardized error codes for schema definition and building."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_REFERENCE_FORMAT = "INVALID_REFERENCE_FORMAT"
    UNKNOWN_REFERENCED_TABLE = "UNKNOWN_REFERENCED_TABLE"
    UNKNOWN_REFERENCED_COLUMN = "UNKNOWN_REFERENCED_COLUMN"
    REFERENCE_TYPE_MISMATCH = "REFERENCE_TYPE_MISMATCH"
    UNSUPPORTED_COLUMN_TYPE = "UNSUPPORTED_COLUMN_TYPE"
    DEFAULT_TYPE_MISMATCH = "DEFAULT_TYPE_MISMATCH"


class SchemaError(Exception):
    """Base class for every definition-time or build-time schema failure.

    These errors are never retryable: they describe a programming or
    configuration mistake in the declared schema.

    Attributes:
        error_code (ErrorCode): The standardized error code.
        table (Optional[str]): Prefixed name of the table involved, if known.
        column (Optional[str]): Name of the column involved, if known.
    """
    error_code: ErrorCode = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str, table: Optional[str] = None, column: Optional[str] = None):
        self.table = table
        self.column = column
        if table:
            message = f"[Table {table}] {message}"
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        return False


class ValidationError(SchemaError):
    """Malformed table constructor input."""
    error_code = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str, field: str, table: Optional[str] = None):
        self.field = field
        super().__init__(message, table=table)


class ReferenceResolutionError(SchemaError):
    """A column's `references` directive could not be resolved."""

    def __init__(self, message: str, table: str, column: str, reference: str):
        self.reference = reference
        super().__init__(message, table=table, column=column)


class InvalidReferenceFormat(ReferenceResolutionError):
    error_code = ErrorCode.INVALID_REFERENCE_FORMAT


class UnknownReferencedTable(ReferenceResolutionError):
    error_code = ErrorCode.UNKNOWN_REFERENCED_TABLE


class UnknownReferencedColumn(ReferenceResolutionError):
    error_code = ErrorCode.UNKNOWN_REFERENCED_COLUMN


class ReferenceTypeMismatch(ReferenceResolutionError):
    error_code = ErrorCode.REFERENCE_TYPE_MISMATCH

    def __init__(self, message: str, table: str, column: str, reference: str,
                 expected_type: str, actual_type: str):
        self.expected_type = expected_type
        self.actual_type = actual_type
        super().__init__(message, table=table, column=column, reference=reference)


class UnsupportedColumnType(SchemaError):
    """The declared column type is not one the builder knows."""
    error_code = ErrorCode.UNSUPPORTED_COLUMN_TYPE

    def __init__(self, message: str, column_type: str, table: Optional[str] = None,
                 column: Optional[str] = None):
        self.column_type = column_type
        super().__init__(message, table=table, column=column)


class DefaultTypeMismatch(SchemaError):
    """The declared column type and the default value's type disagree."""
    error_code = ErrorCode.DEFAULT_TYPE_MISMATCH
