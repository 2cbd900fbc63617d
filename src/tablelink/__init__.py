# tablelink package

from .schema import (
    ColumnType,
    ColumnOptions,
    ColumnRef,
    PrimaryKey,
    Table,
    TableRegistry,
)
from .backends import SchemaBackend, build_backend

# Also expose the error taxonomy
from .common.errors import (
    ErrorCode,
    SchemaError,
    ValidationError,
    ReferenceResolutionError,
    InvalidReferenceFormat,
    UnknownReferencedTable,
    UnknownReferencedColumn,
    ReferenceTypeMismatch,
    UnsupportedColumnType,
    DefaultTypeMismatch,
)

__all__ = [
    "ColumnType",
    "ColumnOptions",
    "ColumnRef",
    "PrimaryKey",
    "Table",
    "TableRegistry",
    "SchemaBackend",
    "build_backend",
    "ErrorCode",
    "SchemaError",
    "ValidationError",
    "ReferenceResolutionError",
    "InvalidReferenceFormat",
    "UnknownReferencedTable",
    "UnknownReferencedColumn",
    "ReferenceTypeMismatch",
    "UnsupportedColumnType",
    "DefaultTypeMismatch",
]
