"""Declarative table definitions and reference resolution."""

from .types import ColumnType, COLUMN_FACTORIES, is_reference_compatible
from .directives import ColumnDirective, ColumnOptions, parse_directive
from .models import ColumnRef, PrimaryKey
from .resolver import resolve_column
from .builder import build_column
from .table import Table, TableOptions
from .registry import TableRegistry

__all__ = [
    "ColumnType",
    "COLUMN_FACTORIES",
    "is_reference_compatible",
    "ColumnDirective",
    "ColumnOptions",
    "parse_directive",
    "ColumnRef",
    "PrimaryKey",
    "resolve_column",
    "build_column",
    "Table",
    "TableOptions",
    "TableRegistry",
]
