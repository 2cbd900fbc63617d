from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from tablelink.common.errors import (
    InvalidReferenceFormat,
    ReferenceTypeMismatch,
    UnknownReferencedColumn,
    UnknownReferencedTable,
)
from tablelink.common.logger import get_logger
from .directives import ColumnOptions
from .models import ColumnRef
from .types import display_type, is_reference_compatible, is_temporal

if TYPE_CHECKING:
    from .table import Table

logger = get_logger(__name__)


def split_reference(table: "Table", name: str, reference: str) -> Tuple[str, str]:
    """Splits a `"base.column"` reference into its two segments.

    Raises:
        InvalidReferenceFormat: Unless there are exactly two non-empty segments.
    """
    segments = reference.split(".")
    if len(segments) != 2 or not all(segments):
        raise InvalidReferenceFormat(
            f'Bad reference for "{name}"! "{reference}" is not valid input.',
            table=table.name,
            column=name,
            reference=reference,
        )
    return segments[0], segments[1]


def resolve_column(table: "Table", column_type: str, name: str, options: ColumnOptions) -> None:
    """Runs the backend-independent part of a column definition.

    Resolves `options.references` against the table's registry and records the
    relation on both sides, then tracks the table's `updateDate` column.

    Args:
        table: The table owning the column.
        column_type: The column's declared type.
        name: The column name.
        options: The column's options.

    Raises:
        InvalidReferenceFormat: If the reference is not `"base.column"`.
        UnknownReferencedTable: If the referenced table is not registered.
        UnknownReferencedColumn: If the referenced table has no such column.
        ReferenceTypeMismatch: If the two column types are incompatible.
    """
    if isinstance(options.references, str):
        base, ref_column = split_reference(table, name, options.references)

        ref_table_name = table.registry.prefix + base
        ref_table = table.registry.tables.get(ref_table_name)
        if ref_table is None:
            logger.warning(f"Unresolved reference {table.name}.{name} -> {options.references}")
            raise UnknownReferencedTable(
                f'Bad reference for "{name}"! "{ref_table_name}" doesn\'t exist.',
                table=table.name,
                column=name,
                reference=options.references,
            )

        if ref_column not in ref_table.columns:
            logger.warning(f"Unresolved reference {table.name}.{name} -> {options.references}")
            raise UnknownReferencedColumn(
                f'Bad reference for "{name}"! "{ref_table_name}.{ref_column}" doesn\'t exist.',
                table=table.name,
                column=name,
                reference=options.references,
            )

        ref_type = ref_table.column_type(ref_column)
        if not is_reference_compatible(ref_type, column_type):
            raise ReferenceTypeMismatch(
                f'Bad reference for "{name}"! "{ref_table_name}.{ref_column}" is type '
                f'"{display_type(ref_type)}", not "{column_type}".',
                table=table.name,
                column=name,
                reference=options.references,
                expected_type=display_type(ref_type),
                actual_type=column_type,
            )

        ref_table.referenced.setdefault(ref_column, []).append(ColumnRef(table, name))
        table.references.setdefault(name, []).append(ColumnRef(ref_table, ref_column))
        logger.debug(f"Linked {table.name}.{name} -> {ref_table_name}.{ref_column}")

    if options.update_date and is_temporal(column_type):
        table.last_modified = name
