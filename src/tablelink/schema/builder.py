from __future__ import annotations

from typing import TYPE_CHECKING, Any

from tablelink.backends.protocols import BuilderHandle, ColumnFactory
from tablelink.common.errors import DefaultTypeMismatch
from tablelink.common.logger import get_logger
from .directives import ColumnDirective
from .models import declared_primary
from .types import (
    COLUMN_FACTORIES,
    NUMERIC_TYPES,
    TEMPORAL_TYPES,
    TEXT_TYPES,
    ColumnType,
    parse_column_type,
)

if TYPE_CHECKING:
    from .table import Table

logger = get_logger(__name__)

NOW = "now"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _python_type_name(value: Any) -> str:
    if _is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def _check_default(table: "Table", column_type: ColumnType, name: str, value: Any) -> None:
    """Checks a default value against numeric and textual column types.

    Raises:
        DefaultTypeMismatch: If the value's type does not fit the column.
    """
    if column_type in NUMERIC_TYPES:
        ok = _is_number(value)
    elif column_type in TEXT_TYPES:
        ok = isinstance(value, str)
    else:
        return

    if not ok:
        raise DefaultTypeMismatch(
            f'Bad default! "{name}" type is "{column_type.value}", not "{_python_type_name(value)}".',
            table=table.name,
            column=name,
        )


def build_column(table: "Table", factory: ColumnFactory, name: str, directive: ColumnDirective) -> BuilderHandle:
    """Translates one column directive into backend builder calls.

    The column constructor is picked from `COLUMN_FACTORIES`, then options are
    applied in a fixed order: primary, unsigned, unique, references, default,
    nullability. Each step re-binds the handle returned by the backend.

    Args:
        table: The table owning the column.
        factory: The backend's column factory.
        name: The column name.
        directive: The parsed column directive.

    Returns:
        BuilderHandle: The final handle for the column.

    Raises:
        UnsupportedColumnType: If the type is unknown, before any option is applied.
        DefaultTypeMismatch: If `defaultTo` does not fit a numeric or string column.
    """
    column_type = parse_column_type(directive.type, table=table.name, column=name)
    options = directive.options

    handle = getattr(factory, COLUMN_FACTORIES[column_type])(name)
    primary = declared_primary(name, column_type.value, options.primary)
    if primary is not None:
        table.primary = primary

    if options.primary:
        handle = handle.primary()

    if options.unsigned:
        handle = handle.unsigned()

    if options.unique:
        handle = handle.unique()

    if isinstance(options.references, str):
        handle = handle.references(table.registry.prefix + options.references)

    if options.has_default:
        value = options.default_to
        if value == NOW and column_type in TEMPORAL_TYPES:
            handle = handle.default_to(factory.now())
        else:
            _check_default(table, column_type, name, value)
            handle = handle.default_to(value)

    if options.not_null:
        handle = handle.not_nullable()
    elif column_type is not ColumnType.INCREMENT and not options.primary:
        handle = handle.nullable()

    logger.debug(f"Built column {table.name}.{name} ({column_type.value})")
    return handle
