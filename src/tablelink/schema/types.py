"""Abstract column types and their backend operation table."""
from enum import Enum
from typing import Dict, FrozenSet, Optional

from tablelink.common.errors import UnsupportedColumnType


class ColumnType(str, Enum):
    INCREMENT = "increment"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    JSON = "json"
    JSONB = "jsonb"
    TIMESTAMP = "timestamp"
    DATE = "date"
    UUID = "uuid"


# Name of the ColumnFactory constructor invoked for each type.
COLUMN_FACTORIES: Dict[ColumnType, str] = {
    ColumnType.INCREMENT: "increments",
    ColumnType.STRING: "string",
    ColumnType.INTEGER: "integer",
    ColumnType.FLOAT: "float",
    ColumnType.BOOLEAN: "boolean",
    ColumnType.JSON: "json",
    ColumnType.JSONB: "jsonb",
    ColumnType.TIMESTAMP: "timestamp",
    ColumnType.DATE: "date",
    ColumnType.UUID: "uuid",
}

TEMPORAL_TYPES: FrozenSet[ColumnType] = frozenset({ColumnType.TIMESTAMP, ColumnType.DATE})
NUMERIC_TYPES: FrozenSet[ColumnType] = frozenset({ColumnType.INTEGER, ColumnType.FLOAT, ColumnType.INCREMENT})
TEXT_TYPES: FrozenSet[ColumnType] = frozenset({ColumnType.STRING})


def parse_column_type(value: str, table: Optional[str] = None, column: Optional[str] = None) -> ColumnType:
    """Maps a declared type string onto the closed set of column types.

    Raises:
        UnsupportedColumnType: If `value` is not a known type.
    """
    try:
        return ColumnType(value)
    except ValueError:
        raise UnsupportedColumnType(
            f'Can\'t set property "{column}" to "{value}"! This type doesn\'t exist.',
            column_type=str(value),
            table=table,
            column=column,
        ) from None


def is_temporal(value: str) -> bool:
    return value in (ColumnType.TIMESTAMP.value, ColumnType.DATE.value)


def is_reference_compatible(referenced: str, referencing: str) -> bool:
    """Whether a column of type `referencing` may point at one of type `referenced`.

    Types must match exactly, except that an `integer` column may reference an
    `increment` column.
    """
    if referenced == referencing:
        return True
    return referenced == ColumnType.INCREMENT.value and referencing == ColumnType.INTEGER.value


def display_type(value: str) -> str:
    """Renders a type for error messages; `increment` is shown as `integer`."""
    if value == ColumnType.INCREMENT.value:
        return ColumnType.INTEGER.value
    return value
