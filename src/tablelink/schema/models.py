from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Optional

from .types import ColumnType

if TYPE_CHECKING:
    from .table import Table


@dataclasses.dataclass(frozen=True)
class ColumnRef:
    """One end of a foreign-key relation: a column of a given table."""
    table: "Table"
    column: str

    @property
    def qualified_name(self) -> str:
        return f"{self.table.name}.{self.column}"


@dataclasses.dataclass(frozen=True)
class PrimaryKey:
    """
    Primary key descriptor of a table.

    Attributes:
        name: Column name.
        type: Declared column type.
        auto: True when the key is generated by the database (`increment`).
    """
    name: str
    type: str
    auto: bool = False


def declared_primary(name: str, column_type: str, primary: bool) -> Optional[PrimaryKey]:
    """Returns the primary key a column declares, or None.

    An `increment` column is always a database-generated key; any other
    column is a key only when flagged `primary`.
    """
    auto = column_type == ColumnType.INCREMENT.value
    if not (primary or auto):
        return None
    return PrimaryKey(name=name, type=column_type, auto=auto)
