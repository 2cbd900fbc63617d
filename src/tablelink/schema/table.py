from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from pydantic import BaseModel

from tablelink.backends.protocols import BuilderHandle, ColumnFactory, SchemaBackend
from tablelink.common.errors import ValidationError
from tablelink.common.logger import column_context, get_logger
from .builder import build_column
from .directives import ColumnDirective, parse_directive
from .models import ColumnRef, PrimaryKey, declared_primary
from .resolver import resolve_column

if TYPE_CHECKING:
    from .registry import TableRegistry

logger = get_logger(__name__)


class TableOptions(BaseModel):
    """Typed form of the table constructor options."""

    name: str
    columns: Dict[str, Any]


class Table:
    """
    A declaratively defined table.

    Constructing a table validates the options, registers the table into its
    registry and resolves every column reference right away, so a schema can be
    checked for consistency without any database. `create()` later hands the
    columns to a backend.

    Attributes:
        registry: The registry the table belongs to.
        name: Prefixed table name, unique within the registry.
        basename: Name as given by the caller.
        columns: Parsed column directives, in declaration order.
        primary: Primary key descriptor, or None.
        referenced: Column name -> columns of other tables pointing to it.
        references: Column name -> columns this column points to.
        last_modified: Name of the `updateDate` column, or None.
    """

    def __init__(self, registry: "TableRegistry", options: Any):
        if registry is None:
            raise ValidationError("Table registry missing! Was this called outside of it?", field="registry")

        if isinstance(options, TableOptions):
            options = {"name": options.name, "columns": options.columns}
        if options is None or not isinstance(options, Mapping):
            raise ValidationError("Table options are missing!", field="options")

        basename = options.get("name")
        if not basename or not isinstance(basename, str):
            raise ValidationError("No valid name was passed! Make sure to pass a string as a name.", field="name")

        name = registry.prefix + basename
        if name in registry.tables:
            raise ValidationError(f'A table named "{name}" already exists!', field="name")

        raw_columns = options.get("columns")
        if raw_columns is None or not isinstance(raw_columns, Mapping):
            raise ValidationError("No columns are provided!", field="columns", table=name)

        columns: Dict[str, ColumnDirective] = {
            column: parse_directive(column, raw, table=name)
            for column, raw in raw_columns.items()
        }

        self.registry = registry
        self.name = name
        self.basename = basename
        self.columns = columns

        self.primary: Optional[PrimaryKey] = None
        self.referenced: Dict[str, List[ColumnRef]] = {}
        self.references: Dict[str, List[ColumnRef]] = {}
        self.last_modified: Optional[str] = None

        registry.tables[self.name] = self
        logger.info(f"Registered table {self.name} with {len(self.columns)} columns")

        self.link_columns()

    def __repr__(self):
        return f"Table({self.name!r})"

    def column_type(self, column: str) -> str:
        """Returns the declared type of a column, whichever directive form it used."""
        return self.columns[column].type

    def link_columns(self) -> None:
        """Resolves column references without touching any backend."""
        for name, directive in self.columns.items():
            with column_context(name):
                resolve_column(self, directive.type, name, directive.options)

            primary = declared_primary(name, directive.type, directive.options.primary)
            if primary is not None:
                self.primary = primary

    def build(self, factory: ColumnFactory) -> List[BuilderHandle]:
        """Runs the column builder over every directive, in declaration order."""
        handles = []
        for name, directive in self.columns.items():
            with column_context(name):
                handles.append(build_column(self, factory, name, directive))
        return handles

    async def create(self, backend: Optional[SchemaBackend] = None) -> None:
        """
        Creates the table through a backend.

        Uses `backend` if given, otherwise the registry's backend. Backend
        failures propagate unchanged.
        """
        if backend is None:
            backend = self.registry.backend
        if backend is None:
            raise RuntimeError(f"No schema backend configured for {self.name}")

        logger.info(f"Creating table {self.name}")
        await backend.create_table(self.name, self.build)
