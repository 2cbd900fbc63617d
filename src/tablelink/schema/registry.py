from __future__ import annotations

from typing import Dict, Iterator, Mapping, Optional

from tablelink.backends.protocols import SchemaBackend
from tablelink.common.logger import get_logger, schema_context
from tablelink.common.settings import settings
from .directives import RawDirective
from .table import Table

logger = get_logger(__name__)


class TableRegistry:
    """
    Holds every table defined under one name prefix.

    Tables register themselves on construction, in definition order; there is
    no removal. The registry is written during the definition phase only and
    must not be shared across threads while tables are still being defined.
    """

    def __init__(self, prefix: Optional[str] = None, backend: Optional[SchemaBackend] = None):
        """
        Args:
            prefix: Namespace prepended to every table name. Defaults to the
                `TABLE_PREFIX` setting.
            backend: Backend used by `Table.create()` and `create_all()`.
        """
        self.prefix = settings.table_prefix if prefix is None else prefix
        self.backend = backend
        self.tables: Dict[str, Table] = {}

    def define(self, name: str, columns: Mapping[str, RawDirective]) -> Table:
        """Defines, registers and resolves a new table."""
        with schema_context(self.prefix + name if isinstance(name, str) else None):
            return Table(self, {"name": name, "columns": columns})

    def get(self, basename: str) -> Optional[Table]:
        """Looks up a table by its unprefixed name."""
        return self.tables.get(self.prefix + basename)

    def __contains__(self, basename: object) -> bool:
        return isinstance(basename, str) and (self.prefix + basename) in self.tables

    def __iter__(self) -> Iterator[Table]:
        return iter(list(self.tables.values()))

    def __len__(self) -> int:
        return len(self.tables)

    async def create_all(self, backend: Optional[SchemaBackend] = None) -> None:
        """
        Creates every registered table, in definition order.

        A table can only reference tables defined before it, so definition
        order is also a valid creation order for foreign keys.
        """
        for table in self:
            with schema_context(table.name):
                await table.create(backend)
        logger.info(f"Created {len(self.tables)} tables with prefix '{self.prefix}'")
