from typing import Any, Callable, List, Protocol, runtime_checkable


@runtime_checkable
class BuilderHandle(Protocol):
    """
    Builder for a single column.
    Every method returns the handle to keep building with, which may be a new object.
    """

    def primary(self) -> "BuilderHandle":
        ...

    def unsigned(self) -> "BuilderHandle":
        ...

    def unique(self) -> "BuilderHandle":
        ...

    def references(self, target: str) -> "BuilderHandle":
        """Adds a foreign-key constraint to `target`, a prefixed `"table.column"` string."""
        ...

    def default_to(self, value: Any) -> "BuilderHandle":
        ...

    def not_nullable(self) -> "BuilderHandle":
        ...

    def nullable(self) -> "BuilderHandle":
        ...


@runtime_checkable
class ColumnFactory(Protocol):
    """Column constructors supplied by a backend for one table."""

    def increments(self, name: str) -> BuilderHandle:
        ...

    def string(self, name: str) -> BuilderHandle:
        ...

    def integer(self, name: str) -> BuilderHandle:
        ...

    def float(self, name: str) -> BuilderHandle:
        ...

    def boolean(self, name: str) -> BuilderHandle:
        ...

    def json(self, name: str) -> BuilderHandle:
        ...

    def jsonb(self, name: str) -> BuilderHandle:
        ...

    def timestamp(self, name: str) -> BuilderHandle:
        ...

    def date(self, name: str) -> BuilderHandle:
        ...

    def uuid(self, name: str) -> BuilderHandle:
        ...

    def now(self) -> Any:
        """Return the backend's current-timestamp expression for defaults."""
        ...


BuildColumns = Callable[[ColumnFactory], List[BuilderHandle]]


@runtime_checkable
class SchemaBackend(Protocol):
    """
    Structural definition of a schema backend.
    Any class implementing these methods can materialize tables.
    """

    async def create_table(self, name: str, build: BuildColumns) -> None:
        """Issue one schema-creation request for table `name`.

        `build` is called with the backend's ColumnFactory and returns the
        final handle of every column, in order.
        """
        ...
