import asyncio

import pytest

from tablelink.common.errors import ErrorCode, UnknownReferencedTable, ValidationError
from tablelink.schema import PrimaryKey, Table, TableOptions
from tablelink.schema.models import declared_primary


class TestConstructorValidation:

    def test_missing_registry(self):
        with pytest.raises(ValidationError) as exc_info:
            Table(None, {"name": "users", "columns": {}})

        assert exc_info.value.field == "registry"
        assert exc_info.value.error_code == ErrorCode.VALIDATION_ERROR

    @pytest.mark.parametrize("options", [None, "users", 42])
    def test_missing_options(self, registry, options):
        with pytest.raises(ValidationError) as exc_info:
            Table(registry, options)

        assert exc_info.value.field == "options"
        assert len(registry) == 0

    @pytest.mark.parametrize("name", [None, "", 12])
    def test_invalid_name(self, registry, name):
        with pytest.raises(ValidationError) as exc_info:
            Table(registry, {"name": name, "columns": {}})

        assert exc_info.value.field == "name"
        assert len(registry) == 0

    @pytest.mark.parametrize("columns", [None, "id", ["id"]])
    def test_missing_columns(self, registry, columns):
        with pytest.raises(ValidationError) as exc_info:
            Table(registry, {"name": "users", "columns": columns})

        assert exc_info.value.field == "columns"
        assert "users" not in registry

    def test_duplicate_name_keeps_first_table(self, registry):
        # Validates uniqueness because a second definition must not replace the first.
        # Arrange
        first = Table(registry, {"name": "users", "columns": {"id": "increment"}})

        # Act
        with pytest.raises(ValidationError) as exc_info:
            Table(registry, {"name": "users", "columns": {"uid": "uuid"}})

        # Assert
        assert exc_info.value.field == "name"
        assert list(registry.tables) == ["app_users"]
        assert registry.tables["app_users"] is first

    def test_malformed_directive_registers_nothing(self, registry):
        with pytest.raises(ValidationError) as exc_info:
            Table(registry, {"name": "users", "columns": {"id": "increment", "age": {"notNull": True}}})

        assert exc_info.value.field == "columns.age"
        assert len(registry) == 0


def test_successful_construction_initialises_state(registry):
    # Arrange / Act
    table = Table(registry, TableOptions(name="users", columns={"email": "string"}))

    # Assert
    assert table.name == "app_users"
    assert table.basename == "users"
    assert table.registry is registry
    assert registry.tables["app_users"] is table
    assert table.primary is None
    assert table.referenced == {}
    assert table.references == {}
    assert table.last_modified is None
    assert table.column_type("email") == "string"


def test_columns_keep_declaration_order(registry):
    table = Table(registry, {"name": "t", "columns": {"b": "string", "a": "integer", "c": "date"}})

    assert list(table.columns) == ["b", "a", "c"]


def test_failed_resolution_leaves_table_registered(registry):
    # Validates the no-rollback contract because resolution runs after registration.
    # Arrange / Act
    with pytest.raises(UnknownReferencedTable):
        Table(registry, {"name": "posts", "columns": {"authorId": {"type": "integer", "references": "users.id"}}})

    # Assert
    assert "posts" in registry


def test_multiple_primaries_last_write_wins(registry):
    table = registry.define("pairs", {
        "left": {"type": "integer", "primary": True},
        "right": {"type": "uuid", "primary": True},
    })

    assert table.primary == PrimaryKey(name="right", type="uuid", auto=False)


@pytest.mark.parametrize(
    "column_type, primary, expected",
    [
        ("increment", False, PrimaryKey(name="id", type="increment", auto=True)),
        ("increment", True, PrimaryKey(name="id", type="increment", auto=True)),
        ("uuid", True, PrimaryKey(name="id", type="uuid", auto=False)),
        ("integer", False, None),
    ],
)
def test_declared_primary(column_type, primary, expected):
    assert declared_primary("id", column_type, primary) == expected


def test_definition_and_build_agree_on_primary(registry, factory):
    # Arrange
    table = registry.define("pairs", {
        "seq": "increment",
        "code": {"type": "string", "primary": True},
    })
    defined = table.primary

    # Act
    table.build(factory)

    # Assert
    assert defined == PrimaryKey(name="code", type="string", auto=False)
    assert table.primary == defined


def test_build_returns_handles_in_declaration_order(registry, factory):
    # Arrange
    table = registry.define("users", {"id": "increment", "name": {"type": "string", "notNull": True}})

    # Act
    handles = table.build(factory)

    # Assert
    assert [h.calls[0] for h in handles] == [("increments", "id"), ("string", "name")]
    assert table.primary == PrimaryKey(name="id", type="increment", auto=True)


def test_create_uses_registry_backend(registry, backend):
    # Arrange
    registry.backend = backend
    table = registry.define("users", {"id": "increment", "active": "boolean"})

    # Act
    asyncio.run(table.create())

    # Assert
    assert len(backend.created) == 1
    name, handles = backend.created[0]
    assert name == "app_users"
    assert [h.calls[0] for h in handles] == [("increments", "id"), ("boolean", "active")]


def test_create_prefers_explicit_backend(registry, backend):
    registry.backend = None
    table = registry.define("users", {"id": "increment"})

    asyncio.run(table.create(backend))

    assert backend.created[0][0] == "app_users"


def test_create_without_backend_fails(registry):
    table = registry.define("users", {"id": "increment"})

    with pytest.raises(RuntimeError):
        asyncio.run(table.create())


def test_create_propagates_backend_errors_unchanged(registry, backend):
    # Validates error transparency because backend I/O failures are not wrapped.
    # Arrange
    failure = ConnectionError("database unreachable")
    backend.error = failure
    table = registry.define("users", {"id": "increment"})

    # Act
    with pytest.raises(ConnectionError) as exc_info:
        asyncio.run(table.create(backend))

    # Assert
    assert exc_info.value is failure


def test_repr_is_short(registry):
    table = registry.define("users", {"id": "increment"})

    assert repr(table) == "Table('app_users')"
