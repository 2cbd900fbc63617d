from __future__ import annotations

import asyncio
import dataclasses
import json
from typing import Any, List, Optional, Union

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Uuid,
    create_engine,
    false,
    func,
    text,
    true,
)
from sqlalchemy.dialects import mysql, postgresql
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.sql.elements import ClauseElement
from sqlalchemy.types import TypeEngine

from tablelink.common.logger import get_logger
from tablelink.common.settings import settings
from .protocols import BuildColumns

logger = get_logger(__name__)

STRING_LENGTH = 255

UNSIGNED_VARIANTS = {
    "increments": mysql.INTEGER(unsigned=True),
    "integer": mysql.INTEGER(unsigned=True),
    "float": mysql.FLOAT(unsigned=True),
}


def _server_default(value: Any) -> Any:
    """Converts a default value into something `Column(server_default=...)` accepts."""
    if value is None or isinstance(value, ClauseElement):
        return value
    if isinstance(value, bool):
        return true() if value else false()
    if isinstance(value, (int, float)):
        return text(repr(value))
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


@dataclasses.dataclass(frozen=True)
class SQLAlchemyColumnHandle:
    """Immutable column builder; every modifier returns a new handle."""
    name: str
    kind: str
    column_type: TypeEngine
    is_primary: bool = False
    autoincrement: bool = False
    is_unique: bool = False
    is_nullable: Optional[bool] = None
    foreign_key: Optional[str] = None
    server_default: Any = None

    def primary(self) -> "SQLAlchemyColumnHandle":
        return dataclasses.replace(self, is_primary=True)

    def unsigned(self) -> "SQLAlchemyColumnHandle":
        variant = UNSIGNED_VARIANTS.get(self.kind)
        if variant is None:
            logger.debug(f"Ignoring unsigned on non-numeric column {self.name} ({self.kind})")
            return self
        return dataclasses.replace(self, column_type=self.column_type.with_variant(variant, "mysql", "mariadb"))

    def unique(self) -> "SQLAlchemyColumnHandle":
        return dataclasses.replace(self, is_unique=True)

    def references(self, target: str) -> "SQLAlchemyColumnHandle":
        return dataclasses.replace(self, foreign_key=target)

    def default_to(self, value: Any) -> "SQLAlchemyColumnHandle":
        return dataclasses.replace(self, server_default=_server_default(value))

    def not_nullable(self) -> "SQLAlchemyColumnHandle":
        return dataclasses.replace(self, is_nullable=False)

    def nullable(self) -> "SQLAlchemyColumnHandle":
        return dataclasses.replace(self, is_nullable=True)

    def to_column(self) -> Column:
        """Materializes the handle as a SQLAlchemy Column."""
        args = [ForeignKey(self.foreign_key)] if self.foreign_key else []
        kwargs: dict = {"primary_key": self.is_primary}
        if self.autoincrement:
            kwargs["autoincrement"] = True
        if self.is_unique:
            kwargs["unique"] = True
        if self.is_nullable is not None:
            kwargs["nullable"] = self.is_nullable
        if self.server_default is not None:
            kwargs["server_default"] = self.server_default
        return Column(self.name, self.column_type, *args, **kwargs)


class SQLAlchemyColumnFactory:
    """Column constructors backed by SQLAlchemy types."""

    def _column(self, name: str, kind: str, column_type: TypeEngine) -> SQLAlchemyColumnHandle:
        return SQLAlchemyColumnHandle(name=name, kind=kind, column_type=column_type)

    def increments(self, name: str) -> SQLAlchemyColumnHandle:
        return SQLAlchemyColumnHandle(
            name=name, kind="increments", column_type=Integer(), is_primary=True, autoincrement=True
        )

    def string(self, name: str) -> SQLAlchemyColumnHandle:
        return self._column(name, "string", String(STRING_LENGTH))

    def integer(self, name: str) -> SQLAlchemyColumnHandle:
        return self._column(name, "integer", Integer())

    def float(self, name: str) -> SQLAlchemyColumnHandle:
        return self._column(name, "float", Float())

    def boolean(self, name: str) -> SQLAlchemyColumnHandle:
        return self._column(name, "boolean", Boolean())

    def json(self, name: str) -> SQLAlchemyColumnHandle:
        return self._column(name, "json", JSON())

    def jsonb(self, name: str) -> SQLAlchemyColumnHandle:
        return self._column(name, "jsonb", JSON().with_variant(postgresql.JSONB(), "postgresql"))

    def timestamp(self, name: str) -> SQLAlchemyColumnHandle:
        return self._column(name, "timestamp", DateTime(timezone=True))

    def date(self, name: str) -> SQLAlchemyColumnHandle:
        return self._column(name, "date", Date())

    def uuid(self, name: str) -> SQLAlchemyColumnHandle:
        return self._column(name, "uuid", Uuid())

    def now(self) -> Any:
        return func.now()


class SQLAlchemySchemaBackend:
    """
    Schema backend creating tables through SQLAlchemy.
    Works with a sync Engine (DDL runs in a worker thread) or an AsyncEngine.
    """

    def __init__(self, engine: Union[Engine, AsyncEngine], metadata: Optional[MetaData] = None):
        self.engine = engine
        self.metadata = metadata if metadata is not None else MetaData()

    @classmethod
    def from_url(cls, url: str, **engine_kwargs: Any) -> "SQLAlchemySchemaBackend":
        """Builds a backend with an async engine for async drivers, a sync one otherwise."""
        try:
            if make_url(url).get_dialect().is_async:
                engine = create_async_engine(url, **engine_kwargs)
            else:
                engine = create_engine(url, **engine_kwargs)
        except Exception as e:
            logger.error(f"Failed to create engine for schema backend: {e}")
            raise
        return cls(engine)

    @classmethod
    def from_settings(cls, **engine_kwargs: Any) -> "SQLAlchemySchemaBackend":
        return cls.from_url(settings.database_url, **engine_kwargs)

    def define_table(self, name: str, build: BuildColumns) -> Table:
        """Builds the columns and materializes the table into this backend's MetaData."""
        return self._define(name, build(SQLAlchemyColumnFactory()))

    def _define(self, name: str, handles: List[SQLAlchemyColumnHandle]) -> Table:
        return Table(name, self.metadata, *(handle.to_column() for handle in handles))

    def _reflect_targets(self, conn: Connection, name: str, handles: List[SQLAlchemyColumnHandle]) -> None:
        """Loads referenced tables this MetaData has not seen from the database."""
        for handle in handles:
            if not handle.foreign_key:
                continue
            target = handle.foreign_key.rpartition(".")[0]
            if target == name or target in self.metadata.tables:
                continue
            logger.debug(f"Reflecting referenced table {target} for {name}")
            Table(target, self.metadata, autoload_with=conn)

    def _materialize(self, conn: Connection, name: str, handles: List[SQLAlchemyColumnHandle]) -> None:
        """Emits CREATE TABLE on `conn`; a failed attempt leaves MetaData as it was."""
        self._reflect_targets(conn, name, handles)
        table = self._define(name, handles)
        try:
            self.metadata.create_all(conn, tables=[table], checkfirst=False)
        except Exception:
            self.metadata.remove(table)
            raise

    def _create_sync(self, name: str, handles: List[SQLAlchemyColumnHandle]) -> None:
        with self.engine.begin() as conn:
            self._materialize(conn, name, handles)

    async def create_table(self, name: str, build: BuildColumns) -> None:
        handles = build(SQLAlchemyColumnFactory())
        if isinstance(self.engine, AsyncEngine):
            async with self.engine.begin() as conn:
                await conn.run_sync(self._materialize, name, handles)
        else:
            await asyncio.to_thread(self._create_sync, name, handles)
        logger.info(f"Created table {name}")

    async def dispose(self) -> None:
        """Releases the engine's connection pool."""
        if isinstance(self.engine, AsyncEngine):
            await self.engine.dispose()
        else:
            self.engine.dispose()
