"""Database engine capability and the engine registry.

A DatabaseConnector never talks to a database library directly. It holds a
handle implementing the DatabaseEngine protocol, created from a type tag
through an EngineRegistry. New engine types are added by registering a
factory under a new tag; existing tags cannot be redefined.

Built-in engines:
- "sqlite": stdlib sqlite3, connection string is a file path or ":memory:"
- "sqlalchemy": SQLAlchemy engine, connection string is a database URL
"""

import logging
import sqlite3
from typing import Callable, Dict, List, Optional, Protocol

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from ..errors import DatabaseConnectionError

logger = logging.getLogger(__name__)


class DatabaseEngine(Protocol):
    """Capability every engine handle exposes to the connector."""

    engine_type: str

    def connect(self, connection_string: str) -> None:
        """Open a connection.

        Raises:
            DatabaseConnectionError: If the backend cannot connect
        """
        ...

    def disconnect(self) -> None:
        ...

    def is_connected(self) -> bool:
        ...


EngineFactory = Callable[[], DatabaseEngine]


class SQLiteEngine:
    """Embedded SQLite engine based on the sqlite3 module."""

    engine_type = "sqlite"

    def __init__(self):
        self._connection: Optional[sqlite3.Connection] = None

    @property
    def connection(self) -> Optional[sqlite3.Connection]:
        return self._connection

    def connect(self, connection_string: str) -> None:
        if self._connection is not None:
            self.disconnect()
        try:
            self._connection = sqlite3.connect(connection_string)
        except sqlite3.Error as e:
            raise DatabaseConnectionError(
                f"Cannot open SQLite database {connection_string!r}: {e}"
            ) from e
        logger.debug(f"Opened SQLite database {connection_string}")

    def disconnect(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def is_connected(self) -> bool:
        return self._connection is not None


class SQLAlchemyEngine:
    """Engine for any database URL SQLAlchemy understands."""

    engine_type = "sqlalchemy"

    def __init__(self):
        self._engine: Optional[Engine] = None
        self._connection: Optional[Connection] = None

    @property
    def connection(self) -> Optional[Connection]:
        return self._connection

    def connect(self, connection_string: str) -> None:
        if self._connection is not None:
            self.disconnect()
        # a missing DBAPI driver surfaces as ImportError from create_engine
        try:
            engine = create_engine(connection_string)
            connection = engine.connect()
        except (SQLAlchemyError, ImportError) as e:
            raise DatabaseConnectionError(
                f"Cannot connect to {connection_string!r}: {e}"
            ) from e
        self._engine, self._connection = engine, connection
        logger.debug(f"Connected SQLAlchemy engine to {engine.url!r}")

    def disconnect(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def is_connected(self) -> bool:
        return self._connection is not None and not self._connection.closed


class EngineRegistry:
    """Maps engine type tags to factories producing engine handles."""

    def __init__(self):
        self._factories: Dict[str, EngineFactory] = {}

    def register(self, tag: str, factory: EngineFactory) -> None:
        """Register a factory under a new tag.

        Raises:
            ValueError: If tag is empty or already registered
        """
        if not tag:
            raise ValueError("Engine tag cannot be empty")
        if tag in self._factories:
            raise ValueError(f"Engine type {tag!r} is already registered")
        self._factories[tag] = factory
        logger.debug(f"Registered database engine type {tag!r}")

    def create(self, tag: str) -> DatabaseEngine:
        """Create a new engine handle for tag.

        Raises:
            ValueError: If tag is unknown or the factory mislabels its handle
        """
        if tag not in self._factories:
            raise ValueError(
                f"Unknown engine type: {tag}. Supported types: {', '.join(self.tags())}"
            )
        engine = self._factories[tag]()
        if engine.engine_type != tag:
            raise ValueError(
                f"Factory for {tag!r} produced an engine of type {engine.engine_type!r}"
            )
        return engine

    def tags(self) -> List[str]:
        return sorted(self._factories)

    def __contains__(self, tag: str) -> bool:
        return tag in self._factories


_default_registry = EngineRegistry()
_default_registry.register(SQLiteEngine.engine_type, SQLiteEngine)
_default_registry.register(SQLAlchemyEngine.engine_type, SQLAlchemyEngine)


def default_registry() -> EngineRegistry:
    """Registry holding the built-in engines, shared by default connectors."""
    return _default_registry
