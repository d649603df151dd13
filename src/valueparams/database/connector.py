"""Database connector parameter.

The connector is a leaf parameter whose text value is a connection string.
It exclusively owns an optional engine handle and derives its connection
state from that handle:

    UNBOUND        no engine handle
    DISCONNECTED   engine bound, engine reports not connected
    CONNECTED      engine bound, engine reports connected

Changing the connection string of a connected connector reconnects with the
new string. The connector does no locking; callers sharing one across
threads must serialize connect/disconnect/set_connection_string themselves.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from ..errors import DatabaseConnectionError, TypeMismatchError
from ..parameters.base import LeafParameter
from .engines import DatabaseEngine, EngineRegistry, default_registry

if TYPE_CHECKING:
    from .config import ConnectorSettings

logger = logging.getLogger(__name__)


class ConnectorState(Enum):
    """Connection state derived from the bound engine."""
    UNBOUND = "unbound"
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class DatabaseConnector(LeafParameter):
    """Connection string plus a swappable database engine handle.

    Attributes:
        name: Parameter name
        registry: Registry used to build engines from type tags
    """

    def __init__(self, name: str = "db_engine", connection_string: str = "",
                 registry: Optional[EngineRegistry] = None):
        super().__init__(name)
        self.registry = registry or default_registry()
        self._connection_string = connection_string
        self._engine: Optional[DatabaseEngine] = None

    @classmethod
    def for_engine(cls, engine_type: str, name: str = "db_engine",
                   registry: Optional[EngineRegistry] = None) -> "DatabaseConnector":
        """Create a connector already bound to a new engine of engine_type."""
        connector = cls(name, registry=registry)
        connector.bind_engine_type(engine_type)
        return connector

    @classmethod
    def from_settings(cls, settings: "ConnectorSettings",
                      registry: Optional[EngineRegistry] = None) -> "DatabaseConnector":
        """Build, bind and optionally connect a connector from settings.

        Raises:
            ValueError: If the engine type is unknown
            DatabaseConnectionError: If settings.connect is set and connecting fails
        """
        connector = cls.for_engine(settings.engine, settings.name, registry)
        connector.set_connection_string(settings.connection_string)
        if settings.connect:
            connector.connect()
        return connector

    @property
    def engine(self) -> Optional[DatabaseEngine]:
        return self._engine

    @property
    def engine_type(self) -> Optional[str]:
        """Type tag of the bound engine, None while unbound."""
        return None if self._engine is None else self._engine.engine_type

    @property
    def connection_string(self) -> str:
        return self._connection_string

    @property
    def state(self) -> ConnectorState:
        if self._engine is None:
            return ConnectorState.UNBOUND
        if self._engine.is_connected():
            return ConnectorState.CONNECTED
        return ConnectorState.DISCONNECTED

    def bind_engine(self, engine: DatabaseEngine) -> None:
        """Take ownership of engine, replacing any previously bound one.

        The previous engine is disconnected, and the connector ends up
        bound but disconnected.
        """
        if self._engine is not None and self._engine.is_connected():
            self._engine.disconnect()
        if engine.is_connected():
            engine.disconnect()
        self._engine = engine
        logger.info(f"Bound {engine.engine_type} engine to {self.name}")

    def bind_engine_type(self, engine_type: str) -> DatabaseEngine:
        """Bind a new engine created from the registry and return it."""
        engine = self.registry.create(engine_type)
        self.bind_engine(engine)
        return engine

    def release_engine(self) -> None:
        """Disconnect and drop the bound engine."""
        self.disconnect()
        self._engine = None

    def set_connection_string(self, connection_string: str) -> None:
        """Change the connection string, reconnecting if currently connected.

        Raises:
            DatabaseConnectionError: If reconnecting with the new string fails;
                the connector is then left bound but disconnected
        """
        if connection_string == self._connection_string:
            return
        self._connection_string = connection_string
        if not self.is_connected():
            return
        logger.info(f"Reconnecting {self.name} with a new connection string")
        self.disconnect()
        try:
            self.connect()
        except DatabaseConnectionError as e:
            logger.error(f"Reconnect of {self.name} failed: {e}")
            raise

    def connect(self) -> None:
        """Connect the bound engine using the connection string.

        Raises:
            DatabaseConnectionError: If no engine is bound, the connection
                string is empty or the engine fails to connect
        """
        if self._engine is None:
            raise DatabaseConnectionError(f"Parameter {self.name}: no database engine bound")
        if not self._connection_string:
            raise DatabaseConnectionError(f"Parameter {self.name}: connection string is empty")
        try:
            self._engine.connect(self._connection_string)
        except DatabaseConnectionError:
            raise
        except ConnectionError as e:
            raise DatabaseConnectionError(f"Parameter {self.name}: {e}") from e
        logger.info(f"Connected {self.name} ({self._engine.engine_type})")

    def disconnect(self) -> None:
        """Disconnect the bound engine; no-op when not connected."""
        if not self.is_connected():
            return
        self._engine.disconnect()
        logger.info(f"Disconnected {self.name}")

    def is_connected(self) -> bool:
        return self._engine is not None and self._engine.is_connected()

    def assign(self, value: Union[str, "DatabaseConnector"]) -> None:
        """Assign a connection string (or copy another connector)."""
        if isinstance(value, DatabaseConnector):
            self.copy_from(value)
        elif isinstance(value, str):
            self.set_connection_string(value)
        else:
            raise TypeMismatchError(
                f"Parameter {self.name} requires str, got {type(value).__name__}"
            )

    def render_value(self) -> str:
        return self._connection_string

    def _copy_state(self, other: "DatabaseConnector") -> None:
        # Handles are never shared: bind a fresh engine of the same type
        if other.engine_type is None:
            self.release_engine()
        elif other.engine_type != self.engine_type:
            self.bind_engine_type(other.engine_type)
        self.set_connection_string(other.connection_string)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}({self.name!r}, {self._connection_string!r}, "
                f"state={self.state.value})")
