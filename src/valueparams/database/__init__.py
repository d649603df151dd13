"""Database connector parameter and pluggable engines."""

from .engines import (
    DatabaseEngine,
    EngineRegistry,
    SQLAlchemyEngine,
    SQLiteEngine,
    default_registry,
)
from .connector import ConnectorState, DatabaseConnector
from .config import (
    ConnectorSettings,
    load_connector_settings,
    parse_connector_settings,
)

__all__ = [
    # Engines
    "DatabaseEngine",
    "EngineRegistry",
    "SQLAlchemyEngine",
    "SQLiteEngine",
    "default_registry",
    # Connector
    "ConnectorState",
    "DatabaseConnector",
    # Settings
    "ConnectorSettings",
    "load_connector_settings",
    "parse_connector_settings",
]
