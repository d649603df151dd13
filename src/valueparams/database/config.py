"""Connector settings loaded from YAML.

Example document:

    connectors:
      main:
        engine: sqlite
        connection_string: /var/lib/app/main.db
        connect: true
      reports:
        engine: sqlalchemy
        connection_string: postgresql://reports@db/reports

Settings are plain immutable data; DatabaseConnector.from_settings() turns
them into live connectors.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectorSettings:
    """Settings for one database connector.

    Attributes:
        name: Connector (parameter) name
        engine: Engine type tag, looked up in the engine registry
        connection_string: Connection string handed to the engine
        connect: Connect immediately after building the connector
    """
    name: str
    engine: str
    connection_string: str = ""
    connect: bool = False

    def __post_init__(self):
        """Validate settings."""
        if not self.name:
            raise ValueError("ConnectorSettings name cannot be empty")
        if not self.engine:
            raise ValueError(f"Connector {self.name}: engine cannot be empty")
        if not isinstance(self.connection_string, str):
            raise ValueError(f"Connector {self.name}: connection_string must be a string")
        if not isinstance(self.connect, bool):
            raise ValueError(f"Connector {self.name}: connect must be true or false")

    @classmethod
    def from_mapping(cls, name: str, data: Mapping[str, Any]) -> "ConnectorSettings":
        """Build settings from one entry of the connectors mapping."""
        if not isinstance(data, Mapping):
            raise ValueError(f"Connector {name}: settings must be a mapping")
        unknown = set(data) - {"engine", "connection_string", "connect"}
        if unknown:
            raise ValueError(f"Connector {name}: unknown settings {sorted(unknown)}")
        return cls(
            name=name,
            engine=data.get("engine", ""),
            connection_string=data.get("connection_string", "") or "",
            connect=data.get("connect", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export as the mapping stored under connectors.<name>."""
        return {
            "engine": self.engine,
            "connection_string": self.connection_string,
            "connect": self.connect,
        }


def parse_connector_settings(text: str) -> Dict[str, ConnectorSettings]:
    """Parse a YAML document into settings keyed by connector name.

    Raises:
        ValueError: If the document is not valid YAML or has the wrong shape
    """
    try:
        raw = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid connector settings YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError("Connector settings must be a mapping with a 'connectors' key")
    connectors = raw.get("connectors") or {}
    if not isinstance(connectors, dict):
        raise ValueError("'connectors' must map connector names to settings")
    return {
        str(name): ConnectorSettings.from_mapping(str(name), data)
        for name, data in connectors.items()
    }


def load_connector_settings(path: Union[str, Path]) -> Dict[str, ConnectorSettings]:
    """Load connector settings from a YAML file."""
    path = Path(path)
    settings = parse_connector_settings(path.read_text())
    logger.info(f"Loaded {len(settings)} connector settings from {path}")
    return settings
