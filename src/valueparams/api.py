"""Public API for valueparams.

This module provides the complete public API: the parameter types, the
database connector with its engines and settings, and the error hierarchy.
"""

# Errors
from .errors import (
    ParameterError,
    FormatError,
    RangeError,
    TypeMismatchError,
    DatabaseConnectionError,
)

# Parameters
from .parameters import (
    LeafParameter,
    ParamNode,
    TextNode,
    # Boolean
    BoolSymbol,
    BooleanCode,
    # Temporal
    CalendarDate,
    ClockTime,
    Timestamp,
    Clock,
    SystemClock,
    FixedClock,
    is_leap_year,
    days_in_month,
    # Scalars
    UniqueIdentifier,
    SecretValue,
    MacAddressValue,
    # Addresses
    AddressValue,
    IPv4Value,
    IPv6Value,
    PolymorphicAddress,
    AddressRange,
    AddressList,
    PolymorphicAddressList,
    compact_to_simple,
    simple_to_compact,
    parse_address,
    # Ports
    PortValue,
    PortList,
)

# Database
from .database import (
    DatabaseEngine,
    EngineRegistry,
    SQLiteEngine,
    SQLAlchemyEngine,
    default_registry,
    ConnectorState,
    DatabaseConnector,
    ConnectorSettings,
    load_connector_settings,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ParameterError",
    "FormatError",
    "RangeError",
    "TypeMismatchError",
    "DatabaseConnectionError",
    # Parameters
    "LeafParameter",
    "ParamNode",
    "TextNode",
    "BoolSymbol",
    "BooleanCode",
    "CalendarDate",
    "ClockTime",
    "Timestamp",
    "Clock",
    "SystemClock",
    "FixedClock",
    "is_leap_year",
    "days_in_month",
    "UniqueIdentifier",
    "SecretValue",
    "MacAddressValue",
    "AddressValue",
    "IPv4Value",
    "IPv6Value",
    "PolymorphicAddress",
    "AddressRange",
    "AddressList",
    "PolymorphicAddressList",
    "compact_to_simple",
    "simple_to_compact",
    "parse_address",
    "PortValue",
    "PortList",
    # Database
    "DatabaseEngine",
    "EngineRegistry",
    "SQLiteEngine",
    "SQLAlchemyEngine",
    "default_registry",
    "ConnectorState",
    "DatabaseConnector",
    "ConnectorSettings",
    "load_connector_settings",
]
