"""Parameter types for valueparams.

This module provides the leaf parameter contract and the concrete
validated parameter types.
"""

from .base import LeafParameter, ParamNode, TextNode
from .keyed import KeyedList
from .boolean import BoolSymbol, BooleanCode
from .temporal import (
    CalendarDate,
    Clock,
    ClockTime,
    FixedClock,
    SystemClock,
    Timestamp,
    day_count,
    days_in_month,
    is_leap_year,
)
from .scalars import MacAddressValue, SecretValue, UniqueIdentifier
from .addresses import (
    AddressValue,
    IPv4Value,
    IPv6Value,
    address_family,
    compact_to_simple,
    parse_address,
    simple_to_compact,
)
from .address_sets import (
    AddressList,
    AddressRange,
    PolymorphicAddress,
    PolymorphicAddressList,
)
from .ports import PortList, PortValue

__all__ = [
    # Contract
    "LeafParameter",
    "ParamNode",
    "TextNode",
    "KeyedList",
    # Boolean
    "BoolSymbol",
    "BooleanCode",
    # Temporal
    "CalendarDate",
    "Clock",
    "ClockTime",
    "FixedClock",
    "SystemClock",
    "Timestamp",
    "day_count",
    "days_in_month",
    "is_leap_year",
    # Scalars
    "MacAddressValue",
    "SecretValue",
    "UniqueIdentifier",
    # Addresses
    "AddressValue",
    "IPv4Value",
    "IPv6Value",
    "address_family",
    "compact_to_simple",
    "parse_address",
    "simple_to_compact",
    "AddressList",
    "AddressRange",
    "PolymorphicAddress",
    "PolymorphicAddressList",
    # Ports
    "PortList",
    "PortValue",
]
