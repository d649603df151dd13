"""IPv4 and IPv6 address parameters with prefix arithmetic.

This module implements the concrete address types and the netmask helpers:
- IPv4Value: dotted-quad or 32-bit decimal, optional "/prefix" or "/mask"
- IPv6Value: standard hextet notation, optional "/prefix"
- AddressValue: the closed sum type Union[IPv4Value, IPv6Value]
- compact_to_simple / simple_to_compact: 32-bit mask <-> prefix length

Addresses are stored as integers. Subnet membership compares the masked
integers of the stored address and a candidate, using the canonical
leading-ones mask of the stored prefix length.
"""

import ipaddress
from abc import abstractmethod
from typing import Optional, Tuple, Union

from ..constants import IPV4_BITS, IPV4_PARTS, IPV6_BITS, IPV6_PARTS
from ..errors import FormatError, ParameterError, RangeError, TypeMismatchError
from .base import LeafParameter
from .validation import contains_any, parse_uint, split_exact

IPV4_MAX = (1 << IPV4_BITS) - 1
IPV6_MAX = (1 << IPV6_BITS) - 1

# IPv4-mapped IPv6 prefix (::ffff:0:0/96)
IPV4_MAPPED_PREFIX = 0xFFFF << IPV4_BITS
IPV4_MAPPED_PREFIX_LENGTH = IPV6_BITS - IPV4_BITS


def prefix_mask(prefix: int, bits: int) -> int:
    """Leading-ones mask of width bits with prefix one-bits."""
    if not (0 <= prefix <= bits):
        raise RangeError(f"Prefix length {prefix} outside [0, {bits}]")
    full = (1 << bits) - 1
    return full ^ ((1 << (bits - prefix)) - 1)


def simple_to_compact(prefix: int) -> int:
    """Convert an IPv4 prefix length (0-32) to its 32-bit mask.

    Raises:
        RangeError: If prefix is outside [0, 32]
    """
    return prefix_mask(prefix, IPV4_BITS)


def compact_to_simple(mask: int) -> int:
    """Convert a 32-bit IPv4 mask to its prefix length.

    Raises:
        RangeError: If mask does not fit in 32 bits
        FormatError: If mask is not a contiguous run of leading ones
    """
    if not (0 <= mask <= IPV4_MAX):
        raise RangeError(f"Netmask {mask} does not fit in 32 bits")
    host_bits = ~mask & IPV4_MAX
    # host part must be of the form 0...01...1
    if host_bits & (host_bits + 1):
        raise FormatError(f"Invalid netmask {_dotted(mask)}: one-bits are not contiguous")
    return IPV4_BITS - host_bits.bit_length()


def address_family(text: str) -> int:
    """Guess the IP version of an address literal: 6 if it has a colon, else 4."""
    return 6 if ":" in text else 4


def _dotted(value: int) -> str:
    return ".".join(str((value >> shift) & 0xFF) for shift in (24, 16, 8, 0))


def _parse_dotted(text: str, what: str) -> int:
    value = 0
    for part in split_exact(text, ".", IPV4_PARTS, what):
        value = (value << 8) | parse_uint(part, f"{what} octet", 255)
    return value


class _Address(LeafParameter):
    """Shared state and arithmetic of the concrete address types."""

    VERSION = 0
    BITS = 0
    PARTS = 0
    FAMILY = ""

    def __init__(self, name: str = "ip"):
        super().__init__(name)
        self._address = 0
        self._prefix = self.BITS
        self._has_prefix = False

    @property
    def version(self) -> int:
        return self.VERSION

    def family(self) -> str:
        return self.FAMILY

    def prefix_bits(self) -> int:
        """Prefix length; the full width when no prefix was given."""
        return self._prefix

    def has_prefix(self) -> bool:
        return self._has_prefix

    def part(self, index: int) -> int:
        """Numeric group at index (octet for IPv4, hextet for IPv6)."""
        if not (0 <= index < self.PARTS):
            raise IndexError(f"Address part {index} outside [0, {self.PARTS - 1}]")
        width = self.BITS // self.PARTS
        shift = width * (self.PARTS - 1 - index)
        return (self._address >> shift) & ((1 << width) - 1)

    def parts(self) -> Tuple[int, ...]:
        return tuple(self.part(i) for i in range(self.PARTS))

    def mask(self) -> int:
        return prefix_mask(self._prefix, self.BITS)

    def address_int(self) -> int:
        return self._address

    def address(self) -> str:
        """Address without the prefix."""
        return self._format_address(self._address)

    def network_address(self) -> str:
        return self._format_address(self._address & self.mask())

    def assign(self, value) -> None:
        """Assign "address[/prefix]" text, an integer or another address.

        Raises:
            FormatError: If the literal is malformed
            RangeError: If a component is out of range
        """
        if isinstance(value, type(self)):
            self._copy_state(value)
            return
        if isinstance(value, int) and not isinstance(value, bool):
            self._address = self._check_int(value)
            self._prefix, self._has_prefix = self.BITS, False
            return
        if not isinstance(value, str):
            raise TypeMismatchError(
                f"Parameter {self.name} requires str or int, got {type(value).__name__}"
            )
        text = value.strip()
        pieces = text.split("/")
        if len(pieces) > 2:
            raise FormatError(f"Parameter {self.name}: invalid address {value!r}")
        address = self._parse_address(pieces[0])
        if len(pieces) == 2:
            prefix, has_prefix = self._parse_netmask(pieces[1]), True
        else:
            prefix, has_prefix = self.BITS, False
        self._address, self._prefix, self._has_prefix = address, prefix, has_prefix

    parse = assign

    def set_address(self, value: Union[str, int]) -> None:
        """Replace the address, keeping the prefix."""
        if isinstance(value, int) and not isinstance(value, bool):
            self._address = self._check_int(value)
        else:
            self._address = self._parse_address(str(value).strip())

    def set_netmask(self, value: Union[str, int]) -> None:
        """Set the prefix from a prefix length or a netmask literal."""
        if isinstance(value, int) and not isinstance(value, bool):
            if not (0 <= value <= self.BITS):
                raise RangeError(
                    f"Parameter {self.name}: prefix length {value} outside [0, {self.BITS}]"
                )
            prefix = value
        else:
            prefix = self._parse_netmask(str(value).strip())
        self._prefix, self._has_prefix = prefix, True

    def clear_netmask(self) -> None:
        self._prefix, self._has_prefix = self.BITS, False

    def set_parts(self, *parts: int, prefix: Optional[int] = None) -> None:
        """Set the address from its numeric groups and an optional prefix."""
        if len(parts) != self.PARTS:
            raise FormatError(
                f"Parameter {self.name}: expected {self.PARTS} address parts, got {len(parts)}"
            )
        width = self.BITS // self.PARTS
        limit = (1 << width) - 1
        address = 0
        for part in parts:
            if not (0 <= part <= limit):
                raise RangeError(f"Parameter {self.name}: address part {part} outside [0, {limit}]")
            address = (address << width) | part
        if prefix is not None and not (0 <= prefix <= self.BITS):
            raise RangeError(
                f"Parameter {self.name}: prefix length {prefix} outside [0, {self.BITS}]"
            )
        self._address = address
        if prefix is None:
            self._prefix, self._has_prefix = self.BITS, False
        else:
            self._prefix, self._has_prefix = prefix, True

    def network_contains(self, candidate: Union[str, "IPv4Value", "IPv6Value"]) -> bool:
        """Check whether candidate lies in the network of this address.

        A candidate of the other IP family, or one that does not parse,
        is never contained.
        """
        if isinstance(candidate, _Address):
            if candidate.VERSION != self.VERSION:
                return False
            other = candidate.address_int()
        else:
            text = str(candidate).strip()
            if address_family(text) != self.VERSION:
                return False
            probe = type(self)(self.name)
            try:
                probe.assign(text)
            except ParameterError:
                return False
            other = probe.address_int()
        mask = self.mask()
        return self._address & mask == other & mask

    def render_value(self) -> str:
        text = self.address()
        if self._has_prefix:
            text += f"/{self._prefix}"
        return text

    format = render_value

    def _check_int(self, value: int) -> int:
        if not (0 <= value <= (1 << self.BITS) - 1):
            raise RangeError(f"Parameter {self.name}: address {value} does not fit in {self.BITS} bits")
        return value

    def _copy_state(self, other: "_Address") -> None:
        self._address, self._prefix, self._has_prefix = (
            other._address, other._prefix, other._has_prefix)

    @abstractmethod
    def _parse_address(self, text: str) -> int:
        """Parse the address part; raises FormatError/RangeError on bad input."""

    @abstractmethod
    def _format_address(self, value: int) -> str:
        """Render an integer address in this family's notation."""

    @abstractmethod
    def _parse_netmask(self, text: str) -> int:
        """Parse the text after "/" into a prefix length."""

    def __eq__(self, other) -> bool:
        if not isinstance(other, _Address):
            return NotImplemented
        return (self.VERSION, self._address, self._prefix, self._has_prefix) == (
            other.VERSION, other._address, other._prefix, other._has_prefix)

    __hash__ = None


class IPv4Value(_Address):
    """IPv4 address with optional prefix.

    Accepted literals, for example:
        "192.168.0.1"
        "3232235521"
        "192.168.0.1/24"
        "192.168.0.1/255.255.255.0"
        "3232235521/4294967040"

    Default is 0.0.0.0 without prefix (prefix_bits() == 32).
    """

    VERSION = 4
    BITS = IPV4_BITS
    PARTS = IPV4_PARTS
    FAMILY = "inet"

    def address_compact(self) -> int:
        return self._address

    def netmask_compact(self) -> int:
        return simple_to_compact(self._prefix)

    def netmask_extended(self) -> str:
        """Netmask in dotted-quad form."""
        return _dotted(self.netmask_compact())

    def broadcast_address(self) -> str:
        return _dotted(self._address | (~self.netmask_compact() & IPV4_MAX))

    def _parse_address(self, text: str) -> int:
        if "." in text:
            return _parse_dotted(text, "IPv4 address")
        return parse_uint(text, "IPv4 address", IPV4_MAX)

    def _format_address(self, value: int) -> str:
        return _dotted(value)

    def _parse_netmask(self, text: str) -> int:
        if "." in text:
            return compact_to_simple(_parse_dotted(text, "IPv4 netmask"))
        value = parse_uint(text, "IPv4 netmask", IPV4_MAX)
        if value <= IPV4_BITS:
            return value
        # every non-zero contiguous mask has its top bit set
        if value < 1 << (IPV4_BITS - 1):
            raise RangeError(
                f"Parameter {self.name}: prefix length {value} outside [0, {IPV4_BITS}]"
            )
        return compact_to_simple(value)


class IPv6Value(_Address):
    """IPv6 address with optional prefix.

    Accepted literals, for example:
        "2001:0db8:0000:0000:0000:ff00:0042:8329"
        "2001:db8::ff00:42:8329"
        "::1"
        "::/128"
        "fe80::a0:502/64"

    Dotted IPv4 tails are not accepted here; use assign_translated() to
    embed an IPv4 address. Default is :: without prefix (prefix_bits() == 128).
    Rendering follows RFC 5952 (lower case, longest zero run compressed).
    """

    VERSION = 6
    BITS = IPV6_BITS
    PARTS = IPV6_PARTS
    FAMILY = "inet6"

    def assign_translated(self, ipv4: IPv4Value) -> None:
        """Assign the IPv4-mapped form (::ffff:a.b.c.d) of an IPv4 address.

        A prefix on the IPv4 address is offset by 96 bits.
        """
        self._address = IPV4_MAPPED_PREFIX | ipv4.address_compact()
        if ipv4.has_prefix():
            self._prefix = IPV4_MAPPED_PREFIX_LENGTH + ipv4.prefix_bits()
            self._has_prefix = True
        else:
            self._prefix, self._has_prefix = self.BITS, False

    def address_complete(self) -> str:
        """Address as eight four-digit groups."""
        return ":".join(f"{group:04x}" for group in self.parts())

    def _parse_address(self, text: str) -> int:
        if not text or contains_any(text, ".%"):
            raise FormatError(f"Parameter {self.name}: invalid IPv6 address {text!r}")
        try:
            return int(ipaddress.IPv6Address(text))
        except ipaddress.AddressValueError as e:
            raise FormatError(f"Parameter {self.name}: invalid IPv6 address {text!r}: {e}") from e

    def _format_address(self, value: int) -> str:
        groups = [(value >> (16 * (IPV6_PARTS - 1 - i))) & 0xFFFF for i in range(IPV6_PARTS)]
        run_start, run_length = -1, 0
        i = 0
        while i < IPV6_PARTS:
            if groups[i]:
                i += 1
                continue
            j = i
            while j < IPV6_PARTS and groups[j] == 0:
                j += 1
            if j - i > run_length:
                run_start, run_length = i, j - i
            i = j
        hextets = [f"{group:x}" for group in groups]
        if run_length < 2:
            return ":".join(hextets)
        head = ":".join(hextets[:run_start])
        tail = ":".join(hextets[run_start + run_length:])
        return f"{head}::{tail}"

    def _parse_netmask(self, text: str) -> int:
        return parse_uint(text, "IPv6 prefix length", IPV6_BITS)


AddressValue = Union[IPv4Value, IPv6Value]


def parse_address(text: str, name: str = "ip") -> AddressValue:
    """Build the concrete address type matching the literal's family.

    Raises:
        FormatError: If the literal is malformed
        RangeError: If a component is out of range
    """
    address: AddressValue = IPv6Value(name) if address_family(text) == 6 else IPv4Value(name)
    address.assign(text)
    return address
