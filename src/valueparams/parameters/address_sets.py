"""Family-agnostic address parameters and address collections.

- PolymorphicAddress: holds an IPv4Value or an IPv6Value, chosen from the
  shape of each assigned literal
- AddressRange: "[!]from:to" pair of polymorphic addresses
- AddressList: ordered list of concrete addresses
- PolymorphicAddressList: ordered list of polymorphic addresses
"""

from typing import List, Optional, Tuple, Union

from ..constants import IPV6_PARTS
from ..errors import FormatError, ParameterError, TypeMismatchError
from .addresses import AddressValue, IPv4Value, IPv6Value, address_family, parse_address
from .base import LeafParameter
from .boolean import BoolSymbol, BooleanCode
from .keyed import KeyedList


class PolymorphicAddress(LeafParameter):
    """Address parameter accepting both IPv4 and IPv6 literals.

    Each assignment detects the family (a colon means IPv6) and replaces the
    owned concrete address. While nothing is assigned the parameter renders
    as "" and behaves like an empty IPv4 address for numeric accessors.
    """

    def __init__(self, name: str = "ipx"):
        super().__init__(name)
        self._address: Optional[AddressValue] = None

    @property
    def concrete(self) -> Optional[AddressValue]:
        """The owned IPv4Value or IPv6Value, None while unassigned."""
        return self._address

    @property
    def version(self) -> Optional[int]:
        return None if self._address is None else self._address.version

    def is_assigned(self) -> bool:
        return self._address is not None

    def assign(self, value: Union[str, AddressValue, "PolymorphicAddress"]) -> None:
        """Assign an address literal of either family or an address parameter.

        Raises:
            FormatError: If the literal is malformed
            RangeError: If a component is out of range
        """
        if isinstance(value, PolymorphicAddress):
            self._copy_state(value)
        elif isinstance(value, (IPv4Value, IPv6Value)):
            self._address = self._clone(value)
        elif isinstance(value, str):
            self._address = parse_address(value.strip(), self.name)
        else:
            raise TypeMismatchError(
                f"Parameter {self.name} requires str or address, got {type(value).__name__}"
            )

    def clear(self) -> None:
        self._address = None

    def render_value(self) -> str:
        return "" if self._address is None else self._address.render_value()

    format = render_value

    def address(self) -> str:
        return "" if self._address is None else self._address.address()

    def family(self) -> str:
        return self._view().family()

    def prefix_bits(self) -> int:
        return self._view().prefix_bits()

    def has_prefix(self) -> bool:
        return self._view().has_prefix()

    def part(self, index: int) -> int:
        return self._view().part(index)

    def network_contains(self, candidate: Union[str, AddressValue]) -> bool:
        if self._address is None:
            return False
        return self._address.network_contains(candidate)

    def set_address(self, value: str) -> None:
        """Replace the address part.

        When the family of value differs from the held address (or nothing
        is held), the whole address is replaced and the prefix is dropped.
        """
        value = value.strip()
        if self._address is None or address_family(value) != self._address.version:
            self._address = parse_address(value, self.name)
        else:
            self._address.set_address(value)

    def set_netmask(self, value: Union[str, int]) -> None:
        """Set the prefix of the held address.

        Raises:
            FormatError: If no address has been assigned yet
        """
        if self._address is None:
            raise FormatError(f"Parameter {self.name}: no address assigned to set a netmask on")
        self._address.set_netmask(value)

    def _view(self) -> AddressValue:
        return self._address if self._address is not None else IPv4Value(self.name)

    def _clone(self, address: AddressValue) -> AddressValue:
        if isinstance(address, IPv6Value):
            clone: AddressValue = IPv6Value(self.name)
        else:
            clone = IPv4Value(self.name)
        clone._copy_state(address)
        return clone

    def _copy_state(self, other: "PolymorphicAddress") -> None:
        self._address = None if other._address is None else self._clone(other._address)


def _is_expanded(side: PolymorphicAddress, text: str) -> bool:
    """True unless side is IPv6 written with fewer than eight groups."""
    if side.version != 6:
        return True
    groups = text.split("/")[0].split(":")
    return len(groups) == IPV6_PARTS and all(groups)


class AddressRange(LeafParameter):
    """Range of addresses in "[!]from:to" form.

    A leading "!" negates the range. Either side may be empty. Because IPv6
    literals contain colons, the separating colon is the unique position
    that splits the text into two valid addresses of the same family.
    IPv6 sides render with all eight groups so the text parses back.

    Attributes:
        name: Parameter name
        from_address: Lower end of the range
        to_address: Upper end of the range
    """

    def __init__(self, name: str = "ipx_range"):
        super().__init__(name)
        self.from_address = PolymorphicAddress("from")
        self.to_address = PolymorphicAddress("to")
        self._not = BooleanCode("not", BoolSymbol.NO)

    @property
    def negated(self) -> bool:
        return self._not.is_true()

    def set_negated(self) -> None:
        self._not.yes()

    def unset_negated(self) -> None:
        self._not.no()

    @property
    def version(self) -> Optional[int]:
        return self.from_address.version

    def has_from(self) -> bool:
        return self.from_address.is_assigned()

    def has_to(self) -> bool:
        return self.to_address.is_assigned()

    def set_from(self, value: Union[str, AddressValue]) -> None:
        self.from_address.assign(value)

    def set_to(self, value: Union[str, AddressValue]) -> None:
        self.to_address.assign(value)

    def assign(self, value: str) -> None:
        """Assign "[!]from:to" text.

        When several colons split the text into two valid addresses, the
        split whose IPv6 sides are fully expanded wins, which is the form
        render_value() emits.

        Raises:
            FormatError: If no unique split yields two valid addresses
        """
        if not isinstance(value, str):
            raise TypeMismatchError(
                f"Parameter {self.name} requires str, got {type(value).__name__}"
            )
        text = value.strip()
        negated = text.startswith("!")
        if negated:
            text = text[1:]
        splits = self._valid_splits(text)
        expanded = [split for split in splits if split[2]]
        if len(splits) > 1 and expanded:
            splits = expanded
        if not splits:
            raise FormatError(f"Parameter {self.name}: invalid address range {value!r}")
        if len(splits) > 1:
            raise FormatError(f"Parameter {self.name}: ambiguous address range {value!r}")
        low, high, _ = splits[0]
        self.from_address._copy_state(low)
        self.to_address._copy_state(high)
        if negated:
            self.set_negated()
        else:
            self.unset_negated()

    def render_value(self) -> str:
        """Render "[!]from:to" with IPv6 sides in fully expanded form."""
        prefix = "!" if self.negated else ""
        low = self._render_side(self.from_address)
        high = self._render_side(self.to_address)
        return f"{prefix}{low}:{high}"

    @staticmethod
    def _render_side(side: PolymorphicAddress) -> str:
        address = side.concrete
        if not isinstance(address, IPv6Value):
            return side.render_value()
        text = address.address_complete()
        if address.has_prefix():
            text += f"/{address.prefix_bits()}"
        return text

    def _valid_splits(self, text: str) -> List[Tuple[PolymorphicAddress, PolymorphicAddress, bool]]:
        splits = []
        for pos, char in enumerate(text):
            if char != ":":
                continue
            left, right = text[:pos], text[pos + 1:]
            low = self._side(self.from_address.name, left)
            high = self._side(self.to_address.name, right)
            if low is None or high is None:
                continue
            if low.is_assigned() and high.is_assigned() and low.version != high.version:
                continue
            expanded = _is_expanded(low, left) and _is_expanded(high, right)
            splits.append((low, high, expanded))
        return splits

    @staticmethod
    def _side(name: str, text: str) -> Optional[PolymorphicAddress]:
        side = PolymorphicAddress(name)
        if not text:
            return side
        try:
            side.assign(text)
        except ParameterError:
            return None
        return side

    def _copy_state(self, other: "AddressRange") -> None:
        self.from_address._copy_state(other.from_address)
        self.to_address._copy_state(other.to_address)
        self._not.copy_from(other._not)


class AddressList(KeyedList[AddressValue]):
    """Ordered list of IPv4/IPv6 addresses keyed by their canonical text."""

    def __init__(self, name: str, element_name: str = "ip"):
        super().__init__(name, element_name)

    def _build(self, text: str) -> AddressValue:
        return parse_address(text, self.element_name)

    def network_availability(self, candidate: Union[str, AddressValue]) -> bool:
        """True if any listed network contains candidate."""
        return any(item.network_contains(candidate) for item in self)


class PolymorphicAddressList(KeyedList[PolymorphicAddress]):
    """Ordered list of polymorphic addresses keyed by their canonical text."""

    def __init__(self, name: str, element_name: str = "ipx"):
        super().__init__(name, element_name)

    def _build(self, text: str) -> PolymorphicAddress:
        address = PolymorphicAddress(self.element_name)
        address.assign(text)
        return address

    def network_availability(self, candidate: Union[str, AddressValue]) -> bool:
        """True if any listed network contains candidate."""
        return any(item.network_contains(candidate) for item in self)
