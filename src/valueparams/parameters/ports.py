"""Port and port-range parameters.

Grammar (N is an integer in [0, 65535]):

    port := ["!"] ( [N] ":" N  |  N [":" [N]] )

- "80"         single port, from = to = 80
- "1000:2000"  closed range
- "1000:"      open range with no upper bound
- ":2000"      open range with no lower bound
- "!..."       negation of any of the above

A missing bound is stored as INVALID_PORT (-1) and means the range is
open on that side.
"""

from typing import Union

from ..constants import INVALID_PORT, MAX_PORT, MIN_PORT
from ..errors import FormatError, RangeError, TypeMismatchError
from .base import LeafParameter
from .keyed import KeyedList
from .validation import parse_uint


class PortValue(LeafParameter):
    """Single port or port range with optional negation.

    A new PortValue is empty: it renders as "" and contains no port.
    """

    def __init__(self, name: str = "port"):
        super().__init__(name)
        self._negated = False
        self._is_range = False
        self._from = INVALID_PORT
        self._to = INVALID_PORT

    @property
    def negated(self) -> bool:
        return self._negated

    @property
    def is_range(self) -> bool:
        return self._is_range

    @property
    def from_port(self) -> int:
        return self._from

    @property
    def to_port(self) -> int:
        return self._to

    def is_empty(self) -> bool:
        return not self._is_range and self._from == INVALID_PORT

    def assign(self, value: Union[str, int]) -> None:
        """Assign a port number or port/range text.

        Raises:
            FormatError: If text does not match the port grammar
            RangeError: If a port is outside [0, 65535] or from > to
        """
        if isinstance(value, int) and not isinstance(value, bool):
            if not (MIN_PORT <= value <= MAX_PORT):
                raise RangeError(
                    f"Parameter {self.name}: port {value} outside [{MIN_PORT}, {MAX_PORT}]"
                )
            self._negated, self._is_range, self._from, self._to = False, False, value, value
            return
        if not isinstance(value, str):
            raise TypeMismatchError(
                f"Parameter {self.name} requires str or int, got {type(value).__name__}"
            )
        text = value.strip()
        negated = text.startswith("!")
        body = text[1:] if negated else text
        pieces = body.split(":")
        if len(pieces) == 1:
            low = high = self._parse_port(pieces[0])
            is_range = False
        elif len(pieces) == 2 and any(pieces):
            low = self._parse_port(pieces[0]) if pieces[0] else INVALID_PORT
            high = self._parse_port(pieces[1]) if pieces[1] else INVALID_PORT
            is_range = True
            if low != INVALID_PORT and high != INVALID_PORT and low > high:
                raise RangeError(f"Parameter {self.name}: port range {value!r} has from > to")
        else:
            raise FormatError(f"Parameter {self.name}: invalid port {value!r}")
        self._negated, self._is_range, self._from, self._to = negated, is_range, low, high

    def contains(self, port: int) -> bool:
        """Check whether port is matched, honoring open bounds and negation."""
        if self.is_empty():
            return False
        low = MIN_PORT if self._from == INVALID_PORT else self._from
        high = MAX_PORT if self._to == INVALID_PORT else self._to
        return (low <= port <= high) != self._negated

    def render_value(self) -> str:
        if self.is_empty():
            return ""
        text = "!" if self._negated else ""
        if not self._is_range:
            return f"{text}{self._from}"
        low = "" if self._from == INVALID_PORT else str(self._from)
        high = "" if self._to == INVALID_PORT else str(self._to)
        return f"{text}{low}:{high}"

    def _parse_port(self, text: str) -> int:
        return parse_uint(text, f"port for {self.name}", MAX_PORT, minimum=MIN_PORT)

    def _copy_state(self, other: "PortValue") -> None:
        self._negated, self._is_range = other._negated, other._is_range
        self._from, self._to = other._from, other._to


class PortList(KeyedList[PortValue]):
    """Ordered list of ports keyed by their canonical text."""

    def __init__(self, name: str, element_name: str = "port"):
        super().__init__(name, element_name)

    def _build(self, text: str) -> PortValue:
        port = PortValue(self.element_name)
        port.assign(text)
        return port

    def add_port(self, value: Union[str, int]) -> PortValue:
        """Add a port, replacing an equal one already in the list."""
        return self.add(str(value))

    def delete_port(self, value: Union[str, int]) -> None:
        self.remove(str(value))

    def contains(self, port: int) -> bool:
        """True if any listed port or range matches port."""
        return any(item.contains(port) for item in self)
