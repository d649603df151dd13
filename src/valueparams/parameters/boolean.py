"""Boolean parameter with twelve textual spellings.

The spellings come in synonym pairs (yes/no, on/off, ...) laid out so that
every "true" spelling has an even ordinal and every "false" spelling an odd
one. The truth value is therefore the parity of the ordinal, while the
spelling the user chose is preserved for rendering.
"""

from enum import IntEnum
from typing import Any, Union

from ..errors import FormatError, RangeError, TypeMismatchError
from .base import LeafParameter


class BoolSymbol(IntEnum):
    """Ordinals of the boolean spellings. Even = true, odd = false."""
    YES = 0
    NO = 1
    ON = 2
    OFF = 3
    ENABLE = 4
    DISABLE = 5
    ENABLED = 6
    DISABLED = 7
    UP = 8
    DOWN = 9
    SET = 10
    UNSET = 11


SYMBOL_COUNT = len(BoolSymbol)
_BY_TEXT = {symbol.name.lower(): symbol for symbol in BoolSymbol}


class BooleanCode(LeafParameter):
    """Boolean parameter remembering which spelling it holds.

    Attributes:
        name: Parameter name
        ordinal: Current spelling, an ordinal in [0, 11]
    """

    def __init__(self, name: str, default: int = BoolSymbol.YES):
        super().__init__(name)
        self._ordinal = BoolSymbol.YES
        self._set_ordinal(default)

    @property
    def ordinal(self) -> int:
        return int(self._ordinal)

    @property
    def symbol(self) -> BoolSymbol:
        return self._ordinal

    def is_true(self) -> bool:
        return self._ordinal % 2 == 0

    def is_false(self) -> bool:
        return not self.is_true()

    def enable(self, hint: int = BoolSymbol.ENABLE) -> None:
        """Switch to the true spelling nearest to hint.

        An even hint is kept as is, an odd hint moves to the following even
        ordinal (wrapping around the symbol table).
        """
        hint = self._check_ordinal(hint)
        self._ordinal = BoolSymbol((hint + hint % 2) % SYMBOL_COUNT)

    def disable(self, hint: int = BoolSymbol.DISABLE) -> None:
        """Switch to the false spelling nearest to hint.

        An odd hint is kept as is, an even hint moves to the following odd
        ordinal.
        """
        hint = self._check_ordinal(hint)
        self._ordinal = BoolSymbol((hint + (1 - hint % 2)) % SYMBOL_COUNT)

    def yes(self) -> None:
        self.enable(BoolSymbol.YES)

    def no(self) -> None:
        self.disable(BoolSymbol.NO)

    def on(self) -> None:
        self.enable(BoolSymbol.ON)

    def off(self) -> None:
        self.disable(BoolSymbol.OFF)

    def enabled(self) -> None:
        self.enable(BoolSymbol.ENABLED)

    def disabled(self) -> None:
        self.disable(BoolSymbol.DISABLED)

    def up(self) -> None:
        self.enable(BoolSymbol.UP)

    def down(self) -> None:
        self.disable(BoolSymbol.DOWN)

    def set(self) -> None:
        self.enable(BoolSymbol.SET)

    def unset(self) -> None:
        self.disable(BoolSymbol.UNSET)

    def assign(self, value: Union[str, bool, int]) -> None:
        """Assign a spelling, a bool or an ordinal.

        Strings are matched case-insensitively against the twelve spellings.
        A bool selects yes/no.

        Raises:
            FormatError: If a string is not a known spelling
            RangeError: If an integer is not a valid ordinal
            TypeMismatchError: For any other value type
        """
        if isinstance(value, bool):
            if value:
                self.yes()
            else:
                self.no()
        elif isinstance(value, int):
            self._set_ordinal(value)
        elif isinstance(value, str):
            symbol = _BY_TEXT.get(value.strip().lower())
            if symbol is None:
                raise FormatError(
                    f"Parameter {self.name}: {value!r} is not a boolean spelling. "
                    f"Available: {sorted(_BY_TEXT)}"
                )
            self._ordinal = symbol
        else:
            raise TypeMismatchError(
                f"Parameter {self.name} requires str, bool or int, got {type(value).__name__}"
            )

    def render_value(self) -> str:
        return self._ordinal.name.lower()

    def _set_ordinal(self, value: int) -> None:
        self._ordinal = BoolSymbol(self._check_ordinal(value))

    def _check_ordinal(self, value: int) -> int:
        if not (0 <= value < SYMBOL_COUNT):
            raise RangeError(
                f"Parameter {self.name}: boolean ordinal {value} outside [0, {SYMBOL_COUNT - 1}]"
            )
        return int(value)

    def __bool__(self) -> bool:
        return self.is_true()

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, bool):
            return self.is_true() == other
        if isinstance(other, BooleanCode):
            return self._ordinal == other._ordinal
        if isinstance(other, int):
            return self.ordinal == other
        return NotImplemented

    __hash__ = None  # mutable
