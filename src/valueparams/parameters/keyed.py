"""Ordered, keyed collections of leaf parameters.

A KeyedList keeps its elements in insertion order and keys each element by
its canonical text. Adding an element whose key already exists replaces
the stored element in place. The list value renders as:
- "" when empty
- the bare element when it holds one element
- open + comma-joined elements + close otherwise (default "[a,b]")
"""

from abc import abstractmethod
from typing import Any, Dict, Generic, Iterable, Iterator, List, TypeVar, Union

from ..constants import LIST_CLOSE, LIST_OPEN
from ..errors import TypeMismatchError
from ..utils.text import render_list, split_list
from .base import LeafParameter

T = TypeVar("T", bound=LeafParameter)


class KeyedList(LeafParameter, Generic[T]):
    """Base class for list-valued parameters.

    Subclasses implement _build() to turn one element text into a validated
    element parameter.

    Attributes:
        name: Parameter name
        element_name: Name given to element parameters
    """

    def __init__(self, name: str, element_name: str):
        super().__init__(name)
        self.element_name = element_name
        self._items: Dict[str, T] = {}
        self._open = LIST_OPEN
        self._close = LIST_CLOSE

    @abstractmethod
    def _build(self, text: str) -> T:
        """Parse one element; raises FormatError/RangeError on bad input."""

    def set_surrounding_characters(self, open_char: str, close_char: str) -> None:
        """Change the characters surrounding multi-element values."""
        if not open_char or not close_char:
            raise ValueError("Surrounding characters cannot be empty")
        self._open, self._close = open_char, close_char

    def add(self, value: Union[str, T]) -> T:
        """Add one element, replacing an element with the same key."""
        element = self._coerce(value)
        self._items[element.key()] = element
        return element

    def remove(self, value: Union[str, T]) -> None:
        """Remove the element with the same key.

        Raises:
            KeyError: If no such element is stored
        """
        key = self._coerce(value).key()
        if key not in self._items:
            raise KeyError(f"{key!r} not in {self.name}. Available: {list(self._items)}")
        del self._items[key]

    def get(self, value: Union[str, T]) -> T:
        """Return the stored element with the same key."""
        key = self._coerce(value).key()
        if key not in self._items:
            raise KeyError(f"{key!r} not in {self.name}. Available: {list(self._items)}")
        return self._items[key]

    def clear(self) -> None:
        self._items.clear()

    def keys(self) -> List[str]:
        return list(self._items)

    def assign(self, value: Union[str, Iterable[str]]) -> None:
        """Replace all elements from list text or an iterable of texts.

        Every element is validated before any change is committed.
        """
        if isinstance(value, str):
            texts = split_list(value, self._open, self._close)
        elif isinstance(value, (list, tuple)):
            texts = list(value)
        else:
            raise TypeMismatchError(
                f"Parameter {self.name} requires str or list, got {type(value).__name__}"
            )
        items: Dict[str, T] = {}
        for text in texts:
            element = self._coerce(text)
            items[element.key()] = element
        self._items = items

    def render_value(self) -> str:
        return render_list((item.render_value() for item in self._items.values()),
                           self._open, self._close)

    def _coerce(self, value: Any) -> T:
        if isinstance(value, LeafParameter):
            element = self._build(value.render_value())
        elif isinstance(value, str):
            element = self._build(value.strip())
        else:
            raise TypeMismatchError(
                f"Parameter {self.name} elements must be str, got {type(value).__name__}"
            )
        return element

    def _copy_state(self, other: "KeyedList") -> None:
        self._open, self._close = other._open, other._close
        self.assign([item.render_value() for item in other])

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))

    def __contains__(self, value: Any) -> bool:
        try:
            key = self._coerce(value).key()
        except (ValueError, TypeError):
            return False
        return key in self._items
