"""Leaf parameter contract.

A leaf parameter is a named, mutable value owned by a record. The record
framework populates it from markup nodes via assign_from() and emits it via
render_value(). Every concrete type validates completely before committing,
so a failed assignment leaves the previous value in place.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Protocol

from ..errors import TypeMismatchError


class ParamNode(Protocol):
    """Protocol for the markup leaf a parameter is read from."""

    name: str
    text: str


@dataclass(frozen=True)
class TextNode:
    """Plain markup leaf: element name plus its text content.

    Attributes:
        name: Element name, matched against the parameter name
        text: Raw text content of the element
    """
    name: str
    text: str


class LeafParameter(ABC):
    """Base class for all leaf parameter types.

    Subclasses implement assign() and render_value(). The base class provides
    node conversion, keyed-collection support and checked copying between
    parameters.
    """

    def __init__(self, name: str):
        if not name:
            raise ValueError(f"{type(self).__name__} name cannot be empty")
        self.name = name

    @abstractmethod
    def assign(self, value: Any) -> None:
        """Parse and validate value, then commit it.

        Raises:
            FormatError: If value is malformed
            RangeError: If a numeric component is out of range
        """

    @abstractmethod
    def render_value(self) -> str:
        """Render the canonical text of the current value."""

    def value(self) -> str:
        """Alias for render_value()."""
        return self.render_value()

    def key(self) -> str:
        """Key used when this parameter is stored in a keyed collection."""
        return self.render_value()

    def assign_from(self, node: ParamNode) -> None:
        """Populate this parameter from a markup node.

        Raises:
            TypeMismatchError: If the node belongs to another parameter
        """
        if node.name != self.name:
            raise TypeMismatchError(
                f"Parameter {self.name}: cannot assign from node {node.name!r}"
            )
        self.assign(node.text)

    def to_node(self) -> TextNode:
        """Render this parameter as a markup node."""
        return TextNode(self.name, self.render_value())

    def copy_from(self, other: "LeafParameter") -> None:
        """Copy the value of another parameter of the same type and name.

        Raises:
            TypeMismatchError: If other has a different type or name
        """
        if type(other) is not type(self):
            raise TypeMismatchError(
                f"Parameter {self.name}: cannot copy from {type(other).__name__}, "
                f"expected {type(self).__name__}"
            )
        if other.name != self.name:
            raise TypeMismatchError(
                f"Parameter {self.name}: different parameter names in assignment "
                f"({other.name!r})"
            )
        self._copy_state(other)

    def _copy_state(self, other: "LeafParameter") -> None:
        # Canonical text round-trips for every type unless overridden
        self.assign(other.render_value())

    def __str__(self) -> str:
        return self.render_value()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.render_value()!r})"
