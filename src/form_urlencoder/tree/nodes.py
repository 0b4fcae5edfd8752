"""FormNode dataclass and NodeType StrEnum for the form-encoding tree.

Every coordinate of the output tree holds a FormNode of exactly one of three
shapes: a SCALAR leaf with its final text, an index-addressed SEQUENCE, or a
key-addressed RECORD.  FormContext is the single mutable holder of the root
node shared by every visitor spawned during one encode call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

__all__ = ["FormContext", "FormNode", "NodeType"]


class NodeType(StrEnum):
    """Enumeration of the three node shapes in a form tree.

    - SCALAR   -> "scalar"   : A leaf holding the text of a primitive value
    - SEQUENCE -> "sequence" : An ordered list of nodes (no gaps)
    - RECORD   -> "record"   : A mapping from field name to node (unique keys)
    """

    SCALAR = auto()
    SEQUENCE = auto()
    RECORD = auto()


@dataclass(slots=True)
class FormNode:
    """A node in the form-encoding tree.

    Attributes:
        node_type: Which shape this node has (see NodeType).
        value:     ``str`` for SCALAR, ``list[FormNode]`` for SEQUENCE,
                   ``dict[str, FormNode]`` for RECORD.

    Build nodes through ``scalar``, ``sequence`` or ``record`` so the payload
    always matches ``node_type``.
    """

    node_type: NodeType
    value: Any

    @classmethod
    def scalar(cls, text: str) -> FormNode:
        return cls(NodeType.SCALAR, text)

    @classmethod
    def sequence(cls, items: list[FormNode] | None = None) -> FormNode:
        return cls(NodeType.SEQUENCE, [] if items is None else items)

    @classmethod
    def record(cls, entries: dict[str, FormNode] | None = None) -> FormNode:
        return cls(NodeType.RECORD, {} if entries is None else entries)

    def as_scalar(self) -> str | None:
        """Return the scalar text, or None if this node is not a SCALAR."""
        if self.node_type is NodeType.SCALAR:
            return self.value  # type: ignore[no-any-return]
        return None

    def as_sequence(self) -> list[FormNode] | None:
        """Return the item list, or None if this node is not a SEQUENCE."""
        if self.node_type is NodeType.SEQUENCE:
            return self.value  # type: ignore[no-any-return]
        return None

    def as_record(self) -> dict[str, FormNode] | None:
        """Return the entry mapping, or None if this node is not a RECORD."""
        if self.node_type is NodeType.RECORD:
            return self.value  # type: ignore[no-any-return]
        return None

    def to_python(self) -> Any:
        """Convert the subtree to plain ``str`` / ``list`` / ``dict`` values."""
        if self.node_type is NodeType.SCALAR:
            return self.value
        if self.node_type is NodeType.SEQUENCE:
            return [item.to_python() for item in self.value]
        return {key: child.to_python() for key, child in self.value.items()}


class FormContext:
    """Mutable holder of the root node for a single encode call.

    One instance is created per top-level call and passed by reference to
    every visitor and container; none is ever reused across calls.
    """

    __slots__ = ("root",)

    def __init__(self, root: FormNode | None = None) -> None:
        self.root = FormNode.record() if root is None else root

    def __repr__(self) -> str:
        return f"FormContext(root={self.root!r})"
