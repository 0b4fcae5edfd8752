"""Coding paths and the path-addressed read/write algorithm.

A coding path is an immutable tuple of CodingKey segments.  A segment is
either a field name or a non-negative index; an index segment also renders
as its decimal text so it can be used wherever a field name is expected.

``set_node`` grows intermediate structure on demand, which lets the encoder
record values whose final shape (e.g. a sequence's length) is only known once
the whole input has been visited:

    set_node(root, FormNode.scalar("1"), (field("a"), field("b")))
    # root: RECORD {"a": RECORD {"b": SCALAR "1"}}
"""

from __future__ import annotations

from dataclasses import dataclass

from form_urlencoder.tree.nodes import FormNode, NodeType

__all__ = ["CodingKey", "CodingPath", "field", "get_node", "index", "set_node"]


@dataclass(frozen=True, slots=True)
class CodingKey:
    """One segment of a coding path.

    Attributes:
        string_value: Field name, or the decimal text of the index.
        int_value:    The index for index segments; None for field segments.
    """

    string_value: str
    int_value: int | None = None

    def __post_init__(self) -> None:
        if self.int_value is not None and self.int_value < 0:
            msg = f"index segments must be non-negative, got {self.int_value}"
            raise ValueError(msg)

    @property
    def is_index(self) -> bool:
        return self.int_value is not None

    def __str__(self) -> str:
        return self.string_value


CodingPath = tuple[CodingKey, ...]


def field(name: str) -> CodingKey:
    """Build a field-name segment."""
    return CodingKey(name)


def index(position: int) -> CodingKey:
    """Build an index segment; its string value is the decimal index."""
    return CodingKey(str(position), position)


def _existing_child(node: FormNode, segment: CodingKey) -> FormNode | None:
    if segment.int_value is not None:
        items = node.as_sequence()
        if items is not None and segment.int_value < len(items):
            return items[segment.int_value]
        return None
    entries = node.as_record()
    if entries is None:
        return None
    return entries.get(segment.string_value)


def _attach(node: FormNode, segment: CodingKey, child: FormNode) -> None:
    if segment.int_value is not None:
        items = node.as_sequence()
        if items is None:
            node.node_type = NodeType.SEQUENCE
            node.value = [child]
        elif segment.int_value < len(items):
            items[segment.int_value] = child
        else:
            items.append(child)
    else:
        entries = node.as_record()
        if entries is None:
            node.node_type = NodeType.RECORD
            node.value = {segment.string_value: child}
        else:
            entries[segment.string_value] = child


def set_node(node: FormNode, value: FormNode, path: CodingPath) -> None:
    """Set the node reachable by ``path`` inside ``node`` to ``value``.

    Missing intermediate nodes are created along the way.  A missing slot
    below an index segment starts out as an empty RECORD; the final write
    turns it into whatever shape the next segment requires.

    The walk is iterative, so path length is not bounded by the interpreter's
    recursion limit.

    Args:
        node:  The node to update in place (usually the context root).
        value: The node to store at ``path``.
        path:  Segments leading from ``node`` to the target coordinate.
    """
    if not path:
        node.node_type = value.node_type
        node.value = value.value
        return

    # Descend to the parent of the target, remembering every hop.
    trail: list[tuple[FormNode, CodingKey]] = []
    current = node
    for segment in path[:-1]:
        existing = _existing_child(current, segment)
        trail.append((current, segment))
        current = FormNode.record() if existing is None else existing
    trail.append((current, path[-1]))

    # Write back from the deepest hop so each parent adopts the shape
    # its segment demands.
    child = value
    for parent, segment in reversed(trail):
        _attach(parent, segment, child)
        child = parent


def get_node(node: FormNode, path: CodingPath) -> FormNode | None:
    """Return the node reachable by ``path``, or None if any step is missing.

    Field segments look up RECORD entries; index segments index into
    SEQUENCE items.  A shape that does not match the segment kind counts as
    missing.
    """
    current = node
    for segment in path:
        if segment.int_value is None:
            entries = current.as_record()
            if entries is None or segment.string_value not in entries:
                return None
            current = entries[segment.string_value]
        else:
            items = current.as_sequence()
            if items is None or segment.int_value >= len(items):
                return None
            current = items[segment.int_value]
    return current
