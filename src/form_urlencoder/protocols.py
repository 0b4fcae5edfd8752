"""Encodable and Encoder Protocols for custom value encoding.

Objects that are not plain mappings, sequences, dataclasses or scalars can
take part in form encoding by implementing ``encode_form``.  No inheritance is
required: any class with a conformant method passes ``isinstance`` checks.

Example::

    from form_urlencoder.protocols import Encodable, Encoder

    class Point:
        def __init__(self, x: int, y: int) -> None:
            self.x, self.y = x, y

        def encode_form(self, encoder: Encoder) -> None:
            container = encoder.keyed_container()
            container.encode(self.x, "x")
            container.encode(self.y, "y")

    assert isinstance(Point(1, 2), Encodable)  # True, structural conformance
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from form_urlencoder.tree.path import CodingPath
    from form_urlencoder.visitor import (
        KeyedContainer,
        SingleValueContainer,
        UnkeyedContainer,
    )


@runtime_checkable
class Encoder(Protocol):
    """Structural protocol for the object handed to ``encode_form``.

    An encoder is positioned at ``coding_path`` and hands out exactly one
    kind of container for the value being encoded there.
    """

    coding_path: CodingPath

    def keyed_container(self) -> KeyedContainer: ...

    def unkeyed_container(self) -> UnkeyedContainer: ...

    def single_value_container(self) -> SingleValueContainer: ...


@runtime_checkable
class Encodable(Protocol):
    """Structural protocol for values that drive an Encoder themselves.

    The ``encode_form`` method must request containers from ``encoder`` and
    write its content through them.  It may raise any ``FormEncodingError``.
    """

    def encode_form(self, encoder: Encoder) -> None: ...
