"""FormVisitor and its containers: the front end that builds the form tree.

A value is encoded by handing it a FormVisitor positioned at some coding
path.  The value asks the visitor for exactly one container:

- KeyedContainer:       writes by field name (mappings, dataclasses)
- UnkeyedContainer:     appends in order (lists, tuples, numpy arrays)
- SingleValueContainer: writes one scalar, or delegates a nested value

Every visitor and container spawned during one encode call holds the same
FormContext, so all writes land in one shared tree through ``set_node``.
Containers never copy the tree; they only extend their own coding path.

Architecture:
- ``encode_value`` is the dispatch that lets plain Python values drive a
  visitor the way an ``Encodable`` object does through ``encode_form``.
- SingleValueContainer is the only stateful container: it is write-once and
  raises DoubleEncodeError on a second write.
- UnkeyedContainer assigns indices from a running ``count``, so sequences
  only ever grow by appending and never contain gaps.
"""

from __future__ import annotations

import dataclasses
import decimal
import enum
from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np

from form_urlencoder.config import BoolEncoding
from form_urlencoder.errors import DoubleEncodeError, UnsupportedValueError
from form_urlencoder.protocols import Encodable
from form_urlencoder.tree.nodes import FormContext, FormNode
from form_urlencoder.tree.path import CodingKey, CodingPath, field, index, set_node

__all__ = [
    "FormVisitor",
    "KeyedContainer",
    "SingleValueContainer",
    "UnkeyedContainer",
    "encode_value",
]


def _scalar_text(value: Any, bool_encoding: BoolEncoding) -> str | None:
    """Return the canonical text of a scalar, or None for non-scalars."""
    # bool MUST be checked before int: bool subclasses int
    if isinstance(value, (bool, np.bool_)):
        return bool_encoding.encode(bool(value))
    if isinstance(value, str):
        return str.__str__(value)
    if isinstance(value, np.integer):
        return str(int(value))
    if isinstance(value, np.floating):
        return str(value)
    if isinstance(value, int):
        return int.__repr__(value)
    if isinstance(value, float):
        return float.__repr__(value)
    if isinstance(value, decimal.Decimal):
        return str(value)
    return None


def _check_encodable_text(text: str, coding_path: CodingPath) -> None:
    """Raise UnsupportedValueError if ``text`` has no UTF-8 encoding."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        msg = f"text is not valid Unicode: {exc.reason}"
        raise UnsupportedValueError(msg, coding_path) from exc


def _as_field(key: str | CodingKey) -> CodingKey:
    if isinstance(key, CodingKey):
        return key
    return field(key)


class FormVisitor:
    """Encoder positioned at one coding path of a shared form tree.

    Satisfies the ``Encoder`` Protocol structurally.

    Attributes:
        context:       The per-call holder of the shared root node.
        coding_path:   Path of the coordinate this visitor writes to.
        bool_encoding: Text rendering used for boolean scalars.
    """

    def __init__(
        self,
        context: FormContext,
        coding_path: CodingPath = (),
        bool_encoding: BoolEncoding = BoolEncoding.NUMERIC,
    ) -> None:
        self.context = context
        self.coding_path = coding_path
        self.bool_encoding = bool_encoding

    @property
    def user_info(self) -> dict[str, Any]:
        # No contextual user info is supported.
        return {}

    def keyed_container(self) -> KeyedContainer:
        return KeyedContainer(self.context, self.coding_path, self.bool_encoding)

    def unkeyed_container(self) -> UnkeyedContainer:
        return UnkeyedContainer(self.context, self.coding_path, self.bool_encoding)

    def single_value_container(self) -> SingleValueContainer:
        return SingleValueContainer(
            self.context, self.coding_path, self.bool_encoding
        )

    def __repr__(self) -> str:
        path = ".".join(key.string_value for key in self.coding_path)
        return f"FormVisitor(path={path!r})"


class KeyedContainer:
    """Container that writes values under field names of the current path."""

    def __init__(
        self,
        context: FormContext,
        coding_path: CodingPath,
        bool_encoding: BoolEncoding,
    ) -> None:
        self.context = context
        self.coding_path = coding_path
        self.bool_encoding = bool_encoding

    def _nested_coding_path(self, key: str | CodingKey) -> CodingPath:
        path = (*self.coding_path, _as_field(key))
        _check_encodable_text(path[-1].string_value, path)
        return path

    def encode_nil(self, key: str | CodingKey) -> None:
        """Always fails: form text has no representation for None."""
        msg = f"cannot encode None for key {str(key)!r}"
        raise UnsupportedValueError(msg, self._nested_coding_path(key))

    def encode(self, value: Any, key: str | CodingKey) -> None:
        """Encode ``value`` at the current path extended by ``key``."""
        container = self.nested_single_value_container(key)
        container.encode(value)

    def encode_if_present(self, value: Any, key: str | CodingKey) -> None:
        """Encode ``value`` under ``key`` unless it is None."""
        if value is not None:
            self.encode(value, key)

    def nested_single_value_container(
        self, key: str | CodingKey
    ) -> SingleValueContainer:
        return SingleValueContainer(
            self.context, self._nested_coding_path(key), self.bool_encoding
        )

    def nested_keyed_container(self, key: str | CodingKey) -> KeyedContainer:
        return KeyedContainer(
            self.context, self._nested_coding_path(key), self.bool_encoding
        )

    def nested_unkeyed_container(self, key: str | CodingKey) -> UnkeyedContainer:
        return UnkeyedContainer(
            self.context, self._nested_coding_path(key), self.bool_encoding
        )

    def super_encoder(self, key: str | CodingKey | None = None) -> FormVisitor:
        """Return a FormVisitor at the current path, or at path + ``key``."""
        if key is None:
            return FormVisitor(self.context, self.coding_path, self.bool_encoding)
        return FormVisitor(
            self.context, self._nested_coding_path(key), self.bool_encoding
        )


class UnkeyedContainer:
    """Container that appends values at successive indices of the current path.

    Attributes:
        count: Number of elements appended so far; the next element is
            written at ``coding_path + (index(count),)``.
    """

    def __init__(
        self,
        context: FormContext,
        coding_path: CodingPath,
        bool_encoding: BoolEncoding,
    ) -> None:
        self.context = context
        self.coding_path = coding_path
        self.bool_encoding = bool_encoding
        self.count = 0

    @property
    def nested_coding_path(self) -> CodingPath:
        return (*self.coding_path, index(self.count))

    def _next_coding_path(self) -> CodingPath:
        path = self.nested_coding_path
        self.count += 1
        return path

    def encode_nil(self) -> None:
        """Always fails: form text has no representation for None."""
        msg = "cannot encode None as a sequence element"
        raise UnsupportedValueError(msg, self.nested_coding_path)

    def encode(self, value: Any) -> None:
        """Append ``value`` as the next element."""
        container = self.nested_single_value_container()
        container.encode(value)

    def nested_single_value_container(self) -> SingleValueContainer:
        return SingleValueContainer(
            self.context, self._next_coding_path(), self.bool_encoding
        )

    def nested_keyed_container(self) -> KeyedContainer:
        return KeyedContainer(
            self.context, self._next_coding_path(), self.bool_encoding
        )

    def nested_unkeyed_container(self) -> UnkeyedContainer:
        return UnkeyedContainer(
            self.context, self._next_coding_path(), self.bool_encoding
        )

    def super_encoder(self) -> FormVisitor:
        """Return a FormVisitor positioned at the next element.

        The visitor sits at the new element rather than at this container's
        own path, and the element's index is consumed.
        """
        return FormVisitor(self.context, self._next_coding_path(), self.bool_encoding)


class SingleValueContainer:
    """Write-once container for the value at the current path.

    Scalars are converted to text and stored directly.  Any other value is
    delegated to a fresh FormVisitor bound to the same path and tree, so
    nested mappings and sequences are encoded exactly as at the top level.
    """

    def __init__(
        self,
        context: FormContext,
        coding_path: CodingPath,
        bool_encoding: BoolEncoding,
    ) -> None:
        self.context = context
        self.coding_path = coding_path
        self.bool_encoding = bool_encoding
        self._can_encode_new_value = True

    def _check_can_encode(self) -> None:
        if not self._can_encode_new_value:
            msg = (
                "attempt to encode value through single value container "
                "when a value was already encoded"
            )
            raise DoubleEncodeError(msg, self.coding_path)

    def encode_nil(self) -> None:
        """Always fails: form text has no representation for None."""
        self._check_can_encode()
        self._can_encode_new_value = False
        raise UnsupportedValueError("cannot encode None", self.coding_path)

    def encode(self, value: Any) -> None:
        """Write ``value`` at the current path.

        Raises:
            DoubleEncodeError: If this container was already written.
            UnsupportedValueError: If ``value`` (or anything nested in it)
                has no form representation.
        """
        self._check_can_encode()
        self._can_encode_new_value = False

        text = _scalar_text(value, self.bool_encoding)
        if text is not None:
            _check_encodable_text(text, self.coding_path)
            set_node(self.context.root, FormNode.scalar(text), self.coding_path)
            return

        encoder = FormVisitor(self.context, self.coding_path, self.bool_encoding)
        encode_value(value, encoder)


def _is_sequence(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (Sequence, np.ndarray))


def encode_value(value: Any, encoder: FormVisitor) -> None:
    """Drive ``encoder`` with ``value``.

    Dispatch order:
    1. None                  -> single value ``encode_nil`` (always fails)
    2. Encodable objects     -> ``value.encode_form(encoder)``
    3. Scalars               -> single value ``encode``
    4. Enum members          -> their ``.value``
    5. Dataclass instances   -> keyed container over the fields
    6. Mappings              -> keyed container (str or int keys)
    7. Sequences / ndarrays  -> unkeyed container, in order

    Raises:
        UnsupportedValueError: For None and for values of any other type.
    """
    if value is None:
        encoder.single_value_container().encode_nil()
        return

    if isinstance(value, Encodable):
        value.encode_form(encoder)
        return

    if _scalar_text(value, encoder.bool_encoding) is not None:
        encoder.single_value_container().encode(value)
        return

    if isinstance(value, enum.Enum):
        encode_value(value.value, encoder)
        return

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        container = encoder.keyed_container()
        for dc_field in dataclasses.fields(value):
            container.encode(getattr(value, dc_field.name), dc_field.name)
        return

    if isinstance(value, Mapping):
        container = encoder.keyed_container()
        for key, item in value.items():
            if isinstance(key, bool) or not isinstance(key, (str, int)):
                msg = f"mapping keys must be str or int, got {type(key).__name__}"
                raise UnsupportedValueError(msg, encoder.coding_path)
            container.encode(item, str(key))
        return

    if isinstance(value, np.ndarray) and value.ndim == 0:
        encode_value(value[()], encoder)
        return

    if _is_sequence(value):
        container = encoder.unkeyed_container()
        for item in value:
            container.encode(item)
        return

    msg = f"cannot encode values of type {type(value).__name__}"
    raise UnsupportedValueError(msg, encoder.coding_path)
