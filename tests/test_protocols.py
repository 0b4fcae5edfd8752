"""Tests for the Encodable and Encoder structural protocols."""

from __future__ import annotations

from form_urlencoder.protocols import Encodable, Encoder
from form_urlencoder.tree.nodes import FormContext
from form_urlencoder.visitor import FormVisitor


class _Conformant:
    def encode_form(self, encoder: Encoder) -> None:
        encoder.single_value_container().encode("x")


class _NonConformant:
    def encode(self) -> str:
        return "x"


def test_conformant_class_is_encodable() -> None:
    assert isinstance(_Conformant(), Encodable)


def test_missing_method_is_not_encodable() -> None:
    assert not isinstance(_NonConformant(), Encodable)


def test_strings_are_not_encodable() -> None:
    """str.encode must not be mistaken for the protocol method."""
    assert not isinstance("text", Encodable)


def test_form_visitor_is_an_encoder() -> None:
    assert isinstance(FormVisitor(FormContext()), Encoder)
