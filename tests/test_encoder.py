"""Tests for URLEncodedFormEncoder.

Covers configuration wiring, the InvalidRootError guard, bytes output,
encode_tree(), error propagation, reuse across calls and debug logging.
"""

from __future__ import annotations

import logging

import pytest

from form_urlencoder.config import ArrayEncoding, BoolEncoding, EncoderConfig
from form_urlencoder.encoder import URLEncodedFormEncoder
from form_urlencoder.errors import (
    FormEncodingError,
    InvalidRootError,
    UnsupportedValueError,
)
from form_urlencoder.tree.nodes import NodeType


@pytest.fixture
def encoder() -> URLEncodedFormEncoder:
    """A fresh default-configured encoder for each test."""
    return URLEncodedFormEncoder()


class TestConfiguration:
    def test_defaults(self, encoder: URLEncodedFormEncoder) -> None:
        assert encoder.array_encoding is ArrayEncoding.BRACKETS
        assert encoder.bool_encoding is BoolEncoding.NUMERIC

    def test_config_object(self) -> None:
        encoder = URLEncodedFormEncoder(
            EncoderConfig(array_encoding=ArrayEncoding.NO_BRACKETS)
        )
        assert encoder.array_encoding is ArrayEncoding.NO_BRACKETS
        assert encoder.bool_encoding is BoolEncoding.NUMERIC

    def test_keyword_overrides_config(self) -> None:
        encoder = URLEncodedFormEncoder(
            EncoderConfig(bool_encoding=BoolEncoding.LITERAL),
            bool_encoding="numeric",
        )
        assert encoder.bool_encoding is BoolEncoding.NUMERIC

    def test_keyword_strings(self) -> None:
        encoder = URLEncodedFormEncoder(
            array_encoding="no_brackets", bool_encoding="literal"
        )
        assert encoder.encode({"xs": [True, False]}) == "xs=true&xs=false"

    def test_invalid_keyword(self) -> None:
        with pytest.raises(ValueError, match="array_encoding"):
            URLEncodedFormEncoder(array_encoding="commas")

    def test_repr(self) -> None:
        encoder = URLEncodedFormEncoder(bool_encoding="literal")
        assert repr(encoder) == (
            "URLEncodedFormEncoder(array_encoding='brackets', bool_encoding='literal')"
        )


class TestEncode:
    def test_simple_record(self, encoder: URLEncodedFormEncoder) -> None:
        assert encoder.encode({"name": "Ann", "age": 31}) == "name=Ann&age=31"

    def test_nested_record(self, encoder: URLEncodedFormEncoder) -> None:
        assert encoder.encode({"a": {"b": 1}}) == "a%5Bb%5D=1"

    def test_sequence_brackets(self, encoder: URLEncodedFormEncoder) -> None:
        assert encoder.encode({"xs": ["a", "b"]}) == "xs%5B%5D=a&xs%5B%5D=b"

    def test_sequence_no_brackets(self) -> None:
        encoder = URLEncodedFormEncoder(array_encoding=ArrayEncoding.NO_BRACKETS)
        assert encoder.encode({"xs": ["a", "b"]}) == "xs=a&xs=b"

    def test_bool_policies(self) -> None:
        assert URLEncodedFormEncoder().encode({"ok": True}) == "ok=1"
        literal = URLEncodedFormEncoder(bool_encoding=BoolEncoding.LITERAL)
        assert literal.encode({"ok": True}) == "ok=true"

    def test_empty_record(self, encoder: URLEncodedFormEncoder) -> None:
        assert encoder.encode({}) == ""

    def test_encode_bytes(self, encoder: URLEncodedFormEncoder) -> None:
        data = encoder.encode_bytes({"name": "Zoë"})
        assert isinstance(data, bytes)
        assert data == b"name=Zo%C3%AB"

    def test_encoder_is_reusable(self, encoder: URLEncodedFormEncoder) -> None:
        first = encoder.encode({"a": 1})
        second = encoder.encode({"b": 2})
        assert first == "a=1"
        assert second == "b=2"

    def test_failed_call_does_not_leak_into_next(
        self, encoder: URLEncodedFormEncoder
    ) -> None:
        with pytest.raises(UnsupportedValueError):
            encoder.encode({"a": 1, "b": None})
        assert encoder.encode({"c": 3}) == "c=3"


class TestInvalidRoot:
    @pytest.mark.parametrize("value", ["text", 42, 1.5, True, ["a", "b"]])
    def test_non_record_roots(
        self, encoder: URLEncodedFormEncoder, value: object
    ) -> None:
        with pytest.raises(InvalidRootError, match="must be a record"):
            encoder.encode(value)

    def test_is_a_form_encoding_error(self, encoder: URLEncodedFormEncoder) -> None:
        with pytest.raises(FormEncodingError):
            encoder.encode("text")

    def test_encode_bytes_also_checks_root(
        self, encoder: URLEncodedFormEncoder
    ) -> None:
        with pytest.raises(InvalidRootError):
            encoder.encode_bytes([1])


class TestEncodeTree:
    def test_returns_root_without_root_check(
        self, encoder: URLEncodedFormEncoder
    ) -> None:
        root = encoder.encode_tree(["a", "b"])
        assert root.node_type == NodeType.SEQUENCE
        assert root.to_python() == ["a", "b"]

    def test_each_call_gets_a_fresh_tree(self, encoder: URLEncodedFormEncoder) -> None:
        first = encoder.encode_tree({"a": 1})
        second = encoder.encode_tree({"b": 2})
        assert first is not second
        assert first.to_python() == {"a": "1"}
        assert second.to_python() == {"b": "2"}

    def test_bool_encoding_applies(self) -> None:
        encoder = URLEncodedFormEncoder(bool_encoding="literal")
        assert encoder.encode_tree({"f": False}).to_python() == {"f": "false"}


class TestErrors:
    def test_none_anywhere(self, encoder: URLEncodedFormEncoder) -> None:
        with pytest.raises(UnsupportedValueError, match=r"at a\.0\.b"):
            encoder.encode({"a": [{"b": None}]})

    def test_top_level_none(self, encoder: URLEncodedFormEncoder) -> None:
        with pytest.raises(UnsupportedValueError, match="<root>"):
            encoder.encode(None)


class TestLogging:
    def test_debug_messages(
        self, encoder: URLEncodedFormEncoder, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="form_urlencoder.encoder"):
            encoder.encode({"a": 1, "b": 2})
        messages = [record.getMessage() for record in caplog.records]
        assert "Built record form tree for dict" in messages
        assert "Serialized 2 top-level fields into 7 characters" in messages
