"""URLEncodedFormEncoder: wires FormVisitor + FormSerializer together.

Architecture:
- encode_tree() creates a fresh FormContext (empty root record), drives a
  root FormVisitor with the value and returns the finished root node.
- encode() requires the root to be a record, then flattens it with a
  FormSerializer configured from the encoder's ArrayEncoding.
- No tree is shared between calls, so one encoder may be reused freely.
"""

from __future__ import annotations

import logging
from typing import Any

from form_urlencoder.config import ArrayEncoding, BoolEncoding, EncoderConfig
from form_urlencoder.errors import InvalidRootError
from form_urlencoder.serializer import FormSerializer
from form_urlencoder.tree.nodes import FormContext, FormNode
from form_urlencoder.visitor import FormVisitor, encode_value

__all__ = ["URLEncodedFormEncoder"]

logger = logging.getLogger(__name__)


class URLEncodedFormEncoder:
    """Encoder from structured Python values to urlencoded form text.

    Example::

        from form_urlencoder.encoder import URLEncodedFormEncoder

        encoder = URLEncodedFormEncoder(bool_encoding="literal")
        encoder.encode({"user": {"name": "Ann"}, "tags": ["a", "b"], "ok": True})
        # 'user%5Bname%5D=Ann&tags%5B%5D=a&tags%5B%5D=b&ok=true'
    """

    def __init__(
        self,
        config: EncoderConfig | None = None,
        *,
        array_encoding: ArrayEncoding | str | None = None,
        bool_encoding: BoolEncoding | str | None = None,
    ) -> None:
        """Initialise the encoder.

        Args:
            config:         Encoder options.  Defaults to ``EncoderConfig()``.
            array_encoding: Overrides ``config.array_encoding`` when given.
            bool_encoding:  Overrides ``config.bool_encoding`` when given.

        Raises:
            ValueError: If an option is not a recognised encoding.
        """
        base = config if config is not None else EncoderConfig()
        if array_encoding is None:
            array_encoding = base.array_encoding
        if bool_encoding is None:
            bool_encoding = base.bool_encoding
        self.config = EncoderConfig(
            array_encoding=array_encoding,  # type: ignore[arg-type]
            bool_encoding=bool_encoding,  # type: ignore[arg-type]
        )

    @property
    def array_encoding(self) -> ArrayEncoding:
        return self.config.array_encoding

    @property
    def bool_encoding(self) -> BoolEncoding:
        return self.config.bool_encoding

    def encode_tree(self, value: Any) -> FormNode:
        """Build the form tree for ``value`` without serializing it.

        The returned root may be of any shape; only ``encode()`` requires a
        record.

        Raises:
            FormEncodingError: If any part of ``value`` cannot be encoded.
        """
        context = FormContext()
        encoder = FormVisitor(context, bool_encoding=self.config.bool_encoding)
        encode_value(value, encoder)
        logger.debug(
            "Built %s form tree for %s", context.root.node_type, type(value).__name__
        )
        return context.root

    def encode(self, value: Any) -> str:
        """Encode ``value`` as ``&``-joined, percent-escaped form text.

        Raises:
            InvalidRootError: If ``value`` does not encode to a record (e.g.
                a bare scalar or a sequence).
            FormEncodingError: If any part of ``value`` cannot be encoded.
        """
        root = self.encode_tree(value)
        record = root.as_record()
        if record is None:
            msg = f"form root must be a record, got {root.node_type}"
            raise InvalidRootError(msg)

        serializer = FormSerializer(self.config.array_encoding)
        text = serializer.serialize(record)
        logger.debug(
            "Serialized %d top-level fields into %d characters", len(record), len(text)
        )
        return text

    def encode_bytes(self, value: Any) -> bytes:
        """Encode ``value`` like ``encode()`` and return the UTF-8 bytes."""
        return self.encode(value).encode("utf-8")

    def __repr__(self) -> str:
        return (
            f"URLEncodedFormEncoder("
            f"array_encoding={self.config.array_encoding.value!r}, "
            f"bool_encoding={self.config.bool_encoding.value!r})"
        )
