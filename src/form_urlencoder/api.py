"""Public API functions for form-urlencoder.

Each call creates a fresh URLEncodedFormEncoder, and each encode call owns
its own form tree, so no state survives between calls.
"""

from __future__ import annotations

from typing import Any

from form_urlencoder.config import EncoderConfig
from form_urlencoder.encoder import URLEncodedFormEncoder
from form_urlencoder.tree.nodes import FormNode

__all__ = ["build_tree", "urlencode", "urlencode_bytes"]


def urlencode(value: Any, config: EncoderConfig | None = None) -> str:
    """Return ``value`` encoded as application/x-www-form-urlencoded text.

    Args:
        value:  A mapping, dataclass or Encodable object whose content is made
                of mappings, sequences and scalars (no None).
        config: Encoder options.  Defaults to ``EncoderConfig()`` when None.

    Returns:
        Pairs of ``escaped-key=escaped-value`` joined by ``&``.

    Raises:
        InvalidRootError: If ``value`` does not encode to a record.
        UnsupportedValueError: If ``value`` contains None or an unsupported type.
    """
    return URLEncodedFormEncoder(config).encode(value)


def urlencode_bytes(value: Any, config: EncoderConfig | None = None) -> bytes:
    """Return ``urlencode(value, config)`` as UTF-8 bytes."""
    return URLEncodedFormEncoder(config).encode_bytes(value)


def build_tree(value: Any, config: EncoderConfig | None = None) -> FormNode:
    """Return the form tree built for ``value`` before serialization."""
    return URLEncodedFormEncoder(config).encode_tree(value)
