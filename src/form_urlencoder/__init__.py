"""form-urlencoder - structured values to application/x-www-form-urlencoded text."""

from __future__ import annotations

import logging

from form_urlencoder.api import build_tree, urlencode, urlencode_bytes
from form_urlencoder.config import ArrayEncoding, BoolEncoding, EncoderConfig
from form_urlencoder.encoder import URLEncodedFormEncoder
from form_urlencoder.errors import (
    DoubleEncodeError,
    FormEncodingError,
    InvalidRootError,
    UnsupportedValueError,
)
from form_urlencoder.protocols import Encodable, Encoder

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "ArrayEncoding",
    "BoolEncoding",
    "DoubleEncodeError",
    "Encodable",
    "Encoder",
    "EncoderConfig",
    "FormEncodingError",
    "InvalidRootError",
    "URLEncodedFormEncoder",
    "UnsupportedValueError",
    "build_tree",
    "urlencode",
    "urlencode_bytes",
]
