"""EncoderConfig, ArrayEncoding and BoolEncoding for form encoding.

EncoderConfig is a frozen (immutable) dataclass holding the encoder options.
ArrayEncoding selects how sequence keys are rendered; BoolEncoding selects
the text written for boolean scalars.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = ["ArrayEncoding", "BoolEncoding", "EncoderConfig"]


class ArrayEncoding(StrEnum):
    """How the key of each sequence item is rendered.

    - BRACKETS:    ``key[]`` for every item.
    - NO_BRACKETS: ``key`` for every item.
    """

    BRACKETS = auto()
    NO_BRACKETS = auto()

    def encode(self, key: str) -> str:
        if self is ArrayEncoding.BRACKETS:
            return f"{key}[]"
        return key


class BoolEncoding(StrEnum):
    """How boolean scalars are rendered.

    - NUMERIC: ``"1"`` / ``"0"``
    - LITERAL: ``"true"`` / ``"false"``
    """

    NUMERIC = auto()
    LITERAL = auto()

    def encode(self, value: bool) -> str:
        if self is BoolEncoding.NUMERIC:
            return "1" if value else "0"
        return "true" if value else "false"


@dataclass(frozen=True, slots=True)
class EncoderConfig:
    """Immutable configuration for URLEncodedFormEncoder.

    Attributes:
        array_encoding: Key rendering for sequence items.  Default BRACKETS.
        bool_encoding:  Text rendering for booleans.  Default NUMERIC.

    Plain strings such as ``"no_brackets"`` or ``"literal"`` are accepted and
    normalized to the matching enum member.
    """

    array_encoding: ArrayEncoding = ArrayEncoding.BRACKETS
    bool_encoding: BoolEncoding = BoolEncoding.NUMERIC

    def __post_init__(self) -> None:
        try:
            array_encoding = ArrayEncoding(self.array_encoding)
        except ValueError:
            choices = ", ".join(member.value for member in ArrayEncoding)
            msg = (
                f"array_encoding must be one of {choices}, "
                f"got {self.array_encoding!r}"
            )
            raise ValueError(msg) from None
        try:
            bool_encoding = BoolEncoding(self.bool_encoding)
        except ValueError:
            choices = ", ".join(member.value for member in BoolEncoding)
            msg = (
                f"bool_encoding must be one of {choices}, "
                f"got {self.bool_encoding!r}"
            )
            raise ValueError(msg) from None
        object.__setattr__(self, "array_encoding", array_encoding)
        object.__setattr__(self, "bool_encoding", bool_encoding)
