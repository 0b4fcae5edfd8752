"""Exceptions raised while encoding values into form text.

Every failure is terminal for the current encode call: nothing is caught
inside the package and no partial output is produced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from form_urlencoder.tree.path import CodingPath

__all__ = [
    "DoubleEncodeError",
    "FormEncodingError",
    "InvalidRootError",
    "UnsupportedValueError",
]


def _render_path(coding_path: CodingPath) -> str:
    if not coding_path:
        return "<root>"
    return ".".join(key.string_value for key in coding_path)


class FormEncodingError(Exception):
    """Base class for all form encoding failures.

    Attributes:
        coding_path: Path of the coordinate being written when the error
            occurred (empty for the root).
    """

    def __init__(self, message: str, coding_path: CodingPath = ()) -> None:
        super().__init__(f"{message} (at {_render_path(coding_path)})")
        self.coding_path = coding_path


class UnsupportedValueError(FormEncodingError):
    """A value has no representation in form text (e.g. None)."""


class DoubleEncodeError(FormEncodingError):
    """A single-value container was written more than once."""


class InvalidRootError(FormEncodingError):
    """The finished tree's root is not a record."""
