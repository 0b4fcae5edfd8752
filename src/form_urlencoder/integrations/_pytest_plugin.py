"""pytest plugin for form-urlencoder.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pytest

from form_urlencoder.reader import parse_pairs


def _values_by_key(pairs: Iterable[tuple[str, str]]) -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = {}
    for key, value in pairs:
        grouped.setdefault(key, []).append(value)
    return grouped


@pytest.fixture(scope="session")
def assert_form_equivalent() -> Any:
    """Fixture that returns a callable form-text equivalence asserter.

    Record fields carry no ordering guarantee, so two encodings are
    equivalent when they hold the same decoded pairs.  Values that share a
    key (sequence items) must still appear in the same relative order.

    Usage in tests::

        def test_tags(assert_form_equivalent):
            assert_form_equivalent(
                urlencode({"a": 1, "tags": ["x", "y"]}),
                [("tags[]", "x"), ("a", "1"), ("tags[]", "y")],
            )

    Returns:
        A callable ``_assert(actual, expected) -> None`` where ``actual`` is
        encoded text and ``expected`` is encoded text or an iterable of
        decoded ``(key, value)`` pairs.
    """

    def _assert(actual: str, expected: str | Iterable[tuple[str, str]]) -> None:
        """Assert that ``actual`` encodes the same pairs as ``expected``.

        Raises:
            AssertionError: When the grouped pairs differ, with both groupings
                in the message.
        """
        expected_pairs = (
            parse_pairs(expected) if isinstance(expected, str) else list(expected)
        )
        actual_grouped = _values_by_key(parse_pairs(actual))
        expected_grouped = _values_by_key(expected_pairs)
        if actual_grouped != expected_grouped:
            raise AssertionError(
                f"form encodings not equivalent\n"
                f"  actual:   {actual_grouped}\n"
                f"  expected: {expected_grouped}"
            )

    return _assert
