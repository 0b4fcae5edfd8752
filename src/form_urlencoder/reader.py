"""Helpers for reading encoded form text back into key/value pairs.

``parse_pairs`` undoes the serializer's escaping; ``split_key`` splits a
bracketed key such as ``user[tags][]`` into its segments.  Together they let
callers (and the pytest plugin) compare encoded output without depending on
record field order.
"""

from __future__ import annotations

import re
from collections import Counter
from urllib.parse import unquote

__all__ = ["pair_multiset", "parse_pairs", "split_key"]

_KEY_PATTERN = re.compile(r"^([^\[\]]*)((?:\[[^\[\]]*\])*)$")
_SEGMENT_PATTERN = re.compile(r"\[([^\[\]]*)\]")


def parse_pairs(text: str) -> list[tuple[str, str]]:
    """Split form text into decoded ``(key, value)`` pairs, in order.

    ``+`` is kept literally: the serializer always writes spaces as ``%20``.
    A pair without ``=`` yields an empty value.
    """
    pairs: list[tuple[str, str]] = []
    for segment in text.split("&"):
        if not segment:
            continue
        key, _, value = segment.partition("=")
        pairs.append((unquote(key), unquote(value)))
    return pairs


def split_key(key: str) -> list[str]:
    """Split a decoded key into its segments.

    ``"a[b][]"`` -> ``["a", "b", ""]``; an empty segment marks a
    bracket-encoded sequence item.

    Raises:
        ValueError: If the brackets in ``key`` are unbalanced or nested.
    """
    match = _KEY_PATTERN.match(key)
    if match is None:
        msg = f"malformed form key: {key!r}"
        raise ValueError(msg)
    head, brackets = match.groups()
    return [head, *_SEGMENT_PATTERN.findall(brackets)]


def pair_multiset(text: str) -> Counter[tuple[str, str]]:
    """Return the decoded pairs of ``text`` as an order-free multiset."""
    return Counter(parse_pairs(text))
