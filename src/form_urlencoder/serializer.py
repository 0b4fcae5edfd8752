"""FormSerializer: flattens a finished form tree into urlencoded text.

Keys are built while descending the tree:
- RECORD entries append ``[subkey]`` to the current key
- SEQUENCE items use ``ArrayEncoding.encode(key)`` (``key[]`` or ``key``)
- SCALAR leaves emit ``escape(key)=escape(text)``

The root record's entries use their bare names as keys.  Pairs are joined
with ``&``; empty records and sequences contribute no pairs.

Escaping keeps RFC 3986 unreserved characters plus ``?`` and ``/`` and
percent-encodes every other character (including ``[``, ``]``, ``&`` and
``=``), so the text of keys and values never clashes with the synthesized
pair syntax.  Non-ASCII text is encoded as UTF-8 first.
"""

from __future__ import annotations

from urllib.parse import quote

from cachetools import LRUCache

from form_urlencoder.config import ArrayEncoding
from form_urlencoder.tree.nodes import FormNode, NodeType

__all__ = ["QUERY_SAFE", "FormSerializer", "escape"]

# RFC 3986 section 3.4: "?" and "/" may appear unescaped in a query.
QUERY_SAFE = "?/"


def escape(text: str) -> str:
    """Percent-encode ``text`` for use as a form key or value."""
    return quote(text, safe=QUERY_SAFE)


def _join_with_ampersands(segments: list[str]) -> str:
    return "&".join(segment for segment in segments if segment)


class FormSerializer:
    """Serializer for form trees.

    Escaped atoms are cached per instance: sequence items repeat the same key
    for every element, so the cache saves re-escaping it.

    Args:
        array_encoding: Key rendering for sequence items.
        max_cache_size: Maximum number of escaped strings kept in memory.

    Example::

        serializer = FormSerializer(ArrayEncoding.BRACKETS)
        serializer.serialize({"xs": FormNode.sequence([FormNode.scalar("1")])})
        # 'xs%5B%5D=1'
    """

    def __init__(
        self,
        array_encoding: ArrayEncoding = ArrayEncoding.BRACKETS,
        max_cache_size: int = 1024,
    ) -> None:
        self.array_encoding = array_encoding
        self._escaped: LRUCache[str, str] = LRUCache(maxsize=max_cache_size)

    def _escape(self, text: str) -> str:
        escaped = self._escaped.get(text)
        if escaped is None:
            escaped = escape(text)
            self._escaped[text] = escaped
        return escaped

    def serialize(self, record: dict[str, FormNode]) -> str:
        """Serialize the entries of a root record."""
        return _join_with_ampersands(
            [self.serialize_node(node, key) for key, node in record.items()]
        )

    def serialize_node(self, node: FormNode, key: str) -> str:
        """Serialize ``node`` whose (unescaped) key is ``key``."""
        if node.node_type is NodeType.SCALAR:
            return f"{self._escape(key)}={self._escape(node.value)}"
        if node.node_type is NodeType.SEQUENCE:
            return self._serialize_sequence(node.value, key)
        return self._serialize_record(node.value, key)

    def _serialize_record(self, entries: dict[str, FormNode], key: str) -> str:
        return _join_with_ampersands(
            [
                self.serialize_node(child, f"{key}[{subkey}]")
                for subkey, child in entries.items()
            ]
        )

    def _serialize_sequence(self, items: list[FormNode], key: str) -> str:
        item_key = self.array_encoding.encode(key)
        return _join_with_ampersands(
            [self.serialize_node(item, item_key) for item in items]
        )
