"""Tree subpackage for the path-addressed form tree.

Re-exports the public API for the tree module:
- FormNode: dataclass holding a SCALAR, SEQUENCE, or RECORD payload
- NodeType: StrEnum of the three node shapes
- FormContext: per-call holder of the shared root node
- CodingKey / CodingPath: path segments and immutable paths
- set_node / get_node: path-addressed write and read
"""

from form_urlencoder.tree.nodes import FormContext, FormNode, NodeType
from form_urlencoder.tree.path import (
    CodingKey,
    CodingPath,
    field,
    get_node,
    index,
    set_node,
)

__all__ = [
    "CodingKey",
    "CodingPath",
    "FormContext",
    "FormNode",
    "NodeType",
    "field",
    "get_node",
    "index",
    "set_node",
]
