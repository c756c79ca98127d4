"""
Schema Tree Engine
Pure tree operations and the editing session built on them.
"""

from .tree import (
    create_node,
    clone_with_fresh_ids,
    find,
    find_parent,
    iter_nodes,
    collect_ids,
    insert_child,
    update_props,
    update_behavior,
    delete,
)
from .editor import EditError, SchemaEditor

__all__ = [
    "create_node",
    "clone_with_fresh_ids",
    "find",
    "find_parent",
    "iter_nodes",
    "collect_ids",
    "insert_child",
    "update_props",
    "update_behavior",
    "delete",
    "EditError",
    "SchemaEditor",
]
