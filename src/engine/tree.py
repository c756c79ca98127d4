"""
Schema Tree Engine
Pure structural operations over an immutable node tree.

Every operation is total: a missing id, a leaf insert target or a root delete
returns the input tree object itself, so callers detect no-ops with ``is``.
Only nodes on the path to a change are rebuilt; all other subtrees are shared.
"""

import copy
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from blueprint import (
    ROOT_ID,
    AnimationKind,
    ComponentKind,
    Node,
    default_props,
    is_container_kind,
    parse_action,
)
from blueprint.models import ACTION_FIELDS, BEHAVIOR_FIELDS
from core import get_logger
from core.id import new_node_id


logger = get_logger(__name__)

# Wire spellings accepted by update_behavior
_BEHAVIOR_ALIASES = {
    "visibleIf": "visible_if",
    "animation": "animation_kind",
    "animationKind": "animation_kind",
    "onClick": "on_click",
    "onHover": "on_hover",
    "onBlur": "on_blur",
}


# ============================================================================
# Construction
# ============================================================================


def create_node(kind: ComponentKind | str, **props: Any) -> Node:
    """New node of ``kind`` with a fresh id and the kind's default props."""
    kind_name = kind.value if isinstance(kind, ComponentKind) else kind
    return Node(
        id=new_node_id(kind_name),
        kind=kind_name,
        props={**default_props(kind_name), **props},
        children=[] if is_container_kind(kind_name) else None,
    )


def clone_with_fresh_ids(node: Node) -> Node:
    """Deep copy of a subtree where every node gets a new unique id."""
    children = None
    if node.children is not None:
        children = [clone_with_fresh_ids(child) for child in node.children]
    return node.model_copy(
        update={
            "id": new_node_id(node.kind),
            "props": copy.deepcopy(node.props),
            "children": children,
        }
    )


# ============================================================================
# Queries
# ============================================================================


def find(tree: Node, node_id: str) -> Node | None:
    """Depth-first search, parent before children; first match or None."""
    if tree.id == node_id:
        return tree
    for child in tree.children or ():
        found = find(child, node_id)
        if found is not None:
            return found
    return None


def find_parent(tree: Node, node_id: str) -> Node | None:
    """Container whose children include ``node_id``; None for the root or a missing id."""
    for child in tree.children or ():
        if child.id == node_id:
            return tree
        found = find_parent(child, node_id)
        if found is not None:
            return found
    return None


def iter_nodes(tree: Node) -> Iterator[Node]:
    """Pre-order traversal."""
    yield tree
    for child in tree.children or ():
        yield from iter_nodes(child)


def collect_ids(tree: Node) -> set[str]:
    return {node.id for node in iter_nodes(tree)}


# ============================================================================
# Mutations
# ============================================================================


def _map_children(node: Node, fn: Callable[[Node], Node]) -> Node:
    """Apply ``fn`` to each child; rebuild ``node`` only if some child changed."""
    if not node.children:
        return node
    new_children = [fn(child) for child in node.children]
    if all(new is old for new, old in zip(new_children, node.children)):
        return node
    return node.model_copy(update={"children": new_children})


def insert_child(tree: Node, container_id: str, new_node: Node) -> Node:
    """Append ``new_node`` to the children of a container-like node."""
    if tree.id == container_id:
        if not tree.accepts_children:
            return tree
        return tree.model_copy(update={"children": [*tree.children, new_node]})
    return _map_children(tree, lambda child: insert_child(child, container_id, new_node))


def update_props(tree: Node, node_id: str, partial: Mapping[str, Any]) -> Node:
    """Shallow-merge ``partial`` into the target's props."""
    if tree.id == node_id:
        merged = {**tree.props, **partial}
        if merged == tree.props:
            return tree
        return tree.model_copy(update={"props": merged})
    return _map_children(tree, lambda child: update_props(child, node_id, partial))


def _coerce_behavior(partial: Mapping[str, Any]) -> dict[str, Any]:
    update: dict[str, Any] = {}
    for key, value in partial.items():
        field = _BEHAVIOR_ALIASES.get(key, key)
        if field not in BEHAVIOR_FIELDS:
            logger.debug("behavior_key_ignored", key=key)
            continue
        if field in ACTION_FIELDS:
            value = parse_action(value)
        elif field == "animation_kind" and value is not None:
            try:
                value = AnimationKind(value)
            except ValueError:
                logger.warning("animation_ignored", value=value)
                continue
        update[field] = value
    return update


def update_behavior(tree: Node, node_id: str, partial: Mapping[str, Any]) -> Node:
    """Shallow-merge non-prop fields (binding, visibility, presentation, actions)."""
    update = _coerce_behavior(partial)
    if not update:
        return tree
    return _update_behavior(tree, node_id, update)


def _update_behavior(tree: Node, node_id: str, update: dict[str, Any]) -> Node:
    if tree.id == node_id:
        if all(getattr(tree, field) == value for field, value in update.items()):
            return tree
        return tree.model_copy(update=update)
    return _map_children(tree, lambda child: _update_behavior(child, node_id, update))


def delete(tree: Node, node_id: str) -> Node:
    """Remove a node and its subtree; the root is never deletable."""
    if node_id in (tree.id, ROOT_ID):
        return tree
    return _delete(tree, node_id)


def _delete(node: Node, node_id: str) -> Node:
    if not node.children:
        return node
    kept = [child for child in node.children if child.id != node_id]
    new_children = [_delete(child, node_id) for child in kept]
    if len(kept) == len(node.children) and all(
        new is old for new, old in zip(new_children, node.children)
    ):
        return node
    return node.model_copy(update={"children": new_children})
