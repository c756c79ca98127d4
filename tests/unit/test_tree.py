"""Tests for the schema tree engine."""

import itertools

import pytest
from hypothesis import given, strategies as st

from blueprint import (
    CONTAINER_KINDS,
    ROOT_ID,
    AlertAction,
    AnimationKind,
    ComponentKind,
    Node,
    ToggleAction,
)
from core.id import extract_prefix, is_valid
from engine import (
    clone_with_fresh_ids,
    collect_ids,
    create_node,
    delete,
    find,
    find_parent,
    insert_child,
    iter_nodes,
    update_behavior,
    update_props,
)


LEAF_KINDS = [kind.value for kind in ComponentKind if kind not in CONTAINER_KINDS]

# A shape is a leaf kind name or a list of child shapes (a Container)
shapes = st.recursive(
    st.sampled_from(LEAF_KINDS),
    lambda children: st.lists(children, max_size=4),
    max_leaves=25,
)


def build_tree(shape) -> Node:
    counter = itertools.count()

    def make(s) -> Node:
        i = next(counter)
        if isinstance(s, list):
            return Node(id=f"n{i}", kind="Container", props={"i": i}, children=[make(c) for c in s])
        return Node(id=f"n{i}", kind=s, props={"i": i})

    top = shape if isinstance(shape, list) else [shape]
    return Node(id=ROOT_ID, kind="Container", props={}, children=[make(s) for s in top])


def containers(tree: Node) -> list[Node]:
    return [node for node in iter_nodes(tree) if node.accepts_children]


# ============================================================================
# Properties
# ============================================================================

@pytest.mark.unit
@given(shapes)
def test_missing_id_is_identity(shape):
    """Every operation on an absent id returns the very same tree."""
    tree = build_tree(shape)
    missing = "does-not-exist"
    leaf = Node(id="new-leaf", kind="Button", props={})

    assert find(tree, missing) is None
    assert insert_child(tree, missing, leaf) is tree
    assert update_props(tree, missing, {"label": "x"}) is tree
    assert update_behavior(tree, missing, {"bind": "x"}) is tree
    assert delete(tree, missing) is tree


@pytest.mark.unit
@given(shapes, st.data())
def test_insert_appends_to_container(shape, data):
    tree = build_tree(shape)
    target = data.draw(st.sampled_from(containers(tree)))
    leaf = Node(id="new-leaf", kind="Badge", props={"label": "New"})

    result = insert_child(tree, target.id, leaf)

    assert find(result, "new-leaf") == leaf
    assert find(result, target.id).children[-1] is leaf
    assert find_parent(result, "new-leaf").id == target.id
    assert collect_ids(result) == collect_ids(tree) | {"new-leaf"}
    # Previous revision is untouched
    assert find(tree, "new-leaf") is None


@pytest.mark.unit
@given(shapes, st.data())
def test_insert_then_delete_round_trip(shape, data):
    tree = build_tree(shape)
    target = data.draw(st.sampled_from(containers(tree)))
    leaf = Node(id="new-leaf", kind="Text", props={"content": "hi"})

    assert delete(insert_child(tree, target.id, leaf), "new-leaf") == tree


@pytest.mark.unit
@given(shapes)
def test_clone_has_same_shape_and_fresh_ids(shape):
    tree = build_tree(shape)
    clone = clone_with_fresh_ids(tree)

    originals = list(iter_nodes(tree))
    copies = list(iter_nodes(clone))
    assert [(n.kind, n.props) for n in copies] == [(n.kind, n.props) for n in originals]
    assert [n.children is None for n in copies] == [n.children is None for n in originals]
    assert collect_ids(clone).isdisjoint(collect_ids(tree))
    assert len(collect_ids(clone)) == len(copies)


@pytest.mark.unit
@given(shapes, st.data())
def test_delete_removes_whole_subtree(shape, data):
    tree = build_tree(shape)
    candidates = [node for node in iter_nodes(tree) if node.id != ROOT_ID]
    if not candidates:
        return
    victim = data.draw(st.sampled_from(candidates))

    result = delete(tree, victim.id)

    assert collect_ids(result) == collect_ids(tree) - collect_ids(victim)


# ============================================================================
# Insert
# ============================================================================

@pytest.mark.unit
def test_insert_into_leaf_is_noop(small_tree):
    leaf = Node(id="x", kind="Text", props={})
    assert insert_child(small_tree, "go-btn", leaf) is small_tree


@pytest.mark.unit
def test_insert_shares_untouched_subtrees(small_tree):
    leaf = Node(id="x", kind="Text", props={})
    result = insert_child(small_tree, "card", leaf)

    assert result is not small_tree
    assert result.children[1] is small_tree.children[1]
    assert result.children[2] is small_tree.children[2]
    assert result.children[0].children[0] is small_tree.children[0].children[0]


@pytest.mark.unit
def test_container_without_children_is_normalized():
    node = Node.from_wire({"id": "c", "type": "Card", "props": {}})
    assert node.children == []
    assert node.accepts_children


# ============================================================================
# Props and behavior
# ============================================================================

@pytest.mark.unit
def test_update_props_shallow_merges(small_tree):
    result = update_props(small_tree, "go-btn", {"label": "Stop"})
    button = find(result, "go-btn")

    assert button.props == {"label": "Stop", "variant": "primary"}
    assert find(small_tree, "go-btn").props["label"] == "Go"


@pytest.mark.unit
def test_update_props_with_same_values_is_noop(small_tree):
    assert update_props(small_tree, "go-btn", {"label": "Go"}) is small_tree


@pytest.mark.unit
def test_update_behavior_accepts_wire_aliases(small_tree):
    result = update_behavior(
        small_tree,
        "go-btn",
        {"visibleIf": "show", "animation": "fade", "onClick": {"type": "toggle", "target": "isOpen"}},
    )
    button = find(result, "go-btn")

    assert button.visible_if == "show"
    assert button.animation_kind is AnimationKind.FADE
    assert button.on_click == ToggleAction(target="isOpen")


@pytest.mark.unit
def test_update_behavior_none_clears_field(small_tree):
    result = update_behavior(small_tree, "secret", {"visible_if": None})
    assert find(result, "secret").visible_if is None


@pytest.mark.unit
def test_update_behavior_ignores_unknown_keys(small_tree):
    assert update_behavior(small_tree, "go-btn", {"props": {"label": "x"}, "id": "hijack"}) is small_tree


@pytest.mark.unit
def test_update_behavior_ignores_invalid_animation(small_tree):
    result = update_behavior(small_tree, "go-btn", {"animation": "wobble", "tooltip": "Hi"})
    button = find(result, "go-btn")

    assert button.animation_kind is None
    assert button.tooltip == "Hi"


@pytest.mark.unit
def test_update_behavior_alert_accepts_value_key(small_tree):
    result = update_behavior(small_tree, "go-btn", {"on_click": {"type": "alert", "value": "Hello"}})
    assert find(result, "go-btn").on_click == AlertAction(message="Hello")


@pytest.mark.unit
def test_update_behavior_drops_unknown_action_type(small_tree):
    result = update_behavior(small_tree, "go-btn", {"tooltip": "t", "onClick": {"type": "explode"}})
    assert find(result, "go-btn").on_click is None


# ============================================================================
# Delete
# ============================================================================

@pytest.mark.unit
def test_delete_root_is_rejected(small_tree):
    assert delete(small_tree, ROOT_ID) is small_tree


@pytest.mark.unit
def test_delete_reserved_root_id_inside_subtree_is_rejected(small_tree):
    assert delete(small_tree.children[0], ROOT_ID) is small_tree.children[0]


@pytest.mark.unit
def test_delete_keeps_bindings_of_other_nodes(small_tree):
    result = delete(small_tree, "card")

    assert find(result, "card") is None
    assert find(result, "go-btn") is None
    assert find(result, "name-input").bind == "userName"


# ============================================================================
# Creation
# ============================================================================

@pytest.mark.unit
def test_create_node_uses_kind_defaults():
    node = create_node(ComponentKind.BUTTON, label="Go")

    assert node.kind == "Button"
    assert node.props == {"label": "Go", "variant": "primary"}
    assert node.children is None
    assert extract_prefix(node.id) == "button"
    assert is_valid(node.id)


@pytest.mark.unit
def test_create_container_has_empty_children():
    node = create_node("Card")
    assert node.children == []


@pytest.mark.unit
def test_create_node_defaults_are_not_shared():
    first = create_node("DataList")
    first.props["items"].append({"id": "1", "title": "x"})

    assert create_node("DataList").props["items"] == []


@pytest.mark.unit
def test_clone_keeps_behavior_fields(small_tree):
    clone = clone_with_fresh_ids(find(small_tree, "secret"))

    assert clone.visible_if == "isOpen"
    assert clone.id != "secret"
    assert extract_prefix(clone.id) == "text"
