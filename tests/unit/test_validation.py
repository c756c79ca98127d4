"""Validation tests."""

import pytest
from hypothesis import given, strategies as st
from returns.pipeline import is_successful

from core import TreeValidator, ValidationError, validate_json_depth, validate_json_size, validate_tree


@pytest.mark.unit
def test_validate_json_size():
    """Test JSON size validation."""
    validate_json_size('{"test": "data"}', 1000)

    with pytest.raises(ValidationError):
        validate_json_size("x" * 1_001, 1000)
    with pytest.raises(ValidationError):
        validate_json_size("é" * 600, 1000)


@pytest.mark.unit
def test_validate_json_depth():
    """Test JSON depth validation."""
    validate_json_depth({"a": {"b": {"c": 1}}}, max_depth=5)

    deep = {"level": 1}
    current = deep
    for i in range(25):
        current["nested"] = {"level": i + 2}
        current = current["nested"]

    with pytest.raises(ValidationError):
        validate_json_depth(deep, max_depth=20)


@pytest.mark.unit
def test_valid_tree(small_tree, dashboard):
    assert is_successful(validate_tree(small_tree.to_wire()))
    assert is_successful(validate_tree(dashboard.to_wire()))


@pytest.mark.unit
@pytest.mark.parametrize(
    "payload, message",
    [
        (None, "Tree must be a JSON object"),
        ({"type": "Card"}, "Tree node missing required 'id' field"),
        ({"id": "a"}, "Node 'a' missing required 'type' field"),
        ({"id": "a", "type": "Card", "children": {}}, "Node 'a' children must be a list"),
        ({"id": "a", "type": "Card", "children": ["x"]}, "Tree node must be a JSON object"),
        (
            {"id": "a", "type": "Card", "children": [{"id": "a", "type": "Text"}]},
            "Duplicate node id 'a'",
        ),
        (
            {"id": "r", "type": "Container", "children": [{"id": "b", "type": "Button", "children": [{"id": "t", "type": "Text"}]}]},
            "Node 'b' of kind 'Button' cannot have children",
        ),
    ],
)
def test_invalid_tree(payload, message):
    result = validate_tree(payload)

    assert not is_successful(result)
    assert result.failure().message == message


@pytest.mark.unit
def test_tree_limits():
    wide = {"id": "r", "type": "Container", "children": [{"id": f"c{i}", "type": "Text"} for i in range(5)]}

    with pytest.raises(ValidationError, match="maximum 3 nodes"):
        TreeValidator(max_nodes=3).validate(wide)
    with pytest.raises(ValidationError, match="depth"):
        TreeValidator(max_depth=1).validate(wide)
    TreeValidator(max_depth=2, max_nodes=6).validate(wide)


@pytest.mark.unit
@given(st.integers(min_value=1, max_value=40))
def test_chain_depth_property(depth):
    """A chain of n nested nodes passes exactly when n is within the limit."""
    tree = {"id": "n0", "type": "Text"}
    for i in range(1, depth):
        tree = {"id": f"n{i}", "type": "Container", "children": [tree]}

    assert is_successful(validate_tree(tree, max_depth=20)) == (depth <= 20)


@pytest.mark.unit
def test_children_allowed_on_unknown_kinds_and_empty_leaf_lists():
    tree = {
        "id": "r",
        "type": "Container",
        "children": [
            {"id": "odd", "type": "Carousel", "children": [{"id": "t", "type": "Text"}]},
            {"id": "b", "type": "Button", "children": []},
        ],
    }

    assert is_successful(validate_tree(tree))
