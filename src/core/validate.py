"""Validation of tree payloads arriving from outside the editor (sync peers, saved projects)."""

from dataclasses import dataclass
from typing import Any
from returns.result import Result, Success, Failure


# Validation limits
MAX_PAYLOAD_SIZE = 2 * 1024 * 1024  # 2MB
MAX_TREE_DEPTH = 32
MAX_TREE_NODES = 5_000
MAX_JSON_DEPTH = 64


class ValidationError(Exception):
    """Validation failed."""

    pass


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


def validate_json_size(data: bytes | str, max_size: int = MAX_PAYLOAD_SIZE, name: str = "JSON") -> None:
    """
    Validate encoded payload size.

    Raises:
        ValidationError: If size exceeds limit
    """
    size = len(data.encode("utf-8")) if isinstance(data, str) else len(data)
    if size > max_size:
        raise ValidationError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = MAX_JSON_DEPTH, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth to prevent runaway recursion.

    Raises:
        ValidationError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise ValidationError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)


def is_leaf_kind(kind: str) -> bool:
    """Known kind that may not hold children; unknown kinds are left alone."""
    # blueprint imports core, so resolve lazily
    from blueprint.kinds import get_kind, is_container_kind

    return get_kind(kind) is not None and not is_container_kind(kind)


class TreeValidator:
    """Validates the wire form of a schema tree before it replaces the local one."""

    def __init__(self, max_depth: int = MAX_TREE_DEPTH, max_nodes: int = MAX_TREE_NODES) -> None:
        self.max_depth = max_depth
        self.max_nodes = max_nodes

    def validate(self, payload: Any) -> None:
        """
        Check structure, node depth, node count, id uniqueness and that only
        container kinds carry children.

        Raises:
            ValidationError: If validation fails
        """
        if not isinstance(payload, dict):
            raise ValidationError("Tree must be a JSON object")

        seen: set[str] = set()
        stack: list[tuple[Any, int]] = [(payload, 1)]
        while stack:
            node, depth = stack.pop()
            if not isinstance(node, dict):
                raise ValidationError("Tree node must be a JSON object")
            if depth > self.max_depth:
                raise ValidationError(f"Tree depth exceeds maximum {self.max_depth}")

            node_id = node.get("id")
            if not isinstance(node_id, str) or not node_id:
                raise ValidationError("Tree node missing required 'id' field")
            if not isinstance(node.get("type"), str):
                raise ValidationError(f"Node '{node_id}' missing required 'type' field")
            if node_id in seen:
                raise ValidationError(f"Duplicate node id '{node_id}'")
            seen.add(node_id)
            if len(seen) > self.max_nodes:
                raise ValidationError(f"Tree exceeds maximum {self.max_nodes} nodes")

            children = node.get("children")
            if children is None:
                continue
            if not isinstance(children, list):
                raise ValidationError(f"Node '{node_id}' children must be a list")
            if children and is_leaf_kind(node["type"]):
                raise ValidationError(f"Node '{node_id}' of kind '{node['type']}' cannot have children")
            stack.extend((child, depth + 1) for child in children)


def validate_tree(
    payload: Any, max_depth: int = MAX_TREE_DEPTH, max_nodes: int = MAX_TREE_NODES
) -> Result[None, ValidationResult]:
    """
    Validate a wire-form tree (Result pattern version).

    Returns:
        Success(None) or Failure(ValidationResult)
    """
    try:
        TreeValidator(max_depth, max_nodes).validate(payload)
        return Success(None)
    except ValidationError as e:
        return Failure(ValidationResult(str(e)))
