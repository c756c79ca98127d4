"""
Editor Session
Owns the current tree and selection and turns editing intents into new trees.

Every intent resolves synchronously to ``Success(new_tree)`` or
``Failure(EditError)``. A structural no-op (leaf target, missing id, root
delete) is reported as a failure and leaves the session untouched. Every
produced tree is broadcast on the sync channel; trees received from peers
replace the local tree without being re-broadcast.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import ValidationError as PydanticValidationError
from returns.pipeline import is_successful
from returns.result import Failure, Result, Success

from blueprint import (
    ComponentKind,
    DataListItem,
    Node,
    TemplateLibrary,
    get_kind,
    initial_tree,
)
from clients.sync import SyncChannel
from core import get_logger, validate_tree
from monitoring import metrics_collector

from .tree import (
    clone_with_fresh_ids,
    create_node,
    delete,
    find,
    insert_child,
    iter_nodes,
    update_behavior,
    update_props,
)


logger = get_logger(__name__)

TreeListener = Callable[[Node], None]


@dataclass(frozen=True)
class EditError:
    """Why an intent produced no new tree."""

    intent: str
    message: str
    node_id: str | None = None


class SchemaEditor:
    """Editing session over one schema tree."""

    def __init__(self, tree: Node | None = None, channel: SyncChannel | None = None) -> None:
        self._tree = tree if tree is not None else initial_tree()
        self.selected_id: str | None = self._tree.id
        self._listeners: list[TreeListener] = []
        self._channel = channel
        self._unsubscribe = channel.subscribe(self._on_remote_tree) if channel else None
        metrics_collector.set_tree_size(self.node_count)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def tree(self) -> Node:
        return self._tree

    @property
    def selected(self) -> Node | None:
        if self.selected_id is None:
            return None
        return find(self._tree, self.selected_id)

    @property
    def node_count(self) -> int:
        return sum(1 for _ in iter_nodes(self._tree))

    def subscribe(self, listener: TreeListener) -> Callable[[], None]:
        """Notify ``listener`` with every tree the session adopts."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def add_component(
        self, kind: ComponentKind | str, under: str | None = None
    ) -> Result[Node, EditError]:
        """Append a new node of ``kind`` with default props under a container."""
        target = under or self.selected_id
        if target is None:
            return self._reject("add_component", "Select a container to add components to")
        if get_kind(kind) is None:
            return self._reject("add_component", f"Unknown component kind: {kind}", target)

        node = create_node(kind)
        return self._commit(
            "add_component",
            insert_child(self._tree, target, node),
            "Select a 'Container' or 'Card' to add items inside it",
            target,
        )

    def add_template(self, template_id: str, under: str | None = None) -> Result[Node, EditError]:
        """Insert a fresh-id clone of a built-in template under a container."""
        target = under or self.selected_id
        if target is None:
            return self._reject("add_template", "Select a container")
        template = TemplateLibrary.get(template_id)
        if template is None:
            return self._reject("add_template", f"Unknown template: {template_id}", target)

        clone = clone_with_fresh_ids(template.tree)
        return self._commit(
            "add_template",
            insert_child(self._tree, target, clone),
            "Select a container",
            target,
        )

    def set_props(self, partial: Mapping[str, Any], node_id: str | None = None) -> Result[Node, EditError]:
        target = node_id or self.selected_id
        if target is None:
            return self._reject("set_props", "No node selected")
        return self._commit(
            "set_props",
            update_props(self._tree, target, partial),
            "Node not found or props unchanged",
            target,
        )

    def set_behavior(self, partial: Mapping[str, Any], node_id: str | None = None) -> Result[Node, EditError]:
        """Update binding, visibility, presentation or action fields."""
        target = node_id or self.selected_id
        if target is None:
            return self._reject("set_behavior", "No node selected")
        return self._commit(
            "set_behavior",
            update_behavior(self._tree, target, partial),
            "Node not found or behavior unchanged",
            target,
        )

    def delete(self, node_id: str | None = None) -> Result[Node, EditError]:
        """Remove a node and its subtree; selection returns to the root."""
        target = node_id or self.selected_id
        if target is None:
            return self._reject("delete", "No node selected")
        result = self._commit(
            "delete",
            delete(self._tree, target),
            "The root cannot be deleted",
            target,
        )
        if is_successful(result):
            self.selected_id = self._tree.id
        return result

    def select(self, node_id: str | None) -> Result[Node, EditError]:
        """Change the selection; ``None`` clears it."""
        if node_id is not None and find(self._tree, node_id) is None:
            return self._reject("select", "Node not found", node_id)
        self.selected_id = node_id
        return Success(self._tree)

    def load(self, tree: Node | Mapping[str, Any]) -> Result[Node, EditError]:
        """Replace the whole tree (saved project, template document, raw wire data)."""
        if not isinstance(tree, Node):
            validation = validate_tree(tree)
            if not is_successful(validation):
                return self._reject("load", validation.failure().message)
            try:
                tree = Node.from_wire(tree)
            except PydanticValidationError as e:
                return self._reject("load", f"Invalid tree: {e.error_count()} errors")

        self._adopt(tree)
        self._broadcast(tree)
        metrics_collector.record_mutation("load", "success")
        logger.info("tree_loaded", root=tree.id, nodes=self.node_count)
        return Success(tree)

    def set_data_list_items(
        self, items: Iterable[DataListItem | Mapping[str, Any]], node_id: str | None = None
    ) -> Result[Node, EditError]:
        """Replace the ``items`` prop of a DataList node (e.g. with generated rows)."""
        target = node_id or self.selected_id
        node = find(self._tree, target) if target else None
        if node is None or node.component_kind is not ComponentKind.DATA_LIST:
            return self._reject("set_data_list_items", "Select a DataList", target)

        try:
            rows = [
                (item if isinstance(item, DataListItem) else DataListItem.model_validate(item)).model_dump(
                    exclude_none=True
                )
                for item in items
            ]
        except PydanticValidationError as e:
            return self._reject("set_data_list_items", f"Invalid items: {e.error_count()} errors", target)

        return self._commit(
            "set_data_list_items",
            update_props(self._tree, target, {"items": rows}),
            "Items unchanged",
            target,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reject(self, intent: str, message: str, node_id: str | None = None) -> Result[Node, EditError]:
        metrics_collector.record_mutation(intent, "rejected")
        logger.info("edit_rejected", intent=intent, node_id=node_id, reason=message)
        return Failure(EditError(intent, message, node_id))

    def _commit(
        self, intent: str, new_tree: Node, failure_message: str, node_id: str
    ) -> Result[Node, EditError]:
        if new_tree is self._tree:
            return self._reject(intent, failure_message, node_id)

        self._adopt(new_tree)
        self._broadcast(new_tree)
        metrics_collector.record_mutation(intent, "success")
        logger.debug("edit_applied", intent=intent, node_id=node_id)
        return Success(new_tree)

    def _adopt(self, tree: Node) -> None:
        self._tree = tree
        if self.selected_id is not None and find(tree, self.selected_id) is None:
            self.selected_id = tree.id
        metrics_collector.set_tree_size(self.node_count)
        for listener in list(self._listeners):
            listener(tree)

    def _broadcast(self, tree: Node) -> None:
        if self._channel is not None and not self._channel.closed:
            self._channel.broadcast_update(tree)

    def _on_remote_tree(self, tree: Node) -> None:
        self._adopt(tree)
        logger.info("remote_tree_applied", root=tree.id)
