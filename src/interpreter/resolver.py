"""
Render Resolver
Turns a schema tree plus the variable store into concrete render parameters.

In design mode every node renders with its raw props and interactions are
inert (selection still works). In interactive mode visibility predicates
prune subtrees, bindings override value fields and events run actions.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from blueprint import ComponentKind, Node, check_exhaustive, get_spec
from core import get_logger

from .actions import ActionExecutor
from .datalist import process_items
from .store import VariableStore, is_truthy


logger = get_logger(__name__)

SelectHandler = Callable[[str], None]


class RenderMode(str, Enum):
    """Render pass mode, global to one pass."""

    DESIGN = "design"
    INTERACTIVE = "interactive"

    @classmethod
    def _missing_(cls, value: object) -> "RenderMode | None":
        if value == "preview":
            return cls.INTERACTIVE
        return None


async def _inert() -> None:
    return None


def _ignore(_value: Any) -> None:
    return None


@dataclass
class RenderNode:
    """One resolved node handed to a render surface."""

    id: str
    kind: str
    props: dict[str, Any]
    children: list["RenderNode"] = field(default_factory=list)
    is_selected: bool = False
    placeholder: bool = False
    select: Callable[[], None] = lambda: None
    click: Callable[[], Awaitable[None]] = _inert
    hover: Callable[[], Awaitable[None]] = _inert
    blur: Callable[[], Awaitable[None]] = _inert
    change: Callable[[Any], None] = _ignore

    def find(self, node_id: str) -> "RenderNode | None":
        if self.id == node_id:
            return self
        for child in self.children:
            found = child.find(node_id)
            if found is not None:
                return found
        return None


# ============================================================================
# Per-kind prop resolution
# ============================================================================


def _plain(props: dict[str, Any]) -> dict[str, Any]:
    return props


def _data_list(props: dict[str, Any]) -> dict[str, Any]:
    props["visibleItems"] = process_items(
        props.get("items"),
        props.get("filterQuery", ""),
        props.get("sortKey", "title"),
        props.get("sortOrder", "none"),
    )
    return props


PROP_RESOLVERS: dict[ComponentKind, Callable[[dict[str, Any]], dict[str, Any]]] = {
    kind: _plain for kind in ComponentKind
}
PROP_RESOLVERS[ComponentKind.DATA_LIST] = _data_list

check_exhaustive(PROP_RESOLVERS, "PROP_RESOLVERS")


class Renderer:
    """Resolves trees against one store and wires events to one executor."""

    def __init__(
        self,
        store: VariableStore,
        executor: ActionExecutor | None = None,
        on_select: SelectHandler | None = None,
    ) -> None:
        self.store = store
        self.executor = executor if executor is not None else ActionExecutor(store)
        self.on_select = on_select

    def render(
        self,
        tree: Node,
        selected_id: str | None = None,
        mode: RenderMode | str = RenderMode.DESIGN,
    ) -> RenderNode | None:
        """Resolve ``tree``; None when the root itself is hidden."""
        return self._resolve(tree, selected_id, RenderMode(mode))

    def _resolve(self, node: Node, selected_id: str | None, mode: RenderMode) -> RenderNode | None:
        kind = node.component_kind
        if kind is None:
            logger.warning("render_placeholder", node_id=node.id, kind=node.kind)
            return self._placeholder(node, selected_id, f"Unknown: {node.kind}")

        interactive = mode is RenderMode.INTERACTIVE
        if interactive and node.visible_if and not is_truthy(self.store.get(node.visible_if)):
            return None

        try:
            props = PROP_RESOLVERS[kind](self._resolve_props(node, kind, interactive))
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning("render_node_failed", node_id=node.id, kind=node.kind, error=str(e))
            return self._placeholder(node, selected_id, f"Invalid: {node.kind}")

        children = [
            rendered
            for child in node.children or ()
            if (rendered := self._resolve(child, selected_id, mode)) is not None
        ]

        rendered = RenderNode(
            id=node.id,
            kind=node.kind,
            props=props,
            children=children,
            is_selected=node.id == selected_id,
            select=self._select_handler(node.id),
        )
        if interactive:
            rendered.click = self._action_handler(node.on_click)
            rendered.hover = self._action_handler(node.on_hover)
            rendered.blur = self._action_handler(node.on_blur)
            if node.bind:
                rendered.change = self._change_handler(node.bind)
        return rendered

    def _placeholder(self, node: Node, selected_id: str | None, label: str) -> RenderNode:
        return RenderNode(
            id=node.id,
            kind=node.kind,
            props={"label": label},
            is_selected=node.id == selected_id,
            placeholder=True,
            select=self._select_handler(node.id),
        )

    def _resolve_props(self, node: Node, kind: ComponentKind, interactive: bool) -> dict[str, Any]:
        props = dict(node.props)
        if node.tooltip is not None:
            props["tooltip"] = node.tooltip
        if node.animation_kind is not None:
            props["animation"] = node.animation_kind.value

        if interactive and node.bind:
            value = self.store.get(node.bind)
            if get_spec(kind).boolean_value:
                props["checked"] = is_truthy(value)
            else:
                props["value"] = value if value is not None else ""
        return props

    def _select_handler(self, node_id: str) -> Callable[[], None]:
        def select() -> None:
            if self.on_select is not None:
                self.on_select(node_id)

        return select

    def _action_handler(self, action: Any) -> Callable[[], Awaitable[None]]:
        if action is None:
            return _inert

        async def run() -> None:
            await self.executor.execute(action)

        return run

    def _change_handler(self, variable: str) -> Callable[[Any], None]:
        def change(value: Any) -> None:
            self.store.set(variable, value)

        return change


def render(
    tree: Node,
    store: VariableStore,
    selected_id: str | None = None,
    mode: RenderMode | str = RenderMode.DESIGN,
    executor: ActionExecutor | None = None,
) -> RenderNode | None:
    """One-shot render without a selection callback."""
    return Renderer(store, executor).render(tree, selected_id, mode)
