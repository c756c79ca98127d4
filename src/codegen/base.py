"""
Code generation core
Prop serialization, escaping and the fragments both dialects lower the same way.

A fragment takes ``(emitter, node, level)`` and returns the node's text,
already indented to ``level``. Dialect differences go through the emitter's
hooks: styling attribute name, literal syntax, empty elements, iteration and
the surrounding document.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import Any

from blueprint import ComponentKind, Node
from core import get_logger


logger = get_logger(__name__)

# Never serialized as generic attributes; fragments place them explicitly
EXCLUDED_PROPS = frozenset({"children", "items", "content"})

Fragment = Callable[["Emitter", Node, int], str]


class Dialect(str, Enum):
    REACT = "react"
    VUE = "vue"


def indent(level: int) -> str:
    return "  " * level


def escape_attr(value: str) -> str:
    """Escape a string for a double-quoted attribute value."""
    return value.replace("&", "&amp;").replace('"', "&quot;").replace("<", "&lt;")


def escape_text(value: Any) -> str:
    """Escape text content; braces are entities so neither dialect reads them as expressions."""
    if value is None:
        return ""
    return (
        str(value)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("{", "&#123;")
        .replace("}", "&#125;")
    )


def join_parts(*parts: str) -> str:
    """Join non-empty tag parts with single spaces."""
    return " ".join(part for part in parts if part)


def list_prop(props: Mapping[str, Any], key: str) -> list[Any]:
    """``props[key]`` when it is a list, otherwise empty."""
    value = props.get(key)
    return value if isinstance(value, list) else []


class Emitter(ABC):
    """Walks a tree and lowers each node through a per-kind fragment table."""

    dialect: Dialect
    class_attr: str
    root_level: int
    fragments: Mapping[ComponentKind, Fragment]

    def emit(self, tree: Node) -> str:
        """Complete document for ``tree``."""
        return self.document(self.node(tree, self.root_level))

    def node(self, node: Node, level: int) -> str:
        kind = node.component_kind
        if kind is None:
            logger.warning("codegen_placeholder", dialect=self.dialect.value, kind=node.kind)
            return self.placeholder(node, level)
        try:
            return self.fragments[kind](self, node, level)
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning(
                "codegen_node_failed", dialect=self.dialect.value, node_id=node.id, kind=node.kind, error=str(e)
            )
            return self.placeholder(node, level, reason="invalid")

    def children(self, node: Node, level: int) -> list[str]:
        return [self.node(child, level + 1) for child in node.children or ()]

    # ------------------------------------------------------------------
    # Prop serialization
    # ------------------------------------------------------------------

    def attrs(self, props: Mapping[str, Any], exclude: Iterable[str] = ()) -> str:
        """Serialize props as attributes, skipping excluded keys."""
        skipped = EXCLUDED_PROPS.union(exclude)
        return " ".join(
            self.attr(self.class_attr if key == "className" else key, value)
            for key, value in props.items()
            if key not in skipped
        )

    def classes(self, *parts: Any) -> str:
        """Styling attribute built from the non-empty class strings in ``parts``."""
        value = " ".join(str(part) for part in parts if part).strip()
        return f'{self.class_attr}="{escape_attr(value)}"'

    @abstractmethod
    def attr(self, key: str, value: Any) -> str:
        """One attribute; strings quoted, anything else as a dialect expression."""

    @abstractmethod
    def literal(self, value: Any) -> str:
        """A JSON value written inside an expression slot."""

    @abstractmethod
    def interpolate(self, expression: str) -> str:
        """Text content computed from an expression."""

    @abstractmethod
    def empty_element(self, tag: str, attrs: str = "") -> str:
        """A non-void element without content."""

    @abstractmethod
    def attr_expr(self, key: str, expression: str) -> str:
        """Attribute bound to an expression rather than a literal."""

    @abstractmethod
    def each(self, items: list[Any], var: str, tag: str, attrs: str, content: str | list[str], level: int) -> str:
        """Repeat ``tag`` once per item, exposing the item as ``var``."""

    def repeated(self, tag: str, attrs: str, content: str | list[str], level: int) -> str:
        """The element ``each`` repeats; list content is indented one level below it."""
        if isinstance(content, str):
            return element(tag, attrs, content, level)
        return block(tag, attrs, [indent(level + 1) + line for line in content], level)

    @abstractmethod
    def document(self, body: str) -> str:
        """Wrap the root fragment into a self-contained source file."""

    # ------------------------------------------------------------------
    # Unknown kinds and nodes that fail to lower
    # ------------------------------------------------------------------

    def placeholder(self, node: Node, level: int, reason: str = "unknown") -> str:
        label = node.props.get("label") if reason == "unknown" else None
        label = label or f"{reason.capitalize()}: {node.kind}"
        marker = f'data-{reason}-kind="{escape_attr(node.kind)}"'
        attrs = self.attrs(node.props) if reason == "unknown" else ""
        open_tag = join_parts("div", marker, attrs)
        return f"{indent(level)}<{open_tag}>{escape_text(label)}</div>"


# ============================================================================
# Shared fragments
# ============================================================================


def element(tag: str, attrs: str, content: str, level: int) -> str:
    return f"{indent(level)}<{join_parts(tag, attrs)}>{content}</{tag}>"


def void_element(tag: str, attrs: str, level: int) -> str:
    return f"{indent(level)}<{join_parts(tag, attrs)} />"


def block(tag: str, attrs: str, lines: list[str], level: int) -> str:
    """Element whose already-indented content lines sit between open and close tags."""
    pad = indent(level)
    return "\n".join([f"{pad}<{join_parts(tag, attrs)}>", *lines, f"{pad}</{tag}>"])


def container(em: Emitter, node: Node, level: int) -> str:
    attrs = em.attrs(node.props)
    children = em.children(node, level)
    if not children:
        return indent(level) + em.empty_element("div", attrs)
    return block("div", attrs, children, level)


def button(em: Emitter, node: Node, level: int) -> str:
    p = node.props
    variant = "bg-blue-600 text-white" if p.get("variant") == "primary" else "bg-slate-200 text-slate-800"
    return element(
        "button",
        em.classes(p.get("className"), "px-4 py-2 rounded-lg", variant),
        escape_text(p.get("label")),
        level,
    )


def text(em: Emitter, node: Node, level: int) -> str:
    return element("div", em.classes(node.props.get("className")), escape_text(node.props.get("content")), level)


def labelled(tag: str) -> Fragment:
    """Inline element whose text is the ``label`` prop."""

    def fragment(em: Emitter, node: Node, level: int) -> str:
        return element(tag, em.attrs(node.props), escape_text(node.props.get("label")), level)

    return fragment


def void(tag: str, *fixed: str) -> Fragment:
    def fragment(em: Emitter, node: Node, level: int) -> str:
        return void_element(tag, join_parts(*fixed, em.attrs(node.props)), level)

    return fragment


def empty(tag: str, *fixed: str) -> Fragment:
    def fragment(em: Emitter, node: Node, level: int) -> str:
        return indent(level) + em.empty_element(tag, join_parts(*fixed, em.attrs(node.props)))

    return fragment


def avatar(em: Emitter, node: Node, level: int) -> str:
    attrs = em.attrs(node.props, exclude={"initials"})
    if node.props.get("src"):
        return void_element("img", attrs, level)
    return element("div", attrs, escape_text(node.props.get("initials")), level)


def checkbox(role: str | None = None) -> Fragment:
    def fragment(em: Emitter, node: Node, level: int) -> str:
        p = node.props
        input_tag = join_parts(
            "input",
            'type="checkbox"',
            f'role="{role}"' if role else "",
            em.attrs(p, exclude={"label", "className"}),
        )
        return element(
            "label",
            em.classes("inline-flex items-center gap-2", p.get("className")),
            f"<{input_tag} /><span>{escape_text(p.get('label'))}</span>",
            level,
        )

    return fragment


def alert(em: Emitter, node: Node, level: int) -> str:
    p = node.props
    message = escape_text(p.get("children"))
    title = p.get("title")
    content = f"<strong>{escape_text(title)}</strong> {message}" if title else message
    return element("div", join_parts('role="alert"', em.attrs(p, exclude={"title"})), content, level)


def rating(em: Emitter, node: Node, level: int) -> str:
    stars = node.props.get("max", 5)
    count = stars if isinstance(stars, int) and not isinstance(stars, bool) and stars > 0 else 5
    return element("div", join_parts('aria-label="Rating"', em.attrs(node.props)), "★" * count, level)


def breadcrumb(em: Emitter, node: Node, level: int) -> str:
    items = list_prop(node.props, "items")
    trail = " / ".join(escape_text(item) for item in items)
    return element("nav", join_parts('aria-label="Breadcrumb"', em.attrs(node.props)), trail, level)


def statistic(em: Emitter, node: Node, level: int) -> str:
    p = node.props
    pad = indent(level + 1)
    lines = [
        f'{pad}<p {em.classes("text-sm text-slate-500")}>{escape_text(p.get("label"))}</p>',
        f'{pad}<p {em.classes("text-2xl font-bold")}>{escape_text(p.get("value"))}</p>',
    ]
    if p.get("trend"):
        lines.append(f'{pad}<span {em.classes("text-xs text-emerald-600")}>{escape_text(p["trend"])}</span>')
    return block("div", em.attrs(p, exclude={"label", "value", "trend"}), lines, level)


def quote(em: Emitter, node: Node, level: int) -> str:
    p = node.props
    pad = indent(level + 1)
    lines = [f"{pad}<p>{escape_text(p.get('content'))}</p>"]
    if p.get("author"):
        lines.append(f"{pad}<cite>{escape_text(p['author'])}</cite>")
    return block("blockquote", em.attrs(p, exclude={"author"}), lines, level)


def table(em: Emitter, node: Node, level: int) -> str:
    p = node.props
    headers = list_prop(p, "headers")
    rows = list_prop(p, "rows")
    inner, row_pad = indent(level + 1), indent(level + 2)
    lines = [
        f"{inner}<thead>",
        f"{row_pad}<tr>{''.join(f'<th>{escape_text(h)}</th>' for h in headers)}</tr>",
        f"{inner}</thead>",
        f"{inner}<tbody>",
        *(
            f"{row_pad}<tr>{''.join(f'<td>{escape_text(cell)}</td>' for cell in row)}</tr>"
            for row in rows
            if isinstance(row, list)
        ),
        f"{inner}</tbody>",
    ]
    return block("table", em.attrs(p, exclude={"headers", "rows"}), lines, level)


def code_block(em: Emitter, node: Node, level: int) -> str:
    p = node.props
    return element("pre", em.attrs(p, exclude={"code"}), f"<code>{escape_text(p.get('code'))}</code>", level)


def select(em: Emitter, node: Node, level: int) -> str:
    options = list_prop(node.props, "options")
    option = em.each(
        options,
        "option",
        "option",
        join_parts(em.attr_expr("key", "option"), em.attr_expr("value", "option")),
        em.interpolate("option"),
        level + 1,
    )
    return block("select", em.attrs(node.props, exclude={"options"}), [option], level)


def radio_group(em: Emitter, node: Node, level: int) -> str:
    options = list_prop(node.props, "options")
    option = em.each(
        options,
        "option",
        "label",
        join_parts(em.attr_expr("key", "option"), em.classes("flex items-center gap-2")),
        [
            f'<input type="radio" name="{escape_attr(node.id)}" {em.attr_expr("value", "option")} />',
            f"<span>{em.interpolate('option')}</span>",
        ],
        level + 1,
    )
    return block("div", join_parts('role="radiogroup"', em.attrs(node.props, exclude={"options"})), [option], level)


def data_list(em: Emitter, node: Node, level: int) -> str:
    p = node.props
    items = list_prop(p, "items")
    pad = indent(level + 1)
    rows = em.each(
        items,
        "item",
        "div",
        join_parts(em.attr_expr("key", "item.id"), em.classes("p-3 border-b last:border-0 flex justify-between")),
        [
            f"<span>{em.interpolate('item.title')}</span>",
            f'<span {em.classes("font-mono")}>{em.interpolate("item.value")}</span>',
        ],
        level + 1,
    )
    lines = [
        f'{pad}<div {em.classes("bg-slate-50 p-3 font-bold border-b")}>{escape_text(p.get("title"))}</div>',
        rows,
    ]
    return block("div", em.classes(p.get("className"), "border rounded-xl overflow-hidden"), lines, level)


K = ComponentKind

SHARED_FRAGMENTS: dict[ComponentKind, Fragment] = {
    K.CONTAINER: container,
    K.CARD: container,
    K.BUTTON: button,
    K.TEXT: text,
    K.BADGE: labelled("span"),
    K.TAG: labelled("span"),
    K.INPUT: void("input"),
    K.IMAGE: void("img"),
    K.DIVIDER: void("hr"),
    K.SLIDER: void("input", 'type="range"'),
    K.TEXTAREA: empty("textarea"),
    K.PROGRESS: empty("progress"),
    K.SPACER: empty("div"),
    K.VIDEO: empty("video", "controls"),
    K.MAP: empty("iframe", 'title="Map"'),
    K.AVATAR: avatar,
    K.TOGGLE: checkbox("switch"),
    K.CHECKBOX: checkbox(),
    K.ALERT: alert,
    K.RATING: rating,
    K.BREADCRUMB: breadcrumb,
    K.STATISTIC: statistic,
    K.QUOTE: quote,
    K.TABLE: table,
    K.CODE_BLOCK: code_block,
    K.SELECT: select,
    K.RADIO_GROUP: radio_group,
    K.DATA_LIST: data_list,
}
