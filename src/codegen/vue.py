"""Vue single-file component emitter."""

from typing import Any

from blueprint import ComponentKind, Node, check_exhaustive
from core import safe_json_dumps

from .base import (
    SHARED_FRAGMENTS,
    Dialect,
    Emitter,
    Fragment,
    element,
    escape_attr,
    escape_text,
    join_parts,
)


def code_block(em: Emitter, node: Node, level: int) -> str:
    # v-pre keeps mustaches in the snippet literal
    p = node.props
    attrs = join_parts("v-pre", em.attrs(p, exclude={"code"}))
    return element("pre", attrs, f"<code>{escape_text(p.get('code'))}</code>", level)


FRAGMENTS: dict[ComponentKind, Fragment] = {
    **SHARED_FRAGMENTS,
    ComponentKind.CODE_BLOCK: code_block,
}

check_exhaustive(FRAGMENTS, "Vue FRAGMENTS")


class VueEmitter(Emitter):
    """Lowers a tree into a ``<template>`` with an empty ``<script setup>``."""

    dialect = Dialect.VUE
    class_attr = "class"
    root_level = 1
    fragments = FRAGMENTS

    def attr(self, key: str, value: Any) -> str:
        if isinstance(value, str):
            return f'{key}="{escape_attr(value)}"'
        return f':{key}="{self.literal(value)}"'

    def literal(self, value: Any) -> str:
        # Single-quoted JS so the expression fits inside a double-quoted attribute
        return safe_json_dumps(value).replace("'", "\\'").replace('"', "'")

    def interpolate(self, expression: str) -> str:
        return f"{{{{ {expression} }}}}"

    def attr_expr(self, key: str, expression: str) -> str:
        return f':{key}="{expression}"'

    def empty_element(self, tag: str, attrs: str = "") -> str:
        return f"<{join_parts(tag, attrs)}></{tag}>"

    def each(self, items: list[Any], var: str, tag: str, attrs: str, content: str | list[str], level: int) -> str:
        loop = f'v-for="{var} in {self.literal(items)}"'
        return self.repeated(tag, join_parts(loop, attrs), content, level)

    def document(self, body: str) -> str:
        return (
            "<template>\n"
            f"{body}\n"
            "</template>\n"
            "\n"
            "<script setup>\n"
            "// No reactive state needed for static export\n"
            "</script>"
        )


_emitter = VueEmitter()


def emit_vue(tree: Node) -> str:
    """Vue SFC source for ``tree``; pure, no I/O."""
    return _emitter.emit(tree)
