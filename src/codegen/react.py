"""React (JSX) emitter."""

from typing import Any

from blueprint import ComponentKind, Node, check_exhaustive
from core import safe_json_dumps

from .base import SHARED_FRAGMENTS, Dialect, Emitter, Fragment, escape_attr, indent, join_parts


FRAGMENTS: dict[ComponentKind, Fragment] = dict(SHARED_FRAGMENTS)

check_exhaustive(FRAGMENTS, "React FRAGMENTS")


class ReactEmitter(Emitter):
    """Lowers a tree into a default-exported function component."""

    dialect = Dialect.REACT
    class_attr = "className"
    root_level = 2
    fragments = FRAGMENTS

    def attr(self, key: str, value: Any) -> str:
        if isinstance(value, str):
            return f'{key}="{escape_attr(value)}"'
        return f"{key}={{{self.literal(value)}}}"

    def literal(self, value: Any) -> str:
        return safe_json_dumps(value)

    def interpolate(self, expression: str) -> str:
        return f"{{{expression}}}"

    def attr_expr(self, key: str, expression: str) -> str:
        return f"{key}={{{expression}}}"

    def empty_element(self, tag: str, attrs: str = "") -> str:
        return f"<{join_parts(tag, attrs)} />"

    def each(self, items: list[Any], var: str, tag: str, attrs: str, content: str | list[str], level: int) -> str:
        pad = indent(level)
        return "\n".join(
            [
                f"{pad}{{{self.literal(items)}.map(({var}) => (",
                self.repeated(tag, attrs, content, level + 1),
                f"{pad}))}}",
            ]
        )

    def document(self, body: str) -> str:
        return (
            "import React from 'react';\n"
            "\n"
            "export default function ExportedComponent() {\n"
            "  return (\n"
            f"{body}\n"
            "  );\n"
            "}"
        )


_emitter = ReactEmitter()


def emit_react(tree: Node) -> str:
    """JSX source for ``tree``; pure, no I/O."""
    return _emitter.emit(tree)
