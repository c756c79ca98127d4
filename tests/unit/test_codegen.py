"""Tests for React and Vue code generation."""

import pytest

from blueprint import ComponentKind, Node, ROOT_ID
from codegen import emit_react, emit_vue
from engine import create_node, insert_child


def tree_of(*children: dict) -> Node:
    return Node.from_wire({"id": ROOT_ID, "type": "Container", "props": {}, "children": list(children)})


GO_BUTTON = {"id": "b1", "type": "Button", "props": {"label": "Go", "variant": "primary"}}


# ============================================================================
# End to end
# ============================================================================

@pytest.mark.unit
def test_react_document_for_single_button():
    assert emit_react(tree_of(GO_BUTTON)) == (
        "import React from 'react';\n"
        "\n"
        "export default function ExportedComponent() {\n"
        "  return (\n"
        "    <div>\n"
        '      <button className="px-4 py-2 rounded-lg bg-blue-600 text-white">Go</button>\n'
        "    </div>\n"
        "  );\n"
        "}"
    )


@pytest.mark.unit
def test_vue_document_for_single_button():
    assert emit_vue(tree_of(GO_BUTTON)) == (
        "<template>\n"
        "  <div>\n"
        '    <button class="px-4 py-2 rounded-lg bg-blue-600 text-white">Go</button>\n'
        "  </div>\n"
        "</template>\n"
        "\n"
        "<script setup>\n"
        "// No reactive state needed for static export\n"
        "</script>"
    )


@pytest.mark.unit
def test_secondary_button_variant():
    code = emit_react(tree_of({"id": "b", "type": "Button", "props": {"label": "Later", "variant": "ghost"}}))
    assert '<button className="px-4 py-2 rounded-lg bg-slate-200 text-slate-800">Later</button>' in code


# ============================================================================
# Totality
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize("kind", list(ComponentKind))
@pytest.mark.parametrize("emit", [emit_react, emit_vue])
def test_every_kind_generates(kind, emit):
    tree = insert_child(tree_of(), ROOT_ID, create_node(kind))

    code = emit(tree)

    assert "data-unknown-kind" not in code
    assert len(code.splitlines()) >= 4


@pytest.mark.unit
def test_dashboard_generates_in_both_dialects(dashboard):
    react = emit_react(dashboard)
    vue = emit_vue(dashboard)

    assert "Orion Dashboard" in react and "Orion Dashboard" in vue
    assert "className=" in react and "class=" not in react
    assert 'class="' in vue and "className" not in vue


# ============================================================================
# Prop serialization
# ============================================================================

@pytest.mark.unit
def test_non_string_props_become_expressions():
    tree = tree_of({"id": "t", "type": "Textarea", "props": {"placeholder": "Notes", "rows": 3}})

    assert '<textarea placeholder="Notes" rows={3} />' in emit_react(tree)
    assert '<textarea placeholder="Notes" :rows="3"></textarea>' in emit_vue(tree)


@pytest.mark.unit
def test_excluded_props_are_not_attributes():
    tree = tree_of(
        {
            "id": "c",
            "type": "Container",
            "props": {"data-role": "main", "items": [1], "content": "x", "children": "y"},
            "children": [],
        }
    )

    assert '<div data-role="main" />' in emit_react(tree)
    assert '<div data-role="main"></div>' in emit_vue(tree)


@pytest.mark.unit
def test_attribute_and_text_escaping():
    tree = tree_of(
        {"id": "i", "type": "Input", "props": {"placeholder": 'Say "hi"'}},
        {"id": "t", "type": "Text", "props": {"content": "<b>{x}</b> & more"}},
    )

    code = emit_react(tree)

    assert 'placeholder="Say &quot;hi&quot;"' in code
    assert "&lt;b&gt;&#123;x&#125;&lt;/b&gt; &amp; more" in code
    assert "{x}" not in code


@pytest.mark.unit
def test_list_props_are_iterated():
    tree = tree_of({"id": "s", "type": "Select", "props": {"options": ["A", "B"]}})

    react = emit_react(tree)
    vue = emit_vue(tree)

    assert '{["A","B"].map((option) => (' in react
    assert "<option key={option} value={option}>{option}</option>" in react
    assert "<option v-for=\"option in ['A','B']\" :key=\"option\" :value=\"option\">{{ option }}</option>" in vue


@pytest.mark.unit
def test_data_list_rows():
    tree = tree_of(
        {
            "id": "dl",
            "type": "DataList",
            "props": {"title": "Stocks", "items": [{"id": "1", "title": "AAPL", "value": "$190"}]},
        }
    )

    react = emit_react(tree)
    vue = emit_vue(tree)

    assert "Stocks" in react and "Stocks" in vue
    assert "{item.title}" in react
    assert "{{ item.title }}" in vue
    assert ":key=\"item.id\"" in vue


@pytest.mark.unit
def test_vue_code_block_is_verbatim():
    tree = tree_of({"id": "c", "type": "CodeBlock", "props": {"code": "const a = {{ b }};"}})

    vue = emit_vue(tree)

    assert "<pre v-pre>" in vue
    assert "<pre v-pre>" not in emit_react(tree)


@pytest.mark.unit
def test_empty_container_is_self_closed_only_in_react():
    tree = tree_of()

    assert "    <div />" in emit_react(tree)
    assert "  <div></div>" in emit_vue(tree)


# ============================================================================
# Unknown kinds
# ============================================================================

@pytest.mark.unit
def test_unknown_kind_emits_placeholder():
    tree = tree_of({"id": "x", "type": "Carousel", "props": {"slides": 3}}, GO_BUTTON)

    react = emit_react(tree)
    vue = emit_vue(tree)

    assert '<div data-unknown-kind="Carousel" slides={3}>Unknown: Carousel</div>' in react
    assert '<div data-unknown-kind="Carousel" :slides="3">Unknown: Carousel</div>' in vue
    assert ">Go</button>" in react and ">Go</button>" in vue


# ============================================================================
# Malformed props on known kinds
# ============================================================================

@pytest.mark.unit
def test_non_list_sequence_props_emit_empty_collections():
    tree = tree_of(
        {"id": "t", "type": "Table", "props": {"headers": 3, "rows": 7}},
        {"id": "s", "type": "Select", "props": {"options": "abc"}},
        {"id": "bc", "type": "Breadcrumb", "props": {"items": "Home"}},
        GO_BUTTON,
    )

    react = emit_react(tree)
    vue = emit_vue(tree)

    assert "<tr></tr>" in react and "<tr></tr>" in vue
    assert "option in []" in vue
    assert "[].map(" in react
    assert "H / o" not in react
    assert ">Go</button>" in react and ">Go</button>" in vue


@pytest.mark.unit
def test_failing_fragment_becomes_placeholder(monkeypatch):
    from codegen import react, vue

    def broken(em, node, level):
        raise TypeError("unsupported prop shape")

    monkeypatch.setitem(react.FRAGMENTS, ComponentKind.TABLE, broken)
    monkeypatch.setitem(vue.FRAGMENTS, ComponentKind.TABLE, broken)
    tree = tree_of({"id": "t", "type": "Table", "props": {"headers": ["A"]}}, GO_BUTTON)

    for code in (emit_react(tree), emit_vue(tree)):
        assert '<div data-invalid-kind="Table">Invalid: Table</div>' in code
        assert ">Go</button>" in code


@pytest.mark.unit
def test_vue_literal_escapes_apostrophes():
    tree = tree_of({"id": "s", "type": "Select", "props": {"options": ["Bob's", 'say "hi"']}})

    assert "v-for=\"option in ['Bob\\'s','say \\'hi\\'']\"" in emit_vue(tree)
