"""
Templates
Reusable subtrees (hero, pricing, contact form) and the initial document.
"""

from typing import Any

from pydantic import BaseModel

from .models import Node, ROOT_ID


class Template(BaseModel):
    """Reusable subtree inserted by cloning with fresh ids."""

    id: str
    name: str
    tree: Node


def _text(node_id: str, content: str, class_name: str) -> dict[str, Any]:
    return {"id": node_id, "type": "Text", "props": {"content": content, "className": class_name}}


def _button(node_id: str, label: str, variant: str, **props: Any) -> dict[str, Any]:
    return {"id": node_id, "type": "Button", "props": {"label": label, "variant": variant, **props}}


class TemplateLibrary:
    """Library of built-in templates."""

    TEMPLATES = {
        "tpl_hero": Template(
            id="tpl_hero",
            name="Hero Section",
            tree=Node.from_wire(
                {
                    "id": "hero-root",
                    "type": "Container",
                    "props": {"className": "text-center py-16 px-4 bg-slate-900 rounded-3xl text-white space-y-6"},
                    "children": [
                        _text("h-title", "Build with Orion", "text-4xl font-extrabold tracking-tight"),
                        _text("h-sub", "Drag, drop, and build rapidly.", "text-slate-400 max-w-lg mx-auto"),
                        {
                            "id": "h-actions",
                            "type": "Container",
                            "props": {"className": "flex justify-center gap-4 pt-4"},
                            "children": [
                                _button("h-btn1", "Get Started", "primary"),
                                _button(
                                    "h-btn2",
                                    "View Demo",
                                    "outline",
                                    className="bg-transparent text-white border-slate-700",
                                ),
                            ],
                        },
                    ],
                }
            ),
        ),
        "tpl_pricing": Template(
            id="tpl_pricing",
            name="Pricing Cards",
            tree=Node.from_wire(
                {
                    "id": "price-root",
                    "type": "Container",
                    "props": {"className": "grid grid-cols-1 md:grid-cols-3 gap-4"},
                    "children": [
                        {
                            "id": f"p-c{i}",
                            "type": "Card",
                            "props": {"className": card_class},
                            "children": [
                                _text(f"p-t{i}", tier, tier_class),
                                _text(f"p-pr{i}", price, "text-3xl font-bold"),
                                _button(f"p-btn{i}", cta, variant),
                            ],
                        }
                        for i, (tier, price, cta, variant, card_class, tier_class) in enumerate(
                            [
                                ("Basic", "$0/mo", "Select", "outline", "p-6 space-y-4", "font-bold text-lg"),
                                (
                                    "Pro",
                                    "$29/mo",
                                    "Select",
                                    "primary",
                                    "p-6 bg-slate-900 text-white space-y-4 scale-105",
                                    "font-bold text-lg text-indigo-400",
                                ),
                                ("Enterprise", "Custom", "Contact", "outline", "p-6 space-y-4", "font-bold text-lg"),
                            ],
                            start=1,
                        )
                    ],
                }
            ),
        ),
        "tpl_form": Template(
            id="tpl_form",
            name="Contact Form",
            tree=Node.from_wire(
                {
                    "id": "form-root",
                    "type": "Card",
                    "props": {"className": "max-w-md mx-auto p-6 space-y-4"},
                    "children": [
                        _text("f-title", "Contact Us", "text-xl font-bold mb-2"),
                        {"id": "f-in1", "type": "Input", "props": {"placeholder": "Your Name"}},
                        {"id": "f-in2", "type": "Input", "props": {"placeholder": "Email Address"}},
                        {"id": "f-chk", "type": "Checkbox", "props": {"label": "Subscribe to newsletter"}},
                        _button("f-btn", "Send Message", "primary", className="w-full"),
                    ],
                }
            ),
        ),
    }

    @classmethod
    def get(cls, template_id: str) -> Template | None:
        return cls.TEMPLATES.get(template_id)

    @classmethod
    def list_all(cls) -> list[Template]:
        return list(cls.TEMPLATES.values())


def initial_tree() -> Node:
    """The document a fresh session starts from."""
    return Node.from_wire(
        {
            "id": ROOT_ID,
            "type": "Container",
            "props": {
                "className": "max-w-4xl mx-auto p-8 space-y-6 bg-white shadow-2xl rounded-2xl "
                "min-h-[600px] border border-slate-100",
            },
            "children": [
                {
                    "id": "header-container",
                    "type": "Container",
                    "props": {"className": "flex justify-between items-center border-b pb-4 mb-4"},
                    "children": [
                        _text("title-text", "Orion Dashboard", "text-2xl font-bold text-slate-800 tracking-tight"),
                        {
                            "id": "status-badge",
                            "type": "Badge",
                            "props": {"label": "Orion Connected", "variant": "success"},
                        },
                    ],
                },
                {
                    "id": "content-row",
                    "type": "Container",
                    "props": {"className": "grid grid-cols-1 md:grid-cols-3 gap-6"},
                    "children": [
                        {
                            "id": "left-col",
                            "type": "Container",
                            "props": {"className": "md:col-span-1 space-y-4"},
                            "children": [
                                {
                                    "id": "profile-card",
                                    "type": "Card",
                                    "props": {"className": "p-4 text-center space-y-3"},
                                    "children": [
                                        {
                                            "id": "profile-img",
                                            "type": "Avatar",
                                            "props": {
                                                "src": "https://api.dicebear.com/7.x/avataaars/svg?seed=Felix",
                                                "alt": "User Avatar",
                                                "className": "w-24 h-24 mx-auto",
                                            },
                                        },
                                        {
                                            "id": "profile-name-input",
                                            "type": "Input",
                                            "props": {
                                                "placeholder": "Edit User Name",
                                                "defaultValue": "Orion User",
                                                "className": "text-center font-semibold",
                                            },
                                        },
                                    ],
                                }
                            ],
                        },
                        {
                            "id": "right-col",
                            "type": "Container",
                            "props": {"className": "md:col-span-2 space-y-4"},
                            "children": [
                                {
                                    "id": "market-list",
                                    "type": "DataList",
                                    "props": {
                                        "title": "Analytics Data",
                                        "description": "Configure items manually",
                                        "items": [
                                            {
                                                "id": "1",
                                                "title": "Phase 1",
                                                "subtitle": "Initial setup",
                                                "value": "100%",
                                                "badge": "Done",
                                            },
                                            {
                                                "id": "2",
                                                "title": "Phase 2",
                                                "subtitle": "Implementation",
                                                "value": "45%",
                                                "badge": "In Progress",
                                            },
                                        ],
                                    },
                                },
                                {
                                    "id": "action-bar",
                                    "type": "Container",
                                    "props": {"className": "flex justify-end gap-2 pt-4 border-t border-slate-100"},
                                    "children": [
                                        _button("cancel-btn", "Cancel", "ghost"),
                                        _button("save-btn", "Save Changes", "primary"),
                                    ],
                                },
                            ],
                        },
                    ],
                },
            ],
        }
    )
