"""
Component kinds
The closed set of node kinds and the per-kind contract each one carries.
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ComponentKind(str, Enum):
    """Every component the studio can place in a tree."""

    CONTAINER = "Container"
    CARD = "Card"
    BUTTON = "Button"
    DATA_LIST = "DataList"
    BADGE = "Badge"
    TEXT = "Text"
    INPUT = "Input"
    TEXTAREA = "Textarea"
    IMAGE = "Image"
    DIVIDER = "Divider"
    AVATAR = "Avatar"
    TOGGLE = "Toggle"
    CHECKBOX = "Checkbox"
    SLIDER = "Slider"
    PROGRESS = "Progress"
    ALERT = "Alert"
    SELECT = "Select"
    SPACER = "Spacer"
    RATING = "Rating"
    RADIO_GROUP = "RadioGroup"
    BREADCRUMB = "Breadcrumb"
    TAG = "Tag"
    STATISTIC = "Statistic"
    QUOTE = "Quote"
    VIDEO = "Video"
    MAP = "Map"
    TABLE = "Table"
    CODE_BLOCK = "CodeBlock"


class AnimationKind(str, Enum):
    """Entry animation presets."""

    NONE = "none"
    FADE = "fade"
    SLIDE_UP = "slideUp"
    SLIDE_DOWN = "slideDown"
    BOUNCE = "bounce"
    PULSE = "pulse"
    SPIN = "spin"


@dataclass(frozen=True)
class KindSpec:
    """Contract of one component kind."""

    kind: ComponentKind
    container: bool = False
    defaults: Mapping[str, Any] = field(default_factory=dict)
    # Bound variables drive "checked" instead of "value"
    boolean_value: bool = False

    @property
    def value_field(self) -> str:
        return "checked" if self.boolean_value else "value"


K = ComponentKind

KIND_REGISTRY: dict[ComponentKind, KindSpec] = {
    K.CONTAINER: KindSpec(
        K.CONTAINER,
        container=True,
        defaults={"className": "p-4 border border-dashed border-slate-300 rounded min-h-[100px] bg-slate-50/50"},
    ),
    K.CARD: KindSpec(
        K.CARD,
        container=True,
        defaults={"className": "p-6 bg-white border border-slate-200 shadow-sm rounded-xl"},
    ),
    K.BUTTON: KindSpec(K.BUTTON, defaults={"label": "Button", "variant": "primary"}),
    K.TEXT: KindSpec(K.TEXT, defaults={"content": "Double click to edit text...", "className": "text-slate-800"}),
    K.BADGE: KindSpec(K.BADGE, defaults={"label": "Badge", "variant": "default"}),
    K.INPUT: KindSpec(K.INPUT, defaults={"placeholder": "Enter text..."}),
    K.TEXTAREA: KindSpec(K.TEXTAREA, defaults={"placeholder": "Enter long text...", "rows": 3}),
    K.IMAGE: KindSpec(K.IMAGE, defaults={"className": "w-full h-48 bg-slate-200 object-cover rounded-lg"}),
    K.DATA_LIST: KindSpec(
        K.DATA_LIST,
        defaults={
            "title": "Dynamic List",
            "description": "Configure source",
            "items": [],
            "filterQuery": "",
            "sortKey": "title",
            "sortOrder": "none",
        },
    ),
    K.DIVIDER: KindSpec(K.DIVIDER, defaults={"className": "my-4"}),
    K.AVATAR: KindSpec(K.AVATAR, defaults={"className": "w-12 h-12", "initials": "OR"}),
    K.TOGGLE: KindSpec(K.TOGGLE, defaults={"label": "Toggle me"}, boolean_value=True),
    K.CHECKBOX: KindSpec(K.CHECKBOX, defaults={"label": "Check me"}, boolean_value=True),
    K.SLIDER: KindSpec(K.SLIDER, defaults={"defaultValue": 50}),
    K.PROGRESS: KindSpec(K.PROGRESS, defaults={"value": 60}),
    K.ALERT: KindSpec(K.ALERT, defaults={"title": "Notification", "children": "Something happened", "type": "info"}),
    K.SELECT: KindSpec(K.SELECT, defaults={"options": ["Option A", "Option B"]}),
    K.SPACER: KindSpec(K.SPACER, defaults={"height": 4}),
    K.RATING: KindSpec(K.RATING, defaults={"max": 5}),
    K.RADIO_GROUP: KindSpec(K.RADIO_GROUP, defaults={"options": ["Option A", "Option B", "Option C"]}),
    K.BREADCRUMB: KindSpec(K.BREADCRUMB, defaults={"items": ["Home", "Section", "Page"]}),
    K.TAG: KindSpec(K.TAG, defaults={"label": "Tag"}),
    K.STATISTIC: KindSpec(K.STATISTIC, defaults={"label": "Revenue", "value": "$12,450", "trend": "+12%"}),
    K.QUOTE: KindSpec(
        K.QUOTE,
        defaults={
            "content": "Innovation distinguishes between a leader and a follower.",
            "author": "Steve Jobs",
        },
    ),
    K.VIDEO: KindSpec(K.VIDEO, defaults={"src": ""}),
    K.MAP: KindSpec(K.MAP),
    K.TABLE: KindSpec(
        K.TABLE,
        defaults={
            "headers": ["Name", "Role", "Status"],
            "rows": [["Alice", "Admin", "Active"], ["Bob", "User", "Offline"]],
        },
    ),
    K.CODE_BLOCK: KindSpec(K.CODE_BLOCK, defaults={"code": 'console.log("Hello World");'}),
}

CONTAINER_KINDS = frozenset(spec.kind for spec in KIND_REGISTRY.values() if spec.container)


def check_exhaustive(table: Mapping[ComponentKind, Any], name: str) -> None:
    """
    Fail fast when a dispatch table does not cover every component kind.

    Raises:
        RuntimeError: If any kind is missing
    """
    missing = [kind.value for kind in ComponentKind if kind not in table]
    if missing:
        raise RuntimeError(f"{name} is missing component kinds: {', '.join(missing)}")


def get_kind(kind: str | ComponentKind) -> ComponentKind | None:
    """Resolve a wire kind string to the enum, None for unknown kinds."""
    if isinstance(kind, ComponentKind):
        return kind
    try:
        return ComponentKind(kind)
    except ValueError:
        return None


def get_spec(kind: str | ComponentKind) -> KindSpec | None:
    resolved = get_kind(kind)
    return KIND_REGISTRY[resolved] if resolved else None


def is_container_kind(kind: str | ComponentKind) -> bool:
    """Whether nodes of this kind may hold children."""
    return get_kind(kind) in CONTAINER_KINDS


def default_props(kind: str | ComponentKind) -> dict[str, Any]:
    """Fresh copy of the creation-time props for a kind (empty for unknown kinds)."""
    spec = get_spec(kind)
    return copy.deepcopy(dict(spec.defaults)) if spec else {}


check_exhaustive(KIND_REGISTRY, "KIND_REGISTRY")
