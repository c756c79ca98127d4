"""
Blueprint
Schema tree node model, component kinds and templates.
"""

from .kinds import (
    ComponentKind,
    AnimationKind,
    KindSpec,
    KIND_REGISTRY,
    CONTAINER_KINDS,
    check_exhaustive,
    default_props,
    get_kind,
    get_spec,
    is_container_kind,
)
from .models import (
    ROOT_ID,
    Action,
    BaseAction,
    ToggleAction,
    SetAction,
    AlertAction,
    ApiRequestAction,
    DataListItem,
    Node,
    SavedProject,
    parse_action,
)
from .templates import Template, TemplateLibrary, initial_tree

__all__ = [
    "ComponentKind",
    "AnimationKind",
    "KindSpec",
    "KIND_REGISTRY",
    "CONTAINER_KINDS",
    "check_exhaustive",
    "default_props",
    "get_kind",
    "get_spec",
    "is_container_kind",
    "ROOT_ID",
    "Action",
    "BaseAction",
    "ToggleAction",
    "SetAction",
    "AlertAction",
    "ApiRequestAction",
    "DataListItem",
    "Node",
    "SavedProject",
    "parse_action",
    "Template",
    "TemplateLibrary",
    "initial_tree",
]
