"""
Runtime Logic Interpreter
Variable store, render-time resolution and action execution.
"""

from .store import VariableStore, is_truthy
from .datalist import process_items
from .actions import ActionExecutor, FALLBACK_PAYLOAD
from .resolver import RenderMode, RenderNode, Renderer, render

__all__ = [
    "VariableStore",
    "is_truthy",
    "process_items",
    "ActionExecutor",
    "FALLBACK_PAYLOAD",
    "RenderMode",
    "RenderNode",
    "Renderer",
    "render",
]
