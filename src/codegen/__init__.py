"""
Code Generation Engine
Lowers schema trees into React (JSX) and Vue source documents.
"""

from .base import Dialect, EXCLUDED_PROPS, Emitter
from .react import ReactEmitter, emit_react
from .vue import VueEmitter, emit_vue
from .exporter import CodeExporter

__all__ = [
    "Dialect",
    "EXCLUDED_PROPS",
    "Emitter",
    "ReactEmitter",
    "VueEmitter",
    "emit_react",
    "emit_vue",
    "CodeExporter",
]
