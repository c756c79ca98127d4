"""
Client modules for the studio's external collaborators
"""

from .sync import SyncHub, SyncChannel, SCHEMA_UPDATE
from .projects import ProjectStore
from .ai import ListItemGenerator, GenerationError

__all__ = [
    "SyncHub",
    "SyncChannel",
    "SCHEMA_UPDATE",
    "ProjectStore",
    "ListItemGenerator",
    "GenerationError",
]
