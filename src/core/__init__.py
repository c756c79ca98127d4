"""Shared plumbing: settings, tree validation, logging, JSON, caching and the DI container."""

from .config import Settings, get_settings
from .validate import (
    ValidationError,
    ValidationResult,
    TreeValidator,
    validate_json_size,
    validate_json_depth,
    validate_tree,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import (
    extract_json,
    safe_json_dumps,
    dumps_bytes,
    loads,
    JSONParseError,
)
from .cache import LRUCache, Stats, fingerprint


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "ValidationError",
    "ValidationResult",
    "TreeValidator",
    "validate_json_size",
    "validate_json_depth",
    "validate_tree",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "extract_json",
    "safe_json_dumps",
    "dumps_bytes",
    "loads",
    "JSONParseError",
    # DI
    "create_container",
    # Caching
    "LRUCache",
    "Stats",
    "fingerprint",
]
