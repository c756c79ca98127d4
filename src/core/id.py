"""ID Generation System.

ULID-based identifiers for tree nodes, projects and requests.

Features:
- ULIDs: Lexicographically sortable, timestamp-based
- Type-safe: NewType wrappers for different ID categories
- Prefixed: nodes carry their lowercased kind (button_*, card_*), projects proj_*
"""

from datetime import datetime
from typing import NewType
from ulid import ULID

# ============================================================================
# Type-Safe ID Wrappers
# ============================================================================

NodeID = NewType("NodeID", str)
"""Schema tree node identifier"""

ProjectID = NewType("ProjectID", str)
"""Saved project identifier"""

RequestID = NewType("RequestID", str)
"""Outbound request identifier (apiRequest actions, AI generations)"""


class Prefix:
    """ID prefix constants."""

    PROJECT = "proj"
    REQUEST = "req"
    NODE = "node"


SEPARATOR = "_"


class Generator:
    """ULID generator."""

    def generate(self) -> str:
        """Generate a raw 26-character ULID."""
        return str(ULID())

    def generate_with_prefix(self, prefix: str) -> str:
        """Generate ULID with a type prefix."""
        return f"{prefix}{SEPARATOR}{self.generate()}"

    def timestamp(self, id_str: str) -> int:
        """Extract timestamp (milliseconds) from a raw or prefixed ULID."""
        try:
            ulid = ULID.from_str(_ulid_part(id_str))
            return int(ulid.timestamp * 1000)
        except ValueError:
            return 0


_generator = Generator()


def _ulid_part(id_str: str) -> str:
    return id_str.rsplit(SEPARATOR, 1)[-1]


# ============================================================================
# Typed ID Generators
# ============================================================================


def new_node_id(kind: str | None = None) -> NodeID:
    """Generate a node ID prefixed with the lowercased component kind."""
    prefix = kind.lower().replace(SEPARATOR, "-") if kind else Prefix.NODE
    return NodeID(_generator.generate_with_prefix(prefix))


def new_project_id() -> ProjectID:
    """Generate new project ID."""
    return ProjectID(_generator.generate_with_prefix(Prefix.PROJECT))


def new_request_id() -> RequestID:
    """Generate new request ID."""
    return RequestID(_generator.generate_with_prefix(Prefix.REQUEST))


# ============================================================================
# Validation and Parsing
# ============================================================================


def is_valid(id_str: str) -> bool:
    """Check if string is a (possibly prefixed) ULID."""
    ulid_part = _ulid_part(id_str)
    if len(ulid_part) != 26:
        return False
    try:
        ULID.from_str(ulid_part)
        return True
    except ValueError:
        return False


def extract_prefix(id_str: str) -> str | None:
    """
    Extract prefix from prefixed ID.

    Args:
        id_str: Prefixed ID string

    Returns:
        Prefix string or None if no prefix
    """
    if SEPARATOR not in id_str:
        return None
    prefix, _ = id_str.rsplit(SEPARATOR, 1)
    return prefix or None


def extract_timestamp(id_str: str) -> datetime | None:
    """Extract creation time from a ULID-based ID, None if not a ULID."""
    timestamp_ms = _generator.timestamp(id_str)
    return datetime.fromtimestamp(timestamp_ms / 1000.0) if timestamp_ms > 0 else None


def generate_raw() -> str:
    """Generate ULID without prefix."""
    return _generator.generate()
