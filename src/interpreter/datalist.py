"""DataList row filtering and sorting."""

from collections.abc import Iterable, Mapping
from typing import Any

from .store import is_truthy


SEARCH_FIELDS = ("title", "subtitle", "value")
SORT_KEYS = ("title", "value")
SORT_ORDERS = ("asc", "desc", "none")


def _folded(value: Any) -> str:
    return str(value).lower() if is_truthy(value) else ""


def process_items(
    items: Iterable[Mapping[str, Any]] | None,
    filter_query: str | None = "",
    sort_key: str | None = "title",
    sort_order: str | None = "none",
) -> list[Mapping[str, Any]]:
    """
    Rows a DataList shows for its current filter and sort settings.

    Filtering is a case-insensitive substring match on title, subtitle or value.
    Sorting compares the lowercased string form of ``sort_key``; ties keep their
    original order. Non-list ``items`` count as empty, a non-string query is
    matched by its string form. Unknown sort keys fall back to title, unknown
    orders to none.
    """
    if not isinstance(items, (list, tuple)):
        items = ()
    rows = [item for item in items if isinstance(item, Mapping)]

    if is_truthy(filter_query):
        query = str(filter_query).lower()
        rows = [row for row in rows if any(query in _folded(row.get(field)) for field in SEARCH_FIELDS)]

    if sort_order in ("asc", "desc"):
        key = sort_key if sort_key in SORT_KEYS else "title"
        rows = sorted(rows, key=lambda row: _folded(row.get(key)), reverse=sort_order == "desc")

    return rows
