"""
Code Exporter
Dialect dispatch in front of the emitters with a fingerprint-keyed output cache.
"""

import time
from typing import Callable

from blueprint import Node
from core import LRUCache, dumps_bytes, fingerprint, get_logger
from monitoring import metrics_collector

from .base import Dialect
from .react import emit_react
from .vue import emit_vue


logger = get_logger(__name__)

EMITTERS: dict[Dialect, Callable[[Node], str]] = {
    Dialect.REACT: emit_react,
    Dialect.VUE: emit_vue,
}


class CodeExporter:
    """
    Generates source text for a tree in a chosen dialect.

    Output is a pure function of the tree's wire form and the dialect, so
    identical trees are served from cache.
    """

    def __init__(self, enable_cache: bool = True, cache_size: int = 64) -> None:
        self.enable_cache = enable_cache
        self._cache: LRUCache[str] | None = LRUCache[str](max_size=cache_size) if enable_cache else None
        logger.debug("exporter_init", cache=enable_cache, cache_size=cache_size)

    def export(self, tree: Node, dialect: Dialect | str = Dialect.REACT) -> str:
        """
        Generate code for ``tree``.

        Raises:
            ValueError: If the dialect is unknown
        """
        dialect = Dialect(dialect)
        key = None
        if self._cache is not None:
            key = fingerprint(dumps_bytes(tree.to_wire()), dialect.value)
            cached = self._cache.get(key)
            if cached is not None:
                metrics_collector.record_cache_hit("export")
                logger.debug("export_cache_hit", dialect=dialect.value, key=key)
                return cached
            metrics_collector.record_cache_miss("export")

        start_time = time.time()
        code = EMITTERS[dialect](tree)
        duration = time.time() - start_time
        metrics_collector.record_export(dialect.value, duration)
        logger.info("export", dialect=dialect.value, root=tree.id, chars=len(code), duration_ms=duration * 1000)

        if self._cache is not None and key is not None:
            self._cache.set(key, code)
        return code

    def export_all(self, tree: Node) -> dict[Dialect, str]:
        return {dialect: self.export(tree, dialect) for dialect in Dialect}

    def clear_cache(self) -> None:
        if self._cache is not None:
            self._cache.clear()

    def get_stats(self) -> dict:
        """Cache statistics (empty when caching is disabled)."""
        return self._cache.stats.to_dict() if self._cache is not None else {}
