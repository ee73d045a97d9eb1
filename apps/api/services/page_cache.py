import logging
import threading
from typing import Any, Callable, Dict, Tuple, TypeVar

from ..settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PageCache:
    """
    In-process cache of rendered dashboard views, keyed by path.

    A path may hold several snapshots (one per variant, e.g. search query
    and page number), at most `max_variants` of them; past that the oldest
    variant of the path is evicted. `revalidate_path` drops every variant
    of a path, so the next read recomputes from the database.

    Each path carries a generation counter. A render that started before a
    revalidation does not store its result, which keeps a slow read from
    putting a stale snapshot back after a write.
    """

    def __init__(self, max_variants: int = 100) -> None:
        self._lock = threading.Lock()
        self._max_variants = max_variants
        # dicts keep insertion order, so the first key of a path is its oldest
        self._pages: Dict[Tuple[str, str], Any] = {}
        self._generations: Dict[str, int] = {}

    def get_or_render(self, path: str, render: Callable[[], T], variant: str = "") -> T:
        key = (path, variant)
        with self._lock:
            if key in self._pages:
                return self._pages[key]
            generation = self._generations.get(path, 0)

        value = render()

        with self._lock:
            if self._generations.get(path, 0) == generation:
                self._pages[key] = value
                self._evict(path)
        return value

    def _evict(self, path: str) -> None:
        variants = [key for key in self._pages if key[0] == path]
        for key in variants[:max(0, len(variants) - self._max_variants)]:
            del self._pages[key]

    def revalidate_path(self, path: str) -> None:
        with self._lock:
            self._generations[path] = self._generations.get(path, 0) + 1
            dropped = [key for key in self._pages if key[0] == path]
            for key in dropped:
                del self._pages[key]
        logger.info("revalidated %s (%d cached snapshot(s) dropped)", path, len(dropped))

    def is_stale(self, path: str, variant: str = "") -> bool:
        with self._lock:
            return (path, variant) not in self._pages

    def size(self, path: str) -> int:
        with self._lock:
            return sum(1 for key in self._pages if key[0] == path)


page_cache = PageCache(max_variants=settings.PAGE_CACHE_MAX_VARIANTS)


def get_page_cache() -> PageCache:
    return page_cache
