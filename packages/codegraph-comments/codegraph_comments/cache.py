"""Caches - identity-scoped and bounded LRU memoization.

Two shapes:
    - IdentityCache: value lives as long as its owner (weak keys). Used for
      per-file derived data (node index, classified comments) so long
      batch runs do not keep finished files alive.
    - LRUCache: fixed capacity, least-recently-used eviction, thread-safe.
      Used for compiled patterns and comment classifications shared
      across files.

No cache method raises. A miss means the caller recomputes.

Usage:
    >>> caches = CacheRegistry()
    >>> caches.regex("^TODO").regex.pattern
    '^TODO'
"""

import re
import threading
import weakref
from collections import OrderedDict
from collections.abc import Hashable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from codegraph_comments.observability import get_logger

logger = get_logger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass
class CacheStats:
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    size: int = 0
    max_size: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class IdentityCache(Generic[V]):
    """Cache whose entries are tied to the lifetime of an owner object.

    Owners are held weakly; once an owner is garbage collected its entry
    is gone. Owners that cannot be weakly referenced are never cached.
    """

    def __init__(self, name: str = "identity") -> None:
        self.name = name
        self._entries: "weakref.WeakKeyDictionary[Any, V]" = weakref.WeakKeyDictionary()

    def get(self, owner: object, default: V | None = None) -> V | None:
        try:
            return self._entries.get(owner, default)
        except TypeError:
            return default

    def set(self, owner: object, value: V) -> None:
        try:
            self._entries[owner] = value
        except TypeError:
            logger.debug("identity_cache_owner_not_weakrefable", cache=self.name, owner=type(owner).__name__)

    def has(self, owner: object) -> bool:
        try:
            return owner in self._entries
        except TypeError:
            return False

    def delete(self, owner: object) -> bool:
        try:
            del self._entries[owner]
        except (KeyError, TypeError):
            return False
        return True

    def __len__(self) -> int:
        return len(self._entries)


class LRUCache(Generic[K, V]):
    """Bounded LRU cache.

    Thread-safe LRU cache with statistics. When full, `set` of a new key
    evicts exactly one entry, the least recently used.

    Example:
        >>> cache = LRUCache(max_size=2)
        >>> cache.set("a", 1)
        >>> cache.set("b", 2)
        >>> cache.get("a")
        1
        >>> cache.set("c", 3)  # evicts "b"
        >>> cache.has("b")
        False
    """

    def __init__(self, max_size: int = 100, name: str = "lru") -> None:
        """Initialize cache.

        Args:
            max_size: Maximum number of entries
            name: Label used in log events
        """
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.max_size = max_size
        self.name = name
        self._cache: OrderedDict[K, V] = OrderedDict()
        self._lock = threading.Lock()

        # Statistics
        self._hits = 0
        self._misses = 0

    def get(self, key: K, default: V | None = None) -> V | None:
        """Get a value and mark it most recently used."""
        with self._lock:
            if key in self._cache:
                # Move to end (most recently used)
                self._cache.move_to_end(key)
                self._hits += 1
                return self._cache[key]

            self._misses += 1
            return default

    def set(self, key: K, value: V) -> None:
        """Insert or update; evicts the LRU entry first when at capacity."""
        with self._lock:
            # Update existing
            if key in self._cache:
                self._cache.move_to_end(key)
                self._cache[key] = value
                return

            if len(self._cache) >= self.max_size:
                evicted_key, _ = self._cache.popitem(last=False)
                logger.debug("cache_evicted", cache=self.name, key=repr(evicted_key))

            self._cache[key] = value

    def has(self, key: K) -> bool:
        """Membership test; does not touch recency."""
        with self._lock:
            return key in self._cache

    def delete(self, key: K) -> bool:
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                return True
            return False

    def clear(self) -> None:
        """Clear all entries."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def size(self) -> int:
        with self._lock:
            return len(self._cache)

    def keys(self) -> Iterator[K]:
        """Keys, oldest first (snapshot)."""
        with self._lock:
            return iter(list(self._cache.keys()))

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                size=len(self._cache),
                max_size=self.max_size,
            )

    def __len__(self) -> int:
        return self.size()


@dataclass(frozen=True)
class CompiledPattern:
    """Result of compiling a user pattern; exactly one of regex/error is set."""

    pattern: str
    regex: re.Pattern[str] | None
    error: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.regex is not None

    def search(self, text: str) -> bool:
        """Invalid patterns never match."""
        return self.regex is not None and self.regex.search(text) is not None


class CacheRegistry:
    """
    Shared cache handle passed to rules and the linter.

    Bounded caches persist across files and are cleared with `clear()`.
    Identity caches follow the lifetime of each ParsedFile.
    """

    def __init__(self, regex_cache_size: int = 200, context_cache_size: int = 300) -> None:
        self.regexes: LRUCache[tuple[str, int], CompiledPattern] = LRUCache(regex_cache_size, name="regex")
        self.comment_contexts: LRUCache[Hashable, Any] = LRUCache(context_cache_size, name="comment_context")
        self.node_indexes: IdentityCache[Any] = IdentityCache(name="node_index")
        self.classified_comments: IdentityCache[Any] = IdentityCache(name="classified_comments")

    def regex(self, pattern: str, flags: int = 0) -> CompiledPattern:
        """Compiled pattern keyed by (pattern, flags); compile errors are cached too."""
        key = (pattern, flags)
        cached = self.regexes.get(key)
        if cached is not None:
            return cached

        try:
            result = CompiledPattern(pattern=pattern, regex=re.compile(pattern, flags))
        except re.error as e:
            result = CompiledPattern(pattern=pattern, regex=None, error=str(e))

        self.regexes.set(key, result)
        return result

    def clear(self) -> None:
        """Clear the process-wide bounded caches."""
        self.regexes.clear()
        self.comment_contexts.clear()

    def stats(self) -> dict[str, CacheStats]:
        return {
            "regex": self.regexes.stats(),
            "comment_context": self.comment_contexts.stats(),
        }


_default_registry: CacheRegistry | None = None


def get_default_caches() -> CacheRegistry:
    """Process-wide registry used when callers do not pass their own."""
    global _default_registry
    if _default_registry is None:
        _default_registry = CacheRegistry()
    return _default_registry


def clear_all_caches() -> None:
    """Clear the default registry's bounded caches."""
    get_default_caches().clear()
