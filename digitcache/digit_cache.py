"""
Digit Prefix Cache
In-memory, append-only cache of materialized digit prefixes keyed by (constant, base)
Extensions of one key are serialized; reads of a published prefix take no lock
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

DIGIT_DTYPE = np.uint32

CacheKey = Tuple[str, int]


class DigitCache:
    """
    Append-only store of DigitStream prefixes.

    Each (constant, base) key maps to an immutable numpy array holding the
    first N digits of that stream. Extending a key publishes a new, longer
    array whose head equals the previous one; published arrays are never
    mutated, shortened or evicted.
    """

    def __init__(self):
        """Initialize an empty cache."""
        self._entries: Dict[CacheKey, np.ndarray] = {}
        self._key_locks: Dict[CacheKey, threading.Lock] = {}
        self._registry_lock = threading.Lock()
        self._stats_lock = threading.Lock()

        self.hits = 0
        self.extensions = 0
        self.digits_computed = 0

    def _lock_for(self, key: CacheKey) -> threading.Lock:
        with self._registry_lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._key_locks[key] = lock
            return lock

    def _record_hit(self):
        with self._stats_lock:
            self.hits += 1

    def digit_count(self, constant: str, base: int) -> int:
        """
        Number of digits currently cached for a key.

        Args:
            constant: Constant name
            base: Numeral base

        Returns:
            int: Cached prefix length (0 if absent)
        """
        prefix = self._entries.get((constant, base))
        return 0 if prefix is None else len(prefix)

    def get(self, constant: str, base: int, count: int) -> Optional[np.ndarray]:
        """
        Get the first count cached digits.

        Args:
            constant: Constant name
            base: Numeral base
            count: Digits required

        Returns:
            Read-only view of the prefix, or None if fewer than count digits are cached
        """
        prefix = self._entries.get((constant, base))
        if prefix is None or len(prefix) < count:
            return None

        self._record_hit()
        return prefix[:count]

    def get_or_extend(
        self,
        constant: str,
        base: int,
        count: int,
        compute: Callable[[int], Any],
        target: Optional[Callable[[int], int]] = None
    ) -> np.ndarray:
        """
        Get the first count digits, extending the cached prefix if needed.

        Args:
            constant: Constant name
            base: Numeral base
            count: Digits required
            compute: compute(new_count) returning the first new_count digits
                of the stream; its head must equal the cached prefix
            target: Optional growth policy mapping the cached length to the
                prefix length to materialize (must be >= count)

        Returns:
            Read-only view of the first count digits
        """
        if count <= 0:
            return np.zeros(0, dtype=DIGIT_DTYPE)

        cached = self.get(constant, base, count)
        if cached is not None:
            return cached

        key = (constant, base)
        with self._lock_for(key):
            # Another thread may have extended the key while we waited
            prefix = self._entries.get(key)
            have = 0 if prefix is None else len(prefix)
            if have >= count:
                self._record_hit()
                return prefix[:count]

            new_count = max(count, target(have)) if target else count
            extended = np.asarray(compute(new_count), dtype=DIGIT_DTYPE)
            if len(extended) != new_count:
                raise RuntimeError(
                    f"Digit extension for {constant}/base {base} returned "
                    f"{len(extended)} digits, expected {new_count}"
                )
            if prefix is not None and not np.array_equal(extended[:have], prefix):
                raise RuntimeError(
                    f"Recomputed prefix of {constant}/base {base} differs from the "
                    f"cached {have} digits"
                )

            extended.setflags(write=False)
            self._entries[key] = extended

            with self._stats_lock:
                self.extensions += 1
                self.digits_computed += new_count - have
            logger.debug(f"Extended {constant}/base {base} prefix: {have} -> {new_count} digits")

        return extended[:count]

    def get_stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            dict: Cache statistics
        """
        entries = dict(self._entries)
        with self._stats_lock:
            hits, extensions, computed = self.hits, self.extensions, self.digits_computed
        return {
            'memory_cache_entries': len(entries),
            'cached_digits': sum(len(prefix) for prefix in entries.values()),
            'total_size_bytes': sum(prefix.nbytes for prefix in entries.values()),
            'cache_hits': hits,
            'extensions': extensions,
            'digits_computed': computed,
            'keys': sorted(f"{constant}/{base}" for constant, base in entries)
        }
