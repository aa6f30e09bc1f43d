"""Per-file classification cache keyed by (base revision, file path).

Every entry is a diff against the same base, so the whole map is dropped
when the base changes. Concurrent ``get`` calls for the same key share one
fetch+classify; results fetched before a set_base() or clear() that
happened in the meantime are returned to their caller but never stored.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional, Tuple

from branchdiff.git.diff_parser import classify_diff
from branchdiff.git.models import LineChange

logger = logging.getLogger(__name__)

# fetch(base, file_path) -> unified diff text for that file
FetchDiff = Callable[[str, str], str]

LineChanges = Tuple[LineChange, ...]


class ClassificationCache:
    """Memoize classify_diff() per file for the current base revision."""

    def __init__(self, fetch: FetchDiff, base: Optional[str] = None) -> None:
        self._fetch = fetch
        self._base = base or ""
        self._entries: Dict[str, LineChanges] = {}
        self._lock = threading.Lock()
        self._inflight: Dict[Tuple[str, str], threading.Lock] = {}
        # Bumped by set_base() and clear(); results fetched under an older
        # generation are never stored.
        self._generation = 0

    # ---- state ----

    @property
    def base(self) -> str:
        return self._base

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, file_path: object) -> bool:
        with self._lock:
            return file_path in self._entries

    # ---- invalidation ----

    def set_base(self, new_base: Optional[str]) -> bool:
        """Switch to *new_base*. Returns True if it changed (full re-render needed)."""
        new_base = new_base or ""
        with self._lock:
            if new_base == self._base:
                return False
            logger.debug(
                "Base changed %s -> %s; dropping %d entries",
                self._base or "<none>", new_base or "<none>", len(self._entries),
            )
            self._base = new_base
            self._entries.clear()
            self._generation += 1
            return True

    def clear(self) -> None:
        """Drop all entries, keeping the base."""
        with self._lock:
            self._entries.clear()
            self._generation += 1

    # ---- lookup ----

    def get(self, file_path: str) -> LineChanges:
        """Return the classification of *file_path* against the current base.

        Never raises: a missing base or a failed fetch yields ``()``.
        """
        with self._lock:
            base = self._base
            generation = self._generation
            if not base:
                return ()
            cached = self._entries.get(file_path)
            if cached is not None:
                return cached
            key = (base, file_path)
            key_lock = self._inflight.setdefault(key, threading.Lock())

        with key_lock:
            # Another caller may have finished the same key while we waited
            with self._lock:
                if self._base == base:
                    if file_path in self._entries:
                        return self._entries[file_path]
                    generation = self._generation

            changes = self._compute(base, file_path)

            with self._lock:
                if changes is not None and self._generation == generation:
                    self._entries[file_path] = changes
                elif changes is not None:
                    logger.debug("Discarding stale result for %s (base %s)", file_path, base)
                if self._inflight.get(key) is key_lock:
                    del self._inflight[key]

        return changes if changes is not None else ()

    def _compute(self, base: str, file_path: str) -> Optional[LineChanges]:
        """Fetch and classify. Returns None when the fetch failed."""
        try:
            diff_text = self._fetch(base, file_path)
        except Exception as exc:
            logger.warning("Could not retrieve diff for %s against %s: %s", file_path, base, exc)
            return None
        changes = tuple(classify_diff(diff_text or ""))
        logger.debug("Classified %s: %d change(s)", file_path, len(changes))
        return changes
