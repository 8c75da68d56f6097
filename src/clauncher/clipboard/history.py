"""Bounded, lock-guarded clipboard history shared by poller and search."""

from __future__ import annotations

import threading
from collections import deque

from clauncher.clipboard.sensitivity import is_sensitive
from clauncher.config import ClipboardConfig
from clauncher.types import ClipboardEntry


class ClipboardHistory:
    """Most-recent-first history of captured clipboard strings.

    One instance is created at startup and handed explicitly to both the
    background poller (writer) and the clipboard source (reader). Every read
    and every mutation happens under the same lock, and readers only ever get
    an immutable snapshot.
    """

    def __init__(self, config: ClipboardConfig | None = None) -> None:
        self.config = config or ClipboardConfig()
        self._entries: deque[ClipboardEntry] = deque()
        self._lock = threading.Lock()

    def record(self, content: str) -> bool:
        """Add a captured string; return False when nothing changed.

        Blank strings are ignored. Re-copying content that is already in the
        history moves it to the front instead of duplicating it. The oldest
        entry is evicted once `capacity` is exceeded.
        """

        if not content or not content.strip():
            return False
        entry = ClipboardEntry(
            content=content,
            is_sensitive=is_sensitive(
                content, length_threshold=self.config.sensitive_length_threshold
            ),
        )
        with self._lock:
            if self._entries and self._entries[0].content == content:
                return False
            for existing in self._entries:
                if existing.content == content:
                    self._entries.remove(existing)
                    break
            self._entries.appendleft(entry)
            while len(self._entries) > self.config.capacity:
                self._entries.pop()
        return True

    def snapshot(self) -> tuple[ClipboardEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
