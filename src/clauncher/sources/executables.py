"""Installed-application index over platform install roots."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Sequence
from pathlib import Path

from clauncher.config import SearchConfig
from clauncher.ranking.bands import EXECUTABLE_BONUS
from clauncher.scoring.fuzzy import FuzzyScorer
from clauncher.sources.base import FileEnumerator, WalkEnumerator
from clauncher.system.launcher import AppRoot
from clauncher.types import FileEntry, PathAction, SearchResult

logger = logging.getLogger(__name__)


class ExecutableSource:
    """Matches launchable files found under shallow application roots.

    The listing is held in memory for `app_index_ttl_seconds` so consecutive
    keystrokes do not rescan the install roots. A TTL of 0 rescans on every
    query. Nothing is persisted across runs.
    """

    name = "executables"

    def __init__(
        self,
        roots: Sequence[AppRoot],
        *,
        scorer: FuzzyScorer | None = None,
        enumerator: FileEnumerator | None = None,
        config: SearchConfig | None = None,
    ) -> None:
        self.roots = list(roots)
        self.scorer = scorer or FuzzyScorer()
        self.enumerator = enumerator or WalkEnumerator()
        self.config = config or SearchConfig()
        self._index: list[FileEntry] = []
        self._stamp: float | None = None
        self._lock = threading.Lock()

    def produce(self, query_lower: str) -> list[SearchResult]:
        results: list[SearchResult] = []
        for entry in self._entries():
            score = self.scorer.score(entry.name.lower(), query_lower)
            if score is None:
                continue
            results.append(
                SearchResult(
                    label=entry.name,
                    action=PathAction(path=entry.path),
                    is_actionable=True,
                    score=score + EXECUTABLE_BONUS,
                )
            )
        return results

    def refresh(self) -> list[FileEntry]:
        index: list[FileEntry] = []
        for root in self.roots:
            if not root.path.is_dir():
                continue
            depth = root.max_depth or self.config.app_index_depth
            try:
                for entry in self.enumerator.entries(root.path, depth):
                    if self._accepts(root, entry):
                        index.append(entry)
            except OSError as exc:
                logger.debug("app index skipped part of %s: %s", root.path, exc)
        logger.debug("app index holds %d entries", len(index))
        return index

    def _entries(self) -> list[FileEntry]:
        ttl = self.config.app_index_ttl_seconds
        with self._lock:
            stale = ttl <= 0 or self._stamp is None or time.monotonic() - self._stamp >= ttl
            if not stale:
                return self._index

        # Scan outside the lock; the most recently started scan wins.
        started = time.monotonic()
        index = self.refresh()
        with self._lock:
            if self._stamp is None or started >= self._stamp:
                self._index = index
                self._stamp = started
            return index

    @staticmethod
    def _accepts(root: AppRoot, entry: FileEntry) -> bool:
        if root.extensions:
            return Path(entry.name).suffix.lower() in root.extensions
        return entry.is_executable_hint
