"""Merges fan-out results into one bounded, ordered list."""

from __future__ import annotations

from clauncher.config import SearchConfig
from clauncher.types import SearchResult


class ResultMerger:
    """Deduplicates, stable-sorts and truncates source output.

    Merge process:
    1. Collapse results sharing an `action_ref`. The highest score wins and
       takes the slot of the first occurrence; equal scores keep the first.
    2. Sort by descending score. The sort is stable, so ties keep the order in
       which sources were invoked and, within a source, the order it emitted.
    3. Keep the first `max_results` entries.
    """

    def __init__(self, config: SearchConfig | None = None) -> None:
        self.config = config or SearchConfig()

    def merge(self, results: list[SearchResult], *, limit: int | None = None) -> list[SearchResult]:
        deduped = self._dedupe(results)
        ranked = sorted(deduped, key=lambda item: item.score, reverse=True)
        return ranked[: self.config.max_results if limit is None else limit]

    @staticmethod
    def _dedupe(results: list[SearchResult]) -> list[SearchResult]:
        slots: dict[str, int] = {}
        merged: list[SearchResult] = []
        for item in results:
            slot = slots.get(item.action_ref)
            if slot is None:
                slots[item.action_ref] = len(merged)
                merged.append(item)
            elif item.score > merged[slot].score:
                merged[slot] = item
        return merged
