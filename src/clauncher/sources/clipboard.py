"""Clipboard history lookup results."""

from __future__ import annotations

from clauncher.clipboard.history import ClipboardHistory
from clauncher.config import ClipboardConfig
from clauncher.ranking.bands import CLIPBOARD_ENTRY_SCORE
from clauncher.types import ClipboardAction, SearchResult


class ClipboardSource:
    """Reads a history snapshot, most recent first.

    Filtering is a case-insensitive substring test, not fuzzy matching.
    Sensitive entries are still filtered on their real content but are always
    shown with the masked label.
    """

    name = "clipboard"

    def __init__(self, history: ClipboardHistory, config: ClipboardConfig | None = None) -> None:
        self.history = history
        self.config = config or history.config

    def produce(self, query_lower: str) -> list[SearchResult]:
        needle = query_lower.casefold()
        results: list[SearchResult] = []
        for entry in self.history.snapshot():
            if needle and needle not in entry.content.casefold():
                continue
            label = (
                self.config.masked_label
                if entry.is_sensitive
                else _preview(entry.content, self.config.preview_chars)
            )
            results.append(
                SearchResult(
                    label=label,
                    action=ClipboardAction(content=entry.content),
                    is_actionable=True,
                    score=CLIPBOARD_ENTRY_SCORE - len(results),
                )
            )
        return results


def _preview(text: str, max_chars: int) -> str:
    flat = " ".join(text.split())
    if len(flat) <= max_chars:
        return flat
    return flat[:max_chars] + "..."
