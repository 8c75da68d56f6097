"""Fuzzy file search over the user's profile directories."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from clauncher.config import SearchConfig
from clauncher.ranking.bands import LAUNCHABLE_FILE_BONUS
from clauncher.scoring.fuzzy import FuzzyScorer
from clauncher.sources.base import FileEnumerator, WalkEnumerator, has_launchable_extension
from clauncher.types import PathAction, SearchResult

logger = logging.getLogger(__name__)

_PROFILE_DIRECTORIES = ("Desktop", "Documents", "Downloads")


def default_search_roots(config: SearchConfig | None = None, *, home: Path | None = None) -> list[Path]:
    """Desktop, Documents and Downloads, then configured extras, then cwd.

    Duplicates (after resolving) are dropped, keeping the first occurrence.
    """

    config = config or SearchConfig()
    base = home or Path.home()
    candidates = [base / name for name in _PROFILE_DIRECTORIES]
    candidates.extend(Path(os.path.expanduser(extra)) for extra in config.extra_directories)
    if config.include_cwd:
        candidates.append(Path.cwd())

    roots: list[Path] = []
    seen: set[Path] = set()
    for candidate in candidates:
        key = candidate.resolve()
        if key in seen:
            continue
        seen.add(key)
        roots.append(candidate)
    return roots


class DirectorySource:
    """Scores file names under a fixed set of roots.

    Enumeration stops as soon as `directory_result_cap` matches have been
    collected across all roots, which bounds wall-clock time on very large
    trees. Roots that do not exist are skipped, and a root that fails midway
    keeps the matches found before the failure.
    """

    name = "directory"

    def __init__(
        self,
        roots: Sequence[Path],
        *,
        scorer: FuzzyScorer | None = None,
        enumerator: FileEnumerator | None = None,
        config: SearchConfig | None = None,
    ) -> None:
        self.roots = list(roots)
        self.scorer = scorer or FuzzyScorer()
        self.enumerator = enumerator or WalkEnumerator()
        self.config = config or SearchConfig()

    def produce(self, query_lower: str) -> list[SearchResult]:
        results: list[SearchResult] = []
        cap = self.config.directory_result_cap

        for root in self.roots:
            if not root.is_dir():
                continue
            try:
                for entry in self.enumerator.entries(root, self.config.directory_depth):
                    score = self.scorer.score(entry.name.lower(), query_lower)
                    if score is None:
                        continue
                    launchable = has_launchable_extension(entry.name)
                    if launchable:
                        score += LAUNCHABLE_FILE_BONUS
                    results.append(
                        SearchResult(
                            label=entry.name,
                            action=PathAction(path=entry.path),
                            is_actionable=launchable,
                            score=score,
                        )
                    )
                    if len(results) >= cap:
                        logger.debug("directory search hit cap of %d results", cap)
                        return results
            except OSError as exc:
                logger.debug("directory search skipped part of %s: %s", root, exc)
        return results
