"""Curated registry of common system utilities."""

from __future__ import annotations

from collections.abc import Sequence

from clauncher.ranking.bands import CURATED_DEFAULT_STEP, CURATED_DEFAULT_TOP
from clauncher.scoring.fuzzy import FuzzyScorer
from clauncher.system.launcher import CuratedApp
from clauncher.types import AppAction, SearchResult


class StaticAppSource:
    """Serves the empty-query view and fuzzy matches over curated apps."""

    name = "curated_apps"

    def __init__(self, apps: Sequence[CuratedApp], *, scorer: FuzzyScorer | None = None) -> None:
        self.apps = list(apps)
        self.scorer = scorer or FuzzyScorer()

    def default_view(self) -> list[SearchResult]:
        """Curated order with fixed descending ranks, no scoring involved."""
        return [
            SearchResult(
                label=app.label,
                action=AppAction(identifier=app.identifier),
                is_actionable=True,
                score=CURATED_DEFAULT_TOP - index * CURATED_DEFAULT_STEP,
            )
            for index, app in enumerate(self.apps)
        ]

    def produce(self, query_lower: str) -> list[SearchResult]:
        results: list[SearchResult] = []
        for app in self.apps:
            score = self.scorer.score(app.label.lower(), query_lower)
            if score is None:
                continue
            results.append(
                SearchResult(
                    label=app.label,
                    action=AppAction(identifier=app.identifier),
                    is_actionable=True,
                    score=score,
                )
            )
        return results
