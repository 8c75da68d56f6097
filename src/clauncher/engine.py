"""Launcher engine: classify, short-circuit or fan out, then rank."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from clauncher.activation.activator import Activator
from clauncher.clipboard.history import ClipboardHistory
from clauncher.config import LauncherSettings, SearchConfig
from clauncher.intent.classifier import (
    Calculator,
    ClipboardLookup,
    Conversion,
    Intent,
    IntentClassifier,
    TerminalCommand,
    WebShortcut,
)
from clauncher.intent.shortcuts import CONVERSION_URL_TEMPLATE, encode_term
from clauncher.obs.tracing import SearchTrace, Timer, TraceStore
from clauncher.ranking.bands import INTENT_SCORE, TERMINAL_COMMAND_SCORE
from clauncher.ranking.merger import ResultMerger
from clauncher.scoring.fuzzy import FuzzyScorer
from clauncher.sources.base import FileEnumerator, WalkEnumerator
from clauncher.sources.clipboard import ClipboardSource
from clauncher.sources.directory import DirectorySource, default_search_roots
from clauncher.sources.executables import ExecutableSource
from clauncher.sources.registry import SourceRegistry
from clauncher.sources.static_apps import StaticAppSource
from clauncher.system.launcher import PlatformLauncher, detect_platform_launcher
from clauncher.types import (
    ActionRef,
    ResultAction,
    SearchResult,
    SourceTrace,
    TerminalAction,
    UrlAction,
)

logger = logging.getLogger(__name__)

_INTENT_ROUTES: dict[type, str] = {
    WebShortcut: "web_shortcut",
    Calculator: "calculator",
    TerminalCommand: "terminal",
    ClipboardLookup: "clipboard",
    Conversion: "conversion",
}


@dataclass(slots=True)
class SearchResponse:
    results: list[SearchResult]
    trace: SearchTrace


class LauncherEngine:
    """Entry point used by the host shell.

    `search` trims the query and then takes exactly one of three routes:

    1. empty query: the curated default view, with no classification, scoring
       or filesystem access;
    2. recognized intent: one synthetic result (or the clipboard lookup
       results), returned without consulting any other source;
    3. otherwise: fan out to the registered sources in registration order and
       merge through `ResultMerger`.

    Sources may run on a thread pool. Results are joined in registration order
    regardless, so output is identical to a sequential run.
    """

    def __init__(
        self,
        *,
        classifier: IntentClassifier,
        registry: SourceRegistry,
        curated: StaticAppSource,
        clipboard: ClipboardSource,
        activator: Activator,
        merger: ResultMerger | None = None,
        config: SearchConfig | None = None,
        trace_store: TraceStore | None = None,
    ) -> None:
        self.classifier = classifier
        self.registry = registry
        self.curated = curated
        self.clipboard = clipboard
        self.activator = activator
        self.config = config or SearchConfig()
        self.merger = merger or ResultMerger(self.config)
        if trace_store is None:
            trace_store = TraceStore(target_latency_ms=self.config.target_latency_ms)
        self.trace_store = trace_store
        self._executor: ThreadPoolExecutor | None = (
            ThreadPoolExecutor(
                max_workers=self.config.max_workers,
                thread_name_prefix="clauncher-source",
            )
            if self.config.parallel_sources
            else None
        )

    def search(self, query: str) -> list[SearchResult]:
        return self.run(query).results

    def run(self, query: str) -> SearchResponse:
        """Run one search and record its trace."""

        text = query.strip()
        source_traces: list[SourceTrace] = []
        with Timer() as timer:
            if not text:
                route = "default_view"
                results = self.curated.default_view()[: self.config.max_results]
            else:
                intent = self.classifier.classify(text)
                if intent is None:
                    route = "fan_out"
                    candidates, source_traces = self.registry.produce_all(
                        text.lower(), executor=self._executor
                    )
                    results = self.merger.merge(candidates)
                else:
                    route = _INTENT_ROUTES[type(intent)]
                    results = self._intent_results(intent)

        trace = self.trace_store.create_record(
            query=text,
            route=route,
            result_count=len(results),
            latency_ms=timer.elapsed_ms,
            source_traces=source_traces,
        )
        if not trace.latency_target_met:
            logger.warning(
                "search %r took %.1fms (target %.0fms)",
                text,
                trace.latency_ms,
                self.config.target_latency_ms,
            )
        else:
            logger.debug("search %r via %s -> %d results", text, route, len(results))
        return SearchResponse(results=results, trace=trace)

    def activate(self, action_ref: str) -> ActionRef:
        return self.activator.activate(action_ref)

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    def __enter__(self) -> "LauncherEngine":
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    def _intent_results(self, intent: Intent) -> list[SearchResult]:
        if isinstance(intent, ClipboardLookup):
            return self.clipboard.produce(intent.search_term.lower())[: self.config.max_results]
        return [_synthetic_result(intent)]


def _synthetic_result(intent: Intent) -> SearchResult:
    if isinstance(intent, TerminalCommand):
        return SearchResult(
            label=f"Run: {intent.command_text}",
            action=TerminalAction(command=intent.command_text),
            is_actionable=True,
            score=TERMINAL_COMMAND_SCORE,
        )
    if isinstance(intent, WebShortcut):
        return SearchResult(
            label=f"{intent.engine_label}: {intent.term}",
            action=UrlAction(url=intent.url),
            is_actionable=True,
            score=INTENT_SCORE,
        )
    if isinstance(intent, Calculator):
        return SearchResult(
            label=f"{intent.expression} = {intent.value}",
            action=ResultAction(value=intent.value),
            is_actionable=True,
            score=INTENT_SCORE,
        )
    if isinstance(intent, Conversion):
        phrase = f"{intent.from_expr} to {intent.to_expr}"
        return SearchResult(
            label=f"Convert {intent.from_expr} to {intent.to_expr}",
            action=UrlAction(url=CONVERSION_URL_TEMPLATE + encode_term(phrase)),
            is_actionable=True,
            score=INTENT_SCORE,
        )
    raise ValueError(f"No synthetic result for intent: {intent!r}")


def create_engine(
    settings: LauncherSettings | None = None,
    *,
    launcher: PlatformLauncher | None = None,
    history: ClipboardHistory | None = None,
    enumerator: FileEnumerator | None = None,
    search_roots: Sequence[Path] | None = None,
    clipboard_writer: Callable[[str], None] | None = None,
    trace_store: TraceStore | None = None,
) -> LauncherEngine:
    """Wire the default engine.

    Sources are registered in the fixed fan-out order: directory search,
    executable index, curated apps.
    """

    settings = settings or LauncherSettings()
    launcher = launcher or detect_platform_launcher(settings.platform)
    if history is None:
        history = ClipboardHistory(settings.clipboard)
    enumerator = enumerator or WalkEnumerator()
    scorer = FuzzyScorer()

    roots = list(search_roots) if search_roots is not None else default_search_roots(settings.search)
    curated = StaticAppSource(launcher.curated_apps(), scorer=scorer)

    registry = SourceRegistry()
    registry.register(
        DirectorySource(roots, scorer=scorer, enumerator=enumerator, config=settings.search)
    )
    registry.register(
        ExecutableSource(
            launcher.app_roots(),
            scorer=scorer,
            enumerator=enumerator,
            config=settings.search,
        )
    )
    registry.register(curated)

    return LauncherEngine(
        classifier=IntentClassifier(settings.intent),
        registry=registry,
        curated=curated,
        clipboard=ClipboardSource(history, settings.clipboard),
        activator=Activator(
            launcher,
            config=settings.activation,
            clipboard_writer=clipboard_writer,
        ),
        config=settings.search,
        trace_store=trace_store,
    )
