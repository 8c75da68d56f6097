"""Ordered source registry with per-source latency observation."""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Executor
from time import perf_counter

from clauncher.sources.base import ResultSource
from clauncher.types import SearchResult, SourceTrace


class SourceRegistry:
    """Holds fan-out sources in registration order.

    Registration order is the invocation order, and results are always joined
    in that order even when sources run on an executor, so ties in the final
    ranking resolve the same way on every run.
    """

    def __init__(self) -> None:
        self._sources: dict[str, ResultSource] = {}
        self._observer: Callable[[SourceTrace], None] | None = None

    def register(self, source: ResultSource) -> None:
        if source.name in self._sources:
            raise ValueError(f"Source already registered: {source.name}")
        self._sources[source.name] = source

    def set_observer(self, observer: Callable[[SourceTrace], None] | None) -> None:
        """Set an optional callback invoked after each source invocation."""
        self._observer = observer

    def names(self) -> list[str]:
        return list(self._sources)

    def produce(self, name: str, query_lower: str) -> list[SearchResult]:
        source = self._sources.get(name)
        if source is None:
            raise KeyError(f"Unknown source: {name}")
        results, _ = self._produce_source(source, query_lower)
        return results

    def produce_all(
        self,
        query_lower: str,
        *,
        executor: Executor | None = None,
    ) -> tuple[list[SearchResult], list[SourceTrace]]:
        sources = list(self._sources.values())
        if executor is None:
            outputs = [self._produce_source(source, query_lower) for source in sources]
        else:
            outputs = list(
                executor.map(lambda source: self._produce_source(source, query_lower), sources)
            )

        results: list[SearchResult] = []
        traces: list[SourceTrace] = []
        for batch, trace in outputs:
            results.extend(batch)
            traces.append(trace)
        return results, traces

    def _produce_source(
        self, source: ResultSource, query_lower: str
    ) -> tuple[list[SearchResult], SourceTrace]:
        start = perf_counter()
        output = source.produce(query_lower)
        latency_ms = (perf_counter() - start) * 1000.0

        trace = SourceTrace(name=source.name, produced=len(output), latency_ms=latency_ms)
        if self._observer is not None:
            self._observer(trace)
        return output, trace
