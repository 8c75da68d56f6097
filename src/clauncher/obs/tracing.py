"""Search tracing and latency accounting."""

from __future__ import annotations

import threading
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone

from clauncher.types import SourceTrace


@dataclass(slots=True)
class SearchTrace:
    trace_id: str
    timestamp_utc: str
    query: str
    route: str
    result_count: int
    latency_ms: float
    latency_target_met: bool
    source_traces: list[SourceTrace] = field(default_factory=list)


class TraceStore:
    """In-memory, bounded trace storage for API-level observability.

    Searches run on every keystroke, so only the newest `max_records` traces
    are kept.
    """

    def __init__(self, *, max_records: int = 500, target_latency_ms: float = 200.0) -> None:
        self.max_records = max_records
        self.target_latency_ms = target_latency_ms
        self._records: OrderedDict[str, SearchTrace] = OrderedDict()
        self._lock = threading.Lock()

    def create_record(
        self,
        *,
        query: str,
        route: str,
        result_count: int,
        latency_ms: float,
        source_traces: list[SourceTrace] | None = None,
    ) -> SearchTrace:
        record = SearchTrace(
            trace_id=str(uuid.uuid4()),
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
            query=query,
            route=route,
            result_count=result_count,
            latency_ms=latency_ms,
            latency_target_met=latency_ms <= self.target_latency_ms,
            source_traces=list(source_traces or []),
        )
        with self._lock:
            self._records[record.trace_id] = record
            while len(self._records) > self.max_records:
                self._records.popitem(last=False)
        return record

    def get(self, trace_id: str) -> SearchTrace:
        with self._lock:
            record = self._records.get(trace_id)
        if record is None:
            raise KeyError(f"Trace not found: {trace_id}")
        return record

    def list_recent(self, limit: int = 20) -> list[SearchTrace]:
        with self._lock:
            records = list(self._records.values())
        return records[-limit:] if limit > 0 else []

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def summary(self) -> dict[str, float | int]:
        """Aggregate latency metrics for dashboard display."""
        with self._lock:
            records = list(self._records.values())
        total = len(records)
        if total == 0:
            return {
                "total_searches": 0,
                "avg_latency_ms": 0.0,
                "p95_latency_ms": 0.0,
                "latency_target_ratio": 0.0,
                "avg_result_count": 0.0,
            }

        latencies = sorted(record.latency_ms for record in records)
        p95_index = max(0, int((len(latencies) * 0.95) - 1))
        on_target = sum(1 for record in records if record.latency_target_met)
        avg_results = sum(record.result_count for record in records) / total

        return {
            "total_searches": total,
            "avg_latency_ms": sum(latencies) / total,
            "p95_latency_ms": latencies[p95_index],
            "latency_target_ratio": on_target / total,
            "avg_result_count": avg_results,
        }


class Timer:
    """Simple context timer used by the engine."""

    def __init__(self) -> None:
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
