"""FastAPI entrypoint for search/activate/trace endpoints."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from clauncher.clipboard.history import ClipboardHistory
from clauncher.clipboard.poller import ClipboardPoller
from clauncher.config import LauncherSettings
from clauncher.engine import create_engine
from clauncher.errors import ActivationError
from clauncher.obs.tracing import TraceStore

logger = logging.getLogger(__name__)


class SearchRequest(BaseModel):
    query: str = ""


class ActivateRequest(BaseModel):
    action_ref: str = Field(min_length=1)


_settings = LauncherSettings()
logging.basicConfig(level=_settings.log_level.upper())

_history = ClipboardHistory(_settings.clipboard)
_poller = ClipboardPoller(_history, config=_settings.clipboard)
_trace_store = TraceStore(target_latency_ms=_settings.search.target_latency_ms)
_engine = create_engine(_settings, history=_history, trace_store=_trace_store)


@asynccontextmanager
async def _lifespan(_: FastAPI) -> AsyncIterator[None]:
    if _settings.clipboard_poller_enabled:
        _poller.start()
    else:
        logger.info("clipboard poller disabled; clipboard lookups only see injected history")
    try:
        yield
    finally:
        _poller.stop()
        _engine.close()


app = FastAPI(title="CLauncher Core", version="0.1.0", lifespan=_lifespan)


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "sources": _engine.registry.names(),
        "clipboard_poller": _poller.running,
        "clipboard_entries": len(_history),
        "trace_count": len(_trace_store),
    }


@app.post("/search")
def search(request: SearchRequest) -> dict[str, Any]:
    response = _engine.run(request.query)
    return {
        "items": [result.as_dict() for result in response.results],
        "trace_id": response.trace.trace_id,
        "latency_ms": response.trace.latency_ms,
    }


@app.post("/activate")
def activate(request: ActivateRequest) -> dict[str, Any]:
    try:
        action = _engine.activate(request.action_ref)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except ActivationError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"status": "ok", "action": type(action).__name__}


@app.get("/traces")
def traces(limit: int = 20) -> dict[str, Any]:
    records = [asdict(record) for record in _trace_store.list_recent(limit=limit)]
    return {"items": records}


@app.get("/traces/{trace_id}")
def trace_detail(trace_id: str) -> dict[str, Any]:
    try:
        record = _trace_store.get(trace_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return asdict(record)


@app.get("/metrics")
def metrics() -> dict[str, Any]:
    return _trace_store.summary()
