from __future__ import annotations

import logging
import os
import time
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .llm.gemini_client import fetch_restaurant_info
from .markdown import render_html, render_markdown
from .search.controller import (
    ErrorKind,
    QueryController,
    QueryState,
    QueryStatus,
)
from .search.models import (
    LatLng,
    LocationErrorRequest,
    RenderRequest,
    RenderResponse,
    SearchRequest,
    SearchResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Restaurant AI Explorer", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "restaurant-explorer-secret-change-in-production"),
)

_STATIC_DIR = Path(__file__).resolve().parent / "static"
_SESSION_KEY = "search_state"


# ── Session state ────────────────────────────────────────────────────────


def _load_controller(request: Request) -> QueryController:
    try:
        raw_state = request.session.get(_SESSION_KEY)
        state = QueryState(**raw_state) if raw_state else QueryState()
    except Exception:
        logger.warning("Discarding malformed search state from session", exc_info=True)
        state = QueryState()
    return QueryController(state, fetch=fetch_restaurant_info)


def _save_state(request: Request, state: QueryState) -> None:
    # Results are too large for a cookie; only the inputs are kept.
    request.session[_SESSION_KEY] = state.model_dump(
        mode="json", include={"query", "location", "error", "error_kind"},
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/state", response_model=QueryState)
def get_state(request: Request) -> QueryState:
    return _load_controller(request).state


@app.post("/location", response_model=QueryState)
def set_location(body: LatLng, request: Request) -> QueryState:
    state = _load_controller(request).location_acquired(body)
    _save_state(request, state)
    return state


@app.post("/location/error", response_model=QueryState)
def set_location_error(body: LocationErrorRequest, request: Request) -> QueryState:
    state = _load_controller(request).location_failed(body.message)
    _save_state(request, state)
    return state


@app.post("/search", response_model=SearchResponse)
def search(body: SearchRequest, request: Request) -> SearchResponse:
    controller = _load_controller(request)

    start_time = time.time()
    state = controller.search(body.query)
    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    _save_state(request, state)

    event = {
        "query": state.query,
        "status": state.status.value,
        "sources_count": len(state.result.sources) if state.result else 0,
    }
    if state.error_kind != ErrorKind.local:
        event["response_time_ms"] = elapsed_ms
    record_event("search", event)

    if state.status == QueryStatus.failed:
        status_code = 400 if state.error_kind == ErrorKind.local else 502
        raise HTTPException(status_code=status_code, detail=state.error)

    result = state.result
    document = render_markdown(result.text)
    return SearchResponse(
        query=state.query,
        text=result.text,
        document=document,
        html=render_html(document),
        sources=result.sources,
    )


@app.post("/render", response_model=RenderResponse)
def render(body: RenderRequest) -> RenderResponse:
    document = render_markdown(body.text)
    return RenderResponse(document=document, html=render_html(document))


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())


# ── Static page ──────────────────────────────────────────────────────────


app.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")


@app.get("/")
def root():
    return FileResponse(str(_STATIC_DIR / "index.html"))
