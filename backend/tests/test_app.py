from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import patch

from fastapi.testclient import TestClient

from backend.app import _load_controller, app
from backend.llm.gemini_client import RestaurantInfoError
from backend.search.models import GroundingSource, RestaurantInfo

client = TestClient(app)

LOCATION = {"latitude": 48.8566, "longitude": 2.3522}
INFO = RestaurantInfo(
    text="## Bistros\n* **Le Comptoir** - classic\n* Chez Janou",
    sources=[
        GroundingSource(uri="https://maps.google.com/?cid=1", title="Le Comptoir"),
        GroundingSource(),
    ],
)


def _locate(c):
    c.post("/location", json=LOCATION)


# ── Public endpoints ─────────────────────────────────────────────────────


def test_health():
    assert client.get("/health").json() == {"status": "ok"}


def test_index_page_served():
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Restaurant AI Explorer" in resp.text


def test_index_page_rejects_blank_query_without_posting():
    page = client.get("/").text
    guard = page.index('if (!$("query").value.trim())')
    assert "Please enter a search query." in page[guard:page.index('postJson("/search"')]


def test_initial_state():
    c = TestClient(app)
    body = c.get("/state").json()
    assert body["query"] == "Good Italian restaurants nearby"
    assert body["status"] == "idle"
    assert body["location"] is None


# ── Location ─────────────────────────────────────────────────────────────


def test_location_is_kept_in_session():
    c = TestClient(app)
    resp = c.post("/location", json=LOCATION)
    assert resp.status_code == 200
    assert c.get("/state").json()["location"] == LOCATION


def test_location_out_of_range_rejected():
    resp = client.post("/location", json={"latitude": 123, "longitude": 0})
    assert resp.status_code == 422


def test_location_error_message():
    c = TestClient(app)
    resp = c.post("/location/error", json={"message": "User denied Geolocation"})
    assert resp.json()["error"] == (
        "Geolocation error: User denied Geolocation. Please enable location services."
    )


# ── Search ───────────────────────────────────────────────────────────────


@patch("backend.app.fetch_restaurant_info", return_value=INFO)
def test_search_returns_rendered_answer(mock_fetch):
    c = TestClient(app)
    _locate(c)
    resp = c.post("/search", json={"query": "French bistro"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["query"] == "French bistro"
    assert body["text"] == INFO.text
    assert [b["type"] for b in body["document"]["blocks"]] == ["heading", "list"]
    assert "<strong>Le Comptoir</strong>" in body["html"]
    assert body["sources"] == [
        {"uri": "https://maps.google.com/?cid=1", "title": "Le Comptoir"},
        {"uri": None, "title": None},
    ]
    called_query, called_location = mock_fetch.call_args.args
    assert called_query == "French bistro"
    assert called_location.latitude == LOCATION["latitude"]


@patch("backend.app.fetch_restaurant_info", return_value=INFO)
def test_search_remembers_query(mock_fetch):
    c = TestClient(app)
    _locate(c)
    c.post("/search", json={"query": "ramen"})
    assert c.get("/state").json()["query"] == "ramen"


@patch("backend.app.fetch_restaurant_info")
def test_search_without_location_is_400(mock_fetch):
    c = TestClient(app)
    resp = c.post("/search", json={"query": "ramen"})
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("Location not available.")
    mock_fetch.assert_not_called()


@patch("backend.app.fetch_restaurant_info")
def test_search_blank_query_is_400(mock_fetch):
    c = TestClient(app)
    _locate(c)
    resp = c.post("/search", json={"query": "  "})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Please enter a search query."
    mock_fetch.assert_not_called()


@patch("backend.app.fetch_restaurant_info")
def test_search_upstream_failure_is_502(mock_fetch):
    mock_fetch.side_effect = RestaurantInfoError(
        "Failed to get restaurant information: Received an empty response from the AI."
    )
    c = TestClient(app)
    _locate(c)
    resp = c.post("/search", json={"query": "ramen"})
    assert resp.status_code == 502
    assert resp.json()["detail"] == (
        "Failed to get restaurant information: Received an empty response from the AI."
    )


@patch("backend.app.fetch_restaurant_info")
def test_upstream_error_is_502_even_with_validation_wording(mock_fetch):
    mock_fetch.side_effect = ValueError("Please enter a search query.")
    c = TestClient(app)
    _locate(c)
    resp = c.post("/search", json={"query": "ramen"})
    assert resp.status_code == 502
    assert c.get("/state").json()["error_kind"] == "upstream"


@patch("backend.app.fetch_restaurant_info", return_value=INFO)
def test_location_error_after_fix_blocks_search(mock_fetch):
    c = TestClient(app)
    _locate(c)
    c.post("/location/error", json={"message": "Timeout expired"})
    assert c.get("/state").json()["location"] is None

    resp = c.post("/search", json={"query": "ramen"})
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("Location not available.")
    mock_fetch.assert_not_called()


def test_malformed_session_state_is_discarded():
    request = SimpleNamespace(session={"search_state": {"location": "nowhere"}})
    state = _load_controller(request).state
    assert state.location is None
    assert state.query == "Good Italian restaurants nearby"


# ── Render ───────────────────────────────────────────────────────────────


def test_render_endpoint():
    resp = client.post("/render", json={"text": "Hello **world**!"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["document"]["blocks"] == [{
        "type": "paragraph",
        "text": [
            {"type": "text", "text": "Hello "},
            {"type": "strong", "text": "world"},
            {"type": "text", "text": "!"},
        ],
    }]
    assert body["html"] == '<div class="markdown"><p>Hello <strong>world</strong>!</p></div>'
