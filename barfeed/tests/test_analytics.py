from __future__ import annotations

from fastapi.testclient import TestClient

from barfeed.analytics.aggregator import compute_analytics
from barfeed.analytics.store import clear_events, get_events, record_event
from barfeed.app import app

from fakes import FakeBuilder, FakeProvider, make_venue


def _login_admin(c):
    c.post("/auth/login", json={"username": "admin", "password": "admin123"})


def test_analytics_returns_empty_initially():
    clear_events()
    c = TestClient(app)
    _login_admin(c)
    resp = c.get("/analytics")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_feeds"] == 0
    assert body["avg_response_time_ms"] == 0.0
    assert body["catalog"]["hit_rate"] == 0.0


def test_compute_analytics_aggregates_feed_events():
    events = [
        {"type": "feed", "response_time_ms": 10.0, "venues": 4, "catalog_hits": 0,
         "catalog_created": 4, "favorite_failures": 0, "limit": 10},
        {"type": "feed", "response_time_ms": 30.0, "venues": 6, "catalog_hits": 4,
         "catalog_created": 2, "favorite_failures": 1, "limit": 10},
        {"type": "other"},
    ]

    result = compute_analytics(events)

    assert result["total_feeds"] == 2
    assert result["avg_response_time_ms"] == 20.0
    assert result["avg_venues_per_feed"] == 5.0
    assert result["catalog"] == {"hits": 4, "created": 6, "hit_rate": 40.0}
    assert result["favorite_lookup_failures"] == 1
    assert result["limit_usage"] == [{"limit": 10, "count": 2}]


def test_get_events_filters_by_type():
    clear_events()
    record_event("feed", {"venues": 1})
    record_event("other", {})
    assert [e["type"] for e in get_events()] == ["feed", "other"]
    assert len(get_events("feed")) == 1


def test_analytics_tracks_feed_requests(client, make_state, install_state):
    provider = FakeProvider([make_venue("a"), make_venue("b")])
    install_state(make_state(provider, FakeBuilder()))

    client.get("/home", params={"lat": "1", "lng": "1"})
    client.get("/home", params={"lat": "1", "lng": "1"})
    _login_admin(client)
    body = client.get("/analytics").json()

    assert body["total_feeds"] == 2
    assert body["catalog"] == {"hits": 2, "created": 2, "hit_rate": 50.0}
