"""Shared fixtures for the bar feed tests."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from barfeed.analytics.store import clear_events
from barfeed.app import app
from barfeed.catalog.reconciliation import ReconciliationEngine
from barfeed.catalog.store import SQLiteCatalogStore
from barfeed.config import FeedConfig
from barfeed.favorites.store import SQLiteFavoriteStore
from barfeed.feed.assembler import FeedAssembler
from barfeed.feed.service import FeedService
from barfeed.state import AppState, get_state

from fakes import FRIDAY_NIGHT, FakeBuilder, FakePhotos


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "barfeed.db"


@pytest.fixture
def make_state(db_path):
    """Factory for an AppState wired to fakes and a temporary SQLite file."""

    def _make(
        provider, builder=None, favorites=None, clock=None, photos=None, **config_overrides
    ):
        config = FeedConfig(
            db_path=db_path,
            timezone=config_overrides.pop("timezone", "UTC"),
            max_concurrency=config_overrides.pop("max_concurrency", 4),
            request_timeout=config_overrides.pop("request_timeout", 5.0),
        )
        catalog = SQLiteCatalogStore(db_path)
        favorite_store = favorites if favorites is not None else SQLiteFavoriteStore(db_path)
        feed = FeedService(
            provider=provider,
            reconciler=ReconciliationEngine(
                catalog, builder or FakeBuilder(), max_concurrency=config.max_concurrency
            ),
            assembler=FeedAssembler(favorite_store, max_concurrency=config.max_concurrency),
            clock=clock or (lambda: FRIDAY_NIGHT),
            config=config,
        )
        return AppState(
            catalog=catalog,
            favorites=favorite_store,
            feed=feed,
            photos=photos or FakePhotos(),
        )

    return _make


@pytest.fixture
def install_state():
    def _install(state: AppState) -> AppState:
        app.dependency_overrides[get_state] = lambda: state
        return state

    yield _install
    app.dependency_overrides.pop(get_state, None)


@pytest.fixture
def client():
    clear_events()
    c = TestClient(app)
    c.post("/auth/login", json={"username": "user", "password": "user123"})
    return c
