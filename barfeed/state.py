"""Application state: stores and the feed service, built once per process."""
from __future__ import annotations

from .catalog.builder import PlacesRecordBuilder
from .catalog.reconciliation import ReconciliationEngine
from .catalog.store import CatalogStore, SQLiteCatalogStore
from .config import DEFAULT_FEED_CONFIG, FeedConfig
from .favorites.store import FavoriteStore, SQLiteFavoriteStore
from .feed.assembler import FeedAssembler
from .feed.service import FeedService
from .venues.google_places import GooglePlacesClient, PhotoSource


class AppState:
    def __init__(
        self,
        catalog: CatalogStore,
        favorites: FavoriteStore,
        feed: FeedService,
        photos: PhotoSource,
    ):
        self.catalog = catalog
        self.favorites = favorites
        self.feed = feed
        self.photos = photos

    @classmethod
    def from_config(cls, config: FeedConfig = DEFAULT_FEED_CONFIG) -> "AppState":
        catalog = SQLiteCatalogStore(config.db_path)
        favorites = SQLiteFavoriteStore(config.db_path)
        places = GooglePlacesClient(config)
        feed = FeedService(
            provider=places,
            reconciler=ReconciliationEngine(
                catalog,
                PlacesRecordBuilder(places),
                max_concurrency=config.max_concurrency,
            ),
            assembler=FeedAssembler(favorites, max_concurrency=config.max_concurrency),
            config=config,
        )
        return cls(catalog=catalog, favorites=favorites, feed=feed, photos=places)


_state: AppState | None = None


def get_state() -> AppState:
    """Return the process-wide state, building it on first call."""
    global _state
    if _state is None:
        _state = AppState.from_config()
    return _state
