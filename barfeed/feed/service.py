from __future__ import annotations

import asyncio
import logging
import time
from zoneinfo import ZoneInfo

from ..analytics.store import record_event
from ..catalog.reconciliation import Reconciliation, ReconciliationEngine
from ..config import DEFAULT_FEED_CONFIG, SEARCH_RADIUS, FeedConfig
from ..errors import DependencyFailure, FeedTimeout
from ..venues.google_places import VenueProvider
from .assembler import FeedAssembler, FeedPage
from .models import FeedData, FeedResponse, RankedRecord
from .ranking import rank
from .schedule import Clock, close_time, current_date, make_clock
from .validation import parse_coordinates, parse_limit, parse_page

logger = logging.getLogger(__name__)


class FeedService:
    """Builds the home feed: nearby venues → catalog → ranking → two tiers."""

    def __init__(
        self,
        provider: VenueProvider,
        reconciler: ReconciliationEngine,
        assembler: FeedAssembler,
        clock: Clock | None = None,
        config: FeedConfig = DEFAULT_FEED_CONFIG,
    ):
        self._provider = provider
        self._reconciler = reconciler
        self._assembler = assembler
        self._zone = ZoneInfo(config.timezone)
        self._clock = clock or make_clock(config.timezone)
        self._timeout = config.request_timeout

    async def get_home_feed(
        self,
        user_id: str,
        lat: str | float | None,
        lng: str | float | None,
        page: str | int | None = None,
        limit: str | int | None = None,
    ) -> FeedResponse:
        start_time = time.time()

        latitude, longitude = parse_coordinates(lat, lng)
        page_no = parse_page(page)
        page_size = parse_limit(limit)

        try:
            reconciliation, feed = await asyncio.wait_for(
                self._build(user_id, latitude, longitude, page_no, page_size),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Home feed at %s,%s exceeded %.1fs", latitude, longitude, self._timeout
            )
            raise FeedTimeout("Timed out while building the feed.") from None

        elapsed_ms = round((time.time() - start_time) * 1000, 1)
        record_event("feed", {
            "venues": len(reconciliation.records),
            "catalog_hits": reconciliation.hits,
            "catalog_created": reconciliation.misses,
            "favorite_failures": feed.favorite_failures,
            "page": page_no,
            "limit": page_size,
            "response_time_ms": elapsed_ms,
        })

        return FeedResponse(
            data=FeedData(top=feed.top, bars=feed.bars),
            pagination=feed.pagination,
        )

    async def _build(
        self, user_id: str, lat: float, lng: float, page: int, limit: int
    ) -> tuple[Reconciliation, FeedPage]:
        try:
            venues = await self._provider.fetch_nearby(lat, lng, SEARCH_RADIUS)
        except DependencyFailure:
            raise
        except Exception as exc:
            logger.error("Venue search at %s,%s failed", lat, lng, exc_info=True)
            raise DependencyFailure("Venue search is unavailable.") from exc

        reconciliation = await self._reconciler.reconcile(venues, lat, lng)

        at = self._clock().astimezone(self._zone)
        today = current_date(at)
        ranked = [
            RankedRecord(record=record, current_date=today, close_time=close_time(record, at))
            for record in rank(reconciliation.records)
        ]

        feed = await self._assembler.assemble(ranked, user_id, page, limit)
        return reconciliation, feed
