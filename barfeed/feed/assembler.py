from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from ..concurrency import gather_ordered
from ..config import TOP_SIZE
from ..errors import EnrichmentFailure
from ..favorites.store import FavoriteStore
from .models import FeedSummary, Pagination, RankedRecord, TopSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedPage:
    top: list[TopSummary]
    bars: list[FeedSummary]
    pagination: Pagination
    favorite_failures: int = 0


class FeedAssembler:
    def __init__(
        self,
        favorites: FavoriteStore,
        top_size: int = TOP_SIZE,
        max_concurrency: int | None = None,
    ):
        self._favorites = favorites
        self._top_size = top_size
        self._max_concurrency = max_concurrency

    async def assemble(
        self,
        ranked: Sequence[RankedRecord],
        user_id: str,
        page: int,
        limit: int,
    ) -> FeedPage:
        """Split ``ranked`` into the top slice and one page of the remainder.

        Every remainder item is checked against the user's favorites, so
        ``total`` counts the whole remainder, not just the returned page.
        A failed favorite lookup marks that item as not favorite.
        """
        if page < 1 or limit < 1:
            raise ValueError(f"page and limit must be >= 1, got page={page} limit={limit}")

        top = [TopSummary.from_ranked(item) for item in ranked[: self._top_size]]
        remainder = list(ranked[self._top_size :])
        failed: list[str] = []

        async def _enrich(item: RankedRecord) -> FeedSummary:
            try:
                is_favorite = await self._is_favorite(user_id, item.record.id)
            except EnrichmentFailure:
                logger.warning(
                    "Favorite lookup failed for bar %s, showing it as not favorite",
                    item.record.id,
                    exc_info=True,
                )
                failed.append(item.record.id)
                is_favorite = False
            return FeedSummary.from_ranked(item, is_favorite=is_favorite)

        enriched = await gather_ordered(remainder, _enrich, self._max_concurrency)

        skip = (page - 1) * limit
        total = len(enriched)
        return FeedPage(
            top=top,
            bars=enriched[skip : skip + limit],
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                total_pages=math.ceil(total / limit),
            ),
            favorite_failures=len(failed),
        )

    async def _is_favorite(self, user_id: str, bar_id: str) -> bool:
        try:
            return bool(await self._favorites.exists(user_id, bar_id))
        except Exception as exc:
            raise EnrichmentFailure(f"Favorite lookup failed for bar {bar_id}.") from exc
