from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..concurrency import gather_ordered
from ..errors import DependencyFailure
from .builder import RecordBuilder
from .models import CatalogRecord, Venue
from .store import CatalogStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reconciliation:
    """Catalog records in the same order as the venues they came from."""

    records: list[CatalogRecord]
    hits: int
    misses: int


class ReconciliationEngine:
    def __init__(
        self,
        store: CatalogStore,
        builder: RecordBuilder,
        max_concurrency: int | None = None,
    ):
        self._store = store
        self._builder = builder
        self._max_concurrency = max_concurrency

    async def reconcile(
        self, venues: Sequence[Venue], lat: float, lng: float
    ) -> Reconciliation:
        """Match ``venues`` against the catalog, creating records on a miss.

        ``records[i]`` corresponds to ``venues[i]``.  A place repeated in
        ``venues`` is built once.  ``hits`` and ``misses`` count distinct
        places.  Any store or builder failure aborts the whole
        reconciliation with ``DependencyFailure``.
        """
        place_ids = list(dict.fromkeys(v.place_id for v in venues))

        try:
            existing = await self._store.find_by_place_ids(place_ids)
        except Exception as exc:
            logger.error("Catalog lookup for %d place ids failed", len(place_ids), exc_info=True)
            raise DependencyFailure("Catalog lookup failed.") from exc

        by_place_id = {record.place_id: record for record in existing}
        missing: dict[str, Venue] = {}
        for venue in venues:
            if venue.place_id not in by_place_id:
                missing.setdefault(venue.place_id, venue)

        created = await gather_ordered(
            list(missing.values()),
            lambda venue: self._create(venue, lat, lng),
            self._max_concurrency,
        )
        hits = len(by_place_id)
        by_place_id.update((record.place_id, record) for record in created)

        logger.info(
            "Reconciled %d venues: %d from catalog, %d created",
            len(venues),
            hits,
            len(created),
        )
        return Reconciliation(
            records=[by_place_id[v.place_id] for v in venues],
            hits=hits,
            misses=len(created),
        )

    async def _create(self, venue: Venue, lat: float, lng: float) -> CatalogRecord:
        try:
            payload = await self._builder.build(venue, lat, lng)
            return await self._store.upsert(venue.place_id, payload)
        except DependencyFailure:
            raise
        except Exception as exc:
            logger.error("Could not add place %s to the catalog", venue.place_id, exc_info=True)
            raise DependencyFailure("Could not add a venue to the catalog.") from exc
