from __future__ import annotations

from collections.abc import Iterable

from ..catalog.models import CatalogRecord


def rank(records: Iterable[CatalogRecord]) -> list[CatalogRecord]:
    """Most reviewed first, then best rated.

    ``sorted`` is stable, so records with equal keys keep their input order.
    """
    return sorted(records, key=lambda r: (-r.total_reviewer, -r.average_rating))
