from __future__ import annotations

import math

from ..config import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT
from ..errors import FeedValidationError

COORDINATES_REQUIRED = "Latitude and longitude are required."


def _parse_float(raw: str | float | None) -> float | None:
    if raw is None:
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_coordinates(
    lat: str | float | None, lng: str | float | None
) -> tuple[float, float]:
    """Parse ``lat``/``lng`` into finite floats. ``0`` is a valid coordinate."""
    latitude = _parse_float(lat)
    longitude = _parse_float(lng)
    if latitude is None or longitude is None:
        raise FeedValidationError(COORDINATES_REQUIRED)
    if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
        raise FeedValidationError(COORDINATES_REQUIRED)
    return latitude, longitude


def _parse_positive_int(raw: str | int | None, default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    return value if value >= 1 else default


def parse_page(raw: str | int | None) -> int:
    return _parse_positive_int(raw, DEFAULT_PAGE)


def parse_limit(raw: str | int | None) -> int:
    return min(_parse_positive_int(raw, DEFAULT_LIMIT), MAX_LIMIT)
