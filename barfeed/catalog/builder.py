from __future__ import annotations

from typing import Any, Protocol
from urllib.parse import quote

from ..config import PHOTO_MAXWIDTH, PHOTO_PATH
from ..venues.google_places import GooglePlacesClient
from .models import Venue

MAX_PHOTOS = 8

_GENERIC_TYPES = {"point_of_interest", "establishment", "food", "store"}

_DAY_ABBREVIATIONS = {
    "monday": "Mon",
    "tuesday": "Tue",
    "wednesday": "Wed",
    "thursday": "Thu",
    "friday": "Fri",
    "saturday": "Sat",
    "sunday": "Sun",
}


class RecordBuilder(Protocol):
    async def build(self, venue: Venue, lat: float, lng: float) -> dict[str, Any]:
        """Return a catalog payload (every CatalogRecord field but ids)."""
        ...


def parse_weekday_text(weekday_text: list[str]) -> list[dict[str, str]]:
    """Turn ``["Monday: 6:00 PM – 2:00 AM", ...]`` into schedule entries."""
    schedule: list[dict[str, str]] = []
    for line in weekday_text:
        day, sep, hours = line.partition(":")
        abbr = _DAY_ABBREVIATIONS.get(day.strip().lower())
        if not sep or abbr is None:
            continue
        schedule.append({"day": abbr, "time": hours.strip()})
    return schedule


def _bar_type(types: list[str]) -> str:
    for t in types:
        if t not in _GENERIC_TYPES:
            return t.replace("_", " ").title()
    return "Bar"


def _crowd_meter(reviews: int | None) -> str:
    count = reviews or 0
    if count >= 500:
        return "Busy"
    if count >= 100:
        return "Moderate"
    return "Quiet"


def photo_path(photo_reference: str, maxwidth: int = PHOTO_MAXWIDTH) -> str:
    """App-relative link to a provider photo, served by ``GET /photos/{ref}``."""
    return f"{PHOTO_PATH}/{quote(photo_reference, safe='')}?maxwidth={maxwidth}"


class PlacesRecordBuilder:
    """Build catalog payloads from Google Places venues plus their details."""

    def __init__(self, client: GooglePlacesClient):
        self._client = client

    async def build(self, venue: Venue, lat: float, lng: float) -> dict[str, Any]:
        details = await self._client.fetch_details(venue.place_id)

        refs = [
            p["photo_reference"]
            for p in details.get("photos", [])
            if p.get("photo_reference")
        ] or venue.photo_refs
        urls = [photo_path(ref) for ref in refs[:MAX_PHOTOS]]

        weekday_text = details.get("opening_hours", {}).get("weekday_text", [])

        # Venues without geometry fall back to the point they were found from
        return {
            "name": details.get("name") or venue.name,
            "cover": urls[0] if urls else "",
            "gallery": urls[1:],
            "bar_type": _bar_type(venue.types),
            "crowd_meter": _crowd_meter(venue.user_ratings_total),
            "about": {
                "address": {
                    "place_name": details.get("formatted_address") or venue.vicinity,
                    "lat": venue.lat if venue.lat is not None else lat,
                    "lng": venue.lng if venue.lng is not None else lng,
                },
                "schedule": parse_weekday_text(weekday_text),
            },
            "total_reviewer": venue.user_ratings_total or 0,
            "average_rating": venue.rating or 0.0,
        }
