"""
Venue provider backed by the Google Places web service.

Nearby Search finds the bars around a point; Place Details fills in the
opening hours, photos and address a catalog record needs. Photos are
downloaded here too, so the API key never leaves the server.
"""
from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from ..config import DEFAULT_FEED_CONFIG, FeedConfig
from ..catalog.models import Venue
from ..errors import DependencyFailure

logger = logging.getLogger(__name__)

_OK_STATUSES = {"OK", "ZERO_RESULTS"}
_DETAIL_FIELDS = "place_id,name,formatted_address,opening_hours,photos"


class VenueProvider(Protocol):
    async def fetch_nearby(self, lat: float, lng: float, radius: int) -> list[Venue]:
        ...


class PhotoSource(Protocol):
    async def fetch_photo(self, photo_reference: str, maxwidth: int) -> tuple[bytes, str]:
        """Return ``(image bytes, content type)`` for a provider photo reference."""
        ...


class GooglePlacesClient:
    def __init__(
        self,
        config: FeedConfig = DEFAULT_FEED_CONFIG,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = config.places_api_key
        self.base_url = config.places_base_url.rstrip("/")
        self.timeout = config.http_timeout
        self._transport = transport

    async def fetch_nearby(self, lat: float, lng: float, radius: int) -> list[Venue]:
        data = await self._get(
            "nearbysearch/json",
            {"location": f"{lat},{lng}", "radius": radius, "type": "bar"},
        )
        venues = [
            Venue.from_places(result)
            for result in data.get("results", [])
            if result.get("place_id")
        ]
        logger.debug("Nearby search at %s,%s returned %d venues", lat, lng, len(venues))
        return venues

    async def fetch_details(self, place_id: str) -> dict[str, Any]:
        data = await self._get(
            "details/json", {"place_id": place_id, "fields": _DETAIL_FIELDS}
        )
        return data.get("result", {})

    async def fetch_photo(self, photo_reference: str, maxwidth: int = 800) -> tuple[bytes, str]:
        """Download a place photo. The API key stays on this side of the wire."""
        response = await self._request(
            "photo", {"photo_reference": photo_reference, "maxwidth": maxwidth}
        )
        content_type = response.headers.get("content-type", "image/jpeg")
        return response.content, content_type

    def _client(self) -> httpx.AsyncClient:
        # The photo endpoint answers with a redirect to the image host
        return httpx.AsyncClient(
            timeout=self.timeout, transport=self._transport, follow_redirects=True
        )

    async def _request(self, path: str, params: dict[str, Any]) -> httpx.Response:
        if not self.api_key:
            raise DependencyFailure("Google Places API key is not configured.")

        url = f"{self.base_url}/{path}"
        async with self._client() as client:
            try:
                response = await client.get(url, params={**params, "key": self.api_key})
                response.raise_for_status()
            except httpx.HTTPError as exc:
                logger.warning("Google Places request to %s failed", path, exc_info=True)
                raise DependencyFailure("Venue search is unavailable.") from exc
        return response

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        response = await self._request(path, params)
        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("Google Places %s returned a non-JSON body", path, exc_info=True)
            raise DependencyFailure("Venue search is unavailable.") from exc

        status = data.get("status", "")
        if status not in _OK_STATUSES:
            logger.warning(
                "Google Places %s returned status %s: %s",
                path,
                status,
                data.get("error_message", ""),
            )
            raise DependencyFailure(f"Venue search failed with status {status or 'UNKNOWN'}.")
        return data
