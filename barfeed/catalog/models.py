from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Venue(BaseModel):
    """A nearby place as returned by the venue provider. Never persisted."""

    place_id: str = Field(..., min_length=1)
    name: str = ""
    types: list[str] = Field(default_factory=list)
    rating: float | None = None
    user_ratings_total: int | None = None
    vicinity: str = ""
    photo_refs: list[str] = Field(default_factory=list)
    lat: float | None = None
    lng: float | None = None

    @classmethod
    def from_places(cls, result: dict[str, Any]) -> "Venue":
        location = result.get("geometry", {}).get("location", {})
        return cls(
            place_id=result.get("place_id", ""),
            name=result.get("name", ""),
            types=result.get("types", []),
            rating=result.get("rating"),
            user_ratings_total=result.get("user_ratings_total"),
            vicinity=result.get("vicinity", ""),
            photo_refs=[
                p["photo_reference"]
                for p in result.get("photos", [])
                if p.get("photo_reference")
            ],
            lat=location.get("lat"),
            lng=location.get("lng"),
        )


class ScheduleEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: str
    time: str = ""


class Address(BaseModel):
    model_config = ConfigDict(frozen=True)

    place_name: str = ""
    lat: float | None = None
    lng: float | None = None


class About(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: Address = Field(default_factory=Address)
    schedule: list[ScheduleEntry] | None = None


class CatalogRecord(BaseModel):
    """A bar in the catalog. ``place_id`` is unique across all records."""

    model_config = ConfigDict(frozen=True)

    id: str
    place_id: str
    name: str
    cover: str = ""
    gallery: list[str] = Field(default_factory=list)
    bar_type: str = ""
    crowd_meter: str = ""
    about: About = Field(default_factory=About)
    total_reviewer: int = 0
    average_rating: float = 0.0
