from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..catalog.models import CatalogRecord


class RankedRecord(BaseModel):
    """A catalog record plus the fields derived for this request."""

    model_config = ConfigDict(frozen=True)

    record: CatalogRecord
    current_date: str
    close_time: str


class _View(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class TopSummary(_View):
    id: str = Field(alias="_id")
    cover: str
    bar_type: str
    name: str
    crowd_meter: str
    current_date: str
    close_time: str

    @classmethod
    def from_ranked(cls, ranked: RankedRecord) -> "TopSummary":
        record = ranked.record
        return cls(
            id=record.id,
            cover=record.cover,
            bar_type=record.bar_type,
            name=record.name,
            crowd_meter=record.crowd_meter,
            current_date=ranked.current_date,
            close_time=ranked.close_time,
        )


class FeedSummary(_View):
    id: str = Field(alias="_id")
    gallery: list[str]
    bar_type: str
    name: str
    address: str
    current_date: str
    time: str
    is_favorite: bool

    @classmethod
    def from_ranked(cls, ranked: RankedRecord, is_favorite: bool) -> "FeedSummary":
        record = ranked.record
        schedule = record.about.schedule or []
        return cls(
            id=record.id,
            gallery=[record.cover, *record.gallery],
            bar_type=record.bar_type,
            name=record.name,
            address=record.about.address.place_name,
            current_date=ranked.current_date,
            time=schedule[0].time if schedule else "",
            is_favorite=is_favorite,
        )


class Pagination(_View):
    page: int
    limit: int
    total: int
    total_pages: int


class FeedData(_View):
    top: list[TopSummary]
    bars: list[FeedSummary]


class FeedResponse(_View):
    success: bool = True
    message: str = "Bars retrieved successfully."
    data: FeedData
    pagination: Pagination


class FavoriteResponse(_View):
    success: bool = True
    bar_id: str
    is_favorite: bool
