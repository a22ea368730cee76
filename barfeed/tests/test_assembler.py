from __future__ import annotations

import asyncio
import math

import pytest

from barfeed.catalog.models import About, Address, CatalogRecord, ScheduleEntry
from barfeed.feed.assembler import FeedAssembler
from barfeed.feed.models import RankedRecord

from fakes import FakeFavorites

USER = "user-1"


def _ranked(n: int, schedule=True) -> list[RankedRecord]:
    items = []
    for i in range(n):
        record = CatalogRecord(
            id=f"bar-{i}",
            place_id=f"place-{i}",
            name=f"Bar {i}",
            cover=f"cover-{i}.jpg",
            gallery=[f"g-{i}-a.jpg", f"g-{i}-b.jpg"],
            bar_type="Pub",
            crowd_meter="Quiet",
            about=About(
                address=Address(place_name=f"{i} Main St"),
                schedule=[
                    ScheduleEntry(day="Mon", time="16:00 – 23:00"),
                    ScheduleEntry(day="Fri", time="16:00 – 02:00"),
                ]
                if schedule
                else None,
            ),
            total_reviewer=100 - i,
            average_rating=4.0,
        )
        items.append(RankedRecord(record=record, current_date="Fri, Oct 16, 2026", close_time="02:00"))
    return items


@pytest.mark.asyncio
async def test_top_slice_takes_first_four():
    assembler = FeedAssembler(FakeFavorites())

    page = await assembler.assemble(_ranked(6), USER, page=1, limit=10)

    assert [t.id for t in page.top] == ["bar-0", "bar-1", "bar-2", "bar-3"]
    assert [b.id for b in page.bars] == ["bar-4", "bar-5"]
    top = page.top[0].model_dump(by_alias=True)
    assert top == {
        "_id": "bar-0",
        "cover": "cover-0.jpg",
        "barType": "Pub",
        "name": "Bar 0",
        "crowdMeter": "Quiet",
        "currentDate": "Fri, Oct 16, 2026",
        "closeTime": "02:00",
    }


@pytest.mark.asyncio
async def test_fewer_than_four_records():
    page = await FeedAssembler(FakeFavorites()).assemble(_ranked(2), USER, 1, 10)

    assert len(page.top) == 2
    assert page.bars == []
    assert page.pagination.total == 0
    assert page.pagination.total_pages == 0


@pytest.mark.asyncio
async def test_feed_summary_shape():
    favorites = FakeFavorites(favorites={(USER, "bar-4")})

    page = await FeedAssembler(favorites).assemble(_ranked(5), USER, 1, 10)

    assert page.bars[0].model_dump(by_alias=True) == {
        "_id": "bar-4",
        "gallery": ["cover-4.jpg", "g-4-a.jpg", "g-4-b.jpg"],
        "barType": "Pub",
        "name": "Bar 4",
        "address": "4 Main St",
        "currentDate": "Fri, Oct 16, 2026",
        "time": "16:00 – 23:00",
        "isFavorite": True,
    }


@pytest.mark.asyncio
async def test_time_is_empty_without_schedule():
    page = await FeedAssembler(FakeFavorites()).assemble(
        _ranked(5, schedule=False), USER, 1, 10
    )
    assert page.bars[0].time == ""


@pytest.mark.parametrize(
    "count,page_no,limit",
    [(4 + 25, 1, 10), (4 + 25, 3, 10), (4 + 25, 4, 10), (4 + 7, 2, 3), (4 + 1, 1, 1)],
)
@pytest.mark.asyncio
async def test_pagination_arithmetic(count, page_no, limit):
    page = await FeedAssembler(FakeFavorites()).assemble(
        _ranked(count), USER, page_no, limit
    )

    total = count - 4
    skip = (page_no - 1) * limit
    assert page.pagination.total == total
    assert page.pagination.total_pages == math.ceil(total / limit)
    assert len(page.bars) == min(limit, max(0, total - skip))
    assert [b.id for b in page.bars] == [f"bar-{4 + skip + i}" for i in range(len(page.bars))]


@pytest.mark.asyncio
async def test_favorite_failure_is_isolated(caplog):
    favorites = FakeFavorites(
        favorites={(USER, "bar-4"), (USER, "bar-6")}, fail_for={"bar-5"}
    )

    with caplog.at_level("WARNING", logger="barfeed.feed.assembler"):
        page = await FeedAssembler(favorites).assemble(_ranked(7), USER, 1, 10)

    assert [(b.id, b.is_favorite) for b in page.bars] == [
        ("bar-4", True),
        ("bar-5", False),
        ("bar-6", True),
    ]
    assert page.favorite_failures == 1
    assert "bar-5" in caplog.text


@pytest.mark.asyncio
async def test_favorite_lookups_reassembled_in_rank_order():
    class SlowFirstFavorites(FakeFavorites):
        async def exists(self, user_id, bar_id):
            index = int(bar_id.split("-")[1])
            await asyncio.sleep(0.002 * (20 - index))
            return index % 2 == 0

    page = await FeedAssembler(SlowFirstFavorites(), max_concurrency=3).assemble(
        _ranked(14), USER, 1, 10
    )

    assert [b.id for b in page.bars] == [f"bar-{i}" for i in range(4, 14)]
    assert [b.is_favorite for b in page.bars] == [i % 2 == 0 for i in range(4, 14)]


@pytest.mark.asyncio
async def test_rejects_non_positive_page_or_limit():
    assembler = FeedAssembler(FakeFavorites())
    with pytest.raises(ValueError):
        await assembler.assemble(_ranked(5), USER, 0, 10)
    with pytest.raises(ValueError):
        await assembler.assemble(_ranked(5), USER, 1, 0)
