from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    feeds = [e for e in events if e["type"] == "feed"]
    total = len(feeds)

    # Average response time
    times = [f["response_time_ms"] for f in feeds if "response_time_ms" in f]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Catalog reconciliation
    hits = sum(f.get("catalog_hits", 0) for f in feeds)
    created = sum(f.get("catalog_created", 0) for f in feeds)
    looked_up = hits + created

    # Page-size usage
    limit_counter: Counter[int] = Counter(f.get("limit", 0) for f in feeds)
    limit_usage = [{"limit": n, "count": c} for n, c in limit_counter.most_common(5)]

    venues = [f.get("venues", 0) for f in feeds]

    return {
        "total_feeds": total,
        "avg_response_time_ms": avg_time,
        "avg_venues_per_feed": round(sum(venues) / total, 1) if total else 0.0,
        "catalog": {
            "hits": hits,
            "created": created,
            "hit_rate": round(hits / looked_up * 100, 1) if looked_up else 0.0,
        },
        "favorite_lookup_failures": sum(f.get("favorite_failures", 0) for f in feeds),
        "limit_usage": limit_usage,
    }
