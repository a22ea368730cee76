from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent / "data"

SEARCH_RADIUS = 3000  # metres
TOP_SIZE = 4
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 50

# Catalog records link photos through this app, never straight to Google
PHOTO_PATH = "/photos"
PHOTO_MAXWIDTH = 800


@dataclass(frozen=True)
class FeedConfig:
    places_api_key: str = os.getenv("GOOGLE_PLACES_API_KEY", "")
    places_base_url: str = os.getenv(
        "PLACES_BASE_URL", "https://maps.googleapis.com/maps/api/place"
    )
    db_path: Path = Path(os.getenv("BARFEED_DB_PATH", str(_DATA_DIR / "barfeed.db")))
    timezone: str = os.getenv("BARFEED_TIMEZONE", "UTC")
    max_concurrency: int = int(os.getenv("BARFEED_MAX_CONCURRENCY", "8"))
    request_timeout: float = float(os.getenv("BARFEED_REQUEST_TIMEOUT", "15.0"))
    http_timeout: float = float(os.getenv("BARFEED_HTTP_TIMEOUT", "10.0"))


DEFAULT_FEED_CONFIG = FeedConfig()
