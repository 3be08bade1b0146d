from __future__ import annotations

from typing import Final

CONNECTOR_NAME: Final[str] = "radiobrowser"

# Round-robin DNS name that resolves to any live API server.
DEFAULT_API_URL: Final[str] = "https://all.api.radio-browser.info"
DEFAULT_USER_AGENT: Final[str] = "radiobrowser-connector/1.0"

# Timeouts: one value applied to connect and read, per attempt
DEFAULT_TIMEOUT_S: Final[float] = 10.0

# Retry: total attempts per call and the fixed wait between them
DEFAULT_RETRIES: Final[int] = 3
DEFAULT_RETRY_INTERVAL_S: Final[float] = 1.0

# Records requested per server round trip (independent of any View limit)
DEFAULT_PAGE_SIZE: Final[int] = 128

# API paths (relative to the api url)
STATIONS_PATH: Final[str] = "json/stations"
SEARCH_PATH: Final[str] = "json/stations/search"
STATS_PATH: Final[str] = "json/stats"
URL_PATH: Final[str] = "json/url"
COUNTRIES_PATH: Final[str] = "json/countries"
CODECS_PATH: Final[str] = "json/codecs"
LANGUAGES_PATH: Final[str] = "json/languages"
TAGS_PATH: Final[str] = "json/tags"

# Per-category station lists: json/stations/<category>
CATEGORY_BROKEN: Final[str] = "broken"
CATEGORY_TOP_CLICK: Final[str] = "topclick"
CATEGORY_TOP_VOTE: Final[str] = "topvote"
CATEGORY_LAST_CLICK: Final[str] = "lastclick"
CATEGORY_LAST_CHANGE: Final[str] = "lastchange"

# Station timestamps, e.g. "2024-03-01 17:04:55"
TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Request parameters echoed into logs (everything else is reduced to its key)
LOGGED_PARAM_KEYS: Final[tuple[str, ...]] = ("offset", "limit", "order", "reverse", "hidebroken")

# Load pipeline
STREAM_STATIONS: Final[str] = "stations"
VALUE_COUNT_STREAMS: Final[tuple[str, ...]] = ("countries", "codecs", "languages", "tags")
