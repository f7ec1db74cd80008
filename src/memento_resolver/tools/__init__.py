"""Function tools used by depots, archivers and the processor."""

from .fetch_tool import send_request
from .memento_tool import (
    find_memento_url,
    parse_memento_datetime,
    timestamp_from_memento_url,
)
from .url_tool import extract_urls, get_valid_url, is_auto_eligible, normalize_url

__all__ = [
    "send_request",
    "find_memento_url",
    "parse_memento_datetime",
    "timestamp_from_memento_url",
    "extract_urls",
    "get_valid_url",
    "is_auto_eligible",
    "normalize_url",
]
