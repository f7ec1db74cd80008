"""Memento tool - parse TimeGate headers and memento timestamps."""

import logging
import re
from datetime import datetime, timezone
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

LAST_MEMENTO_REL = "last memento"
MEMENTO_DATETIME_REGEX = re.compile(r"(?<![0-9])([0-9]{14})(?![0-9])")
_REL_PARAM_REGEX = re.compile(r"^\s*rel\s*=\s*\"?([^\"]*)\"?\s*$", re.IGNORECASE)


def split_link_header(value: str) -> list[str]:
    """Split a Link header into its comma separated entries."""
    return [entry.strip() for entry in value.split(",") if entry.strip()]


def extract_link_url(entry: str) -> Optional[str]:
    """Return the URL between the first '<' and the first '>' after it."""
    start = entry.find("<")
    if start == -1:
        return None
    end = entry.find(">", start + 1)
    if end == -1:
        return None
    return entry[start + 1 : end] or None


def link_relation(entry: str) -> Optional[str]:
    """Return the rel parameter of a Link entry, e.g. 'last memento'."""
    for param in entry.split(";")[1:]:
        match = _REL_PARAM_REGEX.match(param)
        if match:
            return " ".join(match.group(1).split()).lower()
    return None


def find_last_memento(entries: list[str]) -> Optional[str]:
    """URL of the entry whose relation is exactly 'last memento'."""
    for entry in entries:
        if link_relation(entry) == LAST_MEMENTO_REL:
            return extract_link_url(entry)
    return None


def find_memento_heuristic(entries: list[str]) -> Optional[str]:
    """Scan from the end for any entry mentioning 'memento'."""
    for entry in reversed(entries):
        if "memento" not in entry:
            continue
        url = extract_link_url(entry)
        if url:
            return url
    return None


def find_memento_url(headers: Mapping[str, str]) -> Optional[str]:
    """
    Resolve the snapshot URL from TimeGate response headers.
    Precedence: Location, Link rel="last memento", any Link entry
    containing "memento" (last first). None if nothing matches.
    headers must do case-insensitive lookup (httpx.Headers does).
    """
    location = headers.get("location")
    if location:
        logger.debug("Memento URL %s from location header", location)
        return location

    link = headers.get("link")
    if not link:
        return None

    entries = split_link_header(link)
    url = find_last_memento(entries)
    if url:
        logger.debug("Memento URL %s from last memento link", url)
        return url

    url = find_memento_heuristic(entries)
    if url:
        logger.debug("Memento URL %s from memento link heuristic", url)
    return url


def parse_memento_datetime(value: str) -> Optional[datetime]:
    """Convert a YYYYMMDDHHMMSS string to a UTC datetime."""
    if len(value) != 14 or not value.isdigit():
        logger.error("Memento date is not 14 digits, got %s", value)
        return None
    try:
        return datetime(
            int(value[0:4]),
            int(value[4:6]),
            int(value[6:8]),
            int(value[8:10]),
            int(value[10:12]),
            int(value[12:14]),
            tzinfo=timezone.utc,
        )
    except ValueError as e:
        logger.error("Error parsing memento datetime %s: %s", value, e)
        return None


def timestamp_from_memento_url(url: str) -> Optional[datetime]:
    """Timestamp from the first 14-digit run in a memento URL."""
    match = MEMENTO_DATETIME_REGEX.search(url)
    if not match:
        logger.debug("No memento timestamp in %s", url)
        return None
    return parse_memento_datetime(match.group(1))
