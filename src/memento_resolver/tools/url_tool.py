"""URL tool - validate, normalize and pick URLs worth resolving."""

import logging
import re
from typing import Mapping, Optional
from urllib.parse import urlsplit, urlunsplit

logger = logging.getLogger(__name__)

URL_REGEX = re.compile(r"https?://[^\s<>\"'`]+", re.IGNORECASE)
_TRAILING_PUNCTUATION = ".,;:!?)]}"


def get_valid_url(url: str, add_https: bool = False) -> Optional[str]:
    """
    Trim and validate a user supplied URL.
    With add_https, a bare host like 'example.com/a' becomes 'https://example.com/a'.
    Returns None when the result is not an http(s) URL with a host.
    """
    candidate = url.strip()
    if add_https and not candidate.lower().startswith(("http://", "https://")):
        candidate = f"https://{candidate}"

    try:
        parsed = urlsplit(candidate)
    except ValueError:
        return None
    if parsed.scheme.lower() not in ("http", "https") or not parsed.netloc:
        return None
    return candidate


def normalize_url(url: str) -> str:
    """Normalize URL: strip query and fragment, empty path becomes '/'."""
    parsed = urlsplit(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Not an absolute URL: {url}")
    return urlunsplit((parsed.scheme, parsed.netloc, parsed.path or "/", "", ""))


def extract_urls(text: str) -> list[str]:
    """Find http(s) URLs in free text, in order, without duplicates."""
    seen: set[str] = set()
    urls: list[str] = []
    for match in URL_REGEX.finditer(text):
        url = match.group(0).rstrip(_TRAILING_PUNCTUATION)
        if url and url not in seen:
            seen.add(url)
            urls.append(url)
    return urls


def is_auto_eligible(url: str, allowlist: Mapping[str, bool]) -> bool:
    """Allowlisted host (ignoring 'www.') and not the site's front page."""
    try:
        parsed = urlsplit(url)
    except ValueError as e:
        logger.warning("Ignoring unparseable URL %s: %s", url, e)
        return False

    hostname = (parsed.hostname or "").lower()
    if hostname.startswith("www."):
        hostname = hostname[4:]
    if not allowlist.get(hostname, False):
        return False
    return parsed.path not in ("", "/")
