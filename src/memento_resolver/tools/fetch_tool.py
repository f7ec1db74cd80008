"""Fetch tool - issue a single HTTP request to an archive service."""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def send_request(
    method: str,
    url: str,
    user_agent: Optional[str] = None,
    data: Optional[dict[str, Any]] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> httpx.Response:
    """
    Send one request without following redirects.
    Any status code is returned as a response; callers inspect it themselves.
    Transport failures raise httpx.HTTPError.
    """
    headers = {"User-Agent": user_agent} if user_agent else {}
    logger.debug("%s %s", method, url)
    with httpx.Client(
        timeout=timeout,
        follow_redirects=False,
        trust_env=False,
        headers=headers,
    ) as client:
        response = client.request(method, url, data=data)
    logger.debug("%s %s -> %d", method, url, response.status_code)
    return response
