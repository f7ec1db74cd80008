"""Memento depot - ask an archive's TimeGate for the latest memento."""

import logging
from typing import Optional

from ..models.depot import DepotConfig
from ..models.memento import Memento
from ..tools.fetch_tool import DEFAULT_TIMEOUT, send_request
from ..tools.memento_tool import find_memento_url, timestamp_from_memento_url

logger = logging.getLogger(__name__)


class MementoDepot:
    """Client for one configured depot."""

    def __init__(
        self,
        config: DepotConfig,
        user_agent: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.config = config
        self.user_agent = user_agent
        self.timeout = timeout

    @property
    def name(self) -> str:
        return self.config.name

    def get_latest_memento(self, url: str) -> Memento:
        """
        Query the TimeGate for the memento closest to now.
        Status >= 400, or a response without a usable URL, is a miss.
        Network errors (httpx.HTTPError) propagate.
        """
        full_url = f"{self.config.time_gate_prefix}{url}"
        logger.info("Querying %s TimeGate %s", self.name, full_url)
        response = send_request(
            "GET", full_url, user_agent=self.user_agent, timeout=self.timeout
        )
        status = response.status_code
        if status >= 400:
            logger.error("Got status code %d from %s", status, full_url)
            return Memento(status=status)

        memento_url = find_memento_url(response.headers)
        if memento_url is None:
            logger.error(
                "Could not determine latest memento or location for %s (status %d)",
                full_url,
                status,
            )
            return Memento(status=status)

        logger.info("Found memento %s in %s", memento_url, self.name)
        return Memento(
            status=status,
            url=memento_url,
            timestamp=timestamp_from_memento_url(memento_url),
        )

    def get_fallback_url(self, url: str) -> Optional[str]:
        """Manual search link for url, if this depot has a fallback prefix."""
        if self.config.fallback_prefix is None:
            return None
        return f"{self.config.fallback_prefix}{url}"

    def __repr__(self) -> str:
        return f"MementoDepot(name={self.name!r}, time_gate={self.config.time_gate_prefix!r})"
