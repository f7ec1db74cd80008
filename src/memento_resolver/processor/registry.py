"""Depot registry - built once at startup, shared read-only by every processor."""

import logging
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from ..archivers.memento_depot import MementoDepot
from ..config.loader import Config
from ..models.depot import DepotConfig
from ..tools.fetch_tool import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class DepotRegistry:
    """Ordered, immutable name -> MementoDepot mapping plus the shared user agent."""

    def __init__(
        self,
        depot_configs: Iterable[DepotConfig],
        user_agent: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        depots: dict[str, MementoDepot] = {}
        for depot_config in depot_configs:
            if depot_config.name in depots:
                raise ValueError(f"Duplicate depot name: {depot_config.name}")
            depots[depot_config.name] = MementoDepot(depot_config, user_agent, timeout)

        self._depots: Mapping[str, MementoDepot] = MappingProxyType(depots)
        self._user_agent = user_agent
        self._timeout = timeout
        # First depot configured with a manual-search prefix.
        self._fallback_depot = next(
            (d for d in depots.values() if d.config.fallback_prefix is not None),
            None,
        )
        logger.info("Registered %d memento depots: %s", len(depots), ", ".join(depots))

    @classmethod
    def from_config(cls, config: Config) -> "DepotRegistry":
        return cls(config.depot_configs(), config.user_agent, config.request_timeout)

    @property
    def depots(self) -> Mapping[str, MementoDepot]:
        return self._depots

    @property
    def user_agent(self) -> Optional[str]:
        return self._user_agent

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def fallback_depot(self) -> Optional[MementoDepot]:
        return self._fallback_depot

    def get(self, name: str) -> Optional[MementoDepot]:
        return self._depots.get(name)

    def __iter__(self) -> Iterator[MementoDepot]:
        return iter(self._depots.values())

    def __len__(self) -> int:
        return len(self._depots)

    def __contains__(self, name: object) -> bool:
        return name in self._depots
