"""Configuration loader for memento resolution."""

import json
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

from ..models.depot import DepotConfig


class MementoDepotSettings(BaseModel):
    """One depot entry: TimeGate prefix and optional manual-search prefix."""

    time_gate: str = Field(..., min_length=1)
    fallback: Optional[str] = None


class Config(BaseModel):
    """Full system configuration."""

    auto_time_travel: bool = Field(default=True)
    allowlist: dict[str, bool] = Field(default_factory=dict)
    # Insertion order is depot priority.
    memento_depots: dict[str, MementoDepotSettings] = Field(default_factory=dict)
    user_agent: Optional[str] = Field(default=None)
    request_timeout: float = Field(default=30.0, gt=0)

    def depot_configs(self) -> list[DepotConfig]:
        """Depot configs in priority order."""
        return [
            DepotConfig(
                name=name,
                time_gate_prefix=settings.time_gate,
                fallback_prefix=settings.fallback,
            )
            for name, settings in self.memento_depots.items()
        ]

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load config from YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Load config from dictionary."""
        return cls(**data)


def load_config(path: str | Path) -> Config:
    """Load configuration from file (YAML or JSON)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if path.suffix in (".yaml", ".yml"):
        return Config.from_yaml(path)

    with open(path, encoding="utf-8") as f:
        data = json.loads(f.read())

    return Config.from_dict(data)
