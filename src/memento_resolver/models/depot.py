"""Memento depot configuration."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DepotConfig(BaseModel):
    """A configured archive service exposing a TimeGate."""

    model_config = ConfigDict(frozen=True)

    name: str
    time_gate_prefix: str = Field(..., min_length=1)
    fallback_prefix: Optional[str] = None
