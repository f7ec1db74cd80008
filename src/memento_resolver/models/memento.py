"""Outcome of a single depot query."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Memento(BaseModel):
    """Closest memento reported by a TimeGate. url is None on a miss."""

    status: int
    url: Optional[str] = None
    timestamp: Optional[datetime] = None

    @property
    def is_miss(self) -> bool:
        return self.status >= 400 or self.url is None
