"""Domain entities for GitHub repositories."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Repository:
    """Immutable repository entity."""

    name: str
    full_name: str
    pushed_at: datetime
    archived: bool
