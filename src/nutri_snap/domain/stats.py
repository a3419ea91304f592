"""Domain models for dashboard statistics."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DayScore:
    """Average health score for one calendar day."""

    day: date
    label: str
    score: float | None
