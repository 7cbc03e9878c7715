"""Monday-anchored week window used to scope every register operation."""

import datetime as dt
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class WeekWindow:
    """Seven consecutive days starting on a Monday.

    A Sunday belongs to the week that ends on it (ISO weeks).

    Attributes:
        start: The Monday the week starts on

    Example:
        >>> week = WeekWindow.containing(dt.date(2024, 1, 3))
        >>> week.start, week.end
        (datetime.date(2024, 1, 1), datetime.date(2024, 1, 7))
    """

    start: dt.date

    def __post_init__(self):
        if self.start.isoweekday() != 1:
            raise ValueError(f"Week must start on a Monday, got {self.start:%A} {self.start}")

    @classmethod
    def containing(cls, day: dt.date) -> "WeekWindow":
        """The week that contains ``day``."""
        return cls(start=day - dt.timedelta(days=day.weekday()))

    @property
    def dates(self) -> List[dt.date]:
        return [self.start + dt.timedelta(days=offset) for offset in range(7)]

    @property
    def end(self) -> dt.date:
        return self.start + dt.timedelta(days=6)

    @property
    def years(self) -> List[int]:
        """Calendar years the week touches (two around New Year)."""
        return sorted({self.start.year, self.end.year})

    def contains(self, day: dt.date) -> bool:
        return self.start <= day <= self.end

    def previous(self) -> "WeekWindow":
        return WeekWindow(start=self.start - dt.timedelta(days=7))

    def next(self) -> "WeekWindow":
        return WeekWindow(start=self.start + dt.timedelta(days=7))

    def __str__(self) -> str:
        return f"{self.start:%d %b %Y} - {self.end:%d %b %Y}"


def is_weekend(day: dt.date) -> bool:
    """Saturday or Sunday (ISO weekday 6 or 7)."""
    return day.isoweekday() >= 6
