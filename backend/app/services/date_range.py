"""Resolve analysis periods into concrete date ranges."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from app.exceptions import ConflictingParameters, InvalidRange, MissingParameters

ALLOWED_RANGES = ["daily", "weekly", "monthly"]

RANGE_EXAMPLES = [
    {"range": "daily"},
    {"from": "2025-09-01", "to": "2025-09-07"},
]


@dataclass(frozen=True)
class DateRange:
    from_date: date
    to_date: date

    def as_dict(self) -> dict:
        return {"from": self.from_date.isoformat(), "to": self.to_date.isoformat()}


def week_start(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


def month_start(day: date) -> date:
    return day.replace(day=1)


def resolve_date_range(
    range_keyword: Optional[str] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    today: Optional[date] = None,
) -> DateRange:
    """
    Turn a range keyword or an explicit from/to pair into a DateRange.

    Keyword periods always end today; weeks start on Monday.
    """
    if range_keyword is not None:
        if from_date is not None or to_date is not None:
            raise ConflictingParameters()

        today = today or date.today()
        if range_keyword == "daily":
            return DateRange(today, today)
        if range_keyword == "weekly":
            return DateRange(week_start(today), today)
        if range_keyword == "monthly":
            return DateRange(month_start(today), today)
        raise InvalidRange(range_keyword, ALLOWED_RANGES)

    if from_date is None or to_date is None:
        raise MissingParameters(examples=RANGE_EXAMPLES)

    return DateRange(from_date, to_date)
