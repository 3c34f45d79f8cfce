"""Weekly completeness check and the analysis proposal it gates."""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Tuple

from app.exceptions import AppError
from app.services.date_range import DateRange, week_start
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


@dataclass
class WeeklyStatus:
    is_complete: bool
    week_range: DateRange
    recorded_days: int
    total_days: int = DAYS_PER_WEEK
    error: Optional[str] = None

    @property
    def week_key(self) -> str:
        return self.week_range.from_date.isoformat()


def current_week_key(today: Optional[date] = None) -> str:
    return week_start(today or date.today()).isoformat()


class WeeklyCompletionChecker:
    """Decides whether a user recorded every day of the current ISO week."""

    def __init__(self, store: RecordStore):
        self.store = store

    def check(self, user_id: str, today: Optional[date] = None) -> WeeklyStatus:
        """
        Compare the user's records against the 7 days Monday..Sunday.

        A failed fetch yields ``is_complete=False`` with ``error`` set, which
        callers must not read as a merely incomplete week.
        """
        start = week_start(today or date.today())
        week = DateRange(start, start + timedelta(days=DAYS_PER_WEEK - 1))

        try:
            records = self.store.list_range(week.from_date, week.to_date, user_id=user_id)
        except AppError as e:
            logger.error("Weekly completion check failed for %s: %s", user_id, e)
            return WeeklyStatus(
                is_complete=False,
                week_range=week,
                recorded_days=0,
                error=str(e.extra.get("details") or e.message),
            )

        expected = {start + timedelta(days=i) for i in range(DAYS_PER_WEEK)}
        recorded = {r.date for r in records} & expected

        return WeeklyStatus(
            is_complete=expected <= recorded,
            week_range=week,
            recorded_days=len(recorded),
        )


def evaluate_weekly_proposal(
    checker: WeeklyCompletionChecker,
    gate,
    user_id: str,
    today: Optional[date] = None,
) -> Tuple[WeeklyStatus, bool]:
    """
    Run the completeness check and claim this week's proposal if complete.

    Returns the status and whether the caller should offer the analysis now.
    """
    status = checker.check(user_id, today=today)
    if status.error or not status.is_complete:
        return status, False

    propose = gate.claim(status.week_key, user_id)
    if propose:
        logger.info("Week of %s complete for %s; proposing analysis", status.week_key, user_id)
    return status, propose
