"""Statistics derived from the history ledger."""

from dataclasses import dataclass
from datetime import timedelta

from hydra_tracker.domain.dates import format_calendar_date
from hydra_tracker.domain.models import CalendarDate, DayRecord
from hydra_tracker.domain.stats import StatsData
from hydra_tracker.services.clock import Clock
from hydra_tracker.services.history import HistoryLedger

WEEK_DAYS = 7


@dataclass
class StatsService:
    """Read-only service computing streaks and windows over the ledger."""

    ledger: HistoryLedger
    clock: Clock

    def compute_stats(self, today_goal: int) -> StatsData:
        """Return streak, lifetime total and the weekly window."""
        history = self.ledger.all()
        return StatsData(
            current_streak=current_streak(history, self.clock),
            total_goal_days=total_goal_days(history),
            weekly_data=weekly_window(history, self.clock, today_goal),
        )

    def get_weekly_data(self, today_goal: int) -> list[DayRecord]:
        """Return the last seven days, oldest first."""
        return weekly_window(self.ledger.all(), self.clock, today_goal)

    def get_current_streak(self) -> int:
        """Return the number of consecutive goal days ending today."""
        return current_streak(self.ledger.all(), self.clock)

    def get_total_goal_days(self) -> int:
        """Return how many days ever met their goal."""
        return total_goal_days(self.ledger.all())


def weekly_window(
    history: dict[CalendarDate, DayRecord], clock: Clock, today_goal: int
) -> list[DayRecord]:
    """Return seven records ending today, zero-filling days without a record."""
    window = []
    for offset in range(WEEK_DAYS - 1, -1, -1):
        day = clock.days_ago(offset)
        record = history.get(day)
        if record is None:
            record = DayRecord(date=day, count=0, goal=today_goal, goal_met=False)
        window.append(record)
    return window


def current_streak(history: dict[CalendarDate, DayRecord], clock: Clock) -> int:
    """Count consecutive goal days walking back from today.

    Today is still in progress: it counts once its goal is met and otherwise
    is skipped, recorded or not. Any earlier day without a met goal ends
    the walk.
    """
    today = clock.current_date()
    today_key = format_calendar_date(today)
    cursor = today
    streak = 0
    while True:
        day = format_calendar_date(cursor)
        record = history.get(day)
        if record is not None and record.goal_met:
            streak += 1
        elif day == today_key:
            # Today is exempt even without a record; earlier gaps still end the walk.
            pass
        else:
            break
        cursor -= timedelta(days=1)
    return streak


def total_goal_days(history: dict[CalendarDate, DayRecord]) -> int:
    """Return the number of records whose goal was met."""
    return sum(1 for record in history.values() if record.goal_met)
