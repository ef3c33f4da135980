"""Wall-clock calendar day utilities."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

from hydra_tracker.domain.dates import format_calendar_date
from hydra_tracker.domain.models import CalendarDate


def _system_now(tz: tzinfo | None) -> datetime:
    return datetime.now(tz=tz)


@dataclass
class Clock:
    """Converts the current moment into calendar day keys."""

    timezone_name: str | None = None
    now: Callable[[tzinfo | None], datetime] = field(default=_system_now)

    def current_datetime(self) -> datetime:
        """Return the current wall-clock time."""
        tz = ZoneInfo(self.timezone_name) if self.timezone_name else None
        return self.now(tz)

    def current_date(self) -> date:
        """Return today's local calendar day."""
        return self.current_datetime().date()

    def today(self) -> CalendarDate:
        """Return the key for the current local calendar day."""
        return format_calendar_date(self.current_date())

    def days_ago(self, days: int) -> CalendarDate:
        """Return the key for a day `days` calendar days before today."""
        return format_calendar_date(self.current_date() - timedelta(days=days))

    def is_today(self, value: CalendarDate) -> bool:
        """Return True when the key is today's key."""
        return value == self.today()
