"""Calendar date key helpers."""

from datetime import date

from hydra_tracker.domain.models import CalendarDate


def format_calendar_date(value: date) -> CalendarDate:
    """Return the YYYY-MM-DD key for a calendar day."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_calendar_date(value: CalendarDate) -> date:
    """Parse a YYYY-MM-DD key back into a date."""
    return date.fromisoformat(value)
