"""Domain models for the hydration tracker."""

from dataclasses import dataclass

CalendarDate = str


@dataclass(frozen=True)
class DailyIntakeState:
    """Today's in-progress tally of logged drinks."""

    count: int
    date: CalendarDate


@dataclass(frozen=True)
class DayRecord:
    """One persisted history entry per calendar day."""

    date: CalendarDate
    count: int
    goal: int
    goal_met: bool

    @classmethod
    def build(cls, date: CalendarDate, count: int, goal: int) -> "DayRecord":
        """Create a record with goal_met derived from count and goal."""
        return cls(date=date, count=count, goal=goal, goal_met=count >= goal)


@dataclass(frozen=True)
class AppSettings:
    """User-adjustable settings."""

    daily_goal: int
    notifications_enabled: bool


@dataclass(frozen=True)
class StorageKeys:
    """Key names used in the key-value store."""

    water_intake: str = "@hydra_water_intake"
    daily_goal: str = "@hydra_daily_goal"
    notifications_enabled: str = "@hydra_notifications_enabled"
    history: str = "@hydra_history"
