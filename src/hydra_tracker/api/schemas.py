"""Pydantic request and response models for the HTTP API."""

from pydantic import BaseModel

from hydra_tracker.domain.models import AppSettings, DayRecord
from hydra_tracker.domain.stats import IntakeProgress, StatsData


class IntakeResponse(BaseModel):
    """Today's intake progress."""

    date: str
    count: int
    goal: int
    progress: float
    goal_reached: bool

    @classmethod
    def from_progress(cls, progress: IntakeProgress) -> "IntakeResponse":
        return cls(
            date=progress.date,
            count=progress.count,
            goal=progress.goal,
            progress=progress.progress,
            goal_reached=progress.goal_reached,
        )


class DayRecordResponse(BaseModel):
    """One day of history."""

    date: str
    count: int
    goal: int
    goal_met: bool

    @classmethod
    def from_record(cls, record: DayRecord) -> "DayRecordResponse":
        return cls(
            date=record.date,
            count=record.count,
            goal=record.goal,
            goal_met=record.goal_met,
        )


class StatsResponse(BaseModel):
    """Streak, lifetime and weekly statistics."""

    current_streak: int
    total_goal_days: int
    weekly_goal_days: int
    weekly_data: list[DayRecordResponse]

    @classmethod
    def from_stats(cls, stats: StatsData) -> "StatsResponse":
        return cls(
            current_streak=stats.current_streak,
            total_goal_days=stats.total_goal_days,
            weekly_goal_days=stats.weekly_goal_days,
            weekly_data=[DayRecordResponse.from_record(r) for r in stats.weekly_data],
        )


class SettingsResponse(BaseModel):
    """Current app settings."""

    daily_goal: int
    notifications_enabled: bool

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "SettingsResponse":
        return cls(
            daily_goal=settings.daily_goal,
            notifications_enabled=settings.notifications_enabled,
        )


class GoalUpdate(BaseModel):
    """Proposed daily goal."""

    goal: int


class GoalStep(BaseModel):
    """Stepper direction for the daily goal."""

    increase: bool


class NotificationsUpdate(BaseModel):
    """Reminders toggle."""

    enabled: bool


class NotificationsResponse(BaseModel):
    """Outcome of a reminders toggle."""

    enabled: bool
    permission_granted: bool
