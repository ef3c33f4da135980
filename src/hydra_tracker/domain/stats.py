"""Domain models for statistics."""

from dataclasses import dataclass

from hydra_tracker.domain.models import DayRecord


@dataclass(frozen=True)
class StatsData:
    """Derived statistics over the history ledger."""

    current_streak: int
    total_goal_days: int
    weekly_data: list[DayRecord]

    @property
    def weekly_goal_days(self) -> int:
        """Return how many days in the weekly window met their goal."""
        return sum(1 for record in self.weekly_data if record.goal_met)


@dataclass(frozen=True)
class IntakeProgress:
    """Today's count against the active goal."""

    date: str
    count: int
    goal: int

    @property
    def progress(self) -> float:
        """Return the completed fraction of the goal."""
        return self.count / self.goal if self.goal > 0 else 0

    @property
    def goal_reached(self) -> bool:
        """Return True once today's count has reached the goal."""
        return self.count >= self.goal
