"""Hydration reminder settings and scheduling."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Protocol

from hydra_tracker.services.app_settings import AppSettingsService

_logger = logging.getLogger(__name__)

DEFAULT_REMINDER_TIMES: tuple[time, ...] = (
    time(9, 0),
    time(12, 0),
    time(15, 0),
    time(18, 0),
)

REMINDER_MESSAGES: tuple[str, ...] = (
    "Thirsty? 💧",
    "Time for a refill! 🥤",
    "Stay hydrated! 💙",
    "Don't forget to drink water! 💦",
    "Hydration check! 🌊",
)


class ReminderScheduler(Protocol):
    """Interface for delivering daily reminders."""

    async def request_permission(self) -> bool:
        """Return True when reminders may be delivered."""

    async def schedule_daily(self, times: Sequence[time]) -> None:
        """Replace any scheduled reminders with daily ones at the given times."""

    async def cancel_all(self) -> None:
        """Cancel all scheduled reminders."""


@dataclass
class ReminderService:
    """Keeps the persisted reminders flag and the scheduler in agreement."""

    settings: AppSettingsService
    scheduler: ReminderScheduler
    times: tuple[time, ...] = DEFAULT_REMINDER_TIMES

    async def enable(self) -> bool:
        """Enable reminders; return False when permission is denied."""
        if not await self.scheduler.request_permission():
            _logger.info("Reminder permission not granted")
            return False
        self.settings.set_notifications_enabled(True)
        await self.scheduler.schedule_daily(self.times)
        return True

    async def disable(self) -> None:
        """Disable reminders and cancel anything scheduled."""
        self.settings.set_notifications_enabled(False)
        await self.scheduler.cancel_all()

    async def set_enabled(self, enabled: bool) -> bool:
        """Apply a toggle and return whether reminders ended up enabled."""
        if enabled:
            return await self.enable()
        await self.disable()
        return False

    async def restore(self) -> None:
        """Re-schedule reminders at startup when they were left enabled."""
        if not self.settings.get_notifications_enabled():
            return
        if await self.scheduler.request_permission():
            await self.scheduler.schedule_daily(self.times)
        else:
            _logger.warning("Reminders enabled but permission is no longer granted")


def next_reminder(now: datetime, times: Sequence[time]) -> tuple[int, float]:
    """Return the index of the next reminder time and seconds until it."""
    best_index = 0
    best_at: datetime | None = None
    for index, reminder_time in enumerate(times):
        at = datetime.combine(now.date(), reminder_time, tzinfo=now.tzinfo)
        if at <= now:
            at += timedelta(days=1)
        if best_at is None or at < best_at:
            best_index, best_at = index, at
    if best_at is None:
        raise ValueError("at least one reminder time is required")
    return best_index, (best_at - now).total_seconds()
