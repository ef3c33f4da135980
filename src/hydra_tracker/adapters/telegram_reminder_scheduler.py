"""Reminder scheduler that delivers reminders as Telegram messages."""

import asyncio
import contextlib
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import time, timedelta

from hydra_tracker.adapters.telegram_client import TelegramClient
from hydra_tracker.services.clock import Clock
from hydra_tracker.services.reminders import REMINDER_MESSAGES, next_reminder

_logger = logging.getLogger(__name__)

# Keeps an early wakeup from selecting the reminder that just fired.
_WAKEUP_SLACK = timedelta(seconds=1)


@dataclass
class TelegramReminderScheduler:
    """Sends daily reminders to a single configured chat."""

    telegram_client: TelegramClient
    chat_id: int | None
    clock: Clock
    messages: tuple[str, ...] = REMINDER_MESSAGES
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)

    @property
    def is_scheduled(self) -> bool:
        """Return True while a reminder loop is running."""
        return self._task is not None and not self._task.done()

    async def request_permission(self) -> bool:
        """Reminders are permitted once a target chat is configured."""
        return self.chat_id is not None

    async def schedule_daily(self, times: Sequence[time]) -> None:
        """Start a reminder loop for the given times, replacing any prior loop."""
        await self.cancel_all()
        if self.chat_id is None or not times:
            _logger.warning("No reminder chat or times configured, nothing scheduled")
            return
        self._task = asyncio.create_task(self._run(list(times), self.chat_id))
        _logger.info("Reminders scheduled: times=%s", [t.isoformat() for t in times])

    async def cancel_all(self) -> None:
        """Stop the reminder loop if one is running."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        _logger.info("All reminders cancelled")

    async def _run(self, times: list[time], chat_id: int) -> None:
        while True:
            now = self.clock.current_datetime()
            index, delay = next_reminder(now + _WAKEUP_SLACK, times)
            await asyncio.sleep(delay + _WAKEUP_SLACK.total_seconds())
            message = self.messages[index % len(self.messages)]
            try:
                await self.telegram_client.send_message(chat_id=chat_id, text=message)
            except Exception:
                _logger.exception("Failed to send reminder", extra={"chat_id": chat_id})
