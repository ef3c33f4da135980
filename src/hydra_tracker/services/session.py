"""Session lifecycle: day rollover checks on start, focus and a timer."""

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field

from hydra_tracker.domain.models import DailyIntakeState
from hydra_tracker.services.intake import DailyCounterService

_logger = logging.getLogger(__name__)


@dataclass
class SessionController:
    """Owns the periodic rollover check for a running session.

    The timer is a safety net for sessions left open across midnight; it
    runs the same idempotent load as the focus hook, so overlapping checks
    converge on one reset.
    """

    daily_counter: DailyCounterService
    check_interval_seconds: float = 60
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)

    @property
    def is_running(self) -> bool:
        """Return True while the rollover timer is active."""
        return self._task is not None and not self._task.done()

    async def start(self) -> DailyIntakeState:
        """Load today's state and start the rollover timer."""
        state = self.daily_counter.load()
        if not self.is_running:
            self._task = asyncio.create_task(self._run())
        return state

    def on_focus(self) -> DailyIntakeState:
        """Re-check the day when the client regains focus."""
        return self.daily_counter.load()

    async def stop(self) -> None:
        """Cancel the rollover timer."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.check_interval_seconds)
            try:
                self.daily_counter.load()
            except Exception:
                _logger.exception("Rollover check failed")
