"""Daily water intake counter."""

import json
import logging
from dataclasses import dataclass, field

from hydra_tracker.domain.models import DailyIntakeState, StorageKeys
from hydra_tracker.domain.stats import IntakeProgress
from hydra_tracker.services.app_settings import AppSettingsService
from hydra_tracker.services.clock import Clock
from hydra_tracker.services.history import HistoryLedger, is_int
from hydra_tracker.services.storage import KeyValueStore, StorageError

_logger = logging.getLogger(__name__)


@dataclass
class DailyCounterService:
    """Tracks today's drink count as a projection of the history ledger.

    The intake key is a write-through cache of today's count and doubles as
    the rollover marker: when its date is not today the counter starts over.
    """

    store: KeyValueStore
    keys: StorageKeys
    ledger: HistoryLedger
    settings: AppSettingsService
    clock: Clock
    _state: DailyIntakeState | None = field(default=None, init=False, repr=False)

    def load(self) -> DailyIntakeState:
        """Return today's state, resetting it when the stored day has passed."""
        today = self.clock.today()
        try:
            stored = self._read_state()
        except StorageError:
            _logger.warning("Failed to read water intake", exc_info=True)
            if self._state is None or self._state.date != today:
                self._state = DailyIntakeState(count=0, date=today)
            return self._state

        record = self.ledger.get(today)
        if record is not None:
            state = DailyIntakeState(count=record.count, date=today)
            if stored != state:
                self._write_state(state)
        elif stored is None:
            state = DailyIntakeState(count=0, date=today)
        elif stored.date != today:
            _logger.info("Day rollover: previous_date=%s date=%s", stored.date, today)
            return self.reset()
        else:
            state = stored
        self._state = state
        return state

    def increment(self) -> DailyIntakeState:
        """Log one drink, clamped to the daily goal."""
        current = self.load()
        goal = self.settings.get_daily_goal()
        if current.count >= goal:
            return current
        state = DailyIntakeState(count=current.count + 1, date=current.date)
        self.ledger.upsert(state.date, state.count, goal)
        self._write_state(state)
        self._state = state
        return state

    def set_goal(self, proposed: int) -> int:
        """Persist a new goal and re-evaluate today's record against it."""
        goal = self.settings.set_goal(proposed)
        self._sync_today_goal(goal)
        return goal

    def step_goal(self, increase: bool) -> int:
        """Move the goal one step and re-evaluate today's record against it."""
        goal = self.settings.step_goal(increase)
        self._sync_today_goal(goal)
        return goal

        return state

    def reset(self) -> DailyIntakeState:
        """Force today's count back to zero."""
        today = self.clock.today()
        record = self.ledger.get(today)
        if record is not None and record.count > 0:
            self.ledger.upsert(today, 0, record.goal)
        state = DailyIntakeState(count=0, date=today)
        self._write_state(state)
        self._state = state
        return state

    def get_progress(self) -> IntakeProgress:
        """Return today's count with the active goal."""
        state = self.load()
        return IntakeProgress(
            date=state.date,
            count=state.count,
            goal=self.settings.get_daily_goal(),
        )

    def _sync_today_goal(self, goal: int) -> None:
        today = self.clock.today()
        record = self.ledger.get(today)
        if record is not None and record.goal != goal:
            self.ledger.upsert(today, record.count, goal)

    def _read_state(self) -> DailyIntakeState | None:
        text = self.store.get_string(self.keys.water_intake)
        if not text:
            return None
        try:
            payload = json.loads(text)
            count = payload["count"]
            day = payload["date"]
        except (ValueError, TypeError, KeyError):
            _logger.warning("Malformed water intake payload: %r", text)
            return None
        if not is_int(count) or not isinstance(day, str) or count < 0:
            _logger.warning("Malformed water intake payload: %r", text)
            return None
        return DailyIntakeState(count=count, date=day)

    def _write_state(self, state: DailyIntakeState) -> None:
        payload = json.dumps({"count": state.count, "date": state.date})
        try:
            self.store.set_string(self.keys.water_intake, payload)
        except StorageError:
            _logger.warning(
                "Failed to save water intake: count=%s date=%s",
                state.count,
                state.date,
                exc_info=True,
            )
