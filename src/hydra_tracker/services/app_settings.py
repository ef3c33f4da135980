"""Daily goal and reminder flag settings."""

import logging
from dataclasses import dataclass

from hydra_tracker.domain.models import AppSettings, StorageKeys
from hydra_tracker.services.storage import KeyValueStore, StorageError

_logger = logging.getLogger(__name__)

DEFAULT_DAILY_GOAL = 8


@dataclass
class AppSettingsService:
    """Service for reading and updating app settings."""

    store: KeyValueStore
    keys: StorageKeys
    default_daily_goal: int = DEFAULT_DAILY_GOAL
    min_daily_goal: int = 1
    max_daily_goal: int = 20

    def get_daily_goal(self) -> int:
        """Return the persisted daily goal or the default when unset or invalid."""
        try:
            raw = self.store.get_string(self.keys.daily_goal)
        except StorageError:
            _logger.warning("Failed to read daily goal", exc_info=True)
            return self.default_daily_goal
        if raw is None:
            return self.default_daily_goal
        try:
            goal = int(raw.strip())
        except ValueError:
            _logger.warning("Malformed daily goal value: %r", raw)
            return self.default_daily_goal
        if goal <= 0:
            return self.default_daily_goal
        return self._clamp(goal)

    def set_goal(self, proposed: int) -> int:
        """Clamp and persist a new goal, skipping the write when unchanged."""
        goal = self._clamp(proposed)
        if goal == self.get_daily_goal():
            return goal
        try:
            self.store.set_string(self.keys.daily_goal, str(goal))
        except StorageError:
            _logger.warning("Failed to save daily goal: goal=%s", goal, exc_info=True)
        return goal

    def step_goal(self, increase: bool) -> int:
        """Move the goal one step up or down within the allowed range."""
        current = self.get_daily_goal()
        return self.set_goal(current + 1 if increase else current - 1)

    def get_notifications_enabled(self) -> bool:
        """Return True when reminders are enabled."""
        try:
            return self.store.get_string(self.keys.notifications_enabled) == "true"
        except StorageError:
            _logger.warning("Failed to read notifications flag", exc_info=True)
            return False

    def set_notifications_enabled(self, enabled: bool) -> None:
        """Persist the reminders flag."""
        try:
            self.store.set_string(
                self.keys.notifications_enabled, "true" if enabled else "false"
            )
        except StorageError:
            _logger.warning(
                "Failed to save notifications flag: enabled=%s", enabled, exc_info=True
            )

    def get_app_settings(self) -> AppSettings:
        """Return all settings in one object."""
        return AppSettings(
            daily_goal=self.get_daily_goal(),
            notifications_enabled=self.get_notifications_enabled(),
        )

    def _clamp(self, goal: int) -> int:
        return max(self.min_daily_goal, min(goal, self.max_daily_goal))
