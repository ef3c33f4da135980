"""History ledger of one record per calendar day."""

import json
import logging
from dataclasses import dataclass

from hydra_tracker.domain.models import CalendarDate, DayRecord, StorageKeys
from hydra_tracker.services.storage import KeyValueStore, StorageError

_logger = logging.getLogger(__name__)


@dataclass
class HistoryLedger:
    """Upsert-only ledger persisted as one JSON mapping under the history key."""

    store: KeyValueStore
    keys: StorageKeys

    def get(self, day: CalendarDate) -> DayRecord | None:
        """Return the record for a day, if one exists."""
        return self.all().get(day)

    def all(self) -> dict[CalendarDate, DayRecord]:
        """Return every readable record keyed by date.

        Read failures and malformed payloads degrade to an empty ledger;
        individual malformed entries are skipped.
        """
        try:
            raw = self._read_raw()
        except StorageError:
            _logger.warning("Failed to read history", exc_info=True)
            return {}
        records: dict[CalendarDate, DayRecord] = {}
        for day, payload in raw.items():
            record = _parse_record(day, payload)
            if record is None:
                _logger.warning("Skipping malformed history entry: date=%s", day)
                continue
            records[day] = record
        return records

    def upsert(self, day: CalendarDate, count: int, goal: int) -> DayRecord:
        """Set the record for a day, replacing any previous entry."""
        record = DayRecord.build(day, count, goal)
        try:
            raw = self._read_raw()
        except StorageError:
            # Writing now would replace persisted days with a partial mapping.
            _logger.warning(
                "Skipping history write after failed read: date=%s",
                day,
                exc_info=True,
            )
            return record
        raw[day] = _serialize_record(record)
        try:
            self.store.set_string(self.keys.history, json.dumps(raw))
        except StorageError:
            _logger.warning("Failed to save history: date=%s", day, exc_info=True)
        return record

    def _read_raw(self) -> dict[str, object]:
        text = self.store.get_string(self.keys.history)
        if not text:
            return {}
        try:
            data = json.loads(text)
        except ValueError:
            _logger.warning("Malformed history payload, starting from empty")
            return {}
        if not isinstance(data, dict):
            _logger.warning("Unexpected history payload type: %s", type(data).__name__)
            return {}
        return data


def _serialize_record(record: DayRecord) -> dict[str, object]:
    return {
        "date": record.date,
        "count": record.count,
        "goal": record.goal,
        "goalMet": record.goal_met,
    }


def _parse_record(day: str, payload: object) -> DayRecord | None:
    if not isinstance(payload, dict):
        return None
    count = payload.get("count")
    goal = payload.get("goal")
    if not is_int(count) or not is_int(goal):
        return None
    goal_met = payload.get("goalMet")
    if not isinstance(goal_met, bool):
        goal_met = count >= goal
    return DayRecord(date=day, count=count, goal=goal, goal_met=goal_met)


def is_int(value: object) -> bool:
    """Return True for integers, excluding booleans."""
    return isinstance(value, int) and not isinstance(value, bool)
