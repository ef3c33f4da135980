"""Tests for the history ledger."""

import json

from hydra_tracker.domain.models import DayRecord, StorageKeys
from hydra_tracker.services.history import HistoryLedger
from tests.conftest import InMemoryKeyValueStore


def _ledger(store: InMemoryKeyValueStore | None = None) -> HistoryLedger:
    return HistoryLedger(store or InMemoryKeyValueStore(), StorageKeys())


def test_upsert_derives_goal_met() -> None:
    ledger = _ledger()

    ledger.upsert("2026-10-18", 7, 8)
    assert ledger.get("2026-10-18") == DayRecord("2026-10-18", 7, 8, False)

    ledger.upsert("2026-10-18", 8, 8)
    assert ledger.get("2026-10-18") == DayRecord("2026-10-18", 8, 8, True)


def test_upsert_is_idempotent() -> None:
    store = InMemoryKeyValueStore()
    ledger = _ledger(store)
    ledger.upsert("2026-10-17", 8, 8)

    ledger.upsert("2026-10-18", 3, 8)
    first = store.values["@hydra_history"]
    ledger.upsert("2026-10-18", 3, 8)

    assert store.values["@hydra_history"] == first


def test_upsert_keeps_other_days() -> None:
    ledger = _ledger()
    ledger.upsert("2026-10-16", 8, 8)
    ledger.upsert("2026-10-17", 2, 8)

    ledger.upsert("2026-10-18", 1, 8)

    assert set(ledger.all()) == {"2026-10-16", "2026-10-17", "2026-10-18"}
    assert ledger.get("2026-10-16") == DayRecord("2026-10-16", 8, 8, True)


def test_persisted_layout_uses_goal_met_camel_case() -> None:
    store = InMemoryKeyValueStore()
    _ledger(store).upsert("2026-10-18", 8, 8)

    payload = json.loads(store.values["@hydra_history"])

    assert payload == {
        "2026-10-18": {"date": "2026-10-18", "count": 8, "goal": 8, "goalMet": True}
    }


def test_get_missing_day_returns_none() -> None:
    assert _ledger().get("2026-10-18") is None


def test_malformed_history_reads_as_empty() -> None:
    store = InMemoryKeyValueStore(values={"@hydra_history": "{not json"})

    assert _ledger(store).all() == {}


def test_malformed_entry_is_skipped() -> None:
    store = InMemoryKeyValueStore(
        values={
            "@hydra_history": json.dumps(
                {
                    "2026-10-17": {"count": "many", "goal": 8},
                    "2026-10-18": {"count": 4, "goal": 8, "goalMet": False},
                }
            )
        }
    )

    assert list(_ledger(store).all()) == ["2026-10-18"]


def test_read_failure_reads_as_empty_and_skips_write() -> None:
    store = InMemoryKeyValueStore(
        values={"@hydra_history": json.dumps({"2026-10-17": {"count": 8, "goal": 8}})}
    )
    ledger = _ledger(store)
    store.fail_reads = True

    assert ledger.all() == {}
    record = ledger.upsert("2026-10-18", 1, 8)

    assert record == DayRecord("2026-10-18", 1, 8, False)
    assert store.writes == []
    store.fail_reads = False
    assert ledger.get("2026-10-17") == DayRecord("2026-10-17", 8, 8, True)


def test_write_failure_does_not_raise() -> None:
    store = InMemoryKeyValueStore(fail_writes=True)

    record = _ledger(store).upsert("2026-10-18", 2, 8)

    assert record.count == 2
    assert "@hydra_history" not in store.values
