"""Tests for container wiring."""

import asyncio
from pathlib import Path

import pytest

from hydra_tracker.adapters.json_file_store import JsonFileKeyValueStore
from hydra_tracker.containers import build_container, build_store


def test_build_container_creates_services(settings, tmp_path: Path) -> None:
    settings.storage_path = str(tmp_path / "hydra.json")
    container = build_container(settings)

    assert isinstance(container.store, JsonFileKeyValueStore)
    assert container.daily_counter.increment().count == 1
    assert container.stats_service.compute_stats(8).weekly_data[-1].count == 1
    asyncio.run(container.close_resources())


def test_build_store_rejects_incomplete_supabase_settings(settings) -> None:
    settings.storage_backend = "supabase"

    with pytest.raises(ValueError):
        build_store(settings)


def test_build_store_rejects_unknown_backend(settings) -> None:
    settings.storage_backend = "redis"

    with pytest.raises(ValueError):
        build_store(settings)
