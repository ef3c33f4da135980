"""Shared test fixtures."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, time, tzinfo

import pytest

from hydra_tracker.adapters.telegram_client import TelegramClient
from hydra_tracker.config import Settings
from hydra_tracker.containers import AppContainer
from hydra_tracker.domain.models import StorageKeys
from hydra_tracker.services.app_settings import AppSettingsService
from hydra_tracker.services.clock import Clock
from hydra_tracker.services.commands import BotCommandHandler
from hydra_tracker.services.history import HistoryLedger
from hydra_tracker.services.intake import DailyCounterService
from hydra_tracker.services.reminders import ReminderScheduler, ReminderService
from hydra_tracker.services.session import SessionController
from hydra_tracker.services.stats import StatsService
from hydra_tracker.services.storage import KeyValueStore, StorageError


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store with switchable failures for tests."""

    values: dict[str, str] = field(default_factory=dict)
    fail_reads: bool = False
    fail_writes: bool = False
    writes: list[tuple[str, str]] = field(default_factory=list)

    def get_string(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError("read failed")
        return self.values.get(key)

    def set_string(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("write failed")
        self.values[key] = value
        self.writes.append((key, value))


@dataclass
class FrozenTime:
    """Settable time source for Clock."""

    moment: datetime

    def __call__(self, tz: tzinfo | None) -> datetime:
        return self.moment


@dataclass
class FakeTelegramClient(TelegramClient):
    """Fake Telegram client that records messages."""

    messages: list[tuple[int, str]] = field(default_factory=list)
    commands: list[dict[str, str]] | None = None
    menu_button: dict[str, object] | None = None
    send_error: Exception | None = None

    async def send_message(self, chat_id: int, text: str) -> None:
        self.messages.append((chat_id, text))
        if self.send_error is not None:
            raise self.send_error

    async def set_my_commands(self, commands: list[dict[str, str]]) -> None:
        self.commands = commands

    async def set_chat_menu_button(
        self, menu_button: dict[str, object] | None = None
    ) -> None:
        self.menu_button = menu_button


@dataclass
class FakeReminderScheduler(ReminderScheduler):
    """Fake scheduler recording schedule calls."""

    granted: bool = True
    scheduled: list[time] | None = None
    cancel_count: int = 0

    async def request_permission(self) -> bool:
        return self.granted

    async def schedule_daily(self, times: Sequence[time]) -> None:
        self.scheduled = list(times)

    async def cancel_all(self) -> None:
        self.scheduled = None
        self.cancel_count += 1


@dataclass
class Services:
    """Core services wired over one in-memory store."""

    store: InMemoryKeyValueStore
    frozen_time: FrozenTime
    clock: Clock
    keys: StorageKeys
    ledger: HistoryLedger
    app_settings: AppSettingsService
    daily_counter: DailyCounterService
    stats: StatsService


def build_services(
    moment: datetime, store: InMemoryKeyValueStore | None = None
) -> Services:
    resolved_store = store or InMemoryKeyValueStore()
    frozen_time = FrozenTime(moment)
    clock = Clock(now=frozen_time)
    keys = StorageKeys()
    ledger = HistoryLedger(resolved_store, keys)
    app_settings = AppSettingsService(resolved_store, keys)
    daily_counter = DailyCounterService(
        store=resolved_store,
        keys=keys,
        ledger=ledger,
        settings=app_settings,
        clock=clock,
    )
    return Services(
        store=resolved_store,
        frozen_time=frozen_time,
        clock=clock,
        keys=keys,
        ledger=ledger,
        app_settings=app_settings,
        daily_counter=daily_counter,
        stats=StatsService(ledger, clock),
    )


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 18, 10, 30)


@pytest.fixture
def services(now: datetime) -> Services:
    return build_services(now)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        admin_token="admin-token",
        telegram_bot_token="test-token",
        telegram_chat_id=99,
    )


@pytest.fixture
def telegram_client() -> FakeTelegramClient:
    return FakeTelegramClient()


@pytest.fixture
def reminder_scheduler() -> FakeReminderScheduler:
    return FakeReminderScheduler()


@pytest.fixture
def container(
    settings: Settings,
    services: Services,
    telegram_client: FakeTelegramClient,
    reminder_scheduler: FakeReminderScheduler,
) -> AppContainer:
    reminder_service = ReminderService(services.app_settings, reminder_scheduler)
    session_controller = SessionController(
        services.daily_counter, check_interval_seconds=3600
    )
    command_handler = BotCommandHandler(
        daily_counter=services.daily_counter,
        stats_service=services.stats,
        app_settings_service=services.app_settings,
        reminder_service=reminder_service,
        telegram_client=telegram_client,
    )

    async def close_resources() -> None:
        await session_controller.stop()

    return AppContainer(
        settings=settings,
        store=services.store,
        clock=services.clock,
        telegram_client=telegram_client,
        history_ledger=services.ledger,
        app_settings_service=services.app_settings,
        daily_counter=services.daily_counter,
        stats_service=services.stats,
        reminder_service=reminder_service,
        session_controller=session_controller,
        command_handler=command_handler,
        close_resources=close_resources,
    )
