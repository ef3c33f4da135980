"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from hydra_tracker.adapters.json_file_store import JsonFileKeyValueStore
from hydra_tracker.adapters.supabase_key_value_store import SupabaseKeyValueStore
from hydra_tracker.adapters.telegram_client import (
    HttpxTelegramClient,
    TelegramClient,
)
from hydra_tracker.adapters.telegram_reminder_scheduler import (
    TelegramReminderScheduler,
)
from hydra_tracker.config import Settings
from hydra_tracker.domain.models import StorageKeys
from hydra_tracker.services.app_settings import AppSettingsService
from hydra_tracker.services.clock import Clock
from hydra_tracker.services.commands import BotCommandHandler
from hydra_tracker.services.history import HistoryLedger
from hydra_tracker.services.intake import DailyCounterService
from hydra_tracker.services.reminders import ReminderService
from hydra_tracker.services.session import SessionController
from hydra_tracker.services.stats import StatsService
from hydra_tracker.services.storage import KeyValueStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    clock: Clock
    telegram_client: TelegramClient
    history_ledger: HistoryLedger
    app_settings_service: AppSettingsService
    daily_counter: DailyCounterService
    stats_service: StatsService
    reminder_service: ReminderService
    session_controller: SessionController
    command_handler: BotCommandHandler
    close_resources: Callable[[], Awaitable[None]]


def build_store(settings: Settings) -> KeyValueStore:
    """Create the key-value store selected by settings."""
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires url and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    if settings.storage_backend == "file":
        return JsonFileKeyValueStore(Path(settings.storage_path))
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


def build_container(
    settings: Settings | None = None, store: KeyValueStore | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_store = store or build_store(resolved_settings)
    keys = StorageKeys()
    clock = Clock(timezone_name=resolved_settings.timezone)
    history_ledger = HistoryLedger(resolved_store, keys)
    app_settings_service = AppSettingsService(
        store=resolved_store,
        keys=keys,
        default_daily_goal=resolved_settings.default_daily_goal,
        min_daily_goal=resolved_settings.min_daily_goal,
        max_daily_goal=resolved_settings.max_daily_goal,
    )
    daily_counter = DailyCounterService(
        store=resolved_store,
        keys=keys,
        ledger=history_ledger,
        settings=app_settings_service,
        clock=clock,
    )
    stats_service = StatsService(history_ledger, clock)
    telegram_client = HttpxTelegramClient.create(resolved_settings.telegram_bot_token)
    reminder_scheduler = TelegramReminderScheduler(
        telegram_client=telegram_client,
        chat_id=resolved_settings.telegram_chat_id,
        clock=clock,
    )
    reminder_service = ReminderService(app_settings_service, reminder_scheduler)
    session_controller = SessionController(
        daily_counter, check_interval_seconds=resolved_settings.rollover_check_seconds
    )
    command_handler = BotCommandHandler(
        daily_counter=daily_counter,
        stats_service=stats_service,
        app_settings_service=app_settings_service,
        reminder_service=reminder_service,
        telegram_client=telegram_client,
    )

    async def close_resources() -> None:
        await session_controller.stop()
        await reminder_scheduler.cancel_all()
        await telegram_client.close()

    return AppContainer(
        settings=resolved_settings,
        store=resolved_store,
        clock=clock,
        telegram_client=telegram_client,
        history_ledger=history_ledger,
        app_settings_service=app_settings_service,
        daily_counter=daily_counter,
        stats_service=stats_service,
        reminder_service=reminder_service,
        session_controller=session_controller,
        command_handler=command_handler,
        close_resources=close_resources,
    )
