"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from hydra_tracker.api.admin import router as admin_router
from hydra_tracker.api.schemas import (
    GoalStep,
    GoalUpdate,
    IntakeResponse,
    NotificationsResponse,
    NotificationsUpdate,
    SettingsResponse,
    StatsResponse,
)
from hydra_tracker.api.telegram_models import TelegramUpdate
from hydra_tracker.app_logging import configure_logging
from hydra_tracker.config import parse_allowed_user_ids
from hydra_tracker.containers import AppContainer
from hydra_tracker.telegram_commands import (
    CHAT_MENU_BUTTON,
    BotCommand,
    telegram_commands,
)


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    allowed_user_ids = parse_allowed_user_ids(
        container.settings.telegram_allowed_user_ids
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        await state_container.session_controller.start()
        try:
            await state_container.reminder_service.restore()
        except Exception:
            logger.exception("Failed to restore reminders")
        try:
            await state_container.telegram_client.set_my_commands(telegram_commands())
            await state_container.telegram_client.set_chat_menu_button(
                CHAT_MENU_BUTTON
            )
        except Exception:
            logger.exception("Failed to sync Telegram bot commands")
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/intake")
    async def get_intake(request: Request) -> IntakeResponse:
        """Return today's count, checking for a day rollover first."""
        state_container: AppContainer = request.app.state.container
        progress = state_container.daily_counter.get_progress()
        return IntakeResponse.from_progress(progress)

    @app.post("/intake/drink")
    async def log_drink(request: Request) -> IntakeResponse:
        """Log one drink and return the updated progress."""
        state_container: AppContainer = request.app.state.container
        state = state_container.daily_counter.increment()
        logger.info("Drink logged: date=%s count=%s", state.date, state.count)
        progress = state_container.daily_counter.get_progress()
        return IntakeResponse.from_progress(progress)

    @app.post("/session/focus")
    async def session_focus(request: Request) -> IntakeResponse:
        """Re-check the day when a client comes back to the foreground."""
        state_container: AppContainer = request.app.state.container
        state_container.session_controller.on_focus()
        progress = state_container.daily_counter.get_progress()
        return IntakeResponse.from_progress(progress)

    @app.get("/stats")
    async def get_stats(request: Request) -> StatsResponse:
        """Return streak, lifetime goal days and the weekly window."""
        state_container: AppContainer = request.app.state.container
        goal = state_container.app_settings_service.get_daily_goal()
        stats = state_container.stats_service.compute_stats(goal)
        return StatsResponse.from_stats(stats)

    @app.get("/settings")
    async def get_settings(request: Request) -> SettingsResponse:
        """Return the current settings."""
        state_container: AppContainer = request.app.state.container
        settings = state_container.app_settings_service.get_app_settings()
        return SettingsResponse.from_settings(settings)

    @app.put("/settings/goal")
    async def update_goal(payload: GoalUpdate, request: Request) -> SettingsResponse:
        """Set the daily goal, clamped to the allowed range."""
        state_container: AppContainer = request.app.state.container
        state_container.daily_counter.set_goal(payload.goal)
        settings = state_container.app_settings_service.get_app_settings()
        return SettingsResponse.from_settings(settings)

    @app.post("/settings/goal/step")
    async def step_goal(payload: GoalStep, request: Request) -> SettingsResponse:
        """Move the daily goal one step up or down."""
        state_container: AppContainer = request.app.state.container
        state_container.daily_counter.step_goal(payload.increase)
        settings = state_container.app_settings_service.get_app_settings()
        return SettingsResponse.from_settings(settings)

    @app.put("/settings/notifications")
    async def update_notifications(
        payload: NotificationsUpdate, request: Request
    ) -> NotificationsResponse:
        """Enable or disable hydration reminders."""
        state_container: AppContainer = request.app.state.container
        enabled = await state_container.reminder_service.set_enabled(payload.enabled)
        return NotificationsResponse(
            enabled=enabled,
            permission_granted=enabled or not payload.enabled,
        )

    @app.post("/telegram/webhook")
    async def telegram_webhook(
        update: TelegramUpdate, request: Request
    ) -> dict[str, str]:
        """Handle Telegram webhook updates."""
        state_container: AppContainer = request.app.state.container
        message = update.message
        if message is None or not message.text:
            return {"status": "ok"}
        chat_id = message.chat.id
        if not _is_user_allowed(message.from_user.id, allowed_user_ids):
            await state_container.telegram_client.send_message(
                chat_id=chat_id,
                text="This bot is private.",
            )
            return {"status": "ok"}
        parsed = BotCommand.parse(message.text.strip())
        if parsed is None:
            await state_container.telegram_client.send_message(
                chat_id=chat_id,
                text="Send /drink to log a glass or /help for all commands.",
            )
            return {"status": "ok"}
        command, argument = parsed
        try:
            await state_container.command_handler.handle(command, argument, chat_id)
        except Exception:
            logger.exception(
                "Failed to handle command",
                extra={"command": command.value.command},
            )
        return {"status": "ok"}

    return app


def _is_user_allowed(user_id: int, allowed: set[int] | None) -> bool:
    if allowed is None:
        return True
    return user_id in allowed
