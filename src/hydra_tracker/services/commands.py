"""Command handlers for Telegram updates."""

from dataclasses import dataclass

from hydra_tracker.adapters.telegram_client import TelegramClient
from hydra_tracker.domain.dates import parse_calendar_date
from hydra_tracker.domain.stats import IntakeProgress, StatsData
from hydra_tracker.services.app_settings import AppSettingsService
from hydra_tracker.services.intake import DailyCounterService
from hydra_tracker.services.reminders import ReminderService
from hydra_tracker.services.stats import StatsService
from hydra_tracker.telegram_commands import BotCommand


@dataclass
class BotCommandHandler:
    """Handle bot commands and reply in the originating chat."""

    daily_counter: DailyCounterService
    stats_service: StatsService
    app_settings_service: AppSettingsService
    reminder_service: ReminderService
    telegram_client: TelegramClient

    async def handle(self, command: BotCommand, argument: str, chat_id: int) -> None:
        """Run a command and send its reply."""
        reply = await self.reply_for(command, argument)
        await self.telegram_client.send_message(chat_id=chat_id, text=reply)

    async def reply_for(self, command: BotCommand, argument: str) -> str:  # noqa: PLR0911
        """Return the reply text for a command."""
        if command is BotCommand.START:
            progress = self.daily_counter.get_progress()
            return "Welcome to Hydra! Send /drink after every glass.\n" + format_progress(
                progress
            )
        if command is BotCommand.DRINK:
            return self._drink()
        if command is BotCommand.TODAY:
            return format_progress(self.daily_counter.get_progress())
        if command is BotCommand.STATS:
            goal = self.app_settings_service.get_daily_goal()
            return format_stats(self.stats_service.compute_stats(goal))
        if command is BotCommand.GOAL:
            return self._goal(argument)
        if command is BotCommand.REMINDERS:
            return await self._reminders(argument)
        return format_help()

    def _drink(self) -> str:
        before = self.daily_counter.get_progress()
        if before.goal_reached:
            return f"You already reached today's goal of {before.goal} glasses. 🎉"
        self.daily_counter.increment()
        return format_progress(self.daily_counter.get_progress())

    def _goal(self, argument: str) -> str:
        service = self.app_settings_service
        if not argument:
            return (
                f"Daily goal: {service.get_daily_goal()} glasses "
                f"(allowed {service.min_daily_goal}-{service.max_daily_goal})."
            )
        try:
            proposed = int(argument)
        except ValueError:
            return "Usage: /goal 10"
        goal = self.daily_counter.set_goal(proposed)
        return f"Daily goal set to {goal} glasses."

    async def _reminders(self, argument: str) -> str:
        choice = argument.lower()
        if choice == "on":
            if await self.reminder_service.enable():
                return "Reminders enabled. You'll get gentle nudges through the day."
            return "Reminders need a chat configured before they can be enabled."
        if choice == "off":
            await self.reminder_service.disable()
            return "Reminders disabled."
        enabled = self.app_settings_service.get_notifications_enabled()
        state = "on" if enabled else "off"
        return f"Reminders are {state}. Usage: /reminders on|off"


def format_progress(progress: IntakeProgress) -> str:
    """Format today's progress for chat."""
    percent = round(progress.progress * 100)
    text = f"Today: {progress.count}/{progress.goal} glasses ({percent}%)"
    if progress.goal_reached:
        text += "\nGoal reached! 🎉"
    return text


def format_stats(stats: StatsData) -> str:
    """Format the stats summary with the weekly window."""
    lines = [
        f"Current streak: {stats.current_streak} days",
        f"Goal days (all time): {stats.total_goal_days}",
        f"This week: {stats.weekly_goal_days}/{len(stats.weekly_data)}",
        "",
    ]
    for record in stats.weekly_data:
        label = parse_calendar_date(record.date).strftime("%a %m-%d")
        mark = " ✓" if record.goal_met else ""
        lines.append(f"{label}: {record.count}/{record.goal}{mark}")
    return "\n".join(lines)


def format_help() -> str:
    """Return the command guide."""
    lines = ["Hydra commands:"]
    lines.extend(
        f"/{entry.value.command} - {entry.value.description}" for entry in BotCommand
    )
    return "\n".join(lines)
