"""Telegram bot command configuration."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TelegramCommand:
    """Declarative bot command definition."""

    command: str
    description: str


class BotCommand(Enum):
    """Enum of bot commands (single source of truth)."""

    START = TelegramCommand("start", "Welcome and today's progress")
    DRINK = TelegramCommand("drink", "Log one glass of water")
    TODAY = TelegramCommand("today", "Today's count against your goal")
    STATS = TelegramCommand("stats", "Streak, goal days and the last 7 days")
    GOAL = TelegramCommand("goal", "Show or set your daily goal, e.g. /goal 10")
    REMINDERS = TelegramCommand("reminders", "Turn reminders on or off")
    HELP = TelegramCommand("help", "Quick guide")

    @classmethod
    def parse(cls, text: str) -> tuple["BotCommand", str] | None:
        """Return the command and its argument text from a message."""
        if not text.startswith("/"):
            return None
        head, _, rest = text[1:].partition(" ")
        name = head.split("@", 1)[0].lower()
        for entry in cls:
            if entry.value.command == name:
                return entry, rest.strip()
        return None


def telegram_commands() -> list[dict[str, str]]:
    """Return commands formatted for Telegram API."""
    return [
        {"command": entry.value.command, "description": entry.value.description}
        for entry in BotCommand
    ]


CHAT_MENU_BUTTON: dict[str, object] = {"type": "commands"}
