"""Tests for Telegram command definitions."""

from hydra_tracker.telegram_commands import BotCommand, telegram_commands


def test_telegram_commands_include_drink() -> None:
    commands = telegram_commands()

    assert {"command": "drink", "description": "Log one glass of water"} in commands
    assert len(commands) == len(list(BotCommand))


def test_parse_command_with_argument_and_bot_suffix() -> None:
    assert BotCommand.parse("/goal 12") == (BotCommand.GOAL, "12")
    assert BotCommand.parse("/Drink@HydraBot") == (BotCommand.DRINK, "")


def test_parse_rejects_plain_text_and_unknown_commands() -> None:
    assert BotCommand.parse("drink") is None
    assert BotCommand.parse("/unknown") is None
