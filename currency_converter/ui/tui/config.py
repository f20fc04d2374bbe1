from __future__ import annotations

"""TUI configuration, style constants and menu definition."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Theme:
    primary: str = "cyan"
    success: str = "green"
    warning: str = "yellow"
    error: str = "red"
    neutral: str = "white"


@dataclass(frozen=True)
class BoxStyles:
    welcome: str = "DOUBLE"
    panel: str = "ROUNDED"
    error: str = "HEAVY"


THEME = Theme()
BOX = BoxStyles()


class MenuAction(Enum):
    """Menu actions keyed by the number the user types."""

    LIST_CURRENCIES = "1"
    LIST_RATES = "2"
    SET_SOURCE = "3"
    SET_DESTINATION = "4"
    CONVERT = "5"
    VIEW_HISTORY = "6"
    EXIT = "7"


MENU_LABELS = {
    MenuAction.LIST_CURRENCIES: "Show available currencies",
    MenuAction.LIST_RATES: "Show all exchange rates (vs {base})",
    MenuAction.SET_SOURCE: "Set source currency",
    MenuAction.SET_DESTINATION: "Set destination currency",
    MenuAction.CONVERT: "Set amount and convert",
    MenuAction.VIEW_HISTORY: "View this session's conversion history",
    MenuAction.EXIT: "Exit",
}

NOT_SET = "Not set"
INVALID_OPTION_MESSAGE = "Invalid option. Please try again."
GOODBYE_MESSAGE = "Thanks for using the currency converter. Goodbye!"

CHOICE_PROMPT = "Select an option and press Enter: "
SOURCE_PROMPT = "Set source currency (e.g. USD, EUR, AUD): "
DESTINATION_PROMPT = "Set destination currency (e.g. USD, EUR, AUD): "
AMOUNT_PROMPT = "Enter the amount to convert (e.g. 150.75): "
PAUSE_PROMPT = "Press Enter to return to the menu..."

WELCOME_TEXT = (
    """
[bold cyan]{app_name}[/bold cyan]
Exchange rates from freecurrencyapi.com

{count} currencies loaded, base [bold]{base}[/bold], fetched {fetched_at}
    """
    .strip()
)
