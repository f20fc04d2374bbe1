from __future__ import annotations

"""Interactive menu loop for the currency converter."""

from typing import Callable, Dict, Optional

from currency_converter.core.rates import RateTable
from currency_converter.core.session import SessionState
from currency_converter.utils.logging import get_logger

from .config import (
    CHOICE_PROMPT,
    DESTINATION_PROMPT,
    GOODBYE_MESSAGE,
    INVALID_OPTION_MESSAGE,
    SOURCE_PROMPT,
    THEME,
    MenuAction,
)
from .display import (
    create_currency_grid,
    create_history_panel,
    create_menu_table,
    create_rates_table,
    create_result_panel,
    create_state_table,
    create_welcome_panel,
)
from .input_handler import InputChannel, parse_choice, pause, prompt_amount, prompt_currency

logger = get_logger(__name__)

Action = Callable[[SessionState], SessionState]


class ConverterTUI:
    """Terminal user interface driving one conversion session."""

    def __init__(
        self,
        rates: RateTable,
        channel: InputChannel,
        app_name: str = "Currency Converter",
        clear_screen: bool = True,
        currency_columns: int = 6,
    ) -> None:
        self.rates = rates
        self.channel = channel
        self.console = channel.console
        self.app_name = app_name
        self.clear_screen = clear_screen
        self.currency_columns = currency_columns
        self._actions: Dict[MenuAction, Action] = {
            MenuAction.LIST_CURRENCIES: self.list_currencies,
            MenuAction.LIST_RATES: self.list_rates,
            MenuAction.SET_SOURCE: self.set_source,
            MenuAction.SET_DESTINATION: self.set_destination,
            MenuAction.CONVERT: self.convert,
            MenuAction.VIEW_HISTORY: self.view_history,
        }

    def run(self, session: Optional[SessionState] = None) -> SessionState:
        """Main entry point. Returns the final session state on exit."""
        session = session or SessionState()
        self.console.print(create_welcome_panel(self.app_name, self.rates))

        try:
            while True:
                self._show_menu(session)
                choice = parse_choice(self.channel.ask(CHOICE_PROMPT))

                if choice is MenuAction.EXIT:
                    self.console.print(f"\n[bold {THEME.success}]{GOODBYE_MESSAGE}[/]")
                    break

                if choice is None:
                    self.console.print(f"\n[{THEME.warning}]{INVALID_OPTION_MESSAGE}[/]")
                else:
                    logger.debug(f"Menu action {choice.name}")
                    session = self._actions[choice](session)

                pause(self.channel)
        except (EOFError, KeyboardInterrupt):
            self.console.print(f"\n\n[{THEME.warning}]Input closed. Goodbye![/]")

        logger.info(f"Session ended after {len(session.list_history())} conversions")
        return session

    def _show_menu(self, session: SessionState) -> None:
        if self.clear_screen:
            self.console.clear()
        self.console.print(create_state_table(session))
        self.console.print(create_menu_table(self.rates.base_currency))

    # Actions -------------------------------------------------------------

    def list_currencies(self, session: SessionState) -> SessionState:
        self.console.print(create_currency_grid(self.rates, self.currency_columns))
        return session

    def list_rates(self, session: SessionState) -> SessionState:
        self.console.print(create_rates_table(self.rates))
        return session

    def set_source(self, session: SessionState) -> SessionState:
        session.set_source(prompt_currency(self.channel, self.rates, SOURCE_PROMPT))
        return session

    def set_destination(self, session: SessionState) -> SessionState:
        session.set_destination(prompt_currency(self.channel, self.rates, DESTINATION_PROMPT))
        return session

    def convert(self, session: SessionState) -> SessionState:
        session.set_amount(prompt_amount(self.channel))
        result = session.convert(self.rates)
        if result.ok:
            logger.info(f"Converted {result.entry}")
        self.console.print(create_result_panel(result))
        return session

    def view_history(self, session: SessionState) -> SessionState:
        self.console.print(create_history_panel(session.list_history()))
        return session
