from __future__ import annotations

"""Rich display components for the TUI."""

from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from currency_converter.core.conversion import ConversionResult
from currency_converter.core.rates import RateTable
from currency_converter.core.session import HistoryView, SessionState

from .config import BOX, MENU_LABELS, THEME, WELCOME_TEXT
from .renderer import chunk, format_amount, format_code, format_rate


def create_welcome_panel(app_name: str, rates: RateTable) -> Panel:
    text = WELCOME_TEXT.format(
        app_name=app_name,
        count=len(rates),
        base=rates.base_currency,
        fetched_at=rates.fetched_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
    return Panel(text, title="Welcome", border_style=THEME.primary, box=getattr(box, BOX.welcome))


def create_state_table(session: SessionState) -> Table:
    table = Table(title="Current State", box=box.SIMPLE, show_header=False)
    table.add_column("Field", style=f"{THEME.primary} bold", width=20)
    table.add_column("Value", style=THEME.neutral)
    table.add_row("Source currency", format_code(session.source_currency))
    table.add_row("Destination currency", format_code(session.destination_currency))
    table.add_row("Amount", format_amount(session.pending_amount))
    return table


def create_menu_table(base_currency: str) -> Table:
    table = Table(title="Menu", box=box.SIMPLE, show_header=False)
    table.add_column("Key", style=f"{THEME.primary} bold", justify="right", width=3)
    table.add_column("Action")
    for action, label in MENU_LABELS.items():
        table.add_row(action.value, label.format(base=base_currency))
    return table


def create_currency_grid(rates: RateTable, columns: int = 6) -> Table:
    table = Table(title="Available Currencies", box=None, show_header=False, padding=(0, 2))
    for _ in range(max(columns, 1)):
        table.add_column()
    for row in chunk(rates.codes(), columns):
        table.add_row(*row)
    return table


def create_rates_table(rates: RateTable) -> Table:
    base = rates.base_currency
    table = Table(title=f"Exchange Rates (Base: {base})", box=box.SIMPLE)
    table.add_column("Base", style=THEME.neutral)
    table.add_column("Rate", justify="right", style=THEME.success)
    table.add_column("Currency", style=f"{THEME.primary} bold")
    for code, rate in rates.items():
        table.add_row(f"1 {base} =", format_rate(rate), code)
    return table


def create_result_panel(result: ConversionResult) -> Panel:
    if result.ok:
        return Panel(
            f"[bold]{escape(result.message)}[/]",
            title="Conversion Result",
            border_style=THEME.success,
            box=getattr(box, BOX.panel),
        )
    return create_error_panel(result.message)


def create_history_panel(history: HistoryView) -> Panel:
    style = THEME.primary if history else THEME.warning
    return Panel(
        escape("\n".join(history.render())),
        title="Conversion History (Current Session)",
        border_style=style,
        box=getattr(box, BOX.panel),
    )


def create_error_panel(message: str, title: str = "Error") -> Panel:
    return Panel(
        f"[bold {THEME.error}]{escape(message)}[/]",
        title=title,
        border_style=THEME.error,
        box=getattr(box, BOX.error),
    )
