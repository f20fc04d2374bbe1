from __future__ import annotations

import asyncio
import uuid
from typing import Optional

import typer
from rich.console import Console

from currency_converter.config import Config, load_config
from currency_converter.core.conversion import convert as convert_amount
from currency_converter.core.rates import RateTable
from currency_converter.providers import get_provider, try_fetch_rates
from currency_converter.ui.tui.app import ConverterTUI
from currency_converter.ui.tui.display import create_error_panel, create_rates_table, create_result_panel
from currency_converter.ui.tui.input_handler import InputChannel
from currency_converter.utils.errors import ConfigurationError, RateFetchError, ValidationError
from currency_converter.utils.logging import get_logger, session_id_ctx
from currency_converter.utils.validation import validate_amount, validate_currency_code

logger = get_logger(__name__)

app = typer.Typer(add_completion=False, help="Interactive currency converter")

console = Console()

FETCH_FAILED_MESSAGE = "The program could not start. Check the error above."
INTERRUPTED_MESSAGE = "Interrupted while fetching rates. Goodbye!"
FETCH_HINT = (
    "Check your internet connection and that the API key is valid. "
    "If the problem persists the key may be inactive or over its quota."
)


def _load(config_path: Optional[str]) -> Config:
    try:
        return load_config(config_path)
    except ConfigurationError as e:
        console.print(create_error_panel(str(e), title="Configuration Error"))
        raise typer.Exit(code=1)


def _fetch_rates(
    cfg: Config,
    provider_name: Optional[str],
    api_key: Optional[str],
    base_currency: Optional[str],
) -> Optional[RateTable]:
    """Fetch the rate table once; failures are reported and yield None."""
    name = provider_name or cfg.provider
    try:
        provider = get_provider(name, cfg, api_key=api_key, base_currency=base_currency)
    except ValueError as e:
        logger.error(f"Rate provider setup failed: {e}")
        _report_fetch_error(RateFetchError(str(e)))
        return None

    try:
        with console.status(f"Fetching latest exchange rates ({provider.NAME})..."):
            rates = asyncio.run(try_fetch_rates(provider, on_error=_report_fetch_error))
    except KeyboardInterrupt:
        logger.info("Rate fetch interrupted")
        console.print(f"\n[yellow]{INTERRUPTED_MESSAGE}[/]")
        raise typer.Exit(code=130)

    if rates is not None:
        console.print(f"[green]Loaded {len(rates)} exchange rates.[/]")
    return rates


def _report_fetch_error(error: RateFetchError) -> None:
    console.print(create_error_panel(f"{error}\n\n{FETCH_HINT}", title="Could Not Fetch Rates"))


@app.command("run")
def run(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    api_key: Optional[str] = typer.Option(
        None, "--api-key", envvar="FREECURRENCYAPI_API_KEY", help="freecurrencyapi.com API key"
    ),
    base_currency: Optional[str] = typer.Option(None, "--base-currency", "-b", help="Base currency, e.g. USD"),
    provider: Optional[str] = typer.Option(None, "--provider", "-p", help="freecurrencyapi | static"),
    script: Optional[str] = typer.Option(
        None, "--script", "-s", help="Read menu input from a file instead of the terminal"
    ),
):
    """Start an interactive conversion session."""

    cfg = _load(config)
    session_id_ctx.set(str(uuid.uuid4()))

    try:
        channel = InputChannel.from_path(script, console=console) if script else InputChannel(console=console)
    except OSError as e:
        console.print(create_error_panel(f"Cannot open script: {e}"))
        raise typer.Exit(code=1)

    with channel:
        rates = _fetch_rates(cfg, provider, api_key, base_currency)
        if rates is None:
            console.print(FETCH_FAILED_MESSAGE)
            raise typer.Exit(code=1)

        tui = ConverterTUI(
            rates,
            channel,
            app_name=cfg.app_name,
            clear_screen=cfg.clear_screen and script is None,
            currency_columns=cfg.currency_columns,
        )
        tui.run()


@app.command("rates")
def rates(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    api_key: Optional[str] = typer.Option(
        None, "--api-key", envvar="FREECURRENCYAPI_API_KEY", help="freecurrencyapi.com API key"
    ),
    base_currency: Optional[str] = typer.Option(None, "--base-currency", "-b", help="Base currency, e.g. USD"),
    provider: Optional[str] = typer.Option(None, "--provider", "-p", help="freecurrencyapi | static"),
):
    """Print the current exchange rate table and exit."""

    cfg = _load(config)
    table = _fetch_rates(cfg, provider, api_key, base_currency)
    if table is None:
        raise typer.Exit(code=1)
    console.print(create_rates_table(table))


@app.command("convert")
def convert(
    source: str = typer.Argument(..., help="Source currency, e.g. USD"),
    destination: str = typer.Argument(..., help="Destination currency, e.g. EUR"),
    amount: str = typer.Argument(..., help="Amount to convert, e.g. 150.75"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    api_key: Optional[str] = typer.Option(
        None, "--api-key", envvar="FREECURRENCYAPI_API_KEY", help="freecurrencyapi.com API key"
    ),
    base_currency: Optional[str] = typer.Option(None, "--base-currency", "-b", help="Base currency, e.g. USD"),
    provider: Optional[str] = typer.Option(None, "--provider", "-p", help="freecurrencyapi | static"),
):
    """Convert a single amount and exit."""

    cfg = _load(config)
    table = _fetch_rates(cfg, provider, api_key, base_currency)
    if table is None:
        raise typer.Exit(code=1)

    try:
        src = validate_currency_code(table, source)
        dst = validate_currency_code(table, destination)
        value = validate_amount(amount)
    except ValidationError as e:
        console.print(create_error_panel(str(e), title="Invalid Input"))
        raise typer.Exit(code=2)

    result = convert_amount(table, src, dst, value)
    console.print(create_result_panel(result))
    if not result.ok:
        raise typer.Exit(code=2)


if __name__ == "__main__":
    app()
