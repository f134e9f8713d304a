"""
tam - CLI Application
"""
import math
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box
from rich.markup import escape

from tam.config import settings
from tam.core.exceptions import IndicatorError
from tam.indicators import (
    INDICATOR_REGISTRY,
    AverageDirectionalIndex,
    Correlation,
    create_indicator,
    list_indicators,
)
from tam.logger import logger, logger_manager
from tam.cli.csv_input import read_bars, read_pairs

# Create Typer app
app = typer.Typer(
    name="tam",
    help="Streaming technical-analysis indicators",
    add_completion=False,
)

# Rich console for beautiful output
console = Console()


def _format_value(value: float) -> str:
    return "NaN" if math.isnan(value) else repr(value)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", "-v", help="Show version and exit"),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Console log level"),
):
    """
    Replay price data through ADX, RSI or Pearson correlation.
    """
    if version:
        console.print(f"[cyan]{settings.APP_NAME}[/cyan] v{settings.APP_VERSION}")
        raise typer.Exit()

    if log_level:
        try:
            logger_manager.set_level(log_level)
        except ValueError as e:
            console.print(f"[red]✗[/red] {escape(str(e))}", soft_wrap=True)
            raise typer.Exit(code=2)
    logger_manager.setup_logger()

    if ctx.invoked_subcommand is None:
        console.print(Panel.fit(
            f"[bold cyan]{settings.APP_NAME}[/bold cyan]\n"
            f"[dim]Version {settings.APP_VERSION}[/dim]\n\n"
            f"[yellow]Use --help to see available commands[/yellow]",
            box=box.ROUNDED,
            border_style="cyan"
        ))


@app.command("list")
def list_command():
    """
    Show registered indicators
    """
    table = Table(title="Indicators", box=box.ROUNDED)
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Description", style="green")
    table.add_column("Default", style="yellow")

    for name in list_indicators():
        metadata = INDICATOR_REGISTRY.get_metadata(name)
        table.add_row(name, metadata["type"], metadata["description"], str(create_indicator(name)))

    console.print(table)
    logger.debug("List command executed")


@app.command("run")
def run_command(
    name: str = typer.Argument(..., help="Indicator name (adx, rsi, correl)"),
    file: str = typer.Argument(..., help="CSV file: high,low,close columns (x,y for correl)"),
    period: Optional[int] = typer.Option(None, "--period", "-p", help="Lookback period"),
    rounding: bool = typer.Option(False, "--rounding", "-r", help="Round DI/DX/ADX values (adx only)"),
    plain: bool = typer.Option(False, "--plain", help="Print one value per line"),
):
    """
    Feed every row of a CSV file through one indicator
    """
    try:
        indicator = create_indicator(name, period)
        if rounding:
            if not isinstance(indicator, AverageDirectionalIndex):
                raise typer.BadParameter("--rounding only applies to adx")
            indicator.with_rounding()

        if isinstance(indicator, Correlation):
            inputs = read_pairs(file)
            labels = [f"{x}, {y}" for x, y in inputs]
            values = [indicator.next(x, y) for x, y in inputs]
        else:
            inputs = read_bars(file)
            labels = [f"{bar.high}/{bar.low}/{bar.close}" for bar in inputs]
            values = [indicator.next(bar) for bar in inputs]
    except (IndicatorError, FileNotFoundError, ValueError) as e:
        console.print(f"[red]✗[/red] Error: {escape(str(e))}", soft_wrap=True)
        logger.error(f"run {name} on {file} failed: {e}")
        raise typer.Exit(code=1)

    logger.info(f"Replayed {len(values)} rows through {indicator}")

    if plain:
        for value in values:
            typer.echo(_format_value(value))
        return

    table = Table(title=f"{indicator}: {file}", box=box.ROUNDED)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Input", style="cyan")
    table.add_column(str(indicator), style="green", justify="right")

    for step, (label, value) in enumerate(zip(labels, values), start=1):
        table.add_row(str(step), label, _format_value(value))

    console.print(table)


if __name__ == "__main__":
    app()
