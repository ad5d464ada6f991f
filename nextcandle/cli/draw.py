"""Draw command for nextcandle CLI.

Projects any candle onto its proportional layout and draws it.
"""

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from nextcandle.geometry import project_candle
from nextcandle.models import CandleInput, LayoutIssue
from nextcandle.render import draw_candle
from nextcandle.render.candle_art import DEFAULT_HEIGHT

console = Console()


@click.command()
@click.argument("open_price", metavar="OPEN")
@click.argument("high")
@click.argument("low")
@click.argument("close")
@click.option(
    "--height",
    type=click.IntRange(min=1),
    default=DEFAULT_HEIGHT,
    show_default=True,
    help="Rows used to draw the candle.",
)
def draw(open_price: str, high: str, low: str, close: str, height: int) -> None:
    """Draw a single candle and show its proportions.

    \b
    Examples:
      nextcandle draw 100 105 98 102
      nextcandle draw 100 105 98 102 --height 24
    """
    candle = CandleInput(open=open_price, high=high, low=low, close=close).to_candle()
    layout = project_candle(candle)

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Part", style="dim")
    table.add_column("Percent", justify="right")

    if layout is LayoutIssue.INVALID:
        table.add_row("Status", "[red]Invalid Data[/red]")
    elif layout is LayoutIssue.DEGENERATE:
        table.add_row("Status", "[yellow]Zero range (nothing to draw)[/yellow]")
    else:
        color = "green" if layout.is_bullish else "red"
        table.add_row("Status", f"[{color}]{'Bullish' if layout.is_bullish else 'Bearish'}[/{color}]")
        table.add_row("Top wick", f"{layout.top_wick_pct:.2f}%")
        table.add_row("Body top", f"{layout.body_top_pct:.2f}%")
        table.add_row("Body", f"{layout.body_height_pct:.2f}%")
        table.add_row("Bottom wick", f"{layout.bottom_wick_pct:.2f}%")

    grid = Table.grid(padding=(0, 4))
    grid.add_row(draw_candle(candle, height), table)

    console.print(Panel(
        grid,
        title=f"[bold cyan]{escape(f'O:{open_price} H:{high} L:{low} C:{close}')}[/bold cyan]",
        border_style="cyan",
    ))
