"""Analyze command for nextcandle CLI.

Sends one candle to the Pattern Analyst Agent, synthesizes the predicted
next candle and draws both side by side.
"""

import logging
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from nextcandle.config import (
    get_config,
    get_config_path,
    get_db_path,
    get_openai_api_key,
    get_openai_model,
    get_wick_tuning,
)
from nextcandle.geometry import WickTuning, is_valid_candle, synthesize_next_candle
from nextcandle.models import ANALYSIS_TYPES, AnalysisResult, CandleInput
from nextcandle.render import candle_pair

console = Console()
logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = (
    "Please enter valid O, H, L, C values. High must be >= Low, "
    "and Open/Close must be between High and Low."
)


def _direction_style(direction: str) -> tuple[str, str]:
    """Get (arrow, color) for a prediction direction."""
    if direction == "Up":
        return "▲", "green"
    return "▼", "red"


def _prediction_table(result: AnalysisResult) -> Table:
    """Build the prediction details table."""
    prediction = result.prediction
    arrow, color = _direction_style(prediction.direction)

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("Direction", f"[bold {color}]{arrow} {prediction.direction}[/bold {color}]")
    table.add_row("Target", f"[bold]{prediction.target_price:,.2f}[/bold]")
    table.add_row(
        "Move",
        f"{prediction.projected_move_points:.2f} pts "
        f"({prediction.projected_move_percentage:.2f}%)",
    )

    if prediction.invalidation_condition:
        table.add_row(
            "[yellow]Invalidation[/yellow]", escape(prediction.invalidation_condition)
        )

    extended = prediction.extended_target
    if extended is not None:
        table.add_row(
            "[magenta]Extended[/magenta]",
            f"{extended.target_price:,.2f} | {extended.projected_move_points:.2f} pts "
            f"({extended.projected_move_percentage:.2f}%) [dim]{escape(extended.comment)}[/dim]",
        )

    return table


def show_analysis(
    data: CandleInput,
    result: AnalysisResult,
    tuning: Optional[WickTuning] = None,
) -> None:
    """Print the visual comparison and the analysis panels.

    The predicted candle is synthesized here on every call; it is never
    stored.
    """
    current = data.to_candle()
    predicted = synthesize_next_candle(result.prediction, current, tuning)
    logger.debug("Predicted candle: %s", predicted)

    console.print(Panel(
        candle_pair(
            current,
            predicted,
            current_caption=result.pattern_identification.name,
            predicted_caption=result.prediction.next_candle_type,
        ),
        title=f"[bold cyan]Visual Analysis ({data.analysis_type})[/bold cyan]",
        border_style="cyan",
    ))

    console.print(Panel(
        escape(result.current_candle_analysis),
        title="[bold]Candle Analysis[/bold]",
        border_style="blue",
    ))

    console.print(Panel(
        f"[bold]{escape(result.pattern_identification.name)}[/bold]\n\n"
        f"{escape(result.pattern_identification.explanation)}",
        title="[bold]Pattern Identification[/bold]",
        border_style="blue",
    ))

    console.print(Panel(
        _prediction_table(result),
        title=(
            f"[bold]Next Candle Prediction ({data.analysis_type}): "
            f"{escape(result.prediction.next_candle_type)}[/bold]"
        ),
        border_style="magenta",
    ))

    if result.volume_analysis:
        console.print(Panel(
            escape(result.volume_analysis),
            title="[bold]Volume Commentary[/bold]",
            border_style="blue",
        ))


@click.command()
@click.option("-o", "--open", "open_", required=True, help="Opening price.")
@click.option("-H", "--high", required=True, help="High price.")
@click.option("-l", "--low", required=True, help="Low price.")
@click.option("-c", "--close", "close_", required=True, help="Closing price.")
@click.option("--volume", default="", help="Volume (optional).")
@click.option(
    "-t", "--type", "analysis_type",
    type=click.Choice(ANALYSIS_TYPES, case_sensitive=False),
    default="Intraday",
    show_default=True,
    help="Trading perspective for the analysis.",
)
@click.option("--model", default=None, help="Override the AI model.")
@click.option("--save", is_flag=True, help="Save the analysis to history.")
def analyze(
    open_: str,
    high: str,
    low: str,
    close_: str,
    volume: str,
    analysis_type: str,
    model: Optional[str],
    save: bool,
) -> None:
    """Analyze a candle and predict the next one.

    \b
    Examples:
      nextcandle analyze -o 100 -H 105 -l 98 -c 102
      nextcandle analyze -o 100 -H 105 -l 98 -c 102 --volume 100000 -t swing
      nextcandle analyze -o 100 -H 105 -l 98 -c 102 --save
    """
    data = CandleInput(
        open=open_,
        high=high,
        low=low,
        close=close_,
        volume=volume,
        analysis_type=analysis_type,
    )

    if not is_valid_candle(data.to_candle()):
        console.print(Panel(
            f"[red]{INVALID_INPUT_MESSAGE}[/red]",
            title="[bold red]Invalid Candle[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    config = get_config()
    api_key = get_openai_api_key(config)
    if not api_key:
        console.print(Panel(
            "[red]OpenAI API key not configured.[/red]\n\n"
            "Set [cyan]OPENAI_API_KEY[/cyan] or add your key to:\n"
            f"[cyan]{get_config_path()}[/cyan]",
            title="[bold red]Configuration Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    console.print(f"[dim]Analyzing {data.analysis_type} pattern...[/dim]\n")

    try:
        from nextcandle.agents import AnalysisError, PatternAnalystAgent, configure_api_key
    except ImportError as e:
        console.print(Panel(
            f"[red]Missing dependency: {e}[/red]\n\n"
            "Please install the required packages:\n"
            "[cyan]pip install openai-agents[/cyan]",
            title="[bold red]Import Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    configure_api_key(api_key)
    agent = PatternAnalystAgent(model=model or get_openai_model(config))

    try:
        result = agent.analyze(data)
    except AnalysisError as e:
        console.print(Panel(
            f"[red]{escape(str(e))}[/red]",
            title="[bold red]Analysis Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    show_analysis(data, result, get_wick_tuning(config))

    if save:
        from nextcandle.db.store import AnalysisStore

        saved = AnalysisStore(get_db_path(config)).save_analysis(data, result)
        console.print(f"\n[green]✓ Saved analysis[/green] [dim]{saved.id}[/dim]")
