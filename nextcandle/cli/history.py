"""History commands for nextcandle CLI.

Lists, reloads and deletes saved analyses.
"""

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from nextcandle.config import get_config, get_db_path, get_wick_tuning

console = Console()


def _get_store():
    """Get the analysis store instance."""
    from nextcandle.db.store import AnalysisStore

    return AnalysisStore(get_db_path(get_config()))


def _not_found(analysis_id: str) -> None:
    console.print(Panel(
        f"[red]No saved analysis matches '{escape(analysis_id)}'.[/red]\n\n"
        "Run [cyan]nextcandle history list[/cyan] to see saved ids.",
        title="[bold red]Not Found[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


@click.group()
def history() -> None:
    """Manage saved analyses.

    \b
    Examples:
      nextcandle history list           # Show saved analyses
      nextcandle history show 3f2a      # Reload one (id prefix is enough)
      nextcandle history delete 3f2a    # Delete one
    """
    pass


@history.command("list")
def list_analyses() -> None:
    """List saved analyses, newest first."""
    analyses = _get_store().list_analyses()

    if not analyses:
        console.print("[dim]No saved analyses.[/dim]")
        return

    table = Table(title="Saved Analyses")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Date", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Candle")
    table.add_column("Pattern")
    table.add_column("Prediction")

    for saved in analyses:
        data = saved.data
        prediction = saved.result.prediction
        color = "green" if prediction.direction == "Up" else "red"
        table.add_row(
            saved.id[:8],
            saved.timestamp.strftime("%Y-%m-%d %H:%M"),
            data.analysis_type,
            escape(f"O:{data.open} H:{data.high} L:{data.low} C:{data.close}"),
            escape(saved.result.pattern_identification.name),
            f"[{color}]{prediction.direction}[/{color}] → {prediction.target_price:,.2f}",
        )

    console.print(table)


@history.command("show")
@click.argument("analysis_id")
def show(analysis_id: str) -> None:
    """Reload a saved analysis and redraw it.

    ANALYSIS_ID is the record id or a unique prefix of it.
    """
    from nextcandle.cli.analyze import show_analysis

    saved = _get_store().get_analysis(analysis_id)
    if saved is None:
        _not_found(analysis_id)

    console.print(
        f"[dim]Saved {saved.timestamp.strftime('%Y-%m-%d %H:%M')} ({saved.id})[/dim]\n"
    )
    show_analysis(saved.data, saved.result, get_wick_tuning(get_config()))


@history.command("delete")
@click.argument("analysis_id")
def delete(analysis_id: str) -> None:
    """Delete a saved analysis.

    ANALYSIS_ID is the record id or a unique prefix of it.
    """
    store = _get_store()
    saved = store.get_analysis(analysis_id)
    if saved is None:
        _not_found(analysis_id)

    store.delete_analysis(saved.id)
    console.print(f"[green]✓ Deleted analysis[/green] [dim]{saved.id}[/dim]")
