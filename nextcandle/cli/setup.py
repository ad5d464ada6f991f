"""Init command for nextcandle CLI.

Writes a template configuration file.
"""

import click
from rich.console import Console
from rich.panel import Panel

from nextcandle.config import create_template_config, get_config_path

console = Console()


@click.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
def init(force: bool) -> None:
    """Create a template configuration file.

    \b
    The file holds:
      [openai]    api_key and model for the pattern analyst
      [geometry]  wick proportions used to draw predicted candles
      [storage]   location of the saved-analyses database
    """
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print(Panel(
            f"[yellow]Config already exists:[/yellow] [cyan]{config_path}[/cyan]\n\n"
            "Use [cyan]--force[/cyan] to overwrite it.",
            title="[bold yellow]Init[/bold yellow]",
            border_style="yellow",
        ))
        return

    written = create_template_config()
    console.print(Panel(
        f"[green]Config written to[/green] [cyan]{written}[/cyan]\n\n"
        "Add your OpenAI API key under [cyan]\\[openai][/cyan] "
        "or set [cyan]OPENAI_API_KEY[/cyan].",
        title="[bold green]Init[/bold green]",
        border_style="green",
    ))
