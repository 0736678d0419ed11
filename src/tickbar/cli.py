"""Command line entry point for tickbar."""

import sys
import time
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from tickbar import __version__
from tickbar.ui.progress import ProgressRenderer
from tickbar.utils.config import Config, ConfigError

# Configure logging
logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)

console = Console()


def setup_config(config_path: Optional[Path] = None) -> Config:
    """Setup and return configuration instance.

    Args:
        config_path: Optional path to config file

    Returns:
        Configuration instance
    """
    return Config(config_path)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def main(verbose: bool) -> None:
    """tickbar - terminal progress bar with elapsed time and ETA."""
    if verbose:
        console.print(f"[bold green]tickbar v{__version__}[/bold green]")
        console.print("Verbose mode enabled")
        logging.getLogger().setLevel(logging.INFO)


@main.command("demo")
@click.option("--total", default=100, type=click.IntRange(min=1), help="Number of steps to simulate")
@click.option("--delay", default=0.02, type=click.FloatRange(min=0), help="Seconds of simulated work per step")
@click.option("--width", default=None, type=click.IntRange(min=1), help="Bar width in characters")
@click.option("--prefix", default=None, help="Label shown before the percentage")
@click.option("--interval", default=None, type=click.FloatRange(min=0), help="Minimum seconds between repaints")
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="JSON config file with bar defaults")
def demo_command(
    total: int,
    delay: float,
    width: Optional[int],
    prefix: Optional[str],
    interval: Optional[float],
    config_path: Optional[Path]
) -> None:
    """Run a simulated job and draw its progress bar on stderr.

    Examples:

        tickbar demo --total 500 --delay 0.01

        tickbar demo --prefix "Indexing" --width 20
    """
    try:
        options = setup_config(config_path).renderer_options()
    except ConfigError as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        sys.exit(1)

    if width is not None:
        options["bar_width"] = width
    if prefix is not None:
        options["prefix"] = prefix
    if interval is not None:
        options["min_refresh_interval"] = interval

    logger.info(f"Running demo with {total} steps and options {options}")

    bar = ProgressRenderer(total, stream=sys.stderr, **options)
    try:
        for _ in range(total):
            time.sleep(delay)
            bar.advance()
        bar.complete()
    except KeyboardInterrupt:
        sys.stderr.write("\n")
        console.print("[yellow]Operation cancelled by user.[/yellow]")
        sys.exit(1)

    sys.stderr.write("\n")
    sys.stderr.flush()
    console.print(f"[green]✓[/green] {total} steps in {bar.elapsed_time():.2f}s")


@main.command("config")
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="JSON config file with bar defaults")
def config_command(config_path: Optional[Path]) -> None:
    """Show the effective progress bar settings."""
    try:
        options = setup_config(config_path).renderer_options()
    except ConfigError as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        sys.exit(1)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", justify="right")

    for key, value in options.items():
        table.add_row(key, repr(value))

    console.print(table)


if __name__ == "__main__":
    main()
