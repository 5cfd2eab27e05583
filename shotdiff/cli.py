"""CLI entry point for shotdiff."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from shotdiff.errors import CaptureFailed, ShotdiffError
from shotdiff.models.config import CaptureConfig, ShotdiffConfig
from shotdiff.models.results import BatchResult
from shotdiff.orchestrator import Orchestrator

console = Console()


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_config(config: str, required: bool = True) -> ShotdiffConfig:
    try:
        return ShotdiffConfig.load(config)
    except FileNotFoundError:
        if not required:
            return ShotdiffConfig()
        console.print(f"[red]Config file not found: {config}[/red]")
        console.print("Run 'shotdiff init' to create a default config.")
        sys.exit(1)
    except ShotdiffError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _print_batch_result(result: BatchResult) -> None:
    table = Table(title="Comparison Results")
    table.add_column("Image", style="bold")
    table.add_column("Result")
    table.add_column("Diff", justify="right")
    table.add_column("Diff image")
    for outcome in result.failed:
        table.add_row(
            outcome.tested_image, "[red]failed[/red]",
            f"{outcome.diff_percentage:.4f}%", outcome.diff_image_path or "",
        )
    for outcome in result.passed:
        table.add_row(outcome.tested_image, "[green]passed[/green]", "0%", "")
    for name in result.missing:
        table.add_row(name, "[yellow]missing baseline[/yellow]", "", "")
    for name in result.outdated:
        table.add_row(name, "[yellow]outdated[/yellow]", "", "")
    console.print(table)
    console.print(
        f"[green]{len(result.passed)} passed[/green], "
        f"[red]{len(result.failed)} failed[/red], "
        f"[yellow]{len(result.missing)} missing, {len(result.outdated)} outdated[/yellow]"
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Screenshot capture and visual regression comparison."""
    setup_logging(verbose)


@cli.command()
@click.option("--target", "-t", prompt="Target URL", help="Page URL to screenshot")
@click.option("--config", "-c", default="shotdiff.json", help="Config file path")
def init(target: str, config: str) -> None:
    """Create a default configuration file."""
    config_path = Path(config)
    if config_path.exists():
        if not click.confirm(f"{config} already exists. Overwrite?"):
            return

    cfg = ShotdiffConfig(
        images=[CaptureConfig(goto=target, name="screenshot.png")],
        path="./screenshots/new",
    )
    cfg.save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nYou can now customize this file and run:")
    console.print("  [blue]shotdiff generate[/blue]")
    console.print("  [blue]shotdiff compare[/blue]")


@cli.command()
@click.option("--config", "-c", default="shotdiff.json", help="Config file path")
@click.option("--serial/--parallel", default=None, help="Force capture mode (auto-detected by default)")
@click.option("--path", "-p", default=None, help="Override the output directory of every screenshot")
def generate(config: str, serial: Optional[bool], path: Optional[str]) -> None:
    """Capture every screenshot listed in the config."""
    cfg = _load_config(config)
    if serial is not None:
        cfg.serial = serial
    if path is not None:
        cfg.path = path

    try:
        results = Orchestrator(cfg).run_generate()
    except CaptureFailed as e:
        for result in e.results:
            console.print(f"  [green]{result.msg}[/green]")
        for error in e.errors:
            console.print(f"  [red]{error}[/red]")
        console.print(f"[red]{len(e.errors)} screenshot(s) failed[/red]")
        sys.exit(1)
    except ShotdiffError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    for result in results:
        console.print(f"  {result.msg}")
    console.print(f"[green]Generated {len(results)} screenshot(s)[/green]")


@cli.command()
@click.option("--config", "-c", default="shotdiff.json", help="Config file path")
@click.option("--baseline", "-b", default=None, help="Directory with baseline images")
@click.option("--new", "-n", "new", default=None, help="Directory with new images")
@click.option("--diff", "-d", default=None, help="Directory for diff images (default: <new>/diff)")
@click.option("--report", "-r", default=None, help="Write a JSON report to this path")
def compare(
    config: str,
    baseline: Optional[str],
    new: Optional[str],
    diff: Optional[str],
    report: Optional[str],
) -> None:
    """Compare baseline and new screenshots."""
    cfg = _load_config(config, required=False)
    if baseline is not None:
        cfg.dir_baseline = baseline
    if new is not None:
        cfg.dir_new = new
    if diff is not None:
        cfg.dir_diff = diff

    try:
        result = Orchestrator(cfg).run_compare(report_output=report)
    except ShotdiffError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    _print_batch_result(result)
    if result.has_failures:
        sys.exit(1)


if __name__ == "__main__":
    cli()
