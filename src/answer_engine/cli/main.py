"""
Main CLI application for the Answer Engine.

Provides the command-line interface for:
- Answering a query from all providers
- Searching images
- Managing configuration
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from answer_engine import __version__
from answer_engine.aggregator import Aggregator
from answer_engine.config import Settings, get_default_config_path, load_config
from answer_engine.core.exceptions import AnswerEngineError
from answer_engine.core.models import AggregateResponse, IdentifiedResult, SourceFilter
from answer_engine.utils.logging import get_logger, setup_logging
from answer_engine.utils.metrics import Metrics

app = typer.Typer(
    name="answer-engine",
    help="Answer Engine - aggregate short answers from public content APIs",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]Answer Engine[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """
    Answer Engine - ask once, get an answer from several sources.

    Use 'answer-engine --help' for command list.
    """
    try:
        settings = load_config(config_file or get_default_config_path())
    except (AnswerEngineError, OSError, yaml.YAMLError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    setup_logging(settings.logging, level="DEBUG" if verbose else None)
    ctx.obj = settings


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else load_config()


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument(
        ...,
        help="Question or topic to look up",
    ),
    source: str = typer.Option(
        SourceFilter.ALL.value,
        "--source",
        "-s",
        help="Source filter: All, Web, Academic, News or Images",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the response as JSON",
    ),
    show_sources: bool = typer.Option(
        True,
        "--sources/--no-sources",
        help="Show the source table",
    ),
    show_metrics: bool = typer.Option(
        False,
        "--metrics",
        help="Print provider call metrics after the answer",
    ),
) -> None:
    """
    Answer a query from all enabled providers.

    Examples:
        answer-engine search "Mars"
        answer-engine search "rust async" --source Web --json
    """
    settings = _settings(ctx)

    try:
        if as_json:
            response = asyncio.run(_search_async(settings, query, source))
        else:
            with console.status("[cyan]Searching..."):
                response = asyncio.run(_search_async(settings, query, source))
    except AnswerEngineError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Could not complete search:[/red] {e}")
        logger.exception("Search failed")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))
    else:
        _render_response(response, show_sources)

    if show_metrics:
        # stdout carries only the JSON document under --json
        out = err_console if as_json else console
        out.print()
        out.print(_metrics_table())


async def _search_async(
    settings: Settings,
    query: str,
    source: str,
) -> AggregateResponse:
    """Run one aggregate request with a client owned for its duration."""
    async with Aggregator.from_settings(settings) as aggregator:
        return await aggregator.aggregate(query, source)


def _render_response(response: AggregateResponse, show_sources: bool) -> None:
    """Display answer, sources and related questions."""
    console.print(f"\n[bold]Question:[/bold] {response.query}\n")

    console.print(Panel(
        Markdown(response.answer),
        title="Answer",
        border_style="green",
    ))

    if show_sources:
        console.print()
        if response.has_sources:
            console.print(_results_table("Sources", response.sources))
        else:
            console.print("[yellow]No sources found[/yellow]")

    if response.related_questions:
        console.print("\n[bold]Related questions:[/bold]")
        for question in response.related_questions:
            console.print(f"  • {question}")


def _results_table(title: str, results: tuple[IdentifiedResult, ...]) -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("#", style="dim", width=3)
    table.add_column("", width=3)
    table.add_column("Title", style="cyan")
    table.add_column("Domain", style="dim")
    table.add_column("URL", style="dim")

    for result in results:
        table.add_row(
            str(result.id),
            result.favicon,
            result.title[:50] + "..." if len(result.title) > 50 else result.title,
            result.domain,
            result.url[:60] + "..." if len(result.url) > 60 else result.url,
        )

    return table


def _metrics_table() -> Table:
    """Per-provider calls, failures and latency for this run."""
    table = Table(title="Provider Metrics", show_header=True)
    table.add_column("Provider", style="cyan")
    table.add_column("Calls", justify="right")
    table.add_column("Failures", justify="right")
    table.add_column("Avg ms", justify="right")
    table.add_column("Max ms", justify="right")

    for stats in Metrics.get().provider_stats():
        table.add_row(
            stats.provider,
            str(stats.calls),
            f"[red]{stats.failures}[/red]" if stats.failures else "0",
            f"{stats.latency.avg_ms:.0f}",
            f"{stats.latency.max_ms:.0f}",
        )

    return table


@app.command()
def images(
    ctx: typer.Context,
    query: str = typer.Argument(
        ...,
        help="Image search query",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        help="Maximum results",
        min=1,
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print results as JSON",
    ),
) -> None:
    """
    Search media files.

    Example:
        answer-engine images "andromeda galaxy" --limit 5
    """
    settings = _settings(ctx)

    try:
        results = asyncio.run(_images_async(settings, query, limit))
    except AnswerEngineError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))
        return

    if not results:
        console.print("[yellow]No images found[/yellow]")
        return

    console.print(_results_table(f"Images ({len(results)} found)", results))


async def _images_async(
    settings: Settings,
    query: str,
    limit: Optional[int],
) -> tuple[IdentifiedResult, ...]:
    async with Aggregator.from_settings(settings) as aggregator:
        return await aggregator.search_images(query, limit)


@app.command()
def config(
    ctx: typer.Context,
    show: bool = typer.Option(False, "--show", "-s", help="Print the effective settings as YAML"),
    init: bool = typer.Option(False, "--init", help="Write the default settings to a file"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Destination for --init (default: ./config.yaml)",
    ),
) -> None:
    """
    Inspect or scaffold settings.

    Examples:
        answer-engine config --show
        answer-engine --config ./team.yaml config --show
        answer-engine config --init --output ./answer-engine.yaml
    """
    if init:
        _write_default_config(output or Path("config.yaml"))
        return
    if not show:
        console.print("Nothing to do: pass --show or --init")
        return

    console.rule("[bold blue]Effective settings")
    console.print(
        _settings_yaml(_settings(ctx)),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _settings_yaml(settings: Settings) -> str:
    return yaml.safe_dump(settings.model_dump(mode="json"), sort_keys=False)


def _write_default_config(path: Path) -> None:
    if path.exists() and not typer.confirm(f"{path} already exists. Replace it?"):
        raise typer.Exit(0)

    path.write_text(_settings_yaml(Settings()), encoding="utf-8")
    console.print(f"[green]Wrote default settings to[/green] {path}")


if __name__ == "__main__":
    app()
