"""
Command-line interface using Typer and Rich.

Commands:
- analyze: classify a submission from the terminal
- check:   test URLs for reachability
- config:  show the active configuration
- version: show version information
- server:  run the HTTP API
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError as PydanticValidationError
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.config import settings
from ..core.logging import get_logger, set_log_level
from ..domain.models import AnalysisResult, DecisionResponse, Submission

app = typer.Typer(
    name="ysws-analyzer",
    help="YSWS Project Analyzer - check hackathon submissions against the YSWS rules",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()
logger = get_logger(__name__)


def print_decision(result: AnalysisResult, *, full: bool = False) -> None:
    """
    Display an analysis result.

    Args:
        result: Analysis to display
        full: Also show every analysis field in a table
    """
    decision = DecisionResponse.from_result(result)
    if decision.ysws_decision:
        title, style = "✅ Counts for YSWS", "green"
    else:
        title, style = "❌ Does not count for YSWS", "red"

    console.print(
        Panel(
            decision.ysws_reasoning,
            title=title,
            border_style=style,
            expand=False,
        )
    )

    if not full:
        return

    table = Table(
        title="Analysis",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
        border_style="cyan",
    )
    table.add_column("Field", style="yellow")
    table.add_column("Value", style="white", no_wrap=False)

    for key, value in result.model_dump(mode="json").items():
        table.add_row(key, "-" if value is None else str(value))

    console.print(table)


@app.command()
def analyze(
    repo_url: Annotated[str, typer.Argument(help="Source repository URL")],
    demo_url: Annotated[str, typer.Argument(help="Live demo URL")],
    readme_url: Annotated[str, typer.Argument(help="README URL")],
    model: Annotated[
        Optional[str],
        typer.Option(
            "--model",
            "-m",
            help="LLM model to use (e.g., 'openai/gpt-4o', 'ollama/llama3')",
        ),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Write the full analysis as JSON to this file",
        ),
    ] = None,
    full: Annotated[
        bool,
        typer.Option("--full", help="Show every analysis field"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
) -> None:
    """
    Classify a submission against the YSWS rules.

    Checks the three URLs, fetches the README and repository page, and asks
    the configured model for a decision.
    """
    from ..services.classifier import analyze_submission

    if verbose:
        set_log_level("DEBUG")

    try:
        submission = Submission(
            repo_url=repo_url,
            demo_url=demo_url,
            readme_url=readme_url,
        )
    except PydanticValidationError as e:
        console.print(f"[red]Invalid submission:[/red] {e}")
        raise typer.Exit(2)

    console.print(f"\n[cyan]📦 Repository:[/cyan] {repo_url}")
    console.print(f"[cyan]🤖 Model:[/cyan] {model or settings.llm_model}\n")

    try:
        with console.status("[cyan]Analyzing submission..."):
            result = asyncio.run(analyze_submission(submission, model=model))
    except Exception as e:
        console.print(f"\n❌ [red]Unexpected error:[/red] {e}")
        logger.exception("analysis_failed")
        raise typer.Exit(1)

    print_decision(result, full=full)

    if output:
        output.write_text(result.model_dump_json(indent=2))
        console.print(f"\n💾 [green]Results saved to:[/green] {output}")


@app.command()
def check(
    urls: Annotated[list[str], typer.Argument(help="URLs to check")],
) -> None:
    """Check URLs and show which ones are reachable."""
    from ..services.fetcher import build_client, check_url

    async def _check_all() -> list[bool]:
        async with build_client() as client:
            return list(await asyncio.gather(*(check_url(url, client) for url in urls)))

    results = asyncio.run(_check_all())

    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("URL", style="yellow", no_wrap=False)
    table.add_column("Reachable", justify="center")
    for url, reachable in zip(urls, results):
        table.add_row(url, "[green]yes[/green]" if reachable else "[red]no[/red]")
    console.print(table)

    if not all(results):
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Display version information."""
    version_text = Text()
    version_text.append(f"{settings.app_name}\n", style="bold blue")
    version_text.append(f"Version: {settings.app_version}\n", style="green")
    version_text.append(f"Environment: {settings.environment}\n", style="yellow")
    version_text.append(f"Default Model: {settings.llm_model}\n", style="cyan")

    console.print(Panel(version_text, border_style="blue"))


@app.command()
def config() -> None:
    """Display current configuration."""
    config_table = Table(
        title="⚙️  Current Configuration",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
    )
    config_table.add_column("Setting", style="yellow")
    config_table.add_column("Value", style="green")

    api_key = settings.openai_api_key
    config_items = [
        ("Model", settings.llm_model),
        ("OpenAI API Key", f"{api_key[:4]}…" if api_key else "not set"),
        ("Max Output Tokens", str(settings.llm_max_tokens)),
        ("LLM Timeout", f"{settings.llm_timeout_seconds:g} s"),
        ("URL Check Timeout", f"{settings.url_check_timeout_seconds:g} s"),
        ("Fetch Timeout", f"{settings.fetch_timeout_seconds:g} s"),
        ("Content Limit", f"{settings.max_content_chars} chars"),
        ("Media Extensions", ", ".join(settings.media_extensions)),
        ("Environment", settings.environment),
        ("Log Level", settings.log_level),
    ]

    for key, value in config_items:
        config_table.add_row(key, value)

    console.print(config_table)


@app.command()
def server(
    host: Annotated[
        Optional[str],
        typer.Option(help="Host to bind the server to"),
    ] = None,
    port: Annotated[
        Optional[int],
        typer.Option(help="Port to bind the server to"),
    ] = None,
    reload: Annotated[
        bool,
        typer.Option(help="Enable auto-reload on code changes"),
    ] = False,
) -> None:
    """Start the HTTP API (POST /analyze)."""
    import uvicorn

    host = host or settings.app_host
    port = port or settings.app_port

    console.print("\n🚀 [green]Starting web server...[/green]")
    console.print(f"[cyan]📍 Endpoint:[/cyan] POST http://{host}:{port}/analyze\n")

    try:
        uvicorn.run(
            "ysws_analyzer.web.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped by user[/yellow]")


def main() -> None:
    """Main entry point for CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
