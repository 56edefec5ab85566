"""Command-line interface for the docmap parser."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import structlog
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from docmap_parser.config import get_settings
from docmap_parser.fetch import DocmapFetchError, fetch_docmap, fetch_docmap_index
from docmap_parser.models import ManuscriptData
from docmap_parser.parser import DocmapError, parse_docmap

# Configure structlog for CLI
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

app = typer.Typer(
    name="docmap-parser",
    help="Docmap parser - Resolve docmaps into manuscript version histories",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, get_settings().log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, stream=sys.stderr, format="%(message)s", force=True)


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise typer.BadParameter(f"File not found: {source}", param_hint="SOURCE")
    return path.read_text(encoding="utf-8")


def _dump(payload: Any, pretty: bool) -> str:
    if pretty:
        return json.dumps(payload, indent=2, ensure_ascii=False)
    return json.dumps(payload, ensure_ascii=False)


def _emit(payload: Any, pretty: bool, output: Optional[Path]) -> None:
    text = _dump(payload, pretty)
    if output is None:
        typer.echo(text)
        return
    with open(output, "w", encoding="utf-8") as f:
        f.write(text)
        f.write("\n")
    err_console.print(f"[green]Saved to:[/green] {output}")


def _display_summary(data: ManuscriptData) -> None:
    """Display the resolved versions as a table.

    Args:
        data: The resolved manuscript.
    """
    console.print(f"\n[bold]Manuscript {data.id}[/bold]")
    if data.manuscript is not None:
        if data.manuscript.doi:
            console.print(f"[dim]DOI:[/dim] {data.manuscript.doi}")
        if data.manuscript.subjects:
            console.print(f"[dim]Subjects:[/dim] {', '.join(data.manuscript.subjects)}")

    table = Table(show_header=True)
    table.add_column("Version", justify="right")
    table.add_column("Type")
    table.add_column("DOI")
    table.add_column("Published", style="dim")
    table.add_column("Reviewed", style="dim")
    table.add_column("Reviews", justify="right")
    table.add_column("Republished From", style="dim")

    for version in data.versions:
        peer_review = version.peer_review
        table.add_row(
            version.version_identifier,
            version.type.value,
            version.doi,
            version.published_date.isoformat() if version.published_date else "-",
            version.reviewed_date.isoformat() if version.reviewed_date else "-",
            str(len(peer_review.reviews)) if peer_review else "0",
            version.republished_from.doi if version.republished_from else "-",
        )

    console.print(table)


@app.command()
def parse(
    source: str = typer.Argument(
        ...,
        help="Path to a docmap JSON file, or - to read from stdin",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the JSON result to this file instead of stdout",
    ),
    pretty: bool = typer.Option(
        True,
        "--pretty/--compact",
        help="Pretty-print JSON output",
    ),
    summary: bool = typer.Option(
        False,
        "--summary",
        "-s",
        help="Print a table of versions instead of JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """Parse a docmap and print the resolved manuscript."""
    _configure_logging(verbose)

    try:
        data = parse_docmap(_read_source(source))
    except DocmapError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if summary:
        _display_summary(data)
    else:
        _emit(data.to_json_dict(), pretty, output)


@app.command()
def fetch(
    manuscript_id: Optional[str] = typer.Argument(
        None,
        help="Publisher manuscript id, e.g. 85111",
    ),
    index: bool = typer.Option(
        False,
        "--index",
        help="Parse docmaps from the docmap index instead of one manuscript",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        help="Number of index docmaps to parse (default: DOCMAP_INDEX_LIMIT)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the JSON result to this file instead of stdout",
    ),
    pretty: bool = typer.Option(
        True,
        "--pretty/--compact",
        help="Pretty-print JSON output",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """Fetch docmaps from the docmap API and parse them."""
    _configure_logging(verbose)
    settings = get_settings()

    if not index and manuscript_id is None:
        err_console.print("[red]Error:[/red] Provide a manuscript id or --index")
        sys.exit(1)

    try:
        if not index:
            data = parse_docmap(fetch_docmap(manuscript_id, settings=settings))
            _emit(data.to_json_dict(), pretty, output)
            return

        docmaps = fetch_docmap_index(settings=settings)
    except (DocmapFetchError, DocmapError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    results = []
    failures = 0
    for docmap in docmaps[: limit if limit is not None else settings.index_limit]:
        try:
            results.append(parse_docmap(docmap).to_json_dict())
        except DocmapError as e:
            failures += 1
            err_console.print(f"[yellow]Skipped {docmap.get('id', '?')}:[/yellow] {e}")

    _emit(results, pretty, output)
    if failures:
        sys.exit(1)


@app.command()
def info() -> None:
    """Display version and configuration."""
    from docmap_parser import __version__

    settings = get_settings()

    console.print(
        Panel.fit(
            "[bold blue]Docmap Parser[/bold blue]",
            border_style="blue",
        )
    )

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row("Version", __version__)
    table.add_row("API Base URL", settings.api_base_url)
    table.add_row("Publisher", settings.publisher)
    table.add_row("Request Timeout", f"{settings.request_timeout}s")
    table.add_row("Index Limit", str(settings.index_limit))
    table.add_row("Log Level", settings.log_level)

    console.print(table)


if __name__ == "__main__":
    app()
