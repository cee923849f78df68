"""
dumpi-ascii CLI.

Commands:
- convert: Format an event file as one text record per call
- symbols: Show a symbol table or resolve one value
- config: Configuration management
- version: Show version
"""

import logging
import sys
import time
from contextlib import nullcontext
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..config import DumpiConfig, load_config, generate_default_config
from ..core.errors import ConversionError, DumpiAsciiError, ErrorCode
from ..core.session import FormatSession
from ..formats.address_table import FunctionAddressTable
from ..formats.event_file import EventFileReader
from ..symbols.categories import Category
from ..symbols.registry import SymbolResolver

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="dumpi-ascii",
    help="Convert decoded MPI trace events to text records",
    add_completion=False,
)

# Records go to stdout; everything else goes to stderr
console = Console(stderr=True)


def _setup_logging(cfg: DumpiConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, cfg.logging.level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _print_summary(count: int, duration: float, session: FormatSession, source: Path):
    table = Table(title="Summary")
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    table.add_row("Input", str(source))
    table.add_row("Records", f"{count:,}")
    table.add_row("Function addresses", str(len(session.addresses)) if session.addresses else "none")
    if duration > 0:
        table.add_row("Duration", f"{duration:.2f}s")
        table.add_row("Throughput", f"{count/duration:,.0f}/s")

    console.print(table)


# === CONVERT COMMAND ===

@app.command()
def convert(
    events: Path = typer.Argument(..., help="Event file (JSON lines)", exists=True, dir_okay=False),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Output file (default: stdout)"),
    addresses: Optional[Path] = typer.Option(None, "-a", "--addresses", help="Function address table"),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
    skip_unknown: bool = typer.Option(False, "--skip-unknown", help="Skip calls without a signature"),
    quiet: bool = typer.Option(False, "-q", "--quiet"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging"),
):
    """Format every event in EVENTS as one text record."""
    try:
        cfg = DumpiConfig.load(config_path) if config_path else load_config()
    except (DumpiAsciiError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    _setup_logging(cfg, verbose)

    table_path = addresses or cfg.input.address_table_path()
    table = None
    if table_path is not None:
        try:
            table = FunctionAddressTable.load(table_path)
        except (DumpiAsciiError, FileNotFoundError) as e:
            console.print(f"[red]Error:[/] {escape(str(e))}")
            raise typer.Exit(1)

    skip = skip_unknown or cfg.input.skip_unknown
    start = time.time()

    try:
        target = open(output, 'w') if output else nullcontext(sys.stdout)
    except OSError as e:
        error = ConversionError(code=ErrorCode.E4001_FILE_WRITE_FAILED, context={'path': str(output)})
        console.print(f"[red]Error:[/] {error.message} ({e.strerror})")
        raise typer.Exit(1)

    with target as stream:
        session = FormatSession(stream, resolver=cfg.build_resolver(), addresses=table)
        try:
            count = session.write_calls(EventFileReader.read_path(events, skip_unknown=skip))
        except DumpiAsciiError as e:
            console.print(f"[red]Error:[/] {escape(str(e))}")
            raise typer.Exit(1)

    duration = time.time() - start

    if count == 0:
        logger.warning(ConversionError(code=ErrorCode.E1005_EMPTY_INPUT, context={'path': str(events)}).message)

    if not quiet:
        if output:
            console.print(f"[green]Written to:[/] {output}")
        _print_summary(count, duration, session, events)


# === SYMBOLS COMMAND ===

@app.command()
def symbols(
    category: str = typer.Argument(..., help="Symbol category, e.g. comm, datatype, filemode"),
    value: Optional[int] = typer.Option(None, "--value", help="Resolve a single value"),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
):
    """Show the names known for a symbol category."""
    try:
        cat = Category.parse(category)
    except ValueError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        console.print("Valid categories: " + ", ".join(c.value for c in Category))
        raise typer.Exit(1)

    resolver = SymbolResolver.default()
    if config_path:
        try:
            resolver = DumpiConfig.load(config_path).build_resolver()
        except (DumpiAsciiError, FileNotFoundError) as e:
            console.print(f"[red]Error:[/] {escape(str(e))}")
            raise typer.Exit(1)
    lookup = resolver.get(cat)

    if value is not None:
        typer.echo(f"{value}\t{lookup(value)}")
        return

    if not hasattr(lookup, 'entries'):
        console.print(f"[yellow]No name table for {cat.value}[/]")
        raise typer.Exit(1)

    table = Table(title=f"{cat.value} symbols")
    table.add_column("Value", justify="right")
    table.add_column("Label")
    for number, name in lookup.entries():
        table.add_row(str(number), name)
    Console().print(table)


# === CONFIG COMMAND ===

@app.command("config")
def config_cmd(
    action: str = typer.Argument(..., help="Action: init|validate|dump"),
    path: Optional[Path] = typer.Argument(None, help="Config file path"),
):
    """Configuration management."""
    if action == "init":
        typer.echo(generate_default_config())

    elif action == "validate":
        if not path:
            console.print("[red]Path required for validate[/]")
            raise typer.Exit(1)
        try:
            cfg = DumpiConfig.load(path)
        except (DumpiAsciiError, FileNotFoundError) as e:
            console.print(f"[red]Error:[/] {escape(str(e))}")
            raise typer.Exit(1)

        errors = cfg.validate()
        if errors:
            error = ConversionError(code=ErrorCode.E3002_VALIDATION_FAILED, context={'path': str(path)})
            console.print(f"[red]{error.message}[/]")
            for e in errors:
                console.print(f"  - {e}")
            raise typer.Exit(1)
        typer.echo(f"Valid: {path}")

    elif action == "dump":
        cfg = DumpiConfig.load(path) if path else load_config()
        typer.echo(cfg.to_yaml())

    else:
        console.print(f"[red]Unknown action:[/] {action}")
        console.print("Valid actions: init, validate, dump")
        raise typer.Exit(1)


# === VERSION COMMAND ===

@app.command()
def version():
    """Show version."""
    typer.echo(f"dumpi-ascii {__version__}")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
