"""
Command-line interface for postless.

``postless`` with no subcommand starts the interactive session.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from postless import __version__
from postless.config import settings
from postless.exceptions import PostlessError
from postless.logger import get_logger, setup_logger
from postless.session import Session
from postless.storage.config_store import ConfigStore, WorkspacePaths
from postless.storage.repository import CollectionRepository

# Initialize console for rich output
console = Console()
logger = get_logger(__name__)


def setup_cli_logging(verbose: bool = False) -> None:
    """Setup logging for CLI usage."""
    if verbose:
        setup_logger(level="DEBUG", log_format="simple")
    else:
        setup_logger(level=settings.log_level, log_format=settings.log_format)


def _workdir(ctx: click.Context) -> Path:
    return ctx.obj["workdir"]


@click.group(invoke_without_command=True)
@click.option(
    "--workdir",
    "-w",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory containing the workspace (default: current directory)"
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(version=__version__, prog_name="postless")
@click.pass_context
def cli(ctx: click.Context, workdir: Optional[Path], verbose: bool) -> None:
    """postless - browse and execute saved HTTP requests."""
    setup_cli_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["workdir"] = (workdir or Path.cwd()).resolve()

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.pass_context
def run(ctx: click.Context) -> None:
    """Open the interactive collection browser."""
    session = Session(_workdir(ctx))
    try:
        exit_code = session.run()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        exit_code = 130
    ctx.exit(exit_code)


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show the workspace configuration and collections."""
    paths = WorkspacePaths(_workdir(ctx))
    store = ConfigStore(paths)
    repository = CollectionRepository(paths)

    try:
        store.check_workspace()
        config = store.load_config()
        repository.check_requests_dir()
        collections = repository.load_collections()
    except PostlessError as e:
        console.print(Text(f"⚠️  {e}", style="red"))
        ctx.exit(1)
        return

    info_table = Table(show_header=False, box=None)
    info_table.add_column("Property", style="cyan")
    info_table.add_column("Value", style="white")
    info_table.add_row("Version", __version__)
    info_table.add_row("Workspace", Text(str(paths.root)))
    info_table.add_row("Base URL", Text(config.base_url))
    info_table.add_row("Timeout", f"{config.resolve_timeout()}s")
    info_table.add_row("Global Headers", str(len(config.global_headers or {})))
    console.print(Panel(info_table, title="Workspace", border_style="green"))

    collection_table = Table(show_header=True)
    collection_table.add_column("Collection", style="cyan")
    collection_table.add_column("Requests", style="white", justify="right")
    for collection in collections:
        collection_table.add_row(Text(collection.name), str(len(collection.requests)))
    console.print(Panel(collection_table, title="Collections", border_style="yellow"))


@cli.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create a workspace with default config in the working directory."""
    paths = WorkspacePaths(_workdir(ctx))
    try:
        created = ConfigStore(paths).init_workspace()
    except PostlessError as e:
        console.print(Text(f"Failed to initialize workspace: {e}", style="red"))
        ctx.exit(1)
        return

    if created:
        console.print(Text(f"✓ Workspace ready at {paths.root}", style="green"))
    else:
        console.print(Text(f"Workspace already exists at {paths.root}", style="yellow"))


def main_entry_point():
    """Entry point for the installed package."""
    cli()


if __name__ == "__main__":
    sys.exit(cli())
