"""Command line interface for CMX versions."""

import logging
import os
import sys
from collections.abc import Iterable
from json import dumps
from typing import Literal, NoReturn

from catalog import (
    CatalogEntry,
    ConfigurationError,
    MalformedVersionError,
    Settings,
    TransportError,
    VersionSelection,
    fetch_catalog,
    load_settings,
    missing_distributions,
    select_latest,
)
from cyclopts import App
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from cmx_versions.actions import get_input, in_actions, set_failed, set_output

logger = logging.getLogger(__name__)

app = App(help="Select the latest CMX cluster version per distribution")


type Format = Literal["json", "table"]

console = Console()
err_console = Console(stderr=True)

# Action inputs and outputs
TOKEN_INPUT = "replicated-api-token"
DISTRIBUTIONS_INPUT = "include-distributions"
VERSIONS_OUTPUT = "versions-to-test"


def print_error(message: str) -> None:
    """Print error message to stderr."""
    err_console.print(f"[bold red]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print success message to stderr."""
    err_console.print(f"[bold green]✓[/] {message}")


def print_info(message: str) -> None:
    """Print info message to stderr."""
    err_console.print(f"[bold blue]i[/] {message}")


def fail(message: str) -> NoReturn:
    """Report a failed run and exit without setting any output."""
    print_error(message)
    if in_actions(os.environ):
        set_failed(message)
    sys.exit(1)


def configure_logging(*, verbose: bool = False) -> None:
    """Send library logs to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def resolve_settings(
    token: str | None,
    include_distributions: str | None,
    endpoint: str | None,
) -> Settings:
    """Resolve settings from options, falling back to action inputs."""
    try:
        return load_settings(
            token or get_input(TOKEN_INPUT, os.environ),
            include_distributions or get_input(DISTRIBUTIONS_INPUT, os.environ),
            os.environ,
            endpoint,
        )
    except ConfigurationError as e:
        fail(str(e))


def load_catalog(settings: Settings) -> list[CatalogEntry]:
    """Fetch the catalog, failing the run on transport errors."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
        transient=True,
    ) as progress:
        progress.add_task("Fetching cluster versions...", total=None)
        try:
            return fetch_catalog(settings.credential, settings.endpoint)
        except TransportError as e:
            fail(str(e))


def format_selection_table(selections: Iterable[VersionSelection]) -> None:
    """Format selected versions as a rich table."""
    table = Table(title="Versions to test")
    table.add_column("Distribution", style="bold cyan")
    table.add_column("Version", style="bold yellow")
    for selection in selections:
        table.add_row(selection["distribution"], selection["version"])
    console.print(table)


def format_catalog_table(catalog: Iterable[CatalogEntry]) -> None:
    """Format catalog entries as a rich table."""
    table = Table(title="Cluster versions")
    table.add_column("Distribution", style="bold cyan")
    table.add_column("Versions")
    for entry in catalog:
        table.add_row(entry["short_name"], ", ".join(entry["versions"]))
    console.print(table)


@app.default
@app.command
def matrix(
    *,
    token: str | None = None,
    include_distributions: str | None = None,
    endpoint: str | None = None,
    fmt: Format = "json",
    verbose: bool = False,
) -> None:
    """Select the latest version of each included distribution."""
    configure_logging(verbose=verbose)
    settings = resolve_settings(token, include_distributions, endpoint)
    print_info(f"Distributions: {', '.join(sorted(settings.include_distributions))}")

    catalog = load_catalog(settings)
    if missing := missing_distributions(catalog, settings.include_distributions):
        logger.warning("Distributions not available: %s", ", ".join(missing))

    try:
        selections = select_latest(catalog, settings.include_distributions)
    except MalformedVersionError as e:
        fail(str(e))

    output = dumps(selections)
    logger.info("Versions to test: %s", output)
    if in_actions(os.environ):
        set_output(VERSIONS_OUTPUT, output, os.environ)

    if fmt == "table":
        format_selection_table(selections)
    else:
        sys.stdout.write(f"{output}\n")
    print_success(f"Selected {len(selections)} versions to test")


@app.command
def versions(
    *,
    token: str | None = None,
    include_distributions: str | None = None,
    endpoint: str | None = None,
    fmt: Format = "table",
    latest: bool = False,
) -> None:
    """List available cluster versions."""
    configure_logging()
    settings = resolve_settings(token, include_distributions or "[]", endpoint)
    catalog = load_catalog(settings)
    if settings.include_distributions:
        catalog = [
            entry
            for entry in catalog
            if entry["short_name"] in settings.include_distributions
        ]

    if latest:
        allow_list = frozenset(entry["short_name"] for entry in catalog)
        try:
            selections = select_latest(catalog, allow_list)
        except MalformedVersionError as e:
            fail(str(e))
        if fmt == "json":
            console.print_json(dumps(selections))
        else:
            format_selection_table(selections)
        return

    if fmt == "json":
        console.print_json(dumps(catalog))
    else:
        format_catalog_table(catalog)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
