"""CLI commands for mesc.

A thin consumer of the library API: load the config selected by MESC_*,
resolve or list endpoints, render them with rich.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from mesc import __version__
from mesc.chain_ids import to_chain_id
from mesc.cli.printing import (
    print_defaults,
    print_endpoint_json,
    print_endpoint_pretty,
    print_endpoints,
)
from mesc.cli.shared.logging_utils import configure_cli_logging
from mesc.config.loader import ConfigMode, get_config_mode, load_config, read_settings
from mesc.config.schema import Endpoint, RpcConfig
from mesc.config.validate import validate_config
from mesc.query import EndpointQuery
from mesc.resolve import find_endpoints, get_endpoint_by_query, resolve_endpoint
from mesc.utils.exceptions import (
    IntegrityError,
    InvalidInputError,
    MescError,
    MissingEndpointError,
    format_error,
)

app = typer.Typer(
    name="mesc",
    help="mesc - Multiple Endpoint Shared Configuration",
    no_args_is_help=True,
)

console = Console()


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[red]{escape(format_error(exc))}[/red]")
    raise typer.Exit(1)


def _load() -> RpcConfig:
    try:
        return load_config()
    except MescError as e:
        _fail(e)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"mesc v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log resolution steps to stderr"),
    version: bool = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Resolve RPC endpoints from a shared MESC config."""
    configure_cli_logging(verbose)


@app.command("status")
def status() -> None:
    """Show config mode, source and validation result."""
    try:
        settings = read_settings()
        mode = get_config_mode(settings)
    except MescError as e:
        _fail(e)
    console.print(f"Mode: [cyan]{mode.value}[/cyan]")
    if mode is ConfigMode.DISABLED:
        console.print("[yellow]MESC is disabled[/yellow]")
        return
    if mode is ConfigMode.PATH:
        path = Path(settings.path or "").expanduser()
        mark = "[green]✓[/green]" if path.exists() else "[red]✗[/red]"
        console.print(f"Source: {escape(str(path))} {mark}")
    else:
        console.print("Source: MESC_ENV")

    try:
        config = load_config(settings, validate=False)
    except MescError as e:
        _fail(e)
    console.print(f"Version: {escape(config.mesc_version)}")
    console.print(f"Endpoints: {len(config.endpoints)}")
    console.print(f"Profiles: {len(config.profiles)}")
    console.print(f"Network names: {len(config.network_names)}")
    try:
        validate_config(config, strict_chain_ids=settings.strict_chain_ids)
    except IntegrityError as e:
        console.print("Validation: [red]✗[/red]")
        for issue in e.issues:
            console.print(f"  - {escape(issue)}")
        raise typer.Exit(1)
    console.print("Validation: [green]✓[/green]")


@app.command("ls")
def list_endpoints(
    network: str = typer.Option(None, "--network", "-n", help="Chain id or network name"),
    name: str = typer.Option(None, "--name", help="Substring of endpoint name"),
    url: str = typer.Option(None, "--url", help="Substring of endpoint url"),
    reveal: bool = typer.Option(False, "--reveal", help="Show full urls"),
    json_output: bool = typer.Option(False, "--json", help="Print endpoints as JSON lines"),
) -> None:
    """List endpoints, optionally filtered."""
    config = _load()
    try:
        query = _build_query(config, network, name, url)
        endpoints = find_endpoints(query, config=config)
    except MescError as e:
        _fail(e)
    if json_output:
        for endpoint in endpoints:
            print_endpoint_json(endpoint)
        return
    print_endpoints(console, endpoints, reveal=reveal)


@app.command("defaults")
def defaults() -> None:
    """Show the global default, network defaults and profiles."""
    config = _load()
    try:
        print_defaults(console, config)
    except MescError as e:
        _fail(e)


@app.command("endpoint")
def endpoint(
    query: str = typer.Argument(None, help="Endpoint name, network name or chain id"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to resolve with"),
    network: str = typer.Option(None, "--network", "-n", help="Chain id or network name"),
    name: str = typer.Option(None, "--name", help="Substring of endpoint name"),
    url: str = typer.Option(None, "--url", help="Substring of endpoint url"),
    json_output: bool = typer.Option(False, "--json", help="Print endpoint as JSON"),
) -> None:
    """Resolve one endpoint and print it."""
    config = _load()
    try:
        found = _resolve(config, query, profile, network, name, url)
    except MescError as e:
        _fail(e)
    if json_output:
        print_endpoint_json(found)
    else:
        print_endpoint_pretty(console, found)


@app.command("url")
def endpoint_url(
    query: str = typer.Argument(None, help="Endpoint name, network name or chain id"),
    profile: str = typer.Option(None, "--profile", "-p", help="Profile to resolve with"),
    network: str = typer.Option(None, "--network", "-n", help="Chain id or network name"),
) -> None:
    """Print only the url of the resolved endpoint."""
    config = _load()
    try:
        found = _resolve(config, query, profile, network, None, None)
    except MescError as e:
        _fail(e)
    typer.echo(found.url)


def _build_query(
    config: RpcConfig, network: str | None, name: str | None, url: str | None
) -> EndpointQuery:
    query = EndpointQuery()
    if network is not None:
        query = query.with_chain_id(to_chain_id(network, config))
    if name is not None:
        query = query.with_name(name)
    if url is not None:
        query = query.with_url(url)
    return query


def _resolve(
    config: RpcConfig,
    query: str | None,
    profile: str | None,
    network: str | None,
    name: str | None,
    url: str | None,
) -> Endpoint:
    if query is not None:
        if network is not None or name is not None or url is not None:
            raise InvalidInputError(
                "QUERY cannot be combined with --network, --name or --url", field="query"
            )
        found = get_endpoint_by_query(query, profile, config=config)
        if found is None:
            raise MissingEndpointError(f"No endpoint matches {query!r}")
        return found
    if name is not None or url is not None:
        return resolve_endpoint(config, profile, _build_query(config, network, name, url))
    return resolve_endpoint(config, profile, chain_id=network)
