"""Terminal rendering for endpoints and defaults."""

from __future__ import annotations

import json

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mesc.chain_ids import NULL_CHAIN_ID
from mesc.config.schema import Endpoint, RpcConfig
from mesc.resolve import get_default_endpoint

MASKED_URL = "*" * 8


def print_endpoint_json(endpoint: Endpoint) -> None:
    typer.echo(json.dumps(endpoint.model_dump(mode="json"), ensure_ascii=False))


def print_endpoint_pretty(console: Console, endpoint: Endpoint) -> None:
    console.print(f"Endpoint: [cyan]{escape(endpoint.name)}[/cyan]")
    console.print(f"- url: {escape(endpoint.url)}")
    console.print(f"- chain_id: {endpoint.chain_id_string()}")
    console.print(f"- metadata: {escape(json.dumps(endpoint.endpoint_metadata, ensure_ascii=False))}")


def sort_endpoints(endpoints: list[Endpoint]) -> list[Endpoint]:
    """Order by chain id (endpoints without one first), then name."""
    return sorted(endpoints, key=lambda e: ((e.chain_id or NULL_CHAIN_ID).sort_key, e.name))


def print_endpoints(console: Console, endpoints: list[Endpoint], reveal: bool = False) -> None:
    if not endpoints:
        console.print(escape("[none]"))
        return
    table = Table()
    table.add_column("endpoint", style="cyan")
    table.add_column("network")
    table.add_column("url")
    for endpoint in sort_endpoints(endpoints):
        table.add_row(
            escape(endpoint.name),
            endpoint.chain_id_string(),
            escape(endpoint.url) if reveal else MASKED_URL,
        )
    console.print(table)


def print_defaults(console: Console, config: RpcConfig) -> None:
    table = Table()
    table.add_column("", style="dim")
    table.add_column("network")
    table.add_column("endpoint", style="cyan")
    default = get_default_endpoint(config=config)
    if default is not None:
        table.add_row("global default", default.chain_id_string(), escape(default.name))
    else:
        table.add_row("global default", "-", "-")
    for chain_id in sorted(config.network_defaults):
        table.add_row("network default", str(chain_id), escape(config.network_defaults[chain_id]))
    console.print(table)

    if config.profiles:
        console.print()
        console.print("[bold]Profiles[/bold]")
        for name in sorted(config.profiles):
            profile = config.profiles[name]
            overrides = len(profile.network_defaults)
            default_name = profile.default_endpoint or "-"
            console.print(
                f"- {escape(name)}: default {escape(default_name)}, {overrides} network override(s)"
            )
