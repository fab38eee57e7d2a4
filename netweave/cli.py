"""NetWeave CLI."""

import asyncio
import sys
from pathlib import Path
from typing import NoReturn

import click
import rich_click
import yaml

from .core.application import Application
from .core.logging import setup_logging
from .core.paramtypes import SecurityType, YamlFileType
from .models.common import load_settings
from .models.converters import connection_from_wire
from .models.network import AccessPoint, Connection, Device


# Configure rich-click
rich_click.rich_click.USE_RICH_MARKUP = True
rich_click.rich_click.SHOW_ARGUMENTS = True
rich_click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
rich_click.rich_click.USE_MARKDOWN = False
rich_click.rich_click.STYLE_ERRORS_SUGGESTION = "dim italic"
rich_click.rich_click.MAX_WIDTH = 100


def _load_connection(path: str) -> Connection:
    """Read a connection in wire shape from a YAML file."""

    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise click.BadParameter(f"{path}: expected a mapping at the top level", param_hint="FILE")
    return connection_from_wire(data)


def _fail(app: Application, message: str) -> NoReturn:
    app.console.print(f"[red]{message}[/red]")
    sys.exit(1)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "config_path",
    default=None,
    type=YamlFileType("Settings"),
    help="Path to client settings YAML.",
)
@click.option("--url", default=None, help="Backend API URL, e.g. http://localhost/api.")
@click.option("--token", default=None, help="Bearer token for the backend API.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, url: str | None, token: str | None, debug: bool):
    """NetWeave network configuration client."""

    app = Application.current()
    app.debug = debug
    app.settings = load_settings(config_path, url=url, token=token)
    setup_logging(debug)

    ctx.obj = {"app": app}


@cli.command()
@click.pass_obj
def devices(obj):
    """List network devices and their running configuration."""

    app: Application = obj["app"]
    outcome = asyncio.run(app.network.fetch_devices())
    if not outcome.ok:
        _fail(app, f"Could not read devices: {outcome.error}")

    Device.display_many(
        outcome.value,
        columns=["iface", "type", "state", "mac_address", "addresses"],
        console=app.console,
        title="Devices",
    )


@cli.command()
@click.pass_obj
def connections(obj):
    """List connection profiles."""

    app: Application = obj["app"]
    outcome = asyncio.run(app.network.fetch_connections())
    if not outcome.ok:
        _fail(app, f"Could not read connections: {outcome.error}")

    Connection.display_many(
        outcome.value,
        columns=["id", "type", "iface", "method4", "addresses", "gateway4"],
        console=app.console,
        title="Connections",
    )


@cli.group()
def connection():
    """Manage a single connection profile."""


@connection.command("show")
@click.argument("connection_id")
@click.pass_obj
def show_connection(obj, connection_id: str):
    """Show one connection."""

    app: Application = obj["app"]
    conn = asyncio.run(app.network.get_connection(connection_id))
    if conn is None:
        _fail(app, f"Connection not found: {connection_id}")
    conn.display_tree(console=app.console, title=conn.id)


@connection.command("add")
@click.argument("path", metavar="FILE", type=YamlFileType("Connection"))
@click.pass_obj
def add_connection(obj, path: str):
    """Add a connection from a YAML file and apply it."""

    app: Application = obj["app"]
    added = asyncio.run(app.network.connect_to(_load_connection(path)))
    if added is None:
        _fail(app, "The backend rejected the connection.")
    app.console.print(f"[green]Added connection {added.id}.[/green]")


@connection.command("update")
@click.argument("path", metavar="FILE", type=YamlFileType("Connection"))
@click.pass_obj
def update_connection(obj, path: str):
    """Update a connection from a YAML file and apply it."""

    app: Application = obj["app"]
    conn = _load_connection(path)
    outcome = asyncio.run(app.network.update_connection_outcome(conn))
    if not outcome.ok:
        _fail(app, f"Update of {conn.id} failed during {outcome.failed_phase}: {outcome.error}")
    app.console.print(f"[green]Updated connection {conn.id}.[/green]")


@connection.command("delete")
@click.argument("connection_id")
@click.pass_obj
def delete_connection(obj, connection_id: str):
    """Delete a connection and apply."""

    app: Application = obj["app"]
    outcome = asyncio.run(app.network.delete_connection_outcome(connection_id))
    if not outcome.ok:
        _fail(app, f"Deletion of {connection_id} failed during {outcome.failed_phase}: {outcome.error}")
    app.console.print(f"[green]Deleted connection {connection_id}.[/green]")


@cli.command()
@click.pass_obj
def wifi(obj):
    """List visible wireless access points."""

    app: Application = obj["app"]
    outcome = asyncio.run(app.network.fetch_access_points())
    if not outcome.ok:
        _fail(app, f"Could not read access points: {outcome.error}")

    access_points = sorted(outcome.value, key=lambda ap: ap.strength, reverse=True)
    AccessPoint.display_many(
        access_points,
        columns=["ssid", "hw_address", "strength", "security"],
        console=app.console,
        title="Access points",
    )


@cli.command()
@click.argument("ssid")
@click.option("--password", default=None, help="Pre-shared key.")
@click.option("--security", default=None, type=SecurityType(), help="Key management.")
@click.option("--hidden", is_flag=True, help="The network does not broadcast its SSID.")
@click.pass_obj
def connect(obj, ssid: str, password: str | None, security: str | None, hidden: bool):
    """Create a wireless connection and connect to it."""

    app: Application = obj["app"]
    conn = asyncio.run(
        app.network.add_and_connect_to(ssid, security=security, password=password, hidden=hidden),
    )
    if conn is None:
        _fail(app, f"Could not connect to {ssid}.")
    app.console.print(f"[green]Connecting to {ssid}.[/green]")


@cli.command()
@click.pass_obj
def apply(obj):
    """Apply staged network changes."""

    app: Application = obj["app"]
    outcome = asyncio.run(app.network.apply())
    if not outcome.ok:
        _fail(app, f"Apply failed: {outcome.error}")
    app.console.print("[green]Network changes applied.[/green]")


@cli.command()
@click.pass_obj
def settings(obj):
    """Show general network settings."""

    app: Application = obj["app"]
    outcome = asyncio.run(app.network.fetch_settings())
    if not outcome.ok:
        _fail(app, f"Could not read settings: {outcome.error}")
    outcome.value.display(console=app.console, title="Network settings")
