"""CLI: jmf config show|set"""

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from jmf_client.config import CONFIG_FILE, ClientConfig, load_config, save_config
from jmf_client.errors import ConfigurationError

console = Console()


@click.group()
def config():
    """Client configuration."""


@config.command("show")
def config_show():
    """Show the effective configuration (file + environment)."""
    try:
        cfg = load_config()
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    table = Table(title=str(CONFIG_FILE))
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key, value in cfg.model_dump().items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


@config.command("set")
@click.argument("key", type=click.Choice(sorted(ClientConfig.model_fields)))
@click.argument("value")
def config_set(key: str, value: str):
    """Store a configuration value in ~/.jmf/config.json."""
    try:
        current = load_config(environ={})
        cfg = ClientConfig.model_validate({**current.model_dump(), key: value})
    except (ConfigurationError, ValidationError) as e:
        console.print(f"[red]Invalid value for {key}: {e}[/red]")
        raise SystemExit(1)
    path = save_config(cfg)
    console.print(f"[green]{key} saved to {path}[/green]")
