"""
JMF client CLI — `jmf` command.

Commands:
  jmf submit <file>        Submit an existing JMF document
  jmf queue <jdf>          Submit a JDF file as a SubmitQueueEntry MIME package
  jmf query <type>         Send a bare query (KnownDevices, QueueStatus, ...)
  jmf config <cmd>         Show or change ~/.jmf/config.json
"""

import json
import logging
from typing import Callable

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install jmf-client[cli]")

from jmf_client.client import JMFClient
from jmf_client.config import load_config
from jmf_client.errors import JMFError, ReturnCodeError
from jmf_client.models.response import JMFResponse

console = Console()


def _get_client(device_id=None) -> JMFClient:
    cfg = load_config()
    if device_id:
        cfg = cfg.model_copy(update={"device_id": device_id})
    return JMFClient.from_config(cfg)


def _print_response(response: JMFResponse, json_output: bool) -> None:
    if json_output:
        click.echo(json.dumps(response.model_dump(), indent=2))
        return
    label = f"{response.type} " if response.type else ""
    console.print(f"[green]{label}OK[/green] (ReturnCode {response.return_code})")
    if response.comment:
        console.print(f"[dim]{response.comment}[/dim]")


def _run(send: Callable[[JMFClient], JMFResponse], device_id, json_output: bool) -> None:
    try:
        with _get_client(device_id) as client:
            with console.status("Sending JMF message..."):
                response = send(client)
    except ReturnCodeError as e:
        console.print(f"[red]JMF server refused the message (ReturnCode {e.return_code}): {e}[/red]")
        raise SystemExit(1)
    except JMFError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    _print_response(response, json_output)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log attempts, payloads and responses.")
def main(verbose):
    """JMF client CLI — submit jobs and queries to a JMF device."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler(console=console)])


# Register subcommands from separate modules
from jmf_client.cli.config import config
from jmf_client.cli.messages import query_cmd, queue_cmd, submit_cmd

main.add_command(config)
main.add_command(submit_cmd)
main.add_command(queue_cmd)
main.add_command(query_cmd)


if __name__ == "__main__":
    main()
