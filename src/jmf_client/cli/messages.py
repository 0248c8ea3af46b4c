"""CLI: jmf submit|queue|query"""

from pathlib import Path
from typing import Optional

import click

from jmf_client.message import Envelope


def _run(send, device_id, json_output):
    from jmf_client.cli.main import _run
    return _run(send, device_id, json_output)


@click.command("submit")
@click.argument("jmf_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--url", default=None, help="JMF server URL (defaults to configured server_url)")
@click.option("--device", "device_id", default=None, help="DeviceID to stamp on the message")
@click.option("--json-output", "--json", is_flag=True)
def submit_cmd(jmf_file: Path, url: Optional[str], device_id: Optional[str], json_output: bool):
    """Submit an existing JMF document."""

    def _send(client):
        envelope = Envelope.from_bytes(jmf_file.read_bytes())
        if device_id:
            envelope.set_device(device_id)
        return client.submit(envelope, url=url)

    _run(_send, device_id, json_output)


@click.command("queue")
@click.argument("jdf_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--url", default=None, help="JMF server URL (defaults to configured server_url)")
@click.option("--device", "device_id", default=None, help="DeviceID to stamp on the message")
@click.option("--json-output", "--json", is_flag=True)
def queue_cmd(jdf_file: Path, url: Optional[str], device_id: Optional[str], json_output: bool):
    """Submit a JDF file as a SubmitQueueEntry MIME package."""
    _run(lambda client: client.submit_queue_entry(jdf_file.resolve(), url=url), device_id, json_output)


@click.command("query")
@click.argument("query_type")
@click.option("--url", default=None, help="JMF server URL (defaults to configured server_url)")
@click.option("--device", "device_id", default=None, help="DeviceID to stamp on the message")
@click.option("--json-output", "--json", is_flag=True)
def query_cmd(query_type: str, url: Optional[str], device_id: Optional[str], json_output: bool):
    """Send a bare query, e.g. KnownDevices or QueueStatus."""
    _run(lambda client: client.query(query_type, url=url), device_id, json_output)
