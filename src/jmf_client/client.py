"""
JMFClient — main entry point wiring configuration, transport and dispatcher.
"""

import logging
from pathlib import Path
from typing import Any, Optional

import httpx

from jmf_client.config import ClientConfig
from jmf_client.dispatcher import DEFAULT_ATTEMPT_LIMIT, Dispatcher
from jmf_client.message import DEFAULT_SENDER_ID, LOCAL_REFERENCE_SCHEME, Envelope
from jmf_client.mime import MimePackager
from jmf_client.models.response import JMFResponse
from jmf_client.transport.http import DEFAULT_TIMEOUT, HttpClient


class JMFClient:
    """Synchronous JMF client. One submission at a time per instance."""

    def __init__(
        self,
        server_url: Optional[str] = None,
        device_id: Optional[str] = None,
        sender_id: str = DEFAULT_SENDER_ID,
        timeout: float = DEFAULT_TIMEOUT,
        attempt_limit: int = DEFAULT_ATTEMPT_LIMIT,
        base_dir: Optional[Path] = None,
        transport: Optional[httpx.BaseTransport] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._device_id = device_id
        self._sender_id = sender_id
        self.http = HttpClient(timeout=timeout, transport=transport)
        self.dispatcher = Dispatcher(
            self.http,
            server_url=server_url,
            attempt_limit=attempt_limit,
            packager=MimePackager(base_dir=base_dir),
            logger=logger,
        )

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> "JMFClient":
        return cls(
            server_url=config.server_url,
            device_id=config.device_id,
            sender_id=config.sender_id,
            timeout=config.timeout,
            attempt_limit=config.attempt_limit,
            **kwargs,
        )

    def new_message(self) -> Envelope:
        """An empty envelope carrying this client's SenderID and DeviceID."""
        envelope = Envelope(sender_id=self._sender_id)
        if self._device_id:
            envelope.set_device(self._device_id)
        return envelope

    def submit(self, envelope: Envelope, url: Optional[str] = None, reinitialize: bool = False) -> JMFResponse:
        return self.dispatcher.submit(envelope, url=url, reinitialize=reinitialize)

    def submit_queue_entry(self, jdf_path: Path, url: Optional[str] = None) -> JMFResponse:
        """Send a local JDF file as a SubmitQueueEntry MIME package."""
        envelope = self.new_message().submit_queue_entry(f"{LOCAL_REFERENCE_SCHEME}{jdf_path}")
        return self.submit(envelope, url=url)

    def query(self, query_type: str, url: Optional[str] = None) -> JMFResponse:
        envelope = self.new_message()
        envelope.add_query(query_type)
        return self.submit(envelope, url=url)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "JMFClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
