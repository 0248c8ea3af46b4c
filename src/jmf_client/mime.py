"""
MIME packaging for SubmitQueueEntry commands whose JDF is referenced
with a ``cid://`` URL.

The package is a multipart/related body with two base64 parts: the JMF
envelope (Content-ID ``1.JMF``) and the JDF file (Content-ID ``1.JDF``).
The envelope's QueueSubmissionParams/@URL is rewritten to
``cid://1.JDF`` before it is serialised, so the inline reference the
receiver sees matches the second part.
"""

import base64
import logging
import secrets
import string
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from jmf_client.errors import ConfigurationError
from jmf_client.message import (
    JDF_MEDIA_TYPE,
    JMF_MEDIA_TYPE,
    LOCAL_REFERENCE_SCHEME,
    Envelope,
)

log = logging.getLogger(__name__)

MULTIPART_MEDIA_TYPE = "multipart/related"
ENVELOPE_CONTENT_ID = "1.JMF"
TICKET_CONTENT_ID = "1.JDF"
DEFAULT_DESCRIPTION = "JMF client MIME package"
BOUNDARY_LENGTH = 26
LINE_WIDTH = 76
CRLF = b"\r\n"

_BOUNDARY_ALPHABET = string.ascii_letters + string.digits


def make_boundary(length: int = BOUNDARY_LENGTH) -> str:
    return "".join(secrets.choice(_BOUNDARY_ALPHABET) for _ in range(length))


def wrap_base64(payload: bytes, width: int = LINE_WIDTH) -> bytes:
    encoded = base64.b64encode(payload)
    return CRLF.join(encoded[i:i + width] for i in range(0, len(encoded), width))


class MimePart(BaseModel):
    content_id: str
    media_type: str
    payload: bytes
    transfer_encoding: str = "base64"

    def encode(self) -> bytes:
        headers = (
            f"Content-ID: {self.content_id}\r\n"
            f"Content-Type: {self.media_type}\r\n"
            f"Content-Transfer-Encoding: {self.transfer_encoding}\r\n"
            "\r\n"
        )
        return headers.encode("ascii") + wrap_base64(self.payload) + CRLF


class MimePackage(BaseModel):
    boundary: str
    parts: list[MimePart]
    description: str = DEFAULT_DESCRIPTION

    @property
    def content_type(self) -> str:
        return f'{MULTIPART_MEDIA_TYPE}; boundary="{self.boundary}"'

    def to_bytes(self) -> bytes:
        # Base64 lines never begin with "--", so the delimiter cannot occur in a part body.
        delimiter = f"--{self.boundary}".encode("ascii")
        header = (
            "MIME-Version: 1.0\r\n"
            f"Content-Description: {self.description}\r\n"
            f"Content-Type: {self.content_type}\r\n"
            "\r\n"
        ).encode("ascii")
        body = [header]
        for part in self.parts:
            body.append(delimiter + CRLF)
            body.append(part.encode())
        body.append(delimiter + b"--" + CRLF)
        return b"".join(body)


class MimePackager:
    def __init__(self, base_dir: Optional[Path] = None, description: str = DEFAULT_DESCRIPTION):
        self._base_dir = Path(base_dir) if base_dir is not None else None
        self._description = description

    def resolve(self, url: str) -> Path:
        """Map a ``cid://`` URL to the local file it names."""
        path = Path(url[len(LOCAL_REFERENCE_SCHEME):])
        if self._base_dir is not None and not path.is_absolute():
            path = self._base_dir / path
        return path

    def build(self, envelope: Envelope) -> MimePackage:
        url = envelope.submission_url
        if not url or not url.startswith(LOCAL_REFERENCE_SCHEME):
            raise ConfigurationError(f"Queue submission URL is not a {LOCAL_REFERENCE_SCHEME} reference: {url!r}")

        path = self.resolve(url)
        try:
            ticket = path.read_bytes()
        except OSError as e:
            raise ConfigurationError(f"Cannot read referenced JDF file {path}: {e}", {"path": str(path)})

        envelope.submission_url = LOCAL_REFERENCE_SCHEME + TICKET_CONTENT_ID
        log.debug("Packaging %s (%d bytes) as %s", path, len(ticket), TICKET_CONTENT_ID)

        return MimePackage(
            boundary=make_boundary(),
            description=self._description,
            parts=[
                MimePart(content_id=ENVELOPE_CONTENT_ID, media_type=JMF_MEDIA_TYPE, payload=envelope.serialize()),
                MimePart(content_id=TICKET_CONTENT_ID, media_type=JDF_MEDIA_TYPE, payload=ticket),
            ],
        )

    def package(self, envelope: Envelope) -> bytes:
        return self.build(envelope).to_bytes()
