"""
Blocking HTTP transport for JMF messages.
"""

import logging
from typing import Optional

import httpx

from jmf_client.errors import ConfigurationError, TransportError

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class HttpClient:
    def __init__(self, timeout: float = DEFAULT_TIMEOUT, transport: Optional[httpx.BaseTransport] = None):
        self._client = httpx.Client(
            headers={"User-Agent": "jmf-client/0.1.0", "Accept": "application/vnd.cip4-jmf+xml, text/xml"},
            timeout=timeout,
            transport=transport,
        )

    @staticmethod
    def check_url(url: str) -> httpx.URL:
        """Parse ``url``, rejecting anything that is not an absolute http(s) URL."""
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid JMF server URL {url!r}: {e}", {"url": url})
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise ConfigurationError(f"JMF server URL must be an absolute http(s) URL: {url!r}", {"url": url})
        return parsed

    def post(self, url: str, content: bytes, content_type: str) -> bytes:
        """POST ``content`` and return the response body.

        Any HTTP status yields the body; servers report JMF failures in the
        body, not the status line. Only a missing response is an error.
        """
        try:
            resp = self._client.post(url, content=content, headers={"Content-Type": content_type})
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid JMF server URL {url!r}: {e}", {"url": url})
        except httpx.HTTPError as e:
            raise TransportError(f"POST {url} failed: {e}") from e
        if resp.status_code >= 400:
            log.debug("JMF server %s answered HTTP %s", url, resp.status_code)
        return resp.content

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
