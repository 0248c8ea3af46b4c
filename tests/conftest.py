from typing import Union

import httpx
import pytest

from jmf_client.config import ENV_VARS
from jmf_client.models.response import JMFResponse

SERVER_URL = "http://jmf.test/jmf"

Reply = Union[bytes, Exception]


def response_xml(return_code: int = 0, comment: str = "", type: str = "SubmitQueueEntry") -> bytes:
    return JMFResponse(return_code=return_code, comment=comment, type=type).to_xml()


class FakeServer:
    """Answers POSTs from a script of replies; the last reply repeats."""

    def __init__(self, *replies: Reply):
        self.replies = list(replies)
        self.requests: list[httpx.Request] = []

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return httpx.Response(200, content=reply)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def ok_server() -> FakeServer:
    return FakeServer(response_xml(0))
