"""
Dispatcher — stamps an envelope, picks a plain or MIME payload, and
posts it with a bounded number of attempts.

Each attempt ends in one of four states:

    transport    no response bytes                 -> SubmissionError
    parse        bytes are not a JMF response      -> ResponseParseError
    return_code  ReturnCode > 0                    -> ReturnCodeError
    success      ReturnCode <= 0                   -> returned

Failures before the last attempt are logged and retried immediately.
The last attempt's failure is raised.
"""

import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from jmf_client.errors import (
    ConfigurationError,
    ResponseParseError,
    ReturnCodeError,
    SubmissionError,
    TransportError,
)
from jmf_client.message import JMF_MEDIA_TYPE, Envelope
from jmf_client.mime import MimePackager
from jmf_client.models.response import Failure, JMFResponse
from jmf_client.transport.http import HttpClient
from jmf_client.validator import ResponseValidator

DEFAULT_ATTEMPT_LIMIT = 2


class Outcome(str, Enum):
    TRANSPORT = "transport"
    PARSE = "parse"
    RETURN_CODE = "return_code"
    SUCCESS = "success"


class SubmissionAttempt(BaseModel):
    index: int
    outcome: Outcome
    raw: Optional[bytes] = None
    message: str = ""


def _text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


class Dispatcher:
    def __init__(
        self,
        http: HttpClient,
        server_url: Optional[str] = None,
        attempt_limit: int = DEFAULT_ATTEMPT_LIMIT,
        packager: Optional[MimePackager] = None,
        validator: Optional[ResponseValidator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if attempt_limit < 1:
            raise ConfigurationError(f"attempt_limit must be at least 1, got {attempt_limit}")
        self._http = http
        self._server_url = server_url
        self._attempt_limit = attempt_limit
        self._packager = packager or MimePackager()
        self._validator = validator or ResponseValidator()
        self._log = logger or logging.getLogger(__name__)
        self.attempts: list[SubmissionAttempt] = []

    @property
    def server_url(self) -> Optional[str]:
        return self._server_url

    @property
    def attempt_limit(self) -> int:
        return self._attempt_limit

    def submit(self, envelope: Envelope, url: Optional[str] = None, reinitialize: bool = False) -> JMFResponse:
        """Send ``envelope`` and return the server's validated Response.

        With ``reinitialize`` the envelope is reset to an empty message of
        the same family after every attempt, successful or not. The payload
        is built once up front, so retries resend the original message.
        """
        target = url or self._server_url
        if not target:
            raise ConfigurationError("No JMF server URL given and no default server_url configured")
        self._http.check_url(target)

        family = envelope.family
        envelope.stamp()
        payload, content_type = self._prepare(envelope)

        self.attempts = []
        for index in range(1, self._attempt_limit + 1):
            try:
                return self._attempt(index, target, payload, content_type)
            except (SubmissionError, ResponseParseError, ReturnCodeError) as e:
                if index == self._attempt_limit:
                    raise
                self._log.debug("Attempt %d failed (%s): %s. Trying again.", index, e.code, e)
            finally:
                if reinitialize:
                    envelope.reinitialize(family)
        raise SubmissionError(attempts=self._attempt_limit)  # pragma: no cover

    def _prepare(self, envelope: Envelope) -> tuple[bytes, str]:
        if envelope.uses_local_reference:
            package = self._packager.build(envelope)
            return package.to_bytes(), package.content_type
        return envelope.serialize(), JMF_MEDIA_TYPE

    def _attempt(self, index: int, target: str, payload: bytes, content_type: str) -> JMFResponse:
        self._log.debug("Attempt: %d", index)
        self._log.debug("Payload: %s", _text(payload))

        try:
            raw = self._http.post(target, payload, content_type)
        except TransportError as e:
            self._record(index, Outcome.TRANSPORT, None, str(e))
            raise SubmissionError(attempts=index, reason=str(e)) from e
        self._log.debug("Response: %s", _text(raw))

        try:
            response = self._validator.parse(raw)
        except ResponseParseError as e:
            self._record(index, Outcome.PARSE, raw, str(e))
            raise

        result = self._validator.classify(response)
        if isinstance(result, Failure):
            self._record(index, Outcome.RETURN_CODE, raw, result.message)
            raise ReturnCodeError(result.message, result.return_code, raw)

        self._record(index, Outcome.SUCCESS, raw)
        return response

    def _record(self, index: int, outcome: Outcome, raw: Optional[bytes], message: str = "") -> None:
        self.attempts.append(SubmissionAttempt(index=index, outcome=outcome, raw=raw, message=message))
