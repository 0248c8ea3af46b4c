"""
JMF client error types — one class per terminal submission outcome.
"""

from typing import Any, Optional


class JMFError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class TransportError(JMFError):
    """A single HTTP attempt produced no response bytes."""

    def __init__(self, message: str):
        super().__init__("transport_error", message)


class SubmissionError(JMFError):
    def __init__(self, message: str = "Failed to communicate with the JMF server", attempts: int = 0, reason: str = ""):
        super().__init__("submission_error", message, {"attempts": attempts, "reason": reason})
        self.reason = reason


class ResponseParseError(JMFError):
    def __init__(self, message: str, raw: bytes = b""):
        super().__init__("response_parse_error", message, {"raw": raw})
        self.raw = raw


class ReturnCodeError(JMFError):
    """The server answered with a positive ReturnCode. The message is the server's comment."""

    def __init__(self, message: str, return_code: int, raw: bytes = b""):
        super().__init__("return_code_error", message, {"return_code": return_code})
        self.return_code = return_code
        self.raw = raw


class ConfigurationError(JMFError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("configuration_error", message, details)
