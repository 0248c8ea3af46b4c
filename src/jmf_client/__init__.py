"""
jmf-client — JMF job-messaging client for Python.

Builds JMF envelopes, packages SubmitQueueEntry commands with their JDF
as MIME, and posts them to a JMF device or controller with bounded retry.
"""

from jmf_client.client import JMFClient
from jmf_client.config import ClientConfig, load_config, save_config
from jmf_client.dispatcher import Dispatcher, SubmissionAttempt
from jmf_client.errors import (
    ConfigurationError,
    JMFError,
    ResponseParseError,
    ReturnCodeError,
    SubmissionError,
    TransportError,
)
from jmf_client.message import Envelope
from jmf_client.mime import MimePackager
from jmf_client.models.response import Failure, JMFResponse, Success
from jmf_client.validator import ResponseValidator

__version__ = "0.1.0"
__all__ = [
    "JMFClient",
    "ClientConfig",
    "load_config",
    "save_config",
    "Dispatcher",
    "SubmissionAttempt",
    "Envelope",
    "MimePackager",
    "ResponseValidator",
    "JMFResponse",
    "Success",
    "Failure",
    "JMFError",
    "TransportError",
    "SubmissionError",
    "ResponseParseError",
    "ReturnCodeError",
    "ConfigurationError",
]
