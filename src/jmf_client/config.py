"""
Client configuration — ~/.jmf/config.json overlaid with JMF_* environment variables.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from jmf_client.errors import ConfigurationError
from jmf_client.message import DEFAULT_SENDER_ID

CONFIG_FILE = Path.home() / ".jmf" / "config.json"

ENV_VARS = {
    "server_url": "JMF_SERVER_URL",
    "device_id": "JMF_DEVICE_ID",
    "sender_id": "JMF_SENDER_ID",
    "timeout": "JMF_TIMEOUT",
    "attempt_limit": "JMF_ATTEMPT_LIMIT",
}


class ClientConfig(BaseModel):
    server_url: Optional[str] = None
    device_id: Optional[str] = None
    sender_id: str = DEFAULT_SENDER_ID
    timeout: float = Field(30.0, gt=0)
    attempt_limit: int = Field(2, ge=1)


def _read_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text())
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}")
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a JSON object")
    return data


def load_config(path: Optional[Path] = None, environ: Optional[dict[str, str]] = None) -> ClientConfig:
    path = path or CONFIG_FILE
    environ = os.environ if environ is None else environ
    values = _read_file(path)
    for field, var in ENV_VARS.items():
        if environ.get(var):
            values[field] = environ[var]
    try:
        return ClientConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid JMF client configuration: {e}")


def save_config(config: ClientConfig, path: Optional[Path] = None) -> Path:
    path = path or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.model_dump(exclude_none=True), indent=2))
    return path
