"""Configuration classes for the scqkit client."""

import os
import logging
from typing import Dict, Optional
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

from scqkit.core.exceptions import ScqAPIError

load_dotenv()

API_BACKENDS = "qbackend/get_backends/"
API_EXEC = "qbackend/scq_kit/"
API_EXEC_ASYNC = "qbackend/scq_kit_asyc/"
QUAFU_VERSION = "0.4.0"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded;charset=UTF-8"
DEFAULT_BACKEND = "Dongling"


def default_credential_path() -> Path:
    """Return ~/.quafu/api with the home directory resolved at runtime."""
    return Path.home() / ".quafu" / "api"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logging.warning("Ignoring non-integer %s=%r", name, raw)
        return default


@dataclass
class ScqConfig:
    """Configuration class for scqkit client settings.

    Unset fields fall back to the SCQKIT_* environment variables (a local
    .env file is honoured), then to the service defaults.
    """

    credential_path: Optional[Path] = None
    timeout: Optional[int] = None
    backend_name: Optional[str] = None
    shots: Optional[int] = None
    is_compile: bool = True
    tomo: bool = False
    priority: int = 2

    def __post_init__(self):
        if self.credential_path is None:
            env_path = os.getenv('SCQKIT_CREDENTIAL_PATH')
            self.credential_path = Path(env_path).expanduser() if env_path else default_credential_path()
        else:
            self.credential_path = Path(self.credential_path).expanduser()
        if self.timeout is None:
            self.timeout = _env_int('SCQKIT_TIMEOUT', 60)
        if self.backend_name is None:
            self.backend_name = os.getenv('SCQKIT_BACKEND') or DEFAULT_BACKEND
        if self.shots is None:
            self.shots = _env_int('SCQKIT_SHOTS', 1024)

    def get_headers(self, api_token: str, content_type: Optional[str] = None) -> Dict[str, str]:
        headers = {'api_token': api_token}
        if content_type:
            headers['Content-Type'] = content_type
        return headers

    def validate(self) -> bool:
        if self.shots < 1:
            raise ScqAPIError(f"shots must be positive, got {self.shots}")
        if self.priority < 0:
            raise ScqAPIError(f"priority must be non-negative, got {self.priority}")
        if self.timeout <= 0:
            raise ScqAPIError(f"timeout must be positive, got {self.timeout}")
        return True
