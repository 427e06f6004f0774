"""Client for submitting OpenQASM programs to the Quafu cloud service.

# Sections
1) Imports
2) Formatting utilities (terminal logger)
3) Client class (public API):
   - load_credential (local credentials file)
   - get_backends (backend discovery)
   - execute (form-encoded submission, sync or async)
"""

import enum
import json
import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import urlencode

import requests

from scqkit.core.circuit import Circuit
from scqkit.core.exceptions import (
    ProtocolError,
    ScqAPIError,
    ServerError,
    TransportError,
    UnknownBackend,
)
from scqkit.core.client.config import (
    API_BACKENDS,
    API_EXEC,
    API_EXEC_ASYNC,
    FORM_CONTENT_TYPE,
    QUAFU_VERSION,
    ScqConfig,
)
from scqkit.core.client.credentials import read_credential, save_credential
from scqkit.core.client.models import BackendInfo, BackendsResponse, ExecResult, mask_token


def _isatty(stream) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def _is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


# --- Formatting utilities --------------------------------------------------


class _IconFormatter(logging.Formatter):
    """Prefix each record with a one-character level icon.

    Thresholds are checked from most to least severe, so every level below
    INFO gets the gray debug dot.
    """

    # (minimum level, ANSI color, icon)
    _LEVEL_ICONS = (
        (logging.ERROR, "31", "✗"),
        (logging.WARNING, "33", "!"),
        (logging.INFO, "36", "•"),
        (logging.NOTSET, "90", "·"),
    )

    def __init__(self, enable_color: Optional[bool] = None) -> None:
        super().__init__()
        if enable_color is None:
            enable_color = _isatty(sys.stderr) and os.getenv("NO_COLOR") is None
        self.enable_color = enable_color

    def icon(self, levelno: int) -> str:
        color, glyph = next((c, g) for lvl, c, g in self._LEVEL_ICONS if levelno >= lvl)
        return f"\x1b[{color}m{glyph}\x1b[0m" if self.enable_color else glyph

    def format(self, record: logging.LogRecord) -> str:
        line = f"{self.icon(record.levelno)} {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


# --- Client ----------------------------------------------------------------


class ClientState(enum.Enum):
    FRESH = "fresh"
    AUTHENTICATED = "authenticated"
    READY = "ready"


class ScqClient:
    """Client for the Quafu superconducting quantum cloud.

    Holds the credentials, the discovered backend catalog and the execution
    options. Not safe for concurrent use; create one client per thread.
    """

    def __init__(self, config: Optional[ScqConfig] = None):
        self.config = config or ScqConfig()
        self.logger = logging.getLogger(__name__)
        if not self.logger.handlers:
            handler = logging.StreamHandler(stream=sys.stderr)
            handler.setFormatter(_IconFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

        self.session = requests.Session()

        # Session
        self.api_token: str = ""
        self.website: str = ""
        # Catalog
        self.backends: dict[str, dict[str, Any]] = {}
        # Execution options
        self.backend_name: str = self.config.backend_name
        self.shots: int = self.config.shots
        self.is_compile: bool = self.config.is_compile
        self.tomo: bool = self.config.tomo
        self.priority: int = self.config.priority

        self._state = ClientState.FRESH

        try:
            self.config.validate()
        except ScqAPIError as e:
            self.logger.warning("Configuration validation failed: %s", e)

    @property
    def state(self) -> ClientState:
        return self._state

    def _mask_api_key(self) -> str:
        return mask_token(self.api_token)

    def _url(self, endpoint: str) -> str:
        return f"{self.website}{endpoint}"

    # --- Credentials -------------------------------------------------------

    def load_credential(self, path: Optional[Union[str, Path]] = None) -> None:
        """Load the API token and website from the credentials file.

        Raises:
          CredentialNotFound, MalformedCredential, UnexpectedTrailingData
        """
        path = Path(path) if path is not None else self.config.credential_path
        credential = read_credential(path)
        self.api_token = credential.api_token
        self.website = credential.website
        if self._state is ClientState.FRESH:
            self._state = ClientState.AUTHENTICATED
        self.logger.debug("Loaded credentials from %s (api_token=%s)", path, self._mask_api_key())

    def save_credential(self, api_token: str, website: str, path: Optional[Union[str, Path]] = None) -> Path:
        """Write the credentials file, then load it into this client."""
        path = save_credential(api_token, website, path if path is not None else self.config.credential_path)
        self.load_credential(path)
        return path

    # --- Backend discovery -------------------------------------------------

    def _post(self, url: str, **kwargs: Any) -> requests.Response:
        try:
            return self.session.post(url, timeout=self.config.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            self.logger.error("POST %s failed: %s", url, e)
            raise TransportError(f"Request to {url} failed: {str(e)}") from e

    def get_backends(self) -> dict[str, dict[str, Any]]:
        """Discover the backends available to this account.

        Replaces the catalog with a mapping from system_name to the full
        backend record.

        Raises:
          TransportError: on network failure.
          ServerError: on a non-2xx response.
          ProtocolError: when the response is not a JSON object.
        """
        url = self._url(API_BACKENDS)
        headers = self.config.get_headers(self.api_token)
        self.logger.info("POST %s (api_token=%s)", url, self._mask_api_key())
        response = self._post(url, headers=headers)
        if not _is_success(response):
            self.logger.error("Backend discovery failed: %s", response.status_code)
            raise ServerError(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as e:
            raise ProtocolError(
                f"Backend discovery returned non-JSON body: {str(e)}",
                status_code=response.status_code,
                response_text=response.text,
            ) from e
        if not isinstance(payload, Mapping):
            raise ProtocolError(
                "Backend discovery returned JSON that is not an object",
                status_code=response.status_code,
                response_text=response.text,
            )
        self.logger.debug("get_backends response: %s", json.dumps(payload))

        self.backends = BackendsResponse.model_validate(dict(payload)).catalog()
        self._state = ClientState.READY
        self.logger.info("Discovered %d backend(s): %s", len(self.backends), ", ".join(self.backend_names()))
        return self.backends

    def backend_names(self) -> list[str]:
        return sorted(self.backends)

    def get_backend(self, name: Optional[str] = None) -> dict[str, Any]:
        """Return the catalog record for ``name`` (default: the selected backend)."""
        name = self.backend_name if name is None else name
        try:
            return self.backends[name]
        except KeyError:
            raise UnknownBackend(name, self.backend_names()) from None

    def set_backend_name(self, name: str) -> None:
        self.backend_name = name

    # --- Execution ---------------------------------------------------------

    def _prepare_execute_payload(self, qasm: str, name: str, backend: BackendInfo) -> str:
        """Return the form-encoded body for an execution request."""
        fields = [
            ("qtasm", qasm),
            ("shots", str(self.shots)),
            # Fixed placeholder, not derived from the program
            ("qubits", "1"),
            ("scan", "0"),
            ("tomo", "1" if self.tomo else "0"),
            ("selected_server", str(backend.system_id)),
            ("compile", "1" if self.is_compile else "0"),
            ("priority", str(self.priority)),
            ("task_name", name),
            ("pyquafu_version", QUAFU_VERSION),
            ("runtime_job_id", ""),
        ]
        return urlencode(fields)

    def execute(self, qasm: Union[str, Circuit], name: str = "", async_flag: bool = False) -> ExecResult:
        """Submit a QASM program to the selected backend.

        Args:
          qasm: OpenQASM 2.0 text, or a Circuit to serialize.
          name: Task label shown by the service.
          async_flag: Use the asynchronous endpoint.

        Raises:
          UnknownBackend: backend_name is not in the discovered catalog.
          ServerError: on a non-2xx response.
          TransportError: on network failure.
        """
        if isinstance(qasm, Circuit):
            qasm = qasm.to_qasm()
        backend = BackendInfo.from_record(self.get_backend())

        body = self._prepare_execute_payload(qasm, name, backend)
        url = self._url(API_EXEC_ASYNC if async_flag else API_EXEC)
        headers = self.config.get_headers(self.api_token, content_type=FORM_CONTENT_TYPE)
        self.logger.info(
            "POST %s (backend=%s, shots=%d, async=%s, api_token=%s)",
            url,
            backend.system_name,
            self.shots,
            async_flag,
            self._mask_api_key(),
        )
        response = self._post(url, headers=headers, data=body.encode("utf-8"))
        if not _is_success(response):
            self.logger.error("Execution failed: %s", response.status_code)
            raise ServerError(response.status_code, response.text)

        self.logger.debug("Execution result:\n%s", response.text)
        return ExecResult(text=response.text, status_code=response.status_code, async_flag=async_flag)

    # --- Misc --------------------------------------------------------------

    def info(self) -> dict[str, str]:
        """Log and return the website and masked API token."""
        details = {"website": self.website, "api_token": self._mask_api_key()}
        self.logger.info("Website: %s", details["website"])
        self.logger.info("API Token: %s", details["api_token"])
        return details

    def close(self) -> None:
        """Close underlying HTTP session."""
        try:
            self.session.close()
        except (AttributeError, RuntimeError):
            pass

    def __enter__(self) -> "ScqClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
