from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional, TypeAlias
from unittest.mock import MagicMock

import pytest

from scqkit.core.client import ScqClient, ScqConfig

from utils import BACKENDS_PAYLOAD, TOKEN, WEBSITE

MockResponse: TypeAlias = Callable[..., MagicMock]


@pytest.fixture
def make_response() -> MockResponse:
    """A factory of fake requests.Response objects."""

    def _make(status_code: int = 200, *, json_body: Any = None, text: Optional[str] = None) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        if json_body is not None:
            response.json = MagicMock(return_value=json_body)
            response.text = text if text is not None else str(json_body)
        else:
            response.json = MagicMock(side_effect=ValueError("Expecting value: line 1 column 1 (char 0)"))
            response.text = text if text is not None else ""
        return response

    return _make


@pytest.fixture
def credential_file(tmp_path: Path) -> Path:
    path = tmp_path / ".quafu" / "api"
    path.parent.mkdir(parents=True)
    path.write_text(f"{TOKEN}\n{WEBSITE}\n")
    return path


@pytest.fixture
def client(credential_file: Path):
    """A client whose config points at a temporary credentials file."""
    with ScqClient(ScqConfig(credential_path=credential_file, backend_name="Dongling", shots=1024)) as c:
        yield c


@pytest.fixture
def ready_client(client: ScqClient, make_response: MockResponse, monkeypatch: pytest.MonkeyPatch) -> ScqClient:
    """A client with credentials loaded and backends discovered."""
    client.load_credential()
    monkeypatch.setattr(client.session, "post", MagicMock(return_value=make_response(json_body=BACKENDS_PAYLOAD)))
    client.get_backends()
    return client
