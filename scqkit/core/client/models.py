"""Pydantic models for credentials, backend records and execution results."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from scqkit.core.exceptions import ProtocolError


class Credential(BaseModel):
    """API token and service base URL read from the credentials file."""

    model_config = ConfigDict(frozen=True)

    api_token: str = Field(min_length=1)
    website: str = Field(min_length=1)

    def masked_token(self) -> str:
        return mask_token(self.api_token)


def mask_token(api_token: Optional[str]) -> str:
    if api_token and len(api_token) >= 8:
        return f"{api_token[:4]}...{api_token[-4:]}"
    if api_token:
        return "[set]"
    return "[missing]"


class BackendInfo(BaseModel):
    """The fields of a backend record read by the client.

    The server sends many more fields (qubit count, status, ...); they are
    kept as extras so the full record survives validation.
    """

    model_config = ConfigDict(extra="allow")

    system_name: str
    system_id: int

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "BackendInfo":
        try:
            return cls.model_validate(record)
        except ValidationError as exc:
            name = record.get("system_name") if isinstance(record, dict) else None
            raise ProtocolError(f"Backend record {name!r} is missing a usable system_id: {exc}") from exc


class BackendsResponse(BaseModel):
    """Body of the get_backends endpoint: {"data": [{...}, ...]}."""

    model_config = ConfigDict(extra="allow")

    data: Any = None

    def catalog(self) -> Dict[str, Dict[str, Any]]:
        """Map system_name to the full record, skipping unnamed records."""
        if not isinstance(self.data, list):
            return {}
        backends: Dict[str, Dict[str, Any]] = {}
        for record in self.data:
            if not isinstance(record, dict):
                continue
            system_name = record.get("system_name")
            if isinstance(system_name, str):
                backends[system_name] = record
        return backends


class ExecResult(BaseModel):
    """Raw response of an execution request."""

    text: str
    status_code: int = 200
    async_flag: bool = False

    def json_data(self) -> Any:
        """Parse the response body as JSON."""
        try:
            return json.loads(self.text)
        except json.JSONDecodeError as exc:
            raise ProtocolError(
                f"Execution response is not JSON: {exc}",
                status_code=self.status_code,
                response_text=self.text,
            ) from exc

    def __str__(self) -> str:
        return self.text
