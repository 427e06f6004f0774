"""Read and write the two-line Quafu credentials file.

Line 1 holds the API token, line 2 the service base URL. Nothing may follow.
"""

import logging
from pathlib import Path
from typing import Union

from scqkit.core.exceptions import (
    CredentialNotFound,
    MalformedCredential,
    UnexpectedTrailingData,
)
from scqkit.core.client.models import Credential

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_credential(path: PathLike) -> Credential:
    """Parse the credentials file at ``path``.

    Raises:
        CredentialNotFound: the file cannot be opened.
        MalformedCredential: the token or website line is missing or empty.
        UnexpectedTrailingData: a third line exists.
    """
    path = Path(path).expanduser()
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError as exc:
        raise CredentialNotFound(f"Cannot open credentials file {path}: {exc.strerror or exc}", path=str(path)) from exc

    if len(lines) < 1 or not lines[0].strip():
        raise MalformedCredential(f"Failed to read API token from {path}", path=str(path))
    if len(lines) < 2 or not lines[1].strip():
        raise MalformedCredential(f"Failed to read website from {path}", path=str(path))
    if len(lines) > 2:
        raise UnexpectedTrailingData(f"Unexpected data in credentials file {path}", path=str(path))

    api_token = lines[0].strip()
    website = lines[1].strip()
    if not website.endswith("/"):
        logger.warning("Website %s has no trailing slash; appending one", website)
        website += "/"
    return Credential(api_token=api_token, website=website)


def save_credential(api_token: str, website: str, path: PathLike) -> Path:
    """Write a credentials file readable by :func:`read_credential`."""
    credential = Credential(api_token=api_token.strip(), website=website.strip())
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(f"{credential.api_token}\n{credential.website}\n")
    logger.info("Saved credentials (token=%s) to %s", credential.masked_token(), path)
    return path
