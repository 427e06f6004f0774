"""Custom exceptions for scqkit."""

from typing import Optional


class ScqError(Exception):
    """Base exception for all scqkit errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


# --- Circuit builder -------------------------------------------------------


class CircuitError(ScqError, ValueError):
    """A circuit builder precondition was violated."""


class InvalidQubitIndex(CircuitError):
    """Raised when a gate references a qubit outside the quantum register."""

    def __init__(self, qubit: object, num_qubits: int):
        self.qubit = qubit
        self.num_qubits = num_qubits
        if not isinstance(qubit, int) or isinstance(qubit, bool):
            message = f"qubit index {qubit!r} is not an integer"
        elif qubit < 0:
            message = f"qubit index {qubit} is negative"
        else:
            message = f"qubit index {qubit} exceeds the number of qubits in circuit ({num_qubits})"
        super().__init__(message)


class MeasurementArityMismatch(CircuitError):
    """Raised when measured qubits and classical bits differ in length."""

    def __init__(self, num_qubits: int, num_cbits: int):
        self.num_qubits = num_qubits
        self.num_cbits = num_cbits
        super().__init__(
            "Number of measured bits should equal to the number of classical bits "
            f"({num_qubits} != {num_cbits})"
        )


class InvalidMeasurementArguments(CircuitError):
    """Raised when only one of qubit_list / cbit_list is supplied."""

    def __init__(self, message: str = "Both qubit_list and cbit_list must be provided together or left empty"):
        super().__init__(message)


# --- Credentials -----------------------------------------------------------


class CredentialError(ScqError):
    """The local credentials file could not be used."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class CredentialNotFound(CredentialError):
    """Raised when the credentials file cannot be opened."""


class MalformedCredential(CredentialError):
    """Raised when the token or website line is missing."""


class UnexpectedTrailingData(CredentialError):
    """Raised when the credentials file has more than two lines."""


# --- API -------------------------------------------------------------------


class ScqAPIError(ScqError):
    """Custom exception for Quafu API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None, response_text: Optional[str] = None):
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(message)


class TransportError(ScqAPIError):
    """Raised on HTTP connect/send/receive failure."""


class ProtocolError(ScqAPIError):
    """Raised when a response does not have the expected JSON shape."""


class ServerError(ScqAPIError):
    """Raised when the server answers with a non-2xx status."""

    def __init__(self, status_code: int, response_text: str):
        body_preview = (response_text or "")[:300]
        super().__init__(
            message=f"Server error: {status_code} - {body_preview}",
            status_code=status_code,
            response_text=response_text,
        )

    @property
    def status(self) -> int:
        return self.status_code

    @property
    def body(self) -> str:
        return self.response_text


class UnknownBackend(ScqAPIError):
    """Raised when execute selects a backend missing from the catalog."""

    def __init__(self, backend_name: str, available: Optional[list] = None):
        self.backend_name = backend_name
        self.available = list(available or [])
        known = ", ".join(self.available) if self.available else "none discovered"
        super().__init__(f"Unknown backend '{backend_name}' (available: {known})")
