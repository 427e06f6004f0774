"""
scqkit - OpenQASM circuits for the Quafu quantum cloud

Build a circuit, serialize it to OpenQASM 2.0 and submit it to a Quafu
superconducting backend.

Usage:
    from scqkit import Circuit, ScqClient

    circuit = Circuit(2)
    circuit.h(0).cx(0, 1)
    circuit.measure()

    with ScqClient() as client:
        client.load_credential()
        client.get_backends()
        result = client.execute(circuit.to_qasm(), name="bell")
        print(result.text)
"""

from .core.circuit import Circuit, Operation
from .core.client import ClientState, ExecResult, ScqClient, ScqConfig
from .core.exceptions import (
    CircuitError,
    CredentialError,
    CredentialNotFound,
    InvalidMeasurementArguments,
    InvalidQubitIndex,
    MalformedCredential,
    MeasurementArityMismatch,
    ProtocolError,
    ScqAPIError,
    ScqError,
    ServerError,
    TransportError,
    UnexpectedTrailingData,
    UnknownBackend,
)

__version__ = "0.1.0"

__all__ = [
    "Circuit",
    "Operation",
    "ScqClient",
    "ScqConfig",
    "ClientState",
    "ExecResult",
    "ScqError",
    "CircuitError",
    "InvalidQubitIndex",
    "MeasurementArityMismatch",
    "InvalidMeasurementArguments",
    "CredentialError",
    "CredentialNotFound",
    "MalformedCredential",
    "UnexpectedTrailingData",
    "ScqAPIError",
    "TransportError",
    "ProtocolError",
    "ServerError",
    "UnknownBackend",
]
