"""Append-only quantum circuit builder with OpenQASM 2.0 serialization.

Usage:
    from scqkit import Circuit

    circuit = Circuit(2)
    circuit.h(0).cx(0, 1)
    circuit.measure()
    print(circuit.to_qasm())
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from scqkit.core.exceptions import (
    InvalidMeasurementArguments,
    InvalidQubitIndex,
    MeasurementArityMismatch,
)

QASM_HEADER = 'OPENQASM 2.0;\ninclude "qelib1.inc";\n'
MEASURE = "measure"

# Closed gate set, grouped by arity class
SINGLE_QUBIT_FIXED_GATES = (
    "id", "h", "x", "y", "z", "t", "tdg", "s", "sdg",
    "sx", "sxdg", "sy", "sydg", "w", "sw",
)
SINGLE_QUBIT_PARAM_GATES = ("rx", "ry", "rz", "p")
DOUBLE_QUBIT_FIXED_GATES = ("cx", "cy", "cz", "cs", "ct")
GATE_ALIASES = {"cnot": "cx"}


def _format_param(value: float) -> str:
    text = repr(float(value))
    # OpenQASM 2.0 reals need a decimal point before any exponent
    if "e" in text and "." not in text:
        mantissa, exponent = text.split("e")
        text = f"{mantissa}.0e{exponent}"
    return text


def _as_index(value: object) -> int:
    """Return value as a plain int, or raise TypeError for non-integers."""
    if isinstance(value, bool):
        raise TypeError(f"{value!r} is a bool, not an index")
    return operator.index(value)


@dataclass(frozen=True)
class Operation:
    """One circuit instruction.

    Attributes:
        name: Lowercase OpenQASM gate identifier.
        qubits: Qubits the instruction acts on.
        cbits: Classical bits written by a measurement, empty otherwise.
        params: Real gate parameters, empty for fixed gates.
    """

    name: str
    qubits: tuple[int, ...]
    cbits: tuple[int, ...] = ()
    params: tuple[float, ...] = ()

    @property
    def is_measurement(self) -> bool:
        return self.name == MEASURE

    def to_qasm(self) -> str:
        """Return the newline-terminated QASM line(s) for this operation."""
        if self.is_measurement:
            return "".join(
                f"measure q[{q}] -> c[{c}];\n" for q, c in zip(self.qubits, self.cbits)
            )

        head = self.name
        if self.params:
            # Only single-parameter gates exist in the gate set
            head = f"{head}({_format_param(self.params[0])})"
        targets = ", ".join(f"q[{q}]" for q in self.qubits)
        return f"{head} {targets};\n" if targets else f"{head};\n"


class Circuit:
    """In-memory, append-only quantum circuit.

    The quantum register width is fixed at construction. Every gate helper
    validates its qubit indices before recording anything, so a failed call
    leaves the circuit unchanged.
    """

    def __init__(self, num_qubits: int = 0) -> None:
        try:
            width = _as_index(num_qubits)
        except TypeError:
            width = -1
        if width < 0:
            raise ValueError(f"num_qubits must be a non-negative integer, got {num_qubits!r}")
        self._num_qubits = width
        self._measures: list[tuple[int, int]] = []
        self._ops: list[Operation] = []

    @property
    def num_qubits(self) -> int:
        return self._num_qubits

    @property
    def measures(self) -> tuple[tuple[int, int], ...]:
        """Every (qubit, cbit) pair measured so far, in insertion order."""
        return tuple(self._measures)

    def measurements(self) -> tuple[tuple[int, int], ...]:
        return self.measures

    @property
    def ops(self) -> tuple[Operation, ...]:
        return tuple(self._ops)

    def __len__(self) -> int:
        return len(self._ops)

    def __repr__(self) -> str:
        return (
            f"Circuit(num_qubits={self._num_qubits}, ops={len(self._ops)}, "
            f"measures={len(self._measures)})"
        )

    def __str__(self) -> str:
        return self.to_qasm()

    # --- Validation --------------------------------------------------------

    def check_qubit_overflow(self, qubits: Iterable[int]) -> tuple[int, ...]:
        """Return the indices as plain ints, or raise InvalidQubitIndex.

        Any integer type with __index__ (numpy integers included) is accepted.
        """
        checked = []
        for q in qubits:
            try:
                index = _as_index(q)
            except TypeError:
                raise InvalidQubitIndex(q, self._num_qubits) from None
            if index < 0 or index >= self._num_qubits:
                raise InvalidQubitIndex(index, self._num_qubits)
            checked.append(index)
        return tuple(checked)

    # --- Generic appenders (one per arity class) ---------------------------

    def add_single_qubit_fixed_gate(self, gate_name: str, qubit: int) -> "Circuit":
        gate_name = _resolve(gate_name, SINGLE_QUBIT_FIXED_GATES)
        qubits = self.check_qubit_overflow([qubit])
        self._ops.append(Operation(name=gate_name, qubits=qubits))
        return self

    def add_single_qubit_param_gate(self, gate_name: str, qubit: int, theta: float) -> "Circuit":
        gate_name = _resolve(gate_name, SINGLE_QUBIT_PARAM_GATES)
        qubits = self.check_qubit_overflow([qubit])
        self._ops.append(Operation(name=gate_name, qubits=qubits, params=(float(theta),)))
        return self

    def add_double_qubit_fixed_gate(self, gate_name: str, ctrl: int, targ: int) -> "Circuit":
        gate_name = _resolve(gate_name, DOUBLE_QUBIT_FIXED_GATES)
        qubits = self.check_qubit_overflow([ctrl, targ])
        self._ops.append(Operation(name=gate_name, qubits=qubits))
        return self

    # --- Measurement -------------------------------------------------------

    def measure_all(self) -> "Circuit":
        """Measure qubit i into classical bit i for every qubit."""
        indices = tuple(range(self._num_qubits))
        self._measures.extend((i, i) for i in indices)
        self._ops.append(Operation(name=MEASURE, qubits=indices, cbits=indices))
        return self

    def measure(
        self,
        qubit_list: Optional[Sequence[int]] = None,
        cbit_list: Optional[Sequence[int]] = None,
    ) -> "Circuit":
        """Measure qubits into classical bits.

        Both lists must be given together. Leaving both out measures every
        qubit into the classical bit of the same index.

        Raises:
            InvalidMeasurementArguments: only one of the lists was given.
            MeasurementArityMismatch: the lists differ in length.
            InvalidQubitIndex: a measured qubit is outside the register.
        """
        has_qubits = qubit_list is not None and len(qubit_list) > 0
        has_cbits = cbit_list is not None and len(cbit_list) > 0
        if not has_qubits and not has_cbits:
            return self.measure_all()
        if has_qubits != has_cbits:
            raise InvalidMeasurementArguments()

        qubits = tuple(qubit_list)
        cbits = tuple(cbit_list)
        if len(qubits) != len(cbits):
            raise MeasurementArityMismatch(len(qubits), len(cbits))
        qubits = self.check_qubit_overflow(qubits)
        try:
            cbits = tuple(_as_index(c) for c in cbits)
        except TypeError as e:
            raise ValueError(f"classical bit indices must be integers: {e}") from None
        if any(c < 0 for c in cbits):
            raise ValueError(f"classical bit indices must be non-negative, got {cbits!r}")

        self._measures.extend(zip(qubits, cbits))
        self._ops.append(Operation(name=MEASURE, qubits=qubits, cbits=cbits))
        return self

    # --- Serialization -----------------------------------------------------

    def to_qasm(self) -> str:
        """Serialize the circuit to an OpenQASM 2.0 program."""
        lines = [
            QASM_HEADER,
            f"qreg q[{self._num_qubits}];\n",
            f"creg c[{len(self._measures)}];\n",
        ]
        lines.extend(op.to_qasm() for op in self._ops)
        return "".join(lines)


def _resolve(gate_name: str, allowed: Sequence[str]) -> str:
    name = gate_name.lower()
    name = GATE_ALIASES.get(name, name)
    if name not in allowed:
        raise ValueError(f"'{gate_name}' is not a gate of this arity; expected one of {', '.join(allowed)}")
    return name


# --- Convenience helpers ---------------------------------------------------


def _named(helper, gate_name: str, doc: str):
    helper.__name__ = gate_name
    helper.__qualname__ = f"Circuit.{gate_name}"
    helper.__doc__ = doc
    return helper


def _fixed_helper(gate_name: str):
    def helper(self: Circuit, qubit: int) -> Circuit:
        return self.add_single_qubit_fixed_gate(gate_name, qubit)

    return _named(helper, gate_name, f"Apply the {gate_name} gate to qubit.")


def _param_helper(gate_name: str):
    def helper(self: Circuit, qubit: int, theta: float) -> Circuit:
        return self.add_single_qubit_param_gate(gate_name, qubit, theta)

    return _named(helper, gate_name, f"Apply the {gate_name}(theta) rotation to qubit.")


def _double_helper(gate_name: str):
    def helper(self: Circuit, ctrl: int, targ: int) -> Circuit:
        return self.add_double_qubit_fixed_gate(gate_name, ctrl, targ)

    return _named(helper, gate_name, f"Apply the controlled {gate_name} gate from ctrl to targ.")


for _name in SINGLE_QUBIT_FIXED_GATES:
    setattr(Circuit, _name, _fixed_helper(_name))
for _name in SINGLE_QUBIT_PARAM_GATES:
    setattr(Circuit, _name, _param_helper(_name))
for _name in DOUBLE_QUBIT_FIXED_GATES:
    setattr(Circuit, _name, _double_helper(_name))
for _alias, _name in GATE_ALIASES.items():
    setattr(Circuit, _alias, _double_helper(_name))
del _name, _alias
