from scqkit import Circuit, ScqClient


def build_bell() -> Circuit:
    """Entangle two qubits and measure both."""
    circuit = Circuit(2)
    circuit.h(0)
    circuit.cx(0, 1)
    circuit.measure()
    return circuit


def main() -> int:
    circuit = build_bell()
    print(circuit.to_qasm())

    with ScqClient() as client:
        client.load_credential()
        client.get_backends()
        client.set_backend_name("Dongling")
        result = client.execute(circuit, name="hello_world")
    print(result.text)
    return 0


if __name__ == "__main__":
    main()
