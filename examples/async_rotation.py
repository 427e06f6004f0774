import math

from scqkit import Circuit, ScqClient, ScqConfig


def main() -> int:
    # One task per angle, submitted without waiting for results
    with ScqClient(ScqConfig(shots=2000)) as client:
        client.load_credential()
        client.get_backends()

        for step in range(4):
            theta = step * math.pi / 4
            circuit = Circuit(1).rx(0, theta)
            circuit.measure([0], [0])
            result = client.execute(circuit.to_qasm(), name=f"rx_{step}", async_flag=True)
            print(f"theta={theta:.3f} -> {result.text}")

    return 0


if __name__ == "__main__":
    main()
