"""Submit an OpenQASM file to a Quafu backend.

Example:
    scqkit-run --qasm bell.qasm --backend Dongling
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from scqkit.core.client import ScqClient, ScqConfig
from scqkit.core.client.config import DEFAULT_BACKEND
from scqkit.core.exceptions import ScqError
from scqkit.vis.terminal import TerminalPrinter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scqkit-run",
        description="Submit an OpenQASM 2.0 program to the Quafu quantum cloud.",
    )
    parser.add_argument('--qasm', type=str, required=True, help='path to the QASM file')
    parser.add_argument('--backend', type=str, default=DEFAULT_BACKEND, help='backend name')
    parser.add_argument('--name', type=str, default='', help='task name')
    parser.add_argument('--shots', type=int, default=None, help='number of shots')
    parser.add_argument('--async', dest='async_flag', action='store_true', help='use the asynchronous endpoint')
    parser.add_argument('--credential', type=str, default=None, help='credentials file (default ~/.quafu/api)')
    parser.add_argument('--list-backends', action='store_true', help='print the discovered backends')
    parser.add_argument('-v', '--verbose', action='store_true', help='log requests and responses')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    printer = TerminalPrinter()

    try:
        with open(args.qasm, 'r', encoding='utf-8') as f:
            qasm = f.read()
    except OSError as e:
        printer.print_error(f"Cannot read {args.qasm}: {e.strerror or e}")
        return 1

    config = ScqConfig(credential_path=args.credential, backend_name=args.backend, shots=args.shots)
    with ScqClient(config) as client:
        if args.verbose:
            client.logger.setLevel(logging.DEBUG)
        try:
            client.load_credential()
            client.get_backends()
            if args.list_backends:
                printer.print_backends(client.backends, selected=client.backend_name)
            client.set_backend_name(args.backend)
            printer.print_summary({
                "backend": client.backend_name,
                "shots": client.shots,
                "async": args.async_flag,
                "name": args.name or None,
            })
            result = client.execute(qasm, name=args.name, async_flag=args.async_flag)
        except ScqError as e:
            printer.print_error(e.message)
            return 1

    printer.print_status("submitted", level="success")
    printer.print_result(result.text)
    return 0


if __name__ == '__main__':
    sys.exit(main())
