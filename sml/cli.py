from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from typing import Optional

from .machine import DEFAULT_REGISTER_COUNT, Machine
from .vm_errors import SMLError


def _register_assignment(text: str):
    index, sep, value = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected IDX=VALUE, got {text!r}")
    try:
        return int(index), int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected integers in IDX=VALUE, got {text!r}")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="sml", description="Run Simple Machine Language programs")
    parser.add_argument("program", help="Path to the SML program")
    parser.add_argument(
        "--registers",
        type=int,
        default=DEFAULT_REGISTER_COUNT,
        metavar="N",
        help=f"Number of registers (default {DEFAULT_REGISTER_COUNT})",
    )
    parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        type=_register_assignment,
        default=[],
        metavar="IDX=VALUE",
        help="Initial register value, may be repeated",
    )
    parser.add_argument("--max-steps", type=int, metavar="N", help="Abort after N executed instructions")
    parser.add_argument("--strict", action="store_true", help="Reject malformed integer operands")
    parser.add_argument("--trace", action="store_true", help="Print every instruction before it runs")
    parser.add_argument("--dump", action="store_true", help="Print the translated program before running")
    parser.add_argument("--print-registers", action="store_true", help="Print the registers after running")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        machine = Machine(0, args.registers, strict=args.strict)
        for index, value in args.assignments:
            machine.registers[index] = value
        path = pathlib.Path(args.program).resolve()
        if not machine.read_and_translate(path):
            print(f"sml: cannot read {args.program}", file=sys.stderr)
            return 1
        if args.dump:
            print("Here is the program; it has", len(machine.program), "instructions.")
            print(machine, end="")
            print("Labels:", machine.labels)
        machine.execute(debug=args.trace, max_steps=args.max_steps)
        if args.print_registers:
            print(f"Registers: {machine.registers}")
        return 0
    except (SMLError, IndexError, ValueError) as exc:
        print(f"SML execution failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
