"""fishvm CLI entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .diagnostics import report_fault
from .errors import EmptyProgram, FishFault
from .interpreter import Interpreter
from .io import StreamReader

LOG = logging.getLogger("fishvm.cli")

EXIT_OK = 0
EXIT_FAULT = 1
EXIT_USAGE = 2
EXIT_STEP_LIMIT = 3


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _number(text: str) -> float:
    try:
        return float(int(text, 0))
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from exc


def _char_codes(text: str) -> List[float]:
    return [float(ord(ch)) for ch in text]


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fishvm", description="><> (fish) interpreter")
    parser.add_argument("script", nargs="?", type=Path, help="path to a ><> program")
    parser.add_argument("-c", "--code", help="program text to run instead of a script file")
    parser.add_argument(
        "-s",
        "--string",
        dest="stack",
        action="extend",
        type=_char_codes,
        help="push the character codes of STRING onto the initial stack",
    )
    parser.add_argument(
        "-v",
        "--value",
        dest="stack",
        action="extend",
        nargs="+",
        type=_number,
        metavar="NUMBER",
        help="push numbers onto the initial stack (repeatable); give SCRIPT before -v or after --",
    )
    parser.add_argument("--compat", action="store_true", help="reverse split/closed stacks like fishlanguage.com")
    parser.add_argument("--max-steps", type=int, default=None, help="safety cap on executed steps")
    parser.add_argument("-t", "--tick", type=float, default=0.0, help="seconds to wait between steps")
    parser.add_argument("--seed", type=int, default=None, help="seed for the 'x' instruction")
    parser.add_argument("--trace", action="store_true", help="log every executed instruction")
    parser.add_argument("--trace-file", type=Path, help="append trace output to a file")
    parser.add_argument("--no-color", action="store_true", help="mark the fish with brackets instead of ANSI colour")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("FISHVM_LOG", "WARNING"),
        help="Logging level (default WARNING)",
    )
    return parser


def _read_source(parser: argparse.ArgumentParser, args: argparse.Namespace) -> bytes:
    if args.code is not None:
        if args.script is not None:
            parser.error("give either a script path or --code, not both")
        return args.code.encode("utf-8")
    if args.script is None:
        parser.error("the following arguments are required: script (or --code)")
    return args.script.read_bytes()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        source = _read_source(parser, args)
    except OSError as exc:
        print(f"error: cannot read {args.script}: {exc.strerror or exc}", file=sys.stderr)
        return EXIT_USAGE

    reader = None
    stdin = getattr(sys.stdin, "buffer", None)
    if stdin is not None:
        reader = StreamReader(stdin).start()

    trace_fp = None
    if args.trace_file:
        trace_fp = args.trace_file.open("a", encoding="utf-8")

    try:
        try:
            vm = Interpreter.from_source(
                source,
                args.stack or [],
                compat=args.compat,
                input_queue=reader,
                seed=args.seed,
                trace=args.trace,
                trace_file=trace_fp,
                tick=args.tick,
            )
        except EmptyProgram as exc:
            LOG.error("load failed: %s", exc)
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_USAGE

        max_steps = args.max_steps if args.max_steps is None or args.max_steps > 0 else None
        try:
            halted = vm.run(max_steps)
        except FishFault as exc:
            LOG.error("fault: %s", exc.describe())
            sys.stdout.flush()
            color = not args.no_color and sys.stderr.isatty()
            report_fault(vm, sys.stderr, color=color, detail=exc.describe())
            return EXIT_FAULT
        except KeyboardInterrupt:
            print(file=sys.stderr)
            return EXIT_FAULT
    finally:
        if reader is not None:
            reader.stop()
        if trace_fp:
            trace_fp.close()

    if not halted:
        print(f"[fishvm] max steps {max_steps} reached; halting", file=sys.stderr)
        return EXIT_STEP_LIMIT
    LOG.debug("halted after %d steps", vm.steps)
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
