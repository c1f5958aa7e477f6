import argparse
import logging
import sys
from typing import Optional

from xtrace_collapse.core.config import DEFAULT_MAX_LINE_LENGTH, CollapseOptions
from xtrace_collapse.core.profiling import profiled
from xtrace_collapse.core.trace import TraceError, collapse_trace
from xtrace_collapse.writers.stackcollapse import write_stack_collapse

log = logging.getLogger("xtrace_collapse")


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        prog="xtrace-collapse",
        description="Collapse a tab separated function trace into folded stacks for flamegraph tools.")
    parser.add_argument("trace", nargs="?", default="-", help="function trace file, '-' reads stdin (default)")
    parser.add_argument('-o', "--output", help="write the folded stacks here instead of stdout")
    parser.add_argument("--max-line-length", type=_positive_int, default=DEFAULT_MAX_LINE_LENGTH,
                        help="skip trace lines longer than this many bytes (default: %(default)s)")
    parser.add_argument("--keep-stray-prefix", action="store_true",
                        help="don't strip the stray leading byte some producers put before function names")
    parser.add_argument("--sort", action="store_true", help="order the output by stack")
    parser.add_argument("--profile", metavar="PATH", help="write a cProfile profile of this run to PATH")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', "--verbose", action="store_true")
    verbosity.add_argument('-q', "--quiet", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.ERROR if args.quiet else logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s: %(message)s")

    options = CollapseOptions(args.max_line_length, not args.keep_stray_prefix)

    with profiled(args.profile):
        try:
            if args.trace == "-":
                frequencies = collapse_trace(sys.stdin.buffer, options)
            else:
                with open(args.trace, "rb") as f:
                    frequencies = collapse_trace(f, options)
        except TraceError as err:
            log.error("%s", err)
            return 1
        except OSError as err:
            log.error("Unable to read %s: %s", args.trace, err)
            return 1

        aggregates = frequencies.finalize()
        try:
            if args.output:
                with open(args.output, "w") as f:
                    write_stack_collapse(aggregates, f, args.sort)
            else:
                write_stack_collapse(aggregates, sys.stdout, args.sort)
        except OSError as err:
            log.error("Unable to write %s: %s", args.output or "stdout", err)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
