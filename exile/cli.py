"""Exile CLI — compile .exile files to IR text."""

from __future__ import annotations

import logging
import sys

from . import parse
from .ast import method_to_str
from .gen import GenError, generate
from .parse import ParseError
from .tokens import tokenize

PHASES: list[str] = ["tokens", "parse"]

USAGE: str = """\
exile [OPTIONS] [INPUT] [-o OUTPUT]

Compile an exile program to IR. Reads stdin when INPUT is omitted.

Options:
  --stop-at PHASE     Dump the result of a phase instead of IR: tokens, parse
  -j, --jobs N        Lex lines on N worker threads
  -o, --output FILE   Write output to FILE instead of stdout
  -v, --verbose       Log compiler progress to stderr
  --help              Show this help message
"""


def read_source(input_file: str | None) -> tuple[str, int]:
    """Read source from file or stdin. Returns (source, exit_code) where exit_code 0 means OK."""
    if input_file is not None:
        try:
            with open(input_file, "rb") as f:
                raw = f.read()
        except OSError:
            print("error: cannot open '" + input_file + "'", file=sys.stderr)
            return ("", 1)
    else:
        raw = sys.stdin.buffer.read()
    try:
        source = raw.decode("utf-8")
    except ValueError:
        print("error: invalid utf-8 in input", file=sys.stderr)
        return ("", 1)
    return (source, 0)


def write_output(output: str, output_file: str | None) -> int:
    """Write output to file or stdout. Returns 0 on success, 1 on error."""
    if output_file is not None:
        try:
            with open(output_file, "w", encoding="utf-8", newline="\n") as f:
                f.write(output)
        except OSError:
            print("error: cannot write '" + output_file + "'", file=sys.stderr)
            return 1
        return 0
    sys.stdout.write(output)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    input_file: str | None = None
    output_file: str | None = None
    stop_at: str | None = None
    jobs: int | None = None
    verbose = False
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg == "--stop-at":
            if i + 1 >= len(args):
                print("error: --stop-at requires an argument", file=sys.stderr)
                return 2
            stop_at = args[i + 1]
            if stop_at not in PHASES:
                print("error: unknown phase '" + stop_at + "'", file=sys.stderr)
                return 2
            i += 2
        elif arg == "-j" or arg == "--jobs":
            value = args[i + 1] if i + 1 < len(args) else ""
            if not (value.isascii() and value.isdigit()):
                print("error: " + arg + " requires a number", file=sys.stderr)
                return 2
            jobs = int(value)
            i += 2
        elif arg == "-o" or arg == "--output":
            if i + 1 >= len(args):
                print("error: " + arg + " requires an argument", file=sys.stderr)
                return 2
            output_file = args[i + 1]
            i += 2
        elif arg == "-v" or arg == "--verbose":
            verbose = True
            i += 1
        elif arg.startswith("-"):
            print("error: unknown flag '" + arg + "'", file=sys.stderr)
            return 2
        elif input_file is None:
            input_file = arg
            i += 1
        else:
            print("error: unexpected argument '" + arg + "'", file=sys.stderr)
            return 2

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )

    source, err = read_source(input_file)
    if err != 0:
        return err

    if stop_at == "tokens":
        lines = [repr(tok) for tok in tokenize(source, jobs)]
        return write_output("".join(line + "\n" for line in lines), output_file)

    try:
        methods = parse(source, jobs)
    except ParseError as e:
        print("error: " + str(e), file=sys.stderr)
        return 1
    if stop_at == "parse":
        return write_output("\n".join(method_to_str(m) for m in methods), output_file)

    try:
        output = generate(methods)
    except GenError as e:
        print("error: " + e.kind + ": " + str(e), file=sys.stderr)
        return 1
    return write_output(output, output_file)


if __name__ == "__main__":
    sys.exit(main())
