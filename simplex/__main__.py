"""Command-line driver: run Simplex files, a piped program, or a line REPL.

    python -m simplex [--ast] [--ast-options JSON] [--verbose] [FILE ...]
"""
from __future__ import annotations

import argparse
import logging
import sys
import threading
from pathlib import Path
from typing import Sequence, TextIO

from simplex.debug_utils.pprint import COLOR_OPTIONS, DEFAULT_OPTIONS, load_options_from_json, pprint_ast
from simplex.config import get_recursion_limit
from simplex.errors import SimplexEvaluationError
from simplex.interpreter import Interpreter

log = logging.getLogger(__name__)

BANNER = "-" * 40
PROMPT = "simplex> "

# Deep language recursion needs more C stack than a default thread gets
WORKER_STACK_SIZE = 256 * 1024 * 1024
WORKER_RECURSION_LIMIT = 100_000


def report(error: SimplexEvaluationError, stderr: TextIO) -> None:
    stderr.write(f"{BANNER}\nUnhandled exception!\n{BANNER}\n{error}\n")


def run_source(
    interp: Interpreter,
    code: str,
    source_id: str,
    ast_options: dict | None,
    stdout: TextIO,
) -> None:
    """Evaluate `code`, or print its tree when `ast_options` is given."""
    if ast_options is not None:
        stdout.write(pprint_ast(interp.parse(code), options=ast_options) + "\n")
        return
    interp.eval(code, source_id)


def repl(
    interp: Interpreter,
    ast_options: dict | None,
    stdin: TextIO,
    stdout: TextIO,
    stderr: TextIO,
) -> None:
    """Evaluate one line at a time; errors are reported and the loop carries on."""
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            stdout.write("\n")
            return
        if not line.strip():
            continue
        try:
            if ast_options is not None:
                run_source(interp, line, "<repl>", ast_options, stdout)
            else:
                stdout.write(f"{interp.eval(line, '<repl>')}\n")
        except SimplexEvaluationError as e:
            report(e, stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="simplex", description="Run Simplex programs.")
    parser.add_argument("files", nargs="*", help="files to run in order (if empty, reads stdin or starts a REPL)")
    parser.add_argument("--ast", action="store_true", help="print the parsed tree instead of evaluating")
    parser.add_argument(
        "--ast-options",
        metavar="JSON",
        help='tree printer options as a JSON object, e.g. \'{"display_position": true}\'; implies --ast',
    )
    parser.add_argument("--verbose", action="store_true", help="log interpreter activity to stderr")
    return parser


def ast_options_for(args: argparse.Namespace, stdout: TextIO) -> dict | None:
    if args.ast_options is not None:
        return load_options_from_json(args.ast_options)
    if args.ast:
        return COLOR_OPTIONS if stdout.isatty() else DEFAULT_OPTIONS
    return None


def new_interpreter(stdin: TextIO, stdout: TextIO) -> Interpreter:
    return Interpreter(
        input=stdin,
        output=stdout,
        max_recursion=max(get_recursion_limit(), WORKER_RECURSION_LIMIT),
    )


def run(
    args: argparse.Namespace,
    ast_options: dict | None,
    stdin: TextIO,
    stdout: TextIO,
    stderr: TextIO,
) -> int:
    try:
        if args.files:
            for name in args.files:
                log.debug("running %s", name)
                code = Path(name).read_text(encoding="utf-8")
                # Each file gets a fresh interpreter
                interp = new_interpreter(stdin, stdout)
                run_source(interp, code, name, ast_options, stdout)
            return 0

        if stdin.isatty():
            interp = new_interpreter(stdin, stdout)
            repl(interp, ast_options, stdin, stdout, stderr)
            return 0

        # Piped program: the whole of stdin is the source, so `read` sees end of input
        code = stdin.read()
        interp = new_interpreter(stdin, stdout)
        run_source(interp, code, "<stdin>", ast_options, stdout)
        return 0
    except SimplexEvaluationError as e:
        report(e, stderr)
        return 1
    except OSError as e:
        stderr.write(f"simplex: {e}\n")
        return 1


def run_on_worker(
    args: argparse.Namespace,
    ast_options: dict | None,
    stdin: TextIO,
    stdout: TextIO,
    stderr: TextIO,
) -> int:
    """Run the driver on a thread with a large stack and hand its result back."""
    outcome: list = []

    def target() -> None:
        try:
            outcome.append(run(args, ast_options, stdin, stdout, stderr))
        except BaseException as e:  # re-raised on the calling thread
            outcome.append(e)

    previous = threading.stack_size(WORKER_STACK_SIZE)
    try:
        worker = threading.Thread(target=target, name="simplex-main", daemon=True)
        worker.start()
    finally:
        threading.stack_size(previous)
    worker.join()

    (result,) = outcome
    if isinstance(result, BaseException):
        raise result
    return result


def main(
    argv: Sequence[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=stderr)
    try:
        ast_options = ast_options_for(args, stdout)
    except ValueError as e:
        parser.error(f"--ast-options: {e}")
    return run_on_worker(args, ast_options, stdin, stdout, stderr)


if __name__ == "__main__":
    sys.exit(main())
