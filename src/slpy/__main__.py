"""CLI entry point: run `slpy file.slpy` or `python -m slpy file.slpy`."""

import logging
import os
import sys
from pathlib import Path


def _configure_logging(verbose: bool) -> None:
    from .utils.config import LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL
    level = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv=None) -> int:
    import argparse
    from .compiler.driver import CompilerDriver
    from .runtime.runtime import SlpyRuntime
    from .shared.serialization import serialize_ast
    from .utils.config import TERSE_ERROR_MARKER, DEFAULT_RENDER_INDENT, SOURCE_FILE_EXTENSION
    from .utils.io_utils import read_source_file

    parser = argparse.ArgumentParser(prog="slpy", description="Run or pretty-print a SLPy (.slpy) file.")
    parser.add_argument("file", type=Path, help="Path to .slpy source file")
    parser.add_argument("--tokens", action="store_true", help="Print the token stream before continuing")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--pprint", action="store_true", help="Print canonical source instead of running")
    mode.add_argument("--ast", action="store_true", help="Print the syntax tree as an S-expression instead of running")
    parser.add_argument("--indent", default=DEFAULT_RENDER_INDENT, help="Line prefix used by --pprint")
    parser.add_argument("--terse", action="store_true", help="On error print only ERROR")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    def fail(message: str) -> int:
        if args.terse:
            sys.stdout.write(f"{TERSE_ERROR_MARKER}\n")
        else:
            sys.stderr.write(message if message.endswith("\n") else message + "\n")
        return 1

    path = args.file
    if not path.exists():
        return fail(f"slpy: error: file not found: {path}")
    if not path.is_file():
        return fail(f"slpy: error: not a file: {path}")
    if path.suffix != SOURCE_FILE_EXTENSION:
        logging.getLogger("slpy").info(f"{path} does not have a {SOURCE_FILE_EXTENSION} extension")

    try:
        source = read_source_file(path)
    except (OSError, UnicodeDecodeError) as e:
        return fail(f"slpy: error: could not read file: {e}")

    result = CompilerDriver().compile(source, str(path))

    if args.tokens and result.tokens is not None:
        sys.stdout.write(result.tokens.dump() + "\n")

    if not result.success:
        return fail(result.reporter.format_all_errors())

    if args.pprint:
        result.program.render(sys.stdout, indent=args.indent)
        return 0
    if args.ast:
        sys.stdout.write(serialize_ast(result.program) + "\n")
        return 0

    exec_result = SlpyRuntime(stdin=sys.stdin, stdout=sys.stdout).execute(result.program, source_code=source)
    sys.stdout.flush()
    if exec_result.error is not None:
        return fail(exec_result.error.render())

    return 0


if __name__ == "__main__":
    sys.exit(main())
