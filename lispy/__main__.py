import argparse
import logging
import pathlib
import sys
from typing import Optional, Sequence

from lispy import config
from lispy.errors import LispyConfigError
from lispy.interpreter import Interpreter
from lispy.repl import Repl
from lispy.types.numeric import Arithmetic, OverflowPolicy


def set_up_argparse() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lispy",
        description=(
            "A minimal S-expression arithmetic interpreter. "
            "Starts an interactive prompt unless a file or -e is given."
        )
    )

    parser.add_argument(
        "file", type=str, nargs="?", help=(
            "A file to interpret, one program per line."
        )
    )
    parser.add_argument(
        "-e", "--eval", dest="expr", metavar="EXPR", help=(
            "Evaluate EXPR, print the result and exit."
        )
    )
    parser.add_argument(
        "--ast", action="store_true", help=(
            "Print the parse tree of each program before its result."
        )
    )
    parser.add_argument(
        "--overflow", choices=[p.value for p in OverflowPolicy], help=(
            "What to do when a result does not fit in LISPY_INT_BITS bits "
            "(default: LISPY_OVERFLOW, or error)."
        )
    )
    parser.add_argument(
        "--color", action="store_true", help=(
            "Colour results with ANSI escapes."
        )
    )
    parser.add_argument(
        "--serve", type=int, nargs="?", const=0, metavar="PORT", help=(
            "Serve JSON eval requests over TCP instead of reading input."
        )
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help=(
            "Log debug output from the parser, reader and evaluator."
        )
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = set_up_argparse()
    args = parser.parse_args(argv)

    try:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else config.get_log_level(),
            format="%(levelname)s %(name)s: %(message)s",
        )
        arithmetic = Arithmetic.from_env()
        if args.overflow:
            arithmetic = Arithmetic(bits=arithmetic.bits, policy=OverflowPolicy(args.overflow))
        interpreter = Interpreter(arithmetic=arithmetic)
        history = config.get_history_file()
    except LispyConfigError as e:
        parser.error(str(e))

    if args.serve is not None:
        from lispy_lsp.repl_server import PORT, ReplServer
        ReplServer(port=args.serve or PORT, interpreter=interpreter).serve_forever()
        return 0

    repl = Repl(interpreter, show_ast=args.ast, color=args.color)

    if args.expr is not None:
        return 0 if repl.eval_line(args.expr) else 1

    if args.file is not None:
        file = pathlib.Path(args.file)
        if not file.exists():
            parser.error(f"file: cannot find {file}")
        if not file.is_file():
            parser.error(f"file: {file} is not a file")
        return 1 if repl.run_file(file) else 0

    repl.run(history=history)
    return 0


if __name__ == "__main__":
    sys.exit(main())
