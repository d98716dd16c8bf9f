import os
import sys
import logging

from typing import Optional

from . import (
    args,
    automaton,
    const,
    demo,
    errors,
    graph,
    vt100,
)
from .args import (  # noqa: F401 re-exported
    Arg,
    Callback,
    CONSUMED,
    Hint,
    HintKind,
    NEEDS_VALUE,
    REJECT,
    Option,
    OptionWithValue,
    Positional,
)
from .automaton import parse, parseArgv, parseIterator, parseStrings  # noqa: F401
from .errors import (  # noqa: F401
    InvalidValue,
    MissingValue,
    ParseError,
    ProtocolViolation,
    UnexpectedValue,
    UnknownOption,
)


class logger:
    @staticmethod
    def verboseFormat() -> str:
        # basicConfig logs to stderr.
        asctime = vt100.style("%(asctime)s", vt100.CYAN, sys.stderr)
        levelname = vt100.style("%(levelname)s", vt100.YELLOW, sys.stderr)
        return f"{asctime} {levelname} %(name)s: %(message)s"

    @staticmethod
    def setup(verbose: bool):
        if verbose:
            logging.basicConfig(
                level=logging.DEBUG,
                format=logger.verboseFormat(),
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        else:
            logging.basicConfig(
                level=logging.WARNING,
                format="%(levelname)s %(name)s: %(message)s",
            )


def _tokens(argv: Optional[list[str]]) -> list[str]:
    extra = os.environ.get(const.EXTRA_ARGS_ENV, None)
    return (extra.split(" ") if extra else []) + (
        sys.argv[1:] if argv is None else argv
    )


def main(argv: Optional[list[str]] = None) -> int:
    try:
        try:
            parsed = demo.parseArgs(_tokens(argv))
        except ParseError as e:
            vt100.error(str(e))
            print(f"Usage: {demo.usage()}", end="\n\n")
            return 1

        logger.setup(parsed.verbose)

        if parsed.help:
            demo.printHelp()
            return 0

        if parsed.version:
            print(f"optfold v{const.VERSION_STR}")
            return 0

        if parsed.graph:
            graph.write(parsed.graph)

        print(demo.report(parsed))
        return 0

    except RuntimeError as e:
        logging.exception(e)
        vt100.error(str(e))
        return 1

    except KeyboardInterrupt:
        print()
        return 1
