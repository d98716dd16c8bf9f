import dataclasses as dt
import logging

from typing import Optional, Sequence

from optfold import const, vt100
from optfold.args import (
    Arg,
    Hint,
    NEEDS_VALUE,
    REJECT,
    Option,
    OptionWithValue,
    Positional,
)
from optfold.automaton import parseStrings

_logger = logging.getLogger(__name__)


@dt.dataclass
class DemoArgs:
    foo: Optional[str] = None
    a: bool = False
    b: bool = False
    z: bool = False
    v: int = 0
    jobs: int = 1
    graph: Optional[str] = None
    help: bool = False
    version: bool = False
    verbose: bool = False
    positional: list[str] = dt.field(default_factory=list)


# (short, long, metavar, description)
OPTIONS: list[tuple[Optional[str], Optional[str], Optional[str], str]] = [
    ("a", None, None, "Set a"),
    ("b", None, None, "Set b"),
    ("z", None, None, "Set z"),
    ("v", None, None, "Increase the v counter, can be repeated"),
    ("f", "foo", "VALUE", "Store VALUE in foo"),
    ("j", "jobs", "N", "Number of jobs, a positive integer"),
    (None, "graph", "FILE", "Write the automaton's transition diagram to FILE"),
    (None, "verbose", None, "Enable verbose logging"),
    (None, "version", None, "Show current version"),
    ("h", "help", None, "Show this help"),
]


def _parseJobs(value: str) -> int | str:
    """Returns the job count, or why `value` is not one."""
    try:
        jobs = int(value)
    except ValueError:
        return f"'{value}' is not a number"
    if jobs < 1:
        return "must be at least 1"
    return jobs


def parseArgs(tokens: Sequence[str]) -> DemoArgs:
    """
    Binds `tokens` to a `DemoArgs`.

    Raises:
        ParseError: The tokens do not describe a valid invocation.
    """
    res = DemoArgs()

    def handle(arg: Arg) -> Optional[Hint]:
        match arg:
            case Positional(value):
                res.positional.append(value)
            case Option("foo" | "f" | "jobs" | "j" | "graph"):
                return NEEDS_VALUE
            case OptionWithValue("foo" | "f", value):
                res.foo = value
            case OptionWithValue("jobs" | "j", value):
                jobs = _parseJobs(value)
                if isinstance(jobs, str):
                    return Hint.rejectValue(jobs)
                res.jobs = jobs
            case OptionWithValue("graph", value):
                res.graph = value
            case Option("help" | "h"):
                res.help = True
            case Option("version"):
                res.version = True
            case Option("verbose"):
                res.verbose = True
            case Option("a"):
                res.a = True
            case Option("b"):
                res.b = True
            case Option("z"):
                res.z = True
            case Option("v"):
                res.v += 1
            case _:
                return REJECT
        return None

    parseStrings(tokens, handle)
    return res


def usage() -> str:
    res = f"{const.ARGV0} [-abzv]"
    for short, long, metavar, _ in OPTIONS:
        if short in ("a", "b", "z", "v"):
            continue
        names = []
        if long:
            names.append(f"--{long}")
        if short:
            names.append(f"-{short}")
        flag = "|".join(names)
        if metavar:
            flag += f" {metavar}"
        res += f" [{flag}]"
    return res + " [ARGS...]"


def printHelp():
    """Prints the help message of the demo."""
    vt100.title(const.ARGV0)
    print()

    vt100.subtitle("Usage")
    print(vt100.indent(usage()))
    print()

    vt100.subtitle("Description")
    print(vt100.indent(vt100.wordwrap(const.DESCRIPTION)))
    print()

    vt100.subtitle("Options")
    for short, long, metavar, description in OPTIONS:
        flag = ""
        if short:
            flag += f"-{short}"

        if long:
            if flag:
                flag += ", "
            flag += f"--{long}"

        if metavar:
            flag += f" {metavar}"

        print(vt100.indent(f"{flag:<20} {description}"))
    print()


def report(args: DemoArgs) -> str:
    _logger.debug(f"Reporting {args}")
    return "\n".join(
        [
            f"foo: {args.foo!r}",
            f"a: {args.a}",
            f"b: {args.b}",
            f"z: {args.z}",
            f"v: {args.v}",
            f"jobs: {args.jobs}",
            f"positional: {', '.join(args.positional)}",
        ]
    )
