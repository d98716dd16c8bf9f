import os
import sys
from typing import Optional, TextIO


RED = "\033[31m"
CYAN = "\033[36m"
WHITE = "\033[37m"
YELLOW = "\033[33m"

BOLD = "\033[1m"
UNDERLINE = "\033[4m"
RESET = "\033[0m"


def enabled(stream: Optional[TextIO] = None) -> bool:
    """Escape codes are only written to terminals, and never when NO_COLOR is set."""
    stream = stream or sys.stdout
    if os.environ.get("NO_COLOR"):
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def style(text: str, codes: str, stream: Optional[TextIO] = None) -> str:
    if not enabled(stream):
        return text
    return f"{codes}{text}{RESET}"


def wordwrap(text: str, width: int = 60, newline: str = "\n") -> str:
    result = ""
    curr = 0

    for c in text:
        if c == " " and curr > width:
            result += newline
            curr = 0
        else:
            result += c
            curr += 1

    return result


def indent(text: str, indent: int = 4) -> str:
    return " " * indent + text.replace("\n", "\n" + " " * indent)


def title(text: str):
    print(style(text, BOLD + WHITE + UNDERLINE))


def subtitle(text: str):
    print(f"{style(text, BOLD + WHITE)}:")


def error(msg: str) -> None:
    print(f"{style('Error:', RED, sys.stderr)} {msg}\n", file=sys.stderr)
