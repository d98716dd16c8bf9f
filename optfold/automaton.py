from enum import Enum
import dataclasses as dt
import logging
import sys

from typing import Iterable, Iterator, Sequence
from optfold.args import (
    Arg,
    Callback,
    CONSUMED,
    Hint,
    HintKind,
    Option,
    OptionWithValue,
    Positional,
)
from optfold.errors import (
    InvalidValue,
    MissingValue,
    ParseError,
    ProtocolViolation,
    UnexpectedValue,
    UnknownOption,
)

_logger = logging.getLogger(__name__)

# --- State ------------------------------------------------------------------ #


class StateKind(Enum):
    """
    Enum representing the states of the classifier automaton.

    Only IDLE, AWAITING_VALUE and FORCED_POSITIONAL survive between two
    tokens, the others only exist while a single token is being resolved.
    """

    IDLE = 0
    AFTER_SINGLE_DASH = 1
    AFTER_DOUBLE_DASH = 2
    BUNDLE_TAIL = 3
    AWAITING_VALUE = 4
    FORCED_POSITIONAL = 5


@dt.dataclass(frozen=True)
class State:
    """
    The automaton state threaded from one token to the next.

    Attributes:
        kind: The state the automaton is in.
        pending: The option waiting for a value, only set for `AWAITING_VALUE`.
    """

    kind: StateKind
    pending: str = ""

    @staticmethod
    def awaiting(name: str) -> "State":
        return State(StateKind.AWAITING_VALUE, name)


IDLE = State(StateKind.IDLE)
FORCED_POSITIONAL = State(StateKind.FORCED_POSITIONAL)

# --- Transitions ------------------------------------------------------------ #


def _ask(callback: Callback, arg: Arg) -> Hint:
    """Hands one classified argument to the callback and normalizes its answer."""
    hint = callback(arg)
    if hint is None:
        return CONSUMED
    if not isinstance(hint, Hint):
        raise TypeError(f"Expected a Hint or None from the callback, got {hint!r}")
    return hint


def _positional(callback: Callback, value: str) -> None:
    # Checked like any other answer, then ignored: a positional cannot be rejected.
    _ask(callback, Positional(value))


def _rejection(name: str, hint: Hint) -> ParseError:
    if hint.kind == HintKind.REJECT_VALUE:
        return InvalidValue(name, hint.message)
    return UnknownOption(name)


def _resolveValue(name: str, value: str, callback: Callback) -> State:
    """Delivers the value of `name`, the answer must not ask for another one."""
    hint = _ask(callback, OptionWithValue(name, value))
    match hint.kind:
        case HintKind.CONSUMED:
            return IDLE
        case HintKind.NEEDS_VALUE:
            raise ProtocolViolation(name)
        case _:
            raise _rejection(name, hint)


def _resolveLong(body: str, callback: Callback) -> State:
    """Resolves what follows "--", with or without an inline value."""
    name, sep, value = body.partition("=")
    hint = _ask(callback, Option(name))
    if sep:
        match hint.kind:
            case HintKind.CONSUMED:
                raise UnexpectedValue(name, value)
            case HintKind.NEEDS_VALUE:
                return _resolveValue(name, value, callback)
    else:
        match hint.kind:
            case HintKind.CONSUMED:
                return IDLE
            case HintKind.NEEDS_VALUE:
                return State.awaiting(name)
    raise _rejection(name, hint)


def step(state: State, token: str, callback: Callback) -> State:
    """
    Feeds one token to the automaton.

    Args:
        state: The state left by the previous token.
        token: The token to classify.
        callback: Receives every classified argument.

    Returns:
        The state to feed the next token to.

    Raises:
        ParseError: The callback rejected something or answered inconsistently.
    """
    match state.kind:
        case StateKind.AWAITING_VALUE:
            return _resolveValue(state.pending, token, callback)
        case StateKind.FORCED_POSITIONAL:
            _positional(callback, token)
            return state
        case StateKind.IDLE:
            pass
        case _:
            raise AssertionError(f"Invalid state between tokens: {state}")

    if token == "":
        return state

    if not token.startswith("-"):
        _positional(callback, token)
        return IDLE

    # Walk the token with an offset, bundles can be arbitrarily long.
    kind = StateKind.AFTER_SINGLE_DASH
    off = 1
    end = len(token)
    while True:
        match kind:
            case StateKind.AFTER_SINGLE_DASH:
                if off == end:
                    _positional(callback, "-")
                    return IDLE
                if token[off] == "-":
                    off += 1
                    kind = StateKind.AFTER_DOUBLE_DASH
                else:
                    kind = StateKind.BUNDLE_TAIL

            case StateKind.AFTER_DOUBLE_DASH:
                if off == end:
                    return FORCED_POSITIONAL
                return _resolveLong(token[off:], callback)

            case StateKind.BUNDLE_TAIL:
                if off == end:
                    return IDLE
                name = token[off]
                off += 1
                hint = _ask(callback, Option(name))
                match hint.kind:
                    case HintKind.CONSUMED:
                        continue
                    case HintKind.NEEDS_VALUE:
                        if off < end:
                            return _resolveValue(name, token[off:], callback)
                        return State.awaiting(name)
                    case _:
                        raise _rejection(name, hint)

            case _:
                raise AssertionError(f"Invalid state inside token: {kind}")


def finish(state: State) -> None:
    """Checks the state left after the last token."""
    match state.kind:
        case StateKind.IDLE | StateKind.FORCED_POSITIONAL:
            return
        case StateKind.AWAITING_VALUE:
            raise MissingValue(state.pending)
        case _:
            raise AssertionError(f"Invalid state after parse: {state}")


# --- Drivers ---------------------------------------------------------------- #


def parse(tokens: Iterable[str], callback: Callback) -> None:
    """
    Classifies `tokens` from left to right, asking `callback` what each one is.

    Args:
        tokens: The command-line tokens, without the program name.
        callback: Called with every `Option`, `OptionWithValue` and
            `Positional`; answers with a `Hint` or None (same as CONSUMED).

    Raises:
        ParseError: On the first error, no later token is looked at.
    """
    state = IDLE
    for token in tokens:
        state = step(state, token, callback)
    finish(state)


def parseArgv(callback: Callback) -> None:
    """Parses the arguments of the current process, skipping the program name."""
    argv = sys.argv[1:]
    _logger.debug(f"Parsing {len(argv)} process arguments")
    parse(argv, callback)


def parseStrings(strings: Sequence[str], callback: Callback) -> None:
    """Parses a list of strings owned by the caller."""
    _logger.debug(f"Parsing {len(strings)} arguments")
    parse(strings, callback)


def parseIterator(iterator: Iterator[str], callback: Callback) -> None:
    """Parses strings pulled lazily from `iterator`."""
    _logger.debug("Parsing arguments from an iterator")
    parse(iterator, callback)
