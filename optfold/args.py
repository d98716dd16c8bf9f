from enum import Enum
import dataclasses as dt
import typing as tp

# --- Classified Arguments --------------------------------------------------- #


@dt.dataclass(frozen=True)
class Arg:
    """
    Base class for the events handed to a parse callback.
    """

    pass


@dt.dataclass(frozen=True)
class Option(Arg):
    """
    A bare option with no value attached yet.

    Attributes:
        name: The option name without its dashes ("a" for "-a", "foo" for "--foo").
    """

    name: str


@dt.dataclass(frozen=True)
class OptionWithValue(Arg):
    """
    An option paired with its value.

    The value is either inline ("--foo=bar", the tail of "-fbar") or the
    whole token following the option.

    Attributes:
        name: The option name.
        value: The raw value, never converted.
    """

    name: str
    value: str


@dt.dataclass(frozen=True)
class Positional(Arg):
    """
    A plain value, a lone "-" or anything after "--".

    Attributes:
        value: The token.
    """

    value: str


# --- Hints ------------------------------------------------------------------ #


class HintKind(Enum):
    """
    Enum representing what a callback wants the automaton to do next.
    """

    CONSUMED = 0
    NEEDS_VALUE = 1
    REJECT = 2
    REJECT_VALUE = 3


@dt.dataclass(frozen=True)
class Hint:
    """
    The answer of a callback for one classified argument.

    Attributes:
        kind: What to do next.
        message: Why the value was rejected, only meaningful for `REJECT_VALUE`.
    """

    kind: HintKind
    message: str = ""

    @staticmethod
    def consumed() -> "Hint":
        return CONSUMED

    @staticmethod
    def needsValue() -> "Hint":
        return NEEDS_VALUE

    @staticmethod
    def reject() -> "Hint":
        return REJECT

    @staticmethod
    def rejectValue(message: str) -> "Hint":
        return Hint(HintKind.REJECT_VALUE, message)


CONSUMED = Hint(HintKind.CONSUMED)
NEEDS_VALUE = Hint(HintKind.NEEDS_VALUE)
REJECT = Hint(HintKind.REJECT)

# Returning None from a callback is the same as returning CONSUMED.
Callback = tp.Callable[[Arg], tp.Optional[Hint]]
