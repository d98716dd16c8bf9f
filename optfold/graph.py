import dataclasses as dt
import logging

from typing import Optional

from optfold import const, vt100
from optfold.automaton import StateKind

_logger = logging.getLogger(__name__)


@dt.dataclass(frozen=True)
class Transition:
    """
    One row of the automaton's transition table.

    Attributes:
        source: The state the row applies to.
        shape: What the token (and the callback's answer) looks like.
        target: The next state, None when the row ends the parse with `error`.
        emits: The events handed to the callback, in order.
        error: The error raised when `target` is None.
    """

    source: StateKind
    shape: str
    target: Optional[StateKind]
    emits: str = ""
    error: str = ""


TRANSITIONS: list[Transition] = [
    Transition(StateKind.IDLE, "empty token", StateKind.IDLE),
    Transition(StateKind.IDLE, "starts with '-'", StateKind.AFTER_SINGLE_DASH),
    Transition(StateKind.IDLE, "other token", StateKind.IDLE, "Positional(token)"),
    Transition(
        StateKind.AFTER_SINGLE_DASH, "end of token", StateKind.IDLE, "Positional('-')"
    ),
    Transition(StateKind.AFTER_SINGLE_DASH, "'-'", StateKind.AFTER_DOUBLE_DASH),
    Transition(StateKind.AFTER_SINGLE_DASH, "other", StateKind.BUNDLE_TAIL),
    Transition(
        StateKind.AFTER_DOUBLE_DASH, "end of token", StateKind.FORCED_POSITIONAL
    ),
    Transition(
        StateKind.AFTER_DOUBLE_DASH,
        "name / CONSUMED",
        StateKind.IDLE,
        "Option(name)",
    ),
    Transition(
        StateKind.AFTER_DOUBLE_DASH,
        "name / NEEDS_VALUE",
        StateKind.AWAITING_VALUE,
        "Option(name)",
    ),
    Transition(
        StateKind.AFTER_DOUBLE_DASH,
        "name=value / NEEDS_VALUE",
        StateKind.IDLE,
        "Option(name), OptionWithValue(name, value)",
    ),
    Transition(
        StateKind.AFTER_DOUBLE_DASH,
        "name=value / CONSUMED",
        None,
        "Option(name)",
        "UnexpectedValue",
    ),
    Transition(StateKind.BUNDLE_TAIL, "end of token", StateKind.IDLE),
    Transition(
        StateKind.BUNDLE_TAIL, "c / CONSUMED", StateKind.BUNDLE_TAIL, "Option(c)"
    ),
    Transition(
        StateKind.BUNDLE_TAIL,
        "c rest / NEEDS_VALUE",
        StateKind.IDLE,
        "Option(c), OptionWithValue(c, rest)",
    ),
    Transition(
        StateKind.BUNDLE_TAIL,
        "c / NEEDS_VALUE",
        StateKind.AWAITING_VALUE,
        "Option(c)",
    ),
    Transition(
        StateKind.AWAITING_VALUE,
        "any token / CONSUMED",
        StateKind.IDLE,
        "OptionWithValue(name, token)",
    ),
    Transition(
        StateKind.AWAITING_VALUE,
        "any token / NEEDS_VALUE",
        None,
        "OptionWithValue(name, token)",
        "ProtocolViolation",
    ),
    Transition(
        StateKind.AWAITING_VALUE, "end of input", None, error="MissingValue"
    ),
    Transition(
        StateKind.FORCED_POSITIONAL,
        "any token",
        StateKind.FORCED_POSITIONAL,
        "Positional(token)",
    ),
]

# Both are reachable from every state that emits an option.
REJECTIONS = {"REJECT": "UnknownOption", "REJECT_VALUE": "InvalidValue"}


def _stateLabel(kind: StateKind) -> str:
    return f"<<B>{kind.name}</B>>"


def build(name: str = const.ARGV0):
    """
    Builds the transition diagram of the automaton.

    Returns:
        A `graphviz.Digraph`, nothing is rendered or written.
    """
    from graphviz import Digraph  # type: ignore

    g = Digraph(name, filename=const.GRAPH_FILE)

    g.attr("graph", rankdir="LR")
    g.attr("node", shape="ellipse")
    g.attr(
        "graph",
        label=f"<<B>{name}</B><BR/>v{const.VERSION_STR}>",
        labelloc="t",
    )

    betweenTokens = (
        StateKind.IDLE,
        StateKind.AWAITING_VALUE,
        StateKind.FORCED_POSITIONAL,
    )

    for kind in StateKind:
        g.node(
            kind.name,
            _stateLabel(kind),
            shape="doublecircle" if kind in betweenTokens else "ellipse",
            style="filled",
            fillcolor="lightblue" if kind in betweenTokens else "lightgrey",
        )

    errors = sorted(
        {t.error for t in TRANSITIONS if t.error} | set(REJECTIONS.values())
    )
    for err in errors:
        g.node(err, err, shape="box", fontcolor="#aa0000", color="#aa0000")

    for t in TRANSITIONS:
        label = t.shape
        if t.emits:
            label += f"\n{vt100.wordwrap(t.emits, 30)}"

        if t.target is None:
            g.edge(t.source.name, t.error, label=label, color="#aa0000")
        else:
            g.edge(t.source.name, t.target.name, label=label)

    for kind in (
        StateKind.AFTER_DOUBLE_DASH,
        StateKind.BUNDLE_TAIL,
        StateKind.AWAITING_VALUE,
    ):
        for hint, err in REJECTIONS.items():
            g.edge(kind.name, err, label=hint, color="#aaaaaa", style="dashed")

    _logger.debug(f"Built transition diagram with {len(TRANSITIONS)} transitions")
    return g


def write(path: str = const.GRAPH_FILE) -> str:
    """
    Writes the DOT source of the transition diagram to `path` and returns the path.

    Raises:
        RuntimeError: graphviz is not installed or `path` cannot be written.
    """
    try:
        g = build()
    except ImportError as e:
        raise RuntimeError(f"Drawing the automaton requires graphviz: {e}") from e

    try:
        out = g.save(filename=path)
    except OSError as e:
        raise RuntimeError(f"Failed to write transition diagram to '{path}': {e}") from e

    _logger.info(f"Wrote transition diagram to '{out}'")
    return out
