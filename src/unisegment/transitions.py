"""Grapheme cluster state machine: transition table, tie-break and resolver (UAX #29)."""
import logging
from enum import IntEnum
from types import MappingProxyType
from typing import NamedTuple

from unisegment.properties import Property, classify

logger = logging.getLogger(__name__)


class State(IntEnum):
    """What kind of cluster prefix has been consumed so far."""

    ANY = 0
    CR = 1
    CONTROL_LF = 2
    L = 3
    LV_V = 4
    LVT_T = 5
    PREPEND = 6
    EXTENDED_PICTOGRAPHIC = 7
    EXTENDED_PICTOGRAPHIC_ZWJ = 8
    RI_ODD = 9
    RI_EVEN = 10


class Transition(NamedTuple):
    """Table entry. boundary refers to the position before the incoming scalar."""

    state: State
    boundary: bool
    rank: int


BREAK = True
NO_BREAK = False

# Rank of the entry rules that open a multi-scalar state. They must lose
# against every numbered rule.
ENTRY_RANK = 9990

_RULES = {
    # GB3, then GB4 applies after the LF
    (State.CR, Property.LF): Transition(State.CONTROL_LF, NO_BREAK, 30),
    # GB4
    (State.CR, Property.ANY): Transition(State.ANY, BREAK, 40),
    (State.CONTROL_LF, Property.ANY): Transition(State.ANY, BREAK, 40),
    # GB5
    (State.ANY, Property.CR): Transition(State.CR, BREAK, 50),
    (State.ANY, Property.LF): Transition(State.CONTROL_LF, BREAK, 50),
    (State.ANY, Property.CONTROL): Transition(State.CONTROL_LF, BREAK, 50),
    # GB6
    (State.ANY, Property.L): Transition(State.L, BREAK, ENTRY_RANK),
    (State.L, Property.L): Transition(State.L, NO_BREAK, 60),
    (State.L, Property.V): Transition(State.LV_V, NO_BREAK, 60),
    (State.L, Property.LV): Transition(State.LV_V, NO_BREAK, 60),
    (State.L, Property.LVT): Transition(State.LVT_T, NO_BREAK, 60),
    # GB7
    (State.ANY, Property.LV): Transition(State.LV_V, BREAK, ENTRY_RANK),
    (State.ANY, Property.V): Transition(State.LV_V, BREAK, ENTRY_RANK),
    (State.LV_V, Property.V): Transition(State.LV_V, NO_BREAK, 70),
    (State.LV_V, Property.T): Transition(State.LVT_T, NO_BREAK, 70),
    # GB8
    (State.ANY, Property.LVT): Transition(State.LVT_T, BREAK, ENTRY_RANK),
    (State.ANY, Property.T): Transition(State.LVT_T, BREAK, ENTRY_RANK),
    (State.LVT_T, Property.T): Transition(State.LVT_T, NO_BREAK, 80),
    # GB9
    (State.ANY, Property.EXTEND): Transition(State.ANY, NO_BREAK, 90),
    (State.ANY, Property.ZWJ): Transition(State.ANY, NO_BREAK, 90),
    # GB9a
    (State.ANY, Property.SPACING_MARK): Transition(State.ANY, NO_BREAK, 91),
    # GB9b
    (State.ANY, Property.PREPEND): Transition(State.PREPEND, BREAK, ENTRY_RANK),
    (State.PREPEND, Property.ANY): Transition(State.ANY, NO_BREAK, 92),
    # GB11
    (State.ANY, Property.EXTENDED_PICTOGRAPHIC): Transition(
        State.EXTENDED_PICTOGRAPHIC, BREAK, ENTRY_RANK
    ),
    (State.EXTENDED_PICTOGRAPHIC, Property.EXTEND): Transition(
        State.EXTENDED_PICTOGRAPHIC, NO_BREAK, 110
    ),
    (State.EXTENDED_PICTOGRAPHIC, Property.ZWJ): Transition(
        State.EXTENDED_PICTOGRAPHIC_ZWJ, NO_BREAK, 110
    ),
    (State.EXTENDED_PICTOGRAPHIC_ZWJ, Property.EXTENDED_PICTOGRAPHIC): Transition(
        State.EXTENDED_PICTOGRAPHIC, NO_BREAK, 110
    ),
    # GB12, GB13
    (State.ANY, Property.REGIONAL_INDICATOR): Transition(State.RI_ODD, BREAK, ENTRY_RANK),
    (State.RI_ODD, Property.REGIONAL_INDICATOR): Transition(State.RI_EVEN, NO_BREAK, 120),
    (State.RI_EVEN, Property.REGIONAL_INDICATOR): Transition(State.RI_ODD, BREAK, 120),
}

TRANSITIONS = MappingProxyType(_RULES)


def break_tie(state_wildcard: Transition, property_wildcard: Transition) -> tuple[State, bool]:
    """Combine a (state, ANY) entry with an (ANY, property) entry that both apply.

    The next state always comes from the property wildcard. The boundary comes
    from the entry with the lower rank; the property wildcard wins equal ranks.
    """
    if state_wildcard.rank < property_wildcard.rank:
        return property_wildcard.state, state_wildcard.boundary
    return property_wildcard.state, property_wildcard.boundary


def resolve(state: State, prop: Property) -> tuple[State, bool]:
    """Return (next state, boundary before the scalar) for any state/property pair."""
    exact = TRANSITIONS.get((state, prop))
    if exact is not None:
        return exact.state, exact.boundary

    state_wildcard = TRANSITIONS.get((state, Property.ANY))
    property_wildcard = TRANSITIONS.get((State.ANY, prop))
    if state_wildcard is not None and property_wildcard is not None:
        return break_tie(state_wildcard, property_wildcard)
    if state_wildcard is not None:
        return state_wildcard.state, state_wildcard.boundary
    if property_wildcard is not None:
        return property_wildcard.state, property_wildcard.boundary

    # GB999
    return State.ANY, BREAK


# Dense read-only copy of resolve(), indexed [state][property].
_RESOLVED = tuple(tuple(resolve(s, p) for p in Property) for s in State)
logger.debug("Resolved %d x %d grapheme transitions", len(State), len(Property))


def transition(state: State, scalar: int) -> tuple[State, bool]:
    """Advance the automaton by one scalar value."""
    return _RESOLVED[state][classify(scalar)]
