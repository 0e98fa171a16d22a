# core/escalation.py
"""
Escalation order as an explicit state machine.

    START -> DB_CHECK -> RETURN_DB
                      -> PROVIDER_1 -> RETURN_PROVIDER_1
                                    -> PROVIDER_2 -> RETURN_PROVIDER_2
                                                  -> DISCLAIMER_RETURN

`transition` is pure: the orchestrator performs the I/O of a state and feeds
back only whether it succeeded.
"""
from enum import Enum
from typing import Final, Mapping
from model.outcome import Tier


class State(str, Enum):
    START = "start"
    DB_CHECK = "db_check"
    PROVIDER_1 = "provider_1"
    PROVIDER_2 = "provider_2"
    RETURN_DB = "return_db"
    RETURN_PROVIDER_1 = "return_provider_1"
    RETURN_PROVIDER_2 = "return_provider_2"
    DISCLAIMER_RETURN = "disclaimer_return"


TERMINAL_STATES: Final[frozenset[State]] = frozenset(
    {
        State.RETURN_DB,
        State.RETURN_PROVIDER_1,
        State.RETURN_PROVIDER_2,
        State.DISCLAIMER_RETURN,
    }
)

# state -> (next on success, next on failure)
_EDGES: Final[Mapping[State, tuple[State, State]]] = {
    State.START: (State.DB_CHECK, State.DB_CHECK),
    State.DB_CHECK: (State.RETURN_DB, State.PROVIDER_1),
    State.PROVIDER_1: (State.RETURN_PROVIDER_1, State.PROVIDER_2),
    State.PROVIDER_2: (State.RETURN_PROVIDER_2, State.DISCLAIMER_RETURN),
}

# Index into the ordered provider chain for each provider state.
PROVIDER_SLOT: Final[Mapping[State, int]] = {
    State.PROVIDER_1: 0,
    State.PROVIDER_2: 1,
}

TIER_FOR_TERMINAL: Final[Mapping[State, Tier]] = {
    State.RETURN_DB: Tier.database,
    State.RETURN_PROVIDER_1: Tier.provider_primary,
    State.RETURN_PROVIDER_2: Tier.provider_secondary,
    State.DISCLAIMER_RETURN: Tier.disclaimer_fallback,
}


def transition(state: State, succeeded: bool) -> State:
    """Next state after `state` finished; terminal states have no successor."""
    if state in TERMINAL_STATES:
        raise ValueError(f"{state.value} is terminal")
    on_success, on_failure = _EDGES[state]
    return on_success if succeeded else on_failure


def is_terminal(state: State) -> bool:
    return state in TERMINAL_STATES
