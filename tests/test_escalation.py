# tests/test_escalation.py
import pytest

from core.escalation import (
    PROVIDER_SLOT,
    TERMINAL_STATES,
    TIER_FOR_TERMINAL,
    State,
    is_terminal,
    transition,
)
from model.outcome import Tier


def _walk(results):
    """Run the machine from START feeding the given success flags."""
    state = State.START
    path = [state]
    feed = iter(results)
    while not is_terminal(state):
        state = transition(state, next(feed))
        path.append(state)
    return path


def test_confident_match_returns_database():
    assert _walk([True, True]) == [State.START, State.DB_CHECK, State.RETURN_DB]


def test_primary_provider_success():
    assert _walk([True, False, True])[-1] is State.RETURN_PROVIDER_1


def test_secondary_provider_success():
    assert _walk([True, False, False, True])[-2:] == [
        State.PROVIDER_2,
        State.RETURN_PROVIDER_2,
    ]


def test_all_tiers_failing_ends_in_disclaimer():
    assert _walk([True, False, False, False]) == [
        State.START,
        State.DB_CHECK,
        State.PROVIDER_1,
        State.PROVIDER_2,
        State.DISCLAIMER_RETURN,
    ]


def test_start_always_goes_to_db_check():
    assert transition(State.START, False) is State.DB_CHECK


@pytest.mark.parametrize("state", sorted(TERMINAL_STATES, key=lambda s: s.value))
def test_terminal_states_have_no_successor(state):
    with pytest.raises(ValueError):
        transition(state, True)


def test_every_terminal_state_maps_to_a_tier():
    assert set(TIER_FOR_TERMINAL) == set(TERMINAL_STATES)
    assert TIER_FOR_TERMINAL[State.DISCLAIMER_RETURN] is Tier.disclaimer_fallback


def test_provider_slots_follow_priority_order():
    assert PROVIDER_SLOT == {State.PROVIDER_1: 0, State.PROVIDER_2: 1}
