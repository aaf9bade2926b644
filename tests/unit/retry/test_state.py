"""
Unit tests for the fetch state machine transitions.
"""

import pytest

from pokemon_gateway.retry.policy import OutcomeKind
from pokemon_gateway.retry.state import FetchState, next_state


@pytest.mark.parametrize(
    "attempt, kind, expected",
    [
        (1, OutcomeKind.SUCCESS, FetchState.SUCCESS),
        (3, OutcomeKind.SUCCESS, FetchState.SUCCESS),
        (1, OutcomeKind.TERMINAL_NOT_FOUND, FetchState.NOT_FOUND),
        (2, OutcomeKind.TERMINAL_OTHER, FetchState.TERMINAL_ERROR),
        (1, OutcomeKind.RETRYABLE, FetchState.ATTEMPTING),
        (2, OutcomeKind.RETRYABLE, FetchState.ATTEMPTING),
        (3, OutcomeKind.RETRYABLE, FetchState.EXHAUSTED),
    ],
)
def test_next_state(attempt, kind, expected):
    assert next_state(attempt, 3, kind) is expected


def test_single_attempt_budget_exhausts_immediately():
    assert next_state(1, 1, OutcomeKind.RETRYABLE) is FetchState.EXHAUSTED


def test_only_attempting_is_non_final():
    assert FetchState.ATTEMPTING.is_final is False
    assert all(state.is_final for state in FetchState if state is not FetchState.ATTEMPTING)
