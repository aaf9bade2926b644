"""
Fetch state machine.

States:
    ATTEMPTING       an attempt is about to run (or backing off before it)
    SUCCESS          a 200 with a decodable body was received
    NOT_FOUND        upstream answered 404
    TERMINAL_ERROR   non-retryable failure (other status, bad body, permanent transport error)
    EXHAUSTED        the last allowed attempt failed with a retryable outcome

Transitions depend only on the classified outcome and the attempt count,
so the loop can be tested without any network.
"""

from enum import Enum

from pokemon_gateway.retry.policy import OutcomeKind, should_retry


class FetchState(str, Enum):
    ATTEMPTING = "attempting"
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    TERMINAL_ERROR = "terminal_error"
    EXHAUSTED = "exhausted"

    @property
    def is_final(self) -> bool:
        return self is not FetchState.ATTEMPTING


def next_state(attempt: int, max_attempts: int, kind: OutcomeKind) -> FetchState:
    """
    Compute the state following ``attempt`` given its classified outcome.
    
    Args:
        attempt: Attempt that just completed (1-indexed)
        max_attempts: Retry bound
        kind: Classified outcome of that attempt
    
    Returns:
        ATTEMPTING if another attempt should run, otherwise a final state
    """
    if kind is OutcomeKind.SUCCESS:
        return FetchState.SUCCESS
    if kind is OutcomeKind.TERMINAL_NOT_FOUND:
        return FetchState.NOT_FOUND
    if kind is OutcomeKind.TERMINAL_OTHER:
        return FetchState.TERMINAL_ERROR
    if should_retry(attempt, max_attempts, kind):
        return FetchState.ATTEMPTING
    return FetchState.EXHAUSTED
