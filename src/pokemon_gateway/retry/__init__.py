"""
Retry policy for upstream calls.

Pure decision logic with no shared state:

1. **Classification**: map an HTTP status or a transport exception to an
   OutcomeKind (success, retryable, not found, other terminal failure)
2. **Retry decision**: retry only retryable outcomes while attempts remain
3. **Backoff**: exponential delay (100ms base, 1s cap) minus up to 30ms jitter
4. **State machine**: FetchState transitions driven by classified outcomes

Usage:
    >>> from pokemon_gateway.retry import classify_status, should_retry, backoff_delay
    >>> kind = classify_status(503)
    >>> if should_retry(attempt, max_attempts, kind):
    ...     await asyncio.sleep(backoff_delay(attempt))
"""

from pokemon_gateway.retry.policy import (
    BackoffPolicy,
    OutcomeKind,
    backoff_delay,
    classify_status,
    classify_transport_error,
    should_retry,
)
from pokemon_gateway.retry.state import FetchState, next_state

__all__ = [
    "BackoffPolicy",
    "FetchState",
    "OutcomeKind",
    "backoff_delay",
    "classify_status",
    "classify_transport_error",
    "next_state",
    "should_retry",
]
