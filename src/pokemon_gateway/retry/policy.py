"""
Retry classification and backoff timing.

Classification favors availability: a transport failure is retried unless it
is known to be permanent (a malformed URL or protocol will not fix itself on
the next attempt). Upstream 5xx responses are retried, 404 is a definitive
answer, and every other status is a terminal upstream error.
"""

import random
from dataclasses import dataclass
from enum import Enum

import httpx


class OutcomeKind(str, Enum):
    """Classified result of a single upstream attempt."""

    SUCCESS = "success"
    RETRYABLE = "retryable"
    TERMINAL_NOT_FOUND = "terminal_not_found"
    TERMINAL_OTHER = "terminal_other"


# Transport errors that repeat identically on every attempt
NON_TRANSIENT_TRANSPORT_ERRORS: tuple[type[Exception], ...] = (
    httpx.UnsupportedProtocol,
    httpx.InvalidURL,
    httpx.LocalProtocolError,
    httpx.TooManyRedirects,
)


def classify_status(status_code: int) -> OutcomeKind:
    """
    Classify an upstream HTTP status.
    
    Args:
        status_code: Status returned by the upstream
    
    Returns:
        SUCCESS for 200, RETRYABLE for 5xx, TERMINAL_NOT_FOUND for 404,
        TERMINAL_OTHER otherwise
    """
    if status_code == 200:
        return OutcomeKind.SUCCESS
    if status_code >= 500:
        return OutcomeKind.RETRYABLE
    if status_code == 404:
        return OutcomeKind.TERMINAL_NOT_FOUND
    return OutcomeKind.TERMINAL_OTHER


def classify_transport_error(exc: BaseException) -> OutcomeKind:
    """
    Classify an exception raised while talking to the upstream.
    
    Unknown exception types are treated as transient.
    """
    if isinstance(exc, NON_TRANSIENT_TRANSPORT_ERRORS):
        return OutcomeKind.TERMINAL_OTHER
    return OutcomeKind.RETRYABLE


def should_retry(attempt: int, max_attempts: int, kind: OutcomeKind) -> bool:
    """True iff the outcome is retryable and attempts remain (1-indexed)."""
    return kind is OutcomeKind.RETRYABLE and attempt < max_attempts


@dataclass(frozen=True)
class BackoffPolicy:
    """
    Exponential backoff with subtractive jitter.
    
    ``delay(n) = min(base * 2**(n-1), max) - U[0, jitter)``, clamped at zero.
    Jitter only ever shortens the delay, so the cap is a hard upper bound.
    
    Attributes:
        base_seconds: Delay after the first failed attempt (before jitter)
        max_seconds: Upper bound on any delay
        jitter_seconds: Exclusive upper bound of the random reduction
    """

    base_seconds: float = 0.1
    max_seconds: float = 1.0
    jitter_seconds: float = 0.03

    def __post_init__(self) -> None:
        if self.base_seconds < 0 or self.max_seconds < 0 or self.jitter_seconds < 0:
            raise ValueError("backoff durations must be >= 0")

    def ceiling(self, attempt: int) -> float:
        """Un-jittered delay after ``attempt`` (1-indexed)."""
        if attempt < 1:
            raise ValueError(f"attempt must be >= 1, got {attempt}")
        # Exponent capped to keep the float finite for absurd attempt counts
        exponent = min(attempt - 1, 62)
        return min(self.base_seconds * (2 ** exponent), self.max_seconds)

    def delay(self, attempt: int, rng: random.Random | None = None) -> float:
        """Jittered delay in seconds after ``attempt`` failed."""
        jitter = (rng or random).random() * self.jitter_seconds
        return max(0.0, self.ceiling(attempt) - jitter)


DEFAULT_BACKOFF = BackoffPolicy()


def backoff_delay(attempt: int, rng: random.Random | None = None) -> float:
    """Backoff delay in seconds using the default 100ms/1s/30ms policy."""
    return DEFAULT_BACKOFF.delay(attempt, rng)
