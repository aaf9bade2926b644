"""
Per-attempt outcomes and the final fetch result.
"""

from dataclasses import dataclass

from pokemon_gateway.models.pokemon import PokemonResult
from pokemon_gateway.retry.policy import OutcomeKind


@dataclass(frozen=True)
class AttemptOutcome:
    """
    Classified result of one upstream attempt.
    
    Transient: consumed by the orchestrator loop right after the attempt and
    never stored.
    
    Attributes:
        kind: Classification driving the state machine
        value: Decoded result (SUCCESS only)
        status_code: Upstream HTTP status, None for transport errors
        reason: Short diagnostic ("status 503", "ConnectError: ...")
        metric_status: Label recorded in external_api_requests_total
    """

    kind: OutcomeKind
    value: PokemonResult | None = None
    status_code: int | None = None
    reason: str = ""
    metric_status: str = ""

    @classmethod
    def success(cls, value: PokemonResult, status_code: int = 200) -> "AttemptOutcome":
        return cls(
            kind=OutcomeKind.SUCCESS,
            value=value,
            status_code=status_code,
            reason="ok",
            metric_status=str(status_code),
        )

    @classmethod
    def from_status(cls, status_code: int, kind: OutcomeKind) -> "AttemptOutcome":
        metric_status = "retry" if kind is OutcomeKind.RETRYABLE else str(status_code)
        return cls(
            kind=kind,
            status_code=status_code,
            reason=f"upstream status {status_code}",
            metric_status=metric_status,
        )

    @classmethod
    def from_exception(cls, exc: BaseException, kind: OutcomeKind) -> "AttemptOutcome":
        metric_status = "retry" if kind is OutcomeKind.RETRYABLE else "error"
        return cls(
            kind=kind,
            reason=f"{type(exc).__name__}: {exc}",
            metric_status=metric_status,
        )


@dataclass(frozen=True)
class FetchResult:
    """
    Successful lookup.
    
    Attributes:
        pokemon: Decoded result
        status_code: Upstream status of the successful attempt
        attempts: Number of attempts made (1 = first try)
        latency_ms: Total time from first attempt to result, backoff included
    """

    pokemon: PokemonResult
    status_code: int
    attempts: int
    latency_ms: int

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError("attempts must be >= 1")
        if self.latency_ms < 0:
            raise ValueError("latency_ms must be >= 0")
