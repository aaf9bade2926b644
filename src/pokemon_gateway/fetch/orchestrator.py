"""
Fetch orchestrator: bounded retry with backoff over an upstream transport.

Attempt loop (explicit state machine, see retry.state):
    ATTEMPTING(n) --SUCCESS-------------> SUCCESS         return FetchResult
    ATTEMPTING(n) --TERMINAL_NOT_FOUND--> NOT_FOUND       raise PokemonNotFound
    ATTEMPTING(n) --TERMINAL_OTHER------> TERMINAL_ERROR  raise UpstreamStatusError / DecodeFailure
    ATTEMPTING(n) --RETRYABLE, n < N----> ATTEMPTING(n+1) after backoff sleep
    ATTEMPTING(N) --RETRYABLE-----------> EXHAUSTED       raise UpstreamUnavailable

Both blocking points (the upstream call and the backoff sleep) are awaited
inside the caller's deadline. When it fires the loop stops and FetchCancelled
is raised; an explicit task cancellation propagates as CancelledError.
"""

import asyncio
import random
import time
from typing import Awaitable, Callable

import structlog
from pydantic import ValidationError as PydanticValidationError

from pokemon_gateway.fetch.outcome import AttemptOutcome, FetchResult
from pokemon_gateway.models.pokemon import PokemonResult
from pokemon_gateway.monitoring.sink import MetricsSink
from pokemon_gateway.retry.policy import (
    BackoffPolicy,
    OutcomeKind,
    classify_status,
    classify_transport_error,
)
from pokemon_gateway.retry.state import FetchState, next_state
from pokemon_gateway.upstream.base_client import UpstreamTransport
from pokemon_gateway.upstream.exceptions import (
    DecodeFailure,
    FetchCancelled,
    PokemonNotFound,
    UpstreamStatusError,
    UpstreamUnavailable,
)

logger = structlog.get_logger(__name__)


class FetchOrchestrator:
    """
    Drives upstream attempts through the retry policy.
    
    Holds no per-request state, so one instance can serve any number of
    concurrent lookups. Attempts within one ``fetch`` call are strictly
    sequential.
    
    Attributes:
        transport: Upstream transport used for each attempt
        metrics: Sink receiving per-attempt counts and latencies
        max_attempts: Default retry bound
        backoff: Backoff timing policy
        target: Upstream label used in metrics
    """

    def __init__(
        self,
        transport: UpstreamTransport,
        metrics: MetricsSink,
        max_attempts: int = 3,
        backoff: BackoffPolicy | None = None,
        target: str = "pokeapi",
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: random.Random | None = None,
    ):
        """
        Initialize orchestrator.
        
        Args:
            transport: Upstream transport
            metrics: Metrics sink (fire-and-forget)
            max_attempts: Default number of attempts per fetch (>= 1)
            backoff: Backoff policy (default: 100ms base, 1s cap, 30ms jitter)
            target: Metrics label for the upstream
            sleep: Awaitable sleep used between attempts (injectable for tests)
            rng: Random source for jitter (injectable for tests)
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

        self.transport = transport
        self.metrics = metrics
        self.max_attempts = max_attempts
        self.backoff = backoff or BackoffPolicy()
        self.target = target
        self._sleep = sleep
        self._rng = rng

    async def fetch(
        self,
        key: str,
        *,
        max_attempts: int | None = None,
        timeout: float | None = None,
    ) -> FetchResult:
        """
        Fetch ``key`` from the upstream with bounded retries.
        
        Args:
            key: Lookup key (pokemon name)
            max_attempts: Override of the default retry bound
            timeout: Deadline in seconds covering all attempts and sleeps
        
        Returns:
            FetchResult for the first successful attempt
        
        Raises:
            PokemonNotFound: Upstream answered 404
            UpstreamStatusError: Non-retryable status or permanent transport error
            DecodeFailure: 200 body did not decode into PokemonResult
            UpstreamUnavailable: All attempts failed with retryable outcomes
            FetchCancelled: ``timeout`` elapsed before a final outcome
            asyncio.CancelledError: The calling task was cancelled
        """
        attempts_limit = self.max_attempts if max_attempts is None else max_attempts
        if attempts_limit < 1:
            raise ValueError(f"max_attempts must be >= 1, got {attempts_limit}")

        return await self._run(key, attempts_limit, timeout)

    async def _run(self, key: str, max_attempts: int, timeout: float | None) -> FetchResult:
        start = time.perf_counter()
        last: AttemptOutcome | None = None
        state = FetchState.ATTEMPTING
        attempt = 0

        try:
            async with asyncio.timeout(timeout):
                while state is FetchState.ATTEMPTING:
                    attempt += 1

                    outcome = await self._attempt(key, attempt, max_attempts)
                    last = outcome
                    state = next_state(attempt, max_attempts, outcome.kind)

                    if state is FetchState.ATTEMPTING:
                        self.metrics.record_request(self.target, outcome.metric_status)
                        delay = self.backoff.delay(attempt, self._rng)
                        logger.warning(
                            "Retryable upstream failure, backing off",
                            key=key,
                            attempt=attempt,
                            max_attempts=max_attempts,
                            reason=outcome.reason,
                            backoff_seconds=round(delay, 3),
                        )
                        await self._sleep(delay)
        except TimeoutError as e:
            logger.warning(
                "Upstream fetch deadline exceeded",
                key=key,
                timeout=timeout,
                attempts=attempt,
            )
            raise FetchCancelled(key, timeout, attempt) from e
        except asyncio.CancelledError:
            logger.info("Upstream fetch cancelled", key=key, attempts=attempt)
            raise

        latency_ms = int((time.perf_counter() - start) * 1000)
        return self._finish(key, state, last, attempt, latency_ms)

    async def _attempt(self, key: str, attempt: int, max_attempts: int) -> AttemptOutcome:
        logger.debug("Upstream attempt", key=key, attempt=attempt, max_attempts=max_attempts)

        attempt_start = time.perf_counter()
        try:
            response = await self.transport.do_request(key)
        except Exception as e:
            return AttemptOutcome.from_exception(e, classify_transport_error(e))
        finally:
            self.metrics.observe_duration(self.target, time.perf_counter() - attempt_start)

        kind = classify_status(response.status_code)
        if kind is not OutcomeKind.SUCCESS:
            return AttemptOutcome.from_status(response.status_code, kind)

        try:
            pokemon = PokemonResult.model_validate_json(response.body)
        except PydanticValidationError as e:
            self.metrics.record_request(self.target, "parse_error")
            logger.warning("Failed to decode upstream body", key=key, attempt=attempt, errors=e.error_count())
            raise DecodeFailure(key, f"{e.error_count()} validation error(s)") from e

        return AttemptOutcome.success(pokemon, response.status_code)

    def _finish(
        self,
        key: str,
        state: FetchState,
        last: AttemptOutcome,
        attempts: int,
        latency_ms: int,
    ) -> FetchResult:
        if state is FetchState.SUCCESS:
            self.metrics.record_request(self.target, last.metric_status)
            logger.info(
                "Upstream fetch succeeded",
                key=key,
                attempts=attempts,
                latency_ms=latency_ms,
            )
            return FetchResult(
                pokemon=last.value,
                status_code=last.status_code,
                attempts=attempts,
                latency_ms=latency_ms,
            )

        if state is FetchState.NOT_FOUND:
            self.metrics.record_request(self.target, last.metric_status)
            logger.info("Upstream reported not found", key=key, attempts=attempts)
            raise PokemonNotFound(key)

        if state is FetchState.TERMINAL_ERROR:
            self.metrics.record_request(self.target, last.metric_status)
            logger.warning(
                "Non-retryable upstream failure",
                key=key,
                attempts=attempts,
                upstream_status=last.status_code,
                reason=last.reason,
            )
            raise UpstreamStatusError(key, last.status_code, last.reason)

        # EXHAUSTED: the final retryable failure is counted as the overall error
        self.metrics.record_request(self.target, "error")
        logger.error(
            "Upstream retries exhausted",
            key=key,
            attempts=attempts,
            last_reason=last.reason,
            latency_ms=latency_ms,
        )
        raise UpstreamUnavailable(key, last.reason, attempts, last.status_code)
