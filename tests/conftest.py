"""Shared test fixtures and configuration for all tests.

Provides in-memory stand-ins for the gateway's collaborators: a scripted
upstream transport, a recording metrics sink and a controllable clock.
"""

import asyncio
import json
from typing import Callable

import pytest

from pokemon_gateway.config import Settings
from pokemon_gateway.models.pokemon import PokemonResult
from pokemon_gateway.upstream.base_client import RawResponse, UpstreamTransport

PIKACHU_PAYLOAD = {"name": "pikachu", "height": 4, "weight": 60, "base_experience": 112}


class StubTransport(UpstreamTransport):
    """Scripted upstream transport.
    
    Each call consumes the next script item: a RawResponse is returned, an
    exception is raised. The last item repeats once the script runs out.
    ``delay`` makes every call block for that many seconds first.
    """

    def __init__(self, *script: RawResponse | BaseException, delay: float = 0.0):
        if not script:
            raise ValueError("script must not be empty")
        self.script = list(script)
        self.delay = delay
        self.calls: list[str] = []

    async def do_request(self, key: str) -> RawResponse:
        self.calls.append(key)
        if self.delay:
            await asyncio.sleep(self.delay)
        index = min(len(self.calls) - 1, len(self.script) - 1)
        item = self.script[index]
        if isinstance(item, BaseException):
            raise item
        return item


class RecordingMetricsSink:
    """MetricsSink that keeps everything in memory."""

    def __init__(self):
        self.requests: list[tuple[str, str]] = []
        self.durations: list[tuple[str, float]] = []

    def record_request(self, target: str, status: str) -> None:
        self.requests.append((target, status))

    def observe_duration(self, target: str, seconds: float) -> None:
        self.durations.append((target, seconds))

    def statuses(self) -> list[str]:
        return [status for _, status in self.requests]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SleepRecorder:
    """Awaitable sleep replacement that records requested delays without waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def ok_response(payload: dict | None = None) -> RawResponse:
    return RawResponse(status_code=200, body=json.dumps(payload or PIKACHU_PAYLOAD).encode())


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.
    
    Override specific settings in individual tests as needed.
    """
    return Settings(
        APP_NAME="Pokemon Gateway (Test)",
        ENVIRONMENT="development",
        LOG_LEVEL="DEBUG",
        POKEAPI_BASE_URL="http://pokeapi.test/api/v2",
        HTTP_TIMEOUT_SEC=1,
        FETCH_MAX_ATTEMPTS=3,
        REQUEST_TIMEOUT_SEC=5.0,
        POKEMON_CACHE_TTL_SEC=300,
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def pikachu_payload() -> dict:
    return dict(PIKACHU_PAYLOAD)


@pytest.fixture
def pikachu() -> PokemonResult:
    return PokemonResult(**PIKACHU_PAYLOAD)


@pytest.fixture
def make_pokemon() -> Callable[..., PokemonResult]:
    """Factory fixture to create PokemonResult with custom values.
    
    Usage:
        def test_something(make_pokemon):
            bulbasaur = make_pokemon(name="bulbasaur", height=7)
    """
    def _create(
        name: str = "pikachu",
        height: int = 4,
        weight: int = 60,
        base_experience: int = 112,
    ) -> PokemonResult:
        return PokemonResult(name=name, height=height, weight=weight, base_experience=base_experience)
    
    return _create


@pytest.fixture
def metrics_sink() -> RecordingMetricsSink:
    return RecordingMetricsSink()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_transport() -> type[StubTransport]:
    """Factory fixture for scripted upstream transports.
    
    Usage:
        def test_something(make_transport, make_ok_response):
            transport = make_transport(RawResponse(503), make_ok_response())
    """
    return StubTransport


@pytest.fixture
def make_ok_response() -> Callable[..., RawResponse]:
    """Factory fixture for 200 responses carrying a JSON payload (pikachu by default)."""
    return ok_response
