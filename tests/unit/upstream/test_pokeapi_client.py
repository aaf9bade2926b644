"""
Unit tests for the PokeAPI transport using httpx.MockTransport.
"""

import httpx
import pytest

from pokemon_gateway.upstream.base_client import RawResponse
from pokemon_gateway.upstream.pokeapi_client import PokeAPIClient


def make_client(handler) -> PokeAPIClient:
    return PokeAPIClient(
        base_url="http://pokeapi.test/api/v2/",
        timeout=1,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_do_request_returns_status_and_body(pikachu_payload):
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=pikachu_payload)

    client = make_client(handler)
    try:
        response = await client.do_request("pikachu")
    finally:
        await client.close()

    assert isinstance(response, RawResponse)
    assert response.status_code == 200
    assert b'"pikachu"' in response.body
    assert seen == ["http://pokeapi.test/api/v2/pokemon/pikachu"]


@pytest.mark.parametrize("status_code", [404, 500, 503, 400])
@pytest.mark.asyncio
async def test_do_request_does_not_raise_on_error_status(status_code):
    client = make_client(lambda request: httpx.Response(status_code, text="nope"))
    try:
        response = await client.do_request("pikachu")
    finally:
        await client.close()

    assert response.status_code == status_code
    assert response.body == b"nope"


@pytest.mark.asyncio
async def test_do_request_escapes_key():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.raw_path.decode())
        return httpx.Response(404)

    client = make_client(handler)
    try:
        await client.do_request("mr mime/../x")
    finally:
        await client.close()

    assert seen == ["/api/v2/pokemon/mr%20mime%2F..%2Fx"]


@pytest.mark.asyncio
async def test_transport_errors_propagate():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    try:
        with pytest.raises(httpx.ConnectError):
            await client.do_request("pikachu")
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_client_is_reused_and_recreated_after_close(pikachu_payload):
    client = make_client(lambda request: httpx.Response(200, json=pikachu_payload))

    first = await client._get_client()
    assert await client._get_client() is first

    await client.close()
    assert first.is_closed

    second = await client._get_client()
    assert second is not first
    await client.close()


@pytest.mark.asyncio
async def test_async_context_manager_closes(pikachu_payload):
    async with make_client(lambda request: httpx.Response(200, json=pikachu_payload)) as client:
        await client.do_request("pikachu")
        inner = client._client

    assert inner.is_closed
