"""Client test fixtures — gateway clients over ASGI or a scripted transport."""

import httpx
import pytest
from httpx import ASGITransport

from racing_dashboard.client.gateway_client import GatewayClient
from tests.upstream_stub import USER_ID


@pytest.fixture
async def gateway(wired_app):
    """GatewayClient talking to the real app as USER_ID."""
    async with GatewayClient(
        "http://test",
        headers={"x-user-id": USER_ID},
        transport=ASGITransport(app=wired_app, raise_app_exceptions=False),
    ) as g:
        yield g


class ScriptedGateway:
    """MockTransport handler answering by path; unscripted paths are 500s."""

    def __init__(self):
        self.calls: list[httpx.Request] = []
        self.responses: dict[tuple[str, str], httpx.Response] = {}

    def on(self, method: str, path: str, response: httpx.Response) -> None:
        self.responses[(method, path)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return self.responses.get(
            (request.method, request.url.path), httpx.Response(500),
        )


@pytest.fixture
def scripted():
    return ScriptedGateway()


@pytest.fixture
async def scripted_gateway(scripted):
    async with GatewayClient(
        "http://test", transport=httpx.MockTransport(scripted.handler),
    ) as g:
        yield g
