"""
Shared fixtures: a routed mock API and a controllable clock.
"""

from typing import Any, Callable, Dict, List, Tuple, Union

import httpx
import pytest

from bloomfilter_client.client import BloomfilterClient

API_URL = "https://api.test"
NETWORK = "eip155:8453"
TEST_KEY = "0x" + "11" * 32

Route = Union[httpx.Response, Dict[str, Any], Callable[[httpx.Request], httpx.Response]]


class FakeClock:
    """Callable clock whose sleep advances time instead of waiting."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class MockApi:
    """Routes requests by (method, path) and records every call."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.calls: List[httpx.Request] = []

    def add(self, method: str, path: str, route: Route) -> None:
        self.routes[(method, path)] = route

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        if callable(route):
            return route(request)
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, json=route)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def requests(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.calls if r.method == method and r.url.path == path]

    def count(self, method: str, path: str) -> int:
        return len(self.requests(method, path))


def sequence(*responses: httpx.Response) -> Callable[[httpx.Request], httpx.Response]:
    """Route returning each response in turn, repeating the last one."""
    remaining = list(responses)

    def route(request: httpx.Request) -> httpx.Response:
        if len(remaining) > 1:
            return remaining.pop(0)
        return remaining[0]

    return route


def add_auth_routes(api: MockApi, expires_in: int = 3600) -> None:
    """Install nonce, verify and refresh endpoints issuing numbered tokens."""
    issued = {"count": 0}

    def tokens(request: httpx.Request) -> httpx.Response:
        issued["count"] += 1
        n = issued["count"]
        return httpx.Response(200, json={
            "accessToken": f"access-{n}",
            "refreshToken": f"refresh-{n}",
            "expiresIn": expires_in,
            "walletAddress": "0x0",
        })

    api.add("GET", "/auth/nonce", {
        "nonce": "abc123",
        "domain": "api.test",
        "uri": API_URL,
        "chainId": 8453,
        "version": "1",
        "expiresIn": 300,
    })
    api.add("POST", "/auth/verify", tokens)
    api.add("POST", "/auth/refresh", tokens)


def make_client(api: MockApi, private_key: str = TEST_KEY, **poller_options: Any) -> BloomfilterClient:
    return BloomfilterClient.create(
        {"apiUrl": API_URL, "network": NETWORK, "privateKey": private_key},
        transport=api.transport,
        enable_payments=False,
        **poller_options,
    )


@pytest.fixture
def api():
    """Fresh mock API with auth endpoints installed."""
    mock = MockApi()
    add_auth_routes(mock)
    return mock


@pytest.fixture
def clock():
    return FakeClock()
