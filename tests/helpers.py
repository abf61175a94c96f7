"""Fake Aster REST surface behind `httpx.MockTransport`, plus test constants."""

from __future__ import annotations

from typing import Callable, Dict, List, Tuple, Union

import httpx

BASE_URL = "https://sapi.test"
API_KEY = "test-key"
SECRET = "test-secret"
SERVER_TIME = 1_700_000_000_000

# an HTML page whose doctype sits well past the first few hundred characters
LONG_PROLOG_PAGE = "<!-- " + "x" * 300 + " -->\n<!DOCTYPE html><html></html>"


Handler = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeAster:
    """Routes (method, path) to canned responses and records every request."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Handler] = {
            ("GET", "/api/v1/time"): httpx.Response(200, json={"serverTime": SERVER_TIME}),
        }

    def route(self, method: str, path: str, handler: Handler):
        self.routes[(method, path)] = handler

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"code": -1, "msg": f"no route {request.url.path}"})
        if callable(handler):
            return handler(request)
        # fresh copy: a Response instance is bound to a single request
        return httpx.Response(handler.status_code, headers=handler.headers, content=handler.content)

    def session(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def signed_query(request: httpx.Request) -> str:
    """Raw query string (GET) or body (POST) of a signed request."""
    if request.method == "POST":
        return request.content.decode()
    return request.url.query.decode()
