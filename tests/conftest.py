"""
Shared pytest fixtures.

`fake_server` runs a small in-memory imitation of the Mojang auth and
session servers on localhost, and records every request it receives.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from yggdrasil import AuthenticateBuilder

ACCOUNT = "steve@example.com"
PASSWORD = "hunter2"
USER_ID = uuid.UUID("9b15dea6-606e-47a4-a241-420251703c59")
PROFILE_ID = uuid.UUID("069a79f4-44e9-4726-a5be-fca90e38aaf5")
PROFILE_NAME = "Steve"


def error(status: int, error: str, message: str, cause: str | None = None):
    body = {"error": error, "errorMessage": message}
    if cause is not None:
        body["cause"] = cause
    return web.json_response(body, status=status)


def invalid_token():
    return error(403, "ForbiddenOperationException", "Invalid token.")


@dataclass
class Recorded:
    path: str
    body: Any


@dataclass
class FakeAuthServer:
    requests: list[Recorded] = field(default_factory=list)
    # access token -> client token
    tokens: dict[str, str] = field(default_factory=dict)
    # username -> server id
    joins: dict[str, str] = field(default_factory=dict)
    url: str = ""

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/authenticate", self.authenticate)
        app.router.add_post("/refresh", self.refresh)
        app.router.add_post("/validate", self.validate)
        app.router.add_post("/invalidate", self.invalidate)
        app.router.add_post("/signout", self.signout)
        app.router.add_post("/session/minecraft/join", self.join)
        app.router.add_get("/session/minecraft/hasJoined", self.has_joined)
        app.router.add_post("/unknown-error", self.unknown_error)
        app.router.add_post("/html-error", self.html_error)
        app.router.add_post("/not-an-envelope", self.not_an_envelope)
        app.router.add_post("/mistyped-envelope", self.mistyped_envelope)
        app.router.add_post("/garbled-success", self.garbled_success)
        return app

    @property
    def paths(self) -> list[str]:
        return [r.path for r in self.requests]

    async def _record(self, request: web.Request) -> Any:
        body = await request.json() if request.can_read_body else None
        self.requests.append(Recorded(request.path, body))
        return body

    def _issue(self, client_token: str, request_user: bool) -> dict:
        access_token = uuid.uuid4().hex
        self.tokens[access_token] = client_token
        profile = {"id": PROFILE_ID.hex, "name": PROFILE_NAME}
        resp = {
            "accessToken": access_token,
            "clientToken": client_token,
            "selectedProfile": profile,
        }
        if request_user:
            resp["user"] = {
                "id": USER_ID.hex,
                "username": ACCOUNT,
                "properties": [{"name": "preferredLanguage", "value": "en"}],
            }
        return resp

    async def authenticate(self, request: web.Request):
        body = await self._record(request)
        if (body["username"], body["password"]) != (ACCOUNT, PASSWORD):
            return error(
                403,
                "ForbiddenOperationException",
                "Invalid credentials. Invalid username or password.",
            )
        resp = self._issue(body["clientToken"], body.get("requestUser", False))
        resp["availableProfiles"] = [resp["selectedProfile"]]
        return web.json_response(resp)

    async def refresh(self, request: web.Request):
        body = await self._record(request)
        if self.tokens.get(body["accessToken"]) != body["clientToken"]:
            return invalid_token()
        del self.tokens[body["accessToken"]]
        return web.json_response(
            self._issue(body["clientToken"], body.get("requestUser", False))
        )

    async def validate(self, request: web.Request):
        body = await self._record(request)
        if self.tokens.get(body["accessToken"]) != body["clientToken"]:
            return invalid_token()
        return web.Response(status=204)

    async def invalidate(self, request: web.Request):
        body = await self._record(request)
        self.tokens.pop(body["accessToken"], None)
        return web.Response(status=204)

    async def signout(self, request: web.Request):
        body = await self._record(request)
        if (body["username"], body["password"]) != (ACCOUNT, PASSWORD):
            return error(
                403,
                "ForbiddenOperationException",
                "Invalid credentials. Invalid username or password.",
            )
        self.tokens.clear()
        return web.Response(status=204)

    async def join(self, request: web.Request):
        body = await self._record(request)
        if body["accessToken"] not in self.tokens:
            return invalid_token()
        if body["selectedProfile"] != PROFILE_ID.hex:
            return error(
                400, "IllegalArgumentException", "Invalid profile.", cause="profile"
            )
        self.joins[PROFILE_NAME] = body["serverId"]
        return web.Response(status=204)

    async def has_joined(self, request: web.Request):
        self.requests.append(Recorded(request.path, dict(request.query)))
        username = request.query["username"]
        if self.joins.get(username) != request.query["serverId"]:
            return web.Response(status=204)
        return web.json_response(
            {
                "id": PROFILE_ID.hex,
                "name": username,
                "properties": [
                    {"name": "textures", "value": "e30=", "signature": "c2ln"}
                ],
            }
        )

    async def unknown_error(self, request: web.Request):
        await self._record(request)
        return error(418, "SomeNewError", "x")

    async def html_error(self, request: web.Request):
        await self._record(request)
        return web.Response(
            status=502, text="<html>bad gateway</html>", content_type="text/html"
        )

    async def not_an_envelope(self, request: web.Request):
        await self._record(request)
        return web.json_response({"message": "nope"}, status=500)

    async def mistyped_envelope(self, request: web.Request):
        await self._record(request)
        return web.json_response({"error": {"x": 1}, "errorMessage": "m"}, status=400)

    async def garbled_success(self, request: web.Request):
        await self._record(request)
        return web.json_response({"accessToken": "abc", "clientToken": "not-a-uuid"})


async def login(fake_server, **kwargs):
    """Authenticate against the fake server as the test account."""
    builder = AuthenticateBuilder().server(fake_server.url)
    builder.username(ACCOUNT).password(PASSWORD)
    if "client_token" in kwargs:
        builder.client_token(kwargs["client_token"])
    if kwargs.get("request_user"):
        builder.request_user()
    return await builder.request()


@pytest_asyncio.fixture
async def fake_server():
    fake = FakeAuthServer()
    server = TestServer(fake.app())
    await server.start_server()
    fake.url = str(server.make_url("/"))
    try:
        yield fake
    finally:
        await server.close()


@pytest.fixture
def client_token():
    return uuid.UUID("3f6b2a9e-1c4d-4e8f-9a0b-5c7d8e9f0a1b")
