"""Minecraft session server: the online-mode half of the login handshake."""

from __future__ import annotations

import uuid
from hashlib import sha1
from http import HTTPStatus
from typing import Any, Optional, Self

import aiohttp

from .consts import DEFAULT_SESSION_SERVER
from .models import Profile
from .request import RequestBuilder, read_json, wire_uuid


def server_hash(server_id: bytes, shared_secret: bytes, public_key: bytes) -> str:
    verification_hash = sha1()
    verification_hash.update(server_id)
    verification_hash.update(shared_secret)
    verification_hash.update(public_key)

    # minecraft's hex digest is the signed two's complement value, e.g. "-7c9d5b..."
    number = int.from_bytes(verification_hash.digest(), byteorder="big", signed=True)
    return format(number, "x")


class JoinBuilder(RequestBuilder[None]):
    """
    Client side: tell the session server we're joining a server.

    `server_id` is the `server_hash()` of the encryption request.
    """

    DEFAULT_SERVER = DEFAULT_SESSION_SERVER
    ENDPOINT = "/session/minecraft/join"
    REQUIRED = ("access_token", "selected_profile", "server_id")

    def __init__(self):
        super().__init__()
        self._access_token: Optional[str] = None
        self._selected_profile: Optional[uuid.UUID | str] = None
        self._server_id: Optional[str] = None

    def access_token(self, access_token: str) -> Self:
        self._access_token = access_token
        return self

    def selected_profile(self, selected_profile: uuid.UUID | str) -> Self:
        self._selected_profile = selected_profile
        return self

    def server_id(self, server_id: str) -> Self:
        self._server_id = server_id
        return self

    def _payload(self) -> dict[str, Any]:
        return {
            "accessToken": self._access_token,
            # the session server wants the profile id without hyphens
            "selectedProfile": wire_uuid(
                "selected_profile", self._selected_profile
            ).hex,
            "serverId": self._server_id,
        }


class HasJoinedBuilder(RequestBuilder[Optional[Profile]]):
    """
    Server side: check that a player really joined.

    Returns the player's `Profile` (with its properties, e.g. textures) or
    `None` if the session server has no matching join.
    """

    METHOD = "GET"
    DEFAULT_SERVER = DEFAULT_SESSION_SERVER
    ENDPOINT = "/session/minecraft/hasJoined"
    REQUIRED = ("username", "server_id")
    SUCCESS_STATUSES = (HTTPStatus.OK, HTTPStatus.NO_CONTENT)
    RESPONSE = Profile

    def __init__(self):
        super().__init__()
        self._username: Optional[str] = None
        self._server_id: Optional[str] = None
        self._ip: Optional[str] = None

    def username(self, username: str) -> Self:
        self._username = username
        return self

    def server_id(self, server_id: str) -> Self:
        self._server_id = server_id
        return self

    def ip(self, ip: str) -> Self:
        """Only accept the join if it came from this address."""
        self._ip = ip
        return self

    def _payload(self) -> dict[str, Any]:
        params = {"username": self._username, "serverId": self._server_id}
        if self._ip is not None:
            params["ip"] = self._ip
        return params

    def _request_kwargs(self) -> dict[str, Any]:
        return {"params": self._payload()}

    async def _read(self, response: aiohttp.ClientResponse) -> Optional[Profile]:
        if response.status == HTTPStatus.NO_CONTENT:
            return None
        return Profile.from_json(await read_json(response))
