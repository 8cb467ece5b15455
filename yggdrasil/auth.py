"""
Builders for the legacy Mojang account endpoints (https://authserver.mojang.com).

    resp = await (
        AuthenticateBuilder()
        .username("user@example.com")
        .password("hunter2")
        .request_user()
        .request()
    )
    await (
        ValidateBuilder()
        .access_token(resp.access_token)
        .client_token(resp.client_token)
        .request()
    )
"""

from __future__ import annotations

import uuid
from http import HTTPStatus
from typing import Any, Optional, Self

from .consts import DEFAULT_AGENT_NAME, DEFAULT_AGENT_VERSION
from .models import AuthenticateResponse, RefreshResponse
from .request import RequestBuilder, wire_uuid

type ClientToken = uuid.UUID | str


class AuthenticateBuilder(RequestBuilder[AuthenticateResponse]):
    """Sign in with username and password."""

    ENDPOINT = "/authenticate"
    REQUIRED = ("username", "password")
    SUCCESS_STATUSES = (HTTPStatus.OK,)
    RESPONSE = AuthenticateResponse

    def __init__(self):
        super().__init__()
        self._username: Optional[str] = None
        self._password: Optional[str] = None
        self._client_token: Optional[ClientToken] = None
        self._request_user = False
        self._agent_name = DEFAULT_AGENT_NAME
        self._agent_version = DEFAULT_AGENT_VERSION

    def username(self, username: str) -> Self:
        self._username = username
        return self

    def password(self, password: str) -> Self:
        self._password = password
        return self

    def client_token(self, client_token: ClientToken) -> Self:
        """Specify a client token. If not set, a random one is generated on request."""
        self._client_token = client_token
        return self

    def request_user(self, request_user: bool = True) -> Self:
        """Ask for the `user` object in the response."""
        self._request_user = request_user
        return self

    def agent_name(self, agent_name: str) -> Self:
        self._agent_name = agent_name
        return self

    def agent_version(self, agent_version: int) -> Self:
        self._agent_version = agent_version
        return self

    @property
    def client_token_value(self) -> Optional[ClientToken]:
        """The token that was (or will be) sent; set after `request()` if generated."""
        return self._client_token

    def _prepare(self):
        if self._client_token is None:
            self._client_token = uuid.uuid4()

    def _payload(self) -> dict[str, Any]:
        return {
            "agent": {"name": self._agent_name, "version": self._agent_version},
            "username": self._username,
            "password": self._password,
            "clientToken": str(wire_uuid("client_token", self._client_token)),
            "requestUser": self._request_user,
        }


class RefreshBuilder(RequestBuilder[RefreshResponse]):
    """
    Trade a valid access token for a new one.

    Keeps a user logged in between sessions without storing their password.
    The old access token stops working.
    """

    ENDPOINT = "/refresh"
    REQUIRED = ("access_token", "client_token")
    SUCCESS_STATUSES = (HTTPStatus.OK,)
    RESPONSE = RefreshResponse

    def __init__(self):
        super().__init__()
        self._access_token: Optional[str] = None
        self._client_token: Optional[ClientToken] = None
        self._request_user = False

    def access_token(self, access_token: str) -> Self:
        self._access_token = access_token
        return self

    def client_token(self, client_token: ClientToken) -> Self:
        """Must be the client token the access token was issued to."""
        self._client_token = client_token
        return self

    def request_user(self, request_user: bool = True) -> Self:
        self._request_user = request_user
        return self

    def _payload(self) -> dict[str, Any]:
        return {
            "accessToken": self._access_token,
            "clientToken": str(wire_uuid("client_token", self._client_token)),
            "requestUser": self._request_user,
        }


class _TokenPairBuilder(RequestBuilder[None]):
    REQUIRED = ("access_token", "client_token")

    def __init__(self):
        super().__init__()
        self._access_token: Optional[str] = None
        self._client_token: Optional[ClientToken] = None

    def access_token(self, access_token: str) -> Self:
        self._access_token = access_token
        return self

    def client_token(self, client_token: ClientToken) -> Self:
        self._client_token = client_token
        return self

    def _payload(self) -> dict[str, Any]:
        return {
            "accessToken": self._access_token,
            "clientToken": str(wire_uuid("client_token", self._client_token)),
        }


class ValidateBuilder(_TokenPairBuilder):
    """Check that an access token can still be used to join servers.

    Returns `None` if it can, raises `ApiError` (ForbiddenOperation) if not.
    """

    ENDPOINT = "/validate"


class InvalidateBuilder(_TokenPairBuilder):
    """Invalidate an access token."""

    ENDPOINT = "/invalidate"


class SignoutBuilder(RequestBuilder[None]):
    """Invalidate every access token of an account, using its password."""

    ENDPOINT = "/signout"
    REQUIRED = ("username", "password")

    def __init__(self):
        super().__init__()
        self._username: Optional[str] = None
        self._password: Optional[str] = None

    def username(self, username: str) -> Self:
        self._username = username
        return self

    def password(self, password: str) -> Self:
        self._password = password
        return self

    def _payload(self) -> dict[str, Any]:
        return {"username": self._username, "password": self._password}
