"""
Shared plumbing for every request builder.

A builder collects parameters through chained setters, then `request()`
checks the required ones, sends exactly one HTTP request and turns the
response into a typed result or raises.
"""

from __future__ import annotations

import json
import logging
import uuid
from http import HTTPStatus
from typing import Any, ClassVar, Optional, Self

import aiohttp
from yarl import URL

from .consts import DEFAULT_SERVER
from .errors import (
    ApiError,
    InvalidField,
    InvalidUrl,
    MissingField,
    ResponseParseError,
)
from .models import ErrorEnvelope

logger = logging.getLogger(__name__)


def parse_server(server: str | URL) -> URL:
    try:
        url = URL(server)
    except (TypeError, ValueError) as e:
        raise InvalidUrl(server) from e

    if url.scheme not in {"http", "https"} or not url.host:
        raise InvalidUrl(server, "expected an absolute http(s) URL")
    return url


def parse_endpoint(endpoint: str) -> URL:
    if not isinstance(endpoint, str):
        raise InvalidUrl(endpoint, "endpoint must be a string")
    try:
        return URL(endpoint)
    except ValueError as e:
        raise InvalidUrl(endpoint) from e


def wire_uuid(field: str, value: uuid.UUID | str) -> uuid.UUID:
    """Normalize a caller-supplied id; strings may be hyphenated or simple hex."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(value)
    except (TypeError, ValueError, AttributeError) as e:
        raise InvalidField(field, value) from e


async def read_json(response: aiohttp.ClientResponse) -> Any:
    # content_type=None: error pages don't always say application/json
    try:
        return await response.json(content_type=None)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ResponseParseError(
            f"could not decode response body ({response.status})",
            code="BAD-BODY",
        ) from e


async def error_from_response(response: aiohttp.ClientResponse) -> ApiError:
    """Parse an error body into a classified `ApiError`.

    Raises `ResponseParseError` instead if the body isn't an error envelope.
    """
    envelope = ErrorEnvelope.from_json(await read_json(response))
    logger.debug(
        "%s %s rejected: %s (%s)",
        response.method,
        response.url,
        envelope.error,
        envelope.error_message,
    )
    return ApiError.from_envelope(envelope, status=response.status)


class RequestBuilder[R]:
    """Base class for the endpoint builders.

    Subclasses set the class attributes below and implement `_payload()`.
    Parameters are stored as `_<field>` attributes, `REQUIRED` lists the
    field names checked (in order) before anything is sent.
    """

    METHOD: ClassVar[str] = "POST"
    DEFAULT_SERVER: ClassVar[URL] = DEFAULT_SERVER
    ENDPOINT: ClassVar[str]
    REQUIRED: ClassVar[tuple[str, ...]] = ()
    SUCCESS_STATUSES: ClassVar[tuple[int, ...]] = (HTTPStatus.NO_CONTENT,)
    RESPONSE: ClassVar[Optional[type]] = None

    def __init__(self):
        self._server: URL = self.DEFAULT_SERVER
        self._endpoint: URL = URL(self.ENDPOINT)
        self._session: Optional[aiohttp.ClientSession] = None
        self._timeout: Optional[float] = None

    def server(self, server: str | URL) -> Self:
        """Set base url, raises `InvalidUrl` if it isn't an absolute http(s) url."""
        self._server = parse_server(server)
        return self

    def endpoint(self, endpoint: str) -> Self:
        """Override the path joined onto the base url."""
        self._endpoint = parse_endpoint(endpoint)
        return self

    def session(self, session: aiohttp.ClientSession) -> Self:
        """Send through an existing session. It is left open afterwards."""
        self._session = session
        return self

    def timeout(self, seconds: Optional[float]) -> Self:
        self._timeout = seconds
        return self

    @property
    def url(self) -> URL:
        return self._server.join(self._endpoint)

    def _check_required(self):
        for name in self.REQUIRED:
            if getattr(self, f"_{name}") is None:
                raise MissingField(name)

    def _prepare(self):
        """Hook run after the required fields are checked, before serializing."""

    def _payload(self) -> dict[str, Any]:
        raise NotImplementedError

    def _request_kwargs(self) -> dict[str, Any]:
        return {"json": self._payload()}

    async def _read(self, response: aiohttp.ClientResponse) -> R:
        if self.RESPONSE is None:
            return None  # type: ignore[return-value]
        data = await read_json(response)
        return self.RESPONSE.from_json(data)

    async def _send(
        self, session: aiohttp.ClientSession, kwargs: dict[str, Any]
    ) -> R:
        url = self.url
        logger.debug("%s %s", self.METHOD, url)
        async with session.request(self.METHOD, url, **kwargs) as response:
            logger.debug("%s %s -> %d", self.METHOD, url, response.status)
            if response.status in self.SUCCESS_STATUSES:
                return await self._read(response)
            raise await error_from_response(response)

    async def request(self) -> R:
        """Make a request with the given parameters."""
        self._check_required()
        self._prepare()

        kwargs = self._request_kwargs()
        if self._timeout is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=self._timeout)

        if self._session is not None:
            return await self._send(self._session, kwargs)
        async with aiohttp.ClientSession() as session:
            return await self._send(session, kwargs)
