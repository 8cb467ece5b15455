from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import ResponseParseError


def _uuid(value: Any) -> uuid.UUID:
    # ids come back hyphenated from the auth server and unhyphenated from
    # the session server; UUID() takes both
    try:
        return uuid.UUID(value)
    except (TypeError, ValueError, AttributeError) as e:
        raise ResponseParseError(f"invalid uuid: {value!r}") from e


def _required(data: dict, key: str) -> Any:
    try:
        return data[key]
    except KeyError as e:
        raise ResponseParseError(f"response is missing {key!r}") from e
    except TypeError as e:
        raise ResponseParseError(f"expected an object, got {data!r}") from e


_REQUIRED = object()


def _typed(data: dict, key: str, kind: type, default: Any = _REQUIRED) -> Any:
    # optional keys may be absent or null, present ones must have the right type
    if default is _REQUIRED:
        value = _required(data, key)
    else:
        value = data.get(key)
        if value is None:
            return default
    if not isinstance(value, kind):
        raise ResponseParseError(
            f"{key!r} should be {kind.__name__}, got {type(value).__name__}"
        )
    return value


def parse_properties(data: Optional[list]) -> dict[str, str]:
    """
    Fold Mojang's property list into a dict.

    Properties come as `[{"name": "preferredLanguage", "value": "en"}, ...]`;
    any extra keys (e.g. `signature`) are dropped.
    """
    if not data:
        return {}
    return {_required(p, "name"): _required(p, "value") for p in data}


@dataclass
class User:
    """Mojang account information, only sent back if `request_user` is set."""

    id: uuid.UUID
    username: str  # usually the account email
    properties: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: dict) -> User:
        return cls(
            id=_uuid(_required(data, "id")),
            username=_required(data, "username"),
            properties=parse_properties(data.get("properties")),
        )


@dataclass
class Profile:
    """
    Game profile attached to an account.

    An account without a Minecraft license still authenticates, but has no
    `selected_profile` and an empty `available_profiles` list.
    """

    id: uuid.UUID
    name: str
    legacy: bool = False
    agent: Optional[str] = None
    properties: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: dict) -> Profile:
        return cls(
            id=_uuid(_required(data, "id")),
            name=_required(data, "name"),
            legacy=_typed(data, "legacy", bool, False),
            agent=data.get("agent"),
            properties=parse_properties(data.get("properties")),
        )


def _profile_or_none(data: Optional[dict]) -> Optional[Profile]:
    return Profile.from_json(data) if data is not None else None


def _user_or_none(data: Optional[dict]) -> Optional[User]:
    return User.from_json(data) if data is not None else None


@dataclass
class AuthenticateResponse:
    access_token: str
    client_token: uuid.UUID  # same as sent
    available_profiles: list[Profile] = field(default_factory=list)
    selected_profile: Optional[Profile] = None
    user: Optional[User] = None

    @classmethod
    def from_json(cls, data: dict) -> AuthenticateResponse:
        return cls(
            access_token=_required(data, "accessToken"),
            client_token=_uuid(_required(data, "clientToken")),
            available_profiles=[
                Profile.from_json(p) for p in data.get("availableProfiles") or []
            ],
            selected_profile=_profile_or_none(data.get("selectedProfile")),
            user=_user_or_none(data.get("user")),
        )


@dataclass
class RefreshResponse:
    access_token: str  # a new one, the old token is invalidated
    client_token: uuid.UUID
    selected_profile: Optional[Profile] = None
    user: Optional[User] = None

    @classmethod
    def from_json(cls, data: dict) -> RefreshResponse:
        return cls(
            access_token=_required(data, "accessToken"),
            client_token=_uuid(_required(data, "clientToken")),
            selected_profile=_profile_or_none(data.get("selectedProfile")),
            user=_user_or_none(data.get("user")),
        )


@dataclass
class ErrorEnvelope:
    """Error body, same shape for every endpoint."""

    error: str
    error_message: str
    cause: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict) -> ErrorEnvelope:
        return cls(
            error=_typed(data, "error", str),
            error_message=_typed(data, "errorMessage", str),
            cause=_typed(data, "cause", str, None),
        )
