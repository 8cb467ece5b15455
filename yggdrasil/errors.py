from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ErrorEnvelope


class YggdrasilException(Exception):
    """Base class for yggdrasil errors.

    Attributes
    ----------
    code : str | None
        A short machine-friendly error code (e.g., "MISSING-FIELD", "ForbiddenOperation").
    detail : str | None
        Optional extra detail (e.g., server response text).
    """

    def __init__(
        self, message: str = "", *, code: str | None = None, detail: str | None = None
    ):
        super().__init__(message)
        self.code = code
        self.detail = detail

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {super().__str__()}"
        return super().__str__()


class InvalidUrl(YggdrasilException):
    """Raised by `server()` / `endpoint()` when the given value is not a usable URL."""

    def __init__(self, url: object, reason: str = "malformed URL"):
        super().__init__(f"{reason}: {url!r}", code="INVALID-URL")
        self.url = url


class MissingField(YggdrasilException):
    """Raised by `request()` when a required parameter was never set."""

    def __init__(self, field: str):
        super().__init__(f"Missing field: {field}", code="MISSING-FIELD")
        self.field = field


class InvalidField(YggdrasilException):
    """Raised by `request()` when a parameter can't be put on the wire (e.g. a non-UUID token)."""

    def __init__(self, field: str, value: object):
        super().__init__(f"Invalid {field}: {value!r}", code="INVALID-FIELD")
        self.field = field
        self.value = value


class ResponseParseError(YggdrasilException):
    """The server answered with a body that doesn't have the expected shape."""


# api error kinds; `message` is the longer description that can be shown to the user


@dataclass(frozen=True)
class ForbiddenOperation:
    message: str


@dataclass(frozen=True)
class IllegalArgument:
    message: str


@dataclass(frozen=True)
class MethodNotAllowed:
    message: str


@dataclass(frozen=True)
class NotFound:
    message: str


@dataclass(frozen=True)
class UnsupportedMediaType:
    message: str


@dataclass(frozen=True)
class Unknown:
    """Any `error` string the server sends that isn't in the table above."""

    error: str
    message: str


type ApiErrorKind = (
    ForbiddenOperation
    | IllegalArgument
    | MethodNotAllowed
    | NotFound
    | UnsupportedMediaType
    | Unknown
)

_KNOWN_ERRORS: dict[str, type] = {
    "ForbiddenOperationException": ForbiddenOperation,
    "IllegalArgumentException": IllegalArgument,
    "Method Not Allowed": MethodNotAllowed,
    "Not Found": NotFound,
    "Unsupported Media Type": UnsupportedMediaType,
}


def classify(envelope: ErrorEnvelope) -> ApiErrorKind:
    """Map the server's `error` string (case-sensitive) to an error kind."""
    kind = _KNOWN_ERRORS.get(envelope.error)
    if kind is None:
        return Unknown(error=envelope.error, message=envelope.error_message)
    return kind(envelope.error_message)


class ApiError(YggdrasilException):
    """The server rejected the request.

    `kind` holds one of the `ApiErrorKind` variants, match on it:

        try:
            await ValidateBuilder().access_token(...).client_token(...).request()
        except ApiError as e:
            match e.kind:
                case ForbiddenOperation(message=msg):
                    ...
                case Unknown(error=error):
                    ...
    """

    def __init__(
        self, kind: ApiErrorKind, *, status: int | None = None, cause: str | None = None
    ):
        if isinstance(kind, Unknown):
            name = kind.error
        else:
            name = type(kind).__name__
        super().__init__(kind.message, code=name, detail=cause)
        self.kind = kind
        self.status = status
        self.cause = cause

    @property
    def message(self) -> str:
        return self.kind.message

    @classmethod
    def from_envelope(cls, envelope: ErrorEnvelope, status: int | None = None):
        return cls(classify(envelope), status=status, cause=envelope.cause)
