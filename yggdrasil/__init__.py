"""asyncio client for Mojang's Yggdrasil authentication and session servers."""

from .auth import (
    AuthenticateBuilder,
    InvalidateBuilder,
    RefreshBuilder,
    SignoutBuilder,
    ValidateBuilder,
)
from .consts import (
    DEFAULT_AGENT_NAME,
    DEFAULT_AGENT_VERSION,
    DEFAULT_SERVER,
    DEFAULT_SESSION_SERVER,
)
from .errors import (
    ApiError,
    ApiErrorKind,
    ForbiddenOperation,
    IllegalArgument,
    InvalidField,
    InvalidUrl,
    MethodNotAllowed,
    MissingField,
    NotFound,
    ResponseParseError,
    Unknown,
    UnsupportedMediaType,
    YggdrasilException,
    classify,
)
from .models import (
    AuthenticateResponse,
    ErrorEnvelope,
    Profile,
    RefreshResponse,
    User,
)
from .session import HasJoinedBuilder, JoinBuilder, server_hash

__all__ = (
    "AuthenticateBuilder",
    "RefreshBuilder",
    "ValidateBuilder",
    "InvalidateBuilder",
    "SignoutBuilder",
    "JoinBuilder",
    "HasJoinedBuilder",
    "server_hash",
    "DEFAULT_SERVER",
    "DEFAULT_SESSION_SERVER",
    "DEFAULT_AGENT_NAME",
    "DEFAULT_AGENT_VERSION",
    "YggdrasilException",
    "InvalidUrl",
    "InvalidField",
    "MissingField",
    "ResponseParseError",
    "ApiError",
    "ApiErrorKind",
    "ForbiddenOperation",
    "IllegalArgument",
    "MethodNotAllowed",
    "NotFound",
    "UnsupportedMediaType",
    "Unknown",
    "classify",
    "AuthenticateResponse",
    "RefreshResponse",
    "Profile",
    "User",
    "ErrorEnvelope",
)
