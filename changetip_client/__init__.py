from .client import ChangeTipClient
from .config_types import ClientConfig, TipRequest, TokenCredentials
from .errors import (
    ApiError,
    AuthExchangeFailed,
    ChangeTipClientError,
    ErrorCode,
    MissingChannel,
    MissingCredential,
    MissingMoniker,
    MissingRequiredField,
    MissingUserId,
    NetworkError,
    PreconditionError,
    UnsupportedApiVersion,
)
from .http import make_client
from .oauth import OAuthTokenExchange

__all__ = [
    "ApiError",
    "AuthExchangeFailed",
    "ChangeTipClient",
    "ChangeTipClientError",
    "ClientConfig",
    "ErrorCode",
    "MissingChannel",
    "MissingCredential",
    "MissingMoniker",
    "MissingRequiredField",
    "MissingUserId",
    "NetworkError",
    "OAuthTokenExchange",
    "PreconditionError",
    "TipRequest",
    "TokenCredentials",
    "UnsupportedApiVersion",
    "make_client",
]
