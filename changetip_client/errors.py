from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    MISSING_CREDENTIAL = 300
    MISSING_CHANNEL = 301
    UNSUPPORTED_API_VERSION = 400
    MISSING_USER_ID = 401
    MISSING_AMOUNT_OR_MESSAGE = 402
    MISSING_AMOUNT_OR_ADDRESS = 403
    MISSING_MONIKER = 404
    GENERIC = 500


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.MISSING_CREDENTIAL: "No API key or access token set. Call init prior to any remote API calls",
    ErrorCode.MISSING_CHANNEL: "Channel is undefined, must be set prior to any remote API calls",
    ErrorCode.UNSUPPORTED_API_VERSION: "API version not supported",
    ErrorCode.MISSING_USER_ID: "User ID required",
    ErrorCode.MISSING_AMOUNT_OR_MESSAGE: "Amount or message were not provided",
    ErrorCode.MISSING_AMOUNT_OR_ADDRESS: "Amount or address were not provided",
    ErrorCode.MISSING_MONIKER: "Moniker required",
    ErrorCode.GENERIC: "Something is amiss!",
}


def describe(code: int) -> str:
    try:
        return ERROR_MESSAGES[ErrorCode(code)]
    except ValueError:
        return ERROR_MESSAGES[ErrorCode.GENERIC]


class ChangeTipClientError(Exception):
    """Base client error."""


class PreconditionError(ChangeTipClientError):
    """Raised synchronously when a call is made with missing arguments or configuration."""

    default_code: ErrorCode = ErrorCode.GENERIC

    def __init__(self, code: ErrorCode | None = None, message: str | None = None):
        self.code = ErrorCode(code) if code is not None else self.default_code
        super().__init__(message or describe(self.code))


class MissingCredential(PreconditionError):
    default_code = ErrorCode.MISSING_CREDENTIAL


class MissingChannel(PreconditionError):
    default_code = ErrorCode.MISSING_CHANNEL


class UnsupportedApiVersion(PreconditionError):
    default_code = ErrorCode.UNSUPPORTED_API_VERSION


class MissingUserId(PreconditionError):
    default_code = ErrorCode.MISSING_USER_ID


class MissingMoniker(PreconditionError):
    default_code = ErrorCode.MISSING_MONIKER


class MissingRequiredField(PreconditionError):
    def __init__(self, code: ErrorCode | None = None, *, fields: tuple[str, ...] = ()):
        super().__init__(code)
        self.fields = fields


class NetworkError(ChangeTipClientError):
    """Transport/network layer error."""

    def __init__(self, message: str, *, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class ApiError(ChangeTipClientError):
    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class AuthExchangeFailed(ApiError):
    """OAuth token exchange answered with something other than a usable token."""
