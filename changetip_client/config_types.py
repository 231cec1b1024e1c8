from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

DEFAULT_API_VERSION = "2"
DEFAULT_API_HOST = "api.changetip.com"
DEFAULT_AUTH_HOST = "www.changetip.com"
DEFAULT_AUTHENTICATION_MODE = "access_token"
AUTHENTICATION_MODES = ("api_key", "access_token")


@dataclass(frozen=True)
class ClientConfig:
    credential: str | None = None
    authentication_mode: str = DEFAULT_AUTHENTICATION_MODE
    api_host: str = DEFAULT_API_HOST
    auth_host: str = DEFAULT_AUTH_HOST
    api_version: str | None = None
    dev_mode: bool = False
    auth_protocol: str = "https"
    timeout_s: float = 15.0
    user_agent: str = "changetip-client/0.1.0"

    def effective_version(self) -> str:
        if self.api_version in (None, ""):
            return DEFAULT_API_VERSION
        return str(self.api_version)

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> "ClientConfig":
        """Build a config from an options bag; missing or empty values keep their defaults.

        ``api_key_or_access_token``, ``authentication_type`` and ``host`` are accepted
        as aliases for ``credential``, ``authentication_mode`` and ``api_host``.
        """
        options = dict(options or {})
        aliases = {
            "api_key_or_access_token": "credential",
            "authentication_type": "authentication_mode",
            "host": "api_host",
        }
        for alias, name in aliases.items():
            if alias in options and not options.get(name):
                options[name] = options.pop(alias)
            else:
                options.pop(alias, None)

        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in options.items():
            if key not in known or value is None or value == "":
                continue
            values[key] = value
        if "dev_mode" in values:
            values["dev_mode"] = bool(values["dev_mode"])
        if "api_version" in values:
            values["api_version"] = str(values["api_version"])
        return cls(**values)


@dataclass(frozen=True)
class TokenCredentials:
    client_id: str | None = None
    client_secret: str | None = None
    grant_type: str | None = None
    refresh_token: str | None = None
    code: str | None = None
    redirect_uri: str | None = None
    access_token: str | None = None


@dataclass(frozen=True)
class TipRequest:
    context_uid: str | int | None = None
    context_url: str | None = None
    receiver: str | int | None = None
    channel: str | None = None
    message: str | None = None
    sender: str | int | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "TipRequest":
        return cls(
            context_uid=payload.get("context_uid"),
            context_url=payload.get("context_url"),
            receiver=payload.get("receiver"),
            channel=payload.get("channel"),
            message=payload.get("message"),
            sender=payload.get("sender"),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "receiver": self.receiver,
            "context_uid": self.context_uid,
            "context_url": self.context_url,
            "sender": self.sender,
            "channel": self.channel,
        }
