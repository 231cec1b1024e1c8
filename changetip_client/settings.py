from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from .config_types import (
    DEFAULT_API_HOST,
    DEFAULT_AUTH_HOST,
    DEFAULT_AUTHENTICATION_MODE,
    ClientConfig,
    TokenCredentials,
)

APP_NAME = "changetip"
CONFIG_FILENAME = "config.toml"

ENV_CREDENTIAL = "CHANGETIP_CREDENTIAL"
ENV_AUTHENTICATION_MODE = "CHANGETIP_AUTHENTICATION_MODE"
ENV_API_HOST = "CHANGETIP_API_HOST"
ENV_AUTH_HOST = "CHANGETIP_AUTH_HOST"
ENV_API_VERSION = "CHANGETIP_API_VERSION"
ENV_DEV_MODE = "CHANGETIP_DEV_MODE"


@dataclass
class OAuthSettings:
    client_id: str = ""
    client_secret: str = ""
    refresh_token: str = ""
    redirect_uri: str = ""


@dataclass
class Settings:
    credential: str = ""
    authentication_mode: str = DEFAULT_AUTHENTICATION_MODE
    api_host: str = DEFAULT_API_HOST
    auth_host: str = DEFAULT_AUTH_HOST
    api_version: str = ""
    dev_mode: bool = False
    oauth: OAuthSettings = field(default_factory=OAuthSettings)


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_settings() -> Settings:
    return Settings()


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(settings: Settings) -> dict[str, Any]:
    return _prune_empty(
        {
            "credential": settings.credential,
            "authentication_mode": settings.authentication_mode,
            "api_host": settings.api_host,
            "auth_host": settings.auth_host,
            "api_version": settings.api_version,
            "dev_mode": settings.dev_mode,
            "oauth": {
                "client_id": settings.oauth.client_id,
                "client_secret": settings.oauth.client_secret,
                "refresh_token": settings.oauth.refresh_token,
                "redirect_uri": settings.oauth.redirect_uri,
            },
        }
    )


def _prune_empty(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _prune_empty(v) for k, v in value.items() if v is not None and v != ""}
    return value


def _apply_section(settings: Settings, data: dict[str, Any]) -> None:
    for name in ("credential", "authentication_mode", "api_host", "auth_host", "api_version"):
        raw = data.get(name)
        if raw is not None and str(raw).strip():
            setattr(settings, name, str(raw).strip())
    if "dev_mode" in data:
        settings.dev_mode = bool(data.get("dev_mode"))
    oauth_raw = data.get("oauth")
    if isinstance(oauth_raw, dict):
        for name in ("client_id", "client_secret", "refresh_token", "redirect_uri"):
            raw = oauth_raw.get(name)
            if raw is not None and str(raw).strip():
                setattr(settings.oauth, name, str(raw).strip())


def from_toml(data: dict[str, Any], *, profile: str | None = None) -> Settings:
    settings = default_settings()
    _apply_section(settings, data)
    if profile:
        profiles_raw = data.get("profiles") or {}
        prof = profiles_raw.get(profile) if isinstance(profiles_raw, dict) else None
        if isinstance(prof, dict):
            _apply_section(settings, prof)
    return settings


def apply_env(settings: Settings) -> Settings:
    env_map = {
        ENV_CREDENTIAL: "credential",
        ENV_AUTHENTICATION_MODE: "authentication_mode",
        ENV_API_HOST: "api_host",
        ENV_AUTH_HOST: "auth_host",
        ENV_API_VERSION: "api_version",
    }
    for env_name, attr in env_map.items():
        value = os.getenv(env_name, "").strip()
        if value:
            setattr(settings, attr, value)
    dev_mode = os.getenv(ENV_DEV_MODE, "").strip().lower()
    if dev_mode:
        settings.dev_mode = dev_mode in {"1", "true", "yes", "on"}
    return settings


def load_settings(*, profile: str | None = None) -> Settings:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        settings = from_toml(data, profile=profile)
    except FileNotFoundError:
        settings = default_settings()
    return apply_env(settings)


def save_settings(settings: Settings) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(settings)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path


def store_access_token(settings: Settings, token: str) -> str:
    settings.credential = token
    settings.authentication_mode = "access_token"
    return save_settings(settings)


def to_client_config(settings: Settings) -> ClientConfig:
    return ClientConfig.from_options(
        {
            "credential": settings.credential,
            "authentication_mode": settings.authentication_mode,
            "api_host": settings.api_host,
            "auth_host": settings.auth_host,
            "api_version": settings.api_version,
            "dev_mode": settings.dev_mode,
        }
    )


def to_token_credentials(settings: Settings) -> TokenCredentials:
    oauth = settings.oauth
    return TokenCredentials(
        client_id=oauth.client_id or None,
        client_secret=oauth.client_secret or None,
        grant_type="refresh_token",
        refresh_token=oauth.refresh_token or None,
        redirect_uri=oauth.redirect_uri or None,
    )
