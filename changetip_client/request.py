from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping
from urllib.parse import quote, urlencode

from .config_types import ClientConfig

GET = "GET"
POST = "POST"


class BodyEncoding(str, Enum):
    NONE = "none"
    MULTIPART = "multipart"
    FORM = "form"


@dataclass(frozen=True)
class OperationRequest:
    method: str
    base_url: str
    path: str
    params: dict[str, Any] | None = None
    data: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    encoding: BodyEncoding = BodyEncoding.NONE
    timeout_s: float | None = None
    user_agent: str | None = None

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"

    def dev_mode_payload(self) -> dict[str, Any]:
        return {
            "status": "dev_mode",
            "data": dict(self.data),
            "params": dict(self.params) if self.params is not None else None,
            "path": self.path,
        }


def _query_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_query_value(v) for v in value)
    return str(value)


def encode_query(params: Mapping[str, Any] | None) -> str:
    if not params:
        return ""
    items = [(str(k), _query_value(v)) for k, v in params.items()]
    return urlencode(items, safe=",", quote_via=quote)


def auth_query(cfg: ClientConfig) -> str:
    return f"{cfg.authentication_mode}={quote(str(cfg.credential or ''), safe='')}"


def content_length(data: Mapping[str, Any]) -> int:
    # UTF-16 code units of the compact JSON payload; informational, the transport frames the real body
    compact = {k: v for k, v in data.items() if v is not None}
    serialized = json.dumps(compact, separators=(",", ":"), ensure_ascii=False, default=str)
    return len(serialized.encode("utf-16-le")) // 2


def build_request(
        cfg: ClientConfig,
        method: str,
        segment: str,
        *,
        data: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
) -> OperationRequest:
    body = dict(data or {})
    query = encode_query(params)
    path = f"/v{cfg.effective_version()}/{segment.strip('/')}/?{auth_query(cfg)}"
    if query:
        path += f"&{query}"
    return OperationRequest(
        method=method,
        base_url=f"https://{cfg.api_host}",
        path=path,
        params=dict(params) if params is not None else None,
        data=body,
        headers={
            "Content-Type": "multipart/form-data",
            "Content-Length": str(content_length(body)),
        },
        encoding=BodyEncoding.MULTIPART if method == POST else BodyEncoding.NONE,
        timeout_s=cfg.timeout_s,
        user_agent=cfg.user_agent,
    )


def build_token_request(cfg: ClientConfig, endpoint: str, form: Mapping[str, Any]) -> OperationRequest:
    body = {k: v for k, v in form.items() if v is not None}
    encoded = urlencode(body)
    return OperationRequest(
        method=POST,
        base_url=f"{cfg.auth_protocol}://{cfg.auth_host}",
        path=f"/o/{endpoint.strip('/')}",
        data=body,
        headers={
            "Content-Type": "application/x-www-form-urlencoded",
            "Content-Length": str(len(encoded.encode("utf-8"))),
        },
        encoding=BodyEncoding.FORM,
        timeout_s=cfg.timeout_s,
        user_agent=cfg.user_agent,
    )
