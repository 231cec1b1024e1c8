from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import urlencode

import httpx

from .config_types import ClientConfig
from .errors import ChangeTipClientError, NetworkError
from .request import BodyEncoding, OperationRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: str


class Transport(Protocol):
    async def send(self, request: OperationRequest) -> TransportResponse:
        """Execute one request; raise NetworkError when no response was obtained."""

    async def aclose(self) -> None:
        ...


class HttpxTransport:
    def __init__(self, cfg: ClientConfig, *, transport: httpx.AsyncBaseTransport | None = None):
        self._client = httpx.AsyncClient(
            timeout=cfg.timeout_s,
            headers={"User-Agent": cfg.user_agent},
            follow_redirects=True,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def send(self, request: OperationRequest) -> TransportResponse:
        options: dict = {}
        if request.timeout_s is not None:
            options["timeout"] = request.timeout_s
        headers = {"User-Agent": request.user_agent} if request.user_agent else {}
        try:
            if request.encoding is BodyEncoding.MULTIPART:
                # (None, value) parts make httpx emit multipart form fields without filenames
                files = {k: (None, str(v)) for k, v in request.data.items() if v is not None}
                r = await self._client.request(request.method, request.url, files=files, headers=headers, **options)
            elif request.encoding is BodyEncoding.FORM:
                r = await self._client.request(
                    request.method,
                    request.url,
                    content=urlencode(request.data).encode("utf-8"),
                    headers={**request.headers, **headers},
                    **options,
                )
            else:
                r = await self._client.request(request.method, request.url, headers=headers, **options)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise NetworkError(str(e) or type(e).__name__, cause=e) from e

        logger.debug("%s %s -> %s", request.method, request.url.split("?", 1)[0], r.status_code)
        return TransportResponse(status_code=r.status_code, body=r.text)


async def send_request(transport: Transport, request: OperationRequest) -> TransportResponse:
    """Send through ``transport``; any failure that is not already a client error becomes NetworkError."""
    try:
        return await transport.send(request)
    except ChangeTipClientError:
        raise
    except Exception as e:
        raise NetworkError(str(e) or type(e).__name__, cause=e) from e
