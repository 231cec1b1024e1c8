from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Any, Mapping
from urllib.parse import quote

from .config_types import DEFAULT_API_VERSION, ClientConfig, TipRequest, TokenCredentials
from .errors import (
    ErrorCode,
    MissingChannel,
    MissingCredential,
    MissingMoniker,
    MissingRequiredField,
    MissingUserId,
    UnsupportedApiVersion,
)
from .oauth import OAuthTokenExchange
from .request import GET, POST, OperationRequest, build_request
from .results import resolved, spawn
from .transport import HttpxTransport, Transport, send_request

logger = logging.getLogger(__name__)


class ChangeTipClient:
    """ChangeTip API operations.

    Every operation validates its arguments synchronously, raising a
    ``PreconditionError`` subclass, and otherwise returns an ``asyncio.Future``
    resolving to the raw response body. Operations must be called while an
    event loop is running.
    """

    def __init__(self, cfg: ClientConfig | None = None, *, transport: Transport | None = None):
        self._cfg = cfg or ClientConfig()
        self._t = transport or HttpxTransport(self._cfg)

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    def init(self, options: Mapping[str, Any] | None = None) -> "ChangeTipClient":
        self._cfg = ClientConfig.from_options(options)
        return self

    def update_credential(self, credential: str) -> ClientConfig:
        self._cfg = replace(self._cfg, credential=credential)
        return self._cfg

    async def aclose(self) -> None:
        await self._t.aclose()

    async def __aenter__(self) -> "ChangeTipClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # --- API methods ---
    def send_tip(self, tip: TipRequest | Mapping[str, Any] | None) -> asyncio.Future[Any]:
        cfg = self._cfg
        tip = tip if isinstance(tip, TipRequest) else TipRequest.from_mapping(tip or {})
        _require_credential(cfg)
        if not tip.channel:
            raise MissingChannel()
        missing = _missing(
            receiver=tip.receiver,
            context_uid=tip.context_uid,
            context_url=tip.context_url,
            message=tip.message,
        )
        if missing:
            raise MissingRequiredField(ErrorCode.GENERIC, fields=missing)
        return self._send(cfg, POST, "tip", data=tip.to_payload())

    def monikers(self, page: int | None = 1) -> asyncio.Future[Any]:
        return self._list(self._cfg, "monikers", page)

    def currencies(self, page: int | None = 1) -> asyncio.Future[Any]:
        return self._list(self._cfg, "currencies", page)

    def user(self, user_id: int | str | None, full: bool = False) -> asyncio.Future[Any]:
        cfg = self._cfg
        _require_credential(cfg)
        _require_version(cfg)
        if not user_id:
            raise MissingUserId()
        return self._send(cfg, GET, f"users/{quote(str(user_id), safe='')}", params={"full": bool(full)})

    def users(self, page: int | None = 1) -> asyncio.Future[Any]:
        return self._list(self._cfg, "users", page)

    def transactions(self, page: int | None = 1) -> asyncio.Future[Any]:
        return self._list(self._cfg, "transactions", page)

    def tip_url(self, amount: Any, moniker: str | None, message: str | None) -> asyncio.Future[Any]:
        cfg = self._cfg
        _require_credential(cfg)
        if not amount:
            raise MissingRequiredField(ErrorCode.MISSING_AMOUNT_OR_MESSAGE, fields=("amount",))
        if not moniker:
            raise MissingMoniker()
        if not message:
            raise MissingRequiredField(ErrorCode.MISSING_AMOUNT_OR_MESSAGE, fields=("message",))
        _require_version(cfg)
        data = {
            "amount": f"{amount} {moniker}",
            "message": message,
        }
        return self._send(cfg, POST, "tip-url", data=data)

    def get_wallet_withdrawals(self) -> asyncio.Future[Any]:
        cfg = self._cfg
        _require_credential(cfg)
        _require_version(cfg)
        return self._send(cfg, GET, "wallet/withdrawals")

    def post_wallet_withdrawals(self, amount: Any, address: str | None) -> asyncio.Future[Any]:
        cfg = self._cfg
        _require_credential(cfg)
        _require_version(cfg)
        missing = _missing(amount=amount, address=address)
        if missing:
            raise MissingRequiredField(ErrorCode.MISSING_AMOUNT_OR_ADDRESS, fields=missing)
        return self._send(cfg, POST, "wallet/withdrawals", data={"amount": amount, "address": address})

    def get_wallet_balance(self) -> asyncio.Future[Any]:
        cfg = self._cfg
        _require_credential(cfg)
        _require_version(cfg)
        return self._send(cfg, GET, "wallet/balance")

    def get_wallet_address(self, username: str | None) -> asyncio.Future[Any]:
        cfg = self._cfg
        _require_credential(cfg)
        _require_version(cfg)
        if not username:
            raise MissingRequiredField(ErrorCode.GENERIC, fields=("username",))
        return self._send(cfg, GET, "wallet/address", params={"username": username})

    def get_tip(self, tips: str | list[str] | tuple[str, ...] | None, channel: str | None = None) -> asyncio.Future[Any]:
        cfg = self._cfg
        _require_credential(cfg)
        if isinstance(tips, (list, tuple)):
            tips = ",".join(str(t) for t in tips)
        params = {
            "tips": tips,
            "channel": channel or "",
        }
        return self._send(cfg, GET, "tips", params=params)

    # --- OAuth ---
    def authorize(self, credentials: TokenCredentials | None) -> asyncio.Future[Any]:
        return OAuthTokenExchange(self._cfg, self._t).authorize(credentials)

    def refresh(self, credentials: TokenCredentials | None) -> asyncio.Future[Any]:
        return OAuthTokenExchange(self._cfg, self._t).refresh(credentials)

    # --- dispatch ---
    def _list(self, cfg: ClientConfig, segment: str, page: int | None) -> asyncio.Future[Any]:
        _require_credential(cfg)
        _require_version(cfg)
        return self._send(cfg, GET, segment, params={"page": page or 1})

    def _send(
            self,
            cfg: ClientConfig,
            method: str,
            segment: str,
            *,
            data: Mapping[str, Any] | None = None,
            params: Mapping[str, Any] | None = None,
    ) -> asyncio.Future[Any]:
        request = build_request(cfg, method, segment, data=data, params=params)
        if cfg.dev_mode:
            logger.debug("dev_mode: skipping %s %s", method, segment)
            return resolved(request.dev_mode_payload())
        return spawn(self._execute(request, segment))

    async def _execute(self, request: OperationRequest, segment: str) -> str:
        logger.debug("%s %s", request.method, segment)
        response = await send_request(self._t, request)
        if response.status_code >= 400:
            logger.info("%s %s answered %s", request.method, segment, response.status_code)
        return response.body


def _require_credential(cfg: ClientConfig) -> None:
    if not cfg.credential:
        raise MissingCredential()


def _require_version(cfg: ClientConfig) -> None:
    if cfg.effective_version() == DEFAULT_API_VERSION:
        raise UnsupportedApiVersion()


def _missing(**values: Any) -> tuple[str, ...]:
    return tuple(name for name, value in values.items() if not value)
