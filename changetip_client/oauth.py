from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from .config_types import ClientConfig, TokenCredentials
from .errors import AuthExchangeFailed, MissingCredential
from .request import OperationRequest, build_token_request
from .results import resolved, spawn
from .transport import Transport, send_request

logger = logging.getLogger(__name__)

AUTHORIZE_ENDPOINT = "authorize"
TOKEN_ENDPOINT = "token"


class OAuthTokenExchange:
    """Obtains and refreshes access tokens against the authorization host.

    The exchange never touches client configuration: callers feed the resolved
    token back themselves, e.g. through ``ChangeTipClient.update_credential``.
    """

    def __init__(self, cfg: ClientConfig, transport: Transport):
        self._cfg = cfg
        self._t = transport

    def authorize(self, credentials: TokenCredentials | None) -> asyncio.Future[Any]:
        if credentials is None:
            raise MissingCredential()
        grant_type = credentials.grant_type or "authorization_code"
        _require(credentials.client_id, credentials.client_secret, credentials.code)
        form = {
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "grant_type": grant_type,
            "code": credentials.code,
            "redirect_uri": credentials.redirect_uri,
        }
        return self._dispatch(build_token_request(self._cfg, AUTHORIZE_ENDPOINT, form))

    def refresh(self, credentials: TokenCredentials | None) -> asyncio.Future[Any]:
        if credentials is None:
            raise MissingCredential()
        grant_type = credentials.grant_type or "refresh_token"
        _require(credentials.refresh_token, credentials.client_id, credentials.client_secret, grant_type)
        form = {
            "refresh_token": credentials.refresh_token,
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "grant_type": grant_type,
        }
        return self._dispatch(build_token_request(self._cfg, TOKEN_ENDPOINT, form))

    def _dispatch(self, request: OperationRequest) -> asyncio.Future[Any]:
        if self._cfg.dev_mode:
            return resolved(request.dev_mode_payload())
        return spawn(self._exchange(request))

    async def _exchange(self, request: OperationRequest) -> str:
        logger.debug("oauth exchange %s", request.path)
        response = await send_request(self._t, request)
        if response.status_code != 200:
            raise AuthExchangeFailed(
                response.status_code,
                f"POST {request.path} failed with {response.status_code}",
                response.body,
            )
        try:
            data = json.loads(response.body)
        except ValueError as e:
            raise AuthExchangeFailed(response.status_code, "token response is not valid JSON", response.body) from e
        token = data.get("access_token") if isinstance(data, dict) else None
        if isinstance(token, str) and token:
            return token
        raise AuthExchangeFailed(response.status_code, "token response carried no access_token", response.body)


def _require(*values: Any) -> None:
    if not all(values):
        raise MissingCredential()
