from __future__ import annotations

from .client import ChangeTipClient
from .logging_ import setup_logging
from .settings import Settings, load_settings, to_client_config
from .transport import Transport


def make_client(
    settings: Settings | None = None,
    *,
    profile: str | None = None,
    transport: Transport | None = None,
    verbose: bool | None = None,
) -> ChangeTipClient:
    if verbose is not None:
        setup_logging(verbose)
    effective = settings if settings is not None else load_settings(profile=profile)
    return ChangeTipClient(to_client_config(effective), transport=transport)
