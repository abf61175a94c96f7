from __future__ import annotations
import logging
import httpx
from typing import Any, Optional
from .config import AsterConfig
from .market import PublicClient
from .spot import SpotTradingClient


class AsterSDK:
    """
    Facade over the public and trading clients.

    The configuration is an immutable value; every mutation produces a new
    `AsterConfig` and rebuilds both clients from it, so a client never carries
    credentials from an older configuration. `spot` is None until both API keys
    are set. All clients share one `httpx.AsyncClient` for the facade lifetime.
    """

    def __init__(self, config: Optional[AsterConfig] = None, session: Optional[httpx.AsyncClient] = None,
                 timeout: float = 30.0):
        self._owns_session = session is None
        self._session = session if session is not None else httpx.AsyncClient(timeout=timeout)
        self.config = config or AsterConfig()
        self.market: PublicClient
        self.spot: Optional[SpotTradingClient] = None
        self._rebuild()

    def _rebuild(self):
        cfg = self.config
        self.market = PublicClient(cfg.base_url, session=self._session)
        if cfg.is_authenticated:
            self.spot = SpotTradingClient(
                cfg.base_url, cfg.api_key, cfg.secret_key,
                recv_window=cfg.recv_window, session=self._session,
            )
        else:
            self.spot = None

    def set_api_keys(self, api_key: str, secret_key: str):
        self.update_config(api_key=api_key, secret_key=secret_key)

    def get_config(self) -> AsterConfig:
        return self.config

    def update_config(self, **changes: Any):
        self.config = AsterConfig.model_validate({**self.config.model_dump(), **changes})
        self._rebuild()
        logging.debug("ASTER config updated: base_url=%s authenticated=%s recv_window=%s",
                      self.config.base_url, self.config.is_authenticated, self.config.recv_window)

    def is_authenticated(self) -> bool:
        return self.config.is_authenticated

    async def aclose(self):
        if self._owns_session:
            await self._session.aclose()

    async def __aenter__(self) -> "AsterSDK":
        return self

    async def __aexit__(self, *exc):
        await self.aclose()
