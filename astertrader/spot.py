from __future__ import annotations
import logging
import httpx
from typing import Any, Dict, Optional, Union
from .auth import AsterAuth, TimeSource
from .errors import AuthenticationError, InvalidRequestError, NonApiResponseError
from .transport import HttpClient
from .market import PublicClient
from .schemas import (
    AccountInfo, Balance, NewOrderParams, OrderResponse, OrderSide, OrderType, QueryOrderParams,
)


class SpotTradingClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        secret_key: str,
        recv_window: int = 5000,
        session: Optional[httpx.AsyncClient] = None,
        time_source: Optional[TimeSource] = None,
    ):
        self.http = HttpClient(base_url, session=session)
        self.recv_window = int(recv_window)
        self._market: Optional[PublicClient] = None
        if time_source is None:
            # every signature costs one /api/v1/time round trip
            self._market = PublicClient(base_url, session=session)
            time_source = self._market.server_time_ms
        self.auth = AsterAuth(api_key, secret_key, time_source)

    async def close(self):
        await self.http.aclose()
        if self._market is not None:
            await self._market.close()

    async def _signed_get(self, path: str, params: Dict[str, Any], recv_window: int) -> Any:
        query = await self.auth.sign_params(params, recv_window)
        try:
            return await self.http.get(f"{path}?{query}", headers=self.auth.generate_headers())
        except NonApiResponseError as exc:
            # auth rejections come back as an HTML page, not {code, msg}
            raise AuthenticationError(exc) from exc

    def _window(self, recv_window: Optional[int]) -> int:
        return self.recv_window if recv_window is None else int(recv_window)

    # -------- account --------
    async def get_account_info(self, recv_window: Optional[int] = None) -> AccountInfo:
        data = await self._signed_get("/api/v1/account", {}, self._window(recv_window))
        return AccountInfo.model_validate(data)

    async def get_balance(self, asset: str, recv_window: Optional[int] = None) -> Optional[Balance]:
        """Balance row for `asset` (case-insensitive), or None if the account has no such asset."""
        info = await self.get_account_info(recv_window)
        wanted = asset.lower()
        for b in info.balances:
            if b.asset.lower() == wanted:
                return b
        return None

    # -------- orders --------
    async def new_order(self, params: NewOrderParams) -> OrderResponse:
        body = params.model_dump(mode="json", by_alias=True, exclude_none=True, exclude={"recv_window"})
        body["symbol"] = params.symbol.upper()
        query = await self.auth.sign_params(body, self._window(params.recv_window))
        data = await self.http.post("/api/v1/order", query, headers=self.auth.generate_headers())
        order = OrderResponse.model_validate(data)
        logging.info("ASTER order %s %s %s qty=%s -> id=%s status=%s",
                     body["symbol"], body["side"], body["type"], body.get("quantity"),
                     order.order_id, order.status)
        return order

    async def market_buy(self, symbol: str, quantity: Union[str, int, float]) -> OrderResponse:
        return await self.new_order(NewOrderParams(
            symbol=symbol, side=OrderSide.BUY, type=OrderType.MARKET, quantity=str(quantity),
        ))

    async def market_sell(self, symbol: str, quantity: Union[str, int, float]) -> OrderResponse:
        return await self.new_order(NewOrderParams(
            symbol=symbol, side=OrderSide.SELL, type=OrderType.MARKET, quantity=str(quantity),
        ))

    async def query_order(self, params: QueryOrderParams) -> OrderResponse:
        if params.order_id is None and not params.orig_client_order_id:
            raise InvalidRequestError("Either orderId or origClientOrderId must be provided")

        query: Dict[str, Any] = {"symbol": params.symbol.upper()}
        if params.order_id is not None:
            query["orderId"] = params.order_id
        if params.orig_client_order_id:
            query["origClientOrderId"] = params.orig_client_order_id

        data = await self._signed_get("/api/v1/order", query, self._window(params.recv_window))
        return OrderResponse.model_validate(data)
