from __future__ import annotations
import logging, random, string
from typing import Any, Dict, List, Optional
import ccxt.async_support as ccxt

from .utils import now_ms

_B36 = string.digits + string.ascii_lowercase


def generate_strategy_id(prefix: str) -> str:
    """PREFIX_<ms>_<9 base36 chars>, upper-cased; tags hedge orders on the counter venue."""
    tail = "".join(random.choice(_B36) for _ in range(9))
    return f"{prefix}_{now_ms()}_{tail}".upper()


def init_binance_futures(api_key: Optional[str] = None, secret: Optional[str] = None) -> ccxt.binance:
    config: Dict[str, Any] = {
        "enableRateLimit": True,
        "options": {"defaultType": "future"},
    }
    if api_key and secret:
        config["apiKey"] = api_key
        config["secret"] = secret
    return ccxt.binance(config)


class BinanceFuturesVenue:
    """
    Counter-exchange used for hedges: Binance USD-M futures through ccxt.

    The arbitrage loop only needs `fetch_order_book`, `create_order` and
    `fetch_positions`; any object exposing those coroutines can stand in.
    """

    def __init__(self, api_key: Optional[str] = None, secret: Optional[str] = None,
                 exchange: Optional[Any] = None):
        self.exchange = exchange if exchange is not None else init_binance_futures(api_key, secret)

    async def close(self):
        await self.exchange.close()

    async def fetch_order_book(self, symbol: str, limit: Optional[int] = None) -> Dict[str, Any]:
        return await self.exchange.fetch_order_book(symbol, limit)

    async def create_order(self, symbol: str, type: str, side: str, amount: float,
                           price: Optional[float] = None, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        order = await self.exchange.create_order(symbol, type, side, amount, price, params or {})
        logging.info("BINANCE order %s %s %s amount=%s -> id=%s status=%s",
                     symbol, type, side, amount, order.get("id"), order.get("status"))
        return order

    async def fetch_positions(self, symbols: Optional[List[str]] = None) -> List[Dict[str, Any]]:
        return await self.exchange.fetch_positions(symbols)
