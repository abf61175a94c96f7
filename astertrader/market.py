from __future__ import annotations
import httpx
from typing import Optional
from .transport import HttpClient
from .schemas import OrderBook, ServerTime


class PublicClient:
    """Unauthenticated market data."""

    def __init__(self, base_url: str, session: Optional[httpx.AsyncClient] = None):
        self.http = HttpClient(base_url, session=session)

    async def close(self):
        await self.http.aclose()

    async def get_depth(self, symbol: str, limit: int = 10) -> OrderBook:
        data = await self.http.get("/api/v1/depth", {"symbol": symbol.upper(), "limit": limit})
        return OrderBook.model_validate(data)

    async def get_server_time(self) -> ServerTime:
        data = await self.http.get("/api/v1/time")
        return ServerTime.model_validate(data)

    async def server_time_ms(self) -> int:
        return (await self.get_server_time()).server_time
