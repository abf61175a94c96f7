from __future__ import annotations
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Mapping
from .utils import hmac_sha256

# async () -> exchange server time in ms
TimeSource = Callable[[], Awaitable[int]]


def _fmt(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class AsterAuth:
    """
    HMAC-SHA256 request signer.

    The signature covers the literal query string, so parameters are emitted in
    the mapping's iteration order and the exchange must see exactly these bytes.
    The timestamp always comes from `time_source` (the exchange clock); there is
    no local-clock fallback, a failing time source fails the signature.
    """

    def __init__(self, api_key: str, secret_key: str, time_source: TimeSource):
        self._api_key = api_key
        self._secret = secret_key
        self._time_source = time_source

    @property
    def api_key(self) -> str:
        return self._api_key

    def generate_signature(self, query: str) -> str:
        return hmac_sha256(self._secret, query)

    def generate_headers(self) -> Dict[str, str]:
        return {
            "X-MBX-APIKEY": self._api_key,
            "User-Agent": "astertrader/httpx",
        }

    async def sign_params(self, params: Mapping[str, Any], recv_window: int = 5000) -> str:
        content = "".join(f"{k}={_fmt(v)}&" for k, v in params.items())
        server_time = await self._time_source()
        content += f"recvWindow={int(recv_window)}&timestamp={int(server_time)}"
        return f"{content}&signature={self.generate_signature(content)}"
