from __future__ import annotations
import hmac, hashlib, time, os
from decimal import Decimal
from typing import Any, Tuple
import orjson

QUOTES = ("USDT", "USDC", "BTC", "ETH", "BUSD", "USD", "EUR")

def now_ms() -> int:
    return int(time.time() * 1000)

def hmac_sha256(secret: str, msg: str) -> str:
    return hmac.new(secret.encode(), msg.encode(), hashlib.sha256).hexdigest()

def to_json(obj: Any) -> str:
    return orjson.dumps(obj).decode()

def from_json(s: str | bytes) -> Any:
    return orjson.loads(s)

def env(name: str, default: str = "") -> str:
    return os.environ.get(name, default)

def split_symbol(sym: str) -> Tuple[str, str]:
    # strip common quotes: "4USDT" -> ("4", "USDT")
    sym = sym.upper()
    for q in QUOTES:
        if sym.endswith(q) and len(sym) > len(q):
            return sym[: -len(q)], q
    return sym[:-4], sym[-4:]

def fmt_amount(v: float | int | str) -> str:
    # 1000.0 -> "1000", 0.50 -> "0.5"; never scientific notation
    d = Decimal(str(v)).normalize()
    return format(d, "f")
