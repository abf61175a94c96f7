from __future__ import annotations
import logging, os
from pathlib import Path
from typing import Optional, Union
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field
from .utils import env, from_json, split_symbol

DEFAULT_BASE_URL = "https://sapi.asterdex.com"


class AsterConfig(BaseModel):
    """Client configuration. Frozen, and unknown keys are rejected rather than dropped."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    base_url: str = Field(DEFAULT_BASE_URL, alias="baseUrl")
    api_key: Optional[str] = Field(None, alias="apiKey")
    secret_key: Optional[str] = Field(None, alias="secretKey")
    recv_window: int = Field(5000, alias="recvWindow")

    @property
    def is_authenticated(self) -> bool:
        return bool(self.api_key and self.secret_key)


class TradingConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    symbol: str = "4USDT"                    # Aster spot symbol
    counter_symbol: str = "4/USDT:USDT"      # ccxt futures symbol for hedges/positions
    depth_limit: int = 10
    once_amount: float = 1000
    buy_threshold: float = 1.01              # Aster buy -> counter sell
    sell_threshold: float = 0.996            # Aster sell -> counter buy
    loop_delay_ms: int = 200
    log_dir: str = "logs"

    @property
    def base_asset(self) -> str:
        return split_symbol(self.symbol)[0]

    @property
    def counter_book_symbol(self) -> str:
        base, quote = split_symbol(self.symbol)
        return f"{base}/{quote}"


class Settings(BaseModel):
    aster: AsterConfig = Field(default_factory=AsterConfig)
    trading: TradingConfig = Field(default_factory=TradingConfig)
    binance_api_key: Optional[str] = None
    binance_api_secret: Optional[str] = None


def load_settings(path: Union[str, Path] = "config.json") -> Settings:
    """config.json (optional) overlaid with environment / .env credentials."""
    load_dotenv()
    raw = {}
    p = Path(path)
    if p.exists():
        raw = from_json(p.read_bytes())

    exchange = dict(raw.get("exchange", {}))
    if env("ASTER_BASE_URL"):
        exchange["base_url"] = env("ASTER_BASE_URL")
    if env("ASTER_API_KEY"):
        exchange["api_key"] = env("ASTER_API_KEY")
    if env("ASTER_SECRET_KEY"):
        exchange["secret_key"] = env("ASTER_SECRET_KEY")

    return Settings(
        aster=AsterConfig.model_validate(exchange),
        trading=TradingConfig.model_validate(raw.get("trading", {})),
        binance_api_key=env("BINANCE_API_KEY") or None,
        binance_api_secret=env("BINANCE_API_SECRET") or None,
    )


def setup_logging():
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )
