from __future__ import annotations
from enum import Enum
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class OrderSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    LIMIT = "LIMIT"
    MARKET = "MARKET"
    STOP = "STOP"
    TAKE_PROFIT = "TAKE_PROFIT"
    STOP_MARKET = "STOP_MARKET"
    TAKE_PROFIT_MARKET = "TAKE_PROFIT_MARKET"


class OrderStatus(str, Enum):
    NEW = "NEW"
    PARTIALLY_FILLED = "PARTIALLY_FILLED"
    FILLED = "FILLED"
    CANCELED = "CANCELED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"


class TimeInForce(str, Enum):
    GTC = "GTC"
    IOC = "IOC"
    FOK = "FOK"
    GTX = "GTX"


class _Wire(BaseModel):
    # exchange payloads: camelCase on the wire, prices/quantities kept as strings
    model_config = ConfigDict(populate_by_name=True, extra="allow", coerce_numbers_to_str=True)


# ---------- market data ----------

class ServerTime(_Wire):
    server_time: int = Field(alias="serverTime")


class OrderBook(_Wire):
    """Depth snapshot. Bids descend by price, asks ascend; levels are (price, qty)."""
    last_update_id: int = Field(alias="lastUpdateId")
    message_time: Optional[int] = Field(default=None, alias="E")
    engine_time: Optional[int] = Field(default=None, alias="T")
    bids: List[Tuple[str, str]] = Field(default_factory=list)
    asks: List[Tuple[str, str]] = Field(default_factory=list)

    @property
    def best_bid(self) -> Optional[float]:
        return float(self.bids[0][0]) if self.bids else None

    @property
    def best_ask(self) -> Optional[float]:
        return float(self.asks[0][0]) if self.asks else None


# ---------- account ----------

class Balance(_Wire):
    asset: str
    free: str = "0"
    locked: str = "0"


class AccountInfo(_Wire):
    fee_tier: Optional[int] = Field(default=None, alias="feeTier")
    can_trade: Optional[bool] = Field(default=None, alias="canTrade")
    can_deposit: Optional[bool] = Field(default=None, alias="canDeposit")
    can_withdraw: Optional[bool] = Field(default=None, alias="canWithdraw")
    can_burn_asset: Optional[bool] = Field(default=None, alias="canBurnAsset")
    update_time: Optional[int] = Field(default=None, alias="updateTime")
    balances: List[Balance] = Field(default_factory=list)


# ---------- orders ----------

class NewOrderParams(_Wire):
    # field order is the order the parameters are signed in
    symbol: str
    side: OrderSide
    type: OrderType
    time_in_force: Optional[TimeInForce] = Field(default=None, alias="timeInForce")
    quantity: Optional[str] = None
    quote_order_qty: Optional[str] = Field(default=None, alias="quoteOrderQty")
    price: Optional[str] = None
    new_client_order_id: Optional[str] = Field(default=None, alias="newClientOrderId")
    stop_price: Optional[str] = Field(default=None, alias="stopPrice")
    recv_window: Optional[int] = Field(default=None, alias="recvWindow")


class QueryOrderParams(_Wire):
    symbol: str
    order_id: Optional[int] = Field(default=None, alias="orderId")
    orig_client_order_id: Optional[str] = Field(default=None, alias="origClientOrderId")
    recv_window: Optional[int] = Field(default=None, alias="recvWindow")


class OrderResponse(_Wire):
    symbol: Optional[str] = None
    order_id: int = Field(alias="orderId")
    client_order_id: Optional[str] = Field(default=None, alias="clientOrderId")
    update_time: Optional[int] = Field(default=None, alias="updateTime")
    price: Optional[str] = None
    avg_price: Optional[str] = Field(default=None, alias="avgPrice")
    orig_qty: Optional[str] = Field(default=None, alias="origQty")
    cum_qty: Optional[str] = Field(default=None, alias="cumQty")
    executed_qty: Optional[str] = Field(default=None, alias="executedQty")
    cum_quote: Optional[str] = Field(default=None, alias="cumQuote")
    # exchange-reported, may hold values outside the request enums
    status: str
    time_in_force: Optional[str] = Field(default=None, alias="timeInForce")
    stop_price: Optional[str] = Field(default=None, alias="stopPrice")
    orig_type: Optional[str] = Field(default=None, alias="origType")
    type: Optional[str] = None
    side: Optional[str] = None
