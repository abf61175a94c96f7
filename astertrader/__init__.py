from .config import AsterConfig, TradingConfig, Settings, load_settings
from .errors import (
    AsterError, NetworkError, NonApiResponseError, ApiError, InvalidRequestError, AuthenticationError,
)
from .schemas import (
    OrderSide, OrderType, OrderStatus, TimeInForce,
    OrderBook, ServerTime, Balance, AccountInfo, NewOrderParams, QueryOrderParams, OrderResponse,
)
from .transport import HttpClient
from .auth import AsterAuth
from .market import PublicClient
from .spot import SpotTradingClient
from .sdk import AsterSDK

__version__ = "0.1.0"
