import hashlib
import hmac

import pytest

from astertrader.auth import AsterAuth
from astertrader.errors import NetworkError
from astertrader.schemas import OrderSide, OrderType

from .helpers import API_KEY, SECRET, SERVER_TIME


def expected_sig(payload: str) -> str:
    return hmac.new(SECRET.encode(), payload.encode(), hashlib.sha256).hexdigest()


@pytest.mark.asyncio
async def test_sign_params_appends_window_timestamp_and_signature(fixed_time):
    auth = AsterAuth(API_KEY, SECRET, fixed_time)
    qs = await auth.sign_params(
        {"symbol": "4USDT", "side": OrderSide.BUY, "type": OrderType.MARKET, "quantity": "1000"}, 5000
    )

    payload, sig = qs.split("&signature=")
    assert payload == (
        f"symbol=4USDT&side=BUY&type=MARKET&quantity=1000&recvWindow=5000&timestamp={SERVER_TIME}"
    )
    assert sig == expected_sig(payload)
    assert sig == sig.lower() and len(sig) == 64


@pytest.mark.asyncio
async def test_sign_params_keeps_insertion_order(fixed_time):
    auth = AsterAuth(API_KEY, SECRET, fixed_time)
    a = await auth.sign_params({"b": 1, "a": 2})
    b = await auth.sign_params({"a": 2, "b": 1})
    assert a.startswith("b=1&a=2&recvWindow=5000&")
    assert b.startswith("a=2&b=1&recvWindow=5000&")
    assert a.split("&signature=")[1] != b.split("&signature=")[1]


@pytest.mark.asyncio
async def test_sign_empty_params(fixed_time):
    auth = AsterAuth(API_KEY, SECRET, fixed_time)
    qs = await auth.sign_params({}, 7000)
    payload, sig = qs.split("&signature=")
    assert payload == f"recvWindow=7000&timestamp={SERVER_TIME}"
    assert sig == expected_sig(payload)


@pytest.mark.asyncio
async def test_booleans_serialize_lowercase(fixed_time):
    auth = AsterAuth(API_KEY, SECRET, fixed_time)
    qs = await auth.sign_params({"reduceOnly": True})
    assert qs.startswith("reduceOnly=true&")


@pytest.mark.asyncio
async def test_time_source_called_for_every_signature():
    calls = []

    async def ticking():
        calls.append(1)
        return SERVER_TIME + len(calls)

    auth = AsterAuth(API_KEY, SECRET, ticking)
    first = await auth.sign_params({"x": 1})
    second = await auth.sign_params({"x": 1})
    assert len(calls) == 2
    assert f"timestamp={SERVER_TIME + 1}&" in first
    assert f"timestamp={SERVER_TIME + 2}&" in second


@pytest.mark.asyncio
async def test_time_source_failure_aborts_signing():
    async def broken():
        raise NetworkError("ConnectError", "refused")

    auth = AsterAuth(API_KEY, SECRET, broken)
    with pytest.raises(NetworkError):
        await auth.sign_params({"symbol": "4USDT"})


def test_headers_carry_api_key(fixed_time):
    auth = AsterAuth(API_KEY, SECRET, fixed_time)
    assert auth.generate_headers()["X-MBX-APIKEY"] == API_KEY
    assert auth.api_key == API_KEY
