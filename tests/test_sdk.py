import httpx
import pydantic
import pytest

from astertrader.config import AsterConfig, DEFAULT_BASE_URL
from astertrader.sdk import AsterSDK
from astertrader.spot import SpotTradingClient

from .helpers import API_KEY, BASE_URL, SECRET


def test_defaults_are_unauthenticated():
    sdk = AsterSDK()
    cfg = sdk.get_config()
    assert cfg.base_url == DEFAULT_BASE_URL
    assert cfg.recv_window == 5000
    assert not sdk.is_authenticated()
    assert sdk.spot is None
    assert sdk.market is not None


def test_keys_in_initial_config_build_trading_client():
    sdk = AsterSDK(AsterConfig(base_url=BASE_URL, api_key=API_KEY, secret_key=SECRET))
    assert sdk.is_authenticated()
    assert isinstance(sdk.spot, SpotTradingClient)


def test_half_configured_credentials_are_not_authenticated():
    sdk = AsterSDK(AsterConfig(api_key=API_KEY))
    assert not sdk.is_authenticated()
    assert sdk.spot is None


def test_set_api_keys_rebuilds_clients():
    sdk = AsterSDK(AsterConfig(base_url=BASE_URL))
    old_market = sdk.market

    sdk.set_api_keys(API_KEY, SECRET)

    assert sdk.is_authenticated()
    assert sdk.spot is not None
    assert sdk.spot.auth.api_key == API_KEY
    assert sdk.market is not old_market


def test_replacing_keys_never_mutates_existing_client():
    sdk = AsterSDK(AsterConfig(api_key="old", secret_key="old-secret"))
    old_spot = sdk.spot

    sdk.set_api_keys("new", "new-secret")

    assert sdk.spot is not old_spot
    assert old_spot.auth.api_key == "old"
    assert sdk.spot.auth.api_key == "new"


def test_update_config_round_trip():
    sdk = AsterSDK(AsterConfig(base_url=BASE_URL, api_key=API_KEY, secret_key=SECRET))

    sdk.update_config(recv_window=10000)

    cfg = sdk.get_config()
    assert cfg.recv_window == 10000
    assert cfg.base_url == BASE_URL
    assert cfg.api_key == API_KEY
    assert cfg.secret_key == SECRET
    assert sdk.spot.recv_window == 10000


def test_update_config_removing_key_drops_trading_client():
    sdk = AsterSDK(AsterConfig(api_key=API_KEY, secret_key=SECRET))
    sdk.update_config(secret_key=None)
    assert not sdk.is_authenticated()
    assert sdk.spot is None


def test_config_is_immutable():
    cfg = AsterConfig()
    with pytest.raises(pydantic.ValidationError):
        cfg.api_key = "x"


def test_update_config_validates_values():
    sdk = AsterSDK()
    with pytest.raises(pydantic.ValidationError):
        sdk.update_config(recv_window="not-a-number")
    assert sdk.get_config().recv_window == 5000


def test_update_config_rejects_unknown_keys():
    sdk = AsterSDK(AsterConfig(api_key=API_KEY, secret_key=SECRET))
    before = sdk.spot
    with pytest.raises(pydantic.ValidationError):
        sdk.update_config(recvWindw=1)
    assert sdk.get_config().recv_window == 5000
    assert sdk.spot is before


@pytest.mark.asyncio
async def test_rebuilt_clients_share_injected_session():
    seen = []

    def handler(request):
        seen.append(request.url.host)
        return httpx.Response(200, json={"serverTime": 1})

    session = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    async with AsterSDK(AsterConfig(base_url="https://a.test"), session=session) as sdk:
        await sdk.market.get_server_time()
        sdk.update_config(base_url="https://b.test")
        await sdk.market.get_server_time()

    assert seen == ["a.test", "b.test"]
    assert not session.is_closed
    await session.aclose()
