import pytest

from .helpers import SERVER_TIME, FakeAster


@pytest.fixture
def fake_aster() -> FakeAster:
    return FakeAster()


@pytest.fixture
def fixed_time():
    async def _time() -> int:
        return SERVER_TIME
    return _time
