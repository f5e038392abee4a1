"""Integration-test fixtures.

Each test gets a fresh in-process engine installed on app.state, driven by a
settable clock, and an httpx client bound to the ASGI app.
"""

from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.pm_market.application.service import MarketApplicationService

T0 = datetime(2026, 3, 1, tzinfo=timezone.utc)


class SettableClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> SettableClock:
    return SettableClock(T0)


@pytest.fixture
def service(clock: SettableClock) -> MarketApplicationService:
    svc = MarketApplicationService(
        owner="owner", end_time=T0 + timedelta(days=7), oracle="oracle", clock=clock
    )
    app.state.service = svc
    return svc


@pytest_asyncio.fixture
async def client(service: MarketApplicationService) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
