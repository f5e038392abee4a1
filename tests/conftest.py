"""Shared test fixtures: one engine (ledger + pool + market) per test.

Identities: the owner is "owner", the oracle is "oracle". The market's betting
window ends at 2026-01-08T00:00Z.
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.pm_common.enums import Asset
from src.pm_common.events import EventBus
from src.pm_common.units import UNIT
from src.pm_ledger.domain.ledger import Ledger
from src.pm_market.domain.market import PredictionMarket
from src.pm_pool.domain.pool import LiquidityPool

START = datetime(2026, 1, 1, tzinfo=timezone.utc)
END = START + timedelta(days=7)


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def ledger() -> Ledger:
    return Ledger()


@pytest.fixture
def pool(ledger: Ledger, events: EventBus) -> LiquidityPool:
    return LiquidityPool(ledger, owner="owner", fee_bps=30, events=events)


@pytest.fixture
def market(ledger: Ledger, pool: LiquidityPool) -> PredictionMarket:
    return PredictionMarket(ledger, pool, owner="owner", end_time=END, oracle="oracle")


@pytest.fixture
def funded_pool(ledger: Ledger, pool: LiquidityPool) -> LiquidityPool:
    """Pool holding 1000 GREEN / 1000 RED / 5000 STABLECOIN, all shares with the owner."""
    ledger.mint(Asset.GREEN, "owner", 1000 * UNIT)
    ledger.mint(Asset.RED, "owner", 1000 * UNIT)
    ledger.deposit("owner", 5000 * UNIT)
    pool.fund("owner", 1000 * UNIT, 1000 * UNIT, 5000 * UNIT)
    return pool


@pytest.fixture
def open_time() -> datetime:
    return START + timedelta(days=1)


@pytest.fixture
def after_end() -> datetime:
    return END + timedelta(hours=1)
