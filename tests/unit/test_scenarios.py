"""End-to-end engine scenarios against exact integer results."""

from datetime import datetime

import pytest

from src.pm_common.enums import Asset
from src.pm_common.errors import (
    AlreadyResolvedError,
    InsufficientBalanceError,
    NotWinningTokenError,
    TooEarlyError,
)
from src.pm_common.units import UNIT
from src.pm_ledger.domain.ledger import Ledger
from src.pm_market.domain.invariants import verify_invariants
from src.pm_market.domain.market import PredictionMarket
from src.pm_pool.domain.pool import LiquidityPool


class TestSwapQuote:
    """1000 GREEN / 1000 RED / 5000 STABLECOIN, 100 GREEN in at 30 bps."""

    def test_exact_amount_out(self, funded_pool: LiquidityPool, ledger: Ledger) -> None:
        ledger.mint(Asset.GREEN, "trader", 100 * UNIT)
        result = funded_pool.sell_to_stablecoin("trader", Asset.GREEN, 100 * UNIT)
        # 99.7 * 5000 / 1099.7, rounded down
        assert result.amount_out == 453305446940074565790
        assert funded_pool.reserve_red == 1000 * UNIT


class TestTwoBettors:
    def test_sole_green_holder_takes_collected(
        self, market: PredictionMarket, pool: LiquidityPool, ledger: Ledger,
        open_time: datetime, after_end: datetime,
    ) -> None:
        ledger.deposit("owner", 10_000 * UNIT)
        pool.fund("owner", 0, 0, 10_000 * UNIT)
        ledger.deposit("alice", 100 * UNIT)
        ledger.deposit("bob", 200 * UNIT)

        market.buy_tokens("alice", "GREEN", 100 * UNIT, open_time)
        market.buy_tokens("bob", "RED", 200 * UNIT, open_time)
        assert market.total_stablecoin_collected == 300 * UNIT
        assert pool.reserve_stable == 10_000 * UNIT

        market.resolve("oracle", "GREEN_WINS", after_end)
        assert market.calculate_payout(100 * UNIT, "GREEN") == 300 * UNIT

        result = market.redeem_tokens("alice", "GREEN")
        assert result.payout == 300 * UNIT
        assert ledger.balance_of(Asset.STABLECOIN, "alice") == 300 * UNIT
        assert verify_invariants(market, ledger) == []


class TestResolutionGuards:
    def test_too_early_then_already_resolved(
        self, market: PredictionMarket, open_time: datetime, after_end: datetime
    ) -> None:
        with pytest.raises(TooEarlyError):
            market.resolve("oracle", "GREEN_WINS", open_time)
        market.resolve("oracle", "GREEN_WINS", after_end)
        with pytest.raises(AlreadyResolvedError):
            market.resolve("oracle", "GREEN_WINS", after_end)


class TestOverdrawnRemoval:
    def test_reserves_unchanged(self, funded_pool: LiquidityPool) -> None:
        before = funded_pool.get_reserves()
        with pytest.raises(InsufficientBalanceError):
            funded_pool.remove_liquidity("owner", 5001 * UNIT)
        assert funded_pool.get_reserves() == before
        assert funded_pool.get_lp_balance("owner") == 5000 * UNIT


class TestLosingRedemption:
    def test_not_winning_token(
        self, market: PredictionMarket, ledger: Ledger, open_time: datetime,
        after_end: datetime,
    ) -> None:
        ledger.deposit("bob", 200 * UNIT)
        market.buy_tokens("bob", "RED", 200 * UNIT, open_time)
        market.resolve("oracle", "GREEN_WINS", after_end)
        with pytest.raises(NotWinningTokenError):
            market.redeem_tokens("bob", "RED")
        assert ledger.balance_of(Asset.RED, "bob") == 200 * UNIT
