"""Tests for pm_market.domain.invariants — verify_invariants."""

from datetime import datetime

from src.pm_common.enums import Asset, Outcome
from src.pm_common.units import UNIT
from src.pm_ledger.domain.ledger import Ledger
from src.pm_market.domain.invariants import verify_invariants
from src.pm_market.domain.market import PredictionMarket
from src.pm_pool.domain.pool import LiquidityPool


class TestInvariantsHold:
    def test_fresh_engine(self, market: PredictionMarket, ledger: Ledger) -> None:
        assert verify_invariants(market, ledger) == []

    def test_after_full_lifecycle(
        self, market: PredictionMarket, funded_pool: LiquidityPool, ledger: Ledger,
        open_time: datetime, after_end: datetime,
    ) -> None:
        ledger.deposit("alice", 300 * UNIT)
        ledger.deposit("bob", 200 * UNIT)
        market.buy_tokens("alice", "GREEN", 300 * UNIT, open_time)
        market.buy_tokens("bob", "RED", 200 * UNIT, open_time)
        market.sell_tokens("alice", "GREEN", 50 * UNIT, open_time)
        funded_pool.swap("bob", "RED", 20 * UNIT)
        funded_pool.remove_liquidity("owner", 1000 * UNIT)
        market.resolve("oracle", "GREEN_WINS", after_end)
        market.redeem_tokens("alice", "GREEN")
        assert verify_invariants(market, ledger) == []


class TestInvariantViolations:
    def test_reserve_out_of_sync(
        self, market: PredictionMarket, funded_pool: LiquidityPool, ledger: Ledger
    ) -> None:
        ledger.mint(Asset.GREEN, funded_pool.pool_account, 1)
        violations = verify_invariants(market, ledger)
        assert any(v.startswith("INV-1") for v in violations)

    def test_escrow_out_of_sync(self, market: PredictionMarket, ledger: Ledger) -> None:
        ledger.deposit(market.escrow_account, 5)
        violations = verify_invariants(market, ledger)
        assert any(v.startswith("INV-3") for v in violations)

    def test_outcome_without_resolution(
        self, market: PredictionMarket, ledger: Ledger
    ) -> None:
        market.outcome = Outcome.GREEN_WINS
        violations = verify_invariants(market, ledger)
        assert violations == [
            "INV-5 violated: resolved=False outcome=GREEN_WINS"
        ]
