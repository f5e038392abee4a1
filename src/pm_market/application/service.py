"""MarketApplicationService — wires ledger, pool and market into one engine.

Owns the single in-process engine behind the HTTP surface. Converts decimal
strings to integer units, reads the wall clock and passes `now` to the core;
the domain objects never read the clock or the settings themselves.
"""
from collections.abc import Callable
from datetime import datetime, timedelta

from config.settings import Settings
from src.pm_common.datetime_utils import utc_now
from src.pm_common.enums import Asset, parse_asset, parse_outcome_token
from src.pm_common.errors import UnauthorizedError
from src.pm_common.events import EventBus
from src.pm_common.units import to_units, units_to_display
from src.pm_ledger.domain.ledger import Ledger
from src.pm_market.application.schemas import (
    BalancesResponse,
    MarketDetail,
    PayoutResponse,
    PurchaseResponse,
    RedemptionResponse,
    ResolutionResponse,
)
from src.pm_market.domain.invariants import verify_invariants
from src.pm_market.domain.market import PredictionMarket
from src.pm_pool.application.schemas import (
    LiquidityResponse,
    PoolInfoResponse,
    QuoteResponse,
    SwapResponse,
)
from src.pm_pool.domain.pool import LiquidityPool


class MarketApplicationService:
    def __init__(
        self,
        owner: str,
        end_time: datetime,
        oracle: str | None = None,
        fee_bps: int = 30,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._clock = clock
        self.events = EventBus()
        self.ledger = Ledger()
        self.pool = LiquidityPool(self.ledger, owner=owner, fee_bps=fee_bps, events=self.events)
        self.market = PredictionMarket(
            self.ledger, self.pool, owner=owner, end_time=end_time, oracle=oracle,
            events=self.events,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, clock: Callable[[], datetime] = utc_now
    ) -> "MarketApplicationService":
        return cls(
            owner=settings.OWNER_ACCOUNT,
            end_time=clock() + timedelta(seconds=settings.MARKET_DURATION_SECONDS),
            oracle=settings.ORACLE_ACCOUNT,
            fee_bps=settings.FEE_BPS,
            clock=clock,
        )

    # --- market ---

    def get_market(self) -> MarketDetail:
        now = self._clock()
        remaining = self.market.time_remaining(now)
        return MarketDetail.from_domain(
            self.market.get_market_info(),
            self.market.status(now),
            int(remaining.total_seconds()),
        )

    def buy_tokens(self, caller: str, token: str, amount: str) -> PurchaseResponse:
        result = self.market.buy_tokens(caller, token, to_units(amount), self._clock())
        return PurchaseResponse.from_domain(result)

    def sell_tokens(self, caller: str, token: str, amount: str) -> SwapResponse:
        result = self.market.sell_tokens(caller, token, to_units(amount), self._clock())
        return SwapResponse.from_domain(result)

    def resolve(self, caller: str, outcome: str) -> ResolutionResponse:
        return ResolutionResponse.from_domain(self.market.resolve(caller, outcome, self._clock()))

    def redeem(self, caller: str, token: str) -> RedemptionResponse:
        return RedemptionResponse.from_domain(self.market.redeem_tokens(caller, token))

    def calculate_payout(self, token: str, amount: str) -> PayoutResponse:
        asset = parse_outcome_token(token)
        payout = self.market.calculate_payout(to_units(amount), asset)
        return PayoutResponse(token=asset.value, amount=amount, payout=units_to_display(payout))

    def get_balances(self, account: str) -> BalancesResponse:
        balances = {asset: self.ledger.balance_of(asset, account) for asset in Asset}
        return BalancesResponse.build(account, balances, self.pool.get_lp_balance(account))

    # --- pool ---

    def get_pool(self) -> PoolInfoResponse:
        return PoolInfoResponse.from_domain(
            self.pool.get_pool_info(), self.pool.get_all_providers()
        )

    def quote(self, asset_in: str, asset_out: str, amount: str) -> QuoteResponse:
        a_in, a_out = parse_asset(asset_in), parse_asset(asset_out)
        amount_out = self.pool.get_price(a_in, to_units(amount), a_out)
        return QuoteResponse(
            asset_in=a_in.value,
            asset_out=a_out.value,
            amount_in=amount,
            amount_out=units_to_display(amount_out),
        )

    def register_provider(self, caller: str) -> None:
        self.market.register_liquidity_provider(caller)

    def fund_pool(self, caller: str, green: str, red: str, stable: str) -> LiquidityResponse:
        result = self.pool.fund(caller, to_units(green), to_units(red), to_units(stable))
        return LiquidityResponse.from_domain(result)

    def pre_fund_pool(self, caller: str, green: str, red: str, stable: str) -> LiquidityResponse:
        result = self.market.pre_fund_pool(
            caller, to_units(green), to_units(red), to_units(stable), self._clock()
        )
        return LiquidityResponse.from_domain(result)

    def add_liquidity(self, caller: str, green: str, red: str, stable: str) -> LiquidityResponse:
        result = self.market.provide_liquidity(
            caller, to_units(green), to_units(red), to_units(stable)
        )
        return LiquidityResponse.from_domain(result)

    def remove_liquidity(self, caller: str, shares: str) -> LiquidityResponse:
        return LiquidityResponse.from_domain(self.pool.remove_liquidity(caller, to_units(shares)))

    def swap(self, caller: str, token_in: str, amount: str) -> SwapResponse:
        return SwapResponse.from_domain(self.pool.swap(caller, token_in, to_units(amount)))

    def pool_buy(self, caller: str, token: str, amount: str) -> SwapResponse:
        result = self.pool.buy_with_stablecoin(caller, token, to_units(amount))
        return SwapResponse.from_domain(result)

    def pool_sell(self, caller: str, token: str, amount: str) -> SwapResponse:
        result = self.pool.sell_to_stablecoin(caller, token, to_units(amount))
        return SwapResponse.from_domain(result)

    # --- admin ---

    def set_oracle(self, caller: str, oracle: str) -> None:
        self.market.set_oracle(caller, oracle)

    def faucet(self, caller: str, account: str, amount: str) -> BalancesResponse:
        """Owner-only stablecoin issuance for demo and test accounts."""
        if caller != self.market.owner:
            raise UnauthorizedError(caller, "market owner")
        self.pool.require_caller(account)
        self.ledger.deposit(account, to_units(amount))
        return self.get_balances(account)

    def verify_invariants(self) -> dict[str, object]:
        violations = verify_invariants(self.market, self.ledger)
        return {"ok": len(violations) == 0, "violations": violations}
