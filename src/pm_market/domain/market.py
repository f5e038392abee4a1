"""PredictionMarket — primary issuance, resolution and redemption.

State machine:
    OPEN      --buy_tokens / sell_tokens (now < end_time)--> OPEN
    OPEN      --resolve (oracle, now >= end_time)-----------> RESOLVED
    RESOLVED  --redeem_tokens-------------------------------> RESOLVED

CLOSED is OPEN with the betting window over: trading is rejected but the
oracle has not resolved yet. RESOLVED is terminal.

Primary buys never touch the pool: stablecoin goes to the market escrow
account and `total_stablecoin_collected` grows. Sells go through the pool's
sell side and move `reserve_stable`, never the prize pool. The two pools of
value are kept apart on purpose; the payout formula depends on it.

Payouts divide by the circulating winning supply. Tokens sitting in the pool
reserve (sold back, or seeded by `pre_fund_pool`) are out of circulation and
never claim any of the prize pool.

The caller identity and the clock reading (`now`) are explicit arguments.
"""
import logging
from datetime import datetime, timedelta

from src.pm_common.datetime_utils import require_aware
from src.pm_common.enums import (
    WINNING_TOKEN,
    Asset,
    EventType,
    MarketStatus,
    Outcome,
    parse_outcome,
    parse_outcome_token,
)
from src.pm_common.errors import (
    AlreadyResolvedError,
    InvalidAmountError,
    InvalidOutcomeError,
    MarketClosedError,
    NotResolvedError,
    NotWinningTokenError,
    TooEarlyError,
    UnauthorizedError,
)
from src.pm_common.events import EventBus
from src.pm_common.units import validate_amount, validate_non_negative
from src.pm_ledger.domain.ledger import Ledger
from src.pm_market.domain.models import (
    MarketInfo,
    PurchaseResult,
    RedemptionResult,
    ResolutionResult,
)
from src.pm_market.domain.payout import calculate_payout
from src.pm_pool.domain.models import LiquidityResult, PoolInfo, SwapResult
from src.pm_pool.domain.pool import LiquidityPool

logger = logging.getLogger(__name__)

MARKET_ACCOUNT = "MARKET"


class PredictionMarket:
    def __init__(
        self,
        ledger: Ledger,
        pool: LiquidityPool,
        owner: str,
        end_time: datetime,
        oracle: str | None = None,
        escrow_account: str = MARKET_ACCOUNT,
        events: EventBus | None = None,
    ) -> None:
        if pool.owner != owner:
            raise ValueError("market and pool must share the same owner")
        if escrow_account == pool.pool_account:
            raise ValueError("market escrow and pool account must differ")
        pool.reserve_account(escrow_account)
        self._ledger = ledger
        self.pool = pool
        self.owner = owner
        self.end_time = require_aware(end_time, "end_time")
        self.oracle = oracle
        self.escrow_account = escrow_account
        self.events = events or pool.events
        self.outcome = Outcome.PENDING
        self.resolved = False
        self.total_stablecoin_collected = 0

    # --- reads ---

    @property
    def green_supply(self) -> int:
        return self._ledger.total_supply(Asset.GREEN)

    @property
    def red_supply(self) -> int:
        return self._ledger.total_supply(Asset.RED)

    def circulating_supply(self, token: Asset | str) -> int:
        """Outcome tokens held outside the pool reserve, i.e. redeemable ones."""
        asset = parse_outcome_token(token)
        return self._ledger.total_supply(asset) - self._ledger.balance_of(
            asset, self.pool.pool_account
        )

    @property
    def winning_token(self) -> Asset | None:
        return WINNING_TOKEN.get(self.outcome)

    def status(self, now: datetime) -> MarketStatus:
        if self.resolved:
            return MarketStatus.RESOLVED
        if now < self.end_time:
            return MarketStatus.OPEN
        return MarketStatus.CLOSED

    def is_active(self, now: datetime) -> bool:
        return self.status(now) is MarketStatus.OPEN

    def time_remaining(self, now: datetime) -> timedelta:
        return max(self.end_time - now, timedelta(0))

    def get_market_info(self) -> MarketInfo:
        return MarketInfo(
            owner=self.owner,
            oracle=self.oracle,
            outcome=self.outcome,
            resolved=self.resolved,
            total_stablecoin_collected=self.total_stablecoin_collected,
            end_time=self.end_time,
            green_supply=self.green_supply,
            red_supply=self.red_supply,
        )

    def get_liquidity_pool_info(self) -> PoolInfo:
        return self.pool.get_pool_info()

    def calculate_payout(self, token_amount: int, token: Asset | str) -> int:
        """Stablecoin owed for `token_amount` of `token`; 0 unless it is the winner."""
        asset = parse_outcome_token(token)
        validate_non_negative(token_amount)
        if not self.resolved or asset is not self.winning_token:
            return 0
        return calculate_payout(
            token_amount, self.total_stablecoin_collected, self.circulating_supply(asset)
        )

    # --- administration ---

    def set_oracle(self, caller: str, oracle: str) -> None:
        if caller != self.owner:
            raise UnauthorizedError(caller, "market owner")
        self.pool.require_caller(oracle)
        with self._ledger.lock:
            previous, self.oracle = self.oracle, oracle
        logger.info("Oracle set: %s (was %s)", oracle, previous)
        self.events.publish(EventType.ORACLE_SET, {"oracle": oracle, "previous": previous})

    def pre_fund_pool(
        self,
        caller: str,
        amount_green: int,
        amount_red: int,
        amount_stable: int,
        now: datetime,
    ) -> LiquidityResult:
        """Owner seeds the pool with all three assets out of stablecoin.

        The outcome-token legs are issued to the owner 1:1 like any primary
        buy (their stablecoin joins the prize pool), then all three legs
        fund the pool. Tokens in the pool reserve are out of circulation. The owner pays green + red + stable in total.
        """
        if caller != self.owner:
            raise UnauthorizedError(caller, "market owner")
        for amount in (amount_green, amount_red, amount_stable):
            validate_non_negative(amount)
        if amount_green + amount_red + amount_stable == 0:
            raise InvalidAmountError(0, "funding must contain a positive amount")
        with self._ledger.lock:
            self._require_open(now)
            if self.pool.total_lp_shares == 0 and amount_stable == 0:
                raise InvalidAmountError(
                    amount_stable, "initial funding must include stablecoin"
                )
            self._ledger.require(
                Asset.STABLECOIN, caller, amount_green + amount_red + amount_stable
            )
            for token, amount in ((Asset.GREEN, amount_green), (Asset.RED, amount_red)):
                if amount > 0:
                    self._issue(caller, token, amount)
            return self.pool.fund(caller, amount_green, amount_red, amount_stable)

    def register_liquidity_provider(self, account: str) -> None:
        self.pool.register_provider(account)

    def provide_liquidity(
        self, provider: str, amount_green: int, amount_red: int, amount_stable: int
    ) -> LiquidityResult:
        return self.pool.add_liquidity(provider, amount_green, amount_red, amount_stable)

    # --- trading ---

    def buy_tokens(
        self, caller: str, token: Asset | str, stable_amount: int, now: datetime
    ) -> PurchaseResult:
        asset = parse_outcome_token(token)
        self.pool.require_caller(caller)
        validate_amount(stable_amount)
        with self._ledger.lock:
            self._require_open(now)
            self._ledger.require(Asset.STABLECOIN, caller, stable_amount)
            self._issue(caller, asset, stable_amount)
            result = PurchaseResult(
                account=caller,
                token=asset,
                stable_amount=stable_amount,
                tokens_minted=stable_amount,
                total_stablecoin_collected=self.total_stablecoin_collected,
            )
        logger.info("Buy: account=%s token=%s amount=%d", caller, asset.value, stable_amount)
        self.events.publish(
            EventType.TOKENS_BOUGHT,
            {"account": caller, "token": asset.value, "amount": stable_amount},
        )
        return result

    def sell_tokens(
        self, caller: str, token: Asset | str, token_amount: int, now: datetime
    ) -> SwapResult:
        """Sell outcome tokens back through the pool's stablecoin side.

        The tokens are burned from circulation: they leave the caller into the
        pool reserve, where they no longer count toward the winning supply.
        The stablecoin paid comes out of `reserve_stable`. InsufficientReserveError from the pool
        propagates unchanged.
        """
        asset = parse_outcome_token(token)
        self.pool.require_caller(caller)
        validate_amount(token_amount)
        with self._ledger.lock:
            self._require_open(now)
            self._ledger.require(asset, caller, token_amount)
            result = self.pool.sell_to_stablecoin(caller, asset, token_amount)
        logger.info(
            "Sell: account=%s token=%s amount=%d proceeds=%d",
            caller, asset.value, token_amount, result.amount_out,
        )
        self.events.publish(
            EventType.TOKENS_SOLD,
            {
                "account": caller,
                "token": asset.value,
                "amount": token_amount,
                "proceeds": result.amount_out,
            },
        )
        return result

    # --- resolution ---

    def resolve(self, caller: str, outcome: Outcome | str, now: datetime) -> ResolutionResult:
        """Record the final outcome. Oracle-only, irreversible."""
        if self.oracle is None or caller != self.oracle:
            raise UnauthorizedError(caller, "oracle")
        with self._ledger.lock:
            if self.resolved:
                raise AlreadyResolvedError()
            if now < self.end_time:
                raise TooEarlyError(self.end_time.isoformat())
            final = parse_outcome(outcome)
            if final not in WINNING_TOKEN:
                raise InvalidOutcomeError(final.value)

            self.resolved = True
            self.outcome = final
            winner = WINNING_TOKEN[final]
            result = ResolutionResult(
                outcome=final,
                winning_token=winner,
                winning_supply=self.circulating_supply(winner),
                total_stablecoin_collected=self.total_stablecoin_collected,
                resolved_at=now,
            )
        logger.info(
            "Market resolved: outcome=%s winning_supply=%d collected=%d",
            final.value, result.winning_supply, result.total_stablecoin_collected,
        )
        self.events.publish(
            EventType.MARKET_RESOLVED,
            {"outcome": final.value, "resolved_at": now.isoformat()},
        )
        return result

    def redeem_tokens(self, caller: str, token: Asset | str) -> RedemptionResult:
        """Burn the caller's whole winning balance for its share of the prize pool.

        The payout is drawn down from `total_stablecoin_collected` while the
        burn shrinks the circulating supply, so every holder gets the same rate
        whatever the redemption order.
        """
        asset = parse_outcome_token(token)
        self.pool.require_caller(caller)
        with self._ledger.lock:
            if not self.resolved:
                raise NotResolvedError()
            if asset is not self.winning_token:
                raise NotWinningTokenError(asset.value)
            balance = self._ledger.balance_of(asset, caller)
            if balance == 0:
                raise InvalidAmountError(0, f"no {asset.value} tokens to redeem")
            payout = self.calculate_payout(balance, asset)

            self._ledger.burn(asset, caller, balance, "MARKET_REDEEM")
            self._ledger.transfer(
                Asset.STABLECOIN, self.escrow_account, caller, payout, "MARKET_REDEEM"
            )
            self.total_stablecoin_collected -= payout
            result = RedemptionResult(
                account=caller,
                token=asset,
                tokens_burned=balance,
                payout=payout,
                total_stablecoin_collected=self.total_stablecoin_collected,
            )
        logger.info(
            "Redeem: account=%s token=%s burned=%d payout=%d",
            caller, asset.value, balance, payout,
        )
        self.events.publish(
            EventType.TOKENS_REDEEMED,
            {"account": caller, "token": asset.value, "burned": balance, "payout": payout},
        )
        return result

    # --- helpers ---

    def _require_open(self, now: datetime) -> None:
        if self.resolved or now >= self.end_time:
            raise MarketClosedError()

    def _issue(self, account: str, token: Asset, amount: int) -> None:
        """Take `amount` stablecoin into escrow and mint `amount` of `token`."""
        self._ledger.transfer(
            Asset.STABLECOIN, account, self.escrow_account, amount, "MARKET_BUY"
        )
        self._ledger.mint(token, account, amount, "MARKET_BUY")
        self.total_stablecoin_collected += amount
