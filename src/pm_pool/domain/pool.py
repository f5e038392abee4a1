"""LiquidityPool — three reserves (GREEN, RED, STABLECOIN) and LP shares.

Reserves always equal the pool account's ledger balances: every reserve change
is paired with a ledger transfer into or out of `pool_account`. The pool account
and any other reserved account (the market escrow) never act as callers.

The fee is withheld from pricing only; the full input amount lands in the
reserve.

Each mutating method holds the ledger lock, runs all of its checks first and
only then writes, so a raised AppError leaves pool and ledger untouched.
"""
import logging

from src.pm_common.enums import Asset, EventType, parse_asset, parse_outcome_token
from src.pm_common.errors import (
    AlreadyRegisteredError,
    InsufficientBalanceError,
    InsufficientReserveError,
    InvalidAmountError,
    NotRegisteredProviderError,
    PoolEmptyError,
    ReservedAccountError,
    UnauthorizedError,
    UnknownAssetError,
)
from src.pm_common.events import EventBus
from src.pm_common.units import amount_after_fee, validate_amount, validate_non_negative
from src.pm_ledger.domain.ledger import Ledger
from src.pm_pool.domain.models import LiquidityResult, PoolInfo, PoolReserves, SwapResult
from src.pm_pool.domain.pricing import get_amount_out, pro_rata, proportional_shares

logger = logging.getLogger(__name__)

DEFAULT_FEE_BPS = 30
POOL_ACCOUNT = "POOL"


class LiquidityPool:
    def __init__(
        self,
        ledger: Ledger,
        owner: str,
        fee_bps: int = DEFAULT_FEE_BPS,
        pool_account: str = POOL_ACCOUNT,
        events: EventBus | None = None,
    ) -> None:
        if not (0 <= fee_bps < 10_000):
            raise ValueError(f"fee_bps must be in [0, 10000), got {fee_bps}")
        self._ledger = ledger
        self.owner = owner
        self.fee_bps = fee_bps
        if owner == pool_account:
            raise ValueError("the owner cannot be the pool account")
        self.pool_account = pool_account
        self.events = events or EventBus()
        self._reserves: dict[Asset, int] = {asset: 0 for asset in Asset}
        self._lp_shares: dict[str, int] = {}
        self._providers: dict[str, None] = {}  # insertion-ordered set
        self.total_lp_shares = 0
        self._reserved = {pool_account}

    def reserve_account(self, account: str) -> None:
        """Bar an engine-held account (e.g. market escrow) from acting as a caller."""
        if account == self.owner:
            raise ValueError(f"the owner cannot be the reserved account {account}")
        self._reserved.add(account)

    def is_reserved(self, account: str) -> bool:
        return account in self._reserved

    def require_caller(self, account: str) -> None:
        if account in self._reserved:
            raise ReservedAccountError(account)

    # --- reads ---

    @property
    def reserve_green(self) -> int:
        return self._reserves[Asset.GREEN]

    @property
    def reserve_red(self) -> int:
        return self._reserves[Asset.RED]

    @property
    def reserve_stable(self) -> int:
        return self._reserves[Asset.STABLECOIN]

    def get_reserves(self) -> PoolReserves:
        return PoolReserves(
            green=self.reserve_green, red=self.reserve_red, stable=self.reserve_stable
        )

    def get_pool_info(self) -> PoolInfo:
        return PoolInfo(
            reserve_green=self.reserve_green,
            reserve_red=self.reserve_red,
            reserve_stable=self.reserve_stable,
            total_lp_shares=self.total_lp_shares,
            fee_bps=self.fee_bps,
        )

    def get_lp_balance(self, account: str) -> int:
        return self._lp_shares.get(account, 0)

    def get_lp_balances(self) -> dict[str, int]:
        return dict(self._lp_shares)

    def is_provider(self, account: str) -> bool:
        return account in self._providers

    def get_all_providers(self) -> list[str]:
        return list(self._providers)

    def get_price(
        self,
        asset_in: Asset | str,
        amount_in: int,
        asset_out: Asset | str = Asset.STABLECOIN,
    ) -> int:
        """Quote the output of trading `amount_in` of `asset_in` for `asset_out`.

        Read-only. A zero input quotes zero.
        """
        a_in, a_out = self._pair(asset_in, asset_out)
        validate_non_negative(amount_in)
        return get_amount_out(amount_in, self._reserves[a_in], self._reserves[a_out], self.fee_bps)

    def get_stablecoin_price(self, token: Asset | str, token_amount: int) -> int:
        """Stablecoin received for selling `token_amount` of an outcome token."""
        return self.get_price(parse_outcome_token(token), token_amount, Asset.STABLECOIN)

    # --- trading ---

    def swap(self, account: str, token_in: Asset | str, amount_in: int) -> SwapResult:
        """Outcome token for the other outcome token (GREEN <-> RED)."""
        a_in = parse_outcome_token(token_in)
        a_out = Asset.RED if a_in is Asset.GREEN else Asset.GREEN
        return self._trade(account, a_in, a_out, amount_in)

    def buy_with_stablecoin(
        self, account: str, token_out: Asset | str, stable_in: int
    ) -> SwapResult:
        return self._trade(account, Asset.STABLECOIN, parse_outcome_token(token_out), stable_in)

    def sell_to_stablecoin(
        self, account: str, token_in: Asset | str, token_amount: int
    ) -> SwapResult:
        return self._trade(account, parse_outcome_token(token_in), Asset.STABLECOIN, token_amount)

    def _trade(self, account: str, a_in: Asset, a_out: Asset, amount_in: int) -> SwapResult:
        self.require_caller(account)
        validate_amount(amount_in)
        with self._ledger.lock:
            reserve_in = self._reserves[a_in]
            reserve_out = self._reserves[a_out]
            amount_out = get_amount_out(amount_in, reserve_in, reserve_out, self.fee_bps)
            if amount_out >= reserve_out:
                raise InsufficientReserveError(a_out.value, amount_out, reserve_out)
            if amount_out == 0:
                raise InvalidAmountError(amount_in, "output rounds to zero")
            self._ledger.require(a_in, account, amount_in)

            reference = f"POOL_SWAP:{a_in.value}->{a_out.value}"
            self._ledger.transfer(a_in, account, self.pool_account, amount_in, reference)
            self._ledger.transfer(a_out, self.pool_account, account, amount_out, reference)
            self._reserves[a_in] = reserve_in + amount_in
            self._reserves[a_out] = reserve_out - amount_out

            result = SwapResult(
                account=account,
                asset_in=a_in,
                asset_out=a_out,
                amount_in=amount_in,
                amount_out=amount_out,
                fee_amount=amount_in - amount_after_fee(amount_in, self.fee_bps),
                reserves=self.get_reserves(),
            )
        logger.debug(
            "Swap: account=%s %d %s -> %d %s", account, amount_in, a_in.value,
            amount_out, a_out.value,
        )
        self.events.publish(
            EventType.SWAP,
            {
                "account": account,
                "asset_in": a_in.value,
                "asset_out": a_out.value,
                "amount_in": amount_in,
                "amount_out": amount_out,
            },
        )
        return result

    # --- liquidity ---

    def register_provider(self, account: str) -> None:
        self.require_caller(account)
        with self._ledger.lock:
            if account in self._providers:
                raise AlreadyRegisteredError(account)
            self._providers[account] = None
        logger.info("LP registered: %s", account)
        self.events.publish(EventType.PROVIDER_REGISTERED, {"account": account})

    def fund(
        self, caller: str, amount_green: int, amount_red: int, amount_stable: int
    ) -> LiquidityResult:
        """Owner-only funding.

        On an empty pool the owner receives `amount_stable` shares, which sets
        the initial share price; the stablecoin leg must be positive then.
        Later fundings mint proportional shares, possibly zero (a gift to
        existing holders). Zero legs are allowed, all-zero is not.
        """
        if caller != self.owner:
            raise UnauthorizedError(caller, "pool owner")
        amounts = self._validate_legs(amount_green, amount_red, amount_stable)
        if not any(amounts.values()):
            raise InvalidAmountError(0, "funding must contain a positive amount")

        with self._ledger.lock:
            if self.total_lp_shares == 0:
                if amount_stable == 0:
                    raise InvalidAmountError(
                        amount_stable, "initial funding must include stablecoin"
                    )
                shares = amount_stable
            else:
                shares = self._shares_for(amounts)
            self._require_all(caller, amounts)

            self._providers.setdefault(caller, None)
            self._deposit_legs(caller, amounts, "POOL_FUND")
            self._mint_shares(caller, shares)
            result = self._liquidity_result(caller, amounts, shares)
        logger.info(
            "Pool funded by %s: green=%d red=%d stable=%d shares=%d",
            caller, amount_green, amount_red, amount_stable, shares,
        )
        self.events.publish(EventType.POOL_FUNDED, _liquidity_payload(result))
        return result

    def add_liquidity(
        self, provider: str, amount_green: int, amount_red: int, amount_stable: int
    ) -> LiquidityResult:
        self.require_caller(provider)
        amounts = self._validate_legs(amount_green, amount_red, amount_stable)
        with self._ledger.lock:
            if provider not in self._providers:
                raise NotRegisteredProviderError(provider)
            if self.total_lp_shares == 0:
                raise PoolEmptyError()
            self._require_all(provider, amounts)
            shares = self._shares_for(amounts)
            if shares == 0:
                raise InvalidAmountError(shares, "contribution mints no LP shares")

            self._deposit_legs(provider, amounts, "POOL_ADD_LIQUIDITY")
            self._mint_shares(provider, shares)
            result = self._liquidity_result(provider, amounts, shares)
        logger.info("Liquidity added: provider=%s shares=%d", provider, shares)
        self.events.publish(EventType.LIQUIDITY_ADDED, _liquidity_payload(result))
        return result

    def remove_liquidity(self, provider: str, share_amount: int) -> LiquidityResult:
        self.require_caller(provider)
        validate_amount(share_amount)
        with self._ledger.lock:
            if provider not in self._providers:
                raise NotRegisteredProviderError(provider)
            held = self._lp_shares.get(provider, 0)
            if share_amount > held:
                raise InsufficientBalanceError("LP_SHARES", share_amount, held)

            total = self.total_lp_shares
            amounts = {
                asset: pro_rata(self._reserves[asset], share_amount, total) for asset in Asset
            }
            for asset, amount in amounts.items():
                self._ledger.transfer(
                    asset, self.pool_account, provider, amount, "POOL_REMOVE_LIQUIDITY"
                )
                self._reserves[asset] -= amount
            self._lp_shares[provider] = held - share_amount
            self.total_lp_shares = total - share_amount
            result = self._liquidity_result(provider, amounts, share_amount)
        logger.info("Liquidity removed: provider=%s shares=%d", provider, share_amount)
        self.events.publish(EventType.LIQUIDITY_REMOVED, _liquidity_payload(result))
        return result

    # --- helpers ---

    @staticmethod
    def _pair(asset_in: Asset | str, asset_out: Asset | str) -> tuple[Asset, Asset]:
        a_in, a_out = parse_asset(asset_in), parse_asset(asset_out)
        if a_in is a_out:
            raise UnknownAssetError(f"{a_out.value} (same as input asset)")
        return a_in, a_out

    @staticmethod
    def _validate_legs(amount_green: int, amount_red: int, amount_stable: int) -> dict[Asset, int]:
        amounts = {
            Asset.GREEN: amount_green,
            Asset.RED: amount_red,
            Asset.STABLECOIN: amount_stable,
        }
        for amount in amounts.values():
            validate_non_negative(amount)
        return amounts

    def _require_all(self, account: str, amounts: dict[Asset, int]) -> None:
        for asset, amount in amounts.items():
            self._ledger.require(asset, account, amount)

    def _shares_for(self, amounts: dict[Asset, int]) -> int:
        legs = [(amounts[asset], self._reserves[asset]) for asset in Asset]
        return proportional_shares(legs, self.total_lp_shares)

    def _deposit_legs(self, account: str, amounts: dict[Asset, int], reference: str) -> None:
        for asset, amount in amounts.items():
            self._ledger.transfer(asset, account, self.pool_account, amount, reference)
            self._reserves[asset] += amount

    def _mint_shares(self, account: str, shares: int) -> None:
        self._lp_shares[account] = self._lp_shares.get(account, 0) + shares
        self.total_lp_shares += shares

    def _liquidity_result(
        self, provider: str, amounts: dict[Asset, int], shares: int
    ) -> LiquidityResult:
        return LiquidityResult(
            provider=provider,
            amount_green=amounts[Asset.GREEN],
            amount_red=amounts[Asset.RED],
            amount_stable=amounts[Asset.STABLECOIN],
            shares=shares,
            provider_shares=self._lp_shares.get(provider, 0),
            total_lp_shares=self.total_lp_shares,
            reserves=self.get_reserves(),
        )


def _liquidity_payload(result: LiquidityResult) -> dict[str, object]:
    return {
        "provider": result.provider,
        "amount_green": result.amount_green,
        "amount_red": result.amount_red,
        "amount_stable": result.amount_stable,
        "shares": result.shares,
        "total_lp_shares": result.total_lp_shares,
    }
