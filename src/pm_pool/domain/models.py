"""Domain models for pm_pool — pure dataclasses returned by pool operations."""

from dataclasses import dataclass

from src.pm_common.enums import Asset


@dataclass(frozen=True)
class PoolReserves:
    green: int
    red: int
    stable: int

    def of(self, asset: Asset) -> int:
        if asset is Asset.GREEN:
            return self.green
        if asset is Asset.RED:
            return self.red
        return self.stable

    @property
    def is_empty(self) -> bool:
        return self.green == 0 and self.red == 0 and self.stable == 0


@dataclass(frozen=True)
class PoolInfo:
    reserve_green: int
    reserve_red: int
    reserve_stable: int
    total_lp_shares: int
    fee_bps: int


@dataclass(frozen=True)
class SwapResult:
    """Single executed trade against one reserve pair."""

    account: str
    asset_in: Asset
    asset_out: Asset
    amount_in: int
    amount_out: int
    fee_amount: int        # part of amount_in withheld from pricing, kept in the reserve
    reserves: PoolReserves  # after the trade


@dataclass(frozen=True)
class LiquidityResult:
    """Outcome of fund / add_liquidity (shares minted) or remove_liquidity (shares burned)."""

    provider: str
    amount_green: int
    amount_red: int
    amount_stable: int
    shares: int
    provider_shares: int   # provider's balance after the operation
    total_lp_shares: int
    reserves: PoolReserves
