"""Pydantic schemas for pm_pool API requests and responses.

Amounts cross the API boundary as decimal strings ("12.5") and are converted
to 18-decimal integer units before reaching the pool.
"""
from pydantic import BaseModel, Field

from src.pm_common.units import units_to_display
from src.pm_pool.domain.models import LiquidityResult, PoolInfo, PoolReserves, SwapResult


class FundRequest(BaseModel):
    green: str = Field(default="0", min_length=1, max_length=64)
    red: str = Field(default="0", min_length=1, max_length=64)
    stable: str = Field(default="0", min_length=1, max_length=64)


class RemoveLiquidityRequest(BaseModel):
    shares: str = Field(min_length=1, max_length=64, description="Decimal amount, e.g. '12.5'")


class SwapRequest(BaseModel):
    token_in: str = Field(min_length=1, max_length=16)
    amount: str = Field(min_length=1, max_length=64, description="Decimal amount, e.g. '12.5'")


class StableTradeRequest(BaseModel):
    token: str = Field(min_length=1, max_length=16)
    amount: str = Field(min_length=1, max_length=64, description="Decimal amount, e.g. '12.5'")


class ReservesOut(BaseModel):
    green: str
    red: str
    stable: str

    @classmethod
    def from_domain(cls, r: PoolReserves) -> "ReservesOut":
        return cls(
            green=units_to_display(r.green),
            red=units_to_display(r.red),
            stable=units_to_display(r.stable),
        )


class PoolInfoResponse(BaseModel):
    reserves: ReservesOut
    total_lp_shares: str
    fee_bps: int
    providers: list[str]

    @classmethod
    def from_domain(cls, info: PoolInfo, providers: list[str]) -> "PoolInfoResponse":
        return cls(
            reserves=ReservesOut(
                green=units_to_display(info.reserve_green),
                red=units_to_display(info.reserve_red),
                stable=units_to_display(info.reserve_stable),
            ),
            total_lp_shares=units_to_display(info.total_lp_shares),
            fee_bps=info.fee_bps,
            providers=providers,
        )


class QuoteResponse(BaseModel):
    asset_in: str
    asset_out: str
    amount_in: str
    amount_out: str


class SwapResponse(BaseModel):
    account: str
    asset_in: str
    asset_out: str
    amount_in: str
    amount_out: str
    fee_amount: str
    reserves: ReservesOut

    @classmethod
    def from_domain(cls, r: SwapResult) -> "SwapResponse":
        return cls(
            account=r.account,
            asset_in=r.asset_in.value,
            asset_out=r.asset_out.value,
            amount_in=units_to_display(r.amount_in),
            amount_out=units_to_display(r.amount_out),
            fee_amount=units_to_display(r.fee_amount),
            reserves=ReservesOut.from_domain(r.reserves),
        )


class LiquidityResponse(BaseModel):
    provider: str
    green: str
    red: str
    stable: str
    shares: str
    provider_shares: str
    total_lp_shares: str
    reserves: ReservesOut

    @classmethod
    def from_domain(cls, r: LiquidityResult) -> "LiquidityResponse":
        return cls(
            provider=r.provider,
            green=units_to_display(r.amount_green),
            red=units_to_display(r.amount_red),
            stable=units_to_display(r.amount_stable),
            shares=units_to_display(r.shares),
            provider_shares=units_to_display(r.provider_shares),
            total_lp_shares=units_to_display(r.total_lp_shares),
            reserves=ReservesOut.from_domain(r.reserves),
        )
