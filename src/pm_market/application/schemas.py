"""Pydantic schemas for pm_market API requests and responses.

Amounts are decimal strings on the wire and 18-decimal integer units inside
the engine; conversion happens only here and in the routers.
"""

from pydantic import BaseModel, Field

from src.pm_common.enums import Asset, MarketStatus
from src.pm_common.units import units_to_display
from src.pm_market.domain.models import (
    MarketInfo,
    PurchaseResult,
    RedemptionResult,
    ResolutionResult,
)

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class TradeRequest(BaseModel):
    token: str = Field(min_length=1, max_length=16, description="GREEN or RED")
    amount: str = Field(min_length=1, max_length=64, description="Decimal amount, e.g. '100'")


class ResolveRequest(BaseModel):
    outcome: str = Field(min_length=1, max_length=16, description="GREEN_WINS or RED_WINS")


class RedeemRequest(BaseModel):
    token: str = Field(min_length=1, max_length=16)


class SetOracleRequest(BaseModel):
    oracle: str = Field(min_length=1, max_length=128)


class FaucetRequest(BaseModel):
    account: str = Field(min_length=1, max_length=128)
    amount: str = Field(min_length=1, max_length=64)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class MarketDetail(BaseModel):
    status: MarketStatus
    outcome: str
    resolved: bool
    owner: str
    oracle: str | None
    end_time: str
    time_remaining_seconds: int
    total_stablecoin_collected: str
    green_supply: str
    red_supply: str

    @classmethod
    def from_domain(
        cls, info: MarketInfo, status: MarketStatus, time_remaining_seconds: int
    ) -> "MarketDetail":
        return cls(
            status=status,
            outcome=info.outcome.value,
            resolved=info.resolved,
            owner=info.owner,
            oracle=info.oracle,
            end_time=info.end_time.isoformat(),
            time_remaining_seconds=time_remaining_seconds,
            total_stablecoin_collected=units_to_display(info.total_stablecoin_collected),
            green_supply=units_to_display(info.green_supply),
            red_supply=units_to_display(info.red_supply),
        )


class PurchaseResponse(BaseModel):
    account: str
    token: str
    stable_amount: str
    tokens_minted: str
    total_stablecoin_collected: str

    @classmethod
    def from_domain(cls, r: PurchaseResult) -> "PurchaseResponse":
        return cls(
            account=r.account,
            token=r.token.value,
            stable_amount=units_to_display(r.stable_amount),
            tokens_minted=units_to_display(r.tokens_minted),
            total_stablecoin_collected=units_to_display(r.total_stablecoin_collected),
        )


class ResolutionResponse(BaseModel):
    outcome: str
    winning_token: str
    winning_supply: str
    total_stablecoin_collected: str
    resolved_at: str

    @classmethod
    def from_domain(cls, r: ResolutionResult) -> "ResolutionResponse":
        return cls(
            outcome=r.outcome.value,
            winning_token=r.winning_token.value,
            winning_supply=units_to_display(r.winning_supply),
            total_stablecoin_collected=units_to_display(r.total_stablecoin_collected),
            resolved_at=r.resolved_at.isoformat(),
        )


class RedemptionResponse(BaseModel):
    account: str
    token: str
    tokens_burned: str
    payout: str
    total_stablecoin_collected: str

    @classmethod
    def from_domain(cls, r: RedemptionResult) -> "RedemptionResponse":
        return cls(
            account=r.account,
            token=r.token.value,
            tokens_burned=units_to_display(r.tokens_burned),
            payout=units_to_display(r.payout),
            total_stablecoin_collected=units_to_display(r.total_stablecoin_collected),
        )


class PayoutResponse(BaseModel):
    token: str
    amount: str
    payout: str


class BalancesResponse(BaseModel):
    account: str
    balances: dict[str, str]
    lp_shares: str

    @classmethod
    def build(cls, account: str, balances: dict[Asset, int], lp_shares: int) -> "BalancesResponse":
        return cls(
            account=account,
            balances={asset.value: units_to_display(amount) for asset, amount in balances.items()},
            lp_shares=units_to_display(lp_shares),
        )
