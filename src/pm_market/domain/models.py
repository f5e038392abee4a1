"""Domain models for pm_market — pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime

from src.pm_common.enums import Asset, Outcome


@dataclass(frozen=True)
class MarketInfo:
    owner: str
    oracle: str | None
    outcome: Outcome
    resolved: bool
    total_stablecoin_collected: int
    end_time: datetime
    green_supply: int
    red_supply: int


@dataclass(frozen=True)
class PurchaseResult:
    """Primary issuance: stablecoin in, outcome tokens minted 1:1."""

    account: str
    token: Asset
    stable_amount: int
    tokens_minted: int
    total_stablecoin_collected: int


@dataclass(frozen=True)
class ResolutionResult:
    outcome: Outcome
    winning_token: Asset
    winning_supply: int
    total_stablecoin_collected: int
    resolved_at: datetime


@dataclass(frozen=True)
class RedemptionResult:
    account: str
    token: Asset
    tokens_burned: int
    payout: int
    total_stablecoin_collected: int  # prize pool left for the remaining holders
