"""Global enums shared by the ledger, the pool and the market."""

from enum import Enum

from src.pm_common.errors import InvalidOutcomeError, UnknownAssetError


class Asset(str, Enum):
    GREEN = "GREEN"
    RED = "RED"
    STABLECOIN = "STABLECOIN"

    @property
    def is_outcome_token(self) -> bool:
        return self is not Asset.STABLECOIN


OUTCOME_TOKENS = (Asset.GREEN, Asset.RED)


class Outcome(str, Enum):
    PENDING = "PENDING"
    GREEN_WINS = "GREEN_WINS"
    RED_WINS = "RED_WINS"


WINNING_TOKEN = {
    Outcome.GREEN_WINS: Asset.GREEN,
    Outcome.RED_WINS: Asset.RED,
}


class MarketStatus(str, Enum):
    """Derived from the clock and the resolution flag, never stored."""
    OPEN = "OPEN"
    CLOSED = "CLOSED"  # betting window over, waiting for the oracle
    RESOLVED = "RESOLVED"


class LedgerEntryType(str, Enum):
    DEPOSIT = "DEPOSIT"
    MINT = "MINT"
    BURN = "BURN"
    TRANSFER_OUT = "TRANSFER_OUT"
    TRANSFER_IN = "TRANSFER_IN"


class EventType(str, Enum):
    POOL_FUNDED = "POOL_FUNDED"
    PROVIDER_REGISTERED = "PROVIDER_REGISTERED"
    LIQUIDITY_ADDED = "LIQUIDITY_ADDED"
    LIQUIDITY_REMOVED = "LIQUIDITY_REMOVED"
    SWAP = "SWAP"
    TOKENS_BOUGHT = "TOKENS_BOUGHT"
    TOKENS_SOLD = "TOKENS_SOLD"
    ORACLE_SET = "ORACLE_SET"
    MARKET_RESOLVED = "MARKET_RESOLVED"
    TOKENS_REDEEMED = "TOKENS_REDEEMED"


def parse_asset(value: "Asset | str") -> Asset:
    """Coerce an asset identifier, raising UnknownAssetError (2003) otherwise."""
    if isinstance(value, Asset):
        return value
    try:
        return Asset(str(value).upper())
    except ValueError:
        raise UnknownAssetError(value) from None


def parse_outcome_token(value: "Asset | str") -> Asset:
    asset = parse_asset(value)
    if not asset.is_outcome_token:
        raise UnknownAssetError(f"{value} (not an outcome token)")
    return asset


def parse_outcome(value: "Outcome | str") -> Outcome:
    if isinstance(value, Outcome):
        return value
    try:
        return Outcome(str(value).upper())
    except ValueError:
        raise InvalidOutcomeError(value) from None
