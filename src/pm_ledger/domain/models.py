"""Domain models for pm_ledger — pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime

from src.pm_common.enums import Asset, LedgerEntryType


@dataclass(frozen=True)
class LedgerEntry:
    id: int                          # monotonically increasing per ledger
    account: str
    asset: Asset
    entry_type: LedgerEntryType
    amount: int                      # smallest units, positive=credit negative=debit
    balance_after: int               # account balance of `asset` after this entry
    reference: str | None = None     # operation that produced the entry, e.g. "POOL_SWAP"
    created_at: datetime | None = None
