"""In-process asset ledger: (asset, account) -> non-negative balance.

The ledger is the only shared mutable resource of the engine. Pool and market
mutate it through mint / burn / transfer only, and every debit validates
sufficiency before anything is written. Multi-leg operations call require()
for every debit leg first so a failure never leaves a partial effect.

`lock` is re-entrant and shared by the pool and the market built on top of
this ledger, which serializes every mutating operation of the engine.
"""
import logging
import threading
from collections import defaultdict

from src.pm_common.datetime_utils import utc_now
from src.pm_common.enums import Asset, LedgerEntryType
from src.pm_common.errors import InsufficientBalanceError
from src.pm_common.units import validate_amount, validate_non_negative
from src.pm_ledger.domain.models import LedgerEntry

logger = logging.getLogger(__name__)


class Ledger:
    def __init__(self) -> None:
        self.lock = threading.RLock()
        self._balances: dict[tuple[Asset, str], int] = defaultdict(int)
        self._supply: dict[Asset, int] = {asset: 0 for asset in Asset}
        self._entries: list[LedgerEntry] = []

    # --- reads ---

    def balance_of(self, asset: Asset, account: str) -> int:
        return self._balances.get((asset, account), 0)

    def total_supply(self, asset: Asset) -> int:
        return self._supply[asset]

    def holders(self, asset: Asset) -> dict[str, int]:
        """Accounts with a non-zero balance of `asset`."""
        return {acct: bal for (a, acct), bal in self._balances.items() if a is asset and bal > 0}

    @property
    def entries(self) -> list[LedgerEntry]:
        return list(self._entries)

    def entries_for(self, account: str) -> list[LedgerEntry]:
        return [e for e in self._entries if e.account == account]

    def require(self, asset: Asset, account: str, amount: int) -> None:
        """Raise InsufficientBalanceError (2001) if `account` holds less than `amount`."""
        available = self.balance_of(asset, account)
        if available < amount:
            raise InsufficientBalanceError(asset.value, amount, available)

    # --- writes (zero amounts are a no-op) ---

    def deposit(self, account: str, amount: int, reference: str = "FAUCET") -> None:
        """Credit freshly issued stablecoin to `account` (external funding)."""
        validate_amount(amount)
        with self.lock:
            self._supply[Asset.STABLECOIN] += amount
            self._credit(Asset.STABLECOIN, account, amount, LedgerEntryType.DEPOSIT, reference)
        logger.info("Deposit: account=%s amount=%d", account, amount)

    def mint(self, asset: Asset, account: str, amount: int, reference: str | None = None) -> None:
        validate_non_negative(amount)
        if amount == 0:
            return
        with self.lock:
            self._supply[asset] += amount
            self._credit(asset, account, amount, LedgerEntryType.MINT, reference)

    def burn(self, asset: Asset, account: str, amount: int, reference: str | None = None) -> None:
        validate_non_negative(amount)
        if amount == 0:
            return
        with self.lock:
            self.require(asset, account, amount)
            self._supply[asset] -= amount
            self._debit(asset, account, amount, LedgerEntryType.BURN, reference)

    def transfer(
        self,
        asset: Asset,
        sender: str,
        recipient: str,
        amount: int,
        reference: str | None = None,
    ) -> None:
        validate_non_negative(amount)
        if amount == 0:
            return
        with self.lock:
            self.require(asset, sender, amount)
            self._debit(asset, sender, amount, LedgerEntryType.TRANSFER_OUT, reference)
            self._credit(asset, recipient, amount, LedgerEntryType.TRANSFER_IN, reference)

    def _credit(
        self, asset: Asset, account: str, amount: int, entry_type: LedgerEntryType,
        reference: str | None,
    ) -> None:
        key = (asset, account)
        self._balances[key] += amount
        self._append(account, asset, entry_type, amount, self._balances[key], reference)

    def _debit(
        self, asset: Asset, account: str, amount: int, entry_type: LedgerEntryType,
        reference: str | None,
    ) -> None:
        key = (asset, account)
        self._balances[key] -= amount
        self._append(account, asset, entry_type, -amount, self._balances[key], reference)

    def _append(
        self, account: str, asset: Asset, entry_type: LedgerEntryType, amount: int,
        balance_after: int, reference: str | None,
    ) -> None:
        self._entries.append(
            LedgerEntry(
                id=len(self._entries) + 1,
                account=account,
                asset=asset,
                entry_type=entry_type,
                amount=amount,
                balance_after=balance_after,
                reference=reference,
                created_at=utc_now(),
            )
        )
