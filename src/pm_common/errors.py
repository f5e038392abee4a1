"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Caller identity
  2xxx: Ledger / balances
  3xxx: Market
  6xxx: Liquidity pool
  9xxx: System

Every failure aborts the whole operation; no state is mutated before the
raising check.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Caller identity ---

class UnauthorizedError(AppError):
    def __init__(self, caller: str, role: str) -> None:
        super().__init__(1006, f"Account {caller} is not the {role}", 403)


class ReservedAccountError(UnauthorizedError):
    """The engine's own pool or escrow account used as a caller."""

    def __init__(self, account: str) -> None:
        AppError.__init__(self, 1006, f"Account {account} is reserved for the engine", 403)


# --- 2xxx: Ledger ---

class InsufficientBalanceError(AppError):
    def __init__(self, asset: str, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient {asset} balance: required {required}, available {available}",
            422,
        )


class UnknownAssetError(AppError):
    def __init__(self, asset: object) -> None:
        super().__init__(2003, f"Unknown asset: {asset}", 400)


class InvalidAmountError(AppError):
    def __init__(self, amount: object, detail: str = "must be a positive integer") -> None:
        super().__init__(2004, f"Invalid amount {amount}: {detail}", 400)


# --- 3xxx: Market ---

class MarketClosedError(AppError):
    def __init__(self) -> None:
        super().__init__(3002, "Market closed", 422)


class TooEarlyError(AppError):
    def __init__(self, end_time: object) -> None:
        super().__init__(3003, f"Market cannot be resolved before {end_time}", 422)


class InvalidOutcomeError(AppError):
    def __init__(self, outcome: object) -> None:
        super().__init__(3004, f"Invalid outcome: {outcome}", 400)


class AlreadyResolvedError(AppError):
    def __init__(self) -> None:
        super().__init__(3005, "Market already resolved", 409)


class NotResolvedError(AppError):
    def __init__(self) -> None:
        super().__init__(3006, "Market not resolved yet", 422)


class NotWinningTokenError(AppError):
    def __init__(self, token: str) -> None:
        super().__init__(3007, f"{token} is not the winning token", 422)


# --- 6xxx: Liquidity pool ---

class InsufficientReserveError(AppError):
    def __init__(self, asset: str, requested: int, reserve: int) -> None:
        super().__init__(
            6001,
            f"Insufficient {asset} reserve: trade needs {requested}, pool holds {reserve}",
            422,
        )


class PoolEmptyError(AppError):
    def __init__(self) -> None:
        super().__init__(6002, "Pool is empty; fund it before adding liquidity", 422)


class AlreadyRegisteredError(AppError):
    def __init__(self, account: str) -> None:
        super().__init__(6003, f"Already registered: {account}", 409)


class NotRegisteredProviderError(AppError):
    def __init__(self, account: str) -> None:
        super().__init__(6004, f"Not a registered liquidity provider: {account}", 403)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
