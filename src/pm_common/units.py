"""Fixed-point integer arithmetic for token amounts.

All balances, reserves and shares are int in the smallest unit (10**18 per
whole token). Decimal is only used at the boundary to parse and format
human-readable strings.
"""

from decimal import Decimal, InvalidOperation

from src.pm_common.errors import InvalidAmountError

DECIMALS = 18
UNIT = 10**DECIMALS
BPS_DENOMINATOR = 10_000


def validate_amount(amount: int) -> None:
    """Raise InvalidAmountError unless amount is a positive int."""
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmountError(amount)


def validate_non_negative(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise InvalidAmountError(amount, "must be a non-negative integer")


def to_units(value: str | int | Decimal) -> int:
    """Parse a decimal amount into smallest units: '1.5' -> 1500000000000000000.

    More than 18 fractional digits is rejected rather than rounded.
    """
    try:
        dec = Decimal(str(value))
    except InvalidOperation:
        raise InvalidAmountError(value, "not a decimal number") from None
    if not dec.is_finite():
        raise InvalidAmountError(value, "not a decimal number")
    try:
        scaled = dec * UNIT
        integral = scaled.to_integral_value()
    except ArithmeticError:
        raise InvalidAmountError(value, "out of range") from None
    if scaled != integral:
        raise InvalidAmountError(value, f"more than {DECIMALS} decimal places")
    return int(scaled)


def units_to_display(units: int) -> str:
    """Format smallest units as a decimal string: 1500000000000000000 -> '1.5'."""
    sign = "-" if units < 0 else ""
    whole, frac = divmod(abs(units), UNIT)
    if frac == 0:
        return f"{sign}{whole}"
    frac_str = f"{frac:0{DECIMALS}d}".rstrip("0")
    return f"{sign}{whole}.{frac_str}"


def amount_after_fee(amount: int, fee_bps: int) -> int:
    """Input amount that takes part in pricing once the fee is withheld.

    after_fee = floor(amount * (10000 - fee_bps) / 10000); the withheld part
    stays in the pool reserve.
    """
    return amount * (BPS_DENOMINATOR - fee_bps) // BPS_DENOMINATOR
