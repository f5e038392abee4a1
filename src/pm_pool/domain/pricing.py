"""Pairwise constant-product pricing and LP-share arithmetic.

A trade only ever touches two reserves, the input asset's and the output
asset's; reserve_in * reserve_out is held for the fee-adjusted input and the
third reserve does not move. There is no joint x*y*z invariant.
"""

from src.pm_common.units import amount_after_fee


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int, fee_bps: int) -> int:
    """Output for `amount_in` against the (reserve_in, reserve_out) pair.

    amount_out = after_fee * reserve_out // (reserve_in + after_fee)

    which is reserve_out - ceil(reserve_in * reserve_out / (reserve_in + after_fee)):
    the reserve left in the pool is rounded up, so the pair's product never
    decreases. With reserve_in > 0 the result is strictly below reserve_out.
    """
    if amount_in == 0:
        return 0
    after_fee = amount_after_fee(amount_in, fee_bps)
    denominator = reserve_in + after_fee
    if denominator == 0:
        return 0
    return after_fee * reserve_out // denominator


def proportional_shares(legs: list[tuple[int, int]], total_shares: int) -> int:
    """Shares minted for a contribution, given (amount, reserve) per asset.

    min(amount * total_shares // reserve) over the legs whose reserve is
    non-zero; legs against an empty reserve do not limit the mint. Returns 0
    when no reserve is funded.
    """
    ratios = [amount * total_shares // reserve for amount, reserve in legs if reserve > 0]
    if not ratios:
        return 0
    return min(ratios)


def pro_rata(reserve: int, shares: int, total_shares: int) -> int:
    """Part of `reserve` owned by `shares` out of `total_shares` (rounded down)."""
    if total_shares == 0:
        return 0
    return reserve * shares // total_shares
