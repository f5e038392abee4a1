"""Engine invariant checks for a market, its pool and the shared ledger.

INV-1: every pool reserve equals the pool account's ledger balance
INV-2: total_lp_shares == sum of provider shares, and is 0 iff all reserves are 0
INV-3: market escrow stablecoin == total_stablecoin_collected
INV-4: per asset, sum of account balances == tracked total supply
INV-5: outcome != PENDING iff resolved
"""
import logging

from src.pm_common.enums import Asset, Outcome
from src.pm_ledger.domain.ledger import Ledger
from src.pm_market.domain.market import PredictionMarket

logger = logging.getLogger(__name__)


def verify_invariants(market: PredictionMarket, ledger: Ledger) -> list[str]:
    """Return a list of violation strings; empty when all invariants hold."""
    violations: list[str] = []
    pool = market.pool
    reserves = pool.get_reserves()

    for asset in Asset:
        reserve = reserves.of(asset)
        held = ledger.balance_of(asset, pool.pool_account)
        if reserve < 0 or reserve != held:
            violations.append(
                f"INV-1 violated: {asset.value} reserve={reserve} != pool balance={held}"
            )

    share_sum = sum(pool.get_lp_balances().values())
    if share_sum != pool.total_lp_shares:
        violations.append(
            f"INV-2 violated: total_lp_shares={pool.total_lp_shares} != sum of shares={share_sum}"
        )
    if (pool.total_lp_shares == 0) != reserves.is_empty:
        violations.append(
            f"INV-2 violated: total_lp_shares={pool.total_lp_shares} with reserves={reserves}"
        )

    escrow = ledger.balance_of(Asset.STABLECOIN, market.escrow_account)
    if escrow != market.total_stablecoin_collected:
        violations.append(
            f"INV-3 violated: escrow={escrow} != "
            f"total_stablecoin_collected={market.total_stablecoin_collected}"
        )

    for asset in Asset:
        held_total = sum(ledger.holders(asset).values())
        supply = ledger.total_supply(asset)
        if held_total != supply:
            violations.append(
                f"INV-4 violated: {asset.value} balances={held_total} != supply={supply}"
            )

    if market.resolved != (market.outcome is not Outcome.PENDING):
        violations.append(
            f"INV-5 violated: resolved={market.resolved} outcome={market.outcome.value}"
        )

    for msg in violations:
        logger.error(msg)
    if not violations:
        logger.debug(
            "Invariants OK: reserves=%s shares=%d collected=%d",
            reserves, pool.total_lp_shares, market.total_stablecoin_collected,
        )
    return violations
