"""Pro-rata payout of the prize pool to winning-token holders."""


def calculate_payout(token_amount: int, total_collected: int, winning_supply: int) -> int:
    """token_amount * total_collected // winning_supply, rounded down.

    Zero winning supply pays zero; the division is never attempted.
    """
    if winning_supply == 0 or token_amount == 0:
        return 0
    return token_amount * total_collected // winning_supply
