from decimal import Decimal, ROUND_DOWN

CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    # str() keeps the shortest repr, so 0.29 stays 0.29 instead of 0.28999...
    return value if isinstance(value, Decimal) else Decimal(str(value))


def floor_cents(value) -> float:
    """Round a non-negative amount down to whole cents. NaN, inf and negatives become 0."""
    amount = to_decimal(value)
    if not amount.is_finite() or amount <= 0:
        return 0.0
    return float(amount.quantize(CENT, rounding=ROUND_DOWN))


def payout_for(bet, multiplier) -> float:
    """floor(bet * multiplier * 100) / 100, computed in Decimal."""
    return floor_cents(to_decimal(bet) * to_decimal(multiplier))


def sum_cents(amounts) -> float:
    """Add amounts that are already whole cents without float drift."""
    return float(sum((to_decimal(a) for a in amounts), Decimal(0)))
