from decimal import Decimal

ZERO = Decimal("0")


def to_money(value) -> Decimal:
    """Normalize a SQL aggregate to Decimal; empty sums become 0."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
