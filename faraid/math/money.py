# faraid/math/money.py

from decimal import Decimal
from fractions import Fraction

# All supported currencies use two minor-unit digits
MINOR_UNITS = 2


def to_fraction(amount: Decimal) -> Fraction:
    return Fraction(amount)


def round_minor(value: Fraction, places: int = MINOR_UNITS) -> Decimal:
    """
    Round an exact rational to `places` decimals, half-to-even.
    round() on a Fraction is exact and banker's rounding, so no decimal
    context (global or local) is involved.
    """
    scale = 10 ** places
    units = round(value * scale)
    return Decimal(f"{units}E-{places}")


def share_amount(fraction: Fraction, total_estate: Decimal) -> Decimal:
    return round_minor(fraction * to_fraction(total_estate))


def percentage(fraction: Fraction) -> Decimal:
    return round_minor(fraction * 100)
