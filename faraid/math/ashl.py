# faraid/math/ashl.py

from fractions import Fraction
from typing import Iterable, List, Tuple
import math

from schemas import ComparisonItem


def relation(a: int, b: int) -> str:
    """
    Compare two denominators (or heads vs. shares) the way the books do:
    - Mumatsalah : equal
    - Mudakholah : one divides the other
    - Muwafaqoh  : share a common factor > 1
    - Mubayanah  : coprime
    """
    if a == b:
        return "Mumatsalah"
    if a % b == 0 or b % a == 0:
        return "Mudakholah"
    if math.gcd(a, b) > 1:
        return "Muwafaqoh"
    return "Mubayanah"


def bandingkan(a: int, b: int) -> ComparisonItem:
    return ComparisonItem(a=a, b=b, relation=relation(a, b), lcm=math.lcm(a, b))


def lcm_all(values: Iterable[int]) -> int:
    result = 1
    for v in values:
        result = math.lcm(result, v)
    return result


def compute_ashl(fractions: Iterable[Fraction]) -> Tuple[int, List[ComparisonItem]]:
    """
    Ashl al-mas'ala: the LCM of the fixed-share denominators, plus the
    pairwise comparison of the distinct denominators. With no fixed share
    the base is 1.
    """
    denominators = sorted({f.denominator for f in fractions if f > 0})
    if not denominators:
        return 1, []

    comparisons: List[ComparisonItem] = []
    for i in range(len(denominators)):
        for j in range(i + 1, len(denominators)):
            comparisons.append(bandingkan(denominators[i], denominators[j]))

    return lcm_all(denominators), comparisons


def format_fraction(value: Fraction) -> str:
    if value.denominator == 1:
        return str(value.numerator)
    return f"{value.numerator}/{value.denominator}"
