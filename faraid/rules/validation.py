# faraid/rules/validation.py

from __future__ import annotations
from decimal import Decimal
from typing import Dict, Iterable

from config import SUPPORTED_CURRENCIES, SUPPORTED_LANGUAGES
from faraid.errors import InvalidInput
from faraid.rules.heirs import HEIR_LIMITS, HeirType


def validate_estate(estate_value: Decimal) -> Decimal:
    if not estate_value.is_finite() or estate_value <= 0:
        raise InvalidInput(f"Estate value must be positive, got {estate_value}")
    return estate_value


def validate_heirs(heirs: Iterable) -> Dict[HeirType, int]:
    """
    Turn the submitted HeirInput list into a multiset {type: count}.
    Zero counts are dropped after the bound check; duplicates, counts out of
    range, and husband+wife together are rejected.
    """
    seen: Dict[HeirType, int] = {}
    for h in heirs:
        heir_type = HeirType(h.type)
        if heir_type in seen:
            raise InvalidInput(f"Duplicate heir type: {heir_type.value}")
        limit = HEIR_LIMITS[heir_type]
        if h.count < 0 or h.count > limit:
            raise InvalidInput(
                f"Count for {heir_type.value} must be between 0 and {limit}, got {h.count}"
            )
        seen[heir_type] = h.count

    multiset = {t: c for t, c in seen.items() if c > 0}
    if not multiset:
        raise InvalidInput("At least one heir with count >= 1 is required")

    # A deceased leaves either a husband or wives, never both
    if HeirType.HUSBAND in multiset and HeirType.WIFE in multiset:
        raise InvalidInput("Husband and Wife cannot both be heirs of the same deceased")
    return multiset


def validate_currency(currency: str) -> str:
    code = currency.strip().upper()
    if code not in SUPPORTED_CURRENCIES:
        raise InvalidInput(f"Unsupported currency: {currency}")
    return code


def validate_language(language: str) -> str:
    lang = language.strip().lower()
    if lang not in SUPPORTED_LANGUAGES:
        raise InvalidInput(f"Unsupported language: {language}")
    return lang
