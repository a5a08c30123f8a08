# faraid/rules/asabah.py

from __future__ import annotations
from fractions import Fraction
import logging
from typing import Dict, List, Sequence, Tuple

from faraid.rules.heirs import HeirType, is_male, sort_key
from faraid.rules.types import Basis, ResiduaryClaim, Share

logger = logging.getLogger(__name__)

H = HeirType

# Agnatic proximity: lower rank takes the residue first
RESIDUARY_RANK: Dict[HeirType, int] = {
    H.SON: 0,
    H.DAUGHTER: 0,
    H.FATHER: 1,
    H.PATERNAL_GRANDFATHER: 2,
    H.FULL_BROTHER: 3,
    H.FULL_SISTER: 3,
    H.PATERNAL_BROTHER: 4,
    H.PATERNAL_SISTER: 4,
}


def weight(heir_type: HeirType, count: int) -> int:
    """Male heads count 2, female heads count 1 (li al-dhakari mithlu hazz al-unthayayn)."""
    return (2 if is_male(heir_type) else 1) * count


def split_by_weight(total: Fraction, members: Sequence[Tuple[HeirType, int]]) -> Dict[HeirType, Fraction]:
    units = sum(weight(t, c) for t, c in members)
    if units == 0 or total <= 0:
        return {t: Fraction(0) for t, _ in members}
    return {t: total * weight(t, c) / units for t, c in members}


def distribute_residue(claims: Sequence[ResiduaryClaim], remainder: Fraction) -> Tuple[Share, ...]:
    """
    Stage 3: the nearest residuary group divides the remainder 2:1. A
    non-positive remainder still lists the claimants, with nothing.
    """
    if not claims:
        return ()

    nearest = min(RESIDUARY_RANK[c.heir_type] for c in claims)
    group = [c for c in claims if RESIDUARY_RANK[c.heir_type] == nearest]
    farther = [c for c in claims if RESIDUARY_RANK[c.heir_type] != nearest]

    available = remainder if remainder > 0 else Fraction(0)
    portions = split_by_weight(available, [(c.heir_type, c.count) for c in group])

    shares: List[Share] = []
    for c in sorted(group, key=lambda c: sort_key(c.heir_type)):
        reason = c.reason if available > 0 else "residue_exhausted"
        shares.append(Share(
            heir_type=c.heir_type,
            count=c.count,
            fraction=portions[c.heir_type],
            basis=Basis.RESIDUARY,
            reason=reason,
            params={"remainder": available},
        ))
        logger.debug("asabah: %s x%d -> %s", c.heir_type.value, c.count, portions[c.heir_type])

    for c in sorted(farther, key=lambda c: sort_key(c.heir_type)):
        shares.append(Share(
            heir_type=c.heir_type,
            count=c.count,
            fraction=Fraction(0),
            basis=Basis.RESIDUARY,
            reason="residue_taken_by_nearer",
            params={"remainder": available},
        ))

    return tuple(shares)
