# faraid/special/akdariyyah.py
from fractions import Fraction
from typing import Tuple

from faraid.rules.asabah import split_by_weight
from faraid.rules.engine import HeirContext
from faraid.rules.heirs import HeirType
from faraid.rules.types import Basis, FixedAllocation, Note, Share

H = HeirType

_SISTERS = (H.FULL_SISTER, H.PATERNAL_SISTER)


def _sister(ctx: HeirContext) -> HeirType:
    return next(t for t in _SISTERS if ctx.q(t) > 0)


def is_akdariyyah(ctx: HeirContext) -> bool:
    # exactly: husband, mother, grandfather, one sister; nothing else submitted
    eligible = ctx.eligibility.eligible
    sisters = [t for t in _SISTERS if eligible.get(t, 0) > 0]
    if len(sisters) != 1:
        return False
    expected = {H.HUSBAND, H.MOTHER, H.PATERNAL_GRANDFATHER, sisters[0]}
    return (
        set(eligible) == expected
        and all(eligible[t] == 1 for t in expected)
        and ctx.sibling_heads == 1
    )


def apply_akdariyyah(ctx: HeirContext, allocation: FixedAllocation) -> FixedAllocation:
    """
    Zawj 1/2, Umm 1/3, Jadd 1/6 and Ukht 1/2 as fard; the problem then goes
    to 'awl (6 -> 9). The grandfather's and sister's saham are merged and
    split 2:1 afterwards (see merge_after_awl).
    """
    sister = _sister(ctx)
    extra = (
        Share(H.PATERNAL_GRANDFATHER, 1, Fraction(1, 6), Basis.FIXED,
              "akdariyyah_grandfather", {"fraction": Fraction(1, 6)}),
        Share(sister, 1, Fraction(1, 2), Basis.FIXED,
              "akdariyyah_sister", {"fraction": Fraction(1, 2)}),
    )
    return FixedAllocation(
        shares=allocation.shares + extra,
        residuaries=(),
        notes=allocation.notes + (Note("akdariyyah_detected"),),
    )


def merge_after_awl(shares: Tuple[Share, ...]) -> Tuple[Tuple[Share, ...], Note]:
    """Pool the grandfather's and sister's 'awl-adjusted shares and divide them 2:1."""
    pair = [s for s in shares if s.heir_type == H.PATERNAL_GRANDFATHER or s.heir_type in _SISTERS]
    pooled = sum((s.fraction for s in pair), Fraction(0))
    portions = split_by_weight(pooled, [(s.heir_type, s.count) for s in pair])

    merged = tuple(
        s.with_fraction(portions[s.heir_type], Basis.AWL, "akdariyyah_muqasamah", pooled=pooled)
        if s.heir_type in portions else s
        for s in shares
    )
    return merged, Note("akdariyyah_merge", {"pooled": pooled})
