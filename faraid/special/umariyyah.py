# faraid/special/umariyyah.py
from fractions import Fraction

from faraid.rules.engine import HeirContext
from faraid.rules.heirs import HeirType, SPOUSES
from faraid.rules.types import Basis, FixedAllocation, Note

H = HeirType


def is_umariyyah(ctx: HeirContext) -> bool:
    # spouse + father + mother, no descendants, fewer than two siblings
    return (
        ctx.has(H.HUSBAND, H.WIFE)
        and ctx.has(H.FATHER)
        and ctx.has(H.MOTHER)
        and not ctx.has_descendants
        and ctx.sibling_heads < 2
    )


def apply_umariyyah(allocation: FixedAllocation) -> FixedAllocation:
    """
    Gharrawain: the mother takes a third of what the spouse leaves, so the
    father (residuary) keeps double her share.
    """
    spouse = sum((s.fraction for s in allocation.shares if s.heir_type in SPOUSES), Fraction(0))
    mother_share = (1 - spouse) / 3

    shares = tuple(
        s.with_fraction(mother_share, Basis.FIXED, "mother_umariyyah")
        if s.heir_type == H.MOTHER else s
        for s in allocation.shares
    )
    note = Note("umariyyah", {"spouse": spouse, "mother": mother_share})
    return FixedAllocation(shares=shares, residuaries=allocation.residuaries,
                           notes=allocation.notes + (note,))
