# faraid/special/jadd_ikhwah.py
"""
Grandfather with full/paternal siblings (jadd wal ikhwah), after Zayd ibn
Thabit. The grandfather takes whichever is largest of:
  - muqasamah: dividing the residue with the siblings as if he were a brother
  - 1/3 of the residue (only when other fixed heirs exist)
  - 1/6 of the whole   (only when other fixed heirs exist)
  - 1/3 of the whole   (only when no other fixed heir exists)
If the residue is 1/6 or less he takes 1/6 (with 'awl if needed) and the
siblings are left out. Ties go to muqasamah.
"""
from fractions import Fraction
import logging
from typing import Dict, List, Tuple

from faraid.rules.asabah import weight
from faraid.rules.engine import HeirContext
from faraid.rules.heirs import AGNATE_SIBLINGS, HeirType, sort_key
from faraid.rules.types import Basis, FixedAllocation, Note, Share
from faraid.special.al_add import split_siblings_portion

logger = logging.getLogger(__name__)

H = HeirType

SIXTH = Fraction(1, 6)
THIRD = Fraction(1, 3)


def is_jadd_ikhwah(ctx: HeirContext) -> bool:
    return ctx.has(H.PATERNAL_GRANDFATHER) and ctx.has(*AGNATE_SIBLINGS)


def jadd_options(residue: Fraction, sibling_units: int, has_other_furudh: bool) -> Dict[str, Fraction]:
    # Insertion order matters: max() keeps the first of equal values
    options: Dict[str, Fraction] = {
        "muqasamah": residue * 2 / (2 + sibling_units),
    }
    if has_other_furudh:
        options["third_of_remainder"] = residue / 3
        options["sixth"] = SIXTH
    else:
        options["third"] = THIRD
    return options


def resolve_jadd_ikhwah(ctx: HeirContext, allocation: FixedAllocation) -> Tuple[FixedAllocation, Tuple[Share, ...]]:
    """
    Settle the grandfather and the agnate siblings. Returns the fixed
    allocation (with the grandfather's 1/6 added when he takes it as a fard)
    and the residuary shares of the grandfather and the siblings.
    """
    gf_count = ctx.q(H.PATERNAL_GRANDFATHER)
    sibling_counts = {t: ctx.q(t) for t in AGNATE_SIBLINGS if ctx.q(t) > 0}
    sibling_units = sum(weight(t, c) for t, c in sibling_counts.items())

    has_other_furudh = bool(allocation.shares)
    residue = 1 - allocation.total
    notes: List[Note] = list(allocation.notes)
    fixed = list(allocation.shares)
    residuary: List[Share] = []

    if has_other_furudh and residue <= SIXTH:
        chosen, gf_fraction = "sixth", SIXTH
        notes.append(Note("jadd_minimum_sixth", {"residue": max(residue, Fraction(0))}))
    else:
        options = jadd_options(residue, sibling_units, has_other_furudh)
        chosen = max(options, key=options.get)
        gf_fraction = options[chosen]
        notes.append(Note("jadd_options", {"options": options, "chosen": chosen}))
    logger.debug("jadd wal ikhwah: residue=%s chosen=%s gf=%s", residue, chosen, gf_fraction)

    if chosen == "sixth":
        fixed.append(Share(
            heir_type=H.PATERNAL_GRANDFATHER,
            count=gf_count,
            fraction=gf_fraction,
            basis=Basis.FIXED,
            reason="grandfather_sixth_with_siblings",
            params={"fraction": SIXTH},
        ))
    else:
        residuary.append(Share(
            heir_type=H.PATERNAL_GRANDFATHER,
            count=gf_count,
            fraction=gf_fraction,
            basis=Basis.RESIDUARY,
            reason=f"grandfather_{chosen}",
            params={"remainder": residue},
        ))

    siblings_portion = residue - gf_fraction
    split = split_siblings_portion(siblings_portion, sibling_counts)
    for heir_type in sorted(split, key=sort_key):
        fraction, reason = split[heir_type]
        residuary.append(Share(
            heir_type=heir_type,
            count=sibling_counts[heir_type],
            fraction=fraction,
            basis=Basis.RESIDUARY,
            reason=reason if fraction > 0 or reason == "muadda_counted_only" else "residue_exhausted",
            params={"remainder": max(siblings_portion, Fraction(0))},
        ))

    new_allocation = FixedAllocation(
        shares=tuple(fixed),
        residuaries=(),
        notes=tuple(notes),
    )
    return new_allocation, tuple(residuary)
