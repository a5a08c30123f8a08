# faraid/special/al_add.py
from fractions import Fraction
from typing import Dict, Tuple

from faraid.rules.asabah import split_by_weight
from faraid.rules.heirs import HeirType

H = HeirType

HALF = Fraction(1, 2)
TWO_THIRDS = Fraction(2, 3)


def split_siblings_portion(portion: Fraction, counts: Dict[HeirType, int]) -> Dict[HeirType, Tuple[Fraction, str]]:
    """
    Al-mu'adda: paternal siblings were counted against the grandfather, but
    the full line takes what the siblings received.
      - a full brother present  -> everything to the full line (2:1)
      - only full sisters       -> they take up to 1/2 (one) or 2/3 (two+);
                                   any excess falls to the paternal line (2:1)
      - no full sibling         -> the paternal line divides it (2:1)
    Returns {heir_type: (fraction, reason)}.
    """
    full = [(t, counts.get(t, 0)) for t in (H.FULL_BROTHER, H.FULL_SISTER) if counts.get(t, 0) > 0]
    paternal = [(t, counts.get(t, 0)) for t in (H.PATERNAL_BROTHER, H.PATERNAL_SISTER) if counts.get(t, 0) > 0]
    portion = portion if portion > 0 else Fraction(0)

    result: Dict[HeirType, Tuple[Fraction, str]] = {}

    if not full:
        for t, f in split_by_weight(portion, paternal).items():
            result[t] = (f, "siblings_with_grandfather")
        return result

    if counts.get(H.FULL_BROTHER, 0) > 0 or not paternal:
        for t, f in split_by_weight(portion, full).items():
            result[t] = (f, "siblings_with_grandfather")
        for t, _ in paternal:
            result[t] = (Fraction(0), "muadda_counted_only")
        return result

    sisters = counts[H.FULL_SISTER]
    cap = HALF if sisters == 1 else TWO_THIRDS
    full_part = min(portion, cap)
    rest = portion - full_part

    result[H.FULL_SISTER] = (full_part, "siblings_with_grandfather")
    for t, f in split_by_weight(rest, paternal).items():
        result[t] = (f, "muadda_paternal_remainder" if f > 0 else "muadda_counted_only")
    return result
