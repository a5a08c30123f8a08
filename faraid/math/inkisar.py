# faraid/math/inkisar.py

from dataclasses import dataclass
from fractions import Fraction
from typing import List, Sequence, Tuple

from faraid.math.ashl import lcm_all, relation
from faraid.rules.types import Note, Share


@dataclass(frozen=True)
class Tashih:
    base_before: int           # base over the group fractions
    base: int                  # corrected base (every head gets a whole number)
    multiplier: int
    saham: Tuple[int, ...]     # per share, aligned with the input order
    notes: Tuple[Note, ...]


def _group_factor(heads: int, saham_group: int) -> int:
    """
    Multiplier needed so that saham_group splits evenly over heads:
      - Mubayanah  -> heads
      - Muwafaqoh  -> heads / gcd
      - Mudakholah -> heads / saham if saham divides heads, else 1
      - Mumatsalah -> 1
    """
    if saham_group % heads == 0:
        return 1
    rel = relation(heads, saham_group)
    if rel == "Mubayanah":
        return heads
    if rel == "Mudakholah":
        return heads // saham_group
    g = Fraction(saham_group, heads).denominator
    return g


def compute_tashih(shares: Sequence[Share]) -> Tashih:
    """
    Correct the base so that every individual heir holds a whole number of
    shares. The base before correction is the LCM of the group fractions; the
    final base is the LCM of the per-head fractions, which equals the
    before-base times the LCM of every group factor.
    """
    paid = [s for s in shares if s.fraction > 0]
    base_before = lcm_all(s.fraction.denominator for s in paid)

    notes: List[Note] = []
    multiplier = 1
    for s in paid:
        if s.count <= 1:
            continue
        saham_group = int(s.fraction * base_before)
        factor = _group_factor(s.count, saham_group)
        if factor > 1:
            notes.append(Note("inkisar_group", {
                "heir": s.heir_type,
                "heads": s.count,
                "saham": saham_group,
                "relation": relation(s.count, saham_group),
            }))
            multiplier = lcm_all([multiplier, factor])

    base = base_before * multiplier
    if multiplier > 1:
        notes.append(Note("tashih", {
            "before": base_before,
            "multiplier": multiplier,
            "after": base,
        }))

    saham = tuple(int(s.fraction * base) for s in shares)
    return Tashih(
        base_before=base_before,
        base=base,
        multiplier=multiplier,
        saham=saham,
        notes=tuple(notes),
    )
