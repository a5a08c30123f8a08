# faraid/rules/engine.py

from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
import logging
from typing import Callable, Dict, List, Optional, Tuple

from faraid.rules.heirs import DESCENDANTS, HeirType, SIBLINGS, sort_key
from faraid.rules.types import (
    Basis, Eligibility, FixedAllocation, ResiduaryClaim, Share,
)

logger = logging.getLogger(__name__)

H = HeirType


# =========================
# Context seen by the rule predicates
# =========================
@dataclass(frozen=True)
class HeirContext:
    eligibility: Eligibility
    jadd_mode: bool = False

    def q(self, heir_type: HeirType) -> int:
        return self.eligibility.q(heir_type)

    def has(self, *heir_types: HeirType) -> bool:
        return self.eligibility.has(*heir_types)

    @property
    def has_descendants(self) -> bool:
        return self.has(*DESCENDANTS)

    @property
    def sibling_heads(self) -> int:
        # Excluded siblings still reduce the mother (hajb nuqsan)
        return sum(self.eligibility.submitted_q(t) for t in SIBLINGS)

    def pool_heads(self, pool: str) -> int:
        return sum(self.q(t) for t, p in POOLS.items() if p == pool)


Predicate = Callable[[HeirContext, HeirType], bool]


@dataclass(frozen=True)
class FurudhRule:
    """
    One row of the conditional share table. `fraction` is the share of the
    whole group (pooled for wives, daughters, sisters). A rule with
    `residuary=True` makes the heir a residuary claimant, in addition to the
    fraction if one is given. A rule with neither means the heir is settled
    elsewhere (grandfather with siblings).
    """
    when: Predicate
    reason: str
    fraction: Optional[Fraction] = None
    residuary: bool = False


def _always(ctx: HeirContext, t: HeirType) -> bool:
    return True


def _single(ctx: HeirContext, t: HeirType) -> bool:
    return ctx.q(t) == 1


def _descendants(ctx: HeirContext, t: HeirType) -> bool:
    return ctx.has_descendants


def _with(*types: HeirType) -> Predicate:
    return lambda ctx, t: ctx.has(*types)


def _jadd_mode(ctx: HeirContext, t: HeirType) -> bool:
    return ctx.jadd_mode


def _pool_single(pool: str) -> Predicate:
    return lambda ctx, t: ctx.pool_heads(pool) == 1


HALF = Fraction(1, 2)
THIRD = Fraction(1, 3)
QUARTER = Fraction(1, 4)
SIXTH = Fraction(1, 6)
EIGHTH = Fraction(1, 8)
TWO_THIRDS = Fraction(2, 3)

# Heir types whose fixed share is shared by head across several types
POOLS: Dict[HeirType, str] = {
    H.PATERNAL_GRANDMOTHER: "grandmothers",
    H.MATERNAL_GRANDMOTHER: "grandmothers",
    H.MATERNAL_BROTHER: "maternal_siblings",
    H.MATERNAL_SISTER: "maternal_siblings",
}

_SETTLED_BY_JADD = FurudhRule(_jadd_mode, "settled_with_grandfather")

# =========================
# Furudh table (first matching rule wins)
# =========================
FURUDH_TABLE: Dict[HeirType, Tuple[FurudhRule, ...]] = {
    H.HUSBAND: (
        FurudhRule(_descendants, "husband_with_descendants", QUARTER),
        FurudhRule(_always, "husband_without_descendants", HALF),
    ),
    H.WIFE: (
        FurudhRule(_descendants, "wife_with_descendants", EIGHTH),
        FurudhRule(_always, "wife_without_descendants", QUARTER),
    ),
    H.SON: (
        FurudhRule(_always, "residuary_agnate", residuary=True),
    ),
    H.DAUGHTER: (
        FurudhRule(_with(H.SON), "residuary_with_brother", residuary=True),
        FurudhRule(_single, "daughter_half", HALF),
        FurudhRule(_always, "daughters_two_thirds", TWO_THIRDS),
    ),
    H.FATHER: (
        FurudhRule(_with(H.SON), "father_with_son", SIXTH),
        FurudhRule(_with(H.DAUGHTER), "father_with_daughter", SIXTH, residuary=True),
        FurudhRule(_always, "residuary_agnate", residuary=True),
    ),
    H.MOTHER: (
        FurudhRule(lambda ctx, t: ctx.has_descendants or ctx.sibling_heads >= 2,
                   "mother_sixth", SIXTH),
        FurudhRule(_always, "mother_third", THIRD),
    ),
    H.PATERNAL_GRANDFATHER: (
        _SETTLED_BY_JADD,
        FurudhRule(_with(H.SON), "grandfather_with_son", SIXTH),
        FurudhRule(_with(H.DAUGHTER), "grandfather_with_daughter", SIXTH, residuary=True),
        FurudhRule(_always, "residuary_agnate", residuary=True),
    ),
    H.PATERNAL_GRANDMOTHER: (
        FurudhRule(_always, "grandmothers_sixth", SIXTH),
    ),
    H.MATERNAL_GRANDMOTHER: (
        FurudhRule(_always, "grandmothers_sixth", SIXTH),
    ),
    H.FULL_BROTHER: (
        _SETTLED_BY_JADD,
        FurudhRule(_always, "residuary_agnate", residuary=True),
    ),
    H.FULL_SISTER: (
        _SETTLED_BY_JADD,
        FurudhRule(_with(H.FULL_BROTHER), "residuary_with_brother", residuary=True),
        FurudhRule(_with(H.DAUGHTER), "residuary_with_daughters", residuary=True),
        FurudhRule(_single, "sister_half", HALF),
        FurudhRule(_always, "sisters_two_thirds", TWO_THIRDS),
    ),
    H.PATERNAL_BROTHER: (
        _SETTLED_BY_JADD,
        FurudhRule(_always, "residuary_agnate", residuary=True),
    ),
    H.PATERNAL_SISTER: (
        _SETTLED_BY_JADD,
        FurudhRule(_with(H.PATERNAL_BROTHER), "residuary_with_brother", residuary=True),
        FurudhRule(_with(H.DAUGHTER), "residuary_with_daughters", residuary=True),
        FurudhRule(_with(H.FULL_SISTER), "paternal_sister_takmila", SIXTH),
        FurudhRule(_single, "sister_half", HALF),
        FurudhRule(_always, "sisters_two_thirds", TWO_THIRDS),
    ),
    H.MATERNAL_BROTHER: (
        FurudhRule(_pool_single("maternal_siblings"), "maternal_sibling_sixth", SIXTH),
        FurudhRule(_always, "maternal_siblings_third", THIRD),
    ),
    H.MATERNAL_SISTER: (
        FurudhRule(_pool_single("maternal_siblings"), "maternal_sibling_sixth", SIXTH),
        FurudhRule(_always, "maternal_siblings_third", THIRD),
    ),
}


def match_rule(ctx: HeirContext, heir_type: HeirType) -> FurudhRule:
    for rule in FURUDH_TABLE[heir_type]:
        if rule.when(ctx, heir_type):
            return rule
    raise LookupError(f"No furudh rule matched {heir_type.value}")


def _group_fraction(ctx: HeirContext, heir_type: HeirType, fraction: Fraction) -> Fraction:
    pool = POOLS.get(heir_type)
    if pool is None:
        return fraction
    # Pooled share is divided by head across the pool's types
    return fraction * ctx.q(heir_type) / ctx.pool_heads(pool)


def determine_furudh(ctx: HeirContext) -> FixedAllocation:
    """
    Stage 2: assign the scripturally fixed shares and collect the residuary
    claimants. 'Awl, Radd and the residue itself are handled later.
    """
    shares: List[Share] = []
    residuaries: List[ResiduaryClaim] = []

    for heir_type in sorted(ctx.eligibility.eligible, key=sort_key):
        count = ctx.q(heir_type)
        rule = match_rule(ctx, heir_type)

        if rule.fraction is not None:
            group = _group_fraction(ctx, heir_type, rule.fraction)
            shares.append(Share(
                heir_type=heir_type,
                count=count,
                fraction=group,
                basis=Basis.FIXED,
                reason=rule.reason,
                params={"fraction": rule.fraction},
            ))
            logger.debug("furudh: %s x%d -> %s (%s)", heir_type.value, count, group, rule.reason)

        if rule.residuary:
            residuaries.append(ResiduaryClaim(heir_type, count, rule.reason))

    return FixedAllocation(shares=tuple(shares), residuaries=tuple(residuaries))
