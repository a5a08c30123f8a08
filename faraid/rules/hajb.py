# faraid/rules/hajb.py

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Callable, Dict, FrozenSet, List, Mapping, Tuple

from faraid.errors import NoEligibleHeirs
from faraid.rules.heirs import (
    HeirType, SIBLINGS, MATERNAL_SIBLINGS, PATERNAL_SIBLINGS, GRANDMOTHERS, sort_key,
)
from faraid.rules.types import Eligibility, Exclusion

logger = logging.getLogger(__name__)

H = HeirType


@dataclass(frozen=True)
class HajbRule:
    """
    One exclusion rule: when `blockers(survivors)` returns a non-empty tuple,
    every surviving heir in `targets` is excluded and tagged with `name`.
    """
    name: str
    targets: FrozenSet[HeirType]
    blockers: Callable[[Mapping[HeirType, int]], Tuple[HeirType, ...]]


def _present(survivors: Mapping[HeirType, int], *types: HeirType) -> Tuple[HeirType, ...]:
    return tuple(t for t in types if survivors.get(t, 0) > 0)


def _when(condition: Callable[[Mapping[HeirType, int]], bool], *types: HeirType):
    def blockers(survivors):
        if not condition(survivors):
            return ()
        return _present(survivors, *types)
    return blockers


def _always(survivors) -> bool:
    return True


def _no_grandfather(survivors) -> bool:
    # With a surviving grandfather the agnate siblings are counted against
    # him (al-mu'adda) and handled in special/jadd_ikhwah.py
    return survivors.get(H.PATERNAL_GRANDFATHER, 0) == 0


def _full_sister_with_daughter(survivors) -> bool:
    return (
        _no_grandfather(survivors)
        and survivors.get(H.FULL_SISTER, 0) > 0
        and survivors.get(H.DAUGHTER, 0) > 0
    )


def _two_thirds_exhausted(survivors) -> bool:
    return (
        _no_grandfather(survivors)
        and survivors.get(H.FULL_SISTER, 0) >= 2
        and survivors.get(H.PATERNAL_BROTHER, 0) == 0
    )


# =========================
# Ordered rule table (priority = list order)
# =========================
HAJB_RULES: Tuple[HajbRule, ...] = (
    HajbRule("son_excludes_siblings", SIBLINGS,
             _when(_always, H.SON)),
    HajbRule("father_excludes_grandfather", frozenset({H.PATERNAL_GRANDFATHER}),
             _when(_always, H.FATHER)),
    HajbRule("father_excludes_siblings", SIBLINGS,
             _when(_always, H.FATHER)),
    HajbRule("father_excludes_paternal_grandmother", frozenset({H.PATERNAL_GRANDMOTHER}),
             _when(_always, H.FATHER)),
    HajbRule("mother_excludes_grandmothers", GRANDMOTHERS,
             _when(_always, H.MOTHER)),
    HajbRule("descendant_or_grandfather_excludes_maternal_siblings", MATERNAL_SIBLINGS,
             _when(_always, H.DAUGHTER, H.PATERNAL_GRANDFATHER)),
    HajbRule("full_brother_excludes_paternal_siblings", PATERNAL_SIBLINGS,
             _when(_no_grandfather, H.FULL_BROTHER)),
    HajbRule("full_sister_with_daughter_excludes_paternal_siblings", PATERNAL_SIBLINGS,
             _when(_full_sister_with_daughter, H.FULL_SISTER, H.DAUGHTER)),
    HajbRule("full_sisters_exhaust_two_thirds", frozenset({H.PATERNAL_SISTER}),
             _when(_two_thirds_exhausted, H.FULL_SISTER)),
)


def resolve_exclusions(heirs: Mapping[HeirType, int]) -> Eligibility:
    """
    Partition the heir multiset into eligible and excluded heirs. Each rule
    only sees the survivors of the rules before it.
    """
    survivors: Dict[HeirType, int] = {t: c for t, c in heirs.items() if c > 0}
    excluded: List[Exclusion] = []

    for rule in HAJB_RULES:
        blockers = rule.blockers(survivors)
        if not blockers:
            continue
        hit = sorted((t for t in rule.targets if survivors.get(t, 0) > 0), key=sort_key)
        for heir_type in hit:
            excluded.append(Exclusion(
                heir_type=heir_type,
                count=survivors.pop(heir_type),
                rule=rule.name,
                excluded_by=blockers,
            ))
            logger.debug("hajb: %s excluded by %s (%s)",
                         heir_type.value, [b.value for b in blockers], rule.name)

    if not survivors:
        raise NoEligibleHeirs("Every submitted heir is excluded; nothing to distribute")

    return Eligibility(
        submitted=dict(heirs),
        eligible=survivors,
        excluded=tuple(excluded),
    )
