# faraid/rules/types.py

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Dict, Mapping, Optional, Tuple

from faraid.rules.heirs import HeirType, sort_key


class Basis(str, Enum):
    FIXED = "Fixed"
    AWL = "AwlAdjusted"
    RADD = "Radd"
    RESIDUARY = "Residuary"
    EXCLUDED = "Excluded"


# Shares are listed per stage in this order
BASIS_ORDER = {
    Basis.FIXED: 0,
    Basis.AWL: 1,
    Basis.RADD: 2,
    Basis.RESIDUARY: 3,
    Basis.EXCLUDED: 4,
}


class Stage(str, Enum):
    IDLE = "Idle"
    VALIDATED = "Validated"
    EXCLUSION_RESOLVED = "ExclusionResolved"
    FIXED_ALLOCATED = "FixedAllocated"
    AWL_ADJUSTED = "AwlAdjusted"
    RESIDUARY_DISTRIBUTED = "ResiduaryDistributed"
    RADD_ADJUSTED = "RaddAdjusted"
    FINALIZED = "Finalized"
    REJECTED = "Rejected"


@dataclass(frozen=True)
class Share:
    heir_type: HeirType
    count: int
    fraction: Fraction
    basis: Basis
    reason: str
    params: Dict[str, object] = field(default_factory=dict)

    @property
    def per_heir(self) -> Fraction:
        return self.fraction / self.count if self.count else Fraction(0)

    def with_fraction(self, fraction: Fraction, basis: Basis,
                      reason: Optional[str] = None, **params) -> "Share":
        merged = dict(self.params)
        merged.update(params)
        return Share(
            heir_type=self.heir_type,
            count=self.count,
            fraction=fraction,
            basis=basis,
            reason=reason or self.reason,
            params=merged,
        )


@dataclass(frozen=True)
class Note:
    key: str
    params: Dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class Exclusion:
    heir_type: HeirType
    count: int
    rule: str
    excluded_by: Tuple[HeirType, ...]


@dataclass(frozen=True)
class Eligibility:
    submitted: Mapping[HeirType, int]
    eligible: Mapping[HeirType, int]
    excluded: Tuple[Exclusion, ...]

    def q(self, heir_type: HeirType) -> int:
        return self.eligible.get(heir_type, 0)

    def has(self, *heir_types: HeirType) -> bool:
        return any(self.q(t) > 0 for t in heir_types)

    def submitted_q(self, heir_type: HeirType) -> int:
        return self.submitted.get(heir_type, 0)


@dataclass(frozen=True)
class ResiduaryClaim:
    heir_type: HeirType
    count: int
    reason: str


@dataclass(frozen=True)
class FixedAllocation:
    shares: Tuple[Share, ...]
    residuaries: Tuple[ResiduaryClaim, ...]
    notes: Tuple[Note, ...] = ()

    @property
    def total(self) -> Fraction:
        return sum((s.fraction for s in self.shares), Fraction(0))


def order_shares(shares) -> Tuple[Share, ...]:
    return tuple(sorted(shares, key=lambda s: (BASIS_ORDER[s.basis], sort_key(s.heir_type))))
