# calculator.py

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
import logging
from typing import Dict, List, Mapping, Optional, Tuple

import schemas
from config import SETTINGS
from faraid.errors import ArithmeticInvariantViolation, FaraidError
from faraid.math.ashl import compute_ashl, format_fraction
from faraid.math.inkisar import compute_tashih
from faraid.math.money import percentage, round_minor, share_amount
from faraid.rules.asabah import distribute_residue
from faraid.rules.engine import determine_furudh
from faraid.rules.hajb import resolve_exclusions
from faraid.rules.heirs import SPOUSES, HeirType, label, sort_key
from faraid.rules.reasons import render
from faraid.rules.types import (
    Basis, Eligibility, FixedAllocation, Note, Share, Stage, order_shares,
)
from faraid.rules.validation import (
    validate_currency, validate_estate, validate_heirs, validate_language,
)
from faraid.special.akdariyyah import apply_akdariyyah, merge_after_awl
from faraid.special.jadd_ikhwah import resolve_jadd_ikhwah
from faraid.special.router import (
    AKDARIYYAH, JADD_IKHWAH, UMARIYYAH, build_context, detect_special_case,
)
from faraid.special.umariyyah import apply_umariyyah

logger = logging.getLogger(__name__)

STATUS_ADIL = "Adil"
STATUS_AWL = "Awl"
STATUS_RADD = "Radd"
STATUS_RESIDUARY = "Residuary"

ZERO = Decimal("0.00")


# --------------------------
# Exact distribution (no money)
# --------------------------
@dataclass(frozen=True)
class Distribution:
    eligibility: Eligibility
    special_case: Optional[str]
    shares: Tuple[Share, ...]          # ordered, excluded heirs not included
    status: str
    stages: Tuple[Stage, ...]
    notes: Tuple[Note, ...]
    unallocated: Fraction
    ashl_awal: int
    comparisons: Tuple[schemas.ComparisonItem, ...]


def _apply_awl(allocation: FixedAllocation, residuary: Tuple[Share, ...]) -> Tuple[Tuple[Share, ...], Tuple[Share, ...]]:
    total = allocation.total
    shares = tuple(s.with_fraction(s.fraction / total, Basis.AWL) for s in allocation.shares)
    # residuary heirs are still listed, with nothing
    emptied = tuple(
        s.with_fraction(Fraction(0), Basis.RESIDUARY, "residue_exhausted", remainder=Fraction(0))
        for s in residuary
    )
    return shares, emptied


def _apply_radd(shares: Tuple[Share, ...]) -> Tuple[Tuple[Share, ...], Fraction]:
    """
    Return the surplus to the non-spouse fixed heirs in proportion to their
    fractions. Spouses keep their share. With only a spouse the surplus
    stays unallocated.
    """
    spouse_total = sum((s.fraction for s in shares if s.heir_type in SPOUSES), Fraction(0))
    others_total = sum((s.fraction for s in shares if s.heir_type not in SPOUSES), Fraction(0))
    if others_total == 0:
        return shares, 1 - spouse_total

    pool = 1 - spouse_total
    adjusted = tuple(
        s if s.heir_type in SPOUSES
        else s.with_fraction(s.fraction * pool / others_total, Basis.RADD)
        for s in shares
    )
    return adjusted, Fraction(0)


def distribute(heirs: Mapping[HeirType, int]) -> Distribution:
    """
    Run the pipeline on a validated heir multiset:
      hajb -> furudh -> ('awl | asabah | radd)
    Every fraction stays exact; no money is involved here.
    """
    stages: List[Stage] = []

    eligibility = resolve_exclusions(heirs)
    stages.append(Stage.EXCLUSION_RESOLVED)

    ctx = build_context(eligibility)
    special_case = detect_special_case(ctx)

    allocation = determine_furudh(ctx)
    jadd_residuary: Optional[Tuple[Share, ...]] = None
    if special_case == UMARIYYAH:
        allocation = apply_umariyyah(allocation)
    elif special_case == AKDARIYYAH:
        allocation = apply_akdariyyah(ctx, allocation)
    elif special_case == JADD_IKHWAH:
        allocation, jadd_residuary = resolve_jadd_ikhwah(ctx, allocation)
    stages.append(Stage.FIXED_ALLOCATED)

    fixed_total = allocation.total
    ashl_awal, comparisons = compute_ashl(s.fraction for s in allocation.shares)
    notes: List[Note] = list(allocation.notes)
    notes.append(Note("note_fixed_total", {"total": fixed_total, "base": ashl_awal}))
    notes.extend(Note("note_comparison", {"a": c.a, "b": c.b, "relation": c.relation})
                 for c in comparisons)
    logger.debug("fixed total=%s ashl=%d special=%s", fixed_total, ashl_awal, special_case)

    residuary: Tuple[Share, ...] = ()
    if jadd_residuary is not None:
        residuary = jadd_residuary
    elif allocation.residuaries:
        residuary = distribute_residue(allocation.residuaries, 1 - fixed_total)

    fixed = allocation.shares
    unallocated = Fraction(0)

    if fixed_total > 1:
        fixed, residuary = _apply_awl(allocation, residuary)
        notes.append(Note("note_awl", {
            "total": fixed_total,
            "before": ashl_awal,
            "after": int(fixed_total * ashl_awal),
        }))
        if special_case == AKDARIYYAH:
            fixed, merge_note = merge_after_awl(fixed)
            notes.append(merge_note)
        status = STATUS_AWL
        stages.append(Stage.AWL_ADJUSTED)
    elif residuary:
        notes.append(Note("note_residuary", {"remainder": max(1 - fixed_total, Fraction(0))}))
        status = STATUS_RESIDUARY
        stages.append(Stage.RESIDUARY_DISTRIBUTED)
    elif fixed_total < 1:
        remainder = 1 - fixed_total
        fixed, unallocated = _apply_radd(fixed)
        if unallocated:
            notes.append(Note("note_unallocated", {"remainder": unallocated}))
        else:
            receivers = [s.heir_type for s in fixed if s.basis == Basis.RADD]
            notes.append(Note("note_radd", {"remainder": remainder, "heirs": receivers}))
        status = STATUS_RADD
        stages.append(Stage.RADD_ADJUSTED)
    else:
        notes.append(Note("note_adil"))
        status = STATUS_ADIL

    shares = order_shares(fixed + residuary)
    total = sum((s.fraction for s in shares), Fraction(0)) + unallocated
    if total != 1:
        logger.error("fractions sum to %s, not 1: %s", total,
                     [(s.heir_type.value, str(s.fraction)) for s in shares])
        raise ArithmeticInvariantViolation(f"Shares sum to {format_fraction(total)}, expected 1")

    return Distribution(
        eligibility=eligibility,
        special_case=special_case,
        shares=shares,
        status=status,
        stages=tuple(stages),
        notes=tuple(notes),
        unallocated=unallocated,
        ashl_awal=ashl_awal,
        comparisons=tuple(comparisons),
    )


# --------------------------
# Rendering
# --------------------------
def _describe(share: Share, language: str) -> str:
    values: Dict[str, object] = {
        "heir": share.heir_type,
        "count": share.count,
        "fraction": share.fraction,
        "fraction_share": share.fraction,
    }
    values.update(share.params)
    text = render(share.reason, language, **values)
    if share.basis == Basis.AWL and share.reason != "akdariyyah_muqasamah":
        text += " " + render("suffix_awl", language, fraction=share.fraction)
    elif share.basis == Basis.RADD:
        text += " " + render("suffix_radd", language, fraction=share.fraction)
    return text


def _heir_summary(heirs: Mapping[HeirType, int], language: str) -> str:
    parts = []
    for heir_type in sorted(heirs, key=sort_key):
        count = heirs[heir_type]
        name = label(heir_type, language)
        parts.append(name if count == 1 else f"{name} x{count}")
    return (", " if language == "en" else "، ").join(parts)


def _to_heir_share(share: Share, saham: int, estate: Decimal, language: str) -> schemas.HeirShare:
    return schemas.HeirShare(
        heir_type=share.heir_type,
        label=label(share.heir_type, language),
        count=share.count,
        basis=share.basis.value,
        share_fraction=format_fraction(share.fraction),
        per_heir_fraction=format_fraction(share.per_heir),
        share_percentage=percentage(share.fraction),
        share_amount=share_amount(share.fraction, estate),
        amount_each=share_amount(share.per_heir, estate),
        saham=saham,
        reason=share.reason,
        description=_describe(share, language),
    )


# ============================================================
#                    MAIN ENTRY POINT
# ============================================================
def calculate_inheritance(calculation_input: schemas.CalculationInput) -> schemas.CalculationResult:
    stage = Stage.IDLE
    try:
        estate = validate_estate(calculation_input.estate_value)
        heirs = validate_heirs(calculation_input.heirs)
        currency = validate_currency(calculation_input.currency or SETTINGS.default_currency)
        language = validate_language(calculation_input.language or SETTINGS.default_language)
        stage = Stage.VALIDATED

        distribution = distribute(heirs)
    except FaraidError as exc:
        exc.stage = Stage.REJECTED.value
        logger.warning("calculation rejected after %s: %s %s", stage.value, exc.code, exc.message)
        raise

    tashih = compute_tashih(distribution.shares)

    notes: List[str] = [render("note_validated", language, estate=estate,
                               heirs=_heir_summary(heirs, language))]
    for ex in distribution.eligibility.excluded:
        notes.append(render("excluded", language, heir=ex.heir_type, by=list(ex.excluded_by)))
    notes.extend(render(n.key, language, **n.params) for n in distribution.notes)
    notes.extend(render(n.key, language, **n.params) for n in tashih.notes)

    shares = [
        _to_heir_share(s, saham, estate, language)
        for s, saham in zip(distribution.shares, tashih.saham)
    ]
    for ex in distribution.eligibility.excluded:
        shares.append(schemas.HeirShare(
            heir_type=ex.heir_type,
            label=label(ex.heir_type, language),
            count=ex.count,
            basis=Basis.EXCLUDED.value,
            share_fraction="0",
            per_heir_fraction="0",
            share_percentage=ZERO,
            share_amount=ZERO,
            amount_each=ZERO,
            saham=0,
            reason=ex.rule,
            description=render("excluded", language, heir=ex.heir_type, by=list(ex.excluded_by)),
        ))

    paid = sum((s.share_amount for s in shares), ZERO)
    remaining = round_minor(Fraction(estate - paid))

    explanation = "\n".join(notes + [f"{s.label}: {s.description}" for s in shares])
    stages = [Stage.IDLE, Stage.VALIDATED, *distribution.stages, Stage.FINALIZED]
    logger.debug("calculation finalized: status=%s base=%d", distribution.status, tashih.base)

    return schemas.CalculationResult(
        total_estate=estate,
        remaining_estate=remaining,
        currency=currency,
        language=language,
        status=distribution.status,
        special_case=distribution.special_case,
        ashlul_masalah_awal=distribution.ashl_awal,
        ashlul_masalah_akhir=tashih.base,
        comparisons=list(distribution.comparisons),
        unallocated_fraction=format_fraction(distribution.unallocated),
        stages=[s.value for s in stages],
        notes=notes,
        explanation=explanation,
        shares=shares,
    )
