# mauquf.py

from decimal import Decimal
from fractions import Fraction
import logging
from typing import Dict, List, Optional

from schemas import (
    CalculationInput, CalculationResult, CertainShare, HamlInput, HeirInput,
    KhuntsaInput, MafqudInput, MauqufResult,
)
from calculator import calculate_inheritance
from faraid.errors import InvalidInput
from faraid.math.ashl import format_fraction
from faraid.math.money import share_amount
from faraid.rules.heirs import HEIR_LIMITS, HeirType, gender_counterparts, label
from faraid.rules.validation import validate_estate

logger = logging.getLogger(__name__)

H = HeirType


def _with_heir(heirs: List[HeirInput], heir_type: HeirType, count: int) -> List[HeirInput]:
    """Add `count` heads of `heir_type`, merging into an existing entry."""
    merged: Dict[HeirType, int] = {}
    for h in heirs:
        if h.type in merged:
            raise InvalidInput(f"Duplicate heir type: {h.type.value}")
        merged[h.type] = h.count
    merged[heir_type] = merged.get(heir_type, 0) + count
    return [HeirInput(type=t, count=c) for t, c in merged.items()]


def _within_limits(heirs: List[HeirInput]) -> bool:
    return all(h.count <= HEIR_LIMITS[h.type] for h in heirs)


def _has_heirs(heirs: List[HeirInput]) -> bool:
    return any(h.count > 0 for h in heirs)


def _per_head(result: CalculationResult) -> Dict[HeirType, Fraction]:
    totals: Dict[HeirType, Fraction] = {}
    counts: Dict[HeirType, int] = {}
    for s in result.shares:
        totals[s.heir_type] = totals.get(s.heir_type, Fraction(0)) + Fraction(s.share_fraction)
        counts[s.heir_type] = s.count
    return {t: totals[t] / counts[t] for t in totals if counts[t]}


def _solve_mauquf_generic(estate_value: Decimal, scenarios: Dict[str, List[HeirInput]],
                          known_heirs: List[HeirInput], currency: Optional[str], language: Optional[str],
                          pending: Optional[HeirInput] = None,
                          pending_types: Optional[Dict[str, HeirType]] = None) -> MauqufResult:
    """
    Run every scenario, then pay each known heir the smallest per-head share
    it gets across them. `pending` (the khuntsa) is paid the smaller of its
    shares, read from the type it takes in each scenario. The rest is held.
    """
    estate = validate_estate(estate_value)

    scenario_results: Dict[str, CalculationResult] = {}
    per_head: Dict[str, Dict[HeirType, Fraction]] = {}
    for name, heirs in scenarios.items():
        result = calculate_inheritance(CalculationInput(
            estate_value=estate, heirs=heirs, currency=currency, language=language,
        ))
        scenario_results[name] = result
        per_head[name] = _per_head(result)
        logger.debug("mauquf scenario %s: status=%s", name, result.status)

    lang = next(iter(scenario_results.values())).language

    certain_shares: List[CertainShare] = []
    certain_total = Fraction(0)
    for heir in known_heirs:
        if heir.count <= 0:
            continue
        minimum = min(per_head[name].get(heir.type, Fraction(0)) for name in scenarios)
        fraction = minimum * heir.count
        certain_total += fraction
        certain_shares.append(CertainShare(
            heir_type=heir.type,
            label=label(heir.type, lang),
            count=heir.count,
            share_fraction=format_fraction(fraction),
            share_amount=share_amount(fraction, estate),
            reason="minimum_across_scenarios",
        ))

    if pending is not None and pending_types:
        minimum = min(per_head[name].get(pending_types[name], Fraction(0)) for name in scenarios)
        fraction = minimum * pending.count
        certain_total += fraction
        certain_shares.append(CertainShare(
            heir_type=pending.type,
            label=label(pending.type, lang),
            count=pending.count,
            share_fraction=format_fraction(fraction),
            share_amount=share_amount(fraction, estate),
            reason="khuntsa_lesser_share",
        ))

    # rounded from the exact reserve, never from the rounded payouts
    reserved = 1 - certain_total
    return MauqufResult(
        total_estate=estate,
        certain_shares=certain_shares,
        reserved_estate=share_amount(reserved, estate),
        reserved_fraction=format_fraction(reserved),
        scenarios=scenario_results,
    )


def solve_mafqud(mafqud_input: MafqudInput) -> MauqufResult:
    heirs = mafqud_input.heirs
    missing = mafqud_input.missing
    if missing.count <= 0:
        raise InvalidInput("The missing heir must have a count of at least 1")

    scenarios = {"alive": _with_heir(heirs, missing.type, missing.count)}
    if _has_heirs(heirs):
        scenarios["dead"] = heirs
    return _solve_mauquf_generic(mafqud_input.estate_value, scenarios, heirs,
                                 mafqud_input.currency, mafqud_input.language)


def solve_khuntsa(khuntsa_input: KhuntsaInput) -> MauqufResult:
    heirs = khuntsa_input.heirs
    khuntsa = khuntsa_input.khuntsa
    if khuntsa.count <= 0:
        raise InvalidInput("The khuntsa heir must have a count of at least 1")
    try:
        male, female = gender_counterparts(khuntsa.type)
    except KeyError:
        raise InvalidInput(f"{khuntsa.type.value} has no male/female counterpart") from None

    scenarios = {
        "male": _with_heir(heirs, male, khuntsa.count),
        "female": _with_heir(heirs, female, khuntsa.count),
    }
    return _solve_mauquf_generic(khuntsa_input.estate_value, scenarios, heirs,
                                 khuntsa_input.currency, khuntsa_input.language,
                                 pending=khuntsa, pending_types={"male": male, "female": female})


def solve_haml(haml_input: HamlInput) -> MauqufResult:
    heirs = haml_input.heirs

    scenarios: Dict[str, List[HeirInput]] = {}
    if _has_heirs(heirs):
        scenarios["none"] = heirs
    births = {
        "son": _with_heir(heirs, H.SON, 1),
        "daughter": _with_heir(heirs, H.DAUGHTER, 1),
        "two_sons": _with_heir(heirs, H.SON, 2),
        "two_daughters": _with_heir(heirs, H.DAUGHTER, 2),
        "son_and_daughter": _with_heir(_with_heir(heirs, H.SON, 1), H.DAUGHTER, 1),
    }
    for name, scenario in births.items():
        if _within_limits(scenario):
            scenarios[name] = scenario
        else:
            logger.debug("haml scenario %s skipped: heir count over the limit", name)
    return _solve_mauquf_generic(haml_input.estate_value, scenarios, heirs,
                                 haml_input.currency, haml_input.language)
