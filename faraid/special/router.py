# faraid/special/router.py
from typing import Optional

from faraid.rules.engine import HeirContext
from faraid.rules.types import Eligibility

from .akdariyyah import is_akdariyyah
from .jadd_ikhwah import is_jadd_ikhwah
from .umariyyah import is_umariyyah

AKDARIYYAH = "akdariyyah"
JADD_IKHWAH = "jadd_ikhwah"
UMARIYYAH = "umariyyah"


def build_context(eligibility: Eligibility) -> HeirContext:
    """Context for the furudh table, with jadd_mode on when the grandfather meets agnate siblings."""
    probe = HeirContext(eligibility=eligibility)
    return HeirContext(eligibility=eligibility, jadd_mode=is_jadd_ikhwah(probe))


def detect_special_case(ctx: HeirContext) -> Optional[str]:
    # Akdariyyah is the most specific, check it first
    if is_akdariyyah(ctx):
        return AKDARIYYAH
    if is_jadd_ikhwah(ctx):
        return JADD_IKHWAH
    if is_umariyyah(ctx):
        return UMARIYYAH
    return None
