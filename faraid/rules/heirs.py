# faraid/rules/heirs.py

from __future__ import annotations
from enum import Enum
from typing import Dict, List


class HeirType(str, Enum):
    HUSBAND = "Husband"
    WIFE = "Wife"
    SON = "Son"
    DAUGHTER = "Daughter"
    FATHER = "Father"
    MOTHER = "Mother"
    PATERNAL_GRANDFATHER = "Paternal Grandfather"
    PATERNAL_GRANDMOTHER = "Paternal Grandmother"
    MATERNAL_GRANDMOTHER = "Maternal Grandmother"
    FULL_BROTHER = "Full Brother"
    FULL_SISTER = "Full Sister"
    PATERNAL_BROTHER = "Paternal Brother"
    PATERNAL_SISTER = "Paternal Sister"
    MATERNAL_BROTHER = "Maternal Brother"
    MATERNAL_SISTER = "Maternal Sister"


# Canonical order = declaration order
CANONICAL_ORDER: Dict[HeirType, int] = {t: i for i, t in enumerate(HeirType)}

HEIR_LIMITS: Dict[HeirType, int] = {
    HeirType.HUSBAND: 1,
    HeirType.WIFE: 4,
    HeirType.FATHER: 1,
    HeirType.MOTHER: 1,
    HeirType.PATERNAL_GRANDFATHER: 1,
    HeirType.PATERNAL_GRANDMOTHER: 1,
    HeirType.MATERNAL_GRANDMOTHER: 1,
    HeirType.SON: 20,
    HeirType.DAUGHTER: 20,
    HeirType.FULL_BROTHER: 20,
    HeirType.FULL_SISTER: 20,
    HeirType.PATERNAL_BROTHER: 20,
    HeirType.PATERNAL_SISTER: 20,
    HeirType.MATERNAL_BROTHER: 20,
    HeirType.MATERNAL_SISTER: 20,
}

LABELS: Dict[HeirType, Dict[str, str]] = {
    HeirType.HUSBAND: {"en": "Husband", "ar": "زوج"},
    HeirType.WIFE: {"en": "Wife", "ar": "زوجة"},
    HeirType.SON: {"en": "Son", "ar": "ابن"},
    HeirType.DAUGHTER: {"en": "Daughter", "ar": "بنت"},
    HeirType.FATHER: {"en": "Father", "ar": "أب"},
    HeirType.MOTHER: {"en": "Mother", "ar": "أم"},
    HeirType.PATERNAL_GRANDFATHER: {"en": "Paternal Grandfather", "ar": "جد لأب"},
    HeirType.PATERNAL_GRANDMOTHER: {"en": "Paternal Grandmother", "ar": "جدة لأب"},
    HeirType.MATERNAL_GRANDMOTHER: {"en": "Maternal Grandmother", "ar": "جدة لأم"},
    HeirType.FULL_BROTHER: {"en": "Full Brother", "ar": "أخ شقيق"},
    HeirType.FULL_SISTER: {"en": "Full Sister", "ar": "أخت شقيقة"},
    HeirType.PATERNAL_BROTHER: {"en": "Paternal Brother", "ar": "أخ لأب"},
    HeirType.PATERNAL_SISTER: {"en": "Paternal Sister", "ar": "أخت لأب"},
    HeirType.MATERNAL_BROTHER: {"en": "Maternal Brother", "ar": "أخ لأم"},
    HeirType.MATERNAL_SISTER: {"en": "Maternal Sister", "ar": "أخت لأم"},
}

MALES = frozenset({
    HeirType.HUSBAND,
    HeirType.SON,
    HeirType.FATHER,
    HeirType.PATERNAL_GRANDFATHER,
    HeirType.FULL_BROTHER,
    HeirType.PATERNAL_BROTHER,
    HeirType.MATERNAL_BROTHER,
})

SPOUSES = frozenset({HeirType.HUSBAND, HeirType.WIFE})
DESCENDANTS = frozenset({HeirType.SON, HeirType.DAUGHTER})
GRANDMOTHERS = frozenset({HeirType.PATERNAL_GRANDMOTHER, HeirType.MATERNAL_GRANDMOTHER})
MATERNAL_SIBLINGS = frozenset({HeirType.MATERNAL_BROTHER, HeirType.MATERNAL_SISTER})
FULL_SIBLINGS = frozenset({HeirType.FULL_BROTHER, HeirType.FULL_SISTER})
PATERNAL_SIBLINGS = frozenset({HeirType.PATERNAL_BROTHER, HeirType.PATERNAL_SISTER})
AGNATE_SIBLINGS = FULL_SIBLINGS | PATERNAL_SIBLINGS
SIBLINGS = AGNATE_SIBLINGS | MATERNAL_SIBLINGS

# Male -> female counterpart (used for khuntsa)
GENDER_PAIRS: Dict[HeirType, HeirType] = {
    HeirType.SON: HeirType.DAUGHTER,
    HeirType.FULL_BROTHER: HeirType.FULL_SISTER,
    HeirType.PATERNAL_BROTHER: HeirType.PATERNAL_SISTER,
    HeirType.MATERNAL_BROTHER: HeirType.MATERNAL_SISTER,
}


def is_male(heir_type: HeirType) -> bool:
    return heir_type in MALES


def label(heir_type: HeirType, language: str = "en") -> str:
    return LABELS[heir_type].get(language, LABELS[heir_type]["en"])


def gender_counterparts(heir_type: HeirType) -> tuple:
    """Return (male_type, female_type) for a heir type that belongs to a gender pair."""
    for male, female in GENDER_PAIRS.items():
        if heir_type in (male, female):
            return male, female
    raise KeyError(heir_type)


def sort_key(heir_type: HeirType) -> int:
    return CANONICAL_ORDER[heir_type]


def catalog() -> List[Dict[str, object]]:
    """Heir rows for the database catalogue (see populate_db.py)."""
    return [
        {
            "code": t.value,
            "name_en": LABELS[t]["en"],
            "name_ar": LABELS[t]["ar"],
            "max_count": HEIR_LIMITS[t],
        }
        for t in HeirType
    ]
