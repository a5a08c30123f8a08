# schemas.py

from decimal import Decimal
from pydantic import BaseModel, ConfigDict
from typing import List, Optional, Dict

from faraid.rules.heirs import HeirType

# --- Heir catalogue (database) ---
class HeirBase(BaseModel):
    code: str      # HeirType value, e.g. "Full Brother"
    name_en: str
    name_ar: str
    max_count: int

class HeirCreate(HeirBase):
    pass

class Heir(HeirBase):
    id: int
    model_config = ConfigDict(from_attributes=True)

# --- Calculation input ---
class HeirInput(BaseModel):
    type: HeirType
    count: int = 1

class CalculationInput(BaseModel):
    estate_value: Decimal                # net estate to divide
    heirs: List[HeirInput]
    currency: Optional[str] = None       # echoed back, the engine ignores it
    language: Optional[str] = None       # "en" | "ar"

# --- Denominator comparison (ashl al-mas'ala) ---
class ComparisonItem(BaseModel):
    a: int
    b: int
    relation: str            # Mumatsalah, Mudakholah, Muwafaqoh, Mubayanah
    lcm: Optional[int] = None

# --- One row of the result table ---
class HeirShare(BaseModel):
    heir_type: HeirType
    label: str                   # localized heir name
    count: int
    basis: str                   # Fixed, AwlAdjusted, Radd, Residuary, Excluded
    share_fraction: str          # group fraction, e.g. "2/3"
    per_heir_fraction: str
    share_percentage: Decimal    # display only
    share_amount: Decimal        # group total
    amount_each: Decimal
    saham: int                   # shares over ashlul_masalah_akhir
    reason: str                  # stable reason key
    description: str             # localized reason

# --- Main calculation output ---
class CalculationResult(BaseModel):
    total_estate: Decimal
    remaining_estate: Decimal
    currency: str
    language: str
    status: str                  # Adil, Awl, Radd, Residuary
    special_case: Optional[str] = None
    ashlul_masalah_awal: int     # base before 'awl/radd
    ashlul_masalah_akhir: int    # base after correction (tashih)
    comparisons: List[ComparisonItem] = []
    unallocated_fraction: str = "0"
    stages: List[str]
    notes: List[str]
    explanation: str
    shares: List[HeirShare]

# --- Rules reference table ---
class RuleReference(BaseModel):
    heir: str
    condition: str
    share: str

# --- Mauquf (haml, mafqud, khuntsa) ---
class HamlInput(BaseModel):
    estate_value: Decimal
    heirs: List[HeirInput]
    currency: Optional[str] = None
    language: Optional[str] = None

class MafqudInput(BaseModel):
    estate_value: Decimal
    heirs: List[HeirInput]
    missing: HeirInput
    currency: Optional[str] = None
    language: Optional[str] = None

class KhuntsaInput(BaseModel):
    estate_value: Decimal
    heirs: List[HeirInput]
    khuntsa: HeirInput           # any member of a male/female pair
    currency: Optional[str] = None
    language: Optional[str] = None

class CertainShare(BaseModel):
    heir_type: HeirType
    label: str
    count: int
    share_fraction: str
    share_amount: Decimal
    reason: str

class MauqufResult(BaseModel):
    total_estate: Decimal
    certain_shares: List[CertainShare]
    reserved_estate: Decimal
    reserved_fraction: str
    scenarios: Dict[str, CalculationResult]

# --- Gharqa (simultaneous deaths) ---
class GharqaProblem(BaseModel):
    problem_name: str
    heirs: List[HeirInput]
    estate_value: Decimal
    currency: Optional[str] = None
    language: Optional[str] = None

class GharqaInput(BaseModel):
    problems: List[GharqaProblem]

class GharqaResult(BaseModel):
    problem_name: str
    result: CalculationResult
