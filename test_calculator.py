"""
Test suite for the faraid calculation
Covers: Furudh, Hajb, Asabah, special cases, 'Awl, Radd, money, invariants
"""

import logging
from decimal import Decimal
from fractions import Fraction

import pytest
import calculator
from calculator import calculate_inheritance
from schemas import CalculationInput, HeirInput
from faraid.errors import ArithmeticInvariantViolation, InvalidInput, NoEligibleHeirs
from faraid.math.money import round_minor, share_amount
from faraid.rules.asabah import distribute_residue
from faraid.rules.hajb import resolve_exclusions
from faraid.rules.heirs import HeirType as H
from faraid.rules.types import ResiduaryClaim


# ========== HELPERS ==========
def heir(heir_type, count=1):
    return HeirInput(type=heir_type, count=count)


def find_share(result, heir_type, basis=None):
    return next(
        (s for s in result.shares if s.heir_type == heir_type and (basis is None or s.basis == basis)),
        None,
    )


def run_test(heirs_input, estate=1000, language=None, expected_am_awal=None, expected_am_akhir=None,
             expected_saham=None, expected_fractions=None, expected_status=None,
             expected_amounts=None, expected_special=None):
    """Run a calculation and check the requested parts of the result."""
    input_data = CalculationInput(estate_value=Decimal(estate), heirs=heirs_input, language=language)
    result = calculate_inheritance(input_data)

    if expected_am_awal is not None:
        assert result.ashlul_masalah_awal == expected_am_awal, \
            f"Wrong initial base. Expected {expected_am_awal}, got {result.ashlul_masalah_awal}"

    if expected_am_akhir is not None:
        assert result.ashlul_masalah_akhir == expected_am_akhir, \
            f"Wrong final base. Expected {expected_am_akhir}, got {result.ashlul_masalah_akhir}"

    if expected_saham:
        for heir_type, sahm in expected_saham.items():
            share_obj = find_share(result, heir_type)
            assert share_obj is not None, f"Heir '{heir_type.value}' not found"
            assert share_obj.saham == sahm, \
                f"Wrong saham for '{heir_type.value}'. Expected {sahm}, got {share_obj.saham}"

    if expected_fractions:
        for heir_type, fraction in expected_fractions.items():
            share_obj = find_share(result, heir_type)
            assert share_obj is not None, f"Heir '{heir_type.value}' not found"
            assert share_obj.share_fraction == fraction, \
                f"Wrong share for '{heir_type.value}'. Expected {fraction}, got {share_obj.share_fraction}"

    if expected_amounts:
        for heir_type, amount in expected_amounts.items():
            share_obj = find_share(result, heir_type)
            assert share_obj.share_amount == Decimal(amount), \
                f"Wrong amount for '{heir_type.value}'. Expected {amount}, got {share_obj.share_amount}"

    if expected_status:
        assert result.status == expected_status, \
            f"Wrong status. Expected '{expected_status}', got '{result.status}'"

    if expected_special is not None:
        assert result.special_case == expected_special

    return result


# ========== FURUDH ==========
class TestFurudh:
    """Fixed shares."""

    def test_husband_without_descendants(self):
        run_test(
            heirs_input=[heir(H.HUSBAND), heir(H.FULL_BROTHER)],
            expected_am_awal=2,
            expected_fractions={H.HUSBAND: "1/2", H.FULL_BROTHER: "1/2"},
        )

    def test_husband_with_descendants(self):
        run_test(
            heirs_input=[heir(H.HUSBAND), heir(H.SON)],
            expected_fractions={H.HUSBAND: "1/4", H.SON: "3/4"},
        )

    def test_wife_without_descendants(self):
        run_test(
            heirs_input=[heir(H.WIFE), heir(H.FULL_BROTHER)],
            expected_fractions={H.WIFE: "1/4", H.FULL_BROTHER: "3/4"},
        )

    def test_wives_share_pooled_eighth(self):
        result = run_test(
            heirs_input=[heir(H.WIFE, 2), heir(H.SON)],
            expected_fractions={H.WIFE: "1/8", H.SON: "7/8"},
        )
        assert find_share(result, H.WIFE).per_heir_fraction == "1/16"

    def test_father_with_son(self):
        # Father + Son: father 1/6, son the residue
        run_test(
            heirs_input=[heir(H.FATHER), heir(H.SON)],
            expected_am_awal=6,
            expected_fractions={H.FATHER: "1/6"},
            expected_saham={H.FATHER: 1, H.SON: 5},
        )

    def test_father_with_daughter_fixed_and_residuary(self):
        result = run_test(
            heirs_input=[heir(H.FATHER), heir(H.DAUGHTER)],
            expected_am_akhir=6,
            expected_fractions={H.DAUGHTER: "1/2"},
        )
        assert find_share(result, H.FATHER, "Fixed").share_fraction == "1/6"
        assert find_share(result, H.FATHER, "Residuary").share_fraction == "1/3"
        assert find_share(result, H.FATHER, "Residuary").reason == "father_with_daughter"

    def test_mother_third(self):
        run_test(
            heirs_input=[heir(H.MOTHER), heir(H.FULL_BROTHER)],
            expected_fractions={H.MOTHER: "1/3", H.FULL_BROTHER: "2/3"},
        )

    def test_mother_sixth_with_descendants(self):
        run_test(
            heirs_input=[heir(H.MOTHER), heir(H.SON)],
            expected_fractions={H.MOTHER: "1/6", H.SON: "5/6"},
        )

    def test_mother_sixth_with_two_siblings(self):
        run_test(
            heirs_input=[heir(H.MOTHER), heir(H.FULL_BROTHER, 2)],
            expected_am_akhir=12,
            expected_fractions={H.MOTHER: "1/6"},
            expected_saham={H.MOTHER: 2, H.FULL_BROTHER: 10},
        )

    def test_single_daughter_half(self):
        run_test(
            heirs_input=[heir(H.DAUGHTER), heir(H.FULL_BROTHER)],
            expected_fractions={H.DAUGHTER: "1/2", H.FULL_BROTHER: "1/2"},
        )

    def test_daughters_two_thirds_pooled(self):
        # 2 or 3 daughters still share 2/3 in total
        for count in (2, 3):
            result = run_test(
                heirs_input=[heir(H.DAUGHTER, count), heir(H.FULL_BROTHER)],
                expected_fractions={H.DAUGHTER: "2/3", H.FULL_BROTHER: "1/3"},
            )
            assert find_share(result, H.DAUGHTER).reason == "daughters_two_thirds"

    def test_grandmothers_share_sixth_by_head(self):
        run_test(
            heirs_input=[heir(H.PATERNAL_GRANDMOTHER), heir(H.MATERNAL_GRANDMOTHER), heir(H.SON)],
            expected_fractions={
                H.PATERNAL_GRANDMOTHER: "1/12",
                H.MATERNAL_GRANDMOTHER: "1/12",
                H.SON: "5/6",
            },
        )

    def test_single_maternal_sibling_sixth(self):
        run_test(
            heirs_input=[heir(H.MATERNAL_SISTER), heir(H.FULL_BROTHER)],
            expected_fractions={H.MATERNAL_SISTER: "1/6", H.FULL_BROTHER: "5/6"},
        )

    def test_maternal_siblings_third_equal_by_head(self):
        run_test(
            heirs_input=[heir(H.MATERNAL_BROTHER), heir(H.MATERNAL_SISTER), heir(H.FULL_BROTHER)],
            expected_fractions={
                H.MATERNAL_BROTHER: "1/6",
                H.MATERNAL_SISTER: "1/6",
                H.FULL_BROTHER: "2/3",
            },
        )

    def test_paternal_sister_takmila(self):
        # 1/2 + 1/6 + 1/6 = 5/6, no residuary -> radd in 3:1:1
        result = run_test(
            heirs_input=[heir(H.FULL_SISTER), heir(H.PATERNAL_SISTER), heir(H.MOTHER)],
            expected_fractions={
                H.FULL_SISTER: "3/5",
                H.PATERNAL_SISTER: "1/5",
                H.MOTHER: "1/5",
            },
            expected_status="Radd",
        )
        assert find_share(result, H.PATERNAL_SISTER).reason == "paternal_sister_takmila"


# ========== HAJB ==========
class TestHajb:
    """Exclusion rules."""

    def test_son_excludes_full_brother(self):
        result = run_test(
            heirs_input=[heir(H.SON), heir(H.FULL_BROTHER)],
            expected_fractions={H.SON: "1", H.FULL_BROTHER: "0"},
            expected_amounts={H.SON: "1000.00", H.FULL_BROTHER: "0.00"},
        )
        brother = find_share(result, H.FULL_BROTHER)
        assert brother.basis == "Excluded"
        assert brother.reason == "son_excludes_siblings"
        assert brother.saham == 0

    def test_father_excludes_grandfather(self):
        result = run_test(
            heirs_input=[heir(H.FATHER), heir(H.PATERNAL_GRANDFATHER)],
            expected_fractions={H.FATHER: "1", H.PATERNAL_GRANDFATHER: "0"},
        )
        assert find_share(result, H.PATERNAL_GRANDFATHER).reason == "father_excludes_grandfather"

    def test_mother_excludes_grandmothers(self):
        result = run_test(
            heirs_input=[heir(H.MOTHER), heir(H.PATERNAL_GRANDMOTHER), heir(H.MATERNAL_GRANDMOTHER), heir(H.SON)],
            expected_fractions={H.MOTHER: "1/6", H.SON: "5/6"},
        )
        for gm in (H.PATERNAL_GRANDMOTHER, H.MATERNAL_GRANDMOTHER):
            assert find_share(result, gm).reason == "mother_excludes_grandmothers"

    def test_father_excludes_paternal_grandmother_only(self):
        result = run_test(
            heirs_input=[heir(H.FATHER), heir(H.PATERNAL_GRANDMOTHER), heir(H.MATERNAL_GRANDMOTHER), heir(H.SON)],
            expected_fractions={H.FATHER: "1/6", H.MATERNAL_GRANDMOTHER: "1/6", H.SON: "2/3"},
        )
        assert find_share(result, H.PATERNAL_GRANDMOTHER).basis == "Excluded"

    def test_daughter_excludes_maternal_siblings(self):
        result = run_test(
            heirs_input=[heir(H.DAUGHTER), heir(H.MATERNAL_BROTHER), heir(H.FULL_BROTHER)],
            expected_fractions={H.DAUGHTER: "1/2", H.FULL_BROTHER: "1/2", H.MATERNAL_BROTHER: "0"},
        )
        assert find_share(result, H.MATERNAL_BROTHER).reason == \
            "descendant_or_grandfather_excludes_maternal_siblings"

    def test_full_brother_excludes_paternal_brother(self):
        result = run_test(
            heirs_input=[heir(H.FULL_BROTHER), heir(H.PATERNAL_BROTHER)],
            expected_fractions={H.FULL_BROTHER: "1", H.PATERNAL_BROTHER: "0"},
        )
        assert find_share(result, H.PATERNAL_BROTHER).reason == "full_brother_excludes_paternal_siblings"

    def test_full_sister_with_daughter_excludes_paternal_brother(self):
        result = run_test(
            heirs_input=[heir(H.DAUGHTER), heir(H.FULL_SISTER), heir(H.PATERNAL_BROTHER)],
            expected_fractions={H.DAUGHTER: "1/2", H.FULL_SISTER: "1/2", H.PATERNAL_BROTHER: "0"},
        )
        assert find_share(result, H.FULL_SISTER).reason == "residuary_with_daughters"

    def test_two_full_sisters_exclude_paternal_sister(self):
        result = run_test(
            heirs_input=[heir(H.FULL_SISTER, 2), heir(H.PATERNAL_SISTER), heir(H.MOTHER)],
            expected_fractions={H.FULL_SISTER: "4/5", H.MOTHER: "1/5", H.PATERNAL_SISTER: "0"},
        )
        assert find_share(result, H.PATERNAL_SISTER).reason == "full_sisters_exhaust_two_thirds"

    def test_paternal_brother_keeps_paternal_sister(self):
        run_test(
            heirs_input=[heir(H.FULL_SISTER, 2), heir(H.PATERNAL_SISTER), heir(H.PATERNAL_BROTHER)],
            expected_fractions={
                H.FULL_SISTER: "2/3",
                H.PATERNAL_BROTHER: "2/9",
                H.PATERNAL_SISTER: "1/9",
            },
        )

    def test_excluded_siblings_still_reduce_mother(self):
        run_test(
            heirs_input=[heir(H.MOTHER), heir(H.FATHER), heir(H.FULL_BROTHER, 2)],
            expected_fractions={H.MOTHER: "1/6", H.FATHER: "5/6", H.FULL_BROTHER: "0"},
        )

    def test_excluded_listed_last(self):
        result = run_test(heirs_input=[heir(H.FULL_BROTHER), heir(H.DAUGHTER), heir(H.FATHER)])
        assert [(s.heir_type, s.basis) for s in result.shares] == [
            (H.DAUGHTER, "Fixed"),
            (H.FATHER, "Fixed"),
            (H.FATHER, "Residuary"),
            (H.FULL_BROTHER, "Excluded"),
        ]

    def test_no_eligible_heirs(self):
        with pytest.raises(NoEligibleHeirs):
            resolve_exclusions({})


# ========== ASABAH ==========
class TestAsabah:
    """Residuary heirs."""

    def test_sons_and_daughter_two_to_one(self):
        run_test(
            heirs_input=[heir(H.SON, 2), heir(H.DAUGHTER)],
            expected_am_awal=1,
            expected_am_akhir=5,
            expected_fractions={H.SON: "4/5", H.DAUGHTER: "1/5"},
            expected_saham={H.SON: 4, H.DAUGHTER: 1},
            expected_status="Residuary",
        )

    def test_full_brother_and_sister(self):
        run_test(
            heirs_input=[heir(H.FULL_BROTHER), heir(H.FULL_SISTER)],
            expected_fractions={H.FULL_BROTHER: "2/3", H.FULL_SISTER: "1/3"},
        )

    def test_father_alone_takes_everything(self):
        run_test(
            heirs_input=[heir(H.FATHER)],
            expected_fractions={H.FATHER: "1"},
            expected_amounts={H.FATHER: "1000.00"},
            expected_status="Residuary",
        )

    def test_musharraka_full_brother_gets_nothing(self):
        # Husband 1/2 + Mother 1/6 + Maternal brothers 1/3 exhaust the estate
        result = run_test(
            heirs_input=[heir(H.HUSBAND), heir(H.MOTHER), heir(H.MATERNAL_BROTHER, 2), heir(H.FULL_BROTHER)],
            expected_am_akhir=6,
            expected_fractions={H.HUSBAND: "1/2", H.MOTHER: "1/6", H.MATERNAL_BROTHER: "1/3", H.FULL_BROTHER: "0"},
            expected_saham={H.HUSBAND: 3, H.MOTHER: 1, H.MATERNAL_BROTHER: 2, H.FULL_BROTHER: 0},
        )
        brother = find_share(result, H.FULL_BROTHER)
        assert brother.basis == "Residuary"
        assert brother.reason == "residue_exhausted"

    def test_nearest_group_takes_residue(self):
        claims = [
            ResiduaryClaim(H.FULL_BROTHER, 1, "residuary_agnate"),
            ResiduaryClaim(H.FATHER, 1, "residuary_agnate"),
        ]
        shares = distribute_residue(claims, Fraction(1, 2))
        assert [(s.heir_type, s.fraction, s.reason) for s in shares] == [
            (H.FATHER, Fraction(1, 2), "residuary_agnate"),
            (H.FULL_BROTHER, Fraction(0), "residue_taken_by_nearer"),
        ]


# ========== SPECIAL CASES ==========
class TestKasusIstimewa:
    """Umariyyah, grandfather with siblings, Akdariyyah."""

    def test_umariyyah_with_husband(self):
        result = run_test(
            heirs_input=[heir(H.HUSBAND), heir(H.FATHER), heir(H.MOTHER)],
            expected_fractions={H.HUSBAND: "1/2", H.MOTHER: "1/6", H.FATHER: "1/3"},
            expected_special="umariyyah",
        )
        assert find_share(result, H.MOTHER).reason == "mother_umariyyah"

    def test_umariyyah_with_wife(self):
        run_test(
            heirs_input=[heir(H.WIFE), heir(H.FATHER), heir(H.MOTHER)],
            expected_fractions={H.WIFE: "1/4", H.MOTHER: "1/4", H.FATHER: "1/2"},
            expected_special="umariyyah",
        )

    def test_umariyyah_with_excluded_brother(self):
        # a single brother is excluded by the father and does not reduce the mother
        result = run_test(
            heirs_input=[heir(H.HUSBAND), heir(H.FATHER), heir(H.MOTHER), heir(H.FULL_BROTHER)],
            estate=1200,
            language="ar",
            expected_fractions={H.HUSBAND: "1/2", H.MOTHER: "1/6", H.FATHER: "1/3", H.FULL_BROTHER: "0"},
            expected_amounts={H.HUSBAND: "600.00", H.MOTHER: "200.00", H.FATHER: "400.00"},
            expected_special="umariyyah",
        )
        mother = find_share(result, H.MOTHER)
        assert mother.reason == "mother_umariyyah"
        assert "1/6" in mother.description
        assert find_share(result, H.FULL_BROTHER).basis == "Excluded"

    def test_no_umariyyah_with_grandfather(self):
        run_test(
            heirs_input=[heir(H.HUSBAND), heir(H.PATERNAL_GRANDFATHER), heir(H.MOTHER)],
            expected_fractions={H.HUSBAND: "1/2", H.MOTHER: "1/3", H.PATERNAL_GRANDFATHER: "1/6"},
            expected_special=None,
        )

    def test_grandfather_with_sisters_and_furudh(self):
        result = run_test(
            heirs_input=[heir(H.HUSBAND), heir(H.MOTHER), heir(H.PATERNAL_GRANDFATHER), heir(H.FULL_SISTER, 2)],
            expected_am_awal=6,
            expected_am_akhir=12,
            expected_saham={H.HUSBAND: 6, H.MOTHER: 2, H.PATERNAL_GRANDFATHER: 2, H.FULL_SISTER: 2},
            expected_special="jadd_ikhwah",
        )
        # muqasamah ties with 1/6 and wins the tie
        assert find_share(result, H.PATERNAL_GRANDFATHER).reason == "grandfather_muqasamah"
        assert find_share(result, H.FULL_SISTER).per_heir_fraction == "1/12"

    def test_grandfather_muqasamah_without_furudh(self):
        run_test(
            heirs_input=[heir(H.PATERNAL_GRANDFATHER), heir(H.FULL_BROTHER), heir(H.FULL_SISTER)],
            expected_am_akhir=5,
            expected_fractions={H.PATERNAL_GRANDFATHER: "2/5", H.FULL_BROTHER: "2/5", H.FULL_SISTER: "1/5"},
            expected_saham={H.PATERNAL_GRANDFATHER: 2},
        )

    def test_grandfather_third_of_whole(self):
        result = run_test(
            heirs_input=[heir(H.PATERNAL_GRANDFATHER), heir(H.FULL_BROTHER, 3)],
            expected_am_akhir=9,
            expected_fractions={H.PATERNAL_GRANDFATHER: "1/3", H.FULL_BROTHER: "2/3"},
            expected_saham={H.PATERNAL_GRANDFATHER: 3, H.FULL_BROTHER: 6},
        )
        assert find_share(result, H.PATERNAL_GRANDFATHER).reason == "grandfather_third"

    def test_al_mu_adda(self):
        result = run_test(
            heirs_input=[
                heir(H.PATERNAL_GRANDMOTHER), heir(H.PATERNAL_GRANDFATHER), heir(H.FULL_SISTER),
                heir(H.PATERNAL_BROTHER), heir(H.PATERNAL_SISTER),
            ],
            expected_am_akhir=54,
            expected_saham={
                H.PATERNAL_GRANDMOTHER: 9,
                H.PATERNAL_GRANDFATHER: 15,
                H.FULL_SISTER: 27,
                H.PATERNAL_BROTHER: 2,
                H.PATERNAL_SISTER: 1,
            },
        )
        assert find_share(result, H.PATERNAL_BROTHER).reason == "muadda_paternal_remainder"

    def test_full_brother_takes_counted_paternal_portion(self):
        result = run_test(
            heirs_input=[heir(H.PATERNAL_GRANDFATHER), heir(H.FULL_BROTHER), heir(H.PATERNAL_BROTHER)],
            # muqasamah as one of three brothers ties with a third of the whole
            expected_fractions={H.PATERNAL_GRANDFATHER: "1/3", H.FULL_BROTHER: "2/3", H.PATERNAL_BROTHER: "0"},
        )
        assert find_share(result, H.PATERNAL_BROTHER).reason == "muadda_counted_only"

    def test_grandfather_minimum_sixth(self):
        # Daughters 2/3 + Mother 1/6 leave only 1/6
        result = run_test(
            heirs_input=[heir(H.DAUGHTER, 2), heir(H.MOTHER), heir(H.PATERNAL_GRANDFATHER), heir(H.FULL_SISTER)],
            expected_fractions={
                H.DAUGHTER: "2/3",
                H.MOTHER: "1/6",
                H.PATERNAL_GRANDFATHER: "1/6",
                H.FULL_SISTER: "0",
            },
        )
        gf = find_share(result, H.PATERNAL_GRANDFATHER)
        assert gf.basis == "Fixed"
        assert gf.reason == "grandfather_sixth_with_siblings"

    def test_akdariyyah(self):
        result = run_test(
            heirs_input=[heir(H.HUSBAND), heir(H.MOTHER), heir(H.PATERNAL_GRANDFATHER), heir(H.FULL_SISTER)],
            expected_am_awal=6,
            expected_am_akhir=27,
            expected_saham={H.HUSBAND: 9, H.MOTHER: 6, H.PATERNAL_GRANDFATHER: 8, H.FULL_SISTER: 4},
            expected_fractions={
                H.HUSBAND: "1/3",
                H.MOTHER: "2/9",
                H.PATERNAL_GRANDFATHER: "8/27",
                H.FULL_SISTER: "4/27",
            },
            expected_status="Awl",
            expected_special="akdariyyah",
        )
        assert find_share(result, H.FULL_SISTER).reason == "akdariyyah_muqasamah"


# ========== 'AWL ==========
class TestAwl:

    def test_husband_and_two_full_sisters(self):
        result = run_test(
            heirs_input=[heir(H.HUSBAND), heir(H.FULL_SISTER, 2)],
            expected_am_awal=6,
            expected_am_akhir=7,
            expected_fractions={H.HUSBAND: "3/7", H.FULL_SISTER: "4/7"},
            expected_saham={H.HUSBAND: 3, H.FULL_SISTER: 4},
            expected_amounts={H.HUSBAND: "428.57", H.FULL_SISTER: "571.43"},
            expected_status="Awl",
        )
        sisters = find_share(result, H.FULL_SISTER)
        assert sisters.basis == "AwlAdjusted"
        assert sisters.per_heir_fraction == "2/7"
        assert sisters.amount_each == Decimal("285.71")
        assert result.remaining_estate == Decimal("0.00")
        assert result.stages == [
            "Idle", "Validated", "ExclusionResolved", "FixedAllocated", "AwlAdjusted", "Finalized",
        ]

    def test_minbariyyah_24_to_27(self):
        result = run_test(
            heirs_input=[heir(H.WIFE), heir(H.DAUGHTER, 2), heir(H.FATHER), heir(H.MOTHER)],
            expected_am_awal=24,
            expected_am_akhir=27,
            expected_fractions={H.WIFE: "1/9", H.DAUGHTER: "16/27", H.MOTHER: "4/27"},
            expected_saham={H.WIFE: 3, H.DAUGHTER: 16, H.FATHER: 4, H.MOTHER: 4},
        )
        # the father's residuary row is emptied by 'awl
        father_residue = find_share(result, H.FATHER, "Residuary")
        assert father_residue.share_fraction == "0"
        assert father_residue.reason == "residue_exhausted"

    def test_awl_to_eight(self):
        run_test(
            heirs_input=[heir(H.HUSBAND), heir(H.FULL_SISTER, 2), heir(H.MOTHER)],
            expected_fractions={H.HUSBAND: "3/8", H.FULL_SISTER: "1/2", H.MOTHER: "1/8"},
            expected_am_akhir=8,
        )


# ========== RADD ==========
class TestRadd:

    def test_mother_alone(self):
        result = run_test(
            heirs_input=[heir(H.MOTHER)],
            expected_fractions={H.MOTHER: "1"},
            expected_amounts={H.MOTHER: "1000.00"},
            expected_status="Radd",
        )
        assert find_share(result, H.MOTHER).basis == "Radd"
        assert result.remaining_estate == Decimal("0.00")

    def test_wife_and_daughter(self):
        result = run_test(
            heirs_input=[heir(H.WIFE), heir(H.DAUGHTER)],
            expected_fractions={H.WIFE: "1/8", H.DAUGHTER: "7/8"},
            expected_amounts={H.WIFE: "125.00", H.DAUGHTER: "875.00"},
        )
        assert find_share(result, H.WIFE).basis == "Fixed"
        assert find_share(result, H.DAUGHTER).basis == "Radd"

    def test_spouse_only_leaves_unallocated(self):
        result = run_test(
            heirs_input=[heir(H.WIFE)],
            expected_fractions={H.WIFE: "1/4"},
            expected_amounts={H.WIFE: "250.00"},
            expected_status="Radd",
        )
        assert result.unallocated_fraction == "3/4"
        assert result.remaining_estate == Decimal("750.00")

    def test_radd_with_husband(self):
        run_test(
            heirs_input=[heir(H.HUSBAND), heir(H.DAUGHTER), heir(H.MOTHER)],
            expected_am_akhir=16,
            expected_fractions={H.HUSBAND: "1/4", H.DAUGHTER: "9/16", H.MOTHER: "3/16"},
            expected_saham={H.HUSBAND: 4, H.DAUGHTER: 9, H.MOTHER: 3},
        )

    def test_adil(self):
        result = run_test(
            heirs_input=[heir(H.HUSBAND), heir(H.FULL_SISTER)],
            expected_fractions={H.HUSBAND: "1/2", H.FULL_SISTER: "1/2"},
            expected_status="Adil",
        )
        assert result.stages == ["Idle", "Validated", "ExclusionResolved", "FixedAllocated", "Finalized"]


# ========== MONEY & INVARIANTS ==========
class TestMoney:

    def test_half_even_rounding(self):
        assert round_minor(Fraction(5, 1000)) == Decimal("0.00")
        assert round_minor(Fraction(15, 1000)) == Decimal("0.02")
        assert round_minor(Fraction(25, 1000)) == Decimal("0.02")

    def test_thirds_of_hundred(self):
        assert share_amount(Fraction(1, 3), Decimal("100")) == Decimal("33.33")

    @pytest.mark.parametrize("heirs_input", [
        [heir(H.SON, 3)],
        [heir(H.HUSBAND), heir(H.FULL_SISTER, 2)],
        [heir(H.WIFE, 3), heir(H.DAUGHTER, 7), heir(H.FULL_BROTHER, 3)],
        [heir(H.WIFE)],
        [heir(H.MOTHER), heir(H.MATERNAL_SISTER, 3)],
        [heir(H.PATERNAL_GRANDMOTHER), heir(H.PATERNAL_GRANDFATHER), heir(H.FULL_SISTER),
         heir(H.PATERNAL_BROTHER), heir(H.PATERNAL_SISTER)],
    ])
    def test_amounts_add_up(self, heirs_input):
        result = run_test(heirs_input=heirs_input, estate="1234.57")
        fractions = sum((Fraction(s.share_fraction) for s in result.shares), Fraction(0))
        assert fractions + Fraction(result.unallocated_fraction) == 1
        paid = sum((s.share_amount for s in result.shares), Decimal("0"))
        assert paid + result.remaining_estate == result.total_estate


# ========== VALIDATION ==========
class TestValidation:

    @pytest.mark.parametrize("estate", ["0", "-5"])
    def test_non_positive_estate(self, estate):
        with pytest.raises(InvalidInput) as exc_info:
            run_test(heirs_input=[heir(H.SON)], estate=estate)
        assert exc_info.value.stage == "Rejected"

    def test_empty_heirs(self):
        with pytest.raises(InvalidInput):
            run_test(heirs_input=[])

    def test_all_zero_counts(self):
        with pytest.raises(InvalidInput):
            run_test(heirs_input=[heir(H.SON, 0)])

    def test_zero_count_entries_ignored(self):
        result = run_test(heirs_input=[heir(H.SON, 0), heir(H.DAUGHTER)])
        assert find_share(result, H.SON) is None

    def test_duplicate_type(self):
        with pytest.raises(InvalidInput):
            run_test(heirs_input=[heir(H.SON), heir(H.SON)])

    def test_count_over_limit(self):
        with pytest.raises(InvalidInput):
            run_test(heirs_input=[heir(H.HUSBAND, 2)])
        with pytest.raises(InvalidInput):
            run_test(heirs_input=[heir(H.WIFE, 5)])

    def test_husband_and_wife(self):
        with pytest.raises(InvalidInput):
            run_test(heirs_input=[heir(H.HUSBAND), heir(H.WIFE)])

    def test_unknown_currency_and_language(self):
        with pytest.raises(InvalidInput):
            calculate_inheritance(CalculationInput(estate_value=Decimal(1), heirs=[heir(H.SON)], currency="XYZ"))
        with pytest.raises(InvalidInput):
            calculate_inheritance(CalculationInput(estate_value=Decimal(1), heirs=[heir(H.SON)], language="fr"))

    def test_invariant_violation_logged(self, monkeypatch, caplog):
        monkeypatch.setattr(calculator, "order_shares", lambda shares: ())
        with caplog.at_level(logging.ERROR, logger="calculator"):
            with pytest.raises(ArithmeticInvariantViolation) as exc_info:
                run_test(heirs_input=[heir(H.SON)])
        assert exc_info.value.code == "ARITHMETIC_INVARIANT_VIOLATION"
        assert any(r.levelno == logging.ERROR for r in caplog.records)


# ========== EXPLANATION ==========
class TestPenjelasan:

    def test_arabic_labels_and_notes(self):
        result = run_test(heirs_input=[heir(H.MOTHER), heir(H.SON), heir(H.FULL_BROTHER)], language="ar")
        assert result.language == "ar"
        assert find_share(result, H.MOTHER).label == "أم"
        assert "ابن" in find_share(result, H.FULL_BROTHER).description

    def test_currency_defaults_and_echo(self):
        result = run_test(heirs_input=[heir(H.SON)])
        assert result.currency == "USD"
        result = calculate_inheritance(CalculationInput(
            estate_value=Decimal(10), heirs=[heir(H.SON)], currency="egp",
        ))
        assert result.currency == "EGP"

    def test_awl_note_present(self):
        result = run_test(heirs_input=[heir(H.HUSBAND), heir(H.FULL_SISTER, 2)])
        assert any("'Awl" in n for n in result.notes)
        assert "Husband" in result.explanation
