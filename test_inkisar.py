# test_inkisar.py

from decimal import Decimal
from fractions import Fraction

import pytest
from calculator import calculate_inheritance
from schemas import CalculationInput, HeirInput
from faraid.math.ashl import compute_ashl, relation
from faraid.math.inkisar import compute_tashih
from faraid.rules.heirs import HeirType as H
from faraid.rules.types import Basis, Share


def run_inkisar_test(heirs_input, expected_am_akhir, expected_saham):
    """Helper for the tashih (base correction) cases."""
    input_data = CalculationInput(estate_value=Decimal(100), heirs=heirs_input)
    result = calculate_inheritance(input_data)

    assert result.ashlul_masalah_akhir == expected_am_akhir
    for heir_type, sahm in expected_saham.items():
        share_obj = next(s for s in result.shares if s.heir_type == heir_type)
        assert share_obj.saham == sahm
    return result

# Case 1: one group, Mubayanah
def test_inkisar_satu_kelompok_mubayanah():
    # Mother and 6 full brothers. Brothers' saham (5) over 6 heads.
    # gcd(5,6)=1, multiplier 6, new base 6x6=36.
    run_inkisar_test(
        heirs_input=[HeirInput(type=H.MOTHER), HeirInput(type=H.FULL_BROTHER, count=6)],
        expected_am_akhir=36,
        expected_saham={H.MOTHER: 6, H.FULL_BROTHER: 30}
    )

# Case 2: one group, Mudakholah
def test_inkisar_satu_kelompok_mudakholah():
    # Wife and 6 full brothers. Brothers' saham (3) divides 6 heads.
    # Multiplier 6/3=2, new base 4x2=8.
    run_inkisar_test(
        heirs_input=[HeirInput(type=H.WIFE), HeirInput(type=H.FULL_BROTHER, count=6)],
        expected_am_akhir=8,
        expected_saham={H.WIFE: 2, H.FULL_BROTHER: 6}
    )

# Case 3: one group, Muwafaqoh
def test_inkisar_satu_kelompok_muwafaqoh():
    # Mother, Father, 6 daughters. Base 6, daughters' saham 4 over 6 heads.
    # gcd(4,6)=2, multiplier 6/2=3, new base 18.
    run_inkisar_test(
        heirs_input=[
            HeirInput(type=H.MOTHER), HeirInput(type=H.FATHER), HeirInput(type=H.DAUGHTER, count=6)
        ],
        expected_am_akhir=18,
        expected_saham={H.MOTHER: 3, H.FATHER: 3, H.DAUGHTER: 12}
    )

# Case 4: several groups
def test_inkisar_multi_kelompok():
    # 4 wives, 6 daughters, 3 full brothers. Base 24.
    # Wives: s3, h4 -> Mubayanah, x4.
    # Daughters: s16, h6 -> Muwafaqoh, x3.
    # Brothers: s5, h3 -> Mubayanah, x3.
    # lcm(4, 3, 3) = 12. New base 24x12 = 288.
    result = run_inkisar_test(
        heirs_input=[
            HeirInput(type=H.WIFE, count=4), HeirInput(type=H.DAUGHTER, count=6),
            HeirInput(type=H.FULL_BROTHER, count=3)
        ],
        expected_am_akhir=288,
        expected_saham={H.WIFE: 36, H.DAUGHTER: 192, H.FULL_BROTHER: 60}
    )
    assert any(n.startswith("Tashih: base 24 x 12 = 288") for n in result.notes)


@pytest.mark.parametrize("a, b, expected", [
    (6, 6, "Mumatsalah"),
    (3, 6, "Mudakholah"),
    (4, 6, "Muwafaqoh"),
    (3, 8, "Mubayanah"),
])
def test_relation(a, b, expected):
    assert relation(a, b) == expected


def test_compute_ashl():
    base, comparisons = compute_ashl([Fraction(1, 4), Fraction(1, 6), Fraction(2, 3)])
    assert base == 12
    assert [(c.a, c.b, c.relation) for c in comparisons] == [
        (3, 4, "Mubayanah"),
        (3, 6, "Mudakholah"),
        (4, 6, "Muwafaqoh"),
    ]


def test_compute_ashl_without_fixed_shares():
    assert compute_ashl([]) == (1, [])


def test_tashih_without_correction():
    shares = [
        Share(H.HUSBAND, 1, Fraction(1, 2), Basis.FIXED, "husband_without_descendants"),
        Share(H.FULL_BROTHER, 1, Fraction(1, 2), Basis.RESIDUARY, "residuary_agnate"),
    ]
    tashih = compute_tashih(shares)
    assert tashih.base == 2
    assert tashih.multiplier == 1
    assert tashih.saham == (1, 1)
    assert tashih.notes == ()
