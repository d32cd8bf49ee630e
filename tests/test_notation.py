import pytest

from dentchart.core.notation import (
    convert,
    describe,
    fdi_to_universal,
    palmer_with_quadrant,
    to_fdi,
    to_palmer,
    tooth_name,
)
from dentchart.core.schemas.dental import ADULT_TEETH, CHILD_TEETH, NumberingSystem


@pytest.mark.parametrize("system", list(NumberingSystem))
def test_convert_is_total_for_adult_and_child(system: NumberingSystem) -> None:
    for tooth in ADULT_TEETH:
        assert convert(tooth, system, False)
    for tooth in CHILD_TEETH:
        assert convert(tooth, system, True)


def test_universal_is_identity() -> None:
    for tooth in ADULT_TEETH + CHILD_TEETH:
        assert convert(tooth, "universal", tooth > 32) == str(tooth)


@pytest.mark.parametrize(
    "tooth,expected",
    [(1, "18"), (8, "11"), (9, "21"), (16, "28"), (17, "38"), (24, "31"), (25, "41"), (32, "48")],
)
def test_adult_fdi_codes(tooth: int, expected: str) -> None:
    assert to_fdi(tooth) == expected


@pytest.mark.parametrize("tooth,expected", [(1, "8"), (8, "1"), (9, "1"), (16, "8"), (17, "8"), (25, "1")])
def test_adult_palmer_symbols(tooth: int, expected: str) -> None:
    assert to_palmer(tooth) == expected


def test_child_codes() -> None:
    assert convert(71, NumberingSystem.FDI, True) == "71"
    assert convert(71, NumberingSystem.PALMER, True) == "A"
    assert convert(55, NumberingSystem.PALMER, True) == "E"


def test_unknown_tooth_falls_back_to_numeral() -> None:
    assert convert(99, "fdi") == "99"
    assert convert(99, "palmer") == "99"
    assert tooth_name(99) == "Tooth 99"


def test_unknown_system_raises() -> None:
    with pytest.raises(ValueError):
        convert(8, "iso-3950")


def test_palmer_with_quadrant() -> None:
    assert palmer_with_quadrant(8) == "UR1"
    assert palmer_with_quadrant(24) == "LL1"
    assert palmer_with_quadrant(75, is_child=True) == "LLE"


def test_fdi_to_universal() -> None:
    assert fdi_to_universal("11") == 8
    assert fdi_to_universal(48) == 32
    assert fdi_to_universal("71", is_child=True) == 71
    assert fdi_to_universal("99") is None


def test_describe_tooth_8() -> None:
    result = describe(8, "fdi")
    assert result.display == "11"
    assert result.jaw == "upper"
    assert result.side == "right"
    assert result.name == "Upper Right Central Incisor"
