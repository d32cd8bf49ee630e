from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from dentchart.core.layout import jaw_of, quadrant_of, side_of
from dentchart.core.schemas.dental import CHILD_TEETH, NumberingSystem
from dentchart.core.schemas.result import NotationResult


def _quadrant_run(teeth: range | tuple[int, ...], symbols: str) -> dict[int, str]:
    return dict(zip(teeth, symbols))


# Palmer symbols are quadrant-relative; they are not unique without a quadrant.
PALMER_ADULT: Mapping[int, str] = MappingProxyType(
    {
        **_quadrant_run(range(1, 9), "87654321"),     # upper right
        **_quadrant_run(range(9, 17), "12345678"),    # upper left
        **_quadrant_run(range(17, 25), "87654321"),   # lower left
        **_quadrant_run(range(25, 33), "12345678"),   # lower right
    }
)

PALMER_CHILD: Mapping[int, str] = MappingProxyType(
    {
        **_quadrant_run(range(51, 56), "ABCDE"),
        **_quadrant_run(range(61, 66), "ABCDE"),
        **_quadrant_run(range(71, 76), "ABCDE"),
        **_quadrant_run(range(81, 86), "ABCDE"),
    }
)

FDI_ADULT: Mapping[int, str] = MappingProxyType(
    {
        **{n: str(19 - n) for n in range(1, 9)},      # 18..11
        **{n: str(12 + n) for n in range(9, 17)},     # 21..28
        **{n: str(55 - n) for n in range(17, 25)},    # 38..31
        **{n: str(16 + n) for n in range(25, 33)},    # 41..48
    }
)

_UNIVERSAL_FROM_FDI: Mapping[str, int] = MappingProxyType(
    {code: number for number, code in FDI_ADULT.items()}
)

TOOTH_NAMES: Mapping[int, str] = MappingProxyType(
    {
        1: "Upper Right 3rd Molar", 2: "Upper Right 2nd Molar", 3: "Upper Right 1st Molar",
        4: "Upper Right 2nd Premolar", 5: "Upper Right 1st Premolar", 6: "Upper Right Canine",
        7: "Upper Right Lateral Incisor", 8: "Upper Right Central Incisor",
        9: "Upper Left Central Incisor", 10: "Upper Left Lateral Incisor", 11: "Upper Left Canine",
        12: "Upper Left 1st Premolar", 13: "Upper Left 2nd Premolar", 14: "Upper Left 1st Molar",
        15: "Upper Left 2nd Molar", 16: "Upper Left 3rd Molar",
        17: "Lower Left 3rd Molar", 18: "Lower Left 2nd Molar", 19: "Lower Left 1st Molar",
        20: "Lower Left 2nd Premolar", 21: "Lower Left 1st Premolar", 22: "Lower Left Canine",
        23: "Lower Left Lateral Incisor", 24: "Lower Left Central Incisor",
        25: "Lower Right Central Incisor", 26: "Lower Right Lateral Incisor", 27: "Lower Right Canine",
        28: "Lower Right 1st Premolar", 29: "Lower Right 2nd Premolar", 30: "Lower Right 1st Molar",
        31: "Lower Right 2nd Molar", 32: "Lower Right 3rd Molar",
        55: "Upper Right 2nd Molar", 54: "Upper Right 1st Molar", 53: "Upper Right Canine",
        52: "Upper Right Lateral Incisor", 51: "Upper Right Central Incisor",
        61: "Upper Left Central Incisor", 62: "Upper Left Lateral Incisor", 63: "Upper Left Canine",
        64: "Upper Left 1st Molar", 65: "Upper Left 2nd Molar",
        75: "Lower Left 2nd Molar", 74: "Lower Left 1st Molar", 73: "Lower Left Canine",
        72: "Lower Left Lateral Incisor", 71: "Lower Left Central Incisor",
        81: "Lower Right Central Incisor", 82: "Lower Right Lateral Incisor", 83: "Lower Right Canine",
        84: "Lower Right 1st Molar", 85: "Lower Right 2nd Molar",
    }
)


def to_palmer(tooth_number: int, is_child: bool = False) -> str:
    table = PALMER_CHILD if is_child else PALMER_ADULT
    return table.get(tooth_number, str(tooth_number))


def to_fdi(tooth_number: int, is_child: bool = False) -> str:
    if is_child:
        # primary teeth are already stored in FDI form
        return str(tooth_number)
    return FDI_ADULT.get(tooth_number, str(tooth_number))


def convert(
    tooth_number: int,
    system: NumberingSystem | str = NumberingSystem.UNIVERSAL,
    is_child: bool = False,
) -> str:
    """Display label for a canonical tooth number.

    Never fails on the tooth number: anything outside the lookup tables is
    shown as its own numeral. An unknown ``system`` raises ``ValueError``.
    """
    system = NumberingSystem(system)
    if system is NumberingSystem.PALMER:
        return to_palmer(tooth_number, is_child)
    if system is NumberingSystem.FDI:
        return to_fdi(tooth_number, is_child)
    return str(tooth_number)


def palmer_with_quadrant(tooth_number: int, is_child: bool = False) -> str:
    """Globally unique Palmer label, e.g. ``UR1`` for tooth 8."""
    quadrant = quadrant_of(tooth_number, is_child)
    return f"{quadrant.abbreviation}{to_palmer(tooth_number, is_child)}"


def fdi_to_universal(code: int | str, is_child: bool = False) -> Optional[int]:
    text = str(code).strip()
    if is_child:
        return int(text) if text.isdigit() and int(text) in CHILD_TEETH else None
    return _UNIVERSAL_FROM_FDI.get(text)


def tooth_name(tooth_number: int) -> str:
    return TOOTH_NAMES.get(tooth_number, f"Tooth {tooth_number}")


def describe(
    tooth_number: int,
    system: NumberingSystem | str = NumberingSystem.UNIVERSAL,
    is_child: bool = False,
) -> NotationResult:
    return NotationResult(
        tooth_number=tooth_number,
        system=NumberingSystem(system),
        is_child=is_child,
        display=convert(tooth_number, system, is_child),
        palmer_quadrant=palmer_with_quadrant(tooth_number, is_child),
        name=tooth_name(tooth_number),
        jaw=jaw_of(tooth_number, is_child).value,
        side=side_of(tooth_number, is_child).value,
    )


__all__ = [
    "PALMER_ADULT",
    "PALMER_CHILD",
    "FDI_ADULT",
    "TOOTH_NAMES",
    "to_palmer",
    "to_fdi",
    "convert",
    "palmer_with_quadrant",
    "fdi_to_universal",
    "tooth_name",
    "describe",
]
