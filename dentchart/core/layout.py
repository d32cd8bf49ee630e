from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from dentchart.core.schemas.dental import ToothSurface


class Jaw(str, Enum):
    UPPER = "upper"
    LOWER = "lower"


class Side(str, Enum):
    RIGHT = "right"
    LEFT = "left"


class Quadrant(int, Enum):
    """FDI quadrant digits for the permanent dentition."""
    UPPER_RIGHT = 1
    UPPER_LEFT = 2
    LOWER_LEFT = 3
    LOWER_RIGHT = 4

    @property
    def abbreviation(self) -> str:
        return _QUADRANT_ABBREVIATIONS[self]


_QUADRANT_ABBREVIATIONS = {
    Quadrant.UPPER_RIGHT: "UR",
    Quadrant.UPPER_LEFT: "UL",
    Quadrant.LOWER_LEFT: "LL",
    Quadrant.LOWER_RIGHT: "LR",
}


def is_upper_tooth(tooth_number: int, is_child: bool = False) -> bool:
    if is_child:
        return 51 <= tooth_number <= 65
    return 1 <= tooth_number <= 16


def is_right_side(tooth_number: int, is_child: bool = False) -> bool:
    """Patient's right, which is drawn on the viewer's left."""
    if is_child:
        return 51 <= tooth_number <= 55 or 81 <= tooth_number <= 85
    return 1 <= tooth_number <= 8 or 25 <= tooth_number <= 32


def jaw_of(tooth_number: int, is_child: bool = False) -> Jaw:
    return Jaw.UPPER if is_upper_tooth(tooth_number, is_child) else Jaw.LOWER


def side_of(tooth_number: int, is_child: bool = False) -> Side:
    return Side.RIGHT if is_right_side(tooth_number, is_child) else Side.LEFT


def quadrant_of(tooth_number: int, is_child: bool = False) -> Quadrant:
    upper = is_upper_tooth(tooth_number, is_child)
    right = is_right_side(tooth_number, is_child)
    if upper:
        return Quadrant.UPPER_RIGHT if right else Quadrant.UPPER_LEFT
    return Quadrant.LOWER_RIGHT if right else Quadrant.LOWER_LEFT


def is_anterior(tooth_number: int, is_child: bool = False) -> bool:
    """Incisors and canines."""
    if is_child:
        return tooth_number % 10 in (1, 2, 3)
    return 6 <= tooth_number <= 11 or 22 <= tooth_number <= 27


@dataclass(frozen=True)
class ChartLayout:
    """Tooth order per quadrant, as drawn from the viewer's left to right."""
    upper_right: tuple[int, ...]
    upper_left: tuple[int, ...]
    lower_right: tuple[int, ...]
    lower_left: tuple[int, ...]

    def rows(self) -> Iterator[tuple[Jaw, tuple[int, ...], tuple[int, ...]]]:
        yield Jaw.UPPER, self.upper_right, self.upper_left
        yield Jaw.LOWER, self.lower_right, self.lower_left

    def teeth(self) -> tuple[int, ...]:
        return self.upper_right + self.upper_left + self.lower_right + self.lower_left


ADULT_LAYOUT = ChartLayout(
    upper_right=(1, 2, 3, 4, 5, 6, 7, 8),
    upper_left=(9, 10, 11, 12, 13, 14, 15, 16),
    lower_right=(32, 31, 30, 29, 28, 27, 26, 25),
    lower_left=(24, 23, 22, 21, 20, 19, 18, 17),
)

CHILD_LAYOUT = ChartLayout(
    upper_right=(55, 54, 53, 52, 51),
    upper_left=(61, 62, 63, 64, 65),
    lower_right=(85, 84, 83, 82, 81),
    lower_left=(71, 72, 73, 74, 75),
)


def layout_for(is_child: bool) -> ChartLayout:
    return CHILD_LAYOUT if is_child else ADULT_LAYOUT


@dataclass(frozen=True)
class SurfaceRegion:
    surface: ToothSurface
    left: float
    top: float
    right: float
    bottom: float

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


THIRD = 1 / 3
QUARTER = 0.25


def surface_regions(tooth_number: int, is_child: bool = False) -> tuple[SurfaceRegion, ...]:
    """Editable hot-zones of one glyph in paint order (later regions sit on top).

    The bite strip faces the bite plane: bottom of the glyph on the upper
    jaw, top on the lower jaw. It always reports ``occlusal``, also on
    incisors and canines. Mesial always faces the midline.
    """
    upper = is_upper_tooth(tooth_number, is_child)
    right = is_right_side(tooth_number, is_child)

    top_strip = (QUARTER, 0.0, 1 - QUARTER, THIRD)
    bottom_strip = (QUARTER, 1 - THIRD, 1 - QUARTER, 1.0)
    left_band = (0.0, QUARTER, THIRD, 1 - QUARTER)
    right_band = (1 - THIRD, QUARTER, 1.0, 1 - QUARTER)

    bite = bottom_strip if upper else top_strip
    lingual = top_strip if upper else bottom_strip
    mesial = right_band if right else left_band
    distal = left_band if right else right_band

    return (
        SurfaceRegion(ToothSurface.OCCLUSAL, *bite),
        SurfaceRegion(ToothSurface.MESIAL, *mesial),
        SurfaceRegion(ToothSurface.DISTAL, *distal),
        SurfaceRegion(ToothSurface.BUCCAL, THIRD, THIRD, 1 - THIRD, 1 - THIRD),
        SurfaceRegion(ToothSurface.LINGUAL, *lingual),
    )


def surface_at(tooth_number: int, is_child: bool, x: float, y: float) -> Optional[ToothSurface]:
    for region in reversed(surface_regions(tooth_number, is_child)):
        if region.contains(x, y):
            return region.surface
    return None


_SURFACE_LABELS = {
    ToothSurface.OCCLUSAL: "Occlusal surface",
    ToothSurface.INCISAL: "Incisal surface",
    ToothSurface.MESIAL: "Mesial surface (toward midline)",
    ToothSurface.DISTAL: "Distal surface (away from midline)",
    ToothSurface.BUCCAL: "Buccal surface",
    ToothSurface.LINGUAL: "Lingual surface",
}


def surface_label(surface: ToothSurface, tooth_number: int, is_child: bool = False) -> str:
    if surface is ToothSurface.LINGUAL and is_upper_tooth(tooth_number, is_child):
        return "Lingual surface (palatal)"
    if surface is ToothSurface.OCCLUSAL and is_anterior(tooth_number, is_child):
        return "Incisal edge (occlusal)"
    return _SURFACE_LABELS[surface]


__all__ = [
    "Jaw",
    "Side",
    "Quadrant",
    "is_upper_tooth",
    "is_right_side",
    "jaw_of",
    "side_of",
    "quadrant_of",
    "is_anterior",
    "ChartLayout",
    "ADULT_LAYOUT",
    "CHILD_LAYOUT",
    "layout_for",
    "SurfaceRegion",
    "surface_regions",
    "surface_at",
    "surface_label",
]
