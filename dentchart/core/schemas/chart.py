from __future__ import annotations

from typing import Iterator, List, Optional

from pydantic import BaseModel, Field

from dentchart.core.schemas.dental import (
    DentalConditionType,
    NumberingSystem,
    PatientType,
    ToothSurface,
)


class SurfaceZone(BaseModel):
    """Clickable region of a glyph, as fractions of the glyph box."""
    surface: ToothSurface
    label: str
    left: float
    top: float
    right: float
    bottom: float
    condition: DentalConditionType = DentalConditionType.HEALTHY
    overlay_color: Optional[str] = None  # None when the surface is healthy


class SurfaceMarker(BaseModel):
    surface: ToothSurface
    condition: DentalConditionType
    color: str


class ToothTooltip(BaseModel):
    title: str
    overall: str
    surfaces: Optional[str] = None
    mobility: Optional[str] = None
    hint: Optional[str] = None

    def lines(self) -> list[str]:
        return [line for line in (self.title, self.overall, self.surfaces, self.mobility, self.hint) if line]


class ToothGlyph(BaseModel):
    tooth_number: int
    name: str
    jaw: str
    side: str
    condition: DentalConditionType = DentalConditionType.HEALTHY
    color: str
    display_number: Optional[str] = None
    label_muted: bool = False
    highlighted: bool = False
    indicator_color: Optional[str] = None
    surface_markers: List[SurfaceMarker] = Field(default_factory=list)
    mobility_badge: Optional[str] = None
    zones: List[SurfaceZone] = Field(default_factory=list)
    tooltip: ToothTooltip


class ChartRow(BaseModel):
    """One jaw: ``right`` is drawn left of the midline (patient's right)."""
    jaw: str
    right: List[ToothGlyph] = Field(default_factory=list)
    left: List[ToothGlyph] = Field(default_factory=list)

    def glyphs(self) -> list[ToothGlyph]:
        return list(self.right) + list(self.left)


class LegendEntry(BaseModel):
    condition: DentalConditionType
    label: str
    color: str


class PatientBanner(BaseModel):
    patient_name: str
    age: Optional[int] = None
    dentition: str
    version: int


class ChartClick(BaseModel):
    tooth_number: int
    surface: Optional[ToothSurface] = None


class ChartView(BaseModel):
    title: str = "Dental Chart"
    subtitle: str
    patient_type: PatientType
    numbering_system: NumberingSystem
    editable: bool = False
    upper: ChartRow
    lower: ChartRow
    legend: List[LegendEntry] = Field(default_factory=list)
    patient: Optional[PatientBanner] = None

    def iter_glyphs(self) -> Iterator[ToothGlyph]:
        yield from self.upper.glyphs()
        yield from self.lower.glyphs()

    def glyph(self, tooth_number: int) -> Optional[ToothGlyph]:
        for glyph in self.iter_glyphs():
            if glyph.tooth_number == tooth_number:
                return glyph
        return None


__all__ = [
    "SurfaceZone",
    "SurfaceMarker",
    "ToothTooltip",
    "ToothGlyph",
    "ChartRow",
    "LegendEntry",
    "PatientBanner",
    "ChartClick",
    "ChartView",
]
