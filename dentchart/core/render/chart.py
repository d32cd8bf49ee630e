from __future__ import annotations

from typing import Callable, Optional

from dentchart.core.layout import (
    jaw_of,
    layout_for,
    side_of,
    surface_at,
    surface_label,
    surface_regions,
)
from dentchart.core.notation import convert, tooth_name
from dentchart.core.palette import DEFAULT_PALETTE, ConditionPalette
from dentchart.core.schemas.chart import (
    ChartClick,
    ChartRow,
    ChartView,
    PatientBanner,
    SurfaceMarker,
    SurfaceZone,
    ToothGlyph,
    ToothTooltip,
)
from dentchart.core.schemas.dental import (
    DentalConditionType,
    NumberingSystem,
    PatientType,
    ToothSurface,
    condition_label,
)
from dentchart.core.schemas.odontogram import Odontogram, ToothCondition

ToothClickHandler = Callable[[int, Optional[ToothSurface]], None]

HEALTHY = DentalConditionType.HEALTHY
MISSING = DentalConditionType.MISSING

MAX_SURFACE_MARKERS = 3


def _dentition_label(is_child: bool) -> str:
    return "Primary Teeth" if is_child else "Permanent Teeth"


class ToothChart:
    """Presentational odontogram chart.

    Holds no editing logic: clicks are reported to ``on_tooth_click`` as
    ``(tooth_number, surface)`` and the caller decides what to persist.
    """

    def __init__(
        self,
        odontogram: Optional[Odontogram] = None,
        *,
        on_tooth_click: Optional[ToothClickHandler] = None,
        editable: bool = False,
        highlight_tooth: Optional[int] = None,
        show_labels: bool = True,
        numbering_system: NumberingSystem | str = NumberingSystem.UNIVERSAL,
        patient_type: PatientType | str | None = None,
        palette: ConditionPalette = DEFAULT_PALETTE,
    ) -> None:
        self.odontogram = odontogram
        self.on_tooth_click = on_tooth_click
        self.editable = editable
        self.highlight_tooth = highlight_tooth
        self.show_labels = show_labels
        self.numbering_system = NumberingSystem(numbering_system)
        self.palette = palette
        if odontogram is not None:
            self.patient_type = odontogram.patient_type
        else:
            self.patient_type = PatientType(patient_type or PatientType.ADULT)

    @property
    def is_child(self) -> bool:
        return self.patient_type is PatientType.CHILD

    def _tooth_data(self, tooth_number: int) -> ToothCondition:
        if self.odontogram is None:
            return ToothCondition.healthy(tooth_number)
        return self.odontogram.get_condition(tooth_number)

    def _tooltip(self, tooth: ToothCondition) -> ToothTooltip:
        surfaces = None
        if tooth.surfaces:
            surfaces = "Surfaces: " + ", ".join(
                f"{entry.surface.value[0].upper()}:{entry.condition.value}" for entry in tooth.surfaces
            )
        mobility = f"Mobility: Grade {tooth.mobility}" if tooth.mobility else None
        hint = "Click surfaces to edit conditions" if self.editable else None
        return ToothTooltip(
            title=tooth_name(tooth.tooth_number),
            overall=f"Overall: {condition_label(tooth.overall_condition)}",
            surfaces=surfaces,
            mobility=mobility,
            hint=hint,
        )

    def _zones(self, tooth: ToothCondition) -> list[SurfaceZone]:
        if not self.editable or tooth.overall_condition == MISSING:
            return []
        zones = []
        for region in surface_regions(tooth.tooth_number, self.is_child):
            condition = tooth.surface_condition(region.surface)
            if region.surface is ToothSurface.OCCLUSAL:
                bite = tooth.bite_entry()
                condition = bite.condition if bite is not None else HEALTHY
            zones.append(
                SurfaceZone(
                    surface=region.surface,
                    label=surface_label(region.surface, tooth.tooth_number, self.is_child),
                    left=region.left,
                    top=region.top,
                    right=region.right,
                    bottom=region.bottom,
                    condition=condition,
                    overlay_color=self.palette.overlay_color(condition) if condition != HEALTHY else None,
                )
            )
        return zones

    def _glyph(self, tooth_number: int) -> ToothGlyph:
        tooth = self._tooth_data(tooth_number)
        condition = tooth.overall_condition
        markers = [
            SurfaceMarker(surface=entry.surface, condition=entry.condition, color=self.palette.color(entry.condition))
            for entry in tooth.findings()[:MAX_SURFACE_MARKERS]
        ]
        show_indicator = condition not in (HEALTHY, MISSING)
        return ToothGlyph(
            tooth_number=tooth_number,
            name=tooth_name(tooth_number),
            jaw=jaw_of(tooth_number, self.is_child).value,
            side=side_of(tooth_number, self.is_child).value,
            condition=condition,
            color=self.palette.color(condition),
            display_number=(
                convert(tooth_number, self.numbering_system, self.is_child) if self.show_labels else None
            ),
            label_muted=condition == MISSING,
            highlighted=self.highlight_tooth == tooth_number,
            indicator_color=self.palette.color(condition) if show_indicator else None,
            surface_markers=markers,
            mobility_badge=f"M{tooth.mobility}" if tooth.mobility else None,
            zones=self._zones(tooth),
            tooltip=self._tooltip(tooth),
        )

    def _banner(self) -> Optional[PatientBanner]:
        if self.odontogram is None:
            return None
        patient = self.odontogram.patient
        return PatientBanner(
            patient_name=patient.display_name if patient else "Unknown Patient",
            age=patient.age if patient else None,
            dentition=_dentition_label(self.is_child),
            version=self.odontogram.version,
        )

    def render(self) -> ChartView:
        rows = []
        for jaw, right, left in layout_for(self.is_child).rows():
            rows.append(
                ChartRow(
                    jaw=jaw.value,
                    right=[self._glyph(number) for number in right],
                    left=[self._glyph(number) for number in left],
                )
            )
        upper, lower = rows
        return ChartView(
            subtitle=f"{_dentition_label(self.is_child)} • {self.numbering_system.value.upper()} Numbering",
            patient_type=self.patient_type,
            numbering_system=self.numbering_system,
            editable=self.editable,
            upper=upper,
            lower=lower,
            legend=self.palette.legend(),
            patient=self._banner(),
        )

    def click(self, tooth_number: int, surface: ToothSurface | str | None = None) -> Optional[ChartClick]:
        if not self.editable or tooth_number not in layout_for(self.is_child).teeth():
            return None
        if surface is not None:
            surface = ToothSurface(surface)
            if self._tooth_data(tooth_number).overall_condition == MISSING:
                # no surface zones are drawn on a missing tooth
                surface = None
        event = ChartClick(tooth_number=tooth_number, surface=surface)
        if self.on_tooth_click is not None:
            self.on_tooth_click(event.tooth_number, event.surface)
        return event

    def click_at(self, tooth_number: int, x: float, y: float) -> Optional[ChartClick]:
        """Click at a point inside a glyph, given as fractions of its box."""
        return self.click(tooth_number, surface_at(tooth_number, self.is_child, x, y))


def render_chart(odontogram: Optional[Odontogram] = None, **props) -> ChartView:
    return ToothChart(odontogram, **props).render()


__all__ = ["ToothChart", "ToothClickHandler", "render_chart"]
