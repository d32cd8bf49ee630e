from __future__ import annotations

from datetime import datetime
from typing import Optional

from dentchart.core.notation import convert, tooth_name
from dentchart.core.palette import DEFAULT_PALETTE, ConditionPalette
from dentchart.core.render.chart import ToothChart
from dentchart.core.schemas.chart import ChartRow, ChartView, ToothGlyph
from dentchart.core.schemas.dental import DentalConditionType, NumberingSystem, condition_label
from dentchart.core.schemas.odontogram import Odontogram

# Short cell codes for the text grid.
_CONDITION_CODES = {
    DentalConditionType.HEALTHY: "",
    DentalConditionType.CARIES: "C",
    DentalConditionType.FILLING: "F",
    DentalConditionType.CROWN: "Cr",
    DentalConditionType.BRIDGE: "Br",
    DentalConditionType.IMPLANT: "Im",
    DentalConditionType.EXTRACTION: "Ex",
    DentalConditionType.ROOT_CANAL: "RC",
    DentalConditionType.MISSING: "X",
    DentalConditionType.FRACTURED: "Fr",
    DentalConditionType.WEAR: "W",
    DentalConditionType.RESTORATION_NEEDED: "RN",
    DentalConditionType.SEALANT: "S",
    DentalConditionType.VENEER: "V",
    DentalConditionType.TEMPORARY_FILLING: "TF",
    DentalConditionType.PERIAPICAL_LESION: "PL",
}


def _escape_table(value: object) -> str:
    text = "" if value is None else str(value)
    return text.replace("|", "\\|")


def _format_date(value: Optional[datetime]) -> str:
    return value.date().isoformat() if value else "unknown"


def _format_cost(value: Optional[float]) -> str:
    if not value:
        return "N/A"
    return f"${value:,.2f}"


def _cell(glyph: ToothGlyph) -> str:
    label = glyph.display_number or str(glyph.tooth_number)
    code = _CONDITION_CODES[glyph.condition]
    if glyph.surface_markers and not code:
        code = "*"
    return f"{label}{'·' + code if code else ''}"


def _grid_row(row: ChartRow) -> str:
    right = " ".join(_cell(glyph) for glyph in row.right)
    left = " ".join(_cell(glyph) for glyph in row.left)
    return f"{right} | {left}"


def render_chart_text(view: ChartView) -> str:
    """Plain-text grid: upper row above the gum line, patient's right first."""
    upper = _grid_row(view.upper)
    lower = _grid_row(view.lower)
    width = max(len(upper), len(lower))
    return "\n".join([upper, "-" * width, lower])


def render_odontogram_report_md(
    odontogram: Odontogram,
    numbering_system: NumberingSystem | str | None = None,
    palette: ConditionPalette = DEFAULT_PALETTE,
) -> str:
    system = NumberingSystem(numbering_system or odontogram.numbering_system)
    view = ToothChart(odontogram, numbering_system=system, palette=palette).render()
    is_child = odontogram.is_child

    lines: list[str] = []
    patient_name = odontogram.patient.display_name if odontogram.patient else "Unknown Patient"
    lines.append(f"# Odontogram: {patient_name}")
    lines.append("")
    lines.append(f"- Examination date: {_format_date(odontogram.examination_date)}")
    lines.append(f"- Dentition: {view.patient.dentition if view.patient else odontogram.patient_type.value}")
    lines.append(f"- Numbering: {system.value.upper()}")
    lines.append(f"- Version: {odontogram.version} ({'active' if odontogram.is_active else 'superseded'})")

    lines.append("")
    lines.append("## Chart")
    lines.append("```")
    lines.append(render_chart_text(view))
    lines.append("```")

    lines.append("")
    lines.append("## Findings")
    findings = [tooth for tooth in odontogram.teeth_conditions if not tooth.is_default()]
    if findings:
        lines.append("| Tooth | Name | Overall | Surfaces | Mobility | Notes |")
        lines.append("| --- | --- | --- | --- | --- | --- |")
        for tooth in sorted(findings, key=lambda item: item.tooth_number):
            surfaces = ", ".join(
                f"{entry.surface.value}: {condition_label(entry.condition)}" for entry in tooth.findings()
            )
            lines.append(
                "| {tooth} | {name} | {overall} | {surfaces} | {mobility} | {notes} |".format(
                    tooth=_escape_table(convert(tooth.tooth_number, system, is_child)),
                    name=_escape_table(tooth.tooth_name or tooth_name(tooth.tooth_number)),
                    overall=_escape_table(condition_label(tooth.overall_condition)),
                    surfaces=_escape_table(surfaces or "-"),
                    mobility=_escape_table(tooth.mobility if tooth.mobility else "-"),
                    notes=_escape_table(tooth.notes or ""),
                )
            )
    else:
        lines.append("- No findings recorded; all teeth healthy.")

    lines.append("")
    lines.append("## Treatment Plan")
    planned = [tooth for tooth in odontogram.teeth_conditions if tooth.treatment_plan]
    if planned:
        lines.append("| Tooth | Treatment | Priority | Status | Estimated cost |")
        lines.append("| --- | --- | --- | --- | --- |")
        for tooth in sorted(planned, key=lambda item: item.tooth_number):
            plan = tooth.treatment_plan
            lines.append(
                f"| {_escape_table(convert(tooth.tooth_number, system, is_child))} "
                f"| {_escape_table(plan.planned_treatment)} | {plan.priority.value} "
                f"| {plan.status.value} | {_format_cost(plan.estimated_cost)} |"
            )
    else:
        lines.append("- No treatments planned.")

    assessment = odontogram.periodontal_assessment
    if assessment is not None:
        lines.append("")
        lines.append("## Periodontal Assessment")
        lines.append(f"- Bleeding on probing: {'yes' if assessment.bleeding_on_probing else 'no'}")
        lines.append(f"- Calculus present: {'yes' if assessment.calculus_present else 'no'}")
        if assessment.plaque_index is not None:
            lines.append(f"- Plaque index: {assessment.plaque_index}")
        if assessment.gingival_index is not None:
            lines.append(f"- Gingival index: {assessment.gingival_index}")
        if assessment.general_notes:
            lines.append(f"- Notes: {assessment.general_notes}")

    if odontogram.general_notes:
        lines.append("")
        lines.append("## Notes")
        lines.append(odontogram.general_notes)

    lines.append("")
    lines.append("## Legend")
    for entry in view.legend:
        code = _CONDITION_CODES[entry.condition] or "-"
        lines.append(f"- `{code}` {entry.label} ({entry.color})")
    lines.append("")

    return "\n".join(lines).strip() + "\n"


__all__ = ["render_chart_text", "render_odontogram_report_md"]
