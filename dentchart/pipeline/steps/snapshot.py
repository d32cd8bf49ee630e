from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

from dentchart.core.notation import convert, tooth_name
from dentchart.core.schemas.dental import DentalConditionType, NumberingSystem, condition_label
from dentchart.core.schemas.odontogram import Odontogram
from dentchart.ingest.normalizer import load_odontograms
from dentchart.pipeline.steps.treatment import build_treatment_summary, treatment_progress


def _format_date(value: Optional[datetime]) -> str:
    return value.date().isoformat() if value else "unknown"


def build_snapshot_from_odontogram(
    odontogram: Odontogram, numbering_system: NumberingSystem | str | None = None
) -> str:
    system = NumberingSystem(numbering_system or odontogram.numbering_system)
    is_child = odontogram.is_child
    teeth = sorted(odontogram.teeth_conditions, key=lambda tooth: tooth.tooth_number)

    def label(tooth_number: int) -> str:
        return convert(tooth_number, system, is_child)

    patient_id = odontogram.patient.id if odontogram.patient and odontogram.patient.id else "unknown"
    lines = [
        f"Odontogram: {odontogram.id or 'unsaved'} | patient={patient_id} | "
        f"type={odontogram.patient_type.value} | numbering={system.value} | "
        f"version={odontogram.version} | exam={_format_date(odontogram.examination_date)}"
    ]

    lines.append("Findings:")
    for tooth in teeth:
        surfaces = tooth.findings()
        if tooth.overall_condition == DentalConditionType.HEALTHY and not surfaces:
            continue
        surface_text = ", ".join(f"{entry.surface.value}={entry.condition.value}" for entry in surfaces)
        lines.append(
            f"{label(tooth.tooth_number)} | {tooth_name(tooth.tooth_number)} | "
            f"{condition_label(tooth.overall_condition)}"
            + (f" | {surface_text}" if surface_text else "")
        )

    lines.append("Mobility:")
    for tooth in teeth:
        if tooth.mobility:
            lines.append(f"{label(tooth.tooth_number)} | grade {tooth.mobility}")

    lines.append("Treatment plan:")
    for tooth in teeth:
        plan = tooth.treatment_plan
        if plan is None:
            continue
        cost = f" | ${plan.estimated_cost:.2f}" if plan.estimated_cost else ""
        lines.append(
            f"{label(tooth.tooth_number)} | {plan.planned_treatment} | "
            f"{plan.priority.value} | {plan.status.value}{cost}"
        )

    summary = build_treatment_summary(odontogram)
    lines.append(
        f"Progress: {summary.completed_treatments}/{summary.total_planned_treatments} "
        f"completed ({treatment_progress(odontogram):.0f}%)"
    )
    return "\n".join(lines)


def build_snapshot(odontogram_json_path: str, numbering_system: Optional[str] = None) -> str:
    odontograms = load_odontograms(Path(odontogram_json_path))
    if not odontograms:
        raise ValueError(f"No odontogram records found in {odontogram_json_path}")
    return "\n\n".join(
        build_snapshot_from_odontogram(odontogram, numbering_system) for odontogram in odontograms
    )


__all__ = ["build_snapshot", "build_snapshot_from_odontogram"]
