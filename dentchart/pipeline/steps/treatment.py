from __future__ import annotations

from typing import Iterable

from dentchart.core.schemas.dental import TreatmentStatus
from dentchart.core.schemas.odontogram import Odontogram, TreatmentPlan, TreatmentSummary
from dentchart.core.schemas.result import OdontogramStats, PatientTreatmentSummary


def _plans(odontogram: Odontogram) -> list[TreatmentPlan]:
    return [
        tooth.treatment_plan
        for tooth in odontogram.teeth_conditions
        if tooth.treatment_plan is not None and tooth.treatment_plan.status != TreatmentStatus.CANCELLED
    ]


def _percent(part: int, whole: int) -> float:
    if not whole:
        return 0
    return round(part / whole * 100)


def build_treatment_summary(odontogram: Odontogram) -> TreatmentSummary:
    plans = _plans(odontogram)
    return TreatmentSummary(
        total_planned_treatments=len(plans),
        completed_treatments=sum(1 for plan in plans if plan.status == TreatmentStatus.COMPLETED),
        in_progress_treatments=sum(1 for plan in plans if plan.status == TreatmentStatus.IN_PROGRESS),
        estimated_total_cost=sum(plan.estimated_cost or 0 for plan in plans),
    )


def treatment_progress(odontogram: Odontogram) -> float:
    summary = build_treatment_summary(odontogram)
    return _percent(summary.completed_treatments, summary.total_planned_treatments)


def pending_treatments(odontogram: Odontogram) -> int:
    return sum(1 for plan in _plans(odontogram) if plan.status == TreatmentStatus.PLANNED)


def summarize_patient(odontogram: Odontogram) -> PatientTreatmentSummary:
    return PatientTreatmentSummary(
        patient_summary=build_treatment_summary(odontogram),
        treatment_progress=treatment_progress(odontogram),
        pending_treatments=pending_treatments(odontogram),
    )


def refresh_treatment_fields(odontogram: Odontogram) -> Odontogram:
    """Recompute the derived summary fields in place."""
    odontogram.treatment_summary = build_treatment_summary(odontogram)
    odontogram.treatment_progress = treatment_progress(odontogram)
    odontogram.pending_treatments = pending_treatments(odontogram)
    return odontogram


def aggregate_stats(odontograms: Iterable[Odontogram]) -> OdontogramStats:
    """Clinic-wide totals over active odontograms."""
    patients: set[str] = set()
    anonymous = 0
    planned = completed = in_progress = pending = 0
    cost = 0.0
    for odontogram in odontograms:
        if not odontogram.is_active:
            continue
        patient_id = odontogram.patient.id if odontogram.patient else None
        if patient_id:
            patients.add(patient_id)
        else:
            anonymous += 1
        summary = build_treatment_summary(odontogram)
        planned += summary.total_planned_treatments
        completed += summary.completed_treatments
        in_progress += summary.in_progress_treatments
        pending += pending_treatments(odontogram)
        cost += summary.estimated_total_cost or 0
    return OdontogramStats(
        total_patients=len(patients) + anonymous,
        total_planned_treatments=planned,
        total_completed_treatments=completed,
        total_in_progress_treatments=in_progress,
        total_pending_treatments=pending,
        total_estimated_cost=cost,
        completion_rate=_percent(completed, planned),
    )


__all__ = [
    "build_treatment_summary",
    "treatment_progress",
    "pending_treatments",
    "summarize_patient",
    "refresh_treatment_fields",
    "aggregate_stats",
]
