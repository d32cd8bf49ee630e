from dentchart.ingest.normalizer import normalize_odontogram
from dentchart.pipeline.steps.treatment import (
    aggregate_stats,
    build_treatment_summary,
    pending_treatments,
    refresh_treatment_fields,
    summarize_patient,
    treatment_progress,
)
from dentchart.core.schemas.odontogram import Odontogram
from tests.odontogram_samples import adult_record, child_record


def test_summary_ignores_cancelled_plans() -> None:
    summary = build_treatment_summary(normalize_odontogram(adult_record()))
    assert summary.total_planned_treatments == 2
    assert summary.completed_treatments == 1
    assert summary.in_progress_treatments == 0
    assert summary.estimated_total_cost == 920.0


def test_progress_and_pending() -> None:
    odontogram = normalize_odontogram(adult_record())
    assert treatment_progress(odontogram) == 50
    assert pending_treatments(odontogram) == 1
    assert treatment_progress(Odontogram()) == 0

    patient = summarize_patient(odontogram)
    assert patient.treatment_progress == 50
    assert patient.pending_treatments == 1


def test_refresh_treatment_fields() -> None:
    odontogram = refresh_treatment_fields(normalize_odontogram(adult_record()))
    assert odontogram.treatment_summary.completed_treatments == 1
    assert odontogram.treatment_progress == 50
    assert odontogram.pending_treatments == 1


def test_aggregate_stats_counts_active_records_only() -> None:
    inactive = adult_record()
    inactive["_id"] = "old"
    inactive["is_active"] = False
    records = [adult_record(), child_record(), inactive]

    stats = aggregate_stats(normalize_odontogram(record) for record in records)
    assert stats.total_patients == 2
    assert stats.total_planned_treatments == 2
    assert stats.total_completed_treatments == 1
    assert stats.total_pending_treatments == 1
    assert stats.total_estimated_cost == 920.0
    assert stats.completion_rate == 50
