import pytest
from pydantic import ValidationError

from dentchart.core.schemas.dental import NumberingSystem, PatientType
from dentchart.ingest.loader import load_odontogram_path
from dentchart.ingest.normalizer import (
    extract_odontogram_payloads,
    load_odontograms,
    normalize_odontogram,
    odontogram_to_payload,
    tooth_condition_payload,
)
from tests.odontogram_samples import adult_record, child_record, write_record


def test_normalize_populated_references() -> None:
    odontogram = normalize_odontogram(adult_record())
    assert odontogram.id == "665f1c2a9b1e4a0012345678"
    assert odontogram.clinic_id == "clinic-1"
    assert odontogram.patient.id == "patient-1"
    assert odontogram.patient.display_name == "Ana Silva"
    assert odontogram.doctor.specialization == "general"
    assert odontogram.find_tooth(8).surfaces[0].condition.value == "filling"


def test_normalize_bare_references() -> None:
    odontogram = normalize_odontogram(child_record())
    assert odontogram.patient.id == "patient-2"
    assert odontogram.patient.display_name == "Unknown Patient"
    assert odontogram.doctor is None
    assert odontogram.patient_type is PatientType.CHILD
    assert odontogram.numbering_system is NumberingSystem.FDI


def test_normalize_rejects_invalid_teeth() -> None:
    record = adult_record()
    record["teeth_conditions"].append({"tooth_number": 40})
    with pytest.raises(ValidationError):
        normalize_odontogram(record)


def test_extract_from_api_envelopes() -> None:
    single = {"success": True, "data": {"odontogram": adult_record()}}
    page = {"success": True, "data": {"odontograms": [adult_record(), child_record()], "pagination": {}}}
    assert len(extract_odontogram_payloads(single)) == 1
    assert len(extract_odontogram_payloads(page)) == 2
    assert len(extract_odontogram_payloads([adult_record(), child_record()])) == 2
    assert extract_odontogram_payloads(child_record())[0]["_id"] == "child-odontogram"
    assert extract_odontogram_payloads("nope") == []


def test_write_payloads_drop_server_fields() -> None:
    odontogram = normalize_odontogram(adult_record())
    body = odontogram_to_payload(odontogram)
    assert set(body) <= {
        "examination_date",
        "numbering_system",
        "patient_type",
        "teeth_conditions",
        "general_notes",
        "periodontal_assessment",
    }
    assert body["numbering_system"] == "universal"
    assert body["teeth_conditions"][0]["tooth_number"] == 8

    versioned = odontogram_to_payload(odontogram, include_version=True)
    assert versioned["version"] == 2
    assert versioned["is_active"] is True

    tooth_body = tooth_condition_payload(odontogram.find_tooth(1))
    assert tooth_body == {
        "tooth_number": 1,
        "surfaces": [],
        "overall_condition": "missing",
        "attachments": [],
    }


def test_loader_reads_file_and_directory(tmp_path) -> None:
    write_record(tmp_path, "b.json", child_record())
    write_record(tmp_path, "a.json", adult_record())

    documents = load_odontogram_path(tmp_path)
    assert [doc["input_kind"] for doc in documents] == ["dir", "dir"]
    assert documents[0]["file_path"].endswith("a.json")

    single = load_odontogram_path(tmp_path / "b.json")
    assert single[0]["input_kind"] == "file"

    assert [o.id for o in load_odontograms(tmp_path)] == ["665f1c2a9b1e4a0012345678", "child-odontogram"]


def test_loader_missing_path(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_odontogram_path(tmp_path / "missing")
