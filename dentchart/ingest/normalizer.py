from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from dentchart.core.schemas.odontogram import (
    DoctorRef,
    Odontogram,
    PatientRef,
    ToothCondition,
)
from dentchart.ingest.loader import load_odontogram_path

# Fields accepted by the clinic API on create/update.
_ODONTOGRAM_WRITE_FIELDS = (
    "examination_date",
    "numbering_system",
    "patient_type",
    "teeth_conditions",
    "general_notes",
    "periodontal_assessment",
)
_TOOTH_READONLY_FIELDS = {"created_at", "updated_at"}


def _string_value(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _ref_id(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        return _string_value(value.get("_id")) or _string_value(value.get("id"))
    return _string_value(value)


def _patient_ref(raw: dict) -> Optional[PatientRef]:
    value = raw.get("patient") or raw.get("patient_id")
    if value is None:
        return None
    if not isinstance(value, dict):
        return PatientRef(id=_string_value(value))
    return PatientRef(
        id=_ref_id(value),
        first_name=_string_value(value.get("first_name")),
        last_name=_string_value(value.get("last_name")),
        full_name=_string_value(value.get("full_name")),
        age=value.get("age"),
        gender=_string_value(value.get("gender")),
    )


def _doctor_ref(raw: dict) -> Optional[DoctorRef]:
    value = raw.get("doctor") or raw.get("doctor_id")
    if value is None:
        return None
    if not isinstance(value, dict):
        return DoctorRef(id=_string_value(value))
    return DoctorRef(
        id=_ref_id(value),
        first_name=_string_value(value.get("first_name")),
        last_name=_string_value(value.get("last_name")),
        specialization=_string_value(value.get("specialization")),
    )


def extract_odontogram_payloads(payload: Any) -> list[dict]:
    """Pull odontogram records out of the envelopes the clinic API returns."""
    if isinstance(payload, list):
        records: list[dict] = []
        for item in payload:
            records.extend(extract_odontogram_payloads(item))
        return records
    if not isinstance(payload, dict):
        return []
    data = payload.get("data")
    if isinstance(data, (dict, list)):
        return extract_odontogram_payloads(data)
    if isinstance(payload.get("odontogram"), dict):
        return [payload["odontogram"]]
    if isinstance(payload.get("odontograms"), list):
        return [item for item in payload["odontograms"] if isinstance(item, dict)]
    return [payload]


def normalize_odontogram(raw: dict) -> Odontogram:
    """Map a wire record onto ``Odontogram``. Raises ``pydantic.ValidationError``."""
    fields = {
        key: value
        for key, value in raw.items()
        if key not in {"_id", "patient", "patient_id", "doctor", "doctor_id", "clinic_id"}
    }
    fields["id"] = _string_value(raw.get("id")) or _string_value(raw.get("_id"))
    fields["clinic_id"] = _ref_id(raw.get("clinic_id"))
    fields["patient"] = _patient_ref(raw)
    fields["doctor"] = _doctor_ref(raw)
    return Odontogram.model_validate(fields)


def tooth_condition_payload(tooth: ToothCondition) -> dict:
    body = tooth.model_dump(mode="json", exclude_none=True)
    for key in _TOOTH_READONLY_FIELDS:
        body.pop(key, None)
    return body


def odontogram_to_payload(odontogram: Odontogram, include_version: bool = False) -> dict:
    body = odontogram.model_dump(mode="json", include=set(_ODONTOGRAM_WRITE_FIELDS), exclude_none=True)
    body["teeth_conditions"] = [tooth_condition_payload(tooth) for tooth in odontogram.teeth_conditions]
    if include_version:
        body["version"] = odontogram.version
        body["is_active"] = odontogram.is_active
    return body


def load_odontograms(path: Path | str) -> list[Odontogram]:
    odontograms: list[Odontogram] = []
    for document in load_odontogram_path(path):
        for record in extract_odontogram_payloads(document["payload"]):
            odontograms.append(normalize_odontogram(record))
    return odontograms


__all__ = [
    "extract_odontogram_payloads",
    "load_odontograms",
    "normalize_odontogram",
    "odontogram_to_payload",
    "tooth_condition_payload",
]
