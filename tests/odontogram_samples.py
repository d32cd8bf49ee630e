from __future__ import annotations

import copy
import json
from pathlib import Path


ADULT_RECORD = {
    "_id": "665f1c2a9b1e4a0012345678",
    "clinic_id": "clinic-1",
    "patient_id": {
        "_id": "patient-1",
        "first_name": "Ana",
        "last_name": "Silva",
        "full_name": "Ana Silva",
        "age": 34,
        "gender": "female",
    },
    "doctor_id": {"_id": "doctor-1", "first_name": "Rui", "last_name": "Costa", "specialization": "general"},
    "examination_date": "2025-03-14T10:00:00Z",
    "numbering_system": "universal",
    "patient_type": "adult",
    "teeth_conditions": [
        {
            "_id": "tc-8",
            "tooth_number": 8,
            "overall_condition": "caries",
            "surfaces": [
                {"surface": "mesial", "condition": "filling"},
                {"surface": "buccal", "condition": "healthy"},
            ],
            "mobility": 2,
            "treatment_plan": {
                "planned_treatment": "Composite restoration",
                "priority": "high",
                "estimated_cost": 120.0,
                "status": "planned",
            },
        },
        {
            "tooth_number": 19,
            "overall_condition": "crown",
            "treatment_plan": {
                "planned_treatment": "Crown cementation",
                "priority": "medium",
                "estimated_cost": 800.0,
                "status": "completed",
            },
        },
        {
            "tooth_number": 30,
            "overall_condition": "root_canal",
            "treatment_plan": {
                "planned_treatment": "Endodontic retreatment",
                "priority": "urgent",
                "estimated_cost": 500.0,
                "status": "cancelled",
            },
        },
        {"tooth_number": 1, "overall_condition": "missing"},
    ],
    "general_notes": "Routine exam",
    "periodontal_assessment": {"bleeding_on_probing": True, "plaque_index": 1, "calculus_present": False},
    "version": 2,
    "is_active": True,
}

CHILD_RECORD = {
    "_id": "child-odontogram",
    "patient_id": "patient-2",
    "patient_type": "child",
    "numbering_system": "fdi",
    "teeth_conditions": [
        {"tooth_number": 71, "overall_condition": "sealant"},
        {"tooth_number": 55, "overall_condition": "healthy", "surfaces": [{"surface": "occlusal", "condition": "caries"}]},
    ],
}


def adult_record() -> dict:
    return copy.deepcopy(ADULT_RECORD)


def child_record() -> dict:
    return copy.deepcopy(CHILD_RECORD)


def write_record(directory: Path, name: str, payload: object) -> Path:
    path = directory / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path
