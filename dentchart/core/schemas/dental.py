from __future__ import annotations

from enum import Enum


class NumberingSystem(str, Enum):
    UNIVERSAL = "universal"
    PALMER = "palmer"
    FDI = "fdi"


class PatientType(str, Enum):
    ADULT = "adult"
    CHILD = "child"


class ToothSurface(str, Enum):
    MESIAL = "mesial"
    DISTAL = "distal"
    OCCLUSAL = "occlusal"
    BUCCAL = "buccal"
    LINGUAL = "lingual"
    INCISAL = "incisal"


class DentalConditionType(str, Enum):
    HEALTHY = "healthy"
    CARIES = "caries"
    FILLING = "filling"
    CROWN = "crown"
    BRIDGE = "bridge"
    IMPLANT = "implant"
    EXTRACTION = "extraction"
    ROOT_CANAL = "root_canal"
    MISSING = "missing"
    FRACTURED = "fractured"
    WEAR = "wear"
    RESTORATION_NEEDED = "restoration_needed"
    SEALANT = "sealant"
    VENEER = "veneer"
    TEMPORARY_FILLING = "temporary_filling"
    PERIAPICAL_LESION = "periapical_lesion"


class TreatmentStatus(str, Enum):
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TreatmentPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class AttachmentType(str, Enum):
    IMAGE = "image"
    XRAY = "xray"
    DOCUMENT = "document"


class FindingSeverity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


# Canonical identifiers: Universal 1-32 for permanent teeth, FDI-style
# 51-85 for primary teeth.
ADULT_TEETH: tuple[int, ...] = tuple(range(1, 33))
CHILD_TEETH: tuple[int, ...] = (
    tuple(range(51, 56)) + tuple(range(61, 66)) + tuple(range(71, 76)) + tuple(range(81, 86))
)
ALL_TEETH = frozenset(ADULT_TEETH) | frozenset(CHILD_TEETH)


def teeth_for(patient_type: PatientType | str) -> tuple[int, ...]:
    if PatientType(patient_type) is PatientType.CHILD:
        return CHILD_TEETH
    return ADULT_TEETH


def condition_label(condition: DentalConditionType | str) -> str:
    """Human label for a condition, e.g. ``root_canal`` -> ``Root Canal``."""
    value = DentalConditionType(condition).value
    return " ".join(part.capitalize() for part in value.split("_"))


__all__ = [
    "NumberingSystem",
    "PatientType",
    "ToothSurface",
    "DentalConditionType",
    "TreatmentStatus",
    "TreatmentPriority",
    "AttachmentType",
    "FindingSeverity",
    "ADULT_TEETH",
    "CHILD_TEETH",
    "ALL_TEETH",
    "teeth_for",
    "condition_label",
]
