from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from dentchart.core.schemas.dental import (
    ALL_TEETH,
    AttachmentType,
    DentalConditionType,
    FindingSeverity,
    NumberingSystem,
    PatientType,
    ToothSurface,
    TreatmentPriority,
    TreatmentStatus,
    teeth_for,
)

HEALTHY = DentalConditionType.HEALTHY

# Both names address the chewing edge; records may carry either.
BITE_SURFACES = (ToothSurface.OCCLUSAL, ToothSurface.INCISAL)


class SurfaceCondition(BaseModel):
    surface: ToothSurface
    condition: DentalConditionType
    notes: Optional[str] = None
    color_code: Optional[str] = None
    date_diagnosed: Optional[datetime] = None
    severity: Optional[FindingSeverity] = None


class PeriodontalPocketDepth(BaseModel):
    """Probing depths in millimetres."""
    mesial: Optional[float] = Field(default=None, ge=0)
    distal: Optional[float] = Field(default=None, ge=0)
    buccal: Optional[float] = Field(default=None, ge=0)
    lingual: Optional[float] = Field(default=None, ge=0)

    def is_empty(self) -> bool:
        return all(value is None for value in (self.mesial, self.distal, self.buccal, self.lingual))


class TreatmentPlan(BaseModel):
    planned_treatment: str
    priority: TreatmentPriority = TreatmentPriority.MEDIUM
    estimated_cost: Optional[float] = Field(default=None, ge=0)
    estimated_duration: Optional[str] = None  # e.g. "30 minutes"
    status: TreatmentStatus = TreatmentStatus.PLANNED
    planned_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    notes: Optional[str] = None


class ToothAttachment(BaseModel):
    file_name: str
    file_url: str
    file_type: AttachmentType
    uploaded_date: Optional[datetime] = None
    description: Optional[str] = None


class ToothCondition(BaseModel):
    """Findings for one tooth. Surfaces are keyed by ``surface``."""
    tooth_number: int
    tooth_name: Optional[str] = None
    surfaces: List[SurfaceCondition] = Field(default_factory=list)
    overall_condition: DentalConditionType = HEALTHY
    mobility: Optional[int] = Field(default=None, ge=0, le=3)
    periodontal_pocket_depth: Optional[PeriodontalPocketDepth] = None
    treatment_plan: Optional[TreatmentPlan] = None
    attachments: List[ToothAttachment] = Field(default_factory=list)
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tooth_number")
    @classmethod
    def validate_tooth_number(cls, v: int) -> int:
        if v not in ALL_TEETH:
            raise ValueError(
                f"invalid tooth number: {v}. "
                "Permanent: 1-32. Primary: 51-55, 61-65, 71-75, 81-85."
            )
        return v

    @field_validator("surfaces")
    @classmethod
    def validate_unique_surfaces(cls, v: List[SurfaceCondition]) -> List[SurfaceCondition]:
        seen: set[ToothSurface] = set()
        for entry in v:
            if entry.surface in seen:
                raise ValueError(f"duplicate surface entry: {entry.surface.value}")
            seen.add(entry.surface)
        return v

    @classmethod
    def healthy(cls, tooth_number: int) -> "ToothCondition":
        return cls(tooth_number=tooth_number)

    def _find_surface(self, surface: ToothSurface) -> Optional[SurfaceCondition]:
        for entry in self.surfaces:
            if entry.surface == surface:
                return entry
        return None

    def surface_condition(self, surface: ToothSurface | str) -> DentalConditionType:
        entry = self._find_surface(ToothSurface(surface))
        return entry.condition if entry else HEALTHY

    def has_surface_finding(self, surface: ToothSurface | str) -> bool:
        return self.surface_condition(surface) != HEALTHY

    def bite_entry(self) -> Optional[SurfaceCondition]:
        """The occlusal or incisal entry, preferring one with a finding."""
        entries = [entry for entry in map(self._find_surface, BITE_SURFACES) if entry is not None]
        for entry in entries:
            if entry.condition != HEALTHY:
                return entry
        return entries[0] if entries else None

    def findings(self) -> list[SurfaceCondition]:
        return [entry for entry in self.surfaces if entry.condition != HEALTHY]

    def set_surface(
        self,
        surface: ToothSurface | str,
        condition: DentalConditionType | str,
        *,
        notes: Optional[str] = None,
        severity: Optional[FindingSeverity] = None,
        date_diagnosed: Optional[datetime] = None,
    ) -> SurfaceCondition:
        surface = ToothSurface(surface)
        entry = SurfaceCondition(
            surface=surface,
            condition=DentalConditionType(condition),
            notes=notes,
            severity=severity,
            date_diagnosed=date_diagnosed,
        )
        for index, existing in enumerate(self.surfaces):
            if existing.surface == surface:
                self.surfaces[index] = entry
                return entry
        self.surfaces.append(entry)
        return entry

    def clear_surface(self, surface: ToothSurface | str) -> bool:
        surface = ToothSurface(surface)
        before = len(self.surfaces)
        self.surfaces = [entry for entry in self.surfaces if entry.surface != surface]
        return len(self.surfaces) != before

    def is_default(self) -> bool:
        return (
            self.overall_condition == HEALTHY
            and not self.findings()
            and not self.mobility
            and (self.periodontal_pocket_depth is None or self.periodontal_pocket_depth.is_empty())
            and self.treatment_plan is None
            and not self.attachments
            and not self.notes
        )


class PatientRef(BaseModel):
    id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.full_name:
            return self.full_name
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or "Unknown Patient"


class DoctorRef(BaseModel):
    id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    specialization: Optional[str] = None


class PeriodontalAssessment(BaseModel):
    bleeding_on_probing: bool = False
    plaque_index: Optional[int] = Field(default=None, ge=0, le=3)
    gingival_index: Optional[int] = Field(default=None, ge=0, le=3)
    calculus_present: bool = False
    general_notes: Optional[str] = None


class TreatmentSummary(BaseModel):
    total_planned_treatments: int = 0
    completed_treatments: int = 0
    in_progress_treatments: int = 0
    estimated_total_cost: Optional[float] = None


class Odontogram(BaseModel):
    """One examination's chart for one patient.

    ``numbering_system`` is a display preference only; tooth numbers are
    always stored in the canonical Universal/primary form. Teeth absent from
    ``teeth_conditions`` are implicitly healthy.
    """
    id: Optional[str] = None
    clinic_id: Optional[str] = None
    patient: Optional[PatientRef] = None
    doctor: Optional[DoctorRef] = None
    examination_date: Optional[datetime] = None
    numbering_system: NumberingSystem = NumberingSystem.UNIVERSAL
    patient_type: PatientType = PatientType.ADULT
    teeth_conditions: List[ToothCondition] = Field(default_factory=list)
    general_notes: Optional[str] = None
    treatment_summary: Optional[TreatmentSummary] = None
    periodontal_assessment: Optional[PeriodontalAssessment] = None
    version: int = Field(default=1, ge=1)
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    treatment_progress: Optional[float] = None
    pending_treatments: Optional[int] = None

    @model_validator(mode="after")
    def validate_dentition(self) -> "Odontogram":
        allowed = set(teeth_for(self.patient_type))
        seen: set[int] = set()
        for tooth in self.teeth_conditions:
            if tooth.tooth_number not in allowed:
                raise ValueError(
                    f"tooth {tooth.tooth_number} is not part of the "
                    f"{self.patient_type.value} dentition"
                )
            if tooth.tooth_number in seen:
                raise ValueError(f"duplicate tooth entry: {tooth.tooth_number}")
            seen.add(tooth.tooth_number)
        return self

    @property
    def is_child(self) -> bool:
        return self.patient_type is PatientType.CHILD

    @property
    def tooth_numbers(self) -> tuple[int, ...]:
        return teeth_for(self.patient_type)

    def _require_tooth(self, tooth_number: int) -> None:
        if tooth_number not in self.tooth_numbers:
            raise ValueError(
                f"tooth {tooth_number} is not part of the {self.patient_type.value} dentition"
            )

    def find_tooth(self, tooth_number: int) -> Optional[ToothCondition]:
        for tooth in self.teeth_conditions:
            if tooth.tooth_number == tooth_number:
                return tooth
        return None

    def get_condition(self, tooth_number: int) -> ToothCondition:
        """Stored record, or a fresh healthy one.

        Raises ``ValueError`` (a pydantic ``ValidationError``) for numbers
        outside the permanent and primary tooth sets.
        """
        found = self.find_tooth(tooth_number)
        if found is not None:
            return found
        return ToothCondition.healthy(tooth_number)

    def materialize(self, tooth_number: int) -> ToothCondition:
        found = self.find_tooth(tooth_number)
        if found is not None:
            return found
        self._require_tooth(tooth_number)
        tooth = ToothCondition.healthy(tooth_number)
        self.teeth_conditions.append(tooth)
        return tooth

    def set_overall_condition(
        self, tooth_number: int, condition: DentalConditionType | str
    ) -> ToothCondition:
        tooth = self.materialize(tooth_number)
        tooth.overall_condition = DentalConditionType(condition)
        return tooth

    def set_surface_condition(
        self,
        tooth_number: int,
        surface: ToothSurface | str,
        condition: DentalConditionType | str,
        **extra,
    ) -> ToothCondition:
        tooth = self.materialize(tooth_number)
        tooth.set_surface(surface, condition, **extra)
        return tooth

    def upsert_tooth(self, tooth: ToothCondition) -> ToothCondition:
        self._require_tooth(tooth.tooth_number)
        for index, existing in enumerate(self.teeth_conditions):
            if existing.tooth_number == tooth.tooth_number:
                self.teeth_conditions[index] = tooth
                return tooth
        self.teeth_conditions.append(tooth)
        return tooth

    def remove_tooth(self, tooth_number: int) -> bool:
        before = len(self.teeth_conditions)
        self.teeth_conditions = [
            tooth for tooth in self.teeth_conditions if tooth.tooth_number != tooth_number
        ]
        return len(self.teeth_conditions) != before

    def prune_defaults(self) -> int:
        """Drop materialized records that carry nothing beyond the healthy default."""
        kept = [tooth for tooth in self.teeth_conditions if not tooth.is_default()]
        removed = len(self.teeth_conditions) - len(kept)
        self.teeth_conditions = kept
        return removed

    def revise(self) -> "Odontogram":
        revision = self.model_copy(deep=True)
        revision.id = None
        revision.version = self.version + 1
        revision.is_active = True
        revision.created_at = None
        revision.updated_at = None
        self.is_active = False
        return revision


__all__ = [
    "BITE_SURFACES",
    "SurfaceCondition",
    "PeriodontalPocketDepth",
    "TreatmentPlan",
    "ToothAttachment",
    "ToothCondition",
    "PatientRef",
    "DoctorRef",
    "PeriodontalAssessment",
    "TreatmentSummary",
    "Odontogram",
]
