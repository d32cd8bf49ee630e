from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from dentchart.core.schemas.dental import NumberingSystem
from dentchart.core.schemas.odontogram import Odontogram, TreatmentSummary


class Pagination(BaseModel):
    current_page: int = 1
    total_pages: int = 1
    total_items: int = 0
    items_per_page: int = 10


class OdontogramPage(BaseModel):
    odontograms: List[Odontogram] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


class OdontogramPatientSummary(BaseModel):
    id: Optional[str] = None
    full_name: Optional[str] = None
    age: Optional[int] = None


class OdontogramHistory(BaseModel):
    patient: Optional[OdontogramPatientSummary] = None
    odontograms: List[Odontogram] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


class PatientTreatmentSummary(BaseModel):
    patient_summary: TreatmentSummary = Field(default_factory=TreatmentSummary)
    treatment_progress: float = 0
    pending_treatments: int = 0


class OdontogramStats(BaseModel):
    total_patients: int = 0
    total_planned_treatments: int = 0
    total_completed_treatments: int = 0
    total_in_progress_treatments: int = 0
    total_pending_treatments: int = 0
    total_estimated_cost: float = 0
    completion_rate: float = 0


class NotationResult(BaseModel):
    tooth_number: int
    system: NumberingSystem
    is_child: bool = False
    display: str
    palmer_quadrant: Optional[str] = None
    name: str
    jaw: str
    side: str


__all__ = [
    "Pagination",
    "OdontogramPage",
    "OdontogramPatientSummary",
    "OdontogramHistory",
    "PatientTreatmentSummary",
    "OdontogramStats",
    "NotationResult",
]
