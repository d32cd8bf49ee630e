from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Literal, Optional

from fastapi import APIRouter
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel, Field, ValidationError

from dentchart.core.config import Settings
from dentchart.core.notation import describe
from dentchart.core.palette import DEFAULT_PALETTE
from dentchart.core.render.chart import ToothChart
from dentchart.core.render.markdown import render_odontogram_report_md
from dentchart.core.render.svg import render_chart_svg
from dentchart.core.schemas.dental import (
    DentalConditionType,
    NumberingSystem,
    PatientType,
    ToothSurface,
    teeth_for,
)
from dentchart.core.schemas.odontogram import Odontogram
from dentchart.ingest.normalizer import load_odontograms, normalize_odontogram
from dentchart.pipeline.editing import ChartEditSession
from dentchart.pipeline.steps.treatment import aggregate_stats, summarize_patient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1")


class ChartRequest(BaseModel):
    odontogram: Optional[dict] = None
    path: Optional[str] = None
    format: Literal["json", "svg", "markdown"] = "json"
    numbering_system: Optional[NumberingSystem] = None
    patient_type: Optional[PatientType] = None
    editable: bool = False
    highlight_tooth: Optional[int] = None
    show_labels: bool = True


class ClickRequest(BaseModel):
    odontogram: dict
    tooth_number: int
    surface: Optional[ToothSurface] = None
    condition: DentalConditionType


class TreatmentSummaryRequest(BaseModel):
    odontograms: List[dict] = Field(default_factory=list)
    path: Optional[str] = None


class _InputError(Exception):
    def __init__(self, status: int, code: str, message: str, detail: Optional[dict] = None) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.message = message
        self.detail = detail


def _error(status: int, code: str, message: str, detail: Optional[dict] = None) -> JSONResponse:
    payload = {"error": {"code": code, "message": message, "detail": detail or {}}}
    return JSONResponse(status_code=status, content=payload)


def _validation_detail(exc: ValidationError) -> dict:
    return {"errors": exc.errors(include_url=False, include_context=False, include_input=False)}


def _load_path(raw_path: str) -> list[Odontogram]:
    path = Path(raw_path)
    if not path.exists():
        raise _InputError(404, "not_found", "file not found", {"path": raw_path})
    try:
        return load_odontograms(path)
    except json.JSONDecodeError as exc:
        raise _InputError(
            400, "invalid_input", "file is not valid JSON", {"path": raw_path, "error": str(exc)}
        ) from exc


def _resolve_odontogram(raw: Optional[dict], raw_path: Optional[str]) -> Optional[Odontogram]:
    if raw is not None:
        return normalize_odontogram(raw)
    if raw_path:
        odontograms = _load_path(raw_path)
        if not odontograms:
            raise _InputError(400, "invalid_input", "no odontogram records found", {"path": raw_path})
        return odontograms[0]
    return None


@router.post("/chart")
def chart(request: ChartRequest) -> Response:
    try:
        odontogram = _resolve_odontogram(request.odontogram, request.path)
    except _InputError as exc:
        return _error(exc.status, exc.code, exc.message, exc.detail)
    except ValidationError as exc:
        return _error(422, "invalid_odontogram", "odontogram failed validation", _validation_detail(exc))
    except Exception as exc:
        logger.exception("odontogram loading failed")
        return _error(500, "internal_error", "unexpected error", {"error": str(exc)})

    system = request.numbering_system
    if system is None:
        system = odontogram.numbering_system if odontogram else Settings.from_env().numbering_system

    try:
        if request.format == "markdown":
            target = odontogram or Odontogram(patient_type=request.patient_type or PatientType.ADULT)
            return PlainTextResponse(
                render_odontogram_report_md(target, system), media_type="text/markdown"
            )
        view = ToothChart(
            odontogram,
            editable=request.editable,
            highlight_tooth=request.highlight_tooth,
            show_labels=request.show_labels,
            numbering_system=system,
            patient_type=request.patient_type,
        ).render()
        if request.format == "svg":
            return Response(render_chart_svg(view), media_type="image/svg+xml")
        return JSONResponse(status_code=200, content=jsonable_encoder(view))
    except Exception as exc:
        logger.exception("chart rendering failed")
        return _error(500, "internal_error", "unexpected error", {"error": str(exc)})


@router.post("/chart/click")
def chart_click(request: ClickRequest) -> JSONResponse:
    try:
        odontogram = normalize_odontogram(request.odontogram)
    except ValidationError as exc:
        return _error(422, "invalid_odontogram", "odontogram failed validation", _validation_detail(exc))

    session = ChartEditSession(odontogram, brush=request.condition)
    event = session.chart().click(request.tooth_number, request.surface)
    if event is None:
        return _error(
            400,
            "invalid_input",
            "tooth is not on this chart",
            {"tooth_number": request.tooth_number, "patient_type": odontogram.patient_type.value},
        )
    payload = {
        "click": event,
        "dirty": list(session.dirty),
        "odontogram": session.odontogram,
    }
    return JSONResponse(status_code=200, content=jsonable_encoder(payload))


@router.get("/notation/{tooth_number}")
def notation(tooth_number: int, system: str = "universal", is_child: bool = False) -> JSONResponse:
    try:
        numbering_system = NumberingSystem(system)
    except ValueError:
        return _error(
            400,
            "invalid_input",
            "unknown numbering system",
            {"system": system, "allowed": [member.value for member in NumberingSystem]},
        )
    patient_type = PatientType.CHILD if is_child else PatientType.ADULT
    if tooth_number not in teeth_for(patient_type):
        return _error(
            404,
            "not_found",
            "tooth is not part of this dentition",
            {"tooth_number": tooth_number, "patient_type": patient_type.value},
        )
    result = describe(tooth_number, numbering_system, is_child)
    return JSONResponse(status_code=200, content=jsonable_encoder(result))


@router.get("/legend")
def legend() -> dict:
    return {
        "conditions": jsonable_encoder(DEFAULT_PALETTE.legend()),
        "priorities": {priority.value: color for priority, color in DEFAULT_PALETTE.priority_colors.items()},
    }


@router.post("/treatment-summary")
def treatment_summary(request: TreatmentSummaryRequest) -> JSONResponse:
    try:
        odontograms = [normalize_odontogram(raw) for raw in request.odontograms]
        if request.path:
            odontograms.extend(_load_path(request.path))
    except _InputError as exc:
        return _error(exc.status, exc.code, exc.message, exc.detail)
    except ValidationError as exc:
        return _error(422, "invalid_odontogram", "odontogram failed validation", _validation_detail(exc))
    except Exception as exc:
        logger.exception("treatment summary loading failed")
        return _error(500, "internal_error", "unexpected error", {"error": str(exc)})

    if not odontograms:
        return _error(400, "invalid_input", "odontograms or path is required")

    payload = {
        "clinic_summary": aggregate_stats(odontograms),
        "patients": [
            {
                "odontogram_id": odontogram.id,
                "patient_id": odontogram.patient.id if odontogram.patient else None,
                **summarize_patient(odontogram).model_dump(mode="json"),
            }
            for odontogram in odontograms
        ],
    }
    return JSONResponse(status_code=200, content=jsonable_encoder(payload))


__all__ = ["router"]
