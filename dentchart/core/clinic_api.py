from __future__ import annotations

import json
import logging
import random
import time
import urllib.error
import urllib.parse
import urllib.request
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

from dentchart.core.config import Settings
from dentchart.core.schemas.odontogram import Odontogram, ToothCondition, TreatmentSummary
from dentchart.core.schemas.result import (
    OdontogramHistory,
    OdontogramPage,
    OdontogramPatientSummary,
    OdontogramStats,
    Pagination,
    PatientTreatmentSummary,
)
from dentchart.ingest.normalizer import (
    normalize_odontogram,
    odontogram_to_payload,
    tooth_condition_payload,
)

logger = logging.getLogger(__name__)

RETRY_STATUSES = {429, 503}
RECENT_DAYS = 30


class ClinicApiError(RuntimeError):
    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class OdontogramNotFound(ClinicApiError):
    pass


def _read_http_error_body(error: urllib.error.HTTPError) -> str:
    try:
        body_bytes = error.read()
    except Exception:
        return ""
    try:
        return body_bytes.decode("utf-8", errors="replace")
    except Exception:
        return ""


def _error_message(body_text: str) -> Optional[str]:
    try:
        body = json.loads(body_text)
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def _query(params: Optional[Mapping[str, Any]]) -> str:
    if not params:
        return ""
    cleaned = {key: str(value) for key, value in params.items() if value is not None and value != ""}
    return f"?{urllib.parse.urlencode(cleaned)}" if cleaned else ""


def _data(body: Any) -> dict:
    data = body.get("data") if isinstance(body, dict) else None
    return data if isinstance(data, dict) else {}


class OdontogramApiClient:
    """Client for the clinic backend's ``/odontograms`` resource."""

    def __init__(self, settings: Optional[Settings] = None, **overrides: Any) -> None:
        settings = settings or Settings.from_env()
        if overrides:
            settings = settings.model_copy(update=overrides)
        self.settings = settings
        self.base_url = settings.base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.settings.token:
            headers["Authorization"] = f"Bearer {self.settings.token}"
        if self.settings.clinic_id:
            headers["X-Clinic-Id"] = self.settings.clinic_id
        return headers

    def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[Mapping[str, Any]] = None,
        not_found: Optional[str] = None,
    ) -> Any:
        url = f"{self.base_url}{path}{_query(params)}"
        data = json.dumps(body).encode("utf-8") if body is not None else None
        request = urllib.request.Request(url, data=data, headers=self._headers(), method=method)

        max_retries = self.settings.max_retries
        for attempt in range(max_retries + 1):
            try:
                with urllib.request.urlopen(request, timeout=self.settings.timeout) as response:
                    status = response.getcode()
                    content_type = (
                        response.headers.get("Content-Type", "unknown")
                        if response.headers
                        else "unknown"
                    )
                    raw = response.read()
                text = raw.decode("utf-8", errors="replace")
                if not text.strip():
                    return {}
                try:
                    return json.loads(text)
                except ValueError as exc:
                    raise ClinicApiError(
                        "Clinic API non-JSON response: "
                        f"status={status} content_type={content_type} url={url} "
                        f"body_preview={text[:500]}",
                        status=status,
                    ) from exc
            except urllib.error.HTTPError as exc:
                body_text = _read_http_error_body(exc)
                status = getattr(exc, "code", None)
                retry_after = exc.headers.get("Retry-After") if exc.headers else None
                if retry_after is not None:
                    try:
                        retry_after = float(retry_after)
                    except ValueError:
                        retry_after = None

                if status in RETRY_STATUSES and attempt < max_retries:
                    backoff = 2**attempt
                    jitter = random.random() * 0.25
                    delay = retry_after if retry_after is not None else backoff
                    logger.warning(
                        "clinic api %s %s returned %s; retrying in %.2fs (attempt %d/%d)",
                        method, path, status, delay + jitter, attempt + 1, max_retries,
                    )
                    time.sleep(delay + jitter)
                    continue

                if status == 404 and not_found:
                    raise OdontogramNotFound(not_found, status=404) from exc

                content_type = exc.headers.get("Content-Type", "unknown") if exc.headers else "unknown"
                preview = body_text.strip()[:500]
                server_message = _error_message(body_text)
                logger.error("clinic api %s %s failed with status %s", method, path, status)
                raise ClinicApiError(
                    "Clinic API HTTPError: "
                    f"status={status} content_type={content_type} url={url} "
                    + (f"message={server_message} " if server_message else "")
                    + f"body_preview={preview}",
                    status=status,
                ) from exc
            except urllib.error.URLError as exc:
                if attempt < max_retries:
                    delay = 2**attempt + random.random() * 0.25
                    logger.warning(
                        "clinic api %s %s network error (%s); retrying in %.2fs",
                        method, path, exc.reason, delay,
                    )
                    time.sleep(delay)
                    continue
                raise ClinicApiError(
                    f"Clinic API request failed: url={url} error={type(exc).__name__}: {exc.reason}"
                ) from exc

        raise ClinicApiError("Clinic API request failed after retries")

    def _odontogram(self, body: Any) -> Odontogram:
        record = _data(body).get("odontogram")
        if not isinstance(record, dict):
            raise ClinicApiError("Clinic API response is missing data.odontogram")
        return normalize_odontogram(record)

    def list_odontograms(self, filters: Optional[Mapping[str, Any]] = None) -> OdontogramPage:
        data = _data(self._request("GET", "/odontograms", params=filters))
        return OdontogramPage(
            odontograms=[normalize_odontogram(item) for item in data.get("odontograms") or []],
            pagination=Pagination.model_validate(data.get("pagination") or {}),
        )

    def get_odontogram(self, odontogram_id: str) -> Odontogram:
        body = self._request("GET", f"/odontograms/{odontogram_id}", not_found="Odontogram not found")
        return self._odontogram(body)

    def get_active_for_patient(self, patient_id: str) -> Odontogram:
        body = self._request(
            "GET",
            f"/odontograms/patient/{patient_id}/active",
            not_found="No active odontogram found for this patient",
        )
        return self._odontogram(body)

    def has_active_odontogram(self, patient_id: str) -> bool:
        try:
            self.get_active_for_patient(patient_id)
        except OdontogramNotFound:
            return False
        return True

    def get_history(
        self, patient_id: str, page: Optional[int] = None, limit: Optional[int] = None
    ) -> OdontogramHistory:
        data = _data(
            self._request(
                "GET",
                f"/odontograms/patient/{patient_id}/history",
                params={"page": page, "limit": limit},
            )
        )
        patient = data.get("patient")
        return OdontogramHistory(
            patient=(
                OdontogramPatientSummary(
                    id=patient.get("_id") or patient.get("id"),
                    full_name=patient.get("full_name"),
                    age=patient.get("age"),
                )
                if isinstance(patient, dict)
                else None
            ),
            odontograms=[normalize_odontogram(item) for item in data.get("odontograms") or []],
            pagination=Pagination.model_validate(data.get("pagination") or {}),
        )

    def create_odontogram(self, patient_id: str, odontogram: Odontogram) -> Odontogram:
        body = self._request(
            "POST", f"/odontograms/patient/{patient_id}", body=odontogram_to_payload(odontogram)
        )
        return self._odontogram(body)

    def update_odontogram(self, odontogram_id: str, odontogram: Odontogram) -> Odontogram:
        body = self._request(
            "PUT",
            f"/odontograms/{odontogram_id}",
            body=odontogram_to_payload(odontogram, include_version=True),
            not_found="Odontogram not found",
        )
        return self._odontogram(body)

    def update_tooth_condition(self, odontogram_id: str, tooth: ToothCondition) -> Odontogram:
        body = self._request(
            "PUT",
            f"/odontograms/{odontogram_id}/tooth/{tooth.tooth_number}",
            body=tooth_condition_payload(tooth),
            not_found="Odontogram not found",
        )
        return self._odontogram(body)

    def create_tooth_condition(self, odontogram_id: str, tooth: ToothCondition) -> Odontogram:
        # the backend upserts on the same route
        return self.update_tooth_condition(odontogram_id, tooth)

    def set_active(self, odontogram_id: str) -> Odontogram:
        body = self._request(
            "PATCH", f"/odontograms/{odontogram_id}/activate", not_found="Odontogram not found"
        )
        return self._odontogram(body)

    def delete_odontogram(self, odontogram_id: str) -> None:
        self._request("DELETE", f"/odontograms/{odontogram_id}", not_found="Odontogram not found")

    def get_treatment_summary(self) -> OdontogramStats:
        data = _data(self._request("GET", "/odontograms/summary/treatment"))
        return OdontogramStats.model_validate(data.get("clinic_summary") or {})

    def get_patient_treatment_summary(self, patient_id: str) -> PatientTreatmentSummary:
        data = _data(self._request("GET", f"/odontograms/patient/{patient_id}/summary"))
        return PatientTreatmentSummary(
            patient_summary=TreatmentSummary.model_validate(data.get("patient_summary") or {}),
            treatment_progress=data.get("treatment_progress") or 0,
            pending_treatments=data.get("pending_treatments") or 0,
        )

    def get_recent_odontograms(self, limit: int = 10, now: Optional[datetime] = None) -> list[Odontogram]:
        now = now or datetime.now(timezone.utc)
        start = now - timedelta(days=RECENT_DAYS)
        page = self.list_odontograms({"start_date": start.isoformat(), "limit": limit})
        return page.odontograms


__all__ = ["ClinicApiError", "OdontogramNotFound", "OdontogramApiClient"]
