from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from apps.api.routers.chart import router as chart_router
from dentchart.core.config import Settings
from dentchart.core.logs import configure_logging
from dentchart.core.palette import ConditionPalette

configure_logging(Settings.from_env().log_level)

app = FastAPI(title="Dental Chart API")
app.include_router(chart_router)


@app.get("/")
def root() -> dict:
    return {
        "name": "dentchart",
        "status": "ok",
        "endpoints": [
            "/healthz",
            "/readyz",
            "/v1/chart",
            "/v1/chart/click",
            "/v1/notation/{tooth_number}",
            "/v1/legend",
            "/v1/treatment-summary",
        ],
    }


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok"}


@app.get("/readyz")
def readyz() -> JSONResponse:
    try:
        missing = ConditionPalette().missing_conditions()
        if missing:
            raise RuntimeError(f"palette has no color for: {', '.join(c.value for c in missing)}")
    except Exception as exc:
        return JSONResponse(status_code=500, content={"status": "error", "detail": str(exc)})
    return JSONResponse(status_code=200, content={"status": "ok"})


__all__ = ["app"]
