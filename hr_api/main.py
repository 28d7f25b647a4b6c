from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, List
from urllib.parse import quote

import numpy as np
import pandas as pd
from fastapi import FastAPI, File, Query, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from hr_api.schemas import DashboardFiltersModel, EmployeeModel, EmployeesRequest, ViewRequest
from hr_dashboard.data import load_dashboard_data, prepare_context
from hr_dashboard.employee import Employee
from hr_dashboard.errors import UnsupportedFileTypeError, WorkbookParseError
from hr_dashboard.filters import DashboardFilters, normalize_filters
from hr_dashboard.metrics_birthdays import compute_birthdays
from hr_dashboard.metrics_map import compute_map
from hr_dashboard.metrics_overtime import compute_overtime
from hr_dashboard.metrics_overview import compute_overview
from hr_dashboard.metrics_profile import compute_profile
from hr_dashboard.metrics_salary import compute_salary
from hr_dashboard.sample_data import DEFAULT_SAMPLE_SIZE, generate_sample_data
from hr_dashboard.workbook import TEMPLATE_FILENAME, build_template_workbook, load_employee_workbook

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

app = FastAPI(title="HR Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

VIEWS: Dict[str, Callable[..., Dict[str, Any]]] = {
    "overview": compute_overview,
    "birthdays": compute_birthdays,
    "salary": compute_salary,
    "map": compute_map,
    "profile": compute_profile,
    "overtime": compute_overtime,
}


def _filters_from_model(model: DashboardFiltersModel) -> DashboardFilters:
    return normalize_filters(model.model_dump())


def _employees(models: List[EmployeeModel]) -> List[Employee]:
    return [m.to_employee() for m in models]


def _error(status_code: int, exc: Exception, message: str | None = None) -> JSONResponse:
    content = {"error": message or str(exc), "type": type(exc).__name__}
    return JSONResponse(status_code=status_code, content=content)


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/employees/upload")
async def upload_employees(file: UploadFile = File(...)):
    try:
        content = await file.read()
        employees = load_employee_workbook(file.filename or "", content)
        return _json({"employees": [e.to_record() for e in employees], "count": len(employees)})
    except UnsupportedFileTypeError as exc:
        return _error(400, exc, exc.user_message)
    except WorkbookParseError as exc:
        return _error(422, exc, exc.user_message)
    except Exception as exc:
        logger.exception("upload_employees failed")
        return _error(500, exc)


@app.get("/employees/sample")
def sample_employees(count: int = Query(default=DEFAULT_SAMPLE_SIZE, ge=1, le=10_000)):
    try:
        employees = generate_sample_data(count)
        return _json({"employees": [e.to_record() for e in employees], "count": len(employees)})
    except Exception as exc:
        logger.exception("sample_employees failed")
        return _error(500, exc)


@app.get("/template")
def template():
    content = build_template_workbook()
    disposition = f"attachment; filename*=UTF-8''{quote(TEMPLATE_FILENAME)}"
    return Response(content=content, media_type=XLSX_MEDIA_TYPE, headers={"Content-Disposition": disposition})


@app.post("/filters/options")
def filters_options(body: EmployeesRequest):
    try:
        data_ctx = load_dashboard_data(_employees(body.employees))
        return _json({"options": data_ctx["options"], "total": data_ctx["total"]})
    except Exception as exc:
        logger.exception("filters_options failed")
        return _error(500, exc)


@app.post("/views/{view}")
def view(view: str, body: ViewRequest):
    compute = VIEWS.get(view)
    if compute is None:
        return JSONResponse(status_code=404, content={"error": f"unknown view: {view}", "type": "NotFound"})
    try:
        data_ctx = load_dashboard_data(_employees(body.employees))
        f = _filters_from_model(body.filters)
        ctx = prepare_context(f, data_ctx)
        payload = compute(f, ctx, **body.options)
        payload["shown"] = ctx["shown"]
        payload["total"] = ctx["total"]
        return _json(payload)
    except (KeyError, ValueError, TypeError) as exc:
        logger.warning("%s view rejected options %r: %s", view, body.options, exc)
        return _error(400, exc)
    except Exception as exc:
        logger.exception("%s view failed", view)
        return _error(500, exc)
