# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""FastAPI router with REST endpoints for the TCO calculator."""

from __future__ import annotations

import json
from typing import Any

from cooling_tco.api import check_dependency

check_dependency("fastapi", "pip install -e '.[api]'")

from fastapi import APIRouter, Depends, Request  # noqa: E402

from cooling_tco.api.metrics import RequestMetrics  # noqa: E402
from cooling_tco.api.models import (  # noqa: E402
    CalculationResponse,
    ErrorResponse,
    HealthResponse,
    build_response,
)
from cooling_tco.engine import TCOEngine  # noqa: E402
from cooling_tco.errors import MalformedInputError  # noqa: E402

router = APIRouter(prefix="/api/v1", tags=["cooling-tco"])


# ---------------------------------------------------------------------------
# Dependency injection: engine and metrics live on app.state
# ---------------------------------------------------------------------------

def get_engine(request: Request) -> TCOEngine:
    """Return the engine configured by :func:`create_app`."""
    return request.app.state.engine


def get_metrics(request: Request) -> RequestMetrics:
    """Return the request counters configured by :func:`create_app`."""
    return request.app.state.metrics


async def _read_json(request: Request) -> Any:
    """Parse the request body; an empty body means all defaults."""
    body = await request.body()
    if not body.strip():
        return {}
    # JSONDecodeError, UnicodeDecodeError and the int digit limit are all ValueError
    try:
        return json.loads(body)
    except ValueError as exc:
        raise MalformedInputError(f"Request body is not valid JSON: {exc}") from exc


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/health", response_model=HealthResponse)
async def health(metrics: RequestMetrics = Depends(get_metrics)) -> HealthResponse:
    """Return service health, version, and request counters."""
    import cooling_tco

    return HealthResponse(
        status="ok",
        version=cooling_tco.__version__,
        uptime_seconds=round(metrics.uptime_seconds, 3),
        request_count=metrics.request_count,
        error_count=metrics.error_count,
    )


@router.post(
    "/calculate",
    response_model=CalculationResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def calculate(
    request: Request,
    engine: TCOEngine = Depends(get_engine),
    metrics: RequestMetrics = Depends(get_metrics),
) -> CalculationResponse:
    """Compare air and immersion cooling and return the TCO breakdown.

    Every body field is optional; omitted fields take documented
    defaults.  Malformed bodies return 400 and out-of-range fields 422.
    """
    metrics.record_request()
    payload = await _read_json(request)
    result = engine.calculate(payload)
    return build_response(result)
