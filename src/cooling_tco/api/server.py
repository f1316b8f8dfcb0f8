# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""FastAPI application factory for the TCO calculator REST API."""

from __future__ import annotations

import logging

from cooling_tco.api import check_dependency

check_dependency("fastapi", "pip install -e '.[api]'")

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402

from cooling_tco.api.metrics import RequestMetrics  # noqa: E402
from cooling_tco.api.models import ErrorResponse  # noqa: E402
from cooling_tco.api.routes import router  # noqa: E402
from cooling_tco.engine import TCOEngine  # noqa: E402
from cooling_tco.errors import MalformedInputError, ValidationError  # noqa: E402

logger = logging.getLogger(__name__)


def _error_response(request: Request, status_code: int, body: ErrorResponse) -> JSONResponse:
    request.app.state.metrics.record_error()
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


async def _handle_malformed(request: Request, exc: MalformedInputError) -> JSONResponse:
    logger.warning("Rejected malformed request: %s", exc)
    return _error_response(
        request, 400, ErrorResponse(error="malformed_input", detail=str(exc))
    )


async def _handle_validation(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning("Rejected invalid request field %s: %s", exc.field, exc.detail)
    return _error_response(
        request, 422,
        ErrorResponse(error="validation_error", detail=str(exc), field=exc.field),
    )


def create_app(
    engine: TCOEngine | None = None,
    metrics: RequestMetrics | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    engine:
        Calculation engine; a default :class:`TCOEngine` when omitted.
    metrics:
        Request counters reported by ``/api/v1/health``; a fresh
        :class:`RequestMetrics` when omitted.

    Returns
    -------
    FastAPI
        A fully configured application instance with CORS middleware,
        error handlers, and all API routes included.
    """
    import cooling_tco

    app = FastAPI(
        title="Cooling TCO API",
        description=(
            "REST API comparing the total cost of ownership of air and "
            "immersion cooling for data centers."
        ),
        version=cooling_tco.__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.engine = engine or TCOEngine()
    app.state.metrics = metrics or RequestMetrics()

    # CORS: allow all origins for development; tighten in production
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(MalformedInputError, _handle_malformed)
    app.add_exception_handler(ValidationError, _handle_validation)
    app.include_router(router)

    return app
