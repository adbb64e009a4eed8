"""
main.py — Law2Ledger FastAPI application entry point.

Start with: uvicorn law2ledger.main:app --reload --port 8000
(run from the project root)
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from law2ledger.agents.evaluator_agent.report import ExportPreconditionError
from law2ledger.agents.input_agent.validator import ProfileValidationError
from law2ledger.config import settings
from law2ledger.dashboard.navigation import NavigationError

# ---------------------------------------------------------------------------
# Logging: configured before anything else
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan: startup & shutdown hooks
# ---------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup:
      1. Session store client (in-process or Redis, per SESSION_BACKEND)
      2. Compile the LangGraph pipeline
    Shutdown:
      1. Close the session client
    """
    from law2ledger.cache import create_session_client
    from law2ledger.graph.graph import build_graph

    app.state.session_client = await create_session_client()
    app.state.pipeline = build_graph()

    logger.info(
        "%s v%s starting up session_backend=%s",
        settings.app_name,
        settings.app_version,
        settings.session_backend,
    )
    yield

    await app.state.session_client.aclose()
    logger.info("Session client closed")
    logger.info("%s shutting down", settings.app_name)


# ---------------------------------------------------------------------------
# FastAPI application instance
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Law2Ledger API",
    version=settings.app_version,
    description=(
        "Tax-planning dashboard for Indian individual taxpayers. Takes a self-reported "
        "financial profile and returns tax-saving policy suggestions, a before/after "
        "taxable-income summary and a downloadable report."
    ),
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# ---------------------------------------------------------------------------
# CORS middleware: restricted to dashboard origins from settings
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Error response helper
# ---------------------------------------------------------------------------
def _make_error_response(
    code: str,
    message: str,
    details: list[dict[str, Any]] | None = None,
    status_code: int = 500,
) -> JSONResponse:
    """Build a standard {error: {code, message, details}} response."""
    body = {
        "error": {
            "code": code,
            "message": message,
            "details": details or [],
        }
    }
    return JSONResponse(status_code=status_code, content=body)


# ---------------------------------------------------------------------------
# Global exception handlers: registered BEFORE routers
# ---------------------------------------------------------------------------
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Converts FastAPI request-shape validation errors (bad query params, malformed
    bodies) to standard format. Profile field errors use ProfileValidationError (400).
    """
    details = []
    for error in exc.errors():
        # Build dot-notation field path, excluding the top-level 'body' loc
        field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
        details.append({"field": field or None, "issue": error["msg"]})
    return _make_error_response(
        code="VALIDATION_ERROR",
        message="Request validation failed",
        details=details,
        status_code=422,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Converts FastAPI HTTPException to standard error format with semantic code.
    """
    code_map = {
        400: "BAD_REQUEST",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        409: "CONFLICT",
        422: "VALIDATION_ERROR",
        504: "PIPELINE_TIMEOUT",
    }
    code = code_map.get(exc.status_code, f"HTTP_{exc.status_code}")
    return _make_error_response(
        code=code,
        message=str(exc.detail),
        status_code=exc.status_code,
    )


@app.exception_handler(ProfileValidationError)
async def profile_validation_handler(
    request: Request, exc: ProfileValidationError
) -> JSONResponse:
    """Every field violation is listed, structural and business-rule alike."""
    return _make_error_response(
        code="VALIDATION_ERROR",
        message="Profile validation failed",
        details=exc.violations,
        status_code=400,
    )


@app.exception_handler(NavigationError)
async def navigation_error_handler(
    request: Request, exc: NavigationError
) -> JSONResponse:
    return _make_error_response(code="CONFLICT", message=exc.message, status_code=409)


@app.exception_handler(ExportPreconditionError)
async def export_precondition_handler(
    request: Request, exc: ExportPreconditionError
) -> JSONResponse:
    return _make_error_response(code="NOT_FOUND", message=str(exc), status_code=404)


@app.exception_handler(ValueError)
async def value_error_handler(
    request: Request, exc: ValueError
) -> JSONResponse:
    """
    Catches explicit ValueError raises from business logic.
    Surfaces as 422 VALIDATION_ERROR so the caller understands it's a data issue.
    """
    return _make_error_response(
        code="VALIDATION_ERROR",
        message=str(exc),
        status_code=422,
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """
    Catch-all for unexpected errors.
    DEBUG=true  → includes exception type & message in details (dev only).
    DEBUG=false → generic message; full traceback logged server-side only.
    """
    logger.error(
        "Unhandled exception on %s %s",
        request.method,
        request.url.path,
        exc_info=True,
    )
    if settings.debug:
        details = [{"issue": f"{type(exc).__name__}: {exc}"}]
        message = "An unexpected error occurred (debug details included)"
    else:
        details = []
        message = "An unexpected error occurred"
    return _make_error_response(
        code="INTERNAL_ERROR",
        message=message,
        details=details,
        status_code=500,
    )


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------
@app.get("/api/health", tags=["System"])
async def health_check() -> dict:
    """Returns service health status."""
    return {
        "status": "ok",
        "version": settings.app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from law2ledger.agents.input_agent.routes import router as input_agent_router
from law2ledger.agents.evaluator_agent.routes import router as evaluator_agent_router
from law2ledger.dashboard.routes import router as dashboard_router

app.include_router(input_agent_router)
app.include_router(evaluator_agent_router)
app.include_router(dashboard_router)
