"""
Profile intake HTTP route — POST /api/profile

Runs the LangGraph pipeline (intake → summary → derivation) for one dashboard
session and records the results on it. The session's loading flag brackets
the pipeline run: a second submission while it is set gets 409, and a failed
or timed-out run clears it without touching anything else.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from law2ledger.agents.input_agent.schemas import ErrorBody, ErrorDetail, ErrorResponse
from law2ledger.cache import SessionClient
from law2ledger.config import settings
from law2ledger.dashboard.navigation import (
    NavigationError,
    start_submission,
    submission_failed,
    submission_succeeded,
)
from law2ledger.dependencies import get_pipeline, get_session_client, require_session
from law2ledger.store import DashboardSession, create_session, get_session, save_session

router = APIRouter(prefix="/api", tags=["input_agent"])
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _error_response(
    status_code: int,
    code: str,
    message: str,
    violations: Optional[list[dict[str, Any]]] = None,
) -> JSONResponse:
    details = [ErrorDetail(field=v.get("field"), issue=v["issue"]) for v in violations or []]
    body = ErrorResponse(error=ErrorBody(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def _latest(client: SessionClient, session: DashboardSession) -> DashboardSession:
    """Re-read the session: navigation may have moved while the pipeline ran."""
    return await get_session(client, session.session_id) or session


async def _clear_loading(client: SessionClient, session: DashboardSession) -> None:
    session = await _latest(client, session)
    session = session.model_copy(update={"navigation": submission_failed(session.navigation)})
    await save_session(client, session)


# ---------------------------------------------------------------------------
# POST /api/profile
# ---------------------------------------------------------------------------

@router.post("/profile")
async def submit_profile(
    request: Request,
    payload: dict = Body(...),
    session_id: Optional[str] = Query(default=None),
    client: SessionClient = Depends(get_session_client),
) -> JSONResponse:
    """
    Submit a financial profile.

    Without session_id a new session is created for the submission.

    Returns:
      200: {sessionId, profileId, suggestions, taxSummary, warnings, navigation}
      400: VALIDATION_ERROR with one detail per failing field
      404: unknown session_id
      409: a submission for this session is already in progress
      504: pipeline did not finish within PIPELINE_TIMEOUT_SECONDS
    """
    if session_id is None:
        session = await create_session(client)
    else:
        session = await require_session(client, session_id)

    try:
        navigation = start_submission(session.navigation)
    except NavigationError as exc:
        raise HTTPException(status_code=409, detail=exc.message)

    session = session.model_copy(update={"navigation": navigation})
    await save_session(client, session)

    pipeline = get_pipeline(request)
    initial_state = {
        "session_id": session.session_id,
        "raw_input": payload,
        "input_errors": [],
        "warnings": [],
        "should_stop": False,
        "current_stage": "intake",
    }

    logger.info("Invoking pipeline session_id=%s", session.session_id)
    try:
        final_state = await asyncio.wait_for(
            pipeline.ainvoke(initial_state),
            timeout=settings.pipeline_timeout_seconds,
        )
    except asyncio.TimeoutError:
        logger.error(
            "Pipeline timed out after %.1fs session_id=%s",
            settings.pipeline_timeout_seconds,
            session.session_id,
        )
        await _clear_loading(client, session)
        return _error_response(
            504,
            "PIPELINE_TIMEOUT",
            "Profile processing took too long. Please try again.",
        )
    except Exception:
        await _clear_loading(client, session)
        raise

    if final_state.get("should_stop"):
        await _clear_loading(client, session)
        return _error_response(
            400,
            "VALIDATION_ERROR",
            "Profile validation failed",
            final_state.get("violations", []),
        )

    profile = final_state["profile"]
    suggestions = final_state["suggestions"]
    tax_summary = final_state["tax_summary"]

    session = await _latest(client, session)
    session = session.model_copy(update={
        "navigation": submission_succeeded(session.navigation),
        "profile": profile,
        "suggestions": suggestions,
        "tax_summary": tax_summary,
    })
    await save_session(client, session)

    logger.info(
        "Profile processed session_id=%s profile_id=%s suggestions=%d",
        session.session_id,
        profile.profile_id,
        len(suggestions),
    )

    return JSONResponse(
        status_code=200,
        content={
            "sessionId": session.session_id,
            "profileId": profile.profile_id,
            "suggestions": [s.model_dump(by_alias=True, mode="json") for s in suggestions],
            "taxSummary": tax_summary.model_dump(by_alias=True, mode="json"),
            "warnings": final_state.get("warnings", []),
            "navigation": session.navigation.model_dump(by_alias=True, mode="json"),
        },
    )
