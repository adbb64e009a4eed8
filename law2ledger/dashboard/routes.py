"""
Dashboard HTTP routes — POST /api/session,
                        GET  /api/session/{session_id},
                        DELETE /api/session/{session_id},
                        POST /api/session/{session_id}/navigate,
                        GET  /api/session/{session_id}/suggestions,
                        GET  /api/session/{session_id}/tax-summary
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import JSONResponse

from law2ledger.agents.input_agent.schemas import CamelModel
from law2ledger.cache import SessionClient
from law2ledger.dashboard.navigation import NavigationError, Tab, select_tab
from law2ledger.dependencies import get_session_client, require_session
from law2ledger.store import create_session, delete_session, save_session

router = APIRouter(prefix="/api/session", tags=["dashboard"])
logger = logging.getLogger(__name__)


class NavigateRequest(CamelModel):
    tab: Tab


@router.post("", status_code=201)
async def new_session(client: SessionClient = Depends(get_session_client)) -> JSONResponse:
    """Create a session in the profile tab."""
    session = await create_session(client)
    return JSONResponse(status_code=201, content=session.model_dump(by_alias=True, mode="json"))


@router.get("/{session_id}")
async def read_session(
    session_id: str,
    client: SessionClient = Depends(get_session_client),
) -> JSONResponse:
    session = await require_session(client, session_id)
    return JSONResponse(status_code=200, content=session.model_dump(by_alias=True, mode="json"))


@router.delete("/{session_id}", status_code=204)
async def discard_session(
    session_id: str,
    client: SessionClient = Depends(get_session_client),
) -> Response:
    """Start over: drop the session and everything the pipeline recorded on it."""
    if not await delete_session(client, session_id):
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")
    return Response(status_code=204)


@router.post("/{session_id}/navigate")
async def navigate(
    session_id: str,
    body: NavigateRequest,
    client: SessionClient = Depends(get_session_client),
) -> JSONResponse:
    """
    Switch the active tab.

    Returns:
      200: new navigation state
      404: unknown session
      409: tab is locked (suggestions before a profile, visual before a summary)
    """
    session = await require_session(client, session_id)
    try:
        navigation = select_tab(session.navigation, body.tab)
    except NavigationError as exc:
        logger.info("Navigation rejected session_id=%s tab=%s", session_id, body.tab.value)
        raise HTTPException(status_code=409, detail=exc.message)

    session = session.model_copy(update={"navigation": navigation})
    await save_session(client, session)
    return JSONResponse(status_code=200, content=navigation.model_dump(by_alias=True, mode="json"))


@router.get("/{session_id}/suggestions")
async def read_suggestions(
    session_id: str,
    client: SessionClient = Depends(get_session_client),
) -> JSONResponse:
    session = await require_session(client, session_id)
    if session.suggestions is None:
        raise HTTPException(
            status_code=404,
            detail="No suggestions yet. Submit your financial profile first.",
        )
    return JSONResponse(
        status_code=200,
        content=[s.model_dump(by_alias=True, mode="json") for s in session.suggestions],
    )


@router.get("/{session_id}/tax-summary")
async def read_tax_summary(
    session_id: str,
    client: SessionClient = Depends(get_session_client),
) -> JSONResponse:
    session = await require_session(client, session_id)
    if session.tax_summary is None:
        raise HTTPException(
            status_code=404,
            detail="No tax summary yet. Submit your financial profile first.",
        )
    return JSONResponse(
        status_code=200,
        content=session.tax_summary.model_dump(by_alias=True, mode="json"),
    )
