"""
dependencies.py — FastAPI dependencies shared by the routers.

The lifespan hook puts the session client and the compiled pipeline on
app.state. When the app is driven without lifespan (httpx ASGITransport in
tests, for example) both are created lazily on first use instead.
"""
import logging

from fastapi import HTTPException, Request

from law2ledger.cache import SessionClient, create_session_client
from law2ledger.store import DashboardSession, get_session

logger = logging.getLogger(__name__)


async def get_session_client(request: Request) -> SessionClient:
    client = getattr(request.app.state, "session_client", None)
    if client is None:
        logger.warning("session_client not initialised by lifespan — creating one")
        client = await create_session_client()
        request.app.state.session_client = client
    return client


def get_pipeline(request: Request):
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        from law2ledger.graph.graph import build_graph

        logger.warning("pipeline not compiled by lifespan — compiling now")
        pipeline = build_graph()
        request.app.state.pipeline = pipeline
    return pipeline


async def require_session(client: SessionClient, session_id: str) -> DashboardSession:
    """Load a session or raise 404."""
    session = await get_session(client, session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")
    return session
