"""
store.py — Dashboard session facade for Law2Ledger.

All routes use these functions — no route touches the session client directly.

Design principles:
  - All functions are async and accept the session client (cache.SessionClient)
  - Sessions are serialised with by_alias=True, mode="json" and read back with
    model_validate, so the stored JSON matches what the API returns
  - Logs only session_id / profile_id — never income or investment values
  - Returns domain Pydantic objects so callers are backend-agnostic
"""
import datetime
import logging
import uuid
from typing import List, Optional

from pydantic import ConfigDict, Field

from law2ledger.agents.evaluator_agent.schemas import PolicySuggestion, TaxSummary
from law2ledger.agents.input_agent.schemas import CamelModel, FinancialProfile
from law2ledger.cache import SessionClient, delete_session_data, get_session_data, set_session_data
from law2ledger.dashboard.navigation import NavigationState

logger = logging.getLogger(__name__)


class DashboardSession(CamelModel):
    """
    One dashboard visit: navigation state plus whatever the pipeline produced.
    Lives only in the session store, with a TTL.
    """
    model_config = ConfigDict(frozen=True)

    session_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    navigation: NavigationState = Field(default_factory=NavigationState)
    profile: Optional[FinancialProfile] = None
    suggestions: Optional[List[PolicySuggestion]] = None
    tax_summary: Optional[TaxSummary] = None
    created_at: datetime.datetime = Field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )


async def create_session(client: SessionClient) -> DashboardSession:
    """Create and persist a fresh session in the profile tab."""
    session = DashboardSession()
    await save_session(client, session)
    logger.info("Created session session_id=%s", session.session_id)
    return session


async def get_session(client: SessionClient, session_id: str) -> Optional[DashboardSession]:
    """Returns None if the session expired or never existed (caller raises 404)."""
    data = await get_session_data(client, session_id)
    if data is None:
        return None
    return DashboardSession.model_validate(data)


async def save_session(client: SessionClient, session: DashboardSession) -> None:
    await set_session_data(
        client,
        session.session_id,
        session.model_dump(by_alias=True, mode="json"),
    )


async def delete_session(client: SessionClient, session_id: str) -> bool:
    return await delete_session_data(client, session_id)
