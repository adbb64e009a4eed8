"""
input_agent.py — intake node of the Law2Ledger pipeline.

Validates the raw request payload into a FinancialProfile. On success writes
`profile` plus any soft warnings and routes on to the summary. On failure writes
`violations` / `input_errors` and sets `should_stop`, ending the graph.
"""
from __future__ import annotations

import logging

from law2ledger.agents.input_agent.validator import (
    ProfileValidationError,
    collect_profile_warnings,
    intake_profile,
)
from law2ledger.graph.state import Law2LedgerState

logger = logging.getLogger(__name__)


async def intake_node(state: Law2LedgerState) -> dict:
    """
    Reads:
      state["raw_input"]   — request payload

    Writes:
      state["profile"]       — FinancialProfile instance
      state["warnings"]      — soft profile warnings (appended)
      state["violations"]    — [{field, issue}] on failure
      state["input_errors"]  — flattened violation messages on failure
      state["should_stop"]   — True if validation failed
    """
    try:
        profile = intake_profile(state.get("raw_input") or {})
    except ProfileValidationError as exc:
        logger.info(
            "Intake rejected session_id=%s violations=%d",
            state.get("session_id"),
            len(exc.violations),
        )
        return {
            "violations": exc.violations,
            "input_errors": [f"{v['field']}: {v['issue']}" for v in exc.violations],
            "should_stop": True,
            "current_stage": "intake",
        }

    return {
        "profile": profile,
        "warnings": collect_profile_warnings(profile),
        "should_stop": False,
        "current_stage": "intake",
    }


def route_after_intake(state: Law2LedgerState) -> str:
    """Returns "error" if should_stop is True, else "summary"."""
    if state.get("should_stop"):
        return "error"
    return "summary"
