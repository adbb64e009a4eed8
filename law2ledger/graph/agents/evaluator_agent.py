"""
evaluator_agent.py — summary and derivation nodes of the Law2Ledger pipeline.

Both nodes are thin wrappers over pure functions:
  summary    → tax_engine.derive_tax_summary(profile)
  derivation → policy_rules.derive_suggestions(profile, tax_summary)

summary runs first, so suggestions are priced against the very TaxSummary the
session records and the summary is derived once per run.
"""
from __future__ import annotations

import logging

from law2ledger.agents.evaluator_agent.policy_rules import derive_suggestions
from law2ledger.agents.evaluator_agent.tax_engine import derive_tax_summary
from law2ledger.graph.state import Law2LedgerState

logger = logging.getLogger(__name__)


async def summary_node(state: Law2LedgerState) -> dict:
    profile = state["profile"]
    summary = derive_tax_summary(profile)
    logger.info(
        "Summary derived session_id=%s profile_id=%s warnings=%d",
        state.get("session_id"),
        profile.profile_id,
        len(summary.warnings),
    )
    return {
        "tax_summary": summary,
        "warnings": list(summary.warnings),
        "current_stage": "summary",
    }


async def derivation_node(state: Law2LedgerState) -> dict:
    suggestions = derive_suggestions(state["profile"], state["tax_summary"])
    return {"suggestions": suggestions, "current_stage": "derivation"}
