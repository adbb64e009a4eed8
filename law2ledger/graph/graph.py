"""
graph.py — Law2Ledger LangGraph StateGraph orchestrator.

Builds and compiles the pipeline:
  intake → (conditional) → summary → derivation → END
                        ↘ error → END

Usage:
    from law2ledger.graph.graph import build_graph

    # At FastAPI startup:
    app.state.pipeline = build_graph()

    # At request time:
    result = await app.state.pipeline.ainvoke({"session_id": ..., "raw_input": ...})
"""
from __future__ import annotations

import logging

from langgraph.graph import END, StateGraph

from law2ledger.graph.agents.evaluator_agent import derivation_node, summary_node
from law2ledger.graph.agents.input_agent import intake_node, route_after_intake
from law2ledger.graph.state import Law2LedgerState

logger = logging.getLogger(__name__)


async def error_node(state: Law2LedgerState) -> dict:
    """Passthrough node that marks the pipeline as stopped."""
    logger.info(
        "Pipeline stopped at error node session_id=%s errors=%d",
        state.get("session_id"),
        len(state.get("input_errors") or []),
    )
    return {"current_stage": "error", "should_stop": True}


def build_graph():
    """
    Builds and compiles the Law2Ledger StateGraph.

    Conditional edge after intake:
      - "error": goes to the error node, then END (violations stay in state)
      - "summary": continues to summary → derivation
    """
    workflow = StateGraph(Law2LedgerState)

    workflow.add_node("intake", intake_node)
    workflow.add_node("summary", summary_node)
    workflow.add_node("derivation", derivation_node)
    workflow.add_node("error", error_node)

    workflow.set_entry_point("intake")

    workflow.add_conditional_edges(
        "intake",
        route_after_intake,
        {
            "error": "error",
            "summary": "summary",
        },
    )

    workflow.add_edge("summary", "derivation")
    workflow.add_edge("derivation", END)
    workflow.add_edge("error", END)

    compiled = workflow.compile()
    logger.info("Law2Ledger pipeline compiled")
    return compiled
