"""
state.py — Shared Law2LedgerState TypedDict for the LangGraph pipeline.

This is the single source of truth that flows through the pipeline nodes:
  intake → summary → derivation

Every node reads from and writes to this state. LangGraph merges the updates
returned by each node automatically.
"""
from __future__ import annotations

import operator
from typing import Annotated, Any, Optional

from typing_extensions import TypedDict


class Law2LedgerState(TypedDict, total=False):
    """
    Shared state passed through all nodes of the Law2Ledger pipeline.

    'total=False' means all fields are optional at graph construction time —
    each node adds/overwrites only the fields it is responsible for.
    """

    # ---- Raw input (set before graph.ainvoke) -------------------------------
    session_id: str
    raw_input: dict                      # Request payload, camelCase keys

    # ---- intake outputs -----------------------------------------------------
    profile: Optional[Any]               # FinancialProfile instance
    violations: list[dict]               # [{field, issue}] when intake rejects the input
    input_errors: Annotated[list[str], operator.add]

    # ---- derivation outputs -------------------------------------------------
    suggestions: list[Any]               # list[PolicySuggestion], sorted by saving

    # ---- summary outputs ----------------------------------------------------
    tax_summary: Optional[Any]           # TaxSummary instance

    # ---- Control flow -------------------------------------------------------
    warnings: Annotated[list[str], operator.add]   # Profile and derivation warnings
    current_stage: str                   # "intake" | "summary" | "derivation" | "error"
    should_stop: bool                    # True if intake rejected the input
