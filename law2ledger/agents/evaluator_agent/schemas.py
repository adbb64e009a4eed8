"""
schemas.py — Derivation-stage Pydantic v2 data contracts.

Defines:
  - DeductionBreakdown   (capped deductions that make up potentialSavings)
  - TaxSummary           (current / potential savings / final taxable income)
  - SuggestionCategory   (Investment, Insurance, Allowance, Government Scheme)
  - PolicySuggestion     (one derived tax-saving suggestion)

All models serialise with camelCase aliases (see CamelModel).
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict, Field, model_validator

from law2ledger.agents.input_agent.schemas import CamelModel


# ---------------------------------------------------------------------------
# DeductionBreakdown: itemised deductions applied to the profile
# ---------------------------------------------------------------------------

class DeductionBreakdown(CamelModel):
    """
    All values are the ACTUAL deduction applied (after caps), not the raw input.
    For example, section_80c=150000 means ₹1.5L was applied even if input was ₹2.25L.
    """
    model_config = ConfigDict(frozen=True)

    # Explicit aliases: to_camel would turn "section_80c" into "section80C"
    standard_deduction: float = 0     # ₹50K: salaried / government only
    section_80c: float = Field(default=0, alias="section80c")           # PPF + ELSS + other + NPS spill-over, cap ₹1,50,000
    section_80ccd1b: float = Field(default=0, alias="section80ccd1b")   # NPS, cap ₹50,000
    section_80d: float = Field(default=0, alias="section80d")           # Health insurance, cap ₹25,000
    rent_allowance: float = 0         # HRA 10(13A) for employees, 80GG otherwise

    @property
    def total(self) -> float:
        return (
            self.standard_deduction
            + self.section_80c
            + self.section_80ccd1b
            + self.section_80d
            + self.rent_allowance
        )


# ---------------------------------------------------------------------------
# TaxSummary: public output of derive_tax_summary()
# ---------------------------------------------------------------------------

class TaxSummary(CamelModel):
    """
    Before/after view of taxable income.

    Invariant (checked on construction):
        final_taxable_amount == current_taxable_income - potential_savings
        final_taxable_amount >= 0

    potential_savings is clamped at current_taxable_income; when the clamp
    engages a warning is recorded instead of letting the final amount go negative.
    """
    model_config = ConfigDict(frozen=True)

    current_taxable_income: float = Field(..., ge=0)
    potential_savings: float = Field(..., ge=0)
    final_taxable_amount: float = Field(..., ge=0)

    deductions: DeductionBreakdown = Field(default_factory=DeductionBreakdown)

    # Indicative old-regime slab tax incl. 87A rebate and 4% cess
    estimated_tax_before: float = Field(default=0, ge=0)
    estimated_tax_after: float = Field(default=0, ge=0)
    estimated_tax_saved: float = Field(default=0, ge=0)

    warnings: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def final_amount_matches(self) -> "TaxSummary":
        expected = self.current_taxable_income - self.potential_savings
        if abs(self.final_taxable_amount - expected) > 0.01:
            raise ValueError(
                f"final_taxable_amount ({self.final_taxable_amount}) must equal "
                f"current_taxable_income - potential_savings ({expected})"
            )
        return self


# ---------------------------------------------------------------------------
# PolicySuggestion: one rule's output for a profile
# ---------------------------------------------------------------------------

class SuggestionCategory(str, Enum):
    investment = "Investment"
    insurance = "Insurance"
    allowance = "Allowance"
    government_scheme = "Government Scheme"


class PolicySuggestion(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    estimated_savings: str                 # e.g. "Save up to ₹46,800"
    estimated_savings_amount: float = Field(..., ge=0)
    description: str
    category: SuggestionCategory
    section: str                           # e.g. "Section 80C"
    details: Optional[str] = None
    eligibility: Optional[str] = None
    official_link: Optional[str] = None


__all__ = [
    "DeductionBreakdown",
    "TaxSummary",
    "SuggestionCategory",
    "PolicySuggestion",
]
