"""
Law2Ledger policy rules — tax-saving suggestions derived per profile.
Pure functions. No I/O.

Each PolicyRule pairs an applicability predicate and a savings estimator with
static descriptive text. derive_suggestions() evaluates the whole table once
per profile and returns the applicable rules as PolicySuggestion values,
sorted by estimated rupee saving (descending; table order breaks ties).

Savings are priced against the profile's final taxable amount with the
indicative slab tax in tax_engine, so they reflect the profile's own bracket.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from law2ledger.agents.evaluator_agent.schemas import (
    PolicySuggestion,
    SuggestionCategory,
    TaxSummary,
)
from law2ledger.agents.evaluator_agent.tax_engine import (
    CAP_24B,
    CAP_80C,
    CAP_80CCD1B,
    CAP_80CCD2_PCT,
    CAP_80D,
    calculate_80gg,
    derive_tax_summary,
    hra_ceiling,
    tax_saving_for,
)
from law2ledger.agents.input_agent.schemas import FinancialProfile
from law2ledger.config import settings

logger = logging.getLogger(__name__)

OFFICIAL_PORTAL = "https://www.incometax.gov.in"


@dataclass(frozen=True)
class PolicyRule:
    """One row of the rule table."""
    id: str
    section: str
    title: str
    category: SuggestionCategory
    description: str
    applies: Callable[[FinancialProfile, TaxSummary], bool]
    estimate: Callable[[FinancialProfile, TaxSummary], float]
    details: Optional[str] = None
    eligibility: Optional[str] = None
    official_link: Optional[str] = OFFICIAL_PORTAL

    def evaluate(self, profile: FinancialProfile, summary: TaxSummary) -> Optional[PolicySuggestion]:
        """Return a suggestion, or None when the rule does not apply."""
        if not self.applies(profile, summary):
            return None
        saving = round(self.estimate(profile, summary))
        return PolicySuggestion(
            id=self.id,
            title=self.title,
            estimated_savings=f"Save up to ₹{saving:,.0f}",
            estimated_savings_amount=saving,
            description=self.description,
            category=self.category,
            section=self.section,
            details=self.details,
            eligibility=self.eligibility,
            official_link=self.official_link,
        )


# ---------------------------------------------------------------------------
# Headroom helpers: unused deduction room per provision
# ---------------------------------------------------------------------------

def _headroom_80c(profile: FinancialProfile, summary: TaxSummary) -> float:
    return CAP_80C - summary.deductions.section_80c


def _headroom_80d(profile: FinancialProfile, summary: TaxSummary) -> float:
    return CAP_80D - summary.deductions.section_80d


def _headroom_80ccd1b(profile: FinancialProfile, summary: TaxSummary) -> float:
    return CAP_80CCD1B - summary.deductions.section_80ccd1b


def _headroom_hra(profile: FinancialProfile, summary: TaxSummary) -> float:
    # HRA and 80GG are mutually exclusive: only the improvement counts
    return max(0.0, hra_ceiling(profile) - summary.deductions.rent_allowance)


def _saving(headroom: Callable[[FinancialProfile, TaxSummary], float]):
    def estimate(profile: FinancialProfile, summary: TaxSummary) -> float:
        return tax_saving_for(summary.final_taxable_amount, headroom(profile, summary))
    return estimate


def _receives_hra(profile: FinancialProfile) -> bool:
    return profile.is_employee and profile.hra_received > 0


def _headroom_80gg(profile: FinancialProfile, summary: TaxSummary) -> float:
    # 80GG already counted in rent_allowance leaves no room to suggest
    return max(0.0, calculate_80gg(profile) - summary.deductions.rent_allowance)


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------

POLICY_RULES: tuple[PolicyRule, ...] = (
    PolicyRule(
        id="section_80c",
        section="Section 80C",
        title="Section 80C – Investment Deductions",
        category=SuggestionCategory.investment,
        description=(
            "Invest in PPF, ELSS, NSC, or life insurance premiums to claim deductions "
            "up to ₹1.5 lakh."
        ),
        details=(
            "PPF, ELSS mutual funds, NSC, tax-saver fixed deposits, life insurance premiums "
            "and children's tuition fees all share one ₹1,50,000 limit."
        ),
        eligibility="Individuals and HUFs filing under the old regime.",
        applies=lambda p, s: _headroom_80c(p, s) > 0,
        estimate=_saving(_headroom_80c),
    ),
    PolicyRule(
        id="section_80d",
        section="Section 80D",
        title="Section 80D – Health Insurance Premium",
        category=SuggestionCategory.insurance,
        description=(
            "Claim deductions for health insurance premiums paid for yourself and family members."
        ),
        details="Premiums for self, spouse and dependent children qualify up to ₹25,000 a year.",
        eligibility="Premium paid by any mode other than cash.",
        applies=lambda p, s: _headroom_80d(p, s) > 0,
        estimate=_saving(_headroom_80d),
    ),
    PolicyRule(
        id="section_80ccd1b",
        section="Section 80CCD(1B)",
        title="NPS – Additional Retirement Deduction",
        category=SuggestionCategory.government_scheme,
        description=(
            "Contribute to the National Pension System for an extra ₹50,000 deduction "
            "over and above Section 80C."
        ),
        details="Tier-I NPS contributions qualify; the deduction sits outside the 80C limit.",
        eligibility="Any individual aged 18–70 with an NPS Tier-I account.",
        applies=lambda p, s: _headroom_80ccd1b(p, s) > 0,
        estimate=_saving(_headroom_80ccd1b),
    ),
    PolicyRule(
        id="hra_exemption",
        section="Section 10(13A)",
        title="HRA Exemption",
        category=SuggestionCategory.allowance,
        description=(
            "House Rent Allowance exemption based on your monthly rent and salary structure."
        ),
        details=(
            "Exempt amount is the lowest of: HRA received, 50% of salary (metro) or 40% "
            "(non-metro), and rent paid minus 10% of salary."
        ),
        eligibility="Salaried and government employees who pay rent and receive HRA.",
        applies=lambda p, s: p.is_employee and p.monthly_rent > 0 and _headroom_hra(p, s) > 0,
        estimate=_saving(_headroom_hra),
    ),
    PolicyRule(
        id="section_80gg",
        section="Section 80GG",
        title="Section 80GG – Rent Paid Without HRA",
        category=SuggestionCategory.allowance,
        description=(
            "Deduct rent paid when your income carries no House Rent Allowance."
        ),
        details=(
            "Deduction is the lowest of: ₹5,000 a month, 25% of total income, and rent paid "
            "minus 10% of total income. File Form 10BA with your return."
        ),
        eligibility="Self-employed individuals, and employees who receive no HRA.",
        applies=lambda p, s: p.monthly_rent > 0 and not _receives_hra(p) and _headroom_80gg(p, s) > 0,
        estimate=_saving(_headroom_80gg),
    ),
    PolicyRule(
        id="section_80ccd2",
        section="Section 80CCD(2)",
        title="Employer NPS Contribution",
        category=SuggestionCategory.government_scheme,
        description=(
            "Ask your employer to route part of your salary into NPS — employer contributions "
            "up to 10% of salary are deductible."
        ),
        details="Deductible in both the old and new regimes, outside the 80C limit.",
        eligibility="Salaried and government employees whose employer offers corporate NPS.",
        applies=lambda p, s: p.is_employee and p.annual_income > 0,
        estimate=lambda p, s: tax_saving_for(s.final_taxable_amount, CAP_80CCD2_PCT * p.annual_income),
    ),
    PolicyRule(
        id="section_24b",
        section="Section 24(b)",
        title="Home Loan Interest Deduction",
        category=SuggestionCategory.investment,
        description=(
            "Interest paid on a home loan for a self-occupied property is deductible up to ₹2 lakh a year."
        ),
        details="Principal repayment on the same loan also counts toward Section 80C.",
        eligibility="Owners of a self-occupied house bought or built with a housing loan.",
        applies=lambda p, s: s.final_taxable_amount > 0,
        estimate=_saving(lambda p, s: CAP_24B),
    ),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def derive_suggestions(
    profile: FinancialProfile,
    summary: Optional[TaxSummary] = None,
    *,
    max_suggestions: Optional[int] = None,
    min_saving: Optional[float] = None,
) -> list[PolicySuggestion]:
    """
    Evaluate every rule against the profile and return the applicable ones.

    Suppresses suggestions saving less than min_saving (default ₹1,000) and
    returns at most max_suggestions, sorted by saving descending.
    """
    if summary is None:
        summary = derive_tax_summary(profile)
    if max_suggestions is None:
        max_suggestions = settings.max_suggestions
    if min_saving is None:
        min_saving = settings.min_suggestion_saving

    candidates: list[PolicySuggestion] = []
    for rule in POLICY_RULES:
        suggestion = rule.evaluate(profile, summary)
        if suggestion is not None and suggestion.estimated_savings_amount >= min_saving:
            candidates.append(suggestion)

    # sort() is stable: rules with equal savings keep table order
    candidates.sort(key=lambda s: s.estimated_savings_amount, reverse=True)
    suggestions = candidates[:max_suggestions]

    logger.info(
        "Suggestions derived profile_id=%s applicable=%d returned=%d",
        profile.profile_id,
        len(candidates),
        len(suggestions),
    )
    return suggestions
