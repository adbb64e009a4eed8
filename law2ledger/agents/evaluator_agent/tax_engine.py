"""
Law2Ledger Tax Engine — AY 2025-26 (old regime deductions)
Pure Python, deterministic. Same input → same output. No I/O.

Derives the TaxSummary for a FinancialProfile:
  current_taxable_income = annual_income
  potential_savings      = sum of capped deductions, clamped at current_taxable_income
  final_taxable_amount   = current_taxable_income - potential_savings   (never negative)

The slab tax computed here is INDICATIVE ONLY — it prices the before/after
chart and the suggestion savings strings. It is not a filing computation.
"""
from __future__ import annotations

import logging

from law2ledger.agents.input_agent.schemas import CityType, FinancialProfile
from law2ledger.agents.evaluator_agent.schemas import DeductionBreakdown, TaxSummary

logger = logging.getLogger(__name__)

# ===========================================================================
# DEDUCTION CAP CONSTANTS
# ===========================================================================

STD_DEDUCTION            = 50_000     # Salaried / government, old regime

CAP_80C                  = 150_000    # PPF + ELSS + other + NPS spill-over
CAP_80CCD1B              = 50_000     # Additional NPS deduction
CAP_80D                  = 25_000     # Self/family health insurance, under 60
CAP_80CCD2_PCT           = 0.10       # Employer NPS, % of salary
CAP_24B                  = 200_000    # Home loan interest, self-occupied

# HRA exemption: Section 10(13A), Rule 2A
HRA_METRO_PCT            = 0.50
HRA_NON_METRO_PCT        = 0.40
RENT_EXCESS_PCT          = 0.10       # rent paid minus 10% of income (HRA and 80GG)

# Section 80GG: renters who receive no HRA
CAP_80GG_ANNUAL          = 60_000     # ₹5,000 per month
CAP_80GG_INCOME_PCT      = 0.25

CESS_RATE                = 0.04

# ===========================================================================
# 87A REBATE PARAMETERS: old regime
# ===========================================================================

OLD_87A_MAX_REBATE       = 12_500
OLD_87A_TAXABLE_CEILING  = 500_000

# ===========================================================================
# SLAB TABLE: list[tuple[ceiling, rate]]
# ===========================================================================

OLD_REGIME_SLABS: list[tuple[float, float]] = [
    (250_000,      0.00),   # 0–2.5L: 0%
    (500_000,      0.05),   # 2.5–5L: 5%
    (1_000_000,    0.20),   # 5–10L: 20%
    (float("inf"), 0.30),   # >10L: 30%
]


# ===========================================================================
# SLAB HELPERS (pure functions: no side effects, no I/O)
# ===========================================================================

def _calculate_slab_tax(taxable_income: float, slabs: list[tuple[float, float]]) -> float:
    """
    Apply progressive slab tax to taxable_income using a bracket-list pattern.
    Accumulates tax on each bracket, stops when taxable_income <= previous ceiling.
    """
    tax = 0.0
    prev_ceiling = 0.0
    for ceiling, rate in slabs:
        if taxable_income <= prev_ceiling:
            break
        slab_income = min(taxable_income, ceiling) - prev_ceiling
        tax += slab_income * rate
        prev_ceiling = ceiling
    return tax


def _apply_87a(taxable_income: float, tax: float) -> float:
    """
    If taxable_income <= ₹5,00,000: rebate = min(tax, ₹12,500) → net = tax - rebate.
    Above ₹5,00,000: no rebate, full tax applies.
    """
    if taxable_income <= OLD_87A_TAXABLE_CEILING:
        return max(0.0, tax - min(tax, OLD_87A_MAX_REBATE))
    return tax


def estimate_tax(taxable_income: float) -> float:
    """Old-regime slab tax after 87A rebate, plus 4% cess. Rounded to 2 dp."""
    taxable_income = max(0.0, taxable_income)
    tax_after_87a = _apply_87a(taxable_income, _calculate_slab_tax(taxable_income, OLD_REGIME_SLABS))
    return round(tax_after_87a * (1 + CESS_RATE), 2)


def tax_saving_for(taxable_income: float, extra_deduction: float) -> float:
    """Tax saved by deducting extra_deduction more from taxable_income."""
    if extra_deduction <= 0:
        return 0.0
    reduced = max(0.0, taxable_income - extra_deduction)
    return round(estimate_tax(taxable_income) - estimate_tax(reduced), 2)


# ===========================================================================
# DEDUCTION HELPERS
# ===========================================================================

def hra_ceiling(profile: FinancialProfile) -> float:
    """
    Largest HRA exemption the rent could support if the salary carried enough HRA:
    min(50%/40% of income, max(0, annual rent - 10% of income)).
    """
    city_pct = HRA_METRO_PCT if profile.city_type == CityType.metro else HRA_NON_METRO_PCT
    rent_excess = max(0.0, profile.annual_rent - RENT_EXCESS_PCT * profile.annual_income)
    return min(city_pct * profile.annual_income, rent_excess)


def calculate_hra_exemption(profile: FinancialProfile) -> float:
    """
    HRA exemption under Section 10(13A), Rule 2A — employees only.
    Minimum of: HRA received, 50%/40% of income, rent paid - 10% of income.
    Returns 0 if no HRA received or no rent paid.
    """
    if not profile.is_employee or profile.hra_received == 0 or profile.monthly_rent == 0:
        return 0.0
    return min(profile.hra_received, hra_ceiling(profile))


def calculate_80gg(profile: FinancialProfile) -> float:
    """
    Section 80GG — rent paid by someone who receives no HRA.
    Minimum of: ₹60,000 a year, 25% of income, rent paid - 10% of income.
    """
    if profile.monthly_rent == 0:
        return 0.0
    rent_excess = max(0.0, profile.annual_rent - RENT_EXCESS_PCT * profile.annual_income)
    return min(CAP_80GG_ANNUAL, CAP_80GG_INCOME_PCT * profile.annual_income, rent_excess)


def calculate_rent_allowance(profile: FinancialProfile) -> float:
    """HRA for employees whose salary carries it; 80GG for everyone else who pays rent."""
    if profile.is_employee and profile.hra_received > 0:
        return calculate_hra_exemption(profile)
    return calculate_80gg(profile)


def compute_deductions(profile: FinancialProfile) -> DeductionBreakdown:
    """Capped deductions available to the profile as submitted."""
    inv = profile.investments

    ded_std = float(STD_DEDUCTION) if profile.is_employee else 0.0

    # NPS fills 80CCD(1B) first; anything above the cap competes for 80C room
    ded_80ccd1b = min(inv.nps, CAP_80CCD1B)
    nps_spill = inv.nps - ded_80ccd1b
    ded_80c = min(inv.ppf + inv.elss + inv.other + nps_spill, CAP_80C)

    ded_80d = min(profile.insurance_premiums, CAP_80D)
    ded_rent = calculate_rent_allowance(profile)

    return DeductionBreakdown(
        standard_deduction=ded_std,
        section_80c=ded_80c,
        section_80ccd1b=ded_80ccd1b,
        section_80d=ded_80d,
        rent_allowance=ded_rent,
    )


# ===========================================================================
# TAX SUMMARY: public API
# ===========================================================================

def derive_tax_summary(profile: FinancialProfile) -> TaxSummary:
    """
    Derive the before/after taxable-income summary for a profile.

    Computation sequence:
      1. current_taxable_income = annual_income
      2. eligible deductions = capped breakdown (compute_deductions)
      3. potential_savings = min(eligible, current)   ← clamp, with a warning
      4. final_taxable_amount = current - potential_savings
      5. indicative old-regime tax before / after
    """
    current = float(profile.annual_income)
    deductions = compute_deductions(profile)
    eligible = deductions.total

    warnings: list[str] = []
    if eligible > current:
        warnings.append(
            f"Eligible deductions (₹{eligible:,.0f}) exceed annual income (₹{current:,.0f}); "
            "potential savings are capped at annual income."
        )
        logger.warning("Deductions clamped at income profile_id=%s", profile.profile_id)
    potential = min(eligible, current)
    final = current - potential

    tax_before = estimate_tax(current)
    tax_after = estimate_tax(final)

    return TaxSummary(
        current_taxable_income=current,
        potential_savings=potential,
        final_taxable_amount=final,
        deductions=deductions,
        estimated_tax_before=tax_before,
        estimated_tax_after=tax_after,
        estimated_tax_saved=round(tax_before - tax_after, 2),
        warnings=warnings,
    )
