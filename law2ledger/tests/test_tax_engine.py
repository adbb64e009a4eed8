"""
Unit tests for law2ledger.agents.evaluator_agent.tax_engine

Figures are hand-computed in demo_profiles.py. Tolerance: ±₹1.
"""
from __future__ import annotations

import pytest

from law2ledger.agents.evaluator_agent.schemas import TaxSummary
from law2ledger.agents.evaluator_agent.tax_engine import (
    calculate_80gg,
    calculate_hra_exemption,
    compute_deductions,
    derive_tax_summary,
    estimate_tax,
    tax_saving_for,
)
from law2ledger.agents.input_agent.validator import intake_profile
from law2ledger.tests.demo_profiles import DEMO_PROFILES, SCENARIO_PROFILE


@pytest.mark.parametrize("name", sorted(DEMO_PROFILES))
def test_demo_profile_summary(name: str):
    data = DEMO_PROFILES[name]
    expected = data["expected"]
    summary = derive_tax_summary(intake_profile(data["profile"]))

    assert summary.current_taxable_income == pytest.approx(expected["current_taxable_income"], abs=1)
    assert summary.potential_savings == pytest.approx(expected["potential_savings"], abs=1)
    assert summary.final_taxable_amount == pytest.approx(expected["final_taxable_amount"], abs=1)
    assert summary.estimated_tax_before == pytest.approx(expected["tax_before"], abs=1)
    assert summary.estimated_tax_after == pytest.approx(expected["tax_after"], abs=1)


@pytest.mark.parametrize("name", sorted(DEMO_PROFILES))
def test_final_equals_current_minus_savings(name: str):
    summary = derive_tax_summary(intake_profile(DEMO_PROFILES[name]["profile"]))
    assert summary.final_taxable_amount == pytest.approx(
        summary.current_taxable_income - summary.potential_savings
    )
    assert summary.final_taxable_amount >= 0


def test_scenario_deduction_breakdown():
    deductions = compute_deductions(intake_profile(SCENARIO_PROFILE))
    assert deductions.standard_deduction == 50_000
    assert deductions.section_80c == 150_000
    assert deductions.section_80ccd1b == 50_000
    assert deductions.section_80d == 25_000
    assert deductions.rent_allowance == 60_000
    assert deductions.total == 335_000


def test_clamp_records_warning():
    summary = derive_tax_summary(intake_profile(DEMO_PROFILES["kavya"]["profile"]))
    assert summary.final_taxable_amount == 0
    assert len(summary.warnings) == 1
    assert "capped at annual income" in summary.warnings[0]


def test_no_warning_without_clamp():
    summary = derive_tax_summary(intake_profile(SCENARIO_PROFILE))
    assert summary.warnings == []


def test_summary_rejects_inconsistent_amounts():
    with pytest.raises(ValueError):
        TaxSummary(current_taxable_income=100, potential_savings=10, final_taxable_amount=50)


def test_self_employed_gets_no_standard_deduction():
    deductions = compute_deductions(intake_profile(DEMO_PROFILES["arjun"]["profile"]))
    assert deductions.standard_deduction == 0


def test_nps_spills_into_80c():
    profile = intake_profile({
        "annualIncome": 1_000_000,
        "investments": {"ppf": 50_000, "nps": 80_000},
        "ageGroup": "26-35",
        "employmentType": "Salaried",
    })
    deductions = compute_deductions(profile)
    assert deductions.section_80ccd1b == 50_000
    assert deductions.section_80c == 80_000


def test_hra_exemption_three_way_minimum():
    profile = intake_profile(DEMO_PROFILES["meera"]["profile"])
    assert calculate_hra_exemption(profile) == pytest.approx(210_000)


def test_hra_exemption_zero_without_rent():
    profile = intake_profile({
        "annualIncome": 1_000_000,
        "hraReceived": 200_000,
        "ageGroup": "26-35",
        "employmentType": "Salaried",
    })
    assert calculate_hra_exemption(profile) == 0


def test_80gg_capped_at_sixty_thousand():
    profile = intake_profile(SCENARIO_PROFILE)
    assert calculate_80gg(profile) == 60_000


def test_estimate_tax_87a_rebate():
    assert estimate_tax(500_000) == 0
    assert estimate_tax(500_001) > 12_000


def test_estimate_tax_top_slab():
    # (12500 + 100000 + 60000) * 1.04
    assert estimate_tax(1_200_000) == pytest.approx(179_400)


def test_tax_saving_for_zero_deduction():
    assert tax_saving_for(1_200_000, 0) == 0


def test_tax_saving_for_within_one_slab():
    assert tax_saving_for(865_000, 100_000) == pytest.approx(100_000 * 0.20 * 1.04)


def test_derivation_is_deterministic():
    profile = intake_profile(SCENARIO_PROFILE)
    assert derive_tax_summary(profile) == derive_tax_summary(profile)
