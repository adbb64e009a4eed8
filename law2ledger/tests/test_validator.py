"""
Unit tests for law2ledger.agents.input_agent.validator

Covers structural rejection (negative amounts, empty selections, unknown
fields), the hraReceived business rule, single-pass collection of every
violation, and the soft warnings.
"""
from __future__ import annotations

import pytest

from law2ledger.agents.input_agent.schemas import AgeGroup, EmploymentType, FinancialProfile
from law2ledger.agents.input_agent.validator import (
    ProfileValidationError,
    collect_profile_warnings,
    intake_profile,
)
from law2ledger.tests.demo_profiles import MEERA_PROFILE, SCENARIO_PROFILE


def _with(**overrides):
    payload = dict(SCENARIO_PROFILE)
    payload.update(overrides)
    return payload


# ---------------------------------------------------------------------------
# Accepted input
# ---------------------------------------------------------------------------

def test_scenario_profile_accepted():
    profile = intake_profile(SCENARIO_PROFILE)
    assert isinstance(profile, FinancialProfile)
    assert profile.annual_income == 1_200_000
    assert profile.annual_rent == 300_000
    assert profile.investments.total == 275_000
    assert profile.age_group == AgeGroup.age_26_35
    assert profile.employment_type == EmploymentType.salaried
    assert profile.profile_id


def test_profile_is_immutable():
    profile = intake_profile(SCENARIO_PROFILE)
    with pytest.raises(Exception):
        profile.annual_income = 0


def test_snake_case_keys_also_accepted():
    profile = intake_profile({
        "annual_income": 500_000,
        "age_group": "46-55",
        "employment_type": "Government",
    })
    assert profile.is_employee
    assert profile.monthly_rent == 0


# ---------------------------------------------------------------------------
# Rejected input
# ---------------------------------------------------------------------------

def test_negative_income_names_the_field():
    with pytest.raises(ProfileValidationError) as exc_info:
        intake_profile(_with(annualIncome=-1))
    assert exc_info.value.fields == {"annualIncome"}


def test_negative_nested_investment_uses_dot_path():
    with pytest.raises(ProfileValidationError) as exc_info:
        intake_profile(_with(investments={"ppf": -5}))
    assert exc_info.value.fields == {"investments.ppf"}


@pytest.mark.parametrize("value", [float("inf"), float("nan")])
def test_non_finite_income_rejected(value: float):
    with pytest.raises(ProfileValidationError) as exc_info:
        intake_profile(_with(annualIncome=value))
    assert exc_info.value.fields == {"annualIncome"}


def test_non_finite_investment_uses_dot_path():
    with pytest.raises(ProfileValidationError) as exc_info:
        intake_profile(_with(investments={"ppf": float("inf")}))
    assert exc_info.value.fields == {"investments.ppf"}


@pytest.mark.parametrize(
    "field, message",
    [
        ("ageGroup", "Please select an age group"),
        ("employmentType", "Please select employment type"),
    ],
)
def test_empty_selection_message(field: str, message: str):
    with pytest.raises(ProfileValidationError) as exc_info:
        intake_profile(_with(**{field: ""}))
    violations = exc_info.value.violations
    assert len(violations) == 1
    assert violations[0]["field"] == field
    assert violations[0]["issue"] == message


def test_every_violation_reported_together():
    payload = _with(
        annualIncome=-1,
        monthlyRent=-100,
        investments={"elss": -1},
        ageGroup="",
        employmentType=None,
    )
    with pytest.raises(ProfileValidationError) as exc_info:
        intake_profile(payload)
    assert exc_info.value.fields == {
        "annualIncome",
        "monthlyRent",
        "investments.elss",
        "ageGroup",
        "employmentType",
    }


def test_unknown_field_rejected():
    with pytest.raises(ProfileValidationError) as exc_info:
        intake_profile(_with(panNumber="ABCDE1234F"))
    assert "panNumber" in exc_info.value.fields


def test_hra_above_income_rejected():
    with pytest.raises(ProfileValidationError) as exc_info:
        intake_profile(_with(annualIncome=100_000, hraReceived=200_000))
    assert exc_info.value.fields == {"hraReceived"}


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        intake_profile(_with(annualIncome=-1))


# ---------------------------------------------------------------------------
# Soft warnings
# ---------------------------------------------------------------------------

def test_scenario_warnings():
    warnings = collect_profile_warnings(intake_profile(SCENARIO_PROFILE))
    assert len(warnings) == 2
    assert any("80C" in w for w in warnings)
    assert any("80D" in w for w in warnings)


def test_nps_spill_over_warning():
    profile = intake_profile(_with(investments={"nps": 80_000}))
    warnings = collect_profile_warnings(profile)
    assert any("80CCD(1B)" in w and "₹30,000" in w for w in warnings)


def test_rent_above_income_warning():
    profile = intake_profile(_with(annualIncome=200_000, monthlyRent=20_000, investments={}))
    warnings = collect_profile_warnings(profile)
    assert any("Annual rent" in w for w in warnings)


def test_no_warnings_for_tidy_profile():
    assert collect_profile_warnings(intake_profile(MEERA_PROFILE)) == []
