"""
Unit tests for the text and PDF exports.
"""
from __future__ import annotations

import datetime

import pytest

from law2ledger.agents.evaluator_agent.pdf_generator import generate_pdf_report
from law2ledger.agents.evaluator_agent.policy_rules import derive_suggestions
from law2ledger.agents.evaluator_agent.report import (
    ExportPreconditionError,
    build_export_report,
    export_filename,
)
from law2ledger.agents.evaluator_agent.tax_engine import derive_tax_summary
from law2ledger.agents.input_agent.validator import intake_profile
from law2ledger.tests.demo_profiles import DEMO_PROFILES, SCENARIO_PROFILE

GENERATED_ON = datetime.date(2025, 7, 1)


@pytest.fixture
def scenario_inputs():
    profile = intake_profile(SCENARIO_PROFILE)
    summary = derive_tax_summary(profile)
    return profile, summary, derive_suggestions(profile, summary)


def test_export_filename():
    assert export_filename(GENERATED_ON) == "Law2Ledger-Tax-Summary-2025-07-01.txt"
    assert export_filename(GENERATED_ON, "pdf") == "Law2Ledger-Tax-Summary-2025-07-01.pdf"


def test_text_report_sections(scenario_inputs):
    report = build_export_report(*scenario_inputs, generated_on=GENERATED_ON)
    content = report.content

    assert report.filename == "Law2Ledger-Tax-Summary-2025-07-01.txt"
    assert report.generated_on == GENERATED_ON
    assert content.startswith("Law2Ledger - Tax Summary Report\nGenerated: 2025-07-01\n")

    sections = ["FINANCIAL PROFILE", "INVESTMENTS BREAKDOWN", "TAX ANALYSIS", "SUGGESTED POLICIES"]
    positions = [content.index(s) for s in sections]
    assert positions == sorted(positions)

    assert "₹1,200,000" in content
    assert "₹865,000" in content
    assert "1. Home Loan Interest Deduction [Investment] - Save up to ₹41,600" in content
    assert "3. Employer NPS Contribution [Government Scheme] - Save up to ₹24,960" in content
    assert "Section 80GG" not in content


def test_text_report_without_suggestions():
    profile = intake_profile(DEMO_PROFILES["arjun"]["profile"])
    summary = derive_tax_summary(profile)
    report = build_export_report(profile, summary, [], generated_on=GENERATED_ON)
    assert "No applicable suggestions for this profile." in report.content


def test_text_report_lists_warnings():
    profile = intake_profile(DEMO_PROFILES["kavya"]["profile"])
    summary = derive_tax_summary(profile)
    report = build_export_report(profile, summary, [], generated_on=GENERATED_ON)
    assert "Warnings:" in report.content
    assert "capped at annual income" in report.content


def test_export_differs_only_in_date(scenario_inputs):
    first = build_export_report(*scenario_inputs, generated_on=GENERATED_ON)
    again = build_export_report(*scenario_inputs, generated_on=GENERATED_ON)
    later = build_export_report(*scenario_inputs, generated_on=datetime.date(2025, 7, 2))

    assert first.content == again.content
    assert first.content != later.content
    assert first.content.replace("2025-07-01", "2025-07-02") == later.content


@pytest.mark.parametrize("missing", [0, 1, 2])
def test_export_requires_every_input(scenario_inputs, missing: int):
    inputs = list(scenario_inputs)
    inputs[missing] = None
    with pytest.raises(ExportPreconditionError):
        build_export_report(*inputs, generated_on=GENERATED_ON)


def test_pdf_report_is_pdf(scenario_inputs):
    buffer = generate_pdf_report(*scenario_inputs, generated_on=GENERATED_ON)
    assert buffer.tell() == 0
    assert buffer.read(5) == b"%PDF-"


def test_pdf_report_without_suggestions():
    profile = intake_profile(DEMO_PROFILES["arjun"]["profile"])
    summary = derive_tax_summary(profile)
    buffer = generate_pdf_report(profile, summary, [], generated_on=GENERATED_ON)
    assert buffer.getvalue().startswith(b"%PDF-")


def test_pdf_requires_profile(scenario_inputs):
    _, summary, suggestions = scenario_inputs
    with pytest.raises(ExportPreconditionError):
        generate_pdf_report(None, summary, suggestions)
