"""
report.py — plain-text tax summary export.

Entry point:
    build_export_report(profile, summary, suggestions, generated_on=None) -> ExportReport

The rendering is deterministic: the same profile / summary / suggestions always
produce the same text apart from the "Generated:" line.

Sections, in order:
  1. Header (product name, generation date)
  2. Financial profile
  3. Investments breakdown
  4. Tax analysis (summary figures, capped deductions, indicative tax, warnings)
  5. Suggested policies (numbered, with savings estimates)
"""
from __future__ import annotations

import datetime
import logging
from typing import Optional, Sequence

from pydantic import ConfigDict

from law2ledger.agents.evaluator_agent.schemas import PolicySuggestion, TaxSummary
from law2ledger.agents.input_agent.schemas import CamelModel, CityType, FinancialProfile
from law2ledger.config import settings

logger = logging.getLogger(__name__)

_RULE = "=" * 60
_SUB_RULE = "-" * 60
_LABEL_WIDTH = 28


class ExportPreconditionError(Exception):
    """Raised when an export is requested before profile, summary and suggestions exist."""


class ExportReport(CamelModel):
    """Read-only text rendering of one session's results."""
    model_config = ConfigDict(frozen=True)

    generated_on: datetime.date
    filename: str
    content: str


def export_filename(generated_on: datetime.date, extension: str = "txt") -> str:
    """<product-name>-Tax-Summary-<ISO date>.<ext>"""
    return f"{settings.app_name}-Tax-Summary-{generated_on.isoformat()}.{extension}"


def ensure_export_inputs(
    profile: Optional[FinancialProfile],
    summary: Optional[TaxSummary],
    suggestions: Optional[Sequence[PolicySuggestion]],
) -> None:
    """Raise ExportPreconditionError naming whatever is missing."""
    missing = [
        name
        for name, value in (
            ("financial profile", profile),
            ("tax summary", summary),
            ("policy suggestions", suggestions),
        )
        if value is None
    ]
    if missing:
        raise ExportPreconditionError(
            "Cannot export summary: no " + ", ".join(missing)
            + " available. Please submit your financial profile first."
        )


def _money(value: float) -> str:
    return f"₹{value:,.0f}"


def _line(label: str, value: str) -> str:
    return f"{label + ':':<{_LABEL_WIDTH}}{value}"


def _section(title: str) -> list[str]:
    return ["", title, _SUB_RULE]


def render_text_report(
    profile: FinancialProfile,
    summary: TaxSummary,
    suggestions: Sequence[PolicySuggestion],
    generated_on: datetime.date,
) -> str:
    lines = [
        f"{settings.app_name} - Tax Summary Report",
        f"Generated: {generated_on.isoformat()}",
        _RULE,
    ]

    lines += _section("FINANCIAL PROFILE")
    lines += [
        _line("Annual Income", _money(profile.annual_income)),
        _line("Monthly Rent", _money(profile.monthly_rent)),
        _line("HRA Received", _money(profile.hra_received)),
        _line("City Type", "Metro" if profile.city_type == CityType.metro else "Non-metro"),
        _line("Insurance Premiums", _money(profile.insurance_premiums)),
        _line("Age Group", profile.age_group.value),
        _line("Employment Type", profile.employment_type.value),
    ]

    inv = profile.investments
    lines += _section("INVESTMENTS BREAKDOWN")
    lines += [
        _line("PPF", _money(inv.ppf)),
        _line("ELSS", _money(inv.elss)),
        _line("NPS", _money(inv.nps)),
        _line("Other", _money(inv.other)),
        _line("Total Investments", _money(inv.total)),
    ]

    ded = summary.deductions
    lines += _section("TAX ANALYSIS")
    lines += [
        _line("Current Taxable Income", _money(summary.current_taxable_income)),
        _line("Potential Savings", _money(summary.potential_savings)),
        _line("Final Taxable Amount", _money(summary.final_taxable_amount)),
        "",
        "Deductions applied:",
        _line("  Standard Deduction", _money(ded.standard_deduction)),
        _line("  Section 80C", _money(ded.section_80c)),
        _line("  Section 80CCD(1B)", _money(ded.section_80ccd1b)),
        _line("  Section 80D", _money(ded.section_80d)),
        _line("  Rent Allowance", _money(ded.rent_allowance)),
        "",
        _line("Estimated Tax Before", _money(summary.estimated_tax_before)),
        _line("Estimated Tax After", _money(summary.estimated_tax_after)),
        _line("Estimated Tax Saved", _money(summary.estimated_tax_saved)),
    ]
    if summary.warnings:
        lines.append("")
        lines.append("Warnings:")
        lines += [f"  ! {w}" for w in summary.warnings]

    lines += _section("SUGGESTED POLICIES")
    if not suggestions:
        lines.append("No applicable suggestions for this profile.")
    for i, suggestion in enumerate(suggestions, start=1):
        lines.append(
            f"{i}. {suggestion.title} [{suggestion.category.value}] - {suggestion.estimated_savings}"
        )
        lines.append(f"   {suggestion.description}")

    lines += [
        "",
        _RULE,
        "Figures are indicative old-regime estimates. Please verify with a "
        "Chartered Accountant before filing.",
    ]
    return "\n".join(lines) + "\n"


def build_export_report(
    profile: Optional[FinancialProfile],
    summary: Optional[TaxSummary],
    suggestions: Optional[Sequence[PolicySuggestion]],
    generated_on: Optional[datetime.date] = None,
) -> ExportReport:
    """
    Render the plain-text export.

    Raises:
        ExportPreconditionError: if profile, summary or suggestions is None.
            No partial report is produced.
    """
    ensure_export_inputs(profile, summary, suggestions)
    generated_on = generated_on or datetime.date.today()

    report = ExportReport(
        generated_on=generated_on,
        filename=export_filename(generated_on),
        content=render_text_report(profile, summary, suggestions, generated_on),
    )
    logger.info(
        "Text report generated profile_id=%s suggestions=%d",
        profile.profile_id,
        len(suggestions),
    )
    return report
