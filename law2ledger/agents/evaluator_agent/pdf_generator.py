"""
pdf_generator.py — Law2Ledger PDF tax summary.

Builds the same sections as the plain-text export using reportlab PLATYPUS.
Output is a BytesIO buffer (no temp file on disk).

Entry point:
    generate_pdf_report(profile, summary, suggestions, generated_on=None) -> BytesIO

buffer.seek(0) is called after doc.build(story) — reportlab leaves the buffer
position at the end after writing.

Colour palette:
  - #D5F5E3  GREEN_LIGHT  Potential savings row, suggestion savings column
  - #F2F2F2  GREY_LIGHT   Table headers
"""
from __future__ import annotations

import datetime
import logging
from io import BytesIO
from typing import Optional, Sequence

from reportlab.lib.colors import HexColor, black
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    KeepTogether,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from law2ledger.agents.evaluator_agent.report import ensure_export_inputs
from law2ledger.agents.evaluator_agent.schemas import PolicySuggestion, TaxSummary
from law2ledger.agents.input_agent.schemas import FinancialProfile
from law2ledger.config import settings

logger = logging.getLogger(__name__)

GREEN_LIGHT = HexColor("#D5F5E3")
GREY_LIGHT  = HexColor("#F2F2F2")

_BASE_TABLE_STYLE = [
    ("GRID", (0, 0), (-1, -1), 0.5, black),
    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
    ("ALIGN", (0, 0), (0, -1), "LEFT"),
    ("TOPPADDING", (0, 0), (-1, -1), 4),
    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ("LEFTPADDING", (0, 0), (0, -1), 6),
]


def _money(value: float) -> str:
    return f"₹{value:,.0f}"


def _two_column_table(rows: list[list[str]], extra_style: Optional[list] = None) -> Table:
    t = Table(rows, colWidths=[100 * mm, 60 * mm])
    t.setStyle(TableStyle(_BASE_TABLE_STYLE + (extra_style or [])))
    return t


def _build_profile_table(profile: FinancialProfile) -> Table:
    inv = profile.investments
    rows = [
        ["Annual Income", _money(profile.annual_income)],
        ["Monthly Rent", _money(profile.monthly_rent)],
        ["HRA Received", _money(profile.hra_received)],
        ["Insurance Premiums", _money(profile.insurance_premiums)],
        ["Age Group", profile.age_group.value],
        ["Employment Type", profile.employment_type.value],
        ["PPF", _money(inv.ppf)],
        ["ELSS", _money(inv.elss)],
        ["NPS", _money(inv.nps)],
        ["Other Investments", _money(inv.other)],
        ["Total Investments", _money(inv.total)],
    ]
    return _two_column_table(rows, [("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold")])


def _build_summary_table(summary: TaxSummary) -> Table:
    """
    Summary figures first (savings row highlighted), then the capped deductions
    and the indicative tax before / after.
    """
    ded = summary.deductions
    rows = [
        ["Current Taxable Income", _money(summary.current_taxable_income)],
        ["Potential Savings", _money(summary.potential_savings)],
        ["Final Taxable Amount", _money(summary.final_taxable_amount)],
        ["Standard Deduction", _money(ded.standard_deduction)],
        ["Section 80C", _money(ded.section_80c)],
        ["Section 80CCD(1B)", _money(ded.section_80ccd1b)],
        ["Section 80D", _money(ded.section_80d)],
        ["Rent Allowance (HRA / 80GG)", _money(ded.rent_allowance)],
        ["Estimated Tax Before", _money(summary.estimated_tax_before)],
        ["Estimated Tax After", _money(summary.estimated_tax_after)],
        ["Estimated Tax Saved", _money(summary.estimated_tax_saved)],
    ]
    return _two_column_table(rows, [
        ("BACKGROUND", (0, 1), (-1, 1), GREEN_LIGHT),
        ("FONTNAME", (0, 2), (-1, 2), "Helvetica-Bold"),
        ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
    ])


def _build_suggestion_table(suggestions: Sequence[PolicySuggestion], styles) -> Table:
    header = ["#", "Suggestion", "Category", "Estimate"]
    body = [
        [
            str(i),
            Paragraph(f"<b>{s.title}</b><br/>{s.description}", styles["Normal"]),
            s.category.value,
            s.estimated_savings,
        ]
        for i, s in enumerate(suggestions, start=1)
    ]
    t = Table([header] + body, colWidths=[8 * mm, 92 * mm, 32 * mm, 38 * mm], repeatRows=1)
    t.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), GREY_LIGHT),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("BACKGROUND", (3, 1), (3, -1), GREEN_LIGHT),
        ("GRID", (0, 0), (-1, -1), 0.5, black),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("ALIGN", (3, 0), (3, -1), "RIGHT"),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]))
    return t


def generate_pdf_report(
    profile: Optional[FinancialProfile],
    summary: Optional[TaxSummary],
    suggestions: Optional[Sequence[PolicySuggestion]],
    generated_on: Optional[datetime.date] = None,
) -> BytesIO:
    """
    Generate the PDF tax summary.

    Raises:
        ExportPreconditionError: if profile, summary or suggestions is None.

    Returns:
        BytesIO buffer at position 0, ready for StreamingResponse.
    """
    ensure_export_inputs(profile, summary, suggestions)
    generated_on = generated_on or datetime.date.today()

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=20 * mm,
        bottomMargin=20 * mm,
        title=f"{settings.app_name} Tax Summary",
    )

    styles = getSampleStyleSheet()
    story = []

    # 1. Header
    title_style = ParagraphStyle(
        "report_title",
        parent=styles["Heading1"],
        fontSize=18,
        fontName="Helvetica-Bold",
    )
    story.append(Paragraph(f"{settings.app_name} - Tax Summary Report", title_style))
    story.append(Spacer(1, 2 * mm))
    story.append(
        Paragraph(f"Generated: {generated_on.strftime('%d %B %Y')}", styles["Normal"])
    )
    story.append(Spacer(1, 6 * mm))

    # 2–3. Profile and investments
    profile_heading = Paragraph("Financial Profile", styles["Heading2"])
    story.append(KeepTogether([profile_heading, Spacer(1, 2 * mm), _build_profile_table(profile)]))
    story.append(Spacer(1, 6 * mm))

    # 4. Tax analysis
    summary_heading = Paragraph("Tax Analysis", styles["Heading2"])
    story.append(KeepTogether([summary_heading, Spacer(1, 2 * mm), _build_summary_table(summary)]))
    for warning in summary.warnings:
        story.append(Paragraph(f"Note: {warning}", styles["Italic"]))
    story.append(Spacer(1, 6 * mm))

    # 5. Suggestions
    story.append(Paragraph("Suggested Policies", styles["Heading2"]))
    story.append(Spacer(1, 2 * mm))
    if suggestions:
        story.append(_build_suggestion_table(suggestions, styles))
    else:
        story.append(Paragraph("No applicable suggestions for this profile.", styles["Normal"]))

    # Disclaimer
    disclaimer_style = ParagraphStyle(
        "disclaimer",
        parent=styles["Normal"],
        fontSize=8,
        textColor=black,
    )
    story.append(Spacer(1, 10 * mm))
    story.append(
        Paragraph(
            "Figures are indicative old-regime estimates. "
            "Please verify with a Chartered Accountant before filing.",
            disclaimer_style,
        )
    )

    doc.build(story)
    buffer.seek(0)

    logger.info(
        "PDF report generated profile_id=%s suggestions=%d",
        profile.profile_id,
        len(suggestions),
    )
    return buffer
