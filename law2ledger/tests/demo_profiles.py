"""
Demo profile fixtures for Law2Ledger tests — AY 2025-26, old-regime deductions.

Payloads are camelCase, exactly as the dashboard form posts them. Expected
figures are hand-computed below each profile.
"""
from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Profile 1: scenario: ₹12L salaried renter, no HRA, over-invested in 80C
# ---------------------------------------------------------------------------
SCENARIO_PROFILE: dict[str, Any] = {
    "annualIncome": 1_200_000,
    "monthlyRent": 25_000,              # annual = 300,000
    "investments": {"ppf": 150_000, "elss": 50_000, "nps": 50_000, "other": 25_000},
    "insurancePremiums": 50_000,
    "ageGroup": "26-35",
    "employmentType": "Salaried",
}
# std 50000 | 80C min(225000, 150000)=150000 | 80CCD(1B) 50000 | 80D min(50000, 25000)=25000
# 80GG: min(60000, 25%*1200000=300000, 300000-120000=180000) = 60000
# potential = 335000, final = 865000
# tax(1200000) = (12500+100000+60000)*1.04 = 179400
# tax(865000)  = (12500+73000)*1.04 = 88920
# suggestions (20% bracket at 865000, ×1.04):
#   24(b) 200000 → 41600 | HRA headroom 180000-60000=120000 → 24960
#   80CCD(2) 10% of 1200000 → 24960 | 80GG already claimed in full → no suggestion
SCENARIO_EXPECTED: dict[str, Any] = {
    "current_taxable_income": 1_200_000,
    "potential_savings": 335_000,
    "final_taxable_amount": 865_000,
    "tax_before": 179_400,
    "tax_after": 88_920,
    "suggestion_ids": ["section_24b", "hra_exemption", "section_80ccd2"],
    "suggestion_savings": [41_600, 24_960, 24_960],
}

# ---------------------------------------------------------------------------
# Profile 2: Meera: ₹15L government employee, metro, receives HRA
# ---------------------------------------------------------------------------
MEERA_PROFILE: dict[str, Any] = {
    "annualIncome": 1_500_000,
    "monthlyRent": 30_000,              # annual = 360,000
    "investments": {"ppf": 100_000},
    "insurancePremiums": 10_000,
    "ageGroup": "36-45",
    "employmentType": "Government",
    "hraReceived": 300_000,
    "cityType": "metro",
}
# std 50000 | 80C 100000 | 80D 10000
# HRA: min(300000, 50%*1500000=750000, 360000-150000=210000) = 210000
# potential = 370000, final = 1130000
# tax(1500000) = (12500+100000+150000)*1.04 = 273000
# tax(1130000) = (12500+100000+39000)*1.04 = 157560
# suggestions at 1130000:
#   24(b) 200000 → (130000*.3 + 70000*.2)*1.04 = 55120
#   80CCD(2) 150000 → (130000*.3 + 20000*.2)*1.04 = 44720
#   80C headroom 50000 → 15600 | 80CCD(1B) headroom 50000 → 15600
#   80D headroom 15000 → 4680 | HRA already at ceiling → no suggestion
MEERA_EXPECTED: dict[str, Any] = {
    "current_taxable_income": 1_500_000,
    "potential_savings": 370_000,
    "final_taxable_amount": 1_130_000,
    "tax_before": 273_000,
    "tax_after": 157_560,
    "suggestion_ids": [
        "section_24b",
        "section_80ccd2",
        "section_80c",
        "section_80ccd1b",
        "section_80d",
    ],
    "suggestion_savings": [55_120, 44_720, 15_600, 15_600, 4_680],
}

# ---------------------------------------------------------------------------
# Profile 3: Arjun: ₹4L self-employed, 87A rebate wipes out the tax
# ---------------------------------------------------------------------------
ARJUN_PROFILE: dict[str, Any] = {
    "annualIncome": 400_000,
    "investments": {"ppf": 20_000},
    "ageGroup": "18-25",
    "employmentType": "Self-employed",
}
# no std deduction (self-employed) | 80C 20000 → final 380000
# tax(400000) = 7500 - 87A rebate 7500 = 0 → every suggestion saves ₹0 → none returned
ARJUN_EXPECTED: dict[str, Any] = {
    "current_taxable_income": 400_000,
    "potential_savings": 20_000,
    "final_taxable_amount": 380_000,
    "tax_before": 0,
    "tax_after": 0,
    "suggestion_ids": [],
    "suggestion_savings": [],
}

# ---------------------------------------------------------------------------
# Profile 4: Kavya: ₹1L salaried, deductions exceed income → clamp
# ---------------------------------------------------------------------------
KAVYA_PROFILE: dict[str, Any] = {
    "annualIncome": 100_000,
    "investments": {"ppf": 150_000, "nps": 50_000},
    "insurancePremiums": 25_000,
    "ageGroup": "55+",
    "employmentType": "Salaried",
}
# eligible = 50000 + 150000 + 50000 + 25000 = 275000 > 100000 → potential clamped to 100000
KAVYA_EXPECTED: dict[str, Any] = {
    "current_taxable_income": 100_000,
    "potential_savings": 100_000,
    "final_taxable_amount": 0,
    "tax_before": 0,
    "tax_after": 0,
    "suggestion_ids": [],
    "suggestion_savings": [],
}

DEMO_PROFILES: dict[str, dict[str, Any]] = {
    "scenario": {"profile": SCENARIO_PROFILE, "expected": SCENARIO_EXPECTED},
    "meera": {"profile": MEERA_PROFILE, "expected": MEERA_EXPECTED},
    "arjun": {"profile": ARJUN_PROFILE, "expected": ARJUN_EXPECTED},
    "kavya": {"profile": KAVYA_PROFILE, "expected": KAVYA_EXPECTED},
}
