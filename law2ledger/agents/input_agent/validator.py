"""
Profile intake validator.

Turns a raw form payload into an immutable FinancialProfile. Structural checks
(non-negative amounts, non-empty selections, unknown fields) run through
Pydantic; business rules run afterwards. Every violation is collected in a
single pass and raised together as ProfileValidationError, so the dashboard can
show each field's message at once.

Hard rules (block submission):
  1. Monetary fields >= 0                       (schema, ge=0)
  2. ageGroup / employmentType selected          (schema, field_validator)
  3. hraReceived <= annualIncome

Soft rules (warnings only — see collect_profile_warnings):
  - 80C instruments above ₹1,50,000
  - NPS above the 80CCD(1B) ₹50,000 cap
  - insurance premiums above the ₹25,000 80D cap
  - annual rent above annual income
"""
from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from law2ledger.agents.input_agent.schemas import FinancialProfile

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Cap constants: redeclared here (not imported from tax_engine) to keep
# validator.py self-contained and avoid circular import chains.
# ---------------------------------------------------------------------------
_CAP_80C            = 150_000
_CAP_80CCD1B        = 50_000
_CAP_80D            = 25_000      # self/family under 60: no age band is unambiguously 60+


class ProfileValidationError(ValueError):
    """
    Raised when a submitted profile breaks one or more field rules.

    violations: list of {"field": str | None, "issue": str} dicts, one per problem.
    Subclasses ValueError so the app-level ValueError handler still catches it.
    """

    def __init__(self, violations: list[dict[str, Any]]):
        self.violations = violations
        super().__init__(f"{len(violations)} profile validation error(s)")

    @property
    def fields(self) -> set[str]:
        return {v["field"] for v in self.violations if v.get("field")}


def _violations_from_pydantic(exc: ValidationError) -> list[dict[str, Any]]:
    """Flatten Pydantic errors into {field, issue} dicts with dot-notation paths."""
    violations = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        violations.append({"field": field or None, "issue": error["msg"]})
    return violations


def validate_business_rules(profile: FinancialProfile) -> list[dict[str, Any]]:
    """Return hard business-rule violations for a structurally valid profile."""
    violations: list[dict[str, Any]] = []

    if profile.hra_received > profile.annual_income:
        violations.append({
            "field": "hraReceived",
            "issue": (
                f"HRA received (₹{profile.hra_received:,.0f}) cannot exceed "
                f"annual income (₹{profile.annual_income:,.0f})."
            ),
        })

    return violations


def intake_profile(raw: dict[str, Any]) -> FinancialProfile:
    """
    Validate raw form values and build an immutable FinancialProfile.

    Args:
        raw: Request payload with camelCase (or snake_case) keys.

    Returns:
        The validated FinancialProfile.

    Raises:
        ProfileValidationError: listing every field that failed, structural
            and business-rule violations together.
    """
    try:
        profile = FinancialProfile.model_validate(raw)
    except ValidationError as exc:
        violations = _violations_from_pydantic(exc)
        # Log only the failing field names: never the submitted amounts
        logger.info(
            "Profile intake rejected: %d violation(s) fields=%s",
            len(violations),
            sorted(v["field"] or "" for v in violations),
        )
        raise ProfileValidationError(violations) from exc

    violations = validate_business_rules(profile)
    if violations:
        logger.info(
            "Business-rule validation failed: %d violation(s) profile_id=%s",
            len(violations),
            profile.profile_id,
        )
        raise ProfileValidationError(violations)

    logger.info("Profile accepted profile_id=%s", profile.profile_id)
    return profile


def collect_profile_warnings(profile: FinancialProfile) -> list[str]:
    """
    Soft checks that never block submission. Returns plain-language warnings
    (empty list if nothing looks off). Amounts above a cap are still accepted —
    the tax engine applies the cap when it derives the summary.
    """
    warnings: list[str] = []
    inv = profile.investments

    nps_excess = max(0.0, inv.nps - _CAP_80CCD1B)
    if nps_excess > 0:
        warnings.append(
            f"NPS contribution exceeds the Section 80CCD(1B) cap of ₹{_CAP_80CCD1B:,.0f}; "
            f"the extra ₹{nps_excess:,.0f} is counted toward Section 80C instead."
        )

    combined_80c = inv.ppf + inv.elss + inv.other + nps_excess
    if combined_80c > _CAP_80C:
        warnings.append(
            f"Section 80C instruments total ₹{combined_80c:,.0f}; only ₹{_CAP_80C:,.0f} is deductible."
        )

    if profile.insurance_premiums > _CAP_80D:
        warnings.append(
            f"Insurance premiums of ₹{profile.insurance_premiums:,.0f} exceed the Section 80D cap of "
            f"₹{_CAP_80D:,.0f} for age group '{profile.age_group.value}'."
        )

    if profile.annual_rent > profile.annual_income > 0:
        warnings.append(
            f"Annual rent (₹{profile.annual_rent:,.0f}) is higher than annual income "
            f"(₹{profile.annual_income:,.0f}). Please double-check both values."
        )

    return warnings


__all__ = [
    "ProfileValidationError",
    "intake_profile",
    "validate_business_rules",
    "collect_profile_warnings",
]
