"""
schemas.py — Profile intake Pydantic v2 data contracts.

Defines:
  - AgeGroup, EmploymentType, CityType enums
  - CamelModel            (snake_case attributes, camelCase JSON)
  - InvestmentBreakdown   (ppf / elss / nps / other)
  - FinancialProfile      (the central data contract — every pipeline stage consumes this)
  - ErrorDetail, ErrorBody, ErrorResponse  (cross-cutting error envelope)

JSON field names are camelCase (annualIncome, monthlyRent, insurancePremiums, ...)
because the dashboard form posts them that way. Always dump with by_alias=True.

monthly_rent is MONTHLY — the tax engine multiplies ×12 for the rent allowance.
Every other monetary field is ANNUAL.
"""
import uuid
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class AgeGroup(str, Enum):
    age_18_25 = "18-25"
    age_26_35 = "26-35"
    age_36_45 = "36-45"
    age_46_55 = "46-55"
    age_55_plus = "55+"


class EmploymentType(str, Enum):
    salaried = "Salaried"
    self_employed = "Self-employed"
    government = "Government"


class CityType(str, Enum):
    metro = "metro"
    non_metro = "non_metro"


# ---------------------------------------------------------------------------
# Base model: camelCase on the wire
# ---------------------------------------------------------------------------

class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        allow_inf_nan=False,
    )


# ---------------------------------------------------------------------------
# FinancialProfile: central data contract
# ---------------------------------------------------------------------------

class InvestmentBreakdown(CamelModel):
    """Annual contributions per instrument. All values in INR."""
    model_config = ConfigDict(frozen=True)

    ppf: float = Field(default=0, ge=0, description="Public Provident Fund — counts toward 80C.")
    elss: float = Field(default=0, ge=0, description="Equity Linked Savings Scheme — counts toward 80C.")
    nps: float = Field(
        default=0, ge=0,
        description="National Pension System — 80CCD(1B) first, any excess spills into 80C.",
    )
    other: float = Field(
        default=0, ge=0,
        description="Other 80C instruments: LIC, NSC, tax-saver FD, tuition fees, etc.",
    )

    @property
    def total(self) -> float:
        return self.ppf + self.elss + self.nps + self.other


class FinancialProfile(CamelModel):
    """
    Self-reported financial profile submitted from the dashboard form.

    Immutable once produced (frozen). Owned by one dashboard session and
    discarded with it — never written to durable storage.

    extra='forbid' ensures unknown fields from client requests are rejected.
    """
    model_config = ConfigDict(frozen=True)

    # Generated server-side if not provided
    profile_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="UUID identifying this profile. Auto-generated if omitted.",
    )

    annual_income: float = Field(..., ge=0, description="Gross annual income in INR.")
    monthly_rent: float = Field(
        default=0, ge=0,
        description="Monthly rent paid. Set 0 if not paying rent.",
    )
    investments: InvestmentBreakdown = Field(default_factory=InvestmentBreakdown)
    insurance_premiums: float = Field(
        default=0, ge=0,
        description="Annual health insurance premiums (self and family) — Section 80D.",
    )
    age_group: AgeGroup = Field(..., description="Self-reported age band.")
    employment_type: EmploymentType = Field(
        ..., description="Salaried and Government employees get the standard deduction and HRA.",
    )

    # --- Rent allowance inputs (optional) ---
    hra_received: float = Field(
        default=0, ge=0,
        description="Annual HRA component received from employer. 0 means no HRA in salary.",
    )
    city_type: CityType = Field(
        default=CityType.non_metro,
        description="HRA ceiling: metro=50% of income, non_metro=40%.",
    )

    @field_validator("age_group", mode="before")
    @classmethod
    def age_group_selected(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise PydanticCustomError("missing_selection", "Please select an age group")
        return value

    @field_validator("employment_type", mode="before")
    @classmethod
    def employment_type_selected(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise PydanticCustomError("missing_selection", "Please select employment type")
        return value

    @property
    def annual_rent(self) -> float:
        return self.monthly_rent * 12

    @property
    def is_employee(self) -> bool:
        """Salaried and government employees — eligible for standard deduction and HRA."""
        return self.employment_type in (EmploymentType.salaried, EmploymentType.government)


# ---------------------------------------------------------------------------
# Error response models: used by main.py exception handlers (cross-cutting)
# ---------------------------------------------------------------------------

class ErrorDetail(BaseModel):
    """Single field-level validation or business-rule error."""
    model_config = ConfigDict(extra="forbid")

    field: Optional[str] = None   # Dot-notation field path, e.g. "investments.ppf"
    issue: str                     # Human-readable description of the problem


class ErrorBody(BaseModel):
    """Error envelope body."""
    model_config = ConfigDict(extra="forbid")

    code: str                                      # VALIDATION_ERROR, NOT_FOUND, etc.
    message: str                                   # High-level error description
    details: List[ErrorDetail] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """
    Standard error response format for all Law2Ledger endpoints.

    Structure: {"error": {"code": "...", "message": "...", "details": [...]}}
    """
    model_config = ConfigDict(extra="forbid")

    error: ErrorBody


__all__ = [
    "AgeGroup",
    "EmploymentType",
    "CityType",
    "CamelModel",
    "InvestmentBreakdown",
    "FinancialProfile",
    "ErrorDetail",
    "ErrorBody",
    "ErrorResponse",
]
