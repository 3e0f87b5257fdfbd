"""
schemas.py — Tax engine Pydantic v2 data contracts.

Defines:
  - Slab, RuleTable           (year-versioned rule tables, validated on construction)
  - IncomeInputs              (liberal per-request input — junk coerces to 0)
  - DeductionSummary          (capped Chapter VI-A totals + HRA exemption, old regime only)
  - RegimeResult              (taxable income and payable tax for one regime)
  - ComparisonResult          (old vs new comparison — public output of the engine)
  - ExtractedPayslip          (record produced by the external document extractor)
  - ErrorDetail, ErrorBody, ErrorResponse  (cross-cutting error envelope)

WIRE NAMES: request/response JSON uses camelCase (``otherIncome``,
``taxPayableOld`` ...). Python code uses the snake_case attribute names.
Serialise responses with ``model_dump(by_alias=True)``.
"""
from __future__ import annotations

import math
from typing import Any, List, Literal, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


RecommendedRegime = Literal["old", "new", "either"]


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------

def _to_number(value: Any) -> Optional[float]:
    """Best-effort numeric parse. Returns None for anything non-numeric or non-finite."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def coerce_amount(value: Any) -> float:
    """Missing, non-numeric or negative amounts become 0."""
    number = _to_number(value)
    if number is None or number < 0:
        return 0.0
    return number


# ---------------------------------------------------------------------------
# Rule tables
# ---------------------------------------------------------------------------

class Slab(BaseModel):
    """One marginal bracket: income above ``threshold`` is taxed at ``rate``."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    threshold: int = Field(..., ge=0)
    rate: float = Field(..., ge=0, lt=1)


class RuleTable(BaseModel):
    """
    Immutable slab/rate/limit table for one assessment year.

    Slabs are ordered by threshold, strictly ascending, starting at 0. The last
    slab has no upper bound. A table that breaks this raises ValidationError
    when it is built, i.e. when rules.py is imported.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    assessment_year: str
    old_regime_slabs: Tuple[Slab, ...]
    new_regime_slabs: Tuple[Slab, ...]
    old_regime_rebate_limit: int = Field(..., ge=0)
    new_regime_rebate_limit: int = Field(..., ge=0)
    cess_rate: float = Field(..., ge=0, lt=1)
    standard_deduction_old: int = Field(..., ge=0)
    standard_deduction_new: int = Field(..., ge=0)

    @field_validator("old_regime_slabs", "new_regime_slabs")
    @classmethod
    def validate_slab_order(cls, slabs: Tuple[Slab, ...]) -> Tuple[Slab, ...]:
        if not slabs:
            raise ValueError("slab list must not be empty")
        if slabs[0].threshold != 0:
            raise ValueError(f"first slab must start at 0, got {slabs[0].threshold}")
        for lower, upper in zip(slabs, slabs[1:]):
            if upper.threshold <= lower.threshold:
                raise ValueError(
                    f"slab thresholds must be strictly ascending "
                    f"({lower.threshold} then {upper.threshold})"
                )
        return slabs


# ---------------------------------------------------------------------------
# IncomeInputs — per-request input
# ---------------------------------------------------------------------------

_AMOUNT_FIELDS = (
    "basic",
    "hra",
    "special",
    "lta",
    "other_income",
    "epf_contribution",
    "professional_tax",
    "rent_paid",
    "home_loan_interest",
    "deduction_80c_ppf",
    "deduction_80c_elss",
    "deduction_80c_insurance",
    "deduction_80c_housing_loan_principal",
    "deduction_80c_tuition",
    "deduction_80d_self_family",
    "deduction_80d_parents",
    "deduction_80ccd1b_nps",
    "deduction_80tta_savings_interest",
)

_TRUTHY = {"true", "1", "yes", "y", "on"}


class IncomeInputs(BaseModel):
    """
    Annual salary components and deduction line items, in INR.

    Every amount is optional. Missing, null, non-numeric, non-finite and
    negative values coerce to 0 so a calculation request never fails on field
    content. rent_paid is ANNUAL rent. epf_contribution is the employee share
    and counts towards 80C.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    # --- Salary components ---
    basic: float = 0
    hra: float = Field(default=0, description="HRA received from employer.")
    special: float = 0
    lta: float = 0
    other_income: float = Field(default=0, alias="otherIncome")
    epf_contribution: float = Field(default=0, alias="epfContribution")
    professional_tax: float = Field(default=0, alias="professionalTax")

    # --- HRA exemption inputs ---
    rent_paid: float = Field(default=0, alias="rentPaid")
    is_metro_city: bool = Field(default=False, alias="isMetroCity")

    # --- Section 24(b) ---
    home_loan_interest: float = Field(default=0, alias="homeLoanInterest")

    # --- Chapter VI-A line items ---
    deduction_80c_ppf: float = Field(default=0, alias="deduction80C_ppf")
    deduction_80c_elss: float = Field(default=0, alias="deduction80C_elss")
    deduction_80c_insurance: float = Field(default=0, alias="deduction80C_insurance")
    deduction_80c_housing_loan_principal: float = Field(
        default=0, alias="deduction80C_housingLoanPrincipal",
    )
    deduction_80c_tuition: float = Field(default=0, alias="deduction80C_tuition")
    deduction_80d_self_family: float = Field(default=0, alias="deduction80D_selfFamily")
    deduction_80d_parents: float = Field(default=0, alias="deduction80D_parents")
    deduction_80ccd1b_nps: float = Field(default=0, alias="deduction80CCD1B_nps")
    deduction_80tta_savings_interest: float = Field(
        default=0, alias="deduction80TTA_savingsInterest",
    )

    assessment_year: Optional[str] = Field(default=None, alias="assessmentYear")

    @field_validator(*_AMOUNT_FIELDS, mode="before")
    @classmethod
    def coerce_amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("is_metro_city", mode="before")
    @classmethod
    def coerce_metro_flag(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in _TRUTHY
        if isinstance(value, (int, float)):
            return value == 1
        return False

    @field_validator("assessment_year", mode="before")
    @classmethod
    def coerce_assessment_year(cls, value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return None
        return value.strip() or None


# ---------------------------------------------------------------------------
# Engine outputs
# ---------------------------------------------------------------------------

class DeductionSummary(BaseModel):
    """
    Capped old-regime deductions. All values are the amount actually allowed,
    not the raw input. Standard deduction and professional tax are NOT part of
    total_deductions; the regime calculator and comparator handle those.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    hra_exemption: float = Field(default=0, alias="hraExemption")
    capped_80c: float = Field(default=0, alias="capped80C")          # ≤ ₹1,50,000
    capped_80d: float = Field(default=0, alias="capped80D")          # ≤ ₹25,000 + ≤ ₹50,000
    capped_80ccd1b: float = Field(default=0, alias="capped80CCD1B")  # ≤ ₹50,000
    capped_80tta: float = Field(default=0, alias="capped80TTA")      # ≤ ₹10,000
    capped_24b: float = Field(default=0, alias="capped24b")          # ≤ ₹2,00,000
    total_deductions: float = Field(default=0, alias="totalDeductions")


class DeductionBreakdown(BaseModel):
    """DeductionSummary as reported in ComparisonResult, each figure in whole rupees."""
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    hra_exemption: int = Field(default=0, ge=0, alias="hraExemption")
    capped_80c: int = Field(default=0, ge=0, alias="capped80C")
    capped_80d: int = Field(default=0, ge=0, alias="capped80D")
    capped_80ccd1b: int = Field(default=0, ge=0, alias="capped80CCD1B")
    capped_80tta: int = Field(default=0, ge=0, alias="capped80TTA")
    capped_24b: int = Field(default=0, ge=0, alias="capped24b")
    total_deductions: int = Field(default=0, ge=0, alias="totalDeductions")


class RegimeResult(BaseModel):
    """
    Tax computation for one regime.

      1. taxable_income = max(0, income - standard deduction [- deductions, old only])
      2. slab tax; forced to 0 when taxable_income <= rebate limit (87A)
      3. tax_payable = tax_before_cess * (1 + cess_rate), 0 if no tax
    """
    model_config = ConfigDict(frozen=True, extra="forbid", alias_generator=to_camel, populate_by_name=True)

    taxable_income: int = Field(..., ge=0)
    tax_payable: int = Field(..., ge=0)     # cess-inclusive, whole rupees
    tax_before_cess: int = Field(default=0, ge=0)
    cess: int = Field(default=0, ge=0)


class ComparisonResult(BaseModel):
    """
    Output of compare_regimes(). All money in whole rupees.

    tax_savings_new_vs_old = tax_payable_old - tax_payable_new
      positive → New Regime is cheaper, negative → Old Regime is cheaper.
    assessment_year is the year whose rule table was actually applied, which
    differs from the requested one when the request named an unknown year.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", alias_generator=to_camel, populate_by_name=True)

    assessment_year: str
    gross_total_income: int
    net_taxable_income_old: int
    net_taxable_income_new: int
    tax_payable_old: int
    tax_payable_new: int
    recommended_regime: RecommendedRegime
    tax_savings_new_vs_old: int
    deductions: DeductionBreakdown


# ---------------------------------------------------------------------------
# ExtractedPayslip — output of the external document-AI extractor
# ---------------------------------------------------------------------------

_PAYSLIP_AMOUNT_FIELDS = (
    "basic",
    "hra",
    "special_allowance",
    "lta",
    "other_allowances",
    "employer_pf",
    "employee_pf",
    "professional_tax",
    "tds",
    "gross_earnings",
    "total_deductions",
    "net_salary",
)


class ExtractedPayslip(BaseModel):
    """
    Best-effort structured record read from a payslip or Form 16.

    Any field may be null when the extractor could not find it. Figures are
    per pay period (monthly for a payslip, annual for a Form 16); see
    payslip.annualize_payslip.
    """
    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)

    financial_year: Optional[str] = None
    assessment_year: Optional[str] = None
    basic: Optional[float] = None
    hra: Optional[float] = None
    special_allowance: Optional[float] = None
    lta: Optional[float] = None
    other_allowances: Optional[float] = None
    employer_pf: Optional[float] = None
    employee_pf: Optional[float] = None
    professional_tax: Optional[float] = None
    tds: Optional[float] = None
    gross_earnings: Optional[float] = None
    total_deductions: Optional[float] = None
    net_salary: Optional[float] = None

    @field_validator(*_PAYSLIP_AMOUNT_FIELDS, mode="before")
    @classmethod
    def coerce_optional_amounts(cls, value: Any) -> Optional[float]:
        number = _to_number(value)
        if number is None or number < 0:
            return None
        return number

    @field_validator("financial_year", "assessment_year", mode="before")
    @classmethod
    def coerce_year(cls, value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return None
        return value.strip() or None

    @model_validator(mode="after")
    def has_any_amount(self) -> "ExtractedPayslip":
        """An extraction with no figures at all is unusable, not a zero-salary slip."""
        if all(getattr(self, name) is None for name in _PAYSLIP_AMOUNT_FIELDS):
            raise ValueError("extracted record contains no salary figures")
        return self


# ---------------------------------------------------------------------------
# Error response models — used by main.py exception handlers (cross-cutting)
# ---------------------------------------------------------------------------

class ErrorDetail(BaseModel):
    """Single field-level validation or business-rule error."""
    model_config = ConfigDict(extra="forbid")

    field: Optional[str] = None   # Dot-notation field path, e.g. "grossEarnings"
    issue: str


class ErrorBody(BaseModel):
    """Error envelope body."""
    model_config = ConfigDict(extra="forbid")

    code: str                                      # VALIDATION_ERROR, NOT_FOUND, etc.
    message: str
    details: List[ErrorDetail] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """
    Standard error response format for all TaxGenie endpoints.

    Structure: {"error": {"code": "...", "message": "...", "details": [...]}}
    """
    model_config = ConfigDict(extra="forbid")

    error: ErrorBody


__all__ = [
    "RecommendedRegime",
    "coerce_amount",
    "Slab",
    "RuleTable",
    "IncomeInputs",
    "DeductionSummary",
    "DeductionBreakdown",
    "RegimeResult",
    "ComparisonResult",
    "ExtractedPayslip",
    "ErrorDetail",
    "ErrorBody",
    "ErrorResponse",
]
