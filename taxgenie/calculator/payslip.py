"""
Payslip / Form 16 adapter — turns the document extractor's record into
annual IncomeInputs for the tax engine.

The extractor itself (document AI over uploaded bytes) lives outside this
package. It hands back an ExtractedPayslip where every figure is per pay
period and any field may be null.

Mapping (× periods):
  basic              → basic
  hra                → hra
  specialAllowance   → special
  otherAllowances    → special   (added)
  lta                → lta
  employeePf         → epfContribution  (80C)
  professionalTax    → professionalTax
  grossEarnings      → residual over the itemised components goes to special,
                       so annual gross == grossEarnings × periods
tds is annualised separately by annualize_tds so a caller can set it against
the estimated liability. Ignored: employerPf (not the employee's 80C money),
totalDeductions, netSalary. Those are reference figures only.
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Optional, Union

from taxgenie.calculator.rules import normalize_assessment_year
from taxgenie.calculator.schemas import ExtractedPayslip, IncomeInputs

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def assessment_year_from_financial_year(financial_year: Optional[str]) -> Optional[str]:
    """FY "2023-24" is assessed in AY "2024-25"."""
    normalized = normalize_assessment_year(financial_year)
    if normalized is None:
        return None
    start = int(normalized[:4]) + 1
    return f"{start}-{(start + 1) % 100:02d}"


def annualize_payslip(
    record: Union[ExtractedPayslip, Mapping[str, Any]],
    periods: int = MONTHS_PER_YEAR,
) -> IncomeInputs:
    """
    Convert one extracted payslip into annual IncomeInputs.

    ``periods`` is the number of pay periods in the year the record covers:
    12 for a monthly payslip, 1 for an annual Form 16.
    """
    if periods < 1:
        raise ValueError(f"periods must be at least 1, got {periods}")
    if not isinstance(record, ExtractedPayslip):
        record = ExtractedPayslip.model_validate(record)

    def annual(value: Optional[float]) -> float:
        return (value or 0.0) * periods

    basic = annual(record.basic)
    hra = annual(record.hra)
    lta = annual(record.lta)
    special = annual(record.special_allowance) + annual(record.other_allowances)

    if record.gross_earnings is not None:
        residual = annual(record.gross_earnings) - (basic + hra + lta + special)
        if residual > 0:
            logger.debug("Folding ₹%.0f of unitemised gross earnings into special allowance", residual)
            special += residual

    assessment_year = (
        normalize_assessment_year(record.assessment_year)
        or assessment_year_from_financial_year(record.financial_year)
    )

    return IncomeInputs(
        basic=basic,
        hra=hra,
        special=special,
        lta=lta,
        epf_contribution=annual(record.employee_pf),
        professional_tax=annual(record.professional_tax),
        assessment_year=assessment_year,
    )


def annualize_tds(
    record: Union[ExtractedPayslip, Mapping[str, Any]],
    periods: int = MONTHS_PER_YEAR,
) -> int:
    """Tax deducted at source for the year, in whole rupees. 0 when the record has none."""
    if periods < 1:
        raise ValueError(f"periods must be at least 1, got {periods}")
    if not isinstance(record, ExtractedPayslip):
        record = ExtractedPayslip.model_validate(record)
    annual_tds = Decimal(str((record.tds or 0.0) * periods))
    return int(annual_tds.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


__all__ = [
    "MONTHS_PER_YEAR",
    "assessment_year_from_financial_year",
    "annualize_payslip",
    "annualize_tds",
]
