"""
TaxGenie Tax Engine — Old vs New regime comparison.
Pure Python, deterministic. Same input → same output.

Year-specific numbers (slabs, rebate limits, standard deductions, cess) come
from rules.py. The deduction caps below are the same in every encoded year.

Computation order:
  income chargeable = basic + HRA + special + LTA + other income - professional tax
  OLD: taxable = income - std deduction - (HRA exemption + capped VI-A + 24(b))
  NEW: taxable = income - std deduction
  round taxable → slab tax → 87A cliff (taxable <= rebate limit ⇒ 0) → × (1 + cess) → round
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Union

from taxgenie.calculator.rules import get_rule_table
from taxgenie.calculator.schemas import (
    ComparisonResult,
    DeductionBreakdown,
    DeductionSummary,
    IncomeInputs,
    RecommendedRegime,
    RegimeResult,
    RuleTable,
    Slab,
)

logger = logging.getLogger(__name__)

# ===========================================================================
# DEDUCTION CAP CONSTANTS
# ===========================================================================

CAP_80C                  = 150_000   # EPF + PPF + ELSS + LIC + tuition + home-loan principal
CAP_80D_SELF_FAMILY      = 25_000
CAP_80D_PARENTS          = 50_000    # capped on its own, then added to self/family
CAP_80CCD1B              = 50_000    # Employee NPS
CAP_80TTA                = 10_000    # Savings-account interest
CAP_24B                  = 200_000   # Home loan interest, self-occupied

# ===========================================================================
# HRA EXEMPTION PARAMETERS — Section 10(13A), Rule 2A
# ===========================================================================

HRA_RENT_EXCESS_PCT      = 0.10      # rent counts only above 10% of basic
HRA_METRO_PCT            = 0.50
HRA_NON_METRO_PCT        = 0.40


SlabLike = Union[Slab, Tuple[float, float]]


# ===========================================================================
# INTERNAL HELPERS (pure functions — no side effects, no I/O)
# ===========================================================================

def _round_rupees(amount: float) -> int:
    """Round half-up to whole rupees (round() would send ₹0.5 to the even neighbour)."""
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _slab_pairs(slabs: Iterable[SlabLike]) -> list[tuple[float, float]]:
    return [
        (slab.threshold, slab.rate) if isinstance(slab, Slab) else (slab[0], slab[1])
        for slab in slabs
    ]


def compute_slab_tax(taxable_income: float, slabs: Sequence[SlabLike]) -> float:
    """
    Progressive slab tax before rebate and cess.

    ``slabs`` are (threshold, marginal rate) pairs, ascending, first threshold 0.
    Walks them from the top bracket down: every bracket whose threshold lies
    below the income still unaccounted for taxes the part above the threshold,
    and the remainder drops to that threshold. Gives the same total as the
    usual bottom-up bracket sum.
    """
    if taxable_income <= 0:
        return 0.0
    tax = 0.0
    remaining = float(taxable_income)
    for threshold, rate in reversed(_slab_pairs(slabs)):
        if remaining > threshold:
            tax += (remaining - threshold) * rate
            remaining = threshold
    return tax


def compute_hra_exemption(
    basic: Optional[float],
    hra_received: Optional[float],
    rent_paid: Optional[float],
    is_metro: bool,
) -> float:
    """
    HRA exemption under Section 10(13A), Rule 2A. All amounts annual.
    Returns 0 unless basic, HRA received and rent paid are all positive.

    Component 1: HRA received from employer
    Component 2: max(0, rent_paid - 10% of basic)
    Component 3: 50% of basic (metro) or 40% (non-metro)
    """
    basic = basic or 0.0
    hra_received = hra_received or 0.0
    rent_paid = rent_paid or 0.0
    if basic <= 0 or hra_received <= 0 or rent_paid <= 0:
        return 0.0
    city_pct = HRA_METRO_PCT if is_metro else HRA_NON_METRO_PCT
    component_1 = hra_received
    component_2 = max(0.0, rent_paid - HRA_RENT_EXCESS_PCT * basic)
    component_3 = city_pct * basic
    return max(0.0, min(component_1, component_2, component_3))


def aggregate_deductions(inputs: IncomeInputs) -> DeductionSummary:
    """
    Old-regime deductions, each section capped independently. Amounts above a
    cap are simply not counted. Professional tax is not included; it comes
    off salary income before either regime runs.
    """
    hra_exemption = compute_hra_exemption(
        inputs.basic, inputs.hra, inputs.rent_paid, inputs.is_metro_city,
    )
    raw_80c = (
        inputs.epf_contribution
        + inputs.deduction_80c_ppf
        + inputs.deduction_80c_elss
        + inputs.deduction_80c_insurance
        + inputs.deduction_80c_tuition
        + inputs.deduction_80c_housing_loan_principal
    )
    capped_80c = min(raw_80c, CAP_80C)
    # Self/family and parents are capped separately, NO combined ceiling
    capped_80d = (
        min(inputs.deduction_80d_self_family, CAP_80D_SELF_FAMILY)
        + min(inputs.deduction_80d_parents, CAP_80D_PARENTS)
    )
    capped_80ccd1b = min(inputs.deduction_80ccd1b_nps, CAP_80CCD1B)
    capped_80tta = min(inputs.deduction_80tta_savings_interest, CAP_80TTA)
    capped_24b = min(inputs.home_loan_interest, CAP_24B)

    return DeductionSummary(
        hra_exemption=hra_exemption,
        capped_80c=capped_80c,
        capped_80d=capped_80d,
        capped_80ccd1b=capped_80ccd1b,
        capped_80tta=capped_80tta,
        capped_24b=capped_24b,
        total_deductions=(
            hra_exemption + capped_80c + capped_80d
            + capped_80ccd1b + capped_80tta + capped_24b
        ),
    )


def _regime_result(
    taxable_income: float,
    slabs: Sequence[Slab],
    rebate_limit: int,
    cess_rate: float,
) -> RegimeResult:
    # The figure reported is the figure taxed
    taxable = _round_rupees(taxable_income)
    slab_tax = compute_slab_tax(taxable, slabs)

    # 87A: full rebate at or below the limit (cliff, no marginal relief)
    tax_before_cess = 0.0 if taxable <= rebate_limit else slab_tax

    # Cess only on a positive post-rebate tax
    final_tax = tax_before_cess * (1 + cess_rate) if tax_before_cess > 0 else 0.0

    tax_payable = _round_rupees(final_tax)
    rounded_before_cess = _round_rupees(tax_before_cess)
    return RegimeResult(
        taxable_income=taxable,
        tax_payable=tax_payable,
        tax_before_cess=rounded_before_cess,
        cess=max(0, tax_payable - rounded_before_cess),
    )


# ===========================================================================
# REGIME CALCULATORS
# ===========================================================================

def calculate_old_regime_tax(
    gross_income: float,
    deduction_summary: DeductionSummary,
    rule_table: RuleTable,
) -> RegimeResult:
    """
    Old regime: standard deduction plus every capped deduction in the summary.
    ``gross_income`` is income after professional tax.
    """
    taxable_income = max(
        0.0,
        gross_income - rule_table.standard_deduction_old - deduction_summary.total_deductions,
    )
    return _regime_result(
        taxable_income,
        rule_table.old_regime_slabs,
        rule_table.old_regime_rebate_limit,
        rule_table.cess_rate,
    )


def calculate_new_regime_tax(gross_income: float, rule_table: RuleTable) -> RegimeResult:
    """
    New regime (Section 115BAC): standard deduction only. HRA, 80C, 80D,
    80CCD(1B), 80TTA and 24(b) do not apply.
    """
    taxable_income = max(0.0, gross_income - rule_table.standard_deduction_new)
    return _regime_result(
        taxable_income,
        rule_table.new_regime_slabs,
        rule_table.new_regime_rebate_limit,
        rule_table.cess_rate,
    )


# ===========================================================================
# COMPARE REGIMES — public API
# ===========================================================================

def _deduction_breakdown(summary: DeductionSummary) -> DeductionBreakdown:
    return DeductionBreakdown(
        hra_exemption=_round_rupees(summary.hra_exemption),
        capped_80c=_round_rupees(summary.capped_80c),
        capped_80d=_round_rupees(summary.capped_80d),
        capped_80ccd1b=_round_rupees(summary.capped_80ccd1b),
        capped_80tta=_round_rupees(summary.capped_80tta),
        capped_24b=_round_rupees(summary.capped_24b),
        total_deductions=_round_rupees(summary.total_deductions),
    )


def _recommend(tax_old: int, tax_new: int) -> RecommendedRegime:
    if tax_new < tax_old:
        return "new"
    if tax_old < tax_new:
        return "old"
    return "either"


def compare_regimes(
    inputs: Union[IncomeInputs, Mapping[str, Any]],
    assessment_year: Optional[str] = None,
) -> ComparisonResult:
    """
    Compute both regimes for the same income and recommend the cheaper one.

    ``inputs`` may be an IncomeInputs or the raw request mapping (camelCase or
    snake_case keys); raw mappings go through the same 0-coercion.
    The year is ``assessment_year`` if given, else ``inputs.assessment_year``,
    else the latest encoded year. Unknown years use the latest table; the
    result's assessment_year shows which table was applied.
    """
    if not isinstance(inputs, IncomeInputs):
        inputs = IncomeInputs.model_validate(inputs)

    requested_year = assessment_year if assessment_year is not None else inputs.assessment_year
    rule_table = get_rule_table(requested_year)

    # Step 1: Income
    gross_salary = inputs.basic + inputs.hra + inputs.special + inputs.lta
    gross_total_income = gross_salary + inputs.other_income
    income_chargeable = max(0.0, gross_total_income - inputs.professional_tax)

    # Step 2: Old-regime deductions
    deductions = aggregate_deductions(inputs)

    # Step 3: Both regimes on the same post-professional-tax income
    old = calculate_old_regime_tax(income_chargeable, deductions, rule_table)
    new = calculate_new_regime_tax(income_chargeable, rule_table)

    # Step 4: Recommendation (positive savings ⇒ New Regime cheaper)
    result = ComparisonResult(
        assessment_year=rule_table.assessment_year,
        gross_total_income=_round_rupees(gross_total_income),
        net_taxable_income_old=old.taxable_income,
        net_taxable_income_new=new.taxable_income,
        tax_payable_old=old.tax_payable,
        tax_payable_new=new.tax_payable,
        recommended_regime=_recommend(old.tax_payable, new.tax_payable),
        tax_savings_new_vs_old=old.tax_payable - new.tax_payable,
        deductions=_deduction_breakdown(deductions),
    )
    logger.debug(
        "Compared regimes AY%s: old=%d new=%d recommended=%s",
        result.assessment_year,
        result.tax_payable_old,
        result.tax_payable_new,
        result.recommended_regime,
    )
    return result


__all__ = [
    "CAP_80C",
    "CAP_80D_SELF_FAMILY",
    "CAP_80D_PARENTS",
    "CAP_80CCD1B",
    "CAP_80TTA",
    "CAP_24B",
    "compute_slab_tax",
    "compute_hra_exemption",
    "aggregate_deductions",
    "calculate_old_regime_tax",
    "calculate_new_regime_tax",
    "compare_regimes",
]
