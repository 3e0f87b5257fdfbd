"""
Tax-liability computation engine.

Public API:
    get_rule_table, compute_slab_tax, compute_hra_exemption,
    aggregate_deductions, calculate_old_regime_tax, calculate_new_regime_tax,
    compare_regimes, annualize_payslip, annualize_tds
"""
from taxgenie.calculator.payslip import annualize_payslip, annualize_tds
from taxgenie.calculator.rules import (
    LATEST_ASSESSMENT_YEAR,
    SUPPORTED_ASSESSMENT_YEARS,
    get_rule_table,
)
from taxgenie.calculator.tax_engine import (
    aggregate_deductions,
    calculate_new_regime_tax,
    calculate_old_regime_tax,
    compare_regimes,
    compute_hra_exemption,
    compute_slab_tax,
)

__all__ = [
    "LATEST_ASSESSMENT_YEAR",
    "SUPPORTED_ASSESSMENT_YEARS",
    "get_rule_table",
    "compute_slab_tax",
    "compute_hra_exemption",
    "aggregate_deductions",
    "calculate_old_regime_tax",
    "calculate_new_regime_tax",
    "compare_regimes",
    "annualize_payslip",
    "annualize_tds",
]
