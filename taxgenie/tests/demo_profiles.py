"""
Demo profile fixtures for TaxGenie tests — AY 2025-26 unless stated.

Request bodies use the camelCase wire names, so the same dicts feed both
compare_regimes() and POST /api/calculate-tax. Expected values are exact
rupees, hand-computed step by step in the comments.
"""
from __future__ import annotations
from typing import Any

# ---------------------------------------------------------------------------
# Scenario A — ₹9L salary, metro renter, EPF only
# ---------------------------------------------------------------------------
_SCENARIO_A_INPUT: dict[str, Any] = dict(
    basic=600_000,
    hra=300_000,
    special=0,
    lta=0,
    otherIncome=0,
    epfContribution=72_000,
    professionalTax=2_400,
    rentPaid=240_000,
    isMetroCity=True,
    assessmentYear="2025-26",
)
# gross=900000, after PT=897600
# HRA: comp1=300000, comp2=240000-60000=180000, comp3=50%*600000=300000 → 180000
# OLD: ded=252000(hra180+80c72), taxable=897600-50000-252000=595600
# slab: 12500+20%*95600=31620, no 87A (>5L), ×1.04=32884.8 → 32885
# NEW: taxable=897600-75000=822600
# slab: 5%*400000+10%*122600=32260, no 87A (>7L), ×1.04=33550.4 → 33550
_SCENARIO_A_EXPECTED: dict[str, Any] = dict(
    gross_total_income=900_000,
    net_taxable_income_old=595_600,
    net_taxable_income_new=822_600,
    tax_payable_old=32_885,
    tax_payable_new=33_550,
    recommended_regime="old",
    tax_savings_new_vs_old=-665,
)

# ---------------------------------------------------------------------------
# Priya — ₹15L salary, metro renter, partial deductions
# ---------------------------------------------------------------------------
_PRIYA_INPUT: dict[str, Any] = dict(
    basic=1_200_000,
    hra=300_000,
    rentPaid=180_000,
    isMetroCity=True,
    deduction80C_ppf=100_000,
    deduction80D_selfFamily=20_000,
    assessmentYear="2025-26",
)
# HRA: comp1=300000, comp2=180000-120000=60000, comp3=600000 → 60000
# OLD: ded=180000(hra60+80c100+80d20), taxable=1500000-50000-180000=1270000
# slab: 12500+100000+81000=193500, ×1.04=201240
# NEW: taxable=1425000, slab: 20000+30000+30000+45000=125000, ×1.04=130000
_PRIYA_EXPECTED: dict[str, Any] = dict(
    gross_total_income=1_500_000,
    net_taxable_income_old=1_270_000,
    net_taxable_income_new=1_425_000,
    tax_payable_old=201_240,
    tax_payable_new=130_000,
    recommended_regime="new",
    tax_savings_new_vs_old=71_240,
)

# ---------------------------------------------------------------------------
# Rahul — ₹15.1L, metro renter, every old-regime section maxed
# ---------------------------------------------------------------------------
_RAHUL_INPUT: dict[str, Any] = dict(
    basic=1_000_000,
    hra=400_000,
    special=100_000,
    otherIncome=10_000,
    epfContribution=120_000,
    professionalTax=2_400,
    rentPaid=360_000,
    isMetroCity=True,
    deduction80C_ppf=30_000,
    deduction80D_selfFamily=25_000,
    deduction80D_parents=50_000,
    deduction80CCD1B_nps=50_000,
    deduction80TTA_savingsInterest=10_000,
    assessmentYear="2025-26",
)
# gross=1510000, after PT=1507600
# HRA: comp1=400000, comp2=360000-100000=260000, comp3=500000 → 260000
# OLD: ded=545000(hra260+80c150+80d75+nps50+80tta10), taxable=912600
# slab: 12500+20%*412600=95020, ×1.04=98820.8 → 98821
# NEW: taxable=1432600, slab: 20000+30000+30000+20%*232600=126520, ×1.04=131580.8 → 131581
_RAHUL_EXPECTED: dict[str, Any] = dict(
    gross_total_income=1_510_000,
    net_taxable_income_old=912_600,
    net_taxable_income_new=1_432_600,
    tax_payable_old=98_821,
    tax_payable_new=131_581,
    recommended_regime="old",
    tax_savings_new_vs_old=-32_760,
)

# ---------------------------------------------------------------------------
# Anita — ₹8L, non-metro, no rent, EPF only
# ---------------------------------------------------------------------------
_ANITA_INPUT: dict[str, Any] = dict(
    basic=800_000,
    epfContribution=50_000,
    isMetroCity=False,
    assessmentYear="2025-26",
)
# OLD: taxable=800000-50000-50000=700000, slab: 12500+40000=52500, ×1.04=54600
# NEW: taxable=725000 (>7L, no 87A), slab: 20000+2500=22500, ×1.04=23400
_ANITA_EXPECTED: dict[str, Any] = dict(
    gross_total_income=800_000,
    net_taxable_income_old=700_000,
    net_taxable_income_new=725_000,
    tax_payable_old=54_600,
    tax_payable_new=23_400,
    recommended_regime="new",
    tax_savings_new_vs_old=31_200,
)


DEMO_PROFILES: dict[str, dict[str, Any]] = {
    "scenario_a": {"input": _SCENARIO_A_INPUT, "expected": _SCENARIO_A_EXPECTED},
    "priya": {"input": _PRIYA_INPUT, "expected": _PRIYA_EXPECTED},
    "rahul": {"input": _RAHUL_INPUT, "expected": _RAHUL_EXPECTED},
    "anita": {"input": _ANITA_INPUT, "expected": _ANITA_EXPECTED},
}
