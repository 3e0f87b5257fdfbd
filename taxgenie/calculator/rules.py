"""
Rule tables — one immutable RuleTable per assessment year.

Every table is built (and therefore validated) when this module is imported.
A broken table fails process start-up, never a request.

Adding a year: add one entry to RULE_TABLES. The newest year also becomes the
default for requests that name no year or an unknown one.

Known simplification: the Section 87A rebate is applied as a cliff. Taxable
income at or below the rebate limit pays nothing, above it pays full slab tax.
Marginal relief just above the limit is not modelled.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional

from taxgenie.calculator.schemas import RuleTable, Slab

logger = logging.getLogger(__name__)

# ===========================================================================
# SHARED CONSTANTS
# ===========================================================================

CESS_RATE = 0.04                 # Health and Education Cess

# Old regime slabs are unchanged across the encoded years.
_OLD_REGIME_SLABS = (
    Slab(threshold=0,         rate=0.00),   # 0–2.5L: 0%
    Slab(threshold=250_000,   rate=0.05),   # 2.5–5L: 5%
    Slab(threshold=500_000,   rate=0.20),   # 5–10L: 20%
    Slab(threshold=1_000_000, rate=0.30),   # >10L: 30%
)

# ===========================================================================
# YEAR TABLES
# ===========================================================================

# AY 2024-25 (FY 2023-24), Finance Act 2023 new regime
_AY_2024_25 = RuleTable(
    assessment_year="2024-25",
    old_regime_slabs=_OLD_REGIME_SLABS,
    new_regime_slabs=(
        Slab(threshold=0,         rate=0.00),   # 0–3L: 0%
        Slab(threshold=300_000,   rate=0.05),   # 3–6L: 5%
        Slab(threshold=600_000,   rate=0.10),   # 6–9L: 10%
        Slab(threshold=900_000,   rate=0.15),   # 9–12L: 15%
        Slab(threshold=1_200_000, rate=0.20),   # 12–15L: 20%
        Slab(threshold=1_500_000, rate=0.30),   # >15L: 30%
    ),
    old_regime_rebate_limit=500_000,
    new_regime_rebate_limit=700_000,
    cess_rate=CESS_RATE,
    standard_deduction_old=50_000,
    standard_deduction_new=50_000,
)

# AY 2025-26 (FY 2024-25). Budget 2024 widened the 5% and 10% new-regime
# brackets and raised the new-regime standard deduction to ₹75,000.
_AY_2025_26 = RuleTable(
    assessment_year="2025-26",
    old_regime_slabs=_OLD_REGIME_SLABS,
    new_regime_slabs=(
        Slab(threshold=0,         rate=0.00),   # 0–3L: 0%
        Slab(threshold=300_000,   rate=0.05),   # 3–7L: 5%
        Slab(threshold=700_000,   rate=0.10),   # 7–10L: 10%
        Slab(threshold=1_000_000, rate=0.15),   # 10–12L: 15%
        Slab(threshold=1_200_000, rate=0.20),   # 12–15L: 20%
        Slab(threshold=1_500_000, rate=0.30),   # >15L: 30%
    ),
    old_regime_rebate_limit=500_000,
    new_regime_rebate_limit=700_000,
    cess_rate=CESS_RATE,
    standard_deduction_old=50_000,
    standard_deduction_new=75_000,
)

# Ordered oldest → newest. Read-only view so nothing can register a year at runtime.
RULE_TABLES: Mapping[str, RuleTable] = MappingProxyType({
    table.assessment_year: table for table in (_AY_2024_25, _AY_2025_26)
})

SUPPORTED_ASSESSMENT_YEARS: tuple[str, ...] = tuple(RULE_TABLES)
LATEST_ASSESSMENT_YEAR: str = SUPPORTED_ASSESSMENT_YEARS[-1]


def normalize_assessment_year(assessment_year: Optional[str]) -> Optional[str]:
    """
    Accept the spellings users and extractors actually produce:
    "2025-26", "AY2025-26", "AY 2025-2026", " 2025-26 ". Returns None when the
    string is not an assessment-year shape at all.
    """
    if not assessment_year:
        return None
    text = assessment_year.strip().upper().removeprefix("AY").strip()
    start, sep, end = text.partition("-")
    if not sep or not start.isdigit() or not end.isdigit() or len(start) != 4:
        return None
    if len(end) == 4:
        end = end[2:]
    if len(end) != 2:
        return None
    return f"{start}-{end}"


def get_rule_table(assessment_year: Optional[str] = None) -> RuleTable:
    """
    Return the rule table for ``assessment_year``.

    Missing or unknown years fall back to LATEST_ASSESSMENT_YEAR. This is the
    documented default, logged at WARNING for unknown years; it never raises.
    Callers that need to surface the fallback compare the returned table's
    assessment_year with what they asked for.
    """
    if assessment_year is None:
        return RULE_TABLES[LATEST_ASSESSMENT_YEAR]

    table = RULE_TABLES.get(normalize_assessment_year(assessment_year) or "")
    if table is None:
        logger.warning(
            "Unknown assessment year %r — falling back to %s",
            assessment_year, LATEST_ASSESSMENT_YEAR,
        )
        return RULE_TABLES[LATEST_ASSESSMENT_YEAR]
    return table


__all__ = [
    "CESS_RATE",
    "RULE_TABLES",
    "SUPPORTED_ASSESSMENT_YEARS",
    "LATEST_ASSESSMENT_YEAR",
    "normalize_assessment_year",
    "get_rule_table",
]
