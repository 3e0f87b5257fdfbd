"""
Rule table tests — invariants of every encoded year, provider fallback and
construction-time validation.
"""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from taxgenie.calculator.rules import (
    CESS_RATE,
    LATEST_ASSESSMENT_YEAR,
    RULE_TABLES,
    SUPPORTED_ASSESSMENT_YEARS,
    get_rule_table,
    normalize_assessment_year,
)
from taxgenie.calculator.schemas import RuleTable, Slab


# ===========================================================================
# Invariants
# ===========================================================================

@pytest.mark.parametrize("year", SUPPORTED_ASSESSMENT_YEARS)
def test_slabs_start_at_zero_and_strictly_ascend(year: str) -> None:
    table = RULE_TABLES[year]
    for slabs in (table.old_regime_slabs, table.new_regime_slabs):
        assert slabs[0].threshold == 0
        thresholds = [s.threshold for s in slabs]
        assert all(lo < hi for lo, hi in zip(thresholds, thresholds[1:]))
        assert all(0 <= s.rate < 1 for s in slabs)


@pytest.mark.parametrize("year", SUPPORTED_ASSESSMENT_YEARS)
def test_table_keyed_by_its_own_year(year: str) -> None:
    assert RULE_TABLES[year].assessment_year == year


def test_supported_years_and_default() -> None:
    assert SUPPORTED_ASSESSMENT_YEARS == ("2024-25", "2025-26")
    assert LATEST_ASSESSMENT_YEAR == "2025-26"


def test_ay_2025_26_values() -> None:
    table = get_rule_table("2025-26")
    assert [s.threshold for s in table.old_regime_slabs] == [0, 250_000, 500_000, 1_000_000]
    assert [s.rate for s in table.old_regime_slabs] == [0.0, 0.05, 0.20, 0.30]
    assert [s.threshold for s in table.new_regime_slabs] == [
        0, 300_000, 700_000, 1_000_000, 1_200_000, 1_500_000,
    ]
    assert [s.rate for s in table.new_regime_slabs] == [0.0, 0.05, 0.10, 0.15, 0.20, 0.30]
    assert table.old_regime_rebate_limit == 500_000
    assert table.new_regime_rebate_limit == 700_000
    assert table.standard_deduction_old == 50_000
    assert table.standard_deduction_new == 75_000
    assert table.cess_rate == CESS_RATE == 0.04


def test_ay_2024_25_values() -> None:
    table = get_rule_table("2024-25")
    assert [s.threshold for s in table.new_regime_slabs] == [
        0, 300_000, 600_000, 900_000, 1_200_000, 1_500_000,
    ]
    assert table.new_regime_rebate_limit == 700_000
    assert table.standard_deduction_new == 50_000


# ===========================================================================
# Provider
# ===========================================================================

@pytest.mark.parametrize("year", [None, "", "1999-00", "2030-31", "not a year"])
def test_unknown_or_missing_year_falls_back_to_latest(year) -> None:
    assert get_rule_table(year) is RULE_TABLES[LATEST_ASSESSMENT_YEAR]


@pytest.mark.parametrize("spelling", ["2024-25", "AY2024-25", "ay 2024-25", " 2024-2025 "])
def test_year_spellings_resolve(spelling: str) -> None:
    assert get_rule_table(spelling).assessment_year == "2024-25"


def test_unknown_year_logs_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING", logger="taxgenie.calculator.rules"):
        get_rule_table("1999-00")
    assert "1999-00" in caplog.text


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("2025-26", "2025-26"),
        ("AY 2025-2026", "2025-26"),
        ("FY2023-24", None),
        ("2025", None),
        ("25-26", None),
        (None, None),
    ],
)
def test_normalize_assessment_year(raw, expected) -> None:
    assert normalize_assessment_year(raw) == expected


def test_tables_are_immutable() -> None:
    table = get_rule_table("2025-26")
    with pytest.raises(ValidationError):
        table.cess_rate = 0.05
    with pytest.raises(TypeError):
        RULE_TABLES["2026-27"] = table


# ===========================================================================
# Construction-time validation
# ===========================================================================

def _table(**overrides) -> RuleTable:
    kwargs = dict(
        assessment_year="test",
        old_regime_slabs=(Slab(threshold=0, rate=0.0), Slab(threshold=250_000, rate=0.05)),
        new_regime_slabs=(Slab(threshold=0, rate=0.0), Slab(threshold=300_000, rate=0.05)),
        old_regime_rebate_limit=500_000,
        new_regime_rebate_limit=700_000,
        cess_rate=0.04,
        standard_deduction_old=50_000,
        standard_deduction_new=75_000,
    )
    kwargs.update(overrides)
    return RuleTable(**kwargs)


def test_valid_table_builds() -> None:
    assert _table().assessment_year == "test"


@pytest.mark.parametrize(
    "slabs",
    [
        (),
        (Slab(threshold=100, rate=0.0),),
        (Slab(threshold=0, rate=0.0), Slab(threshold=0, rate=0.05)),
        (Slab(threshold=0, rate=0.0), Slab(threshold=500, rate=0.05), Slab(threshold=400, rate=0.1)),
    ],
    ids=["empty", "first_not_zero", "duplicate_threshold", "descending"],
)
def test_bad_slab_order_rejected(slabs) -> None:
    with pytest.raises(ValidationError):
        _table(new_regime_slabs=slabs)


@pytest.mark.parametrize(
    "threshold,rate",
    [(-1, 0.05), (0, -0.1), (0, 1.0)],
)
def test_bad_slab_values_rejected(threshold: int, rate: float) -> None:
    with pytest.raises(ValidationError):
        Slab(threshold=threshold, rate=rate)


@pytest.mark.parametrize(
    "field,value",
    [
        ("old_regime_rebate_limit", -1),
        ("new_regime_rebate_limit", -700_000),
        ("standard_deduction_new", -75_000),
        ("cess_rate", 1.5),
    ],
)
def test_negative_limits_rejected(field: str, value) -> None:
    with pytest.raises(ValidationError):
        _table(**{field: value})
