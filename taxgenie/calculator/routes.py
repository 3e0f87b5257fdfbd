"""
Calculator HTTP routes — POST /api/calculate-tax,
                          POST /api/estimate-from-payslip,
                          GET  /api/assessment-years

Thin wrappers: the tax engine does all the work synchronously, there is no
persistence. Responses use the camelCase wire names.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Query
from fastapi.responses import JSONResponse

from taxgenie.calculator.payslip import MONTHS_PER_YEAR, annualize_payslip, annualize_tds
from taxgenie.calculator.rules import LATEST_ASSESSMENT_YEAR, SUPPORTED_ASSESSMENT_YEARS
from taxgenie.calculator.schemas import ExtractedPayslip
from taxgenie.calculator.tax_engine import compare_regimes

router = APIRouter(prefix="/api", tags=["calculator"])
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/calculate-tax")
async def calculate_tax(payload: Dict[str, Any] = Body(...)) -> JSONResponse:
    """
    Compare Old and New regime tax for one set of annual figures.

    Every field is optional; missing or non-numeric values count as 0 and an
    unknown assessmentYear falls back to the latest supported year (see
    ``assessmentYear`` in the response).
    """
    result = compare_regimes(payload)
    logger.info(
        "Tax calculated AY%s recommended=%s savings_new_vs_old=%d",
        result.assessment_year,
        result.recommended_regime,
        result.tax_savings_new_vs_old,
    )
    return JSONResponse(status_code=200, content=result.model_dump(by_alias=True))


@router.post("/estimate-from-payslip")
async def estimate_from_payslip(
    record: ExtractedPayslip,
    periods: int = Query(
        MONTHS_PER_YEAR, ge=1, le=MONTHS_PER_YEAR,
        description="Pay periods the record covers in a year: 12 for a monthly payslip, 1 for Form 16.",
    ),
) -> JSONResponse:
    """
    Annualise an extracted payslip / Form 16 record and run the comparison.

    Returns the annual IncomeInputs derived from the record (so the client
    can pre-fill its form), the resulting comparison, and the annualised TDS
    to set against the estimated liability.
    """
    inputs = annualize_payslip(record, periods=periods)
    result = compare_regimes(inputs)
    logger.info(
        "Payslip estimate periods=%d AY%s recommended=%s",
        periods, result.assessment_year, result.recommended_regime,
    )
    return JSONResponse(
        status_code=200,
        content={
            "incomeInputs": inputs.model_dump(by_alias=True),
            "comparison": result.model_dump(by_alias=True),
            "estimatedAnnualTds": annualize_tds(record, periods=periods),
        },
    )


@router.get("/assessment-years")
async def list_assessment_years() -> dict:
    """Assessment years with encoded rule tables, and the default used for unknown years."""
    return {
        "supported": list(SUPPORTED_ASSESSMENT_YEARS),
        "default": LATEST_ASSESSMENT_YEAR,
    }
