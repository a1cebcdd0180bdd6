# SMB FinHealth - Financial health scoring engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
View helpers for SMB FinHealth.

This module turns engine results into presentation structures:

- pandas DataFrames, for console tables and CSV exports (CLI),
- a JSON-ready nested dict, for the calling persistence/reporting layer.

It performs no computation beyond rounding and formatting.
"""

import math
from dataclasses import asdict
from typing import Any, Optional

import pandas as pd

from .engine import FinancialHealthReport
from .optimization import CostRecommendation
from .ratios import RATIO_METADATA
from .risk import RiskAssessment
from .scoring import CREDIT_WEIGHTS, CreditScoreResult


def _round(value: Optional[float], decimals: int) -> float:
    if value is None:
        return float("nan")
    if not math.isfinite(value):
        return value
    return round(value, decimals)


def ratios_to_dataframe(ratios: dict[str, float], decimals: int) -> pd.DataFrame:
    """
    Convert a ratios mapping into a pandas DataFrame.

    The resulting DataFrame has the following columns:
        - key:      Ratio identifier (e.g. "current_ratio").
        - label:    Human-readable label to display.
        - value:    Numeric value, rounded to the requested decimals.
        - unit:     Unit hint ("ratio", "percent", "amount", "days").
        - category: Ratio family ("liquidity", "profitability", ...).

    Rows follow the RATIO_METADATA order; ratios that were not derived
    are not listed.
    """
    columns = ["key", "label", "value", "unit", "category"]
    rows: list[dict[str, object]] = []

    for key, meta in RATIO_METADATA.items():
        if key not in ratios:
            continue
        rows.append(
            {
                "key": key,
                "label": meta.label,
                "value": _round(ratios[key], decimals),
                "unit": meta.unit,
                "category": meta.category,
            }
        )

    # Keys without metadata (custom callers) go last, in input order.
    for key, value in ratios.items():
        if key in RATIO_METADATA:
            continue
        rows.append(
            {
                "key": key,
                "label": key,
                "value": _round(value, decimals),
                "unit": "ratio",
                "category": "",
            }
        )

    return pd.DataFrame(rows, columns=columns)


def credit_factors_to_dataframe(result: CreditScoreResult) -> pd.DataFrame:
    """
    One row per credit factor: factor, score, weight and weighted score.

    The ``weighted`` column sums to the unrounded credit score.
    """
    factors = result.factors.as_dict()
    rows = [
        {
            "factor": name,
            "score": round(factors[name], 2),
            "weight": weight,
            "weighted": round(factors[name] * weight, 2),
        }
        for name, weight in CREDIT_WEIGHTS.items()
    ]
    return pd.DataFrame(rows, columns=["factor", "score", "weight", "weighted"])


def risk_to_dataframe(assessment: RiskAssessment) -> pd.DataFrame:
    """Triggered risk factors, in evaluation order."""
    rows = [
        {"position": position, "description": description}
        for position, description in enumerate(assessment.risk_factors, start=1)
    ]
    return pd.DataFrame(rows, columns=["position", "description"])


def recommendations_to_dataframe(
    recommendations: list[CostRecommendation], decimals: int = 2
) -> pd.DataFrame:
    columns = [
        "category",
        "current_value",
        "benchmark_value",
        "savings_potential",
        "priority",
        "recommendation",
    ]
    rows = []
    for rec in recommendations:
        rows.append(
            {
                "category": rec.category,
                "current_value": _round(rec.current_value, decimals),
                "benchmark_value": _round(rec.benchmark_value, decimals),
                "savings_potential": _round(rec.savings_potential, decimals),
                "priority": rec.priority,
                "recommendation": rec.recommendation,
            }
        )
    return pd.DataFrame(rows, columns=columns)


def trends_to_dataframe(trends: dict[str, float], decimals: int) -> pd.DataFrame:
    rows = [{"key": k, "value": _round(v, decimals)} for k, v in trends.items()]
    return pd.DataFrame(rows, columns=["key", "value"])


def summary_to_dataframe(report: FinancialHealthReport) -> pd.DataFrame:
    """Two-row headline table: credit score/tier and risk score/tier."""
    return pd.DataFrame(
        [
            {
                "assessment": "credit",
                "score": report.credit.score,
                "tier": report.credit.tier,
            },
            {
                "assessment": "risk",
                "score": report.risk.risk_score,
                "tier": report.risk.risk_tier,
            },
        ],
        columns=["assessment", "score", "tier"],
    )


def _json_safe(value: Any) -> Any:
    """Replace non-finite floats by None, recursively."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value


def report_to_dict(report: FinancialHealthReport) -> dict[str, Any]:
    """
    Convert a FinancialHealthReport into a JSON-ready nested dict.

    Unknown metrics are omitted, and non-finite values (growth from a
    zero previous value) are reported as None so that ``json.dumps``
    produces strict JSON.
    """
    data = {
        "metrics": report.metrics.to_dict(),
        "ratios": dict(report.ratios),
        "credit": {
            "score": report.credit.score,
            "tier": report.credit.tier,
            "factors": report.credit.factors.as_dict(),
        },
        "risk": {
            "risk_tier": report.risk.risk_tier,
            "risk_factors": list(report.risk.risk_factors),
            "risk_score": report.risk.risk_score,
        },
        "recommendations": [asdict(rec) for rec in report.recommendations],
        "trends": dict(report.trends),
    }
    return _json_safe(data)
