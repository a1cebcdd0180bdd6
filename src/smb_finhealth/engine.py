# SMB FinHealth - Financial health scoring engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Core financial health engine for SMB FinHealth.

This module chains the individual calculators into a single analysis for
one reporting period. The pipeline always runs in the same order, each
stage consuming only the output of the previous one:

    metrics
      └─> ratios                      (ratios.py)
            ├─> credit score & tier   (scoring.py)
            ├─> risk assessment       (risk.py)
            ├─> cost recommendations  (optimization.py, with benchmarks)
            └─> trend analysis        (trends.py, with previous metrics)

1. Inputs
   -------
   - a FinancialMetrics record (partial figures, unknown = None),
   - optional industry benchmarks (see benchmarks.py),
   - optional metrics of the previous period, enabling trend analysis,
   - the caller-supplied payment history and growth scores.

2. Output
   -------
   A FinancialHealthReport value object bundling every result. The report
   is plain data: views.py turns it into DataFrames or a JSON-ready dict,
   and persisting it is left to the caller.

Notes
-----
This module does not read files, log, or keep any state between calls.
Multi-period orchestration is handled by multi_periods.py, which calls
run_analysis() once per period.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional

from .metrics import FinancialMetrics
from .optimization import (
    CostRecommendation,
    generate_cost_optimization_recommendations,
)
from .ratios import calculate_financial_ratios
from .risk import RiskAssessment, assess_financial_risks
from .scoring import (
    DEFAULT_GROWTH_SCORE,
    DEFAULT_PAYMENT_HISTORY_SCORE,
    CreditScoreResult,
    calculate_credit_score,
)
from .trends import calculate_trend_analysis


@dataclass(frozen=True)
class FinancialHealthReport:
    """
    Complete financial health analysis for one period.

    Attributes
    ----------
    metrics :
        The raw metrics the analysis was computed from.
    ratios :
        Derived ratios, {ratio_key -> value}; only computable ratios.
    credit :
        Credit score, tier and factor scores.
    risk :
        Risk tier, score and triggered risk factors.
    recommendations :
        Cost optimization recommendations, possibly empty.
    trends :
        Growth percentages versus the previous period; empty when no
        previous period was supplied.
    """

    metrics: FinancialMetrics
    ratios: dict[str, float]
    credit: CreditScoreResult
    risk: RiskAssessment
    recommendations: list[CostRecommendation] = field(default_factory=list)
    trends: dict[str, float] = field(default_factory=dict)


def run_analysis(
    metrics: FinancialMetrics,
    benchmarks: Optional[Mapping[str, float]] = None,
    previous: Optional[FinancialMetrics] = None,
    payment_history_score: float = DEFAULT_PAYMENT_HISTORY_SCORE,
    growth_score: float = DEFAULT_GROWTH_SCORE,
) -> FinancialHealthReport:
    """Run the full analysis pipeline for one period.

    Args:
        metrics: Raw metrics of the analysed period.
        benchmarks: Flat benchmark mapping for the cost optimizer. None
            means the optimizer's defaults are used.
        previous: Raw metrics of the previous period, if known.
        payment_history_score: Caller-supplied payment history score.
        growth_score: Caller-supplied growth score.

    Returns:
        A FinancialHealthReport.
    """
    ratios = calculate_financial_ratios(metrics)

    credit = calculate_credit_score(
        ratios,
        metrics,
        payment_history_score=payment_history_score,
        growth_score=growth_score,
    )
    risk = assess_financial_risks(ratios, metrics)
    recommendations = generate_cost_optimization_recommendations(
        ratios, metrics, benchmarks
    )

    trends: dict[str, float] = {}
    if previous is not None:
        trends = calculate_trend_analysis(metrics, previous)

    return FinancialHealthReport(
        metrics=metrics,
        ratios=ratios,
        credit=credit,
        risk=risk,
        recommendations=recommendations,
        trends=trends,
    )
