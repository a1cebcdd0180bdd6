# SMB FinHealth - Financial health scoring engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Multi-period orchestration of the financial health analysis.

This module runs the single-period pipeline (engine.run_analysis) over an
ordered series of periods and consolidates the results into long-format
pandas DataFrames, one row per item and per period, with a
``period_label`` column.

Workflow
--------
For an ordered mapping {period_label -> FinancialMetrics} (oldest first),
the function ``analyze_multi_period()``:

1. runs ``run_analysis()`` for each period, passing the metrics of the
   preceding period as ``previous`` so that growth trends are available
   from the second period on;
2. records ratios (with RatioMeta metadata), scores, risk factors,
   recommendations and trends with the period label;
3. concatenates everything into the DataFrames of a MultiPeriodAnalysis.

Data model
----------
- ``ratios``          : period_label, key, label, value, unit, category
- ``scores``          : period_label, credit_score, credit_tier,
                        risk_score, risk_tier, and one ``<factor>_score``
                        column per credit factor
- ``risk_factors``    : period_label, position, description
- ``recommendations`` : period_label, category, current_value,
                        benchmark_value, savings_potential,
                        recommendation, priority
- ``trends``          : period_label, key, value

The per-period FinancialHealthReport objects are kept in ``reports`` for
callers that need the raw results.
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Optional

import pandas as pd

from .engine import FinancialHealthReport, run_analysis
from .metrics import FinancialMetrics
from .ratios import RATIO_METADATA
from .scoring import CREDIT_WEIGHTS, DEFAULT_GROWTH_SCORE, DEFAULT_PAYMENT_HISTORY_SCORE

RATIOS_COLUMNS = ["period_label", "key", "label", "value", "unit", "category"]
SCORES_COLUMNS = [
    "period_label",
    "credit_score",
    "credit_tier",
    "risk_score",
    "risk_tier",
    *[f"{name}_score" for name in CREDIT_WEIGHTS],
]
RISK_FACTORS_COLUMNS = ["period_label", "position", "description"]
RECOMMENDATIONS_COLUMNS = [
    "period_label",
    "category",
    "current_value",
    "benchmark_value",
    "savings_potential",
    "recommendation",
    "priority",
]
TRENDS_COLUMNS = ["period_label", "key", "value"]


@dataclass(frozen=True)
class MultiPeriodAnalysis:
    """
    Consolidated results of a multi-period analysis.

    Every DataFrame is in long format and carries a ``period_label``
    column; periods appear in input order.
    """

    ratios: pd.DataFrame
    scores: pd.DataFrame
    risk_factors: pd.DataFrame
    recommendations: pd.DataFrame
    trends: pd.DataFrame
    reports: dict[str, FinancialHealthReport] = field(default_factory=dict)


def _ratio_rows(label: str, report: FinancialHealthReport) -> list[dict[str, object]]:
    rows = []
    for key, value in report.ratios.items():
        meta = RATIO_METADATA.get(key)
        rows.append(
            {
                "period_label": label,
                "key": key,
                "label": meta.label if meta else key,
                "value": value,
                "unit": meta.unit if meta else "ratio",
                "category": meta.category if meta else "",
            }
        )
    return rows


def _score_row(label: str, report: FinancialHealthReport) -> dict[str, object]:
    row: dict[str, object] = {
        "period_label": label,
        "credit_score": report.credit.score,
        "credit_tier": report.credit.tier,
        "risk_score": report.risk.risk_score,
        "risk_tier": report.risk.risk_tier,
    }
    for name, value in report.credit.factors.as_dict().items():
        row[f"{name}_score"] = value
    return row


def analyze_multi_period(
    metrics_by_period: Mapping[str, FinancialMetrics],
    benchmarks: Optional[Mapping[str, float]] = None,
    payment_history_score: float = DEFAULT_PAYMENT_HISTORY_SCORE,
    growth_score: float = DEFAULT_GROWTH_SCORE,
) -> MultiPeriodAnalysis:
    """
    Run the financial health analysis over several periods.

    Parameters
    ----------
    metrics_by_period :
        Ordered mapping {period_label -> FinancialMetrics}, oldest period
        first. Each period is compared with the one before it for trend
        analysis.
    benchmarks :
        Flat benchmark mapping shared by all periods (see benchmarks.py).
    payment_history_score, growth_score :
        Caller-supplied scores applied to every period.

    Returns
    -------
    MultiPeriodAnalysis

    Raises
    ------
    ValueError
        If no period is provided.
    """
    if not metrics_by_period:
        raise ValueError("analyze_multi_period requires at least one period.")

    reports: dict[str, FinancialHealthReport] = {}
    ratio_rows: list[dict[str, object]] = []
    score_rows: list[dict[str, object]] = []
    risk_rows: list[dict[str, object]] = []
    recommendation_rows: list[dict[str, object]] = []
    trend_rows: list[dict[str, object]] = []

    previous: Optional[FinancialMetrics] = None
    for label, metrics in metrics_by_period.items():
        label = str(label)
        report = run_analysis(
            metrics,
            benchmarks=benchmarks,
            previous=previous,
            payment_history_score=payment_history_score,
            growth_score=growth_score,
        )
        reports[label] = report

        ratio_rows.extend(_ratio_rows(label, report))
        score_rows.append(_score_row(label, report))

        for position, description in enumerate(report.risk.risk_factors, start=1):
            risk_rows.append(
                {"period_label": label, "position": position, "description": description}
            )

        for rec in report.recommendations:
            recommendation_rows.append({"period_label": label, **asdict(rec)})

        for key, value in report.trends.items():
            trend_rows.append({"period_label": label, "key": key, "value": value})

        previous = metrics

    return MultiPeriodAnalysis(
        ratios=pd.DataFrame(ratio_rows, columns=RATIOS_COLUMNS),
        scores=pd.DataFrame(score_rows, columns=SCORES_COLUMNS),
        risk_factors=pd.DataFrame(risk_rows, columns=RISK_FACTORS_COLUMNS),
        recommendations=pd.DataFrame(
            recommendation_rows, columns=RECOMMENDATIONS_COLUMNS
        ),
        trends=pd.DataFrame(trend_rows, columns=TRENDS_COLUMNS),
        reports=reports,
    )
