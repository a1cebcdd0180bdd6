# SMB FinHealth - Financial health scoring engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Benchmark-driven cost optimization recommendations.

Three checks compare the business against industry benchmarks:

1. operating expenses as a percentage of revenue,
2. cost of goods sold as a percentage of revenue,
3. days receivable outstanding.

Benchmarks are passed as a flat mapping {benchmark key -> value}, usually
built by benchmarks.benchmarks_for_industry(). A key that is missing,
None or zero falls back to DEFAULT_BENCHMARKS.

Savings potential is expressed in currency units: the revenue share that
would be freed by reaching the benchmark. The receivables check is not
monetary and always reports 0.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from .metrics import FinancialMetrics

DEFAULT_BENCHMARKS: dict[str, float] = {
    "operatingExpenseRatio": 30.0,
    "cogsRatio": 60.0,
    "daysReceivableOutstanding": 45.0,
}

@dataclass(frozen=True)
class CostRecommendation:
    """
    A single cost optimization suggestion.

    Attributes:
        category: Cost area (e.g. 'Operating Expenses').
        current_value: Current value of the compared metric.
        benchmark_value: Benchmark the metric is compared to.
        savings_potential: Estimated yearly savings in currency units.
        recommendation: Human-readable advice.
        priority: 'high', 'medium' or 'low'.
    """

    category: str
    current_value: float
    benchmark_value: float
    savings_potential: float
    recommendation: str
    priority: str


def _benchmark(benchmarks: Optional[Mapping[str, float]], key: str) -> float:
    value = benchmarks.get(key) if benchmarks else None
    # A zero benchmark is meaningless and would divide by zero below.
    if not value:
        return DEFAULT_BENCHMARKS[key]
    return float(value)


def _overage_pct(ratio: float, benchmark: float) -> float:
    return (ratio - benchmark) / benchmark * 100


def _operating_expenses(
    metrics: FinancialMetrics, benchmarks: Optional[Mapping[str, float]]
) -> Optional[CostRecommendation]:
    if metrics.operating_expenses is None or not metrics.revenue:
        return None

    ratio = metrics.operating_expenses / metrics.revenue * 100
    benchmark = _benchmark(benchmarks, "operatingExpenseRatio")
    if ratio <= benchmark:
        return None

    return CostRecommendation(
        category="Operating Expenses",
        current_value=ratio,
        benchmark_value=benchmark,
        savings_potential=metrics.revenue * ((ratio - benchmark) / 100),
        recommendation=(
            f"Reduce operating expenses by {_overage_pct(ratio, benchmark):.1f}% "
            "to match industry benchmark. Focus on automation and process "
            "efficiency."
        ),
        priority="high" if ratio > benchmark * 1.5 else "medium",
    )


def _cost_of_goods_sold(
    metrics: FinancialMetrics, benchmarks: Optional[Mapping[str, float]]
) -> Optional[CostRecommendation]:
    if metrics.cogs is None or not metrics.revenue:
        return None

    ratio = metrics.cogs / metrics.revenue * 100
    benchmark = _benchmark(benchmarks, "cogsRatio")
    if ratio <= benchmark:
        return None

    return CostRecommendation(
        category="Cost of Goods Sold",
        current_value=ratio,
        benchmark_value=benchmark,
        savings_potential=metrics.revenue * ((ratio - benchmark) / 100),
        recommendation=(
            f"Optimize COGS by {_overage_pct(ratio, benchmark):.1f}%. Consider "
            "supplier negotiations, bulk purchasing, or production efficiency "
            "improvements."
        ),
        priority="high" if ratio > benchmark * 1.3 else "medium",
    )


def _accounts_receivable(
    ratios: Mapping[str, float], benchmarks: Optional[Mapping[str, float]]
) -> Optional[CostRecommendation]:
    days = ratios.get("days_receivable_outstanding")
    if days is None:
        return None

    benchmark = _benchmark(benchmarks, "daysReceivableOutstanding")
    if days <= benchmark:
        return None

    excess_days = days - benchmark
    return CostRecommendation(
        category="Accounts Receivable",
        current_value=days,
        benchmark_value=benchmark,
        savings_potential=0.0,
        recommendation=(
            f"Improve collection efficiency. Current DRO is {excess_days:.0f} "
            "days above benchmark. Implement stricter credit policies and "
            "faster invoicing."
        ),
        priority="high" if excess_days > 30 else "medium",
    )


def generate_cost_optimization_recommendations(
    ratios: Mapping[str, float],
    metrics: FinancialMetrics,
    benchmarks: Optional[Mapping[str, float]] = None,
) -> list[CostRecommendation]:
    """
    Compare metrics and ratios against industry benchmarks.

    The revenue-based checks need a known, non-zero revenue; with a zero
    revenue no percentage can be formed and they are skipped.

    Args:
        ratios: Output of calculate_financial_ratios().
        metrics: Raw metrics the ratios were derived from.
        benchmarks: Benchmark values keyed by 'operatingExpenseRatio',
            'cogsRatio' and 'daysReceivableOutstanding'. None means no
            industry data is available.

    Returns:
        The triggered recommendations, in check order. Empty when every
        metric is at or below its benchmark.
    """
    candidates = (
        _operating_expenses(metrics, benchmarks),
        _cost_of_goods_sold(metrics, benchmarks),
        _accounts_receivable(ratios, benchmarks),
    )
    return [rec for rec in candidates if rec is not None]
