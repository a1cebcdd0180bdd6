# SMB FinHealth - Financial health scoring engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Rule-based financial risk assessment.

Each rule inspects one ratio and, when its condition holds, appends a
description to the risk factors and adds a fixed number of points to the
risk score. Rules are independent and all of them are evaluated; a rule
whose ratio is missing is skipped. The score is capped at 100 and mapped
to a tier (see RISK_TIERS).
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Optional

from .metrics import FinancialMetrics


@dataclass(frozen=True)
class RiskRule:
    """A single risk condition on one ratio."""

    ratio_key: str
    condition: Callable[[float], bool]
    description: str
    points: int


# Evaluation order is the order in which triggered factors are reported.
RISK_RULES: tuple[RiskRule, ...] = (
    RiskRule(
        "current_ratio",
        lambda v: v < 1.0,
        "Low liquidity: Current ratio below 1.0",
        20,
    ),
    RiskRule(
        "quick_ratio",
        lambda v: v < 0.5,
        "Critical liquidity: Quick ratio below 0.5",
        15,
    ),
    RiskRule(
        "profit_margin",
        lambda v: v < 0,
        "Negative profit margin: Business operating at a loss",
        25,
    ),
    RiskRule(
        "return_on_equity",
        lambda v: v < 0,
        "Negative ROE: Shareholders' equity is decreasing",
        20,
    ),
    RiskRule(
        "debt_to_equity_ratio",
        lambda v: v > 2.0,
        "High leverage: Debt-to-equity ratio exceeds 2.0",
        25,
    ),
    RiskRule(
        "debt_service_coverage_ratio",
        lambda v: v < 1.0,
        "Debt service risk: Cannot cover debt obligations from operating income",
        30,
    ),
    RiskRule(
        "cash_conversion_cycle",
        lambda v: v > 120,
        "Working capital risk: Long cash conversion cycle",
        15,
    ),
    RiskRule(
        "inventory_turnover",
        lambda v: v < 1,
        "Inventory risk: Slow inventory turnover",
        10,
    ),
)

# (minimum score, tier), highest threshold first.
RISK_TIERS: tuple[tuple[int, str], ...] = (
    (80, "very_high"),
    (60, "high"),
    (40, "medium"),
    (20, "low"),
)

MAX_RISK_SCORE = 100


@dataclass(frozen=True)
class RiskAssessment:
    """Outcome of assess_financial_risks()."""

    risk_tier: str
    risk_factors: list[str] = field(default_factory=list)
    risk_score: int = 0


def risk_tier(risk_score: float) -> str:
    """Map a risk score to its tier ('very_low' ... 'very_high')."""
    for threshold, tier in RISK_TIERS:
        if risk_score >= threshold:
            return tier
    return "very_low"


def assess_financial_risks(
    ratios: Mapping[str, float],
    metrics: Optional[FinancialMetrics] = None,
) -> RiskAssessment:
    """
    Flag risk conditions in a set of ratios.

    Args:
        ratios: Output of calculate_financial_ratios().
        metrics: Raw metrics; no rule reads them at the moment.

    Returns:
        A RiskAssessment. ``risk_factors`` lists the triggered rule
        descriptions in rule order; ``risk_score`` is the sum of their
        points, capped at 100.
    """
    risk_factors: list[str] = []
    score = 0

    for rule in RISK_RULES:
        value = ratios.get(rule.ratio_key)
        if value is None or not rule.condition(value):
            continue
        risk_factors.append(rule.description)
        score += rule.points

    return RiskAssessment(
        risk_tier=risk_tier(score),
        risk_factors=risk_factors,
        risk_score=min(MAX_RISK_SCORE, score),
    )
