# SMB FinHealth - Financial health scoring engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Creditworthiness scoring.

The credit score is a weighted sum of six factor scores, each on a 0-100
scale:

    factor            weight   source
    ----------------  ------   -------------------------------------------
    liquidity          0.20    current_ratio
    profitability      0.25    profit_margin, averaged with return_on_equity
    leverage           0.25    debt_to_equity_ratio, averaged with DSCR
    efficiency         0.15    cash_conversion_cycle, averaged with
                               asset_turnover
    growth             0.10    supplied by the caller
    payment_history    0.05    supplied by the caller

A factor whose ratios are all missing keeps a score of 0 and still takes
part in the weighted sum. The growth and payment history scores are not
derived here: they come from trend analysis and banking history, which
are outside this engine, and default to 50.

The final score is rounded half-up to 2 decimals and mapped to a tier
(see CREDIT_TIERS).
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from .metrics import FinancialMetrics

CREDIT_WEIGHTS: dict[str, float] = {
    "liquidity": 0.20,
    "profitability": 0.25,
    "leverage": 0.25,
    "efficiency": 0.15,
    "growth": 0.10,
    "payment_history": 0.05,
}

# (minimum score, tier), evaluated top-down; below the last threshold the
# tier is "very_poor".
CREDIT_TIERS: tuple[tuple[float, str], ...] = (
    (80.0, "excellent"),
    (65.0, "good"),
    (50.0, "fair"),
    (35.0, "poor"),
)

DEFAULT_PAYMENT_HISTORY_SCORE = 50.0
DEFAULT_GROWTH_SCORE = 50.0


@dataclass(frozen=True)
class CreditScoreFactors:
    """Component scores of the credit score, each nominally in [0, 100]."""

    liquidity: float = 0.0
    profitability: float = 0.0
    leverage: float = 0.0
    efficiency: float = 0.0
    growth: float = DEFAULT_GROWTH_SCORE
    payment_history: float = DEFAULT_PAYMENT_HISTORY_SCORE

    def as_dict(self) -> dict[str, float]:
        return {
            "liquidity": self.liquidity,
            "profitability": self.profitability,
            "leverage": self.leverage,
            "efficiency": self.efficiency,
            "growth": self.growth,
            "payment_history": self.payment_history,
        }


@dataclass(frozen=True)
class CreditScoreResult:
    """Outcome of calculate_credit_score()."""

    score: float
    tier: str
    factors: CreditScoreFactors


def _liquidity_score(ratios: Mapping[str, float]) -> float:
    current_ratio = ratios.get("current_ratio")
    if current_ratio is None:
        return 0.0

    if 1.5 <= current_ratio <= 3.0:
        return 100.0
    if 1.0 <= current_ratio < 1.5:
        return 75.0
    if 0.5 <= current_ratio < 1.0:
        return 40.0
    return max(0.0, 100 - abs(current_ratio - 1.5) * 20)


def _profitability_score(ratios: Mapping[str, float]) -> float:
    score = 0.0

    profit_margin = ratios.get("profit_margin")
    if profit_margin is not None:
        if profit_margin >= 10:
            score = 100.0
        elif profit_margin >= 5:
            score = 80.0
        elif profit_margin >= 0:
            score = 60.0
        else:
            score = max(0.0, 30 + profit_margin * 3)

    # Averaged with the base score even when profit_margin is missing.
    return_on_equity = ratios.get("return_on_equity")
    if return_on_equity is not None:
        roe_score = min(100.0, return_on_equity / 15 * 100)
        score = (score + roe_score) / 2

    return score


def _leverage_score(ratios: Mapping[str, float]) -> float:
    score = 0.0

    debt_to_equity = ratios.get("debt_to_equity_ratio")
    if debt_to_equity is not None:
        if debt_to_equity <= 0.5:
            score = 100.0
        elif debt_to_equity <= 1.0:
            score = 80.0
        elif debt_to_equity <= 2.0:
            score = 50.0
        else:
            score = max(0.0, 100 - debt_to_equity * 20)

    dscr = ratios.get("debt_service_coverage_ratio")
    if dscr is not None:
        dsc_score = min(100.0, dscr / 2 * 100)
        score = (score + dsc_score) / 2

    return score


def _efficiency_score(ratios: Mapping[str, float]) -> float:
    score = 0.0

    cycle = ratios.get("cash_conversion_cycle")
    if cycle is not None:
        if cycle <= 30:
            score = 100.0
        elif cycle <= 60:
            score = 80.0
        elif cycle <= 90:
            score = 60.0
        else:
            score = max(0.0, 100 - (cycle - 30) / 2)

    asset_turnover = ratios.get("asset_turnover")
    if asset_turnover is not None:
        ato_score = min(100.0, asset_turnover * 50)
        score = (score + ato_score) / 2

    return score


def credit_tier(score: float) -> str:
    """Map a credit score to its tier ('excellent' ... 'very_poor')."""
    for threshold, tier in CREDIT_TIERS:
        if score >= threshold:
            return tier
    return "very_poor"


def _round_half_up(value: float, decimals: int = 2) -> float:
    factor = 10**decimals
    return math.floor(value * factor + 0.5) / factor


def calculate_credit_score(
    ratios: Mapping[str, float],
    metrics: Optional[FinancialMetrics] = None,
    payment_history_score: float = DEFAULT_PAYMENT_HISTORY_SCORE,
    growth_score: float = DEFAULT_GROWTH_SCORE,
) -> CreditScoreResult:
    """
    Compute the weighted credit score and tier from financial ratios.

    Args:
        ratios: Output of calculate_financial_ratios() (or any mapping
            using the same keys).
        metrics: Raw metrics the ratios were derived from. Accepted for
            symmetry with the other calculators; no rule reads it.
        payment_history_score: Caller-supplied payment history score.
        growth_score: Caller-supplied growth score.

    Returns:
        A CreditScoreResult with the rounded score, its tier and the
        unweighted factor scores.
    """
    factors = CreditScoreFactors(
        liquidity=_liquidity_score(ratios),
        profitability=_profitability_score(ratios),
        leverage=_leverage_score(ratios),
        efficiency=_efficiency_score(ratios),
        growth=float(growth_score),
        payment_history=float(payment_history_score),
    )

    values = factors.as_dict()
    score = sum(values[name] * weight for name, weight in CREDIT_WEIGHTS.items())

    # The tier is read from the unrounded score.
    return CreditScoreResult(
        score=_round_half_up(score),
        tier=credit_tier(score),
        factors=factors,
    )
