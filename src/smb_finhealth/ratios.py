# SMB FinHealth - Financial health scoring engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.


"""
Computation of financial ratios for SMB FinHealth.

This module derives liquidity, profitability, leverage and efficiency
ratios from a FinancialMetrics record.

1. Derivation rules
   -----------------
   A ratio is computed only when every metric it needs is known. Unknown
   inputs are never replaced by zero: a missing input means a missing
   ratio, and the absence of a key in the returned mapping is the only
   signal.

   Denominators are guarded instead: a known denominator equal to zero is
   replaced by 1 so that no ratio ever evaluates to NaN or infinity.

   The "days" metrics are derived from the turnover ratios (365 days per
   year) and the cash conversion cycle from the three days metrics.

2. Metadata
   ---------
   Each ratio is described by a RatioMeta entry (label, unit, category)
   in RATIO_METADATA. The table is used by views.py and multi_periods.py
   for presentation only; it plays no role in the computation.

Summary
-------
    calculate_financial_ratios(metrics) -> {ratio_key -> float}

The function is pure: it reads its argument and returns a new dict.
"""

from dataclasses import dataclass
from typing import Optional

from .metrics import FinancialMetrics

DAYS_PER_YEAR = 365


@dataclass(frozen=True)
class RatioMeta:
    """
    Presentation metadata for a ratio.

    Attributes:
        key: Ratio identifier (e.g. 'current_ratio').
        label: Human-readable label.
        unit: Unit hint ('ratio', 'percent', 'amount', 'days').
        category: Ratio family ('liquidity', 'profitability',
            'leverage', 'efficiency').
        notes: Short description of the formula.
    """

    key: str
    label: str
    unit: str
    category: str
    notes: str = ""


_META: tuple[RatioMeta, ...] = (
    # Liquidity
    RatioMeta(
        "current_ratio",
        "Current ratio",
        "ratio",
        "liquidity",
        "current_assets / current_liabilities",
    ),
    RatioMeta(
        "quick_ratio",
        "Quick ratio",
        "ratio",
        "liquidity",
        "(current_assets - inventory) / current_liabilities",
    ),
    RatioMeta(
        "cash_ratio",
        "Cash ratio",
        "ratio",
        "liquidity",
        "Not derived: the metrics carry no cash balance.",
    ),
    RatioMeta(
        "working_capital",
        "Working capital",
        "amount",
        "liquidity",
        "current_assets - current_liabilities",
    ),
    # Profitability
    RatioMeta(
        "profit_margin",
        "Net profit margin (%)",
        "percent",
        "profitability",
        "net_income / revenue",
    ),
    RatioMeta(
        "operating_margin",
        "Operating margin (%)",
        "percent",
        "profitability",
        "operating_income / revenue",
    ),
    RatioMeta(
        "return_on_assets",
        "Return on assets (%)",
        "percent",
        "profitability",
        "net_income / assets",
    ),
    RatioMeta(
        "return_on_equity",
        "Return on equity (%)",
        "percent",
        "profitability",
        "net_income / equity",
    ),
    RatioMeta(
        "asset_turnover",
        "Asset turnover",
        "ratio",
        "profitability",
        "revenue / assets",
    ),
    # Leverage
    RatioMeta(
        "debt_to_equity_ratio",
        "Debt to equity",
        "ratio",
        "leverage",
        "debt / equity",
    ),
    RatioMeta(
        "debt_to_assets_ratio",
        "Debt to assets",
        "ratio",
        "leverage",
        "debt / assets",
    ),
    RatioMeta(
        "equity_ratio",
        "Equity ratio (%)",
        "percent",
        "leverage",
        "equity / assets",
    ),
    RatioMeta(
        "debt_service_coverage_ratio",
        "Debt service coverage (DSCR)",
        "ratio",
        "leverage",
        "operating_income / (short_term_debt + long_term_debt + interest_expense)",
    ),
    # Efficiency
    RatioMeta(
        "receivables_turnover",
        "Receivables turnover",
        "ratio",
        "efficiency",
        "revenue / accounts_receivable",
    ),
    RatioMeta(
        "payables_turnover",
        "Payables turnover",
        "ratio",
        "efficiency",
        "cogs / accounts_payable",
    ),
    RatioMeta(
        "inventory_turnover",
        "Inventory turnover",
        "ratio",
        "efficiency",
        "cogs / inventory",
    ),
    RatioMeta(
        "days_inventory_outstanding",
        "Days inventory outstanding",
        "days",
        "efficiency",
        "365 / inventory_turnover",
    ),
    RatioMeta(
        "days_receivable_outstanding",
        "Days receivable outstanding",
        "days",
        "efficiency",
        "365 / receivables_turnover",
    ),
    RatioMeta(
        "days_payable_outstanding",
        "Days payable outstanding",
        "days",
        "efficiency",
        "365 / payables_turnover",
    ),
    RatioMeta(
        "cash_conversion_cycle",
        "Cash conversion cycle",
        "days",
        "efficiency",
        "DIO + DRO - DPO",
    ),
)

RATIO_METADATA: dict[str, RatioMeta] = {meta.key: meta for meta in _META}


def _guard(denominator: float) -> float:
    """Replace a zero denominator by 1."""
    return denominator if denominator else 1.0


def _known(*values: Optional[float]) -> bool:
    return all(v is not None for v in values)


def calculate_financial_ratios(metrics: FinancialMetrics) -> dict[str, float]:
    """
    Derive all computable ratios from a FinancialMetrics record.

    Args:
        metrics: Partial raw metrics. Unknown fields are ``None``.

    Returns:
        A dict mapping ratio keys to float values. A ratio whose inputs
        are not all known is absent from the result. Percentages are
        expressed in percent (10.0 means 10 %).
    """
    m = metrics
    ratios: dict[str, float] = {}

    # Liquidity
    if _known(m.current_assets, m.current_liabilities):
        ratios["current_ratio"] = m.current_assets / _guard(m.current_liabilities)

    if _known(m.current_assets, m.inventory, m.current_liabilities):
        quick_assets = m.current_assets - m.inventory
        ratios["quick_ratio"] = quick_assets / _guard(m.current_liabilities)

    if _known(m.current_assets, m.current_liabilities):
        ratios["working_capital"] = m.current_assets - m.current_liabilities

    # Profitability
    if _known(m.net_income, m.revenue):
        ratios["profit_margin"] = m.net_income / _guard(m.revenue) * 100

    if _known(m.operating_income, m.revenue):
        ratios["operating_margin"] = m.operating_income / _guard(m.revenue) * 100

    if _known(m.net_income, m.assets):
        ratios["return_on_assets"] = m.net_income / _guard(m.assets) * 100

    if _known(m.net_income, m.equity):
        ratios["return_on_equity"] = m.net_income / _guard(m.equity) * 100

    if _known(m.revenue, m.assets):
        ratios["asset_turnover"] = m.revenue / _guard(m.assets)

    # Leverage
    if _known(m.debt, m.equity):
        ratios["debt_to_equity_ratio"] = m.debt / _guard(m.equity)

    if _known(m.debt, m.assets):
        ratios["debt_to_assets_ratio"] = m.debt / _guard(m.assets)

    if _known(m.equity, m.assets):
        ratios["equity_ratio"] = m.equity / _guard(m.assets) * 100

    # Interest expense is optional here and counts as 0 when unknown.
    if _known(m.operating_income, m.short_term_debt, m.long_term_debt):
        debt_service = m.short_term_debt + m.long_term_debt + (m.interest_expense or 0.0)
        ratios["debt_service_coverage_ratio"] = m.operating_income / _guard(debt_service)

    # Efficiency
    if _known(m.revenue, m.accounts_receivable):
        ratios["receivables_turnover"] = m.revenue / _guard(m.accounts_receivable)

    if _known(m.cogs, m.inventory):
        ratios["inventory_turnover"] = m.cogs / _guard(m.inventory)

    if _known(m.cogs, m.accounts_payable):
        ratios["payables_turnover"] = m.cogs / _guard(m.accounts_payable)

    # Days metrics, derived from the turnover ratios above
    if "inventory_turnover" in ratios:
        ratios["days_inventory_outstanding"] = DAYS_PER_YEAR / _guard(
            ratios["inventory_turnover"]
        )

    if "receivables_turnover" in ratios:
        ratios["days_receivable_outstanding"] = DAYS_PER_YEAR / _guard(
            ratios["receivables_turnover"]
        )

    if "payables_turnover" in ratios:
        ratios["days_payable_outstanding"] = DAYS_PER_YEAR / _guard(
            ratios["payables_turnover"]
        )

    # Only when all three days metrics are known.
    dio = ratios.get("days_inventory_outstanding")
    dro = ratios.get("days_receivable_outstanding")
    dpo = ratios.get("days_payable_outstanding")
    if _known(dio, dro, dpo):
        ratios["cash_conversion_cycle"] = dio + dro - dpo

    return ratios
