import json
import math

import pytest

from smb_finhealth.engine import run_analysis
from smb_finhealth.metrics import FinancialMetrics
from smb_finhealth.views import (
    credit_factors_to_dataframe,
    ratios_to_dataframe,
    recommendations_to_dataframe,
    report_to_dict,
    risk_to_dataframe,
    summary_to_dataframe,
    trends_to_dataframe,
)


def _report(previous=None):
    metrics = FinancialMetrics(
        current_assets=80000,
        current_liabilities=100000,
        revenue=500000,
        net_income=-10000,
        operating_expenses=200000,
        equity=100000,
    )
    return run_analysis(metrics, previous=previous)


def test_ratios_to_dataframe_follows_metadata_order() -> None:
    df = ratios_to_dataframe(
        {"custom": 5.0, "quick_ratio": 1.23456, "current_ratio": 2.0}, decimals=2
    )

    assert list(df.columns) == ["key", "label", "value", "unit", "category"]
    assert df["key"].tolist() == ["current_ratio", "quick_ratio", "custom"]
    assert df["value"].tolist() == [2.0, 1.23, 5.0]
    assert df.loc[1, "label"] == "Quick ratio"
    assert df.loc[1, "category"] == "liquidity"
    assert df.loc[2, "label"] == "custom"


def test_ratios_to_dataframe_empty() -> None:
    df = ratios_to_dataframe({}, decimals=2)

    assert df.empty
    assert list(df.columns) == ["key", "label", "value", "unit", "category"]


def test_credit_factors_to_dataframe() -> None:
    report = _report()

    df = credit_factors_to_dataframe(report.credit)

    assert df["factor"].tolist() == [
        "liquidity",
        "profitability",
        "leverage",
        "efficiency",
        "growth",
        "payment_history",
    ]
    assert df["weighted"].sum() == pytest.approx(report.credit.score, abs=0.05)


def test_risk_and_summary_tables() -> None:
    report = _report()

    risk = risk_to_dataframe(report.risk)
    summary = summary_to_dataframe(report)

    assert risk["position"].tolist() == list(range(1, len(report.risk.risk_factors) + 1))
    assert risk["description"].tolist() == report.risk.risk_factors
    assert summary["assessment"].tolist() == ["credit", "risk"]
    assert summary["tier"].tolist() == [report.credit.tier, report.risk.risk_tier]


def test_recommendations_to_dataframe_rounds_values() -> None:
    report = _report()

    df = recommendations_to_dataframe(report.recommendations, decimals=1)

    assert df["category"].tolist() == ["Operating Expenses"]
    assert df["current_value"].tolist() == [40.0]
    assert df["savings_potential"].tolist() == [50000.0]


def test_trends_to_dataframe_keeps_infinite_values() -> None:
    df = trends_to_dataframe({"revenue_growth": 12.3456, "profit_growth": -math.inf}, 1)

    assert df["value"].tolist() == [12.3, -math.inf]


def test_report_to_dict_is_strict_json() -> None:
    report = _report(previous=FinancialMetrics(revenue=400000, net_income=0, equity=0))

    data = report_to_dict(report)
    text = json.dumps(data, allow_nan=False)

    assert set(data) == {
        "metrics",
        "ratios",
        "credit",
        "risk",
        "recommendations",
        "trends",
    }
    assert data["metrics"]["revenue"] == 500000.0
    assert "inventory" not in data["metrics"]
    assert data["credit"]["tier"] == report.credit.tier
    assert set(data["credit"]["factors"]) >= {"liquidity", "payment_history"}
    assert data["risk"]["risk_score"] == report.risk.risk_score
    assert data["recommendations"][0]["category"] == "Operating Expenses"
    assert data["trends"]["revenue_growth"] == pytest.approx(25.0)
    assert data["trends"]["profit_growth"] is None
    assert data["trends"]["equity_growth"] is None
    assert json.loads(text) == data
