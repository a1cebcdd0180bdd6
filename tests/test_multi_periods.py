import math

import pytest

from smb_finhealth.metrics import FinancialMetrics
from smb_finhealth.multi_periods import (
    RATIOS_COLUMNS,
    SCORES_COLUMNS,
    analyze_multi_period,
)


def _periods() -> dict[str, FinancialMetrics]:
    return {
        "FY-2023": FinancialMetrics(
            revenue=1000000,
            net_income=-20000,
            current_assets=150000,
            current_liabilities=200000,
            equity=300000,
        ),
        "FY-2024": FinancialMetrics(
            revenue=1200000,
            net_income=60000,
            current_assets=300000,
            current_liabilities=150000,
            equity=360000,
        ),
    }


def test_analyze_multi_period_builds_long_tables() -> None:
    analysis = analyze_multi_period(_periods())

    assert list(analysis.reports) == ["FY-2023", "FY-2024"]
    assert list(analysis.ratios.columns) == RATIOS_COLUMNS
    assert list(analysis.scores.columns) == SCORES_COLUMNS
    assert analysis.scores["period_label"].tolist() == ["FY-2023", "FY-2024"]

    current = analysis.ratios[
        (analysis.ratios["period_label"] == "FY-2024")
        & (analysis.ratios["key"] == "current_ratio")
    ]
    assert len(current) == 1
    assert current["value"].iloc[0] == pytest.approx(2.0)
    assert current["label"].iloc[0] == "Current ratio"


def test_risk_factors_are_recorded_per_period() -> None:
    analysis = analyze_multi_period(_periods())

    first = analysis.risk_factors[analysis.risk_factors["period_label"] == "FY-2023"]
    second = analysis.risk_factors[analysis.risk_factors["period_label"] == "FY-2024"]

    assert first["position"].tolist() == [1, 2, 3]
    assert "Low liquidity: Current ratio below 1.0" in first["description"].tolist()
    assert second.empty


def test_trends_start_from_the_second_period() -> None:
    analysis = analyze_multi_period(_periods())

    assert set(analysis.trends["period_label"]) == {"FY-2024"}
    values = dict(zip(analysis.trends["key"], analysis.trends["value"]))
    assert values["revenue_growth"] == pytest.approx(20.0)
    assert values["profit_growth"] == pytest.approx(-400.0)
    assert values["equity_growth"] == pytest.approx(20.0)
    assert analysis.reports["FY-2023"].trends == {}


def test_scores_carry_factor_columns() -> None:
    analysis = analyze_multi_period(
        _periods(), payment_history_score=80, growth_score=40
    )

    row = analysis.scores.iloc[1]
    report = analysis.reports["FY-2024"]
    assert row["credit_score"] == report.credit.score
    assert row["credit_tier"] == report.credit.tier
    assert row["growth_score"] == 40.0
    assert row["payment_history_score"] == 80.0
    assert not math.isnan(row["liquidity_score"])


def test_recommendations_use_shared_benchmarks() -> None:
    periods = {
        "P1": FinancialMetrics(revenue=100, operating_expenses=50),
        "P2": FinancialMetrics(revenue=100, operating_expenses=20),
    }

    analysis = analyze_multi_period(periods, benchmarks={"operatingExpenseRatio": 25})

    assert analysis.recommendations["period_label"].tolist() == ["P1"]
    assert analysis.recommendations["benchmark_value"].tolist() == [25.0]


def test_single_period_is_accepted() -> None:
    analysis = analyze_multi_period({"only": FinancialMetrics(revenue=1)})

    assert list(analysis.reports) == ["only"]
    assert analysis.trends.empty


def test_empty_input_raises() -> None:
    with pytest.raises(ValueError):
        analyze_multi_period({})
