import math

import pytest

from smb_finhealth.metrics import FinancialMetrics
from smb_finhealth.trends import calculate_trend_analysis


def test_growth_between_two_periods() -> None:
    current = FinancialMetrics(revenue=120, net_income=50, assets=200, equity=80)
    previous = FinancialMetrics(revenue=100, net_income=40, assets=250)

    trends = calculate_trend_analysis(current, previous)

    assert trends == {
        "revenue_growth": pytest.approx(20.0),
        "profit_growth": pytest.approx(25.0),
        "asset_growth": pytest.approx(-20.0),
    }


def test_growth_from_a_negative_base() -> None:
    trends = calculate_trend_analysis(
        FinancialMetrics(net_income=-50), FinancialMetrics(net_income=-100)
    )

    # The formula divides by the signed previous value.
    assert trends["profit_growth"] == pytest.approx(-50.0)


def test_growth_from_zero_is_infinite() -> None:
    trends = calculate_trend_analysis(
        FinancialMetrics(revenue=100, net_income=-10, equity=0),
        FinancialMetrics(revenue=0, net_income=0, equity=0),
    )

    assert trends["revenue_growth"] == math.inf
    assert trends["profit_growth"] == -math.inf
    assert math.isnan(trends["equity_growth"])


def test_no_common_metrics_gives_no_trends() -> None:
    trends = calculate_trend_analysis(
        FinancialMetrics(revenue=100), FinancialMetrics(assets=100)
    )

    assert trends == {}
