import math

import pytest

from smb_finhealth.metrics import METRIC_FIELDS, FinancialMetrics


def test_all_fields_default_to_unknown() -> None:
    metrics = FinancialMetrics()

    for name in METRIC_FIELDS:
        assert getattr(metrics, name) is None
    assert metrics.to_dict() == {}


def test_from_mapping_accepts_snake_and_camel_case() -> None:
    metrics = FinancialMetrics.from_mapping(
        {
            "currentAssets": 100000,
            "current_liabilities": "50000",
            "netIncome": 1.5,
            "accountsReceivable": 0,
        }
    )

    assert metrics.current_assets == pytest.approx(100000.0)
    assert metrics.current_liabilities == pytest.approx(50000.0)
    assert metrics.net_income == pytest.approx(1.5)
    # Zero is a real value, not "unknown"
    assert metrics.accounts_receivable == 0.0


def test_from_mapping_treats_blank_values_as_unknown() -> None:
    metrics = FinancialMetrics.from_mapping(
        {"revenue": None, "cogs": "  ", "inventory": float("nan"), "debt": 10}
    )

    assert metrics.revenue is None
    assert metrics.cogs is None
    assert metrics.inventory is None
    assert metrics.to_dict() == {"debt": 10.0}


def test_from_mapping_ignores_unknown_keys() -> None:
    metrics = FinancialMetrics.from_mapping({"employees": 12, "revenue": 1000})

    assert metrics.to_dict() == {"revenue": 1000.0}


@pytest.mark.parametrize("bad_value", ["abc", True, [1, 2]])
def test_from_mapping_rejects_non_numeric_values(bad_value) -> None:
    with pytest.raises(ValueError, match="revenue"):
        FinancialMetrics.from_mapping({"revenue": bad_value})


def test_metrics_are_immutable() -> None:
    metrics = FinancialMetrics(revenue=10.0)

    with pytest.raises(AttributeError):
        metrics.revenue = 20.0  # type: ignore[misc]


def test_camel_case_aliases_cover_every_field() -> None:
    camel = {
        "assets": 1,
        "currentAssets": 2,
        "inventory": 3,
        "liabilities": 4,
        "currentLiabilities": 5,
        "equity": 6,
        "revenue": 7,
        "netIncome": 8,
        "operatingIncome": 9,
        "cogs": 10,
        "operatingExpenses": 11,
        "interestExpense": 12,
        "taxExpense": 13,
        "cashFlow": 14,
        "accountsReceivable": 15,
        "accountsPayable": 16,
        "debt": 17,
        "shortTermDebt": 18,
        "longTermDebt": 19,
    }

    metrics = FinancialMetrics.from_mapping(camel)
    values = metrics.to_dict()

    assert list(values) == list(METRIC_FIELDS)
    assert all(not math.isnan(v) for v in values.values())
