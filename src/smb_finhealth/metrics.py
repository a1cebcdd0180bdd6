# SMB FinHealth - Financial health scoring engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Raw financial metrics consumed by the calculation engine.

A FinancialMetrics record is a partial snapshot of a business's financial
statements (balance sheet, income statement and a few working capital
items). Every field is optional:

- ``None`` means "not known yet" and suppresses every ratio that needs it,
- ``0.0`` is a real value and takes part in calculations.

The distinction matters: the engine never substitutes zero for an unknown
input. Only denominators are guarded (see ratios.py).

Field names are snake_case. The web layer that feeds the engine uses the
camelCase wire names (``currentAssets``, ``netIncome``...), which
``FinancialMetrics.from_mapping()`` accepts as aliases.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Optional

METRIC_FIELDS: tuple[str, ...] = (
    "assets",
    "current_assets",
    "inventory",
    "liabilities",
    "current_liabilities",
    "equity",
    "revenue",
    "net_income",
    "operating_income",
    "cogs",
    "operating_expenses",
    "interest_expense",
    "tax_expense",
    "cash_flow",
    "accounts_receivable",
    "accounts_payable",
    "debt",
    "short_term_debt",
    "long_term_debt",
)


def _camel_case(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


# camelCase wire name -> field name
_ALIASES: dict[str, str] = {_camel_case(name): name for name in METRIC_FIELDS}


@dataclass(frozen=True)
class FinancialMetrics:
    """
    Partial set of raw financial figures for one reporting period.

    All amounts are expressed in the same (unspecified) currency unit.
    """

    assets: Optional[float] = None
    current_assets: Optional[float] = None
    inventory: Optional[float] = None
    liabilities: Optional[float] = None
    current_liabilities: Optional[float] = None
    equity: Optional[float] = None
    revenue: Optional[float] = None
    net_income: Optional[float] = None
    operating_income: Optional[float] = None
    cogs: Optional[float] = None
    operating_expenses: Optional[float] = None
    interest_expense: Optional[float] = None
    tax_expense: Optional[float] = None
    cash_flow: Optional[float] = None
    accounts_receivable: Optional[float] = None
    accounts_payable: Optional[float] = None
    debt: Optional[float] = None
    short_term_debt: Optional[float] = None
    long_term_debt: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FinancialMetrics":
        """
        Build a FinancialMetrics record from a loosely typed mapping.

        Keys may use either the snake_case field names or the camelCase
        wire names. Unknown keys are ignored. ``None``, empty strings and
        NaN (as produced by pandas for empty CSV cells) are treated as
        unknown values.

        Raises:
            ValueError: if a known field holds a value that cannot be
                converted to float.
        """
        values: dict[str, Optional[float]] = {}

        for raw_key, raw_value in data.items():
            key = str(raw_key).strip()
            name = key if key in METRIC_FIELDS else _ALIASES.get(key)
            if name is None:
                continue

            values[name] = _to_optional_float(name, raw_value)

        return cls(**values)

    def to_dict(self) -> dict[str, float]:
        """Return the known fields only, keyed by field name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


def _to_optional_float(name: str, value: Any) -> Optional[float]:
    if value is None:
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    if isinstance(value, bool):
        raise ValueError(f"Invalid value for metric '{name}': {value!r}")

    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid value for metric '{name}': {value!r}") from exc

    if math.isnan(number):
        return None

    return number
