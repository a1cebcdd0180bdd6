# SMB FinHealth - Financial health scoring engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
I/O module for SMB FinHealth.

This module reads raw financial metrics from files and turns them into
FinancialMetrics records suitable for the engine.

Supported input formats
-----------------------

1) Long CSV format (column names are case-insensitive)
   -------------------------------------------------
       metric, value[, period]

   One row per metric. Metric names may be snake_case (``net_income``)
   or camelCase (``netIncome``). When a ``period`` column is present,
   rows are grouped by period, in order of first appearance.

2) Wide CSV format
   ----------------
       period, revenue, net_income, assets, ...

   One row per period, one column per metric. Rows are expected oldest
   first.

3) JSON
   -----
   Either a single object {metric -> value} (one period) or an object of
   objects {period -> {metric -> value}}.

Empty cells and null values mean "unknown". Unknown metric names are
ignored with a warning. Any other structure raises a clear ValueError.
"""

import json
import logging
import os
from pathlib import Path
from collections.abc import Iterable
from typing import Any, Union

import pandas as pd

from .metrics import METRIC_FIELDS, FinancialMetrics

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_LOOKUP: dict[str, str] = {name.replace("_", ""): name for name in METRIC_FIELDS}


def _collect(items: Iterable[tuple[Any, Any]], source: Path) -> dict[str, Any]:
    """
    Map raw (name, value) pairs to metric field names.

    Names are matched case-insensitively and without underscores, so
    "net_income", "netIncome" and "NetIncome" all resolve to net_income.
    """
    values: dict[str, Any] = {}
    unknown: list[str] = []
    for raw_name, value in items:
        name = str(raw_name).strip()
        field_name = _LOOKUP.get(name.lower().replace("_", ""))
        if field_name is None:
            unknown.append(name)
            continue
        values[field_name] = value

    if unknown:
        logger.warning(
            "Ignoring unknown metrics in %s: %s", source, ", ".join(sorted(unknown))
        )
    return values


def _read_csv(path: Path) -> dict[str, FinancialMetrics]:
    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    # Normalize column names to lowercase (to make the check case-insensitive)
    df.columns = [str(c).lower().strip() for c in df.columns]
    cols = set(df.columns)

    # ----- Case 1: long format ---------------------------------------------
    if {"metric", "value"}.issubset(cols):
        if df.empty:
            raise ValueError(f"No metrics found in {path}.")

        if "period" in cols:
            labels = [str(p).strip() for p in df["period"]]
        else:
            labels = [path.stem] * len(df)

        rows: dict[str, list[tuple[Any, Any]]] = {}
        for label, metric, value in zip(labels, df["metric"], df["value"]):
            if not label:
                raise ValueError(f"Empty 'period' value in {path}.")
            rows.setdefault(label, []).append((metric, value))

        return {
            label: FinancialMetrics.from_mapping(_collect(items, path))
            for label, items in rows.items()
        }

    # ----- Case 2: wide format ---------------------------------------------
    if "period" in cols:
        if df.empty:
            raise ValueError(f"No periods found in {path}.")

        result: dict[str, FinancialMetrics] = {}
        for record in df.to_dict(orient="records"):
            label = str(record.pop("period")).strip()
            if not label:
                raise ValueError(f"Empty 'period' value in {path}.")
            if label in result:
                raise ValueError(f"Duplicate period {label!r} in {path}.")
            result[label] = FinancialMetrics.from_mapping(
                _collect(record.items(), path)
            )
        return result

    # ----- Invalid structure -> raise with clear message -------------------
    raise ValueError(
        f"Invalid metrics CSV structure in {path}. Expected either:\n"
        "  - metric, value[, period]   (long format)\n"
        "  - period, <metric>, ...     (wide format)\n"
        "(column names are case-insensitive)."
    )


def _read_json(path: Path) -> dict[str, FinancialMetrics]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Failed to parse JSON metrics file: {path}") from exc

    if not isinstance(data, dict) or not data:
        raise ValueError(f"Expected a non-empty JSON object in {path}.")

    nested = [isinstance(v, dict) for v in data.values()]

    if all(nested):
        return {
            str(label): FinancialMetrics.from_mapping(_collect(values.items(), path))
            for label, values in data.items()
        }

    if any(nested):
        raise ValueError(
            f"Mixed JSON structure in {path}: expected either metric values "
            "or one object per period."
        )

    return {path.stem: FinancialMetrics.from_mapping(_collect(data.items(), path))}


def read_metrics_by_period(path: PathLike) -> dict[str, FinancialMetrics]:
    """
    Read one or several periods of metrics from a CSV or JSON file.

    Parameters
    ----------
    path :
        Path to a ``.csv`` or ``.json`` file.

    Returns
    -------
    dict[str, FinancialMetrics]
        Ordered mapping {period_label -> metrics}, in file order. A file
        holding a single period without label uses the file stem as label.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the suffix is not supported, the structure is invalid or a
        metric value is not numeric.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Metrics file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        result = _read_csv(path)
    elif suffix == ".json":
        result = _read_json(path)
    else:
        raise ValueError(
            f"Unsupported metrics file type {suffix!r} for {path}. "
            "Expected a .csv or .json file."
        )

    logger.info("Read %d period(s) of metrics from %s", len(result), path)
    return result


def read_financial_metrics(path: PathLike) -> FinancialMetrics:
    """
    Read a single period of metrics from a CSV or JSON file.

    Raises
    ------
    ValueError
        If the file holds more than one period (use
        read_metrics_by_period() instead).
    """
    by_period = read_metrics_by_period(path)
    if len(by_period) != 1:
        raise ValueError(
            f"Expected a single period in {path}, found {len(by_period)}: "
            f"{', '.join(by_period)}."
        )
    return next(iter(by_period.values()))
