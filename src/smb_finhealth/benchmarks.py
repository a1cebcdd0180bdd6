# SMB FinHealth - Financial health scoring engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Industry benchmark packs.

Benchmarks are reference values (industry statistics) used by the cost
optimizer to decide whether a metric is favorable. They are stored in a
TOML file, one table per industry and metric:

    [industries.retail.operatingExpenseRatio]
    average = 28.0
    median = 27.0
    percentile25 = 22.0
    percentile75 = 33.0
    percentile90 = 39.0
    source = "Internal survey 2024"

Every statistic is optional. The metric names are the benchmark keys
read by optimization.py ('operatingExpenseRatio', 'cogsRatio',
'daysReceivableOutstanding'); other metrics may be stored as well and
are simply ignored by the current rules.

Main helpers:
    load_benchmark_pack(path)            -> {industry -> {metric -> IndustryBenchmark}}
    list_industries(path)                -> [industry, ...]
    benchmarks_for_industry(path, name)  -> {metric -> value}
"""

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

STATISTICS: tuple[str, ...] = (
    "average",
    "median",
    "percentile25",
    "percentile75",
    "percentile90",
)


@dataclass(frozen=True)
class IndustryBenchmark:
    """Reference statistics of one metric for one industry."""

    industry: str
    metric_name: str
    average: Optional[float] = None
    median: Optional[float] = None
    percentile25: Optional[float] = None
    percentile75: Optional[float] = None
    percentile90: Optional[float] = None
    source: str = ""

    def statistic(self, name: str) -> Optional[float]:
        if name not in STATISTICS:
            raise ValueError(
                f"Unknown benchmark statistic {name!r}. "
                f"Expected one of: {', '.join(STATISTICS)}."
            )
        return getattr(self, name)


def _load_toml(path: Path) -> dict[str, Any]:
    """
    Load a TOML file and return its content as a dictionary.

    Raises:
        FileNotFoundError: if the file does not exist.
        ValueError: if the TOML content cannot be parsed.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Benchmark file not found: {path}")

    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Failed to parse TOML benchmark file: {path}") from exc


def _parse_statistic(
    industry: str, metric: str, cfg: Mapping[str, Any], name: str
) -> Optional[float]:
    raw = cfg.get(name)
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValueError(f"Invalid {name} for benchmark {industry}.{metric}: {raw!r}")
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"Invalid {name} for benchmark {industry}.{metric}: {raw!r}"
        ) from exc


def load_benchmark_pack(path: Path) -> dict[str, dict[str, IndustryBenchmark]]:
    """
    Load every industry benchmark defined in a TOML pack.

    Returns:
        {industry -> {metric_name -> IndustryBenchmark}}, in file order.

    Raises:
        FileNotFoundError: if the file does not exist.
        ValueError: if the file is not valid TOML, has no [industries]
            table, or holds a non-numeric statistic.
    """
    path = Path(path)
    data = _load_toml(path)

    industries_section = data.get("industries")
    if not isinstance(industries_section, Mapping):
        raise ValueError(f"Benchmark file {path} is missing the [industries] table.")

    pack: dict[str, dict[str, IndustryBenchmark]] = {}

    for industry, metrics_section in industries_section.items():
        if not isinstance(metrics_section, Mapping):
            logger.warning("Ignoring non-table industry entry %r in %s", industry, path)
            continue

        metrics: dict[str, IndustryBenchmark] = {}
        for metric, cfg in metrics_section.items():
            if not isinstance(cfg, Mapping):
                logger.warning(
                    "Ignoring non-table benchmark %s.%s in %s", industry, metric, path
                )
                continue

            stats = {
                name: _parse_statistic(industry, metric, cfg, name)
                for name in STATISTICS
            }
            metrics[str(metric)] = IndustryBenchmark(
                industry=str(industry),
                metric_name=str(metric),
                source=str(cfg.get("source") or ""),
                **stats,
            )

        pack[str(industry)] = metrics

    logger.debug("Loaded benchmarks for %d industries from %s", len(pack), path)
    return pack


def list_industries(path: Path) -> list[str]:
    """Return the industries defined in a benchmark pack, in file order."""
    return list(load_benchmark_pack(path))


def benchmarks_for_industry(
    path: Path,
    industry: str,
    statistic: str = "average",
) -> dict[str, float]:
    """
    Build the flat benchmark mapping used by the cost optimizer.

    Args:
        path: Benchmark TOML pack.
        industry: Industry name, as defined in the pack.
        statistic: Which statistic to use as benchmark value
            ('average', 'median', 'percentile25', ...).

    Returns:
        {metric_name -> value}. Metrics lacking the requested statistic
        are left out so that the optimizer falls back to its defaults.

    Raises:
        ValueError: if the industry is not defined or the statistic is
            unknown.
    """
    if statistic not in STATISTICS:
        raise ValueError(
            f"Unknown benchmark statistic {statistic!r}. "
            f"Expected one of: {', '.join(STATISTICS)}."
        )

    pack = load_benchmark_pack(path)
    if industry not in pack:
        known = ", ".join(pack) or "none"
        raise ValueError(
            f"Unknown industry {industry!r} in {path}. Known industries: {known}."
        )

    values: dict[str, float] = {}
    for metric, benchmark in pack[industry].items():
        value = benchmark.statistic(statistic)
        if value is not None:
            values[metric] = value

    return values
