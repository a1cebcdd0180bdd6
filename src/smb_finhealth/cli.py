# SMB FinHealth - Financial health scoring engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Command-Line Interface (CLI) for SMB FinHealth.

This module wires together the main building blocks of SMB FinHealth:

- global configuration (scores, benchmarks, display options),
- metrics files (CSV / JSON),
- industry benchmark packs,
- the financial health engine (single and multi-period),
- view helpers (tables, CSV exports, JSON).

The CLI is intentionally thin: it does not implement financial logic
itself. It orchestrates the underlying modules based on command-line
arguments and configuration files.


High-level pipeline
-------------------

1) Load the main TOML configuration (smb_finhealth_config.toml by
   default, optional) using ``load_app_config()``.

2) Configure logging from ``--log-level`` or ``[logging].level``.

3) Resolve industry benchmarks: ``--benchmarks`` / ``--industry``
   override the [benchmarks] section. Without an industry, the cost
   optimizer uses its built-in defaults.

4) Read the metrics file. A file holding one period runs the
   single-period analysis (optionally against ``--previous`` for
   trends); a file holding several periods runs the multi-period
   analysis, each period being compared with the one before.

5) Render the selected scope as console tables, CSV files and/or JSON.


Scopes
------
``--scope`` selects what to render: ``ratios``, ``score``, ``risk``,
``recommendations``, ``trends`` or ``all`` (default).


Display modes
-------------
- ``table``: text tables on stdout (pandas.DataFrame.to_string),
- ``csv``:   timestamped CSV files in ``--output`` (default data/output),
- ``json``:  the full report(s) as JSON on stdout (scope is ignored),
- ``both``:  table and csv.


Examples
--------

1) Analyse one period with the configured benchmarks:

    python -m smb_finhealth.cli --metrics data/metrics_2024.csv

2) Compare with the previous year, retail benchmarks, JSON output:

    python -m smb_finhealth.cli --metrics data/metrics_2024.csv \\
        --previous data/metrics_2023.csv --industry retail --display-mode json

3) Multi-period analysis, risk only, exported to CSV:

    python -m smb_finhealth.cli --metrics data/history.csv --scope risk \\
        --display-mode csv --output exports/
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd

from . import __version__
from .benchmarks import benchmarks_for_industry, list_industries
from .config import DISPLAY_MODES, LOG_LEVELS, AppConfig, load_app_config
from .engine import FinancialHealthReport, run_analysis
from .io import read_financial_metrics, read_metrics_by_period
from .multi_periods import MultiPeriodAnalysis, analyze_multi_period
from .views import (
    credit_factors_to_dataframe,
    ratios_to_dataframe,
    recommendations_to_dataframe,
    report_to_dict,
    risk_to_dataframe,
    summary_to_dataframe,
    trends_to_dataframe,
)

logger = logging.getLogger(__name__)

SCOPES: tuple[str, ...] = ("ratios", "score", "risk", "recommendations", "trends", "all")


def _build_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the CLI."""
    ap = argparse.ArgumentParser(
        prog="python -m smb_finhealth.cli",
        description=(
            "SMB FinHealth - Financial health scoring engine for SMBs. "
            "Reads financial metrics, computes ratios, a credit score, a risk "
            "assessment, cost optimization recommendations and growth trends."
        ),
    )

    # Generic options
    ap.add_argument(
        "--version",
        action="store_true",
        help="Show the installed version of smb_finhealth and exit.",
    )
    ap.add_argument(
        "--config",
        dest="config_path",
        help=(
            "Path to the main TOML configuration file. If omitted, "
            "'smb_finhealth_config.toml' in the current directory is used "
            "when present."
        ),
    )
    ap.add_argument(
        "--log-level",
        dest="log_level",
        choices=LOG_LEVELS,
        help="Override the logging.level setting from the configuration file.",
    )

    # Inputs
    ap.add_argument(
        "--metrics",
        dest="metrics_path",
        metavar="PATH",
        help="CSV or JSON file holding the metrics of one or several periods.",
    )
    ap.add_argument(
        "--previous",
        dest="previous_path",
        metavar="PATH",
        help=(
            "CSV or JSON file holding the metrics of the previous period, "
            "used for trend analysis (single-period metrics only)."
        ),
    )

    # Benchmarks
    ap.add_argument(
        "--benchmarks",
        dest="benchmarks_path",
        metavar="PATH",
        help="Override the benchmark pack defined in the configuration file.",
    )
    ap.add_argument(
        "--industry",
        help="Industry whose benchmarks are used for cost recommendations.",
    )
    ap.add_argument(
        "--list-industries",
        dest="list_industries",
        action="store_true",
        help="List the industries of the benchmark pack and exit.",
    )

    # Caller-supplied scores
    ap.add_argument(
        "--payment-history-score",
        dest="payment_history_score",
        type=float,
        help="Payment history score (0-100). Overrides the configuration.",
    )
    ap.add_argument(
        "--growth-score",
        dest="growth_score",
        type=float,
        help="Growth score (0-100). Overrides the configuration.",
    )

    # Rendering
    ap.add_argument(
        "--scope",
        choices=SCOPES,
        default="all",
        help="Select what to render (default: all).",
    )
    ap.add_argument(
        "--display-mode",
        dest="display_mode",
        choices=DISPLAY_MODES,
        help=(
            "Override the display.mode setting from the configuration file. "
            "'table' prints results to stdout, 'csv' writes CSV files only, "
            "'json' prints the full report as JSON, 'both' = table + csv."
        ),
    )
    ap.add_argument(
        "--output",
        dest="output_dir",
        help=(
            "Output directory where CSV files will be written when display "
            "mode includes 'csv'. If omitted, 'data/output' is used."
        ),
    )

    return ap


def _resolve_score(
    parser: argparse.ArgumentParser,
    cli_value: Optional[float],
    config_value: float,
    option: str,
) -> float:
    if cli_value is None:
        return config_value
    if not 0.0 <= cli_value <= 100.0:
        parser.error(f"{option} must be between 0 and 100 (got {cli_value}).")
    return cli_value


def _resolve_benchmarks(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    config: AppConfig,
) -> Optional[dict[str, float]]:
    """Return the flat benchmark mapping, or None to use the defaults."""
    path = Path(args.benchmarks_path) if args.benchmarks_path else config.benchmarks.file
    industry = args.industry or config.benchmarks.industry

    if industry is None:
        if path is not None:
            logger.info("No industry selected, using default benchmarks.")
        return None

    if path is None:
        parser.error(
            "An industry was selected but no benchmark pack is configured. "
            "Set benchmarks.file in the configuration or provide --benchmarks."
        )

    try:
        benchmarks = benchmarks_for_industry(
            path, industry, statistic=config.benchmarks.statistic
        )
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    logger.info("Using %s benchmarks for industry %r", config.benchmarks.statistic, industry)
    return benchmarks


def _render_tables_single(
    report: FinancialHealthReport, scope: str, decimals: int
) -> dict[str, pd.DataFrame]:
    tables: dict[str, pd.DataFrame] = {}
    if scope in {"score", "risk", "all"}:
        tables["summary"] = summary_to_dataframe(report)
    if scope in {"ratios", "all"}:
        tables["ratios"] = ratios_to_dataframe(report.ratios, decimals)
    if scope in {"score", "all"}:
        tables["credit_factors"] = credit_factors_to_dataframe(report.credit)
    if scope in {"risk", "all"}:
        tables["risk_factors"] = risk_to_dataframe(report.risk)
    if scope in {"recommendations", "all"}:
        tables["recommendations"] = recommendations_to_dataframe(
            report.recommendations, decimals
        )
    if scope in {"trends", "all"}:
        tables["trends"] = trends_to_dataframe(report.trends, decimals)
    return tables


def _render_tables_multi(
    analysis: MultiPeriodAnalysis, scope: str, decimals: int
) -> dict[str, pd.DataFrame]:
    tables: dict[str, pd.DataFrame] = {}
    if scope in {"score", "risk", "all"}:
        tables["scores"] = analysis.scores.round(decimals)
    if scope in {"ratios", "all"}:
        tables["ratios"] = analysis.ratios.round({"value": decimals})
    if scope in {"risk", "all"}:
        tables["risk_factors"] = analysis.risk_factors
    if scope in {"recommendations", "all"}:
        tables["recommendations"] = analysis.recommendations.round(decimals)
    if scope in {"trends", "all"}:
        tables["trends"] = analysis.trends.round({"value": decimals})
    return tables


_TITLES = {
    "summary": "Credit & risk summary",
    "scores": "Credit & risk scores",
    "ratios": "Financial ratios",
    "credit_factors": "Credit score factors",
    "risk_factors": "Risk factors",
    "recommendations": "Cost optimization recommendations",
    "trends": "Growth trends (%)",
}


def _print_tables(tables: dict[str, pd.DataFrame]) -> None:
    for name, df in tables.items():
        print()
        print(f"=== {_TITLES.get(name, name)} ===")
        if df.empty:
            print("(none)")
        else:
            print(df.to_string(index=False))


def _write_csv(tables: dict[str, pd.DataFrame], output_dir: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")

    for name, df in tables.items():
        path = output_dir / f"{name}_{timestamp}.csv"
        df.to_csv(path, index=False)
        print(f"Wrote {path} ({len(df)} rows)")


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the SMB FinHealth CLI.

    This function parses command-line arguments, loads the configuration,
    resolves industry benchmarks, reads the metrics file(s), runs the
    single- or multi-period analysis and renders the selected scope as
    console tables, CSV files and/or JSON.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    # --version: short-circuit and exit early.
    if args.version:
        print(f"smb_finhealth version {__version__}")
        return

    # 1) Load application configuration
    try:
        config = load_app_config(args.config_path)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    # 2) Logging
    logging.basicConfig(
        level=args.log_level or config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # --list-industries: short-circuit once the pack location is known.
    if args.list_industries:
        path = (
            Path(args.benchmarks_path)
            if args.benchmarks_path
            else config.benchmarks.file
        )
        if path is None:
            parser.error("No benchmark pack configured; provide --benchmarks.")
        try:
            industries = list_industries(path)
        except (FileNotFoundError, ValueError) as exc:
            parser.error(str(exc))
        for industry in industries:
            print(industry)
        return

    if not args.metrics_path:
        parser.error("--metrics is required.")

    # 3) Scores and benchmarks
    payment_history_score = _resolve_score(
        parser,
        args.payment_history_score,
        config.payment_history_score,
        "--payment-history-score",
    )
    growth_score = _resolve_score(
        parser, args.growth_score, config.growth_score, "--growth-score"
    )
    benchmarks = _resolve_benchmarks(parser, args, config)

    # 4) Metrics
    try:
        metrics_by_period = read_metrics_by_period(args.metrics_path)
        previous = (
            read_financial_metrics(args.previous_path) if args.previous_path else None
        )
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    display_mode = args.display_mode or config.display_mode
    decimals = config.ratio_decimals

    # 5) Analysis
    if len(metrics_by_period) == 1:
        metrics = next(iter(metrics_by_period.values()))
        report = run_analysis(
            metrics,
            benchmarks=benchmarks,
            previous=previous,
            payment_history_score=payment_history_score,
            growth_score=growth_score,
        )
        if display_mode == "json":
            print(json.dumps(report_to_dict(report), indent=2))
            return
        tables = _render_tables_single(report, args.scope, decimals)
    else:
        if previous is not None:
            parser.error(
                "--previous cannot be combined with a multi-period metrics file; "
                "add the previous period to the file instead."
            )
        analysis = analyze_multi_period(
            metrics_by_period,
            benchmarks=benchmarks,
            payment_history_score=payment_history_score,
            growth_score=growth_score,
        )
        if display_mode == "json":
            payload = {
                label: report_to_dict(rep) for label, rep in analysis.reports.items()
            }
            print(json.dumps(payload, indent=2))
            return
        tables = _render_tables_multi(analysis, args.scope, decimals)

    # 6) Render to console (table mode).
    if display_mode in {"table", "both"}:
        _print_tables(tables)

    # 7) Render to CSV files (csv mode).
    if display_mode in {"csv", "both"}:
        output_dir = Path(args.output_dir) if args.output_dir else Path("data/output")
        _write_csv(tables, output_dir)


if __name__ == "__main__":
    main()
