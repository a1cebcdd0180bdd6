# SMB FinHealth - Financial health scoring engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Configuration helpers for SMB FinHealth.

This module is responsible for:
- loading the main application configuration from a TOML file,
- resolving the industry benchmark pack location,
- exposing typed dataclasses used by the CLI.
"""

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .benchmarks import STATISTICS
from .scoring import DEFAULT_GROWTH_SCORE, DEFAULT_PAYMENT_HISTORY_SCORE

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "smb_finhealth_config.toml"
DISPLAY_MODES: tuple[str, ...] = ("table", "csv", "json", "both")
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class BenchmarksConfig:
    """
    Location and selection of industry benchmarks.

    ``file`` is None when no benchmark pack is configured; the cost
    optimizer then uses its built-in defaults.
    """

    file: Optional[Path]
    industry: Optional[str]
    statistic: str = "average"


@dataclass(frozen=True)
class AppConfig:
    """
    Application-wide configuration for SMB FinHealth.

    This aggregates:
    - the caller-supplied scores used by the credit scorer,
    - the industry benchmark selection,
    - display options for tables and exports,
    - the logging level of the CLI.
    """

    payment_history_score: float
    growth_score: float
    benchmarks: BenchmarksConfig
    display_mode: str
    ratio_decimals: int
    log_level: str


def _load_toml(path: Path) -> dict[str, Any]:
    """
    Load a TOML file and return its content as a dictionary.

    Raises:
        FileNotFoundError: if the file does not exist.
        ValueError: if the TOML content cannot be parsed.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Failed to parse TOML config file: {path}") from exc


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, Mapping):
        return {}
    return section


def _parse_score(section: Mapping[str, Any], key: str, default: float) -> float:
    """
    Read a 0-100 score from the [scoring] section.

    Raises:
        ValueError: if the value is not a number in [0, 100].
    """
    raw = section.get(key, default)
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"Invalid value for 'scoring.{key}' in the configuration. "
            "Expected a number between 0 and 100."
        ) from exc

    if not 0.0 <= value <= 100.0:
        raise ValueError(
            f"'scoring.{key}' must be between 0 and 100 (got {value})."
        )
    return value


def _parse_benchmarks(section: Mapping[str, Any], base_dir: Path) -> BenchmarksConfig:
    file_raw = section.get("file") or None
    file_path = (base_dir / str(file_raw)).resolve() if file_raw else None

    industry_raw = section.get("industry")
    industry = str(industry_raw) if industry_raw else None

    statistic = str(section.get("statistic", "average"))
    if statistic not in STATISTICS:
        raise ValueError(
            f"Invalid 'benchmarks.statistic' {statistic!r}. "
            f"Expected one of: {', '.join(STATISTICS)}."
        )

    return BenchmarksConfig(file=file_path, industry=industry, statistic=statistic)


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load the SMB FinHealth application configuration from a TOML file.

    Expected top-level sections in the TOML file
    --------------------------------------------
    [scoring]
        ``payment_history_score`` and ``growth_score`` (0-100, default 50).
        These scores are not derived by the engine and are supplied here
        (or on the command line) by the user.

    [benchmarks]
        ``file`` (benchmark pack, relative to the config file),
        ``industry`` and ``statistic`` (default "average").

    [display]
        ``mode`` (table | csv | json | both) and ``ratio_decimals``.

    [logging]
        ``level`` of the CLI logger (default WARNING).

    Every section is optional. When ``config_path`` is omitted and no
    ``smb_finhealth_config.toml`` exists in the current directory, the
    defaults are used.

    Parameters
    ----------
    config_path :
        Path to the TOML configuration file.

    Returns
    -------
    AppConfig
        Parsed and validated application configuration.

    Raises
    ------
    FileNotFoundError
        If an explicit ``config_path`` does not exist.
    ValueError
        If the file cannot be parsed or holds invalid values.
    """
    if config_path is None:
        config_file = Path(DEFAULT_CONFIG_FILE).resolve()
        if not config_file.is_file():
            logger.debug("No %s found, using default configuration", DEFAULT_CONFIG_FILE)
            raw: dict[str, Any] = {}
        else:
            raw = _load_toml(config_file)
    else:
        config_file = Path(config_path).resolve()
        raw = _load_toml(config_file)

    base_dir = config_file.parent

    # 1) Scoring inputs
    scoring_section = _section(raw, "scoring")
    payment_history_score = _parse_score(
        scoring_section, "payment_history_score", DEFAULT_PAYMENT_HISTORY_SCORE
    )
    growth_score = _parse_score(scoring_section, "growth_score", DEFAULT_GROWTH_SCORE)

    # 2) Benchmarks
    benchmarks = _parse_benchmarks(_section(raw, "benchmarks"), base_dir)

    # 3) Display options
    display_section = _section(raw, "display")

    display_mode = str(display_section.get("mode", "table"))
    if display_mode not in DISPLAY_MODES:
        raise ValueError(
            f"Invalid 'display.mode' {display_mode!r}. "
            f"Expected one of: {', '.join(DISPLAY_MODES)}."
        )

    try:
        ratio_decimals = int(display_section.get("ratio_decimals", 2))
    except (TypeError, ValueError):
        ratio_decimals = 2

    # 4) Logging
    logging_section = _section(raw, "logging")
    log_level = str(logging_section.get("level", "WARNING")).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"Invalid 'logging.level' {log_level!r}. "
            f"Expected one of: {', '.join(LOG_LEVELS)}."
        )

    return AppConfig(
        payment_history_score=payment_history_score,
        growth_score=growth_score,
        benchmarks=benchmarks,
        display_mode=display_mode,
        ratio_decimals=ratio_decimals,
        log_level=log_level,
    )
