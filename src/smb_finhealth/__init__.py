# SMB FinHealth - Financial health scoring engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
SMB FinHealth
-------------

A Python-based financial health engine for Small and Medium-sized
Businesses (SMBs). From a partial set of financial statement figures it
computes:

- liquidity, profitability, leverage and efficiency ratios,
- a weighted creditworthiness score (0-100) and credit tier,
- a rule-based risk assessment (risk score, tier and factors),
- benchmark-driven cost optimization recommendations,
- period-over-period growth trends.

The calculators are pure functions over their inputs; configuration
(TOML), file input (CSV / JSON), industry benchmark packs and
presentation (tables, CSV, JSON) live in separate modules around them.


Version: 0.1.0

Usage:
    python -m smb_finhealth.cli --help
"""

__all__ = [
    "metrics",
    "ratios",
    "scoring",
    "risk",
    "optimization",
    "trends",
    "engine",
    "multi_periods",
    "views",
    "io",
]

__version__ = "0.1.0"
