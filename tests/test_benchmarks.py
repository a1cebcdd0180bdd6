import logging
from pathlib import Path

import pytest

from smb_finhealth.benchmarks import (
    IndustryBenchmark,
    benchmarks_for_industry,
    list_industries,
    load_benchmark_pack,
)

PACK = """
[industries.retail.operatingExpenseRatio]
average = 25.0
median = 24
percentile90 = 35.0
source = "Retail survey"

[industries.retail.cogsRatio]
average = 65.0

[industries.services.operatingExpenseRatio]
average = 40.0
median = 38.0
"""


def _write_pack(tmp_path: Path, content: str = PACK) -> Path:
    path = tmp_path / "benchmarks.toml"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_benchmark_pack(tmp_path: Path) -> None:
    pack = load_benchmark_pack(_write_pack(tmp_path))

    assert list(pack) == ["retail", "services"]
    opex = pack["retail"]["operatingExpenseRatio"]
    assert isinstance(opex, IndustryBenchmark)
    assert opex.industry == "retail"
    assert opex.metric_name == "operatingExpenseRatio"
    assert opex.average == 25.0
    assert opex.median == 24.0
    assert opex.percentile25 is None
    assert opex.percentile90 == 35.0
    assert opex.source == "Retail survey"
    assert pack["retail"]["cogsRatio"].source == ""


def test_list_industries(tmp_path: Path) -> None:
    assert list_industries(_write_pack(tmp_path)) == ["retail", "services"]


def test_benchmarks_for_industry_average(tmp_path: Path) -> None:
    values = benchmarks_for_industry(_write_pack(tmp_path), "retail")

    assert values == {"operatingExpenseRatio": 25.0, "cogsRatio": 65.0}


def test_benchmarks_for_industry_skips_missing_statistic(tmp_path: Path) -> None:
    values = benchmarks_for_industry(_write_pack(tmp_path), "retail", "median")

    assert values == {"operatingExpenseRatio": 24.0}


def test_unknown_industry_lists_known_ones(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="retail, services"):
        benchmarks_for_industry(_write_pack(tmp_path), "mining")


def test_unknown_statistic_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="statistic"):
        benchmarks_for_industry(_write_pack(tmp_path), "retail", "mode")

    benchmark = IndustryBenchmark(industry="retail", metric_name="cogsRatio")
    with pytest.raises(ValueError):
        benchmark.statistic("max")


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_benchmark_pack(tmp_path / "missing.toml")


def test_invalid_toml_raises(tmp_path: Path) -> None:
    path = _write_pack(tmp_path, "[industries.retail\n")

    with pytest.raises(ValueError, match="Failed to parse"):
        load_benchmark_pack(path)


def test_missing_industries_table_raises(tmp_path: Path) -> None:
    path = _write_pack(tmp_path, "[retail.cogsRatio]\naverage = 60\n")

    with pytest.raises(ValueError, match=r"\[industries\]"):
        load_benchmark_pack(path)


@pytest.mark.parametrize("raw", ['"high"', "true"])
def test_non_numeric_statistic_raises(tmp_path: Path, raw: str) -> None:
    path = _write_pack(
        tmp_path, f"[industries.retail.cogsRatio]\naverage = {raw}\n"
    )

    with pytest.raises(ValueError, match="retail.cogsRatio"):
        load_benchmark_pack(path)


def test_non_table_entries_are_ignored(tmp_path: Path, caplog) -> None:
    path = _write_pack(
        tmp_path,
        "[industries]\n"
        'note = "draft"\n'
        "[industries.retail]\n"
        "cogsRatio = 60\n"
        "[industries.retail.operatingExpenseRatio]\n"
        "average = 30\n",
    )

    with caplog.at_level(logging.WARNING, logger="smb_finhealth.benchmarks"):
        pack = load_benchmark_pack(path)

    assert list(pack) == ["retail"]
    assert list(pack["retail"]) == ["operatingExpenseRatio"]
    assert "Ignoring" in caplog.text


def test_shipped_pack_is_loadable() -> None:
    path = Path(__file__).resolve().parents[1] / "benchmarks" / "industry_benchmarks.toml"

    industries = list_industries(path)

    assert {"retail", "manufacturing", "services"} <= set(industries)
    for industry in industries:
        values = benchmarks_for_industry(path, industry)
        assert set(values) >= {
            "operatingExpenseRatio",
            "cogsRatio",
            "daysReceivableOutstanding",
        }
