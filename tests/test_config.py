from pathlib import Path

import pytest

from smb_finhealth.config import DEFAULT_CONFIG_FILE, load_app_config


def test_defaults_without_config_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    config = load_app_config()

    assert config.payment_history_score == 50.0
    assert config.growth_score == 50.0
    assert config.benchmarks.file is None
    assert config.benchmarks.industry is None
    assert config.benchmarks.statistic == "average"
    assert config.display_mode == "table"
    assert config.ratio_decimals == 2
    assert config.log_level == "WARNING"


def test_default_file_in_current_directory_is_used(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / DEFAULT_CONFIG_FILE).write_text(
        "[display]\nmode = 'json'\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)

    assert load_app_config().display_mode == "json"


def test_full_config(tmp_path: Path) -> None:
    cfg = tmp_path / "conf" / "app.toml"
    cfg.parent.mkdir()
    cfg.write_text(
        """
[scoring]
payment_history_score = 85
growth_score = 62.5

[benchmarks]
file = "../packs/industry.toml"
industry = "retail"
statistic = "median"

[display]
mode = "both"
ratio_decimals = 3

[logging]
level = "debug"
""",
        encoding="utf-8",
    )

    config = load_app_config(str(cfg))

    assert config.payment_history_score == 85.0
    assert config.growth_score == 62.5
    assert config.benchmarks.file == (tmp_path / "packs" / "industry.toml").resolve()
    assert config.benchmarks.industry == "retail"
    assert config.benchmarks.statistic == "median"
    assert config.display_mode == "both"
    assert config.ratio_decimals == 3
    assert config.log_level == "DEBUG"


def test_explicit_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_app_config(str(tmp_path / "missing.toml"))


def test_invalid_toml_raises(tmp_path: Path) -> None:
    cfg = tmp_path / "bad.toml"
    cfg.write_text("[scoring\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Failed to parse"):
        load_app_config(str(cfg))


@pytest.mark.parametrize(
    "content, match",
    [
        ("[scoring]\ngrowth_score = 120\n", "growth_score"),
        ("[scoring]\npayment_history_score = 'good'\n", "payment_history_score"),
        ("[display]\nmode = 'html'\n", "display.mode"),
        ("[benchmarks]\nstatistic = 'mode'\n", "benchmarks.statistic"),
        ("[logging]\nlevel = 'verbose'\n", "logging.level"),
    ],
)
def test_invalid_values_raise(tmp_path: Path, content: str, match: str) -> None:
    cfg = tmp_path / "app.toml"
    cfg.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError, match=match):
        load_app_config(str(cfg))


def test_invalid_ratio_decimals_falls_back_to_default(tmp_path: Path) -> None:
    cfg = tmp_path / "app.toml"
    cfg.write_text("[display]\nratio_decimals = 'many'\n", encoding="utf-8")

    assert load_app_config(str(cfg)).ratio_decimals == 2


def test_shipped_config_points_to_shipped_pack() -> None:
    root = Path(__file__).resolve().parents[1]

    config = load_app_config(str(root / DEFAULT_CONFIG_FILE))

    assert config.benchmarks.file == root / "benchmarks" / "industry_benchmarks.toml"
    assert config.benchmarks.file.is_file()
    assert config.benchmarks.industry == "retail"
