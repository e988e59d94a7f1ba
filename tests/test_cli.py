from pathlib import Path

import pandas as pd
import pytest

from partner_comp.cli import main, parse_arguments, run_scenario
from partner_comp.config.models import DEFAULT_SETTINGS
from partner_comp.engines.payroll import employee_total_cost
from partner_comp.scenario import Scenario, load_scenario
from partner_comp.schema import FiscalYearParams, Physician

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"
BASELINE = CONFIG_DIR / "scenarios" / "baseline.yaml"
SETTINGS = CONFIG_DIR / "settings.yaml"


def test_parse_arguments_defaults():
    args = parse_arguments(["--scenario", "s.yaml"])
    assert args.scenario == "s.yaml"
    assert args.config is None
    assert args.year is None
    assert not args.include_retired
    assert not args.exclude_w2
    assert args.log_dir == str(Path("output_dev/comp_logs"))


def test_parse_arguments_requires_scenario():
    with pytest.raises(SystemExit):
        parse_arguments([])


def test_run_scenario_single_year():
    scenario = load_scenario(BASELINE)
    df = run_scenario(scenario, DEFAULT_SETTINGS, year=2027)
    assert set(df["year"]) == {2027}
    assert list(df["id"]) == ["p1", "p2", "p3", "p5"]

    with_retired = run_scenario(scenario, DEFAULT_SETTINGS, year=2026, include_retired=True)
    assert "p4" in set(with_retired["id"])


def test_main_writes_results(tmp_path, capsys, clean_logging):
    output = tmp_path / "out" / "results.csv"
    code = main([
        "--scenario", str(BASELINE),
        "--config", str(SETTINGS),
        "--output", str(output),
        "--log-dir", str(tmp_path / "logs"),
    ])

    assert code == 0
    df = pd.read_csv(output)
    assert len(df) == 8
    assert "p4" not in set(df["id"])
    assert (tmp_path / "logs" / "combined.log").exists()

    printed = capsys.readouterr().out
    assert "=== baseline 2026 ===" in printed
    assert "compensation by year" in printed


def test_main_include_retired_and_debug(tmp_path, clean_logging):
    output = tmp_path / "results.csv"
    code = main([
        "--scenario", str(BASELINE),
        "--config", str(SETTINGS),
        "--year", "2026",
        "--include-retired",
        "--exclude-w2",
        "--debug",
        "--output", str(output),
        "--log-dir", str(tmp_path / "logs"),
    ])

    assert code == 0
    df = pd.read_csv(output, dtype={"id": str})
    hw = df[df["id"] == "p4"].iloc[0]
    assert hw["comp"] == pytest.approx(58_302.5)
    connor = df[df["id"] == "p3"].iloc[0]
    assert connor["comp"] == pytest.approx(
        connor["fte_share"] + connor["md_allocation"] + connor["additional_days_allocation"]
    )
    assert (tmp_path / "logs" / "debug_detail.log").exists()


def test_main_missing_scenario(tmp_path, capsys, clean_logging):
    code = main(["--scenario", str(tmp_path / "nope.yaml"), "--log-dir", str(tmp_path / "logs")])
    assert code == 1
    assert "not found" in capsys.readouterr().err


def test_main_no_matching_year(tmp_path, clean_logging):
    code = main(["--scenario", str(BASELINE), "--year", "2040", "--log-dir", str(tmp_path / "logs")])
    assert code == 1


def test_run_scenario_uses_year_growth_rate():
    employee = Physician(id="e", name="E", type="employee", salary=100_000, receives_benefits=True)
    fy = FiscalYearParams(
        year=2027,
        therapy_income=1_000_000,
        medical_director_hours=0,
        benefit_growth_rate=0.5,
        physicians=[Physician(id="a", name="A", type="partner"), employee],
    )
    df = run_scenario(Scenario(benefit_growth_rate=0.0, years=[fy]), DEFAULT_SETTINGS)

    partner = df[df["id"] == "a"].iloc[0]
    assert partner["comp"] == pytest.approx(1_000_000 - employee_total_cost(employee, 2027, 0.5))
