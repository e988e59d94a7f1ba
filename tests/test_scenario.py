from pathlib import Path

import pytest

from partner_comp.scenario import ScenarioLoadError, deep_merge, load_roster_csv, load_scenario
from partner_comp.schema import FiscalYearParams, PhysicianType

SCENARIO_DIR = Path(__file__).resolve().parents[1] / "config" / "scenarios"


def write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_deep_merge_replaces_lists_and_merges_dicts():
    base = {"a": {"x": 1, "y": 2}, "years": [1, 2]}
    merged = deep_merge(base, {"a": {"y": 3}, "years": [9]})
    assert merged == {"a": {"x": 1, "y": 3}, "years": [9]}


def test_load_baseline():
    scenario = load_scenario(SCENARIO_DIR / "baseline.yaml")
    assert scenario.name == "baseline"
    assert [fy.year for fy in scenario.years] == [2026, 2027]

    fy = scenario.year(2026)
    assert fy.prcs_director_physician_id == "p2"
    assert len(fy.physicians) == 5
    assert fy.physicians[3].is_prior_year_retiree
    assert scenario.year(2030) is None


def test_extends_inherits_years():
    scenario = load_scenario(SCENARIO_DIR / "lean_year.yaml")
    assert scenario.name == "lean_year"
    assert scenario.benefit_growth_rate == 0.07
    assert [fy.year for fy in scenario.years] == [2026, 2027]


def test_name_defaults_to_file_stem(tmp_path):
    path = write(tmp_path / "what_if.yaml", "years:\n  - year: 2026\n    therapy_income: 1\n")
    assert load_scenario(path).name == "what_if"


def test_circular_extends(tmp_path):
    write(tmp_path / "a.yaml", "extends: b.yaml\n")
    write(tmp_path / "b.yaml", "extends: a.yaml\n")
    with pytest.raises(ScenarioLoadError, match="Circular"):
        load_scenario(tmp_path / "a.yaml")


def test_missing_parent(tmp_path):
    path = write(tmp_path / "child.yaml", "extends: gone.yaml\n")
    with pytest.raises(ScenarioLoadError, match="not found"):
        load_scenario(path)


def test_missing_file(tmp_path):
    with pytest.raises(ScenarioLoadError, match="not found"):
        load_scenario(tmp_path / "nope.yaml")


def test_invalid_physician(tmp_path):
    path = write(
        tmp_path / "bad.yaml",
        "years:\n  - year: 2026\n    physicians:\n      - {id: a, name: A, type: boss}\n",
    )
    with pytest.raises(ScenarioLoadError, match="failed validation"):
        load_scenario(path)


def test_load_roster_csv(tmp_path):
    path = write(
        tmp_path / "roster.csv",
        "id,name,type,salary,weeksOff,receivesBenefits\n"
        "1,Allen,partner,,4,\n"
        "2,Baker,employee,150000,,True\n",
    )
    roster = load_roster_csv(path)

    assert [p.id for p in roster] == ["1", "2"]
    allen, baker = roster
    assert allen.physician_type is PhysicianType.PARTNER
    assert allen.salary is None
    assert allen.weeks_off == 4
    assert baker.salary == 150000
    assert baker.weeks_off is None
    assert baker.receives_benefits is True


def test_roster_csv_errors(tmp_path):
    with pytest.raises(ScenarioLoadError, match="not found"):
        load_roster_csv(tmp_path / "nope.csv")

    path = write(tmp_path / "bad.csv", "id,name,type\n1,A,boss\n")
    with pytest.raises(ScenarioLoadError, match="failed validation"):
        load_roster_csv(path)


def test_growth_rate_prefers_year_setting(tmp_path):
    path = write(
        tmp_path / "growth.yaml",
        "benefit_growth_rate: 0.05\n"
        "years:\n"
        "  - year: 2026\n"
        "  - year: 2027\n"
        "    benefit_growth_rate: 0.09\n",
    )
    scenario = load_scenario(path)
    assert scenario.growth_rate(scenario.year(2026)) == 0.05
    assert scenario.growth_rate(scenario.year(2027)) == 0.09
    assert scenario.growth_rate(FiscalYearParams(benefit_growth_rate=0.0)) == 0.0
