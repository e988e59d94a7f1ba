from datetime import date
from pathlib import Path

import pytest

from partner_comp.config.loaders import (
    ConfigLoadError,
    load_settings,
    load_yaml_config,
    settings_from_dict,
)
from partner_comp.config.models import DEFAULT_SETTINGS

SHIPPED_SETTINGS = Path(__file__).resolve().parents[2] / "config" / "settings.yaml"


def write(tmp_path, text, name="settings.yaml"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


@pytest.mark.config
def test_empty_file_gives_defaults(tmp_path):
    settings = load_settings(write(tmp_path, ""))
    assert settings == DEFAULT_SETTINGS
    assert settings.default_md_shared_pool == 97200
    assert settings.default_trailing_md_amount == 0


@pytest.mark.config
def test_partial_file_overrides_only_given_fields(tmp_path):
    settings = load_settings(
        write(
            tmp_path,
            "max_weeks_off: 20\n"
            "trailing_md_amounts:\n  HW: 8302.5\n"
            "tax_rates:\n  medicare_rate: 0.015\n",
        )
    )
    assert settings.max_weeks_off == 20
    assert settings.trailing_md_amounts == {"HW": 8302.5}
    assert settings.tax_rates.medicare_rate == 0.015
    assert settings.tax_rates.social_security_rate == 0.062


@pytest.mark.config
def test_shipped_settings_load():
    settings = load_settings(SHIPPED_SETTINGS)
    assert settings.default_trailing_md_amount == 2500
    assert settings.trailing_md_amounts["HW"] == 8302.5
    assert settings.delayed_w2_override("Connor", 2025).amount == 15289.23
    assert settings.delayed_w2_override("Connor", 2026) is None
    assert settings.pay_schedule.reference_period_end == date(2024, 12, 13)
    assert settings.social_security_wage_bases[2030] == 215400


@pytest.mark.config
def test_missing_file(tmp_path):
    with pytest.raises(ConfigLoadError, match="not found"):
        load_yaml_config(tmp_path / "nope.yaml")


@pytest.mark.config
def test_bad_yaml(tmp_path):
    with pytest.raises(ConfigLoadError, match="Error parsing"):
        load_yaml_config(write(tmp_path, "max_weeks_off: [24\n"))


@pytest.mark.config
def test_non_mapping_document(tmp_path):
    with pytest.raises(ConfigLoadError, match="Expected a dictionary"):
        load_yaml_config(write(tmp_path, "- 1\n- 2\n"))


@pytest.mark.config
def test_unknown_key_rejected():
    with pytest.raises(ConfigLoadError, match="validation failed"):
        settings_from_dict({"max_week_off": 24})


@pytest.mark.config
def test_negative_pool_rejected():
    with pytest.raises(ConfigLoadError):
        settings_from_dict({"default_md_shared_pool": -1})


@pytest.mark.config
def test_override_missing_amount_rejected():
    with pytest.raises(ConfigLoadError):
        settings_from_dict({"delayed_w2_overrides": [{"name": "Connor", "year": 2025, "taxes": 1}]})


@pytest.mark.config
def test_nested_field_rules_enforced():
    with pytest.raises(ConfigLoadError):
        settings_from_dict({"pay_schedule": {"period_days": 0}})
    with pytest.raises(ConfigLoadError):
        settings_from_dict({"social_security_wage_bases": {}})
