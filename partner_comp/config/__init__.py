from .loaders import ConfigLoadError, load_settings, load_yaml_config, settings_from_dict
from .models import (
    DEFAULT_SETTINGS,
    BenefitRates,
    DelayedW2Override,
    EngineSettings,
    PaySchedule,
    TaxRates,
)

__all__ = [
    "ConfigLoadError",
    "load_settings",
    "load_yaml_config",
    "settings_from_dict",
    "DEFAULT_SETTINGS",
    "BenefitRates",
    "DelayedW2Override",
    "EngineSettings",
    "PaySchedule",
    "TaxRates",
]
