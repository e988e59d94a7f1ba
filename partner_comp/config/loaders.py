import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from cerberus import Validator
from pydantic import ValidationError

from partner_comp.config.models import EngineSettings

# Configure logger for this module
logger = logging.getLogger(__name__)

# Top-level shape of a settings file; field-level checks are left to pydantic.
SETTINGS_SCHEMA: Dict[str, Any] = {
    "default_md_shared_pool": {"type": "number", "required": False, "min": 0},
    "default_md_prcs_pool": {"type": "number", "required": False, "min": 0},
    "max_weeks_off": {"type": "number", "required": False, "min": 0},
    "default_trailing_md_amount": {"type": "number", "required": False, "min": 0},
    "trailing_md_amounts": {
        "type": "dict",
        "required": False,
        "keysrules": {"type": "string"},
        "valuesrules": {"type": "number"},
    },
    "delayed_w2_overrides": {
        "type": "list",
        "required": False,
        "schema": {
            "type": "dict",
            "schema": {
                "name": {"type": "string", "required": True},
                "year": {"type": "integer", "required": True},
                "amount": {"type": "number", "required": True},
                "taxes": {"type": "number", "required": True},
                "period_details": {"type": "string", "required": False},
            },
        },
    },
    "social_security_wage_bases": {
        "type": "dict",
        "required": False,
        "keysrules": {"type": "integer"},
        "valuesrules": {"type": "number"},
    },
    "tax_rates": {"type": "dict", "required": False},
    "benefits": {"type": "dict", "required": False},
    "pay_schedule": {"type": "dict", "required": False},
}


class ConfigLoadError(Exception):
    """Custom exception for errors during config loading."""

    pass


def load_yaml_config(config_path: Union[str, Path]) -> Optional[Dict[str, Any]]:
    """
    Loads configuration data from a YAML file.

    Args:
        config_path: Path pointing to the YAML configuration file.

    Returns:
        A dictionary containing the loaded configuration. An empty file
        yields an empty dictionary.

    Raises:
        ConfigLoadError: If the file cannot be found or parsed.
    """
    if not isinstance(config_path, Path):
        config_path = Path(config_path)

    logger.info(f"Attempting to load configuration from: {config_path}")

    if not config_path.is_file():
        logger.error(f"Configuration file not found at path: {config_path}")
        raise ConfigLoadError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.exception(f"Error parsing YAML configuration file {config_path}: {e}")
        raise ConfigLoadError(f"Error parsing YAML file {config_path}") from e

    if config_data is None:
        config_data = {}
    if not isinstance(config_data, dict):
        logger.error(f"Configuration file {config_path} did not parse into a dictionary.")
        raise ConfigLoadError(
            f"Invalid configuration format in {config_path}: Expected a dictionary."
        )

    logger.info(f"Successfully loaded configuration from {config_path}")
    return config_data


def settings_from_dict(config_data: Dict[str, Any]) -> EngineSettings:
    """Validate a raw settings mapping (schema first, then field rules)."""
    v = Validator(SETTINGS_SCHEMA)
    if not v.validate(config_data):
        raise ConfigLoadError(f"Config validation failed: {v.errors}")

    try:
        return EngineSettings(**config_data)
    except ValidationError as e:
        raise ConfigLoadError(f"Config validation failed: {e}") from e


def load_settings(config_path: Union[str, Path]) -> EngineSettings:
    """
    Loads YAML, validates its schema and converts it to EngineSettings.
    Raises ConfigLoadError on missing files, parse errors or validation errors.
    """
    config_data = load_yaml_config(config_path)
    settings = settings_from_dict(config_data)
    logger.debug(f"Engine settings loaded: {settings}")
    return settings


# Expose for import
__all__ = [
    "load_yaml_config",
    "load_settings",
    "settings_from_dict",
    "ConfigLoadError",
]
