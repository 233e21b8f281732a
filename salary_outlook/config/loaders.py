import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from cerberus import Validator
from pydantic import ValidationError

from .models import ReportConfig

DEFAULTS_PATH = Path(__file__).with_name("defaults.yaml")

# Structural schema checked before the typed model is built. Value ranges and
# cross-field rules live in the pydantic models.
CONFIG_SCHEMA: Dict[str, Any] = {
    "roles": {"type": "list", "required": True, "schema": {"type": "string"}},
    "role_mapping": {
        "type": "dict",
        "required": True,
        "keysrules": {"type": "string"},
        "valuesrules": {"type": "string"},
    },
    "skills": {
        "type": "dict",
        "required": False,
        "schema": {
            "top_n": {"type": "integer", "required": False},
            "placeholder": {"type": "string", "required": False},
            "candidates": {"type": "list", "required": False, "schema": {"type": "string"}},
        },
    },
    "forecast": {
        "type": "dict",
        "required": False,
        "schema": {
            "horizon": {"type": "integer", "required": False},
            "years": {"type": "list", "required": False, "schema": {"type": "integer"}},
            "confidence_level": {"type": "number", "required": False},
            "min_years": {"type": "integer", "required": False},
            "max_workers": {"type": "integer", "required": False},
        },
    },
}

# Configure logger for this module
logger = logging.getLogger(__name__)


class ConfigLoadError(Exception):
    """Custom exception for errors during config loading."""

    pass


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge override into a copy of base and return the result.
    Nested dicts merge key by key; any other override value replaces the base value.
    """
    merged = deepcopy(base)
    for key, val in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(val, dict):
            merged[key] = deep_merge(merged[key], val)
        else:
            merged[key] = deepcopy(val)
    return merged


def load_yaml_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Loads configuration data from a YAML file.

    Args:
        config_path: Path pointing to the YAML configuration file.

    Returns:
        A dictionary containing the loaded configuration. An empty file yields {}.

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
    except OSError as e:
        logger.exception(f"Could not read configuration file {config_path}: {e}")
        raise ConfigLoadError(f"Could not read configuration file {config_path}") from e

    if config_data is None:
        logger.warning(f"Configuration file {config_path} is empty.")
        return {}

    if not isinstance(config_data, dict):
        logger.error(f"Configuration file {config_path} did not parse into a dictionary.")
        raise ConfigLoadError(
            f"Invalid configuration format in {config_path}: Expected a dictionary."
        )

    logger.info(f"Successfully loaded configuration from {config_path}")
    return config_data


def build_report_config(config_data: Dict[str, Any]) -> ReportConfig:
    """
    Validates a raw configuration dict and converts it to a ReportConfig.

    Raises:
        ConfigLoadError: On schema or model validation errors.
    """
    v = Validator(CONFIG_SCHEMA)
    if not v.validate(config_data):
        raise ConfigLoadError(f"Config validation failed: {v.errors}")

    try:
        config = ReportConfig.model_validate(config_data)
    except ValidationError as e:
        raise ConfigLoadError(f"Config validation failed: {e}") from e

    logger.debug(f"Report configuration: {config.model_dump()}")
    return config


def load_report_config(config_path: Optional[Union[str, Path]] = None) -> ReportConfig:
    """
    Loads the packaged defaults, merges an optional user YAML over them and
    validates the result.

    Args:
        config_path: Optional user configuration file.

    Returns:
        The validated ReportConfig.

    Raises:
        ConfigLoadError: If a file is missing, unparsable, or the merged config is invalid.
    """
    config_data = load_yaml_config(DEFAULTS_PATH)
    if config_path is not None:
        overrides = load_yaml_config(config_path)
        config_data = deep_merge(config_data, overrides)
    return build_report_config(config_data)


# Expose for import
__all__ = [
    "deep_merge",
    "load_yaml_config",
    "build_report_config",
    "load_report_config",
    "ConfigLoadError",
    "DEFAULTS_PATH",
]
