"""
Configuration loading for the sentence chain.

Settings live in YAML files under `<project root>/configs`. An
environment-specific file (`chain_model_<environment>.yaml`) takes
precedence over the shared `chain_model.yaml`; whatever is found is merged
over DEFAULT_CONFIG so callers always get every key.
"""

import copy
import logging
import os

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "max_sentence_length": 1000,
    "seed": None,
    "logging": {
        "level": "INFO",
        "console_json": True,
        "log_file": None,
    },
}

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
DEFAULT_CONFIG_DIR = os.path.join(PROJECT_ROOT, "configs")


def _merge(base, override):
    """Recursively merge `override` into a copy of `base`."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_chain_config(environment="development", config_dir=None):
    """
    Load the chain configuration for an environment.

    Args:
        environment (str): Environment name, e.g. 'development' or 'test'
        config_dir (str, optional): Directory holding the YAML files

    Returns:
        dict: Configuration merged over DEFAULT_CONFIG
    """
    config_dir = config_dir or DEFAULT_CONFIG_DIR

    config_paths = [
        os.path.join(config_dir, f"chain_model_{environment}.yaml"),
        os.path.join(config_dir, "chain_model.yaml"),
    ]

    for config_path in config_paths:
        if not os.path.exists(config_path):
            continue
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Error loading chain config from {config_path}: {e}")
            continue

        if not isinstance(loaded, dict):
            logger.warning(f"Ignoring chain config {config_path}: top level must be a mapping")
            continue

        logger.info(f"Loaded chain config from {config_path}")
        return _merge(DEFAULT_CONFIG, loaded)

    logger.warning("No chain configuration found, using defaults")
    return copy.deepcopy(DEFAULT_CONFIG)
