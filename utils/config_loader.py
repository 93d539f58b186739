"""
Configuration Loader - Load and manage sequencing policies

This module provides functions to load configuration from YAML/JSON files
and turn it into a SequencingPolicy.

Key Features:
    - Load default and custom policy configurations
    - Merge user overrides with defaults
    - Environment overrides (.env supported via python-dotenv)
    - Validate configuration values
"""

import copy
import os
import yaml
import json
from pathlib import Path
from typing import Dict, Any, Optional

from dotenv import load_dotenv

from models.policy import SequencingPolicy

CONFIG_ENV_VAR = "JOB_SEQUENCER_CONFIG"
LOG_LEVEL_ENV_VAR = "JOB_SEQUENCER_LOG_LEVEL"

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'config' / 'default_policy.yaml'

DEFAULT_CONFIG: Dict[str, Any] = SequencingPolicy().to_dict()


def load_yaml(file_path: str) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        file_path: Path to YAML file

    Returns:
        Dictionary with configuration data (empty for an empty file)
    """
    with open(file_path, 'r') as f:
        return yaml.safe_load(f) or {}


def load_json(file_path: str) -> Dict[str, Any]:
    """
    Load JSON configuration file.

    Args:
        file_path: Path to JSON file

    Returns:
        Dictionary with configuration data
    """
    with open(file_path, 'r') as f:
        return json.load(f)


def merge_config(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge user overrides into defaults without touching either.

    Args:
        defaults: Base configuration
        overrides: User supplied values

    Returns:
        New merged dictionary
    """
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_policy_from_config(config: Dict[str, Any]) -> SequencingPolicy:
    """
    Create SequencingPolicy object from configuration dictionary.

    Args:
        config: Configuration dictionary

    Returns:
        SequencingPolicy object
    """
    sequencing_config = config.get('sequencing', {}) or {}
    logging_config = config.get('logging', {}) or {}

    return SequencingPolicy(
        reject_duplicate_ids=sequencing_config.get('reject_duplicate_ids', False),
        log_level=logging_config.get('level', 'INFO'),
        log_format=logging_config.get('format', SequencingPolicy.log_format)
    )


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load complete configuration from file.

    If no path is provided, the JOB_SEQUENCER_CONFIG environment variable
    (or .env entry) is used, then config/default_policy.yaml. The log level
    can be forced with JOB_SEQUENCER_LOG_LEVEL.

    Args:
        config_path: Optional path to config file

    Returns:
        Dictionary containing the policy and the merged raw config
    """
    load_dotenv()

    if config_path is None:
        config_path = os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH

    config_path = Path(config_path)
    if config_path.exists():
        if config_path.suffix == '.json':
            file_data = load_json(str(config_path))
        else:
            file_data = load_yaml(str(config_path))
    elif config_path == DEFAULT_CONFIG_PATH:
        file_data = {}
    else:
        raise FileNotFoundError(f"Config file not found: {config_path}")

    if not isinstance(file_data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping at top level")

    config_data = merge_config(DEFAULT_CONFIG, file_data)

    # An empty section ("logging:") loads as None
    for section in DEFAULT_CONFIG:
        if config_data.get(section) is None:
            config_data[section] = {}
        elif not isinstance(config_data[section], dict):
            raise ValueError(f"Config section '{section}' in {config_path} must be a mapping")

    env_level = os.getenv(LOG_LEVEL_ENV_VAR)
    if env_level:
        config_data['logging']['level'] = env_level

    try:
        policy = load_policy_from_config(config_data)
    except ValueError as e:
        raise ValueError(f"Invalid config in {config_path}: {e}") from e

    return {
        'policy': policy,
        'raw_config': config_data
    }


def save_config(policy: SequencingPolicy, output_path: str):
    """
    Save configuration to YAML file.

    Args:
        policy: Policy to save
        output_path: Path to output file
    """
    with open(output_path, 'w') as f:
        yaml.dump(policy.to_dict(), f, default_flow_style=False)


# Example usage
if __name__ == "__main__":
    config = load_config()

    print("Loaded Configuration:")
    print(f"Policy: {config['policy']}")
    print(f"\nRaw config:\n{yaml.dump(config['raw_config'], default_flow_style=False)}")
