# slpquery/configuration.py

"""
Configuration loader for slpquery.

Handles loading settings from slpquery.yaml. If the file doesn't exist,
it creates one with default values.
"""

import os
import sys
import yaml
from typing import Dict, Any, Optional

# Default structure and values, also used to generate the initial file.
DEFAULT_CONFIG: Dict[str, Any] = {
    'slptool_command': 'slptool',
    'discovery_timeout_seconds': 10,
    'default_scope': '',
    'log_level': 'WARNING',
}

CONFIG_HEADER = (
    "# slpquery Configuration File\n"
    "# You can edit these settings. They are read on every run.\n\n"
)


def get_config_path() -> str:
    """Returns the path to the config file."""
    return os.environ.get("SLPQUERY_CONFIG", "slpquery.yaml")


def save_config(config: Dict[str, Any], config_path: Optional[str] = None):
    """Writes the configuration dictionary as YAML, preceded by a comment header."""
    config_path = config_path or get_config_path()
    with open(config_path, 'w') as f:
        f.write(CONFIG_HEADER)
        yaml.dump(config, f, sort_keys=False, default_flow_style=False, indent=2)


def load_or_create_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Loads configuration from the YAML file.

    If the file doesn't exist, it creates it with default values.
    If the file is invalid, it reports the error and exits.
    """
    config_path = config_path or get_config_path()
    try:
        with open(config_path, 'r') as f:
            user_config = yaml.safe_load(f)

        # Merge user config with defaults to ensure all keys are present
        config = DEFAULT_CONFIG.copy()
        if isinstance(user_config, dict):
            config.update(user_config)
        return config

    except FileNotFoundError:
        print(f"Configuration file not found. Creating '{config_path}' with default settings.", file=sys.stderr)
        try:
            save_config(DEFAULT_CONFIG, config_path)
        except IOError as e:
            print(f"WARNING: Could not write default config file to '{config_path}': {e}", file=sys.stderr)
        return DEFAULT_CONFIG.copy()

    except yaml.YAMLError as e:
        print(f"FATAL: Error parsing '{config_path}': {e}", file=sys.stderr)
        sys.exit(1)
