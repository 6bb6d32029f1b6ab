"""
config_manager.py - Manage persistent user preferences
ONE RESPONSIBILITY: Load and save grace period settings to a JSON file
"""

import json
import os

from core.config import GraceConfig
from utils.logger import log_warning

CONFIG_FILE = os.path.expanduser("~/.sudo_grace_prefs.json")

DEFAULT_CONFIG = {
    "settings_file": "/etc/sudoers",
    "default_grace_period_sec": 5 * 60,
    "heartbeat_margin_sec": 2,
    "parent_poll_interval_sec": 1.0,
    "sudo_path": "sudo"
}

def load_preferences(config_file=None):
    """Load preferences from file, falling back to defaults."""
    config_file = config_file or CONFIG_FILE
    prefs = DEFAULT_CONFIG.copy()

    if not os.path.exists(config_file):
        return prefs

    try:
        with open(config_file, 'r') as f:
            user_prefs = json.load(f)
    except (OSError, ValueError) as e:
        log_warning(f"Error loading preferences {config_file}: {e}")
        return prefs

    if not isinstance(user_prefs, dict):
        log_warning(f"Ignoring preferences {config_file}: not a JSON object")
        return prefs

    # Merge with defaults, unknown keys and mistyped values are dropped
    for key, default in DEFAULT_CONFIG.items():
        if key not in user_prefs:
            continue
        value = user_prefs[key]
        if not _matches_type(value, default):
            log_warning(f"Ignoring preference {key}={value!r}: expected "
                        f"{type(default).__name__}")
            continue
        prefs[key] = value
    return prefs

def _matches_type(value, default):
    """Same type as the default; ints are accepted where floats are."""
    if isinstance(value, bool):
        return isinstance(default, bool)
    if isinstance(default, float):
        return isinstance(value, (int, float))
    return isinstance(value, type(default))

def load_config(config_file=None, **overrides):
    """
    Build a GraceConfig from saved preferences.

    Args:
        config_file: Preferences file (default: ~/.sudo_grace_prefs.json)
        **overrides: Values taking precedence over the file, None is ignored

    Returns:
        GraceConfig
    """
    prefs = load_preferences(config_file)
    for key, value in overrides.items():
        if value is not None and key in DEFAULT_CONFIG:
            prefs[key] = value
    return GraceConfig(**prefs)

def save_config(config, config_file=None):
    """Save configuration to file."""
    config_file = config_file or CONFIG_FILE
    prefs = {key: getattr(config, key) for key in DEFAULT_CONFIG}
    try:
        with open(config_file, 'w') as f:
            json.dump(prefs, f, indent=4)
        return True
    except OSError as e:
        log_warning(f"Error saving preferences {config_file}: {e}")
        return False
