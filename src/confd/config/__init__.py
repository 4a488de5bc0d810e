"""
confd.config - Configuration loading and defaults
"""

from confd.config.defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_FILE
from confd.config.flags import FlagValue, add_config_flags, flags_from_args
from confd.config.loader import find_config_file, load_config, parse_toml
from confd.config.settings import ConfdConfig

__all__ = [
    "ConfdConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_FILE",
    "FlagValue",
    "add_config_flags",
    "find_config_file",
    "flags_from_args",
    "load_config",
    "parse_toml",
]
