"""
confd - Configuration resolution for the confd template daemon

Merges built-in defaults, the confd.toml file, and command-line flags into
one settings value, then resolves the etcd endpoints to contact, either
from the configured node list or from DNS SRV records.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("confd")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed

from confd.config import ConfdConfig, load_config
from confd.errors import ConfigError

__all__ = [
    "__version__",
    "ConfdConfig",
    "ConfigError",
    "load_config",
]
