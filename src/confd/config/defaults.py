"""
confd.config.defaults - Built-in configuration values.

These are the lowest-priority layer: the config file overrides them and
explicitly set command-line flags override the file.
"""

DEFAULT_CONFIG_FILE = "/etc/confd/confd.toml"

VALID_SCHEMES = ("http", "https")

# Keyed by the [confd] table names used in confd.toml.
DEFAULT_CONFIG = {
    "client_cert": "",
    "client_key": "",
    "confdir": "/etc/confd",
    "etcd_nodes": ["127.0.0.1:4001"],
    "etcd_scheme": "http",
    "interval": 600,
    "noop": False,
    "prefix": "/",
    "srv_domain": "",
}
