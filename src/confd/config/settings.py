"""
confd.config.settings - The resolved confd configuration value.

Provides the ConfdConfig dataclass returned by ``load_config``.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from confd.config.defaults import DEFAULT_CONFIG


@dataclass
class ConfdConfig:
    """
    Merged confd settings.

    Built once by ``load_config``; the endpoint resolver rewrites ``nodes``
    in place, after which only the ``set_*`` methods change it. No locking
    is done here, so callers sharing one instance across threads must
    finish all setting before readers start.

    Attributes:
        client_cert: Path to the TLS client certificate (may be empty)
        client_key: Path to the TLS client key (may be empty)
        conf_dir: Base directory for conf.d and templates
        nodes: Etcd endpoints; "scheme://host:port" once resolved
        scheme: Etcd URI scheme, "http" or "https"
        interval: Seconds between configuration runs
        noop: Only show pending changes, don't sync configs
        prefix: Etcd key path prefix
        srv_domain: Domain to query for etcd SRV records (may be empty)
    """

    client_cert: str = DEFAULT_CONFIG["client_cert"]
    client_key: str = DEFAULT_CONFIG["client_key"]
    conf_dir: str = DEFAULT_CONFIG["confdir"]
    nodes: list[str] = field(default_factory=lambda: list(DEFAULT_CONFIG["etcd_nodes"]))
    scheme: str = DEFAULT_CONFIG["etcd_scheme"]
    interval: int = DEFAULT_CONFIG["interval"]
    noop: bool = DEFAULT_CONFIG["noop"]
    prefix: str = DEFAULT_CONFIG["prefix"]
    srv_domain: str = DEFAULT_CONFIG["srv_domain"]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConfdConfig:
        """
        Create ConfdConfig from a [confd] table.

        Args:
            data: Dictionary keyed by confd.toml names (lower-case)

        Returns:
            ConfdConfig instance with values from data or defaults
        """
        merged = copy.deepcopy(DEFAULT_CONFIG)
        merged.update(data)
        return cls(
            client_cert=merged["client_cert"],
            client_key=merged["client_key"],
            conf_dir=merged["confdir"],
            nodes=list(merged["etcd_nodes"]),
            scheme=merged["etcd_scheme"],
            interval=merged["interval"],
            noop=merged["noop"],
            prefix=merged["prefix"],
            srv_domain=merged["srv_domain"],
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the settings keyed by their confd.toml names."""
        return {
            "client_cert": self.client_cert,
            "client_key": self.client_key,
            "confdir": self.conf_dir,
            "etcd_nodes": list(self.nodes),
            "etcd_scheme": self.scheme,
            "interval": self.interval,
            "noop": self.noop,
            "prefix": self.prefix,
            "srv_domain": self.srv_domain,
        }

    @property
    def config_dir(self) -> Path:
        """Directory holding template resource definitions."""
        return Path(self.conf_dir) / "conf.d"

    @property
    def template_dir(self) -> Path:
        return Path(self.conf_dir) / "templates"

    @property
    def etcd_nodes(self) -> list[str]:
        """Etcd node URLs, e.g. ["http://203.0.113.30:4001"]."""
        return list(self.nodes)

    def set_conf_dir(self, path: str | Path) -> None:
        self.conf_dir = str(path)

    def set_noop(self, enabled: bool) -> None:
        self.noop = enabled

    def set_prefix(self, prefix: str) -> None:
        self.prefix = prefix
