"""
confd.errors - Exceptions raised while loading the confd configuration.

Every failure surfaces synchronously from ``load_config`` as a
``ConfigError`` subclass. Endpoint resolution failures share the
``EndpointResolutionError`` base so callers can tell them apart from
file and scheme problems.
"""

from __future__ import annotations

from pathlib import Path


class ConfigError(Exception):
    """Base class for configuration load failures."""


class FileDecodeError(ConfigError):
    """The config file is missing, unreadable, malformed, or mistyped."""

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot decode config file {self.path}: {reason}")


class InvalidSchemeError(ConfigError):
    """The top-level etcd scheme is not http or https."""

    def __init__(self, scheme: str):
        self.scheme = scheme
        super().__init__(f"Invalid etcd scheme: {scheme}")


class EndpointResolutionError(ConfigError):
    """Base class for failures while building the endpoint list."""

    prefix = "cannot resolve backend endpoints"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}")


class SRVResolutionError(EndpointResolutionError):
    """The SRV lookup for the configured domain failed."""

    def __init__(self, domain: str, cause: BaseException):
        self.domain = domain
        self.cause = cause
        super().__init__(f"cannot get hosts from SRV records for {domain}: {cause}")


class InvalidNodeURLError(EndpointResolutionError):
    """A node URL carries a scheme other than http or https."""

    def __init__(self, node: str, scheme: str):
        self.node = node
        self.scheme = scheme
        super().__init__(f"the etcd node list contains an invalid URL: {node}")


class HostPortSplitError(EndpointResolutionError):
    """A node address could not be split into host and port."""

    def __init__(self, address: str, reason: str):
        self.address = address
        self.reason = reason
        super().__init__(f"address {address}: {reason}")
