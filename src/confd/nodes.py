"""
confd.nodes - Build the etcd endpoint list from the merged settings.

Node strings may be written as a bare ``host:port`` or as a full URL such
as ``https://etcd.example.com:4001``. A configured SRV domain replaces the
node list entirely with the hosts found in DNS.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union
from urllib.parse import urlsplit

from loguru import logger

from confd.config.defaults import VALID_SCHEMES
from confd.errors import (
    EndpointResolutionError,
    HostPortSplitError,
    InvalidNodeURLError,
    SRVResolutionError,
)
from confd.srv import SRVLookup, lookup_srv

if TYPE_CHECKING:
    from confd.config.settings import ConfdConfig


@dataclass(frozen=True)
class ExplicitNode:
    """A node given as a URL; its own scheme wins over the top-level one."""

    scheme: str
    host: str
    port: str


@dataclass(frozen=True)
class BareNode:
    """A node given as host:port; uses the top-level scheme."""

    host: str
    port: str


@dataclass(frozen=True)
class NodeParseFailure:
    raw: str
    error: EndpointResolutionError


NodeSpec = Union[ExplicitNode, BareNode, NodeParseFailure]


def is_valid_scheme(scheme: str) -> bool:
    return scheme in VALID_SCHEMES


def split_host_port(address: str) -> tuple[str, str]:
    """Split "host:port" or "[ipv6]:port" into host and port.

    The port is required; nothing is defaulted.

    Args:
        address: Network address to split

    Returns:
        (host, port) tuple, IPv6 hosts without brackets

    Raises:
        HostPortSplitError: If the address is not a well-formed host:port
    """
    i = address.rfind(":")
    if i < 0:
        raise HostPortSplitError(address, "missing port in address")

    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise HostPortSplitError(address, "missing ']' in address")
        if end + 1 == len(address):
            raise HostPortSplitError(address, "missing port in address")
        if end + 1 != i:
            if address[end + 1] == ":":
                raise HostPortSplitError(address, "too many colons in address")
            raise HostPortSplitError(address, "missing port in address")
        host = address[1:end]
        open_from, close_from = 1, end + 1
    else:
        host = address[:i]
        if ":" in host:
            raise HostPortSplitError(address, "too many colons in address")
        open_from, close_from = 0, 0

    if "[" in address[open_from:]:
        raise HostPortSplitError(address, "unexpected '[' in address")
    if "]" in address[close_from:]:
        raise HostPortSplitError(address, "unexpected ']' in address")

    port = address[i + 1 :]
    if not port:
        raise HostPortSplitError(address, "missing port in address")
    if not host:
        raise HostPortSplitError(address, "missing host in address")
    return host, port


def format_endpoint(scheme: str, host: str, port: str | int) -> str:
    """Return "scheme://host:port", bracketing IPv6 literals."""
    if ":" in host:
        host = f"[{host}]"
    return f"{scheme}://{host}:{port}"


def classify_node(raw: str) -> NodeSpec:
    """Decide whether a node string is a URL or a bare host:port.

    A string counts as a URL when it parses with both a scheme and a
    network location; anything else is treated as host:port.
    """
    try:
        parts = urlsplit(raw)
    except ValueError:
        parts = None

    if parts is not None and parts.scheme and parts.netloc:
        if not is_valid_scheme(parts.scheme):
            return NodeParseFailure(raw, InvalidNodeURLError(raw, parts.scheme))
        hostport = parts.netloc.rpartition("@")[2]
        try:
            host, port = split_host_port(hostport)
        except HostPortSplitError as err:
            return NodeParseFailure(raw, err)
        return ExplicitNode(scheme=parts.scheme, host=host, port=port)

    try:
        host, port = split_host_port(raw)
    except HostPortSplitError as err:
        return NodeParseFailure(raw, err)
    return BareNode(host=host, port=port)


def endpoints_from_srv(domain: str, scheme: str, srv_lookup: SRVLookup) -> list[str]:
    """Build endpoints from the SRV records of a domain.

    Raises:
        SRVResolutionError: If the lookup raises
    """
    try:
        records = srv_lookup(domain)
    except Exception as err:
        raise SRVResolutionError(domain, err) from err
    logger.info(f"Found {len(records)} etcd hosts in SRV records for {domain}")
    return [format_endpoint(scheme, r.hostname, r.port) for r in records]


def endpoints_from_nodes(nodes: list[str], scheme: str) -> list[str]:
    """Normalize an explicit node list, keeping its order.

    Raises:
        InvalidNodeURLError: If a URL node has a scheme other than http/https
        HostPortSplitError: If a node has no parseable host:port
    """
    endpoints = []
    for raw in nodes:
        parsed = classify_node(raw)
        if isinstance(parsed, ExplicitNode):
            endpoints.append(format_endpoint(parsed.scheme, parsed.host, parsed.port))
        elif isinstance(parsed, BareNode):
            endpoints.append(format_endpoint(scheme, parsed.host, parsed.port))
        elif isinstance(parsed, NodeParseFailure):
            logger.error(str(parsed.error))
            raise parsed.error
        else:
            raise TypeError(f"Unhandled node: {parsed!r}")
    return endpoints


def resolve_nodes(config: ConfdConfig, srv_lookup: SRVLookup | None = None) -> list[str]:
    """Replace config.nodes with the resolved endpoint list.

    A non-empty srv_domain takes precedence: the explicit node list is
    discarded and the endpoints come from DNS alone. Nothing is written to
    config when resolution fails.

    Args:
        config: Merged settings with a validated scheme
        srv_lookup: SRV discovery function (defaults to lookup_srv)

    Returns:
        The new endpoint list

    Raises:
        EndpointResolutionError: If discovery or any node fails
    """
    if config.srv_domain:
        endpoints = endpoints_from_srv(config.srv_domain, config.scheme, srv_lookup or lookup_srv)
    else:
        endpoints = endpoints_from_nodes(config.nodes, config.scheme)

    for endpoint in endpoints:
        logger.debug(f"Using etcd endpoint {endpoint}")
    config.nodes = endpoints
    return endpoints
