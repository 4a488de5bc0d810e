"""
confd.srv - Etcd discovery through DNS SRV records.

Queries ``_etcd._tcp.<domain>`` with dnspython and returns the targets in
preference order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import dns.resolver
from loguru import logger


@dataclass(frozen=True)
class SRVRecord:
    """A (hostname, port) pair taken from one SRV answer."""

    hostname: str
    port: int


# Signature of the discovery collaborator used by the endpoint resolver.
SRVLookup = Callable[[str], list[SRVRecord]]


def srv_name(domain: str, service: str = "etcd", proto: str = "tcp") -> str:
    """Return the owner name to query, e.g. "_etcd._tcp.example.com"."""
    return f"_{service}._{proto}.{domain.rstrip('.')}"


def lookup_srv(domain: str, service: str = "etcd", proto: str = "tcp") -> list[SRVRecord]:
    """Resolve the etcd SRV records for a domain.

    Records are ordered by priority (lowest first), then by weight
    (highest first).

    Args:
        domain: Domain to query, e.g. "example.com"
        service: SRV service label without the underscore
        proto: SRV protocol label without the underscore

    Returns:
        SRVRecord list, hostnames without the trailing dot

    Raises:
        dns.exception.DNSException: If the query fails or has no answer
    """
    name = srv_name(domain, service, proto)
    logger.debug(f"Querying SRV records for {name}")
    answer = dns.resolver.resolve(name, "SRV")
    rdatas = sorted(answer, key=lambda r: (r.priority, -r.weight))
    return [
        SRVRecord(hostname=r.target.to_text(omit_final_dot=True), port=r.port) for r in rdatas
    ]
