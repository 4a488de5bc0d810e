"""
confd.config.flags - Command-line overrides for the confd settings.

The options are registered with ``default=argparse.SUPPRESS`` so that the
parsed namespace only carries attributes the user actually supplied. That
presence bit is what decides whether a flag may override the config file;
a flag left at its default never does.
"""

from __future__ import annotations

import argparse
import copy
from dataclasses import dataclass
from typing import Any

from confd.config.defaults import DEFAULT_CONFIG

# Flag name -> ConfdConfig attribute.
FLAG_FIELDS: dict[str, str] = {
    "client-cert": "client_cert",
    "client-key": "client_key",
    "confdir": "conf_dir",
    "node": "nodes",
    "etcd-scheme": "scheme",
    "interval": "interval",
    "noop": "noop",
    "prefix": "prefix",
    "srv-domain": "srv_domain",
}

# Flag name -> confd.toml key, for looking up defaults.
FLAG_FILE_KEYS: dict[str, str] = {
    "client-cert": "client_cert",
    "client-key": "client_key",
    "confdir": "confdir",
    "node": "etcd_nodes",
    "etcd-scheme": "etcd_scheme",
    "interval": "interval",
    "noop": "noop",
    "prefix": "prefix",
    "srv-domain": "srv_domain",
}

FLAG_DEFAULTS: dict[str, Any] = {
    name: DEFAULT_CONFIG[key] for name, key in FLAG_FILE_KEYS.items()
}


def positive_int(value: str) -> int:
    """argparse type for values that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value!r}")
    return number


@dataclass
class FlagValue:
    """Current value of a flag and whether the user provided it."""

    value: Any
    was_set: bool = False


def add_config_flags(parser: argparse.ArgumentParser) -> None:
    """Register the confd settings options on an argument parser.

    Args:
        parser: Parser (or argument group owner) to extend
    """
    group = parser.add_argument_group("confd settings")
    group.add_argument(
        "--client-cert",
        default=argparse.SUPPRESS,
        help="The client cert",
        metavar="PATH",
    )
    group.add_argument(
        "--client-key",
        default=argparse.SUPPRESS,
        help="The client key",
        metavar="PATH",
    )
    group.add_argument(
        "--confdir",
        default=argparse.SUPPRESS,
        help=f"confd conf directory (default: {FLAG_DEFAULTS['confdir']})",
        metavar="PATH",
    )
    group.add_argument(
        "--node",
        action="append",
        default=argparse.SUPPRESS,
        help="Etcd node, host:port or URL (can be repeated)",
        metavar="NODE",
    )
    group.add_argument(
        "--etcd-scheme",
        default=argparse.SUPPRESS,
        help=f"The etcd URI scheme, http or https (default: {FLAG_DEFAULTS['etcd-scheme']})",
        metavar="SCHEME",
    )
    group.add_argument(
        "--interval",
        type=positive_int,
        default=argparse.SUPPRESS,
        help=f"Etcd polling interval in seconds (default: {FLAG_DEFAULTS['interval']})",
        metavar="SECONDS",
    )
    group.add_argument(
        "--noop",
        action=argparse.BooleanOptionalAction,
        default=argparse.SUPPRESS,
        help="Only show pending changes, don't sync configs (--no-noop turns it off)",
    )
    group.add_argument(
        "--prefix",
        default=argparse.SUPPRESS,
        help=f"Etcd key path prefix (default: {FLAG_DEFAULTS['prefix']})",
        metavar="PREFIX",
    )
    group.add_argument(
        "--srv-domain",
        default=argparse.SUPPRESS,
        help="The domain to query for the etcd SRV record, i.e. example.com",
        metavar="DOMAIN",
    )


def flags_from_args(args: argparse.Namespace) -> dict[str, FlagValue]:
    """Build the flag registry view from parsed arguments.

    Args:
        args: Namespace produced by a parser set up with add_config_flags

    Returns:
        Mapping of every flag name to its value and was-set bit
    """
    flags = {}
    for name, default in FLAG_DEFAULTS.items():
        dest = name.replace("-", "_")
        if hasattr(args, dest):
            flags[name] = FlagValue(getattr(args, dest), was_set=True)
        else:
            flags[name] = FlagValue(copy.copy(default), was_set=False)
    return flags
