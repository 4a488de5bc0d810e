"""
confd.config.loader - Layered configuration loading.

Settings are applied in increasing priority:

1. Built-in defaults (confd.config.defaults)
2. The [confd] table of the TOML config file
3. Command-line flags the user explicitly set

The merged scheme is then validated and the etcd node list resolved.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import tomlkit
from loguru import logger
from tomlkit.exceptions import TOMLKitError

from confd.config.defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_FILE
from confd.config.flags import FLAG_FIELDS, FlagValue
from confd.config.settings import ConfdConfig
from confd.errors import FileDecodeError, InvalidSchemeError
from confd.nodes import is_valid_scheme, resolve_nodes
from confd.srv import SRVLookup

CONFIG_TABLE = "confd"

STRING_KEYS = frozenset(
    ["client_cert", "client_key", "confdir", "etcd_scheme", "prefix", "srv_domain"]
)


def find_config_file(explicit: str | Path | None = None) -> Path | None:
    """Pick the config file to load.

    Args:
        explicit: Path given on the command line, if any

    Returns:
        The explicit path, else /etc/confd/confd.toml when it exists, else None
    """
    if explicit:
        return Path(explicit)
    default = Path(DEFAULT_CONFIG_FILE)
    if default.is_file():
        return default
    return None


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML text into plain Python containers.

    Raises:
        tomlkit.exceptions.ParseError: If the content is not valid TOML
    """
    return tomlkit.parse(content).unwrap()


def _check_value(path: Path, key: str, value: Any) -> None:
    if key in STRING_KEYS:
        ok = isinstance(value, str)
        expected = "a string"
    elif key == "etcd_nodes":
        ok = isinstance(value, list) and all(isinstance(v, str) for v in value)
        expected = "an array of strings"
    elif key == "interval":
        ok = isinstance(value, int) and not isinstance(value, bool) and value >= 1
        expected = "a positive integer"
    else:
        ok = isinstance(value, bool)
        expected = "a boolean"
    if not ok:
        raise FileDecodeError(path, f"{CONFIG_TABLE}.{key} must be {expected}, got {value!r}")


def read_config_file(path: str | Path) -> dict[str, Any]:
    """Decode the [confd] table of a config file.

    Table and key names match case-insensitively; unknown keys are ignored.

    Args:
        path: Path to the TOML file

    Returns:
        Recognized settings keyed by their lower-case confd.toml names

    Raises:
        FileDecodeError: If the file is unreadable, malformed, or a value
            has the wrong type
    """
    path = Path(path)
    try:
        data = parse_toml(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, TOMLKitError) as e:
        raise FileDecodeError(path, str(e)) from e

    table = None
    for name, value in data.items():
        if name.lower() == CONFIG_TABLE:
            table = value
    if table is None:
        return {}
    if not isinstance(table, dict):
        raise FileDecodeError(path, f"{CONFIG_TABLE} must be a table, got {table!r}")

    values = {}
    for key, value in table.items():
        name = key.lower()
        if name not in DEFAULT_CONFIG:
            continue
        _check_value(path, name, value)
        values[name] = value
    return values


def apply_flags(config: ConfdConfig, flags: dict[str, FlagValue]) -> ConfdConfig:
    """Copy explicitly set flags onto the config.

    Flags whose was_set bit is false are skipped even when their value
    differs from the current setting.
    """
    for name, flag in flags.items():
        attr = FLAG_FIELDS.get(name)
        if attr is None or not flag.was_set:
            continue
        setattr(config, attr, copy.copy(flag.value))
    return config


def load_config(
    path: str | Path | None = None,
    flags: dict[str, FlagValue] | None = None,
    srv_lookup: SRVLookup | None = None,
) -> ConfdConfig:
    """
    Load the confd configuration.

    Starts from the defaults, overrides them with the config file, then
    with the flags set on the command line, and finally resolves the
    etcd endpoints.

    Args:
        path: Config file to read; empty or None skips the file
        flags: Flag registry view, see confd.config.flags.flags_from_args
        srv_lookup: SRV discovery function (defaults to confd.srv.lookup_srv)

    Returns:
        Fully merged and resolved ConfdConfig

    Raises:
        FileDecodeError: If the config file cannot be decoded
        InvalidSchemeError: If the etcd scheme is not http or https
        EndpointResolutionError: If the endpoint list cannot be built
    """
    if not path:
        logger.info("Skipping confd config file.")
        config = ConfdConfig.from_dict({})
    else:
        logger.debug(f"Loading {path}")
        config = ConfdConfig.from_dict(read_config_file(path))

    apply_flags(config, flags or {})

    if not is_valid_scheme(config.scheme):
        raise InvalidSchemeError(config.scheme)

    resolve_nodes(config, srv_lookup)
    return config
