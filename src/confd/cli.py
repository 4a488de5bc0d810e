"""
confd.cli - Command-line interface.

Main entry point for the confd CLI tool.
"""

import argparse
import json
import sys
from typing import List, Optional

import tomlkit
from loguru import logger

from confd import __version__
from confd.config import (
    ConfdConfig,
    add_config_flags,
    find_config_file,
    flags_from_args,
    load_config,
)
from confd.errors import ConfigError


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="confd",
        description="Resolve the confd configuration and etcd endpoints",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  confd show                                   # Print the merged settings
  confd --config-file ./confd.toml show --json # Settings as JSON
  confd --node etcd1:4001 --node etcd2:4001 nodes
  confd --srv-domain example.com nodes         # Discover etcd via DNS SRV

Precedence (highest first):
  command-line flags the user set > confd.toml [confd] table > defaults

For detailed command help: confd <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"confd {__version__}",
    )
    parser.add_argument(
        "--config-file",
        help="Path to the confd config file (default: /etc/confd/confd.toml if present)",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Debug logging; show tracebacks on errors",
    )
    add_config_flags(parser)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # show command
    show_parser = subparsers.add_parser(
        "show",
        help="Print the resolved configuration",
    )
    show_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output as JSON, including derived directories",
    )

    # nodes command
    subparsers.add_parser(
        "nodes",
        help="Print the resolved etcd endpoints, one per line",
    )

    return parser


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    """Route loguru output to stderr at the requested level."""
    level = "DEBUG" if debug else "INFO" if verbose else "WARNING"
    logger.remove()
    logger.add(sys.stderr, level=level)


def render_toml(config: ConfdConfig) -> str:
    """Render the settings as a confd.toml document."""
    doc = tomlkit.document()
    table = tomlkit.table()
    for key, value in config.to_dict().items():
        table.add(key, value)
    doc.add("confd", table)
    return tomlkit.dumps(doc)


def show_command(args: argparse.Namespace, config: ConfdConfig) -> int:
    """Handle show command."""
    if args.json:
        data = config.to_dict()
        data["config_dir"] = str(config.config_dir)
        data["template_dir"] = str(config.template_dir)
        print(json.dumps(data, indent=2))
    else:
        print(render_toml(config), end="")
    return 0


def nodes_command(args: argparse.Namespace, config: ConfdConfig) -> int:
    """Handle nodes command."""
    for node in config.etcd_nodes:
        print(node)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install confd[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    configure_logging(verbose=args.verbose, debug=args.debug)

    try:
        config_file = find_config_file(args.config_file)
        config = load_config(config_file, flags_from_args(args))

        if args.command == "show":
            return show_command(args, config)
        elif args.command == "nodes":
            return nodes_command(args, config)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except ConfigError as e:
        if args.debug:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
