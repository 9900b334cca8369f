"""
nestedtags.cli - Command-line interface.

Main entry point for the nestedtags CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from nestedtags import __version__
from nestedtags.commands import check_cmd, config_cmd, expand_cmd, rules_cmd


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="nestedtags",
        description="Expand nested tag hierarchies in graph payloads",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  nestedtags expand graph.json -o out.json   # Expand compound tags and color nodes
  nestedtags expand - < graph.json           # Read the payload from stdin
  nestedtags check out.json                  # Verify an expanded payload

Configuration:
  nestedtags config init                     # Create .nestedtags.toml
  nestedtags config show                     # View all settings
  nestedtags rules add "#Project" "#ff0000"  # Color one node by name
  nestedtags config set-color rootTags "#00aa00"  # Change one palette entry
  nestedtags config disable node-colors      # Ignore per-node rules

For detailed command help: nestedtags <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"nestedtags {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # expand command
    expand_parser = subparsers.add_parser(
        "expand",
        help="Expand compound tags and resolve node colors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input is either the host payload {"nodes": {...}} or a bare node mapping.
Compound tags that cannot be expanded are reported and left as they are.
""",
    )
    expand_parser.add_argument(
        "input",
        help="Payload JSON file, or - for stdin",
    )
    expand_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file path (default: stdout)",
        metavar="PATH",
    )
    expand_parser.add_argument(
        "--target",
        choices=["leaf", "root"],
        help="Level that receives a compound tag's connections (default: from config)",
    )
    expand_parser.add_argument(
        "--no-colors",
        action="store_true",
        help="Skip color resolution",
    )

    # check command
    check_parser = subparsers.add_parser(
        "check",
        help="Check an expanded payload for leftover compound tags and broken links",
    )
    check_parser.add_argument(
        "input",
        help="Payload JSON file, or - for stdin",
    )
    check_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output report as JSON",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="View and edit the configuration file",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")
    config_subparsers.add_parser("path", help="Show config file location")
    config_subparsers.add_parser("show", help="Show resolved configuration")
    init_parser = config_subparsers.add_parser("init", help="Create config file with defaults")
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing file",
    )
    config_subparsers.add_parser("reset-colors", help="Restore the default palette")
    set_color_parser = config_subparsers.add_parser("set-color", help="Set one palette entry")
    set_color_parser.add_argument("key", choices=config_cmd.PALETTE_KEYS, help="Palette entry")
    set_color_parser.add_argument("color", help="Color as #RRGGBB")
    for action, help_text in (
        ("enable", "Turn a color feature on"),
        ("disable", "Turn a color feature off"),
    ):
        feature_parser = config_subparsers.add_parser(action, help=help_text)
        feature_parser.add_argument(
            "feature",
            choices=sorted(config_cmd.FEATURE_KEYS),
            help="custom-colors (all coloring) or node-colors (per-node rules)",
        )

    # rules command
    rules_parser = subparsers.add_parser(
        "rules",
        help="Manage custom node color rules",
    )
    rules_subparsers = rules_parser.add_subparsers(dest="rules_action")
    rules_subparsers.add_parser("list", help="List rules")
    add_parser = rules_subparsers.add_parser("add", help="Add a rule")
    add_parser.add_argument("name", help="Node name to match")
    add_parser.add_argument("color", help="Color as #RRGGBB")
    edit_parser = rules_subparsers.add_parser("edit", help="Change a rule's name or color")
    edit_parser.add_argument("index", type=int, help="Rule number from `rules list`")
    edit_parser.add_argument("--name", help="New node name to match")
    edit_parser.add_argument("--color", help="New color as #RRGGBB")
    for action, help_text in (
        ("remove", "Delete a rule"),
        ("enable", "Enable a rule"),
        ("disable", "Disable a rule"),
    ):
        action_parser = rules_subparsers.add_parser(action, help=help_text)
        action_parser.add_argument("index", type=int, help="Rule number from `rules list`")

    # version command
    subparsers.add_parser(
        "version",
        help="Show version",
    )

    return parser


def configure_logging(args: argparse.Namespace) -> None:
    """Route library logging to stderr at the level the flags ask for."""
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install nestedtags[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)
    configure_logging(args)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        # Dispatch to command handlers
        if args.command == "expand":
            return expand_cmd.run(args)
        elif args.command == "check":
            return check_cmd.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        elif args.command == "rules":
            return rules_cmd.run(args)
        elif args.command == "version":
            print(f"nestedtags {__version__}")
            return 0
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
