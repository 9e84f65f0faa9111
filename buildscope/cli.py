# SPDX-License-Identifier: MIT
"""Command-line interface for buildscope."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from buildscope.configure.config import Configure
from buildscope.core.configurations import BUILD_TYPE
from buildscope.core.errors import BuildScopeError
from buildscope.debug import dump_variables
from buildscope.tools.git import git_branch, git_sha1

# Set up logging
logger = logging.getLogger("buildscope")


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt)


def parse_variables(args: list[str]) -> tuple[dict[str, str], list[str]]:
    """Parse KEY=value arguments from a list.

    Args:
        args: List of arguments.

    Returns:
        Tuple of (variables dict, remaining args).
    """
    variables: dict[str, str] = {}
    remaining: list[str] = []

    for arg in args:
        if "=" in arg and not arg.startswith("-"):
            key, _, value = arg.partition("=")
            if key:  # Valid KEY=value
                variables[key] = value
            else:
                remaining.append(arg)
        else:
            remaining.append(arg)

    return variables, remaining


def load_configure(args: argparse.Namespace) -> Configure:
    """Create the Configure context described by the common arguments."""
    config = Configure(
        build_dir=Path(args.build_dir),
        multi_config=args.multi_config,
    )
    variables, _ = parse_variables(getattr(args, "extra", []))
    for name, value in variables.items():
        config.set_variable(name, value)
    return config


def cmd_configs(args: argparse.Namespace) -> int:
    """List, change or validate the build configurations."""
    setup_logging(args.verbose, args.debug)

    try:
        config = load_configure(args)
        configs = config.configurations
        action = args.action

        if action == "list":
            selected = (configs.selected or "").upper()
            for name in configs.get():
                marker = "*" if name.upper() == selected else " "
                print(f"{marker} {name}")
        elif action == "add":
            for name in args.names:
                configs.add(name)
        elif action == "set":
            configs.set(args.names)
        elif action == "reset":
            configs.reset()
        elif action == "default":
            configs.set_default(args.name, populate_defaults=args.populate)
        elif action == "select":
            config.set(BUILD_TYPE.name, args.name, doc="The configuration to be built")
        elif action == "validate":
            configs.ensure_valid()
            logger.info("Build configuration %s is valid", configs.selected)

        # get() may have populated the defaults, so always save
        config.save()
    except BuildScopeError as e:
        logger.error("%s", e)
        return 1
    return 0


def cmd_dump(args: argparse.Namespace) -> int:
    """Print variables in the cache, optionally filtered."""
    setup_logging(args.verbose, args.debug)

    try:
        config = load_configure(args)
        for name, value in dump_variables(config, args.matching):
            print(f"{name} = '{value}'")
    except BuildScopeError as e:
        logger.error("%s", e)
        return 1
    return 0


def cmd_git(args: argparse.Namespace) -> int:
    """Print the commit hash or branch of the current directory."""
    setup_logging(args.verbose, args.debug)

    try:
        config = load_configure(args)
        if args.action == "sha1":
            print(git_sha1(config, short=args.short))
        else:
            print(git_branch(config))
        config.save()
    except BuildScopeError as e:
        logger.error("%s", e)
        return 1
    return 0


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser."""
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")
    parser.add_argument(
        "-B",
        "--build-dir",
        default=os.environ.get("BUILDSCOPE_BUILD_DIR", "build"),
        help="Build directory holding the cache (default: build)",
    )
    parser.add_argument(
        "--multi-config",
        action="store_true",
        help="Treat the generator as multi-config",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the buildscope CLI."""
    parser = argparse.ArgumentParser(
        prog="buildscope",
        description="Inspect and edit buildscope configure caches.",
        epilog="Run 'buildscope <command> --help' for command-specific help.",
    )
    from buildscope import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # buildscope configs
    configs_parser = subparsers.add_parser(
        "configs", help="Manage the build configurations"
    )
    configs_sub = configs_parser.add_subparsers(dest="action", required=True)

    list_parser = configs_sub.add_parser("list", help="List valid configurations")
    add_common_args(list_parser)

    add_parser = configs_sub.add_parser("add", help="Append configurations")
    add_common_args(add_parser)
    add_parser.add_argument("names", nargs="+", help="Configurations to add")

    set_parser = configs_sub.add_parser("set", help="Replace all configurations")
    add_common_args(set_parser)
    set_parser.add_argument("names", nargs="*", help="New configurations")

    reset_parser = configs_sub.add_parser("reset", help="Restore the defaults")
    add_common_args(reset_parser)

    default_parser = configs_sub.add_parser(
        "default", help="Select a configuration unless one is selected"
    )
    add_common_args(default_parser)
    default_parser.add_argument("name", help="Configuration to select")
    default_parser.add_argument(
        "--populate",
        action="store_true",
        help="Also reset the valid configurations to the defaults",
    )

    select_parser = configs_sub.add_parser(
        "select", help="Select a configuration, replacing any selection"
    )
    add_common_args(select_parser)
    select_parser.add_argument("name", help="Configuration to select")

    validate_parser = configs_sub.add_parser(
        "validate", help="Check the selected configuration is valid"
    )
    add_common_args(validate_parser)

    configs_parser.set_defaults(func=cmd_configs)

    # buildscope dump
    dump_parser = subparsers.add_parser("dump", help="Print cached variables")
    add_common_args(dump_parser)
    dump_parser.add_argument(
        "-m", "--matching", metavar="REGEX", help="Only variables matching REGEX"
    )
    dump_parser.add_argument(
        "extra",
        nargs="*",
        help="Variables to set first (KEY=value)",
    )
    dump_parser.set_defaults(func=cmd_dump)

    # buildscope git
    git_parser = subparsers.add_parser("git", help="Show repository information")
    git_sub = git_parser.add_subparsers(dest="action", required=True)
    sha1_parser = git_sub.add_parser("sha1", help="Print the HEAD commit hash")
    add_common_args(sha1_parser)
    sha1_parser.add_argument(
        "--short", action="store_true", help="Abbreviated hash"
    )
    branch_parser = git_sub.add_parser("branch", help="Print the current branch")
    add_common_args(branch_parser)
    git_parser.set_defaults(func=cmd_git)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    # Run the specified command
    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
