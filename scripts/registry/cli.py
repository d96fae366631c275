"""Command-line interface for the component registry."""

from __future__ import annotations

import argparse
import json
import sys
from enum import IntEnum
from pathlib import Path
from typing import Optional

import yaml

from scripts.registry.build import run_build
from scripts.registry.config import (
    CATEGORIES,
    DEFAULT_CONFIG_PATH,
    ConfigError,
    RegistryConfig,
    config_to_dict,
    get_default_config,
    load_config,
)
from scripts.registry.log import configure_logging
from scripts.registry.query import describe_entry, get_status, load_entry, load_index, query_by_type


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    CONFIG_ERROR = 1
    FILE_SYSTEM_ERROR = 2
    PARTIAL_SUCCESS = 3


def _get_config(config_path: Optional[str]) -> RegistryConfig:
    """Load config from an explicit path, ./registry.yaml, or defaults."""
    if config_path:
        return load_config(config_path)
    return load_config(Path.cwd() / DEFAULT_CONFIG_PATH)


def cmd_build(args: argparse.Namespace) -> int:
    """Build registry units and the index."""
    try:
        config = _get_config(args.config)
    except ConfigError as e:
        print(json.dumps(e.to_json()), file=sys.stderr)
        return ExitCode.CONFIG_ERROR

    configure_logging(verbose=args.verbose)

    print("Building component registry...")
    report = run_build(config=config, root=Path.cwd())
    for line in report.summary_lines():
        print(line)

    if report.ok:
        return ExitCode.SUCCESS
    if report.succeeded == 0 and report.errors:
        return ExitCode.FILE_SYSTEM_ERROR
    return ExitCode.PARTIAL_SUCCESS


def cmd_status(args: argparse.Namespace) -> int:
    """Show registry status."""
    try:
        config = _get_config(args.config)
    except ConfigError as e:
        print(json.dumps(e.to_json()), file=sys.stderr)
        return ExitCode.CONFIG_ERROR

    status = get_status(config, Path.cwd())

    print("Registry Status")
    print("=" * 40)

    if status["index_found"]:
        stats = status["stats"]
        print(f"\nIndex: {status['index_path']}")
        print(f"  Generated: {status['generated']}")
        print(f"  Components: {stats.get('totalComponents', 0)}")
        for category in CATEGORIES:
            print(f"    {category}: {stats.get(f'{category}Components', 0)}")
        print(f"  With variants: {stats.get('componentsWithVariants', 0)}")
        print(f"  With sizes: {stats.get('componentsWithSizes', 0)}")
    else:
        print("\nIndex: NOT FOUND")
        print(f"  Expected at: {status['index_path']}")

    print(f"\nPersisted units: {len(status['units'])}")
    if status["unindexed_units"]:
        print(f"  Not in index: {', '.join(status['unindexed_units'])}")

    if not status["index_found"] and not status["units"]:
        print("\nNo registry found. Run 'build' to create it.")

    return ExitCode.SUCCESS


def cmd_show(args: argparse.Namespace) -> int:
    """Show one registry unit."""
    try:
        config = _get_config(args.config)
    except ConfigError as e:
        print(json.dumps(e.to_json()), file=sys.stderr)
        return ExitCode.CONFIG_ERROR

    entry = load_entry(config.components_dir(Path.cwd()), args.name)
    if entry is None:
        print(f"Component not found: {args.name}")
        return ExitCode.FILE_SYSTEM_ERROR

    if args.content:
        for registry_file in entry["files"]:
            sys.stdout.write(registry_file.get("content", ""))
    else:
        print(json.dumps(describe_entry(entry), indent=2))
    return ExitCode.SUCCESS


def cmd_list(args: argparse.Namespace) -> int:
    """List indexed components."""
    try:
        config = _get_config(args.config)
    except ConfigError as e:
        print(json.dumps(e.to_json()), file=sys.stderr)
        return ExitCode.CONFIG_ERROR

    index = load_index(config.index_path(Path.cwd()))
    if index is None:
        print("Registry index not found. Run 'build' first.")
        return ExitCode.FILE_SYSTEM_ERROR

    for component in query_by_type(index, args.type):
        print(f"{component['name']:<24} {component['type']:<20} {component['description']}")
    return ExitCode.SUCCESS


def cmd_init(_args: argparse.Namespace) -> int:
    """Write a default registry.yaml in the current project."""
    config_path = Path.cwd() / DEFAULT_CONFIG_PATH
    if config_path.exists():
        print(f"Config already exists: {config_path}")
        return ExitCode.SUCCESS

    header = "# Component registry configuration\n\n"
    body = yaml.safe_dump(config_to_dict(get_default_config()), sort_keys=False)
    config_path.write_text(header + body, encoding="utf-8")
    print(f"Created {config_path} with defaults")
    return ExitCode.SUCCESS


def _add_config_arg(parser: argparse.ArgumentParser, default: Optional[str] = None) -> None:
    """Add --config argument to a parser."""
    parser.add_argument(
        "--config",
        "-c",
        default=default,
        help=f"Path to config file (default: {DEFAULT_CONFIG_PATH})",
    )


def _add_verbose_arg(parser: argparse.ArgumentParser, default: object = False) -> None:
    """Add --verbose argument to a parser."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=default,
        help="Log per-component detail",
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point. Runs a build when no command is given."""
    parser = argparse.ArgumentParser(
        prog="component-registry",
        description="Build a distributable registry from UI component sources",
    )
    _add_config_arg(parser)
    _add_verbose_arg(parser)

    subparsers = parser.add_subparsers(dest="command")

    # Subcommand copies keep values given before the command unless repeated after it
    build_parser = subparsers.add_parser("build", help="Build registry units and index")
    _add_config_arg(build_parser, default=argparse.SUPPRESS)
    _add_verbose_arg(build_parser, default=argparse.SUPPRESS)

    status_parser = subparsers.add_parser("status", help="Show registry status")
    _add_config_arg(status_parser, default=argparse.SUPPRESS)

    show_parser = subparsers.add_parser("show", help="Show one registry unit")
    _add_config_arg(show_parser, default=argparse.SUPPRESS)
    show_parser.add_argument("name", help="Component name")
    show_parser.add_argument("--content", action="store_true", help="Print embedded source")

    list_parser = subparsers.add_parser("list", help="List indexed components")
    _add_config_arg(list_parser, default=argparse.SUPPRESS)
    list_parser.add_argument("--type", choices=CATEGORIES, help="Only list one category")

    subparsers.add_parser("init", help="Write a default registry.yaml")

    args = parser.parse_args(argv)

    commands = {
        None: cmd_build,
        "build": cmd_build,
        "status": cmd_status,
        "show": cmd_show,
        "list": cmd_list,
        "init": cmd_init,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
