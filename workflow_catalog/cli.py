#!/usr/bin/env python3
"""
Workflow Catalog CLI — Maintenance tools for the example workflows repository.

Usage:
    workflow-catalog generate workflow <action-name/workflow-id> [--starter] [--type deployments]
    workflow-catalog generate readme [--check]
    workflow-catalog release [--link]

Environment:
    OUTPUT_PATH   README file for `generate readme` (default: README.md),
                  starter-workflows checkout for `release` (default: ../starter-workflows)
"""

from __future__ import annotations

import argparse
import signal
import sys
from pathlib import Path

import pydantic
import structlog

from workflow_catalog.config import LOG_LEVELS, CatalogSettings, get_settings
from workflow_catalog.errors import CatalogError
from workflow_catalog.logging import setup_logging
from workflow_catalog.models import WorkflowCategory
from workflow_catalog.readme import check_readme, generate_readme
from workflow_catalog.release import release
from workflow_catalog.scaffold import create_workflow
from workflow_catalog.version import APP_NAME, VERSION

logger = structlog.get_logger(__name__)

EXIT_INTERRUPTED = 130


def cmd_generate_workflow(settings: CatalogSettings, args: argparse.Namespace) -> int:
    result = create_workflow(
        settings,
        args.workflow,
        starter=args.starter,
        category=WorkflowCategory(args.type),
    )

    print(f"✅ Workflow '{result.workflow_id}' created")
    print()
    print("📁 Files created:")
    if result.readme_created:
        print(f"  ├── {result.readme_path}")
    print(f"  ├── {result.workflow_path}")
    print(f"  └── {result.properties_path}")
    print()
    print("Next steps:")
    print(f"  1. Write the workflow in: {result.workflow_path}")
    print(f"  2. Fill in name and description in: {result.properties_path}")
    print(f"  3. Run: {APP_NAME} generate readme")
    return 0


def cmd_generate_readme(settings: CatalogSettings, args: argparse.Namespace) -> int:
    if args.check:
        if check_readme(settings):
            print(f"{settings.readme_output_path} is up to date")
            return 0
        print(
            f"Error: {settings.readme_output_path} has not been updated. "
            f"Run the following command to update it: {APP_NAME} generate readme",
            file=sys.stderr,
        )
        return 1

    dest = generate_readme(settings)
    print(f"README written to {dest}")
    return 0


def cmd_release(settings: CatalogSettings, args: argparse.Namespace) -> int:
    copies = release(settings, link=args.link)
    for file_copy in copies:
        print(f"successfully copied {file_copy.source} -> {file_copy.dest}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=APP_NAME, description="Workflow catalog CLI")
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {VERSION}")
    parser.add_argument("--root", help="Repository root (default: current directory)")
    parser.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS, help="Log level (default: INFO)"
    )
    parser.add_argument(
        "--json-logs", action="store_true", default=None, help="Emit JSON logs on stderr"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # generate workflow | readme
    generate_parser = subparsers.add_parser("generate", help="Generate catalog files")
    generate_sub = generate_parser.add_subparsers(dest="target", required=True)

    workflow_parser = generate_sub.add_parser("workflow", help="Scaffold a new workflow")
    workflow_parser.add_argument(
        "workflow", help="Workflow path below the workflows root, e.g. action-name/workflow-id"
    )
    workflow_parser.add_argument("--starter", action="store_true", help="Starter workflow")
    workflow_parser.add_argument(
        "--type",
        choices=[c.value for c in WorkflowCategory],
        default=WorkflowCategory.DEPLOYMENTS.value,
        help="Starter workflow type",
    )
    workflow_parser.set_defaults(handler=cmd_generate_workflow)

    readme_parser = generate_sub.add_parser("readme", help="Regenerate the index README")
    readme_parser.add_argument(
        "--check",
        action="store_true",
        help="Fail if the README on disk differs from the generated one",
    )
    readme_parser.set_defaults(handler=cmd_generate_readme)

    # release
    release_parser = subparsers.add_parser(
        "release", help="Copy starter workflows into a starter-workflows checkout"
    )
    release_parser.add_argument(
        "--link", action="store_true", help="Hard-link files instead of copying"
    )
    release_parser.set_defaults(handler=cmd_release)

    return parser


def _raise_interrupt(signum, frame):
    raise KeyboardInterrupt


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {}
    if args.root is not None:
        overrides["root_dir"] = Path(args.root)
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.json_logs is not None:
        overrides["json_logs"] = args.json_logs
    try:
        settings = get_settings().model_copy(update=overrides)
    except pydantic.ValidationError as exc:
        print(f"Error: invalid settings: {exc}", file=sys.stderr)
        return 1

    setup_logging(settings.log_level, json_output=settings.json_logs)
    signal.signal(signal.SIGTERM, _raise_interrupt)

    try:
        return args.handler(settings, args)
    except CatalogError as exc:
        logger.error("command_failed", command=args.command, **exc.to_dict())
        print(f"Error: {exc}", file=sys.stderr)
        return exc.exit_code
    except KeyboardInterrupt:
        logger.warning("interrupted", command=args.command)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
