"""Main CLI entry point for sfpackage.

Usage::

    sfpackage master featureBranch ./deploy/

writes ``./deploy/featureBranch/unpackaged/package.xml`` and copies each
changed file next to it. When deletes occurred it also writes
``./deploy/featureBranch/destructive/destructiveChanges.xml``.
"""

import argparse
import enum
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__
from .classify import ClassificationResult, DiffClassifier
from .config import PackageConfig
from .errors import FatalInputError, SfPackageError
from .logging_utils import configure_logging
from .manifest import DEFAULT_NESTED_PROPERTIES, Manifest
from .serialize import ManifestSerializer
from .settings import get_default_source_root
from .staging import build_package_dir, copy_files
from .vcs import ChangeRecord, GitRepository

logger = logging.getLogger(__name__)


class ExitCode(enum.IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    FAILURE = 1
    INVALID_ARGUMENTS = 2
    UNPROCESSABLE_PATH = 3


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="sfpackage",
        description="Build package.xml and destructiveChanges.xml from a git diff",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sfpackage master featureBranch ./deploy/
  sfpackage master featureBranch --dryrun
  sfpackage v1.0 v2.0 ./deploy/ --pversion 48 --src src --destructive
        """,
    )

    parser.add_argument("compare", help="Existing revision to compare against")
    parser.add_argument("branch", help="Revision holding the new changes")
    parser.add_argument(
        "target",
        nargs="?",
        help="Directory the package is built in (required unless --dryrun)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-d",
        "--dryrun",
        action="store_true",
        help="Only print the package.xml and destructiveChanges.xml that would be generated",
    )
    parser.add_argument(
        "-p",
        "--pversion",
        type=int,
        help="Salesforce API version of the package.xml",
    )
    parser.add_argument(
        "-x",
        "--destructive",
        action="store_true",
        help="Only include destructive (deleted) changes",
    )
    parser.add_argument(
        "-s",
        "--src",
        default=get_default_source_root(),
        help="Root source directory (default: %(default)s)",
    )
    parser.add_argument(
        "--repo",
        default=".",
        help="Path of the git working tree (default: current directory)",
    )
    parser.add_argument(
        "--nested",
        action="append",
        metavar="FOLDER",
        help="Object sub-folder listed as its own type, repeat for more "
        f"(default: {' '.join(sorted(DEFAULT_NESTED_PROPERTIES))})",
    )
    parser.add_argument(
        "--json",
        help="Also write a JSON summary of the run to this file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["critical", "error", "warning", "info", "debug"],
        help="Log level (default: LOG_LEVEL or info)",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command line arguments."""
    if not args.branch or not args.compare:
        raise ValueError("branch and target branch are both required")
    if not args.dryrun and not args.target:
        raise ValueError("target required when not dry-run")
    if args.pversion is not None and args.pversion <= 0:
        raise ValueError("--pversion must be positive")
    if not args.src.strip("/"):
        raise ValueError("--src cannot be empty")


def create_config(args: argparse.Namespace) -> PackageConfig:
    """Create configuration from command line arguments."""
    nested = frozenset(args.nested) if args.nested else DEFAULT_NESTED_PROPERTIES
    return PackageConfig(
        compare=args.compare,
        branch=args.branch,
        target=args.target,
        source_root=args.src,
        repo_path=args.repo,
        nested_properties=nested,
        api_version=args.pversion,
        dry_run=args.dryrun,
        destructive_only=args.destructive,
        json_output_path=args.json,
    )


def classify_changes(config: PackageConfig, records: List[ChangeRecord]) -> ClassificationResult:
    """Run the classifier with the configured source root and mode."""
    classifier = DiffClassifier(config.nested_properties)
    return classifier.classify(records, config.source_root, config.destructive_only)


def print_dry_run(
    config: PackageConfig, package_xml: str, destructive_xml: str
) -> None:
    """Print the manifests that would be written."""
    if not config.destructive_only:
        print("\npackage.xml\n")
        print(package_xml)
    print("\ndestructiveChanges.xml\n")
    print(destructive_xml)


def write_package(
    config: PackageConfig,
    result: ClassificationResult,
    package_xml: str,
    destructive_xml: str,
    empty_package_xml: str,
) -> Dict[str, str]:
    """Build the package directories and stage changed files."""
    build_dirs: Dict[str, str] = {}
    logger.info("Building in directory %s", config.target)

    if not config.destructive_only:
        build_dir = build_package_dir(config.target, config.branch, package_xml)
        copy_files(config.repo_path, build_dir, result.staged_paths)
        logger.info("Successfully created package.xml and files in %s", build_dir)
        build_dirs["unpackaged"] = str(build_dir)

    if result.deletes_occurred:
        build_dir = build_package_dir(
            config.target,
            config.branch,
            destructive_xml,
            destructive=True,
            empty_package_xml=empty_package_xml,
        )
        logger.info("Successfully created destructiveChanges.xml in %s", build_dir)
        build_dirs["destructive"] = str(build_dir)

    return build_dirs


def collect_summary(
    config: PackageConfig,
    result: ClassificationResult,
    serializer: ManifestSerializer,
    build_dirs: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Collect a JSON-ready summary of the run."""
    return {
        "provenance": config.to_provenance_dict(),
        "package": serializer.to_dict(serializer.serialize(result.added)),
        "destructive": serializer.to_dict(serializer.serialize(result.deleted)),
        "deletes_occurred": result.deletes_occurred,
        "staged_paths": list(result.staged_paths),
        "warnings": [warning.to_dict() for warning in result.warnings],
        "conflicts": [
            {"type": key.type_name, "member": key.member_id} for key in result.conflicts
        ],
        "build_dirs": build_dirs or {},
    }


def process_package(config: PackageConfig, records: List[ChangeRecord]) -> Dict[str, Any]:
    """Classify records, then print or write the package. Returns the summary."""
    result = classify_changes(config, records)

    serializer = ManifestSerializer(config.resolved_api_version)
    package_xml = serializer.render(result.added)
    destructive_xml = serializer.render(result.deleted)

    build_dirs: Dict[str, str] = {}
    if config.dry_run:
        print_dry_run(config, package_xml, destructive_xml)
    else:
        empty_package_xml = serializer.render(Manifest())
        build_dirs = write_package(
            config, result, package_xml, destructive_xml, empty_package_xml
        )

    return collect_summary(config, result, serializer, build_dirs)


def output_result(result: dict, output_path: Optional[str]) -> None:
    """Write a JSON envelope to a file, if one was requested."""
    if not output_path:
        return
    json_str = json.dumps(result, ensure_ascii=False, sort_keys=True, indent=2)
    Path(output_path).write_text(json_str, encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_intermixed_args(argv)
    configure_logging(args.log_level)
    serializer = ManifestSerializer()

    try:
        validate_args(args)
        config = create_config(args)
    except ValueError as e:
        logger.error(str(e))
        parser.print_help(sys.stderr)
        return ExitCode.INVALID_ARGUMENTS

    logger.info("Running sfpackage")
    if config.destructive_only:
        logger.info("* Only including destructive changes.")

    try:
        records = GitRepository(config).get_change_records()
        payload = process_package(config, records)
        output_result(serializer.create_success_envelope(payload), args.json)
        return ExitCode.SUCCESS

    except FatalInputError as e:
        logger.error("%s, exiting", e.message)
        output_result(serializer.create_error_envelope(e.code, e.message, e.details), args.json)
        return ExitCode.UNPROCESSABLE_PATH

    except SfPackageError as e:
        logger.error(e.message)
        output_result(serializer.create_error_envelope(e.code, e.message, e.details), args.json)
        return ExitCode.FAILURE

    except Exception as e:
        logger.exception("Unexpected error")
        result = serializer.create_error_envelope(
            "INTERNAL_ERROR",
            f"Internal error: {str(e)}",
            {"type": type(e).__name__},
        )
        output_result(result, args.json)
        return ExitCode.FAILURE


if __name__ == "__main__":
    sys.exit(main())
