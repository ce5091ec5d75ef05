"""
update-packages: refresh package metadata from the GitHub API.

If no package names are given, every package in the content directory is
updated.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pkgcatalog.core import dependencies
from pkgcatalog.core.config import Settings
from pkgcatalog.core.log import configure_logging
from pkgcatalog.domain.errors import CatalogError, PackagesFailed
from pkgcatalog.domain.models import BatchSummary, UpdateResult, UpdateStatus
from pkgcatalog.services.updater import PackageUpdater

EXAMPLES = """\
Examples:
  update-packages                    # Update all packages
  update-packages freecal servedir   # Update specific packages
  update-packages --dry-run          # Preview changes without updating
  update-packages --update-missing   # Update timestamps for missing repos
"""

MARKERS = {
    UpdateStatus.UPDATED: "✓",
    UpdateStatus.SKIPPED: "○",
    UpdateStatus.ERROR: "✗",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="update-packages",
        description="Update Go packages metadata from GitHub API",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("packages", nargs="*", metavar="package-name", help="Packages to update (default: all)")
    parser.add_argument("--dry-run", action="store_true", help="Show what would be updated without making changes")
    parser.add_argument("--update-author", action="store_true", help="Also update author information from GitHub")
    parser.add_argument(
        "--update-missing",
        action="store_true",
        help="Update timestamps to current date for repositories that return 404",
    )
    parser.add_argument("--content-dir", type=Path, help="Directory holding package files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def format_result(result: UpdateResult, update_missing: bool = False) -> str:
    if result.status == UpdateStatus.MISSING:
        marker = "⚠" if update_missing else "○"
    else:
        marker = MARKERS[result.status]
    return f"{marker} {result.name} - {result.message}"


def print_build(summary: BatchSummary) -> None:
    if summary.build is None:
        return
    print("\nValidating site build...")
    if summary.build.ok:
        print("✓ Site builds successfully")
    else:
        print(f"Warning: Site build validation failed (exit status {summary.build.returncode})")
        print(f"Output: {summary.build.output}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if args.content_dir is not None:
        settings = settings.model_copy(update={"content_dir": args.content_dir})
    configure_logging("DEBUG" if args.verbose else settings.log_level)
    dependencies.configure(settings)

    updater = PackageUpdater(
        store=dependencies.get_store(),
        client=dependencies.get_github_client(),
        site_builder=dependencies.get_site_builder(),
        dry_run=args.dry_run,
        update_author=args.update_author,
        update_missing=args.update_missing,
    )

    print("Updating packages from GitHub...")
    if args.dry_run:
        print("(DRY RUN - no changes will be made)")
    print()

    def report(result: UpdateResult) -> None:
        print(format_result(result, args.update_missing), flush=True)

    try:
        summary = updater.update_packages(args.packages, on_result=report)
    except PackagesFailed as e:
        print_build(e.summary)
        print(f"\n{e.summary.summary_line()}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        dependencies.reset()

    print_build(summary)
    print(f"\n{summary.summary_line()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
