"""
add-package: add a new Go package to the site catalog.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pkgcatalog.core import dependencies
from pkgcatalog.core.config import Settings
from pkgcatalog.core.log import configure_logging
from pkgcatalog.domain.errors import CatalogError
from pkgcatalog.domain.repo_url import github_url
from pkgcatalog.services.adder import PackageAdder

EXAMPLES = """\
Examples:
  add-package mypackage --repo https://github.com/username/mypackage
  add-package tools --import-path go.ngs.io/tools --repo https://github.com/ngs/tools
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="add-package",
        description="Add a new Go package to the site catalog.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("name", nargs="?", help="Package name; also the content file name")
    parser.add_argument("--import-path", default="", help="Custom import path (e.g., go.ngs.io/package)")
    parser.add_argument("--repo", default="", help="GitHub repository URL")
    parser.add_argument("--author", default="", help="Package author name")
    parser.add_argument("--no-readme", action="store_true", help="Do not copy the README into the page body")
    parser.add_argument("--no-validate", action="store_true", help="Skip the Hugo build check")
    parser.add_argument("--content-dir", type=Path, help="Directory holding package files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.name:
        parser.print_help()
        return 0

    try:
        settings = Settings.from_env()
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if args.content_dir is not None:
        settings = settings.model_copy(update={"content_dir": args.content_dir})
    configure_logging("DEBUG" if args.verbose else settings.log_level)
    dependencies.configure(settings)

    adder = PackageAdder(
        store=dependencies.get_store(),
        client=dependencies.get_github_client(),
        settings=settings,
        site_builder=None if args.no_validate else dependencies.get_site_builder(),
    )

    repo_url = args.repo or github_url(settings.default_owner, args.name)
    print(f"Adding package '{args.name}' from {repo_url}...")
    print("Fetching repository metadata from GitHub...")

    try:
        pkg = adder.add(
            args.name,
            import_path=args.import_path or None,
            repo_url=args.repo or None,
            author=args.author or None,
            fetch_readme=not args.no_readme,
            on_progress=lambda message: print(message, flush=True),
        )
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        dependencies.reset()

    file_path = adder.store.path_for(pkg.title)

    if adder.last_build is not None:
        if adder.last_build.ok:
            print("✓ Site builds successfully")
        else:
            print(f"Warning: Site build validation failed (exit status {adder.last_build.returncode})")
            print(f"Output: {adder.last_build.output}")

    print("\n=== Package Added Successfully ===")
    print(f"Name: {pkg.title}")
    print(f"Import Path: {pkg.import_path}")
    print(f"Repository: {pkg.repo_url}")
    if pkg.version:
        print(f"Version: {pkg.version}")
    if pkg.description:
        print(f"Description: {pkg.description}")

    print("\nNext steps:")
    print(f"1. Review the generated file: {file_path}")
    print(f'2. Commit the changes: git add {file_path} && git commit -m "Add {pkg.title} package"')
    print("3. Push to deploy: git push")
    return 0


if __name__ == "__main__":
    sys.exit(main())
