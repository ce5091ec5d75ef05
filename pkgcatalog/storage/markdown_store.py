from pathlib import Path
from typing import List, Sequence
import logging

from pkgcatalog.domain.errors import NoMatchingPackages, PackageExists, PackageReadError
from pkgcatalog.domain.models import PackageRecord
from pkgcatalog.storage.frontmatter import read_package, write_package
from pkgcatalog.storage.store import PackageStore

logger = logging.getLogger(__name__)

PACKAGE_SUFFIX = ".md"
# Hugo section index; not a package.
INDEX_FILE_NAME = "_index.md"


def list_package_files(content_dir: Path) -> List[Path]:
    """
    List package files directly inside ``content_dir`` (no recursion).

    Only ``*.md`` regular files are returned and the section index is skipped.
    Results are sorted by file name.
    """
    content_dir = Path(content_dir)
    try:
        entries = sorted(content_dir.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise PackageReadError(f"failed to read content directory: {e}") from e

    packages: List[Path] = []
    for entry in entries:
        if not entry.is_file():
            continue
        name = entry.name
        if name.endswith(PACKAGE_SUFFIX) and name != INDEX_FILE_NAME:
            packages.append(entry)
    return packages


def package_name(path: Path) -> str:
    """Package name of a file: its base name without the ``.md`` suffix."""
    name = Path(path).name
    if name.endswith(PACKAGE_SUFFIX):
        return name[: -len(PACKAGE_SUFFIX)]
    return name


class MarkdownPackageStore(PackageStore):
    def __init__(self, content_dir: Path):
        self._content_dir = Path(content_dir)

    @property
    def content_dir(self) -> Path:
        return self._content_dir

    def list_files(self) -> List[Path]:
        return list_package_files(self._content_dir)

    def path_for(self, title: str) -> Path:
        return self._content_dir / f"{title}{PACKAGE_SUFFIX}"

    def exists(self, title: str) -> bool:
        return self.path_for(title).exists()

    def read(self, path: Path) -> PackageRecord:
        return read_package(path)

    def write(self, path: Path, record: PackageRecord) -> None:
        write_package(path, record)

    def create(self, record: PackageRecord) -> Path:
        path = self.path_for(record.title)
        if path.exists():
            raise PackageExists(path)
        write_package(path, record)
        logger.info(f"Created package {record.title} at {path}")
        return path

    def resolve(self, names: Sequence[str]) -> List[Path]:
        files = self.list_files()
        if not names:
            return files

        requested = set(names)
        filtered = [f for f in files if package_name(f) in requested]
        if not filtered:
            raise NoMatchingPackages(names)

        unmatched = requested - {package_name(f) for f in filtered}
        for name in sorted(unmatched):
            logger.warning(f"No package file found for {name}")
        return filtered
