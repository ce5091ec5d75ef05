from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Sequence

from pkgcatalog.domain.models import PackageRecord


class PackageStore(ABC):
    """
    Abstract base class for package record storage.
    """

    @abstractmethod
    def list_files(self) -> List[Path]:
        """List the files holding package records."""
        pass

    @abstractmethod
    def path_for(self, title: str) -> Path:
        """Get the file path a package with this title is stored at."""
        pass

    @abstractmethod
    def exists(self, title: str) -> bool:
        pass

    @abstractmethod
    def read(self, path: Path) -> PackageRecord:
        """Load a package record from its file."""
        pass

    @abstractmethod
    def write(self, path: Path, record: PackageRecord) -> None:
        """Persist a package record, replacing the file if it exists."""
        pass

    @abstractmethod
    def create(self, record: PackageRecord) -> Path:
        """
        Persist a new package record.
        Fails if a record with the same title already exists.
        """
        pass

    @abstractmethod
    def resolve(self, names: Sequence[str]) -> List[Path]:
        """
        Map requested package names to files.
        An empty request selects every package.
        """
        pass
