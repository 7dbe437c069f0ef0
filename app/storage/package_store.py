from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional


class PackageStore(ABC):
    """
    Abstract base class for read-only access to the package store.
    """

    @abstractmethod
    async def list_entries(self, directory: Path) -> List[str]:
        """
        List entry names in a directory, in listing order.
        Raises OSError if the directory cannot be read.
        """
        pass

    @abstractmethod
    async def read_text(self, path: Path) -> Optional[str]:
        """Read a UTF-8 text file, or None if it cannot be read."""
        pass

    @abstractmethod
    async def stat_size(self, path: Path) -> Optional[int]:
        """Size in bytes of a regular file, or None if there is none."""
        pass
