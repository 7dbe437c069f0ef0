import logging
import stat
from pathlib import Path
from typing import List, Optional

import aiofiles
import aiofiles.os

from app.storage.package_store import PackageStore

logger = logging.getLogger(__name__)


class FileSystemPackageStore(PackageStore):
    """
    Package store backed by a plain directory tree on the local disk.
    """

    async def list_entries(self, directory: Path) -> List[str]:
        return await aiofiles.os.listdir(directory)

    async def read_text(self, path: Path) -> Optional[str]:
        try:
            async with aiofiles.open(path, "r", encoding="utf-8", errors="replace") as f:
                return await f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Failed to read {path}: {e}")
            return None

    async def stat_size(self, path: Path) -> Optional[int]:
        try:
            st = await aiofiles.os.stat(path)
        except OSError:
            return None
        if not stat.S_ISREG(st.st_mode):
            return None
        return st.st_size
