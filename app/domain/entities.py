from pathlib import Path
from typing import List, Optional
import logging

from app.storage.package_store import PackageStore
from app.domain.models import (
    ArtifactMatch,
    CatalogScan,
    PackageDescriptor,
    RepositoryConfig,
)
from app.domain.opm_utils import (
    ARTIFACT_EXTENSIONS,
    METADATA_EXTENSION,
    is_metadata_file,
    metadata_identifier,
    parse_metadata,
)

logger = logging.getLogger(__name__)

# Scripts served from the repository root.
INSTALLER_SCRIPTS = ("opminstall.sh", "opm.sh")


class Repository:
    """
    Read-only view over an OPM package store.

    Nothing is cached: every call goes back to the store, so files added or
    removed on disk are picked up by the next request.
    """

    def __init__(self, store: PackageStore, config: RepositoryConfig):
        self.store = store
        self.config = config

    async def parse_one(self, path: Path) -> Optional[PackageDescriptor]:
        text = await self.store.read_text(path)
        if text is None:
            return None
        name = path.name
        identifier = metadata_identifier(name) if is_metadata_file(name) else None
        return parse_metadata(text, identifier=identifier)

    async def scan_catalog(self, directory: Optional[Path] = None) -> CatalogScan:
        """
        Parse every `.opm` file in the directory, in listing order.

        Invalid or unreadable files are skipped. An unreadable directory
        gives an empty scan flagged as unavailable.
        """
        directory = directory or self.config.packages_dir
        try:
            entries = await self.store.list_entries(directory)
        except OSError as e:
            logger.warning(f"Package store {directory} is not readable: {e}")
            return CatalogScan(packages=[], store_available=False)

        packages: List[PackageDescriptor] = []
        for entry in entries:
            if not is_metadata_file(entry):
                continue
            descriptor = await self.parse_one(directory / entry)
            if descriptor is None:
                logger.debug(f"Skipping invalid metadata file {entry}")
                continue
            packages.append(descriptor)

        return CatalogScan(packages=packages)

    async def build_catalog(self, directory: Optional[Path] = None) -> List[PackageDescriptor]:
        scan = await self.scan_catalog(directory)
        return scan.packages

    async def resolve_artifact(
        self, identifier: str, directory: Optional[Path] = None
    ) -> Optional[ArtifactMatch]:
        """
        Find the archive for a package by probing candidate extensions in
        priority order. The first regular file found wins.
        """
        directory = directory or self.config.packagedata_dir
        for ext in ARTIFACT_EXTENSIONS:
            path = directory / f"{identifier}.{ext}"
            size = await self.store.stat_size(path)
            if size is None:
                continue
            return ArtifactMatch(extension=ext, size_bytes=size, path=path)

        logger.debug(f"No archive found for {identifier} in {directory}")
        return None

    async def load_metadata(self, identifier: str) -> Optional[str]:
        """Raw text of `<identifier>.opm`, or None if it is missing."""
        path = self.config.packages_dir / f"{identifier}{METADATA_EXTENSION}"
        return await self.store.read_text(path)

    async def get_download_path(self, relative_path: str) -> Optional[Path]:
        """
        Path of a file under the packagedata directory (subfolders included),
        or None if it is missing or resolves outside that directory.
        """
        data_dir = self.config.packagedata_dir
        path = data_dir / relative_path
        if not path.resolve().is_relative_to(data_dir.resolve()):
            return None
        if await self.store.stat_size(path) is None:
            return None
        return path

    async def read_script(self, name: str) -> Optional[str]:
        if name not in INSTALLER_SCRIPTS:
            return None
        return await self.store.read_text(self.config.repo_root / name)
