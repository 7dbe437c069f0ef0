"""
Pydantic models for the OPM package repository.

This module defines the data models used throughout the application:
- Repository configuration
- Package descriptors parsed from `.opm` metadata files
- Resolved package artifacts and catalog scan results

All models use Pydantic for validation, serialization, and type safety.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# Shown in listings when a package carries no `packagedesc` directive.
DEFAULT_DESCRIPTION = "No description available"


# ---------------------------------------------------------------------------
# Repository Configuration Models
# ---------------------------------------------------------------------------


class RepositoryConfig(BaseModel):
    """
    Top-level configuration for the OPM repository.

    The repository root holds the package store:

        <repo_root>/packages/<identifier>.opm      metadata files
        <repo_root>/packagedata/<identifier>.<ext> archive blobs
        <repo_root>/opminstall.sh, opm.sh          installer scripts

    Optional overrides are read from: <repo_root>/repository.json
    """

    repo_root: Path = Field(
        description="Directory containing the packages/ and packagedata/ folders.",
    )
    title: str = Field(
        default="Odd Package Manager Repository",
        description="Heading shown on the landing page.",
    )
    tagline: str = Field(
        default="A lightweight package manager for odd systems",
        description="Sub-heading shown on the landing page.",
    )
    notice: str = Field(
        default="This package manager is completely rootless",
        description="Small print shown under the tagline.",
    )
    install_command: str = Field(
        default="curl -sSL opm.oddbyte.dev/opminstall.sh > opminstall.sh && sh opminstall.sh",
        description="Shell one-liner advertised on the landing page.",
    )
    packagedata_max_age: int = Field(
        default=86400,
        ge=0,
        description="Cache-Control max-age (seconds) for archive downloads.",
    )

    @property
    def packages_dir(self) -> Path:
        return self.repo_root / "packages"

    @property
    def packagedata_dir(self) -> Path:
        return self.repo_root / "packagedata"


# ---------------------------------------------------------------------------
# Package Models
# ---------------------------------------------------------------------------


class PackageDescriptor(BaseModel):
    """
    One package's metadata, as parsed from a single `.opm` file.

    Only descriptors with a non-empty name and version are ever built;
    everything else is dropped by the parser.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Package name (packagename directive).")
    version: str = Field(min_length=1, description="Package version (packagever directive).")
    display_name: Optional[str] = Field(
        default=None,
        description="Human-friendly name (packagedisplay directive).",
    )
    description: Optional[str] = Field(
        default=None,
        description="One-line description (packagedesc directive).",
    )
    identifier: Optional[str] = Field(
        default=None,
        description="Base name of the metadata file this descriptor was read from.",
    )

    @property
    def label(self) -> str:
        return self.display_name or self.name

    @property
    def summary(self) -> str:
        return self.description or DEFAULT_DESCRIPTION


class ArtifactMatch(BaseModel):
    """
    The archive file resolved for a package identifier.
    """

    model_config = ConfigDict(frozen=True)

    extension: str = Field(description="Matched candidate extension, e.g. 'tar.gz'.")
    size_bytes: int = Field(ge=0, description="Size of the archive in bytes.")
    path: Path = Field(description="Location of the archive on disk.")


class CatalogScan(BaseModel):
    """
    Result of scanning the metadata directory.

    `store_available` is False when the directory could not be listed, so
    callers can tell an unreadable store apart from an empty one.
    """

    packages: List[PackageDescriptor] = Field(default_factory=list)
    store_available: bool = True
