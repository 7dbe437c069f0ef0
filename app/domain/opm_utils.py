from typing import Dict, Iterable, Optional

from app.domain.models import ArtifactMatch, PackageDescriptor

METADATA_EXTENSION = ".opm"

# Priority order decides which archive is served when several coexist.
ARTIFACT_EXTENSIONS = ("tar", "zip", "tar.gz", "gz", "xz")

DYNAMIC_PLACEHOLDER = "# :opm-dynamic:"
DYNAMIC_END = "# :opm-end:"

# Directive prefix -> PackageDescriptor field
DIRECTIVES: Dict[str, str] = {
    "# :opm packagename:": "name",
    "# :opm packagever:": "version",
    "# :opm packagedisplay:": "display_name",
    "# :opm packagedesc:": "description",
}


def directive_value(line: str) -> str:
    """
    Return everything after the second colon of a directive line, trimmed.

    Values may themselves contain colons (URLs, ports, ...).
    """
    return line.split(":", 2)[2].strip()


def parse_metadata(text: str, identifier: Optional[str] = None) -> Optional[PackageDescriptor]:
    """
    Parse the text of an `.opm` file into a PackageDescriptor.

    Lines are scanned in order; the last occurrence of a directive wins and
    unknown lines are ignored. Returns None unless both name and version
    end up non-empty.
    """
    fields: Dict[str, str] = {}
    for line in text.split("\n"):
        for prefix, field in DIRECTIVES.items():
            if line.startswith(prefix):
                fields[field] = directive_value(line)
                break

    if not fields.get("name") or not fields.get("version"):
        return None
    return PackageDescriptor(identifier=identifier, **fields)


def materialize_metadata(text: str, match: ArtifactMatch) -> str:
    """
    Replace the first dynamic placeholder with the artifact's ext/filesize block.

    Text without a placeholder is returned as is.
    """
    block = "\n".join(
        [
            f"# :opm ext: {match.extension}",
            f"# :opm filesize: {match.size_bytes}",
            DYNAMIC_END,
        ]
    )
    return text.replace(DYNAMIC_PLACEHOLDER, block, 1)


def format_package_list(packages: Iterable[PackageDescriptor]) -> str:
    """`name|version|label` per package, one per line."""
    return "\n".join(f"{pkg.name}|{pkg.version}|{pkg.label}" for pkg in packages)


def is_metadata_file(name: str) -> bool:
    return name.endswith(METADATA_EXTENSION)


def metadata_identifier(name: str) -> str:
    return name[: -len(METADATA_EXTENSION)]
