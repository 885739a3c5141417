"""
Package inventory read from a JSON file under the image root folder.
"""
import json
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

from buildprov.kernel.artifacts import ArtifactKind
from buildprov.kernel.errors import CatalogError


class CatalogEntry(BaseModel):
    name: str
    version: str
    url: str
    file_name: str
    arguments: List[str] = Field(default_factory=list)
    kind: Optional[ArtifactKind] = None


class Catalog(BaseModel):
    packages: List[CatalogEntry] = Field(default_factory=list)


def _version_key(version: str) -> tuple:
    # Numeric parts sort numerically and above non-numeric ones ("1.10" > "1.9")
    key = []
    for part in version.split("."):
        key.append((1, int(part), "") if part.isdigit() else (0, 0, part))
    return tuple(key)


class FileSystemCatalog:
    """
    Resolves package names (and optionally versions) to download details.
    """
    def __init__(self, catalog_path: Path):
        self.catalog_path = Path(catalog_path)
        self._catalog = self._load_catalog(self.catalog_path)

    def _load_catalog(self, catalog_path: Path) -> Catalog:
        if not catalog_path.exists():
            raise CatalogError(f"Package catalog not found: {catalog_path}")
        try:
            with open(catalog_path, "r", encoding="utf-8") as f:
                return Catalog.model_validate(json.load(f))
        except (json.JSONDecodeError, ValidationError) as e:
            raise CatalogError(f"Package catalog is malformed: {catalog_path}: {e}") from e

    def list_packages(self) -> list[CatalogEntry]:
        return list(self._catalog.packages)

    def lookup(self, name: str, version: Optional[str] = None) -> CatalogEntry:
        candidates = [p for p in self._catalog.packages if p.name.lower() == name.lower()]
        if version is not None:
            candidates = [p for p in candidates if p.version == version]

        if not candidates:
            wanted = f"{name} {version}" if version else name
            raise CatalogError(f"Package '{wanted}' not found in {self.catalog_path}")

        return max(candidates, key=lambda p: _version_key(p.version))
