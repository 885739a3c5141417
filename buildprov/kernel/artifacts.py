"""
Data contracts for downloaded artifacts and install results.
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ArtifactKind(str, Enum):
    """How an extension artifact is executed."""
    VSIX = "vsix"
    EXECUTABLE = "executable"

    @classmethod
    def from_name(cls, name: str) -> "ArtifactKind":
        return cls.VSIX if "vsix" in name.lower() else cls.EXECUTABLE


class InstallOutcome(str, Enum):
    """
    Successful results of an installer run. Failures are raised as
    InstallerExitError instead.
    """
    SUCCESS = "success"
    SUCCESS_REBOOT_REQUIRED = "success_reboot_required"
    ALREADY_INSTALLED = "already_installed"


@dataclass
class Artifact:
    """
    A remote installer file and where it lands locally.
    The name carries the file extension used for dispatch.
    """
    url: str
    name: str
    path: Path

    @property
    def extension(self) -> str:
        return Path(self.name).suffix.lstrip(".").lower()
