"""
Ports the kernel talks to. Adapters under buildprov.adapters implement them
against the network, the process table and the service control manager.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Protocol, Sequence


class Downloader(Protocol):
    """
    Transport used by the Fetcher. Must raise on any failure and leave
    nothing at `target_path` unless the download completed.
    """

    def download(self, url: str, target_path: Path) -> None:
        ...


class ProcessRunner(Protocol):
    """
    Starts a program, blocks until it exits and returns its exit code.
    Raises OSError (or subprocess.SubprocessError) if it cannot be started.
    """

    def run(self, executable: str, arguments: Sequence[str]) -> int:
        ...


@dataclass
class ServiceHandle:
    """A live reference to an OS service. Not owned by this system."""
    name: str
    display_name: str
    status: str
    start_type: Optional[str] = None


class ServiceManager(Protocol):
    """
    Service control subsystem. `get` returns None for a missing service;
    `stop` and `configure` raise ServiceOperationError on failure.
    """

    def get(self, name: str) -> Optional[ServiceHandle]:
        ...

    def stop(self, name: str) -> None:
        ...

    def status(self, name: str) -> str:
        ...

    def configure(self, name: str, arguments: Mapping[str, str]) -> None:
        ...
