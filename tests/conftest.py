import pytest
from pathlib import Path
from typing import Optional

import requests

from buildprov.internal import logging as buildprov_logging
from buildprov.kernel.contracts import ServiceHandle
from buildprov.kernel.errors import ServiceOperationError
from buildprov.kernel.extensions import ExtensionInstaller
from buildprov.kernel.fetcher import Fetcher
from buildprov.kernel.installer import InstallerDispatcher
from buildprov.kernel.services import ServiceController

# --- Fakes for kernel ports ---
# Tests tweak their public attributes (failures, exit_code, ...) per case.

class FakeDownloader:
    """Fails the first `failures` attempts, then writes a small payload."""
    def __init__(self, failures: int = 0, error: Optional[Exception] = None):
        self.failures = failures
        self.error = error or requests.exceptions.ConnectionError("Simulated network interruption")
        self.calls = []

    def download(self, url, target_path):
        self.calls.append((url, target_path))
        if len(self.calls) <= self.failures:
            raise self.error
        Path(target_path).write_bytes(b"installer payload")


class FakeRunner:
    def __init__(self, exit_code: int = 0, error: Optional[Exception] = None, side_effect=None):
        self.exit_code = exit_code
        self.error = error
        self.side_effect = side_effect
        self.calls = []

    def run(self, executable, arguments):
        self.calls.append((executable, list(arguments)))
        if self.side_effect:
            self.side_effect(executable, arguments)
        if self.error:
            raise self.error
        return self.exit_code


class FakeServiceManager:
    """
    In-memory service table. `statuses` is consumed one value per status()
    call; the last value repeats.
    """
    def __init__(self, services=None, statuses=None, stop_error=None, configure_error=None, get_error=None):
        self.services = {s.name: s for s in (services or [])}
        self.statuses = list(statuses or ["stopped"])
        self.stop_error = stop_error
        self.configure_error = configure_error
        self.get_error = get_error
        self.get_calls = []
        self.stop_calls = []
        self.status_calls = []
        self.configure_calls = []

    def get(self, name):
        self.get_calls.append(name)
        if self.get_error:
            raise self.get_error
        return self.services.get(name)

    def stop(self, name):
        self.stop_calls.append(name)
        if self.stop_error:
            raise self.stop_error

    def status(self, name):
        self.status_calls.append(name)
        if len(self.statuses) > 1:
            return self.statuses.pop(0)
        return self.statuses[0]

    def configure(self, name, arguments):
        self.configure_calls.append((name, dict(arguments)))
        if self.configure_error:
            raise self.configure_error


class FakeClock:
    """Monotonic clock that only moves when sleep() is called."""
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds

# --- Fixtures ---

@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep the CLI from attaching file and console handlers during tests."""
    monkeypatch.setattr(buildprov_logging, "_LOGGING_CONFIGURED", True)


@pytest.fixture
def work_dir(tmp_path):
    path = tmp_path / "downloads"
    path.mkdir()
    return path


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def downloader():
    return FakeDownloader()


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def fetcher(downloader, work_dir, sleeps):
    return Fetcher(downloader, work_dir=work_dir, retry_delay=30, sleep=sleeps.append)


@pytest.fixture
def dispatcher(fetcher, runner):
    return InstallerDispatcher(fetcher, runner)


@pytest.fixture
def vsix_installer_path(tmp_path):
    def _path(vs_version):
        return tmp_path / "vs" / vs_version / "VSIXInstaller.exe"
    return _path


@pytest.fixture
def extension_installer(fetcher, runner, vsix_installer_path):
    return ExtensionInstaller(fetcher, runner, installer_path=vsix_installer_path)


@pytest.fixture
def running_service():
    return ServiceHandle(name="wuauserv", display_name="Windows Update", status="running", start_type="manual")


@pytest.fixture
def service_manager(running_service):
    return FakeServiceManager(services=[running_service])


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service_controller(service_manager, clock):
    return ServiceController(service_manager, stop_timeout=60, poll_interval=1, sleep=clock.sleep, clock=clock)


@pytest.fixture
def service_error():
    return ServiceOperationError("Simulated service control failure")
