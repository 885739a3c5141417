import subprocess

import pytest

from buildprov.kernel.artifacts import InstallOutcome
from buildprov.kernel.errors import DownloadError, InstallerExitError, LaunchError


@pytest.mark.parametrize("name", ["pkg.msi", "PKG.MSI", "tool-1.2.3.Msi"])
def test_msi_goes_through_installer_engine_with_fixed_arguments(dispatcher, runner, work_dir, name):
    dispatcher.install_binary("https://example/pkg.msi", name, ["/S", "--custom"])

    assert runner.calls == [
        ("msiexec.exe", ["/i", str(work_dir / name), "/QN", "/norestart"]),
    ]


def test_msi_without_caller_arguments(dispatcher, runner, work_dir):
    dispatcher.install_binary("https://example/pkg.msi", "pkg.msi")

    assert runner.calls == [("msiexec.exe", ["/i", str(work_dir / "pkg.msi"), "/QN", "/norestart"])]


def test_executable_runs_directly_with_caller_arguments(dispatcher, runner, work_dir):
    dispatcher.install_binary("https://example/setup.exe", "setup.exe", ["/S", "/D=C:\\Tools"])

    assert runner.calls == [(str(work_dir / "setup.exe"), ["/S", "/D=C:\\Tools"])]


def test_executable_without_arguments(dispatcher, runner, work_dir):
    dispatcher.install_binary("https://example/setup.exe", "setup.exe")

    assert runner.calls == [(str(work_dir / "setup.exe"), [])]


@pytest.mark.parametrize("exit_code, outcome", [
    (0, InstallOutcome.SUCCESS),
    (3010, InstallOutcome.SUCCESS_REBOOT_REQUIRED),
])
def test_success_codes(dispatcher, runner, exit_code, outcome):
    runner.exit_code = exit_code

    assert dispatcher.install_binary("https://example/pkg.msi", "pkg.msi") == outcome


@pytest.mark.parametrize("exit_code", [1, 2, 1001, 1603, 1618, -1])
def test_other_codes_propagate_as_exit_code(dispatcher, runner, exit_code):
    runner.exit_code = exit_code

    with pytest.raises(InstallerExitError) as exc_info:
        dispatcher.install_binary("https://example/setup.exe", "setup.exe")

    assert exc_info.value.exit_code == exit_code
    assert exc_info.value.return_code == exit_code
    assert "setup.exe" in str(exc_info.value)


@pytest.mark.parametrize("error", [
    FileNotFoundError(2, "The system cannot find the file specified"),
    PermissionError(13, "Access is denied"),
    subprocess.SubprocessError("spawn failed"),
])
def test_launch_failure_exits_with_one(dispatcher, runner, error):
    runner.error = error

    with pytest.raises(LaunchError) as exc_info:
        dispatcher.install_binary("https://example/setup.exe", "setup.exe")

    assert exc_info.value.exit_code == 1
    assert exc_info.value.__cause__ is error


def test_download_exhaustion_never_runs_installer(dispatcher, downloader, runner):
    downloader.failures = 20

    with pytest.raises(DownloadError) as exc_info:
        dispatcher.install_binary("https://example/pkg.msi", "pkg.msi")

    assert exc_info.value.exit_code == 1
    assert runner.calls == []


def test_downloaded_binary_is_kept(dispatcher, work_dir):
    dispatcher.install_binary("https://example/setup.exe", "setup.exe")

    assert (work_dir / "setup.exe").exists()
