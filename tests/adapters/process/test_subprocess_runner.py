import subprocess
import sys
from unittest.mock import MagicMock

import pytest

from buildprov.adapters.process import SubprocessRunner


@pytest.fixture
def mock_popen(mocker):
    process = MagicMock()
    process.pid = 4242
    process.wait.return_value = 0
    popen = mocker.patch("buildprov.adapters.process.subprocess.Popen", return_value=process)
    return popen


def test_run_waits_and_returns_exit_code(mock_popen):
    mock_popen.return_value.wait.return_value = 3010

    exit_code = SubprocessRunner().run("msiexec.exe", ["/i", "C:\\Temp\\pkg.msi", "/QN", "/norestart"])

    assert exit_code == 3010
    command = mock_popen.call_args.args[0]
    assert command == ["msiexec.exe", "/i", "C:\\Temp\\pkg.msi", "/QN", "/norestart"]
    mock_popen.return_value.wait.assert_called_once_with(timeout=None)


def test_launch_failure_propagates(mocker):
    mocker.patch("buildprov.adapters.process.subprocess.Popen", side_effect=FileNotFoundError(2, "No such file"))

    with pytest.raises(FileNotFoundError):
        SubprocessRunner().run("missing.exe", [])


def test_timeout_kills_process(mock_popen):
    process = mock_popen.return_value
    process.wait.side_effect = [subprocess.TimeoutExpired("setup.exe", 5), 1]

    with pytest.raises(subprocess.TimeoutExpired):
        SubprocessRunner(timeout=5).run("setup.exe", ["/S"])

    process.kill.assert_called_once()


def test_runs_a_real_process():
    exit_code = SubprocessRunner().run(sys.executable, ["-c", "import sys; sys.exit(7)"])

    assert exit_code == 7
