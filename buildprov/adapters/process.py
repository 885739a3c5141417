import subprocess
from typing import Sequence

from buildprov.internal.logging import get_logger
from buildprov.kernel.contracts import ProcessRunner


class SubprocessRunner(ProcessRunner):
    """
    Runs installers as child processes and waits for them to exit.
    Output is left attached to the parent console so installer logs stay visible.
    """

    def __init__(self, timeout: float | None = None):
        self.logger = get_logger(self.__class__.__name__)
        self.timeout = timeout

    def run(self, executable: str, arguments: Sequence[str]) -> int:
        command = [executable, *arguments]
        self.logger.debug("Spawning process", command=command)

        process = subprocess.Popen(command, close_fds=True)
        try:
            exit_code = process.wait(timeout=self.timeout)
        except subprocess.TimeoutExpired:
            self.logger.warning("Process did not finish in time, killing it", pid=process.pid)
            process.kill()
            process.wait()
            raise

        self.logger.debug("Process exited", pid=process.pid, exit_code=exit_code)
        return exit_code
