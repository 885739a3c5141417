"""
Downloads installer artifacts with a bounded retry budget and a fixed backoff.
"""
import time
from pathlib import Path
from typing import Callable, Optional

import requests

from buildprov.internal import paths
from buildprov.internal.constants import DEFAULT_MAX_RETRIES
from buildprov.internal.logging import get_logger
from buildprov.kernel.contracts import Downloader
from buildprov.kernel.errors import DownloadError

logger = get_logger(__name__)


class Fetcher:
    """
    Retrieves a remote artifact into a working directory.

    Each attempt re-downloads from scratch. There is no content validation
    once a download succeeds.
    """

    def __init__(
        self,
        downloader: Downloader,
        work_dir: Optional[Path] = None,
        retry_delay: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.downloader = downloader
        self.work_dir = Path(work_dir) if work_dir else paths.get_download_dir()
        self.retry_delay = paths.get_retry_delay() if retry_delay is None else retry_delay
        self._sleep = sleep

    def fetch(
        self,
        url: str,
        name: str,
        destination_dir: Optional[Path] = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> Path:
        if max_retries <= 0:
            raise ValueError(f"max_retries must be positive, got {max_retries}")

        target_dir = Path(destination_dir) if destination_dir else self.work_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        file_path = target_dir / name

        retries = max_retries
        while True:
            try:
                logger.info("Downloading package", url=url, path=str(file_path))
                self.downloader.download(url, file_path)
                return file_path
            except (requests.RequestException, OSError) as e:
                retries -= 1
                logger.warning(
                    "There is an error during package downloading",
                    url=url,
                    error=str(e),
                    retries_left=retries,
                )
                if retries == 0:
                    logger.error("File can't be downloaded", url=url, attempts=max_retries)
                    raise DownloadError(url, max_retries) from e

                logger.info("Waiting before retrying", delay_sec=self.retry_delay, retries_left=retries)
                self._sleep(self.retry_delay)
