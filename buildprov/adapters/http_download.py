"""
A Downloader that streams artifacts over HTTP(S) with requests.
"""
from pathlib import Path

import requests

from buildprov.internal.constants import DOWNLOAD_CHUNK_SIZE, DOWNLOAD_TIMEOUT_SEC
from buildprov.kernel.contracts import Downloader


class RequestsDownloader(Downloader):
    """
    Writes into a sibling .tmp file and moves it into place only once the
    whole body has been received.
    """
    def __init__(self, timeout: float = DOWNLOAD_TIMEOUT_SEC, session: requests.Session | None = None):
        self.timeout = timeout
        self._session = session or requests.Session()

    def download(self, url: str, target_path: Path) -> None:
        temp_path = target_path.with_suffix(f"{target_path.suffix}.tmp")
        try:
            with self._session.get(url, stream=True, timeout=self.timeout) as r:
                r.raise_for_status()
                with open(temp_path, "wb") as f:
                    for chunk in r.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        f.write(chunk)

            temp_path.replace(target_path)
        finally:
            if temp_path.exists():
                temp_path.unlink()
