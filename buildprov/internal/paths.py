import os
import tempfile
from pathlib import Path
from typing import Optional

from buildprov.internal.constants import (
    APP_NAME,
    CATALOG_FILE_NAME,
    DEFAULT_RETRY_DELAY_SEC,
    DEFAULT_VS_EDITION,
    ENV_DOWNLOAD_DIR,
    ENV_RETRY_DELAY,
    ENV_ROOT_FOLDER,
    ENV_VS_EDITION,
    VS_X64_FIRST_VERSION,
    VSIX_INSTALLER_NAME,
)


# ---------------------------------------------------------------------
# Base directories
# ---------------------------------------------------------------------

def get_app_data_dir() -> Path:
    """
    Returns the application data directory.

    - Windows: %APPDATA%\\buildprov
    - Linux/macOS: ~/.buildprov
    """
    if os.name == "nt":  # Windows
        base = os.environ.get("APPDATA", str(Path.home()))
        path = Path(base) / APP_NAME
    else:  # Linux / macOS
        path = Path.home() / f".{APP_NAME}"

    path.mkdir(parents=True, exist_ok=True)
    return path


def get_log_dir() -> Path:
    path = get_app_data_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_download_dir() -> Path:
    """
    Directory artifacts are downloaded into when the caller does not inject one.
    """
    override = os.environ.get(ENV_DOWNLOAD_DIR)
    return Path(override) if override else Path(tempfile.gettempdir())


def get_root_folder() -> Path:
    """
    Root folder holding the image inventory files.
    """
    return Path(os.environ.get(ENV_ROOT_FOLDER, os.getcwd()))


def get_catalog_path() -> Path:
    return get_root_folder() / CATALOG_FILE_NAME


def get_retry_delay() -> float:
    raw = os.environ.get(ENV_RETRY_DELAY)
    if raw is None:
        return float(DEFAULT_RETRY_DELAY_SEC)
    try:
        return float(raw)
    except ValueError:
        return float(DEFAULT_RETRY_DELAY_SEC)


# ---------------------------------------------------------------------
# Visual Studio extension installer
# ---------------------------------------------------------------------

def _program_files_root(vs_version: str) -> Path:
    try:
        is_x64 = int(vs_version) >= VS_X64_FIRST_VERSION
    except ValueError:
        is_x64 = False

    if is_x64:
        return Path(os.environ.get("ProgramFiles", r"C:\Program Files"))
    return Path(os.environ.get("ProgramFiles(x86)", r"C:\Program Files (x86)"))


def get_vsix_installer_path(vs_version: str, edition: Optional[str] = None) -> Path:
    """
    Full path to VSIXInstaller.exe for an installed Visual Studio release.
    """
    edition = edition or os.environ.get(ENV_VS_EDITION, DEFAULT_VS_EDITION)
    return (
        _program_files_root(vs_version)
        / "Microsoft Visual Studio"
        / str(vs_version)
        / edition
        / "Common7"
        / "IDE"
        / VSIX_INSTALLER_NAME
    )


# ---------------------------------------------------------------------
# Debug
# ---------------------------------------------------------------------

if __name__ == "__main__":
    print("App Data Dir:", get_app_data_dir())
    print("Download Dir:", get_download_dir())
    print("Root Folder:", get_root_folder())
    print("Catalog Path:", get_catalog_path())
    print("VSIX Installer (2019):", get_vsix_installer_path("2019"))
    print("VSIX Installer (2022):", get_vsix_installer_path("2022"))
