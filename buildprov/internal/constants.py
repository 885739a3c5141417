APP_NAME = "buildprov"

# ---------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------

ENV_DOWNLOAD_DIR = "BUILDPROV_DOWNLOAD_DIR"
ENV_ROOT_FOLDER = "BUILDPROV_ROOT"
ENV_RETRY_DELAY = "BUILDPROV_RETRY_DELAY"
ENV_VS_EDITION = "BUILDPROV_VS_EDITION"
ENV_LOG_LEVEL = "BUILDPROV_LOG_LEVEL"

# ---------------------------------------------------------------------
# Fetcher
# ---------------------------------------------------------------------

DEFAULT_MAX_RETRIES = 20
DEFAULT_RETRY_DELAY_SEC = 30
DOWNLOAD_TIMEOUT_SEC = 60
DOWNLOAD_CHUNK_SIZE = 1024 * 1024

# ---------------------------------------------------------------------
# Installers
# ---------------------------------------------------------------------

MSI_ENGINE = "msiexec.exe"
MSI_EXTENSION = "msi"

EXIT_SUCCESS = 0
EXIT_REBOOT_REQUIRED = 3010
EXIT_ALREADY_INSTALLED = 1001

VSIX_INSTALLER_NAME = "VSIXInstaller.exe"
DEFAULT_VS_EDITION = "Enterprise"
# Visual Studio moved to a 64-bit install root starting with this release
VS_X64_FIRST_VERSION = 2022

# ---------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------

SERVICE_CONTROL = "sc.exe"
SERVICE_STOP_TIMEOUT_SEC = 60
SERVICE_POLL_INTERVAL_SEC = 1
SERVICE_CONTROL_TIMEOUT_SEC = 120

# ---------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------

CATALOG_FILE_NAME = "catalog.json"
