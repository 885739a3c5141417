# Host detection used by doctor and by provisioning scripts
import platform
import psutil

# Windows Server release by OS build number
SERVER_BUILDS = {
    14393: "2016",
    17763: "2019",
    20348: "2022",
    26100: "2025",
}

def get_os_info():
    return platform.system()

def get_cpu_arch():
    return platform.machine()

def get_total_ram_gb():
    return round(psutil.virtual_memory().total / (1024**3), 2)

def get_os_build(version: str | None = None) -> int | None:
    version = version if version is not None else platform.version()
    parts = version.split(".")
    if len(parts) < 3 or not parts[2].isdigit():
        return None
    return int(parts[2])

def get_windows_release(version: str | None = None) -> str:
    """
    Server release name ("2019", "2022", ...) for a Windows build string such
    as "10.0.17763", falling back to platform.release().
    """
    build = get_os_build(version)
    if build in SERVER_BUILDS:
        return SERVER_BUILDS[build]
    return platform.release()

def is_windows_server(release: str, version: str | None = None) -> bool:
    return get_windows_release(version) == release

if __name__ == "__main__":
    print(f"OS: {get_os_info()}")
    print(f"Architecture: {get_cpu_arch()}")
    print(f"Total RAM: {get_total_ram_gb()} GB")
    print(f"Windows release: {get_windows_release()}")
