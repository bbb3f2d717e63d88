import os
from pathlib import Path

from compcache.internal.constants import APP_NAME


# ---------------------------------------------------------------------
# Base directories
# ---------------------------------------------------------------------

def get_app_data_dir() -> Path:
    """
    Returns the application data directory.

    - COMPCACHE_HOME when set
    - Windows: %APPDATA%\\compcache
    - Linux/macOS: ~/.compcache
    """
    override = os.environ.get("COMPCACHE_HOME")
    if override:
        path = Path(override)
    elif os.name == "nt":  # Windows
        base = os.environ.get("APPDATA", str(Path.home()))
        path = Path(base) / APP_NAME
    else:  # Linux / macOS
        path = Path.home() / f".{APP_NAME}"

    path.mkdir(parents=True, exist_ok=True)
    return path


def get_components_dir() -> Path:
    path = get_app_data_dir() / "components"
    path.mkdir(parents=True, exist_ok=True)
    return path


# ---------------------------------------------------------------------
# Global cache
# ---------------------------------------------------------------------

def get_global_cache_dir() -> Path:
    """
    Directory backing the filesystem global store.
    Shared between projects; COMPCACHE_GLOBAL_DIR points several homes at one store.
    """
    override = os.environ.get("COMPCACHE_GLOBAL_DIR")
    path = Path(override) if override else get_app_data_dir() / "global"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_global_cache_url() -> str | None:
    url = os.environ.get("COMPCACHE_GLOBAL_URL", "").strip()
    return url or None


def get_downloads_dir() -> Path:
    path = get_app_data_dir() / "downloads"
    path.mkdir(parents=True, exist_ok=True)
    return path


# ---------------------------------------------------------------------
# Logs
# ---------------------------------------------------------------------

def get_log_file() -> Path:
    log_dir = get_app_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / f"{APP_NAME}.log.json"


# ---------------------------------------------------------------------
# Debug
# ---------------------------------------------------------------------

if __name__ == "__main__":
    print("App Data Dir:", get_app_data_dir())
    print("Components Dir:", get_components_dir())
    print("Global Cache Dir:", get_global_cache_dir())
    print("Global Cache URL:", get_global_cache_url())
    print("Downloads Dir:", get_downloads_dir())
    print("Log File:", get_log_file())
