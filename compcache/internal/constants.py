import importlib.metadata

APP_NAME = "compcache"

# Global store identity for components
COMPONENT_ORGANIZATION = "org.compcache"
_FALLBACK_PLATFORM_VERSION = "0.1.0"

try:
    PLATFORM_VERSION = importlib.metadata.version(APP_NAME)
except importlib.metadata.PackageNotFoundError:
    PLATFORM_VERSION = _FALLBACK_PLATFORM_VERSION

# Lock scope labels, shown to users while waiting on a contended lock
LOCAL_CACHE_LABEL = "local cache"
GLOBAL_CACHE_LABEL = "global cache"

# Lock file names
LOCAL_LOCK_FILE_NAME = "components.lock"
GLOBAL_LOCK_FILE_NAME = ".lock"
DOWNLOAD_LOCK_FILE_NAME = "global.lock"

DEFAULT_ARTIFACT_EXTENSION = ".jar"
