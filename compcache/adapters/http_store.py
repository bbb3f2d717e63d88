"""
A global store backed by a Maven-style HTTP repository.

Artifacts are downloaded into a local staging directory, which is what the
store's lock file guards. Publishing is an HTTP PUT and removal an HTTP DELETE.
"""
import uuid
from pathlib import Path

import requests

from compcache.internal.constants import DEFAULT_ARTIFACT_EXTENSION, DOWNLOAD_LOCK_FILE_NAME
from compcache.internal.logging import get_logger
from compcache.kernel.components import GlobalStore, ModuleID, NotInCache

logger = get_logger(__name__)


class HttpGlobalStore(GlobalStore):
    def __init__(
        self,
        base_url: str,
        download_dir: Path,
        extension: str = DEFAULT_ARTIFACT_EXTENSION,
        timeout: float = 60,
        session: requests.Session | None = None,
    ):
        if not base_url:
            raise ValueError("base_url cannot be empty")
        self.base_url = base_url.rstrip("/")
        self.download_dir = Path(download_dir)
        self.download_dir.mkdir(parents=True, exist_ok=True)
        self.lock_file = self.download_dir / DOWNLOAD_LOCK_FILE_NAME
        self.extension = extension
        self.timeout = timeout
        self._session = session or requests.Session()

    def _file_name(self, module_id: ModuleID) -> str:
        return f"{module_id.name}-{module_id.revision}{self.extension}"

    def url_for(self, module_id: ModuleID) -> str:
        org_path = module_id.organization.replace(".", "/")
        return f"{self.base_url}/{org_path}/{module_id.name}/{module_id.revision}/{self._file_name(module_id)}"

    def _target_path(self, module_id: ModuleID) -> Path:
        return self.download_dir / module_id.organization / module_id.name / module_id.revision / self._file_name(module_id)

    def fetch(self, module_id: ModuleID) -> Path:
        url = self.url_for(module_id)
        target_path = self._target_path(module_id)
        target_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = target_path.with_name(f".{target_path.name}.{uuid.uuid4().hex}.tmp")
        try:
            with self._session.get(url, stream=True, timeout=self.timeout) as r:
                if r.status_code == 404:
                    raise NotInCache(module_id, f"{module_id} not found at {url}")
                r.raise_for_status()
                with open(temp_path, "wb") as f:
                    for chunk in r.iter_content(chunk_size=1024 * 1024):
                        f.write(chunk)
            temp_path.replace(target_path)
        finally:
            if temp_path.exists():
                temp_path.unlink()
        logger.debug("Downloaded artifact", module=str(module_id), url=url)
        return target_path

    def publish(self, module_id: ModuleID, file: Path) -> None:
        url = self.url_for(module_id)
        with open(file, "rb") as f:
            r = self._session.put(url, data=f, timeout=self.timeout)
        r.raise_for_status()
        logger.debug("Uploaded artifact", module=str(module_id), url=url)

    def remove(self, module_id: ModuleID) -> None:
        url = self.url_for(module_id)
        r = self._session.delete(url, timeout=self.timeout)
        if r.status_code != 404:
            r.raise_for_status()
        target_path = self._target_path(module_id)
        if target_path.exists():
            target_path.unlink()
