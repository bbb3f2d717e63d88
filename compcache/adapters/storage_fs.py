"""
Concrete implementations of the component provider and global store that keep
their content on the local filesystem.
"""
import shutil
import uuid
from pathlib import Path
from typing import List, Sequence

from compcache.internal.constants import GLOBAL_LOCK_FILE_NAME, LOCAL_LOCK_FILE_NAME
from compcache.internal.logging import get_logger
from compcache.kernel.components import ComponentProvider, GlobalStore, ModuleID, NotInCache

logger = get_logger(__name__)


def _validate_name(value: str, kind: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{kind} cannot be empty")
    if "/" in value or "\\" in value or value.startswith("."):
        raise ValueError(f"Invalid {kind}: {value!r}")
    return value


def _regular_files(directory: Path) -> List[Path]:
    if not directory.is_dir():
        return []
    return sorted((p for p in directory.iterdir() if p.is_file()), key=lambda p: p.name)


def _swap_directory(staging: Path, target: Path) -> None:
    """Replaces `target` with `staging` wholesale."""
    if target.exists():
        retired = target.with_name(f".{target.name}.old-{uuid.uuid4().hex}")
        target.rename(retired)
        staging.rename(target)
        shutil.rmtree(retired, ignore_errors=True)
    else:
        staging.rename(target)


class FileSystemComponentProvider(ComponentProvider):
    """
    Local component cache: each component is a directory under `root` holding
    the component's files.
    """
    def __init__(self, root: Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.lock_file = self.root / LOCAL_LOCK_FILE_NAME

    def location(self, component_id: str) -> Path:
        """Directory holding the files of `component_id`."""
        if component_id == LOCAL_LOCK_FILE_NAME:
            raise ValueError(f"Invalid component id: {component_id!r}")
        return self.root / _validate_name(component_id, "component id")

    def component(self, component_id: str) -> List[Path]:
        return _regular_files(self.location(component_id))

    def define_component(self, component_id: str, files: Sequence[Path]) -> None:
        target = self.location(component_id)
        names = [Path(f).name for f in files]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate file names for component '{component_id}': {', '.join(names)}")

        staging = self.root / f".{component_id}.tmp-{uuid.uuid4().hex}"
        staging.mkdir()
        try:
            for source in files:
                shutil.copy2(source, staging / Path(source).name)
            _swap_directory(staging, target)
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            raise
        logger.debug("Defined component", component=component_id, files=names)


class FileSystemGlobalStore(GlobalStore):
    """
    Global component cache laid out as `root/<organization>/<name>/<revision>/<file>`.
    Each revision directory holds exactly one artifact.
    """
    def __init__(self, root: Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.lock_file = self.root / GLOBAL_LOCK_FILE_NAME

    def _module_dir(self, module_id: ModuleID) -> Path:
        return (
            self.root
            / _validate_name(module_id.organization, "organization")
            / _validate_name(module_id.name, "module name")
            / _validate_name(module_id.revision, "revision")
        )

    def fetch(self, module_id: ModuleID) -> Path:
        artifacts = _regular_files(self._module_dir(module_id))
        if not artifacts:
            raise NotInCache(module_id)
        return artifacts[0]

    def publish(self, module_id: ModuleID, file: Path) -> None:
        target = self._module_dir(module_id)
        target.parent.mkdir(parents=True, exist_ok=True)

        staging = target.parent / f".{target.name}.tmp-{uuid.uuid4().hex}"
        staging.mkdir()
        try:
            shutil.copy2(file, staging / Path(file).name)
            _swap_directory(staging, target)
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            raise
        logger.debug("Published artifact", module=str(module_id), file=Path(file).name)

    def remove(self, module_id: ModuleID) -> None:
        target = self._module_dir(module_id)
        if target.exists():
            shutil.rmtree(target)
