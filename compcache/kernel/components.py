"""
Defines the contracts the component manager is built on: the local provider
and global store ports, the module identity used to address the global store,
the missing-component policies and the error taxonomy.

Adapters implement the ports; the kernel only ever talks to these interfaces.
"""
from abc import abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Sequence

from compcache.internal.constants import COMPONENT_ORGANIZATION, PLATFORM_VERSION


# ---------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------

class NotInCache(LookupError):
    """Raised by a global store when it holds no artifact for a module."""

    def __init__(self, module_id: "ModuleID", message: Optional[str] = None):
        self.module_id = module_id
        super().__init__(message or f"{module_id} is not in the global cache")


class InvalidComponent(RuntimeError):
    """Base class for user-facing component resolution failures."""

    def __init__(self, component_id: str, message: str):
        self.component_id = component_id
        super().__init__(message)


class ComponentNotFound(InvalidComponent):
    def __init__(self, component_id: str):
        super().__init__(component_id, f"Could not find required component '{component_id}'")


class AmbiguousComponent(InvalidComponent):
    def __init__(self, component_id: str, paths: Sequence[Path]):
        self.paths = list(paths)
        found = ", ".join(str(p) for p in self.paths)
        super().__init__(component_id, f"Expected single file for component '{component_id}', found: {found}")


# ---------------------------------------------------------------------
# Global identity
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class ModuleID:
    """
    Fully-qualified coordinate of an artifact in the global store.
    """
    organization: str
    name: str
    revision: str

    def __str__(self) -> str:
        return f"{self.organization}:{self.name}:{self.revision}"


def component_module_id(
    component_id: str,
    organization: str = COMPONENT_ORGANIZATION,
    revision: str = PLATFORM_VERSION,
) -> ModuleID:
    """Maps a component id to the module identity it is published under."""
    return ModuleID(organization=organization, name=component_id, revision=revision)


# ---------------------------------------------------------------------
# Missing-component policies
# ---------------------------------------------------------------------

class MissingPolicy:
    """What to do when a component is in neither cache tier."""


@dataclass(frozen=True)
class Fail(MissingPolicy):
    pass


@dataclass(frozen=True)
class Define(MissingPolicy):
    """
    Runs `action` to build the component. The action is expected to populate
    the local provider as a side effect (usually through ComponentManager.define).
    When `cache` is true the freshly built file is published to the global store.
    """
    action: Callable[[], None]
    cache: bool = False

    def __call__(self) -> None:
        self.action()


FAIL = Fail()


# ---------------------------------------------------------------------
# Global pull result
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class GlobalPull:
    status: str  # 'found', 'not_found' or 'error'
    file: Optional[Path] = None
    error: Optional[BaseException] = field(default=None, compare=False)

    @classmethod
    def found(cls, file: Path) -> "GlobalPull":
        return cls(status="found", file=file)

    @classmethod
    def not_found(cls) -> "GlobalPull":
        return cls(status="not_found")

    @classmethod
    def failed(cls, error: BaseException) -> "GlobalPull":
        return cls(status="error", error=error)


# ---------------------------------------------------------------------
# Ports
# ---------------------------------------------------------------------

class ComponentProvider(Protocol):
    """
    The local, fast cache tier. Guarded by `lock_file`.
    """
    lock_file: Path

    @abstractmethod
    def component(self, component_id: str) -> List[Path]:
        """
        Returns the files registered for `component_id`, or an empty list
        when the component is not defined locally.
        """
        ...

    @abstractmethod
    def define_component(self, component_id: str, files: Sequence[Path]) -> None:
        """
        Registers `files` as the complete local content of `component_id`,
        replacing whatever was there before.
        """
        ...


class GlobalStore(Protocol):
    """
    The shared, slower cache tier addressed by ModuleID. Guarded by `lock_file`.
    """
    lock_file: Path

    @abstractmethod
    def fetch(self, module_id: ModuleID) -> Path:
        """
        Returns a local path to the cached artifact.

        Raises:
            NotInCache: if the store has no artifact for `module_id`.
        """
        ...

    @abstractmethod
    def publish(self, module_id: ModuleID, file: Path) -> None:
        ...

    @abstractmethod
    def remove(self, module_id: ModuleID) -> None:
        ...
