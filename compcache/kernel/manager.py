"""
The component manager resolves named components to the files backing them.

Lookups consult the local provider first, then pull from the global store,
and finally fall back to the caller's missing-component policy. The local
lock is held for the whole lookup and the global lock is nested inside it, so
at most one process builds and caches a given component at a time.
"""
from pathlib import Path
from typing import Iterable, List

from compcache.internal.constants import (
    COMPONENT_ORGANIZATION,
    GLOBAL_CACHE_LABEL,
    LOCAL_CACHE_LABEL,
    PLATFORM_VERSION,
)
from compcache.internal.logging import get_logger
from compcache.kernel import locking
from compcache.kernel.components import (
    FAIL,
    AmbiguousComponent,
    ComponentNotFound,
    ComponentProvider,
    Define,
    Fail,
    GlobalPull,
    GlobalStore,
    MissingPolicy,
    ModuleID,
    NotInCache,
    component_module_id,
)

logger = get_logger(__name__)


class ComponentManager:
    """
    Provides access to components through a local provider backed by a
    shared global store.

    Args:
        provider: the local cache tier.
        global_store: the shared cache tier.
        log: receives lock contention notices; defaults to the module logger.
        strict_global: re-raise global store failures other than NotInCache
            instead of treating them as a cache miss.
    """
    def __init__(
        self,
        provider: ComponentProvider,
        global_store: GlobalStore,
        log=None,
        strict_global: bool = False,
        organization: str = COMPONENT_ORGANIZATION,
        revision: str = PLATFORM_VERSION,
    ):
        self.provider = provider
        self.global_store = global_store
        self.log = log or logger
        self.strict_global = strict_global
        self.organization = organization
        self.revision = revision

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def files(self, component_id: str, if_missing: MissingPolicy = FAIL) -> List[Path]:
        """
        Get all of the files for `component_id`.

        Raises:
            ComponentNotFound: if no files exist after consulting the local
                provider, the global store and `if_missing`.
        """
        with self._lock_local():
            existing = self._local(component_id)
            if existing:
                return existing
            with self._lock_global():
                pulled = self._update(component_id)
                if pulled:
                    return pulled
                return self._create_and_cache(component_id, if_missing)

    def file(self, component_id: str, if_missing: MissingPolicy = FAIL) -> Path:
        """
        Get the single file for `component_id`.

        Raises:
            ComponentNotFound: as for `files`.
            AmbiguousComponent: if the component has more than one file.
        """
        found = self.files(component_id, if_missing)
        if len(found) != 1:
            raise AmbiguousComponent(component_id, found)
        return found[0]

    def _local(self, component_id: str) -> List[Path]:
        return list(self.provider.component(component_id))

    def _update(self, component_id: str) -> List[Path]:
        """Retrieves `component_id` from the global store into the local provider."""
        pull = self._pull_from_global(component_id)
        if pull.status == "found":
            logger.info("Pulled component from global cache", component=component_id, file=str(pull.file))
            self.define(component_id, [pull.file])
            return self._local(component_id)
        if pull.status == "error":
            if self.strict_global:
                raise pull.error
            logger.warning(
                "Global cache lookup failed, treating as not cached",
                component=component_id,
                error=str(pull.error),
            )
        return []

    def _pull_from_global(self, component_id: str) -> GlobalPull:
        module_id = self.module_id(component_id)
        try:
            return GlobalPull.found(self.global_store.fetch(module_id))
        except NotInCache:
            logger.debug("Component not in global cache", component=component_id, module=str(module_id))
            return GlobalPull.not_found()
        except Exception as e:
            return GlobalPull.failed(e)

    def _create_and_cache(self, component_id: str, if_missing: MissingPolicy) -> List[Path]:
        if isinstance(if_missing, Define):
            logger.info("Defining missing component", component=component_id, cache=if_missing.cache)
            if_missing()
            created = self._local(component_id)
            if not created:
                raise ComponentNotFound(component_id)
            if if_missing.cache:
                self.cache(component_id)
            return created
        if isinstance(if_missing, Fail):
            raise ComponentNotFound(component_id)
        raise TypeError(f"Unsupported missing-component policy: {if_missing!r}")

    # ------------------------------------------------------------------
    # Definition, publication, clearing
    # ------------------------------------------------------------------

    def define(self, component_id: str, files: Iterable[Path]) -> None:
        """Registers `files` as the local content of `component_id`."""
        with self._lock_local():
            self.provider.define_component(component_id, list(files))

    def cache(self, component_id: str) -> None:
        """
        Installs the local file for `component_id` into the global store.
        The component must resolve locally to exactly one file.
        """
        file = self.file(component_id, FAIL)
        module_id = self.module_id(component_id)
        with self._lock_global():
            self.global_store.publish(module_id, file)
        logger.info("Published component to global cache", component=component_id, module=str(module_id))

    def clear_cache(self, component_id: str) -> None:
        """Removes `component_id` from the global store. The local cache is untouched."""
        module_id = self.module_id(component_id)
        with self._lock_global():
            self.global_store.remove(module_id)
        logger.info("Cleared component from global cache", component=component_id, module=str(module_id))

    def module_id(self, component_id: str) -> ModuleID:
        return component_module_id(component_id, self.organization, self.revision)

    # ------------------------------------------------------------------
    # Lock scopes
    # ------------------------------------------------------------------

    def _lock_local(self):
        return locking.locked(LOCAL_CACHE_LABEL, self.provider.lock_file, self.log)

    def _lock_global(self):
        return locking.locked(GLOBAL_CACHE_LABEL, self.global_store.lock_file, self.log)
