"""
Scoped, advisory, cross-process locking on lock files.

Two independent mechanisms cooperate here:

- an in-process reentrant mutex per lock-file path, held around the whole
  open/lock/action/close sequence, so threads of one process never race on
  the lock file handle;
- an exclusive `fcntl.flock` on the lock file itself, which serializes
  cooperating processes on the same machine.

A thread that already holds a lock file (nested acquisition, e.g. the local
and global scopes sharing one path) runs the action directly instead of
blocking on an OS lock it already owns.
"""
import fcntl
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Dict, Iterator, Set, TypeVar

from compcache.internal.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class LockManager:
    def __init__(self) -> None:
        self._registry_guard = threading.Lock()
        self._mutexes: Dict[Path, threading.RLock] = {}
        self._held = threading.local()

    def _mutex_for(self, key: Path) -> threading.RLock:
        with self._registry_guard:
            mutex = self._mutexes.get(key)
            if mutex is None:
                mutex = threading.RLock()
                self._mutexes[key] = mutex
            return mutex

    def _held_by_current_thread(self) -> Set[Path]:
        held = getattr(self._held, "paths", None)
        if held is None:
            held = set()
            self._held.paths = held
        return held

    @contextmanager
    def locked(self, label: str, lock_file: Path, log=None) -> Iterator[None]:
        """
        Holds the exclusive lock on `lock_file` for the duration of the context.

        If another process holds the lock, logs a single "waiting" notice for
        `label` and blocks until the lock is available. There is no timeout.

        Raises:
            OSError: if the lock file cannot be opened (e.g. PermissionError).
        """
        key = Path(lock_file).resolve()
        held = self._held_by_current_thread()
        with self._mutex_for(key):
            if key in held:
                yield
                return

            with open(key, "ab") as handle:
                try:
                    fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                except BlockingIOError:
                    (log or logger).info(f"Waiting for {label} to be available...")
                    fcntl.flock(handle.fileno(), fcntl.LOCK_EX)

                held.add(key)
                try:
                    yield
                finally:
                    held.discard(key)
                    fcntl.flock(handle.fileno(), fcntl.LOCK_UN)

    def with_lock(self, label: str, lock_file: Path, action: Callable[[], T], log=None) -> T:
        with self.locked(label, lock_file, log):
            return action()


# One registry per process: every ComponentManager must share it.
_default_manager = LockManager()

locked = _default_manager.locked
with_lock = _default_manager.with_lock
