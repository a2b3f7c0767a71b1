"""Per-program mutual exclusion.

All mutation of one program (synthesis-and-memoize, swap, completion)
runs under that program's lock. Different programs never share a lock
and proceed in parallel.

Thread-safe for concurrent requests.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock

from loguru import logger


class ProgramLockRegistry:
    """Registry handing out one lock per program id."""

    def __init__(self) -> None:
        self._locks: dict[str, Lock] = {}
        self._registry_lock = Lock()

    def _get_lock(self, program_id: str) -> Lock:
        with self._registry_lock:
            lock = self._locks.get(program_id)
            if lock is None:
                lock = Lock()
                self._locks[program_id] = lock
            return lock

    @contextmanager
    def lock_for(self, program_id: str) -> Iterator[None]:
        """Hold the program's lock for the duration of the block.

        Args:
            program_id: Program identifier
        """
        lock = self._get_lock(program_id)
        with lock:
            logger.trace("Program lock acquired", program_id=program_id)
            yield
        logger.trace("Program lock released", program_id=program_id)

    def forget(self, program_id: str) -> None:
        """Drop the lock of a program that is no longer in use."""
        with self._registry_lock:
            self._locks.pop(program_id, None)

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._locks)
