"""Non-blocking locks for cooperative tasks."""

from __future__ import annotations

import threading


class NotOwnerError(Exception):
    """Raised when a task releases a mutex it does not hold."""

    def __init__(self, task_id: int, owner: int | None) -> None:
        super().__init__(
            f"task {task_id} tried to unlock but is not the owner (owner = {owner})"
        )
        self.task_id = task_id
        self.owner = owner


class SpinLock:
    """A test-and-set lock; ``lock`` waits until the flag is free."""

    def __init__(self) -> None:
        self._flag = threading.Lock()

    @property
    def locked(self) -> bool:
        return self._flag.locked()

    def try_lock(self) -> bool:
        """Take the lock if it is free; return whether it was taken."""
        return self._flag.acquire(blocking=False)

    def lock(self) -> None:
        while not self.try_lock():
            pass

    def unlock(self) -> None:
        """Clear the flag; clearing a free lock is harmless."""
        if self._flag.locked():
            try:
                self._flag.release()
            except RuntimeError:
                pass

    def __enter__(self) -> "SpinLock":
        self.lock()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unlock()


class OwnedMutex:
    """A try-lock that records which task holds it and checks on release."""

    def __init__(self) -> None:
        self._flag = threading.Lock()
        self.owner: int | None = None

    @property
    def locked(self) -> bool:
        return self._flag.locked()

    def try_lock(self, task_id: int) -> bool:
        if self._flag.acquire(blocking=False):
            self.owner = task_id
            return True
        return False

    def unlock(self, task_id: int) -> None:
        """Release the mutex; raise NotOwnerError if ``task_id`` does not hold it."""
        if self.owner != task_id:
            raise NotOwnerError(task_id, self.owner)
        self.owner = None
        self._flag.release()