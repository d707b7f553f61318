"""A small round-robin scheduler for generator-based cooperative tasks."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterator

MAX_TASKS = 10
DEFAULT_TICK_MS = 100

Clock = Callable[[], int]
Sleep = Callable[[int], None]
Output = Callable[[str], None]
TaskFactory = Callable[["Coroutine"], Iterator[object]]


class TaskQueueFullError(Exception):
    """Raised when a task is spawned on a scheduler that is already full."""


def now_ms() -> int:
    """Return a monotonic timestamp in whole milliseconds."""
    return time.monotonic_ns() // 1_000_000


def _sleep_ms(ms: int) -> None:
    time.sleep(ms / 1000)


@dataclass
class Coroutine:
    """Per-task state shared between the scheduler and the task body."""

    id: int
    wakeup_time: int = 0
    done: bool = False


class Scheduler:
    """Runs spawned tasks in turn until none of them yields in a round."""

    def __init__(
        self,
        clock: Clock = now_ms,
        sleep: Sleep | None = None,
        capacity: int = MAX_TASKS,
        tick_ms: int = DEFAULT_TICK_MS,
    ) -> None:
        self.clock = clock
        self._sleep = sleep if sleep is not None else _sleep_ms
        self.capacity = capacity
        self.tick_ms = tick_ms
        self._entries: list[tuple[Coroutine, Iterator[object]]] = []

    @property
    def coroutines(self) -> list[Coroutine]:
        return [coro for coro, _ in self._entries]

    def spawn(self, func: TaskFactory) -> Coroutine:
        """Register a task; ``func`` receives its Coroutine and returns an iterator."""
        if len(self._entries) >= self.capacity:
            raise TaskQueueFullError("Task queue full")
        coro = Coroutine(id=len(self._entries) + 1)
        self._entries.append((coro, iter(func(coro))))
        return coro

    def run(self) -> None:
        """Step every unfinished task each round, pausing ``tick_ms`` between rounds."""
        while True:
            active = 0
            for coro, task in self._entries:
                if coro.done:
                    continue
                try:
                    next(task)
                except StopIteration:
                    coro.done = True
                else:
                    active += 1
            self._sleep(self.tick_ms)
            if not active:
                break


def greeter_task(
    coro: Coroutine, clock: Clock = now_ms, out: Output = print
) -> Iterator[None]:
    """Announce itself, then keep yielding for one second."""
    out(f"[Task {coro.id}] Hello, sleep...")
    coro.wakeup_time = clock() + 1000
    while clock() < coro.wakeup_time:
        yield
        out(f"[Task {coro.id}] Hello, sleeping...")
    out(f"[Task {coro.id}] Done")


def worker_task(
    coro: Coroutine, clock: Clock = now_ms, out: Output = print
) -> Iterator[None]:
    """Report work on every step for two seconds."""
    out(f"[Task {coro.id}] Hello, i am working...")
    coro.wakeup_time = clock() + 2000
    while clock() < coro.wakeup_time:
        out(f"[Task {coro.id}] Oh, hi...")
        yield
    out(f"[Task {coro.id}] Done")


def main(argv: list[str] | None = None) -> int:
    scheduler = Scheduler()
    scheduler.spawn(greeter_task)
    scheduler.spawn(worker_task)
    scheduler.run()
    return 0