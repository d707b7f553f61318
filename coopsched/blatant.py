"""A fixed-size task table that steps each generator task in turn."""

from __future__ import annotations

import time
from typing import Callable, Iterator

MAX_TASKS = 3


def _sleep_ms(ms: int) -> None:
    time.sleep(ms / 1000)


def counting_task(
    label: str,
    limit: int,
    delay_ms: int,
    sleep: Callable[[int], None] | None = None,
    out: Callable[[str], None] = print,
) -> Iterator[None]:
    """Report a step, pause, and yield, ``limit`` times."""
    pause = sleep if sleep is not None else _sleep_ms
    for step in range(limit):
        out(f"Task {label} - Step {step}")
        pause(delay_ms)
        yield


class TaskTable:
    """Holds up to ``capacity`` tasks and runs them round-robin."""

    def __init__(self, capacity: int = MAX_TASKS) -> None:
        self.capacity = capacity
        self._tasks: list[Iterator[object]] = []

    def __len__(self) -> int:
        return len(self._tasks)

    def add(self, task: Iterator[object]) -> bool:
        """Add a task; a full table ignores it and returns False."""
        if len(self._tasks) >= self.capacity:
            return False
        self._tasks.append(iter(task))
        return True

    def run(self) -> None:
        """Step every unfinished task until all of them are done."""
        pending = list(self._tasks)
        while pending:
            still_running = []
            for task in pending:
                try:
                    next(task)
                except StopIteration:
                    continue
                still_running.append(task)
            pending = still_running


def main(argv: list[str] | None = None) -> int:
    table = TaskTable()
    table.add(counting_task("1", 120, 200))
    table.add(counting_task("1", 120, 200))
    table.add(counting_task("3", 125, 1))
    table.run()
    print("Semua task selesai.\nPress any key to exit.", end="", flush=True)
    try:
        input()
    except EOFError:
        pass
    return 0