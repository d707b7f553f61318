"""Timed waits inside cooperative tasks driven by a simple round-robin loop."""

from __future__ import annotations

import time
from typing import Callable, Iterator, Sequence

from coopsched.scheduler import Coroutine, now_ms

Clock = Callable[[], int]
Output = Callable[[str], None]
TaskFactory = Callable[[Coroutine], Iterator[object]]


def _sleep_ms(ms: int) -> None:
    time.sleep(ms / 1000)


def single_delay_task(
    coro: Coroutine, clock: Clock = now_ms, out: Output = print
) -> Iterator[None]:
    """Wait three seconds, then say goodbye."""
    out(f"[Task {coro.id}] Hello from task_func1, sleeping 3000ms")
    coro.wakeup_time = clock() + 3000
    while clock() < coro.wakeup_time:
        yield
    out(f"[Task {coro.id}] Goodbye from task_func1")


def repeating_delay_task(
    coro: Coroutine, clock: Clock = now_ms, out: Output = print
) -> Iterator[None]:
    """Wait five seconds, three times over."""
    for count in range(3):
        out(
            f"[Task {coro.id}] task_func2 iteration {count + 1}, sleeping 5000ms"
        )
        coro.wakeup_time = clock() + 5000
        while clock() < coro.wakeup_time:
            yield
    out(f"[Task {coro.id}] task_func2 finished")


def schedule(
    coros: Sequence[Coroutine],
    funcs: Sequence[TaskFactory],
    sleep: Callable[[int], None] | None = None,
    tick_ms: int = 100,
) -> None:
    """Run each function with its coroutine until none yields in a round."""
    pause = sleep if sleep is not None else _sleep_ms
    tasks = [(coro, iter(func(coro))) for coro, func in zip(coros, funcs, strict=True)]
    while True:
        active = 0
        for coro, task in tasks:
            if coro.done:
                continue
            try:
                next(task)
            except StopIteration:
                coro.done = True
            else:
                active += 1
        pause(tick_ms)
        if not active:
            break


def main(argv: list[str] | None = None) -> int:
    coros = [Coroutine(id=1), Coroutine(id=2)]
    print("Hello from main thread")
    schedule(coros, [single_delay_task, repeating_delay_task])
    print("Goodbye from main thread")
    return 0