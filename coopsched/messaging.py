"""Cooperative workers that exchange messages through bounded mailboxes."""

from __future__ import annotations

import argparse
import time
from collections import deque
from typing import Any, Callable, Iterator

from coopsched.scheduler import TaskQueueFullError, now_ms

MAX_COROUTINES = 16
MSG_QUEUE_SIZE = 8
MAX_SCHEDULER_LOOPS = 20
TIMED_MAX_SCHEDULER_LOOPS = 100
RECEIVE_TIMEOUT_MS = 3000

Clock = Callable[[], int]
Output = Callable[[str], None]
WorkerFunc = Callable[["Worker", Output], Iterator[object]]


class QueueFullError(Exception):
    """Raised when a message is sent to a full mailbox."""


def _sleep_ms(ms: int) -> None:
    time.sleep(ms / 1000)


class Mailbox:
    """A ring buffer of ``size`` slots that holds at most ``size - 1`` messages."""

    def __init__(self, size: int = MSG_QUEUE_SIZE) -> None:
        if size < 2:
            raise ValueError("mailbox size must be at least 2")
        self.size = size
        self._messages: deque[Any] = deque()

    def send(self, message: Any) -> None:
        if len(self._messages) >= self.size - 1:
            raise QueueFullError("queue full")
        self._messages.append(message)

    def receive(self) -> Any | None:
        """Return the oldest message, or None when the mailbox is empty."""
        if not self._messages:
            return None
        return self._messages.popleft()

    def __len__(self) -> int:
        return len(self._messages)


class Worker:
    """A cooperative task with its own mailbox."""

    def __init__(self, worker_id: int, func: WorkerFunc, clock: Clock = now_ms) -> None:
        self.id = worker_id
        self.func = func
        self.clock = clock
        self.out: Output = print
        self.mailbox = Mailbox()
        self.finished = False
        self.wait_start: int | None = None
        self._task: Iterator[object] | None = None

    def send(self, message: Any) -> None:
        try:
            self.mailbox.send(message)
        except QueueFullError:
            raise QueueFullError(
                f"Queue full for coro {self.id}, message lost"
            ) from None
        self.out(f"Message sent to coro {self.id}")

    def receive(self) -> Any | None:
        """Take the next message, or None if there is none."""
        if not len(self.mailbox):
            return None
        message = self.mailbox.receive()
        self.out(f"Coro {self.id} received a message")
        return message

    def receive_with_timeout(self, max_wait_ms: int) -> Any | None:
        """Take the next message; None while waiting; TimeoutError once waited too long."""
        if len(self.mailbox):
            self.wait_start = self.clock()
            return self.receive()

        now = self.clock()
        if self.wait_start is None:
            self.wait_start = now
            self.out(f"Coro {self.id} start waiting for message...")
            return None

        elapsed = now - self.wait_start
        remaining = max(0, max_wait_ms - elapsed)
        self.out(f"Coro {self.id} waiting... {remaining} ms remaining before timeout")

        if elapsed >= max_wait_ms:
            self.wait_start = None
            self.out(f"Coro {self.id} timeout waiting for message")
            raise TimeoutError(f"coro {self.id} timed out waiting for a message")
        return None

    def step(self) -> bool:
        """Advance the task once; return whether it is still running."""
        if self.finished:
            return False
        if self._task is None:
            self._task = iter(self.func(self, self.out))
        try:
            next(self._task)
        except StopIteration:
            self.finished = True
        return not self.finished


class MessageScheduler:
    """Steps every unfinished worker per loop, up to ``max_loops`` loops."""

    def __init__(
        self,
        capacity: int = MAX_COROUTINES,
        max_loops: int = MAX_SCHEDULER_LOOPS,
        sleep: Callable[[int], None] | None = None,
        tick_ms: int = 0,
        out: Output = print,
    ) -> None:
        self.capacity = capacity
        self.max_loops = max_loops
        self._sleep = sleep if sleep is not None else _sleep_ms
        self.tick_ms = tick_ms
        self.out = out
        self.clock: Clock = now_ms
        self.workers: list[Worker] = []

    def add(self, func: WorkerFunc) -> Worker:
        if len(self.workers) >= self.capacity:
            raise TaskQueueFullError("Too many coroutines")
        worker_obj = Worker(len(self.workers), func, self.clock)
        worker_obj.out = self.out
        self.workers.append(worker_obj)
        return worker_obj

    def run(self) -> int:
        """Run until no worker is left or ``max_loops`` is reached; return loops run."""
        active = True
        loop = 0
        while active and loop < self.max_loops:
            active = False
            self.out(f"=== Scheduler loop {loop} ===")
            for w in self.workers:
                if not w.finished:
                    self.out(f"Calling coro {w.id}")
                    w.step()
                    active = True
            if self.tick_ms > 0:
                self._sleep(self.tick_ms)
            loop += 1
        if loop == self.max_loops:
            self.out("Scheduler stopped after max loops.")
        return loop


def worker(w: Worker, out: Output = print) -> Iterator[None]:
    """Drain the mailbox, yielding whenever it is empty."""
    while True:
        message = w.receive()
        if message is not None:
            out(f"[Coro {w.id}] Received message: {message}")
        else:
            out(f"[Coro {w.id}] No message, yield")
            yield


def timed_worker(w: Worker, out: Output = print) -> Iterator[None]:
    """Take at most one message per step, reporting timeouts."""
    while True:
        try:
            message = w.receive_with_timeout(RECEIVE_TIMEOUT_MS)
        except TimeoutError:
            out(f"[Coro {w.id}] Timeout!")
        else:
            if message is not None:
                out(f"[Coro {w.id}] Received message: {message}")
            else:
                out(f"[Coro {w.id}] No message, yield")
        yield


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Message passing demo.")
    parser.add_argument(
        "--timeout",
        action="store_true",
        help="use workers that time out while waiting for messages",
    )
    args = parser.parse_args(argv)

    if args.timeout:
        sched = MessageScheduler(max_loops=TIMED_MAX_SCHEDULER_LOOPS, tick_ms=100)
        func: WorkerFunc = timed_worker
    else:
        sched = MessageScheduler()
        func = worker

    first = sched.add(func)
    second = sched.add(func)
    first.send("Hello from main to coro 1")
    second.send("Hello from main to coro 2")
    sched.run()
    return 0