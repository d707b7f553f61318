"""Two cooperative tasks updating one counter, with and without a mutex."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Callable, Iterator

from coopsched.mutex import NotOwnerError, OwnedMutex

Output = Callable[[str], None]

TASK_A_ID = 1
TASK_B_ID = 2
DEFAULT_ROUNDS = 5


@dataclass
class SharedCounter:
    """A value that several tasks read and write."""

    value: int = 0


def _unlock(mutex: OwnedMutex, task_id: int, out: Output) -> bool:
    try:
        mutex.unlock(task_id)
    except NotOwnerError as err:
        out(
            f"ERROR: Task {err.task_id} mencoba unlock tapi bukan pemilik "
            f"(owner = {-1 if err.owner is None else err.owner})"
        )
        return False
    return True


def locked_task_a(
    counter: SharedCounter, mutex: OwnedMutex, out: Output = print
) -> Iterator[None]:
    """Add 1 under the mutex; the first pass also tries an illegal unlock."""
    simulated_bad_unlock = False
    while True:
        out("Task A mencoba lock")
        while not mutex.try_lock(TASK_A_ID):
            yield
        out("Task A dapat lock")

        updated = counter.value + 1
        out(f"Task A update shared_counter: {counter.value} -> {updated}")
        counter.value = updated

        if not simulated_bad_unlock:
            out("Task A akan gagal unlock (simulasi)")
            _unlock(mutex, TASK_B_ID, out)
            simulated_bad_unlock = True

        if _unlock(mutex, TASK_A_ID, out):
            out("Task A unlock berhasil")
        else:
            out("Task A gagal unlock")
        yield


def locked_task_b(
    counter: SharedCounter, mutex: OwnedMutex, out: Output = print
) -> Iterator[None]:
    """Add 10 under the mutex."""
    while True:
        out("Task B mencoba lock")
        while not mutex.try_lock(TASK_B_ID):
            yield
        out("Task B dapat lock")

        updated = counter.value + 10
        out(f"Task B update shared_counter: {counter.value} -> {updated}")
        counter.value = updated

        if _unlock(mutex, TASK_B_ID, out):
            out("Task B unlock berhasil")
        else:
            out("Task B gagal unlock")
        yield


def unlocked_task_a(counter: SharedCounter, out: Output = print) -> Iterator[None]:
    """Add 1, yield, then report the value seen afterwards."""
    while True:
        out(f"Task A mulai update shared_counter: {counter.value}")
        counter.value += 1
        yield
        out(f"Task A selesai update shared_counter: {counter.value}")
        yield


def unlocked_task_b(counter: SharedCounter, out: Output = print) -> Iterator[None]:
    """Add 10, yield, then report the value seen afterwards."""
    while True:
        out(f"Task B mulai update shared_counter: {counter.value}")
        counter.value += 10
        yield
        out(f"Task B selesai update shared_counter: {counter.value}")
        yield


def _alternate(tasks: list[Iterator[None]], rounds: int) -> None:
    for _ in range(rounds):
        for task in tasks:
            next(task)


def run_with_mutex(rounds: int = DEFAULT_ROUNDS, out: Output = print) -> int:
    """Step both locked tasks ``rounds`` times and return the final counter."""
    counter = SharedCounter()
    mutex = OwnedMutex()
    _alternate(
        [locked_task_a(counter, mutex, out), locked_task_b(counter, mutex, out)],
        rounds,
    )
    return counter.value


def run_without_mutex(rounds: int = DEFAULT_ROUNDS, out: Output = print) -> int:
    """Step both unlocked tasks ``rounds`` times and return the final counter."""
    counter = SharedCounter()
    _alternate([unlocked_task_a(counter, out), unlocked_task_b(counter, out)], rounds)
    return counter.value


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Shared counter demo.")
    parser.add_argument(
        "--without-mutex",
        action="store_true",
        help="run the tasks without any locking",
    )
    args = parser.parse_args(argv)

    if args.without_mutex:
        final = run_without_mutex()
        print(f"Final shared_counter: {final}")
        return 0

    final = run_with_mutex()
    print(f"Final shared_counter: {final}\nEnter to exit.", end="", flush=True)
    try:
        input()
    except EOFError:
        pass
    return 0