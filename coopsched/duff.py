"""Ten small generator tasks interleaved by a round-robin driver."""

from __future__ import annotations

from typing import Iterable, Iterator

_LED_PATTERN = ("OFF", "ON", "ON", "OFF")
_WORD = "DuffsDevice"


def count_up() -> Iterator[str]:
    for n in range(1, 4):
        yield f"[task0] count: {n}"


def countdown() -> Iterator[str]:
    for n in range(3, 0, -1):
        yield f"[task1] countdown: {n}"


def evens() -> Iterator[str]:
    for n in range(0, 5, 2):
        yield f"[task2] even: {n}"


def fibonacci() -> Iterator[str]:
    a, b = 0, 1
    for _ in range(12):
        yield f"[task3] fib: {a}"
        a, b = b, a + b


def sleeper() -> Iterator[str]:
    for _ in range(8):
        yield "[task4] sleeping..."
        yield "[task4] woke up"


def led_pattern() -> Iterator[str]:
    for state in _LED_PATTERN:
        yield f"[task5] LED: {state}"


def char_counter() -> Iterator[str]:
    for ch in _WORD:
        yield f"[task6] char: {ch}"


def sensor() -> Iterator[str]:
    for n in range(4):
        yield f"[task7] sensor: {100 + n * 5}"


def bit_toggle() -> Iterator[str]:
    bit = 0
    for _ in range(5):
        bit ^= 1
        yield f"[task8] bit: {bit}"


def progress() -> Iterator[str]:
    for n in range(0, 101, 10):
        yield f"[task9] progress: {n}%"


def default_tasks() -> list[Iterator[str]]:
    """Fresh instances of all ten tasks, in order."""
    return [
        count_up(),
        countdown(),
        evens(),
        fibonacci(),
        sleeper(),
        led_pattern(),
        char_counter(),
        sensor(),
        bit_toggle(),
        progress(),
    ]


def run_round_robin(tasks: Iterable[Iterator[str]]) -> Iterator[str]:
    """Yield one item from each unfinished task per round until all are done."""
    pending = [iter(task) for task in tasks]
    while pending:
        still_running = []
        for task in pending:
            try:
                item = next(task)
            except StopIteration:
                continue
            yield item
            still_running.append(task)
        pending = still_running


def main(argv: list[str] | None = None) -> int:
    for line in run_round_robin(default_tasks()):
        print(line)
    print("All tasks finished.\nEnter to exit.", end="", flush=True)
    try:
        input()
    except EOFError:
        pass
    return 0