from functools import partial

import pytest

from coopsched.asyncwait import repeating_delay_task, schedule, single_delay_task
from coopsched.scheduler import Coroutine


class FakeTime:
    def __init__(self):
        self.now = 0
        self.sleeps = []

    def clock(self):
        return self.now

    def sleep(self, ms):
        self.sleeps.append(ms)
        self.now += ms


def test_single_delay_task_lines_and_wait():
    fake = FakeTime()
    lines = []
    coro = Coroutine(id=1)
    schedule(
        [coro],
        [partial(single_delay_task, clock=fake.clock, out=lines.append)],
        sleep=fake.sleep,
    )
    assert lines == [
        "[Task 1] Hello from task_func1, sleeping 3000ms",
        "[Task 1] Goodbye from task_func1",
    ]
    assert coro.done
    assert fake.now >= 3000


def test_repeating_delay_task_iterations():
    fake = FakeTime()
    lines = []
    coro = Coroutine(id=2)
    schedule(
        [coro],
        [partial(repeating_delay_task, clock=fake.clock, out=lines.append)],
        sleep=fake.sleep,
    )
    assert lines[-1] == "[Task 2] task_func2 finished"
    iterations = [line for line in lines if "iteration" in line]
    assert iterations == [
        f"[Task 2] task_func2 iteration {n}, sleeping 5000ms" for n in (1, 2, 3)
    ]
    assert fake.now >= 5000 * 3


def test_both_tasks_interleave_and_finish():
    fake = FakeTime()
    lines = []
    coros = [Coroutine(id=1), Coroutine(id=2)]
    schedule(
        coros,
        [
            partial(single_delay_task, clock=fake.clock, out=lines.append),
            partial(repeating_delay_task, clock=fake.clock, out=lines.append),
        ],
        sleep=fake.sleep,
    )
    assert all(c.done for c in coros)
    assert lines[0].startswith("[Task 1]")
    assert lines[1].startswith("[Task 2]")
    assert lines.index("[Task 1] Goodbye from task_func1") < lines.index(
        "[Task 2] task_func2 finished"
    )


def test_schedule_uses_tick():
    fake = FakeTime()
    schedule([Coroutine(id=1)], [lambda c: iter([None])], sleep=fake.sleep, tick_ms=25)
    assert set(fake.sleeps) == {25}
    assert len(fake.sleeps) == 2


def test_schedule_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        schedule([Coroutine(id=1)], [], sleep=lambda ms: None)