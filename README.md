# coopsched

Small, dependency-free building blocks for cooperative multitasking in Python.
Every task is a generator that runs until it yields, and a scheduler gives each
unfinished task a turn in round-robin order until all of them have finished.

## What is inside

| Module | What it provides |
| --- | --- |
| `coopsched.scheduler` | `Scheduler` with a bounded task list (`spawn` raises `TaskQueueFullError` when it is full), `Coroutine` state, `now_ms()` and two demo tasks, `greeter_task` and `worker_task`. |
| `coopsched.asyncwait` | Tasks that wait on a clock without blocking (`single_delay_task`, `repeating_delay_task`) and the `schedule` loop that drives them. |
| `coopsched.blatant` | A fixed-size `TaskTable` (three slots by default; `add` returns `False` when full) of `counting_task` generators, run until every task is done. |
| `coopsched.duff` | Ten small generator tasks (`count_up`, `countdown`, `evens`, `fibonacci`, `sleeper`, `led_pattern`, `char_counter`, `sensor`, `bit_toggle`, `progress`), `default_tasks()` and `run_round_robin`, which yields their lines interleaved. |
| `coopsched.mutex` | `SpinLock` (`try_lock`, `lock`, `unlock`, usable with `with`) and `OwnedMutex`; unlocking an `OwnedMutex` from a task that does not hold it raises `NotOwnerError`. |
| `coopsched.shared_counter` | A `SharedCounter` updated by two interleaved tasks, with (`run_with_mutex`) and without (`run_without_mutex`) a lock; both return the final value. |
| `coopsched.messaging` | `Mailbox` ring buffers (`QueueFullError` when full), `Worker` tasks that receive messages, optionally with a timeout that raises `TimeoutError`, and a `MessageScheduler` that stops after a bounded number of loops. |

Schedulers and tasks accept `clock`, `sleep` and `out` callables where time or
output matter, so they can be driven deterministically.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Using it from code

Run the ten demo generators side by side:

```python
from coopsched.duff import default_tasks, run_round_robin

for line in run_round_robin(default_tasks()):
    print(line)
```

Guard a critical section shared by cooperative tasks:

```python
from coopsched.mutex import NotOwnerError, OwnedMutex

mutex = OwnedMutex()
if mutex.try_lock(1):
    try:
        mutex.unlock(2)      # task 2 does not own the lock
    except NotOwnerError:
        pass
    mutex.unlock(1)
```

Hand messages to workers:

```python
from coopsched.messaging import MessageScheduler, worker

sched = MessageScheduler()
first = sched.add(worker)
first.send("Hello from main to coro 1")
sched.run()
```

## Command-line demos

Each demo runs its tasks and prints what they do:

```
coopsched-scheduler                        # two timed tasks on the bounded scheduler
coopsched-asyncwait                        # non-blocking delays driven by a clock
coopsched-blatant                          # counting tasks in a fixed task table, then waits for Enter
coopsched-duff                             # ten interleaved generator tasks, then waits for Enter
coopsched-shared-counter                   # a shared counter guarded by a mutex, then waits for Enter
coopsched-shared-counter --without-mutex   # the same counter with no locking
coopsched-messaging                        # workers draining their mailboxes (20 loops at most)
coopsched-messaging --timeout              # workers that time out waiting (100 loops, 100 ms apart)
```

## What it does not do

All tasks run in a single thread and switch only where they yield; nothing is
preempted, and no task runs in parallel with another.