import pytest

from coopsched.mutex import OwnedMutex
from coopsched.shared_counter import (
    SharedCounter,
    locked_task_a,
    locked_task_b,
    main,
    run_with_mutex,
    run_without_mutex,
    unlocked_task_a,
    unlocked_task_b,
)


def test_run_with_mutex_final_value():
    lines = []
    assert run_with_mutex(5, lines.append) == 55


def test_run_with_mutex_zero_rounds():
    lines = []
    assert run_with_mutex(0, lines.append) == 0
    assert lines == []


def test_illegal_unlock_reported_once():
    lines = []
    run_with_mutex(5, lines.append)
    assert lines.count("Task A akan gagal unlock (simulasi)") == 1
    assert (
        lines.count("ERROR: Task 2 mencoba unlock tapi bukan pemilik (owner = 1)")
        == 1
    )
    assert "Task A gagal unlock" not in lines
    assert "Task B gagal unlock" not in lines


def test_first_round_output_order():
    lines = []
    run_with_mutex(1, lines.append)
    assert lines[:3] == [
        "Task A mencoba lock",
        "Task A dapat lock",
        "Task A update shared_counter: 0 -> 1",
    ]
    assert "Task B update shared_counter: 1 -> 11" in lines


def test_locked_task_a_releases_mutex():
    counter = SharedCounter()
    mutex = OwnedMutex()
    lines = []
    task = locked_task_a(counter, mutex, lines.append)
    next(task)
    assert counter.value == 1
    assert not mutex.locked
    assert lines[-1] == "Task A unlock berhasil"


def test_locked_task_b_waits_for_lock():
    counter = SharedCounter()
    mutex = OwnedMutex()
    assert mutex.try_lock(99)
    lines = []
    task = locked_task_b(counter, mutex, lines.append)
    next(task)
    assert counter.value == 0
    assert lines == ["Task B mencoba lock"]
    next(task)
    assert counter.value == 0
    mutex.unlock(99)
    next(task)
    assert counter.value == 10
    assert not mutex.locked


def test_unlocked_task_a_steps():
    counter = SharedCounter()
    lines = []
    task = unlocked_task_a(counter, lines.append)
    next(task)
    assert counter.value == 1
    assert lines == ["Task A mulai update shared_counter: 0"]
    next(task)
    assert lines[-1] == "Task A selesai update shared_counter: 1"


def test_unlocked_task_b_sees_interleaved_update():
    counter = SharedCounter()
    lines = []
    task_b = unlocked_task_b(counter, lines.append)
    next(task_b)
    assert counter.value == 10
    counter.value += 1
    next(task_b)
    assert lines[-1] == "Task B selesai update shared_counter: 11"


def test_run_without_mutex_final_value():
    lines = []
    assert run_without_mutex(5, lines.append) == 33


def test_without_mutex_increments_only_on_start_steps():
    lines = []
    run_without_mutex(2, lines.append)
    starts = [line for line in lines if "mulai" in line]
    finishes = [line for line in lines if "selesai" in line]
    assert len(starts) == 2
    assert len(finishes) == 2


def test_main_with_mutex(capsys, monkeypatch):
    def no_input():
        raise EOFError

    monkeypatch.setattr("builtins.input", no_input)
    assert main([]) == 0
    assert "Final shared_counter: 55" in capsys.readouterr().out


def test_main_without_mutex(capsys):
    assert main(["--without-mutex"]) == 0
    assert "Final shared_counter: 33" in capsys.readouterr().out


@pytest.mark.parametrize("rounds", [1, 3, 7])
def test_with_mutex_never_leaves_lock_held(rounds):
    lines = []
    run_with_mutex(rounds, lines.append)
    assert lines.count("Task A dapat lock") == rounds
    assert lines.count("Task B dapat lock") == rounds