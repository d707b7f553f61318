"""Cooperative multitasking: generator tasks, round-robin schedulers, mutexes and mailboxes."""

__version__ = "0.1.0"
__all__ = [
    "asyncwait",
    "blatant",
    "duff",
    "messaging",
    "mutex",
    "scheduler",
    "shared_counter",
]