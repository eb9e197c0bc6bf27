"""Shared state of a dinner: forks, philosophers and synchronisation flags."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from .parse import Settings
from .timing import precise_sleep


@dataclass
class Fork:
    """A fork on the table, guarded by its own lock."""

    fork_id: int
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)


class Philosopher:
    """A philosopher seated between two forks."""

    def __init__(self, philo_id: int, first_fork: Fork, second_fork: Fork) -> None:
        self.id = philo_id
        self.first_fork = first_fork
        self.second_fork = second_fork
        self.meals_count = 0
        self._full = False
        self._last_meal_time = 0
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Philosopher(id={self.id}, meals_count={self.meals_count}, full={self.full})"

    @property
    def full(self) -> bool:
        with self._lock:
            return self._full

    @property
    def last_meal_time(self) -> int:
        with self._lock:
            return self._last_meal_time

    def record_meal(self, when_ms: int) -> None:
        """Record the moment (in milliseconds) the latest meal started."""
        with self._lock:
            self._last_meal_time = when_ms

    def mark_full(self) -> None:
        """Mark this philosopher as having eaten enough."""
        with self._lock:
            self._full = True


class Table:
    """The dinner table: seats philosophers and tracks simulation state."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.start_ms = 0
        self.write_lock = threading.Lock()
        self._lock = threading.Lock()
        self._ready = threading.Event()
        self._finished = False
        self._threads_running = 0
        count = settings.philosophers
        self.forks = [Fork(i) for i in range(count)]
        self.philosophers = [
            Philosopher(position + 1, *self._forks_for(position + 1, position))
            for position in range(count)
        ]

    def _forks_for(self, philo_id: int, position: int) -> tuple[Fork, Fork]:
        left = self.forks[position]
        right = self.forks[(position + 1) % len(self.forks)]
        if philo_id % 2 == 0:
            return left, right
        return right, left

    @property
    def finished(self) -> bool:
        with self._lock:
            return self._finished

    @property
    def ready(self) -> bool:
        return self._ready.is_set()

    @property
    def threads_running(self) -> int:
        with self._lock:
            return self._threads_running

    def finish(self) -> None:
        """Signal the end of the simulation."""
        with self._lock:
            self._finished = True

    def mark_ready(self) -> None:
        """Release every thread waiting in wait_until_ready."""
        self._ready.set()

    def wait_until_ready(self) -> None:
        """Block until mark_ready has been called."""
        self._ready.wait()

    def register_running(self) -> None:
        """Count one more philosopher thread as running."""
        with self._lock:
            self._threads_running += 1

    def all_running(self) -> bool:
        """True once every philosopher thread has registered."""
        with self._lock:
            return self._threads_running == self.settings.philosophers

    def sleep(self, usec: float) -> None:
        """Sleep for ``usec`` microseconds unless the simulation finishes first."""
        precise_sleep(usec, lambda: self.finished)