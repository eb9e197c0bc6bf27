"""Running a dinner: philosopher threads, the monitor and status output."""

from __future__ import annotations

import enum
import sys
import threading
import time
from collections.abc import Sequence
from typing import TextIO

from .parse import InputError, Settings, parse_args
from .table import Philosopher, Table
from .timing import now_ms

_DESYNC_US = 30_000
_THINK_FACTOR = 0.42
_LONE_POLL_US = 200
_MONITOR_PAUSE_S = 0.0001


class Status(enum.Enum):
    """Events a philosopher reports during the dinner."""

    EATING = "is eating"
    SLEEPING = "is sleeping"
    THINKING = "is thinking"
    TAKE_FIRST_FORK = "has taken a fork"
    TAKE_SECOND_FORK = "has taken a fork"
    DIED = "died"

    @property
    def message(self) -> str:
        return self.value


class Dinner:
    """One simulation run over a freshly laid table."""

    def __init__(self, settings: Settings, out: TextIO | None = None) -> None:
        self.settings = settings
        self.table = Table(settings)
        self.out = out if out is not None else sys.stdout

    def write_status(self, status: Status, philo: Philosopher) -> None:
        """Print a timestamped status line unless the philosopher is full.

        Only a death is reported once the simulation has finished.
        """
        elapsed = now_ms() - self.table.start_ms
        if philo.full:
            return
        with self.table.write_lock:
            if status is Status.DIED or not self.table.finished:
                self.out.write(f" {elapsed}   {philo.id} {status.message}\n")

    def philosopher_died(self, philo: Philosopher) -> bool:
        """True if the philosopher has gone hungry longer than time_to_die."""
        if philo.full:
            return False
        elapsed = now_ms() - philo.last_meal_time
        return elapsed > self.settings.time_to_die // 1000

    def think(self, philo: Philosopher, pre_sim: bool) -> None:
        """Think; with an odd number of philosophers, pause to stay fair."""
        if not pre_sim:
            self.write_status(Status.THINKING, philo)
        if self.settings.philosophers % 2 == 0:
            return
        t_think = max(self.settings.time_to_eat * 2 - self.settings.time_to_sleep, 0)
        self.table.sleep(t_think * _THINK_FACTOR)

    def _eat(self, philo: Philosopher) -> None:
        with philo.first_fork.lock:
            self.write_status(Status.TAKE_FIRST_FORK, philo)
            with philo.second_fork.lock:
                self.write_status(Status.TAKE_SECOND_FORK, philo)
                philo.record_meal(now_ms())
                philo.meals_count += 1
                self.write_status(Status.EATING, philo)
                self.table.sleep(self.settings.time_to_eat)
                if (
                    self.settings.has_meal_limit
                    and philo.meals_count == self.settings.meal_limit
                ):
                    philo.mark_full()

    def _desync(self, philo: Philosopher) -> None:
        if self.settings.philosophers % 2 == 0:
            if philo.id % 2 == 0:
                self.table.sleep(_DESYNC_US)
        elif philo.id % 2:
            self.think(philo, True)

    def _start_philosopher(self, philo: Philosopher) -> None:
        self.table.wait_until_ready()
        philo.record_meal(now_ms())
        self.table.register_running()

    def _dine(self, philo: Philosopher) -> None:
        self._start_philosopher(philo)
        self._desync(philo)
        while not self.table.finished:
            if philo.full:
                break
            self._eat(philo)
            self.write_status(Status.SLEEPING, philo)
            self.table.sleep(self.settings.time_to_sleep)
            self.think(philo, False)

    def _dine_alone(self, philo: Philosopher) -> None:
        self._start_philosopher(philo)
        self.write_status(Status.TAKE_FIRST_FORK, philo)
        while not self.table.finished:
            time.sleep(_LONE_POLL_US / 1_000_000)

    def _monitor(self) -> None:
        while not self.table.all_running():
            time.sleep(0)
        while not self.table.finished:
            for philo in self.table.philosophers:
                if self.table.finished:
                    break
                if self.philosopher_died(philo):
                    self.table.finish()
                    self.write_status(Status.DIED, philo)
            time.sleep(_MONITOR_PAUSE_S)

    def run(self) -> None:
        """Start every thread, wait for the philosophers, then stop the monitor."""
        philosophers = self.table.philosophers
        target = self._dine_alone if len(philosophers) == 1 else self._dine
        threads = [
            threading.Thread(target=target, args=(philo,), name=f"philo-{philo.id}")
            for philo in philosophers
        ]
        for thread in threads:
            thread.start()
        monitor = threading.Thread(target=self._monitor, name="monitor")
        monitor.start()
        self.table.start_ms = now_ms()
        self.table.mark_ready()
        for thread in threads:
            thread.join()
        self.table.finish()
        monitor.join()


def run(settings: Settings, out: TextIO | None = None) -> Dinner:
    """Run a complete dinner and return it for inspection."""
    dinner = Dinner(settings, out)
    dinner.run()
    return dinner


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point; returns the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = parse_args(args)
    except InputError as error:
        print(error)
        return 1
    run(settings)
    return 0