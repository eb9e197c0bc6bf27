import io
import re

import pytest

from diningphil.parse import Settings
from diningphil.simulation import Dinner, Status, main, run
from diningphil.timing import now_ms

LINE = re.compile(r"^ (\d+)   (\d+) (has taken a fork|is eating|is sleeping|is thinking|died)$")


def _settings(n=2, die=800, eat=60, sleep=60, limit=-1):
    return Settings(n, die * 1000, eat * 1000, sleep * 1000, limit)


def _lines(text):
    return text.splitlines()


@pytest.mark.parametrize(
    "status, message",
    [
        (Status.EATING, "is eating"),
        (Status.SLEEPING, "is sleeping"),
        (Status.THINKING, "is thinking"),
        (Status.TAKE_FIRST_FORK, "has taken a fork"),
        (Status.TAKE_SECOND_FORK, "has taken a fork"),
        (Status.DIED, "died"),
    ],
)
def test_status_messages(status, message):
    out = io.StringIO()
    dinner = Dinner(_settings(), out)
    dinner.table.start_ms = now_ms()
    dinner.write_status(status, dinner.table.philosophers[0])
    assert status.message == message
    assert out.getvalue().endswith("   1 " + message + "\n")


def test_write_status_format():
    out = io.StringIO()
    dinner = Dinner(_settings(), out)
    dinner.table.start_ms = now_ms()
    dinner.write_status(Status.EATING, dinner.table.philosophers[1])
    match = LINE.match(out.getvalue().rstrip("\n"))
    assert match is not None
    assert match.group(2) == "2"
    assert match.group(3) == "is eating"
    assert int(match.group(1)) < 1000


def test_write_status_suppressed_after_finish_except_death():
    out = io.StringIO()
    dinner = Dinner(_settings(), out)
    dinner.table.start_ms = now_ms()
    philo = dinner.table.philosophers[0]
    dinner.table.finish()
    dinner.write_status(Status.SLEEPING, philo)
    assert out.getvalue() == ""
    dinner.write_status(Status.DIED, philo)
    assert out.getvalue().endswith("   1 died\n")


def test_write_status_silent_for_full_philosopher():
    out = io.StringIO()
    dinner = Dinner(_settings(), out)
    philo = dinner.table.philosophers[0]
    philo.mark_full()
    dinner.write_status(Status.DIED, philo)
    assert out.getvalue() == ""


def test_philosopher_died_checks():
    dinner = Dinner(_settings(die=100))
    philo = dinner.table.philosophers[0]
    philo.record_meal(now_ms())
    assert dinner.philosopher_died(philo) is False
    philo.record_meal(now_ms() - 500)
    assert dinner.philosopher_died(philo) is True
    philo.mark_full()
    assert dinner.philosopher_died(philo) is False


def test_think_writes_unless_pre_sim():
    out = io.StringIO()
    dinner = Dinner(_settings(n=2), out)
    philo = dinner.table.philosophers[0]
    dinner.think(philo, True)
    assert out.getvalue() == ""
    dinner.think(philo, False)
    assert out.getvalue().endswith("   1 is thinking\n")


def test_single_philosopher_takes_fork_then_dies():
    out = io.StringIO()
    dinner = run(_settings(n=1, die=60), out)
    lines = _lines(out.getvalue())
    assert all(LINE.match(line) for line in lines)
    assert lines[0].endswith("1 has taken a fork")
    assert lines[-1].endswith("1 died")
    assert dinner.table.finished is True


def test_meal_limit_ends_without_death():
    out = io.StringIO()
    dinner = run(_settings(n=2, die=800, limit=2), out)
    lines = _lines(out.getvalue())
    assert all(LINE.match(line) for line in lines)
    assert not any(line.endswith("died") for line in lines)
    for philo in dinner.table.philosophers:
        assert philo.meals_count == 2
        assert philo.full is True
        eating = [l for l in lines if LINE.match(l).group(2) == str(philo.id)
                  and l.endswith("is eating")]
        assert len(eating) == 2


def test_starvation_reports_exactly_one_death_last():
    out = io.StringIO()
    run(_settings(n=2, die=60, eat=100, sleep=60), out)
    lines = _lines(out.getvalue())
    deaths = [line for line in lines if line.endswith("died")]
    assert len(deaths) == 1
    assert lines[-1] == deaths[0]


def test_timestamps_never_decrease():
    out = io.StringIO()
    run(_settings(n=3, die=800, limit=1), out)
    stamps = [int(LINE.match(line).group(1)) for line in _lines(out.getvalue())]
    assert stamps == sorted(stamps)


def test_main_runs_simulation(capsys):
    assert main(["1", "60", "60", "60"]) == 0
    lines = _lines(capsys.readouterr().out)
    assert lines[-1].endswith("1 died")