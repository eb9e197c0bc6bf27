"""Command-line argument parsing for the dining philosophers simulation."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

_WHITESPACE = " \t\n\v\f\r"
_LEADING_DIGITS = re.compile(r"[0-9]*")
_MAX_DIGITS = 10
_MIN_TIMESTAMP_US = 6_000
NO_MEAL_LIMIT = -1


class InputError(ValueError):
    """Raised when the command-line input is not acceptable."""


@dataclass(frozen=True)
class Settings:
    """Simulation parameters; all durations are in microseconds."""

    philosophers: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    meal_limit: int = NO_MEAL_LIMIT

    @property
    def has_meal_limit(self) -> bool:
        return self.meal_limit > 0


def parse_positive(text: str) -> int:
    """Parse a non-negative integer of at most ten digits.

    Leading whitespace and a single '+' are accepted by the validation,
    but the value itself is read from the start of the text, so such a
    prefix yields zero.
    """
    body = text.lstrip(_WHITESPACE)
    if body.startswith("+"):
        body = body[1:]
    elif body.startswith("-"):
        raise InputError("Only positive numbers")
    digits = _LEADING_DIGITS.match(body).group()
    if not digits:
        raise InputError("Not a digit")
    if len(digits) > _MAX_DIGITS:
        raise InputError("Value too big")
    value = _LEADING_DIGITS.match(text).group()
    return int(value) if value else 0


def parse_args(args: Sequence[str]) -> Settings:
    """Build Settings from the four or five positional arguments.

    The arguments are: number of philosophers, time to die, time to eat,
    time to sleep (all in milliseconds) and optionally a meal limit.
    """
    if len(args) not in (4, 5):
        raise InputError("WRONG INPUT")
    philosophers = parse_positive(args[0])
    time_to_die, time_to_eat, time_to_sleep = (
        parse_positive(arg) * 1000 for arg in args[1:4]
    )
    if min(time_to_die, time_to_eat, time_to_sleep) < _MIN_TIMESTAMP_US:
        raise InputError("Use timestamps mayor than 60ms")
    meal_limit = parse_positive(args[4]) if len(args) == 5 else NO_MEAL_LIMIT
    return Settings(
        philosophers=philosophers,
        time_to_die=time_to_die,
        time_to_eat=time_to_eat,
        time_to_sleep=time_to_sleep,
        meal_limit=meal_limit,
    )