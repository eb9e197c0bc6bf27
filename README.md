# diningphil

diningphil simulates the dining philosophers problem. Each philosopher runs in its own thread. A monitor thread checks for starvation.

The philosophers sit around a table. There is one fork between each pair of neighbours. To eat, a philosopher takes two forks. It then sleeps, thinks, and tries to eat again. A philosopher dies when more than `TIME_TO_DIE` milliseconds have passed since it last started a meal. The first death ends the simulation.

## Installation

```
pip install .
```

## Usage

```
diningphil NUMBER_OF_PHILOSOPHERS TIME_TO_DIE TIME_TO_EAT TIME_TO_SLEEP [MEALS]
```

- All times are in milliseconds. None of the three times may be below 6 ms.
- Each argument is read as a number of at most ten digits.
  - A `-` sign is rejected with `Only positive numbers`.
  - An argument with no digits is rejected with `Not a digit`.
  - More than ten digits is rejected with `Value too big`.
  - Text after the digits is ignored, so `5abc` is read as 5.
  - Leading whitespace or a `+` passes validation, but the value is then read as 0.
- `MEALS` is optional. When it is greater than zero, a philosopher stops once it has eaten that many meals. A philosopher that has stopped prints nothing more and cannot die. The simulation ends when every philosopher has stopped. A `MEALS` of 0 means there is no limit.
- With a single philosopher, it takes one fork and waits until it dies.

Example:

```
diningphil 5 800 200 200 7
```

Each event is printed to standard output as one line:

```
 0   1 has taken a fork
 0   1 has taken a fork
 0   1 is eating
 200   1 is sleeping
 400   1 is thinking
 810   3 died
```

- The first column is the number of milliseconds since the simulation started.
- The second column is the philosopher's number, counting from 1.
- Once the simulation has ended, only the death line is printed.

On a wrong argument count the program prints `WRONG INPUT`. A time below 6 ms gives `Use timestamps mayor than 60ms`. For any other invalid argument it prints one of the messages listed above. In every error case the message goes to standard output and the program exits with status 1.

## Library use

```python
import sys
from diningphil.parse import parse_args, InputError
from diningphil.simulation import run

try:
    settings = parse_args(["4", "410", "200", "200"])
except InputError as exc:
    print(exc)
else:
    dinner = run(settings, sys.stdout)
    print([p.meals_count for p in dinner.table.philosophers])
```

### Modules

- `diningphil.parse`
  - `parse_args(args)` takes the four or five arguments, without the program name, and returns a frozen `Settings`. In `Settings`, durations are stored in microseconds.
  - `parse_positive(text)` reads a single number.
  - Both raise `InputError`, which is a subclass of `ValueError`.
- `diningphil.simulation`
  - `Dinner(settings, out=None)` holds one run. Its `run()` method starts the threads and waits for them.
  - `run(settings, out=None)` builds a `Dinner`, runs it, and returns it.
  - `Status` lists the events that can be reported.
  - `main(argv=None)` is the command entry point. It returns the exit status.
- `diningphil.table`
  - `Table` holds the shared state of a dinner: its `forks`, its `philosophers`, the ready and finished flags, and the count of running threads.
  - `Philosopher` and `Fork` are the objects seated at it.
  - `Table.sleep(usec)` sleeps but returns early once the simulation has finished.
- `diningphil.timing`
  - `now_ms()` and `now_us()` are wall-clock readings.
  - `precise_sleep(usec, should_stop)` sleeps for `usec` microseconds and can be interrupted.

## Running the tests

```
pip install .[test]
pytest
```