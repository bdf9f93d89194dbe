"""Command-line entry point running the fire simulation with optional display."""

from __future__ import annotations

import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from firesim.model import Model
from firesim.params import (
    HelpRequested,
    ParameterError,
    Params,
    check_params,
    format_params,
    parse_arguments,
)
from firesim.partition import DistributedModel
from firesim.stats import format_statistics

DEFAULT_ITERATIONS = 500
_FRAME_DELAY = 0.1


class _Display(Protocol):
    def update(self, vegetation: Sequence[int], fire: Sequence[int]) -> None: ...

    def quit_requested(self) -> bool: ...


@dataclass
class _SimulationRun:
    """Outcome of a run: final maps and per-iteration timings in microseconds."""

    vegetation: bytes = b""
    fire: bytes = b""
    time_step: int = 0
    model_times: list[float] = field(default_factory=list)
    step_times: list[float] = field(default_factory=list)


def _microseconds_since(start: float) -> float:
    return (time.perf_counter() - start) * 1e6


def run_simulation(
    params: Params,
    iterations: int = DEFAULT_ITERATIONS,
    workers: int = 1,
    displayer: _Display | None = None,
) -> _SimulationRun:
    """Run the model for a number of iterations, showing each frame on the displayer if any.

    With one worker the whole grid is computed at once; with more, the grid is split
    in bands that exchange ghost rows and are gathered after every step.
    """
    if iterations < 0:
        raise ValueError("the number of iterations must not be negative")
    if workers < 1:
        raise ValueError("the number of workers must be at least one")

    args = (params.length, params.discretization, params.wind, params.start)
    if workers == 1:
        single = Model(*args)

        def advance() -> None:
            single.update()

        def snapshot() -> tuple[bytes, bytes]:
            return single.vegetal_map, single.fire_map

        def current_step() -> int:
            return single.time_step

    else:
        distributed = DistributedModel(*args, workers=workers)

        def advance() -> None:
            distributed.update()

        def snapshot() -> tuple[bytes, bytes]:
            return distributed.gather()

        def current_step() -> int:
            return distributed.time_step

    run = _SimulationRun()
    run.vegetation, run.fire = snapshot()
    for _ in range(iterations):
        step_start = time.perf_counter()
        model_start = time.perf_counter()
        advance()
        run.model_times.append(_microseconds_since(model_start))

        run.vegetation, run.fire = snapshot()
        if displayer is not None:
            displayer.update(run.vegetation, run.fire)
        run.step_times.append(_microseconds_since(step_start))

        if displayer is not None:
            if displayer.quit_requested():
                break
            time.sleep(_FRAME_DELAY)
    run.time_step = current_step()
    return run


def _take_option(args: list[str], short: str, long: str) -> tuple[list[str], str | None]:
    """Remove an option and its value from the arguments."""
    rest: list[str] = []
    value: str | None = None
    items = iter(args)
    for arg in items:
        if arg == short:
            value = next(items, None)
            if value is None:
                raise ParameterError(f"missing value for {short}")
        elif arg.startswith(long + "="):
            value = arg[len(long) + 1:]
        else:
            rest.append(arg)
    return rest, value


def _positive_int(text: str, what: str, minimum: int) -> int:
    try:
        value = int(text)
    except ValueError:
        raise ParameterError(f"expected an integer for the {what}, got {text!r}") from None
    if value < minimum:
        raise ParameterError(f"the {what} must be at least {minimum}")
    return value


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the command line, run the simulation and print timing statistics."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        headless = "--no-display" in args
        args = [a for a in args if a != "--no-display"]
        args, workers_text = _take_option(args, "-p", "--workers")
        args, iterations_text = _take_option(args, "-i", "--iterations")
        workers = 1 if workers_text is None else _positive_int(workers_text, "number of workers", 1)
        iterations = (
            DEFAULT_ITERATIONS
            if iterations_text is None
            else _positive_int(iterations_text, "number of iterations", 0)
        )
        params = parse_arguments(args)
    except HelpRequested as request:
        print(request.usage, end="")
        print("    -p, --workers=P             Number of bands the grid is split into (1 by default)")
        print("    -i, --iterations=K          Number of time steps to compute (500 by default)")
        print("        --no-display            Run without opening a window")
        return 0
    except ParameterError as exc:
        print(exc, file=sys.stderr)
        return 1

    print(format_params(params), end="")
    problems = check_params(params)
    if problems:
        for problem in problems:
            print(f"[FATAL ERROR] {problem}", file=sys.stderr)
        return 1

    if headless:
        run = run_simulation(params, iterations, workers, None)
    else:
        from firesim.display import Displayer

        with Displayer(params.discretization, params.discretization) as displayer:
            run = run_simulation(params, iterations, workers, displayer)

    print(format_statistics(run.step_times, "Complete iteration"), end="")
    print(format_statistics(run.model_times, "Model update"), end="")
    return 0