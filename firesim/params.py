"""Command-line parameters of the fire simulation."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from firesim.model import LexicoIndices

USAGE = """\
Usage : simulation [option(s)]
  Runs the fire simulation with the given [option(s)].
  Options are:
    -l, --longueur=LONGUEUR     Size LONGUEUR (km) of the square holding the vegetation map.
    -n, --number_of_cases=N     Number n of cells per direction of the discretization
    -w, --wind=VX,VY            Wind velocity vector (no wind by default).
    -s, --start=COL,ROW         Indices of the cell where the fire starts (middle of the map by default)
"""

_UNSIGNED = re.compile(r"\s*\+?(\d+)")
_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class ParameterError(ValueError):
    """A command-line parameter is missing or malformed."""


class HelpRequested(Exception):
    """The user asked for the usage text."""

    def __init__(self, usage: str = USAGE) -> None:
        super().__init__(usage)
        self.usage = usage


@dataclass
class Params:
    """Settings of one simulation run."""

    length: float = 1.0
    discretization: int = 20
    wind: tuple[float, float] = (0.0, 0.0)
    start: LexicoIndices = field(default_factory=lambda: LexicoIndices(10, 10))


def _unsigned(text: str) -> int:
    match = _UNSIGNED.match(text)
    if match is None:
        raise ParameterError(f"expected a non-negative integer, got {text!r}")
    return int(match.group(1))


def _real(text: str) -> float:
    match = _FLOAT.match(text)
    if match is None:
        raise ParameterError(f"expected a number, got {text!r}")
    return float(match.group(1))


def _index(text: str) -> int:
    value = _real(text)
    if value < 0:
        raise ParameterError(f"expected a non-negative index, got {text!r}")
    return int(value)


def _split_pair(text: str, what: str) -> tuple[str, str]:
    first, comma, second = text.partition(",")
    if not comma:
        raise ParameterError(f"two comma-separated values are needed for the {what}")
    return first, second


def _value_after(text: str, prefix: str) -> str | None:
    pos = text.find(prefix)
    if pos < 0:
        return None
    return text[pos + len(prefix):]


def parse_arguments(args: Sequence[str]) -> Params:
    """Build the parameters from command-line arguments; parsing stops at the first unknown one."""
    params = Params()
    args = list(args)
    if not args:
        return params
    if args[0] in ("--help", "-h"):
        raise HelpRequested()

    remaining = args
    while remaining:
        key = remaining[0]

        if key == "-l":
            if len(remaining) < 2:
                raise ParameterError("missing value for the terrain length")
            params.length = float(_unsigned(remaining[1]))
            remaining = remaining[2:]
            continue
        value = _value_after(key, "--longueur=")
        if value is not None:
            params.length = float(_unsigned(value))
            remaining = remaining[1:]
            continue

        if key == "-n":
            if len(remaining) < 2:
                raise ParameterError("missing value for the number of cells per direction")
            params.discretization = _unsigned(remaining[1])
            remaining = remaining[2:]
            continue
        value = _value_after(key, "--number_of_cases=")
        if value is not None:
            params.discretization = _unsigned(value)
            remaining = remaining[1:]
            continue

        if key == "-w":
            if len(remaining) < 2:
                raise ParameterError("missing pair of values for the wind direction")
            vx = _real(remaining[1])
            _, second = _split_pair(remaining[1], "wind velocity")
            params.wind = (vx, _real(second))
            remaining = remaining[2:]
            continue
        value = _value_after(key, "--wind=")
        if value is not None:
            vx = float(_unsigned(value))
            _, second = _split_pair(value, "wind velocity")
            params.wind = (vx, _real(second))
            remaining = remaining[1:]
            continue

        if key == "-s":
            if len(remaining) < 2:
                raise ParameterError("missing pair of values for the initial fire position")
            column = _index(remaining[1])
            _, second = _split_pair(remaining[1], "initial fire position")
            params.start = LexicoIndices(_index(second), column)
            remaining = remaining[2:]
            continue
        value = _value_after(key, "--start=")
        if value is not None:
            column = _unsigned(value)
            _, second = _split_pair(value, "initial fire position")
            params.start = LexicoIndices(_index(second), column)
            remaining = remaining[1:]
            continue

        break
    return params


def check_params(params: Params) -> list[str]:
    """Problems that make the parameters unusable; empty when they are valid."""
    problems = []
    if params.length <= 0:
        problems.append("the terrain length must be positive and non-zero")
    if params.discretization <= 0:
        problems.append("the number of cells per direction must be positive and non-zero")
    if (
        params.start.row >= params.discretization
        or params.start.column >= params.discretization
    ):
        problems.append("wrong indices for the initial fire position")
    return problems


def format_params(params: Params) -> str:
    """Human-readable summary of the parameters."""
    return (
        "Simulation parameters:\n"
        f"\tTerrain size: {params.length:g}\n"
        f"\tCells per direction: {params.discretization}\n"
        f"\tWind velocity: [{params.wind[0]:g}, {params.wind[1]:g}]\n"
        f"\tInitial fire position (col, row): {params.start.column}, {params.start.row}\n"
    )