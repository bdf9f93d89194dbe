"""Timing statistics and fire-spread measurements."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import timedelta

from firesim.model import LexicoIndices


@dataclass(frozen=True)
class Statistics:
    """Summary of a series of durations, in milliseconds."""

    count: int
    mean_ms: float
    min_ms: float
    max_ms: float


def _microseconds(duration: float | timedelta) -> float:
    if isinstance(duration, timedelta):
        return duration / timedelta(microseconds=1)
    return float(duration)


def compute_statistics(durations: Sequence[float | timedelta]) -> Statistics:
    """Count, mean, min and max of durations given in microseconds or as timedeltas."""
    values = [_microseconds(d) for d in durations]
    if not values:
        raise ValueError("no durations to summarise")
    return Statistics(
        count=len(values),
        mean_ms=sum(values) / len(values) / 1000.0,
        min_ms=min(values) / 1000.0,
        max_ms=max(values) / 1000.0,
    )


def format_statistics(durations: Sequence[float | timedelta], label: str) -> str:
    """Report of the durations under a label."""
    if not durations:
        return f"No {label} measurements recorded.\n"
    stats = compute_statistics(durations)
    return (
        f"==== {label} ====\n"
        f"Measurements: {stats.count}\n"
        f"Mean time: {stats.mean_ms:g} ms\n"
        f"Min time: {stats.min_ms:g} ms\n"
        f"Max time: {stats.max_ms:g} ms\n"
        "\n"
    )


def max_fire_radius(
    fire_map: Sequence[int], discretization: int, start: LexicoIndices
) -> float:
    """Largest distance, in cells, from the start to a burning cell."""
    if discretization <= 0:
        raise ValueError("the number of cells per direction must be positive")
    if len(fire_map) != discretization * discretization:
        raise ValueError("the fire map does not match the discretization")
    radius = 0.0
    for index, intensity in enumerate(fire_map):
        if intensity > 0:
            row, column = divmod(index, discretization)
            radius = max(radius, math.hypot(column - start.column, row - start.row))
    return radius