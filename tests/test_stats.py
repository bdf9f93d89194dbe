from datetime import timedelta

import pytest

from firesim.model import LexicoIndices, Model
from firesim.stats import (
    compute_statistics,
    format_statistics,
    max_fire_radius,
)


def test_single_duration():
    stats = compute_statistics([2500])
    assert stats.count == 1
    assert stats.mean_ms == stats.min_ms == stats.max_ms == 2.5


def test_ordering_invariant():
    stats = compute_statistics([300, 9000, 1200, 45])
    assert stats.count == 4
    assert stats.min_ms <= stats.mean_ms <= stats.max_ms
    assert stats.min_ms == 0.045
    assert stats.max_ms == 9.0


def test_timedeltas_match_microseconds():
    as_numbers = compute_statistics([1000, 3000])
    as_deltas = compute_statistics([timedelta(milliseconds=1), timedelta(milliseconds=3)])
    assert as_numbers == as_deltas


def test_empty_raises():
    with pytest.raises(ValueError):
        compute_statistics([])


def test_format_empty():
    assert format_statistics([], "Display") == "No Display measurements recorded.\n"


def test_format_contains_label_and_count():
    text = format_statistics([1000, 2000, 4000], "Model update")
    assert text.startswith("==== Model update ====\n")
    assert "Measurements: 3\n" in text
    assert "Max time: 4 ms" in text


def test_radius_of_start_only():
    model = Model(1.0, 10, (0.0, 0.0), LexicoIndices(4, 4))
    assert max_fire_radius(model.fire_map, 10, LexicoIndices(4, 4)) == 0.0


def test_radius_along_row():
    fire = bytearray(25)
    fire[2 * 5 + 4] = 255
    assert max_fire_radius(fire, 5, LexicoIndices(2, 1)) == 3.0


def test_radius_no_fire():
    assert max_fire_radius(bytes(16), 4, LexicoIndices(0, 0)) == 0.0


def test_radius_grows_never_beyond_grid():
    start = LexicoIndices(5, 5)
    model = Model(1.0, 11, (0.0, 0.0), start)
    for _ in range(20):
        model.update()
    radius = max_fire_radius(model.fire_map, 11, start)
    assert 0.0 <= radius <= (2 * 5 * 5) ** 0.5


def test_radius_size_mismatch():
    with pytest.raises(ValueError):
        max_fire_radius(bytes(10), 4, LexicoIndices(0, 0))