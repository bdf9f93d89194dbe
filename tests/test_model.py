import math

import pytest

from firesim.model import LexicoIndices, Model, log_factor, pseudo_random


def make_model(wind=(0.0, 0.0), n=20, start=LexicoIndices(10, 10)):
    return Model(1.0, n, wind, start)


def test_pseudo_random_zero_index():
    assert pseudo_random(0, 5) == 0.0


def test_pseudo_random_first_value():
    assert pseudo_random(1, 0) == pytest.approx(48271 / 2147483646.0)


@pytest.mark.parametrize("index,step", [(3, 0), (12345, 7), (10**12, 99), (2**70, 3)])
def test_pseudo_random_in_unit_interval(index, step):
    value = pseudo_random(index, step)
    assert 0.0 <= value <= 1.0


def test_log_factor_bounds():
    assert log_factor(0) == 0.0
    assert log_factor(255) == pytest.approx(1.0)


def test_log_factor_monotonic():
    values = [log_factor(v) for v in range(256)]
    assert values == sorted(values)


def test_zero_discretization_rejected():
    with pytest.raises(ValueError):
        Model(1.0, 0, (0.0, 0.0), LexicoIndices(0, 0))


def test_start_outside_grid_rejected():
    with pytest.raises(IndexError):
        Model(1.0, 5, (0.0, 0.0), LexicoIndices(5, 0))


def test_initial_state():
    model = make_model()
    start_index = model.index_of(LexicoIndices(10, 10))
    assert model.time_step == 0
    assert model.geometry == 20
    assert model.fire_map[start_index] == 255
    assert sum(1 for v in model.fire_map if v) == 1
    assert set(model.vegetal_map) == {255}
    assert model.fire_front == {start_index: 255}


def test_index_position_round_trip():
    model = make_model(n=7, start=LexicoIndices(0, 0))
    for index in range(49):
        assert model.index_of(model.position_of(index)) == index
    assert model.position_of(model.index_of(LexicoIndices(3, 5))) == LexicoIndices(3, 5)


def test_update_advances_time_and_keeps_invariants():
    model = make_model()
    previous_vegetation = model.vegetal_map
    for expected_step in range(1, 31):
        model.update()
        assert model.time_step == expected_step
        vegetation = model.vegetal_map
        assert all(a <= b for a, b in zip(vegetation, previous_vegetation))
        previous_vegetation = vegetation
        for key, value in model.fire_front.items():
            assert value > 0
            assert model.fire_map[key] == value


def test_deterministic():
    first, second = make_model(wind=(5.0, -3.0)), make_model(wind=(5.0, -3.0))
    for _ in range(40):
        assert first.update() == second.update()
    assert first.fire_map == second.fire_map
    assert first.vegetal_map == second.vegetal_map


def test_strong_east_wind_spreads_east_immediately():
    model = make_model(wind=(60.0, 0.0))
    model.update()
    assert model.fire_map[model.index_of(LexicoIndices(10, 11))] == 255


def test_east_wind_blocks_westward_spread():
    model = make_model(wind=(60.0, 0.0))
    for _ in range(50):
        model.update()
        burned = [model.position_of(i) for i, v in enumerate(model.fire_map) if v]
        assert all(p.column >= 10 for p in burned)


def test_north_wind_blocks_southward_spread():
    model = make_model(wind=(0.0, 60.0))
    for _ in range(50):
        model.update()
        burned = [model.position_of(i) for i, v in enumerate(model.fire_map) if v]
        assert all(p.row >= 10 for p in burned)


def test_isolated_fire_dies_out():
    model = Model(1.0, 1, (0.0, 0.0), LexicoIndices(0, 0))
    alive = True
    for _ in range(1000):
        alive = model.update()
        if not alive:
            break
    assert alive is False
    assert model.fire_map == b"\x00"
    assert model.fire_front == {}
    assert model.vegetal_map[0] < 255


def test_wind_speed_capped_probability():
    capped = Model(1.0, 5, (300.0, 400.0), LexicoIndices(0, 0))
    at_max = Model(1.0, 5, (60.0, 0.0), LexicoIndices(0, 0))
    assert capped.wind_speed == pytest.approx(500.0)
    assert math.isclose(capped.p1, at_max.p1)
    assert capped.p2 == 0.3