"""Cellular forest-fire propagation model on a square grid."""

from __future__ import annotations

import math
from dataclasses import dataclass

_MASK64 = (1 << 64) - 1
_MODULUS = 2147483647
_MULTIPLIER = 48271

_ALPHA0 = 4.52790762e-01
_ALPHA1 = 9.58264437e-04
_ALPHA2 = 3.61499382e-05

_FULL_FIRE = 255
_FULL_VEGETATION = 255


def pseudo_random(index: int, time_step: int) -> float:
    """Deterministic draw in [0, 1] for a cell index at a time step."""
    xi = (index * (time_step + 1)) & _MASK64
    r = ((_MULTIPLIER * xi) & _MASK64) % _MODULUS
    return r / 2147483646.0


def log_factor(value: int) -> float:
    """Logarithmic weight of an 8-bit intensity, 0 for 0 and 1 for 255."""
    return math.log(1.0 + value) / math.log(256)


@dataclass(frozen=True)
class LexicoIndices:
    """Row/column coordinates of a cell."""

    row: int
    column: int


class Model:
    """Fire spreading over a vegetation map, driven by the wind."""

    def __init__(
        self,
        length: float,
        discretization: int,
        wind: tuple[float, float],
        start: LexicoIndices,
        max_wind: float = 60.0,
    ) -> None:
        if discretization == 0:
            raise ValueError(
                "the number of cells per direction must be greater than zero"
            )
        self.length = float(length)
        self._geometry = int(discretization)
        self.distance = self.length / self._geometry
        self.wind = (float(wind[0]), float(wind[1]))
        self.wind_speed = math.hypot(*self.wind)
        self.max_wind = float(max_wind)
        self._time_step = 0

        cells = self._geometry * self._geometry
        self._vegetation = bytearray([_FULL_VEGETATION]) * cells
        self._fire = bytearray(cells)

        if not (0 <= start.row < self._geometry and 0 <= start.column < self._geometry):
            raise IndexError(f"start position {start} lies outside the grid")
        index = self.index_of(start)
        self._fire[index] = _FULL_FIRE
        self._front: dict[int, int] = {index: _FULL_FIRE}

        speed = min(self.wind_speed, self.max_wind)
        self.p1 = _ALPHA0 + _ALPHA1 * speed + _ALPHA2 * speed * speed
        self.p2 = 0.3

        wx = abs(self.wind[0] / self.max_wind)
        wy = abs(self.wind[1] / self.max_wind)
        if self.wind[0] > 0:
            self.alpha_east_west, self.alpha_west_east = 1.0 + wx, 1.0 - wx
        else:
            self.alpha_west_east, self.alpha_east_west = 1.0 + wx, 1.0 - wx
        if self.wind[1] > 0:
            self.alpha_south_north, self.alpha_north_south = 1.0 + wy, 1.0 - wy
        else:
            self.alpha_north_south, self.alpha_south_north = 1.0 + wy, 1.0 - wy

    @property
    def geometry(self) -> int:
        """Number of cells per direction."""
        return self._geometry

    @property
    def vegetal_map(self) -> bytes:
        """Vegetation density of every cell, row by row."""
        return bytes(self._vegetation)

    @property
    def fire_map(self) -> bytes:
        """Fire intensity of every cell, row by row."""
        return bytes(self._fire)

    @property
    def fire_front(self) -> dict[int, int]:
        """Burning cells and their intensity."""
        return dict(self._front)

    @property
    def time_step(self) -> int:
        """Number of time steps computed so far."""
        return self._time_step

    def index_of(self, position: LexicoIndices) -> int:
        """Flat index of a cell."""
        return position.row * self._geometry + position.column

    def position_of(self, index: int) -> LexicoIndices:
        """Row/column coordinates of a flat index."""
        row, column = divmod(index, self._geometry)
        return LexicoIndices(row, column)

    def _neighbours(self, key: int):
        """Yield (neighbour index, random seed, directional factor)."""
        coord = self.position_of(key)
        last = self._geometry - 1
        if coord.row < last:
            yield key + self._geometry, key, self.alpha_south_north
        if coord.row > 0:
            yield key - self._geometry, key * 13427, self.alpha_north_south
        if coord.column < last:
            yield key + 1, key * 13427 * 13427, self.alpha_east_west
        if coord.column > 0:
            yield key - 1, key * 13427 * 13427 * 13427, self.alpha_west_east

    def update(self) -> bool:
        """Advance one time step; return whether any fire remains."""
        step = self._time_step
        next_front = dict(self._front)
        for key, intensity in self._front.items():
            power = log_factor(intensity)
            for target, seed, alpha in self._neighbours(key):
                draw = pseudo_random(seed + step, step)
                correction = power * log_factor(self._vegetation[target])
                if draw < alpha * self.p1 * correction:
                    self._fire[target] = _FULL_FIRE
                    next_front[target] = _FULL_FIRE

            if intensity == _FULL_FIRE:
                if pseudo_random(key * 52513 + step, step) < self.p2:
                    self._fire[key] >>= 1
                    next_front[key] = next_front.get(key, 0) >> 1
            else:
                self._fire[key] >>= 1
                weakened = next_front.get(key, 0) >> 1
                if weakened == 0:
                    next_front.pop(key, None)
                else:
                    next_front[key] = weakened

        self._front = next_front
        for key in self._front:
            if self._vegetation[key] > 0:
                self._vegetation[key] -= 1
        self._time_step += 1
        return bool(self._front)