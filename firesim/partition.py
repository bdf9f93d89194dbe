"""Row-wise decomposition of the fire model into subdomains with ghost rows."""

from __future__ import annotations

import math
from collections.abc import Sequence

from firesim.model import LexicoIndices, log_factor, pseudo_random

_ALPHA0 = 4.52790762e-01
_ALPHA1 = 9.58264437e-04
_ALPHA2 = 3.61499382e-05

_FULL_FIRE = 255
_FULL_VEGETATION = 255


def row_partition(geometry: int, size: int, rank: int) -> range:
    """Global rows owned by ``rank`` when ``geometry`` rows are shared by ``size`` workers."""
    if size < 1:
        raise ValueError("the number of workers must be at least one")
    if not 0 <= rank < size:
        raise ValueError(f"rank {rank} is outside 0..{size - 1}")
    per_worker, extra = divmod(int(geometry), size)
    count = per_worker + (1 if rank < extra else 0)
    first = rank * per_worker + min(rank, extra)
    return range(first, first + count)


class Subdomain:
    """Band of grid rows held by one worker, framed by one ghost row above and below."""

    def __init__(
        self,
        length: float,
        discretization: int,
        wind: tuple[float, float],
        start: LexicoIndices,
        rank: int,
        size: int,
        max_wind: float = 60.0,
    ) -> None:
        if discretization == 0:
            raise ValueError(
                "the number of cells per direction must be greater than zero"
            )
        self.length = float(length)
        self._geometry = int(discretization)
        self.distance = self.length / self._geometry
        self.rank = rank
        self.size = size
        self.rows = row_partition(self._geometry, size, rank)
        self._local_height = len(self.rows) + 2
        self.wind = (float(wind[0]), float(wind[1]))
        self.wind_speed = math.hypot(*self.wind)
        self.max_wind = float(max_wind)
        self._time_step = 0

        cells = self._local_height * self._geometry
        self._vegetation = bytearray([_FULL_VEGETATION]) * cells
        self._fire = bytearray(cells)
        self._front: dict[int, int] = {}

        index = self.local_index(start)
        if index is not None:
            self._fire[index] = _FULL_FIRE
            self._front[index] = _FULL_FIRE

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
        """Number of cells per direction of the whole grid."""
        return self._geometry

    @property
    def local_height(self) -> int:
        """Number of local rows, ghost rows included."""
        return self._local_height

    @property
    def time_step(self) -> int:
        """Number of time steps computed so far."""
        return self._time_step

    @property
    def vegetal_map(self) -> bytes:
        """Local vegetation, ghost rows included."""
        return bytes(self._vegetation)

    @property
    def fire_map(self) -> bytes:
        """Local fire intensity, ghost rows included."""
        return bytes(self._fire)

    @property
    def fire_front(self) -> dict[int, int]:
        """Burning local cells and their intensity."""
        return dict(self._front)

    def local_index(self, position: LexicoIndices) -> int | None:
        """Local flat index of a global cell, or None if another worker owns it."""
        if position.row not in self.rows:
            return None
        local_row = position.row - self.rows.start + 1
        return local_row * self._geometry + position.column

    def position_of(self, index: int) -> LexicoIndices:
        """Local row/column of a local flat index."""
        row, column = divmod(index, self._geometry)
        return LexicoIndices(row, column)

    def interior_fire(self) -> bytes:
        """Fire intensity of the owned rows only."""
        return bytes(self._fire[self._interior_slice()])

    def interior_vegetation(self) -> bytes:
        """Vegetation of the owned rows only."""
        return bytes(self._vegetation[self._interior_slice()])

    def _interior_slice(self) -> slice:
        return slice(self._geometry, (self._local_height - 1) * self._geometry)

    def _row(self, row: int) -> bytes:
        start = row * self._geometry
        return bytes(self._fire[start:start + self._geometry])

    def _set_row(self, row: int, data: bytes) -> None:
        start = row * self._geometry
        self._fire[start:start + self._geometry] = data

    def _absorb_ghost_fire(self) -> None:
        """Put fully burning ghost cells into the fire front."""
        g = self._geometry
        ghost_rows = []
        if self.rank > 0:
            ghost_rows.append(0)
        if self.rank < self.size - 1:
            ghost_rows.append(self._local_height - 1)
        for row in ghost_rows:
            for index in range(row * g, (row + 1) * g):
                if self._fire[index] == _FULL_FIRE:
                    self._front[index] = _FULL_FIRE

    def _neighbours(self, key: int):
        """Yield (neighbour index, random seed, directional factor)."""
        coord = self.position_of(key)
        g = self._geometry
        if coord.row < self._local_height - 2:
            yield key + g, key, self.alpha_south_north
        if coord.row > 1:
            yield key - g, key * 13427, self.alpha_north_south
        if coord.row == self._local_height - 1:
            yield key - g, key * 13427, self.alpha_north_south
        if coord.column < g - 1:
            yield key + 1, key * 13427 * 13427, self.alpha_east_west
        if coord.column > 0:
            yield key - 1, key * 13427 * 13427 * 13427, self.alpha_west_east

    def update(self) -> bool:
        """Advance one time step on this band; ghost rows must already be exchanged."""
        step = self._time_step
        next_front = dict(self._front)
        self._absorb_ghost_fire()
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


def exchange_ghost_cells(subdomains: Sequence[Subdomain]) -> None:
    """Copy the boundary fire rows of neighbouring subdomains into their ghost rows."""
    for upper, lower in zip(subdomains, subdomains[1:]):
        if lower.rank != upper.rank + 1:
            raise ValueError("subdomains must be given in consecutive rank order")
    outgoing = [
        (domain._row(1), domain._row(domain.local_height - 2)) for domain in subdomains
    ]
    for upper, lower, upper_rows, lower_rows in zip(
        subdomains, subdomains[1:], outgoing, outgoing[1:]
    ):
        lower._set_row(0, upper_rows[1])
        upper._set_row(upper.local_height - 1, lower_rows[0])


class DistributedModel:
    """Fire model split in horizontal bands that exchange ghost rows every step."""

    def __init__(
        self,
        length: float,
        discretization: int,
        wind: tuple[float, float],
        start: LexicoIndices,
        workers: int,
        max_wind: float = 60.0,
    ) -> None:
        if workers < 1:
            raise ValueError("the number of workers must be at least one")
        self.subdomains = tuple(
            Subdomain(length, discretization, wind, start, rank, workers, max_wind)
            for rank in range(workers)
        )

    @property
    def geometry(self) -> int:
        """Number of cells per direction."""
        return self.subdomains[0].geometry

    @property
    def time_step(self) -> int:
        """Number of time steps computed so far."""
        return self.subdomains[0].time_step

    def update(self) -> bool:
        """Exchange ghost rows then advance every band; return whether fire remains."""
        exchange_ghost_cells(self.subdomains)
        results = [domain.update() for domain in self.subdomains]
        return any(results)

    def gather(self) -> tuple[bytes, bytes]:
        """Whole-grid vegetation and fire maps, assembled in rank order."""
        vegetation = b"".join(d.interior_vegetation() for d in self.subdomains)
        fire = b"".join(d.interior_fire() for d in self.subdomains)
        return vegetation, fire