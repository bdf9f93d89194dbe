"""Window showing the vegetation and fire maps."""

from __future__ import annotations

from collections.abc import Sequence

import pygame


def frame_colors(
    vegetation: Sequence[int], fire: Sequence[int], width: int, height: int
) -> list[list[tuple[int, int, int]]]:
    """Screen rows, top first, of (red, green, blue) pixels; map row 0 is at the bottom."""
    cells = width * height
    if len(vegetation) < cells or len(fire) < cells:
        raise ValueError(f"maps must hold at least {cells} cells")
    rows = []
    for i in reversed(range(height)):
        span = slice(i * width, (i + 1) * width)
        rows.append([(f, v, 0) for f, v in zip(fire[span], vegetation[span])])
    return rows


class Displayer:
    """Window drawing fire intensity in red and vegetation in green."""

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        try:
            pygame.display.init()
            self._screen = pygame.display.set_mode((self.width, self.height))
        except pygame.error as exc:
            raise RuntimeError(f"unable to create the display window: {exc}") from exc
        self._closed = False

    def __enter__(self) -> Displayer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def update(self, vegetation: Sequence[int], fire: Sequence[int]) -> None:
        """Redraw the window from the two maps."""
        if self._closed:
            raise RuntimeError("the display window is closed")
        rows = frame_colors(vegetation, fire, self.width, self.height)
        pixels = bytes(c for row in rows for pixel in row for c in pixel)
        image = pygame.image.frombytes(pixels, (self.width, self.height), "RGB")
        self._screen.fill((0, 0, 0))
        self._screen.blit(image, (0, 0))
        pygame.display.flip()

    def quit_requested(self) -> bool:
        """Whether the user asked to close the window since the last call."""
        if self._closed:
            return True
        return any(event.type == pygame.QUIT for event in pygame.event.get())

    def close(self) -> None:
        """Close the window."""
        if not self._closed:
            pygame.display.quit()
            self._closed = True