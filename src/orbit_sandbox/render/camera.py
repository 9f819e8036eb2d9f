from __future__ import annotations

import numpy as np

from orbit_sandbox.core.focus import Focus
from orbit_sandbox.core.world import World


class Camera:
    """Follows the focus body by translating world coordinates."""

    def __init__(self, size: tuple[int, int]) -> None:
        self._size = size
        self._offset = np.zeros(2, dtype=np.float64)

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def focus(self, index: int) -> Focus:
        return Focus(index, (float(self._size[0]), float(self._size[1])))

    def follow(self, world: World, index: int) -> None:
        self._offset = self.focus(index).offset(world)

    def world_to_screen(self, x: float, y: float) -> tuple[int, int]:
        return int(round(x - self._offset[0])), int(round(y - self._offset[1]))

    def frame_to_screen(self, point: np.ndarray) -> tuple[int, int]:
        """Points already relative to the focus frame only need rounding."""

        return int(round(point[0])), int(round(point[1]))

    def is_visible(self, screen: tuple[int, int], margin: int = 0) -> bool:
        width, height = self._size
        return -margin <= screen[0] <= width + margin and -margin <= screen[1] <= height + margin
