"""Focus frame: the body whose position defines the viewport origin."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from .model import Body

if TYPE_CHECKING:  # pragma: no cover
    from .world import World


def body_offset(body: Body, viewport_size: tuple[float, float]) -> np.ndarray:
    """World-space offset that puts ``body`` in the middle of the viewport."""

    return body.position - np.asarray(viewport_size, dtype=np.float64) / 2.0


@dataclass(frozen=True)
class Focus:
    index: int
    viewport_size: tuple[float, float] = (0.0, 0.0)

    def offset(self, world: World) -> np.ndarray:
        if len(world) == 0:
            return np.zeros(2, dtype=np.float64)
        return body_offset(world[self.index % len(world)], self.viewport_size)


__all__ = ["Focus", "body_offset"]
