"""The simulated world: an ordered list of bodies plus the integration step."""
from __future__ import annotations

from typing import Iterable

import numpy as np

from .config import SIM_CFG, SimCfg
from .model import Body
from .physics import center_of_mass, step_bodies, total_energy


class World:
    """Ordered collection of bodies advanced one tick at a time.

    Body order never changes, so indices are stable references for the
    focus and controlled-body selections. Bodies are never removed.
    """

    def __init__(self, bodies: Iterable[Body] = (), cfg: SimCfg = SIM_CFG) -> None:
        self.cfg = cfg
        self._bodies: list[Body] = list(bodies)
        self.tick = 0
        self.last_collision_count = 0

    @property
    def bodies(self) -> tuple[Body, ...]:
        return tuple(self._bodies)

    def __len__(self) -> int:
        return len(self._bodies)

    def __getitem__(self, index: int) -> Body:
        return self._bodies[index]

    def add_body(self, body: Body) -> int:
        """Append ``body`` and return its index."""

        self._bodies.append(body)
        return len(self._bodies) - 1

    def step(self) -> None:
        self.last_collision_count = step_bodies(self._bodies, self.cfg)
        self.tick += 1

    def center_of_mass(self) -> np.ndarray:
        return center_of_mass(self._bodies)

    def total_energy(self) -> float:
        return total_energy(self._bodies, self.cfg)


__all__ = ["World"]
