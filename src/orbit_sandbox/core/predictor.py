"""Trajectory preview by speculative stepping of the live world."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .config import SIM_CFG, SimCfg
from .focus import Focus
from .snapshot import SnapshotStore
from .world import World


@dataclass(frozen=True)
class Polyline:
    """Sampled future path of one body.

    ``ticks[k]`` is the number of steps after the prediction start at which
    ``points[k]`` was sampled.
    """

    body_index: int
    color: tuple[int, int, int]
    points: np.ndarray
    ticks: tuple[int, ...]

    def segments(self) -> list[tuple[np.ndarray, np.ndarray]]:
        return [(self.points[k], self.points[k + 1]) for k in range(len(self.points) - 1)]


class Predictor:
    """Runs the real step function ahead and restores the world afterwards.

    The world is left bit-identical to its state before :meth:`predict`,
    including its tick counter, so a prediction followed by N real steps
    reproduces the sampled positions exactly.
    """

    def __init__(
        self,
        world: World,
        steps: int = SIM_CFG.prediction_steps,
        stride: int = SIM_CFG.prediction_stride,
        *,
        store: SnapshotStore | None = None,
    ) -> None:
        self.world = world
        self.store = store or SnapshotStore()
        self._steps = 0
        self._stride = 1
        self.steps = steps
        self.stride = stride

    @classmethod
    def from_cfg(cls, world: World, cfg: SimCfg) -> "Predictor":
        return cls(world, cfg.prediction_steps, cfg.prediction_stride)

    @property
    def steps(self) -> int:
        return self._steps

    @steps.setter
    def steps(self, value: int) -> None:
        self._steps = max(0, int(value))

    @property
    def stride(self) -> int:
        return self._stride

    @stride.setter
    def stride(self, value: int) -> None:
        self._stride = max(1, int(value))

    def adjust_steps(self, delta: int) -> int:
        self.steps = self._steps + delta
        return self._steps

    def adjust_stride(self, delta: int) -> int:
        self.stride = self._stride + delta
        return self._stride

    def predict(self, focus: Focus | None = None) -> list[Polyline]:
        """Sample the future path of every ``predict_enabled`` body.

        Points are relative to ``focus`` evaluated at sample time, or in
        world coordinates when no focus is given.
        """

        world = self.world
        indices = [i for i, body in enumerate(world.bodies) if body.predict_enabled]
        points: dict[int, list[np.ndarray]] = {i: [] for i in indices}
        ticks: list[int] = []

        def sample(tick: int) -> None:
            offset = focus.offset(world) if focus is not None else None
            for i in indices:
                position = world[i].position.copy()
                if offset is not None:
                    position -= offset
                points[i].append(position)
            ticks.append(tick)

        collision_count = world.last_collision_count
        self.store.save(world)
        try:
            sample(0)
            for i in range(self._steps):
                # the i == 0 segment would start and end on the first point
                if i > 0 and i % self._stride == 0:
                    sample(i)
                world.step()
        finally:
            self.store.restore(world)
            world.last_collision_count = collision_count

        return [
            Polyline(
                body_index=i,
                color=world[i].color,
                points=np.array(points[i], dtype=np.float64).reshape(-1, 2),
                ticks=tuple(ticks),
            )
            for i in indices
        ]


__all__ = ["Polyline", "Predictor"]
