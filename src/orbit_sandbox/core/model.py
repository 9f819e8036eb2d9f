"""Data models for the sandbox bodies."""
from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np


def _vector(value) -> np.ndarray:
    return np.array(value, dtype=np.float64).reshape(2)


def radius_for_mass(mass: float, *, scale: float = 1.0, min_radius: float = 5.0) -> float:
    """Radius of a sphere of unit density holding ``mass``, never below ``min_radius``."""

    raw = float(np.cbrt(max(mass, 0.0) / (4.0 / 3.0 * math.pi))) * scale
    return max(raw, min_radius)


@dataclass
class Body:
    """Point mass taking part in the simulation.

    A body with ``mass == 0`` is an inert marker: it neither attracts nor is
    attracted, and only moves by its own velocity.
    """

    mass: float
    position: np.ndarray
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=np.float64))
    radius: float = 5.0
    predict_enabled: bool = True
    color: tuple[int, int, int] = (255, 0, 0)
    name: str = "body"
    acceleration_accum: np.ndarray = field(
        default_factory=lambda: np.zeros(2, dtype=np.float64)
    )

    def __post_init__(self) -> None:
        self.mass = float(self.mass)
        self.radius = float(self.radius)
        if not math.isfinite(self.mass) or self.mass < 0.0:
            raise ValueError(f"Body mass must be a finite value >= 0, got {self.mass}")
        if not self.radius > 0.0:
            raise ValueError(f"Body radius must be positive, got {self.radius}")
        self.position = _vector(self.position)
        self.velocity = _vector(self.velocity)
        self.acceleration_accum = _vector(self.acceleration_accum)

    @property
    def is_massive(self) -> bool:
        return self.mass > 0.0

    def apply_thrust(self, dx: float, dy: float) -> None:
        """Change the velocity directly; takes effect on the next step."""

        self.velocity[0] += dx
        self.velocity[1] += dy


__all__ = ["Body", "radius_for_mass"]
