"""Physics for the sandbox: pairwise gravity, the collision heuristic and diagnostics.

One call to :func:`step_bodies` advances every body by one tick (dt = 1):

1. gravity phase: accelerations for all massive bodies are computed from the
   positions at the start of the tick and then added to the velocities;
2. collision phase: pairs predicted to overlap on the next tick receive a
   deceleration bias in their acceleration accumulator;
3. finalization: ``velocity += acceleration_accum``, the accumulator is reset
   and ``position += velocity`` (semi-implicit Euler).

Massless bodies are skipped in both force phases.
"""
from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .config import SIM_CFG, SimCfg
from .model import Body


def _massive_indices(bodies: Sequence[Body]) -> list[int]:
    return [i for i, body in enumerate(bodies) if body.mass > 0.0]


def gravitational_accelerations(
    bodies: Sequence[Body],
    cfg: SimCfg = SIM_CFG,
) -> np.ndarray:
    """Return the ``(n, 2)`` gravitational acceleration of every body.

    Distances below ``cfg.min_distance`` are clamped so coincident bodies
    never produce an infinite force. Rows of massless bodies stay zero.
    """

    accelerations = np.zeros((len(bodies), 2), dtype=np.float64)
    massive = _massive_indices(bodies)
    if len(massive) < 2:
        return accelerations

    positions = [bodies[i].position.copy() for i in range(len(bodies))]
    g = cfg.gravitational_constant
    for i in massive:
        source = bodies[i]
        for j in massive:
            if i == j:
                continue
            other = bodies[j]
            delta = positions[j] - positions[i]
            dist = max(math.hypot(delta[0], delta[1]), cfg.min_distance)
            force = g * source.mass * other.mass / (dist * dist)
            accelerations[i] += (force / source.mass) * (delta / dist)
    return accelerations


def apply_gravity(bodies: Sequence[Body], cfg: SimCfg = SIM_CFG) -> None:
    """Gravity phase: add this tick's accelerations to the velocities."""

    accelerations = gravitational_accelerations(bodies, cfg)
    for body, accel in zip(bodies, accelerations):
        if body.mass > 0.0:
            body.velocity += accel


def apply_collision_bias(bodies: Sequence[Body], cfg: SimCfg = SIM_CFG) -> int:
    """Collision phase; returns the number of ordered pairs that triggered.

    Positions are extrapolated one tick with the already updated velocities.
    When two bodies would overlap, the source receives an acceleration away
    from the other body of magnitude ``|other.mass * other.velocity| /
    source.mass``. This is a crude deceleration bias and does not conserve
    momentum or energy.
    """

    triggered = 0
    massive = _massive_indices(bodies)
    for i in massive:
        source = bodies[i]
        for j in massive:
            if i == j:
                continue
            other = bodies[j]
            next_delta = (other.position + other.velocity) - (source.position + source.velocity)
            if math.hypot(next_delta[0], next_delta[1]) > source.radius + other.radius:
                continue
            delta = other.position - source.position
            dist = max(math.hypot(delta[0], delta[1]), cfg.min_distance)
            momentum = other.mass * other.velocity
            magnitude = math.hypot(momentum[0], momentum[1])
            source.acceleration_accum += -delta * (magnitude / dist) / source.mass
            triggered += 1
    return triggered


def finalize_positions(bodies: Sequence[Body]) -> None:
    for body in bodies:
        body.velocity += body.acceleration_accum
        body.acceleration_accum[:] = 0.0
        body.position += body.velocity


def step_bodies(bodies: Sequence[Body], cfg: SimCfg = SIM_CFG) -> int:
    """Advance ``bodies`` by one tick. Returns the collision trigger count."""

    apply_gravity(bodies, cfg)
    triggered = apply_collision_bias(bodies, cfg) if cfg.collisions_enabled else 0
    finalize_positions(bodies)
    return triggered


def total_mass(bodies: Sequence[Body]) -> float:
    return float(sum(body.mass for body in bodies))


def center_of_mass(bodies: Sequence[Body]) -> np.ndarray:
    """Mass-weighted mean position.

    With zero total mass the result is ``[nan, nan]``; callers check with
    :func:`numpy.isfinite` before using it.
    """

    weighted = np.zeros(2, dtype=np.float64)
    mass = 0.0
    for body in bodies:
        weighted += body.mass * body.position
        mass += body.mass
    if mass <= 0.0:
        return np.full(2, np.nan)
    return weighted / mass


def kinetic_energy(bodies: Sequence[Body]) -> float:
    return float(sum(0.5 * body.mass * float(body.velocity @ body.velocity) for body in bodies))


def potential_energy(bodies: Sequence[Body], cfg: SimCfg = SIM_CFG) -> float:
    """Pairwise potential using the same distance clamp as the force law."""

    energy = 0.0
    massive = _massive_indices(bodies)
    for a, i in enumerate(massive):
        for j in massive[a + 1:]:
            delta = bodies[j].position - bodies[i].position
            dist = max(math.hypot(delta[0], delta[1]), cfg.min_distance)
            energy -= cfg.gravitational_constant * bodies[i].mass * bodies[j].mass / dist
    return energy


def total_energy(bodies: Sequence[Body], cfg: SimCfg = SIM_CFG) -> float:
    return kinetic_energy(bodies) + potential_energy(bodies, cfg)


def circular_orbit_speed(central_mass: float, distance: float, cfg: SimCfg = SIM_CFG) -> float:
    """Speed (units per tick) of a circular orbit around ``central_mass``."""

    if distance <= 0.0 or central_mass <= 0.0:
        return 0.0
    return math.sqrt(cfg.gravitational_constant * central_mass / distance)


__all__ = [
    "apply_collision_bias",
    "apply_gravity",
    "center_of_mass",
    "circular_orbit_speed",
    "finalize_positions",
    "gravitational_accelerations",
    "kinetic_energy",
    "potential_energy",
    "step_bodies",
    "total_energy",
    "total_mass",
]
