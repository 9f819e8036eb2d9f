"""Capture and restore of the kinematic state of a world."""
from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .world import World


@dataclass(frozen=True)
class KinematicState:
    """Position and velocity of one body, stored as plain floats."""

    position: tuple[float, float]
    velocity: tuple[float, float]


@dataclass(frozen=True)
class Snapshot:
    world_ref: weakref.ref
    tick: int
    states: tuple[KinematicState, ...]


class SnapshotStore:
    """Single-slot store; every :meth:`save` replaces the previous snapshot.

    Only kinematic fields are captured. Mass, radius, color and flags never
    change while a snapshot is live.
    """

    def __init__(self) -> None:
        self._snapshot: Snapshot | None = None

    @property
    def has_snapshot(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> Snapshot | None:
        return self._snapshot

    def save(self, world: World) -> Snapshot:
        states = tuple(
            KinematicState(
                position=(float(body.position[0]), float(body.position[1])),
                velocity=(float(body.velocity[0]), float(body.velocity[1])),
            )
            for body in world.bodies
        )
        self._snapshot = Snapshot(world_ref=weakref.ref(world), tick=world.tick, states=states)
        return self._snapshot

    def restore(self, world: World) -> None:
        snapshot = self._snapshot
        if snapshot is None:
            return
        if snapshot.world_ref() is not world:
            raise ValueError("Snapshot was taken from a different world")
        if len(snapshot.states) != len(world):
            raise ValueError("World body count changed since the snapshot was taken")
        for body, state in zip(world.bodies, snapshot.states):
            body.position[:] = state.position
            body.velocity[:] = state.velocity
            body.acceleration_accum[:] = 0.0
        world.tick = snapshot.tick

    def clear(self) -> None:
        self._snapshot = None


__all__ = ["KinematicState", "Snapshot", "SnapshotStore"]
