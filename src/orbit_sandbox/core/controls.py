"""Pilot controls and the queue that carries them into the tick loop."""
from __future__ import annotations

import queue
from dataclasses import dataclass

from .config import SIM_CFG, SimCfg

THRUST = "thrust"
SCALE_THRUST = "scale_thrust"
TOGGLE_PREDICTION = "toggle_prediction"
ADJUST_STEPS = "adjust_steps"
ADJUST_STRIDE = "adjust_stride"
CYCLE_FOCUS = "cycle_focus"
CYCLE_CONTROLLED = "cycle_controlled"
STOP = "stop"

ACTIONS = frozenset(
    {
        THRUST,
        SCALE_THRUST,
        TOGGLE_PREDICTION,
        ADJUST_STEPS,
        ADJUST_STRIDE,
        CYCLE_FOCUS,
        CYCLE_CONTROLLED,
        STOP,
    }
)


@dataclass(frozen=True)
class Command:
    """One discrete control input.

    ``dx``/``dy`` give the thrust direction in units of the current thrust
    delta; ``amount`` is the signed count for the scaling, tuning and cycling
    actions.
    """

    action: str
    dx: int = 0
    dy: int = 0
    amount: int = 0

    def __post_init__(self) -> None:
        if self.action not in ACTIONS:
            raise ValueError(f"Unknown command action: {self.action!r}")


def wrap_index(index: int, count: int) -> int:
    if count <= 0:
        return 0
    return index % count


@dataclass
class ControlState:
    thrust_delta: float = SIM_CFG.thrust_delta
    thrust_scale_factor: float = SIM_CFG.thrust_scale_factor
    prediction_enabled: bool = SIM_CFG.prediction_enabled
    focus_index: int = 0
    controlled_index: int = 0

    @classmethod
    def from_cfg(cls, cfg: SimCfg) -> "ControlState":
        return cls(
            thrust_delta=cfg.thrust_delta,
            thrust_scale_factor=cfg.thrust_scale_factor,
            prediction_enabled=cfg.prediction_enabled,
        )

    def scale_thrust(self, amount: int) -> float:
        self.thrust_delta *= self.thrust_scale_factor ** amount
        return self.thrust_delta

    def toggle_prediction(self) -> bool:
        self.prediction_enabled = not self.prediction_enabled
        return self.prediction_enabled

    def cycle_focus(self, amount: int, body_count: int) -> int:
        self.focus_index = wrap_index(self.focus_index + amount, body_count)
        return self.focus_index

    def cycle_controlled(self, amount: int, body_count: int) -> int:
        self.controlled_index = wrap_index(self.controlled_index + amount, body_count)
        return self.controlled_index


class CommandQueue:
    """Thread-safe FIFO of commands, drained between ticks."""

    def __init__(self) -> None:
        self._queue: "queue.Queue[Command]" = queue.Queue()

    def put(self, command: Command) -> None:
        self._queue.put(command)

    def drain(self) -> list[Command]:
        commands: list[Command] = []
        while True:
            try:
                commands.append(self._queue.get_nowait())
            except queue.Empty:
                break
        return commands

    def empty(self) -> bool:
        return self._queue.empty()


__all__ = [
    "ACTIONS",
    "ADJUST_STEPS",
    "ADJUST_STRIDE",
    "CYCLE_CONTROLLED",
    "CYCLE_FOCUS",
    "Command",
    "CommandQueue",
    "ControlState",
    "SCALE_THRUST",
    "STOP",
    "THRUST",
    "TOGGLE_PREDICTION",
    "wrap_index",
]
