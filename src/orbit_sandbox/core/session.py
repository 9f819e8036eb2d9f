"""A running sandbox: world, predictor, pilot controls and optional run log."""
from __future__ import annotations

from dataclasses import asdict, dataclass

import numpy as np

from .config import SIM_CFG, SimCfg
from .controls import (
    ADJUST_STEPS,
    ADJUST_STRIDE,
    CYCLE_CONTROLLED,
    CYCLE_FOCUS,
    SCALE_THRUST,
    STOP,
    THRUST,
    TOGGLE_PREDICTION,
    Command,
    CommandQueue,
    ControlState,
    wrap_index,
)
from .focus import Focus
from .logging_utils import RunLogger
from .model import Body
from .predictor import Polyline, Predictor
from .world import World


@dataclass(frozen=True)
class Frame:
    """Everything a renderer needs after one tick."""

    tick: int
    polylines: tuple[Polyline, ...]
    center_of_mass: np.ndarray
    focus: Focus
    status: tuple[str, ...]


class Session:
    """Advances one world tick by tick.

    Each :meth:`tick` drains queued commands, runs the prediction pass when
    enabled, and then performs exactly one real step. Commands are never
    applied between a prediction's snapshot and its restore.
    """

    def __init__(
        self,
        world: World,
        cfg: SimCfg = SIM_CFG,
        *,
        viewport_size: tuple[float, float] = (0.0, 0.0),
        logger: RunLogger | None = None,
    ) -> None:
        self.world = world
        self.cfg = cfg
        self.viewport_size = viewport_size
        self.controls = ControlState.from_cfg(cfg)
        self.predictor = Predictor.from_cfg(world, cfg)
        self.commands = CommandQueue()
        self.logger = logger
        self.running = True
        self.polylines: tuple[Polyline, ...] = ()
        if logger is not None:
            logger.write_meta(self.describe())

    def describe(self) -> dict:
        return {
            "cfg": asdict(self.cfg),
            "bodies": [
                {
                    "index": i,
                    "name": body.name,
                    "mass": body.mass,
                    "radius": body.radius,
                    "color": list(body.color),
                }
                for i, body in enumerate(self.world.bodies)
            ],
        }

    @property
    def focus(self) -> Focus:
        return Focus(self.controls.focus_index, self.viewport_size)

    def focus_body(self) -> Body | None:
        return self._body_at(self.controls.focus_index)

    def controlled_body(self) -> Body | None:
        return self._body_at(self.controls.controlled_index)

    def _body_at(self, index: int) -> Body | None:
        if len(self.world) == 0:
            return None
        return self.world[wrap_index(index, len(self.world))]

    def submit(self, command: Command) -> None:
        self.commands.put(command)

    def tick(self) -> Frame:
        for command in self.commands.drain():
            self._apply(command)
        if not self.running:
            return self.frame()

        if self.controls.prediction_enabled:
            self.polylines = tuple(self.predictor.predict(self.focus))
        else:
            self.polylines = ()

        self.world.step()
        self._log_tick()
        return self.frame()

    def frame(self) -> Frame:
        return Frame(
            tick=self.world.tick,
            polylines=self.polylines,
            center_of_mass=self.world.center_of_mass(),
            focus=self.focus,
            status=tuple(self.status_lines()),
        )

    def status_lines(self) -> list[str]:
        controls = self.controls
        lines = [
            f"Tick: {self.world.tick}",
            f"Thrust delta: {controls.thrust_delta:.4g}",
            f"Prediction: {'on' if controls.prediction_enabled else 'off'}",
            f"Prediction steps: {self.predictor.steps} (stride {self.predictor.stride})",
        ]
        focus_body = self.focus_body()
        controlled_body = self.controlled_body()
        if focus_body is not None and controlled_body is not None:
            lines.append(f"Focus: {focus_body.name}")
            lines.append(f"Controlled: {controlled_body.name}")
        return lines

    def stop(self) -> None:
        self.running = False
        if self.logger is not None and not self.logger.closed:
            self.logger.log_event(self.world.tick, STOP)
            self.logger.close()

    def _apply(self, command: Command) -> None:
        controls = self.controls
        count = len(self.world)
        action = command.action
        details: dict[str, object] = {}
        if action == THRUST:
            body = self.controlled_body()
            if body is None:
                return
            dx = command.dx * controls.thrust_delta
            dy = command.dy * controls.thrust_delta
            body.apply_thrust(dx, dy)
            details = {"body": wrap_index(controls.controlled_index, count), "dvx": dx, "dvy": dy}
        elif action == SCALE_THRUST:
            details = {"thrust_delta": controls.scale_thrust(command.amount)}
        elif action == TOGGLE_PREDICTION:
            details = {"enabled": controls.toggle_prediction()}
        elif action == ADJUST_STEPS:
            details = {"steps": self.predictor.adjust_steps(command.amount * self.cfg.steps_increment)}
        elif action == ADJUST_STRIDE:
            details = {"stride": self.predictor.adjust_stride(command.amount * self.cfg.stride_increment)}
        elif action == CYCLE_FOCUS:
            details = {"index": controls.cycle_focus(command.amount, count)}
        elif action == CYCLE_CONTROLLED:
            details = {"index": controls.cycle_controlled(command.amount, count)}
        elif action == STOP:
            self.stop()
            return
        if self.logger is not None and not self.logger.closed:
            self.logger.log_event(self.world.tick, action, details)

    def _log_tick(self) -> None:
        logger = self.logger
        if logger is None or logger.closed:
            return
        if self.world.tick % self.cfg.log_every_ticks != 0:
            return
        for i, body in enumerate(self.world.bodies):
            logger.log_ts(
                (
                    self.world.tick,
                    i,
                    float(body.position[0]),
                    float(body.position[1]),
                    float(body.velocity[0]),
                    float(body.velocity[1]),
                )
            )


__all__ = ["Frame", "Session"]
