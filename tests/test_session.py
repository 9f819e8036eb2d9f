import numpy as np
import pytest

from orbit_sandbox.core.config import SimCfg
from orbit_sandbox.core.controls import (
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
from orbit_sandbox.core.logging_utils import RunLogger
from orbit_sandbox.core.session import Session
from orbit_sandbox.core.world import World
from orbit_sandbox.data.scenarios import SCENARIOS


def classic_world(cfg: SimCfg):
    return SCENARIOS["classic"].build(cfg)


def test_wrap_index():
    assert wrap_index(-1, 3) == 2
    assert wrap_index(7, 3) == 1
    assert wrap_index(5, 0) == 0


def test_control_state_cycles_and_scales():
    controls = ControlState(thrust_delta=0.05, thrust_scale_factor=2.0)
    assert controls.cycle_focus(-1, 4) == 3
    assert controls.cycle_focus(2, 4) == 1
    assert controls.cycle_controlled(5, 2) == 1
    assert controls.scale_thrust(1) == pytest.approx(0.1)
    assert controls.scale_thrust(-2) == pytest.approx(0.025)
    assert controls.toggle_prediction() is False


def test_unknown_command_rejected():
    with pytest.raises(ValueError):
        Command("warp")


def test_command_queue_drains_in_order():
    q = CommandQueue()
    q.put(Command(THRUST, dx=1))
    q.put(Command(STOP))
    assert [c.action for c in q.drain()] == [THRUST, STOP]
    assert q.empty()
    assert q.drain() == []


def test_prediction_does_not_change_real_trajectory():
    cfg = SimCfg(prediction_steps=200, prediction_stride=4)
    session = Session(classic_world(cfg), cfg)
    reference = classic_world(cfg)
    for _ in range(30):
        frame = session.tick()
        reference.step()
        assert frame.polylines
    for mine, ref in zip(session.world.bodies, reference.bodies):
        np.testing.assert_array_equal(mine.position, ref.position)
        np.testing.assert_array_equal(mine.velocity, ref.velocity)
    assert session.world.tick == 30


def test_thrust_applies_before_the_step():
    cfg = SimCfg(prediction_enabled=False, thrust_delta=0.5)
    session = Session(classic_world(cfg), cfg)
    session.controls.controlled_index = 1
    session.submit(Command(THRUST, dx=1, dy=-1))
    session.tick()

    reference = classic_world(cfg)
    reference[1].velocity += (0.5, -0.5)
    reference.step()
    np.testing.assert_array_equal(session.world[1].velocity, reference[1].velocity)
    np.testing.assert_array_equal(session.world[1].position, reference[1].position)


def test_tuning_commands():
    cfg = SimCfg(prediction_steps=100, prediction_stride=2, steps_increment=50, stride_increment=1)
    session = Session(classic_world(cfg), cfg)
    for command in (
        Command(ADJUST_STEPS, amount=-1),
        Command(ADJUST_STEPS, amount=-1),
        Command(ADJUST_STEPS, amount=-1),
        Command(ADJUST_STRIDE, amount=-5),
        Command(SCALE_THRUST, amount=1),
        Command(TOGGLE_PREDICTION),
        Command(CYCLE_FOCUS, amount=-1),
        Command(CYCLE_CONTROLLED, amount=3),
    ):
        session.submit(command)
    frame = session.tick()
    assert session.predictor.steps == 0
    assert session.predictor.stride == 1
    assert session.controls.thrust_delta == pytest.approx(cfg.thrust_delta * cfg.thrust_scale_factor)
    assert session.controls.prediction_enabled is False
    assert frame.polylines == ()
    assert session.controls.focus_index == 1
    assert session.controls.controlled_index == 1
    assert "Prediction: off" in frame.status
    assert "Prediction steps: 0 (stride 1)" in frame.status


def test_stop_halts_ticks():
    cfg = SimCfg()
    session = Session(classic_world(cfg), cfg)
    session.tick()
    session.submit(Command(STOP))
    frame = session.tick()
    assert session.running is False
    assert frame.tick == 1
    assert session.world.tick == 1


def test_frame_contents():
    cfg = SimCfg(prediction_steps=20, prediction_stride=5)
    session = Session(classic_world(cfg), cfg, viewport_size=(1000.0, 1000.0))
    frame = session.tick()
    assert frame.tick == 1
    assert frame.focus.index == 0
    assert np.all(np.isfinite(frame.center_of_mass))
    # the star is not predicted, the planet is
    assert [line.body_index for line in frame.polylines] == [1]
    assert any(line.startswith("Thrust delta:") for line in frame.status)
    assert "Focus: Star" in frame.status


def test_session_records_run(tmp_path):
    cfg = SimCfg(prediction_steps=10)
    logger = RunLogger(tmp_path, run_id="test")
    session = Session(classic_world(cfg), cfg, logger=logger)
    session.submit(Command(CYCLE_CONTROLLED, amount=1))
    session.submit(Command(THRUST, dy=1))
    for _ in range(3):
        session.tick()
    session.submit(Command(STOP))
    session.tick()

    assert logger.closed
    rows = logger.timeseries_path.read_text().strip().splitlines()
    assert rows[0] == "tick,body,x,y,vx,vy"
    assert len(rows) == 1 + 3 * 2
    assert rows[1].startswith("1,0,")
    events = logger.events_path.read_text().strip().splitlines()
    assert events[0] == "tick,type,details"
    assert events[1] == "0,cycle_controlled,index=1"
    assert events[2].startswith("0,thrust,body=1;")
    assert events[-1].startswith("3,stop")
    assert (tmp_path / "last_run.txt").read_text() == "test"
    assert logger.meta_path.exists()


def test_out_of_range_indices_wrap():
    cfg = SimCfg(prediction_steps=10, thrust_delta=0.5)
    session = Session(classic_world(cfg), cfg)
    session.controls.focus_index = 2
    session.controls.controlled_index = 5
    session.submit(Command(THRUST, dx=1))
    frame = session.tick()

    assert "Focus: Star" in frame.status
    assert "Controlled: Planet" in frame.status
    assert session.focus_body() is session.world[0]
    assert session.controlled_body() is session.world[1]

    reference = classic_world(cfg)
    reference[1].velocity += (0.5, 0.0)
    reference.step()
    np.testing.assert_array_equal(session.world[1].velocity, reference[1].velocity)


def test_empty_world_has_no_selected_bodies():
    cfg = SimCfg()
    session = Session(World(cfg=cfg), cfg)
    session.controls.controlled_index = 3
    session.submit(Command(THRUST, dx=1))
    frame = session.tick()
    assert session.focus_body() is None
    assert session.controlled_body() is None
    assert frame.tick == 1
    assert not any(line.startswith("Focus:") for line in frame.status)
