import numpy as np
import pytest

from orbit_sandbox.data.scenarios import DEFAULT_SCENARIO_KEY, SCENARIO_DISPLAY_ORDER, SCENARIOS
from orbit_sandbox.render.camera import Camera


@pytest.mark.parametrize("key", SCENARIO_DISPLAY_ORDER)
def test_scenarios_build_and_step(key):
    world = SCENARIOS[key].build()
    assert len(world) >= 2
    for _ in range(50):
        world.step()
    for body in world.bodies:
        assert np.all(np.isfinite(body.position))


def test_classic_scenario_layout():
    assert DEFAULT_SCENARIO_KEY == "classic"
    star, planet = SCENARIOS["classic"].build().bodies
    assert star.mass == 800.0
    assert star.position.tolist() == [500.0, 500.0]
    assert planet.position.tolist() == [750.0, 200.0]
    assert planet.velocity.tolist() == [0.0, 3.0]
    assert not star.predict_enabled and planet.predict_enabled


def test_circular_scenario_has_zero_momentum():
    bodies = SCENARIOS["circular"].build().bodies
    momentum = sum(body.mass * body.velocity for body in bodies)
    assert momentum == pytest.approx(np.zeros(2), abs=1e-12)


def test_moon_scenario_has_massless_marker():
    bodies = SCENARIOS["moon"].build().bodies
    assert any(body.mass == 0.0 for body in bodies)


def test_camera_centers_focus_body():
    camera = Camera((1000, 800))
    world = SCENARIOS["classic"].build()
    assert camera.focus(1).offset(world) == pytest.approx(np.array([250.0, -200.0]))
    # out-of-range focus indices wrap around the body list
    assert camera.focus(5).offset(world) == pytest.approx(np.array([250.0, -200.0]))
    camera.follow(world, 1)
    assert camera.world_to_screen(750.0, 200.0) == (500, 400)
    assert camera.is_visible((500, 400))
    assert not camera.is_visible((-50, 400))
