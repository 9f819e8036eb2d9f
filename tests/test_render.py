import numpy as np
import pygame

from orbit_sandbox.core.config import RENDER_CFG, SimCfg
from orbit_sandbox.core.predictor import Predictor
from orbit_sandbox.data.scenarios import SCENARIOS
from orbit_sandbox.render import (
    Camera,
    draw_bodies,
    draw_center_of_mass,
    draw_polylines,
    fade_background,
    make_fade_layer,
)


def make_scene():
    cfg = SimCfg(prediction_steps=40, prediction_stride=2)
    world = SCENARIOS["classic"].build(cfg)
    camera = Camera((200, 200))
    camera.follow(world, 0)
    return world, camera, pygame.Surface(camera.size)


def test_bodies_drawn_relative_to_focus():
    world, camera, surface = make_scene()
    draw_bodies(surface, world.bodies, camera)
    # the star sits in the middle of the view
    assert surface.get_at((100, 100))[:3] == world[0].color
    # the planet is far outside a 200px view
    assert surface.get_at((5, 5))[:3] == (0, 0, 0)


def test_polylines_and_center_of_mass():
    world, camera, surface = make_scene()
    focus = camera.focus(0)
    polylines = Predictor(world, 40, 2).predict(focus)
    draw_polylines(surface, polylines, camera, alpha=255)
    draw_polylines(surface, (), camera, alpha=255)
    draw_center_of_mass(surface, np.array([np.nan, np.nan]), camera, color=(0, 200, 0), radius=3)
    draw_center_of_mass(surface, world.center_of_mass(), camera, color=(0, 200, 0), radius=3)


def test_fade_layer_dims_previous_frame():
    _, camera, surface = make_scene()
    surface.fill((255, 255, 255))
    fade_background(surface, make_fade_layer(camera.size, RENDER_CFG))
    r, g, b = surface.get_at((0, 0))[:3]
    assert r < 255 and r == g == b
