"""Scenario definitions for preset sandbox starting worlds."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from orbit_sandbox.core.config import RENDER_CFG, SIM_CFG, RenderCfg, SimCfg
from orbit_sandbox.core.model import Body, radius_for_mass
from orbit_sandbox.core.physics import circular_orbit_speed
from orbit_sandbox.core.world import World

STAR_COLOR = (255, 255, 0)
PLANET_COLOR = (255, 0, 0)
MOON_COLOR = (180, 180, 200)
MARKER_COLOR = (90, 90, 90)


def _radius(mass: float, render_cfg: RenderCfg) -> float:
    return radius_for_mass(
        mass,
        scale=render_cfg.body_radius_scale,
        min_radius=render_cfg.body_min_radius,
    )


def _star_and_planet(cfg: SimCfg, render_cfg: RenderCfg) -> list[Body]:
    return [
        Body(800.0, (500.0, 500.0), (0.0, 0.0), _radius(800.0, render_cfg),
             predict_enabled=False, color=STAR_COLOR, name="Star"),
        Body(1.0, (750.0, 200.0), (0.0, 3.0), _radius(1.0, render_cfg),
             color=PLANET_COLOR, name="Planet"),
    ]


def _circular(cfg: SimCfg, render_cfg: RenderCfg) -> list[Body]:
    star_mass, planet_mass, distance = 800.0, 1.0, 300.0
    # relative speed for a circular two-body orbit, split so total momentum is zero
    v_rel = circular_orbit_speed(star_mass + planet_mass, distance, cfg)
    total = star_mass + planet_mass
    return [
        Body(star_mass, (500.0, 500.0), (0.0, -v_rel * planet_mass / total),
             _radius(star_mass, render_cfg), predict_enabled=False, color=STAR_COLOR, name="Star"),
        Body(planet_mass, (500.0 + distance, 500.0), (0.0, v_rel * star_mass / total),
             _radius(planet_mass, render_cfg), color=PLANET_COLOR, name="Planet"),
    ]


def _binary(cfg: SimCfg, render_cfg: RenderCfg) -> list[Body]:
    mass, half_sep = 400.0, 120.0
    # each star circles the barycenter at radius half_sep
    speed = math.sqrt(cfg.gravitational_constant * mass / (4.0 * half_sep))
    planet_distance = 420.0
    planet_speed = circular_orbit_speed(2.0 * mass, planet_distance, cfg)
    return [
        Body(mass, (500.0 - half_sep, 500.0), (0.0, -speed), _radius(mass, render_cfg),
             color=STAR_COLOR, name="Star A"),
        Body(mass, (500.0 + half_sep, 500.0), (0.0, speed), _radius(mass, render_cfg),
             color=(255, 170, 60), name="Star B"),
        Body(1.0, (500.0, 500.0 - planet_distance), (planet_speed, 0.0), _radius(1.0, render_cfg),
             color=PLANET_COLOR, name="Planet"),
    ]


def _planet_moon(cfg: SimCfg, render_cfg: RenderCfg) -> list[Body]:
    bodies = _circular(cfg, render_cfg)
    planet = bodies[1]
    planet.mass = 20.0
    moon_distance = 30.0
    moon_speed = circular_orbit_speed(planet.mass, moon_distance, cfg)
    bodies.append(
        Body(0.1, planet.position + (0.0, -moon_distance), planet.velocity + (moon_speed, 0.0),
             _radius(0.1, render_cfg), color=MOON_COLOR, name="Moon")
    )
    # a massless marker parked at the system origin
    bodies.append(
        Body(0.0, (500.0, 500.0), (0.0, 0.0), render_cfg.body_min_radius,
             predict_enabled=False, color=MARKER_COLOR, name="Marker")
    )
    return bodies


@dataclass(frozen=True)
class Scenario:
    key: str
    name: str
    description: str
    factory: Callable[[SimCfg, RenderCfg], list[Body]]

    def build(self, cfg: SimCfg = SIM_CFG, render_cfg: RenderCfg = RENDER_CFG) -> World:
        return World(self.factory(cfg, render_cfg), cfg)


SCENARIO_DEFINITIONS: tuple[Scenario, ...] = (
    Scenario(
        key="classic",
        name="Star and planet",
        description="Heavy star with a light planet on an eccentric path.",
        factory=_star_and_planet,
    ),
    Scenario(
        key="circular",
        name="Circular orbit",
        description="Planet on a circular orbit around the shared barycenter.",
        factory=_circular,
    ),
    Scenario(
        key="binary",
        name="Binary star",
        description="Two equal stars with a circumbinary planet.",
        factory=_binary,
    ),
    Scenario(
        key="moon",
        name="Planet and moon",
        description="Star, planet with a moon, and a massless reference marker.",
        factory=_planet_moon,
    ),
)

SCENARIOS: dict[str, Scenario] = {scenario.key: scenario for scenario in SCENARIO_DEFINITIONS}
SCENARIO_DISPLAY_ORDER: list[str] = [scenario.key for scenario in SCENARIO_DEFINITIONS]
DEFAULT_SCENARIO_KEY = SCENARIO_DISPLAY_ORDER[0]


__all__ = [
    "DEFAULT_SCENARIO_KEY",
    "SCENARIO_DEFINITIONS",
    "SCENARIO_DISPLAY_ORDER",
    "SCENARIOS",
    "Scenario",
]
