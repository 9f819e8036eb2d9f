from __future__ import annotations

import math
from typing import Sequence, TYPE_CHECKING

import numpy as np
import pygame

from .assets import get_text_surface
from .camera import Camera

if TYPE_CHECKING:  # pragma: no cover
    from orbit_sandbox.core.config import RenderCfg
    from orbit_sandbox.core.model import Body
    from orbit_sandbox.core.predictor import Polyline


# keep far-away coordinates inside what pygame can rasterize
_SAFE_COORD_LIMIT = 30_000


def _safe_point(point: tuple[int, int]) -> tuple[int, int]:
    return (
        max(-_SAFE_COORD_LIMIT, min(_SAFE_COORD_LIMIT, point[0])),
        max(-_SAFE_COORD_LIMIT, min(_SAFE_COORD_LIMIT, point[1])),
    )


def fade_background(surface: pygame.Surface, fade_layer: pygame.Surface) -> None:
    """Blend a translucent background over the last frame to leave traces."""

    surface.blit(fade_layer, (0, 0))


def make_fade_layer(size: tuple[int, int], render_cfg: RenderCfg) -> pygame.Surface:
    layer = pygame.Surface(size)
    layer.fill(render_cfg.background_color)
    layer.set_alpha(render_cfg.trace_decay_alpha)
    return layer


def draw_bodies(
    surface: pygame.Surface,
    bodies: Sequence[Body],
    camera: Camera,
) -> None:
    for body in bodies:
        screen = camera.world_to_screen(float(body.position[0]), float(body.position[1]))
        radius = max(1, int(round(body.radius)))
        if not camera.is_visible(screen, margin=radius):
            continue
        pygame.draw.circle(surface, body.color, screen, radius)


def draw_selection_ring(
    surface: pygame.Surface,
    body: Body,
    camera: Camera,
    *,
    color: tuple[int, int, int],
    padding: int = 4,
) -> None:
    screen = camera.world_to_screen(float(body.position[0]), float(body.position[1]))
    pygame.draw.circle(surface, color, _safe_point(screen), int(round(body.radius)) + padding, 1)


def draw_polylines(
    surface: pygame.Surface,
    polylines: Sequence[Polyline],
    camera: Camera,
    *,
    alpha: int,
    width: int = 1,
) -> None:
    """Draw predicted paths; their points are already focus-relative."""

    if not polylines:
        return
    layer = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    for line in polylines:
        if len(line.points) < 2:
            continue
        points = [_safe_point(camera.frame_to_screen(p)) for p in line.points]
        pygame.draw.lines(layer, (*line.color, alpha), False, points, width)
    surface.blit(layer, (0, 0))


def draw_center_of_mass(
    surface: pygame.Surface,
    com: np.ndarray,
    camera: Camera,
    *,
    color: tuple[int, int, int],
    radius: int,
) -> None:
    if not np.all(np.isfinite(com)):
        return
    screen = camera.world_to_screen(float(com[0]), float(com[1]))
    if camera.is_visible(screen, margin=radius):
        pygame.draw.circle(surface, color, screen, radius)


def draw_hud(
    surface: pygame.Surface,
    font: pygame.font.Font,
    lines: Sequence[str],
    *,
    color: tuple[int, int, int],
    margin: int,
) -> None:
    y = margin
    line_height = font.get_linesize()
    for line in lines:
        surface.blit(get_text_surface(font, line, color), (margin, y))
        y += line_height


def draw_fps(
    surface: pygame.Surface,
    font: pygame.font.Font,
    fps_value: float,
    *,
    color: tuple[int, int, int],
    margin: int,
) -> None:
    if not math.isfinite(fps_value):
        return
    text = get_text_surface(font, f"FPS: {fps_value:.1f}", color)
    width, height = surface.get_size()
    surface.blit(text, text.get_rect(bottomright=(width - margin, height - margin)))
