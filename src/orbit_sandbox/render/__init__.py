"""Rendering helpers for the orbit sandbox."""

from .camera import Camera
from .assets import (
    get_text_surface,
    load_font,
)
from .draw import (
    draw_bodies,
    draw_center_of_mass,
    draw_fps,
    draw_hud,
    draw_polylines,
    draw_selection_ring,
    fade_background,
    make_fade_layer,
)

__all__ = [
    "Camera",
    "draw_bodies",
    "draw_center_of_mass",
    "draw_fps",
    "draw_hud",
    "draw_polylines",
    "draw_selection_ring",
    "fade_background",
    "get_text_surface",
    "load_font",
    "make_fade_layer",
]
