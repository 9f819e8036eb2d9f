"""Configuration dataclasses for the orbit sandbox."""
from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path


@dataclass(frozen=True)
class SimCfg:
    gravitational_constant: float = 10.0
    min_distance: float = 1.0
    collisions_enabled: bool = True
    prediction_enabled: bool = True
    prediction_steps: int = 500
    prediction_stride: int = 5
    steps_increment: int = 50
    stride_increment: int = 1
    thrust_delta: float = 0.05
    thrust_scale_factor: float = 2.0
    tick_rate: float = 64.0
    max_ticks_per_frame: int = 4
    log_every_ticks: int = 1

    @property
    def tick_period(self) -> float:
        return 1.0 / self.tick_rate


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1000
    height: int = 1000
    background_color: tuple[int, int, int] = (0, 0, 0)
    trace_decay_alpha: int = int(255 * 0.05)
    body_min_radius: float = 5.0
    body_radius_scale: float = 2.0
    com_color: tuple[int, int, int] = (0, 200, 0)
    com_radius: int = 3
    prediction_alpha: int = 160
    prediction_line_width: int = 1
    focus_ring_color: tuple[int, int, int] = (255, 255, 255)
    controlled_ring_color: tuple[int, int, int] = (120, 200, 255)
    hud_text_color: tuple[int, int, int] = (234, 241, 255)
    hud_font_size: int = 16
    hud_margin: int = 10
    fps_text_color: tuple[int, int, int] = (140, 180, 220)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


SIM_CFG = SimCfg()
RENDER_CFG = RenderCfg()


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


# Valid ranges applied to numeric overrides; anything outside is pulled back in.
_SIM_LIMITS: dict[str, tuple[float, float]] = {
    "gravitational_constant": (0.0, 1e12),
    "min_distance": (1e-9, 1e12),
    "prediction_steps": (0, 100_000),
    "prediction_stride": (1, 100_000),
    "steps_increment": (1, 100_000),
    "stride_increment": (1, 100_000),
    "thrust_delta": (0.0, 1e6),
    "thrust_scale_factor": (1.0, 1e3),
    "tick_rate": (1.0, 1_000.0),
    "max_ticks_per_frame": (1, 1_000),
    "log_every_ticks": (1, 1_000_000),
}


def sim_cfg_from_mapping(data: dict[str, object], base: SimCfg = SIM_CFG) -> SimCfg:
    """Return ``base`` with every valid entry of ``data`` applied.

    Unknown keys and values of the wrong type are ignored. Numeric values are
    clamped into their allowed range, so the result is always usable.
    """

    overrides: dict[str, object] = {}
    for f in fields(SimCfg):
        if f.name not in data:
            continue
        value = data[f.name]
        current = getattr(base, f.name)
        if isinstance(current, bool):
            if isinstance(value, bool):
                overrides[f.name] = value
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        lo, hi = _SIM_LIMITS[f.name]
        clamped = _clamp(float(value), lo, hi)
        overrides[f.name] = int(clamped) if isinstance(current, int) else clamped
    return replace(base, **overrides)


def load_sim_cfg(path: str | Path, base: SimCfg = SIM_CFG) -> SimCfg:
    """Load overrides from a JSON file; an unreadable file yields ``base``."""

    try:
        with Path(path).open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError):
        return base
    if not isinstance(data, dict):
        return base
    return sim_cfg_from_mapping(data, base)


__all__ = [
    "RENDER_CFG",
    "RenderCfg",
    "SIM_CFG",
    "SimCfg",
    "load_sim_cfg",
    "sim_cfg_from_mapping",
]
