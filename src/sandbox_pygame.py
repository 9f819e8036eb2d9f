# src/sandbox_pygame.py
"""Interactive orbit sandbox window.

Arrow keys thrust the controlled body, ``[``/``]`` scale the thrust delta,
``P`` toggles the trajectory preview, ``+``/``-`` change the preview length,
``,``/``.`` change the sample stride, ``Tab`` cycles the focus body, ``C``
cycles the controlled body and ``Esc``/``Q`` quits.
"""
from __future__ import annotations

import argparse
import sys

import pygame

from orbit_sandbox.core.config import RENDER_CFG, SIM_CFG, SimCfg, load_sim_cfg
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
)
from orbit_sandbox.core.logging_utils import RunLogger
from orbit_sandbox.core.session import Session
from orbit_sandbox.core.timekeeping import FrameTimer, TickAccumulator
from orbit_sandbox.data.scenarios import DEFAULT_SCENARIO_KEY, SCENARIO_DISPLAY_ORDER, SCENARIOS
from orbit_sandbox.render import (
    Camera,
    draw_bodies,
    draw_center_of_mass,
    draw_fps,
    draw_hud,
    draw_polylines,
    draw_selection_ring,
    fade_background,
    load_font,
    make_fade_layer,
)

HUD_FONT_NAMES = ["consolas", "dejavusansmono", "menlo", "couriernew"]


def build_key_map() -> dict[int, Command]:
    """Key-down code to the command it produces."""

    return {
        pygame.K_LEFT: Command(THRUST, dx=-1),
        pygame.K_RIGHT: Command(THRUST, dx=1),
        pygame.K_UP: Command(THRUST, dy=-1),
        pygame.K_DOWN: Command(THRUST, dy=1),
        pygame.K_RIGHTBRACKET: Command(SCALE_THRUST, amount=1),
        pygame.K_LEFTBRACKET: Command(SCALE_THRUST, amount=-1),
        pygame.K_p: Command(TOGGLE_PREDICTION),
        pygame.K_EQUALS: Command(ADJUST_STEPS, amount=1),
        pygame.K_PLUS: Command(ADJUST_STEPS, amount=1),
        pygame.K_KP_PLUS: Command(ADJUST_STEPS, amount=1),
        pygame.K_MINUS: Command(ADJUST_STEPS, amount=-1),
        pygame.K_KP_MINUS: Command(ADJUST_STEPS, amount=-1),
        pygame.K_PERIOD: Command(ADJUST_STRIDE, amount=1),
        pygame.K_COMMA: Command(ADJUST_STRIDE, amount=-1),
        pygame.K_c: Command(CYCLE_CONTROLLED, amount=1),
        pygame.K_ESCAPE: Command(STOP),
        pygame.K_q: Command(STOP),
    }


def command_for_event(event: pygame.event.Event, key_map: dict[int, Command]) -> Command | None:
    if event.type == pygame.QUIT:
        return Command(STOP)
    if event.type != pygame.KEYDOWN:
        return None
    if event.key == pygame.K_TAB:
        return Command(CYCLE_FOCUS, amount=-1 if event.mod & pygame.KMOD_SHIFT else 1)
    return key_map.get(event.key)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive n-body orbit sandbox.")
    parser.add_argument(
        "--scenario",
        choices=SCENARIO_DISPLAY_ORDER,
        default=DEFAULT_SCENARIO_KEY,
        help="Starting world.",
    )
    parser.add_argument("--config", default=None, help="JSON file with simulation overrides.")
    parser.add_argument("--log-dir", default="data/runs", help="Directory for recorded runs.")
    parser.add_argument("--no-log", action="store_true", help="Do not record the run.")
    return parser.parse_args(argv)


def run(cfg: SimCfg, scenario_key: str, logger: RunLogger | None) -> None:
    pygame.init()
    screen = pygame.display.set_mode(RENDER_CFG.size)
    scenario = SCENARIOS[scenario_key]
    pygame.display.set_caption(f"Orbit sandbox – {scenario.name}")

    world = scenario.build(cfg, RENDER_CFG)
    camera = Camera(RENDER_CFG.size)
    session = Session(world, cfg, viewport_size=camera.size, logger=logger)
    hud_font = load_font(HUD_FONT_NAMES, RENDER_CFG.hud_font_size)
    fade_layer = make_fade_layer(camera.size, RENDER_CFG)
    key_map = build_key_map()

    clock = pygame.time.Clock()
    frame_timer = FrameTimer()
    ticks = TickAccumulator(period=cfg.tick_period, max_ticks=cfg.max_ticks_per_frame)
    screen.fill(RENDER_CFG.background_color)

    if logger is not None:
        print(f"Recording run to {logger.run_dir}")

    # ========= LOOP =========
    while session.running:
        for event in pygame.event.get():
            command = command_for_event(event, key_map)
            if command is not None:
                session.submit(command)

        ticks.accrue(frame_timer.tick())
        frame = None
        for _ in range(ticks.consume()):
            frame = session.tick()
            if not session.running:
                break
        if not session.running:
            break
        if frame is None:
            clock.tick(cfg.tick_rate * 2)
            continue

        focus = session.focus_body()
        if focus is not None:
            camera.follow(world, frame.focus.index)

        fade_background(screen, fade_layer)
        draw_polylines(
            screen,
            frame.polylines,
            camera,
            alpha=RENDER_CFG.prediction_alpha,
            width=RENDER_CFG.prediction_line_width,
        )
        draw_bodies(screen, world.bodies, camera)
        if focus is not None:
            draw_selection_ring(screen, focus, camera, color=RENDER_CFG.focus_ring_color)
            controlled = session.controlled_body()
            if controlled is not focus:
                draw_selection_ring(screen, controlled, camera, color=RENDER_CFG.controlled_ring_color)
        draw_center_of_mass(
            screen,
            frame.center_of_mass,
            camera,
            color=RENDER_CFG.com_color,
            radius=RENDER_CFG.com_radius,
        )
        draw_hud(
            screen,
            hud_font,
            frame.status,
            color=RENDER_CFG.hud_text_color,
            margin=RENDER_CFG.hud_margin,
        )
        draw_fps(
            screen,
            hud_font,
            clock.get_fps(),
            color=RENDER_CFG.fps_text_color,
            margin=RENDER_CFG.hud_margin,
        )
        pygame.display.flip()
        clock.tick(cfg.tick_rate * 2)

    pygame.quit()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    cfg = load_sim_cfg(args.config) if args.config else SIM_CFG
    logger = None if args.no_log else RunLogger(args.log_dir)
    try:
        run(cfg, args.scenario, logger)
    finally:
        if logger is not None:
            logger.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
