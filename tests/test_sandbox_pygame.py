import pygame

import sandbox_pygame
from orbit_sandbox.core.controls import ADJUST_STEPS, CYCLE_FOCUS, STOP, THRUST, TOGGLE_PREDICTION


def key_event(key, mod=0):
    return pygame.event.Event(pygame.KEYDOWN, key=key, mod=mod)


def test_key_map_covers_controls():
    key_map = sandbox_pygame.build_key_map()
    assert key_map[pygame.K_LEFT].action == THRUST
    assert key_map[pygame.K_LEFT].dx == -1
    assert key_map[pygame.K_p].action == TOGGLE_PREDICTION
    assert key_map[pygame.K_MINUS].action == ADJUST_STEPS
    assert key_map[pygame.K_MINUS].amount == -1
    assert key_map[pygame.K_ESCAPE].action == STOP


def test_tab_cycles_focus_both_ways():
    key_map = sandbox_pygame.build_key_map()
    forward = sandbox_pygame.command_for_event(key_event(pygame.K_TAB), key_map)
    backward = sandbox_pygame.command_for_event(key_event(pygame.K_TAB, pygame.KMOD_LSHIFT), key_map)
    assert forward.action == backward.action == CYCLE_FOCUS
    assert (forward.amount, backward.amount) == (1, -1)


def test_quit_and_unmapped_events():
    key_map = sandbox_pygame.build_key_map()
    assert sandbox_pygame.command_for_event(pygame.event.Event(pygame.QUIT), key_map).action == STOP
    assert sandbox_pygame.command_for_event(key_event(pygame.K_F1), key_map) is None
    motion = pygame.event.Event(pygame.MOUSEMOTION, pos=(0, 0), rel=(0, 0), buttons=(0, 0, 0))
    assert sandbox_pygame.command_for_event(motion, key_map) is None


def test_parse_args_defaults():
    args = sandbox_pygame.parse_args([])
    assert args.scenario == "classic"
    assert args.config is None
    assert args.no_log is False
