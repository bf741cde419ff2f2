import pygame
import pytest

import constants
from clothsim.distance import exact_dist
from clothsim.render import draw_cloth, to_screen
from clothsim.Vec2 import Vec2
from clothsim.world import World


@pytest.fixture
def world():
    options = {
        'origin': (10, 10),
        'width': 3,
        'height': 2,
        'rest_length': 10,
        'gravity': -2.0,
        'distance': exact_dist,
    }
    return World(200, 100, cloth_options=options)


def test_default_world_uses_constants():
    w = World()
    assert (w.cloth.width, w.cloth.height) == (constants.CLOTH_COLS, constants.CLOTH_ROWS)
    assert w.cloth.rest_length == constants.REST_LENGTH
    assert w.cloth.iterations == constants.CONSTRAINT_ITERATIONS
    assert len(w.cloth.anchors) == 3


def test_to_sim_flips_y(world):
    assert world.to_sim((15, 20)) == (15.0, 80.0)
    assert to_screen(Vec2(15, 80), 100) == (15, 20)


def test_update_runs_integrate_then_relax(world):
    free = world.cloth.particle_at((0, 0))
    y = free.pos.y
    world.update()
    assert world.frames == 1
    assert free.pos.y < y
    for p in world.cloth.anchors:
        assert p.pos == p.anchor


def test_pointer_events_use_screen_coordinates(world):
    # particle (1, 1) sits at sim (20, 20) = screen (20, 80)
    world.pointer_down((20, 80))
    assert world.controller.active == (1, 1)
    world.pointer_move((30, 50))
    p = world.cloth.particle_at((1, 1))
    assert p.anchor == (30.0, 50.0)
    world.pointer_up()
    assert not p.anchored


def test_reset_restores_torn_cloth(world):
    world.controller.set_tear_mode(True)
    world.pointer_down((15, 90))
    world.pointer_move((15, 90))
    assert len(world.cloth.constraints) < 7

    old = world.cloth
    world.update()
    world.reset()
    assert world.cloth is not old
    assert world.controller.cloth is world.cloth
    assert len(world.cloth.constraints) == 7
    assert world.frames == 0
    assert not world.controller.dragging


def test_draw_lines_and_particles(world):
    screen = pygame.Surface((200, 100))
    screen.fill(constants.WHITE)
    world.draw(screen)
    # horizontal link between sim (10, 10) and (20, 10) is at screen row 90
    assert tuple(screen.get_at((15, 90)))[:3] == constants.DARK_GREY
    assert tuple(screen.get_at((150, 20)))[:3] == constants.WHITE


def test_draw_skips_torn_constraints(world):
    world.cloth.tear((15.0, 10.0))
    screen = pygame.Surface((200, 100))
    screen.fill(constants.WHITE)
    draw_cloth(screen, world.cloth, show_particles=True)
    assert tuple(screen.get_at((15, 90)))[:3] == constants.WHITE
    # anchored corner drawn in the anchor colour
    assert tuple(screen.get_at((10, 80)))[:3] == constants.BLUE
