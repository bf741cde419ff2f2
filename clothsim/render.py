import pygame

import constants


def to_screen(pos, screen_height):
    """Simulation space has y up, pygame surfaces have y down."""
    return (int(pos.x), int(screen_height - pos.y))


def draw_cloth(screen, cloth, show_particles=False, color=constants.DARK_GREY,
               particle_color=constants.RED, anchor_color=constants.BLUE):
    """Helper to draw the remaining constraints and, optionally, the particles."""
    height = screen.get_height()
    for c in cloth.constraints:
        pygame.draw.line(screen, color, to_screen(c.p1.pos, height), to_screen(c.p2.pos, height), 1)

    if show_particles:
        for p in cloth.iter_particles():
            radius = max(2, int(round(p.radius * 4)))
            pygame.draw.circle(screen, anchor_color if p.anchored else particle_color,
                               to_screen(p.pos, height), radius)
