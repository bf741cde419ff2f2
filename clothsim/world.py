import logging

import constants
from clothsim import render
from clothsim.cloth import Cloth
from clothsim.interaction import InteractionController

logger = logging.getLogger(__name__)


class World:
    """
    The drawing area, the cloth hanging in it and the pointer controller.
    One frame is update() followed by draw().
    """

    def __init__(self, width=constants.WIDTH, height=constants.HEIGHT, cloth=None,
                 cloth_options=None, tear_on_press=False):
        self.width = width
        self.height = height
        self.cloth_options = dict(cloth_options or {})
        self.cloth = cloth if cloth is not None else self.create_cloth()
        self.controller = InteractionController(self.cloth, tear_on_press=tear_on_press)
        self.show_particles = False
        self.frames = 0

    def create_cloth(self):
        options = {
            'origin': (constants.OFFSET_X, constants.OFFSET_Y),
            'width': constants.CLOTH_COLS,
            'height': constants.CLOTH_ROWS,
        }
        options.update(self.cloth_options)
        return Cloth(**options)

    def reset(self):
        """Rebuilds the cloth from the stored options and drops any drag in progress."""
        self.cloth = self.create_cloth()
        self.controller.reset(self.cloth)
        self.frames = 0
        logger.info("world reset")

    def replace_cloth(self, cloth):
        self.cloth = cloth
        self.controller.reset(cloth)

    def to_sim(self, screen_pos):
        """Maps a window pixel position to simulation space."""
        x, y = screen_pos
        return (float(x), float(self.height - y))

    # --- pointer input, positions in window pixels ---

    def pointer_down(self, screen_pos):
        self.controller.on_pointer_down(self.to_sim(screen_pos))

    def pointer_move(self, screen_pos):
        self.controller.on_pointer_move(self.to_sim(screen_pos))

    def pointer_up(self):
        self.controller.on_pointer_up()

    # --- frame ---

    def update(self):
        self.cloth.integrate()
        self.cloth.relax()
        self.frames += 1

    def draw(self, screen):
        render.draw_cloth(screen, self.cloth, show_particles=self.show_particles)
