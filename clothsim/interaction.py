import logging

logger = logging.getLogger(__name__)


class InteractionController:
    """
    Turns pointer events into anchoring, dragging and tearing on a cloth.

    Positions are in simulation space (origin bottom-left, y up). The two
    mode flags are set from outside (held keys, a GUI) and only last for one
    press/release cycle.
    """

    def __init__(self, cloth, tear_on_press=False):
        self.cloth = cloth
        self.tear_on_press = bool(tear_on_press)

        self.dragging = False
        self.tear_mode = False
        self.anchor_intent = False

        # grid index of the grabbed particle
        self.active = None

    def set_tear_mode(self, enabled=True):
        self.tear_mode = bool(enabled)

    def set_anchor_intent(self, enabled=True):
        self.anchor_intent = bool(enabled)

    @property
    def active_particle(self):
        if self.active is None:
            return None
        return self.cloth.particle_at(self.active)

    @property
    def state(self):
        if not self.dragging:
            return 'idle'
        if self.active is not None:
            return 'dragging'
        if self.tear_mode:
            return 'tearing'
        return 'idle'

    def on_pointer_down(self, pos):
        # anchoring has to be requested while the pointer is held
        self.anchor_intent = False
        self.dragging = True
        self.active = None

        if not self.tear_mode:
            self.active = self.cloth.closest_particle(pos)
        elif self.tear_on_press:
            self.cloth.tear(pos)

    def on_pointer_move(self, pos):
        if not self.dragging:
            return

        particle = self.active_particle
        if particle is not None:
            # hold the particle under the pointer; the first move anchors it
            self.cloth.anchor(particle, pos)
            particle.move_to(particle.anchor)
        elif self.tear_mode:
            self.cloth.tear(pos)

    def on_pointer_up(self):
        particle = self.active_particle
        if particle is not None:
            if self.anchor_intent:
                logger.debug("kept %s anchored on release", particle)
            else:
                self.cloth.release(particle)

        self.active = None
        self.dragging = False
        self.anchor_intent = False
        self.tear_mode = False

    def reset(self, cloth=None):
        """Drops any in-progress interaction, optionally retargeting a new cloth."""
        if cloth is not None:
            self.cloth = cloth
        self.active = None
        self.dragging = False
        self.anchor_intent = False
        self.tear_mode = False
