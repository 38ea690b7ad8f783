import logging

import numpy as np

from physics.constants import DEFAULT_CONSTANTS, PhysicsConstants
from physics.drag import DragModel
from physics.gravity import GravityModel

logger = logging.getLogger(__name__)


class Integrator:
    """
    Semi-implicit Euler step for one meteor: velocity first (gravity, then
    drag), position from the updated velocity, then the surface test.
    """

    def __init__(self, gravity: GravityModel, drag: DragModel | None = None,
                 constants: PhysicsConstants = DEFAULT_CONSTANTS):
        self.gravity = gravity
        self.drag = drag
        self.constants = constants

    def altitude_m(self, position) -> float:
        return self.constants.altitude_m(float(np.linalg.norm(position)))

    def has_impacted(self, position, size: float) -> bool:
        return float(np.linalg.norm(position)) < self.constants.primary_radius + size

    def advance(self, meteor, dt: float, time_scale: float = 1.0) -> bool:
        """Advance ``meteor`` one step. Returns True when it hit the surface."""
        h = dt * time_scale
        scale = self.constants.scene_scale
        position = meteor.position
        velocity = meteor.velocity.copy()

        # Gravity, m/s^2 -> scene units/s^2
        a_grav = self.gravity.acceleration(position)
        velocity = velocity + a_grav / scale * h

        # Drag and heating inside the envelope
        burning, intensity = False, 0.0
        altitude = self.altitude_m(position)
        if self.drag is not None and self.drag.in_atmosphere(altitude):
            state = self.drag.evaluate(velocity, meteor.size, meteor.mass, altitude)
            dv = state.acceleration / scale * h
            v_now = float(np.linalg.norm(velocity))
            if v_now > 0.0 and float(np.linalg.norm(dv)) >= v_now:
                # Explicit drag would flip the velocity; settle near terminal speed instead
                g = float(np.linalg.norm(a_grav))
                v_term = self.drag.terminal_speed(meteor.mass, g, state.density, state.cd, meteor.size)
                v_keep = self.constants.terminal_fraction * v_term / scale
                logger.debug(f"Meteor {meteor.meteor_id}: drag overshoot at h={altitude:.0f} m, "
                             f"speed clamped to {v_keep * scale:.1f} m/s")
                velocity = velocity / v_now * v_keep
            else:
                velocity = velocity + dv
            burning, intensity = state.burning, state.burn_intensity

        position = position + velocity * h

        if not (np.all(np.isfinite(position)) and np.all(np.isfinite(velocity))):
            logger.warning(f"Meteor {meteor.meteor_id}: non-finite state after step; step discarded")
            return False

        # Commit
        meteor.position = position
        meteor.velocity = velocity
        meteor.burning = burning
        meteor.burn_intensity = intensity

        return self.has_impacted(position, meteor.size)
