import logging
from dataclasses import dataclass

import numpy as np

from physics.constants import DEFAULT_CONSTANTS, PhysicsConstants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttractingBody:
    """A fixed point mass pulling on every meteor."""
    name: str
    mass: float                             # kg
    radius_m: float                         # m
    position: tuple = (0.0, 0.0, 0.0)       # scene units


class GravityModel:
    """
    Newtonian gravity toward the primary body and any secondaries.

    Distances are converted from scene units to meters before squaring. The
    returned acceleration is in m/s^2; the integrator divides by the scene
    scale before applying it to scene-unit velocities.
    """

    def __init__(self, constants: PhysicsConstants = DEFAULT_CONSTANTS, secondaries=()):
        self.constants = constants
        self.primary = AttractingBody("Earth", constants.primary_mass, constants.primary_radius_m)
        self.secondaries = tuple(secondaries)

    @classmethod
    def with_moon(cls, constants: PhysicsConstants = DEFAULT_CONSTANTS):
        moon = AttractingBody(
            "Moon",
            constants.moon_mass,
            constants.moon_radius_m,
            (constants.moon_distance, 0.0, 0.0),
        )
        return cls(constants, secondaries=(moon,))

    @property
    def bodies(self):
        return (self.primary,) + self.secondaries

    def _pull(self, body: AttractingBody, position: np.ndarray) -> np.ndarray:
        offset = np.asarray(body.position, dtype=float) - position
        distance = float(np.linalg.norm(offset))
        if distance == 0.0:
            # Direction undefined at the centre; no contribution
            logger.warning(f"Meteor at the centre of {body.name}; gravity term skipped")
            return np.zeros(3)

        r_m = max(self.constants.min_distance_m, distance * self.constants.scene_scale)
        # F = G M m / r^2, so a = F / m
        accel = self.constants.G * body.mass / (r_m * r_m)
        return offset / distance * accel

    def acceleration(self, position) -> np.ndarray:
        position = np.asarray(position, dtype=float)
        total = np.zeros(3)
        for body in self.bodies:
            term = self._pull(body, position)
            if not np.all(np.isfinite(term)):
                logger.warning(f"Non-finite gravity from {body.name} at {position}; treated as zero")
                continue
            total += term
        return total

    def field_strength(self, distance: float) -> float:
        """Primary gravity magnitude [m/s^2] at a scene distance from its centre."""
        r_m = max(self.constants.min_distance_m, distance * self.constants.scene_scale)
        return self.constants.G * self.primary.mass / (r_m * r_m)
