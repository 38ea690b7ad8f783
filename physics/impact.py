import logging
import math
from dataclasses import dataclass

import numpy as np

from physics.constants import DEFAULT_CONSTANTS, PhysicsConstants

logger = logging.getLogger(__name__)

J_PER_MT_TNT = 4.18e15           # J in 1 megaton TNT
J_PER_KT_TNT = 4.18e12           # J in 1 kiloton TNT


@dataclass(frozen=True)
class ImpactEvent:
    meteor_id: int
    position: tuple         # scene units, at penetration
    energy_joules: float
    speed_m_s: float
    time_s: float = 0.0     # simulated time of the step

    @property
    def energy_kt_tnt(self) -> float:
        return self.energy_joules / J_PER_KT_TNT

    @property
    def energy_mt_tnt(self) -> float:
        return self.energy_joules / J_PER_MT_TNT


class ImpactEvaluator:
    """Turns a penetrating meteor into a one-shot impact record."""

    def __init__(self, constants: PhysicsConstants = DEFAULT_CONSTANTS):
        self.constants = constants

    def kinetic_energy(self, mass: float, velocity) -> float:
        """
        Kinetic energy [J] from a scene-unit velocity.

        Raises
        ------
        ValueError
            If mass is not positive and finite or velocity is not finite.
        """
        if not math.isfinite(mass) or mass <= 0.0:
            raise ValueError(f"impact mass must be positive and finite, got {mass}")
        velocity = np.asarray(velocity, dtype=float)
        if not np.all(np.isfinite(velocity)):
            raise ValueError(f"impact velocity must be finite, got {velocity.tolist()}")
        speed = float(np.linalg.norm(velocity)) * self.constants.scene_scale
        return 0.5 * mass * speed * speed

    def evaluate(self, meteor, time_s: float = 0.0) -> ImpactEvent:
        energy = self.kinetic_energy(meteor.mass, meteor.velocity)
        event = ImpactEvent(
            meteor_id=meteor.meteor_id,
            position=tuple(float(x) for x in meteor.position),
            energy_joules=energy,
            speed_m_s=meteor.speed(self.constants.scene_scale),
            time_s=time_s,
        )
        logger.info(f"Meteor {meteor.meteor_id} impacted at t={time_s:.2f}s: "
                    f"{energy:.3e} J ({event.energy_kt_tnt:.3f} kt TNT)")
        return event
