import logging
import math
import random
from dataclasses import dataclass, field

import numpy as np

from entities import Meteor
from physics import (
    Atmosphere,
    AtmosphereSample,
    DEFAULT_CONSTANTS,
    DragModel,
    GravityModel,
    ImpactEvaluator,
    ImpactEvent,
    Integrator,
    PhysicsConstants,
)

logger = logging.getLogger(__name__)


@dataclass
class ImpactStats:
    count: int = 0
    total_energy: float = 0.0       # J
    largest_energy: float = 0.0     # J
    locations: list = field(default_factory=list)

    def record(self, event: ImpactEvent):
        self.count += 1
        self.total_energy += event.energy_joules
        self.largest_energy = max(self.largest_energy, event.energy_joules)
        self.locations.append(event.position)


class Simulation:
    """
    Owns the active meteors and impact statistics. The host drives it one
    tick at a time with an explicit ``dt``.
    """

    def __init__(self, constants: PhysicsConstants = DEFAULT_CONSTANTS,
                 atmosphere: Atmosphere | None = None,
                 include_moon: bool = False,
                 drag_enabled: bool = True):
        self.constants = constants
        self.atmosphere = atmosphere or Atmosphere(constants=constants)
        self.gravity = GravityModel.with_moon(constants) if include_moon else GravityModel(constants)
        self.drag = DragModel(self.atmosphere, constants) if drag_enabled else None
        self.integrator = Integrator(self.gravity, self.drag, constants)
        self.impacts = ImpactEvaluator(constants)

        self.meteors: list[Meteor] = []
        self.stats = ImpactStats()
        self.elapsed = 0.0          # simulated seconds
        self._next_id = 1

    @property
    def active_count(self) -> int:
        return len(self.meteors)

    def spawn(self, position, velocity, size: float) -> Meteor:
        meteor = Meteor(position, velocity, size, meteor_id=self._next_id, constants=self.constants)
        self._next_id += 1
        self.meteors.append(meteor)
        logger.debug(f"Spawned {meteor!r}, entry speed {meteor.entry_speed:.0f} m/s")
        return meteor

    def spawn_random(self, rng: random.Random | None = None) -> Meteor:
        # Ring 20-50 units outside the atmosphere, heading roughly inward and slightly down
        rng = rng or random.Random()
        shell = self.constants.primary_radius + self.constants.atmosphere_height
        angle = rng.uniform(0.0, 2.0 * math.pi)
        distance = shell + 20.0 + rng.random() * 30.0
        height = 5.0 + rng.random() * 10.0
        position = (math.cos(angle) * distance, height, math.sin(angle) * distance)

        inbound = 2.0 + rng.random() * 3.0
        velocity = (-math.cos(angle) * inbound, -rng.random() * 2.0, -math.sin(angle) * inbound)
        size = 0.1 + rng.random() * 0.3
        return self.spawn(position, velocity, size)

    def remove(self, meteor: Meteor):
        self.meteors.remove(meteor)
        logger.debug(f"Removed meteor {meteor.meteor_id} on request")

    def remove_all(self):
        self.meteors = []
        self.stats = ImpactStats()
        self.elapsed = 0.0
        self._next_id = 1
        logger.info("Simulation cleared")

    def substeps(self, dt: float, time_scale: float = 1.0) -> int:
        """Substeps that keep every active meteor within ``max_substep_travel`` per substep."""
        fastest = max((float(np.linalg.norm(m.velocity)) for m in self.meteors), default=0.0)
        return max(1, math.ceil(fastest * dt * time_scale / self.constants.max_substep_travel))

    def _check_step_args(self, dt: float, time_scale: float):
        if not math.isfinite(dt) or dt <= 0.0:
            raise ValueError(f"dt must be positive and finite, got {dt}")
        c = self.constants
        if not math.isfinite(time_scale) or not c.min_time_scale <= time_scale <= c.max_time_scale:
            raise ValueError(
                f"time scale must be within [{c.min_time_scale}, {c.max_time_scale}], got {time_scale}"
            )

    def step(self, dt: float, time_scale: float = 1.0, paused: bool = False) -> list[ImpactEvent]:
        """Advance every active meteor one tick; return this tick's impacts."""
        if paused:
            return []
        self._check_step_args(dt, time_scale)

        self.elapsed += dt * time_scale
        events = []
        impacted = []
        for meteor in self.meteors:
            if self.integrator.advance(meteor, dt, time_scale):
                event = self.impacts.evaluate(meteor, time_s=self.elapsed)
                self.stats.record(event)
                events.append(event)
                impacted.append(meteor)

        if impacted:
            self.meteors = [m for m in self.meteors if m not in impacted]
        return events

    def atmosphere_at(self, distance_from_center: float) -> AtmosphereSample:
        return self.atmosphere.sample(self.constants.altitude_m(distance_from_center))
