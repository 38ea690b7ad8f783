"""
Aerodynamic drag and entry heating for a spherical meteor.

The drag coefficient starts from a smooth-sphere value and is corrected
twice: once for compressibility (Mach number at a fixed speed of sound) and
once for viscous effects (Reynolds number at a fixed air viscosity).

Burning is an advisory signal for the host. It does not feed back into mass
or drag; there is no ablation model here.
"""
import logging
import math
from dataclasses import dataclass

import numpy as np

from physics.atmosphere import Atmosphere
from physics.constants import DEFAULT_CONSTANTS, PhysicsConstants

logger = logging.getLogger(__name__)


@dataclass
class DragState:
    """Result of one drag evaluation."""
    acceleration: np.ndarray    # m/s^2, opposite to velocity
    density: float              # kg/m^3
    temperature: float          # K
    speed: float                # m/s
    mach: float
    reynolds: float
    cd: float
    force: float                # N
    burning: bool = False
    burn_intensity: float = 0.0


class DragModel:
    def __init__(self, atmosphere: Atmosphere | None = None,
                 constants: PhysicsConstants = DEFAULT_CONSTANTS):
        self.constants = constants
        self.atmosphere = atmosphere or Atmosphere(constants=constants)

    def in_atmosphere(self, altitude_m: float) -> bool:
        return self.atmosphere.contains(altitude_m)

    def mach_number(self, speed: float) -> float:
        return speed / self.constants.speed_of_sound

    def reynolds_number(self, density: float, speed: float, size: float) -> float:
        # Characteristic length is the diameter
        return density * speed * (2.0 * size) / self.constants.air_viscosity

    def drag_coefficient(self, speed: float, density: float, size: float) -> float:
        """
        Corrected drag coefficient.

            Cd_dyn = Cd0 * (1 + 0.1 * M)
            Cd     = Cd_dyn * (1 + 0.1 * ln(Re + 1))
        """
        c = self.constants
        cd_dyn = c.drag_coefficient * (1.0 + c.mach_drag_factor * self.mach_number(speed))
        re = self.reynolds_number(density, speed, size)
        return cd_dyn * (1.0 + c.reynolds_drag_factor * math.log(re + 1.0))

    def drag_force(self, speed: float, density: float, size: float, cd: float | None = None) -> float:
        """Drag force magnitude [N] on a sphere of radius ``size``."""
        if cd is None:
            cd = self.drag_coefficient(speed, density, size)
        area = math.pi * size * size
        return 0.5 * density * speed * speed * cd * area

    def burn_state(self, speed: float, density: float) -> tuple[bool, float]:
        c = self.constants
        if speed <= c.burn_speed_threshold:
            return False, 0.0
        heat_transfer = density * speed ** 3 / c.heat_transfer_divisor
        intensity = min(1.0, max(0.0, heat_transfer / c.burn_intensity_divisor))
        return True, intensity

    def terminal_speed(self, mass: float, gravity: float, density: float, cd: float, size: float) -> float:
        # v_t = sqrt( (2 m g) / (rho Cd A) )
        area = math.pi * size * size
        return math.sqrt(max(0.0, (2.0 * mass * gravity) / max(1e-6, density * cd * area)))

    def evaluate(self, velocity, size: float, mass: float, altitude_m: float) -> DragState:
        """
        Drag on a meteor inside the atmosphere.

        Parameters
        ----------
        velocity : array-like
            Velocity in scene units per second.
        size : float
            Meteor radius (scene units).
        mass : float
            Meteor mass [kg].
        altitude_m : float
            Altitude above the primary surface [m].
        """
        velocity = np.asarray(velocity, dtype=float)
        density = self.atmosphere.get_density(altitude_m)
        temperature = self.atmosphere.get_temperature(altitude_m)

        v_scene = float(np.linalg.norm(velocity))
        speed = v_scene * self.constants.scene_scale

        cd = self.drag_coefficient(speed, density, size)
        force = self.drag_force(speed, density, size, cd)
        burning, intensity = self.burn_state(speed, density)

        if v_scene > 0.0:
            acceleration = velocity / v_scene * (-force / mass)
        else:
            acceleration = np.zeros(3)
        if not np.all(np.isfinite(acceleration)):
            logger.warning(f"Non-finite drag at h={altitude_m:.0f} m, v={speed:.1f} m/s; treated as zero")
            acceleration = np.zeros(3)

        return DragState(
            acceleration=acceleration,
            density=density,
            temperature=temperature,
            speed=speed,
            mach=self.mach_number(speed),
            reynolds=self.reynolds_number(density, speed, size),
            cd=cd,
            force=force,
            burning=burning,
            burn_intensity=intensity,
        )
