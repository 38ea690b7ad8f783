import math

import numpy as np

from physics.constants import DEFAULT_CONSTANTS, PhysicsConstants


class SpawnError(ValueError):
    """Raised when a meteor cannot be created from the given parameters."""


def _as_vector(name: str, value) -> np.ndarray:
    try:
        vec = np.array(value, dtype=float).reshape(-1)
    except (TypeError, ValueError) as exc:
        raise SpawnError(f"{name} must be a 3-vector of numbers, got {value!r}") from exc
    if vec.shape != (3,):
        raise SpawnError(f"{name} must have 3 components, got {vec.shape[0]}")
    if not np.all(np.isfinite(vec)):
        raise SpawnError(f"{name} must be finite, got {vec.tolist()}")
    return vec


class Meteor:
    def __init__(self, position, velocity, size: float, meteor_id: int = 0,
                 constants: PhysicsConstants = DEFAULT_CONSTANTS):
        """
        A meteoroid falling toward the primary body.
        - position: scene units
        - velocity: scene units per simulated second
        - size: radius in scene units
        """
        size = float(size)
        if not math.isfinite(size) or size <= 0.0:
            raise SpawnError(f"size must be positive and finite, got {size}")
        if constants.bulk_density <= 0.0:
            raise SpawnError(f"bulk density must be positive, got {constants.bulk_density}")

        self.meteor_id = meteor_id
        self.position = _as_vector("position", position)
        self.velocity = _as_vector("velocity", velocity)

        self._size = size
        self._mass = size ** 3 * constants.bulk_density
        if not math.isfinite(self._mass) or self._mass <= 0.0:
            raise SpawnError(f"derived mass must be positive and finite, got {self._mass}")

        # Heating, re-derived every step
        self.burning = False
        self.burn_intensity = 0.0

        # Entry conditions, fixed at spawn
        self.entry_speed = float(np.linalg.norm(self.velocity)) * constants.scene_scale
        self.entry_energy = 0.5 * self._mass * self.entry_speed ** 2

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def size(self) -> float:
        return self._size

    @property
    def distance(self) -> float:
        """Distance from the primary centre (scene units)."""
        return float(np.linalg.norm(self.position))

    def speed(self, scene_scale: float = DEFAULT_CONSTANTS.scene_scale) -> float:
        """Speed [m/s]."""
        return float(np.linalg.norm(self.velocity)) * scene_scale

    def __repr__(self):
        return (f"Meteor(id={self.meteor_id}, distance={self.distance:.3f}, "
                f"size={self._size:.3f}, mass={self._mass:.1f} kg)")
