import math
from dataclasses import dataclass

from physics.constants import DEFAULT_CONSTANTS, PhysicsConstants


@dataclass(frozen=True)
class AtmosphereLayer:
    name: str
    altitude_m: float       # base of the layer
    density: float          # kg/m^3, floor for the exponential profile
    temperature: float      # K
    wind_speed: float       # m/s


@dataclass(frozen=True)
class AtmosphereSample:
    altitude_m: float
    density: float
    pressure: float
    temperature: float
    layer: str
    wind_speed: float


# Simplified Earth, ordered by increasing base altitude
DEFAULT_LAYERS = (
    AtmosphereLayer("Troposphere", 0.0, 1.225, 288.0, 10.0),
    AtmosphereLayer("Stratosphere", 12_000.0, 0.088, 216.0, 50.0),
    AtmosphereLayer("Mesosphere", 50_000.0, 0.001, 190.0, 100.0),
    AtmosphereLayer("Thermosphere", 80_000.0, 0.0001, 1000.0, 200.0),
    AtmosphereLayer("Exosphere", 200_000.0, 0.00001, 1500.0, 300.0),
)


class Atmosphere:
    def __init__(self, layers=DEFAULT_LAYERS, constants: PhysicsConstants = DEFAULT_CONSTANTS):
        layers = tuple(layers)
        if not layers:
            raise ValueError("atmosphere needs at least one layer")
        for lower, upper in zip(layers, layers[1:]):
            if upper.altitude_m <= lower.altitude_m:
                raise ValueError(
                    f"layer thresholds must be strictly increasing: "
                    f"{lower.name}@{lower.altitude_m} then {upper.name}@{upper.altitude_m}"
                )
        self.layers = layers
        self.constants = constants

        # Sea level reference
        self.rho0 = layers[0].density
        self.p0 = constants.sea_level_pressure
        self.scale_height = constants.scale_height_m
        self.h_max = constants.atmosphere_height_m

    def _layer_at(self, altitude_m: float) -> AtmosphereLayer | None:
        # Highest layer whose base is at or below h
        for layer in reversed(self.layers):
            if altitude_m >= layer.altitude_m:
                return layer
        return None

    def contains(self, altitude_m: float) -> bool:
        return 0.0 <= altitude_m <= self.h_max

    def get_layer_name(self, altitude_m: float) -> str:
        if altitude_m < 0.0:
            return "Ground"
        if altitude_m > self.h_max:
            return "Space"
        layer = self._layer_at(altitude_m)
        return layer.name if layer else "Ground"

    def get_density(self, altitude_m: float) -> float:
        if altitude_m < 0.0:
            return self.rho0
        if altitude_m > self.h_max:
            return 0.0

        # Exponential profile floored by the coarse layer table
        density = self.rho0 * math.exp(-altitude_m / self.scale_height)
        layer = self._layer_at(altitude_m)
        if layer is not None:
            return max(density, layer.density)
        return density

    def get_pressure(self, altitude_m: float) -> float:
        if altitude_m < 0.0:
            return self.p0
        if altitude_m > self.h_max:
            return 0.0
        return self.p0 * math.exp(-altitude_m / self.scale_height)

    def get_temperature(self, altitude_m: float) -> float:
        """
        Layer temperature [K]. A step function over the layer table, not
        interpolated between layers.
        """
        if altitude_m < 0.0:
            return self.constants.standard_temperature
        if altitude_m > self.h_max:
            return self.constants.upper_temperature
        layer = self._layer_at(altitude_m)
        return layer.temperature if layer else self.constants.standard_temperature

    def get_wind_speed(self, altitude_m: float) -> float:
        if not self.contains(altitude_m):
            return 0.0
        layer = self._layer_at(altitude_m)
        return layer.wind_speed if layer else 0.0

    def sample(self, altitude_m: float) -> AtmosphereSample:
        return AtmosphereSample(
            altitude_m=altitude_m,
            density=self.get_density(altitude_m),
            pressure=self.get_pressure(altitude_m),
            temperature=self.get_temperature(altitude_m),
            layer=self.get_layer_name(altitude_m),
            wind_speed=self.get_wind_speed(altitude_m),
        )
