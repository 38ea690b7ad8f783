from dataclasses import dataclass


@dataclass(frozen=True)
class PhysicsConstants:
    """Domain constants shared by every physics model."""
    # Gravitation
    G: float = 6.67430e-11                  # m^3/(kg*s^2)
    primary_mass: float = 5.972e24          # kg (Earth)
    primary_radius_m: float = 6_371_000.0   # m
    moon_mass: float = 7.342e22             # kg
    moon_radius_m: float = 1_737_400.0      # m
    moon_distance_m: float = 384_400_000.0  # m, fixed on the +x axis
    min_distance_m: float = 1.0             # floor for r in Newton's law

    # Scene units -> meters
    scene_scale: float = 1e5

    # Atmosphere envelope
    atmosphere_height_m: float = 500_000.0
    scale_height_m: float = 8400.0
    sea_level_pressure: float = 101325.0    # Pa
    standard_temperature: float = 288.0     # K, below the surface
    upper_temperature: float = 1500.0       # K, above the envelope

    # Drag
    drag_coefficient: float = 0.47          # sphere
    speed_of_sound: float = 343.0           # m/s, fixed
    air_viscosity: float = 1.8e-5           # Pa*s
    mach_drag_factor: float = 0.1
    reynolds_drag_factor: float = 0.1
    terminal_fraction: float = 0.95         # speed kept when drag would reverse motion

    # Heating (visual only)
    burn_speed_threshold: float = 2000.0    # m/s
    heat_transfer_divisor: float = 1e6
    burn_intensity_divisor: float = 1000.0

    # Bodies
    bulk_density: float = 3000.0            # kg/m^3

    # Host timing
    frame_interval: float = 0.016           # s, nominal tick
    min_time_scale: float = 0.1
    max_time_scale: float = 5.0
    max_substep_travel: float = 0.05        # scene units per substep in headless runs

    @property
    def primary_radius(self) -> float:
        """Primary radius in scene units."""
        return self.primary_radius_m / self.scene_scale

    @property
    def atmosphere_height(self) -> float:
        """Atmosphere thickness in scene units."""
        return self.atmosphere_height_m / self.scene_scale

    @property
    def moon_distance(self) -> float:
        return self.moon_distance_m / self.scene_scale

    def altitude_m(self, distance: float) -> float:
        """Altitude above the primary surface [m] for a scene distance from its centre."""
        return (distance - self.primary_radius) * self.scene_scale


DEFAULT_CONSTANTS = PhysicsConstants()
