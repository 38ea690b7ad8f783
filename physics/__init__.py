"""Physics models for meteor fall simulation."""

from physics.constants import PhysicsConstants, DEFAULT_CONSTANTS
from physics.atmosphere import Atmosphere, AtmosphereLayer, AtmosphereSample, DEFAULT_LAYERS
from physics.gravity import GravityModel, AttractingBody
from physics.drag import DragModel, DragState
from physics.impact import ImpactEvaluator, ImpactEvent
from physics.trajectory import Integrator

__all__ = [
    "PhysicsConstants", "DEFAULT_CONSTANTS",
    "Atmosphere", "AtmosphereLayer", "AtmosphereSample", "DEFAULT_LAYERS",
    "GravityModel", "AttractingBody",
    "DragModel", "DragState",
    "ImpactEvaluator", "ImpactEvent",
    "Integrator",
]
