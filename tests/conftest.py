"""Shared fixtures for the meteor fall tests."""
import pytest

from physics import DEFAULT_CONSTANTS, Atmosphere, DragModel, GravityModel
from simulation import Simulation


@pytest.fixture
def constants():
    return DEFAULT_CONSTANTS


@pytest.fixture
def atmosphere():
    return Atmosphere()


@pytest.fixture
def drag(atmosphere):
    return DragModel(atmosphere)


@pytest.fixture
def gravity():
    return GravityModel()


@pytest.fixture
def sim():
    return Simulation()


@pytest.fixture
def mu_scene(constants):
    """G*M in scene units (scene^3/s^2)."""
    return constants.G * constants.primary_mass / constants.scene_scale ** 3
