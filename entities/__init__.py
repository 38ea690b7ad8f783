"""Data structures for simulated bodies."""

from entities.meteor import Meteor, SpawnError

__all__ = [
    "Meteor",
    "SpawnError",
]
