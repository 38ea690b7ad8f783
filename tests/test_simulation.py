"""
Tests for the host-facing simulation context.
"""
import math
import random

import numpy as np
import pytest

from entities import SpawnError
from physics import AtmosphereSample
from simulation import ImpactStats, Simulation


class TestSpawn:

    def test_spawn_registers_active_meteor(self, sim):
        meteor = sim.spawn((100.0, 0.0, 0.0), (-1.0, 0.0, 0.0), 0.2)
        assert sim.active_count == 1
        assert sim.meteors == [meteor]
        assert meteor.mass == pytest.approx(24.0)

    def test_ids_are_sequential(self, sim):
        first = sim.spawn((100.0, 0.0, 0.0), (0.0, 0.0, 0.0), 0.2)
        second = sim.spawn((110.0, 0.0, 0.0), (0.0, 0.0, 0.0), 0.2)
        assert (first.meteor_id, second.meteor_id) == (1, 2)

    def test_invalid_spawn_creates_nothing(self, sim):
        with pytest.raises(SpawnError):
            sim.spawn((100.0, 0.0, 0.0), (0.0, 0.0, 0.0), -0.2)
        assert sim.active_count == 0

    def test_spawn_random_ring(self, sim, constants):
        rng = random.Random(1234)
        shell = constants.primary_radius + constants.atmosphere_height
        for _ in range(50):
            meteor = sim.spawn_random(rng)
            horizontal = math.hypot(meteor.position[0], meteor.position[2])
            assert shell + 20.0 <= horizontal <= shell + 50.0
            assert 5.0 <= meteor.position[1] <= 15.0
            assert 0.1 <= meteor.size <= 0.4
            # Heading inward
            assert float(np.dot(meteor.position, meteor.velocity)) < 0.0
        assert sim.active_count == 50

    def test_spawn_random_is_reproducible(self, constants):
        a = Simulation(constants).spawn_random(random.Random(5))
        b = Simulation(constants).spawn_random(random.Random(5))
        assert np.array_equal(a.position, b.position)
        assert a.size == b.size


class TestStep:

    def test_paused_does_nothing(self, sim):
        meteor = sim.spawn((100.0, 0.0, 0.0), (-1.0, 0.0, 0.0), 0.2)
        before = meteor.position.copy()
        assert sim.step(0.016, paused=True) == []
        assert np.array_equal(meteor.position, before)
        assert sim.elapsed == 0.0

    def test_paused_skips_models(self, sim, monkeypatch):
        sim.spawn((100.0, 0.0, 0.0), (-1.0, 0.0, 0.0), 0.2)

        def fail(*args, **kwargs):
            raise AssertionError("model evaluated while paused")

        monkeypatch.setattr(sim.gravity, "acceleration", fail)
        sim.step(0.016, paused=True)

    def test_elapsed_uses_time_scale(self, sim):
        sim.step(0.016, time_scale=2.5)
        assert sim.elapsed == pytest.approx(0.04)

    @pytest.mark.parametrize("dt", [0.0, -0.016, math.nan, math.inf])
    def test_rejects_bad_dt(self, sim, dt):
        with pytest.raises(ValueError):
            sim.step(dt)

    @pytest.mark.parametrize("time_scale", [0.0, 0.05, 5.5, math.nan])
    def test_rejects_time_scale_out_of_range(self, sim, time_scale):
        with pytest.raises(ValueError):
            sim.step(0.016, time_scale=time_scale)

    @pytest.mark.parametrize("time_scale", [0.1, 1.0, 5.0])
    def test_accepts_time_scale_range(self, sim, time_scale):
        assert sim.step(0.016, time_scale=time_scale) == []


class TestSubsteps:

    def test_no_meteors_is_one_step(self, sim):
        assert sim.substeps(0.5, 5.0) == 1

    def test_fastest_meteor_sets_the_count(self, sim, constants):
        sim.spawn((100.0, 0.0, 0.0), (-1.0, 0.0, 0.0), 0.2)
        sim.spawn((0.0, 100.0, 0.0), (0.0, -4.0, 0.0), 0.2)
        n = sim.substeps(0.5, 5.0)
        # 4 units/s over 2.5 s is 10 units
        assert 200 <= n <= 201
        assert 4.0 * 0.5 * 5.0 / n <= constants.max_substep_travel

    def test_travel_stays_below_atmosphere_thickness(self, sim, constants):
        sim.spawn((100.0, 0.0, 0.0), (-5.0, 0.0, -2.0), 0.2)
        speed = math.hypot(5.0, 2.0)
        n = sim.substeps(0.5, 5.0)
        assert speed * 2.5 / n < constants.atmosphere_height / 10.0

    def test_slow_meteor_needs_no_split(self, sim):
        sim.spawn((100.0, 0.0, 0.0), (-0.001, 0.0, 0.0), 0.2)
        assert sim.substeps(0.5, 5.0) == 1


class TestImpacts:

    def test_penetrating_meteor_impacts_once(self, sim, constants):
        size = 0.2
        sim.spawn((constants.primary_radius + size - 1e-3, 0.0, 0.0), (0.0, 0.0, 0.0), size)
        events = sim.step(0.016)
        assert len(events) == 1
        assert events[0].energy_joules > 0.0
        assert sim.active_count == 0
        assert sim.step(0.016) == []

    def test_reference_scenario(self, sim, constants):
        # Spawned at distance 25 heading straight in at 5 units/s
        sim.spawn((0.0, 0.0, 25.0), (0.0, 0.0, -5.0), 0.2)
        count_before = sim.active_count
        events = []
        steps = 0
        while not events and steps < 1000:
            events = sim.step(0.016, time_scale=1.0)
            steps += 1
        assert steps < 1000
        assert len(events) == 1
        assert math.dist(events[0].position, (0.0, 0.0, 0.0)) < constants.primary_radius + 0.2
        assert sim.active_count == count_before - 1

    def test_falling_meteor_reaches_ground(self, sim):
        # Coarse steps; the last kilometres are flown near terminal speed
        sim.spawn((80.0, 0.0, 0.0), (-5.0, 0.0, 0.0), 0.2)
        events = []
        for _ in range(5000):
            events = sim.step(0.5, time_scale=5.0)
            if events:
                break
        assert len(events) == 1
        assert sim.active_count == 0

    def test_only_impacted_meteors_removed(self, sim, constants):
        sim.spawn((constants.primary_radius + 0.1, 0.0, 0.0), (0.0, 0.0, 0.0), 0.2)
        survivor = sim.spawn((150.0, 0.0, 0.0), (0.0, 0.0, 0.0), 0.2)
        events = sim.step(0.016)
        assert len(events) == 1
        assert sim.meteors == [survivor]

    def test_statistics_accumulate(self, sim, constants):
        r = constants.primary_radius
        sim.spawn((r + 0.1, 0.0, 0.0), (-1.0, 0.0, 0.0), 0.2)
        sim.spawn((0.0, r + 0.1, 0.0), (0.0, -2.0, 0.0), 0.2)
        events = sim.step(0.016)
        energies = [e.energy_joules for e in events]
        assert sim.stats.count == 2
        assert sim.stats.total_energy == pytest.approx(sum(energies))
        assert sim.stats.largest_energy == max(energies)
        assert sim.stats.locations == [e.position for e in events]


class TestRemoval:

    def test_remove_all_resets(self, sim, constants):
        sim.spawn((constants.primary_radius + 0.1, 0.0, 0.0), (0.0, 0.0, 0.0), 0.2)
        sim.spawn((150.0, 0.0, 0.0), (0.0, 0.0, 0.0), 0.2)
        sim.step(0.016)
        assert sim.stats.count == 1

        sim.remove_all()
        assert sim.active_count == 0
        assert sim.stats == ImpactStats()
        assert sim.stats.total_energy == 0.0
        assert sim.stats.largest_energy == 0.0
        assert sim.elapsed == 0.0
        assert sim.spawn((150.0, 0.0, 0.0), (0.0, 0.0, 0.0), 0.2).meteor_id == 1

    def test_remove_one(self, sim):
        a = sim.spawn((150.0, 0.0, 0.0), (0.0, 0.0, 0.0), 0.2)
        b = sim.spawn((160.0, 0.0, 0.0), (0.0, 0.0, 0.0), 0.2)
        sim.remove(a)
        assert sim.meteors == [b]
        with pytest.raises(ValueError):
            sim.remove(a)


class TestAtmosphereQuery:

    def test_atmosphere_at_surface(self, sim, constants):
        sample = sim.atmosphere_at(constants.primary_radius)
        assert isinstance(sample, AtmosphereSample)
        assert sample.density == pytest.approx(1.225)
        assert sample.pressure == pytest.approx(101325.0)
        assert sample.temperature == 288.0

    def test_atmosphere_at_converts_distance(self, sim, constants, atmosphere):
        sample = sim.atmosphere_at(constants.primary_radius + 0.6)
        assert sample.altitude_m == pytest.approx(60_000.0)
        assert sample.density == pytest.approx(atmosphere.get_density(60_000.0))

    def test_atmosphere_at_space(self, sim):
        sample = sim.atmosphere_at(100.0)
        assert (sample.density, sample.pressure, sample.temperature) == (0.0, 0.0, 1500.0)


class TestOptions:

    def test_drag_disabled(self, constants):
        sim = Simulation(constants, drag_enabled=False)
        assert sim.drag is None
        meteor = sim.spawn((constants.primary_radius + 1.0, 0.0, 0.0), (0.0, 0.3, 0.0), 0.2)
        sim.step(0.016)
        assert meteor.burning is False

    def test_moon_enabled(self, constants):
        sim = Simulation(constants, include_moon=True)
        assert [b.name for b in sim.gravity.bodies] == ["Earth", "Moon"]
