# montecarlo.py
import random

import matplotlib.pyplot as plt

from simulation import Simulation

N_trials = 200          # random spawns
max_steps = 5_000       # host steps per spawn


def run_trial(sim, meteor, dt, time_scale):
    """Step one meteor until it lands or ``max_steps`` host steps pass."""
    h_top = sim.constants.atmosphere_height_m
    steps_in_atmosphere = 0
    for _ in range(max_steps):
        n = sim.substeps(dt, time_scale)
        for _ in range(n):
            events = sim.step(dt / n, time_scale=time_scale)
            if events:
                return events[0], steps_in_atmosphere
            if sim.constants.altitude_m(meteor.distance) <= h_top:
                steps_in_atmosphere += 1
    return None, steps_in_atmosphere


def sweep(n_trials=N_trials, seed=None, dt=0.5, time_scale=5.0):
    """Spawn random meteors one at a time and record how each one lands."""
    rng = random.Random(seed)
    sim = Simulation()
    results = []

    for _ in range(n_trials):
        sim.remove_all()
        meteor = sim.spawn_random(rng)
        event, steps_in_atmosphere = run_trial(sim, meteor, dt, time_scale)
        if event is not None:
            results.append({
                "size": meteor.size,
                "mass": meteor.mass,
                "entry_speed": meteor.entry_speed,
                "impact_speed": event.speed_m_s,
                "energy": event.energy_joules,
                "energy_mt": event.energy_mt_tnt,
                "time": event.time_s,
                "steps_in_atmosphere": steps_in_atmosphere,
            })

    return results


def plot(results):
    xs = [r["size"] for r in results]
    ys = [r["energy_mt"] for r in results]
    plt.scatter(xs, ys, c=[r["entry_speed"] for r in results], cmap="inferno")
    plt.colorbar(label="Entry speed (m/s)")
    plt.yscale("log")
    plt.xlabel("Size (scene units)")
    plt.ylabel("Impact energy (Mt TNT)")
    plt.show()


if __name__ == "__main__":
    plot(sweep())
