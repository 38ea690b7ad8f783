# validate.py
from simulation import Simulation


def run_case(size=0.2, distance=80.0, speed=5.0, dt=0.1, time_scale=5.0, max_steps=20_000, sim=None):
    """
    Drop one meteor straight toward the planet from ``distance`` (scene units)
    with an inbound ``speed`` (scene units/s). Each host step is split into
    substeps short enough that the meteor cannot jump across the atmosphere.
    Returns one row per host step and the impact events.
    """
    sim = sim or Simulation()
    meteor = sim.spawn((distance, 0.0, 0.0), (-speed, 0.0, 0.0), size)
    scale = sim.constants.scene_scale

    results = []
    events = []
    steps = 0
    while not events and steps < max_steps:
        n = sim.substeps(dt, time_scale)
        for _ in range(n):
            events = sim.step(dt / n, time_scale=time_scale)
            if events:
                break
        steps += 1
        results.append({
            "time": sim.elapsed,
            "distance": meteor.distance,
            "alt_km": sim.constants.altitude_m(meteor.distance) / 1000.0,
            "vel": meteor.speed(scale),
            "burning": meteor.burning,
            "burn": meteor.burn_intensity,
        })

    return results, events


if __name__ == "__main__":
    # Example: 0.2 unit meteor dropped from 80 units
    data, impacts = run_case(size=0.2, distance=80.0, speed=5.0)
    for row in data[::10]:  # print every 10th step
        print(f"{row['time']:6.2f}s | {row['alt_km']:9.1f} km | v={row['vel']:9.0f} m/s | "
              f"burning={row['burning']!s:5} | burn={row['burn']:.2f}")
    for event in impacts:
        print(f"Impact after {event.time_s:.2f}s: {event.energy_joules:.3e} J "
              f"({event.energy_kt_tnt:.3f} kt TNT)")
