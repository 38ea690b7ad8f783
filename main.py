import logging

from simulation import Simulation
from ui import UI


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    sim = Simulation()

    ui = UI(width=1100, height=700, constants=sim.constants)
    ui.display_intro()
    ui.init_scene()

    running = True
    while running:
        for command in ui.handle_events():
            if command == "quit":
                running = False
            elif command == "spawn":
                sim.spawn_random()
            elif command == "clear":
                sim.remove_all()

        sim.step(sim.constants.frame_interval, time_scale=ui.time_scale, paused=ui.paused)

        ui.update_display(sim)
        ui.flip()

    ui.shutdown()


if __name__ == "__main__":
    main()
