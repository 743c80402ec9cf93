"""
main.py — Bootstrap

1. Load venue tuning
2. Build the venue simulation
3. Create the app
4. Push the venue scene
5. Run
"""

from core import tuning
from core.app import App
from core.constants import TARGET_FPS
from core.tuning import get as _tun
from simulation.venue import VenueSim
from scenes.venue_scene import VenueScene


def main():
    tuning.load()

    sim = VenueSim(verbose=True)
    print(f"[MAIN] Hall ready: {sim.layout.rows} rows × {sim.layout.cols} seats, "
          f"aisle before column {sim.layout.aisle_position}")

    app = App(title="Cinema", width=960, height=640,
              tick_rate=float(_tun("show", "tick_rate", TARGET_FPS)))
    app.push_scene(VenueScene(sim))
    app.run()


if __name__ == "__main__":
    main()
