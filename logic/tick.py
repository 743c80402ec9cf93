"""logic/tick.py — Fixed-step tick orchestration.

One call runs every venue system for exactly one tick, in order:

1. advance the venue clock
2. door easing
3. crowd movement
4. lifecycle transition (+ its side effects)
5. projector frame
6. event bus drain

Usage::

    from logic.tick import tick_venue
    tick_venue(sim, clock.step)
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import ShowState

if TYPE_CHECKING:
    from simulation.venue import VenueSim


def tick_venue(sim: "VenueSim", dt: float) -> None:
    """Run all venue systems for one fixed step of *dt* seconds."""
    sim.time += dt
    sim.ticks += 1
    show = sim.show

    show.update_door(dt)

    report = sim.crowd.step(
        sim.people, sim.seat_map.seats,
        show.phase_time(sim.time), dt,
        leaving=show.state is ShowState.LEAVING,
    )
    sim.last_report = report
    sim.on_arrivals(report)

    if show.state is ShowState.ENTERING and sim.status_interval > 0 \
            and sim.ticks % sim.status_interval == 0:
        sim.say("CROWD", sim.status_line())

    transition = show.evaluate(report, len(sim.people), sim.time)
    if transition is not None:
        sim.apply_transition(transition)

    show.update_projector(dt)

    sim.bus.drain()
