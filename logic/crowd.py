"""logic/crowd.py — Per-tick viewer movement.

Moves every walking person one fixed step along its route: wait out
the entry delay, head for the current checkpoint, get nudged apart by
nearby walkers, snap to the floor step, and switch checkpoint or state
on arrival.

    crowd = CrowdIntegrator(layout)
    report = crowd.step(people, seat_map.seats, phase_time, dt, leaving=False)
    if report.all_seated: ...

Separation reads the positions everyone had *before* the tick, so the
result does not depend on list order.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field

from components import Person, PersonState, Seat, Vec3
from core import constants as C
from core.layout import VenueLayout
from core.tuning import get as _tun

# Neighbours closer than this are treated as standing on top of us and
# do not push (the direction is undefined).
_MIN_PUSH_DIST = 0.01


@dataclass
class CrowdReport:
    """Aggregate result of one crowd step."""
    all_seated: bool = True
    all_exited: bool = True
    seated: int = 0
    walking: int = 0
    waiting: int = 0
    seated_now: list[int] = field(default_factory=list)   # person indices
    exited_now: list[int] = field(default_factory=list)


def separation_push(x: float, z: float, neighbours: list[tuple[float, float]],
                    radius: float, strength: float) -> tuple[float, float]:
    """Sum of short-range pushes away from *neighbours* (planar).

    Each neighbour inside *radius* pushes with ``(radius - d) * strength``
    along the line from it to us; zero at and beyond the radius.
    """
    px = 0.0
    pz = 0.0
    for ox, oz in neighbours:
        dx = x - ox
        dz = z - oz
        d = math.hypot(dx, dz)
        if _MIN_PUSH_DIST < d < radius:
            push = (radius - d) * strength
            px += (dx / d) * push
            pz += (dz / d) * push
    return px, pz


class CrowdIntegrator:
    def __init__(self, layout: VenueLayout):
        self.layout = layout
        self.walk_speed = float(_tun("crowd", "walk_speed", C.WALK_SPEED))
        self.leave_speed = float(_tun("crowd", "leave_speed", C.LEAVE_SPEED))
        self.waypoint_tolerance = float(_tun("crowd", "waypoint_tolerance", C.WAYPOINT_TOLERANCE))
        self.seat_tolerance = float(_tun("crowd", "seat_tolerance", C.SEAT_TOLERANCE))
        self.separation_radius = float(_tun("crowd", "separation_radius", C.SEPARATION_RADIUS))
        self.separation_strength = float(_tun("crowd", "separation_strength", C.SEPARATION_STRENGTH))
        self.walk_cycle_rate = float(_tun("crowd", "walk_cycle_rate", C.WALK_CYCLE_RATE))

    def step(self, people: list[Person], seats: list[Seat],
             phase_time: float, dt: float, *, leaving: bool = False) -> CrowdReport:
        """Advance every walking person by *dt* seconds.

        Parameters
        ----------
        people : list[Person]
            Mutated in place.
        seats : list[Seat]
            Seats referenced by ``Person.seat_index``; exits clear
            ``has_occupant``.
        phase_time : float
            Seconds since the current phase (entering / leaving) began;
            compared against each person's ``entry_delay``.
        leaving : bool
            Use the faster leaving speed.
        """
        speed = self.leave_speed if leaving else self.walk_speed
        report = CrowdReport()

        # Pre-tick snapshot of everyone who can push.
        walkers = [(i, p.position.x, p.position.z) for i, p in enumerate(people)
                   if p.active and p.state.walking]

        for i, p in enumerate(people):
            if p.state is PersonState.EXITED:
                continue
            report.all_exited = False
            if p.state is PersonState.SEATED:
                report.seated += 1
                continue
            report.all_seated = False

            if not p.active:
                if phase_time < p.entry_delay:
                    report.waiting += 1
                    continue
                p.active = True

            report.walking += 1
            p.walk_cycle += dt * self.walk_cycle_rate

            last = p.on_last_waypoint
            to_target = p.current_target - p.position
            dist = to_target.planar_length()
            tolerance = self.seat_tolerance if last else self.waypoint_tolerance

            if dist > tolerance:
                direction = to_target.normalized()
                neighbours = [(x, z) for j, x, z in walkers if j != i]
                px, pz = separation_push(p.position.x, p.position.z, neighbours,
                                         self.separation_radius,
                                         self.separation_strength)
                p.position = p.position + direction * (speed * dt) + Vec3(px * dt, 0.0, pz * dt)
                p.facing_angle = math.atan2(direction.x, direction.z)
                if not last:
                    p.position = p.position.with_y(self.layout.step_height_at(p.position.z))
            elif last:
                self._arrive(i, p, seats, report)
            else:
                p.waypoint_index += 1
                p.current_target = p.waypoints[p.waypoint_index]
                if p.waypoint_index < len(p.leg_states):
                    p.state = p.leg_states[p.waypoint_index]

        return report

    def _arrive(self, i: int, p: Person, seats: list[Seat], report: CrowdReport) -> None:
        """Final checkpoint reached: sit down or leave the hall."""
        seat = seats[p.seat_index]
        if p.state.leaving:
            p.state = PersonState.EXITED
            p.active = False
            seat.has_occupant = False
            report.exited_now.append(i)
        else:
            p.state = PersonState.SEATED
            p.position = seat.position
            p.facing_angle = math.pi
            p.walk_cycle = 0.0
            report.seated += 1
            report.seated_now.append(i)
