"""components.crowd — Viewer (person) records.

A ``Person`` walks a finite route of checkpoints, consumed strictly in
order by ``waypoint_index``.  ``leg_states`` runs parallel to
``waypoints``: the walking state the person is in while heading for
that checkpoint.  A route without leg states keeps whatever state the
planner set.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from components.spatial import Vec3


class PersonState(Enum):
    WALKING_TO_AISLE = 0
    WALKING_IN_AISLE = 1
    WALKING_TO_SEAT = 2
    SEATED = 3
    WALKING_FROM_SEAT = 4
    WALKING_OUT_AISLE = 5
    EXITING = 6
    EXITED = 7

    @property
    def leaving(self) -> bool:
        return self.value >= PersonState.WALKING_FROM_SEAT.value

    @property
    def walking(self) -> bool:
        return self not in (PersonState.SEATED, PersonState.EXITED)


@dataclass
class Person:
    seat_index: int
    position: Vec3 = field(default_factory=Vec3)
    current_target: Vec3 = field(default_factory=Vec3)
    waypoints: list[Vec3] = field(default_factory=list)
    leg_states: list[PersonState] = field(default_factory=list)
    waypoint_index: int = 0
    state: PersonState = PersonState.WALKING_TO_AISLE
    entry_delay: float = 0.0      # s after the phase start
    walk_cycle: float = 0.0       # animation phase
    facing_angle: float = 0.0     # rad, 0 = facing +z
    active: bool = False
    variant: int = 0              # appearance index for the viewer

    @property
    def on_last_waypoint(self) -> bool:
        return self.waypoint_index >= len(self.waypoints) - 1

    def set_route(self, waypoints: list[Vec3],
                  leg_states: list[PersonState] | None = None) -> None:
        """Install a fresh route and park the person until its delay."""
        self.waypoints = list(waypoints)
        self.leg_states = list(leg_states or [])
        self.waypoint_index = 0
        self.current_target = self.waypoints[0] if self.waypoints else self.position
        if self.leg_states:
            self.state = self.leg_states[0]
        self.active = False
