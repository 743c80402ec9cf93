"""logic/waypoints.py — Entry and exit routes for viewers.

Routes are short fixed checkpoint lists through the hall: door → aisle
→ row walkway → seat on the way in, and the reverse on the way out.
Start times are staggered so viewers trickle through the door instead
of spawning as a block.

    planner = WaypointPlanner(layout, rng=random.Random(7))
    planner.plan_entry(people, seat_map)
    ...
    planner.plan_exit(people, seat_map)

All randomness comes from the injected ``rng``.
"""

from __future__ import annotations
import random

from components import Person, PersonState, Vec3
from core.layout import VenueLayout
from core.tuning import get as _tun
from logic.seat_map import SeatMap

_S = PersonState

# Walking state while heading for each checkpoint of a route.
ENTRY_LEGS = [
    _S.WALKING_TO_AISLE,    # door
    _S.WALKING_TO_AISLE,    # aisle, front of the steps
    _S.WALKING_IN_AISLE,    # aisle level with the row
    _S.WALKING_IN_AISLE,    # row walkway at the aisle
    _S.WALKING_TO_SEAT,     # row walkway in front of the seat
    _S.WALKING_TO_SEAT,     # the seat
]
EXIT_LEGS = [
    _S.WALKING_FROM_SEAT,   # row walkway in front of the seat
    _S.WALKING_FROM_SEAT,   # row walkway at the aisle
    _S.WALKING_OUT_AISLE,   # aisle level with the row
    _S.WALKING_OUT_AISLE,   # aisle, front of the steps
    _S.EXITING,             # door
]


class WaypointPlanner:
    def __init__(self, layout: VenueLayout, rng: random.Random | None = None):
        self.layout = layout
        self.rng = rng or random.Random()

    # -- Jitter --

    def _jitter(self, steps: int) -> float:
        """Random extra delay in whole hundredths: 0 .. (steps-1)/100 s."""
        if steps <= 0:
            return 0.0
        return self.rng.randrange(steps) / 100.0

    # -- Entry --

    def entry_route(self, seat_map: SeatMap, seat_index: int) -> list[Vec3]:
        lay = self.layout
        seat = seat_map[seat_index]
        walk_z = lay.walk_z(seat.row)
        walk_y = lay.walk_y(seat.row)
        aisle_at_row = lay.aisle_position_at(seat.row)
        return [
            lay.door_point(),
            lay.aisle_front(),
            aisle_at_row,
            Vec3(aisle_at_row.x, walk_y, walk_z),
            Vec3(seat.position.x, walk_y, walk_z),
            seat.position.with_y(seat.position.y + 0.6),
        ]

    def plan_entry(self, people: list[Person], seat_map: SeatMap) -> None:
        """Give every person an entry route and a strictly rising delay.

        Delays follow list order: the first person leaves the door at
        once, each next one ``stagger`` plus jitter later.
        """
        stagger = float(_tun("crowd.entry", "stagger", 0.4))
        jitter_steps = int(_tun("crowd.entry", "jitter_steps", 30))

        delay = 0.0
        for p in people:
            route = self.entry_route(seat_map, p.seat_index)
            p.position = route[0]
            p.set_route(route, ENTRY_LEGS)
            p.entry_delay = delay
            delay += stagger + self._jitter(jitter_steps)

    # -- Exit --

    def exit_route(self, seat_map: SeatMap, seat_index: int) -> list[Vec3]:
        lay = self.layout
        seat = seat_map[seat_index]
        walk_z = lay.walk_z(seat.row)
        walk_y = lay.walk_y(seat.row)
        return [
            Vec3(seat.position.x, walk_y, walk_z),
            Vec3(lay.aisle_x, walk_y, walk_z),
            lay.aisle_position_at(seat.row),
            lay.aisle_front(),
            lay.door_point(),
        ]

    def plan_exit(self, people: list[Person], seat_map: SeatMap) -> None:
        """Route every seated person back to the door.

        Rows empty starting from the one nearest the door (highest row
        index), each further row waiting ``row_delay`` more.  Inside a
        row the viewers closest to the aisle go first.
        """
        row_delay = float(_tun("crowd.exit", "row_delay", 0.5))
        stagger = float(_tun("crowd.exit", "stagger", 0.15))
        jitter_steps = int(_tun("crowd.exit", "jitter_steps", 10))
        aisle_x = self.layout.aisle_x
        rows = self.layout.rows

        for row in range(rows - 1, -1, -1):
            base = (rows - 1 - row) * row_delay
            in_row = [p for p in people
                      if p.state is PersonState.SEATED
                      and seat_map[p.seat_index].row == row]
            in_row.sort(key=lambda p: abs(seat_map[p.seat_index].position.x - aisle_x))

            offset = 0.0
            for p in in_row:
                p.set_route(self.exit_route(seat_map, p.seat_index), EXIT_LEGS)
                p.entry_delay = base + offset
                offset += stagger + self._jitter(jitter_steps)
